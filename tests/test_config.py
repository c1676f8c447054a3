"""
Tests for configuration loading and validation.
"""

import pytest
import yaml
from pydantic import ValidationError

from uni_research.config import configuration
from uni_research.config.config import Config, CorsConfig, LogConfig, ServerConfig
from uni_research.config.constants import CONFIG_DIR, CONFIG_FILE_ENV_VAR, resolve_config_file

MINIMAL_CONFIG = {
    "server": {"host": "127.0.0.1", "port": 9000},
    "logging": {
        "log_level": "info",
        "file_log_level": "DEBUG",
        "file_log_dir": "logs",
        "file_log_max_files": 2,
        "file_log_file_size_mb": 1,
    },
    "app": {"project_name": "demo", "version": "0.0.1", "author": "someone"},
}


def test_bundled_config_is_loaded():
    assert configuration.server.port == 8080
    assert configuration.app.project_name == "Uni-Research-Assistant"
    assert configuration.cors.max_age == 3600
    assert configuration.executor.queue_capacity == 100


def test_load_minimal_file_uses_section_defaults(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(yaml.safe_dump(MINIMAL_CONFIG), encoding="utf-8")

    config = Config.load_from_file(path)

    assert config.logging.log_level == "INFO"
    assert config.cors.allow_credentials is True
    assert config.executor.thread_name_prefix == "ai-task-"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load_from_file(tmp_path / "absent.yml")


def test_unknown_log_level():
    with pytest.raises(ValidationError):
        LogConfig(
            log_level="VERBOSE",
            file_log_level="DEBUG",
            file_log_dir="logs",
            file_log_max_files=1,
            file_log_file_size_mb=1,
        )


@pytest.mark.parametrize("host, port", [("localhost", 8080), ("127.0.0.1", 0), ("127.0.0.1", 70000)])
def test_invalid_server(host, port):
    with pytest.raises(ValidationError):
        ServerConfig(host=host, port=port)


def test_cors_methods_are_normalised():
    assert CorsConfig(allow_methods=[" get", "post ", ""]).allow_methods == ["GET", "POST"]


def test_config_file_override(monkeypatch, tmp_path):
    monkeypatch.delenv(CONFIG_FILE_ENV_VAR, raising=False)
    assert resolve_config_file() == CONFIG_DIR / "config.yml"

    monkeypatch.setenv(CONFIG_FILE_ENV_VAR, str(tmp_path / "other.yml"))
    assert resolve_config_file() == tmp_path / "other.yml"

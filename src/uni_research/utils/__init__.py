from uni_research.utils.exceptions import BusinessError
from uni_research.utils.logging import setup_logging

__all__ = [
    "setup_logging",
    "BusinessError",
]

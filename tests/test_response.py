"""
Tests for the response envelope and the ErrorKind taxonomy.

Tests cover:
- success()/fail() factory forms
- is_success() invariant
- Immutability and timestamp ordering
- JSON shape of the serialized envelope
"""

import pytest
from pydantic import ValidationError

from uni_research.data_models import EchoData, ErrorKind, ResponseEnvelope


class TestErrorKind:
    """Test the static code taxonomy."""

    def test_codes_and_messages(self):
        """Test a sample of members carry their fixed pair."""
        assert (ErrorKind.SUCCESS.code, ErrorKind.SUCCESS.default_message) == (200, "操作成功")
        assert ErrorKind.BAD_REQUEST.code == 400
        assert ErrorKind.USER_NOT_FOUND.code == 4001
        assert ErrorKind.DOCUMENT_PROCESSING.code == 4102
        assert ErrorKind.INTERNAL_SERVER_ERROR.default_message == "服务器内部错误"
        assert ErrorKind.DATABASE_ERROR.code == 5002

    def test_codes_are_unique(self):
        """Test no two members share a code."""
        codes = [kind.code for kind in ErrorKind]
        assert len(codes) == len(set(codes)) == 15

    def test_from_code(self):
        """Test lookup by numeric code."""
        assert ErrorKind.from_code(4005) is ErrorKind.TOKEN_INVALID
        assert ErrorKind.from_code(404) is ErrorKind.NOT_FOUND
        assert ErrorKind.from_code(418) is None


class TestSuccess:
    """Test success envelopes."""

    def test_success_without_data(self):
        envelope = ResponseEnvelope.success()

        assert envelope.code == 200
        assert envelope.message == ErrorKind.SUCCESS.default_message
        assert envelope.data is None
        assert envelope.is_success()

    @pytest.mark.parametrize("data", [0, "text", [1, 2, 3], {"id": 7}, False])
    def test_success_keeps_data(self, data):
        """Test any payload is carried unchanged."""
        envelope = ResponseEnvelope.success(data)

        assert envelope.is_success()
        assert envelope.data == data

    def test_success_with_custom_message(self):
        data = EchoData(input="x", output="Hello, x!", length=1)

        envelope = ResponseEnvelope.success(data, message="处理成功")

        assert envelope.message == "处理成功"
        assert envelope.data == data
        assert envelope.is_success()


class TestFail:
    """Test failure envelopes."""

    def test_fail_defaults_to_internal_error(self):
        envelope = ResponseEnvelope.fail()

        assert envelope.code == ErrorKind.INTERNAL_SERVER_ERROR.code
        assert envelope.message == ErrorKind.INTERNAL_SERVER_ERROR.default_message
        assert envelope.data is None
        assert not envelope.is_success()

    def test_fail_with_message(self):
        envelope = ResponseEnvelope.fail("something broke")

        assert envelope.code == 500
        assert envelope.message == "something broke"

    def test_fail_with_kind(self):
        envelope = ResponseEnvelope.fail(ErrorKind.TOKEN_EXPIRED)

        assert envelope.code == 4004
        assert envelope.message == "Token 已过期"

    @pytest.mark.parametrize("kind", list(ErrorKind))
    def test_fail_with_kind_and_message(self, kind):
        """Test the code comes from the kind and the message is overridden."""
        envelope = ResponseEnvelope.fail(kind, "custom")

        assert envelope.code == kind.code
        assert envelope.message == "custom"
        assert envelope.data is None

    def test_fail_with_custom_code(self):
        envelope = ResponseEnvelope.fail(4999, "quota exceeded")

        assert envelope.code == 4999
        assert envelope.message == "quota exceeded"
        assert not envelope.is_success()

    def test_fail_with_known_code_only(self):
        """Test a bare code borrows the matching kind's default message."""
        envelope = ResponseEnvelope.fail(4001)

        assert envelope.code == 4001
        assert envelope.message == ErrorKind.USER_NOT_FOUND.default_message

    def test_fail_with_unknown_code_only(self):
        envelope = ResponseEnvelope.fail(4999)

        assert envelope.code == 4999
        assert envelope.message == ErrorKind.INTERNAL_SERVER_ERROR.default_message

    @pytest.mark.parametrize("flag", [True, False])
    def test_fail_does_not_take_bool_as_code(self, flag):
        envelope = ResponseEnvelope.fail(flag, "x")

        assert envelope.code == ErrorKind.INTERNAL_SERVER_ERROR.code
        assert envelope.message == "x"


class TestEnvelopeLifecycle:
    """Test immutability, timestamps and serialization."""

    def test_envelope_is_frozen(self):
        envelope = ResponseEnvelope.success({"a": 1})

        with pytest.raises(ValidationError):
            envelope.code = 500

    def test_timestamps_do_not_decrease(self):
        first = ResponseEnvelope.success()
        second = ResponseEnvelope.fail()

        assert second.timestamp >= first.timestamp

    def test_timestamp_is_epoch_millis(self):
        envelope = ResponseEnvelope.success()

        # 2020-01-01 in ms; seconds would be three orders of magnitude smaller
        assert envelope.timestamp > 1_577_836_800_000

    def test_json_shape(self):
        envelope = ResponseEnvelope.success(EchoData(input="a", output="Hello, a!", length=1))

        body = envelope.model_dump(mode="json")

        assert set(body) == {"code", "message", "data", "timestamp"}
        assert body["data"] == {"input": "a", "output": "Hello, a!", "length": 1}
        assert isinstance(body["timestamp"], int)

    def test_failure_json_has_null_data(self):
        body = ResponseEnvelope.fail(ErrorKind.NOT_FOUND).model_dump(mode="json")

        assert body["data"] is None
        assert body["code"] == 404

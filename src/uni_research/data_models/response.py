import time
from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

from uni_research.data_models.error_kind import ErrorKind

T = TypeVar("T")


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


# =============================================================================
#   ResponseEnvelope
# =============================================================================
class ResponseEnvelope(BaseModel, Generic[T]):
    """Uniform body of every API response.

    Build instances through ``success`` / ``fail`` rather than the constructor.
    A failure envelope never carries ``data``.

    Attributes:
        code (int): Application status code, see ``ErrorKind``.
        message (str): Human-readable description, safe to show to callers.
        data (T | None): Payload of a successful response.
        timestamp (int): Creation time in milliseconds since the epoch.
    """

    model_config = ConfigDict(frozen=True)

    code: int
    message: str
    data: Optional[T] = None
    timestamp: int = Field(default_factory=_now_millis)

    # -------------------------------------------------------------------------
    #   Success
    # -------------------------------------------------------------------------
    @classmethod
    def success(cls, data: Optional[T] = None, message: Optional[str] = None) -> "ResponseEnvelope[T]":
        """Wrap ``data`` in a success envelope, optionally with a custom message."""
        return cls(
            code=ErrorKind.SUCCESS.code,
            message=ErrorKind.SUCCESS.default_message if message is None else message,
            data=data,
        )

    # -------------------------------------------------------------------------
    #   Failure
    # -------------------------------------------------------------------------
    @classmethod
    def fail(
        cls,
        reason: Union[ErrorKind, int, str, None] = None,
        message: Optional[str] = None,
    ) -> "ResponseEnvelope[Any]":
        """Build a failure envelope.

        Accepted forms::

            fail()                    -> INTERNAL_SERVER_ERROR, default message
            fail("text")              -> INTERNAL_SERVER_ERROR, "text"
            fail(ErrorKind.X)         -> X.code, X.default_message
            fail(ErrorKind.X, "text") -> X.code, "text"
            fail(4999, "text")        -> 4999, "text"
            fail(4001)                -> 4001, USER_NOT_FOUND.default_message

        A ``bool`` is not taken as a code; it falls back to INTERNAL_SERVER_ERROR.
        """
        if isinstance(reason, ErrorKind):
            code = reason.code
            default_message = reason.default_message
        elif isinstance(reason, int) and not isinstance(reason, bool):
            code = reason
            kind = ErrorKind.from_code(reason)
            default_message = (kind or ErrorKind.INTERNAL_SERVER_ERROR).default_message
        else:
            code = ErrorKind.INTERNAL_SERVER_ERROR.code
            default_message = ErrorKind.INTERNAL_SERVER_ERROR.default_message
            if isinstance(reason, str) and message is None:
                message = reason

        return cls(code=code, message=default_message if message is None else message, data=None)

    # -------------------------------------------------------------------------
    def is_success(self) -> bool:
        return self.code == ErrorKind.SUCCESS.code

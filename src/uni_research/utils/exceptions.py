from typing import Optional, Union

from uni_research.data_models.error_kind import ErrorKind


# =============================================================================
#   Domain Exceptions
# =============================================================================

class BusinessError(Exception):
    """Raised by business code for a pre-classified, caller-safe failure.

    The message is returned to the caller verbatim, so it must not carry
    internal details.

    Usage::

        BusinessError("text")                          # code 500
        BusinessError(4999, "text")                    # custom code
        BusinessError(ErrorKind.USER_NOT_FOUND)        # default message
        BusinessError(ErrorKind.USER_NOT_FOUND, "text")
    """

    def __init__(self, reason: Union[ErrorKind, int, str], message: Optional[str] = None) -> None:
        if isinstance(reason, bool):
            raise TypeError("BusinessError code must be an int or ErrorKind, not bool")
        if isinstance(reason, ErrorKind):
            code = reason.code
            message = reason.default_message if message is None else message
        elif isinstance(reason, int):
            if message is None:
                raise TypeError("BusinessError(code, message) requires a message")
            code = reason
        else:
            code = ErrorKind.INTERNAL_SERVER_ERROR.code
            message = reason

        super().__init__(message)
        self.code: int = code
        self.message: str = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code}, message={self.message!r})"

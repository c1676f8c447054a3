"""Global exception handlers registered on the FastAPI application.

Every error raised while serving a request ends up here and leaves as a
``ResponseEnvelope``. Only ``BusinessError`` and input errors expose their
text to the caller; everything else is logged with its traceback and answered
with the generic internal-error message.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from uni_research.data_models.error_kind import ErrorKind
from uni_research.data_models.response import ResponseEnvelope
from uni_research.utils.exceptions import BusinessError

# =============================================================================
#   Logger
# =============================================================================
logger = logging.getLogger(Path(__file__).stem)

FIELD_ERROR_SEPARATOR = "; "


def join_field_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Join the ``msg`` of each field error with ``"; "``."""
    return FIELD_ERROR_SEPARATOR.join(str(error.get("msg", "")) for error in errors)


# =============================================================================
#   ErrorDispatcher
# =============================================================================
class ErrorDispatcher:
    """Translates a raised error into exactly one failure envelope.

    Classification order, first match wins:

    1. ``BusinessError``          -> its own code and message
    2. ``RequestValidationError`` -> BAD_REQUEST, joined field messages
    3. pydantic ``ValidationError`` (binding inside handler code)
                                  -> BAD_REQUEST, joined field messages
    4. ``ValueError``             -> BAD_REQUEST, the error message
    5. anything else              -> INTERNAL_SERVER_ERROR, default message

    pydantic's ``ValidationError`` subclasses ``ValueError``, so 3 is checked
    before 4. The dispatcher holds no state and writes one error log record
    per call.
    """

    def dispatch(self, exc: BaseException) -> ResponseEnvelope:
        if isinstance(exc, BusinessError):
            logger.error("Business error: code=%s, message=%s", exc.code, exc.message)
            return ResponseEnvelope.fail(exc.code, exc.message)

        if isinstance(exc, RequestValidationError):
            message = join_field_errors(exc.errors())
            logger.error("Request validation failed: %s", message)
            return ResponseEnvelope.fail(ErrorKind.BAD_REQUEST, message)

        if isinstance(exc, ValidationError):
            message = join_field_errors(exc.errors())
            logger.error("Model binding failed: %s", message)
            return ResponseEnvelope.fail(ErrorKind.BAD_REQUEST, message)

        if isinstance(exc, ValueError):
            logger.error("Illegal argument: %s", exc)
            return ResponseEnvelope.fail(ErrorKind.BAD_REQUEST, str(exc))

        logger.error("Unhandled %s", type(exc).__name__, exc_info=exc)
        return ResponseEnvelope.fail(ErrorKind.INTERNAL_SERVER_ERROR)


error_dispatcher = ErrorDispatcher()


# =============================================================================
#   Handlers
# =============================================================================
async def envelope_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Converts any error raised by a route into a JSON envelope.

    Args:
        request (Request): The HTTP request being served.
        exc (Exception): The error that escaped the route handler.

    Returns:
        JSONResponse: HTTP 200 carrying the failure envelope; the application
            code is in the body.
    """
    logger.debug("Dispatching %s for %s %s", type(exc).__name__, request.method, request.url.path)
    envelope = error_dispatcher.dispatch(exc)
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=envelope.model_dump(mode="json"),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wraps framework HTTP errors (unknown route, wrong method) in an envelope.

    The HTTP status and headers are kept.
    """
    kind = ErrorKind.from_code(exc.status_code)
    if isinstance(exc.detail, str) and exc.detail:
        message = exc.detail
    else:
        message = (kind or ErrorKind.INTERNAL_SERVER_ERROR).default_message

    logger.warning("HTTP %s for %s %s: %s", exc.status_code, request.method, request.url.path, message)

    return JSONResponse(
        status_code=exc.status_code,
        content=ResponseEnvelope.fail(exc.status_code, message).model_dump(mode="json"),
        headers=getattr(exc, "headers", None),
    )


# =============================================================================
#   Catch-all middleware
# =============================================================================
class ErrorDispatchMiddleware(BaseHTTPMiddleware):
    """Turns errors no registered handler claimed into an envelope.

    Must sit inside ``CORSMiddleware`` so the response still carries the CORS
    headers. The error is answered here and not re-raised, so the server does
    not log it a second time.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return await envelope_exception_handler(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Register the envelope handlers and the catch-all middleware on ``app``.

    Call before adding ``CORSMiddleware``: middleware added later wraps
    middleware added earlier.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    for exc_class in (BusinessError, RequestValidationError, ValidationError, ValueError):
        app.add_exception_handler(exc_class, envelope_exception_handler)
    app.add_middleware(ErrorDispatchMiddleware)

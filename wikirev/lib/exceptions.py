import logging

from litestar import Request, Response
from litestar.exceptions import HTTPException
from litestar.status_codes import HTTP_500_INTERNAL_SERVER_ERROR

from wikirev.lib import observability
from wikirev.lib.errors import ErrorKind, WikiError

logger = logging.getLogger(__name__)

_HTTP_CODES = {
    # Framework validation failures share the error kind of service-side bad arguments
    400: ErrorKind.INVALID_ARGUMENT.value,
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: ErrorKind.NOT_FOUND.value,
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    429: "TOO_MANY_REQUESTS",
}


def _error_body(code: str, error: str, message: str, status_code: int) -> dict:
    return {"code": code, "error": error, "message": message, "statusCode": status_code}


def wiki_error_handler(request: Request, exc: WikiError) -> Response:
    """Render a tagged WikiError as JSON with the status of its kind."""
    logger.debug("%s on %s %s: %s", exc.kind.value, request.method, request.url.path, exc.message)
    return Response(
        content=exc.to_dict(),
        status_code=exc.status_code,
        media_type="application/json",
    )


def http_exception_handler(request: Request, exc: HTTPException) -> Response:
    """Render framework HTTP exceptions (validation, routing) in the same shape."""
    status_code = exc.status_code
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    body = _error_body(
        _HTTP_CODES.get(status_code, "HTTP_ERROR"),
        detail,
        detail,
        status_code,
    )
    extra = getattr(exc, "extra", None)
    if extra:
        body["details"] = extra
    return Response(content=body, status_code=status_code, media_type="application/json")


def internal_server_error_handler(request: Request, exc: Exception) -> Response:
    """Log unexpected exceptions and hide their details from the client."""
    method = request.method
    path = request.url.path
    if not observability.exception("Unhandled exception on {method} {path}", method=method, path=path):
        logger.exception("Unhandled exception on %s %s", method, path)

    status_code = HTTP_500_INTERNAL_SERVER_ERROR
    return Response(
        content=_error_body("INTERNAL_SERVER_ERROR", "Internal Server Error", "Internal Server Error", status_code),
        status_code=status_code,
        media_type="application/json",
    )


EXCEPTION_HANDLERS: dict[type[Exception], object] = {
    WikiError: wiki_error_handler,
    HTTPException: http_exception_handler,
    Exception: internal_server_error_handler,
}

"""Translation of failure kinds into HTTP responses."""

from __future__ import annotations

from typing import TypeVar

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from structlog import get_logger

from partidas.errors import Failure, FailureKind, Outcome, internal

logger = get_logger(__name__)

T = TypeVar("T")

STATUS_BY_KIND: dict[FailureKind, int] = {
    FailureKind.INVALID: status.HTTP_400_BAD_REQUEST,
    FailureKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.CONFLICT: status.HTTP_409_CONFLICT,
    FailureKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class FailureResponse(Exception):
    """Carries a :class:`Failure` from a route to the exception handler."""

    def __init__(self, failure: Failure) -> None:
        super().__init__(failure.reason)
        self.failure = failure


def unwrap(outcome: Outcome[T]) -> T:
    """Return the successful value or abort the request with its failure."""

    if isinstance(outcome, Failure):
        raise FailureResponse(outcome)
    return outcome


def failure_body(failure: Failure) -> dict[str, str]:
    return {"error": failure.kind.value, "message": failure.reason}


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Malformed request"


def install_error_handlers(app: FastAPI) -> None:
    """Register handlers mapping failures to 400/404/409/500 responses."""

    @app.exception_handler(FailureResponse)
    async def handle_failure(request: Request, exc: FailureResponse) -> JSONResponse:
        return JSONResponse(
            status_code=STATUS_BY_KIND[exc.failure.kind],
            content=failure_body(exc.failure),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        failure = Failure(FailureKind.INVALID, _describe_validation_errors(exc))
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=failure_body(failure))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", path=request.url.path, method=request.method)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure_body(internal()),
        )


__all__ = ["FailureResponse", "STATUS_BY_KIND", "failure_body", "install_error_handlers", "unwrap"]

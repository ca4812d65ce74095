"""Error taxonomy and the HTTP response contract for failures.

Learn: Services and dependencies raise these exceptions; they never build
HTTP responses themselves. create_app() registers the handlers below so
every failure leaves the app as {"error": message} with a fixed status:

    ValidationError      400  (plus "details": every violated field)
    AuthenticationError  401  bad credentials, deliberately uninformative
    UnauthorizedError    401  missing / invalid session
    ForbiddenError       403  valid session, someone else's resource
    NotFoundError        404  resource absent
    ConflictError        409  duplicate registration
    UnexpectedError      500  storage or hashing collaborator failed

Nothing is retried: credential and ownership checks are deterministic.
"""

from contextlib import contextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger()


class TaskboardError(Exception):
    """Base class. `message` is always safe to show to the client."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"error": self.message}


class ValidationError(TaskboardError):
    """Malformed client input. Carries all violations, not just the first."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, details: list[dict], message: Optional[str] = None):
        super().__init__(message)
        self.details = details

    @property
    def fields(self) -> list[str]:
        return [d["field"] for d in self.details]

    def to_body(self) -> dict:
        return {"error": self.message, "details": self.details}


class AuthenticationError(TaskboardError):
    status_code = 401
    default_message = "Invalid email or password"


class UnauthorizedError(TaskboardError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(TaskboardError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(TaskboardError):
    status_code = 404
    default_message = "Not found"


class ConflictError(TaskboardError):
    status_code = 409
    default_message = "Conflict"


class UnexpectedError(TaskboardError):
    """A collaborator failed. The client only ever sees the generic message."""

    status_code = 500

    def __init__(self, operation: Optional[str] = None):
        super().__init__()
        self.operation = operation


def error_response(exc: TaskboardError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _handle_taskboard_error(request: Request, exc: TaskboardError) -> JSONResponse:
    if isinstance(exc, UnexpectedError):
        logger.error(
            "request.unexpected_error",
            path=request.url.path,
            operation=exc.operation,
            cause=repr(exc.__cause__) if exc.__cause__ else None,
        )
    else:
        logger.info(
            "request.rejected",
            path=request.url.path,
            status=exc.status_code,
            error_type=type(exc).__name__,
        )
    return error_response(exc)


async def _handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Pydantic body/query errors follow the same 400 contract."""
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
    return error_response(ValidationError(details))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskboardError, _handle_taskboard_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)


@contextmanager
def collaborator_errors(operation: str):
    """Turn a storage or hashing failure into UnexpectedError.

    Typed TaskboardErrors pass through untouched; anything else is
    chained as the cause and re-raised, never retried.
    """
    try:
        yield
    except TaskboardError:
        raise
    except Exception as e:
        raise UnexpectedError(operation) from e

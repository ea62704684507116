import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from schemas import ErrorResponse

logger = logging.getLogger(__name__)

# Routes whose body is a username/password pair
CREDENTIAL_PATHS = ("/register", "/login")


class TaskTrackerError(Exception):
    """Base class for failures that map onto an HTTP status"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(TaskTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Please provide all fields"


class MissingCredentials(ValidationError):
    message = "Please provide both username and password"


class DuplicateUser(TaskTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Username already exists"


class InvalidCredentials(TaskTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid username or password"


class AuthenticationRequired(TaskTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication required"


class Forbidden(TaskTrackerError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Invalid or expired token"


class NotFoundOrNotOwned(TaskTrackerError):
    """Task does not exist or belongs to someone else; the two are never told apart"""
    status_code = status.HTTP_404_NOT_FOUND
    message = "Task not found"


class InternalFailure(TaskTrackerError):
    pass


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


async def _tracker_error_handler(request: Request, exc: TaskTrackerError):
    return error_response(exc.status_code, exc.message)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, detail)


async def _validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request body on %s %s: %s", request.method, request.url.path, exc.errors())
    error = MissingCredentials if request.url.path in CREDENTIAL_PATHS else ValidationError
    return error_response(status.HTTP_400_BAD_REQUEST, error.message)


async def _unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalFailure.message)


def register_exception_handlers(app: FastAPI):
    """Render every error as {"error": "..."} with the matching status"""
    app.add_exception_handler(TaskTrackerError, _tracker_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)

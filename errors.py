"""
Error taxonomy and the single mapping from failures to JSON responses.

Every route failure ends up in `error_response`, which always answers with the
`{"success": false, "error": ...}` envelope.
"""
import logging
import re
from typing import List, Optional

from bson.errors import InvalidId
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import DuplicateKeyError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, details: Optional[List[str]] = None):
        super().__init__(message or self.error)
        self.message = message
        self.details = details

    def body(self) -> dict:
        payload = {"success": False, "error": self.error}
        if self.message:
            payload["message"] = self.message
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationFailed(ApiError):
    status_code = 400
    error = "Validation Error"

    def __init__(self, details: List[str]):
        super().__init__(details=list(details))


class DuplicateEntry(ApiError):
    status_code = 400
    error = "Duplicate Entry"

    def __init__(self, field: str):
        super().__init__(f"{field} already exists")
        self.field = field


class InvalidIdFormat(ApiError):
    status_code = 400
    error = "Invalid ID format"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message)


class NotFound(ApiError):
    status_code = 404
    error = "Not Found"

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")


class AuthenticationRequired(ApiError):
    status_code = 401
    error = "Authentication required"

    def __init__(self):
        super().__init__("Please provide a valid token. Use POST /auth/login to get a token.")


class InvalidCredentials(ApiError):
    status_code = 401
    error = "Invalid credentials"


class DatabaseUnavailable(ApiError):
    status_code = 503
    error = "Database connection unavailable"

    def __init__(self):
        super().__init__("Please try again in a few moments")


class InternalError(ApiError):
    status_code = 500
    error = "Internal Server Error"

    def __init__(self):
        super().__init__("An unexpected error occurred")


_INDEX_FIELD = re.compile(r"index: (?:\w+\.\$)?([A-Za-z0-9_]+?)_-?1\b")


def _field_label(loc) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


def validation_messages(errors) -> List[str]:
    """Turn pydantic error dicts into the flat list of strings sent to clients."""
    messages = []
    for err in errors:
        field = _field_label(err.get("loc", ()))
        ctx = err.get("ctx") or {}
        if err.get("type") == "json_invalid":
            messages.append("Request body must be valid JSON")
        elif err.get("type") == "missing":
            messages.append(f"{field} is required")
        elif isinstance(ctx.get("error"), ValueError):
            messages.append(str(ctx["error"]))
        else:
            messages.append(f"{field}: {err.get('msg')}")
    return messages


def duplicate_field(exc: DuplicateKeyError) -> str:
    details = exc.details or {}
    key_value = details.get("keyValue") or {}
    if key_value:
        return next(iter(key_value))
    match = _INDEX_FIELD.search(str(exc))
    if match:
        return match.group(1)
    return "Entry"


def classify(exc: Exception) -> ApiError:
    """Map any failure onto one of the ApiError kinds.

    Checked in order: validation, duplicate key, malformed id, then
    everything else is an InternalError.
    """
    if isinstance(exc, ApiError):
        return exc
    if isinstance(exc, (RequestValidationError, PydanticValidationError)):
        return ValidationFailed(validation_messages(exc.errors()))
    if isinstance(exc, DuplicateKeyError):
        return DuplicateEntry(duplicate_field(exc))
    if isinstance(exc, InvalidId):
        return InvalidIdFormat()
    return InternalError()


def error_response(exc: Exception) -> JSONResponse:
    api_error = classify(exc)
    if isinstance(api_error, InternalError) and api_error is not exc:
        logger.error("Unhandled error: %s", exc, exc_info=exc)
    elif api_error.status_code >= 500:
        logger.warning("%s: %s", api_error.error, api_error.message)
    else:
        logger.info("%s -> %d %s", type(exc).__name__, api_error.status_code, api_error.error)
    return JSONResponse(status_code=api_error.status_code, content=api_error.body())

from __future__ import annotations
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
import structlog

log = structlog.get_logger()

DEFAULT_MESSAGES: dict[str, str] = {
    "opening_hours_not_found": "No opening hours stored for this day.",
    "day_of_week_immutable": "The day of week of an existing entry cannot be changed.",
    "day_of_week_mismatch": "Body dayOfWeek does not match the day in the URL.",
    "invalid_credentials": "Invalid email or password.",
    "invalid_token": "Session expired or invalid. Please sign in again.",
    "inactive_or_not_found": "User is inactive or no longer exists.",
    "admin_only": "Administrator access required.",
    "super_admin_only": "Only a super admin can do this.",
    "user_not_found": "User not found.",
    "email_required": "Email is required.",
    "email_already_exists": "A user with this email already exists.",
}


class ErrorPayload(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorPayload


def _http_detail_to_code_and_message(exc: HTTPException) -> tuple[str, str]:
    # A string detail is the error code
    if isinstance(exc.detail, str):
        code = exc.detail
        return code, DEFAULT_MESSAGES.get(code, code.replace("_", " "))
    if isinstance(exc.detail, dict):
        code = str(exc.detail.get("code", "bad_request"))
        msg = str(exc.detail.get("message", DEFAULT_MESSAGES.get(code, "Invalid request.")))
        return code, msg
    return "bad_request", "Invalid request."


def _error(status_code: int, code: str, message: str, headers: dict | None = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorPayload(code=code, message=message)).model_dump()
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def http_exception_handler(request: Request, exc: HTTPException):
    code, message = _http_detail_to_code_and_message(exc)
    log.warning("http_error", code=code, status=exc.status_code, path=str(request.url))
    return _error(exc.status_code, code, message, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errs = exc.errors()
    fields = [".".join(str(p) for p in e.get("loc", [])) for e in errs]
    reasons = [str(e.get("msg", "")) for e in errs]
    message = "Validation error: " + ", ".join(f"{f} ({r})" if r else f for f, r in zip(fields, reasons))
    log.warning("validation_error", fields=fields, path=str(request.url))
    return _error(422, "validation_error", message)


async def generic_exception_handler(request: Request, exc: Exception):
    log.error("unhandled_exception", error=str(exc), error_type=type(exc).__name__, path=str(request.url))
    return _error(500, "internal_error", "An unexpected error occurred. Please try again later.")

"""Custom exceptions following RFC 9457 Problem Details for HTTP APIs."""

import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


class ProblemDetailsException(HTTPException):
    """
    Base exception class following RFC 9457 Problem Details for HTTP APIs.

    https://tools.ietf.org/rfc/rfc9457.txt
    """

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: Optional[str] = None,
        instance: Optional[str] = None,
        extensions: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize Problem Details exception.

        Args:
            status_code: HTTP status code
            title: Short, human-readable summary of the problem type
            detail: Human-readable explanation specific to this occurrence
            type_uri: URI reference that identifies the problem type
            instance: URI reference that identifies the specific occurrence
            extensions: Additional problem-specific information
            headers: HTTP headers to include in response
        """
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type_uri = type_uri or f"about:blank#{status_code}"
        self.instance = instance
        self.extensions = extensions or {}

        self.problem_details = {
            "type": self.type_uri,
            "title": self.title,
            "status": self.status_code,
        }

        if self.detail:
            self.problem_details["detail"] = self.detail

        if self.instance:
            self.problem_details["instance"] = self.instance

        self.problem_details.update(self.extensions)

        super().__init__(
            status_code=status_code,
            detail=self.problem_details,
            headers=headers
        )


class ValidationError(ProblemDetailsException):
    """Exception for request validation errors."""

    def __init__(
        self,
        detail: str = "The request data failed validation",
        violations: Optional[List[Dict[str, str]]] = None,
        instance: Optional[str] = None,
    ):
        extensions = {}
        if violations:
            extensions["violations"] = violations

        super().__init__(
            status_code=422,
            title="Validation Error",
            detail=detail,
            type_uri="https://zingcab.in/problems/validation-error",
            instance=instance,
            extensions=extensions,
        )


class BookingValidationError(ProblemDetailsException):
    """
    A booking form check failed.

    Carries the warning category shown to the customer (``title``) and the
    human readable message (``message``). Only the first failing check is
    ever reported.
    """

    def __init__(self, title: str, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        self.code = re.sub(r"[^A-Z0-9]+", "_", title.upper()).strip("_")

        extensions: Dict[str, Any] = {"code": self.code, "retryable": False}
        if field:
            extensions["field"] = field

        super().__init__(
            status_code=400,
            title=title,
            detail=message,
            type_uri="https://zingcab.in/problems/booking-validation",
            extensions=extensions,
        )


class StorageError(ProblemDetailsException):
    """A write to or read from the backing store failed."""

    def __init__(
        self,
        detail: str = "The booking store could not complete the request",
        operation: Optional[str] = None,
    ):
        extensions: Dict[str, Any] = {
            "error_id": str(uuid.uuid4()),
            "timestamp": _utc_timestamp(),
            "retryable": True,
        }
        if operation:
            extensions["operation"] = operation

        super().__init__(
            status_code=500,
            title="Storage Error",
            detail=detail,
            type_uri="https://zingcab.in/problems/storage-error",
            extensions=extensions,
        )


async def problem_details_handler(request: Request, exc: ProblemDetailsException) -> JSONResponse:
    """
    Exception handler for Problem Details exceptions.

    Args:
        request: FastAPI request object
        exc: Problem Details exception

    Returns:
        JSONResponse: Problem Details formatted response
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.problem_details,
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render pydantic request validation errors as a 422 problem with violations."""
    violations = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        violations.append({
            "path": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
        })

    problem = ValidationError(
        detail="The request data failed validation",
        violations=violations,
        instance=request.url.path,
    )
    return JSONResponse(status_code=problem.status_code, content=problem.problem_details)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Generic exception handler that converts unhandled exceptions to Problem Details format.

    The exception is logged with its error id; its text never reaches the client.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception",
        extra={"error_id": error_id, "path": request.url.path, "error": str(exc)},
        exc_info=exc,
    )

    problem_details = {
        "type": "https://zingcab.in/problems/internal-server-error",
        "title": "Internal Server Error",
        "status": 500,
        "detail": "An unexpected error occurred while processing the request",
        "instance": str(request.url),
        "error_id": error_id,
        "timestamp": _utc_timestamp(),
    }

    return JSONResponse(
        status_code=500,
        content=problem_details,
    )

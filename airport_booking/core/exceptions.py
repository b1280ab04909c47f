"""Booking core exceptions following RFC 9457 Problem Details.

Every error raised by the services carries a ``problem_details`` mapping so a
transport layer can render it without translating error kinds.

https://tools.ietf.org/rfc/rfc9457.txt
"""

from typing import Any, Dict, Optional


class ProblemDetailsException(Exception):
    """Base exception carrying an RFC 9457 Problem Details body."""

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: Optional[str] = None,
        extensions: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize Problem Details exception.

        Args:
            status_code: HTTP-equivalent status code
            title: Short, human-readable summary of the problem type
            detail: Human-readable explanation specific to this occurrence
            type_uri: URI reference that identifies the problem type
            extensions: Additional problem-specific information
        """
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type_uri = type_uri or f"about:blank#{status_code}"
        self.extensions = extensions or {}

        self.problem_details = {
            "type": self.type_uri,
            "title": self.title,
            "status": self.status_code,
        }

        if self.detail:
            self.problem_details["detail"] = self.detail

        self.problem_details.update(self.extensions)

        super().__init__(detail or title)


class InvalidArgumentError(ProblemDetailsException):
    """Exception for missing or malformed arguments."""

    def __init__(
        self,
        detail: str = "The request data failed validation",
        field: Optional[str] = None,
    ):
        extensions: Dict[str, Any] = {"code": "INVALID_ARGUMENT", "retryable": False}
        if field:
            extensions["field"] = field

        super().__init__(
            status_code=400,
            title="Invalid Argument",
            detail=detail,
            type_uri="https://example.com/problems/invalid-argument",
            extensions=extensions,
        )


class NotFoundError(ProblemDetailsException):
    """Exception for resource not found errors."""

    def __init__(
        self,
        resource_type: str = "resource",
        resource_id: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        if not detail:
            detail = f"The requested {resource_type}"
            if resource_id:
                detail += f" with ID '{resource_id}'"
            detail += " could not be found"

        extensions = {
            "code": "NOT_FOUND",
            "resource_type": resource_type,
        }
        if resource_id:
            extensions["resource_id"] = resource_id

        super().__init__(
            status_code=404,
            title="Resource Not Found",
            detail=detail,
            type_uri="https://example.com/problems/resource-not-found",
            extensions=extensions,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(ProblemDetailsException):
    """Exception for resource conflict errors."""

    def __init__(
        self,
        detail: str = "The request conflicts with the current state of the resource",
        conflicting_resource: Optional[Dict[str, Any]] = None,
    ):
        extensions: Dict[str, Any] = {"code": "CONFLICT"}
        if conflicting_resource:
            extensions["conflicting_resource"] = conflicting_resource

        super().__init__(
            status_code=409,
            title="Resource Conflict",
            detail=detail,
            type_uri="https://example.com/problems/resource-conflict",
            extensions=extensions,
        )


class FailedPreconditionError(ProblemDetailsException):
    """Exception when the system is not in the state an operation requires."""

    def __init__(
        self,
        detail: str,
        code: str = "FAILED_PRECONDITION",
        context: Optional[Dict[str, Any]] = None,
    ):
        extensions: Dict[str, Any] = {"code": code, "retryable": False}
        if context:
            extensions.update(context)

        super().__init__(
            status_code=412,
            title="Precondition Failed",
            detail=detail,
            type_uri="https://example.com/problems/failed-precondition",
            extensions=extensions,
        )
        self.code = code


class ResourceExhaustedError(ProblemDetailsException):
    """Exception when a flight has fewer available seats than requested."""

    def __init__(
        self,
        flight_id: str,
        requested_seats: int,
        available_seats: int,
        detail: Optional[str] = None,
    ):
        if not detail:
            detail = (
                f"Flight {flight_id} has insufficient capacity. "
                f"Requested: {requested_seats}, Available: {available_seats}"
            )

        super().__init__(
            status_code=409,
            title="Capacity Full",
            detail=detail,
            type_uri="https://example.com/problems/capacity-full",
            extensions={
                "code": "FULL",
                "retryable": False,
                "flight_id": flight_id,
                "requested_seats": requested_seats,
                "available_seats": available_seats,
            },
        )
        self.flight_id = flight_id
        self.requested_seats = requested_seats
        self.available_seats = available_seats

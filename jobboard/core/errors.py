"""Typed failures raised by the services; main.py maps each to an HTTP response."""

from typing import Any


class DomainError(Exception):
    status_code = 500
    default_message = "Request failed"

    def __init__(self, message: str | None = None, *, reason: str | None = None, details: list[Any] | None = None):
        self.message = message or self.default_message
        self.reason = reason
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body: dict[str, Any] = {"detail": self.message}
        if self.reason:
            body["reason"] = self.reason
        if self.details:
            body["errors"] = self.details
        return body


class Unauthenticated(DomainError):
    status_code = 401
    default_message = "Not authenticated"


class Forbidden(DomainError):
    status_code = 403
    default_message = "Access denied"


class NotFound(DomainError):
    status_code = 404
    default_message = "Not found"


class ValidationFailed(DomainError):
    status_code = 400
    default_message = "Validation error"


class Conflict(DomainError):
    status_code = 409
    default_message = "Conflict"


class InvalidTransition(DomainError):
    status_code = 400
    default_message = "Invalid status transition"


class JobInactive(DomainError):
    status_code = 400
    default_message = "Cannot apply for inactive job"

"""
Application-layer exceptions.

These exceptions are raised by use cases and infrastructure adapters and
translated to HTTP responses by the handlers registered in backend.main.
"""

from typing import Any, Dict, List, Optional


class FitnessError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> Any:
        return self.message


class NotFoundError(FitnessError):
    """A referenced template, preset, exercise or entry does not exist.

    Also raised when the record exists but is private to another user.
    """

    status_code = 404

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} {resource_id} not found"
        super().__init__(message)
        self.resource = resource
        self.resource_id = resource_id


class ForbiddenError(FitnessError):
    """The acting user does not own the record being mutated."""

    status_code = 403

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        super().__init__(
            f"Forbidden: you do not own this {resource.lower()}"
            + (f" ({resource_id})" if resource_id else "")
        )
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(FitnessError):
    """Malformed input, rejected before any write."""

    status_code = 422

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_detail(self) -> Any:
        if not self.errors:
            return self.message
        return {"message": self.message, "errors": self.errors}


class TransientInfrastructureError(FitnessError):
    """Database connection or query failure.

    Raised after the enclosing transaction has rolled back. Never retried
    automatically; the caller must repeat the operation.
    """

    status_code = 503

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}

"""Business-rule failures raised by the round engines and services.

Each error carries a ``category`` that callers can branch on and the HTTP
status the API layer answers with. ``extra`` is merged into the error body,
e.g. the required and available balance of a rejected purchase.
"""

from typing import Any

from fastapi import status


class DomainError(Exception):
    category = "error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_payload(self) -> dict[str, Any]:
        return {"detail": self.message, "category": self.category, **self.extra}


class NotFoundError(DomainError):
    category = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidInputError(DomainError):
    category = "validation"
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(DomainError):
    category = "conflict"
    status_code = status.HTTP_409_CONFLICT


class PreconditionError(DomainError):
    category = "precondition"
    status_code = status.HTTP_412_PRECONDITION_FAILED

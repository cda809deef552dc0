from __future__ import annotations

from datetime import date
from typing import Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a student or record does not exist for the current teacher."""


class InvalidTransitionError(DomainError):
    """Raised when a penalty transition is not allowed from the record's state."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a teacher acts on data they do not own."""


class StoreError(DomainError):
    """Raised when the record store fails (network, query, constraint)."""


class PartialFailureError(StoreError):
    """Attendance submission deleted prior records but could not write new ones.

    The affected students have no record for ``attendance_date`` until the
    teacher resubmits.
    """

    def __init__(self, message: str, *, attendance_date: date, student_ids: Sequence[int]):
        super().__init__(message)
        self.attendance_date = attendance_date
        self.student_ids = list(student_ids)

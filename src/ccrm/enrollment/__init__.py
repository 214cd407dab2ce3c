"""Enrollment Engine - Enrollment ledger, credit limits, grades and GPA."""

from ccrm.enrollment.engine import MAX_CREDITS, EnrollmentEngine
from ccrm.enrollment.exceptions import (
    CreditLimitExceededError,
    DuplicateEnrollmentError,
    EnrollmentError,
    EnrollmentNotFoundError,
)
from ccrm.enrollment.models import Transcript

__all__ = [
    "MAX_CREDITS",
    "CreditLimitExceededError",
    "DuplicateEnrollmentError",
    "EnrollmentEngine",
    "EnrollmentError",
    "EnrollmentNotFoundError",
    "Transcript",
]

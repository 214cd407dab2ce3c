"""Custom exceptions for the Enrollment Engine."""


class EnrollmentError(Exception):
    """Base exception for Enrollment Engine errors."""


class DuplicateEnrollmentError(EnrollmentError):
    """Student is already enrolled in the course."""


class CreditLimitExceededError(EnrollmentError):
    """Enrollment would take the student over the credit limit."""


class EnrollmentNotFoundError(EnrollmentError):
    """No enrollment exists for the student and course."""

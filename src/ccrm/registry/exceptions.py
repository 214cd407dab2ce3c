"""Custom exceptions for the Records Service."""


class RegistryError(Exception):
    """Base exception for Records Service errors."""


class StudentNotFoundError(RegistryError):
    """Student with given ID does not exist."""


class CourseNotFoundError(RegistryError):
    """Course with given code does not exist."""


class InstructorNotFoundError(RegistryError):
    """Instructor with given ID does not exist."""


class StudentExistsError(RegistryError):
    """Student with given ID already exists."""


class CourseExistsError(RegistryError):
    """Course with given code already exists."""


class InstructorExistsError(RegistryError):
    """Instructor with given ID already exists."""

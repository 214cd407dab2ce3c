"""Exceptions for the entity model."""


class DomainError(Exception):
    """Base exception for entity model errors."""


class ValidationError(DomainError):
    """Entity constructed or parsed from invalid values."""

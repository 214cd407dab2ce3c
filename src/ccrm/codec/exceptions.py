"""Custom exceptions for the Record Codec."""


class CodecError(Exception):
    """Base exception for Record Codec errors."""


class MalformedRecordError(CodecError):
    """A data line cannot be turned into a record."""

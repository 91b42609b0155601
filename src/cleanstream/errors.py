"""Custom exceptions for CleanStream."""


class CleanStreamError(Exception):
    """Base exception for CleanStream."""

    pass


class FormatError(CleanStreamError):
    """MCF document is missing its header or cannot be decoded."""

    pass


class ValidationError(CleanStreamError):
    """A segment submitted on the write path is invalid."""

    pass

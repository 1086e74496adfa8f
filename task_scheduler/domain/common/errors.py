from __future__ import annotations


class DomainError(Exception):
    """Base class for every error raised by the scheduling domain."""


class FormatError(DomainError):
    """A time or duration string is not in the expected HH:MM shape."""


class ValidationError(DomainError):
    """A task field or trigger argument breaks a domain invariant."""


class NotFoundError(DomainError):
    pass

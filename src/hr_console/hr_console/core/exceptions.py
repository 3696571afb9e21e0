class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ParseFailure(DomainError):
    """Raised when a value cannot be read as its declared kind (date, number).

    Always recovered inside the table engine; never reaches the host.
    """


class OutOfRangeNavigation(DomainError):
    """Raised when a page outside [1, total_pages] is requested.

    Always recovered inside the table engine; never reaches the host.
    """

"""Domain-level exceptions.

Mappers raise these errors so callers never have to know which database
driver sits underneath.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class NoActiveQueryError(DomainError):
    """A page was requested but no paged scan is in progress."""

    def __init__(self, message: str = "Can't iterate next page, no query has been performed"):
        super().__init__(message)


class StoreError(DomainError):
    """The underlying store or its driver failed.

    The driver exception is kept on ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message if cause is None else f"{message}: {cause}")

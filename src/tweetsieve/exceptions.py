"""Exception types raised while filtering a Twitter archive."""

from typing import Iterator, Optional


class TweetSieveError(Exception):
    """Base exception for all tweetsieve errors."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.details = details
        self.original_error = original_error
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ConfigurationError(TweetSieveError):
    """Raised for bad or missing arguments and unparseable settings."""

    pass


class SchemaError(TweetSieveError):
    """Raised when the archive does not contain the expected tabular data."""

    pass


class ArchiveIOError(TweetSieveError):
    """Raised when an archive cannot be read or an output cannot be written."""

    pass


def iter_error_chain(error: BaseException) -> Iterator[BaseException]:
    """Yield ``error`` followed by its causes, outermost first."""
    seen = set()
    current = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__

"""Errors raised while building the article index."""

from pathlib import Path


class ArticleIndexError(Exception):
    """Base error for the article index."""

    def __init__(self, message: str, source: Path | None = None):
        self.source = source
        if source is not None:
            message = f"{source}: {message}"
        super().__init__(message)


class DocumentDiscoveryError(ArticleIndexError):
    """The article directory is missing or unreadable."""


class MetadataResolutionError(ArticleIndexError):
    """A document's front matter is missing, malformed or invalid."""


class DateParseError(MetadataResolutionError):
    """A document's date is missing or not a valid date."""

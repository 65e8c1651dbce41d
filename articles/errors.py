"""
Error types for the article pipeline.

Loader and renderer errors are per-article: the pipeline records them and
carries on with the rest of the batch. Only NotFoundError (single-article
lookup) and CatalogError (malformed catalog file) reach the caller.
"""

from __future__ import annotations

from typing import Optional


class ArticleError(ValueError):
    """Base exception for article pipeline errors."""

    def __init__(
        self,
        message: str,
        article_id: Optional[str] = None,
        source: Optional[str] = None,
    ):
        super().__init__(message)
        self.article_id = article_id
        self.source = source

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "message": str(self),
            "article_id": self.article_id,
            "source": self.source,
        }


class ValidationError(ArticleError):
    """Raised when a required front matter field is missing or malformed."""
    pass


class DateParseError(ValidationError):
    """Raised when an article date does not match the configured format."""
    pass


class DuplicateIdError(ArticleError):
    """Raised when two records share the same id."""
    pass


class RenderError(ArticleError):
    """Raised when an article body cannot be rendered."""
    pass


class NotFoundError(ArticleError, LookupError):
    """Raised when looking up an article id that does not exist."""
    pass


class CatalogError(ValueError):
    """Raised when the curated catalog file is invalid."""
    pass

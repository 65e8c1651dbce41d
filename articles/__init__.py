"""
Article ingestion: front matter parsing, validation and rendering.

Markdown articles carry YAML front matter:

    ---
    id: multi-agent-intro       # unique identifier (defaults to file name)
    title: Coordinating agents
    date: 15-03-2024            # DD-MM-YYYY
    category: Blog
    subcategory: Multi-Agent    # optional
    ---
    # Article body in markdown

Usage:
    from articles import read_markdown_sources, load_records, render_all

    raw = read_markdown_sources(Path("content"))
    loaded = load_records(raw.articles)
    rendered = render_all(loaded.articles)
"""

from .errors import (
    ArticleError,
    CatalogError,
    DateParseError,
    DuplicateIdError,
    NotFoundError,
    RenderError,
    ValidationError,
)
from .metadata_parser import split_front_matter, record_from_markdown
from .loader import ArticleRecord, LoadResult, load_records, parse_date, read_markdown_sources, validate_record
from .renderer import RenderedArticle, RenderResult, render, render_all, strip_and_collapse, to_display

__all__ = [
    "ArticleError",
    "CatalogError",
    "DateParseError",
    "DuplicateIdError",
    "NotFoundError",
    "RenderError",
    "ValidationError",
    "split_front_matter",
    "record_from_markdown",
    "ArticleRecord",
    "LoadResult",
    "load_records",
    "parse_date",
    "read_markdown_sources",
    "validate_record",
    "RenderedArticle",
    "RenderResult",
    "render",
    "render_all",
    "strip_and_collapse",
    "to_display",
]

__version__ = "1.0.0"

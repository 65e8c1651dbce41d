"""
Content renderer for articles.

Converts the markdown body of each article into HTML for display and into
a plain-text form (tags removed, whitespace collapsed) for search and for
the assistant context.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields
from typing import Dict, Iterable, Optional

import markdown

from .batch import BatchResult, capture, map_ordered, report
from .errors import RenderError
from .loader import ArticleRecord

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ['fenced_code', 'tables']

TAG_PATTERN = re.compile(r'<[^>]*>')
WHITESPACE_PATTERN = re.compile(r'\s+')
FENCE_PATTERN = re.compile(r'^ {0,3}(`{3,}|~{3,})(.*)$')


@dataclass(frozen=True)
class RenderedArticle(ArticleRecord):
    """An ArticleRecord with its rendered HTML and plain text."""
    content_display: str = ""
    content_text: str = ""

    def bundle(self) -> Dict:
        """Per-article render bundle used by article pages."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "date": self.date,
            "content_display": self.content_display,
            "content_text": self.content_text,
        }


class RenderResult(BatchResult):
    """Rendered articles in input order, plus per-article errors."""
    pass


def strip_and_collapse(html: str) -> str:
    """Remove markup tags and collapse whitespace.

    Tags are removed, then every whitespace run becomes a single space and
    the result is trimmed. Applying it twice gives the same result as
    applying it once.

    Example:
        >>> strip_and_collapse('<h1>Title</h1>\\n<p>Some   <em>text</em></p>')
        'Title Some text'
    """
    text = TAG_PATTERN.sub('', html)
    return WHITESPACE_PATTERN.sub(' ', text).strip()


def _find_unclosed_fence(body: str) -> Optional[int]:
    """Return the line number of a fenced code block that is never closed."""
    opener = None
    opened_at = None
    for lineno, line in enumerate(body.splitlines(), start=1):
        match = FENCE_PATTERN.match(line)
        if not match:
            continue
        fence = match.group(1)
        if opener is None:
            opener, opened_at = fence, lineno
        elif fence[0] == opener[0] and len(fence) >= len(opener) and not match.group(2).strip():
            opener, opened_at = None, None
    return opened_at


def to_display(body: str) -> str:
    """Render a markdown body to HTML."""
    return markdown.markdown(body, extensions=MARKDOWN_EXTENSIONS, output_format='html')


def render(article: ArticleRecord) -> RenderedArticle:
    """Render one article.

    Args:
        article: Validated ArticleRecord

    Returns:
        RenderedArticle with content_display and content_text set

    Raises:
        RenderError: If the body is not text, has an unterminated fenced
            code block, or the markdown converter fails
    """
    body = article.body_raw
    if not isinstance(body, str):
        raise RenderError(
            f"Body must be text, got: {type(body).__name__}",
            article_id=article.id,
            source=article.source,
        )

    unclosed = _find_unclosed_fence(body)
    if unclosed is not None:
        raise RenderError(
            f"Unterminated code fence opened on line {unclosed}",
            article_id=article.id,
            source=article.source,
        )

    try:
        display = to_display(body)
    except Exception as exc:
        raise RenderError(
            f"Markdown conversion failed: {exc}",
            article_id=article.id,
            source=article.source,
        ) from exc

    return RenderedArticle(
        **{f.name: getattr(article, f.name) for f in fields(ArticleRecord)},
        content_display=display,
        content_text=strip_and_collapse(display),
    )


def render_all(articles: Iterable[ArticleRecord], max_workers: int = 1) -> RenderResult:
    """Render a batch of articles, excluding and reporting failures."""
    outcomes = map_ordered(capture(render), articles, max_workers)

    result = RenderResult()
    for outcome in outcomes:
        if isinstance(outcome, RenderedArticle):
            result.articles.append(outcome)
        else:
            report(outcome)
            result.errors.append(outcome)

    logger.debug(f"Rendered {len(result.articles)} articles ({len(result.errors)} failed)")
    return result

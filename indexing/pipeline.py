"""
Batch pipeline: raw records -> validated -> rendered -> hierarchy.

Validation and rendering fan out per article. Each stage waits for the
whole batch before the next one starts, and the hierarchy is only built
from the complete set of rendered articles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Sequence

from articles import ArticleError, NotFoundError, RenderedArticle, config, load_records, render_all

from .cards import Card, CatalogEntry, project_cards
from .hierarchy import HierarchicalIndex, build_hierarchy, categorised, flat_map
from .summary import summarize
from .tree import render_tree

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Everything derived from one batch of records."""
    index: HierarchicalIndex
    catalog: List[CatalogEntry] = field(default_factory=list)
    errors: List[ArticleError] = field(default_factory=list)
    recent_limit: int = config.RECENT_ARTICLES_LIMIT

    def __post_init__(self):
        self._by_id: Dict[str, RenderedArticle] = {
            article.id: article for article in self.index.articles
        }

    @property
    def articles(self) -> Sequence[RenderedArticle]:
        return self.index.articles

    def get_article(self, article_id: str) -> RenderedArticle:
        """Look up a rendered article by id.

        Raises:
            NotFoundError: If no article has that id
        """
        try:
            return self._by_id[article_id]
        except KeyError:
            raise NotFoundError(f"Article '{article_id}' not found", article_id=article_id) from None

    def categorised(self) -> Dict[str, List[RenderedArticle]]:
        return categorised(self.index)

    def flat_map(self) -> Dict[str, List[Dict]]:
        return flat_map(self.index)

    def cards(self) -> List[Card]:
        return project_cards(self.index, self.catalog)

    def summary(self) -> Dict:
        return summarize(self.index, self.recent_limit)

    def tree(self) -> str:
        return render_tree(self.index)

    def render_bundles(self) -> List[Dict]:
        return [article.bundle() for article in self.index.articles]

    def stats(self) -> Dict:
        by_error: Dict[str, int] = {}
        for error in self.errors:
            name = type(error).__name__
            by_error[name] = by_error.get(name, 0) + 1
        return {
            "articles_count": len(self.index.articles),
            "categories_count": len(self.index.categories),
            "errors_count": len(self.errors),
            "errors_by_type": by_error,
        }


def run_pipeline(
    records: Iterable[Mapping],
    catalog: Sequence[CatalogEntry] = (),
    recent_limit: int = config.RECENT_ARTICLES_LIMIT,
    max_workers: int = config.MAX_WORKERS,
    date_format: str = config.ARTICLE_DATE_FORMAT,
) -> PipelineResult:
    """Run the full pipeline over a batch of raw records.

    Args:
        records: Raw article records (id, title, date, category,
            subcategory, body)
        catalog: Curated catalog entries in ranking order
        recent_limit: Number of recent articles in the summary
        max_workers: Threads used for per-article validation and rendering
        date_format: strptime format of the date field

    Returns:
        PipelineResult with the index and the per-article errors
    """
    loaded = load_records(records, date_format=date_format, max_workers=max_workers)
    rendered = render_all(loaded.articles, max_workers=max_workers)

    index = build_hierarchy(rendered.articles)
    errors = loaded.errors + rendered.errors

    logger.info(
        f"Indexed {len(index.articles)} articles in {len(index.categories)} categories "
        f"({len(errors)} skipped)"
    )
    return PipelineResult(
        index=index,
        catalog=list(catalog),
        errors=errors,
        recent_limit=recent_limit,
    )

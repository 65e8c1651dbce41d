"""
Indexing: hierarchy, cards and summary built from rendered articles.

Usage:
    from indexing import ArticleIndex, load_catalog

    index = ArticleIndex(Path("content"), catalog=load_catalog(Path("catalog.json")))
    index.build()

    cards = index.cards()
    summary = index.summary()
    article = index.get_article("multi-agent-intro")
"""

from .hierarchy import (
    CategoryNode,
    HierarchicalIndex,
    SubcategoryGroup,
    build_hierarchy,
    categorised,
    flat_map,
    iter_articles,
    sort_by_date,
)
from .cards import Card, CatalogEntry, emit_cards, load_catalog, match_catalog_entry, parse_catalog, project_cards
from .summary import summarize
from .tree import format_display_date, render_tree
from .pipeline import PipelineResult, run_pipeline
from .builder import ArticleIndex

__all__ = [
    "CategoryNode",
    "HierarchicalIndex",
    "SubcategoryGroup",
    "build_hierarchy",
    "categorised",
    "flat_map",
    "iter_articles",
    "sort_by_date",
    "Card",
    "CatalogEntry",
    "emit_cards",
    "load_catalog",
    "match_catalog_entry",
    "parse_catalog",
    "project_cards",
    "summarize",
    "format_display_date",
    "render_tree",
    "PipelineResult",
    "run_pipeline",
    "ArticleIndex",
]

"""Compact summary of the index for the assistant context feed."""

from __future__ import annotations

from typing import Dict

from articles import config

from .hierarchy import HierarchicalIndex, sort_by_date


def summarize(index: HierarchicalIndex, limit: int = config.RECENT_ARTICLES_LIMIT) -> Dict:
    """Summarize the index.

    Args:
        index: HierarchicalIndex
        limit: Number of recent articles to include

    Returns:
        Dict with total_articles, categories, articles_by_category and
        recent_articles (newest first across all categories, equal dates in
        input order)
    """
    recent = sort_by_date(index.articles)[:max(0, limit)]

    return {
        "total_articles": len(index.articles),
        "categories": [node.category for node in index.categories],
        "articles_by_category": {
            node.category: len(node.articles()) for node in index.categories
        },
        "recent_articles": [
            {
                "id": article.id,
                "title": article.title,
                "category": article.category,
                "date": article.date,
            }
            for article in recent
        ],
    }

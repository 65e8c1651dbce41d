"""
Text rendering of the category tree.

Example output:

    Blog
    ├── Hello world (Feb 1, 2024)
    └── Multi-Agent Systems
        └── Coordinating agents (Mar 15, 2024)
"""

from __future__ import annotations

import datetime as dt
from typing import List

from .hierarchy import HierarchicalIndex

BRANCH = "├── "
LAST = "└── "
PIPE = "│   "
SPACE = "    "

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_display_date(value: dt.date) -> str:
    """Format a date the way article lists show it, e.g. 'Mar 5, 2024'."""
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.day}, {value.year}"


def render_tree(index: HierarchicalIndex, show_dates: bool = True) -> str:
    """Render the hierarchy as an indented text tree.

    A category's uncategorized articles are listed before its subcategories.
    """
    lines: List[str] = []

    def label(article) -> str:
        if show_dates:
            return f"{article.title} ({format_display_date(article.published)})"
        return article.title

    for node in index.categories:
        lines.append(node.category)
        children = [(None, [article]) for article in node.uncategorized_articles]
        children += [(group.subcategory, group.articles) for group in node.subcategories]

        for position, (subcategory, articles) in enumerate(children):
            last = position == len(children) - 1
            prefix = LAST if last else BRANCH
            if subcategory is None:
                lines.append(prefix + label(articles[0]))
                continue

            lines.append(prefix + subcategory)
            indent = SPACE if last else PIPE
            for article_position, article in enumerate(articles):
                marker = LAST if article_position == len(articles) - 1 else BRANCH
                lines.append(indent + marker + label(article))

    return "\n".join(lines)

"""
Categorization engine.

Groups rendered articles into a two-level hierarchy:

    category
        subcategory -> articles
        ...
        uncategorized articles

Categories and subcategories keep the order in which they were first seen in
the input. Every article list is sorted by date, newest first; articles with
the same date keep their input order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence, Tuple

from articles import RenderedArticle


@dataclass
class SubcategoryGroup:
    """Articles of one category sharing a subcategory."""
    subcategory: str
    articles: List[RenderedArticle] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "subcategory": self.subcategory,
            "articles": [article.summary() for article in self.articles],
        }


@dataclass
class CategoryNode:
    """One category with its subcategory groups and uncategorized bucket."""
    category: str
    subcategories: List[SubcategoryGroup] = field(default_factory=list)
    uncategorized_articles: List[RenderedArticle] = field(default_factory=list)

    def articles(self) -> List[RenderedArticle]:
        """Uncategorized articles first, then each subcategory in order."""
        result = list(self.uncategorized_articles)
        for group in self.subcategories:
            result.extend(group.articles)
        return result

    def to_dict(self) -> Dict:
        return {
            "category": self.category,
            "subcategories": [group.to_dict() for group in self.subcategories],
            "uncategorized_articles": [article.summary() for article in self.uncategorized_articles],
        }


@dataclass
class HierarchicalIndex:
    """Ordered categories plus the gathered articles in input order."""
    categories: List[CategoryNode] = field(default_factory=list)
    articles: Tuple[RenderedArticle, ...] = ()

    def __len__(self) -> int:
        return len(self.articles)

    def __iter__(self) -> Iterator[CategoryNode]:
        return iter(self.categories)

    def to_dict(self) -> Dict:
        return {
            "total_articles": len(self.articles),
            "categories": [node.to_dict() for node in self.categories],
        }


def sort_by_date(articles: Sequence[RenderedArticle]) -> List[RenderedArticle]:
    """Newest first; equal dates keep their relative order."""
    return sorted(articles, key=lambda article: article.published, reverse=True)


def build_hierarchy(articles: Sequence[RenderedArticle]) -> HierarchicalIndex:
    """Build the category/subcategory hierarchy.

    Must be called with the complete batch: sorting a partial batch would
    give a different order.

    Args:
        articles: Rendered articles in input order

    Returns:
        HierarchicalIndex (empty for empty input)

    Example:
        >>> index = build_hierarchy(articles)
        >>> [node.category for node in index.categories]
        ['Blog', 'Projects']
    """
    articles = tuple(articles)

    category_order: List[str] = []
    nodes: Dict[str, CategoryNode] = {}
    group_order: Dict[str, List[str]] = {}
    groups: Dict[Tuple[str, str], SubcategoryGroup] = {}

    for article in articles:
        node = nodes.get(article.category)
        if node is None:
            node = CategoryNode(category=article.category)
            nodes[article.category] = node
            category_order.append(article.category)
            group_order[article.category] = []

        if not article.subcategory:
            node.uncategorized_articles.append(article)
            continue

        key = (article.category, article.subcategory)
        group = groups.get(key)
        if group is None:
            group = SubcategoryGroup(subcategory=article.subcategory)
            groups[key] = group
            group_order[article.category].append(article.subcategory)
        group.articles.append(article)

    categories = []
    for name in category_order:
        node = nodes[name]
        node.uncategorized_articles = sort_by_date(node.uncategorized_articles)
        node.subcategories = []
        for subcategory in group_order[name]:
            group = groups[(name, subcategory)]
            group.articles = sort_by_date(group.articles)
            node.subcategories.append(group)
        categories.append(node)

    return HierarchicalIndex(categories=categories, articles=articles)


def iter_articles(index: HierarchicalIndex) -> Iterator[RenderedArticle]:
    """Every article reachable from the index, in hierarchy order."""
    for node in index.categories:
        yield from node.articles()


def categorised(index: HierarchicalIndex) -> Dict[str, List[RenderedArticle]]:
    """Flat view: category name -> all of its articles in hierarchy order."""
    return {node.category: node.articles() for node in index.categories}


def flat_map(index: HierarchicalIndex) -> Dict[str, List[Dict]]:
    """Flat view with each article reduced to its front matter fields."""
    return {
        category: [article.summary() for article in items]
        for category, items in categorised(index).items()
    }

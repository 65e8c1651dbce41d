"""Per-article batch helpers shared by the loader and the renderer."""

from __future__ import annotations

import concurrent.futures as cf
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, TypeVar

from .errors import ArticleError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class BatchResult:
    """Items that made it through a batch step, plus the per-article errors."""
    articles: List = field(default_factory=list)
    errors: List[ArticleError] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.articles)


def map_ordered(func: Callable[[T], R], items: Iterable[T], max_workers: int = 1) -> List[R]:
    """Apply func to every item, fanning out over threads when max_workers > 1.

    Results always come back in input order, and only once every item is done.
    """
    items = list(items)
    if max_workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]

    with cf.ThreadPoolExecutor(max_workers=max_workers) as ex:
        return list(ex.map(func, items))


def capture(func: Callable[[T], R]) -> Callable[[T], object]:
    """Wrap func so an ArticleError is returned instead of raised."""
    def wrapper(item: T):
        try:
            return func(item)
        except ArticleError as exc:
            return exc
    return wrapper


def report(error: ArticleError) -> None:
    where = error.source or error.article_id or "<unknown>"
    logger.warning(f"⚠ Skipping article {where}: {type(error).__name__}: {error}")

"""
Card projector.

Flattens the hierarchy into cards (one per subcategory, one per category's
uncategorized bucket), attaches curated catalog metadata by fuzzy name
matching and orders matched cards by catalog position.

Matching is case-insensitive. An exact key match wins wherever it sits in
the catalog; otherwise the first entry whose key contains the card name, or
whose key is contained in the card name, is used. There is no minimum
length, so a very short key (one or two letters) matches almost any card.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from articles import CatalogError, RenderedArticle

from .hierarchy import HierarchicalIndex

logger = logging.getLogger(__name__)

CATEGORY = "category"
SUBCATEGORY = "subcategory"


class CatalogEntry(BaseModel):
    """Curated metadata for a project or series of articles."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str = Field(..., min_length=1, description="Name matched against card titles.")
    display_title: str = Field(..., alias="title", min_length=1)
    description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    image: Optional[str] = None
    live: Optional[str] = None
    links: Dict[str, str] = Field(default_factory=dict)

    @field_validator("key", "display_title")
    @classmethod
    def strip_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Value cannot be blank.")
        return cleaned


@dataclass(frozen=True)
class Card:
    id: str
    title: str
    name: str
    category: str
    articles: Tuple[RenderedArticle, ...]
    kind: str
    catalog_entry: Optional[CatalogEntry] = None

    def to_dict(self) -> Dict:
        card = {
            "id": self.id,
            "title": self.title,
            "name": self.name,
            "category": self.category,
            "kind": self.kind,
            "article_count": len(self.articles),
            "articles": [article.summary() for article in self.articles],
            "catalog": None,
        }
        if self.catalog_entry is not None:
            card["catalog"] = self.catalog_entry.model_dump(by_alias=True)
        return card


def parse_catalog(data) -> List[CatalogEntry]:
    """Validate catalog data.

    Args:
        data: JSON-decoded catalog, a list of entry objects in ranking order

    Returns:
        List of CatalogEntry in declaration order

    Raises:
        CatalogError: If data is not a list or an entry is invalid
    """
    if not isinstance(data, list):
        raise CatalogError(f"Catalog must be a list of entries, got: {type(data).__name__}")

    entries = []
    for position, item in enumerate(data):
        try:
            entries.append(CatalogEntry.model_validate(item))
        except PydanticValidationError as exc:
            raise CatalogError(f"Invalid catalog entry #{position}: {exc}") from exc
    return entries


def load_catalog(path: Path) -> List[CatalogEntry]:
    """Load the curated catalog from a JSON file."""
    path = Path(path)
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog file is not valid JSON: {exc}") from exc
    return parse_catalog(data)


def emit_cards(index: HierarchicalIndex) -> List[Card]:
    """One card per subcategory, then one for the uncategorized bucket, per category."""
    cards: List[Card] = []
    for category_index, node in enumerate(index.categories):
        for sub_index, group in enumerate(node.subcategories):
            cards.append(Card(
                id=f"cat-{category_index}-sub-{sub_index}",
                title=group.subcategory,
                name=group.subcategory,
                category=node.category,
                articles=tuple(group.articles),
                kind=SUBCATEGORY,
            ))

        if node.uncategorized_articles:
            cards.append(Card(
                id=f"cat-{category_index}-uncat",
                title=node.category,
                name=node.category,
                category=node.category,
                articles=tuple(node.uncategorized_articles),
                kind=CATEGORY,
            ))
    return cards


def match_catalog_entry(
    title: str,
    catalog: Sequence[CatalogEntry],
) -> Optional[Tuple[int, CatalogEntry]]:
    """Find the catalog entry for a card title.

    Returns:
        (position in catalog, entry), or None if nothing matches
    """
    lowered = title.lower()

    for position, entry in enumerate(catalog):
        if entry.key.lower() == lowered:
            return position, entry

    for position, entry in enumerate(catalog):
        key = entry.key.lower()
        if key in lowered or lowered in key:
            return position, entry

    return None


def project_cards(
    index: HierarchicalIndex,
    catalog: Sequence[CatalogEntry] = (),
) -> List[Card]:
    """Project the hierarchy into an ordered card list.

    Cards that match a catalog entry come first, ordered by the entry's
    position in the catalog (cards matching the same entry keep emission
    order). Unmatched cards follow in emission order.

    Example:
        catalog [A, B, C] and cards [C, X, A] give [A, C, X]
    """
    matched: List[Tuple[int, Card]] = []
    unmatched: List[Card] = []

    for card in emit_cards(index):
        found = match_catalog_entry(card.name, catalog) if catalog else None
        if found is None:
            unmatched.append(card)
            continue

        position, entry = found
        logger.debug(f"Card '{card.name}' matched catalog entry '{entry.key}' (#{position})")
        matched.append((position, Card(
            id=card.id,
            title=entry.display_title,
            name=card.name,
            category=card.category,
            articles=card.articles,
            kind=card.kind,
            catalog_entry=entry,
        )))

    matched.sort(key=lambda item: item[0])
    return [card for _, card in matched] + unmatched

"""
Source loader for markdown articles.

Turns raw records (from markdown files or any other source) into validated
ArticleRecord objects. Invalid records and duplicate ids are excluded and
reported; the rest of the batch carries on.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

from . import config
from .batch import BatchResult, capture, map_ordered, report
from .errors import DateParseError, DuplicateIdError, ValidationError
from .metadata_parser import record_from_markdown

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('id', 'title', 'date', 'category')


@dataclass(frozen=True)
class ArticleRecord:
    """A validated article. Immutable once created."""
    id: str
    title: str
    date: str
    category: str
    published: dt.date
    body_raw: str = ""
    subcategory: Optional[str] = None
    source: Optional[str] = None

    def summary(self) -> Dict:
        """Flat-map entry: id, title, date, category and subcategory if set."""
        item = {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "category": self.category,
        }
        if self.subcategory:
            item["subcategory"] = self.subcategory
        return item


class LoadResult(BatchResult):
    """Validated ArticleRecords in input order, plus per-record errors."""
    pass


def parse_date(value: str, date_format: str = config.ARTICLE_DATE_FORMAT) -> dt.date:
    """Parse an article date.

    Raises:
        DateParseError: If value does not match date_format
    """
    try:
        return dt.datetime.strptime(value, date_format).date()
    except (TypeError, ValueError) as exc:
        raise DateParseError(f"Invalid date '{value}', expected format {date_format}") from exc


def _text(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def validate_record(raw: Mapping, date_format: str = config.ARTICLE_DATE_FORMAT) -> ArticleRecord:
    """Validate one raw record and build an ArticleRecord.

    Args:
        raw: Mapping with id, title, date, category, optional subcategory,
            body (or body_raw) and source keys. It is not modified.
        date_format: strptime format for the date field

    Returns:
        ArticleRecord

    Raises:
        ValidationError: If a required field is missing or blank
        DateParseError: If the date does not parse
    """
    source = _text(raw.get('source'))
    values = {name: _text(raw.get(name)) for name in REQUIRED_FIELDS}

    for name in REQUIRED_FIELDS:
        if values[name] is None:
            raise ValidationError(
                f"Missing required field: {name}",
                article_id=values['id'],
                source=source,
            )

    try:
        published = parse_date(values['date'], date_format)
    except DateParseError as exc:
        exc.article_id = values['id']
        exc.source = source
        raise

    body = raw.get('body', raw.get('body_raw'))
    if body is None:
        body = ""

    return ArticleRecord(
        id=values['id'],
        title=values['title'],
        date=values['date'],
        category=values['category'],
        published=published,
        body_raw=body,
        subcategory=_text(raw.get('subcategory')),
        source=source,
    )


def load_records(
    records: Iterable[Mapping],
    date_format: str = config.ARTICLE_DATE_FORMAT,
    max_workers: int = 1,
) -> LoadResult:
    """Validate a batch of raw records.

    Records are validated independently (concurrently when max_workers > 1).
    Duplicate detection runs afterwards over the gathered results in input
    order: the first record with a given id wins, later ones are reported
    as DuplicateIdError.
    """
    outcomes = map_ordered(
        capture(lambda raw: validate_record(raw, date_format)),
        records,
        max_workers,
    )

    result = LoadResult()
    seen: Dict[str, ArticleRecord] = {}
    for outcome in outcomes:
        if not isinstance(outcome, ArticleRecord):
            report(outcome)
            result.errors.append(outcome)
            continue

        first = seen.get(outcome.id)
        if first is not None:
            error = DuplicateIdError(
                f"Duplicate id '{outcome.id}' (first seen in {first.source or 'an earlier record'})",
                article_id=outcome.id,
                source=outcome.source,
            )
            report(error)
            result.errors.append(error)
            continue

        seen[outcome.id] = outcome
        result.articles.append(outcome)

    logger.debug(f"Loaded {len(result.articles)} records ({len(result.errors)} rejected)")
    return result


def read_markdown_sources(directory: Path, pattern: str = "*.md") -> BatchResult:
    """Read markdown files from a directory into raw records.

    Files are read in name order. A file that cannot be read or whose front
    matter does not parse is reported as a ValidationError.

    Returns:
        BatchResult whose articles are raw record dicts
    """
    directory = Path(directory)
    if not directory.exists():
        raise FileNotFoundError(f"Articles directory not found: {directory}")

    result = BatchResult()
    for path in sorted(directory.glob(pattern)):
        try:
            content = path.read_text(encoding='utf-8')
            result.articles.append(record_from_markdown(content, str(path)))
        except (OSError, UnicodeDecodeError) as exc:
            error = ValidationError(f"Unable to read file: {exc}", source=str(path))
            report(error)
            result.errors.append(error)
        except ValidationError as exc:
            report(exc)
            result.errors.append(exc)

    return result

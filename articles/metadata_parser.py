"""
Front matter parser for markdown articles.

Front matter is a YAML block fenced by ``---`` lines at the very top of the
file. Values are read as plain text, without YAML type conversion:

---
id: multi-agent-intro
title: Coordinating LLM agents
date: 15-03-2024
category: Blog
subcategory: Multi-Agent Systems
---
# Body starts here
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml

from .errors import ValidationError

FRONT_MATTER_PATTERN = re.compile(r'\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)', re.DOTALL)

FIELDS = ('id', 'title', 'date', 'category', 'subcategory')


def split_front_matter(content: str, source: Optional[str] = None) -> Tuple[Dict, str]:
    """Split markdown content into front matter and body.

    Args:
        content: Full markdown file content
        source: Origin of the content (for error reporting)

    Returns:
        Tuple of (front matter dict, body without the front matter block).
        Content without front matter yields an empty dict and the content
        unchanged.

    Raises:
        ValidationError: If the front matter is not valid YAML or not a mapping

    Example:
        >>> meta, body = split_front_matter('---\\nid: a\\ntitle: A\\n---\\nHello')
        >>> meta['id'], body
        ('a', 'Hello')
    """
    match = FRONT_MATTER_PATTERN.match(content)
    if not match:
        return {}, content

    try:
        # BaseLoader keeps every scalar as written: `id: 001` stays "001"
        metadata = yaml.load(match.group(1), Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        raise ValidationError(f"Invalid front matter: {exc}", source=source) from exc

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise ValidationError(
            f"Front matter must be a mapping, got: {type(metadata).__name__}",
            source=source,
        )

    return metadata, content[match.end():]


def record_from_markdown(content: str, source: Optional[str] = None) -> Dict:
    """Build a raw article record from a markdown file.

    The id falls back to the file stem when the front matter has none.

    Args:
        content: Markdown content including front matter
        source: Path or label of the file

    Returns:
        Raw record dict with id, title, date, category, subcategory, body
        and source keys
    """
    metadata, body = split_front_matter(content, source)

    record = {field: metadata.get(field) for field in FIELDS}
    if record['id'] is None and source:
        record['id'] = Path(source).stem
    record['body'] = body
    record['source'] = source
    return record

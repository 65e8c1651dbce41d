from pathlib import Path
from typing import Optional

import pytest

from articles import render, validate_record


def make_record(
    id: str,
    date: str = "01-01-2024",
    category: str = "Blog",
    subcategory: Optional[str] = None,
    title: Optional[str] = None,
    body: str = "Some text.",
) -> dict:
    record = {
        "id": id,
        "title": title or f"Article {id}",
        "date": date,
        "category": category,
        "body": body,
    }
    if subcategory is not None:
        record["subcategory"] = subcategory
    return record


def make_article(*args, **kwargs):
    return render(validate_record(make_record(*args, **kwargs)))


def write_article(
    directory: Path,
    name: str,
    front_matter: str,
    body: str = "# Heading\n\nBody text.\n",
) -> Path:
    path = directory / name
    path.write_text(f"---\n{front_matter.strip()}\n---\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path):
    directory = tmp_path / "content"
    directory.mkdir()
    write_article(directory, "hello.md", """
id: hello
title: Hello world
date: 01-02-2024
category: Blog
""")
    write_article(directory, "agents.md", """
id: agents
title: Coordinating agents
date: 15-03-2024
category: Blog
subcategory: Multi-Agent Systems
""")
    write_article(directory, "profemail.md", """
id: profemail-auth
title: OAuth2 for many accounts
date: 10-01-2024
category: Projects
subcategory: ProfEmail Dashboard
""")
    return directory

"""
Configuration for the article index.

Values come from environment variables, optionally loaded from a .env file
at the repository root.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parents[1]

env_path = BASE_DIR / ".env"
if env_path.exists():
    load_dotenv(env_path)

ARTICLES_DIR = Path(os.environ.get("ARTICLES_DIR", str(BASE_DIR / "content")))
CATALOG_FILE = Path(os.environ.get("CATALOG_FILE", str(BASE_DIR / "catalog.json")))
INDEX_OUTPUT_DIR = Path(os.environ.get("INDEX_OUTPUT_DIR", str(BASE_DIR / "output" / "index")))

# Front matter dates are day-month-year, e.g. 15-03-2024
ARTICLE_DATE_FORMAT = os.environ.get("ARTICLE_DATE_FORMAT", "%d-%m-%Y")
RECENT_ARTICLES_LIMIT = int(os.environ.get("RECENT_ARTICLES_LIMIT", "5"))
MAX_WORKERS = int(os.environ.get("INDEX_MAX_WORKERS", "8"))

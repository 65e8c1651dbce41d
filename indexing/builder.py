"""
Article index builder.

Builds the derived views for a directory of markdown articles and writes
them out as JSON for the presentation layer:
- index.json          - category -> article list (flat map)
- hierarchy.json      - category/subcategory/article tree
- cards.json          - curated card list
- summary.json        - assistant context summary
- articles/<id>.json  - per-article render bundles
"""

from __future__ import annotations

import hashlib
import json
import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence
from urllib.parse import quote

from articles import RenderedArticle, config, read_markdown_sources

from .cards import Card, CatalogEntry
from .pipeline import PipelineResult, run_pipeline

logger = logging.getLogger(__name__)


class ArticleIndex:
    """Cached index over a directory of markdown articles.

    The cached result is reused while the source files are unchanged. Any
    change (file added, removed or edited) rebuilds the whole index.
    """

    def __init__(
        self,
        articles_dir: Path,
        catalog: Sequence[CatalogEntry] = (),
        recent_limit: int = config.RECENT_ARTICLES_LIMIT,
        max_workers: int = config.MAX_WORKERS,
        pattern: str = "*.md",
    ):
        """Initialize the index.

        Args:
            articles_dir: Directory containing markdown articles
            catalog: Curated catalog entries in ranking order
            recent_limit: Number of recent articles in the summary
            max_workers: Threads used for loading and rendering
            pattern: Glob pattern selecting article files
        """
        self.articles_dir = Path(articles_dir)
        self.catalog = list(catalog)
        self.recent_limit = recent_limit
        self.max_workers = max_workers
        self.pattern = pattern

        self._result: Optional[PipelineResult] = None
        self._fingerprint: Optional[str] = None

    def fingerprint(self) -> str:
        """Hash of the names and contents of every source file."""
        digest = hashlib.sha256()
        for path in sorted(self.articles_dir.glob(self.pattern)):
            digest.update(path.name.encode('utf-8'))
            digest.update(b'\0')
            digest.update(path.read_bytes())
            digest.update(b'\0')
        return digest.hexdigest()

    def build(self, force: bool = False) -> PipelineResult:
        """Build the index, reusing the cached result if sources are unchanged.

        Args:
            force: Rebuild even if the sources are unchanged

        Returns:
            PipelineResult

        Raises:
            FileNotFoundError: If the articles directory does not exist
        """
        if not self.articles_dir.exists():
            raise FileNotFoundError(f"Articles directory not found: {self.articles_dir}")

        fingerprint = self.fingerprint()
        if not force and self._result is not None and fingerprint == self._fingerprint:
            logger.debug(f"Sources unchanged, reusing index ({fingerprint[:12]})")
            return self._result

        sources = read_markdown_sources(self.articles_dir, self.pattern)
        result = run_pipeline(
            sources.articles,
            catalog=self.catalog,
            recent_limit=self.recent_limit,
            max_workers=self.max_workers,
        )
        result.errors = sources.errors + result.errors

        self._result = result
        self._fingerprint = fingerprint
        return result

    def invalidate(self) -> None:
        """Drop the cached result."""
        self._result = None
        self._fingerprint = None

    @property
    def result(self) -> PipelineResult:
        return self.build()

    @property
    def hierarchy(self):
        return self.result.index

    def categorised(self) -> Dict[str, List[RenderedArticle]]:
        return self.result.categorised()

    def flat_map(self) -> Dict[str, List[Dict]]:
        return self.result.flat_map()

    def cards(self) -> List[Card]:
        return self.result.cards()

    def summary(self) -> Dict:
        return self.result.summary()

    def tree(self) -> str:
        return self.result.tree()

    def render_bundles(self) -> List[Dict]:
        return self.result.render_bundles()

    def get_article(self, article_id: str) -> RenderedArticle:
        """Get a rendered article by id.

        Raises:
            NotFoundError: If no article has that id
        """
        return self.result.get_article(article_id)

    def search_articles(self, **filters) -> List[Dict]:
        """Search articles by front matter fields.

        Example:
            >>> index.search_articles(category='Blog', subcategory='Multi-Agent')
            [{'id': 'multi-agent-intro', 'title': 'Coordinating agents', ...}]
        """
        results = []
        for article in self.result.articles:
            item = article.summary()
            if all(item.get(k) == v for k, v in filters.items()):
                results.append(item)
        return results

    def export(self, output_dir: Path, clean_existing: bool = False) -> Dict:
        """Write every derived view to output_dir as JSON.

        Args:
            output_dir: Destination directory
            clean_existing: Remove the destination once the build has succeeded

        Returns:
            Dictionary with build statistics
        """
        output_dir = Path(output_dir)
        bundles_dir = output_dir / "articles"

        result = self.build()

        if clean_existing and output_dir.exists():
            shutil.rmtree(output_dir)
        bundles_dir.mkdir(parents=True, exist_ok=True)

        self._write_json(output_dir / "index.json", result.flat_map())
        self._write_json(output_dir / "hierarchy.json", result.index.to_dict())
        self._write_json(output_dir / "cards.json", [card.to_dict() for card in result.cards()])
        self._write_json(output_dir / "summary.json", result.summary())

        for bundle in result.render_bundles():
            self._write_json(bundles_dir / self.bundle_filename(bundle['id']), bundle)

        stats = {
            **result.stats(),
            "articles_dir": str(self.articles_dir),
            "output_dir": str(output_dir),
            "timestamp": datetime.now().isoformat(),
            "errors": [error.to_dict() for error in result.errors],
        }
        self._write_json(output_dir / "build.json", stats)
        return stats

    @staticmethod
    def bundle_filename(article_id: str) -> str:
        """File name of an article bundle; distinct ids always get distinct names."""
        # Percent-encoding keeps path separators out and is reversible
        return f"{quote(article_id, safe='')}.json"

    @staticmethod
    def _write_json(path: Path, data) -> None:
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')

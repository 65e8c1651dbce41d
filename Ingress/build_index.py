#!/usr/bin/env python3
"""
Build the article index from markdown files.

This script:
1. Reads markdown articles (*.md) with YAML front matter
2. Validates and renders each article (failures are reported, not fatal)
3. Groups articles by category and subcategory
4. Projects the curated card list using the catalog file
5. Writes index.json, hierarchy.json, cards.json, summary.json and
   per-article bundles

Usage:
    python Ingress/build_index.py
    python Ingress/build_index.py --articles-dir content --catalog catalog.json
    python Ingress/build_index.py --tree
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
from articles import CatalogError, config
from indexing import ArticleIndex, load_catalog


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build the article index from markdown files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Build from the configured articles directory
    python Ingress/build_index.py

    # Build from a specific directory with a curated catalog
    python Ingress/build_index.py --articles-dir content --catalog catalog.json

    # Print the category tree as well
    python Ingress/build_index.py --tree
        """
    )

    parser.add_argument(
        "--articles-dir",
        type=Path,
        default=config.ARTICLES_DIR,
        help=f"Directory of markdown articles (default: {config.ARTICLES_DIR})"
    )

    parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help=f"Curated catalog JSON file (default: {config.CATALOG_FILE} if it exists)"
    )

    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.INDEX_OUTPUT_DIR,
        help=f"Output directory for the index (default: {config.INDEX_OUTPUT_DIR})"
    )

    parser.add_argument(
        "--recent",
        type=int,
        default=config.RECENT_ARTICLES_LIMIT,
        help="Number of recent articles in summary.json"
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=config.MAX_WORKERS,
        help="Threads used to load and render articles"
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Remove existing output before building"
    )

    parser.add_argument(
        "--tree",
        action="store_true",
        help="Print the category tree"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show detailed output"
    )

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print("\n" + "=" * 70)
    print("Article Index Builder")
    print("=" * 70)

    if not args.articles_dir.exists():
        print(f"\n✗ Error: Directory not found: {args.articles_dir}")
        return 1

    catalog_file = args.catalog
    if catalog_file is None and config.CATALOG_FILE.exists():
        catalog_file = config.CATALOG_FILE

    catalog = []
    if catalog_file is not None:
        try:
            catalog = load_catalog(catalog_file)
        except CatalogError as e:
            print(f"\n✗ Catalog error: {e}")
            return 1

    print(f"\nInput: {args.articles_dir}")
    print(f"Catalog: {catalog_file or '(none)'} ({len(catalog)} entries)")
    print(f"Output: {args.output_dir}")
    print("=" * 70)

    index = ArticleIndex(
        args.articles_dir,
        catalog=catalog,
        recent_limit=args.recent,
        max_workers=args.workers,
    )
    stats = index.export(args.output_dir, clean_existing=args.reset)

    for error in stats["errors"]:
        print(f"  ✗ {error['error']}: {error['message']} ({error['source'] or error['article_id']})")

    summary = index.summary()

    print("\n" + "=" * 70)
    print("INDEX BUILD COMPLETE")
    print("=" * 70)
    print(f"  Articles indexed: {stats['articles_count']}")
    print(f"  Categories: {stats['categories_count']}")
    print(f"  Articles skipped: {stats['errors_count']}")
    if args.verbose:
        print(f"    By Category: {summary['articles_by_category']}")
        print(f"    Errors By Type: {stats['errors_by_type']}")

    print(f"\nIndex location: {args.output_dir}")
    print(f"  • index.json      - Category index")
    print(f"  • hierarchy.json  - Category/subcategory tree")
    print(f"  • cards.json      - Curated cards ({len(index.cards())} cards)")
    print(f"  • summary.json    - Assistant context summary")
    print(f"  • articles/       - Article bundles ({stats['articles_count']} files)")

    if args.tree and stats['articles_count'] > 0:
        print("\n" + "=" * 70)
        print("CATEGORY TREE")
        print("=" * 70)
        print(index.tree())

    print("=" * 70 + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())

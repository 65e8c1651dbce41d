import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "Ingress" / "build_index.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("build_index", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_build(cli, content_dir, tmp_path, capsys):
    catalog = tmp_path / "catalog.json"
    catalog.write_text(json.dumps([{"key": "ProfEmail", "title": "ProfEmail"}]), encoding="utf-8")
    output_dir = tmp_path / "out"

    code = cli.main([
        "--articles-dir", str(content_dir),
        "--catalog", str(catalog),
        "--output-dir", str(output_dir),
        "--workers", "2",
        "--tree",
    ])

    assert code == 0
    cards = json.loads((output_dir / "cards.json").read_text(encoding="utf-8"))
    assert cards[0]["title"] == "ProfEmail"

    out = capsys.readouterr().out
    assert "Articles indexed: 3" in out
    assert "└── ProfEmail Dashboard" in out


def test_article_failures_are_reported_not_fatal(cli, content_dir, tmp_path, capsys):
    (content_dir / "broken.md").write_text("---\nid: broken\ntitle: Broken\ncategory: Blog\ndate: 99-99-2024\n---\n", encoding="utf-8")

    code = cli.main(["--articles-dir", str(content_dir), "--output-dir", str(tmp_path / "out")])

    assert code == 0
    out = capsys.readouterr().out
    assert "DateParseError" in out
    assert "Articles skipped: 1" in out


def test_missing_directory(cli, tmp_path, capsys):
    code = cli.main(["--articles-dir", str(tmp_path / "missing"), "--output-dir", str(tmp_path / "out")])

    assert code == 1
    assert "Directory not found" in capsys.readouterr().out


def test_missing_catalog_file(cli, content_dir, tmp_path, capsys):
    code = cli.main([
        "--articles-dir", str(content_dir),
        "--output-dir", str(tmp_path / "out"),
        "--catalog", str(tmp_path / "none.json"),
    ])

    assert code == 1
    assert "Catalog error" in capsys.readouterr().out

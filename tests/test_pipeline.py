import pytest

from articles import DateParseError, DuplicateIdError, NotFoundError, RenderError, ValidationError
from indexing import CatalogEntry, iter_articles, run_pipeline
from conftest import make_record


def _records():
    return [
        make_record("1", date="01-02-2024"),
        make_record("2", date="15-03-2024", subcategory="Agents"),
        make_record("3", date="bad"),
        make_record("2", date="16-03-2024"),
        make_record("4", date="10-01-2024", body="```\nunterminated"),
        {"id": "5", "date": "01-01-2024", "category": "Blog"},
        make_record("6", date="10-01-2024", category="Projects", subcategory="ProfEmail"),
    ]


def test_pipeline_keeps_going_past_failures():
    result = run_pipeline(_records(), max_workers=1)

    assert [a.id for a in result.articles] == ["1", "2", "6"]
    assert sorted(type(e).__name__ for e in result.errors) == sorted([
        DateParseError.__name__,
        DuplicateIdError.__name__,
        RenderError.__name__,
        ValidationError.__name__,
    ])
    assert sorted(a.id for a in iter_articles(result.index)) == ["1", "2", "6"]


def test_concurrent_pipeline_matches_sequential():
    sequential = run_pipeline(_records(), max_workers=1)
    concurrent = run_pipeline(_records(), max_workers=4)

    assert concurrent.index.to_dict() == sequential.index.to_dict()
    assert [str(e) for e in concurrent.errors] == [str(e) for e in sequential.errors]


def test_get_article():
    result = run_pipeline(_records())

    assert result.get_article("2").subcategory == "Agents"

    with pytest.raises(NotFoundError) as excinfo:
        result.get_article("missing")
    assert excinfo.value.article_id == "missing"


def test_excluded_article_is_not_found():
    result = run_pipeline(_records())

    with pytest.raises(NotFoundError):
        result.get_article("4")


def test_derived_views():
    catalog = [CatalogEntry(key="ProfEmail", title="ProfEmail", description="Email assistant")]

    result = run_pipeline(_records(), catalog=catalog, recent_limit=2)

    assert [c.title for c in result.cards()] == ["ProfEmail", "Agents", "Blog"]
    assert result.summary()["recent_articles"] == [
        {"id": "2", "title": "Article 2", "category": "Blog", "date": "15-03-2024"},
        {"id": "1", "title": "Article 1", "category": "Blog", "date": "01-02-2024"},
    ]
    assert list(result.flat_map()) == ["Blog", "Projects"]
    assert [b["id"] for b in result.render_bundles()] == ["1", "2", "6"]
    assert result.stats()["errors_count"] == 4


def test_empty_batch():
    result = run_pipeline([])

    assert result.index.categories == []
    assert result.cards() == []
    assert result.summary()["total_articles"] == 0

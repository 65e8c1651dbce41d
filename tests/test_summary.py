from indexing import build_hierarchy, summarize
from conftest import make_article


def _index():
    return build_hierarchy([
        make_article("a", date="01-01-2024", category="Research", title="A"),
        make_article("b", date="05-01-2024", category="Projects", title="B"),
        make_article("c", date="05-01-2024", category="Research", title="C", subcategory="LLMs"),
        make_article("d", date="03-01-2024", category="Projects", title="D"),
    ])


def test_summary_counts():
    summary = summarize(_index())

    assert summary["total_articles"] == 4
    assert summary["categories"] == ["Research", "Projects"]
    assert summary["articles_by_category"] == {"Research": 2, "Projects": 2}


def test_recent_articles_break_ties_by_input_order():
    summary = summarize(_index(), limit=3)

    assert [a["id"] for a in summary["recent_articles"]] == ["b", "c", "d"]
    assert summary["recent_articles"][0] == {
        "id": "b",
        "title": "B",
        "category": "Projects",
        "date": "05-01-2024",
    }


def test_recent_articles_limit():
    assert len(summarize(_index(), limit=10)["recent_articles"]) == 4
    assert summarize(_index(), limit=0)["recent_articles"] == []


def test_empty_index():
    assert summarize(build_hierarchy([])) == {
        "total_articles": 0,
        "categories": [],
        "articles_by_category": {},
        "recent_articles": [],
    }

import datetime as dt

import pytest

from articles import (
    ArticleRecord,
    DateParseError,
    DuplicateIdError,
    ValidationError,
    load_records,
    read_markdown_sources,
    validate_record,
)
from conftest import make_record, write_article


def test_validate_record():
    article = validate_record(make_record("1", date="15-03-2024", subcategory="Agents"))

    assert isinstance(article, ArticleRecord)
    assert article.id == "1"
    assert article.published == dt.date(2024, 3, 15)
    assert article.subcategory == "Agents"
    assert article.body_raw == "Some text."


@pytest.mark.parametrize("field", ["id", "title", "date", "category"])
def test_missing_required_field(field):
    record = make_record("1")
    del record[field]

    with pytest.raises(ValidationError) as excinfo:
        validate_record(record)

    assert field in str(excinfo.value)


def test_blank_required_field():
    with pytest.raises(ValidationError):
        validate_record(make_record("1", category="   "))


@pytest.mark.parametrize("value", ["2024-02-01", "31-02-2024", "yesterday", "15/03/2024"])
def test_unparseable_date(value):
    with pytest.raises(DateParseError) as excinfo:
        validate_record(make_record("1", date=value))

    assert isinstance(excinfo.value, ValidationError)
    assert excinfo.value.article_id == "1"


def test_values_are_coerced_to_text():
    record = make_record("1", subcategory="  ")
    record["id"] = 42

    article = validate_record(record)

    assert article.id == "42"
    assert article.subcategory is None


def test_records_are_immutable():
    article = validate_record(make_record("1"))

    with pytest.raises(AttributeError):
        article.title = "changed"


def test_load_records_excludes_invalid_and_continues():
    records = [
        make_record("1"),
        make_record("2", date="not a date"),
        {"id": "3", "title": "No category", "date": "01-01-2024"},
        make_record("4"),
    ]

    result = load_records(records)

    assert [a.id for a in result.articles] == ["1", "4"]
    assert [type(e) for e in result.errors] == [DateParseError, ValidationError]


def test_duplicate_ids_keep_first_record():
    records = [
        make_record("1", title="First"),
        make_record("2"),
        make_record("1", title="Second"),
    ]

    result = load_records(records)

    assert [a.id for a in result.articles] == ["1", "2"]
    assert result.articles[0].title == "First"
    assert len(result.errors) == 1
    assert isinstance(result.errors[0], DuplicateIdError)
    assert result.errors[0].article_id == "1"


def test_load_records_does_not_mutate_input():
    records = [make_record("1", subcategory="Agents"), make_record("1")]
    snapshot = [dict(r) for r in records]

    load_records(records)

    assert records == snapshot


def test_concurrent_load_preserves_input_order():
    records = [make_record(str(i), date=f"{(i % 28) + 1:02d}-01-2024") for i in range(50)]

    result = load_records(records, max_workers=8)

    assert [a.id for a in result.articles] == [str(i) for i in range(50)]


def test_read_markdown_sources(tmp_path):
    write_article(tmp_path, "b.md", "id: b\ntitle: B\ndate: 02-01-2024\ncategory: Blog")
    write_article(tmp_path, "a.md", "title: A\ndate: 01-01-2024\ncategory: Blog")
    write_article(tmp_path, "broken.md", "title: [oops")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    result = read_markdown_sources(tmp_path)

    assert [r["id"] for r in result.articles] == ["a", "b"]
    assert len(result.errors) == 1
    assert result.errors[0].source.endswith("broken.md")


def test_read_markdown_sources_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_markdown_sources(tmp_path / "missing")

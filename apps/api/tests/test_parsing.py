from datetime import date

from notesite_api.parsing import extract_metadata, parse_frontmatter


def test_frontmatter_parses_at_byte_zero() -> None:
    md = "---\ntitle: Hello\ntags: [One, Two]\n---\n\nBody\n"
    fm = parse_frontmatter(md)
    assert fm.error is None
    assert fm.frontmatter["title"] == "Hello"
    assert fm.body == "\nBody\n"


def test_no_frontmatter_keeps_body_unchanged() -> None:
    md = "# Title\n\nJust a body with ![[image.png]]\n"
    fm = parse_frontmatter(md)
    assert fm.frontmatter == {}
    assert fm.body == md
    assert fm.error is None

    meta = extract_metadata(fm.frontmatter, "plain")
    assert meta.is_public is False
    assert meta.title == "plain"


def test_frontmatter_ignored_when_not_first_line() -> None:
    md = "\n---\ntitle: Hello\n---\nBody\n"
    fm = parse_frontmatter(md)
    assert fm.frontmatter == {}
    assert fm.body == md


def test_unterminated_frontmatter_is_body() -> None:
    md = "---\ntitle: Hello\nBody\n"
    fm = parse_frontmatter(md)
    assert fm.frontmatter == {}
    assert fm.body == md


def test_frontmatter_without_trailing_newline() -> None:
    fm = parse_frontmatter("---\ntitle: Hello\n---")
    assert fm.frontmatter == {"title": "Hello"}
    assert fm.body == ""


def test_frontmatter_yaml_error_falls_back_to_no_frontmatter() -> None:
    md = "---\ntitle: [oops\n---\nBody\n"
    fm = parse_frontmatter(md)
    assert fm.frontmatter == {}
    assert fm.body == md
    assert fm.error == "frontmatter_yaml_error"


def test_frontmatter_must_be_mapping() -> None:
    fm = parse_frontmatter("---\n- a\n- b\n---\nBody\n")
    assert fm.frontmatter == {}
    assert fm.error == "frontmatter_not_mapping"


def test_extract_metadata_reads_known_keys() -> None:
    fm = parse_frontmatter(
        "---\n"
        "title: Garden\n"
        "description: Notes on plants\n"
        "date: 2024-05-01\n"
        "tags: [plants, outdoors]\n"
        "isPublic: true\n"
        "coverImage: https://example.com/cover.png\n"
        "---\nBody\n"
    )
    meta = extract_metadata(fm.frontmatter, "garden")
    assert meta.title == "Garden"
    assert meta.slug == "garden"
    assert meta.description == "Notes on plants"
    assert meta.date == date(2024, 5, 1).isoformat()
    assert meta.tags == ["plants", "outdoors"]
    assert meta.is_public is True
    assert meta.cover_image == "https://example.com/cover.png"


def test_extract_metadata_single_tag_and_string_flag() -> None:
    meta = extract_metadata({"tags": "solo", "isPublic": "TRUE"}, "x")
    assert meta.tags == ["solo"]
    assert meta.is_public is True

    meta2 = extract_metadata({"isPublic": "no"}, "x")
    assert meta2.is_public is False
    assert meta2.tags == []


def test_impossible_date_falls_back_to_no_frontmatter() -> None:
    md = "---\ntitle: Bad\ndate: 2023-02-30\n---\nBody\n"
    fm = parse_frontmatter(md)
    assert fm.frontmatter == {}
    assert fm.body == md
    assert fm.error == "frontmatter_yaml_error"

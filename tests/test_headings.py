from __future__ import annotations

import dataclasses

import pytest

from mdeditor.domain.models import ExtensionConfig, HeadingEntry
from mdeditor.services.markdown import build_toc, extract_headings, format_toc, render


def test_extract_headings_in_document_order():
    text = "# Title\n\nText\n\n## Sub Section\n\nMore\n\n### Deep"
    assert extract_headings(text) == [
        HeadingEntry(1, "Title", "title"),
        HeadingEntry(2, "Sub Section", "sub-section"),
        HeadingEntry(3, "Deep", "deep"),
    ]


def test_extract_headings_empty_buffer():
    assert extract_headings("") == []
    assert extract_headings("just a paragraph") == []


def test_one_entry_per_heading_block():
    text = "\n\n".join(f"{'#' * (i % 6 + 1)} Heading {i}" for i in range(12))
    entries = extract_headings(text)
    assert len(entries) == 12
    assert [e.level for e in entries] == [i % 6 + 1 for i in range(12)]


def test_extraction_is_idempotent():
    text = "# A\n\n## B\n\n# C"
    assert extract_headings(text) == extract_headings(text)


def test_setext_headings():
    entries = extract_headings("Title\n=====\n\nSub\n---")
    assert [(e.level, e.text) for e in entries] == [(1, "Title"), (2, "Sub")]


def test_nested_headings_are_found_in_order():
    entries = extract_headings("# A\n\n> ## B\n\n# C")
    assert [e.text for e in entries] == ["A", "B", "C"]


def test_heading_in_fenced_code_is_not_a_heading():
    entries = extract_headings("```\n# not a heading\n```\n\n# Real")
    assert [e.text for e in entries] == ["Real"]


def test_formatting_contributes_its_text():
    [h] = extract_headings("# Hello **bold** and *it*")
    assert h.text == "Hello bold and it"
    assert h.slug == "hello-bold-and-it"


def test_code_span_in_heading():
    [h] = extract_headings("## Use `foo()` here")
    assert h.text == "Use foo() here"
    assert h.slug == "use-foo-here"


def test_escaped_characters_are_literal():
    [h] = extract_headings(r"# A \*star\*")
    assert h.text == "A *star*"
    assert h.slug == "a-star"


def test_smart_quotes_do_not_leak_into_slug():
    [h] = extract_headings("# Don't panic")
    assert h.slug == "dont-panic"


def test_email_autolink_in_heading_is_decoded():
    [h] = extract_headings("# Contact <me@x.io>")
    assert h.text == "Contact me@x.io"
    assert h.slug == "contact-mexio"
    assert 'id="contact-mexio"' in render("# Contact <me@x.io>")


def test_bare_email_in_heading_is_decoded():
    [h] = extract_headings("## Write to me@x.io")
    assert h.text == "Write to me@x.io"
    assert build_toc("## Write to me@x.io") == "  - [Write to me@x.io](#write-to-mexio)"


def test_footnote_marker_is_not_heading_text():
    text = "# Title[^1]\n\nBody\n\n[^1]: A note."
    [h] = extract_headings(text)
    assert h.text == "Title"
    assert h.slug == "title"


def test_custom_heading_id_keeps_text_slug():
    [h] = extract_headings("## Setup Guide {#setup}")
    assert h.text == "Setup Guide"
    assert h.slug == "setup-guide"


def test_duplicate_headings_share_a_slug():
    entries = extract_headings("# Same\n\n# Same")
    assert [e.slug for e in entries] == ["same", "same"]


def test_heading_entry_is_immutable():
    h = HeadingEntry(1, "A", "a")
    with pytest.raises(dataclasses.FrozenInstanceError):
        h.level = 2  # type: ignore[misc]


# ---- anchors in the rendered HTML ----


def test_rendered_heading_ids_match_slugs():
    text = "# Hello World\n\n## Getting Started"
    html = render(text)
    for h in extract_headings(text):
        assert f'id="{h.slug}"' in html


def test_duplicate_ids_are_not_disambiguated():
    html = render("# Same\n\n# Same")
    assert html.count('id="same"') == 2


def test_empty_slug_gets_no_id():
    html = render("# Привет", ExtensionConfig(complete_page=False))
    assert html == "<h1>Привет</h1>"


def test_auto_heading_ids_off_still_extracts():
    cfg = ExtensionConfig(auto_heading_ids=False, complete_page=False)
    assert render("# Title", cfg) == "<h1>Title</h1>"
    assert extract_headings("# Title", cfg) == [HeadingEntry(1, "Title", "title")]


# ---- TOC ----


def test_format_toc_nests_by_level():
    entries = [HeadingEntry(1, "A", "a"), HeadingEntry(2, "B", "b")]
    assert format_toc(entries) == "- [A](#a)\n  - [B](#b)"


def test_format_toc_empty():
    assert format_toc([]) == ""


def test_format_toc_does_not_validate_level_jumps():
    entries = [HeadingEntry(1, "A", "a"), HeadingEntry(4, "D", "d")]
    assert format_toc(entries) == "- [A](#a)\n      - [D](#d)"


def test_build_toc_from_buffer():
    text = "# Intro\n\n## Install Steps\n\n## Usage\n\n# FAQ"
    assert build_toc(text) == (
        "- [Intro](#intro)\n"
        "  - [Install Steps](#install-steps)\n"
        "  - [Usage](#usage)\n"
        "- [FAQ](#faq)"
    )

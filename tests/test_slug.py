import pytest

from mdeditor.services.markdown import slugify


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hello, World!", "hello-world"),
        ("Getting Started", "getting-started"),
        ("Section 2.1", "section-21"),
        ("already-slugged", "already-slugged"),
        ("under_score", "underscore"),
        ("  Two  spaces", "--two--spaces"),
        ("Déjà vu", "dj-vu"),
        ("Привет", ""),
        ("", ""),
    ],
)
def test_slugify(text, expected):
    assert slugify(text) == expected


def test_slugify_only_keeps_lowercase_alnum_and_hyphens():
    s = slugify("A\tB/C?d#E 9")
    assert s == "abcde-9"
    assert all(ch.isdigit() or ch == "-" or ("a" <= ch <= "z") for ch in s)

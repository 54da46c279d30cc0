import pytest

from mex.errors import TemplateError
from mex.exporters.naming import render_name, strip_ext


@pytest.mark.parametrize(
    "index, reference, expected",
    [
        (0, 0, "vol_0"),
        (3, 9, "vol_3"),
        (3, 10, "vol_03"),
        (42, 99, "vol_42"),
        (7, 120, "vol_007"),
    ],
)
def test_index_padding_follows_reference_width(index, reference, expected):
    assert render_name("vol_{{Index}}", "Vol 1", index, reference) == expected


def test_default_page_template_lowercases_extension():
    assert render_name("page_{{Index}}{{Ext}}", "/tmp/x/001.JPG", 5, 11) == "page_05.jpg"


def test_name_field_keeps_extension():
    assert render_name("{{Name}}", "scan 01.png", 0, 0) == "scan 01.png"


def test_ext_is_empty_without_extension():
    assert render_name("[{{Ext}}]", "README", 0, 0) == "[]"


def test_dot_and_whitespace_forms_are_accepted():
    assert render_name("{{ .Name }}-{{.Index}}", "Book", 1, 1) == "Book-1"


def test_literal_text_is_untouched():
    assert render_name("static {name}", "Book", 0, 0) == "static {name}"


def test_unknown_field_raises():
    with pytest.raises(TemplateError, match="Title"):
        render_name("{{Title}}", "Book", 0, 0)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Title.cbz", "Title"),
        ("Title", "Title"),
        ("My.Book.v2.zip", "My.Book.v2"),
        ("/some/dir/Book.rar", "Book"),
    ],
)
def test_strip_ext(name, expected):
    assert strip_ext(name) == expected

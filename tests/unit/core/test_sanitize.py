"""Unit tests for core/sanitize.py"""

import pytest

from mdblog.core.sanitize import DEFAULT_SCHEMA, SanitizeSchema, is_safe_url, sanitize
from mdblog.core.tree import CodeBlock, Element, Text, to_html


SAFE = DEFAULT_SCHEMA.protocols["href"]


@pytest.mark.parametrize("url,expected", [
    ("https://example.com",         True),
    ("HTTP://EXAMPLE.COM",          True),
    ("mailto:me@example.com",       True),
    ("/blog/css/grid",              True),
    ("relative/path",               True),
    ("#section",                    True),
    ("?q=a:b",                      True),
    ("/path/with:colon",            True),
    ("javascript:alert(1)",         False),
    ("JavaScript:alert(1)",         False),
    ("data:text/html;base64,xx",    False),
    ("vbscript:msgbox",             False),
    ("ftp://example.com",           False),
])
def test_is_safe_url(url, expected):
    assert is_safe_url(url, SAFE) is expected


def test_strip_removes_element_and_contents():
    """Stripped tags vanish together with everything nested inside them."""
    tree = [Element("div", children=[
        Element("script", children=[Text("alert(1)")]),
        Element("p", children=[Element("iframe", children=[Text("inner")]), Text("kept")]),
    ])]
    assert to_html(sanitize(tree)) == "<div><p>kept</p></div>"


def test_unknown_tag_is_unwrapped():
    """Tags outside the allow-list are replaced by their (sanitized) children."""
    tree = [Element("section", children=[Element("marquee", children=[Text("hi")]), Element("em", children=[Text("!")])])]
    assert to_html(sanitize(tree)) == "hi<em>!</em>"


def test_attributes_filtered_per_tag():
    tree = [
        Element("p", {"onclick": "x()", "class": "lead", "style": "color:red"}, [Text("p")]),
        Element("h2", {"id": "top", "style": "x"}, [Text("h")]),
        Element("a", {"href": "https://e.com", "target": "_blank", "rel": "noopener", "onmouseover": "x"}, [Text("a")]),
        Element("code", {"class": "language-py", "data-x": "1"}, [Text("c")]),
    ]
    out = sanitize(tree)
    assert out[0].attrs == {"class": "lead"}
    assert out[1].attrs == {"id": "top"}
    assert out[2].attrs == {"href": "https://e.com", "rel": "noopener"}
    assert out[3].attrs == {"class": "language-py"}


def test_unsafe_href_dropped_text_kept():
    out = sanitize([Element("a", {"href": "javascript:alert(1)", "title": "t"}, [Text("click")])])
    assert out[0].attrs == {"title": "t"}
    assert to_html(out) == '<a title="t">click</a>'


def test_strip_nested_in_disallowed_parent():
    """Strip applies regardless of nesting depth, even under unwrapped parents."""
    tree = [Element("article", children=[Element("span", children=[Element("object", children=[Text("x")])]), Text("ok")])]
    assert to_html(sanitize(tree)) == "<span></span>ok"


def test_sanitize_does_not_mutate_input():
    original = Element("p", {"onclick": "x()"}, [Text("t")])
    sanitize([original])
    assert original.attrs == {"onclick": "x()"}


def test_code_blocks_pass_through():
    block = CodeBlock("<b>raw</b>", "html", "language-html")
    [out] = sanitize([block])
    assert out == block


def test_custom_schema():
    schema = SanitizeSchema(tag_names=frozenset({"p"}), attributes={}, strip=frozenset({"em"}))
    tree = [Element("p", {"class": "x"}, [Text("a"), Element("em", children=[Text("b")]), Element("strong", children=[Text("c")])])]
    assert to_html(sanitize(tree, schema)) == "<p>ac</p>"


def test_text_is_escaped_when_serialized():
    assert to_html(sanitize([Element("p", children=[Text("<b>&</b>")])])) == "<p>&lt;b&gt;&amp;&lt;/b&gt;</p>"

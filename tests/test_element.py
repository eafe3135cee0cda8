from __future__ import annotations

import math

import pytest

from yes_core import Element, ElementType, KeyVal, LiteralSpan, LiteralSpanError, NotAnAttributeError, parse
from yes_core.literal import DEFAULT_QUOTE_SPAN, build_span_table


def test_keyval_rendering_quotes_whitespace():
    assert KeyVal(None, "v").render() == "v"
    assert KeyVal("k", "v").render() == "k=v"
    assert KeyVal("k", "").render() == "k="
    assert KeyVal("k", "a b").render() == 'k="a b"'
    assert KeyVal("a\tb", "c").render() == '"a\tb"=c'
    assert str(KeyVal(None, "x y")) == '"x y"'


@pytest.mark.parametrize("key", ["", "  ", "\t"])
def test_keyval_key_cannot_be_blank(key):
    with pytest.raises(ValueError):
        KeyVal(key, "v")


def test_keyval_matches_case_insensitively():
    assert KeyVal("Width", "1").matches("wIDTH")
    assert not KeyVal(None, "width").matches("width")


def test_literal_span_requires_both_glyphs():
    with pytest.raises(LiteralSpanError):
        LiteralSpan(None, "]")
    with pytest.raises(LiteralSpanError):
        LiteralSpan("[", "")
    with pytest.raises(LiteralSpanError):
        LiteralSpan("[[", "]")


def test_span_table_always_starts_with_quotes():
    assert build_span_table() == [DEFAULT_QUOTE_SPAN]
    assert build_span_table(["[]", ("(", ")"), LiteralSpan('"', '"')]) == [
        DEFAULT_QUOTE_SPAN,
        LiteralSpan("[", "]"),
        LiteralSpan("(", ")"),
    ]
    with pytest.raises(LiteralSpanError):
        build_span_table(["[]]"])


def test_upsert_replaces_in_place():
    el = Element(identifier="a")
    el.upsert(KeyVal("k", "1"))
    el.upsert(KeyVal(None, "x"))
    el.upsert(KeyVal(None, "x"))
    el.upsert(KeyVal("K", "2"))

    assert el.args == [KeyVal("K", "2"), KeyVal(None, "x"), KeyVal(None, "x")]


def test_typed_accessors():
    el = parse("cfg width=640 ratio=1.5 debug=TRUE name=abc neg=-3x big=Infinity").elements[0]

    assert el.get("NAME") == "abc"
    assert el.get("missing", "fallback") == "fallback"
    assert el.has_key("Width")
    assert el.has_keys(["width", "ratio"])
    assert not el.has_keys(["width", "height"])

    assert el.get_as_int("width") == 640
    assert el.get_as_int("ratio") == 1
    assert el.get_as_int("neg") == -3
    assert el.get_as_int("name", 7) == 7
    assert el.get_as_int("missing") is None

    assert el.get_as_number("ratio") == 1.5
    assert el.get_as_number("width") == 640.0
    assert el.get_as_number("big") == math.inf
    assert el.get_as_number("name", 0.5) == 0.5

    assert el.get_as_bool("debug") is True
    assert el.get_as_bool("name", True) is False
    assert el.get_as_bool("missing", True) is True


def test_set_attributes_rejects_other_element_types():
    el = Element(identifier="y")
    attr = Element(type=ElementType.ATTRIBUTE, identifier="x")
    el.set_attributes([attr])
    assert el.attributes == [attr]

    with pytest.raises(NotAnAttributeError):
        el.set_attributes([attr, Element(type=ElementType.GLOBAL, identifier="g", source_line=3)])
    with pytest.raises(AssertionError):
        el.set_attributes([Element(identifier="plain")])


def test_render_by_type():
    assert Element(type=ElementType.GLOBAL, identifier="g").render() == "!g"
    assert Element(type=ElementType.ATTRIBUTE, identifier="a", args=[KeyVal(None, "1")]).render() == "@a 1"
    assert Element(type=ElementType.COMMENT, identifier=" note").render() == "# note"
    assert Element(identifier="e", args=[KeyVal("k", "v"), KeyVal(None, "w")]).render() == "e k=v, w"


def test_to_dict():
    el = parse("@x 1\ny k=v").elements[0]

    assert el.to_dict() == {
        "type": "standard",
        "identifier": "y",
        "line": 2,
        "args": [{"key": "k", "val": "v"}],
        "attributes": [
            {
                "type": "attribute",
                "identifier": "x",
                "line": 1,
                "args": [{"key": None, "val": "1"}],
                "attributes": [],
            }
        ],
    }

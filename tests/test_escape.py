"""Tests for XML escaping and id sanitizing."""

import pytest

from traceflow.escape import escape_xml, escape_xml_attr, sanitize_id


class TestEscapeXml:
    def test_reserved_characters(self):
        assert escape_xml("a & b") == "a &amp; b"
        assert escape_xml('<"\'>') == "&lt;&quot;&#x27;&gt;"

    def test_script_tag_has_no_markup_left(self):
        escaped = escape_xml("<script>alert('x')</script>")
        assert "<" not in escaped
        assert ">" not in escaped

    def test_ampersand_escaped_once(self):
        assert escape_xml("&amp;") == "&amp;amp;"

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_input(self, value):
        assert escape_xml(value) == ""

    def test_plain_text_unchanged(self):
        assert escape_xml("Validate input 42") == "Validate input 42"


class TestEscapeXmlAttr:
    def test_whitespace_becomes_references(self):
        assert escape_xml_attr("a\nb\tc\rd") == "a&#xA;b&#x9;c&#xD;d"

    def test_quotes(self):
        assert escape_xml_attr('say "hi"') == "say &quot;hi&quot;"

    def test_empty_input(self):
        assert escape_xml_attr(None) == ""


class TestSanitizeId:
    def test_replaces_unsafe_characters(self):
        assert sanitize_id("a b/c.d") == "a_b_c_d"

    def test_keeps_safe_characters(self):
        assert sanitize_id("node_1-A") == "node_1-A"

    def test_idempotent(self):
        once = sanitize_id("<weird id>&")
        assert sanitize_id(once) == once

    def test_empty_input(self):
        assert sanitize_id("") == ""

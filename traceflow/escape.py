"""XML escaping helpers for user-controlled text in SVG output."""

from __future__ import annotations

import re

_XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
}

_ATTR_ESCAPES = {
    **_XML_ESCAPES,
    "\r": "&#xD;",
    "\n": "&#xA;",
    "\t": "&#x9;",
}

_XML_PATTERN = re.compile(r"[&<>\"']")
_ATTR_PATTERN = re.compile(r"[&<>\"'\r\n\t]")
_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def escape_xml(text: str | None) -> str:
    """Escape text for use as element content."""
    if not text:
        return ""
    return _XML_PATTERN.sub(lambda m: _XML_ESCAPES[m.group()], text)


def escape_xml_attr(text: str | None) -> str:
    """Escape text for use inside a double-quoted attribute value.

    Besides the five reserved characters, carriage returns, line feeds and
    tabs are written as numeric references so attribute value normalization
    cannot alter them.
    """
    if not text:
        return ""
    return _ATTR_PATTERN.sub(lambda m: _ATTR_ESCAPES[m.group()], text)


def sanitize_id(text: str | None) -> str:
    """Make a string safe for SVG id and class attributes.

    Every character outside ``[A-Za-z0-9_-]`` becomes an underscore.
    """
    if not text:
        return ""
    return _UNSAFE_ID_CHARS.sub("_", text)

# File: neutralgen/formatting.py
"""
NeutralGen - Formatting Helpers
================================
Deterministic, stateless string transforms consumed by renderers:

- accessor names (``getName`` / ``isName`` / ``setName``)
- fixed-width padding
- case transforms (capitalize, uncapitalize, UPPER_SNAKE_CASE)
- small text utilities (quoting, backslash protection, XML escaping)

The case helpers are ``lru_cache``d: the same attribute names are
formatted over and over during a generation run.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import List, Optional
from xml.sax.saxutils import escape

from neutralgen.errors import UsageError

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("neutralgen.formatting")

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns
# ---------------------------------------------------------------------------

_CAMEL_BOUNDARY_RE: re.Pattern[str] = re.compile(r"([a-z])([A-Z])")
_SEPARATOR_RUN_RE: re.Pattern[str] = re.compile(r"[\s_]+")

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


# ---------------------------------------------------------------------------
# Case transforms
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def capitalize(s: str) -> str:
    """
    Upper-case the first character, leave the rest untouched.

    Examples:
        >>> capitalize("firstName")
        'FirstName'
        >>> capitalize("")
        ''
    """
    if not s:
        return s
    return s[0].upper() + s[1:]


@functools.lru_cache(maxsize=None)
def uncapitalize(s: str) -> str:
    """Lower-case the first character, leave the rest untouched."""
    if not s:
        return s
    return s[0].lower() + s[1:]


@functools.lru_cache(maxsize=None)
def to_upper_snake_case(s: str) -> str:
    """
    Convert a free-form label or identifier into UPPER_SNAKE_CASE.

    Whitespace and underscore runs are separators; a lower-case letter
    followed by an upper-case one starts a new word.  Upper-case runs are
    kept whole, so acronyms are not split.  The conversion is idempotent.

    Examples:
        >>> to_upper_snake_case("firstName")
        'FIRST_NAME'
        >>> to_upper_snake_case("  order   line_item ")
        'ORDER_LINE_ITEM'
        >>> to_upper_snake_case("HTTPServer")
        'HTTPSERVER'
        >>> to_upper_snake_case("xmlHTTPRequest")
        'XML_HTTPREQUEST'
        >>> to_upper_snake_case("FIRST_NAME")
        'FIRST_NAME'
    """
    if not s:
        return ""
    words: List[str] = []
    for chunk in _SEPARATOR_RUN_RE.split(s):
        if not chunk:
            continue
        chunk = _CAMEL_BOUNDARY_RE.sub(r"\1 \2", chunk)
        words.extend(chunk.split())
    return "_".join(word.upper() for word in words)


# ---------------------------------------------------------------------------
# Accessor names
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def build_getter(attribute_name: str, boolean_primitive: bool = False) -> str:
    """
    Accessor name for *attribute_name*.

    ``isName`` only for a primitive boolean, ``getName`` otherwise.
    """
    prefix: str = "is" if boolean_primitive else "get"
    return prefix + capitalize(attribute_name)


@functools.lru_cache(maxsize=None)
def build_setter(attribute_name: str) -> str:
    return "set" + capitalize(attribute_name)


# ---------------------------------------------------------------------------
# Padding & text utilities
# ---------------------------------------------------------------------------


def pad(s: str, width: int) -> str:
    """Pad *s* with trailing spaces up to *width*; no-op when already wide enough."""
    if len(s) >= width:
        return s
    return s + " " * (width - len(s))


def is_blank(s: Optional[str]) -> bool:
    return s is None or not s.strip()


def quote(s: Optional[str]) -> str:
    return f'"{s}"'


def unquote(s: Optional[str]) -> Optional[str]:
    """Remove one pair of surrounding double quotes, if both are present."""
    if s is not None and len(s) >= 2 and s[0] == '"' and s[-1] == '"':
        return s[1:-1]
    return s


def backslash(s: Optional[str], char: str) -> Optional[str]:
    """
    Protect every occurrence of *char* in *s* with a backslash.

    Raises:
        UsageError: *char* is not exactly one character.
    """
    if char is None or len(char) != 1:
        raise UsageError(f"Single character expected (c='{char}')")
    if s is None:
        return None
    return s.replace(char, "\\" + char)


def escape_xml(s: Optional[str]) -> str:
    if s is None:
        return ""
    return escape(s, _XML_ENTITIES)


def tab(n: int = 1) -> str:
    return "\t" * max(n, 0)


__all__: List[str] = [
    "capitalize",
    "uncapitalize",
    "to_upper_snake_case",
    "build_getter",
    "build_setter",
    "pad",
    "is_blank",
    "quote",
    "unquote",
    "backslash",
    "escape_xml",
    "tab",
]

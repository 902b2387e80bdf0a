# File: neutralgen/functions.py
"""
NeutralGen - Template Helper Functions
=======================================
``TemplateFunctions`` is the helper object handed to renderers (usually
exposed as ``fn``).  It bundles the formatting helpers with a few list
utilities that operate on sequences of ``AttributeContext``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence, Union

from neutralgen import formatting
from neutralgen.errors import UsageError

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("neutralgen.functions")

# Rendered in place of an argument list when no list is given.
NULL_LIST_TEXT: str = "null"


def _as_sequence(obj: Any, function_name: str) -> Sequence[Any]:
    if obj is None:
        raise UsageError(f"{function_name} : list or array is null")
    if isinstance(obj, (str, bytes)) or not isinstance(obj, (list, tuple)):
        raise UsageError(f"{function_name} : list or array expected")
    return obj


class TemplateFunctions:
    """Stateless helpers for template authors."""

    # -- Strings ------------------------------------------------------------

    def is_blank(self, s: Optional[str]) -> bool:
        return formatting.is_blank(s)

    def is_not_blank(self, s: Optional[str]) -> bool:
        return not formatting.is_blank(s)

    def quote(self, s: Optional[str]) -> str:
        return formatting.quote(s)

    def unquote(self, s: Optional[str]) -> Optional[str]:
        return formatting.unquote(s)

    def backslash(self, s: Optional[str], c: str) -> Optional[str]:
        return formatting.backslash(s, c)

    def escape_xml(self, s: Optional[str]) -> str:
        return formatting.escape_xml(s)

    def tab(self, n: int = 1) -> str:
        return formatting.tab(n)

    def to_upper_case(self, s: Optional[str]) -> str:
        return s.upper() if s is not None else ""

    def to_lower_case(self, s: Optional[str]) -> str:
        return s.lower() if s is not None else ""

    def first_char_to_upper_case(self, s: Optional[str]) -> str:
        return formatting.capitalize(s) if s is not None else ""

    def capitalize(self, s: Optional[str]) -> Optional[str]:
        return formatting.capitalize(s) if s else s

    def uncapitalize(self, s: Optional[str]) -> Optional[str]:
        return formatting.uncapitalize(s) if s else s

    def to_upper_snake_case(self, s: Optional[str]) -> str:
        return formatting.to_upper_snake_case(s) if s is not None else ""

    # -- Attribute lists ----------------------------------------------------

    def arguments_list(self, attributes: Optional[Iterable[Any]]) -> str:
        """``"id, name, price"``"""
        if attributes is None:
            return NULL_LIST_TEXT
        return ", ".join(a.name for a in attributes)

    def arguments_list_with_type(self, attributes: Optional[Iterable[Any]]) -> str:
        """``"int id, String name"``"""
        if attributes is None:
            return NULL_LIST_TEXT
        return ", ".join(f"{a.type} {a.name}" for a in attributes)

    def arguments_list_with_wrapper_type(
        self, attributes: Optional[Iterable[Any]]
    ) -> str:
        if attributes is None:
            return NULL_LIST_TEXT
        return ", ".join(f"{a.wrapper_type} {a.name}" for a in attributes)

    def arguments_list_with_getter(
        self, object_name: str, attributes: Optional[Iterable[Any]]
    ) -> str:
        """``"book.getId(), book.getTitle()"``"""
        if attributes is None:
            return NULL_LIST_TEXT
        return ", ".join(f"{object_name}.{a.getter}()" for a in attributes)

    def remove_from_list(
        self,
        attributes: Optional[Iterable[Any]],
        *excluded: Union[str, Iterable[Any]],
    ) -> List[Any]:
        """
        Copy of *attributes* without the excluded ones.

        Exclusions are given either as attribute names
        (``remove_from_list(attrs, "created", "updated")``) or as a single
        list of attributes (``remove_from_list(attrs, key_attrs)``).
        """
        if attributes is None:
            return []
        names: set = set()
        for item in excluded:
            if isinstance(item, str):
                names.add(item)
            else:
                names.update(a.name for a in item)
        return [a for a in attributes if a.name not in names]

    # -- Generic collections ------------------------------------------------

    def is_void(self, obj: Any) -> bool:
        return len(_as_sequence(obj, "is_void")) == 0

    def is_not_void(self, obj: Any) -> bool:
        return len(_as_sequence(obj, "is_not_void")) > 0

    def size(self, obj: Any) -> int:
        return len(_as_sequence(obj, "size"))

    def concat_lists(self, list1: Iterable[Any], list2: Iterable[Any]) -> List[Any]:
        return [*list1, *list2]

    def build_int_values(self, n: Union[int, Sequence[Any]], first_value: int = 1) -> List[int]:
        """
        ``n`` consecutive integers starting at *first_value*.

        *n* may also be a collection, whose size is then used.
        """
        count: int = n if isinstance(n, int) else len(n)
        return list(range(first_value, first_value + count))

    def __repr__(self) -> str:
        return "<TemplateFunctions>"


__all__: List[str] = ["TemplateFunctions", "NULL_LIST_TEXT"]

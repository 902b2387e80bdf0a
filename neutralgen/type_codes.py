# File: neutralgen/type_codes.py
"""
NeutralGen - Vendor Type-Code Catalog
======================================
Read-only lookup table from vendor-neutral numeric database type codes (the
JDBC ``java.sql.Types`` numbering) to their symbolic name and to the neutral
type they recommend.

The catalog is injected into the generation environment rather than read as
global state, so tests can substitute a catalog with fixed entries.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

from neutralgen.models import NeutralType

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("neutralgen.type_codes")


@dataclass(frozen=True, slots=True)
class TypeCodeInfo:
    """A single catalog entry."""

    code: int
    name: str
    neutral_type: Optional[NeutralType] = None


class TypeCodeCatalog:
    """
    Immutable code → entry index.

    Lookups are O(1); an unknown code yields ``None`` / ``""`` rather than an
    error, since a bare type code is informative only.
    """

    __slots__ = ("_by_code",)

    def __init__(self, entries: Iterable[TypeCodeInfo]) -> None:
        self._by_code: Dict[int, TypeCodeInfo] = {}
        for entry in entries:
            if entry.code in self._by_code:
                raise ValueError(f"Duplicate type code in catalog: {entry.code}")
            self._by_code[entry.code] = entry

    def get(self, code: Optional[int]) -> Optional[TypeCodeInfo]:
        if code is None:
            return None
        return self._by_code.get(code)

    def name_for(self, code: Optional[int]) -> str:
        """Symbolic name of *code*, or an empty string when unknown."""
        entry: Optional[TypeCodeInfo] = self.get(code)
        return entry.name if entry is not None else ""

    def neutral_type_for(self, code: Optional[int]) -> Optional[NeutralType]:
        entry: Optional[TypeCodeInfo] = self.get(code)
        return entry.neutral_type if entry is not None else None

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    def __len__(self) -> int:
        return len(self._by_code)

    def __iter__(self) -> Iterator[TypeCodeInfo]:
        return iter(sorted(self._by_code.values(), key=lambda e: e.code))

    def __repr__(self) -> str:
        return f"<TypeCodeCatalog {len(self)} codes>"


# ---------------------------------------------------------------------------
# Standard JDBC codes
# ---------------------------------------------------------------------------

_JDBC_ENTRIES: List[TypeCodeInfo] = [
    TypeCodeInfo(-16, "LONGNVARCHAR", NeutralType.STRING),
    TypeCodeInfo(-15, "NCHAR", NeutralType.STRING),
    TypeCodeInfo(-9, "NVARCHAR", NeutralType.STRING),
    TypeCodeInfo(-7, "BIT", NeutralType.BOOLEAN),
    TypeCodeInfo(-6, "TINYINT", NeutralType.BYTE),
    TypeCodeInfo(-5, "BIGINT", NeutralType.LONG),
    TypeCodeInfo(-4, "LONGVARBINARY", NeutralType.BINARY),
    TypeCodeInfo(-3, "VARBINARY", NeutralType.BINARY),
    TypeCodeInfo(-2, "BINARY", NeutralType.BINARY),
    TypeCodeInfo(-1, "LONGVARCHAR", NeutralType.STRING),
    TypeCodeInfo(0, "NULL"),
    TypeCodeInfo(1, "CHAR", NeutralType.STRING),
    TypeCodeInfo(2, "NUMERIC", NeutralType.DECIMAL),
    TypeCodeInfo(3, "DECIMAL", NeutralType.DECIMAL),
    TypeCodeInfo(4, "INTEGER", NeutralType.INTEGER),
    TypeCodeInfo(5, "SMALLINT", NeutralType.SHORT),
    TypeCodeInfo(6, "FLOAT", NeutralType.DOUBLE),
    TypeCodeInfo(7, "REAL", NeutralType.FLOAT),
    TypeCodeInfo(8, "DOUBLE", NeutralType.DOUBLE),
    TypeCodeInfo(12, "VARCHAR", NeutralType.STRING),
    TypeCodeInfo(16, "BOOLEAN", NeutralType.BOOLEAN),
    TypeCodeInfo(91, "DATE", NeutralType.DATE),
    TypeCodeInfo(92, "TIME", NeutralType.TIME),
    TypeCodeInfo(93, "TIMESTAMP", NeutralType.TIMESTAMP),
    TypeCodeInfo(1111, "OTHER"),
    TypeCodeInfo(2004, "BLOB", NeutralType.BINARY),
    TypeCodeInfo(2005, "CLOB", NeutralType.STRING),
    TypeCodeInfo(2011, "NCLOB", NeutralType.STRING),
    TypeCodeInfo(2013, "TIME_WITH_TIMEZONE", NeutralType.TIME),
    TypeCodeInfo(2014, "TIMESTAMP_WITH_TIMEZONE", NeutralType.TIMESTAMP),
]


@functools.lru_cache(maxsize=None)
def default_type_code_catalog() -> TypeCodeCatalog:
    """Return the shared standard JDBC catalog (built once)."""
    catalog: TypeCodeCatalog = TypeCodeCatalog(_JDBC_ENTRIES)
    logger.debug("Built default type-code catalog with %d codes.", len(catalog))
    return catalog


__all__: List[str] = [
    "TypeCodeInfo",
    "TypeCodeCatalog",
    "default_type_code_catalog",
]

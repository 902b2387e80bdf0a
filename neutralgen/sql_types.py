# File: neutralgen/sql_types.py
"""
NeutralGen - SQL Type Inference
================================
Two related concerns live here:

1. ``database_type_with_size``: decorate a *native* database type name
   (``VARCHAR``, ``NUMBER`` ...) with its size when the type family needs one.
2. ``SqlTypeProvider``: infer the SQL type of an attribute from its neutral
   type when the model does not state one explicitly.

Inference precedence (first match wins):

    explicit SQL type             attribute override, returned verbatim
    environment type mapping      user table, per neutral type
    dialect table                 postgresql, mysql, oracle ...
    ANSI defaults                 generic fallback

Templates may carry a ``%s`` size placeholder, e.g. ``VARCHAR(%s)``.  It is
filled when the attribute supplies a size and dropped (with its parentheses)
otherwise.  A mapping entry that is a single bare type name (``VARCHAR``)
is sized like a native type; other templates without a placeholder are
returned as they are.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from neutralgen.models import DatabaseDialect, NeutralType

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("neutralgen.sql_types")

SIZE_PLACEHOLDER: str = "%s"
_PLACEHOLDER_GROUP_RE: re.Pattern[str] = re.compile(r"\s*\(\s*%s\s*\)")
_BARE_TYPE_NAME_RE: re.Pattern[str] = re.compile(r"^\s*\w+\s*$")

# ---------------------------------------------------------------------------
# Native type size handling
# ---------------------------------------------------------------------------

# Checked as case-insensitive substrings; VARCHAR2 / NVARCHAR are covered.
_SIZE_BEARING_MARKERS: Tuple[str, ...] = (
    "VARCHAR",
    "CHAR",
    "DECIMAL",
    "NUMERIC",
    "NUMBER",
)


def is_size_required(database_type: Optional[str]) -> bool:
    """True when the native type family renders with a ``(size)`` suffix."""
    if not database_type:
        return False
    upper: str = database_type.upper()
    return any(marker in upper for marker in _SIZE_BEARING_MARKERS)


def database_type_with_size(
    database_type: Optional[str],
    database_size: Optional[str],
) -> str:
    """
    Native type with its size when it makes sense.

    Examples:
        >>> database_type_with_size("VARCHAR", "24")
        'VARCHAR(24)'
        >>> database_type_with_size("varchar", None)
        'varchar'
        >>> database_type_with_size("INTEGER", "10")
        'INTEGER'
    """
    if not database_type or not database_type.strip():
        return ""
    base: str = database_type.strip()
    if not is_size_required(base):
        return base
    if not database_size or not database_size.strip():
        return base
    return f"{base}({database_size.strip()})"


def apply_size(template: str, size: Optional[str]) -> str:
    """Fill the ``%s`` placeholder of *template*, or drop it when no size."""
    if SIZE_PLACEHOLDER not in template:
        return template.strip()
    if size:
        return template.replace(SIZE_PLACEHOLDER, size).strip()
    return _PLACEHOLDER_GROUP_RE.sub("", template).replace(SIZE_PLACEHOLDER, "").strip()


# ---------------------------------------------------------------------------
# Dialect tables
# ---------------------------------------------------------------------------

_ANSI_TYPES: Dict[NeutralType, str] = {
    NeutralType.STRING: "VARCHAR(%s)",
    NeutralType.BOOLEAN: "BOOLEAN",
    NeutralType.BYTE: "SMALLINT",
    NeutralType.SHORT: "SMALLINT",
    NeutralType.INTEGER: "INTEGER",
    NeutralType.LONG: "BIGINT",
    NeutralType.FLOAT: "REAL",
    NeutralType.DOUBLE: "DOUBLE PRECISION",
    NeutralType.DECIMAL: "NUMERIC(%s)",
    NeutralType.DATE: "DATE",
    NeutralType.TIME: "TIME",
    NeutralType.TIMESTAMP: "TIMESTAMP",
    NeutralType.BINARY: "BLOB",
}

_DIALECT_TYPES: Dict[DatabaseDialect, Dict[NeutralType, str]] = {
    DatabaseDialect.POSTGRESQL: {
        NeutralType.STRING: "varchar(%s)",
        NeutralType.BOOLEAN: "boolean",
        NeutralType.BYTE: "smallint",
        NeutralType.SHORT: "smallint",
        NeutralType.INTEGER: "integer",
        NeutralType.LONG: "bigint",
        NeutralType.FLOAT: "real",
        NeutralType.DOUBLE: "double precision",
        NeutralType.DECIMAL: "numeric(%s)",
        NeutralType.DATE: "date",
        NeutralType.TIME: "time",
        NeutralType.TIMESTAMP: "timestamp",
        NeutralType.BINARY: "bytea",
    },
    DatabaseDialect.MYSQL: {
        NeutralType.STRING: "VARCHAR(%s)",
        NeutralType.BOOLEAN: "TINYINT(1)",
        NeutralType.BYTE: "TINYINT",
        NeutralType.SHORT: "SMALLINT",
        NeutralType.INTEGER: "INT",
        NeutralType.LONG: "BIGINT",
        NeutralType.FLOAT: "FLOAT",
        NeutralType.DOUBLE: "DOUBLE",
        NeutralType.DECIMAL: "DECIMAL(%s)",
        NeutralType.DATE: "DATE",
        NeutralType.TIME: "TIME",
        NeutralType.TIMESTAMP: "DATETIME",
        NeutralType.BINARY: "BLOB",
    },
    DatabaseDialect.ORACLE: {
        NeutralType.STRING: "VARCHAR2(%s)",
        NeutralType.BOOLEAN: "NUMBER(1)",
        NeutralType.BYTE: "NUMBER(3)",
        NeutralType.SHORT: "NUMBER(5)",
        NeutralType.INTEGER: "NUMBER(10)",
        NeutralType.LONG: "NUMBER(19)",
        NeutralType.FLOAT: "BINARY_FLOAT",
        NeutralType.DOUBLE: "BINARY_DOUBLE",
        NeutralType.DECIMAL: "NUMBER(%s)",
        NeutralType.DATE: "DATE",
        NeutralType.TIME: "DATE",
        NeutralType.TIMESTAMP: "TIMESTAMP",
        NeutralType.BINARY: "BLOB",
    },
    DatabaseDialect.SQLSERVER: {
        NeutralType.STRING: "NVARCHAR(%s)",
        NeutralType.BOOLEAN: "BIT",
        NeutralType.BYTE: "TINYINT",
        NeutralType.SHORT: "SMALLINT",
        NeutralType.INTEGER: "INT",
        NeutralType.LONG: "BIGINT",
        NeutralType.FLOAT: "REAL",
        NeutralType.DOUBLE: "FLOAT",
        NeutralType.DECIMAL: "DECIMAL(%s)",
        NeutralType.DATE: "DATE",
        NeutralType.TIME: "TIME",
        NeutralType.TIMESTAMP: "DATETIME2",
        NeutralType.BINARY: "VARBINARY(MAX)",
    },
    DatabaseDialect.SQLITE: {
        NeutralType.STRING: "TEXT",
        NeutralType.BOOLEAN: "INTEGER",
        NeutralType.BYTE: "INTEGER",
        NeutralType.SHORT: "INTEGER",
        NeutralType.INTEGER: "INTEGER",
        NeutralType.LONG: "INTEGER",
        NeutralType.FLOAT: "REAL",
        NeutralType.DOUBLE: "REAL",
        NeutralType.DECIMAL: "NUMERIC",
        NeutralType.DATE: "TEXT",
        NeutralType.TIME: "TEXT",
        NeutralType.TIMESTAMP: "TEXT",
        NeutralType.BINARY: "BLOB",
    },
    DatabaseDialect.H2: {
        NeutralType.STRING: "VARCHAR(%s)",
        NeutralType.BOOLEAN: "BOOLEAN",
        NeutralType.BYTE: "TINYINT",
        NeutralType.SHORT: "SMALLINT",
        NeutralType.INTEGER: "INTEGER",
        NeutralType.LONG: "BIGINT",
        NeutralType.FLOAT: "REAL",
        NeutralType.DOUBLE: "DOUBLE PRECISION",
        NeutralType.DECIMAL: "DECIMAL(%s)",
        NeutralType.DATE: "DATE",
        NeutralType.TIME: "TIME",
        NeutralType.TIMESTAMP: "TIMESTAMP",
        NeutralType.BINARY: "BINARY LARGE OBJECT",
    },
}

_ANSI_LONG_TEXT: str = "CLOB"

_DIALECT_LONG_TEXT: Dict[DatabaseDialect, str] = {
    DatabaseDialect.POSTGRESQL: "text",
    DatabaseDialect.MYSQL: "LONGTEXT",
    DatabaseDialect.ORACLE: "CLOB",
    DatabaseDialect.SQLSERVER: "NVARCHAR(MAX)",
    DatabaseDialect.SQLITE: "TEXT",
    DatabaseDialect.H2: "CHARACTER LARGE OBJECT",
}

# Auto-incremented integer columns with a dedicated pseudo-type.
_DIALECT_AUTO_INCREMENT: Dict[DatabaseDialect, Dict[NeutralType, str]] = {
    DatabaseDialect.POSTGRESQL: {
        NeutralType.SHORT: "smallserial",
        NeutralType.INTEGER: "serial",
        NeutralType.LONG: "bigserial",
    },
}

_SIZED_NEUTRAL_TYPES: FrozenSet[NeutralType] = frozenset(
    {NeutralType.STRING, NeutralType.DECIMAL}
)


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------


class SqlTypeProvider:
    """
    Infers the SQL type of an attribute.

    ``attribute`` may be any object exposing ``name``, ``neutral_type``,
    ``explicit_sql_type``, ``is_auto_incremented``, ``is_long_text``,
    ``database_size`` and ``max_length`` (an ``AttributeContext`` in practice).
    """

    __slots__ = ("dialect", "types_mapping")

    def __init__(
        self,
        dialect: Optional[str] = None,
        types_mapping: Optional[Mapping[Any, str]] = None,
    ) -> None:
        self.dialect: Optional[DatabaseDialect] = (
            DatabaseDialect(dialect) if dialect else None
        )
        self.types_mapping: Dict[NeutralType, str] = {
            NeutralType(k): v for k, v in (types_mapping or {}).items()
        }

    def template_for(
        self,
        neutral_type: str,
        auto_incremented: bool = False,
        long_text: bool = False,
    ) -> Tuple[str, str]:
        """
        Return ``(template, source)`` for a neutral type.

        *source* is one of ``"mapping"``, ``"dialect"`` or ``"default"``.
        """
        nt: NeutralType = NeutralType(neutral_type)

        if nt in self.types_mapping:
            return self.types_mapping[nt], "mapping"

        if self.dialect is not None:
            if auto_incremented:
                auto: Optional[str] = _DIALECT_AUTO_INCREMENT.get(self.dialect, {}).get(nt)
                if auto is not None:
                    return auto, "dialect"
            if long_text and nt == NeutralType.STRING:
                return _DIALECT_LONG_TEXT[self.dialect], "dialect"
            dialect_template: Optional[str] = _DIALECT_TYPES[self.dialect].get(nt)
            if dialect_template is not None:
                return dialect_template, "dialect"

        if long_text and nt == NeutralType.STRING:
            return _ANSI_LONG_TEXT, "default"
        return _ANSI_TYPES[nt], "default"

    @staticmethod
    def size_for(attribute: Any) -> Optional[str]:
        """Size value used to fill a ``%s`` placeholder, if any."""
        nt: NeutralType = NeutralType(attribute.neutral_type)
        if nt not in _SIZED_NEUTRAL_TYPES:
            return None
        db_size: str = (attribute.database_size or "").strip()
        if db_size:
            return db_size
        if nt == NeutralType.STRING:
            max_length: str = str(attribute.max_length or "").strip()
            if max_length:
                return max_length
        return None

    def get_sql_type(self, attribute: Any) -> str:
        explicit: str = (attribute.explicit_sql_type or "").strip()
        if explicit:
            return explicit

        template, source = self.template_for(
            attribute.neutral_type,
            auto_incremented=attribute.is_auto_incremented,
            long_text=attribute.is_long_text,
        )
        size: Optional[str] = self.size_for(attribute)
        if source == "mapping" and _BARE_TYPE_NAME_RE.match(template):
            # bare user type: sized by type-name family, like a native type
            sql_type: str = database_type_with_size(template, size)
        else:
            sql_type = apply_size(template, size)
        logger.debug(
            "SQL type for '%s' (%s) inferred from %s: %s",
            attribute.name,
            attribute.neutral_type,
            source,
            sql_type,
        )
        return sql_type

    def __repr__(self) -> str:
        dialect: str = self.dialect.value if self.dialect else "ansi"
        return f"<SqlTypeProvider {dialect}, {len(self.types_mapping)} override(s)>"


def get_sql_type(attribute: Any, environment: Any) -> str:
    """Resolve the SQL type of *attribute* within *environment*."""
    provider: SqlTypeProvider = environment.get_sql_type_provider()
    return provider.get_sql_type(attribute)


__all__: List[str] = [
    "SIZE_PLACEHOLDER",
    "is_size_required",
    "database_type_with_size",
    "apply_size",
    "SqlTypeProvider",
    "get_sql_type",
]

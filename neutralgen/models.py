# File: neutralgen/models.py
"""
NeutralGen - Neutral Model Data Contracts
==========================================
Pydantic V2 models describing the storage-agnostic "neutral model" handed
over by the model loader: entities, their attributes, foreign-key parts and
value-generation descriptors.

These models are the raw, immutable input of the resolution core.  They are
validated once when built and never mutated afterwards; every derived view
(language type, SQL type, referenced entity, generation strategy) is computed
by the resolvers on top of them.

Invariant: ``Model`` owns an O(1) entity index keyed by class name, built
once at construction and read-only thereafter.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Set

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    computed_field,
    field_validator,
    model_validator,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("neutralgen.models")

# ---------------------------------------------------------------------------
# Enums: fixed sets used across the project
# ---------------------------------------------------------------------------


class NeutralType(str, Enum):
    """Abstract attribute kinds, independent of language and storage."""

    STRING = "string"
    BOOLEAN = "boolean"

    # Integer family
    BYTE = "byte"
    SHORT = "short"
    INTEGER = "int"
    LONG = "long"

    # Floating / fixed point
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"

    # Temporal
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"

    BINARY = "binary"


NUMBER_TYPES: FrozenSet[NeutralType] = frozenset(
    {
        NeutralType.BYTE,
        NeutralType.SHORT,
        NeutralType.INTEGER,
        NeutralType.LONG,
        NeutralType.FLOAT,
        NeutralType.DOUBLE,
        NeutralType.DECIMAL,
    }
)

TEMPORAL_TYPES: FrozenSet[NeutralType] = frozenset(
    {NeutralType.DATE, NeutralType.TIME, NeutralType.TIMESTAMP}
)


class DateType(str, Enum):
    """Which part of a temporal value is meaningful."""

    UNDEFINED = "undefined"
    DATE_ONLY = "date_only"
    TIME_ONLY = "time_only"
    DATE_AND_TIME = "date_and_time"

    @property
    def code(self) -> int:
        return _DATE_TYPE_CODES[self]


_DATE_TYPE_CODES: Dict[DateType, int] = {
    DateType.UNDEFINED: 0,
    DateType.DATE_ONLY: 1,
    DateType.TIME_ONLY: 2,
    DateType.DATE_AND_TIME: 3,
}


class BooleanValue(str, Enum):
    """
    Three-valued flag.

    ``UNDEFINED`` is a real state, not a synonym for ``FALSE``: templates
    render it differently (usually by omitting the attribute altogether).
    """

    TRUE = "true"
    FALSE = "false"
    UNDEFINED = "undefined"

    @property
    def text(self) -> str:
        return self.value

    @classmethod
    def from_value(cls, value: Any) -> "BooleanValue":
        """Coerce ``True`` / ``False`` / ``None`` / text into a tri-state value."""
        if value is None:
            return cls.UNDEFINED
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.TRUE if value else cls.FALSE
        if isinstance(value, str):
            return cls(value.strip().lower() or "undefined")
        raise ValueError(f"Cannot interpret {value!r} as a tri-state flag.")


class GenerationStrategy(str, Enum):
    """Identity generation strategies (``UNSET`` means the default, AUTO)."""

    UNSET = ""
    AUTO = "auto"
    IDENTITY = "identity"
    SEQUENCE = "sequence"
    TABLE = "table"


class TargetLanguage(str, Enum):
    """Target programming languages with a built-in type converter."""

    JAVA = "java"
    CSHARP = "csharp"
    PYTHON = "python"
    TYPESCRIPT = "typescript"


class DatabaseDialect(str, Enum):
    """Target database dialects with a built-in SQL type table."""

    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    ORACLE = "oracle"
    SQLSERVER = "sqlserver"
    SQLITE = "sqlite"
    H2 = "h2"


# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_SHARED_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    use_enum_values=True,
    validate_default=True,
    frozen=True,
    extra="forbid",
)


# ---------------------------------------------------------------------------
# Foreign keys & value generators
# ---------------------------------------------------------------------------


class ForeignKeyPart(BaseModel):
    """
    One column of a foreign key, seen from the attribute that implements it.

    Copied verbatim from the loaded model; carries no resolution logic.
    """

    model_config = _SHARED_CONFIG

    fk_name: str = Field(..., min_length=1, description="Foreign key name.")
    referenced_entity_name: str = Field(
        ..., min_length=1, description="Class name of the referenced entity."
    )
    referenced_attribute_name: str = Field(
        ..., min_length=1, description="Referenced attribute name."
    )
    referenced_table_name: str = Field(default="", description="Referenced table.")
    referenced_column_name: str = Field(default="", description="Referenced column.")

    def __repr__(self) -> str:
        return (
            f"<FKPart {self.fk_name} → "
            f"{self.referenced_entity_name}.{self.referenced_attribute_name}>"
        )


class SequenceGenerator(BaseModel):
    """Sequence-based value generator descriptor."""

    model_config = _SHARED_CONFIG

    name: Optional[str] = Field(default=None, description="Generator name.")
    sequence_name: Optional[str] = Field(
        default=None, description="Database sequence name."
    )
    allocation_size: Optional[int] = Field(
        default=None, ge=0, description="Increment used when allocating ids."
    )


class TableGenerator(BaseModel):
    """Table-based counter generator descriptor."""

    model_config = _SHARED_CONFIG

    name: Optional[str] = Field(default=None, description="Generator name.")
    table: Optional[str] = Field(default=None, description="Generator table.")
    pk_column_name: Optional[str] = Field(
        default=None, description="Primary key column of the generator table."
    )
    value_column_name: Optional[str] = Field(
        default=None, description="Column holding the last generated value."
    )
    pk_column_value: Optional[str] = Field(
        default=None, description="Row key identifying this generator."
    )


# ---------------------------------------------------------------------------
# Attribute
# ---------------------------------------------------------------------------


class Attribute(BaseModel):
    """
    Complete raw description of one entity attribute.

    ``None`` means "not specified" for every optional scalar field.
    """

    model_config = _SHARED_CONFIG

    # -- Identity -----------------------------------------------------------
    name: str = Field(..., min_length=1, description="Attribute name.")
    neutral_type: NeutralType = Field(..., description="Neutral type.")
    selected: bool = Field(default=True, description="Selected for generation.")

    # -- Value constraints --------------------------------------------------
    not_null: bool = Field(default=False)
    not_empty: bool = Field(default=False)
    not_blank: bool = Field(default=False)
    long_text: bool = Field(default=False, description="CLOB-like string.")
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    pattern: Optional[str] = Field(default=None)
    min_value: Optional[Decimal] = Field(default=None)
    max_value: Optional[Decimal] = Field(default=None)
    initial_value: Optional[str] = Field(default=None)
    default_value: Optional[str] = Field(default=None)
    label: Optional[str] = Field(default=None)
    input_type: Optional[str] = Field(default=None)

    # -- Language type hints ------------------------------------------------
    primitive_type: bool = Field(
        default=False, description="Primitive language type expected."
    )
    object_type: bool = Field(
        default=False, description="Object (boxed) language type expected."
    )
    unsigned_type: bool = Field(
        default=False, description="Unsigned language type expected."
    )

    # -- Temporal constraints -----------------------------------------------
    date_type: DateType = Field(default=DateType.UNDEFINED)
    date_past: bool = Field(default=False)
    date_future: bool = Field(default=False)
    date_before_value: Optional[str] = Field(default=None)
    date_after_value: Optional[str] = Field(default=None)

    # -- Boolean literal mapping --------------------------------------------
    boolean_true_value: Optional[str] = Field(default=None)
    boolean_false_value: Optional[str] = Field(default=None)

    # -- Database mapping ---------------------------------------------------
    database_name: Optional[str] = Field(default=None)
    database_type: Optional[str] = Field(default=None, description="Native type.")
    database_size: Optional[str] = Field(default=None, description="e.g. '24', '10,2'.")
    database_comment: Optional[str] = Field(default=None)
    database_default_value: Optional[str] = Field(default=None)
    database_not_null: bool = Field(default=False)
    is_auto_incremented: bool = Field(default=False)
    database_type_code: Optional[int] = Field(default=None, description="JDBC code.")
    database_type_name: Optional[str] = Field(default=None)
    sql_type: Optional[str] = Field(default=None, description="Explicit SQL type.")

    # -- Keys ---------------------------------------------------------------
    is_key_element: bool = Field(default=False)
    is_fk: bool = Field(default=False)
    is_fk_simple: bool = Field(default=False)
    is_fk_composite: bool = Field(default=False)
    referenced_entity_class_name: Optional[str] = Field(
        default=None, description="Best-effort, checked against fk_parts."
    )
    fk_parts: List[ForeignKeyPart] = Field(default_factory=list)

    # -- Generated value ----------------------------------------------------
    is_generated_value: bool = Field(default=False)
    generated_value_strategy: GenerationStrategy = Field(
        default=GenerationStrategy.UNSET
    )
    generated_value_generator: Optional[str] = Field(default=None)
    sequence_generator: Optional[SequenceGenerator] = Field(default=None)
    table_generator: Optional[TableGenerator] = Field(default=None)

    # -- Persistence flags --------------------------------------------------
    insertable: BooleanValue = Field(default=BooleanValue.UNDEFINED)
    updatable: BooleanValue = Field(default=BooleanValue.UNDEFINED)
    is_transient: bool = Field(default=False)

    # -- Misc ---------------------------------------------------------------
    tags: Dict[str, str] = Field(default_factory=dict)
    is_used_in_links: bool = Field(default=False)
    is_used_in_selected_links: bool = Field(default=False)

    # -- Validators ---------------------------------------------------------

    @field_validator("insertable", "updatable", mode="before")
    @classmethod
    def _coerce_tri_state(cls, v: Any) -> BooleanValue:
        return BooleanValue.from_value(v)

    @field_validator("date_type", mode="before")
    @classmethod
    def _default_date_type(cls, v: Any) -> Any:
        return DateType.UNDEFINED if v is None else v

    @field_validator("generated_value_strategy", mode="before")
    @classmethod
    def _normalise_strategy(cls, v: Any) -> Any:
        if v is None:
            return GenerationStrategy.UNSET
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("database_size", mode="before")
    @classmethod
    def _size_as_text(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @model_validator(mode="after")
    def _validate_single_generator(self) -> "Attribute":
        if self.sequence_generator is not None and self.table_generator is not None:
            raise ValueError(
                f"Attribute '{self.name}' defines both a sequence generator "
                f"and a table generator; at most one is allowed."
            )
        return self

    @model_validator(mode="after")
    def _validate_fk_flags(self) -> "Attribute":
        if self.is_fk != (self.is_fk_simple or self.is_fk_composite):
            raise ValueError(
                f"Attribute '{self.name}': is_fk={self.is_fk} is inconsistent "
                f"with is_fk_simple={self.is_fk_simple} and "
                f"is_fk_composite={self.is_fk_composite}."
            )
        return self

    @model_validator(mode="after")
    def _warn_type_hint_conflict(self) -> "Attribute":
        if self.primitive_type and self.object_type:
            logger.warning(
                "Attribute '%s' asks for both a primitive and an object type; "
                "the object type wins.",
                self.name,
            )
        return self

    def __repr__(self) -> str:
        key_flag: str = " KEY" if self.is_key_element else ""
        fk_flag: str = " FK" if self.is_fk else ""
        return f"<Attribute {self.name} {self.neutral_type}{key_flag}{fk_flag}>"


# ---------------------------------------------------------------------------
# Entity
# ---------------------------------------------------------------------------


class Entity(BaseModel):
    """
    One entity of the neutral model.

    The entity name *is* its class name; cross-entity references are made by
    that name and resolved against ``Model``.
    """

    model_config = _SHARED_CONFIG

    class_name: str = Field(..., min_length=1, description="Entity class name.")
    database_table: Optional[str] = Field(default=None, description="Table name.")
    attributes: List[Attribute] = Field(default_factory=list)

    _attribute_map: Dict[str, Attribute] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._attribute_map = {a.name: a for a in self.attributes}

    @property
    def name(self) -> str:
        return self.class_name

    @computed_field  # type: ignore[misc]
    @property
    def key_attribute_names(self) -> List[str]:
        return [a.name for a in self.attributes if a.is_key_element]

    @property
    def key_attributes(self) -> List[Attribute]:
        return [a for a in self.attributes if a.is_key_element]

    def get_attribute(self, name: str) -> Optional[Attribute]:
        """O(1) attribute lookup by name."""
        return self._attribute_map.get(name)

    @model_validator(mode="after")
    def _validate_unique_attribute_names(self) -> "Entity":
        names: List[str] = [a.name for a in self.attributes]
        if len(names) != len(set(names)):
            dupes: List[str] = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(
                f"Entity '{self.class_name}' has duplicate attributes: {dupes}"
            )
        return self

    @model_validator(mode="after")
    def _validate_composite_fk_groups(self) -> "Entity":
        # fk_name -> attributes implementing it
        groups: Dict[str, Set[str]] = {}
        for attr in self.attributes:
            for part in attr.fk_parts:
                groups.setdefault(part.fk_name, set()).add(attr.name)

        for attr in self.attributes:
            if not attr.is_fk_composite or not attr.fk_parts:
                continue
            if not any(len(groups[p.fk_name]) > 1 for p in attr.fk_parts):
                raise ValueError(
                    f"Attribute '{self.class_name}.{attr.name}' is flagged as "
                    f"part of a composite foreign key but none of its FK parts "
                    f"is shared with another attribute."
                )
        return self

    def __repr__(self) -> str:
        return f"<Entity {self.class_name} ({len(self.attributes)} attributes)>"


# ---------------------------------------------------------------------------
# Model (top-level container)
# ---------------------------------------------------------------------------


class Model(BaseModel):
    """
    The whole neutral model: all entities, indexed by class name.

    Read-only once built, so concurrent lookups are safe.
    """

    model_config = _SHARED_CONFIG

    name: str = Field(default="model", min_length=1, description="Model name.")
    entities: List[Entity] = Field(default_factory=list)

    _entity_map: Dict[str, Entity] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._entity_map = {e.class_name: e for e in self.entities}

    @model_validator(mode="after")
    def _validate_unique_class_names(self) -> "Model":
        names: List[str] = [e.class_name for e in self.entities]
        if len(names) != len(set(names)):
            dupes: List[str] = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"Duplicate entity class names: {dupes}")
        return self

    def get_entity_by_class_name(self, class_name: str) -> Optional[Entity]:
        """O(1) entity lookup."""
        return self._entity_map.get(class_name)

    def has_entity(self, class_name: str) -> bool:
        return class_name in self._entity_map

    @computed_field  # type: ignore[misc]
    @property
    def entity_count(self) -> int:
        return len(self.entities)

    @property
    def entity_class_names(self) -> List[str]:
        return [e.class_name for e in self.entities]

    def __repr__(self) -> str:
        total: int = sum(len(e.attributes) for e in self.entities)
        return f"<Model {self.name}: {self.entity_count} entities, {total} attributes>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "NeutralType",
    "NUMBER_TYPES",
    "TEMPORAL_TYPES",
    "DateType",
    "BooleanValue",
    "GenerationStrategy",
    "TargetLanguage",
    "DatabaseDialect",
    "ForeignKeyPart",
    "SequenceGenerator",
    "TableGenerator",
    "Attribute",
    "Entity",
    "Model",
]

logger.debug("neutralgen.models loaded — %d public symbols.", len(__all__))

# File: neutralgen/context.py
"""
NeutralGen - Attribute Context
===============================
``AttributeContext`` is the per-attribute object queried by renderers.

It is built once per attribute per generation run from:

    entity        the owning ``Entity``
    attribute     the raw ``Attribute``
    model         the read-only ``Model`` index (for FK resolution)
    environment   the active ``GenerationEnvironment``

Plain model fields are copied (and normalised: ``None`` → ``""``) at
construction.  Language types, SQL types and referenced entities are
resolved on each query; resolutions are pure and cheap, so nothing is
cached.

The only state change after construction is ``use_full_type()``, a one-way
switch making ``type`` return the fully qualified spelling.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from neutralgen import formatting
from neutralgen.environment import GenerationEnvironment
from neutralgen.errors import ConfigurationError
from neutralgen.foreign_keys import (
    ForeignKeyKind,
    classify_foreign_key,
    resolve_referenced_entity,
)
from neutralgen.generated_values import (
    GeneratedValue,
    SequenceGeneratorInfo,
    TableGeneratorInfo,
    resolve_generated_value,
    resolve_sequence_generator,
    resolve_table_generator,
)
from neutralgen.languages import AttributeTypeInfo, LanguageType
from neutralgen.models import (
    NUMBER_TYPES,
    TEMPORAL_TYPES,
    Attribute,
    BooleanValue,
    DateType,
    Entity,
    ForeignKeyPart,
    Model,
    NeutralType,
)
from neutralgen.sql_types import database_type_with_size, get_sql_type

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("neutralgen.context")


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _decimal_text(value: Optional[Decimal]) -> str:
    # Decimal("10") must render as "10", not "1E+1"
    return "" if value is None else format(value, "f")


class AttributeContext:
    """Read-only query API over one attribute."""

    __slots__ = (
        "_entity",
        "_attribute",
        "_model",
        "_environment",
        "_type_info",
        "_use_full_type",
        "_neutral_type",
        "_generated",
        "_sequence_generator",
        "_table_generator",
        "_insertable",
        "_updatable",
        "_tags",
        "_fk_parts",
        "_strings",
    )

    def __init__(
        self,
        entity: Entity,
        attribute: Attribute,
        model: Model,
        environment: Optional[GenerationEnvironment] = None,
    ) -> None:
        self._entity: Entity = entity
        self._attribute: Attribute = attribute
        self._model: Model = model
        self._environment: GenerationEnvironment = (
            environment if environment is not None else GenerationEnvironment()
        )
        self._use_full_type: bool = False

        self._neutral_type: NeutralType = NeutralType(attribute.neutral_type)
        self._type_info: AttributeTypeInfo = AttributeTypeInfo.from_attribute(attribute)
        self._generated: GeneratedValue = resolve_generated_value(attribute)
        self._sequence_generator: SequenceGeneratorInfo = resolve_sequence_generator(attribute)
        self._table_generator: TableGeneratorInfo = resolve_table_generator(attribute)
        self._insertable: BooleanValue = BooleanValue.from_value(attribute.insertable)
        self._updatable: BooleanValue = BooleanValue.from_value(attribute.updatable)
        self._tags: Dict[str, str] = dict(attribute.tags)
        self._fk_parts: Tuple[ForeignKeyPart, ...] = tuple(attribute.fk_parts)

        a = attribute
        self._strings: Dict[str, str] = {
            "initial_value": _text(a.initial_value),
            "default_value": _text(a.default_value),
            "label": _text(a.label),
            "input_type": _text(a.input_type),
            "min_length": _text(a.min_length),
            "max_length": _text(a.max_length),
            "pattern": _text(a.pattern),
            "min_value": _decimal_text(a.min_value),
            "max_value": _decimal_text(a.max_value),
            "date_before_value": _text(a.date_before_value),
            "date_after_value": _text(a.date_after_value),
            "boolean_true_value": _text(a.boolean_true_value).strip(),
            "boolean_false_value": _text(a.boolean_false_value).strip(),
            "database_name": _text(a.database_name),
            "database_type": _text(a.database_type),
            "database_size": _text(a.database_size),
            "database_comment": _text(a.database_comment),
            "database_default_value": _text(a.database_default_value),
            "database_type_name": _text(a.database_type_name),
            "sql_type": _text(a.sql_type),
        }

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._attribute.name

    @property
    def entity(self) -> Entity:
        return self._entity

    @property
    def neutral_type(self) -> str:
        return self._neutral_type.value

    @property
    def is_selected(self) -> bool:
        return self._attribute.selected

    def formatted_name(self, width: int) -> str:
        return formatting.pad(self.name, width)

    # ------------------------------------------------------------------
    # Language type
    # ------------------------------------------------------------------

    def _language_type(self) -> LanguageType:
        try:
            return self._environment.get_type_converter().get_type(self._type_info)
        except ConfigurationError as exc:
            raise ConfigurationError(
                f"Cannot resolve the type of '{self._entity.class_name}.{self.name}': "
                f"{exc.message}",
                {"entity": self._entity.class_name, "attribute": self.name, **exc.context},
            ) from exc

    def use_full_type(self) -> None:
        """From now on ``type`` returns the fully qualified spelling."""
        self._use_full_type = True

    @property
    def uses_full_type(self) -> bool:
        return self._use_full_type

    @property
    def type(self) -> str:
        language_type: LanguageType = self._language_type()
        return language_type.full_type if self._use_full_type else language_type.simple_type

    @property
    def simple_type(self) -> str:
        return self._language_type().simple_type

    @property
    def full_type(self) -> str:
        return self._language_type().full_type

    @property
    def wrapper_type(self) -> str:
        return self._language_type().wrapper_type

    @property
    def is_primitive_type(self) -> bool:
        return self._language_type().is_primitive

    def formatted_type(self, width: int) -> str:
        return formatting.pad(self.type, width)

    def formatted_wrapper_type(self, width: int) -> str:
        return formatting.pad(self.wrapper_type, width)

    # -- Neutral type predicates --------------------------------------------

    @property
    def is_string_type(self) -> bool:
        return self._neutral_type == NeutralType.STRING

    @property
    def is_boolean_type(self) -> bool:
        return self._neutral_type == NeutralType.BOOLEAN

    @property
    def is_byte_type(self) -> bool:
        return self._neutral_type == NeutralType.BYTE

    @property
    def is_short_type(self) -> bool:
        return self._neutral_type == NeutralType.SHORT

    @property
    def is_integer_type(self) -> bool:
        return self._neutral_type == NeutralType.INTEGER

    @property
    def is_long_type(self) -> bool:
        return self._neutral_type == NeutralType.LONG

    @property
    def is_float_type(self) -> bool:
        return self._neutral_type == NeutralType.FLOAT

    @property
    def is_double_type(self) -> bool:
        return self._neutral_type == NeutralType.DOUBLE

    @property
    def is_decimal_type(self) -> bool:
        return self._neutral_type == NeutralType.DECIMAL

    @property
    def is_number_type(self) -> bool:
        return self._neutral_type in NUMBER_TYPES

    @property
    def is_date_type(self) -> bool:
        return self._neutral_type == NeutralType.DATE

    @property
    def is_time_type(self) -> bool:
        return self._neutral_type == NeutralType.TIME

    @property
    def is_timestamp_type(self) -> bool:
        return self._neutral_type == NeutralType.TIMESTAMP

    @property
    def is_temporal_type(self) -> bool:
        return self._neutral_type in TEMPORAL_TYPES

    @property
    def is_binary_type(self) -> bool:
        return self._neutral_type == NeutralType.BINARY

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def getter(self) -> str:
        """``isActive`` for a primitive boolean, ``getActive`` otherwise."""
        return formatting.build_getter(
            self.name, self.is_boolean_type and self.is_primitive_type
        )

    @property
    def getter_with_get_prefix(self) -> str:
        return formatting.build_getter(self.name)

    @property
    def setter(self) -> str:
        return formatting.build_setter(self.name)

    # ------------------------------------------------------------------
    # Value constraints
    # ------------------------------------------------------------------

    @property
    def has_initial_value(self) -> bool:
        return bool(self._strings["initial_value"])

    @property
    def initial_value(self) -> str:
        return self._strings["initial_value"]

    @property
    def has_default_value(self) -> bool:
        return bool(self._strings["default_value"])

    @property
    def default_value(self) -> str:
        return self._strings["default_value"]

    @property
    def has_label(self) -> bool:
        return bool(self._strings["label"])

    @property
    def label(self) -> str:
        return self._strings["label"]

    @property
    def has_input_type(self) -> bool:
        return bool(self._strings["input_type"])

    @property
    def input_type(self) -> str:
        return self._strings["input_type"]

    @property
    def is_not_null(self) -> bool:
        return self._attribute.not_null

    @property
    def is_not_empty(self) -> bool:
        return self._attribute.not_empty

    @property
    def is_not_blank(self) -> bool:
        return self._attribute.not_blank

    @property
    def is_long_text(self) -> bool:
        return self._attribute.long_text

    @property
    def min_length(self) -> str:
        return self._strings["min_length"]

    @property
    def max_length(self) -> str:
        return self._strings["max_length"]

    @property
    def pattern(self) -> str:
        return self._strings["pattern"]

    @property
    def min_value(self) -> str:
        return self._strings["min_value"]

    @property
    def max_value(self) -> str:
        return self._strings["max_value"]

    # ------------------------------------------------------------------
    # Temporal constraints
    # ------------------------------------------------------------------

    @property
    def date_type(self) -> int:
        """0 undefined, 1 date only, 2 time only, 3 date and time."""
        return DateType(self._attribute.date_type).code

    @property
    def has_date_past_validation(self) -> bool:
        return self._attribute.date_past

    @property
    def has_date_future_validation(self) -> bool:
        return self._attribute.date_future

    @property
    def has_date_before_validation(self) -> bool:
        return bool(self._strings["date_before_value"])

    @property
    def date_before_value(self) -> str:
        return self._strings["date_before_value"]

    @property
    def has_date_after_validation(self) -> bool:
        return bool(self._strings["date_after_value"])

    @property
    def date_after_value(self) -> str:
        return self._strings["date_after_value"]

    # ------------------------------------------------------------------
    # Boolean literals
    # ------------------------------------------------------------------

    @property
    def boolean_true_value(self) -> str:
        return self._strings["boolean_true_value"]

    @property
    def boolean_false_value(self) -> str:
        return self._strings["boolean_false_value"]

    # ------------------------------------------------------------------
    # Database mapping
    # ------------------------------------------------------------------

    @property
    def database_name(self) -> str:
        return self._strings["database_name"]

    @property
    def database_type(self) -> str:
        return self._strings["database_type"]

    @property
    def database_size(self) -> str:
        return self._strings["database_size"]

    @property
    def database_type_with_size(self) -> str:
        return database_type_with_size(self.database_type, self.database_size)

    @property
    def has_database_comment(self) -> bool:
        return bool(self._strings["database_comment"])

    @property
    def database_comment(self) -> str:
        return self._strings["database_comment"]

    @property
    def has_database_default_value(self) -> bool:
        # the database owns the value of an auto-incremented column
        if self.is_auto_incremented:
            return False
        return bool(self._strings["database_default_value"])

    @property
    def database_default_value(self) -> str:
        return self._strings["database_default_value"]

    @property
    def is_database_not_null(self) -> bool:
        return self._attribute.database_not_null

    @property
    def is_auto_incremented(self) -> bool:
        return self._attribute.is_auto_incremented

    @property
    def database_type_code(self) -> int:
        code: Optional[int] = self._attribute.database_type_code
        return code if code is not None else 0

    @property
    def database_type_name(self) -> str:
        """Recorded type name, else the catalog name for the type code."""
        recorded: str = self._strings["database_type_name"]
        if recorded:
            return recorded
        return self._environment.type_codes.name_for(self._attribute.database_type_code)

    @property
    def recommended_type(self) -> str:
        """Language type recommended for the bare type code ("" if unknown)."""
        recommended: Optional[LanguageType] = (
            self._environment.get_type_converter().recommended_type_for_code(
                self._attribute.database_type_code, self.is_database_not_null
            )
        )
        return recommended.full_type if recommended is not None else ""

    @property
    def explicit_sql_type(self) -> str:
        return self._strings["sql_type"]

    @property
    def sql_type(self) -> str:
        return get_sql_type(self, self._environment)

    # ------------------------------------------------------------------
    # Keys & foreign keys
    # ------------------------------------------------------------------

    @property
    def is_key_element(self) -> bool:
        return self._attribute.is_key_element

    @property
    def is_fk(self) -> bool:
        return self._attribute.is_fk

    @property
    def is_fk_simple(self) -> bool:
        return self._attribute.is_fk_simple

    @property
    def is_fk_composite(self) -> bool:
        return self._attribute.is_fk_composite

    @property
    def fk_kind(self) -> str:
        kind: ForeignKeyKind = classify_foreign_key(self._attribute)
        return kind.value

    @property
    def fk_parts(self) -> List[ForeignKeyPart]:
        return list(self._fk_parts)

    @property
    def referenced_entity(self) -> Entity:
        """
        The entity this attribute references.

        Raises:
            ReferenceResolutionError: no referenced entity is recorded.
            ModelIntegrityError:      the recorded entity is not in the model.
        """
        return resolve_referenced_entity(
            self._attribute, self._model, self._entity.class_name
        )

    @property
    def referenced_entity_name(self) -> str:
        return self.referenced_entity.class_name

    @property
    def is_used_in_links(self) -> bool:
        return self._attribute.is_used_in_links

    @property
    def is_used_in_selected_links(self) -> bool:
        return self._attribute.is_used_in_selected_links

    # ------------------------------------------------------------------
    # Generated values
    # ------------------------------------------------------------------

    @property
    def is_generated_value(self) -> bool:
        return self._generated.is_generated

    @property
    def generated_value_strategy(self) -> str:
        return self._generated.strategy

    @property
    def generated_value_generator(self) -> str:
        return self._generated.generator

    @property
    def effective_generation_strategy(self) -> str:
        return self._generated.effective_strategy

    @property
    def has_sequence_generator(self) -> bool:
        return self._sequence_generator.present

    @property
    def sequence_generator_name(self) -> str:
        return self._sequence_generator.name

    @property
    def sequence_generator_sequence_name(self) -> str:
        return self._sequence_generator.sequence_name

    @property
    def sequence_generator_allocation_size(self) -> int:
        return self._sequence_generator.allocation_size

    @property
    def has_table_generator(self) -> bool:
        return self._table_generator.present

    @property
    def table_generator_name(self) -> str:
        return self._table_generator.name

    @property
    def table_generator_table(self) -> str:
        return self._table_generator.table

    @property
    def table_generator_pk_column_name(self) -> str:
        return self._table_generator.pk_column_name

    @property
    def table_generator_value_column_name(self) -> str:
        return self._table_generator.value_column_name

    @property
    def table_generator_pk_column_value(self) -> str:
        return self._table_generator.pk_column_value

    # ------------------------------------------------------------------
    # Tri-state persistence flags
    # ------------------------------------------------------------------

    @property
    def insertable_flag(self) -> BooleanValue:
        return self._insertable

    @property
    def insertable(self) -> str:
        return self._insertable.text

    def insertable_is(self, value: bool) -> bool:
        """Never true while the flag is undefined."""
        return self._insertable == BooleanValue.from_value(bool(value))

    @property
    def updatable_flag(self) -> BooleanValue:
        return self._updatable

    @property
    def updatable(self) -> str:
        return self._updatable.text

    def updatable_is(self, value: bool) -> bool:
        return self._updatable == BooleanValue.from_value(bool(value))

    # ------------------------------------------------------------------
    # Tags & misc
    # ------------------------------------------------------------------

    def has_tag(self, tag_name: str) -> bool:
        return tag_name in self._tags

    def tag_value(self, tag_name: str, default: str = "") -> str:
        return self._tags.get(tag_name, default)

    @property
    def tags(self) -> Dict[str, str]:
        return dict(self._tags)

    @property
    def is_transient(self) -> bool:
        return self._attribute.is_transient

    def to_dict(self) -> Dict[str, Any]:
        """
        Snapshot of the resolved values, for reports and debugging.

        Referenced-entity information is left out: it may legitimately fail
        and is resolved separately.
        """
        language_type: LanguageType = self._language_type()
        return {
            "entity": self._entity.class_name,
            "name": self.name,
            "neutral_type": self.neutral_type,
            "simple_type": language_type.simple_type,
            "full_type": language_type.full_type,
            "wrapper_type": language_type.wrapper_type,
            "is_primitive_type": language_type.is_primitive,
            "getter": self.getter,
            "setter": self.setter,
            "database_name": self.database_name,
            "database_type_with_size": self.database_type_with_size,
            "sql_type": self.sql_type,
            "is_key_element": self.is_key_element,
            "fk_kind": self.fk_kind,
            "is_generated_value": self.is_generated_value,
            "generation_strategy": self.effective_generation_strategy,
            "insertable": self.insertable,
            "updatable": self.updatable,
            "is_transient": self.is_transient,
        }

    def __str__(self) -> str:
        text: str = f"{self.type} {self.name}"
        if self.has_initial_value:
            text += f" = {self.initial_value}"
        return text

    def __repr__(self) -> str:
        return (
            f"<AttributeContext {self._entity.class_name}.{self.name} "
            f"({self.neutral_type})>"
        )


__all__: List[str] = ["AttributeContext"]

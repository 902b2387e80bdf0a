# File: neutralgen/validators.py
"""
NeutralGen - Model Validators
==============================
Cross-entity semantic validation of a neutral ``Model``.

Pydantic already rejects structurally broken input (duplicate names, both
generator descriptors, inconsistent FK flags).  The checks here look at the
model as a whole and report problems that would only surface lazily during
resolution: dangling references, contradictory constraints, descriptors
that will be ignored.

Nothing is raised; every finding is accumulated into a ``ValidationResult``.

Usage:
    from neutralgen.validators import validate_full
    result = validate_full(model, environment)
    if not result.is_valid:
        print(result.format_report())
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Set

from neutralgen.environment import GenerationEnvironment
from neutralgen.errors import ConfigurationError
from neutralgen.foreign_keys import check_reference_consistency
from neutralgen.languages import AttributeTypeInfo, TypeConverter
from neutralgen.models import (
    TEMPORAL_TYPES,
    Attribute,
    GenerationStrategy,
    Model,
    NeutralType,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("neutralgen.validators")

# ---------------------------------------------------------------------------
# Validation result container
# ---------------------------------------------------------------------------


class ValidationIssue:
    """One finding of the validation pipeline."""

    __slots__ = ("level", "code", "message", "context")

    def __init__(
        self,
        level: str,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.level: str = level  # "error" | "warning" | "info"
        self.code: str = code
        self.message: str = message
        self.context: Dict[str, Any] = context or {}

    @property
    def is_error(self) -> bool:
        return self.level == "error"

    @property
    def is_warning(self) -> bool:
        return self.level == "warning"

    def __repr__(self) -> str:
        return f"[{self.level.upper()}] {self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


class ValidationResult:
    """Accumulates ``ValidationIssue`` instances."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[ValidationIssue] = []

    def add_error(self, code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._items.append(ValidationIssue("error", code, message, context))

    def add_warning(self, code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._items.append(ValidationIssue("warning", code, message, context))

    def add_info(self, code: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._items.append(ValidationIssue("info", code, message, context))

    def merge(self, other: "ValidationResult") -> None:
        self._items.extend(other._items)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self._items if i.is_error]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self._items if i.is_warning]

    @property
    def all_items(self) -> List[ValidationIssue]:
        return list(self._items)

    @property
    def codes(self) -> Set[str]:
        return {i.code for i in self._items}

    @property
    def error_count(self) -> int:
        return sum(1 for i in self._items if i.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self._items if i.is_warning)

    @property
    def is_valid(self) -> bool:
        return self.error_count == 0

    def summary(self) -> str:
        return (
            f"Validation: {self.error_count} error(s), "
            f"{self.warning_count} warning(s), "
            f"{len(self._items)} total item(s)."
        )

    def __repr__(self) -> str:
        return f"<ValidationResult {self.summary()}>"

    def __bool__(self) -> bool:
        """Truthy when there are no errors."""
        return self.is_valid

    def __len__(self) -> int:
        return len(self._items)

    def format_report(self, include_info: bool = False) -> str:
        lines: List[str] = [self.summary(), ""]
        for item in self._items:
            if not include_info and item.level == "info":
                continue
            prefix: str = {"error": "✗", "warning": "⚠", "info": "ℹ"}.get(item.level, "•")
            lines.append(f"  {prefix} [{item.code}] {item.message}")
            for k, v in item.context.items():
                lines.append(f"       {k}: {v}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_IDENTIFIER_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_PASCAL_CASE_RE: re.Pattern[str] = re.compile(r"^[A-Z][A-Za-z0-9]*$")
_CAMEL_CASE_RE: re.Pattern[str] = re.compile(r"^[a-z][A-Za-z0-9]*$")


def _ctx(entity: str, attribute: Optional[str] = None) -> Dict[str, Any]:
    ctx: Dict[str, Any] = {"entity": entity}
    if attribute is not None:
        ctx["attribute"] = attribute
    return ctx


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def validate_entity_names(model: Model) -> ValidationResult:
    result: ValidationResult = ValidationResult()
    for entity in model.entities:
        name: str = entity.class_name
        if not _IDENTIFIER_RE.match(name):
            result.add_error(
                "INVALID_ENTITY_NAME",
                f"Entity name '{name}' is not a valid identifier.",
                _ctx(name),
            )
        elif not _PASCAL_CASE_RE.match(name):
            result.add_warning(
                "ENTITY_NAME_NOT_PASCAL_CASE",
                f"Entity name '{name}' is not PascalCase.",
                _ctx(name),
            )
    return result


def validate_attribute_names(model: Model) -> ValidationResult:
    result: ValidationResult = ValidationResult()
    for entity in model.entities:
        if not entity.attributes:
            result.add_warning(
                "ENTITY_WITHOUT_ATTRIBUTES",
                f"Entity '{entity.class_name}' has no attributes.",
                _ctx(entity.class_name),
            )
        for attr in entity.attributes:
            if not _IDENTIFIER_RE.match(attr.name):
                result.add_error(
                    "INVALID_ATTRIBUTE_NAME",
                    f"Attribute name '{entity.class_name}.{attr.name}' is not "
                    f"a valid identifier.",
                    _ctx(entity.class_name, attr.name),
                )
            elif not _CAMEL_CASE_RE.match(attr.name):
                result.add_info(
                    "ATTRIBUTE_NAME_NOT_CAMEL_CASE",
                    f"Attribute name '{entity.class_name}.{attr.name}' is not "
                    f"camelCase; accessor names may look odd.",
                    _ctx(entity.class_name, attr.name),
                )
    return result


def validate_key_elements(model: Model) -> ValidationResult:
    result: ValidationResult = ValidationResult()
    for entity in model.entities:
        keys: List[Attribute] = entity.key_attributes
        if not keys:
            result.add_warning(
                "ENTITY_WITHOUT_KEY",
                f"Entity '{entity.class_name}' has no key attribute.",
                _ctx(entity.class_name),
            )
        for attr in keys:
            if attr.is_transient:
                result.add_error(
                    "TRANSIENT_KEY_ELEMENT",
                    f"Key attribute '{entity.class_name}.{attr.name}' is "
                    f"transient and cannot be persisted.",
                    _ctx(entity.class_name, attr.name),
                )
    return result


def validate_foreign_keys(model: Model) -> ValidationResult:
    """
    Check every FK attribute against the entity index.

    The recorded referenced entity and every FK part target must exist;
    disagreement between the two is reported, never reconciled.
    """
    result: ValidationResult = ValidationResult()
    for entity in model.entities:
        for attr in entity.attributes:
            ctx: Dict[str, Any] = _ctx(entity.class_name, attr.name)
            recorded: str = (attr.referenced_entity_class_name or "").strip()

            if recorded and not model.has_entity(recorded):
                result.add_error(
                    "FK_UNKNOWN_REFERENCED_ENTITY",
                    f"Attribute '{entity.class_name}.{attr.name}' references "
                    f"unknown entity '{recorded}'.",
                    {**ctx, "referenced": recorded},
                )

            for part in attr.fk_parts:
                target = model.get_entity_by_class_name(part.referenced_entity_name)
                if target is None:
                    result.add_error(
                        "FK_PART_UNKNOWN_ENTITY",
                        f"FK '{part.fk_name}' of '{entity.class_name}.{attr.name}' "
                        f"references unknown entity '{part.referenced_entity_name}'.",
                        {**ctx, "fk": part.fk_name},
                    )
                elif target.get_attribute(part.referenced_attribute_name) is None:
                    result.add_error(
                        "FK_PART_UNKNOWN_ATTRIBUTE",
                        f"FK '{part.fk_name}' of '{entity.class_name}.{attr.name}' "
                        f"references unknown attribute "
                        f"'{part.referenced_entity_name}.{part.referenced_attribute_name}'.",
                        {**ctx, "fk": part.fk_name},
                    )

            mismatch: Optional[str] = check_reference_consistency(attr)
            if mismatch is not None:
                result.add_warning("FK_REFERENCE_MISMATCH", mismatch, ctx)

            if attr.is_fk and not recorded:
                result.add_warning(
                    "FK_WITHOUT_REFERENCE",
                    f"Attribute '{entity.class_name}.{attr.name}' is a foreign "
                    f"key but records no referenced entity.",
                    ctx,
                )
    return result


_STRATEGY_FOR_DESCRIPTOR: Dict[str, str] = {
    "sequence_generator": GenerationStrategy.SEQUENCE.value,
    "table_generator": GenerationStrategy.TABLE.value,
}


def validate_generated_values(model: Model) -> ValidationResult:
    result: ValidationResult = ValidationResult()
    for entity in model.entities:
        for attr in entity.attributes:
            ctx: Dict[str, Any] = _ctx(entity.class_name, attr.name)
            generated: bool = attr.is_generated_value or attr.is_auto_incremented

            for descriptor, strategy in _STRATEGY_FOR_DESCRIPTOR.items():
                if getattr(attr, descriptor) is None:
                    continue
                if not generated:
                    result.add_warning(
                        "GENERATOR_WITHOUT_GENERATED_VALUE",
                        f"Attribute '{entity.class_name}.{attr.name}' defines a "
                        f"{descriptor.replace('_', ' ')} but is not a generated value.",
                        ctx,
                    )
                elif attr.generated_value_strategy not in ("", strategy):
                    result.add_warning(
                        "GENERATOR_STRATEGY_MISMATCH",
                        f"Attribute '{entity.class_name}.{attr.name}' defines a "
                        f"{descriptor.replace('_', ' ')} but its strategy is "
                        f"'{attr.generated_value_strategy}'.",
                        ctx,
                    )

            if attr.is_auto_incremented and (
                attr.generated_value_strategy or attr.generated_value_generator
            ):
                result.add_info(
                    "AUTO_INCREMENT_OVERRIDES_STRATEGY",
                    f"Attribute '{entity.class_name}.{attr.name}' is "
                    f"auto-incremented; its explicit strategy is ignored.",
                    ctx,
                )
    return result


def validate_constraints(model: Model) -> ValidationResult:
    result: ValidationResult = ValidationResult()
    for entity in model.entities:
        for attr in entity.attributes:
            ctx: Dict[str, Any] = _ctx(entity.class_name, attr.name)
            where: str = f"{entity.class_name}.{attr.name}"
            nt: NeutralType = NeutralType(attr.neutral_type)

            if (
                attr.min_length is not None
                and attr.max_length is not None
                and attr.min_length > attr.max_length
            ):
                result.add_error(
                    "MIN_LENGTH_GT_MAX_LENGTH",
                    f"'{where}': min_length {attr.min_length} > max_length "
                    f"{attr.max_length}.",
                    ctx,
                )

            if (
                attr.min_value is not None
                and attr.max_value is not None
                and attr.min_value > attr.max_value
            ):
                result.add_error(
                    "MIN_VALUE_GT_MAX_VALUE",
                    f"'{where}': min_value {attr.min_value} > max_value "
                    f"{attr.max_value}.",
                    ctx,
                )

            if attr.date_past and attr.date_future:
                result.add_error(
                    "DATE_PAST_AND_FUTURE",
                    f"'{where}' cannot be both in the past and in the future.",
                    ctx,
                )

            temporal_set: bool = (
                attr.date_past
                or attr.date_future
                or bool(attr.date_before_value)
                or bool(attr.date_after_value)
            )
            if temporal_set and nt not in TEMPORAL_TYPES:
                result.add_warning(
                    "TEMPORAL_CONSTRAINT_ON_NON_TEMPORAL",
                    f"'{where}' has date constraints but its type is '{nt.value}'.",
                    ctx,
                )

            if (attr.boolean_true_value or attr.boolean_false_value) and nt != NeutralType.BOOLEAN:
                result.add_warning(
                    "BOOLEAN_LITERAL_ON_NON_BOOLEAN",
                    f"'{where}' defines boolean literals but its type is '{nt.value}'.",
                    ctx,
                )

            if attr.long_text and nt != NeutralType.STRING:
                result.add_warning(
                    "LONG_TEXT_ON_NON_STRING",
                    f"'{where}' is flagged long text but its type is '{nt.value}'.",
                    ctx,
                )
    return result


def validate_language_mapping(
    model: Model, converter: TypeConverter
) -> ValidationResult:
    """Every attribute type must be resolvable by the active converter."""
    result: ValidationResult = ValidationResult()
    for entity in model.entities:
        for attr in entity.attributes:
            try:
                converter.get_type(AttributeTypeInfo.from_attribute(attr))
            except ConfigurationError as exc:
                result.add_error(
                    "NO_LANGUAGE_MAPPING",
                    f"'{entity.class_name}.{attr.name}': {exc.message}",
                    _ctx(entity.class_name, attr.name),
                )
    return result


def validate_full(
    model: Model,
    environment: Optional[GenerationEnvironment] = None,
) -> ValidationResult:
    """Run every model check, plus the language mapping check when an environment is given."""
    logger.info("Starting full validation of %r", model)

    result: ValidationResult = ValidationResult()
    result.merge(validate_entity_names(model))
    result.merge(validate_attribute_names(model))
    result.merge(validate_key_elements(model))
    result.merge(validate_foreign_keys(model))
    result.merge(validate_generated_values(model))
    result.merge(validate_constraints(model))
    if environment is not None:
        result.merge(validate_language_mapping(model, environment.get_type_converter()))

    if result.error_count:
        logger.error("Validation FAILED. %s", result.summary())
    else:
        logger.info("Validation PASSED. %s", result.summary())
    return result


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ValidationIssue",
    "ValidationResult",
    "validate_entity_names",
    "validate_attribute_names",
    "validate_key_elements",
    "validate_foreign_keys",
    "validate_generated_values",
    "validate_constraints",
    "validate_language_mapping",
    "validate_full",
]

logger.debug("neutralgen.validators loaded — %d public symbols.", len(__all__))

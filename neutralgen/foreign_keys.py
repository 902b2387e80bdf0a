# File: neutralgen/foreign_keys.py
"""
NeutralGen - Foreign Key Resolution
====================================
Resolves the entity an attribute refers to, by class name, against the
read-only ``Model`` index, and classifies the attribute's participation in
foreign keys.

Entities never hold pointers to each other: every cross-entity reference is
a name looked up on demand, so mutually referencing entities build without
cycles.

Two failure kinds are kept apart:

- ``ReferenceResolutionError``: the attribute records no referenced entity
  (normal for non-FK attributes, callers may skip it).
- ``ModelIntegrityError``: a name is recorded but the model has no such
  entity (an upstream defect).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Set

from neutralgen.errors import ModelIntegrityError, ReferenceResolutionError
from neutralgen.models import Attribute, Entity, Model

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("neutralgen.foreign_keys")


class ForeignKeyKind(str, Enum):
    """How an attribute takes part in foreign keys."""

    NONE = "none"
    SIMPLE = "simple"
    COMPOSITE = "composite"
    SIMPLE_AND_COMPOSITE = "simple_and_composite"


def classify_foreign_key(attribute: Attribute) -> ForeignKeyKind:
    if attribute.is_fk_simple and attribute.is_fk_composite:
        return ForeignKeyKind.SIMPLE_AND_COMPOSITE
    if attribute.is_fk_simple:
        return ForeignKeyKind.SIMPLE
    if attribute.is_fk_composite:
        return ForeignKeyKind.COMPOSITE
    return ForeignKeyKind.NONE


def part_referenced_entity_names(attribute: Attribute) -> List[str]:
    """Distinct referenced entity names found in the FK parts, in order."""
    seen: Set[str] = set()
    names: List[str] = []
    for part in attribute.fk_parts:
        if part.referenced_entity_name not in seen:
            seen.add(part.referenced_entity_name)
            names.append(part.referenced_entity_name)
    return names


def recorded_referenced_entity_name(attribute: Attribute) -> str:
    """
    The referenced entity name as recorded on the attribute, or "".

    FK parts are never used as a substitute; they only feed
    ``check_reference_consistency``.
    """
    return (attribute.referenced_entity_class_name or "").strip()


def check_reference_consistency(attribute: Attribute) -> Optional[str]:
    """
    Compare the recorded referenced name with the FK parts.

    Returns a message describing the disagreement, or ``None`` when the two
    sources agree (or one of them is absent).  Nothing is reconciled.
    """
    recorded: str = (attribute.referenced_entity_class_name or "").strip()
    from_parts: List[str] = part_referenced_entity_names(attribute)
    if not recorded or not from_parts:
        return None
    if recorded in from_parts:
        return None
    return (
        f"Attribute '{attribute.name}' records referenced entity '{recorded}' "
        f"but its FK parts reference {from_parts}."
    )


def resolve_referenced_entity(
    attribute: Attribute,
    model: Model,
    entity_name: str = "",
) -> Entity:
    """
    Look up the entity referenced by *attribute* in *model*.

    Args:
        attribute:    The FK attribute.
        model:        The read-only entity index.
        entity_name:  Owning entity name, used in error messages only.

    Raises:
        ReferenceResolutionError: no referenced entity is recorded.
        ModelIntegrityError:      the recorded name is not in the model.
    """
    where: str = f"{entity_name}.{attribute.name}" if entity_name else attribute.name
    name: str = recorded_referenced_entity_name(attribute)
    if not name:
        raise ReferenceResolutionError(
            f"Attribute '{where}' does not reference an entity "
            f"(not a foreign key or no referenced entity recorded).",
            {"entity": entity_name, "attribute": attribute.name},
        )

    mismatch: Optional[str] = check_reference_consistency(attribute)
    if mismatch is not None:
        logger.warning("%s (owner: %s)", mismatch, entity_name or "?")

    entity: Optional[Entity] = model.get_entity_by_class_name(name)
    if entity is None:
        raise ModelIntegrityError(
            f"Attribute '{where}' references entity '{name}' "
            f"which does not exist in model '{model.name}'.",
            {"entity": entity_name, "attribute": attribute.name, "referenced": name},
        )
    logger.debug("Resolved '%s' → entity '%s'.", where, entity.class_name)
    return entity


def resolve_referenced_entity_name(
    attribute: Attribute,
    model: Model,
    entity_name: str = "",
) -> str:
    return resolve_referenced_entity(attribute, model, entity_name).class_name


__all__: List[str] = [
    "ForeignKeyKind",
    "classify_foreign_key",
    "part_referenced_entity_names",
    "recorded_referenced_entity_name",
    "check_reference_consistency",
    "resolve_referenced_entity",
    "resolve_referenced_entity_name",
]

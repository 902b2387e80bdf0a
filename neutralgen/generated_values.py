# File: neutralgen/generated_values.py
"""
NeutralGen - Generated Value Resolution
========================================
Decides how an attribute's value is generated.

Decision order (first match wins):

    1. database auto-increment  → generated, default strategy, no generator
    2. explicit generated flag  → generated, configured strategy / generator
    3. otherwise                → not generated, everything empty

Sequence and table generator descriptors are resolved separately, by
presence only.  An absent sequence generator reports ``allocation_size``
as ``-1`` so that "no generator" stays distinguishable from "generator
with allocation size 0".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from neutralgen.models import Attribute, GenerationStrategy

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("neutralgen.generated_values")

NO_SEQUENCE_ALLOCATION_SIZE: int = -1

SOURCE_AUTO_INCREMENT: str = "auto_increment"
SOURCE_EXPLICIT: str = "explicit"
SOURCE_NONE: str = "none"


# ---------------------------------------------------------------------------
# Generation decision
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GeneratedValue:
    """Outcome of the generation decision for one attribute."""

    is_generated: bool
    strategy: str
    generator: str
    source: str

    @property
    def effective_strategy(self) -> str:
        """The strategy actually in force; an unset strategy means AUTO."""
        if not self.is_generated:
            return GenerationStrategy.UNSET.value
        return self.strategy or GenerationStrategy.AUTO.value


def resolve_generated_value(attribute: Attribute) -> GeneratedValue:
    if attribute.is_auto_incremented:
        if attribute.generated_value_strategy or attribute.generated_value_generator:
            logger.debug(
                "Attribute '%s' is auto-incremented; ignoring strategy '%s' "
                "and generator '%s'.",
                attribute.name,
                attribute.generated_value_strategy,
                attribute.generated_value_generator or "",
            )
        return GeneratedValue(
            True, GenerationStrategy.UNSET.value, "", SOURCE_AUTO_INCREMENT
        )

    if attribute.is_generated_value:
        return GeneratedValue(
            True,
            attribute.generated_value_strategy or "",
            (attribute.generated_value_generator or "").strip(),
            SOURCE_EXPLICIT,
        )

    return GeneratedValue(False, "", "", SOURCE_NONE)


# ---------------------------------------------------------------------------
# Generator descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SequenceGeneratorInfo:
    present: bool
    name: str = ""
    sequence_name: str = ""
    allocation_size: int = NO_SEQUENCE_ALLOCATION_SIZE


@dataclass(frozen=True, slots=True)
class TableGeneratorInfo:
    present: bool
    name: str = ""
    table: str = ""
    pk_column_name: str = ""
    value_column_name: str = ""
    pk_column_value: str = ""


def resolve_sequence_generator(attribute: Attribute) -> SequenceGeneratorInfo:
    seq = attribute.sequence_generator
    if seq is None:
        return SequenceGeneratorInfo(present=False)
    return SequenceGeneratorInfo(
        present=True,
        name=seq.name or "",
        sequence_name=seq.sequence_name or "",
        allocation_size=seq.allocation_size if seq.allocation_size is not None else 0,
    )


def resolve_table_generator(attribute: Attribute) -> TableGeneratorInfo:
    tg = attribute.table_generator
    if tg is None:
        return TableGeneratorInfo(present=False)
    return TableGeneratorInfo(
        present=True,
        name=tg.name or "",
        table=tg.table or "",
        pk_column_name=tg.pk_column_name or "",
        value_column_name=tg.value_column_name or "",
        pk_column_value=tg.pk_column_value or "",
    )


__all__: List[str] = [
    "NO_SEQUENCE_ALLOCATION_SIZE",
    "GeneratedValue",
    "resolve_generated_value",
    "SequenceGeneratorInfo",
    "TableGeneratorInfo",
    "resolve_sequence_generator",
    "resolve_table_generator",
]

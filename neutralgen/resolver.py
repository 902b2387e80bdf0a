# File: neutralgen/resolver.py
"""
NeutralGen - Model Resolver
============================
Drives resolution over a whole model: wraps every attribute into an
``AttributeContext``, validates the model and produces a
``ResolutionReport``.

Pipeline of ``ModelResolver.resolve()``:

    1. validate     validate_full(model, environment)
    2. resolve      one snapshot per attribute (types, SQL type, FK target)
    3. report       counts, timings, collected findings

Domain errors (an FK attribute that records no referenced entity) are
collected per attribute and do not stop the run.  Configuration and model
integrity errors propagate to the caller.

Usage:
    resolver = ModelResolver(model, GenerationEnvironment(database="postgresql"))
    report = resolver.resolve()
    print(report.summary())
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from neutralgen.context import AttributeContext
from neutralgen.environment import GenerationEnvironment
from neutralgen.errors import ReferenceResolutionError, UsageError
from neutralgen.models import Entity, Model
from neutralgen.validators import ValidationResult, validate_full

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("neutralgen.resolver")


class Timer:
    """
    Context-manager timer for resolution steps.

    Usage:
        with Timer("validate") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.elapsed = time.perf_counter() - self.start_time
        logger.debug("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


@dataclass(frozen=False, slots=True)
class ResolutionReport:
    """Outcome of ``ModelResolver.resolve()``."""

    success: bool = False
    model_name: str = ""
    target_language: str = ""
    database: str = ""

    entity_count: int = 0
    attribute_count: int = 0
    key_attribute_count: int = 0
    fk_attribute_count: int = 0
    generated_attribute_count: int = 0

    validation_seconds: float = 0.0
    resolution_seconds: float = 0.0

    validation_errors: List[str] = field(default_factory=list)
    validation_warnings: List[str] = field(default_factory=list)
    domain_errors: List[str] = field(default_factory=list)
    snapshots: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def total_seconds(self) -> float:
        return self.validation_seconds + self.resolution_seconds

    def summary(self) -> str:
        lines: List[str] = []
        status: str = "SUCCESS" if self.success else "FAILED"
        lines.append("=" * 60)
        lines.append("  NeutralGen — Resolution Report")
        lines.append("=" * 60)
        lines.append(f"  Status:           {status}")
        lines.append(f"  Model:            {self.model_name}")
        lines.append(f"  Language:         {self.target_language}")
        lines.append(f"  Database:         {self.database or 'ansi'}")
        lines.append(f"  Entities:         {self.entity_count}")
        lines.append(f"  Attributes:       {self.attribute_count}")
        lines.append(f"    keys:           {self.key_attribute_count}")
        lines.append(f"    foreign keys:   {self.fk_attribute_count}")
        lines.append(f"    generated:      {self.generated_attribute_count}")
        lines.append(f"  Total time:       {self.total_seconds:.3f}s")

        for title, items, icon in (
            ("Validation Errors", self.validation_errors, "✗"),
            ("Validation Warnings", self.validation_warnings, "⚠"),
            ("Domain Errors", self.domain_errors, "⊘"),
        ):
            if items:
                lines.append("─" * 60)
                lines.append(f"  {title} ({len(items)}):")
                for item in items:
                    lines.append(f"    {icon} {item}")

        lines.append("=" * 60)
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class ModelResolver:
    """
    Builds and queries the attribute contexts of one model.

    Args:
        model:              The neutral model (read-only).
        environment:        Active environment (defaults to Java / ANSI).
        strict_validation:  Skip resolution when validation reports errors.
    """

    def __init__(
        self,
        model: Model,
        environment: Optional[GenerationEnvironment] = None,
        strict_validation: bool = True,
    ) -> None:
        self.model: Model = model
        self.environment: GenerationEnvironment = (
            environment if environment is not None else GenerationEnvironment()
        )
        self.strict_validation: bool = strict_validation
        self._contexts: Dict[str, List[AttributeContext]] = {}

    def contexts_for(self, entity_name: str) -> List[AttributeContext]:
        """
        Attribute contexts of *entity_name*, in declaration order.

        Built once per resolver and reused.

        Raises:
            UsageError: the model has no such entity.
        """
        if entity_name not in self._contexts:
            entity: Optional[Entity] = self.model.get_entity_by_class_name(entity_name)
            if entity is None:
                raise UsageError(
                    f"Unknown entity '{entity_name}' in model '{self.model.name}'.",
                    {"entity": entity_name},
                )
            self._contexts[entity_name] = [
                AttributeContext(entity, attr, self.model, self.environment)
                for attr in entity.attributes
            ]
        return list(self._contexts[entity_name])

    def all_contexts(self) -> List[AttributeContext]:
        contexts: List[AttributeContext] = []
        for entity in self.model.entities:
            contexts.extend(self.contexts_for(entity.class_name))
        return contexts

    def validate(self) -> ValidationResult:
        return validate_full(self.model, self.environment)

    def resolve(self) -> ResolutionReport:
        report: ResolutionReport = ResolutionReport(
            model_name=self.model.name,
            target_language=self.environment.target_language,
            database=self.environment.database or "",
            entity_count=self.model.entity_count,
        )

        with Timer("validate") as t:
            validation: ValidationResult = self.validate()
        report.validation_seconds = t.elapsed
        report.validation_errors = [i.message for i in validation.errors]
        report.validation_warnings = [i.message for i in validation.warnings]

        if not validation.is_valid and self.strict_validation:
            logger.error(
                "Resolution of '%s' skipped: %d validation error(s).",
                self.model.name,
                validation.error_count,
            )
            return report

        with Timer("resolve") as t:
            for ctx in self.all_contexts():
                report.snapshots.append(self._snapshot(ctx, report))
        report.resolution_seconds = t.elapsed

        report.attribute_count = len(report.snapshots)
        report.success = True
        logger.info(
            "Resolved %d attribute(s) of %d entit(ies) in %.3fs (%d domain error(s)).",
            report.attribute_count,
            report.entity_count,
            report.total_seconds,
            len(report.domain_errors),
        )
        return report

    def _snapshot(self, ctx: AttributeContext, report: ResolutionReport) -> Dict[str, Any]:
        snapshot: Dict[str, Any] = ctx.to_dict()
        if ctx.is_key_element:
            report.key_attribute_count += 1
        if ctx.is_generated_value:
            report.generated_attribute_count += 1

        snapshot["referenced_entity"] = ""
        if ctx.is_fk:
            report.fk_attribute_count += 1
            try:
                snapshot["referenced_entity"] = ctx.referenced_entity_name
            except ReferenceResolutionError as exc:
                logger.warning("%s", exc)
                report.domain_errors.append(str(exc))
        return snapshot

    def __repr__(self) -> str:
        return (
            f"<ModelResolver {self.model.name} "
            f"({self.environment.target_language}/{self.environment.database or 'ansi'})>"
        )


__all__: List[str] = ["Timer", "ResolutionReport", "ModelResolver"]

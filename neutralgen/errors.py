# File: neutralgen/errors.py
"""
NeutralGen - Error Taxonomy
============================
Every failure raised by the resolution core derives from ``GeneratorError``.

The subclasses map to the way a generation run reacts:

    ConfigurationError        fatal, the environment cannot resolve a type
    ReferenceResolutionError  recoverable, the attribute is not a foreign key
    ModelIntegrityError       fatal, the model index is inconsistent
    UsageError                fatal, a helper was called with bad arguments

Renderers may catch ``ReferenceResolutionError`` to skip an attribute; the
other kinds are meant to abort the run.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class GeneratorError(Exception):
    """Base class for every error raised by neutralgen."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.context: Dict[str, Any] = context or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(GeneratorError):
    """The active environment has no usable mapping (language, dialect, file)."""


class ReferenceResolutionError(GeneratorError):
    """Referenced-entity information requested on an attribute that has none."""


class ModelIntegrityError(GeneratorError):
    """A recorded cross-entity reference does not exist in the model index."""


class UsageError(GeneratorError, ValueError):
    """A helper function received arguments it cannot work with."""


__all__ = [
    "GeneratorError",
    "ConfigurationError",
    "ReferenceResolutionError",
    "ModelIntegrityError",
    "UsageError",
]

# File: neutralgen/environment.py
"""
NeutralGen - Generation Environment
====================================
The active configuration of a generation run: target language, target
database dialect, optional SQL type overrides and the vendor type-code
catalog.

It can be built in code or loaded from a YAML / JSON file:

    target_language: java
    database: postgresql
    database_types_mapping:
      string: "varchar(%s)"
      decimal: "numeric(%s)"

The same loader also reads a neutral model file into a ``Model``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from neutralgen.errors import ConfigurationError
from neutralgen.languages import TypeConverter, get_type_converter
from neutralgen.models import DatabaseDialect, Model, NeutralType, TargetLanguage
from neutralgen.sql_types import SqlTypeProvider
from neutralgen.type_codes import TypeCodeCatalog, default_type_code_catalog

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("neutralgen.environment")


class GenerationEnvironment(BaseModel):
    """Target language and database selection for one generation run."""

    model_config = ConfigDict(
        frozen=True,
        use_enum_values=True,
        validate_default=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    target_language: TargetLanguage = Field(
        default=TargetLanguage.JAVA, description="Target programming language."
    )
    database: Optional[DatabaseDialect] = Field(
        default=None, description="Target database dialect (None = ANSI defaults)."
    )
    database_types_mapping: Dict[NeutralType, str] = Field(
        default_factory=dict,
        description="SQL type overrides per neutral type, '%s' = size.",
    )
    type_codes: TypeCodeCatalog = Field(
        default_factory=default_type_code_catalog, exclude=True
    )
    type_converter: Optional[TypeConverter] = Field(default=None, exclude=True)

    @field_validator("target_language", "database", mode="before")
    @classmethod
    def _lower_case_names(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower() or None
        return v

    @field_validator("database_types_mapping")
    @classmethod
    def _non_blank_mappings(cls, v: Dict[Any, str]) -> Dict[Any, str]:
        for neutral_type, sql_type in v.items():
            if not sql_type or not sql_type.strip():
                raise ValueError(
                    f"Empty SQL type mapping for neutral type '{neutral_type}'."
                )
        return v

    def get_type_converter(self) -> TypeConverter:
        """Injected converter if any, else the one registered for the language."""
        if self.type_converter is not None:
            return self.type_converter
        return get_type_converter(self.target_language, self.type_codes)

    def get_sql_type_provider(self) -> SqlTypeProvider:
        return SqlTypeProvider(self.database, self.database_types_mapping)


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------


def load_mapping_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML or JSON file whose top level is a mapping.

    ``.json`` files are parsed as JSON, anything else as YAML (a superset).

    Raises:
        FileNotFoundError:  the file does not exist.
        ConfigurationError: the file cannot be parsed or is not a mapping.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    text: str = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data: Any = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot parse {path}: {exc}", {"path": str(path)}) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected a mapping at top level of {path}, got {type(data).__name__}.",
            {"path": str(path)},
        )
    return data


def load_environment(path: Union[str, Path]) -> GenerationEnvironment:
    """Load and validate a ``GenerationEnvironment`` from *path*."""
    raw: Dict[str, Any] = load_mapping_file(path)
    try:
        env: GenerationEnvironment = GenerationEnvironment.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid environment in {path}: {exc}", {"path": str(path)}
        ) from exc
    logger.info(
        "Loaded environment from %s (language=%s, database=%s).",
        path,
        env.target_language,
        env.database or "ansi",
    )
    return env


def load_model(path: Union[str, Path]) -> Model:
    """
    Load a neutral model from *path*.

    Structural errors surface as ``pydantic.ValidationError``; they describe
    a broken model, not a broken configuration.
    """
    raw: Dict[str, Any] = load_mapping_file(path)
    model: Model = Model.model_validate(raw)
    logger.info("Loaded %r from %s.", model, path)
    return model


__all__: List[str] = [
    "GenerationEnvironment",
    "load_mapping_file",
    "load_environment",
    "load_model",
]

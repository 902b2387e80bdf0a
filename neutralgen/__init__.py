# File: neutralgen/__init__.py
"""
NeutralGen — Type & Constraint Resolution for Model-Driven Code Generation
===========================================================================

Resolves, for every attribute of a storage-agnostic "neutral model", the
type to emit in a target language, the SQL type to emit for a target
database, its foreign-key targets and its value-generation metadata.

Architecture overview::

    ┌──────────────┐     ┌────────────────┐     ┌──────────────────┐
    │    Model     │────▶│  ModelResolver │────▶│ AttributeContext │
    │ (models.py)  │     │  (resolver.py) │     │   (context.py)   │
    └──────────────┘     └───────┬────────┘     └────────┬─────────┘
                                 │                       │
                                 ▼          ┌────────────┼─────────────┬──────────────┐
                          ┌────────────┐    ▼            ▼             ▼              ▼
                          │ validators │ languages   sql_types   foreign_keys  generated_values
                          └────────────┘    └─────┬──────┘
                                                  ▼
                                      environment + type_codes

Usage::

    from neutralgen import GenerationEnvironment, ModelResolver, load_model

    model = load_model("model.yaml")
    env = GenerationEnvironment(target_language="java", database="postgresql")
    for ctx in ModelResolver(model, env).contexts_for("Book"):
        print(ctx.type, ctx.name, ctx.sql_type)
"""

from __future__ import annotations

__version__: str = "1.0.0"
__license__: str = "MIT"

from neutralgen.context import AttributeContext
from neutralgen.environment import (
    GenerationEnvironment,
    load_environment,
    load_model,
)
from neutralgen.errors import (
    ConfigurationError,
    GeneratorError,
    ModelIntegrityError,
    ReferenceResolutionError,
    UsageError,
)
from neutralgen.functions import TemplateFunctions
from neutralgen.languages import LanguageType, TypeConverter, get_type_converter
from neutralgen.log import setup_logging
from neutralgen.models import (
    Attribute,
    BooleanValue,
    DatabaseDialect,
    DateType,
    Entity,
    ForeignKeyPart,
    GenerationStrategy,
    Model,
    NeutralType,
    SequenceGenerator,
    TableGenerator,
    TargetLanguage,
)
from neutralgen.resolver import ModelResolver, ResolutionReport
from neutralgen.sql_types import SqlTypeProvider
from neutralgen.type_codes import TypeCodeCatalog, TypeCodeInfo
from neutralgen.validators import ValidationResult, validate_full

__all__: list[str] = [
    "__version__",
    "__license__",
    # Resolution
    "AttributeContext",
    "ModelResolver",
    "ResolutionReport",
    # Environment
    "GenerationEnvironment",
    "load_environment",
    "load_model",
    "LanguageType",
    "TypeConverter",
    "get_type_converter",
    "SqlTypeProvider",
    "TypeCodeCatalog",
    "TypeCodeInfo",
    # Models
    "Attribute",
    "BooleanValue",
    "DatabaseDialect",
    "DateType",
    "Entity",
    "ForeignKeyPart",
    "GenerationStrategy",
    "Model",
    "NeutralType",
    "SequenceGenerator",
    "TableGenerator",
    "TargetLanguage",
    # Errors
    "GeneratorError",
    "ConfigurationError",
    "ReferenceResolutionError",
    "ModelIntegrityError",
    "UsageError",
    # Helpers
    "TemplateFunctions",
    "validate_full",
    "ValidationResult",
    "setup_logging",
]

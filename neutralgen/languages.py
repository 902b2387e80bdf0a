# File: neutralgen/languages.py
"""
NeutralGen - Language Type Resolution
======================================
Maps a neutral type plus the attribute's type hints onto the concrete type
spelling of a target programming language.

Each target language is a ``TypeConverter`` subclass holding three small
tables (primitive, unsigned primitive, object).  Every resolution computes
all spellings at once:

    simple_type   short name             ``int``, ``BigDecimal``
    full_type     fully qualified name   ``int``, ``java.math.BigDecimal``
    wrapper_type  boxed counterpart      ``Integer`` (== simple when not primitive)

and leaves the choice of which one to render to the caller.

A neutral type with no entry in the active converter is a configuration
error: it is never silently defaulted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple, Type

from neutralgen.errors import ConfigurationError
from neutralgen.models import Attribute, NeutralType, TargetLanguage
from neutralgen.type_codes import TypeCodeCatalog, default_type_code_catalog

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("neutralgen.languages")

# (simple spelling, full spelling)
_TypePair = Tuple[str, str]


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LanguageType:
    """Resolved language type.  Produced fresh per call, never mutated."""

    neutral_type: str
    simple_type: str
    full_type: str
    wrapper_type: str
    is_primitive: bool

    def __str__(self) -> str:
        return self.simple_type


@dataclass(frozen=True, slots=True)
class AttributeTypeInfo:
    """The subset of an attribute that drives language type selection."""

    neutral_type: NeutralType
    primitive_type_expected: bool = False
    object_type_expected: bool = False
    unsigned_type_expected: bool = False
    long_text: bool = False

    @classmethod
    def from_attribute(cls, attribute: Attribute) -> "AttributeTypeInfo":
        return cls(
            neutral_type=NeutralType(attribute.neutral_type),
            primitive_type_expected=attribute.primitive_type,
            object_type_expected=attribute.object_type,
            unsigned_type_expected=attribute.unsigned_type,
            long_text=attribute.long_text,
        )


# ---------------------------------------------------------------------------
# Converter base
# ---------------------------------------------------------------------------


class TypeConverter:
    """
    Base class for language type converters.

    Subclasses normally only fill the class-level tables; languages whose
    boxed types are derived from the primitive (e.g. C# nullables) override
    ``_boxed_entry``.
    """

    language: str = ""

    PRIMITIVE_TYPES: Dict[NeutralType, _TypePair] = {}
    UNSIGNED_PRIMITIVE_TYPES: Dict[NeutralType, _TypePair] = {}
    OBJECT_TYPES: Dict[NeutralType, _TypePair] = {}

    def __init__(self, type_codes: Optional[TypeCodeCatalog] = None) -> None:
        self.type_codes: TypeCodeCatalog = (
            type_codes if type_codes is not None else default_type_code_catalog()
        )

    # -- Table access -------------------------------------------------------

    def _primitive_entry(
        self, neutral_type: NeutralType, info: AttributeTypeInfo
    ) -> Optional[_TypePair]:
        if info.unsigned_type_expected and neutral_type in self.UNSIGNED_PRIMITIVE_TYPES:
            return self.UNSIGNED_PRIMITIVE_TYPES[neutral_type]
        return self.PRIMITIVE_TYPES.get(neutral_type)

    def _boxed_entry(
        self, neutral_type: NeutralType, primitive: Optional[_TypePair]
    ) -> Optional[_TypePair]:
        return self.OBJECT_TYPES.get(neutral_type)

    def _lookup(self, info: AttributeTypeInfo) -> Optional[LanguageType]:
        neutral_type: NeutralType = NeutralType(info.neutral_type)
        primitive: Optional[_TypePair] = self._primitive_entry(neutral_type, info)
        boxed: Optional[_TypePair] = self._boxed_entry(neutral_type, primitive)

        if primitive is not None and (not info.object_type_expected or boxed is None):
            wrapper: str = boxed[0] if boxed is not None else primitive[0]
            return LanguageType(
                neutral_type.value, primitive[0], primitive[1], wrapper, True
            )
        if boxed is not None:
            return LanguageType(neutral_type.value, boxed[0], boxed[1], boxed[0], False)
        return None

    # -- Public API ---------------------------------------------------------

    def get_type(self, info: AttributeTypeInfo) -> LanguageType:
        """
        Resolve *info* into a ``LanguageType``.

        Raises:
            ConfigurationError: the converter has no mapping for the neutral type.
        """
        language_type: Optional[LanguageType] = self._lookup(info)
        if language_type is None:
            raise ConfigurationError(
                f"No {self.language or type(self).__name__} type is mapped "
                f"for neutral type '{NeutralType(info.neutral_type).value}'.",
                {"language": self.language, "neutral_type": info.neutral_type},
            )
        return language_type

    def supported_neutral_types(self) -> FrozenSet[NeutralType]:
        return frozenset(self.PRIMITIVE_TYPES) | frozenset(self.OBJECT_TYPES)

    def recommended_type_for_code(
        self, type_code: Optional[int], not_null: bool
    ) -> Optional[LanguageType]:
        """
        Language type recommended for a bare database type code.

        Independent of the attribute's neutral type: the code's own neutral
        type is used, primitive only when the column is NOT NULL.
        """
        neutral_type: Optional[NeutralType] = self.type_codes.neutral_type_for(type_code)
        if neutral_type is None:
            return None
        return self._lookup(
            AttributeTypeInfo(
                neutral_type=neutral_type,
                object_type_expected=not not_null,
            )
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.language}>"


# ---------------------------------------------------------------------------
# Built-in converters
# ---------------------------------------------------------------------------


class JavaTypeConverter(TypeConverter):
    """Java: primitives by default, wrapper classes when an object type is asked."""

    language = TargetLanguage.JAVA.value

    PRIMITIVE_TYPES = {
        NeutralType.BOOLEAN: ("boolean", "boolean"),
        NeutralType.BYTE: ("byte", "byte"),
        NeutralType.SHORT: ("short", "short"),
        NeutralType.INTEGER: ("int", "int"),
        NeutralType.LONG: ("long", "long"),
        NeutralType.FLOAT: ("float", "float"),
        NeutralType.DOUBLE: ("double", "double"),
    }
    OBJECT_TYPES = {
        NeutralType.STRING: ("String", "java.lang.String"),
        NeutralType.BOOLEAN: ("Boolean", "java.lang.Boolean"),
        NeutralType.BYTE: ("Byte", "java.lang.Byte"),
        NeutralType.SHORT: ("Short", "java.lang.Short"),
        NeutralType.INTEGER: ("Integer", "java.lang.Integer"),
        NeutralType.LONG: ("Long", "java.lang.Long"),
        NeutralType.FLOAT: ("Float", "java.lang.Float"),
        NeutralType.DOUBLE: ("Double", "java.lang.Double"),
        NeutralType.DECIMAL: ("BigDecimal", "java.math.BigDecimal"),
        NeutralType.DATE: ("LocalDate", "java.time.LocalDate"),
        NeutralType.TIME: ("LocalTime", "java.time.LocalTime"),
        NeutralType.TIMESTAMP: ("LocalDateTime", "java.time.LocalDateTime"),
        NeutralType.BINARY: ("byte[]", "byte[]"),
    }


class CSharpTypeConverter(TypeConverter):
    """C#: value-type keywords, ``T?`` nullables as the boxed form."""

    language = TargetLanguage.CSHARP.value

    PRIMITIVE_TYPES = {
        NeutralType.BOOLEAN: ("bool", "System.Boolean"),
        NeutralType.BYTE: ("sbyte", "System.SByte"),
        NeutralType.SHORT: ("short", "System.Int16"),
        NeutralType.INTEGER: ("int", "System.Int32"),
        NeutralType.LONG: ("long", "System.Int64"),
        NeutralType.FLOAT: ("float", "System.Single"),
        NeutralType.DOUBLE: ("double", "System.Double"),
        NeutralType.DECIMAL: ("decimal", "System.Decimal"),
    }
    UNSIGNED_PRIMITIVE_TYPES = {
        NeutralType.BYTE: ("byte", "System.Byte"),
        NeutralType.SHORT: ("ushort", "System.UInt16"),
        NeutralType.INTEGER: ("uint", "System.UInt32"),
        NeutralType.LONG: ("ulong", "System.UInt64"),
    }
    OBJECT_TYPES = {
        NeutralType.STRING: ("string", "System.String"),
        NeutralType.DATE: ("DateOnly", "System.DateOnly"),
        NeutralType.TIME: ("TimeOnly", "System.TimeOnly"),
        NeutralType.TIMESTAMP: ("DateTime", "System.DateTime"),
        NeutralType.BINARY: ("byte[]", "System.Byte[]"),
    }

    def _boxed_entry(
        self, neutral_type: NeutralType, primitive: Optional[_TypePair]
    ) -> Optional[_TypePair]:
        if primitive is not None:
            return f"{primitive[0]}?", f"System.Nullable<{primitive[1]}>"
        return self.OBJECT_TYPES.get(neutral_type)


class PythonTypeConverter(TypeConverter):
    """Python: no primitives, qualified names for the stdlib value types."""

    language = TargetLanguage.PYTHON.value

    OBJECT_TYPES = {
        NeutralType.STRING: ("str", "str"),
        NeutralType.BOOLEAN: ("bool", "bool"),
        NeutralType.BYTE: ("int", "int"),
        NeutralType.SHORT: ("int", "int"),
        NeutralType.INTEGER: ("int", "int"),
        NeutralType.LONG: ("int", "int"),
        NeutralType.FLOAT: ("float", "float"),
        NeutralType.DOUBLE: ("float", "float"),
        NeutralType.DECIMAL: ("Decimal", "decimal.Decimal"),
        NeutralType.DATE: ("date", "datetime.date"),
        NeutralType.TIME: ("time", "datetime.time"),
        NeutralType.TIMESTAMP: ("datetime", "datetime.datetime"),
        NeutralType.BINARY: ("bytes", "bytes"),
    }


class TypeScriptTypeConverter(TypeConverter):
    """TypeScript: structural types only, ``number`` for every numeric kind."""

    language = TargetLanguage.TYPESCRIPT.value

    OBJECT_TYPES = {
        NeutralType.STRING: ("string", "string"),
        NeutralType.BOOLEAN: ("boolean", "boolean"),
        NeutralType.BYTE: ("number", "number"),
        NeutralType.SHORT: ("number", "number"),
        NeutralType.INTEGER: ("number", "number"),
        NeutralType.LONG: ("number", "number"),
        NeutralType.FLOAT: ("number", "number"),
        NeutralType.DOUBLE: ("number", "number"),
        NeutralType.DECIMAL: ("number", "number"),
        NeutralType.DATE: ("Date", "Date"),
        NeutralType.TIME: ("Date", "Date"),
        NeutralType.TIMESTAMP: ("Date", "Date"),
        NeutralType.BINARY: ("Uint8Array", "Uint8Array"),
    }


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_CONVERTERS: Dict[str, Type[TypeConverter]] = {
    TargetLanguage.JAVA.value: JavaTypeConverter,
    TargetLanguage.CSHARP.value: CSharpTypeConverter,
    TargetLanguage.PYTHON.value: PythonTypeConverter,
    TargetLanguage.TYPESCRIPT.value: TypeScriptTypeConverter,
}


def get_type_converter(
    language: str,
    type_codes: Optional[TypeCodeCatalog] = None,
) -> TypeConverter:
    """
    Build the converter registered for *language*.

    Raises:
        ConfigurationError: no converter is registered for that language.
    """
    key: str = language.value if isinstance(language, TargetLanguage) else str(language)
    converter_cls: Optional[Type[TypeConverter]] = _CONVERTERS.get(key)
    if converter_cls is None:
        raise ConfigurationError(
            f"No type converter for target language '{language}'. "
            f"Available: {sorted(_CONVERTERS)}",
            {"language": language},
        )
    logger.debug("Using %s for language '%s'.", converter_cls.__name__, key)
    return converter_cls(type_codes)


def available_languages() -> List[str]:
    return sorted(_CONVERTERS)


__all__: List[str] = [
    "LanguageType",
    "AttributeTypeInfo",
    "TypeConverter",
    "JavaTypeConverter",
    "CSharpTypeConverter",
    "PythonTypeConverter",
    "TypeScriptTypeConverter",
    "get_type_converter",
    "available_languages",
]

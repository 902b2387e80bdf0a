"""
tests/test_environment.py
Unit tests for neutralgen.environment (configuration and file loading).
"""

from __future__ import annotations

import json
import pathlib

import pydantic
import pytest

from conftest import MODEL_EXAMPLE_PATH
from neutralgen.environment import (
    GenerationEnvironment,
    load_environment,
    load_mapping_file,
    load_model,
)
from neutralgen.errors import ConfigurationError
from neutralgen.languages import CSharpTypeConverter, JavaTypeConverter


# ===========================================================================
# GenerationEnvironment
# ===========================================================================


class TestGenerationEnvironment:
    def test_defaults(self) -> None:
        env = GenerationEnvironment()
        assert env.target_language == "java"
        assert env.database is None
        assert env.database_types_mapping == {}
        assert isinstance(env.get_type_converter(), JavaTypeConverter)

    def test_default_enum_is_plain_value(self) -> None:
        env = GenerationEnvironment()
        assert type(env.target_language) is str
        assert f"{env.target_language}" == "java"

    def test_names_case_insensitive(self) -> None:
        env = GenerationEnvironment(target_language=" CSharp ", database="PostgreSQL")
        assert env.target_language == "csharp"
        assert env.database == "postgresql"
        assert isinstance(env.get_type_converter(), CSharpTypeConverter)

    def test_blank_database_means_ansi(self) -> None:
        assert GenerationEnvironment(database="  ").database is None

    def test_unknown_language_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            GenerationEnvironment(target_language="cobol")

    def test_unknown_dialect_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            GenerationEnvironment(database="dbase")

    def test_blank_mapping_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError, match="Empty SQL type mapping"):
            GenerationEnvironment(database_types_mapping={"string": "  "})

    def test_mapping_key_must_be_neutral_type(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            GenerationEnvironment(database_types_mapping={"text": "TEXT"})

    def test_injected_converter(self) -> None:
        converter = CSharpTypeConverter()
        env = GenerationEnvironment(target_language="java", type_converter=converter)
        assert env.get_type_converter() is converter

    def test_frozen(self) -> None:
        env = GenerationEnvironment()
        with pytest.raises(pydantic.ValidationError):
            env.database = "mysql"

    def test_sql_type_provider(self) -> None:
        env = GenerationEnvironment(database="mysql", database_types_mapping={"string": "TEXT"})
        provider = env.get_sql_type_provider()
        assert provider.template_for("string") == ("TEXT", "mapping")
        assert provider.template_for("boolean") == ("TINYINT(1)", "dialect")


# ===========================================================================
# File loading
# ===========================================================================


class TestLoadEnvironment:
    """YAML / JSON environment files."""

    def test_yaml(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "env.yaml"
        path.write_text(
            "target_language: python\n"
            "database: sqlite\n"
            "database_types_mapping:\n"
            "  decimal: 'NUMERIC(%s)'\n",
            encoding="utf-8",
        )
        env = load_environment(path)
        assert env.target_language == "python"
        assert env.database == "sqlite"
        assert env.database_types_mapping == {"decimal": "NUMERIC(%s)"}

    def test_json(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "env.json"
        path.write_text(json.dumps({"target_language": "typescript"}), encoding="utf-8")
        assert load_environment(str(path)).target_language == "typescript"

    def test_empty_file_gives_defaults(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "env.yml"
        path.write_text("", encoding="utf-8")
        assert load_environment(path) == GenerationEnvironment()

    def test_missing_file(self, tmp_path: pathlib.Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_environment(tmp_path / "nope.yaml")

    def test_unparsable_yaml(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "env.yaml"
        path.write_text("target_language: [java\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Cannot parse"):
            load_environment(path)

    def test_unparsable_json(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "env.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Cannot parse"):
            load_environment(path)

    def test_not_a_mapping(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "env.yaml"
        path.write_text("- java\n- csharp\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Expected a mapping"):
            load_mapping_file(path)

    def test_invalid_values(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "env.yaml"
        path.write_text("target_language: cobol\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid environment") as exc_info:
            load_environment(path)
        assert exc_info.value.context["path"] == str(path)

    def test_unknown_key(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "env.yaml"
        path.write_text("target_language: java\nverbose: true\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_environment(path)


class TestLoadModel:
    def test_reference_model(self) -> None:
        model = load_model(MODEL_EXAMPLE_PATH)
        assert model.name == "bookstore"
        assert model.entity_count == 5
        assert model.has_entity("City")

    def test_broken_model(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "model.yaml"
        path.write_text(
            "entities:\n"
            "  - class_name: A\n"
            "  - class_name: A\n",
            encoding="utf-8",
        )
        with pytest.raises(pydantic.ValidationError, match="Duplicate entity"):
            load_model(path)

"""
tests/test_context.py
Unit tests for neutralgen.context.AttributeContext (the renderer-facing API).
"""

from __future__ import annotations

import pytest

from conftest import context_of, make_attribute, make_context
from neutralgen.context import AttributeContext
from neutralgen.environment import GenerationEnvironment
from neutralgen.errors import ConfigurationError, ModelIntegrityError, ReferenceResolutionError
from neutralgen.languages import TypeConverter
from neutralgen.models import BooleanValue, Entity, Model


class _EmptyConverter(TypeConverter):
    language = "nothing"


# ===========================================================================
# Language types
# ===========================================================================


class TestLanguageTypes:
    """Type spellings resolved through the environment's converter."""

    def test_int_attribute_java(self) -> None:
        ctx = make_context(make_attribute("age", "int"))
        assert ctx.type == "int"
        assert ctx.simple_type == "int"
        assert ctx.full_type == "int"
        assert ctx.wrapper_type == "Integer"
        assert ctx.is_primitive_type
        assert ctx.getter == "getAge"
        assert ctx.setter == "setAge"

    def test_object_type_forces_wrapper(self) -> None:
        ctx = make_context(make_attribute("age", "int", object_type=True))
        assert ctx.type == "Integer"
        assert ctx.full_type == "java.lang.Integer"
        assert not ctx.is_primitive_type

    def test_use_full_type_one_way(self) -> None:
        ctx = make_context(make_attribute("price", "decimal"))
        assert ctx.type == "BigDecimal"
        assert not ctx.uses_full_type
        ctx.use_full_type()
        ctx.use_full_type()
        assert ctx.uses_full_type
        assert ctx.type == "java.math.BigDecimal"
        assert ctx.simple_type == "BigDecimal"

    def test_formatted(self) -> None:
        ctx = make_context(make_attribute("age", "int"))
        assert ctx.formatted_name(6) == "age   "
        assert ctx.formatted_type(5) == "int  "
        assert ctx.formatted_wrapper_type(3) == "Integer"

    def test_other_language(self) -> None:
        env = GenerationEnvironment(target_language="python")
        ctx = make_context(make_attribute("at", "timestamp"), env)
        assert ctx.type == "datetime"
        assert ctx.full_type == "datetime.datetime"
        assert not ctx.is_primitive_type

    def test_unmapped_type_is_configuration_error(self) -> None:
        env = GenerationEnvironment(type_converter=_EmptyConverter())
        ctx = make_context(make_attribute("age", "int"), env, entity_name="Person")
        with pytest.raises(ConfigurationError, match="Person.age") as exc_info:
            _ = ctx.type
        assert exc_info.value.context["attribute"] == "age"

    def test_neutral_type_predicates(self) -> None:
        ctx = make_context(make_attribute("at", "timestamp"))
        assert ctx.is_timestamp_type
        assert ctx.is_temporal_type
        assert not ctx.is_number_type
        assert not ctx.is_string_type
        num = make_context(make_attribute("n", "double"))
        assert num.is_double_type and num.is_number_type


# ===========================================================================
# Plain values
# ===========================================================================


class TestNormalisedValues:
    """Unspecified text values come back as empty strings, never None."""

    def test_unspecified_values_are_empty(self) -> None:
        ctx = make_context(make_attribute("age", "int"))
        assert ctx.initial_value == ""
        assert not ctx.has_initial_value
        assert ctx.label == ""
        assert not ctx.has_label
        assert ctx.min_value == ""
        assert ctx.database_type == ""
        assert ctx.database_type_with_size == ""
        assert ctx.database_type_code == 0
        assert ctx.database_type_name == ""

    def test_varchar_with_size(self) -> None:
        ctx = make_context(
            make_attribute("code", "string", database_type="VARCHAR", database_size="24")
        )
        assert ctx.database_type_with_size == "VARCHAR(24)"

    def test_decimal_bounds_rendered_plain(self, model: Model) -> None:
        ctx = context_of(model, "Book", "price")
        assert ctx.min_value == "0"
        assert ctx.max_value == "9999.99"
        assert ctx.initial_value == "0"
        assert ctx.has_initial_value

    def test_boolean_literals_trimmed(self, model: Model) -> None:
        ctx = context_of(model, "Publisher", "active")
        assert ctx.boolean_true_value == "Y"
        assert ctx.boolean_false_value == "N"
        assert ctx.getter == "isActive"
        assert ctx.getter_with_get_prefix == "getActive"

    def test_boolean_wrapper_uses_get(self) -> None:
        ctx = make_context(make_attribute("active", "boolean", object_type=True))
        assert ctx.getter == "getActive"

    def test_date_type_code(self, model: Model) -> None:
        ctx = context_of(model, "Author", "birthDate")
        assert ctx.date_type == 1
        assert ctx.has_date_past_validation
        assert not ctx.has_date_future_validation
        assert make_context(make_attribute("at", "timestamp")).date_type == 0

    def test_date_bounds(self) -> None:
        ctx = make_context(make_attribute("d", "date", date_before_value="2030-01-01"))
        assert ctx.has_date_before_validation
        assert ctx.date_before_value == "2030-01-01"
        assert not ctx.has_date_after_validation


# ===========================================================================
# Database mapping
# ===========================================================================


class TestDatabaseMapping:
    def test_auto_increment_hides_default_value(self, model: Model) -> None:
        ctx = context_of(model, "Publisher", "code")
        assert ctx.is_auto_incremented
        assert ctx.database_default_value == "0"
        assert not ctx.has_database_default_value

    def test_default_value_visible_otherwise(self) -> None:
        ctx = make_context(make_attribute("qty", "int", database_default_value="1"))
        assert ctx.has_database_default_value

    def test_type_name_from_catalog(self, model: Model) -> None:
        assert context_of(model, "Publisher", "name").database_type_name == "VARCHAR"
        assert context_of(model, "Book", "publishedAt").database_type_name == "TIMESTAMP"

    def test_recorded_type_name_wins(self) -> None:
        ctx = make_context(
            make_attribute("x", "string", database_type_code=12, database_type_name="TEXT")
        )
        assert ctx.database_type_name == "TEXT"

    def test_recommended_type(self, model: Model) -> None:
        assert context_of(model, "Publisher", "code").recommended_type == "int"
        assert context_of(model, "Publisher", "name").recommended_type == "java.lang.String"
        assert (
            context_of(model, "Book", "publishedAt").recommended_type
            == "java.time.LocalDateTime"
        )
        assert context_of(model, "Author", "id").recommended_type == ""

    def test_sql_type(self, model: Model, postgres_env: GenerationEnvironment) -> None:
        assert context_of(model, "Publisher", "code", postgres_env).sql_type == "serial"
        assert context_of(model, "Book", "title", postgres_env).sql_type == "varchar(120)"
        assert context_of(model, "Book", "summary", postgres_env).sql_type == "text"

    def test_explicit_sql_type(self) -> None:
        ctx = make_context(make_attribute("x", "string", sql_type="CHAR(3)"))
        assert ctx.explicit_sql_type == "CHAR(3)"
        assert ctx.sql_type == "CHAR(3)"


# ===========================================================================
# Generated values
# ===========================================================================


class TestGeneratedValues:
    def test_sequence(self, model: Model) -> None:
        ctx = context_of(model, "Author", "id")
        assert ctx.is_generated_value
        assert ctx.generated_value_strategy == "sequence"
        assert ctx.generated_value_generator == "AuthorSeq"
        assert ctx.has_sequence_generator
        assert ctx.sequence_generator_name == "AuthorSeq"
        assert ctx.sequence_generator_sequence_name == "AUTHOR_SEQ"
        assert ctx.sequence_generator_allocation_size == 10
        assert not ctx.has_table_generator

    def test_table(self, model: Model) -> None:
        ctx = context_of(model, "Book", "id")
        assert ctx.generated_value_strategy == "table"
        assert ctx.has_table_generator
        assert ctx.table_generator_name == "BookGen"
        assert ctx.table_generator_table == "ID_GENERATOR"
        assert ctx.table_generator_pk_column_name == "GEN_KEY"
        assert ctx.table_generator_value_column_name == "GEN_VALUE"
        assert ctx.table_generator_pk_column_value == "BOOK_ID"
        assert ctx.sequence_generator_allocation_size == -1

    def test_auto_increment(self, model: Model) -> None:
        ctx = context_of(model, "City", "id")
        assert ctx.is_generated_value
        assert ctx.generated_value_strategy == ""
        assert ctx.effective_generation_strategy == "auto"

    def test_not_generated(self) -> None:
        ctx = make_context(make_attribute("age", "int"))
        assert not ctx.is_generated_value
        assert ctx.effective_generation_strategy == ""


# ===========================================================================
# Tri-state flags
# ===========================================================================


class TestTriState:
    """Undefined persistence flags never compare equal to true or false."""

    def test_undefined(self) -> None:
        ctx = make_context(make_attribute("age", "int"))
        assert ctx.insertable == "undefined"
        assert ctx.insertable_flag is BooleanValue.UNDEFINED
        assert not ctx.insertable_is(True)
        assert not ctx.insertable_is(False)
        assert not ctx.updatable_is(True)
        assert not ctx.updatable_is(False)

    def test_defined(self, model: Model) -> None:
        ctx = context_of(model, "Publisher", "active")
        assert ctx.insertable == "true"
        assert ctx.insertable_is(True)
        assert not ctx.insertable_is(False)
        assert ctx.updatable == "false"
        assert ctx.updatable_is(False)


# ===========================================================================
# Foreign keys
# ===========================================================================


class TestForeignKeys:
    def test_simple(self, model: Model) -> None:
        ctx = context_of(model, "Book", "publisherCode")
        assert ctx.is_fk and ctx.is_fk_simple and not ctx.is_fk_composite
        assert ctx.fk_kind == "simple"
        assert ctx.referenced_entity_name == "Publisher"
        assert ctx.referenced_entity is model.get_entity_by_class_name("Publisher")
        assert [p.fk_name for p in ctx.fk_parts] == ["FK_BOOK_PUBLISHER"]
        assert ctx.is_used_in_links and ctx.is_used_in_selected_links

    def test_composite(self, model: Model) -> None:
        ctx = context_of(model, "City", "regionCode")
        assert ctx.fk_kind == "composite"
        assert ctx.referenced_entity_name == "Region"

    def test_fk_parts_copy(self, model: Model) -> None:
        ctx = context_of(model, "Book", "authorId")
        ctx.fk_parts.clear()
        assert len(ctx.fk_parts) == 1

    def test_not_a_reference(self) -> None:
        ctx = make_context(make_attribute("age", "int"))
        assert ctx.fk_kind == "none"
        with pytest.raises(ReferenceResolutionError):
            _ = ctx.referenced_entity

    def test_dangling_reference(self) -> None:
        attr = make_attribute(
            "ownerId", "int",
            is_fk=True, is_fk_simple=True, referenced_entity_class_name="Owner",
        )
        with pytest.raises(ModelIntegrityError, match="Owner"):
            _ = make_context(attr).referenced_entity_name

    def test_reference_to_other_entity(self) -> None:
        attr = make_attribute(
            "ownerId", "int",
            is_fk=True, is_fk_simple=True, referenced_entity_class_name="Owner",
        )
        owner = Entity(class_name="Owner", attributes=[make_attribute("id", "int")])
        assert make_context(attr, others=[owner]).referenced_entity is owner


# ===========================================================================
# Tags, str, to_dict
# ===========================================================================


class TestMisc:
    def test_tags(self, model: Model) -> None:
        ctx = context_of(model, "Book", "isbn")
        assert ctx.has_tag("unique")
        assert ctx.has_tag("searchable")
        assert ctx.tag_value("unique") == "true"
        assert ctx.tag_value("searchable") == ""
        assert ctx.tag_value("missing", "n/a") == "n/a"
        ctx.tags["unique"] = "false"
        assert ctx.tag_value("unique") == "true"

    def test_str(self) -> None:
        assert str(make_context(make_attribute("age", "int"))) == "int age"
        ctx = make_context(make_attribute("age", "int", initial_value="18"))
        assert str(ctx) == "int age = 18"

    def test_repr(self) -> None:
        assert repr(make_context(make_attribute("age", "int"))) == (
            "<AttributeContext Person.age (int)>"
        )

    def test_to_dict(self, model: Model) -> None:
        data = context_of(model, "Book", "publisherCode").to_dict()
        assert data["entity"] == "Book"
        assert data["simple_type"] == "Integer"
        assert data["fk_kind"] == "simple"
        assert data["getter"] == "getPublisherCode"
        assert "referenced_entity" not in data

    def test_default_environment(self) -> None:
        attr = make_attribute("age", "int")
        entity = Entity(class_name="Person", attributes=[attr])
        ctx = AttributeContext(entity, attr, Model(entities=[entity]))
        assert ctx.type == "int"
        assert ctx.entity is entity
        assert ctx.is_selected

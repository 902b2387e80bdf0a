"""
tests/test_foreign_keys.py
Unit tests for neutralgen.foreign_keys (referenced entity resolution).
"""

from __future__ import annotations

import copy
import itertools
from typing import Any, Dict

import pytest

from neutralgen.errors import ModelIntegrityError, ReferenceResolutionError
from neutralgen.foreign_keys import (
    ForeignKeyKind,
    check_reference_consistency,
    classify_foreign_key,
    recorded_referenced_entity_name,
    resolve_referenced_entity,
    resolve_referenced_entity_name,
)
from neutralgen.models import Attribute, Entity, ForeignKeyPart, Model


def _part(entity: str, attribute: str = "id", fk_name: str = "FK_1") -> ForeignKeyPart:
    return ForeignKeyPart(
        fk_name=fk_name, referenced_entity_name=entity, referenced_attribute_name=attribute
    )


def _fk(name: str = "bId", referenced: str = "B", **kwargs: Any) -> Attribute:
    return Attribute(
        name=name, neutral_type="int",
        is_fk=True, is_fk_simple=True,
        referenced_entity_class_name=referenced,
        **kwargs,
    )


# ===========================================================================
# Classification
# ===========================================================================


class TestClassification:
    """FK kind classification."""

    @pytest.mark.parametrize(
        "simple, composite, expected",
        [
            (False, False, ForeignKeyKind.NONE),
            (True, False, ForeignKeyKind.SIMPLE),
            (False, True, ForeignKeyKind.COMPOSITE),
            (True, True, ForeignKeyKind.SIMPLE_AND_COMPOSITE),
        ],
    )
    def test_kinds(self, simple: bool, composite: bool, expected: ForeignKeyKind) -> None:
        attr = Attribute(
            name="x", neutral_type="int",
            is_fk=simple or composite, is_fk_simple=simple, is_fk_composite=composite,
        )
        assert classify_foreign_key(attr) is expected

    def test_is_fk_iff_simple_or_composite(self) -> None:
        for simple, composite in itertools.product([False, True], repeat=2):
            attr = Attribute(
                name="x", neutral_type="int",
                is_fk=simple or composite, is_fk_simple=simple, is_fk_composite=composite,
            )
            assert attr.is_fk == (classify_foreign_key(attr) is not ForeignKeyKind.NONE)

    def test_reference_model(self, model: Model) -> None:
        for entity in model.entities:
            for attr in entity.attributes:
                assert attr.is_fk == (attr.is_fk_simple or attr.is_fk_composite)


# ===========================================================================
# Resolution
# ===========================================================================


class TestResolveReferencedEntity:
    """Look-up of the referenced entity by class name."""

    def test_round_trip(self) -> None:
        attr = _fk()
        a = Entity(class_name="A", attributes=[attr])
        b = Entity(class_name="B", attributes=[Attribute(name="id", neutral_type="int")])
        model = Model(entities=[a, b])
        assert resolve_referenced_entity(attr, model) is model.get_entity_by_class_name("B")
        assert resolve_referenced_entity_name(attr, model) == "B"

    def test_missing_entity_is_integrity_error(self) -> None:
        attr = _fk()
        model = Model(entities=[Entity(class_name="A", attributes=[attr])])
        with pytest.raises(ModelIntegrityError, match="'B'") as exc_info:
            resolve_referenced_entity(attr, model, "A")
        assert "A.bId" in str(exc_info.value)
        assert exc_info.value.context["referenced"] == "B"

    def test_no_reference_is_domain_error(self) -> None:
        attr = Attribute(name="title", neutral_type="string")
        model = Model(entities=[Entity(class_name="A", attributes=[attr])])
        with pytest.raises(ReferenceResolutionError, match="A.title"):
            resolve_referenced_entity(attr, model, "A")

    def test_errors_are_distinct_kinds(self) -> None:
        assert not issubclass(ModelIntegrityError, ReferenceResolutionError)
        assert not issubclass(ReferenceResolutionError, ModelIntegrityError)

    def test_parts_never_stand_in_for_recorded_name(self) -> None:
        attr = _fk(referenced=None, fk_parts=[_part("B")])
        assert recorded_referenced_entity_name(attr) == ""
        a = Entity(class_name="A", attributes=[attr])
        b = Entity(class_name="B", attributes=[Attribute(name="id", neutral_type="int")])
        with pytest.raises(ReferenceResolutionError, match="A.bId"):
            resolve_referenced_entity(attr, Model(entities=[a, b]), "A")

    def test_unrecorded_name_with_dangling_part_is_domain_error(self) -> None:
        attr = _fk(referenced=None, fk_parts=[_part("Ghost")])
        model = Model(entities=[Entity(class_name="A", attributes=[attr])])
        with pytest.raises(ReferenceResolutionError):
            resolve_referenced_entity(attr, model, "A")

    def test_recorded_name_is_trimmed(self) -> None:
        assert recorded_referenced_entity_name(_fk(referenced=" B ")) == "B"

    def test_reference_model(self, model: Model) -> None:
        book = model.get_entity_by_class_name("Book")
        attr = book.get_attribute("publisherCode")
        assert resolve_referenced_entity(attr, model, "Book").class_name == "Publisher"

    def test_removed_entity(self, model_dict: Dict[str, Any]) -> None:
        data = copy.deepcopy(model_dict)
        data["entities"] = [e for e in data["entities"] if e["class_name"] != "Publisher"]
        model = Model.model_validate(data)
        attr = model.get_entity_by_class_name("Book").get_attribute("publisherCode")
        with pytest.raises(ModelIntegrityError):
            resolve_referenced_entity(attr, model, "Book")


# ===========================================================================
# Consistency
# ===========================================================================


class TestReferenceConsistency:
    """Disagreement between recorded name and FK parts is surfaced, not fixed."""

    def test_agreeing_sources(self) -> None:
        assert check_reference_consistency(_fk(fk_parts=[_part("B")])) is None

    def test_missing_source(self) -> None:
        assert check_reference_consistency(_fk()) is None

    def test_disagreement_reported(self) -> None:
        message = check_reference_consistency(_fk(fk_parts=[_part("C")]))
        assert message is not None
        assert "'B'" in message and "C" in message

    def test_disagreement_logged_but_recorded_name_used(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        attr = _fk(fk_parts=[_part("C")])
        model = Model(
            entities=[
                Entity(class_name="A", attributes=[attr]),
                Entity(class_name="B"),
                Entity(class_name="C"),
            ]
        )
        with caplog.at_level("WARNING", logger="neutralgen.foreign_keys"):
            entity = resolve_referenced_entity(attr, model, "A")
        assert entity.class_name == "B"
        assert "FK parts reference" in caplog.text

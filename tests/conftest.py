"""
tests/conftest.py
Shared fixtures for the neutralgen test suite.

The reference model ``model_example.yaml`` (project root) is loaded once per
session; tests that need to alter it work on a deep copy.
"""

from __future__ import annotations

import copy
import pathlib
from typing import Any, Dict, List, Optional

import pytest
import yaml

from neutralgen.context import AttributeContext
from neutralgen.environment import GenerationEnvironment
from neutralgen.models import Attribute, Entity, Model


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

ROOT_DIR: pathlib.Path = pathlib.Path(__file__).resolve().parent.parent
MODEL_EXAMPLE_PATH: pathlib.Path = ROOT_DIR / "model_example.yaml"


# ---------------------------------------------------------------------------
# Reference model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def raw_model_dict() -> Dict[str, Any]:
    """Load the reference model_example.yaml once per session."""
    assert MODEL_EXAMPLE_PATH.exists(), (
        f"Reference model not found at {MODEL_EXAMPLE_PATH}. "
        "Make sure model_example.yaml is in the project root."
    )
    with open(MODEL_EXAMPLE_PATH, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    assert isinstance(data, dict), "Top-level YAML must be a mapping."
    return data


@pytest.fixture()
def model_dict(raw_model_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Deep copy so each test can mutate freely."""
    return copy.deepcopy(raw_model_dict)


@pytest.fixture()
def model(model_dict: Dict[str, Any]) -> Model:
    return Model.model_validate(model_dict)


@pytest.fixture()
def java_env() -> GenerationEnvironment:
    return GenerationEnvironment()


@pytest.fixture()
def postgres_env() -> GenerationEnvironment:
    return GenerationEnvironment(target_language="java", database="postgresql")


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_attribute(name: str = "age", neutral_type: str = "int", **kwargs: Any) -> Attribute:
    return Attribute(name=name, neutral_type=neutral_type, **kwargs)


def make_context(
    attribute: Attribute,
    environment: Optional[GenerationEnvironment] = None,
    entity_name: str = "Person",
    others: Optional[List[Entity]] = None,
) -> AttributeContext:
    """Wrap *attribute* into a one-entity model (plus *others*) and return its context."""
    entity = Entity(class_name=entity_name, attributes=[attribute])
    model = Model(entities=[entity, *(others or [])])
    return AttributeContext(entity, attribute, model, environment)


def context_of(
    model: Model,
    entity_name: str,
    attribute_name: str,
    environment: Optional[GenerationEnvironment] = None,
) -> AttributeContext:
    entity = model.get_entity_by_class_name(entity_name)
    assert entity is not None, f"No entity {entity_name}"
    attribute = entity.get_attribute(attribute_name)
    assert attribute is not None, f"No attribute {entity_name}.{attribute_name}"
    return AttributeContext(entity, attribute, model, environment)

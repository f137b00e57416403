"""Pytest configuration and fixtures."""

import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import pytest

from json_converters import field, float_, int_, list_, object_, option, string


@dataclass
class Person:
    name: str
    age: int
    height: Optional[float]
    tags: List[str]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def person_converter():
    """Object converter for the Person record."""
    return object_(
        Person,
        field("name", lambda p: p.name, string),
        field("age", lambda p: p.age, int_),
        option("height", lambda p: p.height, float_),
        field("tags", lambda p: p.tags, list_(string)),
    )


@pytest.fixture
def sample_person():
    """Person with every field set."""
    return Person(name="Alice", age=30, height=1.68, tags=["admin", "ops"])


@pytest.fixture
def sample_person_json():
    """JSON tree for the sample person, keys in a different order."""
    return {
        "tags": ["admin", "ops"],
        "height": 1.68,
        "age": 30,
        "name": "Alice",
    }

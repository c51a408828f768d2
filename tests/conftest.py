"""Shared test fixtures."""

import os
import sys

import pytest

# Ensure src and the shared record module are importable
sys.path.insert(0, "src")
sys.path.insert(0, os.path.dirname(__file__))

from sample_records import Employee, Gender, Person

from recordcopy import CopySettings


@pytest.fixture
def asterix() -> Person:
    return Person(gender=Gender.MALE, name="asterix")


@pytest.fixture
def anna() -> Person:
    return Person(
        gender=Gender.FEMALE, name="Anna", married=True, about="Ha ha ha...", nickname="beast"
    )


@pytest.fixture
def employee(anna: Person) -> Employee:
    return Employee(person=anna, id="23")


@pytest.fixture
def settings() -> CopySettings:
    """Settings independent of the environment."""
    return CopySettings(
        pickle_protocol=5,
        snapshot_compress=False,
        snapshot_compress_level=6,
        snapshot_urlsafe=False,
    )

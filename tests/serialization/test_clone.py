"""Tests for deep cloning through pickle."""

import pickle
from dataclasses import dataclass

import numpy
import pytest
from sample_records import Account, Person, Team, Thermostat

from recordcopy import (
    CopySettings,
    DecodeError,
    NotSerializableError,
    clone_deep,
    from_bytes,
    to_bytes,
)


def test_deep_clone_is_equal_and_independent(employee):
    """Nothing reachable from the clone is shared with the source."""
    clone = clone_deep(employee)

    assert clone == employee
    assert clone.person is not employee.person

    clone.person.name = "changed"
    assert employee.person.name == "Anna"


def test_deep_clone_of_collections(anna, asterix):
    """Lists, dicts and their records are duplicated."""
    team = Team(name="village", members=[anna, asterix], roles={"Anna": "chief"})

    clone = clone_deep(team)

    assert clone == team
    assert clone.members is not team.members
    assert clone.members[0] is not anna
    assert clone.roles is not team.roles


def test_deep_clone_keeps_shared_structure(asterix):
    """An object reachable twice is cloned once."""
    team = Team(members=[asterix, asterix])

    clone = clone_deep(team)

    assert clone.members[0] is clone.members[1]


def test_deep_clone_of_other_shapes():
    """Pydantic models, plain classes and arrays clone too."""
    account = Account(owner="anna", tags=["x"])
    thermostat = Thermostat(21.5)
    grid = numpy.ones((2, 2))

    assert clone_deep(account) == account
    assert clone_deep(thermostat) == thermostat
    assert numpy.array_equal(clone_deep(grid), grid)


def test_local_classes_are_not_serializable():
    """Classes that cannot be found by name cannot be cloned."""

    @dataclass
    class Local:
        value: int = 0

    with pytest.raises(NotSerializableError, match="Cannot serialize Local"):
        clone_deep(Local(1))


def test_unpicklable_members_are_not_serializable():
    """A generator anywhere in the graph fails the clone."""
    holder = Thermostat()
    holder.feed = (i for i in range(3))

    with pytest.raises(NotSerializableError):
        to_bytes(holder)


def test_protocol_follows_settings(asterix):
    """The pickle protocol comes from the settings."""
    data = to_bytes(asterix, CopySettings(pickle_protocol=2))

    assert data[:2] == b"\x80\x02"
    assert from_bytes(data) == asterix


@pytest.mark.parametrize("data", [b"", b"garbage", pickle.dumps(1)[:-1]])
def test_invalid_payloads(data):
    """Broken payloads raise DecodeError."""
    with pytest.raises(DecodeError, match="Cannot deserialize"):
        from_bytes(data)

"""Tests for field and property introspection."""

from dataclasses import dataclass, field
from typing import ClassVar, Final

import pytest
from sample_records import Account, Gender, Member, Person, Point, PremiumMember, Sensor, Thermostat

from recordcopy import (
    FieldDescriptor,
    PropertyDescriptor,
    get_all_declared_field_names,
    get_all_declared_fields,
    get_property_descriptors,
    get_record_fields,
    get_record_properties,
)
from recordcopy.core.record import accepts_attributes, ignore_set


def test_dataclass_fields_in_declaration_order():
    """Fields come back in declaration order with resolved types."""
    fields = get_all_declared_fields(Person)

    assert [f.name for f in fields] == ["gender", "about", "name", "nickname", "married"]
    assert fields[0].declared_type == Gender | None
    assert all(f.owner is Person for f in fields)


def test_inherited_fields_come_first():
    """Ancestor fields precede the subclass's own fields."""
    names = get_all_declared_field_names(PremiumMember)

    assert names == ("gender", "about", "name", "nickname", "married", "dateofbirth", "credits")
    by_name = {f.name: f for f in get_all_declared_fields(PremiumMember)}
    assert by_name["dateofbirth"].owner is Member
    assert by_name["credits"].owner is PremiumMember


def test_ignore_names_are_excluded():
    """Ignored names never appear, whatever the iterable."""
    assert "gender" not in get_all_declared_field_names(Person, ["gender"])
    assert get_all_declared_field_names(Person, "about") == (
        "gender",
        "name",
        "nickname",
        "married",
    )


def test_ignore_set_normalizes():
    """ignore_set de-duplicates and treats a string as one name."""
    assert ignore_set("name") == ("name",)
    assert ignore_set(["a", "b", "a"]) == ("a", "b")
    assert ignore_set(None) == ()


def test_immutable_markers():
    """Frozen dataclasses, Final hints and the final metadata flag are immutable."""

    @dataclass
    class Marked:
        fixed: Final[int] = 1
        flagged: str = field(default="x", metadata={"final": True})
        free: int = 0

    @dataclass(frozen=True)
    class Frozen:
        value: int = 0

    marked = {f.name: f.immutable for f in get_all_declared_fields(Marked)}

    assert marked == {"fixed": True, "flagged": True, "free": False}
    assert all(f.immutable for f in get_all_declared_fields(Frozen))


def test_pydantic_fields():
    """Pydantic fields carry annotations; frozen fields are immutable."""
    fields = {f.name: f for f in get_all_declared_fields(Account)}

    assert list(fields) == ["owner", "balance", "tags", "account_id"]
    assert fields["tags"].declared_type == list[str]
    assert fields["account_id"].immutable
    assert not fields["owner"].immutable


def test_plain_class_fields_skip_classvars_and_dunders():
    """Plain classes use annotations and slots; ClassVars are not fields."""

    class Base:
        __slots__ = ("slotted",)
        counter: ClassVar[int] = 0

    class Child(Base):
        __slots__ = ("extra",)
        extra: str

    names = get_all_declared_field_names(Child)

    assert names == ("slotted", "extra")


def test_record_fields_include_instance_attributes():
    """Attributes set only in __init__ appear undeclared."""
    fields = {f.name: f for f in get_record_fields(Thermostat(18.0))}

    assert list(fields) == ["room", "target", "_history"]
    assert fields["target"].declared_type is None


def test_cloneable_reports_own_fields():
    """A Cloneable type decides which fields are copied."""

    class Custom:
        def __init__(self) -> None:
            self.kept = 1
            self.hidden = 2

        @classmethod
        def __record_fields__(cls):
            return [FieldDescriptor(name="kept", declared_type=int)]

    assert get_all_declared_field_names(Custom) == ("kept",)


def test_properties_of_dataclass():
    """Dataclass fields are readable and writable properties."""
    props = {p.name: p for p in get_property_descriptors(Person)}

    assert list(props) == ["gender", "about", "name", "nickname", "married"]
    assert all(p.readable and p.writable for p in props.values())


def test_properties_of_plain_class():
    """Python properties report readability from getter and setter presence."""
    props = {p.name: p for p in get_record_properties(Thermostat())}

    assert list(props) == ["room", "fahrenheit", "summary", "target"]
    assert props["fahrenheit"].writable
    assert props["fahrenheit"].declared_type is float
    assert props["summary"].readable and not props["summary"].writable
    assert "_history" not in props


def test_properties_of_pydantic_model():
    """Frozen fields and computed fields are read-only."""
    props = {p.name: p for p in get_property_descriptors(Account)}

    assert props["label"].readable and not props["label"].writable
    assert not props["account_id"].writable
    assert props["owner"].writable


def test_property_enumerable_reports_own_properties():
    """A PropertyEnumerable type lists its own accessors."""

    class Exposed:
        def __init__(self) -> None:
            self._secret = "s"

        @classmethod
        def __record_properties__(cls):
            return [
                PropertyDescriptor(
                    name="secret",
                    reader=lambda obj: obj._secret,
                    writer=lambda obj, value: setattr(obj, "_secret", value),
                )
            ]

    props = get_record_properties(Exposed())

    assert [p.name for p in props] == ["secret"]


@pytest.mark.parametrize("cls", [Person, Member, Account, Thermostat])
def test_declared_fields_are_unique(cls):
    """No field name is reported twice."""
    names = get_all_declared_field_names(cls)
    assert len(names) == len(set(names))


def test_accepts_attributes():
    """Only classes with an instance __dict__ take undeclared attributes."""

    class Slotted:
        __slots__ = ("value",)

    class SlottedChild(Slotted):
        pass

    assert accepts_attributes(Sensor)
    assert accepts_attributes(Person)
    assert accepts_attributes(SlottedChild)
    assert not accepts_attributes(Slotted)
    assert not accepts_attributes(Account)


def test_frozen_dataclass_properties_are_read_only():
    """Frozen fields are readable but have no writer."""
    props = get_property_descriptors(Point)

    assert all(p.readable and not p.writable for p in props)

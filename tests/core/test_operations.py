"""Tests for the value duplicators and copy strategies."""

import array

import numpy
import pytest
from hypothesis import given
from hypothesis import strategies as st
from sample_records import Gender, Person, Sex

from recordcopy import TypeMismatchError
from recordcopy.core.operations import (
    copy_array_strategy,
    copy_by_reference,
    copy_enum_strategy,
    copy_of_array,
    copy_of_enum_value,
)


@given(st.lists(st.integers(min_value=-(2**31), max_value=2**31 - 1)))
def test_array_copy_is_equal_but_distinct(values):
    """PROPERTY: A copied array.array holds the same elements in a new buffer."""
    source = array.array("i", values)

    duplicate = copy_of_array(source)

    assert duplicate == source
    assert duplicate is not source
    assert duplicate.typecode == source.typecode


def test_array_copy_is_independent():
    """Writing into the copy leaves the source untouched."""
    source = array.array("d", [1.0, 2.0])

    duplicate = copy_of_array(source)
    duplicate[0] = 9.0

    assert source[0] == 1.0


@given(
    st.lists(st.floats(allow_nan=False), min_size=1, max_size=12),
    st.sampled_from(["C", "F"]),
)
def test_ndarray_copy_keeps_shape_and_dtype(values, order):
    """PROPERTY: ndarray copies keep dtype, shape and element order."""
    source = numpy.array(values, dtype=numpy.float64, order=order).reshape(len(values), 1)

    duplicate = copy_of_array(source)

    assert duplicate.dtype == source.dtype
    assert duplicate.shape == source.shape
    assert numpy.array_equal(duplicate, source)
    assert not numpy.shares_memory(duplicate, source)


def test_object_array_copy_shares_elements(asterix):
    """Reference arrays get new slots pointing at the same elements."""
    source = numpy.empty(2, dtype=object)
    source[0] = asterix
    source[1] = None

    duplicate = copy_of_array(source)

    assert duplicate is not source
    assert duplicate[0] is asterix
    assert duplicate[1] is None


def test_copy_of_array_rejects_non_arrays():
    """Non-array values yield None."""
    assert copy_of_array([1, 2, 3]) is None
    assert copy_of_array("abc") is None


@pytest.mark.parametrize("member", list(Gender))
def test_enum_resolves_to_canonical_member(member):
    """Resolution by name returns the very member of the declared enum."""
    assert copy_of_enum_value(member, Gender) is member
    assert copy_of_enum_value(member.name, Gender) is member


def test_enum_resolution_across_types():
    """A member of another enum resolves to the same-named member of the target."""
    assert copy_of_enum_value(Sex.FEMALE, Gender) is Gender.FEMALE


def test_enum_resolution_unknown_name():
    """A name missing from the declared enum is a type mismatch."""
    with pytest.raises(TypeMismatchError, match="no member named 'UNDEFINED'"):
        copy_of_enum_value(Gender.UNDEFINED, Sex)


def test_enum_resolution_requires_enum_type():
    """A non-enum declared type yields None."""
    assert copy_of_enum_value(Gender.MALE, str) is None
    assert copy_of_enum_value(Gender.MALE, None) is None


def test_copy_by_reference_returns_same_object(asterix):
    """Shallow strategy shares the value."""
    assert copy_by_reference(asterix, Person) is asterix


def test_array_strategy_rejects_non_arrays():
    """The array strategy refuses values that are not arrays."""
    with pytest.raises(TypeMismatchError, match="Expected an array"):
        copy_array_strategy([1, 2], array.array)


def test_enum_strategy_without_declared_enum():
    """Without a declared enum the value's own type is used."""
    assert copy_enum_strategy(Gender.MALE, None) is Gender.MALE


def test_enum_strategy_rejects_non_members():
    """The enum strategy refuses plain values."""
    with pytest.raises(TypeMismatchError, match="Expected an enum member"):
        copy_enum_strategy("MALE", Gender)

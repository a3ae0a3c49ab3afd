import pytest

from uniquelist.datatype import Empty, Null
from uniquelist.exceptions import DuplicateValuesError
from uniquelist.utils import (
    build_initial,
    check_insert_index,
    check_range,
    contains_duplicates,
    dedup_keep_first,
    first_duplicate,
    is_exempt,
    is_null,
)


class Key:
    """Compares by `key` only, so equal values can still be told apart"""

    def __init__(self, key, tag):
        self.key = key
        self.tag = tag

    def __eq__(self, other):
        return isinstance(other, Key) and self.key == other.key


def test_is_null():
    assert is_null(None)
    assert is_null(Null)
    assert not is_null(0)
    assert not is_null("")
    assert not is_null([])


def test_is_exempt_only_when_nullable():
    assert is_exempt(None, nullable=True)
    assert is_exempt(Null, nullable=True)
    assert not is_exempt(None, nullable=False)
    assert not is_exempt(0, nullable=True)


def test_contains_duplicates():
    assert not contains_duplicates([], nullable=True)
    assert not contains_duplicates([0, 1, 2], nullable=True)
    assert contains_duplicates([0, 1, 2, 1], nullable=True)
    assert contains_duplicates(["a", "b", "a"], nullable=False)


def test_contains_duplicates_skips_nulls_when_nullable():
    assert not contains_duplicates([None, 0, None, Null, Null], nullable=True)
    assert contains_duplicates([None, 0, None], nullable=False)
    assert contains_duplicates([Null, Null], nullable=False)


def test_first_duplicate_returns_the_later_occurrence():
    earlier = Key(1, "earlier")
    later = Key(1, "later")
    assert first_duplicate([Key(0, "a"), earlier, later], nullable=True) is later


def test_first_duplicate_order():
    assert first_duplicate([0, 1, 2, 1, 0], nullable=True) == 1
    assert first_duplicate([3, 3, 2, 2], nullable=True) == 3


def test_first_duplicate_without_duplicate():
    assert first_duplicate([0, 1, 2], nullable=True) is Empty
    assert first_duplicate([None, None], nullable=True) is Empty


def test_first_duplicate_can_be_none():
    assert first_duplicate([None, 0, None], nullable=False) is None


def test_dedup_keep_first():
    assert dedup_keep_first([0, 1, 2, 0, 1], nullable=False) == [0, 1, 2]
    assert dedup_keep_first([2, 1, 2, 0], nullable=True) == [2, 1, 0]


# Null values are dropped entirely by a nullable de-duplication, even the first one
def test_dedup_keep_first_drops_every_null_when_nullable():
    assert dedup_keep_first([0, None, 1, None, Null], nullable=True) == [0, 1]
    assert dedup_keep_first([None], nullable=True) == []


def test_dedup_keep_first_keeps_one_null_when_not_nullable():
    assert dedup_keep_first([0, None, 1, None], nullable=False) == [0, None, 1]


def test_dedup_keep_first_consumes_generators():
    assert dedup_keep_first((i % 3 for i in range(7)), nullable=False) == [0, 1, 2]


def test_build_initial_strict():
    assert build_initial([0, 1, 2], strict=True, nullable=True) == [0, 1, 2]
    assert build_initial([None, 0, None], strict=True, nullable=True) == [None, 0, None]

    with pytest.raises(DuplicateValuesError) as exc_info:
        build_initial([0, 1, 2, 2, 1], strict=True, nullable=True)
    assert exc_info.value.value == 2


def test_build_initial_strict_non_nullable():
    with pytest.raises(DuplicateValuesError) as exc_info:
        build_initial([None, 0, None], strict=True, nullable=False)
    assert exc_info.value.value is None


def test_build_initial_lenient():
    assert build_initial([0, 1, 2, 0, 1], strict=False, nullable=False) == [0, 1, 2]
    assert build_initial([None, None, 1], strict=False, nullable=False) == [None, 1]


def test_build_initial_lenient_warns_when_dropping_nulls():
    with pytest.warns(UserWarning, match="Null values are dropped"):
        assert build_initial([0, None, 1], strict=False, nullable=True) == [0, 1]


def test_build_initial_returns_a_new_list():
    source = [0, 1, 2]
    result = build_initial(source, strict=True, nullable=True)
    result.append(3)
    assert source == [0, 1, 2]


def test_check_insert_index():
    check_insert_index(0, 0)
    check_insert_index(3, 3)
    with pytest.raises(IndexError):
        check_insert_index(4, 3)
    with pytest.raises(IndexError):
        check_insert_index(-1, 3)


def test_check_range():
    check_range(0, 0, 0)
    check_range(1, 3, 3)
    with pytest.raises(IndexError):
        check_range(2, 1, 3)
    with pytest.raises(IndexError):
        check_range(0, 4, 3)
    with pytest.raises(IndexError):
        check_range(-1, 2, 3)


def test_dedup_keep_first_keep_exempt():
    assert dedup_keep_first([0, None, 1, None, 0], nullable=True, keep_exempt=True) == [
        0,
        None,
        1,
        None,
    ]
    assert dedup_keep_first([None, None], nullable=False, keep_exempt=True) == [None]

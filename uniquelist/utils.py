import warnings
from typing import Any, Iterable, List

from uniquelist.datatype import Empty, Null
from uniquelist.exceptions import DuplicateValuesError


def warn(_logic: bool, warning_msg):
    """
    Warns in the cli
    :param _logic: Logic to check
    :param warning_msg: Warning msg
    :return: Noting
    """
    if _logic:
        warnings.warn(warning_msg, UserWarning)


def is_null(value: Any) -> bool:
    return value is None or value is Null


def is_exempt(value: Any, nullable: bool) -> bool:
    """
    Null values are left out of the uniqueness checks when the list is nullable
    :param value: The value to check
    :param nullable: Whether the list allows several null values
    :return: bool
    """
    return nullable and is_null(value)


def first_duplicate(seq: Iterable, nullable: bool) -> Any:
    """
    Scans `seq` left to right and returns the first value that repeats an
    earlier one. The returned value is the later, offending occurrence.

    `None` may be a legitimate duplicate when `nullable` is False, so a
    clean sequence returns the `Empty` marker rather than `None`.

    first_duplicate([0, 1, 2, 1, 0], nullable=True) -> 1
    first_duplicate([None, None], nullable=True) -> Empty
    first_duplicate([None, None], nullable=False) -> None

    :param seq: Ordered sequence to scan
    :param nullable: If True, null values are never counted
    :return: The duplicate value or `Empty`
    """
    checked = []
    for element in seq:
        if is_exempt(element, nullable):
            continue
        if element in checked:
            return element
        checked.append(element)
    return Empty


def contains_duplicates(seq: Iterable, nullable: bool) -> bool:
    """
    True if any non-exempt value of `seq` occurs more than once.
    """
    return first_duplicate(seq, nullable) is not Empty


def dedup_keep_first(seq: Iterable, nullable: bool, keep_exempt: bool = False) -> List:
    """
    Removes repeated values from `seq`, keeping the first occurrence.

    When `nullable` is True every null value is dropped from the result,
    not just the repeats, unless `keep_exempt` is True.

    dedup_keep_first([0, 1, 2, 0, 1], nullable=False) -> [0, 1, 2]
    dedup_keep_first([0, None, 1, None], nullable=True) -> [0, 1]
    dedup_keep_first([0, None, 1, None], nullable=False) -> [0, None, 1]

    :param seq: Ordered sequence to de-duplicate
    :param nullable: If True, null values are dropped
    :param keep_exempt: Keep the null values of a nullable sequence instead
    :return: New list
    """
    elements = []
    for element in seq:
        if is_exempt(element, nullable):
            if keep_exempt:
                elements.append(element)
            continue
        if element in elements:
            continue
        elements.append(element)
    return elements


def build_initial(seq: Iterable, strict: bool, nullable: bool) -> List:
    """
    Shared policy for every "construct from an iterable" entry point.

    Strict: the values are kept as they are, but any duplicate raises
    `DuplicateValuesError`. Lenient: the values are de-duplicated with
    `dedup_keep_first`.

    :param seq: Source values, consumed once
    :param strict: Reject duplicates instead of dropping them
    :param nullable: If True, null values are exempt from the checks
    :return: New list
    :raises DuplicateValuesError
    """
    values = list(seq)

    if strict:
        duplicate = first_duplicate(values, nullable)
        if duplicate is not Empty:
            raise DuplicateValuesError(duplicate)
        return values

    elements = dedup_keep_first(values, nullable)
    warn(
        nullable and any(is_null(value) for value in values),
        "Null values are dropped when building a non-strict nullable unique list",
    )
    return elements


def check_insert_index(index: int, length: int):
    if not 0 <= index <= length:
        raise IndexError(
            "Index `{}` out of range for insertion, must be in 0..{}".format(
                index, length
            )
        )


def check_range(start: int, end: int, length: int):
    """
    A range is valid if `0 <= start <= end <= length`
    :raises IndexError
    """
    if not 0 <= start <= length:
        raise IndexError(
            "Range start `{}` out of range, must be in 0..{}".format(start, length)
        )
    if not start <= end <= length:
        raise IndexError(
            "Range end `{}` out of range, must be in {}..{}".format(
                end, start, length
            )
        )

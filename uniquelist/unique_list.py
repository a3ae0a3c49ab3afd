import logging
from collections.abc import MutableSequence
from itertools import chain, islice
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

from uniquelist.datatype import Empty
from uniquelist.exceptions import DuplicateValueError, DuplicateValuesError, UnsupportedOperationError
from uniquelist.utils import (
    build_initial,
    check_insert_index,
    check_range,
    dedup_keep_first,
    first_duplicate,
    is_exempt,
)

logger = logging.getLogger("uniquelist")

T = TypeVar("T")

FIXED_LENGTH_MSG = "Cannot {} a fixed-length list."
UNMODIFIABLE_MSG = "Cannot modify an unmodifiable list."


def _check_flag(name: str, value: Any):
    if not isinstance(value, bool):
        raise TypeError("`{}` must be a bool".format(name))


class UniqueList(MutableSequence, Generic[T]):
    """
    A list that enforces all of its values be unique.

    Behaves like a python `list` (indexing, slicing, insertion, iteration)
    while keeping the values unique. What happens when a write would
    introduce a duplicate depends on the operation and on three flags
    that are fixed for the lifetime of the list:

        strict (bool): If True, appending or inserting a value that already
                       exists raises `DuplicateValueError`. If False, the
                       value is dropped (`append`, `extend`) or moved
                       (`insert`, `insert_all`).
        nullable (bool): If True, the list may hold any number of null
                         values (`None` or `Null`), otherwise null is a
                         value like any other and may occur only once.
        growable (bool): If False, the list is fixed-length and every
                         operation that changes its length raises
                         `UnsupportedOperationError`.

    Positional writes (`ul[i] = v`, `first`, `last`, `set_all`, `set_range`,
    `replace_range`, slice assignment) ignore `strict`: they raise
    `DuplicateValueError` unless the list holds no duplicates once the
    whole write is applied.

    Examples:

        ```python
        ul = UniqueList([0, 1, 2, 0, 1])
        print(ul)  # Expected Output: UniqueList([0, 1, 2])

        ul.append(1)
        print(ul)  # Expected Output: UniqueList([0, 1, 2])

        ul.insert(0, 2)
        print(ul)  # Expected Output: UniqueList([2, 0, 1])
        ```

        ```python
        ul = UniqueList([0, 1, 2], strict=True)
        ul.append(0)  # Raises DuplicateValueError
        ```

        ```python
        ul = UniqueList([0, 1, 2, 3, 4])
        ul.set_range(0, 2, [1, 0])
        print(ul)  # Expected Output: UniqueList([1, 0, 2, 3, 4])
        ```
    """

    def __init__(
        self,
        iterable: Optional[Iterable[T]] = None,
        *,
        strict: bool = False,
        nullable: bool = True,
        growable: bool = True,
    ):
        _check_flag("strict", strict)
        _check_flag("nullable", nullable)
        _check_flag("growable", growable)

        # A fixed-length list can't drop values, so duplicates are always rejected
        self._elements: List[T] = build_initial(
            () if iterable is None else iterable,
            strict or not growable,
            nullable,
        )
        self._strict = strict
        self._nullable = nullable
        self._growable = growable
        self._unmodifiable = False

    @classmethod
    def _wrap(
        cls,
        elements: List[T],
        *,
        strict: bool = False,
        nullable: bool = True,
        growable: bool = True,
        unmodifiable: bool = False,
    ) -> "UniqueList[T]":
        # `elements` must already be unique
        instance = cls.__new__(cls)
        instance._elements = elements
        instance._strict = strict
        instance._nullable = nullable
        instance._growable = growable
        instance._unmodifiable = unmodifiable
        return instance

    # Construction

    @classmethod
    def of(cls, iterable: Iterable[T], *, strict=False, nullable=True, growable=True):
        return cls(iterable, strict=strict, nullable=nullable, growable=growable)

    from_iterable = of

    @classmethod
    def empty(cls, *, growable=False, strict=False, nullable=True):
        """
        Creates an empty list, fixed-length unless `growable` is True
        """
        return cls(strict=strict, nullable=nullable, growable=growable)

    @classmethod
    def strict_list(cls):
        """
        Creates an empty growable list that raises on duplicate values
        """
        return cls(strict=True)

    @classmethod
    def generate(
        cls,
        length: int,
        generator: Callable[[int], T],
        *,
        strict: bool = False,
        nullable: bool = True,
        growable: bool = True,
    ):
        """
        Creates a list from `generator(i)` for every `i` in `range(length)`.

        A strict or fixed-length list raises `DuplicateValuesError` if the
        generated values repeat, a lenient one keeps the first occurrence.
        """
        if length < 0:
            raise ValueError("`length` must not be negative, got {}".format(length))
        values = [generator(index) for index in range(length)]
        return cls(values, strict=strict, nullable=nullable, growable=growable)

    @classmethod
    def filled(cls, length: int, *, growable: bool = True, strict: bool = False):
        """
        Creates a nullable list holding `length` `None` values
        """
        if length < 0:
            raise ValueError("`length` must not be negative, got {}".format(length))
        _check_flag("strict", strict)
        _check_flag("growable", growable)
        return cls._wrap([None] * length, strict=strict, nullable=True, growable=growable)

    @classmethod
    def unmodifiable(cls, iterable: Iterable[T], *, nullable: bool = True):
        """
        Creates a read-only snapshot of `iterable`.

        Every mutating call on the result raises `UnsupportedOperationError`.
        :raises DuplicateValuesError: If `iterable` holds a duplicate value
        """
        _check_flag("nullable", nullable)
        values = list(iterable)
        duplicate = first_duplicate(values, nullable)
        if duplicate is not Empty:
            raise DuplicateValuesError(duplicate)
        return cls._wrap(values, nullable=nullable, growable=False, unmodifiable=True)

    @classmethod
    def cast_from(
        cls,
        source: Iterable[Any],
        converter: Optional[Callable[[Any], T]] = None,
        *,
        strict: bool = False,
        nullable: bool = True,
        growable: bool = True,
    ):
        """
        Adapts `source` to a unique list, passing every value through
        `converter` first. Converted values that compare equal are
        duplicates and are handled like any other construction.
        """
        values = source if converter is None else map(converter, source)
        return cls(values, strict=strict, nullable=nullable, growable=growable)

    def cast(self, converter: Optional[Callable[[T], Any]] = None) -> "UniqueList":
        """
        Returns a new list with the same flags holding `converter(value)`
        for every value, or the same values if `converter` is None.

        Converted values that compare equal raise `DuplicateValuesError` on a
        strict or fixed-length list, otherwise the first one is kept.
        Null values are always kept.
        """
        if converter is None:
            values = list(self._elements)
        else:
            values = [converter(value) for value in self._elements]
            if self._strict or not self._growable:
                duplicate = first_duplicate(values, self._nullable)
                if duplicate is not Empty:
                    raise DuplicateValuesError(duplicate)
            else:
                values = dedup_keep_first(values, self._nullable, keep_exempt=True)
        return self._wrap(
            values,
            strict=self._strict,
            nullable=self._nullable,
            growable=self._growable,
        )

    # Flags

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def nullable(self) -> bool:
        return self._nullable

    @property
    def growable(self) -> bool:
        return self._growable

    @property
    def is_unmodifiable(self) -> bool:
        return self._unmodifiable

    @property
    def elements(self) -> List[T]:
        """
        A copy of the values, changing it doesn't change the list
        """
        return list(self._elements)

    # Guards and shared policies

    def _contains(self, value: Any) -> bool:
        """
        True if `value` is in the list, exempt null values never are
        """
        return not is_exempt(value, self._nullable) and value in self._elements

    def _check_mutable(self):
        if self._unmodifiable:
            raise UnsupportedOperationError(UNMODIFIABLE_MSG)

    def _check_growable(self, action: str):
        self._check_mutable()
        if not self._growable:
            raise UnsupportedOperationError(FIXED_LENGTH_MSG.format(action))

    def _normalize_index(self, index: int) -> int:
        length = len(self._elements)
        if index < 0:
            index += length
        if not 0 <= index < length:
            raise IndexError("UniqueList assignment index out of range")
        return index

    def _normalize_insert_index(self, index: int) -> int:
        length = len(self._elements)
        if index < 0:
            index += length
        check_insert_index(index, length)
        return index

    def _position_after_removal(self, index: int) -> int:
        # Negative indices count from the end of the shortened list
        length = len(self._elements)
        if index < 0:
            return max(index + length, 0)
        return min(index, length)

    def _commit(self, scratch: List[T]):
        """
        Replaces the values with `scratch`, a modified copy of them,
        unless `scratch` holds a duplicate
        :raises DuplicateValueError
        """
        duplicate = first_duplicate(scratch, self._nullable)
        if duplicate is not Empty:
            raise DuplicateValueError(duplicate)
        self._elements = scratch

    def _filter_incoming(self, values: Iterable[T], within_batch: bool = True) -> List[T]:
        """
        Drops (lenient) or rejects (strict) the values that already exist.
        Nothing is changed, so a strict rejection leaves the list as it was.

        :param values: Incoming values, in order
        :param within_batch: Also treat a repeat of an earlier incoming value as existing
        :return: The values to add
        :raises DuplicateValueError
        """
        accepted = []
        for value in values:
            if is_exempt(value, self._nullable):
                accepted.append(value)
                continue
            if value in self._elements or (within_batch and value in accepted):
                if self._strict:
                    raise DuplicateValueError(value)
                logger.debug("Dropped duplicate value %r", value)
                continue
            accepted.append(value)
        return accepted

    # Sequence protocol

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[T]:
        return iter(self._elements)

    def __contains__(self, value) -> bool:
        return value in self._elements

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._wrap(self._elements[index])
        return self._elements[index]

    def __setitem__(self, index, value):
        self._check_mutable()
        scratch = list(self._elements)
        if isinstance(index, slice):
            scratch[index] = list(value)
            if not self._growable and len(scratch) != len(self._elements):
                raise UnsupportedOperationError(FIXED_LENGTH_MSG.format("resize"))
        else:
            scratch[self._normalize_index(index)] = value
        self._commit(scratch)

    def __delitem__(self, index):
        self._check_growable("remove from")
        del self._elements[index]

    def __eq__(self, other):
        if isinstance(other, UniqueList):
            return self._elements == other._elements
        if isinstance(other, list):
            return self._elements == other
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        flags = []
        if self._strict:
            flags.append("strict=True")
        if not self._nullable:
            flags.append("nullable=False")
        if self._unmodifiable:
            flags.append("unmodifiable=True")
        elif not self._growable:
            flags.append("growable=False")
        return "{}({})".format(
            self.__class__.__name__, ", ".join([repr(self._elements)] + flags)
        )

    def __add__(self, other: Iterable[T]) -> "UniqueList[T]":
        """
        Returns a new list with the values of this list followed by `other`.

        Values of `other` that already exist raise `DuplicateValueError`
        on a strict list and are left out otherwise. The result keeps the
        flags of this list. `other` itself is never modified.
        """
        if not isinstance(other, (list, tuple, UniqueList)):
            return NotImplemented
        values = self._filter_incoming(other)
        return self._wrap(
            self._elements + values,
            strict=self._strict,
            nullable=self._nullable,
            growable=self._growable,
        )

    def __radd__(self, other):
        if isinstance(other, list):
            return other + self._elements
        return NotImplemented

    # Single value mutation

    def append(self, value: T):
        """
        Adds `value` to the end of the list.

        If `value` already exists, a `DuplicateValueError` is raised if
        the list is strict, otherwise the value is not added.
        """
        self._check_growable("add to")
        if self._contains(value):
            if self._strict:
                raise DuplicateValueError(value)
            logger.debug("Dropped duplicate value %r", value)
            return
        self._elements.append(value)

    def insert(self, index: int, value: T):
        """
        Inserts `value` at position `index`, `0 <= index <= len(self)`.

        If `value` already exists, a `DuplicateValueError` is raised if
        the list is strict, otherwise the existing value is removed first
        and `value` is inserted at `index` of the shortened list, so
        `insert(-1, 0)` on `[0, 1, 2]` gives `[1, 0, 2]`.
        """
        self._check_growable("add to")
        position = self._normalize_insert_index(index)
        if self._contains(value):
            if self._strict:
                raise DuplicateValueError(value)
            logger.debug("Moving value %r to index %d", value, index)
            self._elements.remove(value)
            position = self._position_after_removal(index)
        self._elements.insert(position, value)

    # Bulk mutation

    def extend(self, iterable: Iterable[T]):
        """
        Appends the values of `iterable` to the end of the list.

        If any value already exists (in the list or earlier in `iterable`),
        a `DuplicateValueError` is raised and nothing is appended if the
        list is strict, otherwise those values are skipped.
        """
        self._check_growable("add to")
        self._elements.extend(self._filter_incoming(list(iterable)))

    def insert_all(self, index: int, iterable: Iterable[T]):
        """
        Inserts the values of `iterable` at position `index`, keeping their order.

        Repeats inside `iterable` are resolved like a construction would:
        `DuplicateValuesError` on a strict list, keep-first otherwise.
        Values that already exist in the list raise `DuplicateValueError`
        on a strict list, otherwise they are moved to the inserted block.
        """
        self._check_growable("add to")
        position = self._normalize_insert_index(index)
        values = build_initial(iterable, self._strict, self._nullable)

        if self._strict:
            for value in values:
                if self._contains(value):
                    raise DuplicateValueError(value)
        else:
            for value in values:
                if self._contains(value):
                    logger.debug("Moving value %r to index %d", value, index)
                    self._elements.remove(value)
            position = self._position_after_removal(index)

        self._elements[position:position] = values

    # Positional overwrite

    @property
    def first(self) -> T:
        if not self._elements:
            raise IndexError("UniqueList is empty")
        return self._elements[0]

    @first.setter
    def first(self, value: T):
        if not self._elements:
            raise IndexError("UniqueList is empty")
        self[0] = value

    @property
    def last(self) -> T:
        if not self._elements:
            raise IndexError("UniqueList is empty")
        return self._elements[-1]

    @last.setter
    def last(self, value: T):
        if not self._elements:
            raise IndexError("UniqueList is empty")
        self[-1] = value

    def set_all(self, index: int, iterable: Iterable[T]):
        """
        Overwrites the values starting at position `index` with `iterable`.

        The length doesn't change, so `iterable` must fit between
        `index` and the end of the list.
        :raises DuplicateValueError: If the list holds a duplicate once every value is set
        """
        self._check_mutable()
        values = list(iterable)
        length = len(self._elements)
        check_insert_index(index, length)
        if index + len(values) > length:
            raise IndexError(
                "{} values don't fit from index {} in a list of length {}".format(
                    len(values), index, length
                )
            )
        scratch = list(self._elements)
        scratch[index:index + len(values)] = values
        self._commit(scratch)

    def set_range(self, start: int, end: int, iterable: Iterable[T], skip_count: int = 0):
        """
        Copies the values of `iterable`, skipping `skip_count` of them first,
        into the range `start` inclusive to `end` exclusive.

        If `iterable` is this list, the values are taken from before the copy.
        :raises DuplicateValueError: If the list holds a duplicate once every value is set
        """
        self._check_mutable()
        check_range(start, end, len(self._elements))
        if skip_count < 0:
            raise ValueError("`skip_count` must not be negative, got {}".format(skip_count))
        count = end - start
        values = list(islice(list(iterable), skip_count, skip_count + count))
        if len(values) < count:
            raise ValueError("Too few values to fill the range {}..{}".format(start, end))
        scratch = list(self._elements)
        scratch[start:end] = values
        self._commit(scratch)

    def replace_range(self, start: int, end: int, replacement: Iterable[T]):
        """
        Removes the values in the range `start` inclusive to `end` exclusive
        and inserts `replacement` in their place.

            ul = UniqueList([1, 2, 3, 4, 5])
            ul.replace_range(1, 4, [6, 7])  # UniqueList([1, 6, 7, 5])

        :raises IndexError: If the range is not valid
        :raises DuplicateValueError: If the list holds a duplicate once the range is replaced
        """
        self._check_mutable()
        check_range(start, end, len(self._elements))
        values = list(replacement)
        if not self._growable and len(values) != end - start:
            raise UnsupportedOperationError(FIXED_LENGTH_MSG.format("resize"))
        scratch = list(self._elements)
        scratch[start:end] = values
        self._commit(scratch)

    def fill_range(self, start: int, end: int, fill_value: Optional[T] = None):
        raise UnsupportedOperationError(
            "UniqueList cannot fill values, as all values must be unique."
        )

    # Removal and reordering

    def pop(self, index: int = -1) -> T:
        self._check_growable("remove from")
        return self._elements.pop(index)

    def remove(self, value: T):
        self._check_growable("remove from")
        self._elements.remove(value)

    def clear(self):
        self._check_growable("clear")
        self._elements.clear()

    def remove_where(self, predicate: Callable[[T], bool]):
        """
        Removes every value for which `predicate` returns True
        """
        self._check_growable("remove from")
        self._elements = [value for value in self._elements if not predicate(value)]

    def retain_where(self, predicate: Callable[[T], bool]):
        self._check_growable("remove from")
        self._elements = [value for value in self._elements if predicate(value)]

    def reverse(self):
        self._check_mutable()
        self._elements.reverse()

    def sort(self, *, key=None, reverse=False):
        self._check_mutable()
        self._elements.sort(key=key, reverse=reverse)

    # Derived lists

    def followed_by(self, iterable: Iterable[T]) -> Iterator[T]:
        """
        Lazily iterates the values of this list followed by `iterable`.

        Values of `iterable` that already exist in the list raise
        `DuplicateValueError` right away on a strict list and are left out
        otherwise.
        """
        values = self._filter_incoming(iterable, within_batch=False)
        return chain(list(self._elements), values)

    def sublist(self, start: int, end: Optional[int] = None) -> "UniqueList[T]":
        """
        Returns a new growable, lenient list with the values from `start`
        inclusive to `end` exclusive
        """
        end = len(self._elements) if end is None else end
        check_range(start, end, len(self._elements))
        return self._wrap(self._elements[start:end])

    def copy(self) -> "UniqueList[T]":
        return self._wrap(
            list(self._elements),
            strict=self._strict,
            nullable=self._nullable,
            growable=self._growable,
        )

    def to_unique_list(self, *, growable=True, strict=True, nullable=True) -> "UniqueList[T]":
        return UniqueList(self._elements, growable=growable, strict=strict, nullable=nullable)


def to_unique_list(
    iterable: Iterable[T],
    *,
    growable: bool = True,
    nullable: bool = True,
    strict: bool = False,
) -> UniqueList[T]:
    """
    Creates a `UniqueList` from the values of `iterable`, in iteration order.

    If `strict` is True every value must be unique, otherwise
    `DuplicateValuesError` is raised. If False, repeated values are removed,
    keeping the first occurrence.

    Example::
        >> to_unique_list([3, 1, 3, 2])
        UniqueList([3, 1, 2])
    """
    return UniqueList(iterable, growable=growable, nullable=nullable, strict=strict)

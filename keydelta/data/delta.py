from __future__ import annotations

import collections.abc
import typing

from frozendict import frozendict
from loguru import logger

from keydelta.data.delta_summary import DeltaSummary
from keydelta.data.equivalence import Equivalence, default_equivalence
from keydelta.data.error import DuplicateKey, InvalidArgument
from keydelta.data.natural_key import NaturalKey, key_of, require_key_and_item
from keydelta.data.op_type import OpType
from keydelta.data.operation import Delete, Insert, Operation, Update, combine_operations

__all__ = ("Delta",)

T = typing.TypeVar("T")
K = typing.TypeVar("K", bound=typing.Hashable)


class Delta(typing.Generic[T, K]):
    """An immutable set of insert, update and delete operations, one per natural key.

    A Delta describes how one snapshot of a keyed dataset differs from another.
    Build one with ``Delta.diff``, compose two with ``combine`` and replay one
    onto a snapshot with ``apply``. Deltas never change after construction, so
    they can be shared freely.
    """

    __slots__ = ("_operations",)

    def __init__(
        self,
        operations: typing.Mapping[K, Operation[T]] | None = None,
        /,
        equivalence: Equivalence[T] = default_equivalence,
    ):
        if operations is None:
            operations = {}

        if equivalence is None:
            raise InvalidArgument("equivalence must not be None.")

        for key, op in operations.items():
            if key is None:
                raise InvalidArgument("operation key must not be None.")

            if not isinstance(op, (Insert, Update, Delete)):
                raise InvalidArgument(f"The value for {key!r}, {op!r}, is not an operation.")

            if isinstance(op, Update) and equivalence(op.old, op.new):
                raise InvalidArgument(f"The update for {key!r}, {op!r}, does not change anything.")

        self._operations: frozendict[K, Operation[T]] = frozendict(operations)

    @classmethod
    def empty(cls) -> Delta[T, K]:
        return cls()

    @classmethod
    def _wrap(cls, operations: dict[K, Operation[T]], /) -> Delta[T, K]:
        # operations built by diff and combine are already checked
        delta = cls.__new__(cls)
        delta._operations = frozendict(operations)
        return delta

    @property
    def operations(self) -> typing.Mapping[K, Operation[T]]:
        return self._operations

    def get(self, key: K, /) -> Operation[T] | None:
        if key is None:
            raise InvalidArgument("key must not be None.")

        return self._operations.get(key)

    def is_empty(self) -> bool:
        return not self._operations

    def inserts(self) -> typing.Mapping[K, Insert[T]]:
        return frozendict({k: op for k, op in self._operations.items() if isinstance(op, Insert)})

    def updates(self) -> typing.Mapping[K, Update[T]]:
        return frozendict({k: op for k, op in self._operations.items() if isinstance(op, Update)})

    def deletes(self) -> typing.Mapping[K, Delete[T]]:
        return frozendict({k: op for k, op in self._operations.items() if isinstance(op, Delete)})

    def inserted(self) -> typing.Mapping[K, T]:
        return frozendict({k: op.new for k, op in self.inserts().items()})

    def updated(self) -> typing.Mapping[K, tuple[T, T]]:
        return frozendict({k: (op.old, op.new) for k, op in self.updates().items()})

    def deleted(self) -> typing.Mapping[K, T]:
        return frozendict({k: op.old for k, op in self.deletes().items()})

    def summary(self) -> DeltaSummary:
        counts = {op_type: 0 for op_type in OpType}
        for op in self._operations.values():
            counts[op.type] += 1

        return DeltaSummary(
            rows_added=counts[OpType.INSERT],
            rows_updated=counts[OpType.UPDATE],
            rows_deleted=counts[OpType.DELETE],
        )

    @typing.overload
    @classmethod
    def diff(
        cls,
        before: typing.Mapping[K, T],
        after: typing.Mapping[K, T],
        natural_key: None = None,
        equivalence: Equivalence[T] = ...,
    ) -> Delta[T, K]:
        ...

    @typing.overload
    @classmethod
    def diff(
        cls,
        before: typing.Iterable[T],
        after: typing.Iterable[T],
        natural_key: NaturalKey[T, K],
        equivalence: Equivalence[T] = ...,
    ) -> Delta[T, K]:
        ...

    @classmethod
    def diff(
        cls,
        before: typing.Iterable[T] | typing.Mapping[K, T],
        after: typing.Iterable[T] | typing.Mapping[K, T],
        natural_key: NaturalKey[T, K] | None = None,
        equivalence: Equivalence[T] = default_equivalence,
    ) -> Delta[T, K]:
        """Compute the Delta that turns ``before`` into ``after``.

        With a ``natural_key`` both datasets are iterables of items and every
        key must be unique within each of them, otherwise ``DuplicateKey`` is
        raised. Without one both datasets must be mappings of key to item.

        Items with the same key that ``equivalence`` considers equal produce no
        operation at all.
        """
        if before is None:
            raise InvalidArgument("before must not be None.")

        if after is None:
            raise InvalidArgument("after must not be None.")

        if equivalence is None:
            raise InvalidArgument("equivalence must not be None.")

        if natural_key is None:
            if not isinstance(before, collections.abc.Mapping) or not isinstance(after, collections.abc.Mapping):
                raise InvalidArgument("natural_key is required unless before and after are both mappings.")

            if before is after:
                return cls.empty()

            operations = _diff_mappings(before=before, after=after, equivalence=equivalence)
        else:
            if isinstance(before, collections.abc.Mapping) or isinstance(after, collections.abc.Mapping):
                raise InvalidArgument("natural_key must not be given when before or after is a mapping.")

            if before is after:
                return cls.empty()

            operations = _diff_items(
                before=before,
                after=after,
                natural_key=natural_key,
                equivalence=equivalence,
            )

        delta = cls._wrap(operations)
        logger.opt(lazy=True).debug("diff: {}", delta.summary)
        return delta

    def combine(self, other: Delta[T, K], /, equivalence: Equivalence[T] = default_equivalence) -> Delta[T, K]:
        """Compose this Delta with ``other`` as though ``other`` was applied after this one.

        Raises ``InvalidCombination`` if the two deltas touch the same key in a
        way that can't happen in sequence, e.g. both insert it.
        """
        if other is None:
            raise InvalidArgument("other must not be None.")

        if not isinstance(other, Delta):
            raise InvalidArgument(f"other must be a Delta, but got {type(other).__name__}.")

        if equivalence is None:
            raise InvalidArgument("equivalence must not be None.")

        if self.is_empty():
            return other

        if other.is_empty():
            return self

        combined: dict[K, Operation[T]] = dict(self._operations)
        for key, right in other._operations.items():
            left = combined.get(key)
            if left is None:
                combined[key] = right
                continue

            op = combine_operations(left, right, equivalence)
            if op is None:
                del combined[key]
            else:
                combined[key] = op

        delta = type(self)._wrap(combined)
        logger.opt(lazy=True).debug("combine: {}", delta.summary)
        return delta

    @typing.overload
    def apply(self, items: typing.Mapping[K, T], /, natural_key: None = None) -> typing.Mapping[K, T]:
        ...

    @typing.overload
    def apply(self, items: typing.Iterable[T], /, natural_key: NaturalKey[T, K]) -> tuple[T, ...]:
        ...

    def apply(
        self,
        items: typing.Iterable[T] | typing.Mapping[K, T],
        /,
        natural_key: NaturalKey[T, K] | None = None,
    ) -> tuple[T, ...] | typing.Mapping[K, T]:
        """Replay this Delta onto a snapshot and return the resulting snapshot.

        The result has the same shape as ``items``: a tuple of items when a
        ``natural_key`` is given, otherwise an immutable mapping of key to item.

        Updates replace the matching item, deletes remove it and inserts add a
        new one. An insert for a key that is already present raises
        ``DuplicateKey``. An update whose key is not in ``items`` is dropped.
        """
        if items is None:
            raise InvalidArgument("items must not be None.")

        if natural_key is None:
            if not isinstance(items, collections.abc.Mapping):
                raise InvalidArgument("natural_key is required unless items is a mapping.")

            pairs: typing.Iterable[tuple[K, T]] = _checked_pairs(items)
        else:
            if isinstance(items, collections.abc.Mapping):
                raise InvalidArgument("natural_key must not be given when items is a mapping.")

            pairs = ((key_of(item, natural_key), item) for item in items)

        remaining_ops: dict[K, Operation[T]] = dict(self._operations)
        items_by_key: dict[K, T] = {}
        for key, item in pairs:
            if key in items_by_key:
                raise DuplicateKey(key=key, source="items")

            match self._operations.get(key):
                case Update(new=new):
                    items_by_key[key] = new
                    del remaining_ops[key]
                case _:
                    items_by_key[key] = item

        for key, op in remaining_ops.items():
            match op:
                case Insert(new=new):
                    if key in items_by_key:
                        raise DuplicateKey(key=key, source="operations")

                    items_by_key[key] = new
                case _:
                    items_by_key.pop(key, None)

        logger.debug("apply: {} items after applying {} operations.", len(items_by_key), len(self._operations))

        if natural_key is None:
            return frozendict(items_by_key)

        return tuple(items_by_key.values())

    def __contains__(self, key: object) -> bool:
        return key in self._operations

    def __iter__(self) -> typing.Iterator[K]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Delta):
            return NotImplemented

        return self._operations == other._operations

    def __hash__(self) -> int:
        return hash(self._operations)

    def __repr__(self) -> str:
        return f"Delta({dict(self._operations)!r})"


def _diff_items(
    *,
    before: typing.Iterable[T],
    after: typing.Iterable[T],
    natural_key: NaturalKey[T, K],
    equivalence: Equivalence[T],
) -> dict[K, Operation[T]]:
    operations: dict[K, Operation[T]] = {}
    for before_item in before:
        key = key_of(before_item, natural_key)
        if key in operations:
            raise DuplicateKey(key=key, source="before")

        operations[key] = Delete(old=before_item)

    # keys seen in after whose items matched their before items
    unchanged: set[K] = set()
    for after_item in after:
        key = key_of(after_item, natural_key)
        if key in unchanged:
            raise DuplicateKey(key=key, source="after")

        match operations.get(key):
            case None:
                operations[key] = Insert(new=after_item)
            case Delete(old=before_item):
                if equivalence(before_item, after_item):
                    del operations[key]
                    unchanged.add(key)
                else:
                    operations[key] = Update(old=before_item, new=after_item)
            case _:
                raise DuplicateKey(key=key, source="after")

    return operations


def _diff_mappings(
    *,
    before: typing.Mapping[K, T],
    after: typing.Mapping[K, T],
    equivalence: Equivalence[T],
) -> dict[K, Operation[T]]:
    operations: dict[K, Operation[T]] = {}
    for key, before_item in _checked_pairs(before, label="before "):
        operations[key] = Delete(old=before_item)

    for key, after_item in _checked_pairs(after, label="after "):
        if key not in before:
            operations[key] = Insert(new=after_item)
        elif equivalence(before[key], after_item):
            del operations[key]
        else:
            operations[key] = Update(old=before[key], new=after_item)

    return operations


def _checked_pairs(items: typing.Mapping[K, T], /, *, label: str = "") -> typing.Iterator[tuple[K, T]]:
    for key, item in items.items():
        require_key_and_item(key, item, label=label)
        yield key, item

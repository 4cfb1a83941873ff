from __future__ import annotations

import dataclasses
import typing

from keydelta.data.equivalence import Equivalence, default_equivalence
from keydelta.data.error import InvalidArgument, InvalidCombination
from keydelta.data.op_type import OpType

__all__ = (
    "Delete",
    "Insert",
    "Operation",
    "Update",
    "combine_operations",
    "delete",
    "insert",
    "update",
)

T = typing.TypeVar("T")


@dataclasses.dataclass(frozen=True, kw_only=True)
class Insert(typing.Generic[T]):
    new: T

    type: typing.ClassVar[OpType] = OpType.INSERT

    def __post_init__(self) -> None:
        if self.new is None:
            raise InvalidArgument("new must not be None.")

    @property
    def old_item(self) -> None:
        return None

    @property
    def new_item(self) -> T:
        return self.new

    def combine(self, other: Operation[T], /, equivalence: Equivalence[T] = default_equivalence) -> Operation[T] | None:
        return combine_operations(self, other, equivalence)


@dataclasses.dataclass(frozen=True, kw_only=True)
class Update(typing.Generic[T]):
    old: T
    new: T

    type: typing.ClassVar[OpType] = OpType.UPDATE

    def __post_init__(self) -> None:
        if self.old is None:
            raise InvalidArgument("old must not be None.")

        if self.new is None:
            raise InvalidArgument("new must not be None.")

    @property
    def old_item(self) -> T:
        return self.old

    @property
    def new_item(self) -> T:
        return self.new

    def combine(self, other: Operation[T], /, equivalence: Equivalence[T] = default_equivalence) -> Operation[T] | None:
        return combine_operations(self, other, equivalence)


@dataclasses.dataclass(frozen=True, kw_only=True)
class Delete(typing.Generic[T]):
    old: T

    type: typing.ClassVar[OpType] = OpType.DELETE

    def __post_init__(self) -> None:
        if self.old is None:
            raise InvalidArgument("old must not be None.")

    @property
    def old_item(self) -> T:
        return self.old

    @property
    def new_item(self) -> None:
        return None

    def combine(self, other: Operation[T], /, equivalence: Equivalence[T] = default_equivalence) -> Operation[T] | None:
        return combine_operations(self, other, equivalence)


Operation: typing.TypeAlias = Insert[T] | Update[T] | Delete[T]


def insert(item: T, /) -> Insert[T]:
    return Insert(new=item)


def update(old: T, new: T, /) -> Update[T]:
    return Update(old=old, new=new)


def delete(item: T, /) -> Delete[T]:
    return Delete(old=item)


def combine_operations(
    this: Operation[T],
    other: Operation[T],
    equivalence: Equivalence[T] = default_equivalence,
    /,
) -> Operation[T] | None:
    """Collapse two operations on the same key, ``this`` followed by ``other``, into one.

    Returns ``None`` when the pair nets out to no change. Pairs that cannot
    happen for a single key in a sequence of well-formed deltas (insert then
    insert, update then insert, delete then update, delete then delete) raise
    ``InvalidCombination``.
    """
    if this is None:
        raise InvalidArgument("this must not be None.")

    if other is None:
        raise InvalidArgument("other must not be None.")

    if equivalence is None:
        raise InvalidArgument("equivalence must not be None.")

    match this:
        case Insert():
            match other:
                case Insert():
                    raise InvalidCombination(left=this.type, right=other.type)
                case Update(new=new):
                    return Insert(new=new)
                case Delete():
                    return None
                case _:
                    typing.assert_never(other)
        case Update(old=old):
            match other:
                case Insert():
                    raise InvalidCombination(left=this.type, right=other.type)
                case Update(new=new):
                    if equivalence(old, new):
                        return None
                    return Update(old=old, new=new)
                case Delete():
                    return Delete(old=old)
                case _:
                    typing.assert_never(other)
        case Delete(old=old):
            match other:
                case Insert(new=new):
                    if equivalence(old, new):
                        return None
                    return Update(old=old, new=new)
                case Update() | Delete():
                    raise InvalidCombination(left=this.type, right=other.type)
                case _:
                    typing.assert_never(other)
        case _:
            typing.assert_never(this)

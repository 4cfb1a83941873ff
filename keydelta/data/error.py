from __future__ import annotations

import typing

from keydelta.data.op_type import OpType

__all__ = (
    "DuplicateKey",
    "InvalidArgument",
    "InvalidCombination",
    "KeyDeltaError",
    "MissingKey",
)


class KeyDeltaError(Exception):
    """Base class for errors occurring in the keydelta codebase"""


class InvalidArgument(KeyDeltaError, ValueError):
    """A required argument, item or key was missing, or arguments were mixed up."""


class MissingKey(InvalidArgument):
    def __init__(self, *, item: typing.Any):
        self.item = item

        super().__init__(f"The natural key for the item, {item!r}, was None.")


class DuplicateKey(KeyDeltaError):
    def __init__(self, *, key: typing.Hashable, source: typing.Literal["before", "after", "items", "operations"]):
        self.key = key
        self.source = source

        super().__init__(f"Duplicate key in {source}: {key!r}")


class InvalidCombination(KeyDeltaError):
    def __init__(self, *, left: OpType, right: OpType):
        self.left = left
        self.right = right

        super().__init__(f"Can't combine {left} with {right}")

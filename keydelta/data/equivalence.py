import operator
import typing

from keydelta.data.error import InvalidArgument

__all__ = ("Equivalence", "default_equivalence", "essence")

T = typing.TypeVar("T")
U = typing.TypeVar("U")

Equivalence: typing.TypeAlias = typing.Callable[[T, T], bool]


def default_equivalence(left: typing.Any, right: typing.Any, /) -> bool:
    """Items are equivalent when they compare equal with ``==``."""
    return bool(operator.eq(left, right))


def essence(
    distill: typing.Callable[[T], U],
    /,
    equivalence: Equivalence[U] = default_equivalence,
) -> Equivalence[T]:
    """Build an equivalence that only compares the distilled form of two items.

    ``distill`` typically returns a copy of the item with the fields that are
    inessential for comparison dropped or defaulted, e.g. an audit timestamp.
    The distilled values are then compared with ``equivalence``.
    """
    if distill is None:
        raise InvalidArgument("distill must not be None.")

    if equivalence is None:
        raise InvalidArgument("equivalence must not be None.")

    def _equivalent(left: T, right: T, /) -> bool:
        return equivalence(distill(left), distill(right))

    return _equivalent

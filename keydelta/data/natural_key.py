import typing

from keydelta.data.error import InvalidArgument, MissingKey

__all__ = ("NaturalKey", "key_of", "require_key_and_item")

T = typing.TypeVar("T")
K = typing.TypeVar("K", bound=typing.Hashable)

NaturalKey: typing.TypeAlias = typing.Callable[[T], K]


def key_of(item: T, natural_key: NaturalKey[T, K], /) -> K:
    if item is None:
        raise InvalidArgument("item must not be None.")

    key = natural_key(item)
    if key is None:
        raise MissingKey(item=item)

    return key


def require_key_and_item(key: typing.Any, item: typing.Any, /, *, label: str = "") -> None:
    if key is None:
        raise InvalidArgument(f"{label}key must not be None.")

    if item is None:
        raise InvalidArgument(f"{label}item must not be None.")

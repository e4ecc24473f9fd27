"""An in-memory implementation of the ordered map contract.

This is the default backing store for guarded collections. It may also be used
on its own, as a ``dict`` that additionally supports list-style ``append`` and
``prepend``.
"""

from typing import Any, Dict, Hashable, Iterator, TypeVar

from typing_extensions import Self

from . import collection
from . import types

_Elem = TypeVar("_Elem")

_SENTINEL = object()


class OrderedMap(collection.OrderedCollection[_Elem]):
    """A memory-backed ordered map with implicit and explicit keys.

    Implicit keys follow the rules of PHP-style arrays: :meth:`append` uses one
    more than the largest non-negative integer key this map has ever held, or
    ``0`` if it has held none. Removing entries does not rewind this counter::

        m = OrderedMap(["a", "b"])    # {0: "a", 1: "b"}
        m.set("x", "c")               # {0: "a", 1: "b", "x": "c"}
        m.set(10, "d")
        m.append("e")                 # "e" is stored at key 11
    """

    __slots__ = ("_entries", "_next_index")

    def __init__(self, elements: Any = ()):
        """Creates a new OrderedMap.

        :param elements: A mapping, whose keys are kept as-is, or any other
            iterable, whose values are stored under ``0, 1, 2, ...``.
        """
        self._entries: Dict[Hashable, _Elem] = {}
        self._next_index = 0
        for key, value in types.entries(elements):
            self.set(key, value)

    def set(self, key: Hashable, value: _Elem) -> Self:
        self._entries[key] = value
        self._bump_index(key)
        return self

    def append(self, value: _Elem) -> Self:
        return self.set(self._next_index, value)

    def prepend(
        self,
        value: _Elem,
        key: Hashable = _SENTINEL,  # type: ignore[assignment]
    ) -> Self:
        if key is _SENTINEL and self.is_list():
            # A plain list shifts down, the same as inserting at position 0.
            values = [value, *self._entries.values()]
            self._entries = dict(enumerate(values))
            self._next_index = len(values)
            return self
        if key is _SENTINEL:
            key = self._next_index
        rest = ((k, v) for k, v in self._entries.items() if k != key)
        self._entries = {key: value, **dict(rest)}
        self._bump_index(key)
        return self

    def is_list(self) -> bool:
        """True if the keys are exactly ``0, 1, ..., n - 1``, in order."""
        return all(
            _is_index(key) and key == pos for pos, key in enumerate(self._entries)
        )

    def __getitem__(self, key: Hashable) -> _Elem:
        return self._entries[key]

    def __delitem__(self, key: Hashable) -> None:
        del self._entries[key]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def _bump_index(self, key: Hashable) -> None:
        if _is_index(key) and key >= self._next_index:  # type: ignore[operator]
            self._next_index = key + 1  # type: ignore[operator]


def _is_index(key: object) -> bool:
    # bool is an int subclass, but True is not a list position.
    return isinstance(key, int) and not isinstance(key, bool) and key >= 0

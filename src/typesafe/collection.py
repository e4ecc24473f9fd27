"""The ordered map contract that guarded collections are built on.

Users should ordinarily not need to import this module directly; relevant
members are exported to the ``typesafe`` namespace.
"""

import abc
from typing import Hashable, Iterable, MutableMapping, TypeVar

from typing_extensions import Self

_Elem = TypeVar("_Elem")
"""Element type of an ordered collection."""

_SENTINEL = object()


class OrderedCollection(MutableMapping[Hashable, _Elem], metaclass=abc.ABCMeta):
    """An insertion-ordered mapping that also behaves like a list.

    Keys may be implicit (sequential integers assigned by :meth:`append`) or
    explicit (anything hashable, given to :meth:`set`). Both kinds may be mixed
    in one collection. Implementations must never renumber explicit keys.
    """

    __slots__ = ()

    def __setitem__(self, key: Hashable, value: _Elem) -> None:
        """Sets an entry into this collection. See :meth:`set` for details."""
        self.set(key, value)

    @abc.abstractmethod
    def set(self, key: Hashable, value: _Elem) -> Self:
        """Sets the value at ``key``, overwriting any existing entry.

        A new key goes at the end of the iteration order; an existing key keeps
        its position.

        :return: ``self``, to enable method chaining.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def append(self, value: _Elem) -> Self:
        """Adds a value at the end under the next implicit integer key.

        :return: ``self``, to enable method chaining.
        """
        raise NotImplementedError()

    @abc.abstractmethod
    def prepend(
        self,
        value: _Elem,
        key: Hashable = _SENTINEL,  # type: ignore[assignment]
    ) -> Self:
        """Adds a value at the start of the iteration order.

        :param key: If provided (including ``None``), the value is stored under
            this key. Otherwise, the implementation's implicit keying rules apply.
        :return: ``self``, to enable method chaining.
        """
        raise NotImplementedError()

    def extend(self, values: Iterable[_Elem]) -> Self:
        """Appends each of the values in order.

        :return: ``self``, to enable method chaining.
        """
        for value in values:
            self.append(value)
        return self

    def count(self) -> int:
        """The number of entries in this collection."""
        return len(self)

    def __repr__(self) -> str:
        contents = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"{type(self).__name__}({{{contents}}})"

    # Explicitly use Python's identity-based equality/hash checks, rather than
    # the Mapping versions. Two collections with the same contents are still
    # two different collections.
    __eq__ = object.__eq__
    __hash__ = object.__hash__

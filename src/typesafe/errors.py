"""Exception types raised by typesafe collections.

Users should ordinarily catch these via the ``typesafe`` namespace.
"""

from typing import Any, Sequence, Tuple


class CollectionError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(CollectionError):
    """The collection type was defined without a usable set of allowed types.

    This is a programming error in the collection definition, not bad input
    data, and is raised regardless of the collection's failure policy.
    """


class InvalidElementError(CollectionError, TypeError):
    """An element was refused admission to a strict collection."""

    def __init__(
        self,
        message: str,
        *,
        element: Any,
        accepted: Sequence[str],
        owner: str,
    ):
        super().__init__(message)
        self.element = element
        """The rejected value itself."""
        self.element_type: str = type(element).__name__
        """The runtime type name of the rejected value."""
        self.accepted: Tuple[str, ...] = tuple(accepted)
        """The names of the types the collection accepts."""
        self.owner = owner
        """The name of the collection type that refused the element."""

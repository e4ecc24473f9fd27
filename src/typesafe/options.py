"""Configuration records and enums for typesafe collections.

Most users will build a :class:`CollectionConfig` once per collection type and
attach it as the ``config`` class attribute of a
:class:`~typesafe.guarded.GuardedCollection` subclass.
"""

import enum
from typing import Any, Callable, Optional, Sequence, Tuple

import attrs

AdmissionPredicate = Callable[[Any], Any]
"""A secondary check run on elements that already matched an allowed type.

The return value is treated as a boolean; ``None`` denies admission.
"""


class Policy(enum.Enum):
    """What a collection does with an element that fails admission."""

    STRICT = "strict"
    """Raise :class:`~typesafe.errors.InvalidElementError` and change nothing."""
    PERMISSIVE = "permissive"
    """Silently drop the element."""


def _to_policy(value: Any) -> Policy:
    if isinstance(value, Policy):
        return value
    return Policy(value)


def _to_allowed(value: Any) -> Optional[Tuple[Any, ...]]:
    # Shape problems surface as ConfigurationError at instantiation.
    if value is None or isinstance(value, (str, bytes)):
        return value
    try:
        return tuple(value)
    except TypeError:
        return value


@attrs.frozen()
class CollectionConfig:
    """Everything that defines a kind of guarded collection.

    A config is immutable once created. ``allowed_types`` is validated when a
    collection is instantiated with this config rather than when the config is
    built, so that a misconfigured collection type fails at the point of use.
    """

    allowed_types: Optional[Sequence[Any]] = attrs.field(
        default=None, converter=_to_allowed
    )
    """Classes, :class:`~typesafe.validation.TypeCheck`s, or predicates."""

    policy: Policy = attrs.field(default=Policy.STRICT, converter=_to_policy)
    """The failure policy of collections using this config."""

    predicate: Optional[AdmissionPredicate] = attrs.field(
        default=None,
        validator=attrs.validators.optional(attrs.validators.is_callable()),
    )
    """Optional secondary admission check."""

    @classmethod
    def of(
        cls,
        *allowed_types: Any,
        ignore_invalid: bool = False,
        predicate: Optional[AdmissionPredicate] = None,
    ) -> "CollectionConfig":
        """Shorthand constructor taking the allowed types positionally."""
        return cls(
            allowed_types=allowed_types,
            policy=Policy.PERMISSIVE if ignore_invalid else Policy.STRICT,
            predicate=predicate,
        )

    @property
    def ignore_invalid(self) -> bool:
        """True if invalid elements are dropped instead of rejected."""
        return self.policy is Policy.PERMISSIVE

"""The admission pipeline shared by all guarded collections.

A :class:`Validator` answers one question: may this element enter the
collection? It is built once per collection instance from the collection's
:class:`~typesafe.options.CollectionConfig` and never changes afterward.
"""

from typing import Any, Callable, Iterable, Optional, Tuple

import attrs
from typing_extensions import get_origin

from . import errors
from . import options
from . import types


@attrs.frozen()
class TypeCheck:
    """A named type descriptor.

    ``check`` decides whether a value has this shape. Classes passed as allowed
    types become ``isinstance`` checks; other callables are used as structural
    checks directly::

        has_name = TypeCheck("Named", lambda x: hasattr(x, "set_name"))
        coll_type = guarded_collection_type("Things", Widget, has_name)
    """

    name: str
    check: Callable[[Any], Any] = attrs.field(
        validator=attrs.validators.is_callable()
    )

    @classmethod
    def of(cls, descriptor: Any) -> "TypeCheck":
        """Converts an allowed-type entry into a TypeCheck.

        :raises ConfigurationError: if the entry is not a class, a TypeCheck,
            or a callable, or if it is a ``typing`` form such as ``List[int]``.
        """
        if isinstance(descriptor, TypeCheck):
            return descriptor
        if _is_typing_form(descriptor):
            raise errors.ConfigurationError(
                f"allowed types must be plain classes, not typing forms;"
                f" got {descriptor!r}"
            )
        if isinstance(descriptor, type):
            return cls(_type_name(descriptor), _isinstance_of(descriptor))
        if isinstance(descriptor, (str, bytes)):
            raise errors.ConfigurationError(
                f"allowed types must be classes or checks, not names;"
                f" got {descriptor!r}"
            )
        if callable(descriptor):
            name = getattr(descriptor, "__name__", None) or repr(descriptor)
            return cls(name, descriptor)
        raise errors.ConfigurationError(
            f"{descriptor!r} is not a valid allowed type"
            " (expected a class, a TypeCheck, or a predicate)"
        )

    def matches(self, element: Any) -> bool:
        return bool(self.check(element))


def _is_typing_form(descriptor: Any) -> bool:
    # Aliases like List[int] or Union[...] are callable but cannot be used as
    # predicates or with isinstance. Protocol classes from typing are fine.
    if descriptor is Any or get_origin(descriptor) is not None:
        return True
    module = getattr(descriptor, "__module__", None)
    return module in _TYPING_MODULES and not isinstance(descriptor, type)


_TYPING_MODULES = ("typing", "typing_extensions")


def _isinstance_of(typ: type) -> Callable[[Any], bool]:
    def check(element: Any) -> bool:
        return isinstance(element, typ)

    return check


def _type_name(typ: type) -> str:
    if typ.__module__ in ("builtins", "__main__"):
        return typ.__qualname__
    return f"{typ.__module__}.{typ.__qualname__}"


def assert_allowed_types_configured(
    allowed_types: Any, owner: str = "collection"
) -> Tuple[TypeCheck, ...]:
    """Ensures the allowed types are set, and normalizes them to TypeChecks.

    :raises ConfigurationError: if ``allowed_types`` is unset, is not a
        sequence or set of descriptors, is empty, or contains an entry that is
        not a descriptor.
    """
    if allowed_types is None:
        raise errors.ConfigurationError(
            f"{owner} requires a non-empty set of allowed types; none provided"
        )
    if not (
        types.is_nonstringy_sequence(allowed_types)
        or isinstance(allowed_types, (set, frozenset))
    ):
        raise errors.ConfigurationError(
            f"{owner} requires allowed types as a sequence or set;"
            f" got {type(allowed_types).__name__}"
        )
    if not allowed_types:
        raise errors.ConfigurationError(
            f"{owner} requires a non-empty set of allowed types; got an empty one"
        )
    return tuple(TypeCheck.of(entry) for entry in allowed_types)


class Validator:
    """Decides whether candidate elements may enter a collection."""

    __slots__ = ("_checks", "_predicate", "_owner")

    def __init__(
        self,
        allowed_types: Any,
        predicate: Optional[options.AdmissionPredicate] = None,
        *,
        owner: str = "collection",
    ):
        """Builds a validator, failing fast on a bad configuration.

        :param allowed_types: The Allowed Type Set, in match order.
        :param predicate: Secondary check, run only on elements that
            matched one of the allowed types.
        :param owner: Name of the collection type, used in messages.
        """
        self._checks = assert_allowed_types_configured(allowed_types, owner)
        self._predicate = predicate
        self._owner = owner

    @classmethod
    def from_config(
        cls, config: options.CollectionConfig, *, owner: str = "collection"
    ) -> "Validator":
        return cls(config.allowed_types, config.predicate, owner=owner)

    @property
    def accepted_type_names(self) -> Tuple[str, ...]:
        return tuple(check.name for check in self._checks)

    def matching_type(self, element: Any) -> Optional[TypeCheck]:
        """Returns the first allowed type the element matches, if any."""
        for check in self._checks:
            if check.matches(element):
                return check
        return None

    def is_valid_element(self, element: Any) -> bool:
        """Returns True if the element may be admitted.

        The predicate only runs once a type has matched; an element with no
        matching type is refused without consulting it. A predicate result is
        read as a boolean, so returning ``None`` refuses the element.
        """
        if self.matching_type(element) is None:
            return False
        return self._passes_predicate(element)

    def check(self, element: Any) -> None:
        """Raises InvalidElementError if the element may not be admitted."""
        if self.matching_type(element) is None:
            raise errors.InvalidElementError(
                f"{self._owner} only accepts elements of types"
                f" {', '.join(self.accepted_type_names)};"
                f" {type(element).__name__} provided",
                element=element,
                accepted=self.accepted_type_names,
                owner=self._owner,
            )
        if not self._passes_predicate(element):
            raise errors.InvalidElementError(
                f"{self._owner} refused {type(element).__name__} element:"
                " it failed the collection's admission check",
                element=element,
                accepted=self.accepted_type_names,
                owner=self._owner,
            )

    def check_all(self, elements: Iterable[Any]) -> None:
        """Checks every element, raising on the first invalid one."""
        for element in elements:
            self.check(element)

    def _passes_predicate(self, element: Any) -> bool:
        if self._predicate is None:
            return True
        return bool(self._predicate(element))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(self.accepted_type_names)})"

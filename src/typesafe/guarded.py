"""Type-guarded collections.

A :class:`GuardedCollection` wraps an ordered map and runs every element that
is written to it through a :class:`~typesafe.validation.Validator`. What kinds
of element are allowed is declared once per collection type::

    class Shapes(GuardedCollection):
        default_config = CollectionConfig.of(Circle, Square)

    shapes = Shapes([Circle(1), Square(2)])
    shapes.append(Circle(3))
    shapes.append("triangle")  # raises InvalidElementError

or, equivalently, ``Shapes = guarded_collection_type("Shapes", Circle, Square)``.
"""

import logging
from typing import (
    Any,
    ClassVar,
    Hashable,
    ItemsView,
    Iterable,
    Iterator,
    KeysView,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
    ValuesView,
)

from typing_extensions import Final, Self

from . import collection
from . import errors
from . import options
from . import ordered_map
from . import types
from . import validation

_Elem = TypeVar("_Elem")
_T = TypeVar("_T")

_LOGGER = logging.getLogger(__name__)

_SENTINEL = object()


class GuardedCollection(collection.OrderedCollection[_Elem]):
    """An ordered map that only admits elements of the configured types.

    Subclasses declare their :class:`~typesafe.options.CollectionConfig` as the
    ``default_config`` class attribute, so that all kinds of guarded collection
    share one constructor signature. A config passed to the constructor takes
    precedence over the class attribute; :attr:`config` is the one in effect.

    In strict mode (the default), writing an invalid element raises
    :class:`~typesafe.errors.InvalidElementError` and leaves the collection
    unchanged. In permissive mode, invalid elements are silently dropped.

    Only writes are guarded. Reads and removals go straight to the backing
    ordered map.
    """

    default_config: ClassVar[Optional[options.CollectionConfig]] = None
    """The configuration of this kind of collection."""

    backing_type: ClassVar[Type[collection.OrderedCollection]] = ordered_map.OrderedMap
    """The ordered map type that stores the entries when no ``backing`` is given.

    It is constructed with the admitted initial elements, either as a mapping
    (for keyed input) or as a list (for positional input).
    """

    __slots__ = ("_backing", "_config", "_validator")

    def __init__(
        self,
        elements: Any = (),
        *,
        config: Optional[options.CollectionConfig] = None,
        backing: Optional[collection.OrderedCollection[_Elem]] = None,
    ):
        """Creates a new collection holding the given elements.

        :param elements: A mapping, whose keys are preserved, or any other
            iterable, stored under implicit keys ``0, 1, 2, ...``.
        :param config: Overrides the ``default_config`` class attribute.
        :param backing: An empty ordered map to store entries in, instead of a
            new ``backing_type``. The admitted elements are written into it.
        :raises ConfigurationError: if there is no usable set of allowed types.
        :raises InvalidElementError: in strict mode, if any element is invalid.
            No collection is created and ``backing`` is left untouched.
        :raises ValueError: if ``backing`` already has entries.
        """
        cfg = config if config is not None else type(self).default_config
        if cfg is None:
            raise errors.ConfigurationError(
                f"{_typename(self)} requires a non-empty set of allowed types;"
                " no config provided"
            )
        if backing is not None and len(backing):
            raise ValueError(
                f"the backing {_typename(backing)} of a {_typename(self)}"
                " must start out empty"
            )
        self._config: Final = cfg
        self._validator: Final = validation.Validator.from_config(
            cfg, owner=_typename(self)
        )
        admitted = self._admit_initial(elements)
        if backing is None:
            backing = type(self).backing_type(admitted)
        elif types.is_keyed(admitted):
            backing.update(admitted)
        else:
            backing.extend(admitted)
        self._backing: Final = backing
        """The object that actually stores the entries of this collection."""

    # Configuration

    @property
    def config(self) -> options.CollectionConfig:
        """The configuration in effect for this collection."""
        return self._config

    @property
    def policy(self) -> options.Policy:
        return self._config.policy

    @property
    def ignore_invalid(self) -> bool:
        return self._config.ignore_invalid

    @property
    def accepted_type_names(self) -> Tuple[str, ...]:
        return self._validator.accepted_type_names

    @property
    def validator(self) -> validation.Validator:
        return self._validator

    def is_valid_element(self, element: Any) -> bool:
        """Returns True if the element would be admitted to this collection."""
        return self._validator.is_valid_element(element)

    def unwrap(self) -> collection.OrderedCollection[_Elem]:
        """Gets the ordered map that ultimately backs this collection."""
        inst: collection.OrderedCollection[_Elem] = self
        while isinstance(inst, GuardedCollection):
            inst = inst._backing
        return inst

    # Guarded writes

    def set(self, key: Hashable, value: _Elem) -> Self:
        if self._admits(value):
            self._backing.set(key, value)
        return self

    def append(self, value: _Elem) -> Self:
        if self._admits(value):
            self._backing.append(value)
        return self

    def prepend(
        self,
        value: _Elem,
        key: Hashable = _SENTINEL,  # type: ignore[assignment]
    ) -> Self:
        if not self._admits(value):
            return self
        if key is _SENTINEL:
            self._backing.prepend(value)
        else:
            self._backing.prepend(value, key)
        return self

    def extend(self, values: Iterable[_Elem]) -> Self:
        """Appends each of the values in order.

        In strict mode the whole batch is checked before anything is appended,
        so one invalid value means none of them are added.
        """
        self._backing.extend(self._admit_all(list(values)))
        return self

    # Sized

    def __len__(self) -> int:
        return len(self._backing)

    # Iterable

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._backing)

    # Container

    def __contains__(self, key: Any) -> bool:
        return key in self._backing

    # Mapping

    def __getitem__(self, key: Hashable) -> _Elem:
        return self._backing[key]

    def get(  # type: ignore[override]
        self, key: Hashable, default: Union[_Elem, _T, None] = None
    ) -> Union[_Elem, _T, None]:
        return self._backing.get(key, default)

    def keys(self) -> KeysView[Hashable]:
        return self._backing.keys()

    def items(self) -> ItemsView[Hashable, _Elem]:
        return self._backing.items()

    def values(self) -> ValuesView[_Elem]:
        return self._backing.values()

    # MutableMapping
    # update() comes from the MutableMapping mixin, which writes through
    # __setitem__ and so is guarded too.

    def setdefault(  # type: ignore[override]
        self,
        key: Hashable,
        default: _Elem = None,  # type: ignore[assignment]
    ) -> Optional[_Elem]:
        """Returns the value at ``key``, first storing ``default`` if missing.

        If a permissive collection drops ``default``, nothing is stored and
        this returns ``None``.
        """
        if key not in self._backing:
            self.set(key, default)
        return self._backing.get(key)

    def __delitem__(self, key: Hashable) -> None:
        del self._backing[key]

    def clear(self) -> None:
        self._backing.clear()

    def __repr__(self) -> str:
        return f"{_typename(self)}({self._backing!r})"

    # Admission

    def _admit_initial(self, elements: Any) -> Any:
        keyed = types.is_keyed(elements)
        pairs = list(types.entries(elements))
        if self.policy is options.Policy.STRICT:
            self._validator.check_all(value for _, value in pairs)
        else:
            pairs = [(k, v) for k, v in pairs if self._admits(v)]
        if keyed:
            return dict(pairs)
        # Positional input is renumbered densely after filtering.
        return [value for _, value in pairs]

    def _admit_all(self, values: List[_Elem]) -> List[_Elem]:
        if self.policy is options.Policy.STRICT:
            self._validator.check_all(values)
            return values
        return [value for value in values if self._admits(value)]

    def _admits(self, value: Any) -> bool:
        if self.policy is options.Policy.STRICT:
            self._validator.check(value)
            return True
        if self._validator.is_valid_element(value):
            return True
        _LOGGER.debug(
            "%s dropped invalid %s element", _typename(self), _typename(value)
        )
        return False


def guarded_collection_type(
    name: str,
    *allowed_types: Any,
    ignore_invalid: bool = False,
    predicate: Optional[options.AdmissionPredicate] = None,
) -> Type[GuardedCollection]:
    """Creates a new kind of guarded collection.

    ``guarded_collection_type("Shapes", Circle, Square, ignore_invalid=True)``
    is the same as subclassing :class:`GuardedCollection` with
    ``default_config = CollectionConfig.of(Circle, Square, ignore_invalid=True)``.
    The allowed types are validated when the collection is instantiated.
    """
    cfg = options.CollectionConfig.of(
        *allowed_types, ignore_invalid=ignore_invalid, predicate=predicate
    )
    return type(
        name, (GuardedCollection,), {"__slots__": (), "default_config": cfg}
    )


def _typename(x: object) -> str:
    return type(x).__name__

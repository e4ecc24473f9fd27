"""Type and interface declarations that are not specific to options.

These declarations and functions are not directly part of the user-facing API,
but are used by the collection implementations for annotations and their own
input handling.
"""

from typing import Any, Iterable, Iterator, Mapping, Sequence, Tuple

from typing_extensions import TypeGuard


def is_nonstringy_sequence(it: object) -> TypeGuard[Sequence]:
    """Returns true if a sequence is a "normal" sequence and not str or bytes.

    str and bytes are "weird" sequences because iterating them gives you
    another str or bytes instance for each character, and when used as a
    sequence is not what users want.
    """
    return not isinstance(it, (str, bytes)) and isinstance(it, Sequence)


def is_keyed(it: object) -> TypeGuard[Mapping]:
    """Returns true if the input carries its own keys (i.e., is a Mapping)."""
    return isinstance(it, Mapping)


def entries(it: Any) -> Iterator[Tuple[Any, Any]]:
    """Yields ``(key, value)`` pairs from a source of collection elements.

    Mappings yield their own keys. Any other iterable is positional and yields
    ``0, 1, 2, ...`` as keys. str and bytes are refused, for the same reason
    :func:`is_nonstringy_sequence` refuses them.
    """
    if is_keyed(it):
        return iter(it.items())
    if isinstance(it, (str, bytes)):
        raise TypeError(
            f"{type(it).__name__} is not a valid source of collection elements"
        )
    return enumerate(_iterable(it))


def _iterable(it: Any) -> Iterable[Any]:
    try:
        iter(it)
    except TypeError as te:
        raise TypeError(
            f"{type(it).__name__!r} object is not a source of collection elements"
        ) from te
    return it

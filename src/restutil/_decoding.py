"""Lenient accessors for decoded JSON payloads."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from .exceptions import DecodeError

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")

_LOGGER = logging.getLogger(__name__)


def to_typed_list(value: Any, decoder: Callable[[Any], T]) -> list[T]:
    """Decode every element of a JSON array with ``decoder``.

    Anything that is not an array (``None``, an object, a string, a
    number) yields an empty list.

    The conversion is all-or-nothing: the first element the decoder rejects
    aborts the whole call.

    Raises:
        DecodeError: If an element fails to decode (``index`` names the
            element).
    """
    if not isinstance(value, list):
        return []

    results: list[T] = []
    for index, item in enumerate(value):
        try:
            results.append(decoder(item))
        except DecodeError as err:
            raise DecodeError(err.reason, index=index) from err
        except (KeyError, TypeError, ValueError) as err:
            raise DecodeError(f"{type(err).__name__}: {err}", index=index) from err
    return results


def to_typed_list_from_json(
    text: str | bytes | bytearray, decoder: Callable[[Any], T]
) -> list[T]:
    """Parse raw JSON text, then decode it like ``to_typed_list``.

    Raises:
        DecodeError: If the text is not valid JSON (``index`` is None) or an
            element fails to decode.
    """
    try:
        value = json.loads(text)
    except (ValueError, RecursionError) as err:
        raise DecodeError(f"invalid JSON: {err}") from err
    return to_typed_list(value, decoder)


def get_or_default(
    mapping: Mapping[K, V],
    key: K,
    default_factory: Callable[[], V] | None = None,
) -> V | None:
    """Return ``mapping[key]`` or the zero value of the mapping's value type.

    With ``default_factory`` the fallback is ``default_factory()``. Without
    it, the zero value is built by calling the type of an existing value
    with no arguments (``0`` for ints, ``""`` for strings, an empty list,
    a dataclass with field defaults). An empty mapping, an unhashable key,
    or a value type that cannot be built without arguments gives ``None``.
    Only an exception raised by ``default_factory`` itself propagates.
    """
    try:
        if key in mapping:
            return mapping[key]
    except TypeError:
        _LOGGER.debug("Unhashable key %r treated as absent", key)
    if default_factory is not None:
        return default_factory()
    for sample in mapping.values():
        try:
            return type(sample)()
        except Exception:  # noqa: BLE001
            _LOGGER.debug("No zero value for %s", type(sample).__name__)
            return None
    return None

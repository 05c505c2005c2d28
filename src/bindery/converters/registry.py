# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Type conversion functions keyed by ``(source, dest)``."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from ..errors import (
    AmbiguousConverterError,
    DuplicateConverterError,
    RegistrySealedError,
)
from ..logging import StructuredLogger, get_logger
from ._generics import MatchScore, TypeBindings, is_subtype, unify

_logger: StructuredLogger = get_logger(__name__, context={"component": "converters"})

ConverterFunc = Callable[[Any], object]
"""A sync or ``async def`` function mapping a source value to a dest value."""


@dataclass(slots=True, frozen=True)
class ConverterKey:
    """Ordered ``(source, dest)`` pair identifying a converter."""

    source: object
    dest: object

    def __str__(self) -> str:
        return f"{_name(self.source)} -> {_name(self.dest)}"


@dataclass(slots=True, frozen=True)
class ConverterEntry:
    """A registered conversion function.

    Entries are callable for synchronous converters. Asynchronous converters
    must go through :meth:`aconvert`.
    """

    key: ConverterKey
    func: ConverterFunc
    is_async: bool = False

    def convert(self, value: object) -> object:
        """Run the converter synchronously."""
        if self.is_async:
            raise TypeError(f"Converter {self.key} is asynchronous; use aconvert()")
        return self.func(value)

    async def aconvert(self, value: object) -> object:
        """Run the converter, awaiting it when asynchronous."""
        result = self.func(value)
        if inspect.isawaitable(result):
            return await result
        return result

    def __call__(self, value: object) -> object:
        return self.convert(value)


class ConverterRegistry:
    """Stores conversion functions and resolves them by type pair.

    Lookup tries the exact ``(source, dest)`` key first, then every
    registered rule as an open rule (TypeVars, bare generic classes, base
    classes). The open match with the lowest :class:`MatchScore` wins; a tie
    for lowest is a configuration error.

    Example::

        registry = ConverterRegistry()
        registry.register(Widget, dict, lambda w: {"value": w.value})
        registry.register(list[T], T, lambda items: items[0])

        to_dict = registry.resolve(Widget, dict)
        first = registry.resolve(list[int], int)

    A second registration for the same key replaces the first
    (last-write-wins) unless the registry is ``strict``.
    """

    __slots__ = ("_entries", "_sealed", "_strict")

    def __init__(self, *, strict: bool = False) -> None:
        """Initialize an empty registry.

        Args:
            strict: If True, raise ``DuplicateConverterError`` when the same
                ``(source, dest)`` key is registered twice.
        """
        super().__init__()
        self._entries: dict[ConverterKey, ConverterEntry] = {}
        self._strict = strict
        self._sealed = False

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(
        self, source: object, dest: object, func: ConverterFunc
    ) -> ConverterEntry:
        """Add a converter from ``source`` to ``dest``.

        Raises:
            DuplicateConverterError: Strict mode and the key already exists.
            RegistrySealedError: The registry has been sealed.
        """
        if self._sealed:
            raise RegistrySealedError("ConverterRegistry")
        key = ConverterKey(source, dest)
        entry = ConverterEntry(
            key=key, func=func, is_async=inspect.iscoroutinefunction(func)
        )
        if key in self._entries:
            if self._strict:
                raise DuplicateConverterError(source, dest)
            _logger.debug(
                "Converter %s replaced by a later registration.",
                key,
                event="converter.shadowed",
                context={"key": str(key)},
            )
        self._entries[key] = entry
        _logger.debug(
            "Registered converter %s.",
            key,
            event="converter.registered",
            context={"key": str(key), "async": entry.is_async},
        )
        return entry

    def resolve(self, source: object, dest: object) -> ConverterEntry | None:
        """Return the converter for ``source -> dest``, or None when absent.

        Raises:
            AmbiguousConverterError: Two open rules match equally well.
        """
        exact = self._entries.get(ConverterKey(source, dest))
        if exact is not None:
            return exact

        best: list[ConverterEntry] = []
        best_score: MatchScore | None = None
        for entry in self._entries.values():
            score = _match(entry.key, source, dest)
            if score is None:
                continue
            if best_score is None or score < best_score:
                best, best_score = [entry], score
            elif score == best_score:
                best.append(entry)

        if len(best) > 1:
            raise AmbiguousConverterError(
                source, dest, tuple(str(entry.key) for entry in best)
            )
        return best[0] if best else None

    def can_convert(self, source: object, dest: object) -> bool:
        """Return True when ``source`` is usable as ``dest`` directly or via a converter."""
        return is_subtype(source, dest) or self.resolve(source, dest) is not None

    def seal(self) -> None:
        """Reject further registrations; lookups stay available."""
        self._sealed = True

    def entries(self) -> tuple[ConverterEntry, ...]:
        """Return registered entries in registration order."""
        return tuple(self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ConverterKey]:
        yield from self._entries


def _match(key: ConverterKey, source: object, dest: object) -> MatchScore | None:
    bindings: TypeBindings = {}
    source_score = unify(key.source, source, bindings, "source")
    if source_score is None:
        return None
    dest_score = unify(key.dest, dest, bindings, "dest")
    if dest_score is None:
        return None
    return source_score + dest_score


def _name(typ: object) -> str:
    if isinstance(typ, type):
        return typ.__qualname__
    return repr(typ)


__all__ = [
    "ConverterEntry",
    "ConverterFunc",
    "ConverterKey",
    "ConverterRegistry",
]

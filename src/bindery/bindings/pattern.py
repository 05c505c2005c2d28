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

"""Normalization of converter shapes into a single value-builder shape.

Extension authors may hand ``BindingRule.bind_to_input`` any of:

- a plain function ``attribute -> value``;
- an ``async def`` function ``attribute -> value``;
- an object with ``convert(attribute)`` or ``async convert_async(attribute)``;
- a class implementing one of the above, plus constructor arguments used
  to instantiate it (so configuration and secrets can flow into the
  converter).

:meth:`PatternMatcher.adapt` turns each of them into a :class:`ValueBuilder`,
which is the only shape the binding providers deal with.
"""

# pyright: reportUnknownArgumentType=false, reportUnknownMemberType=false

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, get_type_hints, runtime_checkable

from ..converters import ConverterEntry
from .protocols import BindingContext


@runtime_checkable
class AttributeConverter[A, T](Protocol):
    """Object converting a resolved attribute into a value."""

    def convert(self, attribute: A) -> T: ...


@runtime_checkable
class AsyncAttributeConverter[A, T](Protocol):
    """Object converting a resolved attribute into a value asynchronously."""

    async def convert_async(self, attribute: A) -> T: ...


@dataclass(slots=True, frozen=True)
class ValueBuilder:
    """Canonical "produce a value from an attribute instance" operation."""

    func: Callable[[Any], object]
    is_async: bool = False
    origin: object = None
    """The converter-like object this builder was adapted from."""

    def build(self, attribute: object) -> object:
        """Produce the value synchronously.

        Raises:
            TypeError: The builder is asynchronous.
        """
        if self.is_async:
            raise TypeError(f"{self.origin!r} is asynchronous; use abuild()")
        return self.func(attribute)

    async def abuild(self, attribute: object) -> object:
        """Produce the value, awaiting the builder when asynchronous."""
        result = self.func(attribute)
        if inspect.isawaitable(result):
            return await result
        return result


@dataclass(slots=True, frozen=True)
class ValueBinding:
    """Binding that builds a value from the attribute, then converts it.

    The optional ``converter`` bridges the builder's value type to the
    parameter type.
    """

    attribute: object
    parameter_type: object
    builder: ValueBuilder
    converter: ConverterEntry | None = None
    provider: object = field(default=None, compare=False)
    """The provider that created this binding."""

    @classmethod
    def of_value(
        cls, context: BindingContext, value: object, *, provider: object = None
    ) -> ValueBinding:
        """Return a binding that always produces ``value``."""
        return cls(
            attribute=context.attribute,
            parameter_type=context.parameter_type,
            builder=ValueBuilder(func=lambda _attribute: value, origin=provider),
            provider=provider,
        )

    @property
    def is_async(self) -> bool:
        return self.builder.is_async or (
            self.converter is not None and self.converter.is_async
        )

    def bind(self) -> object:
        if self.is_async:
            raise TypeError("Binding is asynchronous; use abind()")
        value = self.builder.build(self.attribute)
        if self.converter is not None:
            value = self.converter.convert(value)
        return value

    async def abind(self) -> object:
        value = await self.builder.abuild(self.attribute)
        if self.converter is not None:
            value = await self.converter.aconvert(value)
        return value


class PatternMatcher:
    """Adapts converter-like objects to :class:`ValueBuilder`."""

    @staticmethod
    def adapt(converter: object, *constructor_args: object) -> ValueBuilder:
        """Normalize ``converter`` into a :class:`ValueBuilder`.

        Args:
            converter: Function, async function, converter object, or a
                converter class.
            *constructor_args: Arguments used to instantiate ``converter``
                when it is a class.

        Raises:
            TypeError: ``converter`` has none of the supported shapes, or
                constructor arguments were given for a non-class.
        """
        origin = converter
        if isinstance(converter, type):
            converter = converter(*constructor_args)
        elif constructor_args:
            raise TypeError(
                "constructor arguments are only accepted with a converter class"
            )

        if isinstance(converter, AsyncAttributeConverter):
            return ValueBuilder(func=converter.convert_async, is_async=True, origin=origin)
        if isinstance(converter, AttributeConverter):
            func = converter.convert
            return ValueBuilder(
                func=func, is_async=inspect.iscoroutinefunction(func), origin=origin
            )
        if callable(converter):
            return ValueBuilder(
                func=converter, is_async=_is_async_callable(converter), origin=origin
            )
        raise TypeError(f"{converter!r} is not a supported converter shape")

    @staticmethod
    def value_type(converter: object) -> object | None:
        """Infer the produced value type from return annotations, if declared."""
        if isinstance(converter, type):
            for name in ("convert_async", "convert", "__call__"):
                method = getattr(converter, name, None)
                if method is not None and name in _defined_names(converter):
                    return _return_type(method)
            return None
        if isinstance(converter, AsyncAttributeConverter):
            return _return_type(converter.convert_async)
        if isinstance(converter, AttributeConverter):
            return _return_type(converter.convert)
        if inspect.isfunction(converter) or inspect.ismethod(converter):
            return _return_type(converter)
        call = getattr(type(converter), "__call__", None)
        return _return_type(call) if call is not None else None


def _defined_names(cls: type[object]) -> set[str]:
    """Names defined on ``cls`` or its bases, excluding ``object``."""
    names: set[str] = set()
    for base in cls.__mro__:
        if base is object:
            continue
        names.update(vars(base))
    return names


def _is_async_callable(func: object) -> bool:
    if inspect.iscoroutinefunction(func):
        return True
    call = getattr(type(func), "__call__", None)
    return call is not None and inspect.iscoroutinefunction(call)


def _return_type(func: object) -> object | None:
    try:
        hints = get_type_hints(func)
    except (NameError, TypeError):
        return None
    return hints.get("return")


__all__ = [
    "AsyncAttributeConverter",
    "AttributeConverter",
    "PatternMatcher",
    "ValueBinding",
    "ValueBuilder",
]

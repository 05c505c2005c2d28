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

"""Input binding built from an attribute-to-value builder."""

from __future__ import annotations

from ..config import DEFAULT_READ_TYPES
from ..converters import ConverterRegistry
from ..converters._generics import is_subtype
from ..types import Access
from .pattern import ValueBinding, ValueBuilder
from .protocols import BindingContext


class BindToInputBindingProvider:
    """Binds attributes of one type to parameters reachable from ``value_type``.

    The builder turns the attribute into a ``value_type`` instance. A
    parameter is bindable when ``value_type`` is already usable as the
    parameter type, or when the converter registry holds a
    ``value_type -> parameter_type`` converter. Input bindings only support
    read access.
    """

    __slots__ = (
        "_attribute_type",
        "_builder",
        "_converters",
        "_read_default_types",
        "_value_type",
    )

    def __init__(
        self,
        attribute_type: type[object],
        value_type: object,
        builder: ValueBuilder,
        converters: ConverterRegistry,
        *,
        read_default_types: tuple[type[object], ...] = DEFAULT_READ_TYPES,
    ) -> None:
        super().__init__()
        self._attribute_type = attribute_type
        self._value_type = value_type
        self._builder = builder
        self._converters = converters
        self._read_default_types = read_default_types

    @property
    def attribute_type(self) -> type[object]:
        return self._attribute_type

    @property
    def value_type(self) -> object:
        return self._value_type

    @property
    def builder(self) -> ValueBuilder:
        return self._builder

    def try_create(self, context: BindingContext) -> ValueBinding | None:
        if not isinstance(context.attribute, self._attribute_type):
            return None
        if is_subtype(self._value_type, context.parameter_type):
            return ValueBinding(
                attribute=context.attribute,
                parameter_type=context.parameter_type,
                builder=self._builder,
                provider=self,
            )
        converter = self._converters.resolve(self._value_type, context.parameter_type)
        if converter is None:
            return None
        return ValueBinding(
            attribute=context.attribute,
            parameter_type=context.parameter_type,
            builder=self._builder,
            converter=converter,
            provider=self,
        )

    def default_type(
        self, attribute: object, direction: Access, fallback_type: object
    ) -> object | None:
        """Pick the type tools should assume for a read parameter.

        Preference order: the configured read types, then ``fallback_type``
        when it is more specific than ``object``, then ``value_type`` itself.
        """
        if not isinstance(attribute, self._attribute_type):
            return None
        if direction is not Access.READ:
            return None
        for candidate in self._read_default_types:
            if self._converters.can_convert(self._value_type, candidate):
                return candidate
        if fallback_type is not object and self._converters.can_convert(
            self._value_type, fallback_type
        ):
            return fallback_type
        return self._value_type

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._attribute_type.__qualname__} -> "
            f"{self._value_type!r})"
        )


__all__ = ["BindToInputBindingProvider"]

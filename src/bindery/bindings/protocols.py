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

"""Protocols implemented by binders and the values they produce."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..types import Access


@dataclass(slots=True, frozen=True)
class BindingContext:
    """A function parameter awaiting a binding.

    Attributes:
        attribute: The attribute instance attached to the parameter.
        parameter_type: The declared type of the parameter.
        parameter_name: The parameter name, when known.
    """

    attribute: object
    parameter_type: object
    parameter_name: str | None = None


@runtime_checkable
class Binding(Protocol):
    """Produces the runtime value for one bound parameter."""

    @property
    def attribute(self) -> object: ...

    @property
    def parameter_type(self) -> object: ...

    @property
    def is_async(self) -> bool:
        """True when :meth:`bind` is unavailable and :meth:`abind` must be used."""
        ...

    def bind(self) -> object:
        """Produce the parameter value synchronously.

        Raises:
            TypeError: The binding is asynchronous.
        """
        ...

    async def abind(self) -> object:
        """Produce the parameter value, awaiting asynchronous steps."""
        ...


@dataclass(slots=True, frozen=True)
class TriggerBinding:
    """Marks a parameter as the source of function invocations."""

    attribute: object
    parameter_type: object
    provider: object
    """The trigger provider that accepted the parameter."""


@runtime_checkable
class BindingProvider(Protocol):
    """Strategy that turns an attributed parameter into a :class:`Binding`.

    Example::

        class ConstantProvider:
            def try_create(self, context: BindingContext) -> Binding | None:
                if context.parameter_type is not int:
                    return None
                return ValueBinding.of_value(context, 42, provider=self)
    """

    def try_create(self, context: BindingContext) -> Binding | None:
        """Return a binding, or None when this provider does not apply."""
        ...


@runtime_checkable
class TriggerBindingProvider(Protocol):
    """Strategy that recognizes parameters whose attribute originates invocations."""

    def try_create_trigger(self, context: BindingContext) -> TriggerBinding | None:
        """Return a trigger binding, or None when this provider does not apply."""
        ...


@runtime_checkable
class BindingRuleProvider(Protocol):
    """Provider able to answer design-time questions without a parameter."""

    def default_type(
        self, attribute: object, direction: Access, fallback_type: object
    ) -> object | None:
        """Return the parameter type tools should assume, or None if unsupported."""
        ...


__all__ = [
    "Binding",
    "BindingContext",
    "BindingProvider",
    "BindingRuleProvider",
    "TriggerBinding",
    "TriggerBindingProvider",
]

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

"""First-match-wins aggregation of binding providers."""

from __future__ import annotations

from collections.abc import Iterable

from ..errors import UnresolvedBindingError
from ..logging import StructuredLogger, get_logger
from .protocols import (
    Binding,
    BindingContext,
    BindingProvider,
    BindingRuleProvider,
    TriggerBinding,
    TriggerBindingProvider,
)

_logger: StructuredLogger = get_logger(__name__, context={"component": "composite"})


class CompositeBindingProvider:
    """Resolves a parameter by trying providers in registration order.

    The first provider returning a binding wins; later providers are not
    consulted even when they would also match. Registration order is the
    tie-break, so catch-all providers must be registered after the specific
    ones they would otherwise shadow.

    The composite holds immutable tuples and is safe to query from several
    threads once built.
    """

    __slots__ = ("_providers", "_triggers")

    def __init__(
        self,
        providers: Iterable[BindingProvider],
        triggers: Iterable[TriggerBindingProvider] = (),
    ) -> None:
        super().__init__()
        self._providers = tuple(providers)
        self._triggers = tuple(triggers)

    @property
    def providers(self) -> tuple[BindingProvider, ...]:
        return self._providers

    @property
    def triggers(self) -> tuple[TriggerBindingProvider, ...]:
        return self._triggers

    def try_create(self, context: BindingContext) -> Binding | None:
        for provider in self._providers:
            binding = provider.try_create(context)
            if binding is not None:
                return binding
        return None

    def try_resolve(
        self,
        attribute: object,
        parameter_type: object,
        parameter_name: str | None = None,
    ) -> Binding | None:
        """Return the first matching binding, or None when nothing matches."""
        return self.try_create(BindingContext(attribute, parameter_type, parameter_name))

    def resolve(
        self,
        attribute: object,
        parameter_type: object,
        parameter_name: str | None = None,
    ) -> Binding:
        """Return the first matching binding.

        Raises:
            UnresolvedBindingError: No provider accepted the parameter.
        """
        binding = self.try_resolve(attribute, parameter_type, parameter_name)
        if binding is None:
            _logger.debug(
                "No binding for %s parameter %s.",
                type(attribute).__qualname__,
                parameter_name,
                event="binding.unresolved",
                context={"parameter_type": repr(parameter_type)},
            )
            raise UnresolvedBindingError(type(attribute), parameter_type)
        _logger.debug(
            "Resolved %s parameter %s.",
            type(attribute).__qualname__,
            parameter_name,
            event="binding.resolved",
            context={"parameter_type": repr(parameter_type)},
        )
        return binding

    def try_resolve_trigger(
        self,
        attribute: object,
        parameter_type: object,
        parameter_name: str | None = None,
    ) -> TriggerBinding | None:
        """Return the first matching trigger binding, or None."""
        context = BindingContext(attribute, parameter_type, parameter_name)
        for provider in self._triggers:
            binding = provider.try_create_trigger(context)
            if binding is not None:
                return binding
        return None

    def resolve_trigger(
        self,
        attribute: object,
        parameter_type: object,
        parameter_name: str | None = None,
    ) -> TriggerBinding:
        """Return the first matching trigger binding.

        Raises:
            UnresolvedBindingError: No trigger provider accepted the parameter.
        """
        binding = self.try_resolve_trigger(attribute, parameter_type, parameter_name)
        if binding is None:
            raise UnresolvedBindingError(type(attribute), parameter_type)
        return binding

    def rule_providers(self) -> tuple[BindingRuleProvider, ...]:
        """Providers and triggers that answer design-time questions, in order."""
        return tuple(
            provider
            for provider in (*self._providers, *self._triggers)
            if isinstance(provider, BindingRuleProvider)
        )


__all__ = ["CompositeBindingProvider"]

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

"""Ordered registry of attribute descriptors and binding rules.

The registry is append-only while extensions initialize and read-only once
sealed. Order is significant: providers are offered parameters in the
order their rules were flushed, followed by trailing catch-all providers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ..attributes.descriptor import AttributeDescriptor
from ..errors import (
    AmbiguousAttributeNameError,
    BindingConfigurationError,
    RegistrySealedError,
)
from ..types import Access
from .protocols import (
    Binding,
    BindingContext,
    BindingProvider,
    BindingRuleProvider,
    TriggerBinding,
    TriggerBindingProvider,
)


@dataclass(slots=True, frozen=True)
class AttributeScopedProvider:
    """Offers ``provider`` only parameters whose attribute is an ``attribute_type``."""

    attribute_type: type[object]
    provider: BindingProvider

    def try_create(self, context: BindingContext) -> Binding | None:
        if not isinstance(context.attribute, self.attribute_type):
            return None
        return self.provider.try_create(context)

    def default_type(
        self, attribute: object, direction: Access, fallback_type: object
    ) -> object | None:
        if not isinstance(attribute, self.attribute_type):
            return None
        if not isinstance(self.provider, BindingRuleProvider):
            return None
        return self.provider.default_type(attribute, direction, fallback_type)


@dataclass(slots=True, frozen=True)
class AttributeScopedTrigger:
    """Offers ``provider`` only parameters whose attribute is an ``attribute_type``."""

    attribute_type: type[object]
    provider: TriggerBindingProvider

    def try_create_trigger(self, context: BindingContext) -> TriggerBinding | None:
        if not isinstance(context.attribute, self.attribute_type):
            return None
        return self.provider.try_create_trigger(context)

    def default_type(
        self, attribute: object, direction: Access, fallback_type: object
    ) -> object | None:
        if not isinstance(attribute, self.attribute_type):
            return None
        if not isinstance(self.provider, BindingRuleProvider):
            return None
        return self.provider.default_type(attribute, direction, fallback_type)


@dataclass(slots=True, frozen=True)
class RuleEntry:
    """A committed binding rule: an attribute and its ordered binders.

    A rule carries either binders or a single trigger, never both.
    """

    descriptor: AttributeDescriptor
    binders: tuple[BindingProvider, ...] = ()
    trigger: TriggerBindingProvider | None = None

    @property
    def is_trigger(self) -> bool:
        return self.trigger is not None


class ProviderRegistry:
    """Append-only catalog of attributes and binding rules.

    Example::

        registry = ProviderRegistry()
        registry.add_attribute(AttributeDescriptor.of(BlobAttribute))
        registry.add_rule(RuleEntry(descriptor, binders=(provider,)))
        registry.seal()

        registry.descriptor_for_name("Blob")
        registry.providers()
    """

    __slots__ = (
        "_by_name",
        "_by_type",
        "_cross_cutting",
        "_rules",
        "_sealed",
        "_trailing",
    )

    def __init__(self) -> None:
        super().__init__()
        self._by_name: dict[str, AttributeDescriptor] = {}
        self._by_type: dict[type[object], AttributeDescriptor] = {}
        self._cross_cutting: list[AttributeDescriptor] = []
        self._rules: list[RuleEntry] = []
        self._trailing: list[BindingProvider] = []
        self._sealed = False

    # === Registration ===

    def add_attribute(
        self, descriptor: AttributeDescriptor, *, cross_cutting: bool = False
    ) -> AttributeDescriptor:
        """Register ``descriptor``; re-registering the same type is a no-op.

        Cross-cutting attributes are materialized from bag keys the primary
        attribute leaves unmatched, in the order they were registered.

        Raises:
            AmbiguousAttributeNameError: The name belongs to another type.
            BindingConfigurationError: The type is registered under another name.
        """
        self._require_open()
        existing = self._by_name.get(descriptor.name)
        if existing is not None and existing.attribute_type is not descriptor.attribute_type:
            raise AmbiguousAttributeNameError(
                descriptor.name, existing.attribute_type, descriptor.attribute_type
            )
        registered = self._by_type.get(descriptor.attribute_type)
        if registered is not None:
            if registered.name != descriptor.name:
                raise BindingConfigurationError(
                    f"{descriptor.attribute_type.__qualname__} is already "
                    f"registered as {registered.name!r}"
                )
            descriptor = registered
        else:
            self._by_name[descriptor.name] = descriptor
            self._by_type[descriptor.attribute_type] = descriptor
        if cross_cutting and descriptor not in self._cross_cutting:
            self._cross_cutting.append(descriptor)
        return descriptor

    def add_rule(self, rule: RuleEntry) -> None:
        """Append a rule, registering its descriptor if needed."""
        self._require_open()
        _ = self.add_attribute(rule.descriptor)
        self._rules.append(rule)

    def add_trailing_provider(self, provider: BindingProvider) -> None:
        """Append a catch-all provider consulted after every rule."""
        self._require_open()
        self._trailing.append(provider)

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    # === Queries ===

    def descriptor_for_name(self, name: str) -> AttributeDescriptor | None:
        return self._by_name.get(name)

    def descriptor_for_type(self, attribute_type: type[object]) -> AttributeDescriptor | None:
        return self._by_type.get(attribute_type)

    @property
    def descriptors(self) -> Mapping[str, AttributeDescriptor]:
        return MappingProxyType(self._by_name)

    @property
    def cross_cutting(self) -> tuple[AttributeDescriptor, ...]:
        return tuple(self._cross_cutting)

    @property
    def rules(self) -> tuple[RuleEntry, ...]:
        return tuple(self._rules)

    def providers(self) -> tuple[BindingProvider, ...]:
        """Return binding providers in resolution order."""
        scoped: list[BindingProvider] = [
            AttributeScopedProvider(rule.descriptor.attribute_type, binder)
            for rule in self._rules
            for binder in rule.binders
        ]
        return (*scoped, *self._trailing)

    def triggers(self) -> tuple[TriggerBindingProvider, ...]:
        """Return trigger providers in resolution order."""
        return tuple(
            AttributeScopedTrigger(rule.descriptor.attribute_type, rule.trigger)
            for rule in self._rules
            if rule.trigger is not None
        )

    def _require_open(self) -> None:
        if self._sealed:
            raise RegistrySealedError("ProviderRegistry")


__all__ = [
    "AttributeScopedProvider",
    "AttributeScopedTrigger",
    "ProviderRegistry",
    "RuleEntry",
]

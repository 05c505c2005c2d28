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

"""Design-time front end over the sealed registries.

Tools that only hold names and loosely-typed data (a function's JSON
metadata, say) use :class:`Tooling` to turn them back into attribute
instances, ask which parameter type a binding prefers, and locate the
modules that define the types involved.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator, Mapping
from types import MappingProxyType, ModuleType

from .attributes.descriptor import AttributeDescriptor
from .attributes.materialize import materialize, to_property_bag
from .bindings.composite import CompositeBindingProvider
from .bindings.input import BindToInputBindingProvider
from .bindings.registry import ProviderRegistry
from .converters import ConverterRegistry
from .converters._generics import iter_component_types
from .errors import ModuleNotResolvedError, UnsupportedDirectionError
from .logging import StructuredLogger, get_logger
from .types import Access, BagValue, PropertyBag

_logger: StructuredLogger = get_logger(__name__, context={"component": "tooling"})

_IGNORED_MODULES = frozenset({"builtins"})


def _parse_access(direction: Access | str) -> Access | None:
    if isinstance(direction, Access):
        return direction
    lowered = direction.strip().lower()
    for member in Access:
        if lowered in (member.name.lower(), member.value):
            return member
    return None


class Tooling:
    """Read-only resolver for design-time callers.

    Example::

        tooling = engine.tooling
        attribute_type = tooling.resolve_attribute_type("Blob")
        blob, account = tooling.materialize_attributes(
            attribute_type, {"path": "in/x", "connection": "primary"}
        )
        tooling.default_parameter_type(blob, Access.READ)
    """

    __slots__ = ("_composite", "_converters", "_modules", "_registry", "_short_names")

    def __init__(
        self,
        registry: ProviderRegistry,
        converters: ConverterRegistry,
        composite: CompositeBindingProvider,
    ) -> None:
        super().__init__()
        self._registry = registry
        self._converters = converters
        self._composite = composite
        self._modules: dict[str, ModuleType] = {}
        self._short_names: dict[str, ModuleType] = {}
        for module in self._iter_modules():
            if module.__name__ in self._modules:
                continue
            self._modules[module.__name__] = module
            _ = self._short_names.setdefault(module.__name__.rpartition(".")[2], module)

    # === Attributes ===

    def resolve_attribute_type(self, name: str) -> type[object] | None:
        """Return the attribute type registered under ``name``, or None."""
        descriptor = self._registry.descriptor_for_name(name)
        return descriptor.attribute_type if descriptor is not None else None

    def materialize_attributes(
        self, attribute_type: type[object], bag: PropertyBag
    ) -> tuple[object, ...]:
        """Build ``attribute_type`` from ``bag`` plus any cross-cutting attributes.

        The primary attribute comes first. Keys it leaves unmatched are
        offered to each cross-cutting attribute in registration order; every
        cross-cutting attribute that claims at least one key is appended.
        Keys nobody claims are ignored.

        Raises:
            AttributeMaterializationError: A required property is missing, a
                value cannot be coerced, or two keys differ only by case.
        """
        descriptor = self._descriptor(attribute_type)
        primary, unmatched = materialize(descriptor, bag)
        attributes: list[object] = [primary]
        remaining = list(unmatched)
        for extra in self._registry.cross_cutting:
            if extra.attribute_type is descriptor.attribute_type:
                continue
            claimed = [key for key in remaining if extra.property_for(key) is not None]
            if not claimed:
                continue
            instance, _ = materialize(extra, {key: bag[key] for key in claimed})
            attributes.append(instance)
            remaining = [key for key in remaining if key not in claimed]
        for key in remaining:
            _logger.debug(
                "Ignoring property %r for %s.",
                key,
                descriptor.name,
                event="tooling.key_ignored",
                context={"attribute": descriptor.name, "key": key},
            )
        return tuple(attributes)

    def to_property_bag(self, attribute: object) -> dict[str, BagValue]:
        """Serialize ``attribute`` back into a bag keyed by camelCase names."""
        return to_property_bag(self._descriptor(type(attribute)), attribute)

    def default_parameter_type(
        self,
        attribute: object,
        direction: Access | str,
        fallback_type: object = object,
    ) -> object:
        """Return the parameter type a tool should assume for ``attribute``.

        ``direction`` may be an :class:`Access` or a string naming a member by
        name or value in any case (``"read"``, ``"IN"``, ``"read_write"``).

        Raises:
            UnsupportedDirectionError: ``direction`` names no access mode, or
                no rule answers for it.
        """
        access = _parse_access(direction)
        if access is None:
            raise UnsupportedDirectionError(type(attribute), direction)
        for provider in self._composite.rule_providers():
            result = provider.default_type(attribute, access, fallback_type)
            if result is not None:
                return result
        raise UnsupportedDirectionError(type(attribute), access)

    # === Modules ===

    @property
    def modules(self) -> Mapping[str, ModuleType]:
        """Modules referenced by registered types, keyed by full name."""
        return MappingProxyType(self._modules)

    def try_resolve_module(self, name: str) -> ModuleType | None:
        """Look a module up by full dotted name or by its last component."""
        module = self._modules.get(name)
        if module is not None:
            return module
        return self._short_names.get(name)

    def resolve_module(self, name: str) -> ModuleType:
        module = self.try_resolve_module(name)
        if module is None:
            raise ModuleNotResolvedError(name)
        return module

    # === Internals ===

    def _descriptor(self, attribute_type: type[object]) -> AttributeDescriptor:
        descriptor = self._registry.descriptor_for_type(attribute_type)
        if descriptor is not None:
            return descriptor
        return AttributeDescriptor.of(attribute_type)

    def _iter_modules(self) -> Iterator[ModuleType]:
        for name in self._iter_module_names():
            if name in _IGNORED_MODULES:
                continue
            module = sys.modules.get(name)
            if module is not None:
                yield module

    def _iter_module_names(self) -> Iterator[str]:
        for entry in self._converters.entries():
            for typ in (entry.key.source, entry.key.dest):
                yield from (cls.__module__ for cls in iter_component_types(typ))
            yield from _module_of(entry.func)
        for descriptor in self._registry.descriptors.values():
            yield descriptor.attribute_type.__module__
        for rule in self._registry.rules:
            for binder in rule.binders:
                if isinstance(binder, BindToInputBindingProvider):
                    yield from (
                        cls.__module__ for cls in iter_component_types(binder.value_type)
                    )
                    yield from _module_of(binder.builder.origin)
                else:
                    yield type(binder).__module__
            if rule.trigger is not None:
                yield type(rule.trigger).__module__


def _module_of(obj: object) -> Iterator[str]:
    module = getattr(obj, "__module__", None)
    if isinstance(module, str):
        yield module


__all__ = ["Tooling"]

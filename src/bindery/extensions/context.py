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

"""Per-extension scratch space with deferred commits."""

from __future__ import annotations

from collections.abc import Callable
from functools import partial

from ..attributes.descriptor import AttributeDescriptor
from ..bindings.registry import ProviderRegistry
from ..config import EngineConfig
from ..converters import ConverterEntry, ConverterFunc, ConverterRegistry
from .rule import BindingRule

type PendingUpdate = Callable[[], object]


class PendingConverters:
    """Converter registry view whose registrations wait for the context flush.

    Lookups go straight to the shared registry, so they only see converters
    committed by extensions that finished initializing earlier.
    """

    __slots__ = ("_pending", "_registry")

    def __init__(self, registry: ConverterRegistry, pending: list[PendingUpdate]) -> None:
        super().__init__()
        self._registry = registry
        self._pending = pending

    def register(self, source: object, dest: object, func: ConverterFunc) -> None:
        self._pending.append(partial(self._registry.register, source, dest, func))

    def resolve(self, source: object, dest: object) -> ConverterEntry | None:
        return self._registry.resolve(source, dest)

    def can_convert(self, source: object, dest: object) -> bool:
        return self._registry.can_convert(source, dest)


class ExtensionRegistrationContext:
    """Collects one extension's declarations and commits them on :meth:`flush`.

    Deferral happens at two levels: a :class:`BindingRule` holds its binders
    until its own flush, and the context holds every rule flush, attribute
    registration, and converter registration until the engine calls
    :meth:`flush` after ``initialize`` has returned. An initializer that
    raises therefore leaves nothing behind.

    A flush itself is not transactional, see :meth:`flush`.
    """

    __slots__ = (
        "_config",
        "_converters",
        "_extension_name",
        "_pending",
        "_registry",
        "_shared_converters",
    )

    def __init__(
        self,
        *,
        converters: ConverterRegistry,
        registry: ProviderRegistry,
        config: EngineConfig | None = None,
        extension_name: str = "extension",
    ) -> None:
        super().__init__()
        self._registry = registry
        self._shared_converters = converters
        self._config = config if config is not None else EngineConfig()
        self._extension_name = extension_name
        self._pending: list[PendingUpdate] = []
        self._converters = PendingConverters(converters, self._pending)

    @property
    def converters(self) -> PendingConverters:
        return self._converters

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def extension_name(self) -> str:
        return self._extension_name

    @property
    def pending(self) -> int:
        """Number of updates waiting for :meth:`flush`."""
        return len(self._pending)

    def add_binding_rule(
        self, attribute_type: type[object], *, name: str | None = None
    ) -> BindingRule:
        """Start a rule for ``attribute_type``; each call yields a new rule."""
        descriptor = AttributeDescriptor.of(attribute_type, name=name)
        rule = BindingRule(
            descriptor,
            self._shared_converters,
            read_default_types=self._config.read_default_types,
        )
        self._pending.append(partial(rule.flush, self._registry))
        return rule

    def add_attribute(
        self,
        attribute_type: type[object],
        *,
        name: str | None = None,
        cross_cutting: bool = False,
    ) -> AttributeDescriptor:
        """Declare an attribute that tooling can name without any binding rule."""
        descriptor = AttributeDescriptor.of(attribute_type, name=name)
        self._pending.append(
            partial(self._registry.add_attribute, descriptor, cross_cutting=cross_cutting)
        )
        return descriptor

    def add_converter(self, source: object, dest: object, func: ConverterFunc) -> None:
        self._converters.register(source, dest, func)

    def flush(self) -> None:
        """Apply pending updates in declaration order, then forget them.

        Updates are applied one at a time against the shared registries. If
        one raises, the updates before it stay committed, the ones after it
        are dropped, and the error propagates. Callers that need all-or-nothing
        semantics must discard the registries on failure, as
        :class:`~bindery.engine.EngineBuilder` does.

        Raises:
            AmbiguousAttributeNameError: An attribute name is already taken by
                another type.
            DuplicateConverterError: A converter pair is already registered
                and the registry is strict.
        """
        pending = list(self._pending)
        self._pending.clear()
        for update in pending:
            _ = update()


__all__ = ["ExtensionRegistrationContext", "PendingConverters", "PendingUpdate"]

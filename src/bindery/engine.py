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

"""Engine assembly: run extensions, seal registries, expose resolvers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Self

from .bindings.builtins import LoggerBindingProvider
from .bindings.composite import CompositeBindingProvider
from .bindings.protocols import Binding, TriggerBinding
from .bindings.registry import ProviderRegistry
from .config import EngineConfig
from .converters import ConverterRegistry
from .errors import BindingConfigurationError, RegistrySealedError
from .extensions.builtins import BuiltinBindingsExtension
from .extensions.context import ExtensionRegistrationContext
from .extensions.protocols import Extension
from .logging import StructuredLogger, get_logger
from .tooling import Tooling

_logger: StructuredLogger = get_logger(__name__, context={"component": "engine"})


@dataclass(slots=True, frozen=True)
class BindingEngine:
    """Sealed registries and the resolvers built over them.

    Safe to share between threads: nothing reachable from here mutates after
    :meth:`EngineBuilder.build` returns.
    """

    config: EngineConfig
    converters: ConverterRegistry
    providers: ProviderRegistry
    composite: CompositeBindingProvider
    tooling: Tooling

    def resolve(
        self,
        attribute: object,
        parameter_type: object,
        parameter_name: str | None = None,
    ) -> Binding:
        """Shortcut for ``composite.resolve``."""
        return self.composite.resolve(attribute, parameter_type, parameter_name)

    def resolve_trigger(
        self,
        attribute: object,
        parameter_type: object,
        parameter_name: str | None = None,
    ) -> TriggerBinding:
        return self.composite.resolve_trigger(attribute, parameter_type, parameter_name)


class EngineBuilder:
    """Collects extensions and turns them into a :class:`BindingEngine`.

    Extensions initialize one at a time in the order they were added, after
    the built-in storage extension when ``include_builtins`` is set. Each
    extension's declarations are committed before the next one starts, so a
    later extension can look up converters an earlier one registered.

    Example::

        engine = (
            EngineBuilder(EngineConfig(strict_converters=True))
            .add_extension(WidgetExtension())
            .build()
        )
        binding = engine.resolve(WidgetAttribute(flag="x"), Widget)

    A builder builds once.
    """

    __slots__ = ("_built", "_config", "_extensions")

    def __init__(self, config: EngineConfig | None = None) -> None:
        super().__init__()
        self._config = config if config is not None else EngineConfig()
        self._extensions: list[Extension] = []
        self._built = False

    @classmethod
    def from_extensions(
        cls, *extensions: Extension, config: EngineConfig | None = None
    ) -> BindingEngine:
        """Build an engine from ``extensions`` in one call."""
        return cls(config).add_extensions(extensions).build()

    @property
    def config(self) -> EngineConfig:
        return self._config

    def add_extension(self, extension: Extension) -> Self:
        """Queue ``extension`` for initialization.

        Raises:
            TypeError: ``extension`` has no ``initialize`` method.
            BindingConfigurationError: The same instance was already added.
            RegistrySealedError: The engine has already been built.
        """
        if self._built:
            raise RegistrySealedError("EngineBuilder")
        if not isinstance(extension, Extension):
            raise TypeError(f"{extension!r} does not implement initialize()")
        if any(existing is extension for existing in self._extensions):
            raise BindingConfigurationError(
                f"{type(extension).__qualname__} instance was already added"
            )
        self._extensions.append(extension)
        return self

    def add_extensions(self, extensions: Iterable[Extension]) -> Self:
        for extension in extensions:
            _ = self.add_extension(extension)
        return self

    def build(self) -> BindingEngine:
        """Initialize every extension and seal the result.

        Raises:
            RegistrySealedError: ``build`` was already called.
            BindingConfigurationError: An extension declared conflicting rules.
        """
        if self._built:
            raise RegistrySealedError("EngineBuilder")
        self._built = True

        converters = ConverterRegistry(strict=self._config.strict_converters)
        registry = ProviderRegistry()
        extensions: list[Extension] = list(self._extensions)
        if self._config.include_builtins:
            extensions.insert(0, BuiltinBindingsExtension())

        for extension in extensions:
            name = type(extension).__qualname__
            context = ExtensionRegistrationContext(
                converters=converters,
                registry=registry,
                config=self._config,
                extension_name=name,
            )
            extension.initialize(context)
            pending = context.pending
            context.flush()
            _logger.debug(
                "Initialized extension %s.",
                name,
                event="extension.initialized",
                context={"extension": name, "updates": pending},
            )

        if self._config.include_builtins:
            registry.add_trailing_provider(LoggerBindingProvider())
        converters.seal()
        registry.seal()

        composite = CompositeBindingProvider(registry.providers(), registry.triggers())
        tooling = Tooling(registry, converters, composite)
        _logger.info(
            "Binding engine sealed.",
            event="engine.sealed",
            context={
                "extensions": len(extensions),
                "rules": len(registry.rules),
                "converters": len(converters),
                "providers": len(composite.providers),
            },
        )
        return BindingEngine(
            config=self._config,
            converters=converters,
            providers=registry,
            composite=composite,
            tooling=tooling,
        )


__all__ = ["BindingEngine", "EngineBuilder"]

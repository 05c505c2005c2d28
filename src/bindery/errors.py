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

"""Base exception hierarchy for :mod:`bindery`.

Errors fall into two families. Configuration errors are raised while
extensions declare their bindings and indicate an authoring mistake; they
stop the engine from sealing. Resolution errors are raised by lookups
against a sealed engine and are expected, recoverable conditions for
callers probing what can be bound.
"""

from __future__ import annotations


def _type_name(typ: object) -> str:
    return getattr(typ, "__qualname__", None) or repr(typ)


class BinderyError(Exception):
    """Base class for all bindery exceptions.

    Example:
        Catch any bindery-specific error::

            try:
                engine = builder.build()
            except BinderyError as e:
                logger.error("Binding setup failed: %s", e)

    Note:
        Subclasses also inherit from standard exception types (``ValueError``,
        ``LookupError``, ``RuntimeError``) so callers can handle them with
        familiar handlers.
    """


# === Registration-time errors ===


class BindingConfigurationError(BinderyError, RuntimeError):
    """Base class for errors raised while extensions declare bindings."""


class DuplicateRuleConflictError(BindingConfigurationError, ValueError):
    """A binding rule mixed trigger and non-trigger binders.

    An attribute is either a trigger or an input/output binding within one
    rule, never both. A second trigger on the same rule is rejected too.
    """

    def __init__(self, attribute_type: type[object], reason: str) -> None:
        self.attribute_type = attribute_type
        self.reason = reason
        super().__init__(
            f"Conflicting binding rule for {_type_name(attribute_type)}: {reason}"
        )


class AmbiguousAttributeNameError(BindingConfigurationError, ValueError):
    """Two different attribute types were registered under the same name."""

    def __init__(
        self, name: str, existing: type[object], duplicate: type[object]
    ) -> None:
        self.name = name
        self.existing = existing
        self.duplicate = duplicate
        super().__init__(
            f"Attribute name {name!r} is claimed by both "
            f"{_type_name(existing)} and {_type_name(duplicate)}"
        )


class DuplicateConverterError(BindingConfigurationError, ValueError):
    """A converter was registered twice for the same key in strict mode."""

    def __init__(self, source: object, dest: object) -> None:
        self.source = source
        self.dest = dest
        super().__init__(
            f"Duplicate converter for {_type_name(source)} -> {_type_name(dest)}"
        )


class AmbiguousConverterError(BindingConfigurationError):
    """Several open converter rules match a request equally well."""

    def __init__(
        self, source: object, dest: object, candidates: tuple[object, ...]
    ) -> None:
        self.source = source
        self.dest = dest
        self.candidates = candidates
        listed = ", ".join(repr(candidate) for candidate in candidates)
        super().__init__(
            f"Ambiguous converter for {_type_name(source)} -> "
            f"{_type_name(dest)}: {listed}"
        )


class RegistrySealedError(BindingConfigurationError):
    """A registration was attempted after the registry was sealed."""

    def __init__(self, registry: str) -> None:
        self.registry = registry
        super().__init__(f"{registry} is sealed; no further registrations")


# === Resolution-time errors ===


class BindingResolutionError(BinderyError, LookupError):
    """Base class for lookups against a sealed engine that found nothing."""


class UnresolvedBindingError(BindingResolutionError):
    """No provider produced a binding for the parameter."""

    def __init__(self, attribute_type: type[object], parameter_type: object) -> None:
        self.attribute_type = attribute_type
        self.parameter_type = parameter_type
        super().__init__(
            f"Can't bind {_type_name(attribute_type)} to type "
            f"'{_type_name(parameter_type)}'"
        )


class UnsupportedDirectionError(BindingResolutionError):
    """No binding rule supports the requested access direction."""

    def __init__(self, attribute_type: type[object], direction: object) -> None:
        self.attribute_type = attribute_type
        self.direction = direction
        super().__init__(
            f"No binding for {_type_name(attribute_type)} supports "
            f"direction {direction!r}"
        )


class ModuleNotResolvedError(BindingResolutionError):
    """The name does not match any module contributing registered types."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No registered module named {name!r}")


# === Value errors ===


class AttributeMaterializationError(BinderyError, ValueError):
    """A property bag could not be turned into an attribute instance."""

    def __init__(self, attribute_type: type[object], reason: str) -> None:
        self.attribute_type = attribute_type
        self.reason = reason
        super().__init__(f"{_type_name(attribute_type)}: {reason}")


class ConversionError(BinderyError, ValueError):
    """A converter rejected its input."""


__all__ = [
    "AmbiguousAttributeNameError",
    "AmbiguousConverterError",
    "AttributeMaterializationError",
    "BinderyError",
    "BindingConfigurationError",
    "BindingResolutionError",
    "ConversionError",
    "DuplicateConverterError",
    "DuplicateRuleConflictError",
    "ModuleNotResolvedError",
    "RegistrySealedError",
    "UnresolvedBindingError",
    "UnsupportedDirectionError",
]

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

"""Fluent builder declaring how one attribute type binds."""

from __future__ import annotations

from typing import Self

from ..attributes.descriptor import AttributeDescriptor
from ..bindings.input import BindToInputBindingProvider
from ..bindings.pattern import PatternMatcher
from ..bindings.protocols import BindingProvider, TriggerBindingProvider
from ..bindings.registry import ProviderRegistry, RuleEntry
from ..config import DEFAULT_READ_TYPES
from ..converters import ConverterRegistry
from ..errors import DuplicateRuleConflictError, RegistrySealedError
from ..logging import StructuredLogger, get_logger

_logger: StructuredLogger = get_logger(__name__, context={"component": "extensions"})


class BindingRule:
    """Accumulates binders for one attribute type until flushed.

    Obtain instances from
    :meth:`ExtensionRegistrationContext.add_binding_rule`. Nothing declared
    here is visible to resolution until the owning context flushes, which
    happens after the extension's ``initialize`` returns.

    Example::

        rule = context.add_binding_rule(WidgetAttribute)
        rule.bind_to_input(lambda attr: Widget(attr.flag), value_type=Widget)
        rule.bind_to_input(SecretWidgetBuilder, vault_client, value_type=SecretWidget)

    A rule is either a trigger rule or an input/output rule.
    :meth:`bind_to_trigger` after any other binder, or any other binder
    after :meth:`bind_to_trigger`, raises ``DuplicateRuleConflictError``.
    """

    __slots__ = (
        "_binders",
        "_converters",
        "_descriptor",
        "_flushed",
        "_read_default_types",
        "_trigger",
    )

    def __init__(
        self,
        descriptor: AttributeDescriptor,
        converters: ConverterRegistry,
        *,
        read_default_types: tuple[type[object], ...] = DEFAULT_READ_TYPES,
    ) -> None:
        super().__init__()
        self._descriptor = descriptor
        self._converters = converters
        self._read_default_types = read_default_types
        self._binders: list[BindingProvider] = []
        self._trigger: TriggerBindingProvider | None = None
        self._flushed = False

    @property
    def descriptor(self) -> AttributeDescriptor:
        return self._descriptor

    @property
    def attribute_type(self) -> type[object]:
        return self._descriptor.attribute_type

    def bind_to_input(
        self,
        converter: object,
        *constructor_args: object,
        value_type: object = None,
    ) -> Self:
        """Bind the attribute to a value built from the resolved attribute instance.

        Args:
            converter: A function or ``async def`` function taking the
                attribute, an object with ``convert``/``convert_async``, or a
                class implementing either.
            *constructor_args: Arguments for instantiating ``converter`` when
                it is a class.
            value_type: Type of the produced value. Inferred from the return
                annotation when omitted.

        Raises:
            DuplicateRuleConflictError: The rule already has a trigger.
            TypeError: The converter shape is unsupported or its value type
                cannot be inferred.
        """
        self._require_input_rule()
        builder = PatternMatcher.adapt(converter, *constructor_args)
        resolved_type = (
            value_type if value_type is not None else PatternMatcher.value_type(converter)
        )
        if resolved_type is None:
            raise TypeError(
                f"Cannot infer the value type of {converter!r}; pass value_type="
            )
        self._binders.append(
            BindToInputBindingProvider(
                self.attribute_type,
                resolved_type,
                builder,
                self._converters,
                read_default_types=self._read_default_types,
            )
        )
        return self

    def bind(self, provider: BindingProvider) -> Self:
        """Add a provider with full control over binding creation.

        Raises:
            DuplicateRuleConflictError: The rule already has a trigger.
        """
        self._require_input_rule()
        if not isinstance(provider, BindingProvider):
            raise TypeError(f"{provider!r} does not implement try_create()")
        self._binders.append(provider)
        return self

    def bind_to_trigger(self, trigger: TriggerBindingProvider) -> None:
        """Make the attribute a trigger handled by ``trigger``.

        Raises:
            DuplicateRuleConflictError: The rule already has binders or a trigger.
        """
        self._require_open()
        if self._binders:
            raise DuplicateRuleConflictError(
                self.attribute_type,
                "the same attribute can't be bound to trigger and non-trigger bindings",
            )
        if self._trigger is not None:
            raise DuplicateRuleConflictError(
                self.attribute_type, "a trigger is already bound"
            )
        if not isinstance(trigger, TriggerBindingProvider):
            raise TypeError(f"{trigger!r} does not implement try_create_trigger()")
        self._trigger = trigger

    def flush(self, registry: ProviderRegistry) -> None:
        """Commit the accumulated binders to ``registry``; later calls do nothing."""
        if self._flushed:
            return
        self._flushed = True
        binders, self._binders = tuple(self._binders), []
        trigger, self._trigger = self._trigger, None
        registry.add_rule(
            RuleEntry(descriptor=self._descriptor, binders=binders, trigger=trigger)
        )
        _logger.debug(
            "Flushed binding rule for %s.",
            self._descriptor.name,
            event="rule.flushed",
            context={
                "attribute": self._descriptor.name,
                "binders": len(binders),
                "trigger": trigger is not None,
            },
        )

    def _require_open(self) -> None:
        if self._flushed:
            raise RegistrySealedError(f"BindingRule[{self._descriptor.name}]")

    def _require_input_rule(self) -> None:
        self._require_open()
        if self._trigger is not None:
            raise DuplicateRuleConflictError(
                self.attribute_type,
                "the same attribute can't be bound to trigger and non-trigger bindings",
            )


__all__ = ["BindingRule"]

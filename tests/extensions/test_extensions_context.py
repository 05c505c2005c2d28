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

"""Tests for deferred registration through ExtensionRegistrationContext."""

from __future__ import annotations

import pytest

from bindery.attributes import StorageAccountAttribute
from bindery.bindings import ProviderRegistry
from bindery.config import EngineConfig
from bindery.converters import ConverterRegistry
from bindery.errors import AmbiguousAttributeNameError
from bindery.extensions import (
    STORAGE_ATTRIBUTES,
    BuiltinBindingsExtension,
    Extension,
    ExtensionRegistrationContext,
)
from tests.helpers import ProbeAttribute, ProbeExtension, Widget, build_widget


def _context(
    converters: ConverterRegistry | None = None,
    registry: ProviderRegistry | None = None,
) -> tuple[ExtensionRegistrationContext, ConverterRegistry, ProviderRegistry]:
    converters = converters if converters is not None else ConverterRegistry()
    registry = registry if registry is not None else ProviderRegistry()
    context = ExtensionRegistrationContext(
        converters=converters, registry=registry, config=EngineConfig()
    )
    return context, converters, registry


class TestDeferral:
    def test_nothing_is_visible_before_flush(self) -> None:
        context, converters, registry = _context()

        ProbeExtension().initialize(context)

        assert context.pending == 2
        assert len(converters) == 0
        assert registry.rules == ()
        assert converters.resolve(Widget, dict) is None

    def test_failed_initialize_commits_nothing(self) -> None:
        context, converters, registry = _context()

        with pytest.raises(RuntimeError):
            _ = context.add_binding_rule(ProbeAttribute).bind_to_input(build_widget)
            context.add_converter(Widget, str, str)
            raise RuntimeError("initialize failed")

        assert registry.rules == ()
        assert len(converters) == 0

    def test_flush_commits_in_declaration_order(self) -> None:
        context, converters, registry = _context()
        context.add_converter(int, str, str)
        _ = context.add_binding_rule(ProbeAttribute).bind_to_input(build_widget)
        _ = context.add_attribute(StorageAccountAttribute, cross_cutting=True)

        context.flush()

        assert context.pending == 0
        assert converters.resolve(int, str) is not None
        assert [rule.descriptor.name for rule in registry.rules] == ["Probe"]
        assert [d.name for d in registry.cross_cutting] == ["StorageAccount"]

    def test_binders_added_after_scheduling_are_flushed(self) -> None:
        context, _, registry = _context()
        rule = context.add_binding_rule(ProbeAttribute)
        _ = rule.bind_to_input(build_widget)

        context.flush()

        assert len(registry.rules[0].binders) == 1

    def test_flush_is_not_replayed(self) -> None:
        context, converters, registry = _context()
        ProbeExtension().initialize(context)

        context.flush()
        context.flush()

        assert len(registry.rules) == 1
        assert len(converters) == 1

    def test_each_add_binding_rule_creates_a_new_rule(self) -> None:
        context, _, registry = _context()
        first = context.add_binding_rule(ProbeAttribute)
        second = context.add_binding_rule(ProbeAttribute)

        context.flush()

        assert first is not second
        assert len(registry.rules) == 2

    def test_converter_lookups_see_committed_state(self) -> None:
        converters = ConverterRegistry()
        _ = converters.register(Widget, dict, dict)
        context, _, _ = _context(converters=converters)

        assert context.converters.can_convert(Widget, dict)
        assert context.converters.resolve(Widget, dict) is not None

    def test_failing_flush_keeps_earlier_updates_and_drops_later_ones(self) -> None:
        context, converters, registry = _context()
        context.add_converter(int, str, str)
        _ = context.add_attribute(StorageAccountAttribute)
        _ = context.add_attribute(ProbeAttribute, name="StorageAccount")
        context.add_converter(float, str, str)

        with pytest.raises(AmbiguousAttributeNameError):
            context.flush()

        assert context.pending == 0
        assert converters.resolve(int, str) is not None
        assert registry.descriptor_for_type(StorageAccountAttribute) is not None
        assert registry.descriptor_for_type(ProbeAttribute) is None
        assert len(converters) == 1


class TestBuiltinExtension:
    def test_satisfies_extension_protocol(self) -> None:
        assert isinstance(BuiltinBindingsExtension(), Extension)
        assert isinstance(ProbeExtension(), Extension)
        assert not isinstance(object(), Extension)

    def test_declares_storage_attributes(self) -> None:
        context, converters, registry = _context()

        BuiltinBindingsExtension().initialize(context)
        context.flush()

        assert [registry.descriptor_for_type(t) is not None for t in STORAGE_ATTRIBUTES] == [
            True
        ] * len(STORAGE_ATTRIBUTES)
        assert [d.attribute_type for d in registry.cross_cutting] == [StorageAccountAttribute]
        assert len(converters) == 1
        assert registry.rules == ()

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

"""Tests for ProviderRegistry ordering and attribute naming."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from bindery.attributes import AttributeDescriptor, BlobAttribute, StorageAccountAttribute
from bindery.bindings import (
    AttributeScopedProvider,
    BindingContext,
    LoggerBindingProvider,
    ProviderRegistry,
    RuleEntry,
    ValueBinding,
)
from bindery.errors import (
    AmbiguousAttributeNameError,
    BindingConfigurationError,
    RegistrySealedError,
)


@dataclass
class BlobAttributeV2:
    blob_path: str


class NullProvider:
    def try_create(self, context: BindingContext) -> ValueBinding | None:
        return None


class TestAttributes:
    def test_lookup_by_name_and_type(self) -> None:
        registry = ProviderRegistry()
        descriptor = registry.add_attribute(AttributeDescriptor.of(BlobAttribute))

        assert registry.descriptor_for_name("Blob") is descriptor
        assert registry.descriptor_for_type(BlobAttribute) is descriptor
        assert registry.descriptor_for_name("blob") is None
        assert list(registry.descriptors) == ["Blob"]

    def test_reregistering_same_type_is_idempotent(self) -> None:
        registry = ProviderRegistry()
        first = registry.add_attribute(AttributeDescriptor.of(BlobAttribute))
        second = registry.add_attribute(AttributeDescriptor.of(BlobAttribute))

        assert second is first
        assert len(registry.descriptors) == 1

    def test_name_clash_is_rejected(self) -> None:
        registry = ProviderRegistry()
        _ = registry.add_attribute(AttributeDescriptor.of(BlobAttribute))

        with pytest.raises(AmbiguousAttributeNameError) as excinfo:
            _ = registry.add_attribute(AttributeDescriptor.of(BlobAttributeV2, name="Blob"))

        assert excinfo.value.name == "Blob"
        assert excinfo.value.existing is BlobAttribute
        assert excinfo.value.duplicate is BlobAttributeV2

    def test_same_type_under_new_name_is_rejected(self) -> None:
        registry = ProviderRegistry()
        _ = registry.add_attribute(AttributeDescriptor.of(BlobAttribute))

        with pytest.raises(BindingConfigurationError, match="already registered"):
            _ = registry.add_attribute(AttributeDescriptor.of(BlobAttribute, name="Blob2"))

    def test_cross_cutting_attributes_keep_order(self) -> None:
        registry = ProviderRegistry()
        _ = registry.add_attribute(
            AttributeDescriptor.of(StorageAccountAttribute), cross_cutting=True
        )
        _ = registry.add_attribute(
            AttributeDescriptor.of(StorageAccountAttribute), cross_cutting=True
        )
        _ = registry.add_attribute(AttributeDescriptor.of(BlobAttribute))

        assert [d.name for d in registry.cross_cutting] == ["StorageAccount"]


class TestRules:
    def test_providers_follow_rule_order_then_trailing(self) -> None:
        registry = ProviderRegistry()
        first, second, third = NullProvider(), NullProvider(), NullProvider()
        trailing = LoggerBindingProvider()
        descriptor = AttributeDescriptor.of(BlobAttribute)
        registry.add_rule(RuleEntry(descriptor, binders=(first, second)))
        registry.add_trailing_provider(trailing)
        registry.add_rule(RuleEntry(descriptor, binders=(third,)))

        providers = registry.providers()

        assert [
            p.provider if isinstance(p, AttributeScopedProvider) else p for p in providers
        ] == [first, second, third, trailing]
        assert registry.descriptor_for_name("Blob") is not None
        assert registry.triggers() == ()

    def test_sealed_registry_rejects_changes(self) -> None:
        registry = ProviderRegistry()
        registry.seal()

        assert registry.sealed
        with pytest.raises(RegistrySealedError):
            _ = registry.add_attribute(AttributeDescriptor.of(BlobAttribute))
        with pytest.raises(RegistrySealedError):
            registry.add_trailing_provider(LoggerBindingProvider())

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

"""End-to-end tests for the design-time Tooling front end."""

from __future__ import annotations

import sys

import pytest

import tests.helpers.probes as probes_module
from bindery import BindingEngine
from bindery.attributes import (
    BlobAttribute,
    BlobTriggerAttribute,
    QueueAttribute,
    QueueTriggerAttribute,
    StorageAccountAttribute,
    TableAttribute,
)
from bindery.errors import (
    AttributeMaterializationError,
    ModuleNotResolvedError,
    UnsupportedDirectionError,
)
from bindery.types import Access
from tests.helpers import ProbeAttribute, Widget


class TestProbeExtension:
    def test_full_tooling_flow(self, probe_engine: BindingEngine) -> None:
        tooling = probe_engine.tooling

        attribute_type = tooling.resolve_attribute_type("Probe")
        assert attribute_type is ProbeAttribute

        (attribute,) = tooling.materialize_attributes(attribute_type, {"Flag": "xyz"})
        assert attribute == ProbeAttribute(flag="xyz")

        assert tooling.default_parameter_type(attribute, Access.READ, object) is dict
        with pytest.raises(UnsupportedDirectionError) as excinfo:
            _ = tooling.default_parameter_type(attribute, Access.WRITE, object)
        assert excinfo.value.direction is Access.WRITE
        assert excinfo.value.attribute_type is ProbeAttribute

        assert probe_engine.resolve(attribute, Widget).bind() == Widget("xyz")
        assert probe_engine.resolve(attribute, dict).bind() == {"value": "xyz"}

    def test_default_type_is_stable(self, probe_engine: BindingEngine) -> None:
        tooling = probe_engine.tooling
        attribute = ProbeAttribute("a")

        first = tooling.default_parameter_type(attribute, Access.READ, Widget)
        second = tooling.default_parameter_type(attribute, Access.READ, Widget)

        assert first is second is dict

    def test_direction_accepts_strings(self, probe_engine: BindingEngine) -> None:
        assert (
            probe_engine.tooling.default_parameter_type(ProbeAttribute("a"), "in") is dict
        )

    @pytest.mark.parametrize("direction", ["read", " Read ", "IN"])
    def test_direction_accepts_member_names_in_any_case(
        self, probe_engine: BindingEngine, direction: str
    ) -> None:
        assert (
            probe_engine.tooling.default_parameter_type(ProbeAttribute("a"), direction)
            is dict
        )

    def test_named_direction_without_a_rule_is_unsupported(
        self, probe_engine: BindingEngine
    ) -> None:
        with pytest.raises(UnsupportedDirectionError) as excinfo:
            _ = probe_engine.tooling.default_parameter_type(ProbeAttribute("a"), "WRITE")
        assert excinfo.value.direction is Access.WRITE

    def test_unknown_direction_is_unsupported(self, probe_engine: BindingEngine) -> None:
        with pytest.raises(UnsupportedDirectionError) as excinfo:
            _ = probe_engine.tooling.default_parameter_type(ProbeAttribute("a"), "bogus")
        assert excinfo.value.direction == "bogus"
        assert excinfo.value.attribute_type is ProbeAttribute

    def test_module_resolution_by_short_and_full_name(
        self, probe_engine: BindingEngine
    ) -> None:
        tooling = probe_engine.tooling

        assert tooling.try_resolve_module("tests.helpers.probes") is probes_module
        assert tooling.try_resolve_module("probes") is probes_module
        assert tooling.resolve_module("probes") is sys.modules[Widget.__module__]

    def test_unknown_module(self, probe_engine: BindingEngine) -> None:
        tooling = probe_engine.tooling

        assert "builtins" not in tooling.modules
        assert tooling.try_resolve_module("nowhere") is None
        with pytest.raises(ModuleNotResolvedError) as excinfo:
            _ = tooling.resolve_module("nowhere")
        assert excinfo.value.name == "nowhere"

    def test_unknown_attribute_name(self, probe_engine: BindingEngine) -> None:
        assert probe_engine.tooling.resolve_attribute_type("Nope") is None


class TestBuiltinAttributes:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Blob", BlobAttribute),
            ("BlobTrigger", BlobTriggerAttribute),
            ("Table", TableAttribute),
            ("Queue", QueueAttribute),
            ("QueueTrigger", QueueTriggerAttribute),
            ("StorageAccount", StorageAccountAttribute),
        ],
    )
    def test_names_resolve(
        self, probe_engine: BindingEngine, name: str, expected: type[object]
    ) -> None:
        assert probe_engine.tooling.resolve_attribute_type(name) is expected

    def test_builtins_can_be_disabled(self, bare_engine: BindingEngine) -> None:
        assert bare_engine.tooling.resolve_attribute_type("Blob") is None
        assert bare_engine.tooling.resolve_attribute_type("Probe") is ProbeAttribute

    def test_connection_produces_storage_account(self, probe_engine: BindingEngine) -> None:
        attributes = probe_engine.tooling.materialize_attributes(
            BlobAttribute, {"path": "x", "direction": "in", "connection": "cx1"}
        )

        assert attributes == (
            BlobAttribute(blob_path="x", access=Access.READ),
            StorageAccountAttribute(account="cx1"),
        )

    def test_unclaimed_keys_are_ignored_and_logged(
        self, probe_engine: BindingEngine, debug_logs: pytest.LogCaptureFixture
    ) -> None:
        attributes = probe_engine.tooling.materialize_attributes(
            QueueAttribute, {"QueueName": "q1", "color": "blue"}
        )

        assert attributes == (QueueAttribute(queue_name="q1"),)
        ignored = [
            r.context["key"]
            for r in debug_logs.records
            if getattr(r, "event", None) == "tooling.key_ignored"
        ]
        assert ignored == ["color"]

    def test_storage_account_does_not_duplicate_itself(
        self, probe_engine: BindingEngine
    ) -> None:
        attributes = probe_engine.tooling.materialize_attributes(
            StorageAccountAttribute, {"connection": "cx1"}
        )

        assert attributes == (StorageAccountAttribute(account="cx1"),)

    def test_table_from_bag(self, probe_engine: BindingEngine) -> None:
        (table,) = probe_engine.tooling.materialize_attributes(
            TableAttribute, {"TableName": "t1", "partitionKey": "pk", "Filter": "f1"}
        )

        assert isinstance(table, TableAttribute)
        assert table.partition_key == "pk"
        assert table.row_key is None
        assert table.filter == "f1"

    def test_missing_required_property(self, probe_engine: BindingEngine) -> None:
        with pytest.raises(AttributeMaterializationError):
            _ = probe_engine.tooling.materialize_attributes(BlobAttribute, {"direction": "in"})

    def test_to_property_bag(self, probe_engine: BindingEngine) -> None:
        bag = probe_engine.tooling.to_property_bag(
            BlobAttribute(blob_path="x", access=Access.WRITE)
        )

        assert bag == {"blobPath": "x", "access": "out"}

    def test_builtin_attributes_have_no_default_type(
        self, probe_engine: BindingEngine
    ) -> None:
        with pytest.raises(UnsupportedDirectionError):
            _ = probe_engine.tooling.default_parameter_type(
                BlobAttribute(blob_path="x"), Access.READ
            )

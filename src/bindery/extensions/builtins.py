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

"""Extension declaring the built-in storage attributes."""

from __future__ import annotations

from ..attributes.builtins import (
    BlobAttribute,
    BlobTriggerAttribute,
    QueueAttribute,
    QueueMessage,
    QueueTriggerAttribute,
    StorageAccountAttribute,
    TableAttribute,
    string_to_queue_message,
)
from .context import ExtensionRegistrationContext

STORAGE_ATTRIBUTES: tuple[type[object], ...] = (
    BlobAttribute,
    BlobTriggerAttribute,
    QueueAttribute,
    QueueTriggerAttribute,
    TableAttribute,
)


class BuiltinBindingsExtension:
    """Makes the storage attributes known to tooling.

    Storage connectors bind these attributes from their own extensions; this
    one only names them, adds ``StorageAccount`` as a cross-cutting attribute,
    and registers the ``str -> QueueMessage`` converter.
    """

    def initialize(self, context: ExtensionRegistrationContext) -> None:
        for attribute_type in STORAGE_ATTRIBUTES:
            _ = context.add_attribute(attribute_type)
        _ = context.add_attribute(StorageAccountAttribute, cross_cutting=True)
        context.add_converter(str, QueueMessage, string_to_queue_message)


__all__ = ["STORAGE_ATTRIBUTES", "BuiltinBindingsExtension"]

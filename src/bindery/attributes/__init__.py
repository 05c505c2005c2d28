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

"""Attribute schemas and property-bag materialization."""

from __future__ import annotations

from .builtins import (
    BlobAttribute,
    BlobTriggerAttribute,
    QueueAttribute,
    QueueMessage,
    QueueTriggerAttribute,
    StorageAccountAttribute,
    TableAttribute,
    string_to_queue_message,
)
from .descriptor import (
    ALIASES_KEY,
    DUMP_KEY,
    PARSE_KEY,
    AttributeDescriptor,
    AttributeProperty,
    camel_case,
    default_attribute_name,
)
from .materialize import KeyMatch, match_keys, materialize, to_property_bag

__all__ = [
    "ALIASES_KEY",
    "DUMP_KEY",
    "PARSE_KEY",
    "AttributeDescriptor",
    "AttributeProperty",
    "BlobAttribute",
    "BlobTriggerAttribute",
    "KeyMatch",
    "QueueAttribute",
    "QueueMessage",
    "QueueTriggerAttribute",
    "StorageAccountAttribute",
    "TableAttribute",
    "camel_case",
    "default_attribute_name",
    "match_keys",
    "materialize",
    "string_to_queue_message",
    "to_property_bag",
]

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

"""Built-in storage attributes.

These describe queue, blob, and table parameters for design-time tooling
and for storage connectors living outside this package. Nothing here talks
to a storage service.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import ConversionError
from ..types import Access


@dataclass
class BlobAttribute:
    """Binds a parameter to a blob."""

    blob_path: str = field(metadata={"aliases": ("path",)})
    access: Access | None = field(default=None, metadata={"aliases": ("direction",)})


@dataclass
class BlobTriggerAttribute:
    """Invokes a function when a blob matching ``blob_path`` is written."""

    blob_path: str = field(metadata={"aliases": ("path",)})


@dataclass
class QueueAttribute:
    """Binds a parameter to a queue for output."""

    queue_name: str = field(metadata={"aliases": ("queue",)})


@dataclass
class QueueTriggerAttribute:
    """Invokes a function for each message on ``queue_name``."""

    queue_name: str = field(metadata={"aliases": ("queue",)})


@dataclass
class TableAttribute:
    """Binds a parameter to a table, an entity, or a filtered query."""

    table_name: str
    partition_key: str | None = None
    row_key: str | None = None
    filter: str | None = field(default=None, init=False)
    take: int | None = field(default=None, init=False)


@dataclass
class StorageAccountAttribute:
    """Overrides the storage account used by another attribute on the parameter."""

    account: str = field(metadata={"aliases": ("connection",)})


@dataclass(slots=True, frozen=True)
class QueueMessage:
    """A queue message body ready to be enqueued."""

    content: str


def string_to_queue_message(value: str | None) -> QueueMessage:
    """Wrap a string into a :class:`QueueMessage`."""
    if value is None:
        raise ConversionError("A queue message cannot contain a None string instance.")
    return QueueMessage(content=value)


__all__ = [
    "BlobAttribute",
    "BlobTriggerAttribute",
    "QueueAttribute",
    "QueueMessage",
    "QueueTriggerAttribute",
    "StorageAccountAttribute",
    "TableAttribute",
    "string_to_queue_message",
]

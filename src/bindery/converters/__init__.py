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

"""Type conversion registry.

Converters map values of one type to another and are keyed by
``(source, dest)``. Registered types may be open (``TypeVar``, bare generic
classes, base classes), in which case the most specific compatible rule is
chosen at lookup time.
"""

from __future__ import annotations

from .registry import ConverterEntry, ConverterFunc, ConverterKey, ConverterRegistry

__all__ = [
    "ConverterEntry",
    "ConverterFunc",
    "ConverterKey",
    "ConverterRegistry",
]

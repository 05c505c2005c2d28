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

"""Shared typing helpers and the access-direction enum."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum

type BagScalar = str | int | float | bool | None
type BagValue = BagScalar | PropertyBag | Sequence[BagValue]
type PropertyBag = Mapping[str, BagValue]
"""Loosely-typed, string-keyed design-time data standing in for an attribute."""


class Access(Enum):
    """Direction in which a bound parameter is accessed.

    Values match the ``direction`` strings used in function metadata, so
    ``Access("in")`` is ``Access.READ``.
    """

    READ = "in"
    """The function reads the bound value."""

    WRITE = "out"
    """The function writes the bound value."""

    READ_WRITE = "inout"
    """The function both reads and writes the bound value."""


__all__ = ["Access", "BagScalar", "BagValue", "PropertyBag"]

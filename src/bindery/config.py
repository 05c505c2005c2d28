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

"""Engine configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

_STRICT_CONVERTERS_ENV = "BINDERY_STRICT_CONVERTERS"
_INCLUDE_BUILTINS_ENV = "BINDERY_INCLUDE_BUILTINS"

DEFAULT_READ_TYPES: tuple[type[object], ...] = (dict, str, bytes)
"""Parameter types offered to design-time tools for read access, in order."""


def _coerce_flag(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    lowered = value.strip().lower()
    return lowered not in {"", "0", "false", "off", "no"}


@dataclass(slots=True, frozen=True)
class EngineConfig:
    """Settings applied when an :class:`~bindery.engine.EngineBuilder` seals.

    Example::

        config = EngineConfig(strict_converters=True)
        engine = EngineBuilder(config).add_extension(MyExtension()).build()

    Args:
        strict_converters: Reject a second converter for the same
            ``(source, dest)`` pair instead of letting the later one win.
        include_builtins: Install the built-in storage attributes and the
            catch-all logger provider.
        read_default_types: Preferred parameter types reported by
            ``Tooling.default_parameter_type`` for read access.
    """

    strict_converters: bool = False
    include_builtins: bool = True
    read_default_types: tuple[type[object], ...] = DEFAULT_READ_TYPES

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> EngineConfig:
        """Build a config from ``BINDERY_*`` environment variables."""

        env = env if env is not None else os.environ
        return cls(
            strict_converters=_coerce_flag(
                env.get(_STRICT_CONVERTERS_ENV), default=False
            ),
            include_builtins=_coerce_flag(env.get(_INCLUDE_BUILTINS_ENV), default=True),
        )

    def update(self, **changes: object) -> EngineConfig:
        """Return a modified copy."""

        return replace(self, **changes)  # pyright: ignore[reportArgumentType]


__all__ = ["DEFAULT_READ_TYPES", "EngineConfig"]

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

"""Tests for EngineConfig."""

from __future__ import annotations

import dataclasses

import pytest

from bindery.config import DEFAULT_READ_TYPES, EngineConfig


def test_defaults() -> None:
    config = EngineConfig()

    assert config.strict_converters is False
    assert config.include_builtins is True
    assert config.read_default_types == DEFAULT_READ_TYPES == (dict, str, bytes)


def test_from_env_reads_flags() -> None:
    config = EngineConfig.from_env(
        {"BINDERY_STRICT_CONVERTERS": "1", "BINDERY_INCLUDE_BUILTINS": "off"}
    )

    assert config.strict_converters is True
    assert config.include_builtins is False


def test_from_env_uses_defaults_when_unset() -> None:
    assert EngineConfig.from_env({}) == EngineConfig()


@pytest.mark.parametrize("value", ["", "0", "false", "No", " OFF "])
def test_falsy_flag_values(value: str) -> None:
    assert EngineConfig.from_env({"BINDERY_STRICT_CONVERTERS": value}).strict_converters is False


def test_update_returns_copy() -> None:
    config = EngineConfig()
    updated = config.update(read_default_types=(str,))

    assert updated.read_default_types == (str,)
    assert config.read_default_types == DEFAULT_READ_TYPES


def test_config_is_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        EngineConfig().strict_converters = True  # type: ignore[misc]

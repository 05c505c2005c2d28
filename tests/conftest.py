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

from __future__ import annotations

import logging

import pytest

from bindery import BindingEngine, EngineBuilder, EngineConfig
from tests.helpers import ProbeExtension


@pytest.fixture
def probe_engine() -> BindingEngine:
    """Engine with the built-ins and the probe extension installed."""

    return EngineBuilder().add_extension(ProbeExtension()).build()


@pytest.fixture
def bare_engine() -> BindingEngine:
    """Engine with only the probe extension, no built-ins."""

    return (
        EngineBuilder(EngineConfig(include_builtins=False))
        .add_extension(ProbeExtension())
        .build()
    )


@pytest.fixture
def debug_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture bindery debug records."""

    caplog.set_level(logging.DEBUG, logger="bindery")
    return caplog

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

"""Tests for the bindery exception hierarchy."""

from __future__ import annotations

import pytest

from bindery.errors import (
    AmbiguousAttributeNameError,
    AmbiguousConverterError,
    AttributeMaterializationError,
    BinderyError,
    BindingConfigurationError,
    BindingResolutionError,
    ConversionError,
    DuplicateConverterError,
    DuplicateRuleConflictError,
    ModuleNotResolvedError,
    RegistrySealedError,
    UnresolvedBindingError,
    UnsupportedDirectionError,
)
from bindery.types import Access


class Sample:
    pass


@pytest.mark.parametrize(
    ("error", "bases"),
    [
        (DuplicateRuleConflictError(Sample, "r"), (BindingConfigurationError, ValueError)),
        (
            AmbiguousAttributeNameError("S", Sample, int),
            (BindingConfigurationError, ValueError),
        ),
        (DuplicateConverterError(int, str), (BindingConfigurationError, ValueError)),
        (AmbiguousConverterError(int, str, ("a", "b")), (BindingConfigurationError,)),
        (RegistrySealedError("ConverterRegistry"), (BindingConfigurationError,)),
        (UnresolvedBindingError(Sample, int), (BindingResolutionError, LookupError)),
        (
            UnsupportedDirectionError(Sample, Access.WRITE),
            (BindingResolutionError, LookupError),
        ),
        (ModuleNotResolvedError("m"), (BindingResolutionError, LookupError)),
        (AttributeMaterializationError(Sample, "bad"), (ValueError,)),
        (ConversionError("bad"), (ValueError,)),
    ],
)
def test_hierarchy(error: BinderyError, bases: tuple[type[Exception], ...]) -> None:
    assert isinstance(error, BinderyError)
    for base in bases:
        assert isinstance(error, base)


def test_configuration_errors_are_runtime_errors() -> None:
    assert issubclass(BindingConfigurationError, RuntimeError)


def test_messages_name_the_types() -> None:
    assert "Sample" in str(UnresolvedBindingError(Sample, int))
    assert "'int'" in str(UnresolvedBindingError(Sample, int))
    assert "Sample" in str(DuplicateRuleConflictError(Sample, "mixed"))
    assert "'m'" in str(ModuleNotResolvedError("m"))

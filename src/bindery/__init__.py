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

"""Attribute-to-binding resolution engine.

Extensions declare how parameters decorated with an attribute bind to
values; the engine seals those declarations and answers binding and
design-time questions from them.
"""

from __future__ import annotations

from . import attributes, bindings, converters, extensions
from .config import EngineConfig
from .engine import BindingEngine, EngineBuilder
from .errors import (
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
from .extensions import BindingRule, Extension, ExtensionRegistrationContext
from .logging import StructuredLogger, configure_logging, get_logger
from .tooling import Tooling
from .types import Access, PropertyBag

__all__ = [
    "Access",
    "AmbiguousAttributeNameError",
    "AmbiguousConverterError",
    "AttributeMaterializationError",
    "BinderyError",
    "BindingConfigurationError",
    "BindingEngine",
    "BindingResolutionError",
    "BindingRule",
    "ConversionError",
    "DuplicateConverterError",
    "DuplicateRuleConflictError",
    "EngineBuilder",
    "EngineConfig",
    "Extension",
    "ExtensionRegistrationContext",
    "ModuleNotResolvedError",
    "PropertyBag",
    "RegistrySealedError",
    "StructuredLogger",
    "Tooling",
    "UnresolvedBindingError",
    "UnsupportedDirectionError",
    "attributes",
    "bindings",
    "converters",
    "configure_logging",
    "extensions",
    "get_logger",
]

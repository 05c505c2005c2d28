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

"""Binding providers, bindings, and their first-match composition."""

from __future__ import annotations

from .builtins import LoggerBindingProvider
from .composite import CompositeBindingProvider
from .input import BindToInputBindingProvider
from .pattern import (
    AsyncAttributeConverter,
    AttributeConverter,
    PatternMatcher,
    ValueBinding,
    ValueBuilder,
)
from .protocols import (
    Binding,
    BindingContext,
    BindingProvider,
    BindingRuleProvider,
    TriggerBinding,
    TriggerBindingProvider,
)
from .registry import (
    AttributeScopedProvider,
    AttributeScopedTrigger,
    ProviderRegistry,
    RuleEntry,
)

__all__ = [
    "AsyncAttributeConverter",
    "AttributeConverter",
    "AttributeScopedProvider",
    "AttributeScopedTrigger",
    "BindToInputBindingProvider",
    "Binding",
    "BindingContext",
    "BindingProvider",
    "BindingRuleProvider",
    "CompositeBindingProvider",
    "LoggerBindingProvider",
    "PatternMatcher",
    "ProviderRegistry",
    "RuleEntry",
    "TriggerBinding",
    "TriggerBindingProvider",
    "ValueBinding",
    "ValueBuilder",
]

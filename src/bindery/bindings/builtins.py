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

"""Catch-all providers appended after every extension rule."""

from __future__ import annotations

import logging

from ..logging import StructuredLogger, get_logger
from .pattern import ValueBinding, ValueBuilder
from .protocols import BindingContext

FUNCTION_LOGGER_PREFIX = "bindery.function"


class LoggerBindingProvider:
    """Binds any parameter typed as a logger, whatever its attribute.

    Logger parameters may also be claimed by attribute-specific providers
    (a blob binding can hand out a writer), so this provider must come after
    them in resolution order.
    """

    def try_create(self, context: BindingContext) -> ValueBinding | None:
        name = f"{FUNCTION_LOGGER_PREFIX}.{context.parameter_name or 'anonymous'}"
        if context.parameter_type is StructuredLogger:
            builder = ValueBuilder(func=lambda _attribute: get_logger(name), origin=self)
        elif context.parameter_type is logging.Logger:
            builder = ValueBuilder(
                func=lambda _attribute: logging.getLogger(name), origin=self
            )
        else:
            return None
        return ValueBinding(
            attribute=context.attribute,
            parameter_type=context.parameter_type,
            builder=builder,
            provider=self,
        )


__all__ = ["FUNCTION_LOGGER_PREFIX", "LoggerBindingProvider"]

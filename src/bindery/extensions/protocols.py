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

"""Extension contract."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .context import ExtensionRegistrationContext


@runtime_checkable
class Extension(Protocol):
    """A unit of binding configuration contributed by a third party.

    Any object with an ``initialize`` method satisfying this protocol can
    be added to an :class:`~bindery.engine.EngineBuilder`. The builder calls
    ``initialize`` exactly once, then commits everything the extension
    declared on the context in one step.

    Example::

        class WidgetExtension:
            def initialize(self, context: ExtensionRegistrationContext) -> None:
                context.add_binding_rule(WidgetAttribute).bind_to_input(build_widget)
                context.converters.register(Widget, dict, widget_to_dict)
    """

    def initialize(self, context: ExtensionRegistrationContext) -> None:
        """Declare attributes, binding rules, and converters on ``context``."""
        ...


__all__ = ["Extension"]

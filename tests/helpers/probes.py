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

"""Sample attribute, value type, and extension shared across tests."""

from __future__ import annotations

from dataclasses import dataclass

from bindery.extensions import ExtensionRegistrationContext


@dataclass
class ProbeAttribute:
    flag: str


@dataclass
class Widget:
    value: str


def build_widget(attribute: ProbeAttribute) -> Widget:
    return Widget(value=attribute.flag)


def widget_to_dict(widget: Widget) -> dict[str, object]:
    return {"value": widget.value}


class ProbeConverter:
    """Converter object that prefixes the flag."""

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix

    def convert(self, attribute: ProbeAttribute) -> Widget:
        return Widget(value=f"{self.prefix}{attribute.flag}")


class AsyncProbeConverter:
    async def convert_async(self, attribute: ProbeAttribute) -> Widget:
        return Widget(value=attribute.flag.upper())


class ProbeExtension:
    """Binds ``ProbeAttribute`` to ``Widget`` and converts widgets to dicts."""

    def initialize(self, context: ExtensionRegistrationContext) -> None:
        _ = context.add_binding_rule(ProbeAttribute).bind_to_input(build_widget)
        context.add_converter(Widget, dict, widget_to_dict)

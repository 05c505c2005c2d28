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

"""Explicit property schemas for attribute types.

An attribute type is a dataclass. Its ``init`` fields are constructor
parameters; fields declared with ``init=False`` are settable properties
assigned after construction. Each property is reachable from a property
bag under its own name, a generated camelCase alias, and any aliases listed
in the field metadata::

    @dataclass
    class BlobAttribute:
        blob_path: str = field(metadata={"aliases": ("path",)})
        access: Access | None = field(
            default=None, metadata={"aliases": ("direction",)}
        )

    descriptor = AttributeDescriptor.of(BlobAttribute)
    descriptor.name                           # "Blob"
    descriptor.property_for("PATH").name      # "blob_path"
"""

# pyright: reportUnknownArgumentType=false, reportUnknownMemberType=false

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import MISSING, dataclass, field
from types import MappingProxyType
from typing import Final, cast, get_type_hints

from ..errors import BindingConfigurationError

ALIASES_KEY: Final[str] = "aliases"
"""Field metadata key listing extra bag keys for a property."""

PARSE_KEY: Final[str] = "parse"
"""Field metadata key for a callable turning a bag value into the field value."""

DUMP_KEY: Final[str] = "dump"
"""Field metadata key for a callable turning the field value into a bag value."""

_ATTRIBUTE_SUFFIX = "Attribute"


def camel_case(name: str) -> str:
    """Convert ``snake_case`` to ``camelCase``."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def default_attribute_name(attribute_type: type[object]) -> str:
    """Return the lookup name for ``attribute_type``: its class name minus ``Attribute``."""
    name = attribute_type.__name__
    if name.endswith(_ATTRIBUTE_SUFFIX) and name != _ATTRIBUTE_SUFFIX:
        return name[: -len(_ATTRIBUTE_SUFFIX)]
    return name


@dataclass(slots=True, frozen=True)
class AttributeProperty:
    """One settable value of an attribute type."""

    name: str
    """Python field name."""

    type: object
    """Declared (resolved) field type."""

    bag_key: str
    """Key used when serializing back into a property bag."""

    aliases: tuple[str, ...] = ()
    """Extra keys accepted from a property bag, besides ``name`` and ``bag_key``."""

    constructor: bool = True
    """True for constructor parameters, False for properties set after construction."""

    required: bool = False
    """True for constructor parameters without a default."""

    parse: Callable[[object], object] | None = None
    dump: Callable[[object], object] | None = None

    @property
    def keys(self) -> tuple[str, ...]:
        """Every bag key that addresses this property, without duplicates."""
        return tuple(dict.fromkeys((self.name, self.bag_key, *self.aliases)))


@dataclass(slots=True, frozen=True)
class AttributeDescriptor:
    """Identifies an attribute type and its property schema.

    Instances are immutable; the alias table is computed once at
    construction and compared case-insensitively.
    """

    name: str
    attribute_type: type[object]
    properties: tuple[AttributeProperty, ...]
    _alias_table: Mapping[str, AttributeProperty] = field(
        default_factory=lambda: MappingProxyType({}), repr=False, compare=False
    )

    @classmethod
    def of(
        cls,
        attribute_type: type[object],
        *,
        name: str | None = None,
        alias_generator: Callable[[str], str] = camel_case,
    ) -> AttributeDescriptor:
        """Build a descriptor from a dataclass attribute type.

        Args:
            attribute_type: Dataclass describing the attribute.
            name: Lookup name; defaults to the class name minus ``Attribute``.
            alias_generator: Produces the serialized bag key of each field.

        Raises:
            TypeError: ``attribute_type`` is not a dataclass.
            BindingConfigurationError: Two properties claim the same key, or a
                frozen dataclass declares settable (``init=False``) fields.
        """
        if not dataclasses.is_dataclass(attribute_type) or not isinstance(
            attribute_type, type
        ):
            raise TypeError(f"{attribute_type!r} is not a dataclass attribute type")

        hints = get_type_hints(attribute_type)
        properties = tuple(
            _property_from_field(f, hints.get(f.name, f.type), alias_generator)
            for f in dataclasses.fields(attribute_type)
        )
        settable = [p.name for p in properties if not p.constructor]
        if settable and attribute_type.__dataclass_params__.frozen:
            raise BindingConfigurationError(
                f"{attribute_type.__qualname__} is frozen but declares settable "
                f"properties: {', '.join(settable)}"
            )
        return cls(
            name=name or default_attribute_name(attribute_type),
            attribute_type=attribute_type,
            properties=properties,
            _alias_table=MappingProxyType(_build_alias_table(attribute_type, properties)),
        )

    def property_for(self, key: str) -> AttributeProperty | None:
        """Return the property addressed by bag ``key`` (case-insensitive)."""
        return self._alias_table.get(key.lower())

    @property
    def constructor_properties(self) -> tuple[AttributeProperty, ...]:
        return tuple(p for p in self.properties if p.constructor)

    @property
    def settable_properties(self) -> tuple[AttributeProperty, ...]:
        return tuple(p for p in self.properties if not p.constructor)


def _property_from_field(
    f: dataclasses.Field[object],
    field_type: object,
    alias_generator: Callable[[str], str],
) -> AttributeProperty:
    metadata = f.metadata
    aliases = metadata.get(ALIASES_KEY, ())
    if isinstance(aliases, str):
        aliases = (aliases,)
    return AttributeProperty(
        name=f.name,
        type=field_type,
        bag_key=alias_generator(f.name),
        aliases=tuple(cast(tuple[str, ...], aliases)),
        constructor=f.init,
        required=f.init and f.default is MISSING and f.default_factory is MISSING,
        parse=cast(Callable[[object], object] | None, metadata.get(PARSE_KEY)),
        dump=cast(Callable[[object], object] | None, metadata.get(DUMP_KEY)),
    )


def _build_alias_table(
    attribute_type: type[object], properties: tuple[AttributeProperty, ...]
) -> dict[str, AttributeProperty]:
    table: dict[str, AttributeProperty] = {}
    for prop in properties:
        for key in prop.keys:
            lowered = key.lower()
            claimed = table.get(lowered)
            if claimed is not None and claimed.name != prop.name:
                raise BindingConfigurationError(
                    f"{attribute_type.__qualname__}: key {key!r} is claimed by "
                    f"both {claimed.name!r} and {prop.name!r}"
                )
            table[lowered] = prop
    return table


__all__ = [
    "ALIASES_KEY",
    "DUMP_KEY",
    "PARSE_KEY",
    "AttributeDescriptor",
    "AttributeProperty",
    "camel_case",
    "default_attribute_name",
]

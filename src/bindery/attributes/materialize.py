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

"""Property bag <-> attribute instance mapping."""

# pyright: reportUnknownArgumentType=false, reportUnknownVariableType=false, reportUnknownMemberType=false

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from types import NoneType, UnionType
from typing import Any, Union, cast, get_args, get_origin

from ..errors import AttributeMaterializationError
from ..types import BagValue, PropertyBag
from .descriptor import AttributeDescriptor, AttributeProperty

_NOT_HANDLED = object()


@dataclass(slots=True, frozen=True)
class KeyMatch:
    """Result of matching bag keys against a descriptor's alias table."""

    matched: Mapping[str, tuple[str, BagValue]]
    """Property name -> (bag key, raw value)."""

    unmatched: tuple[str, ...]
    """Bag keys no property claimed, in bag order."""


def match_keys(descriptor: AttributeDescriptor, bag: PropertyBag) -> KeyMatch:
    """Assign each bag key to at most one property.

    Raises:
        AttributeMaterializationError: Two keys differ only by case, or two
            keys address the same property.
    """
    matched: dict[str, tuple[str, BagValue]] = {}
    unmatched: list[str] = []
    seen: dict[str, str] = {}
    for key, value in bag.items():
        lowered = key.lower()
        if lowered in seen:
            raise AttributeMaterializationError(
                descriptor.attribute_type,
                f"keys {seen[lowered]!r} and {key!r} differ only by case",
            )
        seen[lowered] = key
        prop = descriptor.property_for(key)
        if prop is None:
            unmatched.append(key)
            continue
        if prop.name in matched:
            raise AttributeMaterializationError(
                descriptor.attribute_type,
                f"keys {matched[prop.name][0]!r} and {key!r} both set {prop.name!r}",
            )
        matched[prop.name] = (key, value)
    return KeyMatch(matched=matched, unmatched=tuple(unmatched))


def materialize(
    descriptor: AttributeDescriptor, bag: PropertyBag
) -> tuple[object, tuple[str, ...]]:
    """Construct an attribute instance from ``bag``.

    Constructor parameters are filled first, then settable properties are
    assigned on the new instance.

    Returns:
        The instance and the bag keys that matched no property.

    Raises:
        AttributeMaterializationError: A required constructor parameter is
            missing or a value cannot be coerced.
    """
    match = match_keys(descriptor, bag)
    kwargs: dict[str, object] = {}
    for prop in descriptor.constructor_properties:
        entry = match.matched.get(prop.name)
        if entry is None:
            if prop.required:
                raise AttributeMaterializationError(
                    descriptor.attribute_type,
                    f"missing required property {prop.bag_key!r}",
                )
            continue
        kwargs[prop.name] = _coerce_property(descriptor, prop, entry[1])

    instance = descriptor.attribute_type(**kwargs)
    for prop in descriptor.settable_properties:
        entry = match.matched.get(prop.name)
        if entry is not None:
            setattr(instance, prop.name, _coerce_property(descriptor, prop, entry[1]))
    return instance, match.unmatched


def to_property_bag(
    descriptor: AttributeDescriptor, attribute: object
) -> dict[str, BagValue]:
    """Serialize ``attribute`` into a bag keyed by each property's ``bag_key``.

    Properties whose value is ``None`` are omitted.
    """
    if not isinstance(attribute, descriptor.attribute_type):
        raise TypeError(
            f"expected {descriptor.attribute_type.__qualname__}, "
            f"got {type(attribute).__qualname__}"
        )
    bag: dict[str, BagValue] = {}
    for prop in descriptor.properties:
        value = getattr(attribute, prop.name)
        if value is None:
            continue
        bag[prop.bag_key] = cast(
            BagValue, prop.dump(value) if prop.dump is not None else _dump_value(value)
        )
    return bag


# === Coercion ===


def _coerce_property(
    descriptor: AttributeDescriptor, prop: AttributeProperty, value: BagValue
) -> object:
    try:
        if prop.parse is not None:
            return prop.parse(value)
        return _coerce_to_type(value, prop.type, prop.bag_key)
    except (TypeError, ValueError) as error:
        raise AttributeMaterializationError(
            descriptor.attribute_type, str(error)
        ) from error


def _coerce_none(value: object, typ: object, path: str) -> object:
    if typ is NoneType:
        if value is not None:
            raise TypeError(f"{path}: expected None")
        return None
    if value is None:
        raise TypeError(f"{path}: value cannot be None")
    return _NOT_HANDLED


def _coerce_union(value: object, typ: object, path: str) -> object:
    origin = get_origin(typ)
    if origin is not UnionType and origin is not Union:
        return _NOT_HANDLED
    args = get_args(typ)
    if value is None or (isinstance(value, str) and value.strip() == ""):
        if NoneType in args:
            return None
    last_error: Exception | None = None
    for arg in args:
        if arg is NoneType:
            continue
        try:
            return _coerce_to_type(value, arg, path)
        except (TypeError, ValueError) as error:
            last_error = error
    if last_error is not None:
        raise last_error
    raise TypeError(f"{path}: no matching type in union")


def _coerce_enum(value: object, typ: object, path: str) -> object:
    if not (isinstance(typ, type) and issubclass(typ, Enum)):
        return _NOT_HANDLED
    if isinstance(value, typ):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        for member in typ:
            if member.name.lower() == lowered:
                return member
            if isinstance(member.value, str) and member.value.lower() == lowered:
                return member
    try:
        return typ(value)
    except (TypeError, ValueError) as error:
        raise ValueError(f"{path}: invalid {typ.__name__} value {value!r}") from error


def _bool_from_str(value: str, path: str) -> bool:
    lowered = value.strip().lower()
    if lowered in {"true", "1", "yes", "on"}:
        return True
    if lowered in {"false", "0", "no", "off"}:
        return False
    raise TypeError(f"{path}: cannot interpret {value!r} as boolean")


def _coerce_bool(value: object, typ: object, path: str) -> object:
    if typ is not bool:
        return _NOT_HANDLED
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return _bool_from_str(value, path)
    if isinstance(value, (int, float)):
        return bool(value)
    raise TypeError(f"{path}: expected bool")


_PRIMITIVE_COERCERS: Mapping[type[object], Callable[[Any], object]] = {
    str: str,
    int: int,
    float: float,
}


def _coerce_primitive(value: object, typ: object, path: str) -> object:
    coercer = _PRIMITIVE_COERCERS.get(cast(type[object], typ))
    if coercer is None:
        return _NOT_HANDLED
    if isinstance(value, cast(type[object], typ)):
        return value
    if isinstance(value, (Mapping, list, tuple)):
        raise TypeError(f"{path}: expected {cast(type[object], typ).__name__}")
    try:
        return coercer(value)
    except (TypeError, ValueError) as error:
        raise TypeError(
            f"{path}: unable to coerce {value!r} to {cast(type[object], typ).__name__}"
        ) from error


def _coerce_sequence(value: object, typ: object, path: str) -> object:
    origin = get_origin(typ)
    if origin not in {list, tuple, Sequence}:
        return _NOT_HANDLED
    if isinstance(value, str):
        items: list[object] = [value]
    elif isinstance(value, Iterable) and not isinstance(value, Mapping):
        items = list(cast(Iterable[object], value))
    else:
        raise TypeError(f"{path}: expected sequence")
    args = get_args(typ)
    item_type = args[0] if args else object
    coerced = [
        _coerce_to_type(item, item_type, f"{path}[{index}]")
        for index, item in enumerate(items)
    ]
    return tuple(coerced) if origin is tuple else coerced


def _coerce_nested(value: object, typ: object, path: str) -> object:
    if not (isinstance(typ, type) and dataclasses.is_dataclass(typ)):
        return _NOT_HANDLED
    if isinstance(value, typ):
        return value
    if not isinstance(value, Mapping):
        raise TypeError(f"{path}: expected mapping for {typ.__name__}")
    instance, _ = materialize(
        AttributeDescriptor.of(typ), cast(PropertyBag, value)
    )
    return instance


def _coerce_to_type(value: object, typ: object, path: str) -> object:
    if typ is object or typ is Any:
        return value
    coercers = (
        lambda: _coerce_union(value, typ, path),
        lambda: _coerce_none(value, typ, path),
        lambda: _coerce_enum(value, typ, path),
        lambda: _coerce_bool(value, typ, path),
        lambda: _coerce_primitive(value, typ, path),
        lambda: _coerce_sequence(value, typ, path),
        lambda: _coerce_nested(value, typ, path),
    )
    for coercer in coercers:
        result = coercer()
        if result is not _NOT_HANDLED:
            return result
    if isinstance(typ, type) and isinstance(value, typ):
        return value
    raise TypeError(f"{path}: unsupported property type {typ!r}")


# === Serialization ===


def _dump_value(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_property_bag(AttributeDescriptor.of(type(value)), value)
    if isinstance(value, (list, tuple)):
        return [_dump_value(item) for item in cast(Sequence[object], value)]
    return value


__all__ = ["KeyMatch", "match_keys", "materialize", "to_property_bag"]

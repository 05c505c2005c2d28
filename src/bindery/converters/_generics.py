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

"""Open-type matching for converter rules.

A converter rule is *open* when its source or destination is a ``TypeVar``,
an unparameterized generic class (``list`` matching ``list[int]``), a
parameterized alias containing TypeVars (``list[T]``), or a base class of
the requested type. Matching a rule against a request produces a
:class:`MatchScore`; lower scores are more specific.
"""

# pyright: reportUnknownArgumentType=false, reportUnknownVariableType=false

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal, TypeVar, get_args, get_origin

type Variance = Literal["source", "dest", "invariant"]
type TypeBindings = dict[TypeVar, object]


@dataclass(slots=True, frozen=True, order=True)
class MatchScore:
    """Specificity of a converter rule match; compared lexicographically."""

    generic_parameters: int = 0
    """Number of open positions the request had to fill."""

    distance: int = 0
    """Summed MRO distance between requested and registered classes."""

    def __add__(self, other: MatchScore) -> MatchScore:
        return MatchScore(
            self.generic_parameters + other.generic_parameters,
            self.distance + other.distance,
        )


EXACT = MatchScore()


def runtime_class(typ: object) -> type[object] | None:
    """Return the class behind ``typ`` (the origin for generic aliases)."""
    origin = get_origin(typ)
    candidate = origin if origin is not None else typ
    return candidate if isinstance(candidate, type) else None


def subclass_distance(sub: object, sup: object) -> int | None:
    """Return how far ``sup`` sits in ``sub``'s MRO, or None if unrelated.

    Virtual subclasses (ABC registration) sit past the end of the MRO.
    """
    sub_cls = runtime_class(sub)
    sup_cls = runtime_class(sup)
    if sub_cls is None or sup_cls is None:
        return None
    try:
        if not issubclass(sub_cls, sup_cls):
            return None
    except TypeError:
        return None
    mro = sub_cls.__mro__
    return mro.index(sup_cls) if sup_cls in mro else len(mro)


def is_subtype(sub: object, sup: object) -> bool:
    """Return True when a value of type ``sub`` is usable as ``sup``."""
    if sup is object or sub == sup:
        return True
    if get_args(sup):
        return get_args(sub) == get_args(sup) and subclass_distance(sub, sup) is not None
    return subclass_distance(sub, sup) is not None


def is_open(typ: object) -> bool:
    """Return True when ``typ`` is a TypeVar or contains one."""
    if isinstance(typ, TypeVar):
        return True
    return any(is_open(arg) for arg in get_args(typ))


def _bind_typevar(
    var: TypeVar, concrete: object, bindings: TypeBindings, variance: Variance
) -> MatchScore | None:
    if var in bindings:
        bound = bindings[var]
        if variance == "dest":
            return EXACT if is_subtype(bound, concrete) else None
        return EXACT if bound == concrete else None
    if var.__bound__ is not None and not is_subtype(concrete, var.__bound__):
        return None
    constraints = var.__constraints__
    if constraints and not any(is_subtype(concrete, c) for c in constraints):
        return None
    bindings[var] = concrete
    return MatchScore(generic_parameters=1)


def _head_distance(pattern: object, concrete: object, variance: Variance) -> int | None:
    if variance == "source":
        return subclass_distance(concrete, pattern)
    if variance == "dest":
        return subclass_distance(pattern, concrete)
    return 0 if runtime_class(pattern) is runtime_class(concrete) else None


def unify(
    pattern: object,
    concrete: object,
    bindings: TypeBindings,
    variance: Variance,
) -> MatchScore | None:
    """Match a registered ``pattern`` against a requested ``concrete`` type.

    ``bindings`` collects TypeVar assignments and is shared between the
    source and destination of one rule, so ``list[T] -> T`` binds ``T``
    consistently. Returns None when the pattern does not apply.
    """
    if isinstance(pattern, TypeVar):
        return _bind_typevar(pattern, concrete, bindings, variance)
    if pattern == concrete:
        return EXACT

    distance = _head_distance(pattern, concrete, variance)
    if distance is None:
        return None

    pattern_args = get_args(pattern)
    concrete_args = get_args(concrete)
    if not pattern_args:
        return MatchScore(len(concrete_args), distance)
    if len(pattern_args) != len(concrete_args):
        return None

    score = MatchScore(distance=distance)
    for pattern_arg, concrete_arg in zip(pattern_args, concrete_args, strict=True):
        arg_score = unify(pattern_arg, concrete_arg, bindings, "invariant")
        if arg_score is None:
            return None
        score += arg_score
    return score


def iter_component_types(typ: object) -> Iterator[type[object]]:
    """Yield every runtime class mentioned by ``typ``, including alias arguments."""
    cls = runtime_class(typ)
    if cls is not None:
        yield cls
    for arg in get_args(typ):
        yield from iter_component_types(arg)


__all__ = [
    "EXACT",
    "MatchScore",
    "TypeBindings",
    "is_open",
    "is_subtype",
    "iter_component_types",
    "runtime_class",
    "subclass_distance",
    "unify",
]

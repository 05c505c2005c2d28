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

"""Tests for open-type matching helpers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from bindery.converters._generics import (
    EXACT,
    MatchScore,
    is_open,
    is_subtype,
    iter_component_types,
    runtime_class,
    subclass_distance,
    unify,
)

T = TypeVar("T")
C = TypeVar("C", int, str)


class Base:
    pass


class Child(Base):
    pass


def test_match_scores_order_by_generic_parameters_first() -> None:
    assert MatchScore(0, 5) < MatchScore(1, 0)
    assert MatchScore(1, 1) + MatchScore(0, 2) == MatchScore(1, 3)
    assert EXACT == MatchScore()


def test_runtime_class_unwraps_aliases() -> None:
    assert runtime_class(list[int]) is list
    assert runtime_class(int) is int
    assert runtime_class(T) is None


def test_subclass_distance_follows_mro() -> None:
    assert subclass_distance(Child, Child) == 0
    assert subclass_distance(Child, Base) == 1
    assert subclass_distance(Base, Child) is None
    assert subclass_distance(list, Sequence) == len(list.__mro__)


def test_is_subtype_requires_matching_arguments() -> None:
    assert is_subtype(list[int], list[int])
    assert not is_subtype(list[int], list[str])
    assert is_subtype(Child, object)


def test_is_open_detects_nested_typevars() -> None:
    assert is_open(T)
    assert is_open(dict[str, list[T]])
    assert not is_open(dict[str, int])


def test_unify_records_bindings() -> None:
    bindings: dict[TypeVar, object] = {}

    score = unify(dict[str, T], dict[str, int], bindings, "source")

    assert score == MatchScore(generic_parameters=1)
    assert bindings == {T: int}


def test_unify_respects_constraints() -> None:
    assert unify(C, str, {}, "source") is not None
    assert unify(C, float, {}, "source") is None


def test_unify_rejects_unrelated_heads() -> None:
    assert unify(list[T], tuple[int], {}, "source") is None
    assert unify(Child, Base, {}, "source") is None
    assert unify(Child, Base, {}, "dest") == MatchScore(distance=1)


def test_iter_component_types_walks_arguments() -> None:
    assert list(iter_component_types(dict[str, list[Child]])) == [dict, str, list, Child]
    assert list(iter_component_types(T)) == []

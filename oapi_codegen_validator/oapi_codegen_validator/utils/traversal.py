# Copyright 2025 TIER IV, inc.
#
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

"""Generic lazy walks over a forest."""

from typing import Callable, Iterable, Iterator, TypeVar

T = TypeVar("T")


def pre_order(roots: Iterable[T], get_children: Callable[[T], Iterable[T]]) -> Iterator[T]:
    """Yield every node of the forest before any of its descendants.

    Roots and children are visited depth-first, left to right. Both ``roots``
    and the iterables returned by ``get_children`` are consumed lazily, so a
    caller that stops iterating (or closes the generator) prevents any further
    node from being produced and ``get_children`` is never invoked for a node
    whose subtree was not entered.

    The forest must be acyclic; there is no cycle detection.
    """

    def _walk(node: T) -> Iterator[T]:
        yield node
        for child in get_children(node):
            yield from _walk(child)

    for root in roots:
        yield from _walk(root)

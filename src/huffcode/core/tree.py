"""Merge tree construction (greedy Huffman).

The tree is a two-variant sum type: ``Leaf`` and ``Internal``. Nodes are
immutable and every child belongs to exactly one parent.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Hashable, Mapping
from dataclasses import dataclass

from huffcode.errors import InvalidDistribution

Symbol = Hashable


@dataclass(frozen=True, slots=True)
class Leaf:
    symbol: Symbol
    freq: int


# eq=False: identity equality, a structural compare would recurse tree-depth deep.
@dataclass(frozen=True, slots=True, eq=False)
class Internal:
    freq: int
    left: Node
    right: Node


Node = Leaf | Internal


def check_freq(symbol: Symbol, freq: object) -> int:
    if isinstance(freq, bool) or not isinstance(freq, int):
        raise InvalidDistribution(f"frequenza non intera per simbolo {symbol!r}: {freq!r}")
    if freq < 0:
        raise InvalidDistribution(f"frequenza negativa per simbolo {symbol!r}: {freq}")
    return freq


def build_tree(distribution: Mapping[Symbol, int]) -> Node | None:
    """Build the optimal merge tree for ``distribution``.

    Returns None for an empty distribution and the lone leaf for a
    single-symbol one. Ties are broken FIFO: heap entries are keyed by
    ``(freq, seq)`` where ``seq`` grows with insertion, so nodes themselves
    are never compared. The first node popped becomes the left child.
    """
    heap: list[tuple[int, int, Node]] = []
    counter = itertools.count()

    for sym, f in distribution.items():
        f = check_freq(sym, f)
        heapq.heappush(heap, (f, next(counter), Leaf(symbol=sym, freq=f)))

    if not heap:
        return None

    while len(heap) > 1:
        f1, _, n1 = heapq.heappop(heap)
        f2, _, n2 = heapq.heappop(heap)
        parent = Internal(freq=f1 + f2, left=n1, right=n2)
        heapq.heappush(heap, (parent.freq, next(counter), parent))

    return heap[0][2]

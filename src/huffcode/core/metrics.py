"""Derived facts about a code mapping.

- weighted_length: sum(freq * len(code)), the quantity Huffman minimizes
- prefix-free check: binary trie, codes inserted bit by bit
- shannon_bound: entropy lower bound for the weighted length
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from huffcode.core.tree import Symbol, check_freq
from huffcode.errors import InvalidCode, MissingCode

_BITS = {"0": 0, "1": 1}


def weighted_length(distribution: Mapping[Symbol, int], codes: Mapping[Symbol, str]) -> int:
    total = 0
    for sym, f in distribution.items():
        code = codes.get(sym)
        if code is None:
            raise MissingCode(f"missing code for symbol {sym!r}")
        total += check_freq(sym, f) * len(code)
    return total


class _TrieNode:
    __slots__ = ("children", "symbol", "terminal")

    def __init__(self) -> None:
        self.children: list[_TrieNode | None] = [None, None]
        self.symbol: Symbol = None
        self.terminal = False

    def has_children(self) -> bool:
        return self.children[0] is not None or self.children[1] is not None

    def any_terminal_below(self) -> _TrieNode:
        # Every branch was created by a completed insertion, so it ends on a terminal.
        cur = self
        while not cur.terminal:
            nxt = cur.children[0] if cur.children[0] is not None else cur.children[1]
            if nxt is None:
                raise RuntimeError("trie: ramo senza codice terminale")
            cur = nxt
        return cur


def prefix_conflict(codes: Mapping[Symbol, str]) -> tuple[Symbol, Symbol] | None:
    """Return the first (existing, new) pair of symbols whose codes clash, or None.

    A clash is an existing code that is a prefix of the new one, the new code
    being a prefix of an existing one, or two identical codes.
    """
    root = _TrieNode()
    for sym, code in codes.items():
        cur = root
        for ch in code:
            if cur.terminal:
                return cur.symbol, sym
            bit = _BITS.get(ch)
            if bit is None:
                raise InvalidCode(f"codice non binario per simbolo {sym!r}: {code!r}")
            nxt = cur.children[bit]
            if nxt is None:
                nxt = _TrieNode()
                cur.children[bit] = nxt
            cur = nxt

        if cur.terminal:
            return cur.symbol, sym
        if cur.has_children():
            return cur.any_terminal_below().symbol, sym
        cur.terminal = True
        cur.symbol = sym

    return None


def verify_prefix_free(codes: Mapping[Symbol, str]) -> bool:
    return prefix_conflict(codes) is None


def shannon_bound(distribution: Mapping[Symbol, int]) -> float:
    """Total frequency times the entropy (bits) of the normalized distribution."""
    freqs = [check_freq(sym, f) for sym, f in distribution.items()]
    total = sum(freqs)
    if total <= 0:
        return 0.0
    bits = 0.0
    for f in freqs:
        if f > 0:
            bits -= f * math.log2(f / total)
    return bits

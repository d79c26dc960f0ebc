"""Pure Huffman core: tree builder, code generator, verifier/metrics.

Nothing in this package does I/O or imports the orchestration layer.
"""

from __future__ import annotations

from huffcode.core.codes import SINGLE_SYMBOL_CODE, generate_codes, huffman
from huffcode.core.metrics import (
    prefix_conflict,
    shannon_bound,
    verify_prefix_free,
    weighted_length,
)
from huffcode.core.tree import Internal, Leaf, Node, build_tree

__all__ = [
    "SINGLE_SYMBOL_CODE",
    "Internal",
    "Leaf",
    "Node",
    "build_tree",
    "generate_codes",
    "huffman",
    "prefix_conflict",
    "shannon_bound",
    "verify_prefix_free",
    "weighted_length",
]

"""huffcode: optimal prefix-free (Huffman) codes from symbol frequencies."""

from __future__ import annotations

from huffcode.core import (
    Internal,
    Leaf,
    build_tree,
    generate_codes,
    huffman,
    prefix_conflict,
    shannon_bound,
    verify_prefix_free,
    weighted_length,
)

__all__ = [
    "Internal",
    "Leaf",
    "build_tree",
    "generate_codes",
    "huffman",
    "prefix_conflict",
    "shannon_bound",
    "verify_prefix_free",
    "weighted_length",
]

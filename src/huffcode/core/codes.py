from __future__ import annotations

from collections.abc import Mapping

from huffcode.core.tree import Leaf, Node, Symbol, build_tree

# A lone symbol still needs one bit to mark its presence in a stream.
SINGLE_SYMBOL_CODE = "0"


def generate_codes(root: Node | None) -> dict[Symbol, str]:
    """Tree -> {symbol: code}, "0" for a left step and "1" for a right step.

    Iterative DFS: skewed trees can be as deep as the number of symbols.
    Left subtree codes are inserted before right subtree codes.
    """
    codes: dict[Symbol, str] = {}
    if root is None:
        return codes

    if isinstance(root, Leaf):
        codes[root.symbol] = SINGLE_SYMBOL_CODE
        return codes

    stack: list[tuple[Node, str]] = [(root, "")]
    while stack:
        node, prefix = stack.pop()
        if isinstance(node, Leaf):
            codes[node.symbol] = prefix
            continue
        stack.append((node.right, prefix + "1"))
        stack.append((node.left, prefix + "0"))

    return codes


def huffman(distribution: Mapping[Symbol, int]) -> dict[Symbol, str]:
    """Distribution -> optimal prefix-free code mapping."""
    return generate_codes(build_tree(distribution))

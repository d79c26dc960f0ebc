"""Frequency distributions and code mappings as JSON (inline or @file).

Small and strict, same policy as the bench spec:
  - JSON objects only
  - symbols are non-empty strings
  - frequencies are non-negative ints, codes are strings
"""

from __future__ import annotations

import json
from collections import Counter

from huffcode.jsonarg import load_json_object


class DistributionSpecError(ValueError):
    pass


def load_distribution(arg: str) -> dict[str, int]:
    """Load {symbol: freq} from '@file.json' or inline JSON. Key order is kept."""
    obj = load_json_object(arg, label="distribution", error=DistributionSpecError)
    out: dict[str, int] = {}
    for sym, f in obj.items():
        if not sym:
            raise DistributionSpecError("distribution: simbolo vuoto")
        if isinstance(f, bool) or not isinstance(f, int):
            raise DistributionSpecError(f"distribution: frequenza non intera per {sym!r}")
        if f < 0:
            raise DistributionSpecError(f"distribution: frequenza negativa per {sym!r}")
        out[sym] = f
    return out


def load_code_mapping(arg: str) -> dict[str, str]:
    """Load {symbol: code} from '@file.json' or inline JSON."""
    obj = load_json_object(arg, label="codes", error=DistributionSpecError)
    out: dict[str, str] = {}
    for sym, code in obj.items():
        if not isinstance(code, str):
            raise DistributionSpecError(f"codes: il codice di {sym!r} deve essere una stringa")
        out[sym] = code
    return out


def count_symbols(text: str) -> dict[str, int]:
    """Character frequencies, in order of first occurrence."""
    return dict(Counter(text))


def dump_distribution(distribution: dict[str, int]) -> str:
    return json.dumps(distribution, ensure_ascii=False, indent=2) + "\n"

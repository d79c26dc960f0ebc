"""JSON object arguments: '@file.json' or inline JSON.

Shared by the distribution/code-mapping loaders and the bench spec loader.
Each caller passes its own ValueError subclass and a label for messages.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def load_json_object(arg: str, *, label: str, error: type[ValueError]) -> dict[str, Any]:
    s = arg.strip()
    if not s:
        raise error(f"{label}: argomento vuoto")

    if s.startswith("@"):
        p = Path(s[1:]).expanduser()
        if not p.is_file():
            raise error(f"{label}: file non trovato: {p}")
        raw = p.read_text(encoding="utf-8")
        where = f"in {p}"
    else:
        raw = s
        where = "inline"

    try:
        obj = json.loads(raw)
    except json.JSONDecodeError as e:
        raise error(f"{label}: JSON non valido ({where}): {e}") from e
    if not isinstance(obj, dict):
        raise error(f"{label}: il JSON ({where}) deve essere un oggetto")
    return obj

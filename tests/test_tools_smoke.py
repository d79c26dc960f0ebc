from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

pytestmark = pytest.mark.p1

REPO_ROOT = Path(__file__).resolve().parents[1]


def _env() -> dict[str, str]:
    env = dict(os.environ)
    src = str(REPO_ROOT / "src")
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [src, env.get("PYTHONPATH", "")]))
    return env


def test_bench_huffman_tool_is_deterministic() -> None:
    spec = {"spec": "huffcode.bench.v1", "name": "t", "sizes": [1, 64], "trials": 2}
    r = subprocess.run(
        [
            sys.executable,
            str(REPO_ROOT / "tools" / "bench_huffman.py"),
            "--spec",
            json.dumps(spec),
            "--iters",
            "2",
            "--jobs",
            "2",
        ],
        env=_env(),
        text=True,
        capture_output=True,
    )
    assert r.returncode == 0, (r.stdout, r.stderr)
    lines = [json.loads(ln) for ln in r.stdout.splitlines() if ln.strip()]
    assert [ln["iter"] for ln in lines[:-1]] == [1, 2]
    assert all(ln["deterministic"] and ln["all_prefix_free"] for ln in lines[:-1])
    assert lines[-1]["schema"] == "huffcode.bench_huffman.v1"
    assert lines[-1]["iters"] == 2


from __future__ import annotations

import json
from pathlib import Path

import pytest

from huffcode.bench_spec import (
    DEFAULT_SIZES,
    SPEC_ID_V1,
    BenchSpecError,
    BenchSpecV1,
    load_bench_spec,
)
from huffcode.distribution import (
    DistributionSpecError,
    count_symbols,
    dump_distribution,
    load_code_mapping,
    load_distribution,
)

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_load_distribution_inline_keeps_order() -> None:
    dist = load_distribution('{"b": 2, "a": 1, "z": 0}')
    assert dist == {"b": 2, "a": 1, "z": 0}
    assert list(dist) == ["b", "a", "z"]


def test_load_distribution_from_file_roundtrips_dump(tmp_path: Path) -> None:
    p = tmp_path / "dist.json"
    src = {"A": 45, "B": 13, "è": 3}
    p.write_text(dump_distribution(src), encoding="utf-8")
    assert load_distribution("@" + str(p)) == src


@pytest.mark.parametrize(
    "arg",
    [
        "",
        "   ",
        "[1, 2]",
        "{not json",
        '{"a": -1}',
        '{"a": 1.5}',
        '{"a": "3"}',
        '{"a": true}',
        '{"": 1}',
        "@/definitely/not/here.json",
    ],
)
def test_load_distribution_rejects(arg: str) -> None:
    with pytest.raises(DistributionSpecError):
        load_distribution(arg)


def test_load_code_mapping() -> None:
    assert load_code_mapping('{"a": "0", "b": "1"}') == {"a": "0", "b": "1"}
    with pytest.raises(DistributionSpecError, match="stringa"):
        load_code_mapping('{"a": 0}')


def test_count_symbols_first_occurrence_order() -> None:
    assert count_symbols("abracadabra") == {"a": 5, "b": 2, "r": 2, "c": 1, "d": 1}
    assert list(count_symbols("abracadabra")) == ["a", "b", "r", "c", "d"]
    assert count_symbols("") == {}


def test_load_bench_spec_from_file() -> None:
    spec = load_bench_spec("@" + str(REPO_ROOT / "tools" / "bench_specs" / "default_v1.json"))
    assert spec == BenchSpecV1(name="default")
    assert spec.sizes == DEFAULT_SIZES
    assert spec.trials == 5
    assert spec.seed == 42


def test_load_bench_spec_defaults_for_missing_keys() -> None:
    spec = load_bench_spec(json.dumps({"spec": SPEC_ID_V1, "sizes": [3, 4]}))
    assert spec.sizes == (3, 4)
    assert spec.name == "bench"
    assert spec.max_freq == 1000
    assert spec.per_trial_csv == "huffman_per_trial.csv"


@pytest.mark.parametrize(
    "obj",
    [
        {},
        {"spec": "huffcode.bench.v0"},
        {"spec": SPEC_ID_V1, "wat": 1},
        {"spec": SPEC_ID_V1, "sizes": []},
        {"spec": SPEC_ID_V1, "sizes": [10, 0]},
        {"spec": SPEC_ID_V1, "sizes": "10"},
        {"spec": SPEC_ID_V1, "trials": 0},
        {"spec": SPEC_ID_V1, "max_freq": -3},
        {"spec": SPEC_ID_V1, "seed": True},
        {"spec": SPEC_ID_V1, "name": ""},
        {"spec": SPEC_ID_V1, "summary_csv": " "},
    ],
)
def test_bench_spec_rejects(obj: dict) -> None:
    with pytest.raises(BenchSpecError):
        load_bench_spec(json.dumps(obj))


@pytest.mark.parametrize("seed", [0, -7, 2**40])
def test_bench_spec_seed_any_int(seed: int) -> None:
    assert load_bench_spec(json.dumps({"spec": SPEC_ID_V1, "seed": seed})).seed == seed


def test_json_arg_errors_use_caller_error_class(tmp_path: Path) -> None:
    p = tmp_path / "list.json"
    p.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(DistributionSpecError, match="distribution: .*oggetto"):
        load_distribution("@" + str(p))
    with pytest.raises(DistributionSpecError, match="codes: .*oggetto"):
        load_code_mapping("@" + str(p))
    with pytest.raises(BenchSpecError, match="bench spec: .*oggetto"):
        load_bench_spec("@" + str(p))
    with pytest.raises(BenchSpecError, match="bench spec: JSON non valido"):
        load_bench_spec("{nope")

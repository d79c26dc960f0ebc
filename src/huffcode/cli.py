"""huffcode CLI.

This is the stable CLI entrypoint (console-script: ``huffcode``).

Notes:
  - --version is supported at top-level.
  - codes/verify support --json (single-line, machine-readable output).
  - bench writes two CSV reports (per-trial + summary).
"""

from __future__ import annotations

import argparse
import json
import random
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from huffcode.bench_spec import BenchSpecError, BenchSpecV1, load_bench_spec
from huffcode.distribution import DistributionSpecError
from huffcode.errors import (
    EXIT_GENERIC,
    EXIT_NOT_PREFIX_FREE,
    EXIT_USAGE,
    HuffcodeError,
    NotPrefixFree,
    UsageError,
)

DEMO_DISTRIBUTION: dict[str, int] = {"A": 45, "B": 13, "C": 12, "D": 16, "E": 9, "F": 5}


def _pkg_version() -> str:
    try:
        from importlib.metadata import PackageNotFoundError, version

        try:
            return version("huffcode")
        except PackageNotFoundError:
            # editable install but script invoked from source, or metadata missing
            return "0+unknown"
    except Exception:
        return "0+unknown"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _dumps(obj: dict[str, Any]) -> str:
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


def _print_codes(distribution: dict[str, int], *, json_out: bool) -> None:
    from huffcode.core import huffman, verify_prefix_free, weighted_length

    codes = huffman(distribution)
    wlen = weighted_length(distribution, codes)
    pf = verify_prefix_free(codes)

    if json_out:
        print(
            _dumps(
                {
                    "schema": "huffcode.codes.v1",
                    "codes": codes,
                    "weighted_length": wlen,
                    "prefix_free": pf,
                    "symbols": len(codes),
                }
            )
        )
        return

    for sym, code in codes.items():
        print(f"{sym} : {code}")
    print(f"weighted_length={wlen}")
    print(f"prefix_free={'true' if pf else 'false'}")


def _cmd_codes(dist_arg: str, *, from_text: bool, json_out: bool) -> int:
    from huffcode.distribution import count_symbols, load_distribution

    if from_text:
        p = Path(dist_arg).expanduser()
        if not p.is_file():
            raise DistributionSpecError(f"text: file non trovato: {p}")
        distribution = count_symbols(p.read_text(encoding="utf-8"))
    else:
        distribution = load_distribution(dist_arg)

    _print_codes(distribution, json_out=json_out)
    return 0


def _exit_code_for(e: BaseException) -> int:
    if isinstance(e, (DistributionSpecError, BenchSpecError)):
        return EXIT_USAGE
    if isinstance(e, HuffcodeError):
        return int(e.exit_code)
    return EXIT_GENERIC


def _print_verify_json_error(
    *, err_type: str, message: str, symbols: int | None = None, pair: list[Any] | None = None
) -> None:
    """Emit stable JSON on stderr for verify errors when --json is used."""
    error: dict[str, Any] = {"type": err_type, "message": message}
    if pair is not None:
        error["pair"] = pair
    obj: dict[str, Any] = {
        "schema": "huffcode.verify.v1",
        "ok": False,
        "version": _pkg_version(),
        "error": error,
    }
    if symbols is not None:
        obj["symbols"] = symbols
    print(json.dumps(obj, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _cmd_verify(codes_arg: str, *, json_out: bool) -> int:
    from huffcode.core import prefix_conflict
    from huffcode.distribution import load_code_mapping

    try:
        codes = load_code_mapping(codes_arg)
        clash = prefix_conflict(codes)
    except Exception as e:
        # For --json every failure is a JSON object on stderr.
        if json_out:
            _print_verify_json_error(err_type=type(e).__name__, message=str(e))
            return _exit_code_for(e)
        raise

    if clash is not None:
        a, b = clash
        msg = f"codici non prefix-free: {a!r}={codes[a]!r} vs {b!r}={codes[b]!r}"
        if json_out:
            _print_verify_json_error(
                err_type="NotPrefixFree", message=msg, symbols=len(codes), pair=[a, b]
            )
            return EXIT_NOT_PREFIX_FREE
        raise NotPrefixFree(msg)

    if json_out:
        print(
            _dumps(
                {
                    "schema": "huffcode.verify.v1",
                    "ok": True,
                    "symbols": len(codes),
                    "version": _pkg_version(),
                }
            )
        )
    else:
        print("OK")
    return 0


def _cmd_gen(n: int, output: Path, *, max_freq: int, seed: int) -> int:
    from huffcode.bench import create_random_freqs
    from huffcode.distribution import dump_distribution

    if n < 0:
        raise UsageError(f"gen: n negativo: {n}")
    if max_freq < 1:
        raise UsageError(f"gen: --max-freq deve essere >= 1: {max_freq}")

    rng = random.Random(seed)
    freqs = create_random_freqs(n, max_freq, rng)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dump_distribution(freqs), encoding="utf-8")
    print(f"OK: n={n} seed={seed} -> {output}")
    return 0


def _parse_sizes(s: str) -> tuple[int, ...]:
    try:
        sizes = tuple(int(x) for x in s.split(",") if x.strip())
    except ValueError as e:
        raise BenchSpecError(f"--sizes non valido: {s!r}") from e
    if not sizes or any(x <= 0 for x in sizes):
        raise BenchSpecError(f"--sizes non valido: {s!r}")
    return sizes


def _resolve_bench_spec(ns: argparse.Namespace) -> BenchSpecV1:
    # precedence: CLI flags > spec values > defaults
    base = load_bench_spec(ns.spec) if ns.spec else BenchSpecV1()
    overrides: dict[str, Any] = {}
    if ns.sizes is not None:
        overrides["sizes"] = _parse_sizes(ns.sizes)
    if ns.trials is not None:
        if ns.trials <= 0:
            raise BenchSpecError(f"--trials deve essere > 0: {ns.trials}")
        overrides["trials"] = int(ns.trials)
    if ns.max_freq is not None:
        if ns.max_freq <= 0:
            raise BenchSpecError(f"--max-freq deve essere > 0: {ns.max_freq}")
        overrides["max_freq"] = int(ns.max_freq)
    if ns.seed is not None:
        overrides["seed"] = int(ns.seed)
    if ns.per_trial is not None:
        overrides["per_trial_csv"] = str(ns.per_trial)
    if ns.summary is not None:
        overrides["summary_csv"] = str(ns.summary)
    if not overrides:
        return base
    return replace(base, **overrides)


def _cmd_bench_run(ns: argparse.Namespace) -> int:
    from huffcode.bench import run_experiments
    from huffcode.report import summarize, write_per_trial_csv, write_summary_csv

    spec = _resolve_bench_spec(ns)
    jobs = max(1, int(ns.jobs))
    per_trial = Path(spec.per_trial_csv)
    summary_csv = Path(spec.summary_csv)

    print(
        f"[huffcode] bench {spec.name}: sizes={list(spec.sizes)} trials={spec.trials} "
        f"jobs={jobs} -> {per_trial} and {summary_csv}",
        file=sys.stderr,
    )
    results = run_experiments(spec, jobs=jobs)
    summaries = summarize(results)
    write_per_trial_csv(per_trial, results)
    write_summary_csv(summary_csv, summaries)

    bad = [r for r in results if not r.prefix_free]
    for s in summaries:
        print(
            f"n={s.n} avg_ms={s.avg_ms:.3f} min_ms={s.min_ms:.3f} "
            f"max_ms={s.max_ms:.3f} stddev_ms={s.stddev_ms:.3f} trials={s.trials}"
        )
    if bad:
        raise NotPrefixFree(f"{len(bad)} trial con codici non prefix-free")
    return 0


def _cmd_bench_spec_validate(spec_arg: str) -> int:
    # load is the validation
    load_bench_spec(spec_arg)
    print("OK")
    return 0


def _cmd_exit_codes() -> int:
    from huffcode.errors import render_exit_codes_markdown

    sys.stdout.write(render_exit_codes_markdown())
    return 0


def _cmd_demo() -> int:
    print("=== Demo: example ===")
    _print_codes(dict(DEMO_DISTRIBUTION), json_out=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="huffcode", description="Optimal prefix-free (Huffman) codes from symbol frequencies"
    )
    p.add_argument("--version", action="version", version=f"huffcode {_pkg_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_codes = sub.add_parser("codes", help="Build the Huffman code for a distribution")
    p_codes.add_argument(
        "distribution",
        help=(
            "Distribution JSON {symbol: freq}. Use '@file.json' to load from file, or pass JSON inline. "
            "With --from-text: path of a UTF-8 text file whose characters are counted."
        ),
    )
    p_codes.add_argument(
        "--from-text", action="store_true", help="Count characters of a text file instead"
    )
    p_codes.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    _add_common_args(p_codes)

    p_verify = sub.add_parser("verify", help="Check that a code mapping is prefix-free")
    p_verify.add_argument("codes", help="Code mapping JSON {symbol: code} (@file.json or inline)")
    p_verify.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    _add_common_args(p_verify)

    p_gen = sub.add_parser("gen", help="Write a random distribution (JSON)")
    p_gen.add_argument("n", type=int, help="Number of symbols (s0..s{n-1})")
    p_gen.add_argument("output", type=Path)
    p_gen.add_argument("--max-freq", type=int, default=1000, help="Frequencies in [1, max] (default: 1000)")
    p_gen.add_argument("--seed", type=int, default=42, help="Deterministic seed (default: 42)")
    _add_common_args(p_gen)

    p_bench = sub.add_parser("bench", help="Benchmark on random distributions (CSV reports)")
    sub_bench = p_bench.add_subparsers(dest="bench_cmd", required=True)

    p_run = sub_bench.add_parser("run", help="Run experiments and write CSV reports")
    p_run.add_argument(
        "--spec",
        default=None,
        help="Bench spec JSON (@file.json or inline JSON). CLI flags override spec values.",
    )
    p_run.add_argument("--sizes", default=None, help="Comma-separated symbol counts, e.g. 1000,5000")
    p_run.add_argument("--trials", type=int, default=None)
    p_run.add_argument("--max-freq", type=int, default=None)
    p_run.add_argument("--seed", type=int, default=None)
    p_run.add_argument("--per-trial", type=Path, default=None, help="Per-trial CSV output path")
    p_run.add_argument("--summary", type=Path, default=None, help="Summary CSV output path")
    p_run.add_argument(
        "--jobs", type=int, default=1, help="Parallel trials per size (default: 1)"
    )
    _add_common_args(p_run)

    p_sv = sub_bench.add_parser("spec-validate", help="Validate a bench spec (v1)")
    p_sv.add_argument("spec", help="Bench spec JSON (@file.json or inline JSON)")
    _add_common_args(p_sv)

    p_demo = sub.add_parser("demo", help="Textbook example (A:45 B:13 C:12 D:16 E:9 F:5)")
    _add_common_args(p_demo)

    p_ec = sub.add_parser("exit-codes", help="Print the exit code table (Markdown)")
    _add_common_args(p_ec)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "codes":
            return _cmd_codes(ns.distribution, from_text=bool(ns.from_text), json_out=bool(ns.json))
        if ns.cmd == "verify":
            return _cmd_verify(ns.codes, json_out=bool(ns.json))
        if ns.cmd == "gen":
            return _cmd_gen(ns.n, ns.output, max_freq=ns.max_freq, seed=ns.seed)
        if ns.cmd == "bench":
            if ns.bench_cmd == "run":
                return _cmd_bench_run(ns)
            if ns.bench_cmd == "spec-validate":
                return _cmd_bench_spec_validate(str(ns.spec))
            raise AssertionError("unreachable")
        if ns.cmd == "demo":
            return _cmd_demo()
        if ns.cmd == "exit-codes":
            return _cmd_exit_codes()

        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except (DistributionSpecError, BenchSpecError, HuffcodeError) as e:
        # config loaders count as usage errors
        if getattr(ns, "debug", False):
            raise
        print(f"[huffcode] {e}", file=sys.stderr)
        return _exit_code_for(e)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffcode] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())

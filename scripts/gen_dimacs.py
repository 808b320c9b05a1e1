#!/usr/bin/env python3
"""
DIMACS generator for the team-construction puzzle in a tri-partite graph.

Each edge between two candidates of different professions is one variable.
The formula is satisfiable iff some graph with N candidates per profession has
at least one edge between every two triples of different professions, yet no
three candidates of distinct professions are pairwise connected.

Usage:
  python3 scripts/gen_dimacs.py N > team.cnf
  minisat team.cnf team.out
"""

from __future__ import annotations

import argparse
import hashlib
import json
import sys
from pathlib import Path
from typing import IO

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from team_encoding.clauses import DEFAULT_FAMILIES, FAMILY_REGISTRY  # noqa: E402
from team_encoding.schema import (  # noqa: E402
    ConfigurationError,
    IndexCollisionError,
    TeamSchema,
)

CANONICAL_CATEGORY_KEYS = ["at_least_one_edge", "no_clique"]


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {raw!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _parse_family_names(raw: str) -> list[str]:
    names = [name.strip() for name in raw.split(",") if name.strip()]
    if not names:
        raise ConfigurationError("At least one clause family must be selected.")
    unknown = [name for name in names if name not in FAMILY_REGISTRY]
    if unknown:
        raise ConfigurationError(f"Unknown clause family name(s): {', '.join(unknown)}")
    if len(set(names)) != len(names):
        raise ConfigurationError("Duplicate clause family names are not allowed.")
    return names


def _write_dimacs(f: IO[str], *, nvars: int, clauses: list[list[int]]) -> str:
    h = hashlib.sha256()

    def emit(line: str) -> None:
        f.write(line)
        h.update(line.encode("utf-8"))

    emit(f"p cnf {nvars} {len(clauses)}\n")
    for clause in clauses:
        emit(" ".join(str(lit) for lit in clause) + " 0\n")
    return h.hexdigest()


def build_formula(
    schema: TeamSchema, family_names: list[str]
) -> tuple[list[list[int]], dict[str, int]]:
    clauses: list[list[int]] = []

    category_counts = {key: 0 for key in CANONICAL_CATEGORY_KEYS}
    for family_name in family_names:
        family = FAMILY_REGISTRY[family_name]
        before = len(clauses)
        family.encode(schema, clauses)
        added = len(clauses) - before
        expected = family.expected_count(schema)
        if added != expected:
            raise RuntimeError(
                f"Clause family '{family_name}' emitted {added} clause(s), expected {expected}."
            )
        category_counts[family.category_key] += added
    return clauses, category_counts


def run_generation(
    *,
    n: int,
    professions: int = 3,
    family_names: list[str],
    out: IO[str],
    manifest_path: Path | None = None,
    log: IO[str] | None = None,
) -> dict[str, object]:
    def info(msg: str) -> None:
        if log is not None:
            print(msg, file=log)

    schema = TeamSchema(n=n, professions=professions)
    info(
        f"{schema.professions} professions, {schema.n} candidates per profession, "
        f"{schema.n_edges_per_pair} edges between candidates of two professions, "
        f"{schema.n_vars} total edges"
    )
    info("Edge test: OK")

    clauses, category_counts = build_formula(schema, family_names)
    info(f"{len(clauses)} clauses")

    cnf_sha256 = _write_dimacs(out, nvars=schema.n_vars, clauses=clauses)
    out.flush()
    manifest = schema.manifest_dict(
        category_counts=category_counts,
        cnf_sha256=cnf_sha256,
        nclauses=len(clauses),
    )
    if manifest_path is not None:
        manifest_path.parent.mkdir(parents=True, exist_ok=True)
        manifest_path.write_text(
            json.dumps(manifest, indent=2, sort_keys=True) + "\n", encoding="utf-8"
        )
    info("Done!")
    return manifest


def main() -> None:
    ap = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    ap.add_argument("n", type=_positive_int, help="Number of candidates per profession.")
    ap.add_argument(
        "--professions",
        type=int,
        default=3,
        help="Number of professions (only 3 supported).",
    )
    ap.add_argument(
        "--families",
        type=str,
        default=",".join(DEFAULT_FAMILIES),
        help=f"Comma-separated clause family list. Available: {','.join(FAMILY_REGISTRY.keys())}",
    )
    ap.add_argument(
        "--out",
        type=str,
        default="-",
        help="Output DIMACS CNF path ('-' for stdout, the default).",
    )
    ap.add_argument("--manifest", type=Path, default=None, help="Optional JSON manifest path.")
    ap.add_argument("--quiet", action="store_true", help="Suppress diagnostics on stderr.")
    args = ap.parse_args()

    log = None if args.quiet else sys.stderr
    family_names = _parse_family_names(args.families)
    if args.out == "-":
        run_generation(
            n=args.n,
            professions=args.professions,
            family_names=family_names,
            out=sys.stdout,
            manifest_path=args.manifest,
            log=log,
        )
        return

    # Validate before the output file is created.
    TeamSchema(n=args.n, professions=args.professions)
    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        run_generation(
            n=args.n,
            professions=args.professions,
            family_names=family_names,
            out=f,
            manifest_path=args.manifest,
            log=log,
        )
    if log is not None:
        print(f"Wrote {out_path}", file=log)


if __name__ == "__main__":
    try:
        main()
    except (ConfigurationError, IndexCollisionError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

#!/usr/bin/env python3
"""
Independent auditor for team-construction DIMACS files.

Rebuilds both clause families from the documented variable layout

  var = pair_idx*n*n + c1*n + c2 + 1,   pair order (0,1), (0,2), (1,2)

without importing the generator, then compares them with the file as
multisets of sorted clauses. n is inferred from the header (nvars = 3n²).
Any clause that repeats a variable (duplicate literal or tautology) is
rejected outright.

Usage:
  python3 scripts/check_team_cnf.py team.cnf --manifest team.manifest.json
"""

from __future__ import annotations

import argparse
import hashlib
import itertools
import json
import math
import sys
from collections import Counter
from pathlib import Path

PAIRS = [(0, 1), (0, 2), (1, 2)]
FAMILIES = ["at_least_one_edge", "no_clique"]
SHOW = 5

Clause = tuple[int, ...]


class AuditError(RuntimeError):
    pass


def edge_var(n: int, pair_idx: int, c1: int, c2: int) -> int:
    return pair_idx * n * n + c1 * n + c2 + 1


def edge_label(n: int, var: int) -> str:
    pair_idx, rest = divmod(var - 1, n * n)
    c1, c2 = divmod(rest, n)
    p1, p2 = PAIRS[pair_idx]
    return f"{p1}:{c1}-{p2}:{c2}"


def fmt_clause(n: int, cl: Clause) -> str:
    edges = " ".join(("~" if lit < 0 else "") + edge_label(n, abs(lit)) for lit in cl)
    return " ".join(str(lit) for lit in cl) + f" 0  # {edges}"


def read_cnf(path: Path) -> tuple[int, list[tuple[int, Clause]]]:
    """Parse and validate a DIMACS file; clauses come back sorted, with line numbers."""
    header: tuple[int, int] | None = None
    clauses: list[tuple[int, Clause]] = []

    for lineno, raw in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("c"):
            continue
        where = f"{path}:{lineno}"
        tokens = line.split()

        if tokens[0] == "p":
            if header is not None:
                raise AuditError(f"{where}: second 'p' header line: {line!r}")
            if len(tokens) != 4 or tokens[1] != "cnf":
                raise AuditError(f"{where}: malformed header: {line!r}")
            try:
                header = (int(tokens[2]), int(tokens[3]))
            except ValueError as e:
                raise AuditError(f"{where}: non-integer header field: {line!r}") from e
            continue

        if header is None:
            raise AuditError(f"{where}: clause before header")
        try:
            ints = [int(tok) for tok in tokens]
        except ValueError as e:
            raise AuditError(f"{where}: non-integer literal: {line!r}") from e
        if ints[-1] != 0:
            raise AuditError(f"{where}: clause does not end with 0: {line!r}")
        lits = ints[:-1]
        if not lits:
            raise AuditError(f"{where}: empty clause")
        if 0 in lits:
            raise AuditError(f"{where}: clause contains 0 before terminator: {line!r}")
        out_of_range = [lit for lit in lits if abs(lit) > header[0]]
        if out_of_range:
            raise AuditError(
                f"{where}: literal {out_of_range[0]} out of range for nvars={header[0]}"
            )
        if len({abs(lit) for lit in lits}) != len(lits):
            raise AuditError(f"{where}: variable repeated within clause: {line!r}")
        clauses.append((lineno, tuple(sorted(lits))))

    if header is None:
        raise AuditError(f"{path}: missing 'p cnf' header")
    nvars, nclauses = header
    if len(clauses) != nclauses:
        raise AuditError(f"{path}: header says {nclauses} clauses but file has {len(clauses)}")
    return nvars, clauses


def infer_n(nvars: int) -> int:
    n = math.isqrt(max(nvars, 0) // 3)
    if n < 1 or 3 * n * n != nvars:
        raise AuditError(f"CNF nvars={nvars} is not 3*n*n for any n >= 1")
    return n


def expected_families(n: int) -> dict[str, Counter[Clause]]:
    triples = list(itertools.combinations(range(n), 3))
    coverage: Counter[Clause] = Counter()
    for pair_idx in range(len(PAIRS)):
        for t1, t2 in itertools.product(triples, repeat=2):
            cl = sorted(edge_var(n, pair_idx, a, b) for a in t1 for b in t2)
            coverage[tuple(cl)] += 1

    no_clique: Counter[Clause] = Counter()
    for picks in itertools.product(range(n), repeat=3):
        cl = sorted(
            -edge_var(n, pair_idx, picks[p1], picks[p2])
            for pair_idx, (p1, p2) in enumerate(PAIRS)
        )
        no_clique[tuple(cl)] += 1

    return {"at_least_one_edge": coverage, "no_clique": no_clique}


def classify(cl: Clause) -> str | None:
    if len(cl) == 9 and cl[0] > 0:
        return "at_least_one_edge"
    if len(cl) == 3 and cl[-1] < 0:
        return "no_clique"
    return None


def check_manifest(
    path: Path,
    cnf_path: Path,
    *,
    n: int,
    nvars: int,
    nclauses: int,
    observed_counts: dict[str, int],
) -> None:
    obj = json.loads(path.read_text(encoding="utf-8"))
    required = {
        "encoding": "team_construction",
        "ncandidates": n,
        "nvars": nvars,
        "nclauses": nclauses,
        "pair_order": [list(pair) for pair in PAIRS],
        "category_counts": observed_counts,
    }
    if "cnf_sha256" in obj:
        required["cnf_sha256"] = hashlib.sha256(cnf_path.read_bytes()).hexdigest()
    for key, value in required.items():
        if obj.get(key) != value:
            raise AuditError(f"manifest.{key}={obj.get(key)!r} but the CNF gives {value!r}")


def audit(cnf_path: Path, manifest_path: Path | None = None) -> dict[str, int]:
    nvars, clauses = read_cnf(cnf_path)
    n = infer_n(nvars)

    observed: dict[str, Counter[Clause]] = {name: Counter() for name in FAMILIES}
    problems: list[str] = []
    for lineno, cl in clauses:
        family = classify(cl)
        if family is None:
            problems.append(f"{cnf_path}:{lineno}: shape matches no family: {fmt_clause(n, cl)}")
        else:
            observed[family][cl] += 1
    observed_counts = {name: sum(observed[name].values()) for name in FAMILIES}

    if manifest_path is not None:
        check_manifest(
            manifest_path,
            cnf_path,
            n=n,
            nvars=nvars,
            nclauses=len(clauses),
            observed_counts=observed_counts,
        )

    for name, expected in expected_families(n).items():
        missing = expected - observed[name]
        extra = observed[name] - expected
        print(
            f"[{name}] expected={sum(expected.values())} observed={observed_counts[name]} "
            f"missing={sum(missing.values())} unexpected={sum(extra.values())}"
        )
        for label, diff in (("missing", missing), ("unexpected", extra)):
            if not diff:
                continue
            problems.append(f"{name}: {label} {sum(diff.values())} clause(s)")
            for cl in sorted(diff)[:SHOW]:
                print(f"  {label}: {fmt_clause(n, cl)}")

    if problems:
        print("\nFAILED:")
        for problem in problems:
            print(f"- {problem}")
        raise AuditError("CNF audit failed")

    print(f"\nOK: {cnf_path} encodes the team-construction formula for n={n}.")
    return observed_counts


def main() -> None:
    ap = argparse.ArgumentParser(description="Audit a team-construction DIMACS file")
    ap.add_argument("cnf", type=Path, help="DIMACS CNF file produced by scripts/gen_dimacs.py")
    ap.add_argument("--manifest", type=Path, default=None, help="JSON manifest path")
    args = ap.parse_args()
    audit(args.cnf, args.manifest)


if __name__ == "__main__":
    try:
        main()
    except AuditError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

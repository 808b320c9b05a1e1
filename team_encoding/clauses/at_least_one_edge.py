from __future__ import annotations

from math import comb
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from team_encoding.schema import TeamSchema


name = "at_least_one_edge"
category_key = "at_least_one_edge"


def between_candidates(
    schema: "TeamSchema", p1: int, cands1: tuple[int, ...], p2: int, cands2: tuple[int, ...]
) -> list[int]:
    return [schema.var_edge(p1, c1, p2, c2) for c1 in cands1 for c2 in cands2]


def encode(schema: "TeamSchema", out_clauses: list[list[int]]) -> None:
    for p1, p2 in schema.pairs:
        for t1 in schema.triples:
            for t2 in schema.triples:
                out_clauses.append(between_candidates(schema, p1, t1, p2, t2))


def expected_count(schema: "TeamSchema") -> int:
    return schema.n_pairs * comb(schema.n, 3) ** 2

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from team_encoding.schema import TeamSchema


name = "no_clique"
category_key = "no_clique"


def between_candidates(schema: "TeamSchema", cands: tuple[int, ...]) -> list[int]:
    # cands[p] is the candidate picked from profession p
    return [-schema.var_edge(p1, cands[p1], p2, cands[p2]) for p1, p2 in schema.pairs]


def encode(schema: "TeamSchema", out_clauses: list[list[int]]) -> None:
    for cands in itertools.product(range(schema.n), repeat=len(schema.profs)):
        out_clauses.append(between_candidates(schema, cands))


def expected_count(schema: "TeamSchema") -> int:
    return schema.n ** len(schema.profs)

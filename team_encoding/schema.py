from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterator


PROFESSIONS = [0, 1, 2]
PROFESSION_PAIR_ORDER = [
    (0, 1),
    (0, 2),
    (1, 2),
]

Edge = tuple[int, int, int, int]


class ConfigurationError(ValueError):
    pass


class IndexCollisionError(RuntimeError):
    pass


@dataclass
class TeamSchema:
    n: int
    professions: int = 3

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n < 1:
            raise ConfigurationError(
                f"Number of candidates per profession must be a positive integer, got {self.n!r}."
            )
        if self.professions != len(PROFESSIONS):
            raise ConfigurationError(
                f"Only {len(PROFESSIONS)} professions are supported, got {self.professions}."
            )

        self.profs: list[int] = PROFESSIONS[:]
        self.pairs: list[tuple[int, int]] = PROFESSION_PAIR_ORDER[:]
        self.pair_idx: dict[tuple[int, int], int] = {
            pair: idx for idx, pair in enumerate(self.pairs)
        }
        self.triples: list[tuple[int, int, int]] = list(
            itertools.combinations(range(self.n), 3)
        )

        self.n_pairs = len(self.pairs)
        self.n_edges_per_pair = self.n * self.n
        self.n_vars = self.n_pairs * self.n_edges_per_pair

        check_edge_indices(self)

    def profession_pair_index(self, p1: int, p2: int) -> int:
        key = (p1, p2) if p1 < p2 else (p2, p1)
        if key not in self.pair_idx:
            raise ValueError(f"No edge between professions {p1} and {p2}.")
        return self.pair_idx[key]

    def candidate_pair_index(self, c1: int, c2: int) -> int:
        for c in (c1, c2):
            if isinstance(c, bool) or not isinstance(c, int):
                raise ValueError(f"Candidate must be an integer, got {c!r}.")
            if not 0 <= c < self.n:
                raise ValueError(f"Candidate {c} out of range [0, {self.n}).")
        return c1 * self.n + c2

    def var_edge(self, p1: int, c1: int, p2: int, c2: int) -> int:
        if p1 > p2:
            p1, c1, p2, c2 = p2, c2, p1, c1
        return (
            self.profession_pair_index(p1, p2) * self.n_edges_per_pair
            + self.candidate_pair_index(c1, c2)
            + 1
        )

    def describe_var(self, var: int) -> Edge:
        if not 1 <= var <= self.n_vars:
            raise ValueError(f"Variable {var} out of range [1, {self.n_vars}].")
        pair, rest = divmod(var - 1, self.n_edges_per_pair)
        c1, c2 = divmod(rest, self.n)
        p1, p2 = self.pairs[pair]
        return (p1, c1, p2, c2)

    def edges(self) -> Iterator[Edge]:
        for p1, p2 in self.pairs:
            for c1 in range(self.n):
                for c2 in range(self.n):
                    yield (p1, c1, p2, c2)

    def manifest_dict(
        self,
        *,
        category_counts: dict[str, int],
        cnf_sha256: str,
        nclauses: int,
    ) -> dict[str, object]:
        manifest: dict[str, object] = {
            "encoding": "team_construction",
            "professions": self.profs,
            "ncandidates": self.n,
            "pair_order": [list(pair) for pair in self.pairs],
            "edge_order": "var = pair_idx*n*n + c1*n + c2 + 1 (p1 < p2)",
            "triple_order": "itertools.combinations(range(n),3) lex",
            "npairs": self.n_pairs,
            "nvars": self.n_vars,
            "nclauses": nclauses,
            "category_counts": category_counts,
            "edge_var_range": [1, self.n_vars],
            "cnf_sha256": cnf_sha256,
        }
        return manifest


def check_edge_indices(schema: TeamSchema) -> dict[int, Edge]:
    """Map every edge to its variable and fail on the first shared id.

    Returns the id -> edge map; raises IndexCollisionError naming both edges
    on a collision, or if the ids do not cover exactly 1..n_vars.
    """
    seen: dict[int, Edge] = {}
    for edge in schema.edges():
        var = schema.var_edge(*edge)
        if not 1 <= var <= schema.n_vars:
            raise IndexCollisionError(
                f"var_edge{edge}={var} outside [1, {schema.n_vars}]"
            )
        if var in seen:
            raise IndexCollisionError(
                f"Edge {var} already seen!\n\tvar_edge{seen[var]}={var}\n\tvar_edge{edge}={var}"
            )
        seen[var] = edge
    if len(seen) != schema.n_vars:
        raise IndexCollisionError(
            f"expected {schema.n_vars} distinct edge ids, got {len(seen)}"
        )
    return seen

"""
Unit tests for the clause families in team_encoding/clauses.
"""
from math import comb

import pytest

from team_encoding.clauses import DEFAULT_FAMILIES, FAMILY_REGISTRY, at_least_one_edge, no_clique
from team_encoding.schema import TeamSchema


def encode(family, schema):
    clauses = []
    family.encode(schema, clauses)
    return clauses


class TestRegistry:
    def test_default_order(self):
        assert DEFAULT_FAMILIES == ["at_least_one_edge", "no_clique"]
        assert all(name in FAMILY_REGISTRY for name in DEFAULT_FAMILIES)

    def test_registry_names_match_modules(self):
        for name, family in FAMILY_REGISTRY.items():
            assert family.name == name
            assert family.category_key == name


class TestAtLeastOneEdge:
    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5])
    def test_count(self, n):
        schema = TeamSchema(n=n)
        clauses = encode(at_least_one_edge, schema)
        assert len(clauses) == 3 * comb(n, 3) ** 2
        assert len(clauses) == at_least_one_edge.expected_count(schema)

    def test_n3_one_clause_per_profession_pair(self, schema3):
        clauses = encode(at_least_one_edge, schema3)
        assert clauses == [
            list(range(1, 10)),
            list(range(10, 19)),
            list(range(19, 28)),
        ]

    def test_literal_order_within_clause(self, schema4):
        first = encode(at_least_one_edge, schema4)[0]
        expected = [
            schema4.var_edge(0, c1, 1, c2) for c1 in (0, 1, 2) for c2 in (0, 1, 2)
        ]
        assert first == expected

    def test_triples_in_lexicographic_order(self, schema4):
        clauses = encode(at_least_one_edge, schema4)
        # second clause: triple (0,1,2) of profession 0 vs (0,1,3) of profession 1
        assert clauses[1] == [
            schema4.var_edge(0, c1, 1, c2) for c1 in (0, 1, 2) for c2 in (0, 1, 3)
        ]
        # profession pair (0,2) starts after all 16 clauses of pair (0,1)
        assert clauses[16][0] == schema4.var_edge(0, 0, 2, 0)

    def test_clause_shape(self, schema4):
        for clause in encode(at_least_one_edge, schema4):
            assert len(clause) == 9
            assert len(set(clause)) == 9
            assert all(1 <= lit <= schema4.n_vars for lit in clause)


class TestNoClique:
    @pytest.mark.parametrize("n", [1, 2, 3, 4])
    def test_count(self, n):
        schema = TeamSchema(n=n)
        clauses = encode(no_clique, schema)
        assert len(clauses) == n ** 3
        assert len(clauses) == no_clique.expected_count(schema)

    def test_n1_single_clause(self):
        assert encode(no_clique, TeamSchema(n=1)) == [[-1, -2, -3]]

    def test_candidates_per_profession(self, schema3):
        clauses = encode(no_clique, schema3)
        # (c1, c2, c3) = (0, 1, 2) is the sixth triple in lexicographic order
        assert clauses[5] == [
            -schema3.var_edge(0, 0, 1, 1),
            -schema3.var_edge(0, 0, 2, 2),
            -schema3.var_edge(1, 1, 2, 2),
        ]
        assert clauses[-1] == [-9, -18, -27]

    def test_clause_shape(self, schema3):
        for clause in encode(no_clique, schema3):
            assert len(clause) == 3
            assert len({abs(lit) for lit in clause}) == 3
            assert all(-schema3.n_vars <= lit <= -1 for lit in clause)

    def test_deterministic(self, schema4):
        assert encode(no_clique, schema4) == encode(no_clique, TeamSchema(n=4))

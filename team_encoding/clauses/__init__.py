from __future__ import annotations

from . import at_least_one_edge, no_clique


FAMILY_REGISTRY = {
    "at_least_one_edge": at_least_one_edge,
    "no_clique": no_clique,
}

DEFAULT_FAMILIES = ["at_least_one_edge", "no_clique"]

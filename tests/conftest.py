"""
Shared fixtures for the team-construction encoder tests.

The generator and auditor live in scripts/ and are imported directly, the same
way the scripts import the team_encoding package.
"""
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SCRIPTS_DIR = REPO_ROOT / "scripts"
for _p in (REPO_ROOT, SCRIPTS_DIR):
    if str(_p) not in sys.path:
        sys.path.insert(0, str(_p))

from team_encoding.schema import TeamSchema  # noqa: E402


@pytest.fixture
def schema3() -> TeamSchema:
    return TeamSchema(n=3)


@pytest.fixture
def schema4() -> TeamSchema:
    return TeamSchema(n=4)

"""Shared test fixtures for Evolution Insight tests."""

import pytest

from evolution_insight.history import FileChange, Revision, ingest

DAY = 86400
# 2023-11-14 00:00:00 UTC, aligned to a day boundary
T0 = 19675 * DAY


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def rev(rev_id, author, timestamp, changes, message=""):
    """Build a Revision from (path, added, deleted) tuples."""
    return Revision(
        rev_id=rev_id,
        author=author,
        timestamp=timestamp,
        changes=tuple(FileChange(p, a, d) for p, a, d in changes),
        message=message,
    )


@pytest.fixture
def scenario_revisions():
    """Two revisions: X touches A and B, then Y touches A."""
    return [
        rev("r1", "authorX", T0, [("fileA", 10, 0), ("fileB", 5, 0)]),
        rev("r2", "authorY", T0 + DAY, [("fileA", 2, 1)]),
    ]


@pytest.fixture
def scenario_model(scenario_revisions):
    return ingest(scenario_revisions)


@pytest.fixture
def team_revisions():
    """A small multi-author history spanning two weeks."""
    return [
        rev("c1", "alice", T0, [("src/api.py", 100, 0), ("src/db.py", 50, 0)], "initial"),
        rev("c2", "bob", T0 + 3600, [("src/api.py", 10, 5), ("tests/test_api.py", 40, 0)]),
        rev("c3", "alice", T0 + DAY, [("src/api.py", 20, 10), ("src/db.py", 5, 5)], "fix db"),
        rev("c4", "carol", T0 + 2 * DAY, [("README.md", 3, 1)], "docs"),
        rev("c5", "bob", T0 + 7 * DAY, [("src/db.py", 1, 1), ("tests/test_api.py", 2, 0)]),
        rev("c6", "alice", T0 + 14 * DAY, [("src/api.py", 4, 4), ("src/db.py", 2, 2)], "fix api"),
    ]


@pytest.fixture
def team_model(team_revisions):
    return ingest(team_revisions)

"""Shared puzzles and helpers for the test suite."""

import pytest

# A known puzzle with a unique solution.
TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


def text_cells(s):
    """'0'/'.' to '' and digits to themselves."""
    return ["" if c in "0." else c for c in s]


def numeric(s):
    return [0 if c in "0." else int(c) for c in s]


def is_perm19(values):
    return sorted(values) == list(range(1, 10))


@pytest.fixture
def puzzle_cells():
    return text_cells(TEST_PUZZLE)


@pytest.fixture
def solution_cells():
    return list(TEST_SOLUTION)


@pytest.fixture
def fixed_mask():
    return [c != "0" for c in TEST_PUZZLE]

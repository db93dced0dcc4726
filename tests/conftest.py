from __future__ import annotations

import numpy as np
import pytest

from sparse_rank import SparseMatrix, loads, normalize

THREE_NODE = "rows 3 columns 3\nrow 0: 1 2 -1\nrow 1: 2 -1\n"


def random_adjacency(seed: int, n: int, p: float = 0.3, dangling=()) -> SparseMatrix:
    """Random 0/1 matrix; rows listed in `dangling` are left empty."""
    rng = np.random.default_rng(seed)
    mat = SparseMatrix(n, n)
    for i in range(n):
        if i in dangling:
            continue
        cols = np.flatnonzero(rng.random(n) < p)
        if len(cols) == 0:
            cols = [int(rng.integers(n))]
        for j in cols:
            mat.add(i, int(j))
    return mat


@pytest.fixture
def three_node_text() -> str:
    return THREE_NODE


@pytest.fixture
def three_node() -> SparseMatrix:
    return loads(THREE_NODE)


@pytest.fixture
def three_node_h(three_node) -> SparseMatrix:
    return normalize(three_node)


@pytest.fixture
def cycle_h() -> SparseMatrix:
    # 0 -> 1 -> 2 -> 0, plus 0 -> 2; no dangling rows
    return normalize(SparseMatrix.from_edges(3, 3, [(0, 1), (0, 2), (1, 2), (2, 0)]))

import numpy as np
import pytest

from sparse_rank import (
    ColVec,
    SparseMatrix,
    absorbent_nodes,
    is_row_stochastic,
    normalize,
    out_degrees,
)

from conftest import random_adjacency


def test_normalize_three_node_scenario(three_node):
    H = normalize(three_node)
    assert H is three_node
    assert [(c.column, c.value) for c in H.row(0)] == [(1, 0.5), (2, 0.5)]
    assert [(c.column, c.value) for c in H.row(1)] == [(2, 1.0)]
    assert len(H.row(2)) == 0


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_normalized_rows_sum_to_one(seed):
    H = normalize(random_adjacency(seed, n=30, p=0.15))
    for row in H:
        assert row.total() == pytest.approx(1.0, abs=1e-12)
    assert is_row_stochastic(H)


def test_raw_matrix_is_not_row_stochastic(three_node):
    assert not is_row_stochastic(three_node)


def test_normalize_leaves_empty_rows_alone():
    H = normalize(SparseMatrix(3, 3))
    assert H.nnz == 0
    assert is_row_stochastic(H)


def test_out_degrees(three_node):
    np.testing.assert_array_equal(out_degrees(three_node), [2, 1, 0])


def test_absorbent_nodes_three_node(three_node_h):
    d = absorbent_nodes(three_node_h)
    assert isinstance(d, ColVec)
    assert list(d) == [0.0, 0.0, 1.0]


@pytest.mark.parametrize("dangling", [set(), {0}, {4, 7, 19}])
def test_absorbent_nodes_is_exact_indicator(dangling):
    mat = random_adjacency(11, n=20, p=0.2, dangling=dangling)
    d = absorbent_nodes(mat)
    assert len(d) == mat.m
    for i, x in enumerate(d):
        assert x == (1.0 if i in dangling else 0.0)


def test_absorbent_nodes_does_not_mutate(three_node):
    before = str(three_node)
    absorbent_nodes(three_node)
    assert str(three_node) == before


def test_absorbent_nodes_on_rows_added_past_header():
    mat = SparseMatrix(1, 3)
    mat.add(2, 0)
    assert list(absorbent_nodes(mat)) == [1.0, 1.0, 0.0]

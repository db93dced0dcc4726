from __future__ import annotations

import numpy as np

from .matrix import SparseMatrix
from .vectors import ColVec


def out_degrees(matrix: SparseMatrix) -> np.ndarray:
    """Number of cells in each row (length m)."""
    return np.fromiter((len(row) for row in matrix.rows), dtype=np.int64, count=matrix.m)


def normalize(matrix: SparseMatrix) -> SparseMatrix:
    """Turn a 0/1 adjacency matrix into the row-stochastic matrix H, in place.

    Each cell of row i is divided by the number of cells in row i, so a
    row with out-degree k holds weights 1/k. Empty rows are left alone:
    dangling nodes are corrected by the iteration, not here.

    The original adjacency weights are lost; use ``matrix.copy()`` first
    if they are needed later.

    Returns
    -------
    matrix:
        The same object, for chaining.
    """
    for row in matrix.rows:
        nnz = len(row)
        if nnz == 0:
            continue
        for cell in row:
            cell.value /= nnz
    matrix.normalized = True
    return matrix


def absorbent_nodes(matrix: SparseMatrix) -> ColVec:
    """Indicator column vector: 1.0 at rows with no cells, 0.0 elsewhere."""
    return ColVec(out_degrees(matrix) == 0)


def is_row_stochastic(matrix: SparseMatrix, *, tol: float = 1e-12) -> bool:
    """True when every non-empty row sums to 1 within `tol`."""
    return all(abs(row.total() - 1.0) <= tol for row in matrix.rows if len(row))

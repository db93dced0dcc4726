from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Tuple
import numpy as np
from scipy import sparse


@dataclass
class Cell:
    """One nonzero entry of a sparse row."""

    column: int
    value: float = 1.0


@dataclass
class SparseRow:
    """Cells of one matrix row, kept in insertion order.

    Column indices are neither sorted nor deduplicated.
    """

    elements: List[Cell] = field(default_factory=list)

    def append(self, column: int, value: float = 1.0) -> None:
        self.elements.append(Cell(int(column), float(value)))

    def columns(self) -> List[int]:
        return [cell.column for cell in self.elements]

    def total(self) -> float:
        return float(sum(cell.value for cell in self.elements))

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.elements)


class SparseMatrix:
    """Row-major sparse matrix: a list of `m` rows over `n` columns.

    Every algorithm in this package walks the matrix one row at a time
    (normalization, vector products, dangling detection), so each row owns
    its own list of (column, value) cells. A row with no cells is a node
    without outgoing edges.

    Parameters
    ----------
    m:
        Number of rows.
    n:
        Number of columns.
    """

    def __init__(self, m: int, n: int) -> None:
        if m < 0 or n < 0:
            raise ValueError(f"Matrix dimensions must be non-negative, got {m} by {n}.")
        self.m = int(m)
        self.n = int(n)
        self.rows: List[SparseRow] = [SparseRow() for _ in range(self.m)]
        # set by transition.normalize
        self.normalized = False

    @classmethod
    def from_edges(cls, m: int, n: int, edges: Iterable[Tuple[int, int]]) -> "SparseMatrix":
        """Build a 0/1 matrix from (row, column) pairs."""
        mat = cls(m, n)
        for i, j in edges:
            mat.add(i, j)
        return mat

    @classmethod
    def from_csr(cls, csr: sparse.spmatrix) -> "SparseMatrix":
        csr = sparse.csr_matrix(csr)
        m, n = csr.shape
        mat = cls(m, n)
        for i in range(m):
            start, end = csr.indptr[i], csr.indptr[i + 1]
            for j, v in zip(csr.indices[start:end], csr.data[start:end]):
                mat.rows[i].append(int(j), float(v))
        return mat

    @property
    def shape(self) -> Tuple[int, int]:
        return self.m, self.n

    @property
    def nnz(self) -> int:
        return sum(len(row) for row in self.rows)

    def row(self, i: int) -> SparseRow:
        return self.rows[i]

    def add(self, i: int, column: int, value: float = 1.0) -> None:
        """Append a cell to row `i`, growing the row list if `i >= m`."""
        if i < 0:
            raise IndexError(f"Row index must be non-negative, got {i}.")
        if not 0 <= column < self.n:
            raise IndexError(f"Column {column} out of range for {self.n} columns.")
        self.ensure_rows(i + 1)
        self.rows[i].append(column, value)

    def ensure_rows(self, count: int) -> None:
        """Grow the row list to at least `count` rows."""
        while len(self.rows) < count:
            self.rows.append(SparseRow())
        self.m = len(self.rows)

    def copy(self) -> "SparseMatrix":
        out = SparseMatrix(self.m, self.n)
        out.rows = [SparseRow([Cell(c.column, c.value) for c in row]) for row in self.rows]
        out.normalized = self.normalized
        return out

    def to_csr(self) -> sparse.csr_matrix:
        """Export as a scipy CSR matrix (duplicate cells are summed)."""
        rows, cols, vals = [], [], []
        for i, row in enumerate(self.rows):
            for cell in row:
                rows.append(i)
                cols.append(cell.column)
                vals.append(cell.value)
        return sparse.csr_matrix(
            (np.asarray(vals, dtype=np.float64), (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64))),
            shape=(self.m, self.n),
            dtype=np.float64,
        )

    def __iter__(self) -> Iterator[SparseRow]:
        return iter(self.rows)

    def __len__(self) -> int:
        return self.m

    def __str__(self) -> str:
        lines = [f"SparseMatrix: {self.m} by {self.n}"]
        for i, row in enumerate(self.rows):
            parts = [f"row {i}:"]
            for cell in row:
                # raw unit weights print bare so the matrix reads like its input file
                bare = not self.normalized and cell.value == 1.0
                parts.append(str(cell.column) if bare else f"{cell.column}:{cell.value!r}")
            parts.append("-1")
            lines.append(" ".join(parts))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"SparseMatrix(m={self.m}, n={self.n}, nnz={self.nnz})"

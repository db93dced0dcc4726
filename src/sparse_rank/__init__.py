"""PageRank by power iteration over a row-major sparse matrix.

This package provides a minimal implementation of:
- row-oriented sparse storage and the adjacency text format,
- row/column vectors with the products power iteration needs,
- row-stochastic normalization and dangling-node detection,
- plain, dangling-corrected and damped power iteration.
"""

from .matrix import Cell, SparseRow, SparseMatrix
from .vectors import RowVec, ColVec
from .transition import normalize, absorbent_nodes, out_degrees, is_row_stochastic
from .loader import MatrixFormatError, load, loads, dumps, parse_lines
from .pagerank import (
    DEFAULT_ALPHA,
    DEFAULT_STEPS,
    VARIANTS,
    power_iteration,
    power_iteration_dangling,
    power_iteration_damped,
    run_variant,
    uniform_start,
)

__all__ = [
    "Cell",
    "SparseRow",
    "SparseMatrix",
    "RowVec",
    "ColVec",
    "normalize",
    "absorbent_nodes",
    "out_degrees",
    "is_row_stochastic",
    "MatrixFormatError",
    "load",
    "loads",
    "dumps",
    "parse_lines",
    "DEFAULT_ALPHA",
    "DEFAULT_STEPS",
    "VARIANTS",
    "power_iteration",
    "power_iteration_dangling",
    "power_iteration_damped",
    "run_variant",
    "uniform_start",
]

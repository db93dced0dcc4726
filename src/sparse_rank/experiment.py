from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple, Union
import numpy as np
import pandas as pd

from .loader import load
from .matrix import SparseMatrix
from .pagerank import DEFAULT_ALPHA, DEFAULT_STEPS, VARIANTS, run_variant
from .transition import normalize
from .vectors import RowVec


def rank_all(
    H: SparseMatrix,
    variants: Sequence[str] = tuple(VARIANTS),
    *,
    steps: int = DEFAULT_STEPS,
    alpha: float = DEFAULT_ALPHA,
    tol: Optional[float] = None,
    progress: bool = False,
) -> Dict[str, RowVec]:
    """Run each named variant on the same normalized matrix.

    Every run starts from its own fresh uniform vector; H is only read.
    """
    return {
        name: run_variant(H, name, steps=steps, alpha=alpha, tol=tol, progress=progress)
        for name in variants
    }


def rank_table(ranks: Dict[str, RowVec]) -> pd.DataFrame:
    """One row per node, one column per variant."""
    lengths = {len(r) for r in ranks.values()}
    if len(lengths) > 1:
        raise ValueError(f"Rank vectors have different lengths: {sorted(lengths)}.")
    n = lengths.pop() if lengths else 0
    df = pd.DataFrame({"node": np.arange(n, dtype=np.int64)})
    for name, r in ranks.items():
        df[name] = r.to_numpy()
    return df


def mass_summary(ranks: Dict[str, RowVec]) -> pd.DataFrame:
    rows = []
    for name, r in ranks.items():
        x = r.to_numpy()
        rows.append({
            "variant": name,
            "mass": float(x.sum()),
            "min": float(x.min()) if len(x) else np.nan,
            "max": float(x.max()) if len(x) else np.nan,
            "top_node": int(np.argmax(x)) if len(x) else -1,
        })
    return pd.DataFrame(rows, columns=["variant", "mass", "min", "max", "top_node"])


def run_experiment(
    matrix_path: Union[str, Path],
    *,
    variants: Sequence[str] = tuple(VARIANTS),
    steps: int = DEFAULT_STEPS,
    alpha: float = DEFAULT_ALPHA,
    tol: Optional[float] = None,
    dedupe: bool = False,
    outputs_dir: Optional[Union[str, Path]] = None,
    progress: bool = False,
) -> Tuple[SparseMatrix, Dict[str, RowVec], pd.DataFrame]:
    """Load, normalize and rank one adjacency file.

    Parameters
    ----------
    matrix_path:
        Adjacency file (see `loader.parse_lines`).
    variants:
        Names from `pagerank.VARIANTS`, run in the given order.
    outputs_dir:
        If given, the rank table is written to ``<outputs_dir>/ranks.csv``.

    Returns
    -------
    (H, ranks, table):
        The normalized matrix, the rank vector of each variant and the
        per-node table built from them.
    """
    H = normalize(load(matrix_path, dedupe=dedupe))
    ranks = rank_all(H, variants, steps=steps, alpha=alpha, tol=tol, progress=progress)
    table = rank_table(ranks)

    if outputs_dir is not None:
        out = Path(outputs_dir)
        out.mkdir(parents=True, exist_ok=True)
        table.to_csv(out / "ranks.csv", index=False)

    return H, ranks, table

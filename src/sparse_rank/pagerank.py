from __future__ import annotations

from typing import Callable, Dict, Optional
import numpy as np
from tqdm.auto import tqdm

from .matrix import SparseMatrix
from .transition import absorbent_nodes
from .vectors import RowVec

DEFAULT_STEPS = 10
DEFAULT_ALPHA = 0.99


def uniform_start(H: SparseMatrix) -> RowVec:
    """Initial estimate r_0[i] = 1/n for each of the m rows.

    A matrix without columns has no distribution to start from; the
    estimate is then all zeros.
    """
    if H.n == 0:
        return RowVec.zeros(H.m)
    return RowVec.full(H.m, 1.0 / H.n)


def _check_steps(steps: int) -> int:
    steps = int(steps)
    if steps < 0:
        raise ValueError(f"Number of steps must be non-negative, got {steps}.")
    return steps


def _iterate(
    H: SparseMatrix,
    step: Callable[[RowVec], RowVec],
    steps: int,
    tol: Optional[float],
    progress: bool,
    desc: str,
) -> RowVec:
    steps = _check_steps(steps)
    r = uniform_start(H)
    if H.n == 0:
        return r
    for _ in tqdm(range(steps), desc=desc, disable=not progress):
        prev = r.to_numpy() if tol is not None else None
        r = step(r)
        if prev is not None and len(r) == len(prev):
            if float(np.abs(r.to_numpy() - prev).sum()) <= float(tol):
                break
    return r


def power_iteration(
    H: SparseMatrix,
    steps: int = DEFAULT_STEPS,
    *,
    tol: Optional[float] = None,
    progress: bool = False,
) -> RowVec:
    """Plain power iteration r <- r H.

    Mass sitting on dangling rows is dropped at every step, so the sum of
    the estimate shrinks unless H has no empty rows.

    Parameters
    ----------
    H:
        Row-stochastic matrix (see `transition.normalize`).
    steps:
        Number of multiplications performed.
    tol:
        Optional L1 tolerance. If given, stop early once two successive
        estimates are within `tol`. By default all `steps` are run.
    progress:
        Show a tqdm progress bar.
    """
    return _iterate(H, lambda r: r @ H, steps, tol, progress, "plain")


def power_iteration_dangling(
    H: SparseMatrix,
    steps: int = DEFAULT_STEPS,
    *,
    tol: Optional[float] = None,
    progress: bool = False,
) -> RowVec:
    """Power iteration with dangling mass spread uniformly over all n nodes.

    Each step computes leaked = r . (d / n), r <- r H, then adds leaked to
    every entry, where d is the dangling-row indicator. The total mass is
    conserved.
    """
    d_over_n = absorbent_nodes(H) / H.n if H.n else absorbent_nodes(H)

    def step(r: RowVec) -> RowVec:
        leaked = r @ d_over_n
        r = r @ H
        r += leaked
        return r

    return _iterate(H, step, steps, tol, progress, "dangling")


def power_iteration_damped(
    H: SparseMatrix,
    steps: int = DEFAULT_STEPS,
    alpha: float = DEFAULT_ALPHA,
    *,
    tol: Optional[float] = None,
    progress: bool = False,
) -> RowVec:
    """Damped power iteration on the Google matrix.

    With probability `alpha` the surfer follows an out-edge (jumping
    uniformly from a dangling node); otherwise it teleports uniformly.
    Each step::

        c = (alpha * (r . d) + 1 - alpha) / n
        r <- alpha * r
        r <- r H
        r <- r + c

    Parameters
    ----------
    alpha:
        Damping factor in [0, 1]. alpha=0 gives the uniform vector after
        one step; alpha=1 is `power_iteration_dangling`.
    """
    alpha = float(alpha)
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"Damping factor must lie in [0, 1], got {alpha}.")
    d = absorbent_nodes(H)

    def step(r: RowVec) -> RowVec:
        correction = (alpha * (r @ d) + 1.0 - alpha) / H.n
        r *= alpha
        r = r @ H
        r += correction
        return r

    return _iterate(H, step, steps, tol, progress, "damped")


VARIANTS: Dict[str, Callable[..., RowVec]] = {
    "plain": power_iteration,
    "dangling": power_iteration_dangling,
    "damped": power_iteration_damped,
}


def run_variant(H: SparseMatrix, name: str, **kwargs) -> RowVec:
    """Run the engine registered under `name` in `VARIANTS`."""
    try:
        engine = VARIANTS[name]
    except KeyError:
        raise ValueError(f"Unknown variant {name!r}; expected one of {sorted(VARIANTS)}.") from None
    if name != "damped":
        kwargs.pop("alpha", None)
    return engine(H, **kwargs)

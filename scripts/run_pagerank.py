#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from sparse_rank.experiment import mass_summary, run_experiment
from sparse_rank.pagerank import DEFAULT_ALPHA, DEFAULT_STEPS, VARIANTS


def _plot_ranks(table, variants, path: Path) -> None:
    """Grouped bar chart: one group per node, one bar per variant."""
    nodes = table["node"].to_numpy()
    width = 0.8 / max(len(variants), 1)
    plt.figure(figsize=(max(6.0, 0.4 * len(nodes)), 4.0))
    for k, name in enumerate(variants):
        plt.bar(nodes + (k - (len(variants) - 1) / 2.0) * width, table[name], width=width, label=name)
    plt.xlabel("node")
    plt.ylabel("rank")
    plt.title("Power-iteration rank per variant")
    plt.xticks(nodes if len(nodes) <= 50 else np.linspace(0, len(nodes) - 1, 11, dtype=int))
    plt.legend()
    plt.tight_layout()
    plt.savefig(path, dpi=300, bbox_inches="tight")
    plt.close()


def main() -> None:
    ap = argparse.ArgumentParser(description="Rank the nodes of an adjacency file by power iteration.")

    ap.add_argument("--matrix", default="data/exemple.dat", help="Adjacency file ('rows m columns n' header).")
    ap.add_argument("--outputs-dir", default="outputs", help="Directory to save CSV/figures.")

    ap.add_argument("--variant", action="append", choices=list(VARIANTS), dest="variants",
                    help="Variant to run; repeat for several (default: all, in order).")
    ap.add_argument("--steps", type=int, default=DEFAULT_STEPS, help="Power iterations per variant.")
    ap.add_argument("--alpha", type=float, default=DEFAULT_ALPHA, help="Damping factor for the damped variant.")
    ap.add_argument("--tol", type=float, default=None,
                    help="Optional L1 tolerance for stopping early (default: always run --steps).")
    ap.add_argument("--dedupe", action="store_true", help="Drop repeated columns within a row when loading.")

    ap.add_argument("--show-matrix", action="store_true", help="Print the normalized matrix.")
    ap.add_argument("--progress", action="store_true", help="Show a progress bar per variant.")
    ap.add_argument("--no-plot", action="store_true", help="Skip the rank bar chart.")

    args = ap.parse_args()
    variants = args.variants or list(VARIANTS)

    outputs_dir = Path(args.outputs_dir)

    H, ranks, table = run_experiment(
        args.matrix,
        variants=variants,
        steps=args.steps,
        alpha=args.alpha,
        tol=args.tol,
        dedupe=args.dedupe,
        outputs_dir=outputs_dir,
        progress=args.progress,
    )

    print(f"Matrix: {H.m} by {H.n}, {H.nnz} nonzeros")
    if args.show_matrix:
        print(H)

    for name in variants:
        print(f"\n{name}:")
        print(ranks[name])

    print()
    print(mass_summary(ranks).to_string(index=False))
    print("\nSaved:", outputs_dir / "ranks.csv")

    if args.no_plot:
        return

    (outputs_dir / "figures").mkdir(parents=True, exist_ok=True)
    fig = outputs_dir / "figures" / "ranks.png"
    _plot_ranks(table, variants, fig)
    print("Saved figures:")
    print(" -", fig)


if __name__ == "__main__":
    main()

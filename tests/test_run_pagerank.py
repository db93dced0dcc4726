import importlib.util
import sys
from pathlib import Path

import pandas as pd
import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "run_pagerank.py"


@pytest.fixture
def run_pagerank(monkeypatch):
    monkeypatch.setenv("MPLBACKEND", "Agg")
    spec = importlib.util.spec_from_file_location("run_pagerank", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def graph_file(tmp_path, three_node_text):
    path = tmp_path / "graph.dat"
    path.write_text(three_node_text)
    return path


def test_main_writes_csv_and_figure(run_pagerank, graph_file, tmp_path, monkeypatch, capsys):
    out = tmp_path / "outputs"
    monkeypatch.setattr(sys, "argv", [
        "run_pagerank.py", "--matrix", str(graph_file), "--outputs-dir", str(out),
        "--variant", "dangling", "--variant", "damped", "--steps", "3", "--show-matrix",
    ])

    run_pagerank.main()

    assert (out / "ranks.csv").exists()
    assert (out / "figures" / "ranks.png").exists()
    saved = pd.read_csv(out / "ranks.csv")
    assert list(saved.columns) == ["node", "dangling", "damped"]
    assert saved["dangling"].sum() == pytest.approx(1.0)

    printed = capsys.readouterr().out
    assert "Matrix: 3 by 3, 3 nonzeros" in printed
    assert "row 0: 1:0.5 2:0.5 -1" in printed
    assert "Saved figures:" in printed


def test_main_no_plot_skips_figure(run_pagerank, graph_file, tmp_path, monkeypatch, capsys):
    out = tmp_path / "outputs"
    monkeypatch.setattr(sys, "argv", [
        "run_pagerank.py", "--matrix", str(graph_file), "--outputs-dir", str(out), "--no-plot",
    ])

    run_pagerank.main()

    assert list(pd.read_csv(out / "ranks.csv").columns) == ["node", "plain", "dangling", "damped"]
    assert not (out / "figures").exists()
    assert "Saved figures:" not in capsys.readouterr().out


def test_plot_ranks_many_nodes(run_pagerank, tmp_path):
    n = 60
    table = pd.DataFrame({"node": range(n), "plain": [1.0 / n] * n})
    path = tmp_path / "ranks.png"
    run_pagerank._plot_ranks(table, ["plain"], path)
    assert path.exists()

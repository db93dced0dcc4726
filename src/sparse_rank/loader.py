from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

from .matrix import SparseMatrix

SENTINEL = -1
ROW_PREFIX = "row "


class MatrixFormatError(ValueError):
    """Raised when an adjacency file cannot be parsed."""

    def __init__(self, message: str, lineno: int | None = None) -> None:
        self.lineno = lineno
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


def _parse_header(line: str) -> tuple[int, int]:
    fields = line.split()
    if len(fields) < 4:
        raise MatrixFormatError(f"expected '<token> <m> <token> <n>' header, got {line!r}", 1)
    try:
        return int(fields[1]), int(fields[3])
    except ValueError:
        raise MatrixFormatError(f"non-integer dimensions in header {line!r}", 1) from None


def parse_lines(lines: Iterable[str], *, dedupe: bool = False) -> SparseMatrix:
    """Parse the adjacency text format into a 0/1 SparseMatrix.

    Format::

        rows <m> columns <n>
        row 0: 1 2 -1
        row 1: 2 -1

    The first line carries the dimensions in its 2nd and 4th fields. Every
    other line lists the target columns of one row, ended by ``-1``. Rows
    that never appear stay empty. A row id beyond the declared count grows
    the matrix instead of being rejected.

    Parameters
    ----------
    lines:
        Text lines, with or without trailing newlines.
    dedupe:
        Keep only the first occurrence of a column within a row. By default
        repeated columns are stored as separate cells.
    """
    it = iter(lines)
    header = next(it, None)
    if header is None or not header.strip():
        raise MatrixFormatError("missing header line", 1)
    m, n = _parse_header(header)
    if m < 0 or n < 0:
        raise MatrixFormatError(f"negative dimensions {m} by {n}", 1)
    mat = SparseMatrix(m, n)

    for lineno, line in enumerate(it, start=2):
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        body = line[len(ROW_PREFIX):]
        head, sep, tail = body.partition(":")
        if not sep:
            raise MatrixFormatError(f"missing ':' after row id in {line!r}", lineno)
        try:
            row_id = int(head)
            values = [int(tok) for tok in tail.split()]
        except ValueError:
            raise MatrixFormatError(f"non-integer field in {line!r}", lineno) from None
        if row_id < 0:
            raise MatrixFormatError(f"negative row id {row_id}", lineno)

        # rows listed with no targets still extend the matrix
        mat.ensure_rows(row_id + 1)

        seen = set()
        for col in values:
            if col == SENTINEL:
                continue
            if not 0 <= col < n:
                raise MatrixFormatError(f"column {col} out of range for {n} columns", lineno)
            if dedupe:
                if col in seen:
                    continue
                seen.add(col)
            mat.add(row_id, col)

    return mat


def loads(text: str, *, dedupe: bool = False) -> SparseMatrix:
    return parse_lines(text.splitlines(), dedupe=dedupe)


def load(path: Union[str, Path], *, dedupe: bool = False) -> SparseMatrix:
    """Read an adjacency file from disk (see `parse_lines`)."""
    with open(path, "r", encoding="utf-8") as f:
        return parse_lines(f, dedupe=dedupe)


def dumps(matrix: SparseMatrix) -> str:
    """Write `matrix` in the adjacency text format (weights are dropped)."""
    out = [f"rows {matrix.m} columns {matrix.n}"]
    for i, row in enumerate(matrix.rows):
        cols = " ".join(str(c) for c in row.columns())
        out.append(f"{ROW_PREFIX}{i}: {cols} {SENTINEL}" if cols else f"{ROW_PREFIX}{i}: {SENTINEL}")
    return "\n".join(out) + "\n"

from __future__ import annotations

import numbers
from typing import Callable, Iterable, Iterator
import numpy as np

from .matrix import SparseMatrix


class _DenseVector:
    """Flat float64 storage shared by RowVec and ColVec.

    The two orientations only differ in which products they take part in;
    arithmetic between vectors of different orientation is never defined.
    """

    __slots__ = ("_values",)

    # make numpy scalars defer to __rmul__ instead of coercing the vector
    __array_ufunc__ = None

    def __init__(self, values: Iterable[float] = ()) -> None:
        if not isinstance(values, np.ndarray):
            values = list(values)
        self._values = np.array(values, dtype=np.float64).reshape(-1)

    @classmethod
    def zeros(cls, length: int):
        return cls._wrap(np.zeros(int(length), dtype=np.float64))

    @classmethod
    def full(cls, length: int, value: float):
        return cls._wrap(np.full(int(length), float(value), dtype=np.float64))

    @classmethod
    def init_with(cls, length: int, init: Callable[[int], float]):
        """Build a vector whose i-th entry is `init(i)`."""
        return cls._wrap(np.fromiter((float(init(i)) for i in range(int(length))),
                                     dtype=np.float64, count=int(length)))

    @classmethod
    def from_values(cls, values: Iterable[float]):
        return cls(values)

    @classmethod
    def _wrap(cls, arr: np.ndarray):
        vec = cls.__new__(cls)
        vec._values = arr
        return vec

    def to_numpy(self) -> np.ndarray:
        return self._values.copy()

    def sum(self) -> float:
        return float(self._values.sum())

    def __len__(self) -> int:
        return int(self._values.shape[0])

    def __getitem__(self, index: int) -> float:
        return float(self._values[index])

    def __setitem__(self, index: int, value: float) -> None:
        self._values[index] = float(value)

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self._values)

    def __mul__(self, k):
        if not isinstance(k, numbers.Real):
            return NotImplemented
        return self._wrap(self._values * float(k))

    __rmul__ = __mul__

    def __truediv__(self, k):
        if not isinstance(k, numbers.Real):
            return NotImplemented
        if k == 0:
            raise ZeroDivisionError("Cannot divide a vector by zero.")
        return self._wrap(self._values / float(k))

    def __imul__(self, k):
        if not isinstance(k, numbers.Real):
            return NotImplemented
        self._values *= float(k)
        return self

    def __iadd__(self, k):
        # scalar only: adds k to every entry
        if not isinstance(k, numbers.Real):
            return NotImplemented
        self._values += float(k)
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values.tolist()!r})"


class ColVec(_DenseVector):
    """Column vector. Only ever the right operand of a dot product."""

    __slots__ = ()

    def transpose(self) -> "RowVec":
        return RowVec._wrap(self._values.copy())

    def __str__(self) -> str:
        return "\n".join(repr(float(x)) for x in self._values)


class RowVec(_DenseVector):
    """Row vector. Left operand of `@` against a SparseMatrix or a ColVec."""

    __slots__ = ()

    def transpose(self) -> ColVec:
        return ColVec._wrap(self._values.copy())

    def __matmul__(self, other):
        if isinstance(other, SparseMatrix):
            return self._times_matrix(other)
        if isinstance(other, ColVec):
            return self._dot(other)
        return NotImplemented

    def _times_matrix(self, matrix: SparseMatrix) -> "RowVec":
        """Sparse vector-matrix product, scattering r[i] * M[i][j] into result[j]."""
        if len(self) != matrix.m:
            raise ValueError(
                f"Row vector of length {len(self)} cannot multiply a {matrix.m} by {matrix.n} matrix."
            )
        res = np.zeros(matrix.n, dtype=np.float64)
        for i, row in enumerate(matrix.rows):
            ri = float(self._values[i])
            for cell in row:
                res[cell.column] += ri * cell.value
        return RowVec._wrap(res)

    def _dot(self, other: ColVec) -> float:
        if len(self) != len(other):
            raise ValueError(f"Dot product of vectors with lengths {len(self)} and {len(other)}.")
        return float(np.dot(self._values, other._values))

    def __str__(self) -> str:
        return "[" + ", ".join(repr(float(x)) for x in self._values) + "]"

#!/usr/bin/env python3
import sys
import numpy as np
from typing import Any, Iterator, List, Optional, Sequence, TextIO, Tuple

from matrix_utils import InvalidDimension, alloc_rows, check_rectangular, debug_log, dot

M_A = 10
N_A = 10
M_B = N_A
N_B = 10


def matmul(A: "Matrix", B: "Matrix") -> "Matrix":
  """
  Matrix multiplication: C[i][j] = dot(A[i], B.T[j]).
  The inner dimensions are checked by dot() for every cell, so a mismatch raises
  InvalidDimension before any result is returned.
  """

  if A.rows == 0 or B.rows == 0:
    raise InvalidDimension("Can't multiply matrix of size 0!")

  debug_log(1, f"[Matrix] matmul {A.rows}x{A.cols} @ {B.rows}x{B.cols}")
  B_T = B._transposed()
  C = alloc_rows(A.rows, B.cols)
  for i in range(A.rows):
    for j in range(B.cols):
      C[i][j] = dot(A._data[i], B_T._data[j])
  return Matrix._from_rows(C)


class Matrix:
  """
  Dense 2D matrix over any element type supporting +, *, == and str().

  Rows are stored as lists (rows outer, columns inner). The transpose is memoized
  and the cache is dropped whenever a row is handed out for writing.
  """

  __hash__ = None

  def __init__(self, data: Optional[Sequence[Sequence[Any]]] = None):
    rows = [] if data is None else [list(row) for row in data]
    check_rectangular(rows)
    self._data: List[List[Any]] = rows
    self._cache: Optional["Matrix"] = None

  @classmethod
  def _from_rows(cls, rows: List[List[Any]]) -> "Matrix":
    """Wraps rows without copying. Caller guarantees they are rectangular and unshared."""
    m = cls.__new__(cls)
    m._data = rows
    m._cache = None
    return m

  @classmethod
  def full(cls, rows: int, cols: int, value: Any = 0) -> "Matrix":
    return cls._from_rows(alloc_rows(rows, cols, value))

  @classmethod
  def random(cls, rows: int, cols: int, seed: Optional[int] = None) -> "Matrix":
    """rows x cols matrix of uniform random floats in [0, 1)."""
    return cls.from_numpy(np.random.default_rng(seed).random((rows, cols)))

  @classmethod
  def from_numpy(cls, arr: np.ndarray) -> "Matrix":
    arr = np.asarray(arr)
    if arr.ndim != 2:
      raise InvalidDimension(f"Expected a 2D array, got shape {arr.shape}")
    return cls._from_rows(arr.tolist())

  def to_numpy(self, dtype=None) -> np.ndarray:
    if self.rows == 0: return np.empty((0, 0), dtype=dtype)
    return np.array(self._data, dtype=dtype)

  @property
  def rows(self) -> int:
    return len(self._data)

  @property
  def cols(self) -> int:
    return len(self._data[0]) if len(self._data) > 0 else 0

  @property
  def shape(self) -> Tuple[int, int]:
    return self.rows, self.cols

  @property
  def cached(self) -> bool:
    """Whether a transpose is currently memoized."""
    return self._cache is not None

  def copy(self) -> "Matrix":
    return Matrix._from_rows([list(row) for row in self._data])

  def tolist(self) -> List[List[Any]]:
    return [list(row) for row in self._data]

  def row(self, i: int) -> Tuple[Any, ...]:
    """Read-only access to row i. Leaves the transpose cache alone."""
    return tuple(self._data[i])

  def _invalidate(self):
    if self._cache is not None:
      debug_log(2, "[Matrix] transpose cache invalidated")
    self._cache = None

  def __getitem__(self, i: int) -> List[Any]:
    """
    Write access to row i: returns the stored row and drops the cached transpose.
    Don't hold on to the row across a transpose(); writes made through it afterwards
    aren't seen by the cache. Index again (m[i][j] = v) for every write instead.
    """
    row = self._data[i]
    self._invalidate()
    return row

  def __setitem__(self, i: int, row: Sequence[Any]):
    row = list(row)
    if len(row) != self.cols:
      raise InvalidDimension(len(row), self.cols)
    self._data[i] = row
    self._invalidate()

  def __len__(self) -> int:
    return self.rows

  def __iter__(self) -> Iterator[Tuple[Any, ...]]:
    return (tuple(row) for row in self._data)

  def __eq__(self, other) -> bool:
    if not isinstance(other, Matrix): return NotImplemented
    if self.rows != other.rows or self.cols != other.cols: return False
    for r1, r2 in zip(self._data, other._data):
      for a, b in zip(r1, r2):
        if a != b: return False
    return True

  def __ne__(self, other) -> bool:
    eq = self.__eq__(other)
    return eq if eq is NotImplemented else not eq

  def _transposed(self) -> "Matrix":
    """Returns the memoized transpose itself (not a copy), computing it if needed."""

    if self._cache is not None:
      debug_log(2, "[Matrix] transpose cache hit")
      return self._cache

    if self.rows == 0:
      # nothing to swap, don't bother caching
      return self

    debug_log(2, f"[Matrix] computing transpose of {self.rows}x{self.cols} matrix")
    self._cache = Matrix._from_rows([list(col) for col in zip(*self._data)])
    return self._cache

  def transpose(self) -> "Matrix":
    """Returns a new matrix with rows and columns swapped. Memoized until the next row write."""
    return self._transposed().copy()

  @property
  def T(self) -> "Matrix":
    return self.transpose()

  def multiply(self, other: "Matrix") -> "Matrix":
    """Matrix product self x other. Also callable as Matrix.multiply(A, B)."""
    return matmul(self, other)

  def __mul__(self, other):
    if not isinstance(other, Matrix): return NotImplemented
    return matmul(self, other)

  __matmul__ = __mul__

  def _lines(self) -> Iterator[str]:
    return (" ".join(str(item) for item in row) for row in self._data)

  def print(self, out: Optional[TextIO] = None):
    """Writes the matrix to out (stdout by default), one row per line, items space separated."""
    if out is None: out = sys.stdout
    for line in self._lines():
      out.write(line + "\n")

  def __str__(self) -> str:
    return "\n".join(self._lines())

  def __repr__(self) -> str:
    return f"Matrix({self._data!r})"


if __name__ == "__main__":
  A = Matrix.random(M_A, N_A)
  B = Matrix.random(M_B, N_B)

  C_py = A * B
  C_np = np.dot(A.to_numpy(), B.to_numpy())
  assert np.allclose(C_py.to_numpy(), C_np, atol=1e-7)
  print("[+] OK")

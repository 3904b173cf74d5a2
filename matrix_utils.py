import os
from typing import Any, List, Sequence

DEBUG = int(os.getenv("DEBUG", 0))


class InvalidDimension(ValueError):
  """Raised when the shapes involved in an operation don't fit together."""

  def __init__(self, *args):
    # InvalidDimension(s1, s2) reports two mismatched vector sizes
    if len(args) == 2 and all(isinstance(a, int) for a in args):
      self.sizes = args
      super().__init__(f"Invalid vector dimensions: {args[0]} != {args[1]}")
    else:
      self.sizes = None
      super().__init__(*args)


def debug_log(level: int, msg: str):
  """Prints msg if the DEBUG level is at least level."""
  if DEBUG >= level: print(msg)


def check_rectangular(rows: Sequence[Sequence[Any]]) -> int:
  """Returns the column count shared by every row. Raises InvalidDimension on jagged rows."""

  if len(rows) == 0: return 0
  cols = len(rows[0])
  for i, row in enumerate(rows):
    if len(row) != cols:
      raise InvalidDimension(f"Row {i} has {len(row)} columns, expected {cols}")
  return cols


def dot(v1: Sequence[Any], v2: Sequence[Any]) -> Any:
  """
  Computes the dot product of two vectors.
  The accumulator starts at the zero value of the element type (type(v1[0])()),
  so elements must support + and * with each other.
  """

  if len(v1) != len(v2):
    raise InvalidDimension(len(v1), len(v2))
  if len(v1) == 0: return 0

  result = type(v1[0])()
  for a, b in zip(v1, v2):
    result = result + a * b
  return result


def alloc_rows(n_rows: int, n_cols: int, value: Any = 0) -> List[List[Any]]:
  """Allocates an n_rows x n_cols nested list filled with value."""

  if n_rows < 0 or n_cols < 0:
    raise InvalidDimension(f"Can't allocate a {n_rows}x{n_cols} matrix")
  return [[value for _ in range(n_cols)] for _ in range(n_rows)]

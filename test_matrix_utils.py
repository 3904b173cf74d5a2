from decimal import Decimal

import numpy as np
import pytest

import matrix_utils
from matrix_utils import InvalidDimension, alloc_rows, check_rectangular, debug_log, dot


def test_dot():
  assert dot([1, 2, 3], [4, 5, 6]) == 32
  assert dot([], []) == 0
  assert dot([1.5], [2.0]) == 3.0
  assert dot([Decimal("0.1"), Decimal("0.2")], [Decimal(1), Decimal(1)]) == Decimal("0.3")

  v1 = np.random.rand(100)
  v2 = np.random.rand(100)
  assert np.isclose(dot(list(v1), list(v2)), np.dot(v1, v2))


def test_dot_mismatch():
  with pytest.raises(InvalidDimension) as e:
    dot([1, 2, 3], [1, 2])
  assert str(e.value) == "Invalid vector dimensions: 3 != 2"
  assert e.value.sizes == (3, 2)
  assert isinstance(e.value, ValueError)


def test_invalid_dimension_message():
  e = InvalidDimension("Can't multiply matrix of size 0!")
  assert str(e) == "Can't multiply matrix of size 0!"
  assert e.sizes is None


def test_check_rectangular():
  assert check_rectangular([]) == 0
  assert check_rectangular([[1, 2], [3, 4], [5, 6]]) == 2
  assert check_rectangular([[], []]) == 0
  with pytest.raises(InvalidDimension, match="Row 1 has 1 columns, expected 2"):
    check_rectangular([[1, 2], [3]])


def test_alloc_rows():
  rows = alloc_rows(2, 3, 1)
  assert rows == [[1, 1, 1], [1, 1, 1]]
  rows[0][0] = 5
  assert rows[1][0] == 1
  assert alloc_rows(0, 4) == []
  with pytest.raises(InvalidDimension):
    alloc_rows(2, -3)


def test_debug_log(monkeypatch, capsys):
  monkeypatch.setattr(matrix_utils, "DEBUG", 1)
  debug_log(1, "[Matrix] shown")
  debug_log(2, "[Matrix] hidden")
  out = capsys.readouterr().out
  assert "[Matrix] shown" in out
  assert "hidden" not in out

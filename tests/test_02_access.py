"""Element access tests: row views, combined indexing, bounds, formatting."""
import pytest
import numpy as np
from fractions import Fraction
from densematrix import Matrix, RowView, ShapeMismatch, matrix

# =============================================================================
# Reading and writing
# =============================================================================


def test_nested_index_write_changes_matrix():
    m = Matrix(2, 3, int)
    m[1][2] = 5
    assert m[1][2] == 5
    assert m[1, 2] == 5
    assert m.get_value_at(1, 2) == 5
    assert m._data == [0, 0, 0, 0, 0, 5]


def test_combined_index_write():
    m = Matrix(2, 2, float)
    m[0, 1] = 3
    m.set_value_at(1, 0, 4)
    assert m.get_rows() == [[0.0, 3.0], [4.0, 0.0]]
    assert type(m[0][1]) is float


def test_written_values_are_coerced_to_dtype():
    m = Matrix(1, 2, 'int16')
    m[0][0] = 7
    assert type(m[0][0]) is np.int16


def test_row_view():
    m = matrix([1, 2, 3], [4, 5, 6])
    row = m[1]
    assert isinstance(row, RowView)
    assert len(row) == 3
    assert list(row) == [4, 5, 6]
    assert row == [4, 5, 6]
    assert row[1:] == [5, 6]
    row[0] = 40
    assert m[1][0] == 40


def test_whole_row_assignment():
    m = Matrix(2, 2, int)
    m[0] = [1, 2]
    assert m.get_rows() == [[1, 2], [0, 0]]
    with pytest.raises(ShapeMismatch):
        m[1] = [1, 2, 3]


def test_rows_and_columns_are_copies():
    m = matrix([1, 2], [3, 4])
    row = m.get_row(0)
    col = m.get_column(1)
    assert row == [1, 2]
    assert col == [2, 4]
    row[0] = 100
    col[0] = 100
    assert m == matrix([1, 2], [3, 4])


def test_iteration_and_len():
    m = matrix([1, 2], [3, 4], [5, 6])
    assert len(m) == 3
    assert list(m) == [[1, 2], [3, 4], [5, 6]]


# =============================================================================
# Bounds
# =============================================================================


@pytest.mark.parametrize("row", [2, -1, 10])
def test_row_out_of_range(row):
    m = Matrix(2, 3, int)
    with pytest.raises(IndexError):
        m[row]
    with pytest.raises(IndexError):
        m.get_row(row)


@pytest.mark.parametrize("col", [3, -1])
def test_column_out_of_range_does_not_wrap_into_next_row(col):
    m = matrix([1, 2, 3], [4, 5, 6])
    with pytest.raises(IndexError):
        m[0][col]
    with pytest.raises(IndexError):
        m[0][col] = 1
    with pytest.raises(IndexError):
        m[0, col]
    with pytest.raises(IndexError):
        m.get_column(col)


def test_empty_matrix_has_no_rows():
    with pytest.raises(IndexError):
        Matrix(0, 0)[0]


# =============================================================================
# Formatting and equality
# =============================================================================


def test_str_rendering():
    assert str(matrix([1, 2], [3, 4])) == "[[1, 2], [3, 4]]"
    assert str(matrix([1.5], [-2.0])) == "[[1.5], [-2.0]]"
    assert str(matrix([Fraction(1, 2), Fraction(-3, 4)])) == "[[1/2, -3/4]]"
    assert str(Matrix.from_rows([[1, 2]], 'uint8')) == "[[1, 2]]"


def test_str_of_degenerate_shapes():
    assert str(Matrix(0, 0)) == "[]"
    assert str(Matrix(2, 0, int)) == "[[], []]"


def test_repr_and_multiline():
    m = matrix([1, 2], [3, 4])
    assert repr(m) == "Matrix(2x2, int, [[1, 2], [3, 4]])"
    assert m.to_multiline_string() == "2x2 [\n [1, 2],\n [3, 4]\n]"
    assert repr(Matrix(1, 1, 'float32')) == "Matrix(1x1, float32, [[0.0]])"


def test_equality():
    assert matrix([1, 2]) == matrix([1, 2])
    assert matrix([1, 2]) == matrix([1.0, 2.0])
    assert matrix([1, 2]) != matrix([1, 3])
    assert matrix([1, 2]) != matrix([1], [2])
    assert matrix([1]) != 1


def test_matrices_are_unhashable():
    with pytest.raises(TypeError):
        hash(matrix([1]))


def test_allclose():
    a = matrix([1.0, 2.0])
    assert a.allclose(matrix([1.0 + 1e-12, 2.0]))
    assert not a.allclose(matrix([1.1, 2.0]))
    assert not a.allclose(matrix([1.0], [2.0]))
    assert matrix([Fraction(1, 3)]).allclose(matrix([0.3333333333333333]))


# =============================================================================
# Row operations
# =============================================================================


def test_row_operations_mutate_in_place():
    m = matrix([1, 2], [3, 4], [5, 6])
    m.swap_rows(0, 2)
    assert m.get_rows() == [[5, 6], [3, 4], [1, 2]]
    m.multiply_row(1, 2)
    assert m.get_row(1) == [6, 8]
    m.add_row_to_other_row(2, -6, 1)
    assert m.get_row(1) == [0, -4]
    assert m.size() == (3, 2)
    with pytest.raises(IndexError):
        m.swap_rows(0, 3)

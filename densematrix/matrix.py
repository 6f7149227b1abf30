#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
#
"""
Dense matrices over any registered scalar type.

The matrix data is stored as one flat list in row-major order: the value at
(row, col) lives at offset row * cols + col. Arithmetic always produces a new
matrix; the inputs are never modified and never share storage with the
result.

API:
    >>> from densematrix import Matrix, matrix
    >>> a = matrix([1, 2], [3, 4])
    >>> a * Matrix.identity(2, int) == a
    True
    >>> print(a + a)
    [[2, 4], [6, 8]]
"""

from typing import Any, Generic, List, Sequence, Tuple

import numpy as np

from densematrix.names import *
from densematrix.number_operations import N, NumberOperations, infer_operations, operations_for


class ShapeMismatch(ValueError):
    """Matrix shapes are incompatible with the requested operation"""
    pass


class RowView(Generic[N]):
    """
    Row of a matrix, addressed as m[i].

    Reads and writes go straight to the matrix, so m[i][j] = v changes m.
    """

    __slots__ = ('_matrix', '_row')

    def __init__(self, matrix: 'Matrix[N]', row: int):
        self._matrix = matrix
        self._row = row

    def __len__(self) -> int:
        return self._matrix.get_column_count()

    def __getitem__(self, col):
        if isinstance(col, slice):
            return self._matrix.get_row(self._row)[col]
        return self._matrix.get_value_at(self._row, col)

    def __setitem__(self, col: int, value: Any) -> None:
        self._matrix.set_value_at(self._row, col, value)

    def __iter__(self):
        return iter(self._matrix.get_row(self._row))

    def __eq__(self, other) -> bool:
        if isinstance(other, RowView):
            other = list(other)
        try:
            return list(self) == list(other)
        except TypeError:
            return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return '[' + ', '.join(str(v) for v in self) + ']'


class Matrix(Generic[N]):
    """
    Dense matrix with row-major storage.

    Supported construction:
    - Matrix(rows, cols, scalar_type=float) - zero matrix
    - Matrix.identity(order, scalar_type=float) - identity matrix
    - Matrix.from_rows(rows, scalar_type=None) / matrix(*rows) - from row data
    - Matrix.from_numpy(array) - from a 2-D numpy array

    The shape is fixed after construction, only element values can change.
    """

    # numpy scalars defer to the reflected operators below
    __array_ufunc__ = None

    def __init__(self, rows: int, cols: int, scalar_type=DEFAULT_SCALAR_TYPE):
        if rows < 0:
            raise ValueError(f"negative row count: {rows}")
        if cols < 0:
            raise ValueError(f"negative column count: {cols}")
        self._ops = operations_for(scalar_type)
        self._row_count = rows
        self._column_count = cols
        self._data = [self._ops.zero()] * (rows * cols)

    @classmethod
    def _from_flat(cls, data: List[N], rows: int, cols: int, ops: NumberOperations) -> 'Matrix[N]':
        """Wrap an already coerced flat list, taking ownership of it"""
        if len(data) != rows * cols:
            raise ShapeMismatch(f"expected {rows * cols} values, but found {len(data)}")
        result = cls(0, 0, ops)
        result._row_count = rows
        result._column_count = cols
        result._data = data
        return result

    @classmethod
    def identity(cls, order: int, scalar_type=DEFAULT_SCALAR_TYPE) -> 'Matrix[N]':
        """Square matrix with one on the diagonal and zero elsewhere"""
        result = cls(order, order, scalar_type)
        one = result._ops.one()
        for rc in range(order):
            result._data[rc * order + rc] = one
        return result

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]], scalar_type=None) -> 'Matrix[N]':
        """
        Create a matrix from a sequence of rows.

        The column count is the length of the first row, all other rows must
        have the same length. An empty sequence gives a 0x0 matrix.

        Args:
            rows: Row sequences, rows[i][j] is the value at (i, j)
            scalar_type: Scalar type of the matrix, inferred from the values if None

        Returns:
            New matrix holding the coerced values

        Raises:
            ShapeMismatch: If the rows differ in length
        """
        rows = [list(row) for row in rows]
        row_count = len(rows)
        col_count = len(rows[0]) if row_count > 0 else 0
        for i, row in enumerate(rows):
            if len(row) != col_count:
                raise ShapeMismatch(f"row {i} has {len(row)} values, expected {col_count}")
        flat = [value for row in rows for value in row]
        if scalar_type is None:
            ops = infer_operations(flat)
        else:
            ops = operations_for(scalar_type)
        return cls._from_flat([ops.coerce(v) for v in flat], row_count, col_count, ops)

    @classmethod
    def from_numpy(cls, array) -> 'Matrix[N]':
        """Create a matrix from a 2-D numpy array (or anything numpy.asarray accepts)"""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ShapeMismatch(f"expected a 2-D array, got {array.ndim} dimension(s)")
        if array.dtype.kind in 'iuf':
            ops = operations_for(array.dtype)
            return cls._from_flat(list(array.ravel()), array.shape[0], array.shape[1], ops)
        if array.dtype.kind == 'O':
            flat = list(array.ravel())
            ops = infer_operations(flat)
            return cls._from_flat([ops.coerce(v) for v in flat], array.shape[0], array.shape[1], ops)
        raise TypeError(f"unsupported array dtype: {array.dtype}")

    # Core interface methods
    @property
    def number_operations(self) -> NumberOperations:
        """Get the NumberOperations instance of this matrix's scalar type"""
        return self._ops

    @property
    def scalar_type(self) -> type:
        return self._ops.number_class()

    def get_row_count(self) -> int:
        return self._row_count

    def get_column_count(self) -> int:
        return self._column_count

    def size(self) -> Tuple[int, int]:
        """Return the shape as (rows, cols)"""
        return (self._row_count, self._column_count)

    def _offset(self, row: int, col: int) -> int:
        self._check_row(row)
        if not 0 <= col < self._column_count:
            raise IndexError(f"column index {col} out of range for {self._column_count} columns")
        return row * self._column_count + col

    def _check_row(self, row: int) -> None:
        if not 0 <= row < self._row_count:
            raise IndexError(f"row index {row} out of range for {self._row_count} rows")

    # Element access
    def get_value_at(self, row: int, col: int) -> N:
        return self._data[self._offset(row, col)]

    def set_value_at(self, row: int, col: int, value: Any) -> None:
        self._data[self._offset(row, col)] = self._ops.coerce(value)

    def get_row(self, row: int) -> List[N]:
        """Copy of the given row"""
        self._check_row(row)
        start = row * self._column_count
        return self._data[start:start + self._column_count]

    def get_column(self, col: int) -> List[N]:
        """Copy of the given column"""
        if not 0 <= col < self._column_count:
            raise IndexError(f"column index {col} out of range for {self._column_count} columns")
        return self._data[col::self._column_count]

    def get_rows(self) -> List[List[N]]:
        return [self.get_row(row) for row in range(self._row_count)]

    def __getitem__(self, index):
        if isinstance(index, tuple):
            row, col = index
            return self.get_value_at(row, col)
        self._check_row(index)
        return RowView(self, index)

    def __setitem__(self, index, value) -> None:
        if isinstance(index, tuple):
            row, col = index
            self.set_value_at(row, col, value)
            return
        self._check_row(index)
        values = list(value)
        if len(values) != self._column_count:
            raise ShapeMismatch(f"row needs {self._column_count} values, got {len(values)}")
        start = index * self._column_count
        self._data[start:start + self._column_count] = [self._ops.coerce(v) for v in values]

    def __len__(self) -> int:
        return self._row_count

    def __iter__(self):
        for row in range(self._row_count):
            yield self.get_row(row)

    # Row operations (in place, shape preserving)
    def swap_rows(self, row_a: int, row_b: int) -> None:
        """Swap two rows"""
        self._check_row(row_a)
        self._check_row(row_b)
        if row_a == row_b:
            return
        cols = self._column_count
        a, b = row_a * cols, row_b * cols
        self._data[a:a + cols], self._data[b:b + cols] = self._data[b:b + cols], self._data[a:a + cols]

    def multiply_row(self, row: int, factor: Any) -> None:
        """Multiply entire row by factor"""
        self._check_row(row)
        factor = self._ops.coerce(factor)
        start = row * self._column_count
        for idx in range(start, start + self._column_count):
            self._data[idx] = self._ops.multiply(self._data[idx], factor)

    def add_row_to_other_row(self, src_row: int, src_factor: Any, dst_row: int) -> None:
        """Add source row multiplied by src_factor to destination row"""
        self._check_row(src_row)
        self._check_row(dst_row)
        ops = self._ops
        factor = ops.coerce(src_factor)
        cols = self._column_count
        src, dst = src_row * cols, dst_row * cols
        for col in range(cols):
            self._data[dst + col] = ops.add(self._data[dst + col], ops.multiply(self._data[src + col], factor))

    # Matrix operations
    def clone(self) -> 'Matrix[N]':
        """Create deep copy of this matrix"""
        return self._from_flat(list(self._data), self._row_count, self._column_count, self._ops)

    def _check_same_shape(self, other: 'Matrix', operation: str) -> None:
        if self.size() != other.size():
            raise ShapeMismatch(f"Matrix dimensions don't match for {operation}: "
                                f"{self._row_count}x{self._column_count} vs "
                                f"{other._row_count}x{other._column_count}")

    def _check_same_scalar_type(self, other: 'Matrix', operation: str) -> None:
        if other._ops is not self._ops:
            raise TypeError(f"Scalar types don't match for {operation}: {self._ops.name} vs {other._ops.name}")

    def addition(self, other: 'Matrix[N]') -> 'Matrix[N]':
        """Element-wise sum, both matrices must have the same shape and scalar type"""
        self._check_same_shape(other, 'addition')
        self._check_same_scalar_type(other, 'addition')
        add = self._ops.add
        data = [add(a, b) for a, b in zip(self._data, other._data)]
        return self._from_flat(data, self._row_count, self._column_count, self._ops)

    def subtraction(self, other: 'Matrix[N]') -> 'Matrix[N]':
        """Element-wise difference, both matrices must have the same shape and scalar type"""
        self._check_same_shape(other, 'subtraction')
        self._check_same_scalar_type(other, 'subtraction')
        subtract = self._ops.subtract
        data = [subtract(a, b) for a, b in zip(self._data, other._data)]
        return self._from_flat(data, self._row_count, self._column_count, self._ops)

    def negate(self) -> 'Matrix[N]':
        negate = self._ops.negate
        return self._from_flat([negate(v) for v in self._data], self._row_count, self._column_count, self._ops)

    def multiply_scalar(self, value: Any) -> 'Matrix[N]':
        """Multiply all matrix elements by a scalar value"""
        factor = self._ops.coerce(value)
        multiply = self._ops.multiply
        data = [multiply(v, factor) for v in self._data]
        return self._from_flat(data, self._row_count, self._column_count, self._ops)

    def multiplication(self, other: 'Matrix[N]') -> 'Matrix[N]':
        """
        Matrix product self * other.

        Naive triple loop, accumulating result[i][j] += self[i][k] * other[k][j]
        with i outer, j middle and k inner. The order is fixed so that floating
        point results are reproducible.

        Raises:
            ShapeMismatch: If self has not as many columns as other has rows
            TypeError: If the scalar types of self and other differ
        """
        if self._column_count != other._row_count:
            raise ShapeMismatch(f"Matrix dimensions incompatible for multiplication: "
                                f"{self._row_count}x{self._column_count} * "
                                f"{other._row_count}x{other._column_count}")
        self._check_same_scalar_type(other, 'multiplication')
        ops = self._ops
        rows, inner, cols = self._row_count, self._column_count, other._column_count
        a, b = self._data, other._data
        data = [ops.zero()] * (rows * cols)
        for i in range(rows):
            for j in range(cols):
                acc = data[i * cols + j]
                for k in range(inner):
                    acc = ops.add(acc, ops.multiply(a[i * inner + k], b[k * cols + j]))
                data[i * cols + j] = acc
        return self._from_flat(data, rows, cols, ops)

    def transpose(self) -> 'Matrix[N]':
        """Return transposed matrix"""
        rows, cols = self._row_count, self._column_count
        data = [self._data[row * cols + col] for col in range(cols) for row in range(rows)]
        return self._from_flat(data, cols, rows, self._ops)

    def inverse(self) -> 'Matrix[N]':
        """
        Inverse by Gauss-Jordan elimination with partial pivoting.

        Raises:
            ShapeMismatch: If the matrix is not square
            TypeError: If the scalar type is integral
            ArithmeticError: If the matrix is singular
        """
        from densematrix.gauss import Gauss
        return Gauss.get_instance(self._ops).invert(self)

    # Operators
    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.addition(other)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtraction(other)

    def __neg__(self):
        return self.negate()

    def _scalar_operand(self, value):
        try:
            return self._ops.coerce(value)
        except (TypeError, ValueError):
            return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return self.multiplication(other)
        factor = self._scalar_operand(other)
        if factor is NotImplemented:
            return NotImplemented
        return self.multiply_scalar(factor)

    def __rmul__(self, other):
        factor = self._scalar_operand(other)
        if factor is NotImplemented:
            return NotImplemented
        return self.multiply_scalar(factor)

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiplication(other)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.size() == other.size() and all(a == b for a, b in zip(self._data, other._data))

    __hash__ = None

    def allclose(self, other: 'Matrix', rtol: float = ALLCLOSE_RTOL, atol: float = ALLCLOSE_ATOL) -> bool:
        """Compare as float64 within tolerances, False if the shapes differ"""
        if self.size() != other.size():
            return False
        a = np.array(self._data, dtype=np.float64)
        b = np.array(other._data, dtype=np.float64)
        return bool(np.allclose(a, b, rtol=rtol, atol=atol))

    def to_numpy(self) -> np.ndarray:
        """Return the matrix as 2-D numpy array"""
        array = np.empty(len(self._data), dtype=self._ops.numpy_dtype)
        array[:] = self._data
        return array.reshape(self._row_count, self._column_count)

    # String representation
    def __str__(self) -> str:
        """Single line string representation"""
        return self._matrix_to_string("[", "]", "[", "]", ", ", ", ")

    def to_multiline_string(self) -> str:
        """Multi-line string representation"""
        size_str = f"{self._row_count}x{self._column_count}"
        return size_str + " " + self._matrix_to_string("[\n", "\n]", " [", "]", ",\n", ", ")

    def __repr__(self) -> str:
        return f"Matrix({self._row_count}x{self._column_count}, {self._ops.name}, {self})"

    def _matrix_to_string(self, prefix: str, postfix: str, row_prefix: str, row_postfix: str,
                          row_separator: str, col_separator: str) -> str:
        """Internal string formatting method"""
        result = [prefix]
        for row in range(self._row_count):
            if row > 0:
                result.append(row_separator)
            result.append(row_prefix)
            result.append(col_separator.join(str(v) for v in self.get_row(row)))
            result.append(row_postfix)
        result.append(postfix)
        return ''.join(result)


def matrix(*rows: Sequence[Any], scalar_type=None) -> Matrix:
    """Literal construction: matrix([1, 2], [3, 4]) is the 2x2 matrix with those rows"""
    return Matrix.from_rows(rows, scalar_type)

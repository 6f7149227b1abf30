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
Gauss operations for dense matrices.

Gauss-Jordan elimination with partial pivoting, used to compute the rank and
the inverse of a matrix. Exact scalar types (Fraction, registered generic
types) detect zero pivots exactly, inexact ones (float, numpy floats) treat
pivots within a tolerance as zero.
"""

import logging
from fractions import Fraction
from typing import Optional

import numpy as np

from densematrix.names import *
from densematrix.matrix import Matrix, ShapeMismatch
from densematrix.number_operations import NumberOperations

LOG = logging.getLogger(__name__)


class Gauss:
    """
    Matrix operations based on Gaussian elimination.

    Working matrices are always copies, the input of rank() and invert() is
    never modified.
    """

    def __init__(self, tolerance: float = 0.0):
        """
        Initialize Gauss operations with tolerance.

        Args:
            tolerance: Tolerance for zero detection (0.0 for exact arithmetic)
        """
        if tolerance < 0:
            raise ValueError(f"tolerance must not be negative, got {tolerance}")
        self.tolerance = tolerance

    # Singleton instances
    _double_instance = None
    _rational_instance = None

    @classmethod
    def get_double_instance(cls) -> 'Gauss':
        """Get singleton instance for inexact (floating point) scalars"""
        if cls._double_instance is None:
            cls._double_instance = cls(DEFAULT_FLOAT_TOLERANCE)
        return cls._double_instance

    @classmethod
    def get_rational_instance(cls) -> 'Gauss':
        """Get singleton instance for exact scalars"""
        if cls._rational_instance is None:
            cls._rational_instance = cls(0.0)
        return cls._rational_instance

    _dtype_instances = {}

    @classmethod
    def get_dtype_instance(cls, dtype) -> 'Gauss':
        """Get cached instance for a numpy float dtype, tolerance scaled to its machine epsilon"""
        dtype = np.dtype(dtype)
        if dtype not in cls._dtype_instances:
            tolerance = max(DEFAULT_FLOAT_TOLERANCE, EPS_TOLERANCE_FACTOR * float(np.finfo(dtype).eps))
            LOG.debug(f"Pivot tolerance for {dtype.name}: {tolerance}")
            cls._dtype_instances[dtype] = cls(tolerance)
        return cls._dtype_instances[dtype]

    @classmethod
    def get_instance(cls, ops: NumberOperations) -> 'Gauss':
        """Pick the instance matching the exactness of a scalar type"""
        if ops.kind == FLOAT:
            return cls.get_double_instance()
        if ops.kind == FIXED_WIDTH and not ops.is_integral:
            return cls.get_dtype_instance(ops.numpy_dtype)
        return cls.get_rational_instance()

    # Core operations
    def rank(self, matrix: Matrix) -> int:
        """
        Compute the rank of the given matrix.

        Integral matrices are eliminated on an exact Fraction copy.
        """
        if matrix.number_operations.is_integral:
            working = Matrix.from_rows(matrix.get_rows(), Fraction)
        else:
            working = matrix.clone()
        return self._row_echelon(working)

    def invert(self, matrix: Matrix) -> Matrix:
        """
        Compute the inverse of a square matrix.

        The method computes the reduced row-echelon form of [A | I] to get [I | A^-1].

        Args:
            matrix: Square matrix to invert

        Returns:
            The inverse matrix, same scalar type as the input

        Raises:
            ShapeMismatch: If matrix is not square
            TypeError: If the scalar type of matrix is integral
            ArithmeticError: If matrix is singular (not invertible)
        """
        rows, cols = matrix.size()
        if rows != cols:
            raise ShapeMismatch(f"Matrix must be square for inversion: {rows}x{cols}")
        ops = matrix.number_operations
        if ops.is_integral:
            raise TypeError(f"Cannot invert a matrix over the integral scalar type {ops.name}, "
                            f"convert it to float or Fraction first")

        n = rows
        LOG.debug(f"Inverting {n}x{n} matrix over {ops.name} (tolerance={self.tolerance})")
        zero, one = ops.zero(), ops.one()
        augmented = Matrix.from_rows(
            [matrix.get_row(row) + [one if col == row else zero for col in range(n)] for row in range(n)], ops)

        rank = self._row_echelon(augmented, pivot_columns=n)
        if rank < n:
            LOG.debug(f"Singular matrix: rank {rank} < {n}")
            raise ArithmeticError(f"Matrix is singular (rank {rank} < {n})")

        return Matrix.from_rows([augmented.get_row(row)[n:] for row in range(n)], ops)

    def _find_pivot(self, matrix: Matrix, start_row: int, col: int) -> Optional[int]:
        """Row at or below start_row with the largest absolute value in col, None if all are zero"""
        ops = matrix.number_operations
        best_row = None
        best_magnitude = None
        for row in range(start_row, matrix.get_row_count()):
            value = matrix.get_value_at(row, col)
            if ops.is_zero(value, self.tolerance):
                continue
            magnitude = ops.abs(value)
            if best_magnitude is None or magnitude > best_magnitude:
                best_row, best_magnitude = row, magnitude
        return best_row

    def _row_echelon(self, matrix: Matrix, pivot_columns: Optional[int] = None) -> int:
        """
        Reduced row echelon form by Gauss-Jordan elimination, in place.

        Args:
            matrix: Matrix to reduce (modified in-place)
            pivot_columns: Only the first pivot_columns columns are searched for pivots

        Returns:
            The number of pivots found (the rank of the searched columns)
        """
        ops = matrix.number_operations
        rows = matrix.get_row_count()
        if pivot_columns is None:
            pivot_columns = matrix.get_column_count()

        pivot_row = 0
        for col in range(pivot_columns):
            if pivot_row == rows:
                break
            best = self._find_pivot(matrix, pivot_row, col)
            if best is None:
                LOG.debug(f"Column {col}: no pivot")
                continue
            matrix.swap_rows(pivot_row, best)
            pivot = matrix.get_value_at(pivot_row, col)
            matrix.multiply_row(pivot_row, ops.divide(ops.one(), pivot))
            for row in range(rows):
                if row == pivot_row:
                    continue
                factor = matrix.get_value_at(row, col)
                if not ops.is_zero(factor):
                    matrix.add_row_to_other_row(pivot_row, ops.negate(factor), row)
            pivot_row += 1

        LOG.debug(f"Elimination finished: rank {pivot_row}")
        return pivot_row

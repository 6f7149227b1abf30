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
Number operations - the scalar contract of densematrix.

A matrix never does arithmetic on its elements directly. It asks the
NumberOperations object of its scalar type for zero, one and the four
arithmetic operations. One operations object exists per scalar type:

- IntegerOperations: Python int (arbitrary precision, truncating division)
- FloatOperations: Python float
- FractionOperations: fractions.Fraction (exact rationals)
- FixedWidthOperations: numpy fixed-width integers and floats
- GenericOperations: any user type registered with register_scalar_type
"""

import logging
import operator
from abc import ABC, abstractmethod
from fractions import Fraction
from typing import Any, Dict, Generic, Iterable, TypeVar

import numpy as np

from densematrix.names import *

LOG = logging.getLogger(__name__)

# Type variable for scalar types (int, float, Fraction, numpy scalars, ...)
N = TypeVar('N')


def truncating_divide(num_a: int, num_b: int) -> int:
    """Integer division rounding toward zero"""
    quotient = abs(num_a) // abs(num_b)
    return quotient if (num_a < 0) == (num_b < 0) else -quotient


class NumberOperations(ABC, Generic[N]):
    """
    Operations on the scalars of one number type.

    Subclasses provide the type, its additive and multiplicative identity and
    value coercion. The arithmetic defaults delegate to the Python operators,
    which is correct for every type whose operators are closed over the type.
    """

    kind = GENERIC
    is_integral = False

    @abstractmethod
    def number_class(self) -> type:
        """Return the class of the produced values"""
        pass

    @abstractmethod
    def zero(self) -> N:
        """Return zero"""
        pass

    @abstractmethod
    def one(self) -> N:
        """Return one"""
        pass

    @abstractmethod
    def coerce(self, value: Any) -> N:
        """Convert value to this number type"""
        pass

    @property
    def numpy_dtype(self) -> np.dtype:
        """Dtype used when exporting to numpy"""
        return np.dtype(object)

    @property
    def name(self) -> str:
        return self.number_class().__name__

    # Arithmetic operations
    def add(self, num_a: N, num_b: N) -> N:
        return num_a + num_b

    def subtract(self, num_a: N, num_b: N) -> N:
        return num_a - num_b

    def multiply(self, num_a: N, num_b: N) -> N:
        return num_a * num_b

    def divide(self, num_a: N, num_b: N) -> N:
        return num_a / num_b

    def negate(self, number: N) -> N:
        return -number

    def abs(self, number: N):
        return abs(number)

    # Predicates
    def is_zero(self, number: N, tolerance: float = 0.0) -> bool:
        """Check if number is zero, or within tolerance of zero if tolerance > 0"""
        if tolerance > 0:
            return self.abs(number) <= tolerance
        return number == self.zero()

    def is_one(self, number: N) -> bool:
        return number == self.one()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class _SingletonOperations(NumberOperations[N]):
    """Operations for built-in types, one shared instance per class"""

    _instance = None

    def __new__(cls):
        if cls.__dict__.get('_instance') is None:
            cls._instance = super(_SingletonOperations, cls).__new__(cls)
        return cls._instance

    @classmethod
    def instance(cls):
        """Returns the singleton instance."""
        return cls()


class IntegerOperations(_SingletonOperations[int]):
    """
    Python int, arbitrary precision.

    Covers every fixed integer width, including 128 bit. Division truncates
    toward zero, as integer division does in C-like languages.
    """

    kind = INTEGER
    is_integral = True

    def number_class(self) -> type:
        return int

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def coerce(self, value: Any) -> int:
        # rejects floats and fractions instead of silently truncating them
        return operator.index(value)

    def divide(self, num_a: int, num_b: int) -> int:
        return truncating_divide(num_a, num_b)


class FloatOperations(_SingletonOperations[float]):
    """Python float (double precision)"""

    kind = FLOAT

    def number_class(self) -> type:
        return float

    def zero(self) -> float:
        return 0.0

    def one(self) -> float:
        return 1.0

    def coerce(self, value: Any) -> float:
        return float(value)

    @property
    def numpy_dtype(self) -> np.dtype:
        return np.dtype(np.float64)


class FractionOperations(_SingletonOperations[Fraction]):
    """Exact rational numbers, fractions.Fraction"""

    kind = FRACTION

    def number_class(self) -> type:
        return Fraction

    def zero(self) -> Fraction:
        return Fraction(0)

    def one(self) -> Fraction:
        return Fraction(1)

    def coerce(self, value: Any) -> Fraction:
        if isinstance(value, Fraction):
            return value
        return Fraction(value)


class FixedWidthOperations(NumberOperations):
    """
    Numpy fixed-width scalars (int8 ... uint64, float32, float64).

    Arithmetic follows numpy scalar semantics: results keep the dtype and
    integer overflow wraps around with a RuntimeWarning. Integer division
    truncates toward zero and is cast back to the dtype.
    """

    kind = FIXED_WIDTH

    def __init__(self, dtype):
        self._dtype = np.dtype(dtype)
        if self._dtype.kind not in 'iuf':
            raise TypeError(f"unsupported fixed-width dtype: {self._dtype}")
        self._type = self._dtype.type
        self.is_integral = self._dtype.kind in 'iu'

    def number_class(self) -> type:
        return self._type

    def zero(self):
        return self._type(0)

    def one(self):
        return self._type(1)

    def coerce(self, value: Any):
        if self.is_integral:
            # same rule as IntegerOperations, no silent truncation of 1.5
            return self._type(operator.index(value))
        return self._type(value)

    @property
    def numpy_dtype(self) -> np.dtype:
        return self._dtype

    @property
    def name(self) -> str:
        return self._dtype.name

    def divide(self, num_a, num_b):
        if self.is_integral:
            return self._type(truncating_divide(int(num_a), int(num_b)))
        return num_a / num_b


class GenericOperations(NumberOperations):
    """Operations for a user type that supports + - * / and has a zero and a one"""

    def __init__(self, number_class: type, zero: Any, one: Any, integral: bool = False):
        self._number_class = number_class
        self._zero = zero
        self._one = one
        self.is_integral = integral

    def number_class(self) -> type:
        return self._number_class

    def zero(self):
        return self._zero

    def one(self):
        return self._one

    def coerce(self, value: Any):
        if isinstance(value, self._number_class):
            return value
        return self._number_class(value)


# =============================================================================
# Registry
# =============================================================================

_REGISTRY: Dict[type, NumberOperations] = {
    int: IntegerOperations.instance(),
    float: FloatOperations.instance(),
    Fraction: FractionOperations.instance(),
}
_FIXED_WIDTH: Dict[np.dtype, FixedWidthOperations] = {}


def operations_for(scalar_type=None) -> NumberOperations:
    """Resolve the operations object of a scalar type

    Args:
        scalar_type (optional (type, str, numpy.dtype or NumberOperations)):

            A registered Python type (int, float, Fraction or a type added with
            register_scalar_type), anything numpy.dtype accepts that names an
            integer or floating dtype ('int32', numpy.uint8, ...), or an
            operations object which is returned as is. Defaults to
            DEFAULT_SCALAR_TYPE.

    Returns:
        (NumberOperations):

            The shared operations object of that type.
    """
    if scalar_type is None:
        scalar_type = DEFAULT_SCALAR_TYPE
    if isinstance(scalar_type, NumberOperations):
        return scalar_type
    if isinstance(scalar_type, type) and scalar_type in _REGISTRY:
        return _REGISTRY[scalar_type]
    try:
        dtype = np.dtype(scalar_type)
    except TypeError:
        raise TypeError(f"unsupported scalar type: {scalar_type!r}") from None
    if dtype.kind not in 'iuf':
        raise TypeError(f"unsupported scalar type: {scalar_type!r}")
    if dtype not in _FIXED_WIDTH:
        _FIXED_WIDTH[dtype] = FixedWidthOperations(dtype)
    return _FIXED_WIDTH[dtype]


def register_scalar_type(number_class: type, zero: Any, one: Any, integral: bool = False) -> NumberOperations:
    """Make a user type usable as matrix scalar

    The type must support +, -, * and / closed over itself.

    Example:
        register_scalar_type(complex, 0j, 1 + 0j)

    Args:
        number_class (type): The scalar type.
        zero: Its additive identity.
        one: Its multiplicative identity.
        integral (optional (bool)): True if division truncates (no inversion).

    Returns:
        (NumberOperations): The operations object now registered for the type.
    """
    ops = GenericOperations(number_class, zero, one, integral)
    if number_class in _REGISTRY:
        LOG.debug(f"Replacing scalar operations for {number_class.__name__}")
    _REGISTRY[number_class] = ops
    LOG.debug(f"Registered scalar type {number_class.__name__} (integral={integral})")
    return ops


def infer_operations(values: Iterable[Any]) -> NumberOperations:
    """Pick operations for literal data

    Values of one type resolve to that type. Mixed numpy scalars promote with
    numpy.result_type, mixed builtin numbers promote int -> Fraction -> float.
    No values at all give DEFAULT_SCALAR_TYPE.
    """
    values = list(values)
    if not values:
        return operations_for(DEFAULT_SCALAR_TYPE)
    types = {type(v) for v in values}
    if len(types) == 1:
        return operations_for(types.pop())
    numpy_values = [v for v in values if isinstance(v, np.generic)]
    if numpy_values:
        return operations_for(np.result_type(*numpy_values))
    if types <= {int, float, Fraction}:
        if float in types:
            return operations_for(float)
        return operations_for(Fraction)
    raise TypeError(f"cannot infer a common scalar type from {sorted(t.__name__ for t in types)}")

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
"""Static names and defaults used in the densematrix package

    Scalar kinds

        INTEGER = 'integer'

        FLOAT = 'float'

        FRACTION = 'fraction'

        FIXED_WIDTH = 'fixed_width'

        GENERIC = 'generic'

    Fixed-width dtypes (numpy)

        SIGNED_INT_DTYPES = ('int8', 'int16', 'int32', 'int64')

        UNSIGNED_INT_DTYPES = ('uint8', 'uint16', 'uint32', 'uint64')

        FLOAT_DTYPES = ('float32', 'float64')

    Defaults

        DEFAULT_SCALAR_TYPE = float

        DEFAULT_FLOAT_TOLERANCE = 1e-10

        EPS_TOLERANCE_FACTOR = 100

        ALLCLOSE_RTOL = 1e-05

        ALLCLOSE_ATOL = 1e-08
"""

INTEGER = 'integer'
FLOAT = 'float'
FRACTION = 'fraction'
FIXED_WIDTH = 'fixed_width'
GENERIC = 'generic'

SIGNED_INT_DTYPES = ('int8', 'int16', 'int32', 'int64')
UNSIGNED_INT_DTYPES = ('uint8', 'uint16', 'uint32', 'uint64')
FLOAT_DTYPES = ('float32', 'float64')
FIXED_WIDTH_DTYPES = SIGNED_INT_DTYPES + UNSIGNED_INT_DTYPES + FLOAT_DTYPES

# scalar type used when none is given and none can be inferred
DEFAULT_SCALAR_TYPE = float

# pivots with an absolute value at or below this are treated as zero for
# inexact scalar types
DEFAULT_FLOAT_TOLERANCE = 1e-10

# numpy float dtypes use max(DEFAULT_FLOAT_TOLERANCE, EPS_TOLERANCE_FACTOR * eps)
# as pivot tolerance, eps being the machine epsilon of the dtype
EPS_TOLERANCE_FACTOR = 100

ALLCLOSE_RTOL = 1e-05
ALLCLOSE_ATOL = 1e-08

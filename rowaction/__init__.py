# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
rowaction
=========

Numeric kernels underneath row-action (Kaczmarz-type) reconstruction
solvers. The kernels give the same numbers whether the system matrix is
stored dense (C or Fortran order), as a transposed view, or as a
compressed sparse column matrix, and stay O(row length) / O(nnz in row).

Public API
~~~~~~~~~~
- Matrix views
    - `MatrixView`, `DenseMatrix`, `CSCMatrix`, `TransposedMatrix`,
      `as_matrix_view`
- Row kernels
    - `row_squared_norm`, `row_dot`
- Constraint projection
    - `enforce_real`, `enforce_positive`, `apply_constraints`
- Error metric
    - `nrmsd`
- Iterative methods
    - `power_iterations`
- Solver bookkeeping
    - `SolverInfo`, `im2col_distinct`, `col2im_distinct`

All indices are 0-based.

Example
-------
>>> import numpy as np, rowaction as ra
>>> A = np.array([[2.0, 0, 0], [0, 1, 0], [0, 0, 0]])
>>> float(ra.row_squared_norm(A, 0)), float(ra.row_dot(A, np.ones(3), 0))
(4.0, 2.0)
"""

from importlib.metadata import version as _pkg_version

from .blocks import col2im_distinct, im2col_distinct
from .constraints import apply_constraints, enforce_positive, enforce_real
from .eigen import PowerIterationResult, power_iterations
from .metrics import nrmsd
from .row_kernels import row_dot, row_squared_norm
from .solver_info import SolverInfo
from .views import (
    CSCMatrix,
    DenseMatrix,
    MatrixView,
    TransposedMatrix,
    as_matrix_view,
)

__all__ = [
    "MatrixView",
    "DenseMatrix",
    "CSCMatrix",
    "TransposedMatrix",
    "as_matrix_view",
    "row_squared_norm",
    "row_dot",
    "enforce_real",
    "enforce_positive",
    "apply_constraints",
    "nrmsd",
    "power_iterations",
    "PowerIterationResult",
    "SolverInfo",
    "im2col_distinct",
    "col2im_distinct",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show rowaction”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Library logging stays silent unless the application configures it.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Row kernels used by row-action (Kaczmarz-type) solvers.

Both functions accept anything `as_matrix_view` understands: a NumPy
array, a SciPy sparse matrix or a `MatrixView`. SciPy CSC and CSR
matrices are wrapped in place without rescanning their index arrays, so
wrapping adds O(1) per call and a CSR row costs O(nnz in row). Other SciPy formats (COO, LIL, ...)
are converted with `tocsc()` on every call; convert those once up front.
"""

from .views import as_matrix_view


def row_squared_norm(A, i: int):
    """
    Squared 2-norm of row i of A.

    Parameters
    ----------
    A : ndarray | scipy.sparse matrix | MatrixView
        Logical (m, n) matrix.
    i : int
        0-based row index, 0 <= i < m.

    Returns
    -------
    float
        sum_n |A[i, n]|^2. Cost is O(n) for dense storage and
        O(nnz in row) for a transposed CSC view.

    Raises
    ------
    IndexError
        If i is not a valid row index.
    """
    return as_matrix_view(A).row_squared_norm(i)


def row_dot(A, x, k: int):
    """
    Unconjugated product of row k of A with x: sum_n A[k, n] * x[n].

    No conjugation is applied to A, also for complex data; this is the
    forward operator row, not a Hermitian inner product.

    Raises
    ------
    IndexError
        If k is not a valid row index.
    ValueError
        If x is not 1-D with length equal to the column count of A.
    """
    return as_matrix_view(A).row_dot(x, k)

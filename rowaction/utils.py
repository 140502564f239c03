# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import operator

import numpy as np

# defaults for power_iterations
DEFAULT_RTOL: float = 1e-2
DEFAULT_MAX_ITER: int = 30


def check_index(k, n: int, what: str = "row") -> int:
    """
    Validate a 0-based index against an extent of n.

    Negative indices are rejected rather than wrapped around.
    """
    try:
        k = operator.index(k)
    except TypeError:
        raise IndexError(f"{what} index must be an integer, got {k!r}") from None
    if k < 0 or k >= n:
        raise IndexError(f"{what} index {k} out of range for extent {n}")
    return k


def check_vector(x, n: int, name: str = "x") -> np.ndarray:
    """Return x as a 1-D array of length n or raise ValueError."""
    x = np.asarray(x)
    if x.ndim != 1:
        raise ValueError(f"{name} must be 1-D, got shape {x.shape}")
    if x.shape[0] != n:
        raise ValueError(f"{name} has length {x.shape[0]}, expected {n}")
    return x


def squared_magnitude(v: np.ndarray):
    """
    Sum of |v_i|^2 for a 1-D (possibly strided) array without copying it.

    For complex input the real and imaginary views are dotted separately,
    which is what BLAS nrm2 does internally.
    """
    if np.iscomplexobj(v):
        return np.dot(v.real, v.real) + np.dot(v.imag, v.imag)
    return np.dot(v, v)

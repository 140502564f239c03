# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import NamedTuple, Optional, Union

import numpy as np
from scipy.sparse.linalg import aslinearoperator

from .utils import DEFAULT_MAX_ITER, DEFAULT_RTOL

logger = logging.getLogger(__name__)


class PowerIterationResult(NamedTuple):
    eigenvalue: Union[float, complex]
    iterations: int
    converged: bool


def _random_start(n, dtype, rng):
    if np.issubdtype(dtype, np.complexfloating):
        return (rng.standard_normal(n) + 1j * rng.standard_normal(n)).astype(dtype)
    if np.issubdtype(dtype, np.floating):
        return rng.standard_normal(n).astype(dtype)
    return rng.standard_normal(n)


def power_iterations(
    AhA,
    rtol: float = DEFAULT_RTOL,
    max_iter: int = DEFAULT_MAX_ITER,
    v0: Optional[np.ndarray] = None,
    rng: Optional[np.random.Generator] = None,
    verbose: bool = False,
    return_info: bool = False,
):
    """
    Estimate the dominant eigenvalue of a square normal operator.

    Typically called once with A^H A before a gradient-type solve to
    pick a stable step size, so a rough estimate is enough.

    Parameters
    ----------
    AhA : ndarray | scipy.sparse matrix | LinearOperator | MatrixView
        Square (n, n) operator; only matrix-vector products are used.
    rtol : float
        Stop once the relative change of the estimate |lam/lam_old - 1|
        drops below this value. 0 runs all `max_iter` iterations.
    max_iter : int
        Maximum number of iterations (= operator applications).
    v0 : (n,) ndarray or None
        Start vector. If None, a random Gaussian vector is drawn.
    rng : numpy.random.Generator or None
        Source for the random start vector.
    verbose : bool
        Log every estimate at INFO instead of DEBUG.
    return_info : bool
        If True, return a `PowerIterationResult` instead of the bare value.

    Returns
    -------
    lam : float or complex
        Last Rayleigh-quotient estimate. Running out of iterations is not
        an error; use `return_info=True` to see whether rtol was reached.
    """
    op = aslinearoperator(AhA)
    m, n = op.shape
    if m != n:
        raise ValueError("Power iteration requires a square operator.")
    if max_iter < 1:
        raise ValueError("max_iter must be at least 1.")
    if not rtol >= 0:
        raise ValueError("rtol must be non-negative.")

    if v0 is None:
        rng = np.random.default_rng() if rng is None else rng
        b = _random_start(n, op.dtype, rng)
    else:
        b = np.array(v0, copy=True)
        if b.shape != (n,):
            raise ValueError("v0 must be shape (n,).")

    level = logging.INFO if verbose else logging.DEBUG
    lam = np.inf
    for i in range(1, max_iter + 1):
        b = b / np.linalg.norm(b)
        b_old = b
        b = op.matvec(b_old)

        lam_old = lam
        lam = np.vdot(b_old, b) / np.vdot(b_old, b_old)
        logger.log(level, "iter = %d; lambda = %s", i, lam)
        # lam_old is inf on the first pass, which must not count as converged
        if np.isfinite(lam_old) and abs(lam / lam_old - 1) < rtol:
            return PowerIterationResult(lam, i, True) if return_info else lam

    logger.debug("power iterations stopped after %d iterations without reaching rtol", max_iter)
    return PowerIterationResult(lam, max_iter, False) if return_info else lam

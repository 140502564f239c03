# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest
import scipy.sparse as sp
from scipy.sparse.linalg import LinearOperator

from rowaction.eigen import PowerIterationResult, power_iterations
from rowaction.views import CSCMatrix


def counting_operator(A):
    calls = {"n": 0}

    def matvec(v):
        calls["n"] += 1
        return A @ v

    return LinearOperator(A.shape, matvec=matvec, dtype=A.dtype), calls


def test_power_iterations_diagonal():
    A = np.diag([5.0, 3.0, 1.0])
    lam = power_iterations(A, rtol=1e-3, max_iter=50, rng=np.random.default_rng(0))
    assert np.isclose(lam, 5.0, rtol=1e-2)


def test_power_iterations_sym_psd():
    rng = np.random.default_rng(1)
    M = rng.normal(size=(40, 40))
    A = M.T @ M  # symmetric PSD
    lam_true = np.linalg.eigvalsh(A)[-1]
    lam = power_iterations(A, rtol=1e-8, max_iter=5000, rng=rng)
    assert np.isclose(lam, lam_true, rtol=1e-4)


def test_power_iterations_complex_hermitian():
    rng = np.random.default_rng(2)
    M = rng.normal(size=(10, 10)) + 1j * rng.normal(size=(10, 10))
    A = M.conj().T @ M
    lam_true = np.linalg.eigvalsh(A)[-1]
    lam = power_iterations(A, rtol=1e-10, max_iter=10000, rng=rng)
    assert np.isclose(lam, lam_true, rtol=1e-4)


def test_power_iterations_never_exceeds_max_iter():
    op, calls = counting_operator(np.diag([1.0, 0.999, 0.998]))
    res = power_iterations(op, rtol=1e-15, max_iter=7, return_info=True)
    assert calls["n"] == 7
    assert res.iterations == 7
    assert not res.converged


def test_power_iterations_stops_early_when_converged():
    op, calls = counting_operator(np.diag([5.0, 3.0, 1.0]))
    res = power_iterations(op, rtol=1e-3, max_iter=50, v0=np.ones(3), return_info=True)
    assert isinstance(res, PowerIterationResult)
    assert res.converged
    assert calls["n"] == res.iterations < 50
    assert np.isclose(res.eigenvalue, 5.0, rtol=1e-2)


def test_power_iterations_first_step_never_converges():
    # with lambda_old = inf the first relative change is 1
    op, calls = counting_operator(np.eye(3))
    res = power_iterations(op, rtol=0.5, max_iter=10, v0=np.ones(3), return_info=True)
    assert res.iterations == 2
    assert res.eigenvalue == pytest.approx(1.0)


def test_power_iterations_accepts_sparse_and_views():
    D = np.diag([4.0, 2.0, 1.0])
    v0 = np.array([1.0, 1.0, 1.0])
    for A in (sp.csr_matrix(D), CSCMatrix.from_dense(D)):
        lam = power_iterations(A, rtol=1e-6, max_iter=200, v0=v0)
        assert np.isclose(lam, 4.0, rtol=1e-4)


def test_power_iterations_non_square_raises():
    A = np.random.randn(3, 4)
    with pytest.raises(ValueError):
        _ = power_iterations(A)


def test_power_iterations_bad_arguments_raise():
    A = np.eye(3)
    with pytest.raises(ValueError):
        power_iterations(A, max_iter=0)
    with pytest.raises(ValueError):
        power_iterations(A, rtol=-1e-3)
    with pytest.raises(ValueError):
        power_iterations(A, v0=np.ones(4))


def test_power_iterations_scaling():
    rng = np.random.default_rng(0)
    M = rng.normal(size=(20, 20))
    A = M.T @ M
    v0 = rng.normal(size=(20,))  # SAME start for both
    alpha = 7.3
    lam1 = power_iterations(A, v0=v0)
    lam2 = power_iterations(alpha * A, v0=v0)
    assert np.isclose(lam2, alpha * lam1, rtol=1e-8)


def test_power_iterations_zero_rtol_runs_all_iterations():
    op, calls = counting_operator(np.diag([5.0, 3.0, 1.0]))
    res = power_iterations(op, rtol=0.0, max_iter=5, v0=np.ones(3), return_info=True)
    assert calls["n"] == 5
    assert res.iterations == 5
    assert not res.converged


def test_power_iterations_large_rtol_skips_first_check():
    # |lam/inf - 1| = 1 < 1.5 must not stop the first iteration
    op, calls = counting_operator(np.diag([5.0, 3.0, 1.0]))
    res = power_iterations(op, rtol=1.5, max_iter=10, v0=np.ones(3), return_info=True)
    assert res.converged
    assert res.iterations == 2
    assert calls["n"] == 2

# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Constraint projections applied to a solver iterate between iterations.

All functions work in place on a 1-D NumPy array. A `mask` selects the
entries a projection may touch; entries outside the mask are left
bitwise unchanged. `mask=None` means every entry.
"""

import logging

import numpy as np
from scipy.sparse.linalg import aslinearoperator

logger = logging.getLogger(__name__)


def _check_target(x) -> np.ndarray:
    if not isinstance(x, np.ndarray):
        raise TypeError(
            f"constraints are applied in place and need an ndarray, got {type(x).__name__}"
        )
    if x.ndim != 1:
        raise ValueError(f"x must be 1-D, got shape {x.shape}")
    return x


def _check_mask(mask, n: int):
    if mask is None:
        return None
    mask = np.asarray(mask, dtype=bool)
    if mask.shape != (n,):
        raise ValueError(f"mask has shape {mask.shape}, expected ({n},)")
    return mask


# enforce_real ---------------------------------------------------------


def _real_noop(x, mask):
    pass


def _real_complex(x, mask):
    if mask is None:
        x.imag[...] = 0
    else:
        x.imag[mask] = 0


# enforce_positive -----------------------------------------------------


def _positive_real(x, mask):
    neg = x < 0
    if mask is not None:
        neg &= mask
    x[neg] = 0


def _positive_complex(x, mask):
    neg = x.real < 0
    if mask is not None:
        neg &= mask
    x.real[neg] = 0


# keyed on dtype.kind; anything that is not complex has no imaginary part
_ENFORCE_REAL = {"c": _real_complex}
_ENFORCE_POSITIVE = {"c": _positive_complex}


def enforce_real(x: np.ndarray, mask=None) -> None:
    """
    Drop the imaginary part of the masked entries of x, in place.

    Real-typed arrays have nothing to drop and are left untouched.
    """
    x = _check_target(x)
    mask = _check_mask(mask, x.shape[0])
    _ENFORCE_REAL.get(x.dtype.kind, _real_noop)(x, mask)


def enforce_positive(x: np.ndarray, mask=None) -> None:
    """
    Project the masked entries of x onto a non-negative real part, in place.

    Entries whose real part is negative get real part 0; the imaginary
    part of complex entries is kept. Applying it twice is the same as
    applying it once.
    """
    x = _check_target(x)
    mask = _check_mask(mask, x.shape[0])
    _ENFORCE_POSITIVE.get(x.dtype.kind, _positive_real)(x, mask)


def apply_constraints(
    x: np.ndarray,
    sparse_trafo=None,
    real: bool = False,
    positive: bool = False,
    mask=None,
) -> None:
    """
    Apply the requested projections to x, in place.

    The order is fixed: forward transform, real part, positivity,
    adjoint transform.

    Parameters
    ----------
    x : (n,) ndarray
        Iterate, overwritten with the result.
    sparse_trafo : ndarray | scipy.sparse matrix | LinearOperator | None
        Square (n, n) sparsifying transform. The projections act on
        `sparse_trafo @ x` and the result is mapped back with the adjoint.
        None means identity.
    real, positive : bool
        Which projections to apply.
    mask : (n,) bool array | None
        Entries the projections may change (in the transformed domain
        when a transform is given).
    """
    x = _check_target(x)
    n = x.shape[0]
    mask = _check_mask(mask, n)

    op = None
    if sparse_trafo is not None:
        op = aslinearoperator(sparse_trafo)
        if op.shape != (n, n):
            raise ValueError(f"sparse_trafo has shape {op.shape}, expected ({n}, {n})")
        if not np.can_cast(np.result_type(op.dtype, x.dtype), x.dtype, "same_kind"):
            raise TypeError(
                f"sparse_trafo of dtype {op.dtype} cannot be applied in place to {x.dtype}"
            )
        logger.debug("projecting in transformed domain (%s)", type(sparse_trafo).__name__)
        x[:] = op.matvec(x)

    if real:
        enforce_real(x, mask)
    if positive:
        enforce_positive(x, mask)

    if op is not None:
        x[:] = op.rmatvec(x)

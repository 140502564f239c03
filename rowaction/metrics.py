# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np

logger = logging.getLogger(__name__)


def nrmsd(reference, candidate) -> float:
    """
    Normalized root-mean-square deviation of `candidate` from `reference`.

    The candidate is first rescaled by the least-squares optimal factor

        alpha = Re(<I, R> + <R, I>) / (2 <R, R>)     (alpha = 1 if R == 0)

    so a reconstruction that is only off by a global scale scores 0.
    The RMS of the difference is then divided by the dynamic range
    max|I| - min|I| of the reference.

    Parameters
    ----------
    reference, candidate : array_like
        Same number of elements; flattened before comparison.

    Returns
    -------
    float
        Non-negative deviation. A constant reference has zero dynamic
        range and yields inf (or nan); that is returned as is.
    """
    ref = np.asarray(reference).ravel()
    rec = np.asarray(candidate).ravel()
    if ref.size != rec.size:
        raise ValueError(
            f"reference and candidate differ in size ({ref.size} vs {rec.size})"
        )
    if ref.size == 0:
        raise ValueError("nrmsd of empty arrays is undefined")

    if np.linalg.norm(rec) > 0:
        alpha = (np.vdot(ref, rec) + np.vdot(rec, ref)).real / (2 * np.vdot(rec, rec).real)
    else:
        alpha = 1.0

    rms = np.linalg.norm(ref - alpha * rec) / np.sqrt(ref.size)
    mag = np.abs(ref)
    dynamic_range = np.float64(mag.max() - mag.min())
    if dynamic_range == 0:
        logger.warning("nrmsd: reference has zero dynamic range, result is not finite")
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(rms) / dynamic_range)

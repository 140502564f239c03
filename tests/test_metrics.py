# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
import math

import numpy as np
import pytest

from rowaction.metrics import nrmsd


def test_nrmsd_self_is_zero():
    rng = np.random.default_rng(0)
    ref = rng.normal(size=100)
    assert nrmsd(ref, ref) == 0.0


@pytest.mark.parametrize("c", [2.0, -0.3, 1e4])
def test_nrmsd_scale_invariant(c):
    rng = np.random.default_rng(1)
    ref = rng.normal(size=64)
    assert math.isclose(nrmsd(ref, c * ref), 0.0, abs_tol=1e-12)


def test_nrmsd_scale_invariant_complex():
    rng = np.random.default_rng(2)
    ref = rng.normal(size=32) + 1j * rng.normal(size=32)
    assert math.isclose(nrmsd(ref, 3.0 * ref), 0.0, abs_tol=1e-12)


def test_nrmsd_known_value():
    ref = np.array([0.0, 1.0, 2.0, 3.0])
    rec = np.array([0.0, 1.0, 2.0, 4.0])
    alpha = (ref @ rec) / (rec @ rec)
    expected = np.linalg.norm(ref - alpha * rec) / 2.0 / 3.0
    assert math.isclose(nrmsd(ref, rec), expected, rel_tol=1e-12)


def test_nrmsd_zero_candidate_uses_unit_scale():
    ref = np.array([1.0, 3.0])
    # alpha = 1, RMS = sqrt((1 + 9) / 2), range = 2
    assert math.isclose(nrmsd(ref, np.zeros(2)), math.sqrt(5.0) / 2.0)


def test_nrmsd_accepts_images():
    rng = np.random.default_rng(3)
    img = rng.normal(size=(4, 5))
    assert math.isclose(nrmsd(img, img.ravel()), 0.0, abs_tol=1e-15)


def test_nrmsd_constant_reference_is_not_finite(caplog):
    with caplog.at_level(logging.WARNING, logger="rowaction.metrics"):
        val = nrmsd(np.ones(4), np.array([1.0, 2.0, 3.0, 4.0]))
    assert not math.isfinite(val)
    assert "dynamic range" in caplog.text


def test_nrmsd_size_mismatch_raises():
    with pytest.raises(ValueError):
        nrmsd(np.ones(3), np.ones(4))
    with pytest.raises(ValueError):
        nrmsd([], [])

# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np
import pytest

from rowaction.blocks import col2im_distinct, im2col_distinct


def test_im2col_block_order():
    A = np.arange(16).reshape(4, 4)
    cols = im2col_distinct(A, (2, 2))
    assert cols.shape == (4, 4)
    # top-left block, flattened column-major
    np.testing.assert_array_equal(cols[:, 0], [0, 4, 1, 5])
    # block columns run down the block grid first
    np.testing.assert_array_equal(cols[:, 1], [8, 12, 9, 13])
    np.testing.assert_array_equal(cols[:, 2], [2, 6, 3, 7])
    np.testing.assert_array_equal(cols[:, 3], [10, 14, 11, 15])


def test_im2col_pads_with_zeros():
    A = np.ones((3, 5))
    cols = im2col_distinct(A, (2, 2))
    assert cols.shape == (4, 2 * 3)
    assert cols.sum() == 15
    # bottom-right block only holds A[2, 4]
    np.testing.assert_array_equal(cols[:, -1], [1, 0, 0, 0])


def test_col2im_inverts_im2col():
    rng = np.random.default_rng(0)
    A = rng.normal(size=(6, 9))
    cols = im2col_distinct(A, (3, 3))
    np.testing.assert_array_equal(col2im_distinct(cols, (3, 3), (6, 9)), A)


def test_col2im_pads_missing_columns():
    cols = np.ones((4, 1))
    img = col2im_distinct(cols, (2, 2), (2, 4))
    np.testing.assert_array_equal(img, [[1, 1, 0, 0], [1, 1, 0, 0]])


def test_col2im_requires_divisible_size():
    with pytest.raises(ValueError):
        col2im_distinct(np.ones((4, 4)), (2, 2), (5, 4))

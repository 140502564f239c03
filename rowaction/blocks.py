# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Distinct-block rearrangement between images and patch matrices
"""

from typing import Tuple

import numpy as np


def im2col_distinct(A: np.ndarray, blocksize: Tuple[int, int]) -> np.ndarray:
    """
    Rearrange the distinct (non-overlapping) blocks of A into columns.

    A is zero-padded at the bottom/right up to a multiple of the block
    size. Each block is flattened column-major, and the blocks are
    ordered column-major over the block grid, so block (p, q) lands in
    column p + q * (number of block rows).

    Returns
    -------
    cols : ndarray, shape (br * bc, number of blocks)
    """
    A = np.asarray(A)
    if A.ndim != 2:
        raise ValueError("im2col_distinct expects a 2-D array.")
    br, bc = blocksize
    if br < 1 or bc < 1:
        raise ValueError("blocksize entries must be positive.")

    pad_row = -A.shape[0] % br
    pad_col = -A.shape[1] % bc
    A1 = np.zeros((A.shape[0] + pad_row, A.shape[1] + pad_col), dtype=A.dtype)
    A1[: A.shape[0], : A.shape[1]] = A

    mb, nb = A1.shape[0] // br, A1.shape[1] // bc
    # A1[p*br + a, q*bc + b] == blocks[p, a, q, b]
    blocks = A1.reshape(mb, br, nb, bc)
    return blocks.transpose(3, 1, 2, 0).reshape(br * bc, nb * mb)


def col2im_distinct(
    A: np.ndarray, blocksize: Tuple[int, int], matsize: Tuple[int, int]
) -> np.ndarray:
    """
    Inverse of `im2col_distinct`: reassemble block columns into an image.

    Columns beyond the number of blocks (and rows beyond br * bc) are cut;
    missing ones are filled with zeros.
    """
    A = np.asarray(A)
    if A.ndim != 2:
        raise ValueError("col2im_distinct expects a 2-D array.")
    br, bc = blocksize
    mrows, mcols = matsize
    if mrows % br != 0 or mcols % bc != 0:
        raise ValueError("matsize should be divisible by blocksize")

    mb, nb = mrows // br, mcols // bc
    nelem, nblocks = br * bc, mb * nb

    A1 = np.zeros((nelem, nblocks), dtype=A.dtype)
    r, c = min(nelem, A.shape[0]), min(nblocks, A.shape[1])
    A1[:r, :c] = A[:r, :c]

    blocks = A1.reshape(bc, br, nb, mb).transpose(3, 1, 2, 0)
    return blocks.reshape(mrows, mcols)

# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Per-iteration bookkeeping for iterative solvers.
"""

import copy
from typing import List, Optional

import numpy as np

from .metrics import nrmsd


class SolverInfo:
    """
    Records what happened during the iterations of a linear solver.

    Attributes:
        conv_meas: Convergence measures, in the order they were reported.
            Their meaning is up to the solver that reports them.
        nrmse: NRMSD of each reported iterate w.r.t. `x_ref`
            (only filled if a reference was given).
        x_ref: Reference solution, or None.
        x_iter: Copies of the reported iterates (only if `store_solutions`).
        store_solutions: Whether to keep a copy of every iterate.
    """

    def __init__(
        self, x_ref: Optional[np.ndarray] = None, store_solutions: bool = False
    ) -> None:
        self.conv_meas: List[float] = []
        self.nrmse: List[float] = []
        self.x_ref = None if x_ref is None else np.asarray(x_ref)
        self.x_iter: List[np.ndarray] = []
        self.store_solutions = store_solutions

    def store_info(self, x: np.ndarray, *conv_meas: float) -> None:
        """Record one iteration: its convergence measures and the iterate x."""
        self.conv_meas.extend(float(c) for c in conv_meas)
        if self.store_solutions:
            self.x_iter.append(copy.deepcopy(x))
        if self.x_ref is not None and self.x_ref.size:
            self.nrmse.append(nrmsd(self.x_ref, x))

    def reset(self) -> None:
        """Clear all histories, keeping the reference and settings."""
        self.conv_meas.clear()
        self.nrmse.clear()
        self.x_iter.clear()

    def __len__(self) -> int:
        return len(self.conv_meas)

    def __repr__(self) -> str:
        return (
            f"SolverInfo(records={len(self.conv_meas)}, "
            f"stored={len(self.x_iter)}, has_ref={self.x_ref is not None})"
        )

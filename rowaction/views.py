# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Matrix views
============

Storage-polymorphic read-only matrices for row-action kernels.

Every view exposes the same logical matrix interface (shape, element
access, row/column kernels) regardless of how the values are stored:

- `DenseMatrix`      2-D NumPy array, C or Fortran order
- `CSCMatrix`        compressed sparse column (colptr, rowval, nzval)
- `TransposedMatrix` zero-copy adapter swapping rows and columns

All indices are 0-based. Views never write to the buffers they wrap.
"""

import abc
import operator
from typing import Tuple

import numpy as np
import scipy.sparse as sp

from .utils import check_index, check_vector, squared_magnitude

DIRECT = "direct"
TRANSPOSED = "transposed"
DENSE = "dense"
SPARSE = "sparse"


class MatrixView(abc.ABC):
    """
    Logical m-by-n matrix with per-row and per-column kernels.

    Subclasses implement the unchecked `_row_*` / `_col_*` fast paths;
    the public methods validate indices and vector lengths first.
    """

    orientation: str = DIRECT
    density: str = DENSE

    @property
    @abc.abstractmethod
    def shape(self) -> Tuple[int, int]: ...

    @property
    @abc.abstractmethod
    def dtype(self) -> np.dtype: ...

    @property
    def nrows(self) -> int:
        return self.shape[0]

    @property
    def ncols(self) -> int:
        return self.shape[1]

    @property
    def T(self) -> "MatrixView":
        return TransposedMatrix(self)

    def __getitem__(self, key):
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("matrix views are indexed as view[i, j]")
        i = check_index(key[0], self.nrows, "row")
        j = check_index(key[1], self.ncols, "column")
        return self._get(i, j)

    def __repr__(self) -> str:
        m, n = self.shape
        return (
            f"{type(self).__name__}({m}x{n}, dtype={self.dtype}, "
            f"{self.orientation}, {self.density})"
        )

    # ------------------------------------------------------------------
    # checked kernels
    # ------------------------------------------------------------------
    def row_squared_norm(self, i):
        """Return sum_n |M[i, n]|^2 without materialising row i."""
        return self._row_squared_norm(check_index(i, self.nrows, "row"))

    def row_dot(self, x, k):
        """Return the unconjugated product sum_n M[k, n] * x[n]."""
        k = check_index(k, self.nrows, "row")
        x = check_vector(x, self.ncols)
        return self._row_dot(x, k)

    def col_squared_norm(self, j):
        return self._col_squared_norm(check_index(j, self.ncols, "column"))

    def col_dot(self, x, j):
        j = check_index(j, self.ncols, "column")
        x = check_vector(x, self.nrows)
        return self._col_dot(x, j)

    def matvec(self, x) -> np.ndarray:
        """M @ x, one row kernel per output entry."""
        x = check_vector(x, self.ncols)
        out = np.empty(self.nrows, dtype=np.result_type(self.dtype, x.dtype))
        for k in range(self.nrows):
            out[k] = self._row_dot(x, k)
        return out

    def rmatvec(self, y) -> np.ndarray:
        """M^H @ y, one column kernel per output entry."""
        y = check_vector(y, self.nrows, "y")
        yc = np.conj(y)
        out = np.empty(self.ncols, dtype=np.result_type(self.dtype, y.dtype))
        for n in range(self.ncols):
            out[n] = np.conj(self._col_dot(yc, n))
        return out

    # ------------------------------------------------------------------
    # storage specific
    # ------------------------------------------------------------------
    @abc.abstractmethod
    def _get(self, i: int, j: int): ...

    @abc.abstractmethod
    def _row_squared_norm(self, i: int): ...

    @abc.abstractmethod
    def _row_dot(self, x: np.ndarray, k: int): ...

    @abc.abstractmethod
    def _col_squared_norm(self, j: int): ...

    @abc.abstractmethod
    def _col_dot(self, x: np.ndarray, j: int): ...

    @abc.abstractmethod
    def toarray(self) -> np.ndarray:
        """Dense copy of the logical matrix."""


class DenseMatrix(MatrixView):
    """
    Dense matrix backed by a 2-D NumPy array.

    Rows and columns are taken as basic-slice views, so a row of a
    Fortran-ordered array is walked with stride m and a column with
    unit stride (and the other way round for C order). `numpy.dot`
    consumes the strided view directly.
    """

    def __init__(self, data):
        data = np.asarray(data)
        if data.ndim != 2:
            raise ValueError(f"DenseMatrix needs a 2-D array, got ndim={data.ndim}")
        self._data = data

    @property
    def shape(self):
        return self._data.shape

    @property
    def dtype(self):
        return self._data.dtype

    @property
    def data(self) -> np.ndarray:
        """Read-only view of the wrapped array."""
        v = self._data.view()
        v.flags.writeable = False
        return v

    def _get(self, i, j):
        return self._data[i, j]

    def _row_squared_norm(self, i):
        return squared_magnitude(self._data[i, :])

    def _row_dot(self, x, k):
        return np.dot(self._data[k, :], x)

    def _col_squared_norm(self, j):
        return squared_magnitude(self._data[:, j])

    def _col_dot(self, x, j):
        return np.dot(self._data[:, j], x)

    def toarray(self):
        return np.array(self._data)


class CSCMatrix(MatrixView):
    """
    Compressed sparse column matrix.

    Column j holds the entries nzval[colptr[j]:colptr[j+1]] at rows
    rowval[colptr[j]:colptr[j+1]]. Duplicate (row, column) entries are
    summed, as in SciPy.

    Parameters
    ----------
    colptr : (ncols+1,) int array
        Column pointers; colptr[0] == 0 and non-decreasing.
    rowval : (nnz,) int array
        Row index of each stored entry.
    nzval : (nnz,) array
        Stored values.
    shape : (int, int)
        Logical (nrows, ncols).
    check : bool
        Validate the invariants above (O(ncols + nnz)). Pass False only
        for arrays that are known to be consistent.
    """

    density = SPARSE

    def __init__(self, colptr, rowval, nzval, shape, check: bool = True):
        colptr = np.asarray(colptr)
        rowval = np.asarray(rowval)
        if rowval.size == 0:
            # an empty list comes in as float64 and cannot index
            rowval = rowval.astype(np.intp)
        nzval = np.asarray(nzval)
        try:
            nrows, ncols = (operator.index(s) for s in shape)
        except (TypeError, ValueError):
            raise ValueError(f"shape must be a pair of integers, got {shape!r}") from None
        if nrows < 0 or ncols < 0:
            raise ValueError(f"shape must be non-negative, got {shape!r}")

        self._colptr = colptr
        self._rowval = rowval
        self._nzval = nzval
        self._shape = (nrows, ncols)
        if check:
            self._validate()

    def _validate(self):
        """Check the CSC invariants; O(ncols + nnz)."""
        colptr, rowval, nzval = self._colptr, self._rowval, self._nzval
        nrows, ncols = self._shape
        for name, arr in (("colptr", colptr), ("rowval", rowval)):
            if arr.ndim != 1 or arr.dtype.kind not in "iu":
                raise ValueError(f"{name} must be a 1-D integer array")
        if nzval.ndim != 1:
            raise ValueError("nzval must be 1-D")
        if colptr.shape[0] != ncols + 1:
            raise ValueError(
                f"colptr has length {colptr.shape[0]}, expected ncols+1 = {ncols + 1}"
            )
        if colptr[0] != 0:
            raise ValueError("colptr[0] must be 0")
        if np.any(np.diff(colptr) < 0):
            raise ValueError("colptr must be non-decreasing")
        nnz = int(colptr[-1])
        if rowval.shape[0] != nnz or nzval.shape[0] != nnz:
            raise ValueError(
                f"rowval and nzval must have length colptr[-1] = {nnz}, "
                f"got {rowval.shape[0]} and {nzval.shape[0]}"
            )
        if nnz and (rowval.min() < 0 or rowval.max() >= nrows):
            raise ValueError(f"rowval entries must lie in [0, {nrows})")

    @classmethod
    def from_scipy(cls, m) -> "CSCMatrix":
        """Wrap a SciPy sparse matrix, converting to CSC if needed."""
        if not sp.issparse(m):
            raise TypeError(f"expected a SciPy sparse matrix, got {type(m).__name__}")
        if m.format != "csc":
            m = m.tocsc()
        # SciPy keeps its compressed arrays consistent, so skip the O(nnz) scan
        return cls(m.indptr, m.indices, m.data, m.shape, check=False)

    @classmethod
    def from_dense(cls, a) -> "CSCMatrix":
        """Compress the nonzero entries of a 2-D array."""
        a = np.asarray(a)
        if a.ndim != 2:
            raise ValueError(f"from_dense needs a 2-D array, got ndim={a.ndim}")
        # nonzero() on the transpose yields entries sorted by column, then row
        cols, rows = np.nonzero(a.T)
        colptr = np.zeros(a.shape[1] + 1, dtype=np.intp)
        np.cumsum(np.bincount(cols, minlength=a.shape[1]), out=colptr[1:])
        return cls(colptr, rows, a[rows, cols], a.shape)

    @property
    def shape(self):
        return self._shape

    @property
    def dtype(self):
        return self._nzval.dtype

    @property
    def nnz(self) -> int:
        return int(self._colptr[-1])

    @property
    def colptr(self) -> np.ndarray:
        return self._colptr

    @property
    def rowval(self) -> np.ndarray:
        return self._rowval

    @property
    def nzval(self) -> np.ndarray:
        return self._nzval

    def _extent(self, j):
        return slice(self._colptr[j], self._colptr[j + 1])

    def _get(self, i, j):
        seg = self._extent(j)
        hits = self._nzval[seg][self._rowval[seg] == i]
        if hits.size == 0:
            return self.dtype.type(0)
        return hits.sum()

    def _col_squared_norm(self, j):
        return squared_magnitude(self._nzval[self._extent(j)])

    def _col_dot(self, x, j):
        seg = self._extent(j)
        return np.dot(self._nzval[seg], x[self._rowval[seg]])

    # Row access in CSC has to scan every stored entry.
    def _row_squared_norm(self, i):
        return squared_magnitude(self._nzval[self._rowval == i])

    def _row_dot(self, x, k):
        p = np.flatnonzero(self._rowval == k)
        cols = np.searchsorted(self._colptr, p, side="right") - 1
        return np.dot(self._nzval[p], x[cols])

    def toarray(self):
        out = np.zeros(self._shape, dtype=self.dtype)
        cols = np.repeat(np.arange(self._shape[1]), np.diff(self._colptr))
        np.add.at(out, (self._rowval, cols), self._nzval)
        return out

    def to_scipy(self) -> sp.csc_matrix:
        return sp.csc_matrix(
            (self._nzval, self._rowval, self._colptr), shape=self._shape
        )


class TransposedMatrix(MatrixView):
    """
    Transposed view of another matrix view.

    Logical row k is the parent's column k, so the row kernels forward
    to the parent's column kernels. Nothing is copied; for a CSC parent
    this turns row access into an O(nnz in row) walk over one
    compressed column.
    """

    orientation = TRANSPOSED

    def __init__(self, parent):
        self._parent = as_matrix_view(parent)

    @property
    def parent(self) -> MatrixView:
        return self._parent

    @property
    def density(self):
        return self._parent.density

    @property
    def shape(self):
        m, n = self._parent.shape
        return (n, m)

    @property
    def dtype(self):
        return self._parent.dtype

    @property
    def T(self):
        return self._parent

    def _get(self, i, j):
        return self._parent._get(j, i)

    def _row_squared_norm(self, i):
        return self._parent._col_squared_norm(i)

    def _row_dot(self, x, k):
        return self._parent._col_dot(x, k)

    def _col_squared_norm(self, j):
        return self._parent._row_squared_norm(j)

    def _col_dot(self, x, j):
        return self._parent._row_dot(x, j)

    def toarray(self):
        return np.ascontiguousarray(self._parent.toarray().T)


def as_matrix_view(obj) -> MatrixView:
    """
    Coerce a caller-supplied matrix to a `MatrixView`.

    - MatrixView              -> returned unchanged
    - SciPy CSC               -> CSCMatrix (buffers shared)
    - SciPy CSR               -> TransposedMatrix over the CSC of obj.T,
                                 which SciPy builds without copying
    - other SciPy formats     -> CSCMatrix via tocsc()
    - ndarray / nested lists  -> DenseMatrix
    """
    if isinstance(obj, MatrixView):
        return obj
    if sp.issparse(obj):
        if obj.format == "csr":
            return TransposedMatrix(CSCMatrix.from_scipy(obj.T))
        return CSCMatrix.from_scipy(obj)
    if isinstance(obj, (np.ndarray, list, tuple)):
        return DenseMatrix(obj)
    raise TypeError(f"cannot build a matrix view from {type(obj).__name__}")

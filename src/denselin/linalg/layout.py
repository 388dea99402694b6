import numpy as np
from ..errors import InvalidDimensions

ROW_MAJOR = 'row'
COL_MAJOR = 'col'
LAYOUTS = (ROW_MAJOR, COL_MAJOR)


def check_shape(*dims):
    """
    Validate that every shape parameter is a positive integer.
    """
    for d in dims:
        if isinstance(d, (bool, np.bool_)) or not isinstance(d, (int, np.integer)):
            raise InvalidDimensions(f"Shape parameters must be integers, got {d!r}.")
        if d <= 0:
            raise InvalidDimensions(f"Shape parameters must be positive, got {tuple(dims)}.")


def as_buffer(M, rows, cols):
    """
    Return M as a flat float64 array after checking len(M) == rows * cols.
    """
    check_shape(rows, cols)
    buf = np.asarray(M, dtype=np.float64)
    if buf.ndim != 1:
        buf = buf.reshape(-1)
    if buf.size != rows * cols:
        raise InvalidDimensions(
            f"Buffer of length {buf.size} does not hold a {rows}x{cols} matrix."
        )
    return buf


def to_column_major(M, rows, cols):
    """
    Convert a row-major buffer (rows x cols) to column-major.

    Parameters
    ----------
    M : array_like, shape (rows * cols,)
        Row-major buffer, M[i * cols + j] = A(i, j).
    rows, cols : int
        Logical shape of the matrix.

    Returns
    -------
    out : ndarray, shape (rows * cols,)
        Newly allocated column-major buffer, out[j * rows + i] = A(i, j).
    """
    buf = as_buffer(M, rows, cols)
    return buf.reshape(rows, cols).flatten(order='F')


def to_row_major(M, rows, cols):
    """
    Convert a column-major buffer (rows x cols) to row-major.
    Inverse of `to_column_major`.
    """
    buf = as_buffer(M, rows, cols)
    return buf.reshape((rows, cols), order='F').flatten()


class Matrix:
    """
    Dense matrix stored as a flat float64 buffer with an explicit layout tag.

    Element (i, j) lives at data[i * cols + j] for 'row' layout and at
    data[j * rows + i] for 'col' layout. The buffer is always a private
    copy of what the caller supplied.
    """
    def __init__(self, data, rows, cols, layout=ROW_MAJOR):
        if layout not in LAYOUTS:
            raise ValueError(f"layout must be one of {LAYOUTS}, got {layout!r}")
        self.data = np.array(as_buffer(data, rows, cols), dtype=np.float64)
        self.rows = int(rows)
        self.cols = int(cols)
        self.layout = layout

    @classmethod
    def from_array(cls, arr, layout=ROW_MAJOR):
        """
        Build a Matrix from a 2-D array_like (nested lists or ndarray).
        """
        arr = np.asarray(arr, dtype=np.float64)
        if arr.ndim == 1:
            arr = arr.reshape(1, -1)
        if arr.ndim != 2:
            raise InvalidDimensions(f"Expected a 2-D array, got {arr.ndim} dimensions.")
        rows, cols = arr.shape
        order = 'C' if layout == ROW_MAJOR else 'F'
        return cls(arr.flatten(order=order), rows, cols, layout=layout)

    @property
    def shape(self):
        return self.rows, self.cols

    def __getitem__(self, index):
        i, j = index
        if not (0 <= i < self.rows and 0 <= j < self.cols):
            raise IndexError(f"Index {index} out of range for a {self.rows}x{self.cols} matrix.")
        if self.layout == ROW_MAJOR:
            return self.data[i * self.cols + j]
        return self.data[j * self.rows + i]

    def as_layout(self, layout):
        """
        Return a new Matrix holding the same values in `layout`.
        """
        if layout == self.layout:
            return Matrix(self.data, self.rows, self.cols, layout)
        if layout == COL_MAJOR:
            data = to_column_major(self.data, self.rows, self.cols)
        elif layout == ROW_MAJOR:
            data = to_row_major(self.data, self.rows, self.cols)
        else:
            raise ValueError(f"layout must be one of {LAYOUTS}, got {layout!r}")
        return Matrix(data, self.rows, self.cols, layout)

    def to_array(self):
        """
        Return the matrix as a (rows, cols) ndarray.
        """
        order = 'C' if self.layout == ROW_MAJOR else 'F'
        return self.data.reshape((self.rows, self.cols), order=order).copy()

    def __repr__(self):
        return f"Matrix(rows={self.rows}, cols={self.cols}, layout={self.layout!r})"

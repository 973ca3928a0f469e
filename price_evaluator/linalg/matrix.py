"""
Dense float64 matrix used by the least-squares solver.

The matrix wraps a numpy buffer but exposes only the operations the
normal-equation pipeline needs: bounds-checked element access, transpose,
multiplication and inversion. All kernels are single-threaded.

Inversion first equilibrates the matrix (each row, then each column,
divided by its largest absolute entry) and then runs Gauss-Jordan
elimination with partial pivoting on [B | I]. Equilibration makes the
singularity test independent of feature units: XtX mixes entries like
mileage^2 (~1e10) with age^2 (~1e1). A column has no usable pivot when
its largest remaining candidate is not greater than SINGULARITY_EPSILON.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from .errors import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidShapeError,
    NotSquareError,
    SingularMatrixError,
)

logger = logging.getLogger(__name__)

SINGULARITY_EPSILON = 1e-10
"""Pivot threshold on the equilibrated matrix used by Matrix.invert(). Override per call."""


class Matrix:
    """
    Rows x cols grid of double-precision values, zero-indexed.

    Shape is fixed at construction. Contents are written with set() while
    the owning computation builds the matrix and read afterwards; instances
    must not be shared mutably across concurrent solves.

    Usage:
        x = Matrix(3, 2)
        x.set(0, 0, 1.0)
        xtx = x.transpose().multiply(x)
        inverse = xtx.invert()
    """

    __slots__ = ("_data",)

    def __init__(self, rows: int, cols: int):
        """
        Allocate a zero-filled matrix.

        Args:
            rows: Number of rows (>= 1)
            cols: Number of columns (>= 1)

        Raises:
            InvalidShapeError: If rows or cols is not positive
        """
        if rows <= 0 or cols <= 0:
            raise InvalidShapeError(
                f"Matrix shape must be positive, got {rows}x{cols}"
            )
        self._data = np.zeros((rows, cols), dtype=np.float64)

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[float]]) -> Matrix:
        """
        Build a matrix from row sequences.

        Raises:
            InvalidShapeError: If there are no rows, a row is empty, or rows are ragged
        """
        materialized = [list(row) for row in rows]
        if not materialized or not materialized[0]:
            raise InvalidShapeError("Cannot build a matrix from empty rows")

        width = len(materialized[0])
        for i, row in enumerate(materialized):
            if len(row) != width:
                raise InvalidShapeError(
                    f"Ragged rows: row 0 has {width} values, row {i} has {len(row)}"
                )

        return cls._wrap(np.array(materialized, dtype=np.float64))

    @classmethod
    def identity(cls, size: int) -> Matrix:
        """Square identity matrix of the given size."""
        if size <= 0:
            raise InvalidShapeError(f"Identity size must be positive, got {size}")
        return cls._wrap(np.eye(size, dtype=np.float64))

    @classmethod
    def _wrap(cls, data: np.ndarray) -> Matrix:
        """Adopt an existing 2-D float64 buffer without copying."""
        matrix = cls.__new__(cls)
        matrix._data = data
        return matrix

    # --- Shape and element access ---

    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    def get(self, row: int, col: int) -> float:
        """
        Read one element.

        Raises:
            IndexOutOfRangeError: If (row, col) is outside the matrix
        """
        self._check_index(row, col)
        return float(self._data[row, col])

    def set(self, row: int, col: int, value: float) -> None:
        """
        Write one element.

        Raises:
            IndexOutOfRangeError: If (row, col) is outside the matrix
        """
        self._check_index(row, col)
        self._data[row, col] = float(value)

    def _check_index(self, row: int, col: int) -> None:
        if not 0 <= row < self.rows or not 0 <= col < self.cols:
            raise IndexOutOfRangeError(
                f"Index ({row}, {col}) out of range for {self.rows}x{self.cols} matrix"
            )

    # --- Algebra ---

    def transpose(self) -> Matrix:
        """Return a new cols x rows matrix with result[j][i] == self[i][j]."""
        return Matrix._wrap(self._data.T.copy())

    def multiply(self, other: Matrix) -> Matrix:
        """
        Matrix product self x other.

        Args:
            other: Right-hand operand with other.rows == self.cols

        Returns:
            New matrix of shape (self.rows, other.cols)

        Raises:
            DimensionMismatchError: If self.cols != other.rows
        """
        if self.cols != other.rows:
            raise DimensionMismatchError(
                f"Cannot multiply {self.rows}x{self.cols} by {other.rows}x{other.cols}"
            )
        # einsum without optimize runs numpy's own loop, not a threaded BLAS call
        return Matrix._wrap(np.einsum("ik,kj->ij", self._data, other._data))

    def invert(self, epsilon: float = SINGULARITY_EPSILON) -> Matrix:
        """
        Inverse via Gauss-Jordan elimination with partial pivoting.

        Args:
            epsilon: Pivot threshold on the equilibrated matrix. Elimination
                fails when the largest pivot candidate of a column is <= epsilon.

        Returns:
            New matrix B such that self.multiply(B) approximates the identity

        Raises:
            NotSquareError: If the matrix is not square
            SingularMatrixError: If a row or column is zero, or no usable pivot
                exists for some column
        """
        if not self.is_square:
            raise NotSquareError(
                f"Only square matrices can be inverted, got {self.rows}x{self.cols}"
            )

        size = self.rows

        row_scale = np.max(np.abs(self._data), axis=1)
        if np.any(row_scale == 0):
            raise SingularMatrixError(
                f"Matrix is singular: row {int(np.argmin(row_scale))} is zero"
            )
        scaled = self._data / row_scale[:, None]

        col_scale = np.max(np.abs(scaled), axis=0)
        if np.any(col_scale == 0):
            raise SingularMatrixError(
                f"Matrix is singular: column {int(np.argmin(col_scale))} is zero"
            )
        scaled /= col_scale[None, :]

        augmented = np.hstack([scaled, np.eye(size, dtype=np.float64)])

        for col in range(size):
            pivot_row = col + int(np.argmax(np.abs(augmented[col:, col])))
            pivot_value = augmented[pivot_row, col]
            if abs(pivot_value) <= epsilon:
                raise SingularMatrixError(
                    f"Matrix is singular: no pivot above {epsilon:.1e} in column {col}"
                )

            if pivot_row != col:
                augmented[[col, pivot_row]] = augmented[[pivot_row, col]]

            augmented[col] /= augmented[col, col]

            factors = augmented[:, col].copy()
            factors[col] = 0.0
            augmented -= np.outer(factors, augmented[col])

        logger.debug(f"Inverted {size}x{size} matrix")

        # scaled = R A C, so A^-1 = C scaled^-1 R
        inverse = augmented[:, size:] / col_scale[:, None] / row_scale[None, :]
        return Matrix._wrap(inverse)

    # --- Conversion and comparison ---

    def to_list(self) -> list[list[float]]:
        """Rows as nested Python lists."""
        return self._data.tolist()

    def to_numpy(self) -> np.ndarray:
        """Copy of the underlying buffer."""
        return self._data.copy()

    def allclose(self, other: Matrix, atol: float = 1e-9) -> bool:
        """Element-wise comparison within an absolute tolerance."""
        return self.shape == other.shape and bool(
            np.allclose(self._data, other._data, rtol=0.0, atol=atol)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def __repr__(self) -> str:
        return f"Matrix({self.rows}x{self.cols}, {self.to_list()})"

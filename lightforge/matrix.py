"""
Square matrices for coordinate-space transforms.

Supports 2x2, 3x3 and 4x4 matrices. Determinants and inverses are computed by
cofactor expansion, recursing down to the 2x2 case.
"""

from __future__ import annotations
from typing import Sequence, Union
import numpy as np

from .errors import SingularMatrixError, ValidationError
from .tuples import Tuple

SUPPORTED_SIZES = (2, 3, 4)


class Matrix:
    """A square matrix backed by a numpy array."""

    __slots__ = ('_data',)

    def __init__(self, rows: Sequence[Sequence[float]]):
        """Create a matrix from a sequence of rows.

        Args:
            rows: Row-major values; must form a 2x2, 3x3 or 4x4 matrix
        """
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1] or data.shape[0] not in SUPPORTED_SIZES:
            raise ValidationError(f"Matrix must be 2x2, 3x3 or 4x4, got shape {data.shape}")
        self._data = data

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Matrix:
        """Create Matrix from numpy array without validation."""
        m = cls.__new__(cls)
        m._data = np.asarray(arr, dtype=np.float64)
        return m

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        return cls.from_array(np.identity(size))

    @property
    def size(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self._data[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        return hash(self._data.tobytes())

    def __repr__(self) -> str:
        rows = ', '.join('[' + ', '.join(f"{v:.5f}" for v in row) + ']' for row in self._data)
        return f"Matrix([{rows}])"

    def __matmul__(self, other: Union[Matrix, Tuple]) -> Union[Matrix, Tuple]:
        if isinstance(other, Matrix):
            if other.size != self.size:
                raise ValidationError(f"Cannot multiply {self.size}x{self.size} by {other.size}x{other.size}")
            return Matrix.from_array(self._data @ other._data)
        if isinstance(other, Tuple):
            if self.size != 4:
                raise ValidationError("Only 4x4 matrices can transform tuples")
            return Tuple.from_array(self._data @ other._data)
        return NotImplemented

    def transpose(self) -> Matrix:
        return Matrix.from_array(self._data.T.copy())

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return the matrix with the given row and column removed."""
        if self.size == 2:
            raise ValidationError("A 2x2 matrix has no submatrix")
        data = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix.from_array(data)

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 else minor

    def determinant(self) -> float:
        if self.size == 2:
            d = self._data
            return float(d[0, 0] * d[1, 1] - d[0, 1] * d[1, 0])
        return float(sum(self._data[0, col] * self.cofactor(0, col) for col in range(self.size)))

    def is_invertible(self) -> bool:
        return self.determinant() != 0

    def inverse(self) -> Matrix:
        """Return the inverse via the transposed cofactor matrix.

        Raises:
            SingularMatrixError: If the determinant is zero
        """
        det = self.determinant()
        if det == 0:
            raise SingularMatrixError(f"Matrix is not invertible: {self!r}")

        size = self.size
        result = np.empty((size, size), dtype=np.float64)
        for row in range(size):
            for col in range(size):
                # Transposed placement
                result[col, row] = self.cofactor(row, col) / det
        return Matrix.from_array(result)

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()


IDENTITY = Matrix.identity()

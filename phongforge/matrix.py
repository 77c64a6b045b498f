"""
Dense matrices and affine transform factories.

Determinants and inverses are computed by cofactor expansion (the adjugate
formulation); numpy only provides storage and products.

Transforms compose right to left: (C @ B @ A) @ p applies A first, then B,
then C.
"""

from __future__ import annotations
import math
from typing import Iterable, Optional, Sequence, Union
import numpy as np

from .errors import DimensionMismatchError, NonInvertibleMatrixError
from .tuples import EPSILON, Tuple, approx_equal


class Matrix:
    """A rows x cols matrix of float64 values stored row-major."""

    __slots__ = ('_data',)

    def __init__(self, rows: Iterable[Sequence[float]]):
        rows = [list(r) for r in rows]
        if len({len(r) for r in rows}) > 1:
            raise DimensionMismatchError(
                f"Matrix rows must all have the same length, got {[len(r) for r in rows]}"
            )
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2:
            raise DimensionMismatchError("Matrix needs at least one non-empty row")
        self._data = data

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Matrix:
        m = cls.__new__(cls)
        m._data = np.asarray(arr, dtype=np.float64)
        return m

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        return cls.from_array(np.identity(size, dtype=np.float64))

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return float(self._data[row, col])

    def __repr__(self) -> str:
        rows = ', '.join(
            '[' + ', '.join(f"{v:.5f}" for v in row) + ']' for row in self._data
        )
        return f"Matrix([{rows}])"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    __hash__ = None

    def __matmul__(self, other: Union[Matrix, Tuple]) -> Union[Matrix, Tuple]:
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, Tuple):
            return self.multiply_tuple(other)
        return NotImplemented

    def multiply(self, other: Matrix) -> Matrix:
        """Standard matrix product.

        Raises:
            DimensionMismatchError: if self.cols != other.rows
        """
        if self.cols != other.rows:
            raise DimensionMismatchError(
                f"Cannot multiply {self.rows}x{self.cols} by {other.rows}x{other.cols}"
            )
        return Matrix.from_array(self._data @ other._data)

    def multiply_tuple(self, t: Tuple) -> Tuple:
        """Transform a tuple, treating it as a column vector."""
        if self.shape != (4, 4):
            raise DimensionMismatchError(
                f"Cannot multiply {self.rows}x{self.cols} matrix by a 4-tuple"
            )
        return Tuple.from_array(self._data @ t._data)

    def transpose(self) -> Matrix:
        return Matrix.from_array(self._data.T.copy())

    def _require_square(self, operation: str) -> None:
        if self.rows != self.cols:
            raise DimensionMismatchError(
                f"{operation} requires a square matrix, got {self.rows}x{self.cols}"
            )

    def determinant(self) -> float:
        """Determinant by cofactor expansion along the first row."""
        self._require_square("determinant")
        if self.rows == 1:
            return float(self._data[0, 0])
        if self.rows == 2:
            d = self._data
            return float(d[0, 0] * d[1, 1] - d[0, 1] * d[1, 0])
        return float(sum(self._data[0, col] * self.cofactor(0, col) for col in range(self.cols)))

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        reduced = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix.from_array(reduced)

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 else minor

    def is_invertible(self) -> bool:
        return not approx_equal(self.determinant(), 0.0)

    def try_inverse(self) -> Optional[Matrix]:
        """Return the inverse, or None if the matrix is singular."""
        self._require_square("inverse")
        det = self.determinant()
        if approx_equal(det, 0.0):
            return None
        n = self.rows
        result = np.empty((n, n), dtype=np.float64)
        for row in range(n):
            for col in range(n):
                # Storing at [col, row] transposes the cofactor matrix
                result[col, row] = self.cofactor(row, col) / det
        return Matrix.from_array(result)

    def inverse(self) -> Matrix:
        """Return the inverse.

        Raises:
            NonInvertibleMatrixError: if the determinant is ~0
        """
        inv = self.try_inverse()
        if inv is None:
            raise NonInvertibleMatrixError(f"Matrix is not invertible: {self!r}")
        return inv

    def to_array(self) -> np.ndarray:
        return self._data.copy()


IDENTITY = Matrix.identity(4)


def translation(x: float, y: float, z: float) -> Matrix:
    return Matrix([
        [1, 0, 0, x],
        [0, 1, 0, y],
        [0, 0, 1, z],
        [0, 0, 0, 1],
    ])


def scaling(x: float, y: float, z: float) -> Matrix:
    return Matrix([
        [x, 0, 0, 0],
        [0, y, 0, 0],
        [0, 0, z, 0],
        [0, 0, 0, 1],
    ])


def rotation_x(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([
        [1, 0, 0, 0],
        [0, c, -s, 0],
        [0, s, c, 0],
        [0, 0, 0, 1],
    ])


def rotation_y(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([
        [c, 0, s, 0],
        [0, 1, 0, 0],
        [-s, 0, c, 0],
        [0, 0, 0, 1],
    ])


def rotation_z(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([
        [c, -s, 0, 0],
        [s, c, 0, 0],
        [0, 0, 1, 0],
        [0, 0, 0, 1],
    ])


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear transform; `xy` moves x in proportion to y, and so on."""
    return Matrix([
        [1, xy, xz, 0],
        [yx, 1, yz, 0],
        [zx, zy, 1, 0],
        [0, 0, 0, 1],
    ])


def view_transform(from_point: Tuple, to: Tuple, up: Tuple) -> Matrix:
    """Build the world-to-camera transform for an eye looking from `from_point` to `to`.

    Args:
        from_point: Eye position
        to: Point the eye looks at
        up: Approximate up vector (need not be perpendicular to the view)

    Returns:
        Orientation matrix combined with a translation moving the eye to the origin
    """
    forward = (to - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    orientation = Matrix([
        [left.x, left.y, left.z, 0],
        [true_up.x, true_up.y, true_up.z, 0],
        [-forward.x, -forward.y, -forward.z, 0],
        [0, 0, 0, 1],
    ])
    return orientation @ translation(-from_point.x, -from_point.y, -from_point.z)

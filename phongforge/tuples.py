"""
Homogeneous 4-component tuples for points and vectors.

A tuple with w=1 is a point, with w=0 a vector. All floating point
comparisons in the renderer go through approx_equal() and EPSILON.
"""

from __future__ import annotations
import numpy as np

from .errors import InvalidGeometryError, DegenerateVectorError

EPSILON = 1e-4


def approx_equal(a: float, b: float) -> bool:
    """Return True if a and b differ by less than EPSILON."""
    return abs(a - b) < EPSILON


class Tuple:
    """A homogeneous (x, y, z, w) coordinate.

    Uses numpy internally, like the rest of the math layer, so matrices can
    transform tuples with a single dot product.
    """

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0):
        self._data = np.array([x, y, z, w], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Tuple:
        """Create a Tuple from a numpy array of 4 values."""
        t = cls.__new__(cls)
        t._data = np.asarray(arr, dtype=np.float64)
        return t

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    @property
    def w(self) -> float:
        return float(self._data[3])

    def is_point(self) -> bool:
        return approx_equal(self.w, 1.0)

    def is_vector(self) -> bool:
        return approx_equal(self.w, 0.0)

    def __repr__(self) -> str:
        kind = 'point' if self.is_point() else 'vector' if self.is_vector() else 'Tuple'
        if kind == 'Tuple':
            return f"Tuple({self.x:.5f}, {self.y:.5f}, {self.z:.5f}, {self.w:.5f})"
        return f"{kind}({self.x:.5f}, {self.y:.5f}, {self.z:.5f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return bool(np.all(np.abs(self._data - other._data) < EPSILON))

    def __hash__(self) -> int:
        return hash(tuple(np.round(self._data / EPSILON)))

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __neg__(self) -> Tuple:
        return Tuple.from_array(-self._data)

    def __add__(self, other: Tuple) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        if self.is_point() and other.is_point():
            raise InvalidGeometryError(f"Cannot add two points: {self} + {other}")
        return Tuple.from_array(self._data + other._data)

    def __sub__(self, other: Tuple) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        return Tuple.from_array(self._data - other._data)

    def __mul__(self, scalar: float) -> Tuple:
        return Tuple.from_array(self._data * scalar)

    def __rmul__(self, scalar: float) -> Tuple:
        return Tuple.from_array(scalar * self._data)

    def __truediv__(self, scalar: float) -> Tuple:
        return Tuple.from_array(self._data / scalar)

    def magnitude(self) -> float:
        """Return the Euclidean length over all four components."""
        return float(np.linalg.norm(self._data))

    def normalize(self) -> Tuple:
        """Return a unit-length tuple in the same direction.

        Raises:
            DegenerateVectorError: if the tuple has zero length
        """
        length = self.magnitude()
        if length < EPSILON * EPSILON:
            raise DegenerateVectorError(f"Cannot normalize zero-length {self!r}")
        return Tuple.from_array(self._data / length)

    def dot(self, other: Tuple) -> float:
        """Compute the dot product over all four components."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Tuple) -> Tuple:
        """Compute the cross product of two vectors.

        Raises:
            InvalidGeometryError: if either operand is not a vector
        """
        if not (self.is_vector() and other.is_vector()):
            raise InvalidGeometryError("Cross product is only defined for vectors")
        c = np.cross(self._data[:3], other._data[:3])
        return vector(c[0], c[1], c[2])

    def reflect(self, normal: Tuple) -> Tuple:
        """Reflect this vector around the given normal."""
        return self - normal * 2 * self.dot(normal)

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w=1)."""
    return Tuple(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a vector (w=0)."""
    return Tuple(x, y, z, 0.0)


def reflect(incoming: Tuple, normal: Tuple) -> Tuple:
    """Reflect `incoming` around `normal`: in - normal * 2 * dot(in, normal)."""
    return incoming.reflect(normal)


ORIGIN = point(0, 0, 0)

"""
Exception types raised by the renderer.

Every error derives from PhongForgeError so embedders can catch the whole
family at once, while the secondary base (ValueError, ArithmeticError) keeps
the usual Python semantics for callers that don't know about this package.
"""


class PhongForgeError(Exception):
    """Base class for all renderer errors."""
    pass


class InvalidGeometryError(PhongForgeError, ValueError):
    """A point was used where a vector is required, or vice versa."""
    pass


class DimensionMismatchError(PhongForgeError, ValueError):
    """Matrix or tuple operands have incompatible shapes."""
    pass


class NonInvertibleMatrixError(PhongForgeError, ArithmeticError):
    """A singular matrix (determinant ~ 0) was inverted."""
    pass


class DegenerateVectorError(PhongForgeError, ArithmeticError):
    """A zero-length vector was normalized."""
    pass


class SceneParseError(PhongForgeError):
    """Error during scene parsing."""
    pass

import math
from typing import Any, Optional, Tuple, Union
import numpy as np
from .latlng import Point


Coefficients = Tuple[float, float, float, float, float, float]


class DegenerateMatrixError(ValueError):
    """Raised when a matrix with a zero determinant is inverted."""


class AffineMatrix:
    """
    A 2D affine transformation with six coefficients (a, b, c, d, e, f).

    Points are mapped row-wise:

        x' = a * x + b * y + e
        y' = c * x + d * y + f

    Composition, however, treats the coefficients column-wise, i.e. as the
    3x3 matrix [[a, c, e], [b, d, f], [0, 0, 1]], and right-multiplies the
    current state by each new elementary transform. A bare `rotate()`
    therefore maps points with the Y-down (screen) sense; `flip()` turns it
    into a counter-clockwise rotation in a Y-up projected space.

    Instances are immutable: every builder returns a new matrix. Uses
    numpy for the underlying storage and composition.
    """

    def __init__(self, *data: Any):
        """
        Initializes a matrix.

        Args:
            data: Six coefficients (a, b, c, d, e, f), another
                  AffineMatrix, a 3x3 numpy array/list in composition
                  layout, or nothing for the identity.
        """
        if not data:
            self.m: np.ndarray = np.identity(3, dtype=float)
        elif len(data) == 1 and isinstance(data[0], AffineMatrix):
            self.m = data[0].m.copy()
        elif len(data) == 6:
            a, b, c, d, e, f = data
            self.m = np.array(
                [[a, c, e], [b, d, f], [0, 0, 1]], dtype=float
            )
        elif len(data) == 1:
            try:
                self.m = np.array(data[0], dtype=float)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Could not create AffineMatrix: {e}")
            if self.m.shape != (3, 3):
                raise ValueError("Input data must be a 3x3 matrix.")
        else:
            raise ValueError(
                f"Expected 6 coefficients, got {len(data)} arguments."
            )

    @property
    def coefficients(self) -> Coefficients:
        """The (a, b, c, d, e, f) tuple."""
        m = self.m
        return (
            float(m[0, 0]),
            float(m[1, 0]),
            float(m[0, 1]),
            float(m[1, 1]),
            float(m[0, 2]),
            float(m[1, 2]),
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AffineMatrix):
            return False
        return np.allclose(self.m, other.m)

    def __repr__(self) -> str:
        return f"AffineMatrix{self.coefficients}"

    def __copy__(self) -> "AffineMatrix":
        return AffineMatrix(self)

    def __deepcopy__(self, memo: dict) -> "AffineMatrix":
        return AffineMatrix(self)

    def copy(self) -> "AffineMatrix":
        return AffineMatrix(self)

    def __matmul__(self, other: "AffineMatrix") -> "AffineMatrix":
        if not isinstance(other, AffineMatrix):
            return NotImplemented
        return self.compose(other)

    @staticmethod
    def identity() -> "AffineMatrix":
        return AffineMatrix()

    def is_identity(self) -> bool:
        return np.allclose(self.m, np.identity(3))

    def compose(self, other: "AffineMatrix") -> "AffineMatrix":
        """
        Returns `self` right-multiplied by `other`, so that `other` acts on
        points before `self` does.
        """
        return AffineMatrix(np.dot(self.m, other.m))

    def _add(
        self, a: float, b: float, c: float, d: float, e: float, f: float
    ) -> "AffineMatrix":
        return self.compose(AffineMatrix(a, b, c, d, e, f))

    def transform(self, point: Tuple[float, float]) -> Point:
        """
        Applies the six coefficients to a point. The input is never
        modified.
        """
        a, b, c, d, e, f = self.coefficients
        x, y = point[0], point[1]
        return Point(a * x + b * y + e, c * x + d * y + f)

    def untransform(self, point: Tuple[float, float]) -> Point:
        """
        Maps a transformed point back to where it came from; the exact
        inverse of `transform`.

        Raises:
            DegenerateMatrixError: If the matrix is not invertible.
        """
        a, b, c, d, e, f = self.coefficients
        det = a * d - b * c
        if abs(det) < 1e-12:
            raise DegenerateMatrixError(
                f"Cannot untransform through singular matrix {self!r}"
            )
        x, y = point[0] - e, point[1] - f
        return Point((d * x - b * y) / det, (a * y - c * x) / det)

    def invert(self) -> "AffineMatrix":
        """
        Returns the inverse matrix.

        Raises:
            DegenerateMatrixError: If the matrix is singular.
        """
        try:
            return AffineMatrix(np.linalg.inv(self.m))
        except np.linalg.LinAlgError as e:
            raise DegenerateMatrixError(str(e)) from e

    def translate(
        self, offset: Union[Tuple[float, float], float, None] = None
    ) -> Union["AffineMatrix", Point]:
        """
        Composes a translation. Without an argument, returns the current
        translation component (e, f) instead.

        Args:
            offset: An (x, y) pair, or a scalar used for both axes.
        """
        if offset is None:
            _, _, _, _, e, f = self.coefficients
            return Point(e, f)
        if isinstance(offset, (int, float)):
            tx = ty = float(offset)
        else:
            tx, ty = offset[0], offset[1]
        return self._add(1, 0, 0, 1, tx, ty)

    def scale(
        self,
        factor: Union[Tuple[float, float], float, None] = None,
        origin: Optional[Tuple[float, float]] = None,
    ) -> Union["AffineMatrix", Point]:
        """
        Composes a scale about `origin` (default (0, 0)). Without a factor,
        returns the current linear scale (a, d) instead.

        Args:
            factor: An (sx, sy) pair, or a scalar used for both axes.
            origin: The fixed point of the scale.
        """
        if factor is None:
            a, _, _, d, _, _ = self.coefficients
            return Point(a, d)
        if isinstance(factor, (int, float)):
            sx = sy = float(factor)
        else:
            sx, sy = factor[0], factor[1]
        ox, oy = origin if origin is not None else (0.0, 0.0)
        # Translate to origin, scale, then translate back
        return self._add(sx, 0, 0, sy, ox, oy)._add(1, 0, 0, 1, -ox, -oy)

    def rotate(
        self, angle: float, origin: Optional[Tuple[float, float]] = None
    ) -> "AffineMatrix":
        """
        Composes a rotation by `angle` radians about `origin`
        (default (0, 0)).
        """
        cos = math.cos(angle)
        sin = math.sin(angle)
        ox, oy = origin if origin is not None else (0.0, 0.0)
        # Translate to origin, rotate, then translate back
        return self._add(cos, sin, -sin, cos, ox, oy)._add(
            1, 0, 0, 1, -ox, -oy
        )

    def flip(self) -> "AffineMatrix":
        """
        Returns a copy with the off-diagonal coefficients b and c negated,
        which inverts the sense of a rotation.
        """
        flipped = self.copy()
        flipped.m[1, 0] *= -1
        flipped.m[0, 1] *= -1
        return flipped

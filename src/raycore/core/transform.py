"""Affine transforms represented as 4x4 homogeneous matrices.

An ``AffineTransform`` wraps an immutable numpy matrix whose bottom row is
``[0, 0, 0, 1]``. Points are multiplied with ``w = 1`` and pick up the
translation column; vectors are multiplied with ``w = 0`` and do not.

Composition follows matrix multiplication: ``a @ b`` applies ``b`` first,
then ``a``. For reading left to right, ``then`` appends a transform that is
applied after the current one:

Example:
    >>> import math
    >>> t = (
    ...     AffineTransform.scaling(2.0, 2.0, 2.0)
    ...     .then(AffineTransform.rotation_z(math.pi / 2))
    ...     .then(AffineTransform.translation(5.0, 0.0, 0.0))
    ... )
    >>> t.transform_point(Point3(1.0, 0.0, 0.0))
    Point3(x=5.0, y=2.0, z=0.0)
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

from raycore.core.errors import NonInvertibleTransform
from raycore.core.tuples import EPSILON, Point3, Vector3

_AFFINE_BOTTOM_ROW = np.array([0.0, 0.0, 0.0, 1.0])


class AffineTransform:
    """An immutable 4x4 affine transformation matrix.

    Attributes:
        matrix: Read-only (4, 4) float64 array.
    """

    __slots__ = ("_matrix",)

    def __init__(self, matrix: npt.ArrayLike | None = None) -> None:
        """Create a transform from a 4x4 matrix (identity if omitted).

        Args:
            matrix: Any array-like of shape (4, 4) with bottom row [0, 0, 0, 1].

        Raises:
            ValueError: If the matrix has the wrong shape or is not affine.
        """
        if matrix is None:
            arr = np.identity(4, dtype=np.float64)
        else:
            arr = np.array(matrix, dtype=np.float64)
        if arr.shape != (4, 4):
            raise ValueError(f"Affine transform must be 4x4, got shape {arr.shape}")
        if not np.allclose(arr[3], _AFFINE_BOTTOM_ROW):
            raise ValueError(f"Bottom row of an affine transform must be [0, 0, 0, 1], got {arr[3]}")
        arr.setflags(write=False)
        self._matrix = arr

    # =========================================================================
    # Named constructors
    # =========================================================================

    @classmethod
    def identity(cls) -> AffineTransform:
        return cls()

    @classmethod
    def translation(cls, x: float, y: float, z: float) -> AffineTransform:
        m = np.identity(4)
        m[0, 3] = x
        m[1, 3] = y
        m[2, 3] = z
        return cls(m)

    @classmethod
    def scaling(cls, x: float, y: float, z: float) -> AffineTransform:
        return cls(np.diag([x, y, z, 1.0]))

    @classmethod
    def rotation_x(cls, radians: float) -> AffineTransform:
        """Rotate about the x axis (right-handed, counter-clockwise)."""
        c, s = math.cos(radians), math.sin(radians)
        m = np.identity(4)
        m[1, 1], m[1, 2] = c, -s
        m[2, 1], m[2, 2] = s, c
        return cls(m)

    @classmethod
    def rotation_y(cls, radians: float) -> AffineTransform:
        """Rotate about the y axis (right-handed, counter-clockwise)."""
        c, s = math.cos(radians), math.sin(radians)
        m = np.identity(4)
        m[0, 0], m[0, 2] = c, s
        m[2, 0], m[2, 2] = -s, c
        return cls(m)

    @classmethod
    def rotation_z(cls, radians: float) -> AffineTransform:
        """Rotate about the z axis (right-handed, counter-clockwise)."""
        c, s = math.cos(radians), math.sin(radians)
        m = np.identity(4)
        m[0, 0], m[0, 1] = c, -s
        m[1, 0], m[1, 1] = s, c
        return cls(m)

    @classmethod
    def shearing(
        cls,
        xy: float,
        xz: float,
        yx: float,
        yz: float,
        zx: float,
        zy: float,
    ) -> AffineTransform:
        """Shear each coordinate in proportion to the other two.

        For example ``xy`` moves x in proportion to y.
        """
        m = np.identity(4)
        m[0, 1], m[0, 2] = xy, xz
        m[1, 0], m[1, 2] = yx, yz
        m[2, 0], m[2, 1] = zx, zy
        return cls(m)

    # =========================================================================
    # Matrix operations
    # =========================================================================

    @property
    def matrix(self) -> npt.NDArray[np.float64]:
        return self._matrix

    def determinant(self) -> float:
        return float(np.linalg.det(self._matrix))

    def is_invertible(self) -> bool:
        """Return whether the linear 3x3 part has full rank.

        Rank is measured relative to the largest singular value, so uniformly
        tiny or huge scales stay invertible.
        """
        return int(np.linalg.matrix_rank(self._matrix[:3, :3])) == 3

    def inverse(self) -> AffineTransform:
        """Return the inverse transform.

        Raises:
            NonInvertibleTransform: If the matrix is singular.
        """
        if not self.is_invertible():
            raise NonInvertibleTransform(
                f"Transform is not invertible (determinant {self.determinant():.3e}):\n{self._matrix}"
            )
        try:
            inv = np.linalg.inv(self._matrix)
        except np.linalg.LinAlgError as e:
            raise NonInvertibleTransform(f"Transform is not invertible:\n{self._matrix}") from e
        if not np.all(np.isfinite(inv)):
            raise NonInvertibleTransform(f"Transform inverse overflows:\n{self._matrix}")
        # Remove round-off in the constant row so the result stays affine
        inv[3] = _AFFINE_BOTTOM_ROW
        return AffineTransform(inv)

    def transpose(self) -> AffineTransform:
        """Return the transposed matrix.

        The transpose of an affine matrix with translation is generally not
        affine, so the translation that lands in the bottom row is dropped.
        Only the linear 3x3 part is meaningful here; it is what the
        inverse-transpose normal mapping needs.
        """
        m = np.identity(4)
        m[:3, :3] = self._matrix[:3, :3].T
        return AffineTransform(m)

    def then(self, other: AffineTransform) -> AffineTransform:
        """Return a transform applying ``self`` first and ``other`` after it."""
        return other @ self

    def __matmul__(self, other: object) -> AffineTransform:
        if isinstance(other, AffineTransform):
            return AffineTransform(self._matrix @ other._matrix)
        return NotImplemented

    __mul__ = __matmul__

    # =========================================================================
    # Applying the transform
    # =========================================================================

    def transform_point(self, point: Point3) -> Point3:
        """Apply the transform to a point, including translation."""
        return Point3.from_array(self._matrix @ point.to_array())

    def transform_vector(self, vector: Vector3) -> Vector3:
        """Apply the transform to a direction vector, ignoring translation."""
        return Vector3.from_array(self._matrix @ vector.to_array())

    def allclose(self, other: AffineTransform, atol: float = EPSILON) -> bool:
        return bool(np.allclose(self._matrix, other._matrix, atol=atol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AffineTransform):
            return NotImplemented
        return self.allclose(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = ", ".join(str(list(map(float, row))) for row in self._matrix)
        return f"AffineTransform([{rows}])"

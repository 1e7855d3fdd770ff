import math
import numpy as np
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
from furnace.core.common_types import vec3f32, vec4f32
from furnace.core.errors import DegenerateQuaternion
from furnace.core.matrix import Matrix4

class Quaternion:
    """
    Rotation quaternion with components (r, i, j, k).

    `normalise` and `invert` mutate the quaternion in place; every other operation returns a new value.
    Use `copy()` first when the original must be kept.
    """
    __slots__ = ("_contents",)

    def __init__(self, r: float, i: float, j: float, k: float) -> None:
        self._contents: npt.NDArray[np.float32] = np.array([r, i, j, k], dtype=np.float32)

    @classmethod
    def identity(cls) -> "Quaternion":
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_axis_angle(cls, axis: vec3f32, angle: float) -> "Quaternion":
        axis_array: npt.NDArray[np.float32] = np.array(axis, dtype=np.float32)
        if not np.any(axis_array):
            raise DegenerateQuaternion(f"Rotation axis must be non-zero, got {axis}")
        # pyrr stores quaternions as (x, y, z, w); reorder to (r, i, j, k).
        x, y, z, w = rr.quaternion.create_from_axis_rotation(rr.vector.normalize(axis_array), angle)
        return cls(w, x, y, z)

    @property
    def r(self) -> float:
        return float(self._contents[0])

    @property
    def i(self) -> float:
        return float(self._contents[1])

    @property
    def j(self) -> float:
        return float(self._contents[2])

    @property
    def k(self) -> float:
        return float(self._contents[3])

    def components(self) -> vec4f32:
        return (self.r, self.i, self.j, self.k)

    def copy(self) -> "Quaternion":
        return Quaternion(*self.components())

    def norm(self) -> float:
        return float(np.sqrt(np.sum(self._contents.astype(np.float64) ** 2)))

    def normalise(self) -> None:
        # Scale every component by 1 / norm, in place.
        norm: float = self.norm()
        if norm == 0.0 or not math.isfinite(norm):
            raise DegenerateQuaternion(f"Cannot normalise quaternion {self!r} with norm {norm}")
        self._contents = (self._contents / norm).astype(np.float32)

    def invert(self) -> None:
        # Conjugation: negate (i, j, k) in place.
        # This is the true inverse only for a unit quaternion; normalise first (or divide by the squared norm)
        # when the quaternion may not be unit length.
        self._contents[1:4] *= -1.0

    def rotation_matrix(self) -> Matrix4:
        # Only a pure rotation (orthonormal, determinant +1) when the quaternion is unit length.
        # That precondition is not checked here.
        r, i, j, k = self.components()
        return Matrix4([
            [1.0 - 2.0 * (j * j + k * k),       2.0 * (i * j - k * r),       2.0 * (k * i + j * r), 0.0],
            [      2.0 * (i * j + k * r), 1.0 - 2.0 * (k * k + i * i),       2.0 * (j * k - i * r), 0.0],
            [      2.0 * (k * i - j * r),       2.0 * (j * k + i * r), 1.0 - 2.0 * (i * i + j * j), 0.0],
            [                        0.0,                         0.0,                         0.0, 1.0],
        ])

    def rotate(self, vector: vec3f32) -> npt.NDArray[np.float32]:
        return self.rotation_matrix().transform((vector[0], vector[1], vector[2], 0.0))[:3]

    def isclose(self, other: "Quaternion", atol: float = 1e-6) -> bool:
        return bool(np.allclose(self._contents, other._contents, atol=atol))

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        if not isinstance(other, Quaternion):
            return NotImplemented
        return multiply(self, other)

    def __repr__(self) -> str:
        return f"Quaternion(r={self.r:.4f}, i={self.i:.4f}, j={self.j:.4f}, k={self.k:.4f})"

def multiply(a: Quaternion, b: Quaternion) -> Quaternion:
    # Hamilton product a * b: the rotation that applies b first, then a.
    # (a * b).rotation_matrix() == a.rotation_matrix() @ b.rotation_matrix()
    ar, ai, aj, ak = a.components()
    br, bi, bj, bk = b.components()
    return Quaternion(
        ar * br - ai * bi - aj * bj - ak * bk,
        ar * bi + ai * br + aj * bk - ak * bj,
        ar * bj + aj * br + ak * bi - ai * bk,
        ar * bk + ak * br + ai * bj - aj * bi,
    )

import numpy as np
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
import typing
from furnace.core.common_types import vec3f32, vec4f32

class Matrix4:
    # Immutable 4x4 float32 transform.
    # Layout: the grid is stored row-major as [row][column], points are homogeneous column vectors
    # (p' = M @ p) and the translation sits in the last column. Chains therefore compose right-to-left:
    # `view @ body` applies the body transform first.
    # OpenGL reads uploaded uniform bytes column-major, so the shader sees the transpose of this grid
    # and multiplies `position * uTransform` (positions as row vectors) to get the same result.
    __slots__ = ("_contents",)

    def __init__(self, contents: npt.ArrayLike) -> None:
        grid: npt.NDArray[np.float32] = np.array(contents, dtype=np.float32)
        if grid.shape != (4, 4):
            raise ValueError(f"Matrix4 expects a 4x4 grid, got shape {grid.shape}")
        grid.setflags(write=False)
        self._contents: npt.NDArray[np.float32] = grid

    @classmethod
    def identity(cls) -> "Matrix4":
        return cls(np.identity(4, dtype=np.float32))

    @classmethod
    def from_translation(cls, translation: vec3f32) -> "Matrix4":
        # pyrr builds row-vector matrices (translation in the bottom row); transpose into our layout.
        matrix_translation: rr.Matrix44 = rr.Matrix44.from_translation(np.array(translation, dtype=np.float32))
        return cls(np.asarray(matrix_translation).T)

    @classmethod
    def from_scale(cls, scale: float | vec3f32) -> "Matrix4":
        factors: npt.NDArray[np.float32] = np.broadcast_to(np.asarray(scale, dtype=np.float32), (3,))
        matrix_scale: rr.Matrix44 = rr.Matrix44.from_scale(factors)
        return cls(np.asarray(matrix_scale).T)

    def contents(self) -> npt.NDArray[np.float32]:
        # Read-only view; handed to the rendering backend as a uniform value.
        return self._contents

    def tobytes(self) -> bytes:
        return self._contents.tobytes()

    def transpose(self) -> "Matrix4":
        return Matrix4(self._contents.T)

    def determinant(self) -> float:
        return float(np.linalg.det(self._contents.astype(np.float64)))

    def transform(self, vector: vec4f32) -> npt.NDArray[np.float32]:
        return self._contents @ np.asarray(vector, dtype=np.float32)

    def transform_point(self, point: vec3f32) -> npt.NDArray[np.float32]:
        """
        Apply the matrix to a point (w = 1) and perform the perspective divide.
        """
        x, y, z, w = self.transform((point[0], point[1], point[2], 1.0))
        if w == 0.0:
            raise ZeroDivisionError(f"Point {point} maps to w = 0 (it lies on the camera plane)")
        return np.array([x / w, y / w, z / w], dtype=np.float32)

    def isclose(self, other: "Matrix4", atol: float = 1e-6) -> bool:
        return bool(np.allclose(self._contents, other._contents, atol=atol))

    def __matmul__(self, other: "Matrix4") -> "Matrix4":
        if not isinstance(other, Matrix4):
            return NotImplemented
        return multiply(self, other)

    def __repr__(self) -> str:
        rows: list[str] = ["[" + ", ".join(f"{value: .4f}" for value in row) + "]" for row in self._contents]
        return "Matrix4(" + ", ".join(rows) + ")"

def multiply(a: Matrix4, b: Matrix4) -> Matrix4:
    # Standard row-by-column product: result[r][c] = sum_k a[r][k] * b[k][c].
    # Associative, not commutative.
    return Matrix4(a.contents() @ b.contents())

IDENTITY: typing.Final[Matrix4] = Matrix4.identity()

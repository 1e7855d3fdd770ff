import enum
import typing
import numpy as np
import numpy.typing as npt
from furnace.core.common_types import vec3f32
from furnace.core.errors import MeshIndexOutOfRange

# Indices are uploaded as 16-bit unsigned integers.
MAX_INDEX: typing.Final[int] = np.iinfo(np.uint16).max

class PrimitiveKind(enum.Enum):
    # How the index list is assembled into triangles.
    TRIANGLE_STRIP = "triangle_strip"
    TRIANGLES = "triangles"

class Mesh:
    # Immutable geometry template: homogeneous vertex positions plus a draw order.
    # One Mesh is shared by reference between every Atom drawn with that shape; it is never copied per atom.
    def __init__(self, vertices: typing.Sequence[vec3f32], primitive: PrimitiveKind, indices: typing.Sequence[int], name: str = "mesh") -> None:
        positions: npt.NDArray[np.float32] = np.asarray(vertices, dtype=np.float32) if len(vertices) else np.zeros((0, 3), dtype=np.float32)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError(f"Mesh '{name}' vertices must be 3-component positions")

        given_indices: npt.NDArray[typing.Any] = np.asarray(indices)
        if given_indices.size > 0 and not np.issubdtype(given_indices.dtype, np.integer):
            raise ValueError(f"Mesh '{name}' indices must be integers, got {given_indices.dtype}")
        draw_order: npt.NDArray[np.int64] = given_indices.astype(np.int64).reshape(-1)
        vertex_count: int = len(positions)
        bad: npt.NDArray[np.int64] = draw_order[(draw_order < 0) | (draw_order >= vertex_count) | (draw_order > MAX_INDEX)]
        if len(bad) > 0:
            raise MeshIndexOutOfRange(f"Mesh '{name}' has {vertex_count} vertices but references index {int(bad[0])}")

        # Promote to homogeneous coordinates (x, y, z, 1).
        homogeneous: npt.NDArray[np.float32] = np.hstack([positions, np.ones((vertex_count, 1), dtype=np.float32)])
        homogeneous.setflags(write=False)
        draw_order_u16: npt.NDArray[np.uint16] = draw_order.astype(np.uint16)
        draw_order_u16.setflags(write=False)

        self._name: str = name
        self._primitive: PrimitiveKind = PrimitiveKind(primitive)
        self._vertices: npt.NDArray[np.float32] = homogeneous
        self._indices: npt.NDArray[np.uint16] = draw_order_u16
        pass

    @property
    def name(self) -> str:
        return self._name

    @property
    def primitive(self) -> PrimitiveKind:
        return self._primitive

    @property
    def vertices(self) -> npt.NDArray[np.float32]:
        return self._vertices

    @property
    def indices(self) -> npt.NDArray[np.uint16]:
        return self._indices

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    @property
    def index_count(self) -> int:
        return len(self._indices)

    def __repr__(self) -> str:
        return f"Mesh(name={self._name!r}, primitive={self._primitive.name}, vertices={self.vertex_count}, indices={self.index_count})"

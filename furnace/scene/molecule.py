import math
import typing
from furnace.core.common_types import vec3f32
from furnace.core.errors import InvalidAtomSize
from furnace.core.matrix import Matrix4
from furnace.core.quaternion import Quaternion
from furnace.scene.mesh import Mesh

class Atom:
    # One placed instance of a shared Mesh: the fundamental unit of the viewer.
    # The body matrix maps mesh-local coordinates to world space and is computed once, here.
    # Without an orientation it is exactly diag(size, size, size, 1) with the position in the last column.
    __slots__ = ("_mesh", "_position", "_size", "_color", "_orientation", "_body_matrix")

    def __init__(self, mesh: Mesh, position: vec3f32, size: float, color: vec3f32 | None = None, orientation: Quaternion | None = None) -> None:
        if not math.isfinite(size) or size <= 0.0:
            raise InvalidAtomSize(f"Atom size must be positive and finite, got {size}")

        self._mesh: Mesh = mesh
        self._position: vec3f32 = (float(position[0]), float(position[1]), float(position[2]))
        self._size: float = float(size)
        self._color: vec3f32 | None = None if color is None else (float(color[0]), float(color[1]), float(color[2]))
        # Stored as an independent copy: Quaternion.normalise / invert mutate in place.
        self._orientation: Quaternion | None = None if orientation is None else orientation.copy()

        # Scale, then rotate, then translate.
        matrix_translation: Matrix4 = Matrix4.from_translation(self._position)
        matrix_scale: Matrix4 = Matrix4.from_scale(self._size)
        if self._orientation is None:
            self._body_matrix: Matrix4 = matrix_translation @ matrix_scale
        else:
            matrix_rotation: Matrix4 = self._orientation.rotation_matrix()
            self._body_matrix = matrix_translation @ matrix_rotation @ matrix_scale
        pass

    @property
    def mesh(self) -> Mesh:
        return self._mesh

    @property
    def position(self) -> vec3f32:
        return self._position

    @property
    def size(self) -> float:
        return self._size

    @property
    def color(self) -> vec3f32 | None:
        return self._color

    @property
    def orientation(self) -> Quaternion | None:
        return None if self._orientation is None else self._orientation.copy()

    @property
    def body_matrix(self) -> Matrix4:
        return self._body_matrix

    def __repr__(self) -> str:
        return f"Atom(mesh={self._mesh.name!r}, position={self._position}, size={self._size}, color={self._color})"

class Molecule:
    # Ordered collection of atoms: one scene. Insertion order is draw order.
    # Built incrementally during setup, read-only during the render pass.
    def __init__(self, name: str = "molecule") -> None:
        self.name: str = name
        self._atoms: list[Atom] = []

    def add_atom(self, mesh: Mesh, position: vec3f32, size: float, color: vec3f32 | None = None, orientation: Quaternion | None = None) -> Atom:
        atom: Atom = Atom(mesh=mesh, position=position, size=size, color=color, orientation=orientation)
        self._atoms.append(atom)
        return atom

    def atoms(self) -> tuple[Atom, ...]:
        return tuple(self._atoms)

    def meshes(self) -> list[Mesh]:
        # Distinct meshes in order of first use; identity, not equality, decides what is "the same" mesh.
        seen: dict[int, Mesh] = {}
        for atom in self._atoms:
            seen.setdefault(id(atom.mesh), atom.mesh)
        return list(seen.values())

    def __len__(self) -> int:
        return len(self._atoms)

    def __iter__(self) -> typing.Iterator[Atom]:
        return iter(self._atoms)

    def __repr__(self) -> str:
        return f"Molecule(name={self.name!r}, atoms={len(self._atoms)})"

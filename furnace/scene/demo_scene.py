import typing
from furnace.core.common_types import vec3f32
from furnace.scene import primitives
from furnace.scene.mesh import Mesh
from furnace.scene.molecule import Molecule

# Dark2 palette
TURQUOISE: typing.Final[vec3f32] = ( 27.0 / 255.0, 158.0 / 255.0, 119.0 / 255.0)
ORANGE   : typing.Final[vec3f32] = (217.0 / 255.0,  95.0 / 255.0,   2.0 / 255.0)
BLUE     : typing.Final[vec3f32] = (117.0 / 255.0, 112.0 / 255.0, 179.0 / 255.0)
PINK     : typing.Final[vec3f32] = (231.0 / 255.0,  41.0 / 255.0, 138.0 / 255.0)
GREEN    : typing.Final[vec3f32] = (102.0 / 255.0, 166.0 / 255.0,  30.0 / 255.0)
YELLOW   : typing.Final[vec3f32] = (230.0 / 255.0, 171.0 / 255.0,   2.0 / 255.0)
BROWN    : typing.Final[vec3f32] = (166.0 / 255.0, 118.0 / 255.0,  29.0 / 255.0)
GREY     : typing.Final[vec3f32] = (102.0 / 255.0, 102.0 / 255.0, 102.0 / 255.0)

DARK2: typing.Final[tuple[vec3f32, ...]] = (TURQUOISE, ORANGE, BLUE, PINK, GREEN, YELLOW, BROWN, GREY)

ATOM_SIZE: typing.Final[float] = 0.2

def build_shapes() -> dict[str, Mesh]:
    return {
        "triangle": primitives.triangle(),
        "square": primitives.square(),
        "tetrahedron": primitives.tetrahedron(),
        "cube": primitives.cube(),
        "icosahedron": primitives.icosahedron(),
    }

def build_demo_molecule(shapes: dict[str, Mesh] | None = None) -> Molecule:
    """
    The demo scene: nine small shapes arranged around the origin, five mesh templates shared between them.
    """
    shapes = shapes if shapes is not None else build_shapes()
    molecule: Molecule = Molecule(name="demo")
    molecule.add_atom(shapes["cube"],        position=( 0.0,  0.0,  0.0), size=ATOM_SIZE, color=ORANGE)
    molecule.add_atom(shapes["tetrahedron"], position=( 0.5,  0.5,  0.0), size=ATOM_SIZE, color=GREEN)
    molecule.add_atom(shapes["triangle"],    position=( 0.5, -0.5,  0.0), size=ATOM_SIZE, color=BLUE)
    molecule.add_atom(shapes["triangle"],    position=(-0.5,  0.5,  0.0), size=ATOM_SIZE, color=BLUE)
    molecule.add_atom(shapes["tetrahedron"], position=(-0.5, -0.5,  0.0), size=ATOM_SIZE, color=GREEN)
    molecule.add_atom(shapes["square"],      position=( 0.5,  0.0, -0.5), size=ATOM_SIZE, color=TURQUOISE)
    molecule.add_atom(shapes["square"],      position=(-0.5,  0.0, -0.5), size=ATOM_SIZE, color=TURQUOISE)
    molecule.add_atom(shapes["icosahedron"], position=( 0.0,  0.5,  0.5), size=ATOM_SIZE, color=PINK)
    molecule.add_atom(shapes["square"],      position=( 0.0, -0.5,  0.5), size=ATOM_SIZE, color=TURQUOISE)
    return molecule

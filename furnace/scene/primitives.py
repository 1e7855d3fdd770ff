import math
from furnace.scene.mesh import Mesh, PrimitiveKind

# Shape templates for the demo molecule. Every shape spans roughly [-1, 1] on each axis;
# atoms scale them down with their size.

def triangle() -> Mesh:
    return Mesh(
        vertices=[
            (-1.0, -1.0, 0.0),
            (-1.0,  1.0, 0.0),
            ( 1.0,  0.0, 0.0),
        ],
        primitive=PrimitiveKind.TRIANGLE_STRIP,
        indices=[0, 1, 2],
        name="triangle",
    )

def square() -> Mesh:
    return Mesh(
        vertices=[
            (-1.0, -1.0, 0.0),
            ( 1.0, -1.0, 0.0),
            (-1.0,  1.0, 0.0),
            ( 1.0,  1.0, 0.0),
        ],
        primitive=PrimitiveKind.TRIANGLE_STRIP,
        indices=[0, 1, 2, 3],
        name="square",
    )

def tetrahedron() -> Mesh:
    # A strip of four triangles wrapping round the four vertices.
    return Mesh(
        vertices=[
            (-1.0,  0.0, -0.7),
            ( 1.0,  0.0, -0.7),
            ( 0.0, -1.0,  0.7),
            ( 0.0,  1.0,  0.7),
        ],
        primitive=PrimitiveKind.TRIANGLE_STRIP,
        indices=[0, 1, 3, 2, 0, 1],
        name="tetrahedron",
    )

def cube() -> Mesh:
    # Triangle list, not a strip: strips cannot turn the corners.
    return Mesh(
        vertices=[
            (-1.0, -1.0, -1.0),
            ( 1.0, -1.0, -1.0),
            (-1.0,  1.0, -1.0),
            ( 1.0,  1.0, -1.0),
            (-1.0, -1.0,  1.0),
            ( 1.0, -1.0,  1.0),
            (-1.0,  1.0,  1.0),
            ( 1.0,  1.0,  1.0),
        ],
        primitive=PrimitiveKind.TRIANGLES,
        indices=[
            0, 2, 1, 3, 1, 2, # -z face
            2, 6, 3, 7, 3, 6, #  y face
            4, 5, 6, 7, 6, 5, #  z face
            0, 1, 4, 5, 4, 1, # -y face
            1, 3, 5, 7, 5, 3, #  x face
            0, 4, 2, 6, 2, 4, # -x face
        ],
        name="cube",
    )

def icosahedron() -> Mesh:
    # Three mutually perpendicular golden rectangles; phi here is the inverse golden ratio.
    phi: float = 2.0 / (1.0 + math.sqrt(5.0))
    return Mesh(
        vertices=[
            ( 0.0,  1.0,  phi),
            ( 0.0, -1.0,  phi),
            ( 0.0,  1.0, -phi),
            ( 0.0, -1.0, -phi),
            ( phi,  0.0,  1.0),
            ( phi,  0.0, -1.0),
            (-phi,  0.0,  1.0),
            (-phi,  0.0, -1.0),
            ( 1.0,  phi,  0.0),
            (-1.0,  phi,  0.0),
            ( 1.0, -phi,  0.0),
            (-1.0, -phi,  0.0),
        ],
        primitive=PrimitiveKind.TRIANGLES,
        indices=[
            0, 8, 2,
            0, 2, 9,
            1, 3, 10,
            1, 11, 3,
            4, 0, 6,
            4, 6, 1,
            5, 7, 2,
            5, 3, 7,
            8, 4, 10,
            8, 10, 5,
            9, 11, 6,
            9, 7, 11,
            0, 4, 8,
            0, 9, 6,
            1, 10, 4,
            1, 6, 11,
            2, 8, 5,
            2, 7, 9,
            3, 5, 10,
            3, 11, 7,
        ],
        name="icosahedron",
    )

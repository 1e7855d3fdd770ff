import dataclasses
import typing
from furnace.core.common_types import vec3f32
from furnace.core.matrix import Matrix4
from furnace.scene.camera import Camera
from furnace.scene.mesh import Mesh
from furnace.scene.molecule import Molecule

@dataclasses.dataclass(frozen=True)
class DrawSubmission:
    # Everything the backend needs to draw one atom in one frame.
    matrix: Matrix4          # view_matrix @ body_matrix
    color: vec3f32 | None    # None: the backend uses its shader-wide default color
    mesh: Mesh

class RenderBackend(typing.Protocol):
    def draw(self, submission: DrawSubmission) -> None: ...

def compose_draw_submissions(camera: Camera, molecule: Molecule) -> list[DrawSubmission]:
    view_matrix: Matrix4 = camera.view_matrix
    return [
        DrawSubmission(matrix=view_matrix @ atom.body_matrix, color=atom.color, mesh=atom.mesh)
        for atom in molecule.atoms()
    ]

def render_frame(camera: Camera, molecule: Molecule, backend: RenderBackend, eye: vec3f32 | None = None) -> int:
    # Move the camera first, then read its view matrix for every atom.
    if eye is not None:
        camera.set_position(eye)
    submissions: list[DrawSubmission] = compose_draw_submissions(camera=camera, molecule=molecule)
    for submission in submissions:
        backend.draw(submission)
    return len(submissions)

import logging
import moderngl as mgl
import typing
from furnace.core.common_types import vec3f32
from furnace.core.errors import BackendError
from furnace.scene.mesh import Mesh, PrimitiveKind
from furnace.scene.render_pass import DrawSubmission

logger = logging.getLogger(__name__)

PRIMITIVE_MODES: typing.Final[dict[PrimitiveKind, int]] = {
    PrimitiveKind.TRIANGLE_STRIP: mgl.TRIANGLE_STRIP,
    PrimitiveKind.TRIANGLES: mgl.TRIANGLES,
}

class MeshBuffers:
    # GPU-side copy of one Mesh: vertex buffer, index buffer and the vertex array binding them to the program.
    # Holding the Mesh keeps it alive for as long as the cache entry keyed by its id() exists.
    def __init__(self, mesh: Mesh, vbo: mgl.Buffer, ibo: mgl.Buffer, vao: mgl.VertexArray, mode: int) -> None:
        self.mesh: Mesh = mesh
        self.vbo: mgl.Buffer = vbo
        self.ibo: mgl.Buffer = ibo
        self.vao: mgl.VertexArray = vao
        self.mode: int = mode
        pass

    def release(self) -> None:
        self.vao.release()
        self.ibo.release()
        self.vbo.release()

class ModernGLBackend:
    # Rendering backend on a moderngl context.
    # Meshes are uploaded once and cached by identity, so every atom sharing a Mesh shares its buffers.
    def __init__(self, ctx: mgl.Context, program: mgl.Program, default_color: vec3f32 = (1.0, 1.0, 1.0)) -> None:
        self.ctx: mgl.Context = ctx
        self.program: mgl.Program = program
        self.default_color: vec3f32 = default_color
        self.mesh_buffers: dict[int, MeshBuffers] = {}
        self.draw_count: int = 0
        pass

    def upload(self, mesh: Mesh) -> MeshBuffers:
        cached: MeshBuffers | None = self.mesh_buffers.get(id(mesh))
        if cached is not None:
            return cached
        try:
            vbo: mgl.Buffer = self.ctx.buffer(data=mesh.vertices.tobytes())
            ibo: mgl.Buffer = self.ctx.buffer(data=mesh.indices.tobytes())
            vao: mgl.VertexArray = self.ctx.vertex_array(
                self.program,
                [
                    (vbo, "4f", "inVertexLocalPosition"),
                ],
                index_buffer=ibo,
                index_element_size=2,
            )
        except mgl.Error as error:
            raise BackendError(f"Failed to upload mesh {mesh.name!r}: {error}") from error

        buffers: MeshBuffers = MeshBuffers(mesh=mesh, vbo=vbo, ibo=ibo, vao=vao, mode=PRIMITIVE_MODES[mesh.primitive])
        self.mesh_buffers[id(mesh)] = buffers
        logger.info(f"Uploaded {mesh!r}")
        return buffers

    def upload_all(self, meshes: typing.Iterable[Mesh]) -> None:
        for mesh in meshes:
            self.upload(mesh)

    def draw(self, submission: DrawSubmission) -> None:
        buffers: MeshBuffers = self.upload(submission.mesh)
        color: vec3f32 = submission.color if submission.color is not None else self.default_color
        typing.cast(mgl.Uniform, self.program["uTransform"]).write(submission.matrix.tobytes())
        typing.cast(mgl.Uniform, self.program["uColor"]).value = color
        buffers.vao.render(mode=buffers.mode)
        self.draw_count += 1

    def release(self) -> None:
        for buffers in self.mesh_buffers.values():
            buffers.release()
        self.mesh_buffers.clear()
        logger.info("Released GPU mesh buffers")

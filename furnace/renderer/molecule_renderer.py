import argparse
import logging
import moderngl as mgl
import moderngl_window as mglw
import pathlib as pl
import typing
from furnace.core.common_types import CameraPlacement, vec2i32, vec3f32
from furnace.core.config import SHADERS_PATH, RenderSettings
from furnace.core.logging_config import setup_logging
from furnace.renderer.gpu_backend import ModernGLBackend
from furnace.renderer.shader_compiler import compile_program
from furnace.scene.camera import Camera, orbit_point
from furnace.scene.demo_scene import build_demo_molecule
from furnace.scene.molecule import Molecule
from furnace.scene.render_pass import render_frame

logger = logging.getLogger(__name__)

class MoleculeRenderer(mglw.WindowConfig): # type: ignore[name-defined, misc]
    # Window + frame loop for the molecule viewer.
    # 1. Setup: compile the atom shader, build the demo molecule, upload each mesh template once, build the camera.
    # 2. Every frame: move the camera one step round its orbit, clear, and submit one draw per atom.
    gl_version: vec2i32 = (3, 3)
    title: str = "Furnace: Molecular Visualisation"
    window_size: vec2i32 = (800, 600)
    aspect_ratio: float | None = None # the camera derives its own aspect from the framebuffer size
    resizable: bool = False
    resource_dir: pl.Path = SHADERS_PATH

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        RenderSettings.add_arguments(parser)

    def __init__(self, **kwargs: dict[str, typing.Any]) -> None:
        super().__init__(**kwargs)

        self.settings: RenderSettings = RenderSettings.from_arguments(self.argv)
        setup_logging(level=self.settings.log_level, log_file=self.settings.log_file)
        self.frame_index: int = 0

        # -----------------------------
        # 1. Shader Program
        # -----------------------------
        self.program_atoms: mgl.Program = compile_program(
            self.ctx,
            vertex_shader_path=self.resource_dir / "atom_vs.glsl",
            fragment_shader_path=self.resource_dir / "atom_fs.glsl",
        )

        # -----------------------------
        # 2. Scene
        # -----------------------------
        self.molecule: Molecule = build_demo_molecule()
        self.backend: ModernGLBackend = ModernGLBackend(self.ctx, self.program_atoms, default_color=self.settings.default_color)
        self.backend.upload_all(self.molecule.meshes())
        logger.info(f"Scene ready: {self.molecule!r} using {len(self.molecule.meshes())} mesh templates")

        # -----------------------------
        # 3. Draw State
        # -----------------------------
        self.ctx.enable(mgl.DEPTH_TEST)
        if self.settings.cull_back_faces:
            # Counter-clockwise faces are the back faces of the shape templates
            self.ctx.enable(mgl.CULL_FACE)
            self.ctx.front_face = "cw"
            self.ctx.cull_face = "back"

        # -----------------------------
        # 4. Camera
        # -----------------------------
        placement: CameraPlacement = self.settings.camera_placement()
        self.camera: Camera = Camera(
            framebuffer_size=self.wnd.buffer_size,
            position=placement["position"],
            focus=placement["focus"],
            field_of_view=self.settings.field_of_view,
            near_plane=self.settings.near_plane,
            far_plane=self.settings.far_plane,
            depth_range=self.settings.depth_range,
        )
        pass

    def next_eye_position(self) -> vec3f32:
        angle: float = self.frame_index * self.settings.spin_rate
        return orbit_point(focus=self.camera.focus, radius=self.settings.orbit_radius, angle=angle)

    def on_render(self, time: float, frame_time: float) -> None:
        self.ctx.clear(*self.settings.clear_color, depth=1.0)
        render_frame(camera=self.camera, molecule=self.molecule, backend=self.backend, eye=self.next_eye_position())
        self.frame_index += 1
        pass

    def on_close(self) -> None:
        logger.info(f"Closing after {self.frame_index} frames ({self.backend.draw_count} draws)")
        self.backend.release()
        self.program_atoms.release()
        pass

def main() -> None:
    mglw.run_window_config(MoleculeRenderer)

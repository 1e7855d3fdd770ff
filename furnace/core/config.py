"""
Configuration & Path Management
===============================
Central registry for the renderer's tunable settings and resource paths.

Window-level settings (title, size, GL version) stay as class attributes on the
moderngl-window `WindowConfig`, the way moderngl-window expects them. Everything
the scene and camera need lives in `RenderSettings`, which can be overridden from
the command line through `WindowConfig.add_arguments`.
"""
import argparse
import dataclasses
import logging
import pathlib as pl
from furnace.core.common_types import CameraPlacement, DepthRange, vec3f32, vec4f32

PACKAGE_PATH: pl.Path = pl.Path(__file__).parent.parent.resolve(strict=False)
SHADERS_PATH: pl.Path = PACKAGE_PATH / "shaders"

@dataclasses.dataclass(frozen=True)
class RenderSettings:
    """Camera, animation and draw-state settings. Defaults give the spinning demo view."""
    camera_position: vec3f32 = (0.0, 0.0, 2.0)
    camera_focus: vec3f32 = (0.0, 0.0, 0.0)
    field_of_view: float = 90.0    # degrees
    near_plane: float = 1.0
    far_plane: float = 10.0
    depth_range: DepthRange = DepthRange.NEGATIVE_ONE_TO_ONE
    spin_rate: float = 0.001       # radians per frame
    orbit_radius: float = 2.0
    clear_color: vec4f32 = (0.93, 0.91, 0.835, 1.0)
    default_color: vec3f32 = (1.0, 1.0, 1.0) # used for atoms without their own color
    cull_back_faces: bool = True
    log_level: int = logging.INFO
    log_file: pl.Path | None = None

    def camera_placement(self) -> CameraPlacement:
        return {"position": self.camera_position, "focus": self.camera_focus}

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        defaults: RenderSettings = cls()
        parser.add_argument("--fov", type=float, default=defaults.field_of_view, help="Field of view in degrees")
        parser.add_argument("--near", type=float, default=defaults.near_plane, help="Near clipping plane distance")
        parser.add_argument("--far", type=float, default=defaults.far_plane, help="Far clipping plane distance")
        parser.add_argument("--spin-rate", type=float, default=defaults.spin_rate, help="Camera orbit speed in radians per frame")
        parser.add_argument("--orbit-radius", type=float, default=defaults.orbit_radius, help="Camera distance from the focus while orbiting")
        parser.add_argument(
            "--depth-range",
            choices=[depth_range.value for depth_range in DepthRange],
            default=defaults.depth_range.value,
            help="Clip-space depth convention of the projection matrix",
        )
        parser.add_argument("--no-culling", action="store_true", help="Draw back faces too")
        parser.add_argument("--log-level", default=logging.getLevelName(defaults.log_level), help="DEBUG, INFO, WARNING, ...")
        parser.add_argument("--log-file", type=pl.Path, default=None, help="Also write logs to this file")

    @classmethod
    def from_arguments(cls, arguments: argparse.Namespace | None) -> "RenderSettings":
        # moderngl-window leaves `argv` as None when the config class is created outside run_window_config
        if arguments is None:
            return cls()
        defaults: RenderSettings = cls()
        log_file: str | pl.Path | None = getattr(arguments, "log_file", None)
        log_level: int | str = logging.getLevelName(str(getattr(arguments, "log_level", "INFO")).upper())
        return cls(
            field_of_view=getattr(arguments, "fov", defaults.field_of_view),
            near_plane=getattr(arguments, "near", defaults.near_plane),
            far_plane=getattr(arguments, "far", defaults.far_plane),
            spin_rate=getattr(arguments, "spin_rate", defaults.spin_rate),
            orbit_radius=getattr(arguments, "orbit_radius", defaults.orbit_radius),
            depth_range=DepthRange(getattr(arguments, "depth_range", defaults.depth_range.value)),
            cull_back_faces=not getattr(arguments, "no_culling", False),
            log_level=log_level if isinstance(log_level, int) else defaults.log_level,
            log_file=pl.Path(log_file) if log_file else None,
        )

import logging
import math
import numpy as np
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
from furnace.core.common_types import DepthRange, vec2f32, vec2i32, vec3f32
from furnace.core.errors import DegenerateOrbit, InvalidCameraPlanes, InvalidFieldOfView, InvalidViewport
from furnace.core.matrix import Matrix4

logger = logging.getLogger(__name__)

# Below this planar distance the eye is treated as sitting on the vertical axis through the focus.
_ORBIT_EPSILON: float = 1.0e-9

def aspect_factors(framebuffer_size: vec2i32) -> vec2f32:
    # The larger framebuffer dimension gets the aspect factor, the smaller one gets 1.0.
    width, height = framebuffer_size
    if width <= 0 or height <= 0:
        raise InvalidViewport(f"Framebuffer size must be positive, got {framebuffer_size}")
    if width > height:
        return (width / height, 1.0)
    return (1.0, height / width)

def perspective_matrix(
    framebuffer_size: vec2i32,
    field_of_view: float,
    near_plane: float,
    far_plane: float,
    depth_range: DepthRange = DepthRange.NEGATIVE_ONE_TO_ONE,
) -> Matrix4:
    """
    Perspective projection for a view space that looks along +z.

    NEGATIVE_ONE_TO_ONE maps the near plane to -1 and the far plane to +1 (OpenGL clip space).
    ZERO_TO_ONE maps them to 0 and 1.
    In both cases w_clip = z_view, so anything behind the eye ends up with negative w and is clipped.
    """
    if not 0.0 < field_of_view < 180.0:
        raise InvalidFieldOfView(f"Field of view must be in (0, 180) degrees, got {field_of_view}")
    if not (math.isfinite(near_plane) and math.isfinite(far_plane)):
        raise InvalidCameraPlanes(f"Clip planes must be finite, got near={near_plane}, far={far_plane}")
    if near_plane <= 0.0 or near_plane >= far_plane:
        raise InvalidCameraPlanes(f"Need 0 < near < far, got near={near_plane}, far={far_plane}")

    aspect_x, aspect_y = aspect_factors(framebuffer_size)
    s: float = 1.0 / math.tan(field_of_view * math.pi / 360.0)
    n: float = near_plane
    f: float = far_plane

    if depth_range is DepthRange.NEGATIVE_ONE_TO_ONE:
        depth_scale: float = (f + n) / (f - n)
        depth_offset: float = 2.0 * f * n / (n - f)
    else:
        depth_scale = f / (f - n)
        depth_offset = f * n / (n - f)

    return Matrix4([
        [s / aspect_x, 0.0         , 0.0        , 0.0         ],
        [0.0         , s / aspect_y, 0.0        , 0.0         ],
        [0.0         , 0.0         , depth_scale, depth_offset],
        [0.0         , 0.0         , 1.0        , 0.0         ],
    ])

def orbit_point(focus: vec3f32, radius: float, angle: float, height: float = 0.0) -> vec3f32:
    # Eye position on a horizontal circle of `radius` around `focus`, `angle` radians from the +x axis.
    return (
        focus[0] + radius * math.cos(angle),
        focus[1] + height,
        focus[2] + radius * math.sin(angle),
    )

class Camera:
    # Perspective camera orbiting a focal point.
    # The eye-to-focus direction is decomposed into an orbital angle (about the world y axis) and an
    # azimuthal / elevation angle (about the camera x axis). Those two rotations plus a translation that
    # moves the eye to the origin give the camera matrix; after it the focus lies on the +z axis.
    # States: constructed cameras are always Active; set_position / set_focus keep them Active.
    def __init__(
        self,
        framebuffer_size: vec2i32,
        position: vec3f32,
        focus: vec3f32,
        field_of_view: float = 90.0,
        near_plane: float = 1.0,
        far_plane: float = 10.0,
        depth_range: DepthRange = DepthRange.NEGATIVE_ONE_TO_ONE,
    ) -> None:
        self._framebuffer_size: vec2i32 = (int(framebuffer_size[0]), int(framebuffer_size[1]))
        self._field_of_view: float = float(field_of_view)
        self._near_plane: float = float(near_plane)
        self._far_plane: float = float(far_plane)
        self._depth_range: DepthRange = depth_range

        # The projection only depends on aspect ratio, fov and clip planes: computed once, never refreshed.
        self._perspective_matrix: Matrix4 = perspective_matrix(
            framebuffer_size=self._framebuffer_size,
            field_of_view=self._field_of_view,
            near_plane=self._near_plane,
            far_plane=self._far_plane,
            depth_range=self._depth_range,
        )

        self._position: npt.NDArray[np.float64] = np.array(position, dtype=np.float64)
        self._focus: npt.NDArray[np.float64] = np.array(focus, dtype=np.float64)
        self._camera_matrix: Matrix4 = self._orbit_matrix(self._position, self._focus)
        self._view_matrix: Matrix4 = self._perspective_matrix @ self._camera_matrix
        pass

    @staticmethod
    def _orbit_matrix(position: npt.NDArray[np.float64], focus: npt.NDArray[np.float64]) -> Matrix4:
        direction: npt.NDArray[np.float64] = focus - position
        if not np.all(np.isfinite(direction)):
            raise DegenerateOrbit(f"Camera eye {tuple(position)} and focus {tuple(focus)} must be finite")
        x, y, z = (float(component) for component in direction)

        length: float = float(rr.vector.length(direction))
        planar_length: float = math.sqrt(x * x + z * z)
        if length <= _ORBIT_EPSILON:
            raise DegenerateOrbit(f"Camera eye {tuple(position)} coincides with its focus")
        if planar_length <= _ORBIT_EPSILON:
            raise DegenerateOrbit(f"Camera eye {tuple(position)} lies on the vertical axis through the focus {tuple(focus)}")

        # theta is the orbital angle
        cos_theta: float = z / planar_length
        sin_theta: float = x / planar_length
        orbital_matrix: Matrix4 = Matrix4([
            [ cos_theta, 0.0, -sin_theta, 0.0],
            [ 0.0      , 1.0,  0.0      , 0.0],
            [ sin_theta, 0.0,  cos_theta, 0.0],
            [ 0.0      , 0.0,  0.0      , 1.0],
        ])

        # phi is the azimuthal (elevation) angle
        cos_phi: float = planar_length / length
        sin_phi: float = y / length
        azimuthal_matrix: Matrix4 = Matrix4([
            [1.0, 0.0    ,  0.0    , 0.0],
            [0.0, cos_phi, -sin_phi, 0.0],
            [0.0, sin_phi,  cos_phi, 0.0],
            [0.0, 0.0    ,  0.0    , 1.0],
        ])

        translation_matrix: Matrix4 = Matrix4.from_translation((-position[0], -position[1], -position[2]))
        return azimuthal_matrix @ orbital_matrix @ translation_matrix

    def _update(self, position: npt.NDArray[np.float64], focus: npt.NDArray[np.float64]) -> None:
        # Everything is computed before any state is assigned, so a degenerate orbit leaves the camera unchanged.
        camera_matrix: Matrix4 = self._orbit_matrix(position, focus)
        self._position = position
        self._focus = focus
        self._camera_matrix = camera_matrix
        self._view_matrix = self._perspective_matrix @ camera_matrix
        logger.debug(f"Camera moved: eye={tuple(position)} focus={tuple(focus)}")

    def set_position(self, position: vec3f32) -> None:
        self._update(np.array(position, dtype=np.float64), self._focus)

    reposition = set_position

    def set_focus(self, focus: vec3f32) -> None:
        self._update(self._position, np.array(focus, dtype=np.float64))

    @property
    def position(self) -> vec3f32:
        return (float(self._position[0]), float(self._position[1]), float(self._position[2]))

    @property
    def focus(self) -> vec3f32:
        return (float(self._focus[0]), float(self._focus[1]), float(self._focus[2]))

    @property
    def framebuffer_size(self) -> vec2i32:
        return self._framebuffer_size

    @property
    def field_of_view(self) -> float:
        return self._field_of_view

    @property
    def near_plane(self) -> float:
        return self._near_plane

    @property
    def far_plane(self) -> float:
        return self._far_plane

    @property
    def depth_range(self) -> DepthRange:
        return self._depth_range

    @property
    def perspective_matrix(self) -> Matrix4:
        return self._perspective_matrix

    @property
    def camera_matrix(self) -> Matrix4:
        return self._camera_matrix

    @property
    def view_matrix(self) -> Matrix4:
        return self._view_matrix

    @property
    def orbital_angle(self) -> float:
        x, _, z = self._focus - self._position
        return math.atan2(x, z)

    @property
    def azimuthal_angle(self) -> float:
        x, y, z = self._focus - self._position
        return math.atan2(y, math.sqrt(x * x + z * z))

    def __repr__(self) -> str:
        return f"Camera(position={self.position}, focus={self.focus}, fov={self._field_of_view}, near={self._near_plane}, far={self._far_plane})"

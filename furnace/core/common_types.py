import enum
import typing

vec2i32: typing.TypeAlias = tuple[
    int,
    int,
]

vec2f32: typing.TypeAlias = tuple[
    float,
    float,
]

vec3f32: typing.TypeAlias = tuple[
    float,
    float,
    float,
]

vec4f32: typing.TypeAlias = tuple[
    float,
    float,
    float,
    float,
]

class CameraPlacement(typing.TypedDict):
    # The orbital part of a camera setup: where the eye sits and what it looks at.
    # RenderSettings hands one of these to the renderer when building its Camera.
    position: vec3f32
    focus: vec3f32

class DepthRange(enum.Enum):
    # Clip-space interval the near and far planes are mapped to by the perspective matrix.
    NEGATIVE_ONE_TO_ONE = "negative_one_to_one" # OpenGL: near -> -1, far -> +1
    ZERO_TO_ONE = "zero_to_one"                 # Direct3D / Vulkan style: near -> 0, far -> 1

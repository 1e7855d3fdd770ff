import logging
import moderngl as mgl
import pathlib as pl
import re
import typing
from furnace.core.errors import BackendError

logger = logging.getLogger(__name__)

# Match: #include "filename" (leading whitespace allowed)
INCLUDE_PATTERN: typing.Final[re.Pattern[str]] = re.compile(pattern=r'^\s*#include\s+"([^"]+)"', flags=re.MULTILINE)

def resolve_includes(source: str, base_path: pl.Path, _stack: tuple[pl.Path, ...] = ()) -> str:
    """
    Recursively resolves #include "filename" directives in GLSL source code.
    Standard GLSL has no #include, so the included file's text is pasted in place of the directive.
    Paths are relative to `base_path`. Missing files and include cycles raise BackendError.
    """
    def replace(match: re.Match[str]) -> str:
        filename: str = match.group(1)
        included_path: pl.Path = (base_path / filename).resolve(strict=False)

        if not included_path.exists():
            logger.warning(f"Included shader file not found: {included_path}")
            raise BackendError(f"Shader include not found: {included_path}")
        if included_path in _stack:
            raise BackendError(f"Circular shader include: {' -> '.join(str(path.name) for path in (*_stack, included_path))}")

        included_content: str = included_path.read_text(encoding="utf-8")
        # Nested includes resolve against the same base directory
        return resolve_includes(source=included_content, base_path=base_path, _stack=(*_stack, included_path))

    return INCLUDE_PATTERN.sub(replace, source)

def load_shader_source(path: pl.Path) -> str:
    if not path.exists():
        raise BackendError(f"Shader file not found: {path}")
    return resolve_includes(source=path.read_text(encoding="utf-8"), base_path=path.parent)

def compile_program(ctx: mgl.Context, vertex_shader_path: pl.Path, fragment_shader_path: pl.Path) -> mgl.Program:
    vertex_shader_code: str = load_shader_source(vertex_shader_path)
    fragment_shader_code: str = load_shader_source(fragment_shader_path)
    try:
        program: mgl.Program = ctx.program(
              vertex_shader=vertex_shader_code,
            fragment_shader=fragment_shader_code,
        )
    except mgl.Error as error:
        raise BackendError(f"Failed to compile {vertex_shader_path.name} / {fragment_shader_path.name}: {error}") from error
    logger.info(f"Compiled shader program from {vertex_shader_path.name} and {fragment_shader_path.name}")
    return program

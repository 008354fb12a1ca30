"""
Helper functions and classes for OpenGL setup and shader compilation.
"""

from __future__ import annotations
import logging
import OpenGL.GL as gl  # noqa: N811
from typing import Optional

logger = logging.getLogger(__name__)

FLAT_VERTEX_SHADER = """
#version 120
attribute vec2 aPos;
attribute vec3 aColor;
varying vec3 vColor;
void main() {
    gl_Position = vec4(aPos, 0.0, 1.0);
    vColor = aColor;
}
"""

FLAT_FRAGMENT_SHADER = """
#version 120
varying vec3 vColor;
void main() {
    gl_FragColor = vec4(vColor, 1.0);
}
"""


class ShaderProgram:
    """
    Encapsulates an OpenGL shader program (vertex + fragment).
    Handles compilation, linking, and provides convenience methods.
    """

    def __init__(
        self,
        vertex_source: Optional[str] = None,
        fragment_source: Optional[str] = None,
    ) -> None:
        if vertex_source is None or fragment_source is None:
            raise ValueError(
                "Vertex and fragment shader sources must be provided"
            )
        vs = self._compile_shader(vertex_source, gl.GL_VERTEX_SHADER)
        fs = self._compile_shader(fragment_source, gl.GL_FRAGMENT_SHADER)
        self.id = self._link_program(vs, fs)
        # Shaders are owned by the program once linked
        gl.glDeleteShader(vs)
        gl.glDeleteShader(fs)

    def _compile_shader(self, source: str, shader_type: int) -> int:
        shader = gl.glCreateShader(shader_type)
        gl.glShaderSource(shader, source)
        gl.glCompileShader(shader)
        status = gl.glGetShaderiv(shader, gl.GL_COMPILE_STATUS)
        if not status:
            log = gl.glGetShaderInfoLog(shader).decode()
            logger.error("Shader compile failed: %s", log)
            raise RuntimeError(f"Shader compile error: {log}")
        return shader

    def _link_program(self, vs: int, fs: int) -> int:
        prog = gl.glCreateProgram()
        gl.glAttachShader(prog, vs)
        gl.glAttachShader(prog, fs)
        gl.glLinkProgram(prog)
        status = gl.glGetProgramiv(prog, gl.GL_LINK_STATUS)
        if not status:
            log = gl.glGetProgramInfoLog(prog).decode()
            logger.error("Program link failed: %s", log)
            raise RuntimeError(f"Shader link error: {log}")
        return prog

    def use(self) -> None:
        gl.glUseProgram(self.id)

    def stop(self) -> None:
        gl.glUseProgram(0)

    def get_attrib(self, name: str) -> int:
        return gl.glGetAttribLocation(self.id, name)


def setup_opengl(width: int, height: int) -> None:
    """
    Configure OpenGL state for flat 2D drawing: full-window viewport and no
    depth testing, so later rectangles paint over earlier ones.
    """
    gl.glViewport(0, 0, width, height)
    gl.glDisable(gl.GL_DEPTH_TEST)
    gl.glDisable(gl.GL_BLEND)

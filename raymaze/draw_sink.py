"""
Drawing backends the renderer paints through. Each one only needs to fill
solid rectangles given in pixel coordinates (origin top-left, y down).
"""

from __future__ import annotations
import ctypes
import logging
from typing import List, Optional, Protocol

import numpy as np
import pygame
import OpenGL.GL as gl  # noqa: N811

from .config import Color
from .gl_resources import GLResourceManager
from .gl_utils import (
    FLAT_FRAGMENT_SHADER,
    FLAT_VERTEX_SHADER,
    ShaderProgram,
    setup_opengl,
)

logger = logging.getLogger(__name__)


class DrawSink(Protocol):
    def clear(self) -> None: ...

    def fill_rect(
        self, x: int, y: int, width: int, height: int, color: Color
    ) -> None: ...

    def present(self) -> None: ...


class SurfaceSink:
    """Fills rectangles on a pygame Surface (usually the display surface)."""

    def __init__(self, surface: pygame.Surface, flip: bool = True) -> None:
        self.surface = surface
        # Only the display surface can be flipped
        self.flip = flip

    def clear(self) -> None:
        self.surface.fill((0, 0, 0))

    def fill_rect(self, x: int, y: int, width: int, height: int, color: Color) -> None:
        self.surface.fill(color, pygame.Rect(x, y, width, height))

    def present(self) -> None:
        if self.flip:
            pygame.display.flip()


def rect_vertices(
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    screen_width: int,
    screen_height: int,
) -> np.ndarray:
    """
    Two triangles covering a pixel rectangle, as rows of (x, y, r, g, b) with
    positions in normalised device coordinates and color channels in 0..1.
    """
    x0 = x / screen_width * 2.0 - 1.0
    x1 = (x + width) / screen_width * 2.0 - 1.0
    # Pixel rows grow downwards, NDC y grows upwards
    y0 = 1.0 - y / screen_height * 2.0
    y1 = 1.0 - (y + height) / screen_height * 2.0
    r, g, b = (c / 255.0 for c in color)
    return np.array(
        [
            [x0, y0, r, g, b],
            [x0, y1, r, g, b],
            [x1, y1, r, g, b],
            [x1, y1, r, g, b],
            [x1, y0, r, g, b],
            [x0, y0, r, g, b],
        ],
        dtype=np.float32,
    )


def _delete_buffer(obj_id: int) -> None:
    gl.glDeleteBuffers(1, [obj_id])


class GLSink:
    """
    Batches rectangles into one vertex buffer per frame and draws them with a
    flat color shader. Needs a current OpenGL context (pygame.OPENGL window).
    """

    def __init__(
        self,
        screen_width: int,
        screen_height: int,
        res_mgr: Optional[GLResourceManager] = None,
    ) -> None:
        self.w = screen_width
        self.h = screen_height
        self._res = res_mgr or GLResourceManager()
        setup_opengl(self.w, self.h)
        self.shader = ShaderProgram(
            vertex_source=FLAT_VERTEX_SHADER, fragment_source=FLAT_FRAGMENT_SHADER
        )
        self._res.track(self.shader.id, gl.glDeleteProgram)
        self.pos_attr = self.shader.get_attrib("aPos")
        self.color_attr = self.shader.get_attrib("aColor")
        self.vbo = self._res.gen(lambda: gl.glGenBuffers(1), _delete_buffer)
        self._batch: List[np.ndarray] = []

    def clear(self) -> None:
        self._batch = []
        gl.glClearColor(0.0, 0.0, 0.0, 1.0)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT)

    def fill_rect(self, x: int, y: int, width: int, height: int, color: Color) -> None:
        self._batch.append(
            rect_vertices(x, y, width, height, color, self.w, self.h)
        )

    def present(self) -> None:
        if self._batch:
            self._draw(np.vstack(self._batch))
        self._batch = []
        pygame.display.flip()

    def _draw(self, verts: np.ndarray) -> None:
        self.shader.use()
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self.vbo)
        gl.glBufferData(gl.GL_ARRAY_BUFFER, verts.nbytes, verts, gl.GL_STREAM_DRAW)
        stride = verts.strides[0]
        gl.glEnableVertexAttribArray(self.pos_attr)
        gl.glVertexAttribPointer(
            self.pos_attr, 2, gl.GL_FLOAT, gl.GL_FALSE, stride, ctypes.c_void_p(0)
        )
        gl.glEnableVertexAttribArray(self.color_attr)
        gl.glVertexAttribPointer(
            self.color_attr, 3, gl.GL_FLOAT, gl.GL_FALSE, stride, ctypes.c_void_p(8)
        )
        gl.glDrawArrays(gl.GL_TRIANGLES, 0, len(verts))
        gl.glDisableVertexAttribArray(self.pos_attr)
        gl.glDisableVertexAttribArray(self.color_attr)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, 0)
        self.shader.stop()

    def shutdown(self) -> None:
        """Free GL objects; call while the context is still alive."""
        logger.debug("Releasing GL sink resources")
        self._res.shutdown()

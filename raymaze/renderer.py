"""
Column renderer: one ray per screen column, hit distance turned into a
wall slice height.
"""

from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING, Tuple

import numpy as np

from .intersection import cast_rays, wall_arrays
from .vector import Vector2

if TYPE_CHECKING:
    from .draw_sink import DrawSink
    from .world import Camera, World

logger = logging.getLogger(__name__)


class Projection:
    """
    Projection plane for one camera pose.

    The plane is the chord between the two field-of-view edge points one unit
    from the camera. It is split into screen_width equal pieces and each
    column's ray passes through the middle of its piece.
    """

    def __init__(self, camera: Camera) -> None:
        self.origin = camera.position
        self.screen_width = camera.screen_width
        self.screen_height = camera.screen_height
        half_fov = camera.horizontal_fov / 2.0
        self.edge_left = self.origin + Vector2.from_angle(camera.heading - half_fov)
        self.edge_right = self.origin + Vector2.from_angle(camera.heading + half_fov)
        self.plane_width = self.edge_left.distance_to(self.edge_right)
        # Perpendicular distance from the camera to the plane chord
        self.plane_depth = math.cos(half_fov)
        # Same construction in the vertical direction: (forward, up) edge points
        half_vfov = camera.vertical_fov / 2.0
        self.vertical_top = Vector2.from_angle(half_vfov)
        self.vertical_bottom = Vector2.from_angle(-half_vfov)
        self.vertical_plane_height = self.vertical_top.distance_to(
            self.vertical_bottom
        )

    def column_points(self) -> np.ndarray:
        """(screen_width, 2) array of per-column points on the plane."""
        fractions = (np.arange(self.screen_width) + 0.5) / self.screen_width
        left = np.array([self.edge_left.x, self.edge_left.y])
        right = np.array([self.edge_right.x, self.edge_right.y])
        return left + (right - left) * fractions[:, None]

    def column_rays(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Unit ray directions through the column points, and the distance from
        the camera to each point.
        """
        offsets = self.column_points() - np.array([self.origin.x, self.origin.y])
        lengths = np.hypot(offsets[:, 0], offsets[:, 1])
        return offsets / lengths[:, None], lengths

    def wall_span(self, depth):
        """
        Height of the vertical field of view at the given depth: the top edge
        ray is stretched until its forward component equals depth.
        """
        stretch = depth / self.vertical_top.x
        return (self.vertical_top.y - self.vertical_bottom.y) * stretch

    def slice_heights(
        self, distances: np.ndarray, ray_lengths: np.ndarray
    ) -> np.ndarray:
        """
        Half-height in pixels of the wall slice for each column, or NaN where
        nothing is hit or the span is degenerate (zero, negative or not finite).
        """
        depth = distances * self.plane_depth / ray_lengths
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            span = self.wall_span(depth)
            heights = self.screen_height * self.vertical_plane_height / span
        usable = np.isfinite(span) & (span > 0) & np.isfinite(heights)
        return np.where(usable, heights, np.nan)


class Renderer:
    """Draws a World through any DrawSink, one 1-pixel column per ray."""

    def __init__(self) -> None:
        self._walls = None
        self._seg_a = None
        self._seg_b = None

    def _wall_arrays(self, world: World):
        # Walls are fixed per session; repack only when a new tuple shows up
        if self._walls is not world.walls:
            self._seg_a, self._seg_b = wall_arrays(world.walls)
            self._walls = world.walls
        return self._seg_a, self._seg_b

    def cast(self, world: World) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Cast every column ray for the current camera.
        Returns (distances, wall_indices, half_heights), one entry per column.
        """
        projection = Projection(world.camera)
        directions, lengths = projection.column_rays()
        seg_a, seg_b = self._wall_arrays(world)
        distances, indices = cast_rays(world.camera.position, directions, seg_a, seg_b)
        heights = projection.slice_heights(distances, lengths)
        return distances, indices, heights

    def render(self, world: World, sink: DrawSink) -> None:
        """Paint sky and ground, then one wall slice per column that hits a wall."""
        cam = world.camera
        w, h = cam.screen_width, cam.screen_height
        sink.clear()
        sky_h = min(max(cam.horizon, 0), h)
        if sky_h > 0:
            sink.fill_rect(0, 0, w, sky_h, world.sky_color)
        if sky_h < h:
            sink.fill_rect(0, sky_h, w, h - sky_h, world.ground_color)

        distances, indices, heights = self.cast(world)
        skipped = 0
        for column in range(w):
            wall_index = indices[column]
            if wall_index < 0:
                continue
            half = heights[column]
            if not math.isfinite(half):
                skipped += 1
                continue
            top = max(int(round(cam.horizon - half)), 0)
            bottom = min(int(round(cam.horizon + half)), h)
            if bottom <= top:
                continue
            sink.fill_rect(
                column, top, 1, bottom - top, world.walls[wall_index].color
            )
        if skipped:
            logger.debug("Skipped %d degenerate wall columns", skipped)
        sink.present()

"""
Ray/segment intersection used by the renderer (rays) and by movement (segments).

Both entry points solve origin + t * direction == a + s * (b - a) with 2D cross
products. Parallel and collinear inputs (cross product exactly 0.0) count as
no intersection; there is no epsilon, so nearly parallel walls can still
report very distant hits.
"""

from __future__ import annotations
from typing import Optional, Sequence, Tuple

import numpy as np

from .vector import Vector2
from .walls import Wall


def _cross_terms(ox, oy, dx, dy, ax, ay, bx, by):
    """
    Return (denom, t_num, s_num) so that t = t_num / denom along the ray and
    s = s_num / denom along the segment. Works on floats or numpy arrays.
    """
    v1x = bx - ax
    v1y = by - ay
    wx = ax - ox
    wy = ay - oy
    denom = dx * v1y - dy * v1x
    t_num = wx * v1y - wy * v1x
    s_num = wx * dy - wy * dx
    return denom, t_num, s_num


def _intersect(
    origin: Vector2, direction: Vector2, a: Vector2, b: Vector2, bounded: bool
) -> Optional[float]:
    denom, t_num, s_num = _cross_terms(
        origin.x, origin.y, direction.x, direction.y, a.x, a.y, b.x, b.y
    )
    if denom == 0:
        return None
    t = t_num / denom
    s = s_num / denom
    if t < 0 or s < 0 or s > 1:
        return None
    if bounded and t > 1:
        return None
    return t


def ray_segment_intersection(
    origin: Vector2, direction: Vector2, a: Vector2, b: Vector2
) -> Optional[float]:
    """
    Distance along the half-infinite ray to segment [a, b], or None.
    The result is in units of ``direction``; pass a unit vector to get map units.
    """
    return _intersect(origin, direction, a, b, bounded=False)


def segment_segment_intersection(
    start: Vector2, displacement: Vector2, a: Vector2, b: Vector2
) -> Optional[float]:
    """
    Fraction (0..1) of the way along start -> start + displacement at which
    it crosses segment [a, b], or None.
    """
    return _intersect(start, displacement, a, b, bounded=True)


def nearest_wall(
    origin: Vector2, direction: Vector2, walls: Sequence[Wall]
) -> Optional[Tuple[float, Wall]]:
    """Closest wall hit by the ray; on ties the earliest wall in the sequence wins."""
    best: Optional[Tuple[float, Wall]] = None
    for wall in walls:
        t = ray_segment_intersection(origin, direction, wall.p0, wall.p1)
        if t is not None and (best is None or t < best[0]):
            best = (t, wall)
    return best


def wall_arrays(walls: Sequence[Wall]) -> Tuple[np.ndarray, np.ndarray]:
    """Pack wall endpoints into two (N, 2) float arrays for cast_rays."""
    seg_a = np.array([(w.p0.x, w.p0.y) for w in walls], dtype=np.float64)
    seg_b = np.array([(w.p1.x, w.p1.y) for w in walls], dtype=np.float64)
    return seg_a.reshape(-1, 2), seg_b.reshape(-1, 2)


def cast_rays(
    origin: Vector2,
    directions: np.ndarray,
    seg_a: np.ndarray,
    seg_b: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Nearest hit for many rays at once.
    directions: (R, 2) ray directions; seg_a, seg_b: (N, 2) segment endpoints.
    Returns (distances, indices): per ray the smallest hit distance (inf when
    nothing is hit) and the index of the wall hit (-1 when nothing is hit).
    Ties go to the lowest index, matching nearest_wall.
    """
    rays = directions.shape[0]
    if seg_a.shape[0] == 0:
        return np.full(rays, np.inf), np.full(rays, -1, dtype=np.intp)
    denom, t_num, s_num = _cross_terms(
        origin.x,
        origin.y,
        directions[:, 0:1],
        directions[:, 1:2],
        seg_a[None, :, 0],
        seg_a[None, :, 1],
        seg_b[None, :, 0],
        seg_b[None, :, 1],
    )
    with np.errstate(divide="ignore", invalid="ignore"):
        t = t_num / denom
        s = s_num / denom
    hit = (denom != 0) & (t >= 0) & (s >= 0) & (s <= 1)
    dist = np.where(hit, t, np.inf)
    indices = np.argmin(dist, axis=1)
    distances = dist[np.arange(rays), indices]
    indices = np.where(np.isfinite(distances), indices, -1)
    return distances, indices

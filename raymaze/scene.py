"""
Building a World at startup: from a generated maze or from a JSON scene file.

Scene file layout:
    {
        "walls": [{"x0": 0, "y0": 0, "x1": 1, "y1": 0, "color": [r, g, b]}, ...],
        "sky_color": [r, g, b],
        "ground_color": [r, g, b],
        "camera": {"x": .., "y": .., "theta": .., "h_fov": ..,
                   "width": .., "height": .., "horizon": ..}   # horizon optional
    }
"""

from __future__ import annotations
import json
import logging
import math
import numbers
from typing import Any, Mapping, Optional

from .config import DEFAULT_SETTINGS, Color, Settings
from .maze import Maze, RandomChoice
from .vector import Vector2
from .walls import Wall, maze_to_walls
from .world import Camera, World

logger = logging.getLogger(__name__)


class SceneError(RuntimeError):
    """Scene data is missing, malformed or out of range."""


def _field(data: Mapping[str, Any], key: str, where: str) -> Any:
    if not isinstance(data, Mapping):
        raise SceneError(f"{where} must be an object")
    if key not in data:
        raise SceneError(f"{where} is missing '{key}'")
    return data[key]


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise SceneError(f"{where} must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError:
        raise SceneError(f"{where} is out of range, got {value!r}")
    if not math.isfinite(number):
        raise SceneError(f"{where} must be finite, got {value!r}")
    return number


def _positive_int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise SceneError(f"{where} must be an integer, got {value!r}")
    if value <= 0:
        raise SceneError(f"{where} must be positive, got {value}")
    return int(value)


def parse_color(value: Any, where: str = "color") -> Color:
    """Validate an [r, g, b] list with 0-255 channels."""
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise SceneError(f"{where} must be a list of three channels, got {value!r}")
    channels = []
    for channel in value:
        if isinstance(channel, bool) or not isinstance(channel, numbers.Integral):
            raise SceneError(f"{where} channels must be integers, got {value!r}")
        if not 0 <= channel <= 255:
            raise SceneError(f"{where} channels must be within 0-255, got {value!r}")
        channels.append(int(channel))
    return (channels[0], channels[1], channels[2])


def parse_wall(data: Mapping[str, Any], index: int) -> Wall:
    where = f"walls[{index}]"
    coords = [
        _number(_field(data, key, where), f"{where}.{key}")
        for key in ("x0", "y0", "x1", "y1")
    ]
    color = parse_color(_field(data, "color", where), f"{where}.color")
    return Wall.from_coords(*coords, color=color)


def parse_camera(data: Mapping[str, Any]) -> Camera:
    where = "camera"
    x = _number(_field(data, "x", where), "camera.x")
    y = _number(_field(data, "y", where), "camera.y")
    theta = _number(_field(data, "theta", where), "camera.theta")
    h_fov = _number(_field(data, "h_fov", where), "camera.h_fov")
    if not 0 < h_fov < math.pi:
        raise SceneError(f"camera.h_fov must be within (0, pi), got {h_fov}")
    width = _positive_int(_field(data, "width", where), "camera.width")
    height = _positive_int(_field(data, "height", where), "camera.height")
    horizon = data.get("horizon")
    if horizon is not None:
        if isinstance(horizon, bool) or not isinstance(horizon, numbers.Integral):
            raise SceneError(f"camera.horizon must be an integer, got {horizon!r}")
        horizon = int(horizon)
    return Camera(
        position=Vector2(x, y),
        heading=theta,
        horizontal_fov=h_fov,
        screen_width=width,
        screen_height=height,
        horizon=horizon,
    )


def world_from_dict(
    data: Mapping[str, Any], settings: Settings = DEFAULT_SETTINGS
) -> World:
    """Validate decoded scene JSON and build the World it describes."""
    walls_data = _field(data, "walls", "scene")
    if not isinstance(walls_data, list):
        raise SceneError("scene.walls must be a list")
    walls = [parse_wall(w, i) for i, w in enumerate(walls_data)]
    camera = parse_camera(_field(data, "camera", "scene"))
    sky = parse_color(_field(data, "sky_color", "scene"), "sky_color")
    ground = parse_color(_field(data, "ground_color", "scene"), "ground_color")
    settings = settings.replace(
        screen_width=camera.screen_width,
        screen_height=camera.screen_height,
    )
    return World(walls, camera, sky_color=sky, ground_color=ground, settings=settings)


def load_scene(path: str, settings: Settings = DEFAULT_SETTINGS) -> World:
    """Read a JSON scene file. Raises SceneError on any problem."""
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise SceneError(f"Failed to load scene from {path}: {e}") from e
    world = world_from_dict(data, settings)
    logger.info("Loaded scene %s with %d walls", path, len(world.walls))
    return world


def world_from_maze(
    maze: Maze,
    settings: Settings = DEFAULT_SETTINGS,
    rng: Optional[RandomChoice] = None,
) -> World:
    """
    World whose walls are the closed sides of maze, with the camera in the
    middle of a random cell (cell (0, 0) when no rng is given).
    """
    scale = settings.maze_scale
    walls = maze_to_walls(maze, scale, settings.wall_color)
    start = rng.choice(maze.cells) if rng is not None else maze.cells[0]
    camera = Camera.from_settings(settings)
    camera.position = Vector2((start.x + 0.5) * scale, (start.y + 0.5) * scale)
    logger.info(
        "Built %dx%d maze world with %d walls, camera at cell (%d, %d)",
        maze.width,
        maze.height,
        len(walls),
        start.x,
        start.y,
    )
    return World(walls, camera, settings=settings)

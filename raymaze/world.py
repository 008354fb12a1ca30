from __future__ import annotations
import logging
from enum import Enum
from typing import Iterable, Optional, Tuple

from .config import (
    CAMERA_HEADING,
    CAMERA_X,
    CAMERA_Y,
    DEFAULT_SETTINGS,
    FOV,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    Color,
    Settings,
)
from .intersection import segment_segment_intersection
from .vector import Vector2
from .walls import Wall

logger = logging.getLogger(__name__)


class Command(Enum):
    """Discrete per-frame actions produced by the input layer."""

    TURN_LEFT = "turn_left"
    TURN_RIGHT = "turn_right"
    MOVE_FORWARD = "move_forward"
    HORIZON_UP = "horizon_up"
    HORIZON_DOWN = "horizon_down"


class Camera:
    """Viewer pose and screen geometry."""

    def __init__(
        self,
        position: Vector2 = Vector2(CAMERA_X, CAMERA_Y),
        heading: float = CAMERA_HEADING,
        horizontal_fov: float = FOV,
        screen_width: int = SCREEN_WIDTH,
        screen_height: int = SCREEN_HEIGHT,
        horizon: Optional[int] = None,
    ) -> None:
        """
        position: location in map units.
        heading: facing direction in radians.
        horizontal_fov: field of view across the screen width, in radians.
        screen_width, screen_height: output size in pixels.
        horizon: eye-level row in pixels; defaults to the middle of the screen.
        """
        self.position = position
        self.heading = heading
        self.horizontal_fov = horizontal_fov
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.horizon = screen_height // 2 if horizon is None else horizon

    @classmethod
    def from_settings(cls, settings: Settings) -> Camera:
        return cls(
            position=Vector2(settings.camera_x, settings.camera_y),
            heading=settings.camera_heading,
            horizontal_fov=settings.fov,
            screen_width=settings.screen_width,
            screen_height=settings.screen_height,
            horizon=settings.horizon,
        )

    @property
    def vertical_fov(self) -> float:
        return self.horizontal_fov * self.screen_height / self.screen_width

    def direction(self) -> Vector2:
        """Unit vector the camera faces."""
        return Vector2.from_angle(self.heading)

    def rotate(self, delta: float) -> None:
        """Turn by delta radians; the heading is not wrapped."""
        self.heading += delta

    def __repr__(self) -> str:
        return (
            f"<Camera x={self.position.x:.2f} y={self.position.y:.2f} "
            f"heading={self.heading:.2f} horizon={self.horizon}>"
        )


class World:
    """Walls, background colors and the single camera of a play session."""

    def __init__(
        self,
        walls: Iterable[Wall],
        camera: Optional[Camera] = None,
        sky_color: Optional[Color] = None,
        ground_color: Optional[Color] = None,
        settings: Settings = DEFAULT_SETTINGS,
    ) -> None:
        self.settings = settings
        self.walls: Tuple[Wall, ...] = tuple(walls)
        self.camera = camera or Camera.from_settings(settings)
        self.sky_color = sky_color if sky_color is not None else settings.sky_color
        self.ground_color = (
            ground_color if ground_color is not None else settings.ground_color
        )

    def is_move_blocked(self, start: Vector2, displacement: Vector2) -> bool:
        """True if the segment start -> start + displacement crosses any wall."""
        for wall in self.walls:
            if (
                segment_segment_intersection(start, displacement, wall.p0, wall.p1)
                is not None
            ):
                return True
        return False

    def move_forward(self) -> bool:
        """
        Step the camera forward by the configured speed unless a wall is in
        the way. A blocked step leaves the camera where it is.
        Returns True if the camera moved.
        """
        cam = self.camera
        step = Vector2.from_angle(cam.heading, self.settings.move_speed)
        if self.is_move_blocked(cam.position, step):
            logger.debug("Forward move blocked at %s", cam.position)
            return False
        cam.position = cam.position + step
        return True

    def turn(self, delta: float) -> None:
        self.camera.rotate(delta)

    def adjust_horizon(self, delta: int) -> None:
        """Shift the eye-level line. Not clamped: it may leave the screen."""
        self.camera.horizon += delta

    def apply(self, commands: Iterable[Command]) -> None:
        """Apply one frame's worth of commands: turning, then horizon, then movement."""
        commands = set(commands)
        s = self.settings
        if Command.TURN_LEFT in commands:
            self.turn(-s.rot_step)
        if Command.TURN_RIGHT in commands:
            self.turn(s.rot_step)
        if Command.HORIZON_UP in commands:
            self.adjust_horizon(-s.horizon_step)
        if Command.HORIZON_DOWN in commands:
            self.adjust_horizon(s.horizon_step)
        if Command.MOVE_FORWARD in commands:
            self.move_forward()

    def __repr__(self) -> str:
        return f"<World walls={len(self.walls)} camera={self.camera!r}>"


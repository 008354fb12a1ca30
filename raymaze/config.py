from dataclasses import dataclass, replace
from typing import Tuple

Color = Tuple[int, int, int]

# Screen settings
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
FPS = 60

# Camera settings
# Starting position in map units (centre of the top-left cell)
CAMERA_X = 0.5
CAMERA_Y = 0.5
# Initial heading in radians (0 = +X axis, increasing clockwise on screen)
CAMERA_HEADING = 1.0
# Horizontal field of view in radians
FOV = 1.0
# Eye-level line in pixels from the top of the screen
HORIZON = SCREEN_HEIGHT // 2

# Movement settings
# Forward step in map units per tick
MOVE_SPEED = 0.025
# Rotation step in radians per tick
ROT_STEP = 0.04
# Horizon shift in pixels per tick
HORIZON_STEP = 4

# Maze settings
MAZE_HEIGHT = 10
MAZE_WIDTH = 10
# Length of one cell edge in map units
MAZE_SCALE = 1.0

# Colors
SKY_COLOR: Color = (135, 206, 235)
GROUND_COLOR: Color = (60, 60, 60)
WALL_COLOR: Color = (100, 200, 150)

WINDOW_TITLE = "raymaze"


@dataclass(frozen=True)
class Settings:
    """Session configuration, built once at startup and handed to the World."""

    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT
    fps: int = FPS
    camera_x: float = CAMERA_X
    camera_y: float = CAMERA_Y
    camera_heading: float = CAMERA_HEADING
    fov: float = FOV
    horizon: int = HORIZON
    move_speed: float = MOVE_SPEED
    rot_step: float = ROT_STEP
    horizon_step: int = HORIZON_STEP
    maze_height: int = MAZE_HEIGHT
    maze_width: int = MAZE_WIDTH
    maze_scale: float = MAZE_SCALE
    sky_color: Color = SKY_COLOR
    ground_color: Color = GROUND_COLOR
    wall_color: Color = WALL_COLOR
    use_opengl: bool = False

    def replace(self, **changes) -> "Settings":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    @property
    def vertical_fov(self) -> float:
        return self.fov * self.screen_height / self.screen_width


DEFAULT_SETTINGS = Settings()

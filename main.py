import argparse
import logging
import math
import random
import sys

from raymaze.config import DEFAULT_SETTINGS
from raymaze.maze import Maze
from raymaze.scene import SceneError, load_scene, world_from_maze

logger = logging.getLogger("raymaze")


def parse_size(text):
    """Parse 'HxW' (e.g. '10x12') into (height, width)."""
    try:
        h, w = (int(part) for part in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"size must look like HxW, got {text!r}")
    if h <= 0 or w <= 0:
        raise argparse.ArgumentTypeError(f"size must be positive, got {text!r}")
    return h, w


def parse_scale(text):
    """Parse a positive, finite cell edge length."""
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"scale must be a number, got {text!r}")
    if not math.isfinite(value) or value <= 0:
        raise argparse.ArgumentTypeError(f"scale must be positive, got {text!r}")
    return value


def build_parser():
    parser = argparse.ArgumentParser(
        description="Walk through a random maze rendered with raycasting."
    )
    parser.add_argument(
        "scene",
        nargs="?",
        help="JSON scene file; a random maze is generated when omitted",
    )
    parser.add_argument(
        "--size",
        type=parse_size,
        default=(DEFAULT_SETTINGS.maze_height, DEFAULT_SETTINGS.maze_width),
        help="maze size as HxW (default: %(default)s)",
    )
    parser.add_argument("--seed", type=int, help="seed for maze generation")
    parser.add_argument(
        "--scale",
        type=parse_scale,
        default=DEFAULT_SETTINGS.maze_scale,
        help="cell edge length in map units",
    )
    parser.add_argument(
        "--opengl",
        action="store_true",
        help="draw through OpenGL instead of pygame surfaces",
    )
    parser.add_argument(
        "--dump-maze",
        action="store_true",
        help="print the generated maze as text and exit",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    height, width = args.size
    settings = DEFAULT_SETTINGS.replace(
        maze_height=height,
        maze_width=width,
        maze_scale=args.scale,
        use_opengl=args.opengl,
    )
    rng = random.Random(args.seed)

    if args.scene:
        try:
            world = load_scene(args.scene, settings)
        except SceneError as e:
            logger.error("%s", e)
            return 1
    else:
        maze = Maze.generate(height, width, rng)
        if args.dump_maze:
            sys.stdout.write(maze.render_text())
            return 0
        world = world_from_maze(maze, settings, rng)

    # Imported late so --dump-maze needs neither pygame nor OpenGL
    from raymaze.game import Game

    Game(world).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Input handling abstraction to decouple Pygame input from world commands.
"""

from __future__ import annotations
import pygame
from typing import Dict, Sequence, Set, Tuple

from .world import Command

# Held keys -> command; either key of a pair triggers it
KEY_BINDINGS: Dict[Command, Tuple[int, ...]] = {
    Command.TURN_LEFT: (pygame.K_LEFT, pygame.K_a),
    Command.TURN_RIGHT: (pygame.K_RIGHT, pygame.K_d),
    Command.MOVE_FORWARD: (pygame.K_UP, pygame.K_w),
    Command.HORIZON_UP: (pygame.K_PAGEUP, pygame.K_r),
    Command.HORIZON_DOWN: (pygame.K_PAGEDOWN, pygame.K_f),
}

QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_x)


def commands_from_keys(keys: Sequence[bool]) -> Set[Command]:
    """Translate a pygame key-state snapshot into the set of active commands."""
    return {
        command
        for command, bound in KEY_BINDINGS.items()
        if any(keys[k] for k in bound)
    }


class InputHandler:
    """
    Processes Pygame events once per frame and exposes the resulting quit
    flag and command set.
    """

    def __init__(self) -> None:
        self._quit = False
        self._commands: Set[Command] = set()

    def process_events(self) -> None:
        """Poll Pygame events, then sample held keys."""
        self._quit = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit = True
            elif event.type == pygame.KEYDOWN and event.key in QUIT_KEYS:
                self._quit = True
        self._commands = commands_from_keys(pygame.key.get_pressed())

    def should_quit(self) -> bool:
        """Return True if a quit command was issued this frame."""
        return self._quit

    def commands(self) -> Set[Command]:
        """Commands held down this frame."""
        return set(self._commands)

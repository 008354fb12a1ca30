from __future__ import annotations
import logging
import pygame
from typing import Optional

from .config import WINDOW_TITLE
from .draw_sink import DrawSink, GLSink, SurfaceSink
from .input_handler import InputHandler
from .renderer import Renderer
from .world import World

logger = logging.getLogger(__name__)


class Game:
    """Main Game class: owns the window, the frame loop and high-level coordination."""

    def __init__(
        self,
        world: World,
        sink: Optional[DrawSink] = None,
        clock: Optional[pygame.time.Clock] = None,
        input_handler: Optional[InputHandler] = None,
    ) -> None:
        self.world = world
        self.settings = world.settings
        cam = world.camera
        # Window is only opened when no sink is injected
        if sink is None:
            pygame.init()
            if self.settings.use_opengl:
                flags = pygame.OPENGL | pygame.DOUBLEBUF
            else:
                flags = 0
            screen = pygame.display.set_mode(
                (cam.screen_width, cam.screen_height), flags
            )
            pygame.display.set_caption(WINDOW_TITLE)
            if self.settings.use_opengl:
                sink = GLSink(cam.screen_width, cam.screen_height)
            else:
                sink = SurfaceSink(screen)
            logger.info(
                "Opened %dx%d window (%s)",
                cam.screen_width,
                cam.screen_height,
                "OpenGL" if self.settings.use_opengl else "software",
            )
        self.sink = sink
        # Clock for frame rate (injectable for testing)
        self.clock = clock or pygame.time.Clock()
        self.fps = self.settings.fps
        self.renderer = Renderer()
        self.input = input_handler or InputHandler()
        self.running = True
        self.frames = 0

    def handle_events(self) -> None:
        """Process input events via InputHandler and handle quit."""
        self.input.process_events()
        if self.input.should_quit():
            logger.info("Quit requested after %d frames", self.frames)
            self.running = False

    def update(self) -> None:
        """Apply this frame's commands to the camera."""
        self.world.apply(self.input.commands())

    def render(self) -> None:
        self.renderer.render(self.world, self.sink)

    def run(self, max_frames: Optional[int] = None) -> None:
        """Main loop: handle events, update, render, then wait for the next frame."""
        while self.running:
            self.handle_events()
            self.update()
            self.render()
            self.frames += 1
            self.clock.tick(self.fps)
            if max_frames is not None and self.frames >= max_frames:
                self.running = False
        shutdown = getattr(self.sink, "shutdown", None)
        if shutdown is not None:
            shutdown()
        pygame.quit()

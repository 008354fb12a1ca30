import pytest
import pygame

from raymaze.config import Settings
from raymaze.game import Game
from raymaze.vector import Vector2
from raymaze.walls import Wall
from raymaze.world import Camera, Command, World


class DummyClock:
    def __init__(self):
        self.ticks = []

    def tick(self, fps):
        self.ticks.append(fps)
        return 0


class ScriptedInput:
    """Input stub replaying one command set per frame, then quitting."""

    def __init__(self, frames):
        self._frames = list(frames)
        self._current = set()
        self._quit = False

    def process_events(self):
        if self._frames:
            self._current = self._frames.pop(0)
        else:
            self._current = set()
            self._quit = True

    def should_quit(self):
        return self._quit

    def commands(self):
        return self._current


class CountingSink:
    def __init__(self):
        self.presents = 0
        self.fills = 0
        self.shut = False

    def clear(self):
        pass

    def fill_rect(self, x, y, width, height, color):
        self.fills += 1

    def present(self):
        self.presents += 1

    def shutdown(self):
        self.shut = True


@pytest.fixture
def world():
    camera = Camera(position=Vector2(0.5, 0.5), heading=0.0, screen_width=16, screen_height=12)
    walls = [
        Wall.from_coords(0, 0, 2, 0),
        Wall.from_coords(0, 1, 2, 1),
        Wall.from_coords(0, 0, 0, 1),
        Wall.from_coords(2, 0, 2, 1),
    ]
    return World(walls, camera, settings=Settings(fps=30, move_speed=0.1))


def test_run_applies_commands_until_quit(world, monkeypatch):
    monkeypatch.setattr(pygame, "quit", lambda: None)
    clock = DummyClock()
    sink = CountingSink()
    script = ScriptedInput([{Command.MOVE_FORWARD}, {Command.MOVE_FORWARD}, set()])
    game = Game(world, sink=sink, clock=clock, input_handler=script)
    game.run()
    # Three scripted frames plus the frame on which quit arrives
    assert game.frames == 4
    assert sink.presents == 4
    assert clock.ticks == [30] * 4
    assert world.camera.position.x == pytest.approx(0.7)
    assert sink.shut


def test_run_stops_after_max_frames(world, monkeypatch):
    monkeypatch.setattr(pygame, "quit", lambda: None)
    script = ScriptedInput([{Command.MOVE_FORWARD}] * 100)
    sink = CountingSink()
    game = Game(world, sink=sink, clock=DummyClock(), input_handler=script)
    game.run(max_frames=50)
    assert game.frames == 50
    # Walled corridor: the camera can never leave it
    assert world.camera.position.x <= 2.0


def test_game_opens_window_when_no_sink_given(world, monkeypatch):
    calls = []
    monkeypatch.setattr(pygame, "init", lambda: calls.append("init"))
    monkeypatch.setattr(
        pygame.display, "set_mode", lambda size, flags=0: calls.append(("mode", size, flags)) or pygame.Surface(size)
    )
    monkeypatch.setattr(pygame.display, "set_caption", lambda title: calls.append(("caption", title)))
    game = Game(world, clock=DummyClock(), input_handler=ScriptedInput([]))
    assert calls[0] == "init"
    assert ("mode", (16, 12), 0) in calls
    from raymaze.draw_sink import SurfaceSink

    assert isinstance(game.sink, SurfaceSink)

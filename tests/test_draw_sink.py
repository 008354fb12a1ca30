import numpy as np
import OpenGL.GL as gl
import pygame
import pytest

import raymaze.draw_sink as ds


def test_surface_sink_fills_pixels():
    surface = pygame.Surface((4, 3))
    sink = ds.SurfaceSink(surface, flip=False)
    sink.clear()
    sink.fill_rect(1, 0, 2, 3, (10, 20, 30))
    assert tuple(surface.get_at((1, 1)))[:3] == (10, 20, 30)
    assert tuple(surface.get_at((2, 2)))[:3] == (10, 20, 30)
    assert tuple(surface.get_at((0, 0)))[:3] == (0, 0, 0)
    assert tuple(surface.get_at((3, 0)))[:3] == (0, 0, 0)
    sink.present()


def test_surface_sink_flips_display(monkeypatch):
    flips = []
    monkeypatch.setattr(pygame.display, "flip", lambda: flips.append(1))
    ds.SurfaceSink(pygame.Surface((1, 1))).present()
    assert flips == [1]


def test_rect_vertices_full_screen():
    verts = ds.rect_vertices(0, 0, 10, 20, (255, 0, 51), 10, 20)
    assert verts.shape == (6, 5)
    assert verts.dtype == np.float32
    assert set(map(float, verts[:, 0])) == {-1.0, 1.0}
    assert set(map(float, verts[:, 1])) == {-1.0, 1.0}
    assert np.allclose(verts[:, 2:], [1.0, 0.0, 0.2])


def test_rect_vertices_flip_y():
    # Top pixel row maps to the top of NDC space
    verts = ds.rect_vertices(5, 0, 1, 5, (0, 0, 0), 10, 10)
    assert verts[:, 1].max() == pytest.approx(1.0)
    assert verts[:, 1].min() == pytest.approx(0.0)
    assert verts[:, 0].min() == pytest.approx(0.0)
    assert verts[:, 0].max() == pytest.approx(0.2)


@pytest.fixture
def gl_sink(monkeypatch):
    """GLSink with shader compilation and GL calls stubbed out."""
    deleted = []

    class FakeShader:
        id = 7

        def __init__(self, vertex_source=None, fragment_source=None):
            assert "aColor" in vertex_source
            assert fragment_source

        def get_attrib(self, name):
            return {"aPos": 0, "aColor": 1}[name]

    monkeypatch.setattr(ds, "setup_opengl", lambda w, h: None)
    monkeypatch.setattr(ds, "ShaderProgram", FakeShader)
    monkeypatch.setattr(gl, "glGenBuffers", lambda n: 3)
    monkeypatch.setattr(gl, "glDeleteBuffers", lambda n, ids: deleted.append(("buffer", ids)))
    monkeypatch.setattr(gl, "glDeleteProgram", lambda i: deleted.append(("program", i)))
    monkeypatch.setattr(gl, "glClearColor", lambda *a: None)
    monkeypatch.setattr(gl, "glClear", lambda mask: None)
    monkeypatch.setattr(pygame.display, "flip", lambda: None)
    drawn = []
    monkeypatch.setattr(ds.GLSink, "_draw", lambda self, verts: drawn.append(verts))
    sink = ds.GLSink(10, 20)
    return sink, drawn, deleted


def test_gl_sink_batches_one_draw_per_frame(gl_sink):
    sink, drawn, _ = gl_sink
    sink.clear()
    sink.fill_rect(0, 0, 10, 10, (255, 255, 255))
    sink.fill_rect(3, 10, 1, 5, (0, 0, 0))
    sink.present()
    assert len(drawn) == 1
    assert drawn[0].shape == (12, 5)
    # Batch is emptied after presenting
    sink.present()
    assert len(drawn) == 1


def test_gl_sink_shutdown_frees_objects(gl_sink):
    sink, _, deleted = gl_sink
    sink.shutdown()
    assert ("program", 7) in deleted
    assert ("buffer", [3]) in deleted

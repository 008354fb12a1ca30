from __future__ import annotations

from collections import defaultdict
from typing import Callable, DefaultDict, List


class GLResourceManager:
    """
    Tracks every GL object the GL sink creates and frees it on shutdown.

    Usage:
        mgr = GLResourceManager()
        vbo = mgr.gen(lambda: gl.glGenBuffers(1), delete_buffer)
        ...
        mgr.shutdown()
    """

    def __init__(self) -> None:
        self._objs: DefaultDict[Callable[[int], None], List[int]] = defaultdict(list)

    def gen(self, creator: Callable[[], int], deleter: Callable[[int], None]) -> int:
        """Wraps any glGen*/glCreate* call that returns ONE uint id."""
        obj_id: int = creator()
        self.track(obj_id, deleter)
        return obj_id

    def track(self, obj_id: int, deleter: Callable[[int], None]) -> None:
        """Register an object created elsewhere for deletion at shutdown."""
        self._objs[deleter].append(obj_id)

    def shutdown(self) -> None:
        """Call at program exit **WITH A VALID GL CONTEXT**."""
        for deleter, ids in self._objs.items():
            for obj_id in ids:
                deleter(int(obj_id))
        self._objs.clear()

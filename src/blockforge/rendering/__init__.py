"""Rendering subsystem"""
# SceneRenderer needs a live OpenGL context; import it from .scene_renderer directly.
from .viewport import Drawable, ViewportAdapter

__all__ = [
    "Drawable",
    "ViewportAdapter",
]

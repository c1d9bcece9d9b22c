"""
Scene Editing Tools

Core Components:
- SceneStore: Object collection plus every scene mutation
- EditorHistory: Snapshot stack behind undo/redo
"""

from .editor_history import EditorHistory, HistorySnapshot
from .scene_store import ProtectedObjectError, SceneError, SceneStore

__all__ = [
    "EditorHistory",
    "HistorySnapshot",
    "ProtectedObjectError",
    "SceneError",
    "SceneStore",
]

"""Core editor components"""
from .camera import Camera
from .camera_rig import CameraRig, FollowRig, OrbitRig
from .editor_session import EditorMode, EditorSession, ToolMode
from .scene import ObjectKind, SceneObject, create_default_scene, find_spawn_point

__all__ = [
    "Camera",
    "CameraRig",
    "FollowRig",
    "OrbitRig",
    "EditorMode",
    "EditorSession",
    "ToolMode",
    "ObjectKind",
    "SceneObject",
    "create_default_scene",
    "find_spawn_point",
]

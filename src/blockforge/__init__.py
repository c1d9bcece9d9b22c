"""
BlockForge - Block-Based 3D Scene Editor

Scene store with undo/redo, tool and selection controller, kinematic play
mode and a moderngl viewport.
"""

# Configuration
from .config.settings import *

# Core
from .core.camera import Camera
from .core.camera_rig import CameraRig, FollowRig, OrbitRig
from .core.editor_session import EditorMode, EditorSession, ToolMode
from .core.scene import ObjectKind, SceneObject, create_default_scene

# Scene editing
from .tools.editor_history import EditorHistory, HistorySnapshot
from .tools.scene_store import ProtectedObjectError, SceneError, SceneStore

# Play mode
from .gameplay.actor import ActorInput, ActorSettings, ActorState, MoveKey, PlaySimulator, step

# Input
from .input import InputManager, KeyBindings, ObjectSelector, ToolController

# Persistence
from .loaders import ProjectFormatError, ProjectStore

# Viewport
from .rendering.viewport import Drawable, ViewportAdapter

"""
Editor Configuration Settings

All configuration constants for the scene editor and play mode.
Modify these values to change editor behavior.
"""

import os
from pathlib import Path

# ============================================================================
# Project Paths
# ============================================================================

DATA_ROOT_ENV = "BLOCKFORGE_HOME"


def resolve_data_root() -> Path:
    """Directory for saved projects and key bindings: $BLOCKFORGE_HOME, else the working directory."""
    override = os.environ.get(DATA_ROOT_ENV)
    return Path(override).expanduser() if override else Path.cwd()


PROJECT_ROOT = resolve_data_root()
PROJECTS_DIR = PROJECT_ROOT / "projects"
DEFAULT_PROJECT_KEY = "untitled"  # Used when saving a new, unnamed project
KEY_BINDINGS_FILE = PROJECT_ROOT / "keybindings.json"

# ============================================================================
# Window Configuration
# ============================================================================

WINDOW_SIZE = (1600, 900)  # Width, Height
ASPECT_RATIO = 16 / 9
WINDOW_TITLE = "BlockForge Editor"
RESIZABLE = True

# OpenGL version (4.1 is max for macOS)
GL_VERSION = (4, 1)

CLEAR_COLOR = (0.53, 0.81, 0.92)  # Sky blue

# ============================================================================
# Camera Settings
# ============================================================================

DEFAULT_FOV = 60.0    # Field of view in degrees
NEAR_PLANE = 0.1
FAR_PLANE = 1000.0
MIN_PITCH = -89.0
MAX_PITCH = 89.0

# Orbit camera used while editing
EDITOR_CAMERA_POSITION = (20.0, 15.0, 20.0)
EDITOR_CAMERA_TARGET = (0.0, 0.0, 0.0)
ORBIT_SENSITIVITY = 0.3      # Degrees per pixel
ORBIT_ZOOM_STEP = 2.0        # Units per scroll notch
ORBIT_MIN_DISTANCE = 3.0
ORBIT_MAX_DISTANCE = 200.0

# Follow camera used while playing
FOLLOW_CAMERA_OFFSET = (0.0, 5.0, 10.0)  # Camera position relative to actor
FOLLOW_CAMERA_LOOK_HEIGHT = 1.0          # Look-at point above actor centre

# ============================================================================
# Scene Editing
# ============================================================================

MAX_HISTORY = 100                     # Snapshots kept for undo/redo
DUPLICATE_OFFSET = (2.0, 0.0, 2.0)    # Offset applied to duplicated objects
SCALE_EPSILON = 0.01                  # Smallest allowed scale component

# Random placement for new blocks (no placement hint)
PLACEMENT_RANGE = 10.0                # x/z drawn from [-range, range]
PLACEMENT_HEIGHT = 5.0

SPAWN_POINT_HEIGHT = 0.5

BLOCK_PALETTE = (
    "#9b87f5",
    "#0ea5e9",
    "#d946ef",
    "#f97316",
    "#10b981",
    "#ef4444",
)
BASEPLATE_COLOR = "#a3a3a3"
SPAWN_POINT_COLOR = "#3b82f6"
GROUP_COLOR = "#fbbf24"
BEHAVIOR_COLOR = "#22d3ee"

# Drag sensitivity per tool (per pixel of pointer movement)
MOVE_DRAG_SENSITIVITY = 0.05     # World units
SCALE_DRAG_SENSITIVITY = 0.02    # Scale units
ROTATE_DRAG_SENSITIVITY = 0.01   # Radians

# ============================================================================
# Play Mode (kinematic actor)
# ============================================================================

ACTOR_MOVE_SPEED = 10.0       # Units per second
ACTOR_JUMP_VELOCITY = 8.0     # Units per second, applied on ground contact
GRAVITY = -25.0               # Units per second squared
ACTOR_HALF_HEIGHT = 2.0       # Ground offset and spawn offset
GROUND_LEVEL = 0.0            # Nominal ground plane height

# Horizontal velocity is multiplied by HORIZONTAL_DAMPING once per reference
# frame when no movement key is held.
HORIZONTAL_DAMPING = 0.8
DAMPING_REFERENCE_FPS = 60.0

MAX_FRAME_DELTA = 0.1         # Frame deltas are clamped to this (seconds)

ACTOR_BODY_COLOR = "#3b82f6"
ACTOR_HEAD_COLOR = "#60a5fa"
ACTOR_ARM_COLOR = "#2563eb"
ACTOR_LEG_COLOR = "#1e40af"

# ============================================================================
# Viewport Highlighting
# ============================================================================

SELECTION_EMISSIVE = (1.0, 1.0, 1.0)
SELECTION_EMISSIVE_INTENSITY = 0.3
SELECTION_OUTLINE_COLOR = (0.0, 1.0, 1.0)
SELECTION_OUTLINE_SCALE = 1.02
SPAWN_EMISSIVE = (0.23, 0.51, 0.96)
SPAWN_EMISSIVE_INTENSITY = 0.2
SPAWN_OPACITY = 0.8
OBJECT_RAYCAST_RANGE = 1000.0

"""Kinematic play-mode actor: pure per-frame step plus the simulator that drives it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, FrozenSet, Optional, Tuple

import numpy as np
from pyrr import Vector3, vector

from ..config.settings import (
    ACTOR_HALF_HEIGHT,
    ACTOR_JUMP_VELOCITY,
    ACTOR_MOVE_SPEED,
    DAMPING_REFERENCE_FPS,
    GRAVITY,
    GROUND_LEVEL,
    HORIZONTAL_DAMPING,
    MAX_FRAME_DELTA,
)
from ..core.camera_rig import FollowRig

if TYPE_CHECKING:
    from ..core.camera import Camera
    from ..core.scene import SceneObject


logger = logging.getLogger(__name__)

WORLD_UP = Vector3([0.0, 1.0, 0.0])
DEFAULT_FORWARD = Vector3([0.0, 0.0, -1.0])


class MoveKey(Enum):
    """Movement keys the actor reacts to."""

    FORWARD = auto()
    BACKWARD = auto()
    LEFT = auto()
    RIGHT = auto()
    JUMP = auto()


@dataclass(slots=True)
class ActorSettings:
    """Tunables for the kinematic controller."""

    move_speed: float = ACTOR_MOVE_SPEED
    jump_velocity: float = ACTOR_JUMP_VELOCITY
    gravity: float = GRAVITY
    half_height: float = ACTOR_HALF_HEIGHT
    ground_level: float = GROUND_LEVEL
    damping: float = HORIZONTAL_DAMPING
    damping_reference_fps: float = DAMPING_REFERENCE_FPS

    @property
    def ground_offset(self) -> float:
        """Lowest allowed actor centre height."""
        return self.ground_level + self.half_height


@dataclass(frozen=True)
class ActorInput:
    """
    Input snapshot for one frame.

    Attributes:
        keys: Movement keys held at the start of the frame
        camera_forward: Camera look direction (any length, any pitch)
    """

    keys: FrozenSet[MoveKey] = frozenset()
    camera_forward: Tuple[float, float, float] = (0.0, 0.0, -1.0)


@dataclass(frozen=True, eq=False)
class ActorState:
    """Actor position, velocity and whether it touched the ground this frame."""

    position: Vector3 = field(default_factory=lambda: Vector3([0.0, ACTOR_HALF_HEIGHT, 0.0]))
    velocity: Vector3 = field(default_factory=lambda: Vector3([0.0, 0.0, 0.0]))
    grounded: bool = False


def movement_basis(camera_forward) -> Tuple[Vector3, Vector3]:
    """
    Camera-relative horizontal basis.

    Returns:
        (forward, right): forward is the look direction flattened onto the
        ground plane, right = forward x up. Both unit length.
    """
    forward = Vector3([camera_forward[0], 0.0, camera_forward[2]])
    if np.linalg.norm(forward) < 1e-6:
        # Looking straight down or up
        forward = Vector3(DEFAULT_FORWARD)
    forward = Vector3(vector.normalise(forward))
    right = Vector3(vector.normalise(np.cross(forward, WORLD_UP)))
    return forward, right


def step(
    state: ActorState,
    actor_input: ActorInput,
    delta: float,
    settings: Optional[ActorSettings] = None,
) -> ActorState:
    """
    Advance the actor by ``delta`` seconds.

    Pure function: ``state`` is not modified.

    Args:
        state: Current actor state
        actor_input: Keys and camera direction for this frame
        delta: Elapsed real time in seconds
        settings: Controller tunables

    Returns:
        New actor state
    """
    settings = settings or ActorSettings()
    keys = actor_input.keys
    forward, right = movement_basis(actor_input.camera_forward)

    direction = Vector3([0.0, 0.0, 0.0])
    if MoveKey.FORWARD in keys:
        direction += forward
    if MoveKey.BACKWARD in keys:
        direction -= forward
    if MoveKey.LEFT in keys:
        direction -= right
    if MoveKey.RIGHT in keys:
        direction += right

    vx, vy, vz = (float(v) for v in state.velocity)
    length = float(np.linalg.norm(direction))
    if length > 1e-6:
        direction = direction / length
        vx = float(direction[0]) * settings.move_speed
        vz = float(direction[2]) * settings.move_speed
    else:
        # Scale the per-frame damping so deceleration takes the same time at any frame rate
        factor = settings.damping ** (delta * settings.damping_reference_fps)
        vx *= factor
        vz *= factor

    vy += settings.gravity * delta

    px, py, pz = (float(p) for p in state.position)
    px += vx * delta
    py += vy * delta
    pz += vz * delta

    grounded = False
    if py <= settings.ground_offset:
        py = settings.ground_offset
        vy = 0.0
        grounded = True
        if MoveKey.JUMP in keys:
            vy = settings.jump_velocity

    return ActorState(
        position=Vector3([px, py, pz]),
        velocity=Vector3([vx, vy, vz]),
        grounded=grounded,
    )


def spawn_position(spawn: Optional["SceneObject"], settings: Optional[ActorSettings] = None) -> Vector3:
    """Initial actor position: the spawn point raised by the actor's half height."""
    settings = settings or ActorSettings()
    if spawn is None:
        return Vector3([0.0, settings.ground_offset, 0.0])
    x, y, z = spawn.position
    return Vector3([x, y + settings.half_height, z])


class PlaySimulator:
    """
    Runs the actor while play mode is active.

    Owns the actor state and the follow camera rig. Never touches the scene
    store: the actor is not a scene object.
    """

    def __init__(self, camera: "Camera", settings: Optional[ActorSettings] = None):
        """
        Initialize simulator.

        Args:
            camera: Camera the follow rig drives while running
            settings: Controller tunables
        """
        self.camera = camera
        self.settings = settings or ActorSettings()
        self.state: Optional[ActorState] = None
        self.camera_rig = FollowRig(camera, self)

    @property
    def running(self) -> bool:
        return self.state is not None

    def start(self, spawn: Optional["SceneObject"]) -> ActorState:
        """Place the actor at the spawn point with zero velocity."""
        self.state = ActorState(position=spawn_position(spawn, self.settings))
        self.camera_rig.update(0.0)
        logger.info("Play started at %s", tuple(float(v) for v in self.state.position))
        return self.state

    def stop(self) -> None:
        """Discard the actor."""
        if self.state is not None:
            logger.info("Play stopped")
        self.state = None

    def get_position(self) -> Vector3:
        if self.state is None:
            return spawn_position(None, self.settings)
        return Vector3(self.state.position)

    def update(self, delta_time: float, keys: FrozenSet[MoveKey]) -> Optional[ActorState]:
        """
        Advance one frame and move the follow camera.

        Args:
            delta_time: Seconds since the previous frame (clamped to MAX_FRAME_DELTA)
            keys: Movement keys held at the start of this frame

        Returns:
            New actor state, or None when not running
        """
        if self.state is None:
            return None

        delta_time = max(0.0, min(MAX_FRAME_DELTA, delta_time))
        actor_input = ActorInput(
            keys=frozenset(keys),
            camera_forward=tuple(float(v) for v in self.camera.get_forward()),
        )
        self.state = step(self.state, actor_input, delta_time, self.settings)
        self.camera_rig.update(delta_time)
        return self.state

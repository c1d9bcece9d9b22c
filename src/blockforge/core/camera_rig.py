"""Camera rig implementations for editing and play mode."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Tuple
import math

from pyrr import Vector3

from ..config.settings import (
    FOLLOW_CAMERA_LOOK_HEIGHT,
    FOLLOW_CAMERA_OFFSET,
    MAX_PITCH,
    MIN_PITCH,
    ORBIT_MAX_DISTANCE,
    ORBIT_MIN_DISTANCE,
    ORBIT_SENSITIVITY,
)

if TYPE_CHECKING:  # pragma: no cover - import guard for type checking only
    from .camera import Camera
    from ..gameplay.actor import PlaySimulator


class CameraRig(ABC):
    """Abstract base class for camera control rigs."""

    def __init__(self, camera: "Camera") -> None:
        self.camera = camera
        self.enabled = True

    def enable(self) -> None:
        """Enable the rig."""

        self.enabled = True

    def disable(self) -> None:
        """Disable the rig."""

        self.enabled = False

    @abstractmethod
    def update(self, delta_time: float) -> None:
        """Update the rig state."""

    @abstractmethod
    def apply_look_input(self, dx: float, dy: float) -> None:
        """Apply pointer look input."""


class OrbitRig(CameraRig):
    """Editor camera that orbits a focus point (drag to orbit, scroll to zoom)."""

    def __init__(self, camera: "Camera", sensitivity: float = ORBIT_SENSITIVITY) -> None:
        super().__init__(camera)
        self.sensitivity = sensitivity
        self.focus = Vector3(camera.target)

        offset = camera.position - self.focus
        self.distance = max(ORBIT_MIN_DISTANCE, float(offset.length))
        self.yaw = math.degrees(math.atan2(offset.z, offset.x))
        self.pitch = math.degrees(math.asin(max(-1.0, min(1.0, offset.y / self.distance))))
        self._apply()

    def _apply(self) -> None:
        yaw_rad = math.radians(self.yaw)
        pitch_rad = math.radians(self.pitch)
        offset = Vector3([
            math.cos(yaw_rad) * math.cos(pitch_rad),
            math.sin(pitch_rad),
            math.sin(yaw_rad) * math.cos(pitch_rad),
        ]) * self.distance
        self.camera.look_at(self.focus + offset, self.focus)

    def update(self, delta_time: float) -> None:
        if self.enabled:
            self._apply()

    def apply_look_input(self, dx: float, dy: float) -> None:
        if not self.enabled:
            return

        self.yaw += dx * self.sensitivity
        self.pitch += dy * self.sensitivity
        self.pitch = max(MIN_PITCH, min(MAX_PITCH, self.pitch))
        self._apply()

    def zoom(self, delta: float) -> None:
        self.distance = max(ORBIT_MIN_DISTANCE, min(ORBIT_MAX_DISTANCE, self.distance + delta))
        self._apply()


def follow_camera_pose(
    subject_position: Vector3,
    offset: Tuple[float, float, float] = FOLLOW_CAMERA_OFFSET,
    look_height: float = FOLLOW_CAMERA_LOOK_HEIGHT,
) -> Tuple[Vector3, Vector3]:
    """
    Compute the third-person follow camera pose.

    Returns:
        (eye, target): camera trails at a fixed offset and looks slightly above the subject
    """
    subject = Vector3(subject_position)
    eye = subject + Vector3(offset)
    target = subject + Vector3([0.0, look_height, 0.0])
    return eye, target


class FollowRig(CameraRig):
    """Third-person camera that trails the play-mode actor at a fixed offset."""

    def __init__(
        self,
        camera: "Camera",
        subject: "PlaySimulator",
        offset: Tuple[float, float, float] = FOLLOW_CAMERA_OFFSET,
        look_height: float = FOLLOW_CAMERA_LOOK_HEIGHT,
    ) -> None:
        super().__init__(camera)
        self.subject = subject
        self.offset = offset
        self.look_height = look_height

    def update(self, delta_time: float) -> None:
        if not self.enabled:
            return

        eye, target = follow_camera_pose(self.subject.get_position(), self.offset, self.look_height)
        self.camera.look_at(eye, target)

    def apply_look_input(self, dx: float, dy: float) -> None:
        # Fixed offset camera: pointer look is ignored while playing
        return


__all__ = [
    "CameraRig",
    "OrbitRig",
    "FollowRig",
    "follow_camera_pose",
]

"""
Camera Module

Look-at camera shared by the editor orbit rig and the play-mode follow rig.
"""

import numpy as np
from pyrr import Matrix44, Vector3, vector

from ..config.settings import (
    DEFAULT_FOV,
    NEAR_PLANE,
    FAR_PLANE,
)

WORLD_UP = Vector3([0.0, 1.0, 0.0])


class Camera:
    """
    Look-at camera.

    The pose is a position and a target point; direction vectors are derived
    from them whenever either changes.
    """

    def __init__(self, position: Vector3, target: Vector3 = None, fov: float = DEFAULT_FOV):
        """
        Initialize camera.

        Args:
            position: Camera position in world space
            target: Look-at point (defaults to the origin)
            fov: Vertical field of view in degrees
        """
        self.position = Vector3(position)
        self.target = Vector3(target) if target is not None else Vector3([0.0, 0.0, 0.0])
        self.fov = fov

        self._front = Vector3([0.0, 0.0, -1.0])
        self._up = Vector3([0.0, 1.0, 0.0])
        self._right = Vector3([1.0, 0.0, 0.0])
        self.update_vectors()

    def look_at(self, position: Vector3, target: Vector3):
        """Move the camera and point it at ``target``."""
        self.position = Vector3(position)
        self.target = Vector3(target)
        self.update_vectors()

    def update_vectors(self):
        """
        Update camera direction vectors from position and target.
        Call this after changing position or target directly.
        """
        front = self.target - self.position
        if np.linalg.norm(front) < 1e-9:
            front = Vector3([0.0, 0.0, -1.0])
        self._front = Vector3(vector.normalise(front))

        right = np.cross(self._front, WORLD_UP)
        if np.linalg.norm(right) < 1e-9:
            # Looking straight up or down; keep the previous right vector
            right = self._right
        self._right = Vector3(vector.normalise(right))
        self._up = Vector3(vector.normalise(np.cross(self._right, self._front)))

    def get_view_matrix(self) -> Matrix44:
        """
        Get the camera view matrix.

        Returns:
            4x4 view matrix for camera transformation
        """
        return Matrix44.look_at(self.position, self.target, WORLD_UP)

    def get_projection_matrix(self, aspect_ratio: float) -> Matrix44:
        """
        Get the camera projection matrix.

        Args:
            aspect_ratio: Viewport width / height

        Returns:
            4x4 projection matrix
        """
        return Matrix44.perspective_projection(self.fov, aspect_ratio, NEAR_PLANE, FAR_PLANE)

    def get_forward(self) -> Vector3:
        """Get camera look direction"""
        return Vector3(self._front)

    def get_position(self) -> Vector3:
        """Get camera position"""
        return Vector3(self.position)

    def get_right(self) -> Vector3:
        """Get camera right vector"""
        return Vector3(self._right)

    def get_up(self) -> Vector3:
        """Get camera up vector"""
        return Vector3(self._up)

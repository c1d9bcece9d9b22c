"""
Object Selector - Raycasting and Object Picking

Turns a pointer position into the id of the scene object under it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Tuple
import math

import numpy as np
from pyrr import Matrix44, Vector3

from ..config.settings import OBJECT_RAYCAST_RANGE

if TYPE_CHECKING:
    from ..core.camera import Camera
    from ..core.scene import SceneObject


class ObjectSelector:
    """Raycasts pointer positions against scene objects (unit cubes)."""

    def __init__(self, raycast_range: float = OBJECT_RAYCAST_RANGE):
        """
        Initialize object selector.

        Args:
            raycast_range: Maximum distance for raycasting
        """
        self.raycast_range = raycast_range

    def pick(
        self,
        camera: Camera,
        objects: Iterable[SceneObject],
        screen_x: float,
        screen_y: float,
        screen_width: int,
        screen_height: int,
    ) -> Optional[int]:
        """
        Find the closest object under a screen position.

        Args:
            camera: Camera for raycasting
            objects: Scene objects to test
            screen_x: Screen X coordinate (0 = left)
            screen_y: Screen Y coordinate (0 = top)
            screen_width: Screen width in pixels
            screen_height: Screen height in pixels

        Returns:
            Id of the hit object or None
        """
        ray_origin, ray_direction = self.screen_ray(
            camera, screen_x, screen_y, screen_width, screen_height
        )

        closest_id = None
        closest_distance = float('inf')

        for obj in objects:
            distance = self._raycast_box(ray_origin, ray_direction, obj.get_model_matrix())
            if distance is not None and distance < closest_distance:
                closest_distance = distance
                closest_id = obj.id

        return closest_id

    def screen_ray(
        self,
        camera: Camera,
        screen_x: float,
        screen_y: float,
        screen_width: int,
        screen_height: int,
    ) -> Tuple[Vector3, Vector3]:
        """
        Get the world-space ray from the camera through a screen position.

        Returns:
            (origin, direction) with a normalized direction
        """
        # Convert screen coordinates to normalized device coordinates
        ndc_x = (2.0 * screen_x) / screen_width - 1.0
        ndc_y = 1.0 - (2.0 * screen_y) / screen_height

        aspect = screen_width / screen_height
        tan_half_fov = math.tan(math.radians(camera.fov) / 2.0)

        ray_dir = (
            camera.get_forward() +
            camera.get_right() * ndc_x * tan_half_fov * aspect +
            camera.get_up() * ndc_y * tan_half_fov
        )

        length = float(np.linalg.norm(ray_dir))
        if length > 0:
            ray_dir = ray_dir / length

        return Vector3(camera.position), Vector3(ray_dir)

    def _raycast_box(
        self,
        ray_origin: Vector3,
        ray_direction: Vector3,
        model_matrix: Matrix44,
    ) -> Optional[float]:
        """
        Test ray intersection with a transformed unit cube (slab method).

        The ray is moved into the cube's local space, where the cube spans
        [-0.5, 0.5] on each axis.

        Args:
            ray_origin: Ray starting point
            ray_direction: Ray direction (normalized)
            model_matrix: Object model matrix (row-vector convention)

        Returns:
            Distance to intersection or None if no hit
        """
        try:
            inverse = np.linalg.inv(np.asarray(model_matrix, dtype=float))
        except np.linalg.LinAlgError:
            return None

        local_origin = np.append(np.asarray(ray_origin, dtype=float), 1.0) @ inverse
        local_dir = np.append(np.asarray(ray_direction, dtype=float), 0.0) @ inverse

        t_near = -math.inf
        t_far = math.inf
        for axis in range(3):
            o = local_origin[axis]
            d = local_dir[axis]
            if abs(d) < 1e-12:
                # Parallel to this slab: must already be inside it
                if o < -0.5 or o > 0.5:
                    return None
                continue
            t1 = (-0.5 - o) / d
            t2 = (0.5 - o) / d
            if t1 > t2:
                t1, t2 = t2, t1
            t_near = max(t_near, t1)
            t_far = min(t_far, t2)
            if t_near > t_far:
                return None

        if t_far < 0:
            return None

        distance = max(t_near, 0.0)
        if distance <= self.raycast_range:
            return distance
        return None

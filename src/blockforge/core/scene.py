"""
Scene Object Model

Editable scene objects and the default scaffolding every new project starts with.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from pyrr import Matrix44, Vector3

from ..config.settings import (
    BASEPLATE_COLOR,
    SCALE_EPSILON,
    SPAWN_POINT_COLOR,
    SPAWN_POINT_HEIGHT,
)

Vec3 = Tuple[float, float, float]

VECTOR_FIELDS = ("position", "rotation", "scale")


class ObjectKind(Enum):
    """Closed set of scene object kinds."""

    BLOCK = "Block"
    SPAWN_POINT = "SpawnPoint"
    GROUP = "Group"
    BEHAVIOR = "Behavior"


def _vec3(value: Iterable[float]) -> Vec3:
    """Convert an iterable to a tuple of three floats."""

    data = tuple(float(v) for v in value)
    if len(data) != 3:
        raise ValueError(f"Expected 3 components, got {data}")
    return data


def clamp_scale(value: float) -> float:
    """Clamp a scale component to a strictly positive value."""

    return value if value > 0.0 else SCALE_EPSILON


def normalize_color(color: str) -> str:
    """
    Normalize a colour string to lower-case ``#rrggbb``.

    Accepts ``#rgb`` and ``#rrggbb`` with or without the leading hash.

    Raises:
        ValueError: If the string is not a hex colour
    """
    text = color.strip().lstrip("#").lower()
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    if len(text) != 6:
        raise ValueError(f"Invalid colour: {color!r}")
    int(text, 16)  # raises ValueError for non-hex digits
    return f"#{text}"


def hex_to_rgb(color: str) -> Vec3:
    """Convert ``#rrggbb`` to an RGB tuple in 0.0-1.0."""

    text = normalize_color(color)[1:]
    return tuple(int(text[i:i + 2], 16) / 255.0 for i in (0, 2, 4))


@dataclass(frozen=True)
class SceneObject:
    """
    An editable entity in the 3D workspace.

    Objects are immutable: every mutation produces a new instance, which lets
    history snapshots share unchanged objects safely.

    Attributes:
        id: Unique, stable identifier within a session
        name: Display name (not required to be unique)
        kind: Object kind
        position: World position
        rotation: Euler angles in radians (x, y, z)
        scale: Per-axis scale, always strictly positive
        color: ``#rrggbb`` colour
        locked: Fixed scaffolding that cannot be deleted
    """

    id: int
    name: str
    kind: ObjectKind
    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    scale: Vec3 = (1.0, 1.0, 1.0)
    color: str = BASEPLATE_COLOR
    locked: bool = False

    def __post_init__(self):
        object.__setattr__(self, "position", _vec3(self.position))
        object.__setattr__(self, "rotation", _vec3(self.rotation))
        object.__setattr__(self, "scale", tuple(clamp_scale(v) for v in _vec3(self.scale)))
        object.__setattr__(self, "color", normalize_color(self.color))
        object.__setattr__(self, "kind", ObjectKind(self.kind))

    @property
    def is_spawn_point(self) -> bool:
        return self.kind is ObjectKind.SPAWN_POINT

    def with_field(self, name: str, value: Any) -> "SceneObject":
        """Return a copy with one field replaced."""
        return replace(self, **{name: value})

    def with_axis(self, name: str, axis: int, value: float) -> "SceneObject":
        """Return a copy with one axis of a vector field replaced."""
        if name not in VECTOR_FIELDS:
            raise ValueError(f"Not a vector field: {name}")
        if axis not in (0, 1, 2):
            raise ValueError(f"Axis must be 0, 1 or 2, got {axis}")
        components = list(getattr(self, name))
        components[axis] = float(value)
        return replace(self, **{name: tuple(components)})

    def get_model_matrix(self) -> Matrix44:
        """
        Get the model matrix for this object (translate * rotate * scale).

        Returns:
            4x4 transformation matrix for a unit cube
        """
        matrix = Matrix44.from_translation(Vector3(self.position))

        rx, ry, rz = self.rotation
        if ry != 0.0:
            matrix = matrix * Matrix44.from_y_rotation(ry)
        if rx != 0.0:
            matrix = matrix * Matrix44.from_x_rotation(rx)
        if rz != 0.0:
            matrix = matrix * Matrix44.from_z_rotation(rz)

        if self.scale != (1.0, 1.0, 1.0):
            matrix = matrix * Matrix44.from_scale(Vector3(self.scale))

        return matrix

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
            "position": list(self.position),
            "rotation": list(self.rotation),
            "scale": list(self.scale),
            "color": self.color,
            "locked": self.locked,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "SceneObject":
        return cls(
            id=int(payload["id"]),
            name=str(payload.get("name", "Part")),
            kind=ObjectKind(payload.get("kind", ObjectKind.BLOCK.value)),
            position=payload.get("position", (0.0, 0.0, 0.0)),
            rotation=payload.get("rotation", (0.0, 0.0, 0.0)),
            scale=payload.get("scale", (1.0, 1.0, 1.0)),
            color=payload.get("color", BASEPLATE_COLOR),
            locked=bool(payload.get("locked", False)),
        )


def is_finite_vector(value: Sequence[float]) -> bool:
    return all(math.isfinite(v) for v in value)


def find_spawn_point(objects: Iterable[SceneObject]) -> Optional[SceneObject]:
    """
    Find the active spawn point.

    Multiple spawn points are tolerated; the one with the lowest id wins so
    the choice does not depend on collection order.
    """
    spawns = [obj for obj in objects if obj.is_spawn_point]
    if not spawns:
        return None
    return min(spawns, key=lambda obj: obj.id)


def create_default_scene() -> Tuple[SceneObject, ...]:
    """
    Create the default scene: a locked baseplate and a locked spawn location.

    Returns:
        Object collection for a fresh project
    """
    baseplate = SceneObject(
        id=1,
        name="Baseplate",
        kind=ObjectKind.BLOCK,
        position=(0.0, -0.5, 0.0),
        scale=(50.0, 1.0, 50.0),
        color=BASEPLATE_COLOR,
        locked=True,
    )
    spawn = SceneObject(
        id=2,
        name="SpawnLocation",
        kind=ObjectKind.SPAWN_POINT,
        position=(0.0, SPAWN_POINT_HEIGHT, 0.0),
        scale=(4.0, 1.0, 4.0),
        color=SPAWN_POINT_COLOR,
        locked=True,
    )
    return (baseplate, spawn)

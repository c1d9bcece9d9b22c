"""
Scene Store

Owns the live object collection and its undo/redo history.
Every operation is synchronous and in-memory.
"""

from __future__ import annotations

import itertools
import logging
import math
import random
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from ..config.settings import (
    BEHAVIOR_COLOR,
    BLOCK_PALETTE,
    DUPLICATE_OFFSET,
    GROUP_COLOR,
    MAX_HISTORY,
    PLACEMENT_HEIGHT,
    PLACEMENT_RANGE,
    SPAWN_POINT_COLOR,
    SPAWN_POINT_HEIGHT,
)
from ..core.scene import (
    VECTOR_FIELDS,
    ObjectKind,
    SceneObject,
    clamp_scale,
    create_default_scene,
    find_spawn_point,
    is_finite_vector,
    normalize_color,
)
from .editor_history import EditorHistory


logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "color") + VECTOR_FIELDS

_FIELD_VERBS = {
    "position": "Move",
    "scale": "Scale",
    "rotation": "Rotate",
    "name": "Rename",
    "color": "Recolor",
}


class SceneError(RuntimeError):
    """Base class for rejected scene mutations."""


class ProtectedObjectError(SceneError):
    """Raised when deleting locked scaffolding (baseplate, spawn location)."""

    def __init__(self, obj: SceneObject):
        super().__init__(f"'{obj.name}' is part of the scene scaffolding and cannot be deleted")
        self.object_id = obj.id


class SceneStore:
    """
    Ordered collection of scene objects plus snapshot history.

    Discrete edits push exactly one snapshot each. Continuous edits (drags)
    mutate the live collection inside a gesture and push a single snapshot
    when the gesture ends.
    """

    def __init__(
        self,
        objects: Optional[Iterable[SceneObject]] = None,
        max_history: int = MAX_HISTORY,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the store.

        Args:
            objects: Initial collection (defaults to the baseplate + spawn scene)
            max_history: Maximum number of history snapshots
            rng: Random source for placement and colours
        """
        initial = tuple(objects) if objects is not None else create_default_scene()
        self._check_unique_ids(initial)
        self._objects: Tuple[SceneObject, ...] = initial
        self.history = EditorHistory(initial, max_history=max_history)
        self.rng = rng or random.Random()
        self._ids = itertools.count(self._next_free_id(initial))

        # Open continuous-edit gesture
        self._gesture_id: Optional[int] = None
        self._gesture_fields: List[str] = []

        self._on_changed: List[Callable[[Tuple[SceneObject, ...]], None]] = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def objects(self) -> Tuple[SceneObject, ...]:
        """Live object collection (read-only)."""
        return self._objects

    def query(self, object_id: Optional[int]) -> Optional[SceneObject]:
        """Find an object by id; None when absent."""
        if object_id is None:
            return None
        for obj in self._objects:
            if obj.id == object_id:
                return obj
        return None

    def spawn_point(self) -> Optional[SceneObject]:
        return find_spawn_point(self._objects)

    @property
    def in_gesture(self) -> bool:
        return self._gesture_id is not None

    def __len__(self) -> int:
        return len(self._objects)

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------
    def register_change_callback(self, callback: Callable[[Tuple[SceneObject, ...]], None]) -> None:
        """
        Register a callback invoked with the new collection after every change.

        Args:
            callback: Callable that receives the live object tuple
        """
        self._on_changed.append(callback)

    def _set_objects(self, objects: Tuple[SceneObject, ...]) -> None:
        self._objects = objects
        for callback in self._on_changed:
            callback(objects)

    def _commit(self, objects: Tuple[SceneObject, ...], description: str) -> None:
        self._set_objects(objects)
        self.history.record(objects, description)

    # ------------------------------------------------------------------
    # Discrete mutations
    # ------------------------------------------------------------------
    def add_object(self, kind: ObjectKind, placement_hint: Optional[Sequence[float]] = None) -> int:
        """
        Create a new object and record it in history.

        Args:
            kind: Kind of object to create
            placement_hint: Optional world position; otherwise derived from ``kind``

        Returns:
            Id of the new object
        """
        kind = ObjectKind(kind)
        self.end_gesture()

        position, color = self._default_placement(kind)
        if placement_hint is not None:
            position = tuple(float(v) for v in placement_hint)
            if not is_finite_vector(position):
                raise ValueError(f"Placement hint must be finite, got {position}")

        obj = SceneObject(
            id=next(self._ids),
            name=self._default_name(kind),
            kind=kind,
            position=position,
            color=color,
        )
        self._commit(self._objects + (obj,), f"Add {obj.name}")
        logger.debug("Added %s id=%d at %s", kind.value, obj.id, obj.position)
        return obj.id

    def delete_object(self, object_id: int) -> bool:
        """
        Remove an object.

        Returns:
            True if removed, False if no such object

        Raises:
            ProtectedObjectError: If the object is locked scaffolding (state unchanged)
        """
        self.end_gesture()

        obj = self.query(object_id)
        if obj is None:
            logger.debug("Delete ignored, no object with id=%s", object_id)
            return False
        if obj.locked:
            logger.warning("Rejected delete of protected object '%s' (id=%d)", obj.name, obj.id)
            raise ProtectedObjectError(obj)

        remaining = tuple(o for o in self._objects if o.id != object_id)
        self._commit(remaining, f"Delete {obj.name}")
        return True

    def duplicate_object(self, object_id: int) -> Optional[int]:
        """
        Copy an object with a new id, offset so the copy is visible.

        Returns:
            Id of the copy, or None if no such object
        """
        self.end_gesture()

        source = self.query(object_id)
        if source is None:
            logger.debug("Duplicate ignored, no object with id=%s", object_id)
            return None

        position = tuple(p + d for p, d in zip(source.position, DUPLICATE_OFFSET))
        copy = SceneObject(
            id=next(self._ids),
            name=source.name,
            kind=source.kind,
            position=position,
            rotation=source.rotation,
            scale=source.scale,
            color=source.color,
            locked=False,
        )
        self._commit(self._objects + (copy,), f"Duplicate {source.name}")
        return copy.id

    def update_object_field(
        self,
        object_id: int,
        field: str,
        value: Any,
        axis: Optional[int] = None,
        continuous: bool = False,
    ) -> bool:
        """
        Mutate one field of an object.

        Args:
            object_id: Object to edit
            field: One of name, color, position, rotation, scale
            value: New value (a float when ``axis`` is given, a 3-vector otherwise)
            axis: Vector component to edit (0=x, 1=y, 2=z)
            continuous: Part of a drag gesture; the snapshot is deferred to ``end_gesture``

        Returns:
            True if the object exists and was updated

        Raises:
            ValueError: Unknown field or non-finite numeric value
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown field: {field}")

        obj = self.query(object_id)
        if obj is None:
            logger.debug("Update ignored, no object with id=%s", object_id)
            return False

        updated = self._apply_field(obj, field, value, axis)

        if continuous:
            if self._gesture_id != object_id:
                self.end_gesture()
                self.begin_gesture(object_id)
            if field not in self._gesture_fields:
                self._gesture_fields.append(field)
            self._set_objects(self._replace(updated))
            return True

        self.end_gesture()
        if updated == obj:
            return True
        self._commit(self._replace(updated), f"{_FIELD_VERBS[field]} {obj.name}")
        return True

    # ------------------------------------------------------------------
    # Continuous edit gestures
    # ------------------------------------------------------------------
    def begin_gesture(self, object_id: int) -> None:
        """Start a continuous edit on ``object_id`` (closes any open gesture)."""
        if self._gesture_id is not None:
            self.end_gesture()
        self._gesture_id = object_id
        self._gesture_fields = []

    def end_gesture(self) -> bool:
        """
        Finish the open gesture.

        Returns:
            True if a snapshot was pushed (the gesture changed something)
        """
        if self._gesture_id is None:
            return False

        gesture_id, fields = self._gesture_id, self._gesture_fields
        self._gesture_id = None
        self._gesture_fields = []

        if self._objects == self.history.current.objects:
            return False

        obj = self.query(gesture_id)
        name = obj.name if obj is not None else f"#{gesture_id}"
        verb = _FIELD_VERBS[fields[0]] if fields else "Edit"
        self.history.record(self._objects, f"{verb} {name}")
        return True

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def undo(self) -> bool:
        """Step back one snapshot. No-op at the oldest snapshot."""
        self.end_gesture()
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self._set_objects(snapshot.objects)
        return True

    def redo(self) -> bool:
        """Step forward one snapshot. No-op at the newest snapshot."""
        self.end_gesture()
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self._set_objects(snapshot.objects)
        return True

    def replace_objects(self, objects: Iterable[SceneObject]) -> None:
        """Replace the whole collection (e.g. after loading) and reset history."""
        objects = tuple(objects)
        self._check_unique_ids(objects)
        self._gesture_id = None
        self._gesture_fields = []
        self.history.reset(objects)
        self._ids = itertools.count(self._next_free_id(objects))
        self._set_objects(objects)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _replace(self, updated: SceneObject) -> Tuple[SceneObject, ...]:
        return tuple(updated if o.id == updated.id else o for o in self._objects)

    def _apply_field(self, obj: SceneObject, field: str, value: Any, axis: Optional[int]) -> SceneObject:
        if field == "name":
            return obj.with_field("name", str(value))
        if field == "color":
            return obj.with_field("color", normalize_color(str(value)))

        if axis is not None:
            value = float(value)
            if not math.isfinite(value):
                raise ValueError(f"{field} must be finite, got {value}")
            if field == "scale":
                value = clamp_scale(value)
            return obj.with_axis(field, axis, value)

        vector = tuple(float(v) for v in value)
        if len(vector) != 3 or not is_finite_vector(vector):
            raise ValueError(f"{field} must be three finite numbers, got {value}")
        if field == "scale":
            vector = tuple(clamp_scale(v) for v in vector)
        return obj.with_field(field, vector)

    def _default_placement(self, kind: ObjectKind):
        if kind is ObjectKind.BLOCK:
            position = (
                self.rng.uniform(-PLACEMENT_RANGE, PLACEMENT_RANGE),
                PLACEMENT_HEIGHT,
                self.rng.uniform(-PLACEMENT_RANGE, PLACEMENT_RANGE),
            )
            return position, self.rng.choice(BLOCK_PALETTE)
        if kind is ObjectKind.SPAWN_POINT:
            return (0.0, SPAWN_POINT_HEIGHT, 0.0), SPAWN_POINT_COLOR
        if kind is ObjectKind.GROUP:
            return (0.0, 0.0, 0.0), GROUP_COLOR
        return (0.0, 0.0, 0.0), BEHAVIOR_COLOR

    def _default_name(self, kind: ObjectKind) -> str:
        base = "Part" if kind is ObjectKind.BLOCK else kind.value
        taken = {o.name for o in self._objects}
        if base not in taken:
            return base
        for n in itertools.count(2):
            candidate = f"{base}{n}"
            if candidate not in taken:
                return candidate

    @staticmethod
    def _next_free_id(objects: Sequence[SceneObject]) -> int:
        return max((o.id for o in objects), default=0) + 1

    @staticmethod
    def _check_unique_ids(objects: Sequence[SceneObject]) -> None:
        ids = [o.id for o in objects]
        if len(ids) != len(set(ids)):
            raise ValueError("Object ids must be unique")

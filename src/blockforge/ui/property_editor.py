"""
Property Editor

Input boundary for typed property values. Text typed into the properties
panel is parsed and validated here; invalid text never reaches the scene
store and the field reverts to the object's current value.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Dict, Optional, Tuple

from ..core.scene import VECTOR_FIELDS, normalize_color

if TYPE_CHECKING:
    from ..core.scene import SceneObject
    from ..input.controllers.tool_controller import ToolController


logger = logging.getLogger(__name__)

FieldKey = Tuple[str, Optional[int]]


def parse_numeric(text: str) -> Optional[float]:
    """
    Parse a typed number.

    Returns:
        The value, or None for unparseable or non-finite input
    """
    try:
        value = float(text.strip())
    except (AttributeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_color(text: str) -> Optional[str]:
    """Parse ``#rgb`` / ``#rrggbb`` text; None if invalid."""
    try:
        return normalize_color(text)
    except (AttributeError, ValueError):
        return None


def format_value(obj: "SceneObject", field: str, axis: Optional[int] = None) -> str:
    """Display text for one field (or one vector component) of an object."""
    if field in VECTOR_FIELDS:
        return f"{getattr(obj, field)[axis]:.2f}"
    return str(getattr(obj, field))


class PropertyEditor:
    """
    Text buffers for the selected object's properties.

    Buffers follow the selected object whenever it changes (selection switch,
    drag, undo). ``commit`` validates a buffer and forwards valid edits to the
    tool controller as a single discrete edit.
    """

    def __init__(self, controller: "ToolController"):
        self.controller = controller
        self.buffers: Dict[FieldKey, str] = {}
        self._source: Optional["SceneObject"] = None

    @staticmethod
    def field_keys() -> Tuple[FieldKey, ...]:
        keys = [("name", None), ("color", None)]
        for field in VECTOR_FIELDS:
            keys.extend((field, axis) for axis in range(3))
        return tuple(keys)

    def sync(self) -> Optional["SceneObject"]:
        """
        Refresh buffers from the selected object if it changed.

        Returns:
            The selected object, or None
        """
        obj = self.controller.selected_object
        if obj is None:
            self.buffers = {}
        elif obj != self._source:
            self.buffers = {key: format_value(obj, *key) for key in self.field_keys()}
        self._source = obj
        return obj

    def set_text(self, field: str, text: str, axis: Optional[int] = None):
        """Update an edit buffer without committing (typing in progress)."""
        self.buffers[(field, axis)] = text

    def commit(self, field: str, axis: Optional[int] = None) -> bool:
        """
        Validate the buffer for a field and apply it.

        Returns:
            True if the edit reached the scene store
        """
        obj = self.sync()
        if obj is None:
            return False

        key = (field, axis)
        text = self.buffers.get(key, "")

        if field in VECTOR_FIELDS:
            value = parse_numeric(text)
        elif field == "color":
            value = parse_color(text)
        else:
            value = text.strip() or None

        if value is None:
            logger.debug("Rejected %s value %r, reverting", field, text)
            self.buffers[key] = format_value(obj, field, axis)
            return False

        applied = self.controller.commit_field(field, value, axis=axis)
        updated = self.sync()
        if updated is not None:
            # Show the stored value (e.g. clamped scale, normalised colour)
            self.buffers[key] = format_value(updated, field, axis)
        return applied

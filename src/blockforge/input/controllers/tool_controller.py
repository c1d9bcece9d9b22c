"""
Tool Controller

Handles input commands for the editing tools and play mode.
Owns the EditorSession and routes every scene mutation through the SceneStore.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from ...config.settings import (
    DEFAULT_PROJECT_KEY,
    MOVE_DRAG_SENSITIVITY,
    ROTATE_DRAG_SENSITIVITY,
    SCALE_DRAG_SENSITIVITY,
)
from ...core import editor_session
from ...core.editor_session import EditorSession, ToolMode
from ...core.scene import ObjectKind, clamp_scale
from ...tools.scene_store import ProtectedObjectError
from ..input_commands import InputCommand
from ..input_context import InputContext
from .player_controller import PlayerController

if TYPE_CHECKING:
    from ...gameplay.actor import PlaySimulator
    from ...loaders.project_store import ProjectStore
    from ...tools.scene_store import SceneStore
    from ..input_manager import InputManager


logger = logging.getLogger(__name__)

# Scene field each drag tool edits
TOOL_FIELDS = {
    ToolMode.MOVE: "position",
    ToolMode.SCALE: "scale",
    ToolMode.ROTATE: "rotation",
}


class ToolController:
    """
    Tool & selection state machine.

    Responsibilities:
    - Tool switching (Select, Move, Scale, Rotate) while editing
    - Selection from pointer picks
    - Drag gestures mapped onto continuous field edits
    - Editor commands (add, delete, duplicate, undo, redo, save)
    - Entering and leaving play mode

    Every mutation entry point is ignored while the session is PLAYING.
    """

    def __init__(
        self,
        store: "SceneStore",
        simulator: "PlaySimulator",
        input_manager: Optional["InputManager"] = None,
        project_store: Optional["ProjectStore"] = None,
        session: Optional[EditorSession] = None,
    ):
        """
        Initialize tool controller.

        Args:
            store: Scene store holding objects and history
            simulator: Play-mode simulator started/stopped by play toggles
            input_manager: InputManager to register command handlers with
            project_store: Persistence backend for save
            session: Initial session (defaults to a fresh editing session)
        """
        self.store = store
        self.simulator = simulator
        self.input_manager = input_manager
        self.project_store = project_store
        self.session = session or EditorSession()
        self.session = editor_session.with_history_cursor(self.session, store.history.cursor)

        # Axis constraint for drag tools (None = free)
        self.axis: Optional[int] = None

        # Track an active drag gesture
        self.dragging = False

        self.player_controller = PlayerController(input_manager) if input_manager else None
        self._session_callbacks: List[Callable[[EditorSession, EditorSession], None]] = []

        if input_manager is not None:
            self._register_handlers()

    def _register_handlers(self):
        """Register input command handlers."""
        manager = self.input_manager

        # Tools
        manager.register_handler(InputCommand.TOOL_SELECT, lambda: self.select_tool(ToolMode.SELECT))
        manager.register_handler(InputCommand.TOOL_MOVE, lambda: self.select_tool(ToolMode.MOVE))
        manager.register_handler(InputCommand.TOOL_SCALE, lambda: self.select_tool(ToolMode.SCALE))
        manager.register_handler(InputCommand.TOOL_ROTATE, lambda: self.select_tool(ToolMode.ROTATE))
        manager.register_handler(InputCommand.TOOL_AXIS_X, lambda: self.set_axis(0))
        manager.register_handler(InputCommand.TOOL_AXIS_Y, lambda: self.set_axis(1))
        manager.register_handler(InputCommand.TOOL_AXIS_Z, lambda: self.set_axis(2))

        # Editor commands
        manager.register_handler(InputCommand.EDITOR_ADD_BLOCK, lambda: self.add_object(ObjectKind.BLOCK))
        manager.register_handler(InputCommand.EDITOR_ADD_SPAWN, lambda: self.add_object(ObjectKind.SPAWN_POINT))
        manager.register_handler(InputCommand.EDITOR_DELETE, self.delete_selected)
        manager.register_handler(InputCommand.EDITOR_DUPLICATE, self.duplicate_selected)
        manager.register_handler(InputCommand.EDITOR_UNDO, self.undo)
        manager.register_handler(InputCommand.EDITOR_REDO, self.redo)
        manager.register_handler(InputCommand.EDITOR_SAVE_SCENE, self.save)
        manager.register_handler(InputCommand.EDITOR_TOGGLE_PLAY, self.toggle_play)

    # ========================================================================
    # Session State
    # ========================================================================

    def register_session_callback(self, callback: Callable[[EditorSession, EditorSession], None]):
        """
        Register a callback for session changes.

        Args:
            callback: Called as callback(old_session, new_session)
        """
        self._session_callbacks.append(callback)

    def _set_session(self, session: EditorSession):
        old = self.session
        if session == old:
            return
        self.session = session
        for callback in self._session_callbacks:
            callback(old, session)

    def _sync_history_cursor(self):
        self._set_session(editor_session.with_history_cursor(self.session, self.store.history.cursor))

    def _notify(self, message: str):
        logger.info("Notice: %s", message)
        self._set_session(editor_session.post_notice(self.session, message))

    def drain_notices(self) -> tuple:
        """Return pending notices and clear them from the session."""
        notices = self.session.notices
        if notices:
            self._set_session(editor_session.clear_notices(self.session))
        return notices

    @property
    def selected_object(self):
        """Selected SceneObject, or None if nothing (or a deleted object) is selected."""
        return self.store.query(self.session.selection)

    # ========================================================================
    # Tools & Selection
    # ========================================================================

    def select_tool(self, tool: ToolMode) -> bool:
        """
        Choose the active tool.

        Returns:
            True if the tool changed (always False while playing)
        """
        if self.session.is_playing:
            logger.debug("Tool change to %s ignored while playing", tool.name)
            return False
        self._end_drag()
        self._set_session(editor_session.choose_tool(self.session, tool))
        return True

    def set_axis(self, axis: Optional[int]):
        """
        Constrain drags to one axis. Choosing the active axis again frees it.

        Args:
            axis: 0=x, 1=y, 2=z, or None for free dragging
        """
        if self.session.is_playing:
            return
        self.axis = None if axis == self.axis else axis

    def select_object(self, object_id: Optional[int]):
        """Select an object directly (explorer list). Ignored while playing."""
        if self.session.is_playing:
            return
        self._end_drag()
        self._set_session(editor_session.select(self.session, object_id))

    def pointer_down(self, picked_id: Optional[int]):
        """
        Handle a click reported by the viewport.

        Args:
            picked_id: Id of the object under the pointer, or None for empty space
        """
        if self.session.is_playing:
            return
        self._end_drag()

        if picked_id is None:
            if self.session.tool is ToolMode.SELECT:
                self._set_session(editor_session.select(self.session, None))
            return

        self._set_session(editor_session.select(self.session, picked_id))
        if self.session.tool in TOOL_FIELDS:
            self.store.begin_gesture(picked_id)
            self.dragging = True

    def pointer_move(self, dx: float, dy: float) -> bool:
        """
        Apply a drag delta to the selected object with the active tool.

        Move drags x/z (screen x/y) unless an axis is chosen. Scale drags all
        three components together. Rotate spins about y.

        Args:
            dx: Horizontal pointer delta in pixels
            dy: Vertical pointer delta in pixels (positive = down)

        Returns:
            True if the object was edited
        """
        if self.session.is_playing or not self.dragging:
            return False

        field = TOOL_FIELDS.get(self.session.tool)
        obj = self.selected_object
        if field is None or obj is None:
            return False

        value = list(getattr(obj, field))
        if field == "position":
            if self.axis is None:
                value[0] += dx * MOVE_DRAG_SENSITIVITY
                value[2] += dy * MOVE_DRAG_SENSITIVITY
            else:
                value[self.axis] += (dx - dy) * MOVE_DRAG_SENSITIVITY
        elif field == "scale":
            amount = (dx - dy) * SCALE_DRAG_SENSITIVITY
            axes = range(3) if self.axis is None else (self.axis,)
            for axis in axes:
                value[axis] = clamp_scale(value[axis] + amount)
        else:
            axis = 1 if self.axis is None else self.axis
            value[axis] += dx * ROTATE_DRAG_SENSITIVITY

        return self.store.update_object_field(obj.id, field, tuple(value), continuous=True)

    def pointer_up(self):
        """Finish the drag gesture (one history entry per gesture)."""
        self._end_drag()

    def _end_drag(self):
        if not self.dragging:
            return
        self.dragging = False
        if self.store.end_gesture():
            self._sync_history_cursor()

    # ========================================================================
    # Editor Commands
    # ========================================================================

    def add_object(self, kind: ObjectKind, placement_hint=None) -> Optional[int]:
        """Create an object and select it."""
        if self.session.is_playing:
            return None
        self._end_drag()
        object_id = self.store.add_object(kind, placement_hint)
        self._set_session(editor_session.select(self.session, object_id))
        self._sync_history_cursor()
        return object_id

    def delete_selected(self) -> bool:
        """Delete the selected object. Protected objects produce a notice instead."""
        if self.session.is_playing or self.session.selection is None:
            return False
        self._end_drag()

        try:
            removed = self.store.delete_object(self.session.selection)
        except ProtectedObjectError as exc:
            self._notify(str(exc))
            return False

        self._set_session(editor_session.select(self.session, None))
        self._sync_history_cursor()
        return removed

    def duplicate_selected(self) -> Optional[int]:
        """Duplicate the selected object and select the copy."""
        if self.session.is_playing or self.session.selection is None:
            return None
        self._end_drag()

        copy_id = self.store.duplicate_object(self.session.selection)
        if copy_id is not None:
            self._set_session(editor_session.select(self.session, copy_id))
            self._sync_history_cursor()
        return copy_id

    def commit_field(self, field: str, value: Any, axis: Optional[int] = None) -> bool:
        """
        Commit a typed property edit on the selected object (one history entry).

        Args:
            field: Field name
            value: Already-validated value
            axis: Vector component for position/rotation/scale edits
        """
        if self.session.is_playing or self.session.selection is None:
            return False
        self._end_drag()
        updated = self.store.update_object_field(self.session.selection, field, value, axis=axis)
        self._sync_history_cursor()
        return updated

    def undo(self) -> bool:
        """Undo last editor action."""
        if self.session.is_playing:
            return False
        self.dragging = False
        changed = self.store.undo()
        self._sync_history_cursor()
        return changed

    def redo(self) -> bool:
        """Redo last undone action."""
        if self.session.is_playing:
            return False
        self.dragging = False
        changed = self.store.redo()
        self._sync_history_cursor()
        return changed

    def save(self) -> bool:
        """Save the scene to the project store under the session's project key."""
        if self.session.is_playing:
            return False
        if self.project_store is None:
            self._notify("No project store configured")
            return False

        self._end_drag()
        key = self.session.project_key or DEFAULT_PROJECT_KEY
        try:
            self.project_store.save(key, self.store.objects)
        except (OSError, ValueError) as exc:
            logger.error("Failed to save project '%s': %s", key, exc)
            self._notify(f"Could not save '{key}'")
            return False

        self._set_session(editor_session.replace_project_key(self.session, key))
        self._notify(f"Saved '{key}'")
        return True

    def load(self, key: str) -> bool:
        """
        Replace the scene with a stored project.

        Returns:
            False if the key has no stored project or it could not be read
        """
        if self.session.is_playing or self.project_store is None:
            return False
        self._end_drag()

        try:
            objects = self.project_store.load(key)
        except (OSError, ValueError) as exc:
            # ProjectFormatError is a ValueError
            logger.error("Failed to load project '%s': %s", key, exc)
            self._notify(f"Could not load '{key}'")
            return False

        if objects is None:
            self._notify(f"Project '{key}' not found")
            return False

        self.store.replace_objects(objects)
        session = editor_session.replace_project_key(self.session, key)
        session = editor_session.select(session, None)
        self._set_session(editor_session.with_history_cursor(session, self.store.history.cursor))
        return True

    # ========================================================================
    # Play Mode
    # ========================================================================

    def enter_play(self) -> bool:
        """Start play mode: clear selection, spawn the actor, lock editing."""
        if self.session.is_playing:
            return False
        self._end_drag()
        self.axis = None

        self._set_session(editor_session.enter_play(self.session))
        self.simulator.start(self.store.spawn_point())
        if self.input_manager is not None:
            self.input_manager.set_context(InputContext.PLAY)
        return True

    def exit_play(self) -> bool:
        """Stop play mode and return to editing with nothing selected."""
        if self.session.is_editing:
            return False
        self.simulator.stop()
        self._set_session(editor_session.exit_play(self.session))
        if self.input_manager is not None:
            self.input_manager.set_context(InputContext.EDITOR)
        return True

    def toggle_play(self) -> bool:
        """Toggle between editing and playing. Returns True if now playing."""
        if self.session.is_playing:
            self.exit_play()
        else:
            self.enter_play()
        return self.session.is_playing

    # ========================================================================
    # Frame Update
    # ========================================================================

    def update(self, delta_time: float):
        """
        Per-frame update: commit the input snapshot, then step the simulator.

        Args:
            delta_time: Seconds since the previous frame
        """
        if self.input_manager is not None:
            self.input_manager.update(delta_time)

        if not self.session.is_playing:
            return None

        keys = self.player_controller.current_keys() if self.player_controller else frozenset()
        return self.simulator.update(delta_time, keys)

"""
Editor Session

Per-project editor state (active tool, selection, history cursor, edit/play mode)
and the pure transitions that move it between states.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional, Tuple


class EditorMode(Enum):
    """Top-level editor modes."""

    EDITING = auto()   # Scene can be mutated through tools
    PLAYING = auto()   # Kinematic actor runs, scene is read-only


class ToolMode(Enum):
    """Editing tools. Only meaningful while EDITING."""

    SELECT = auto()
    MOVE = auto()
    SCALE = auto()
    ROTATE = auto()


@dataclass(frozen=True)
class EditorSession:
    """
    Snapshot of editor session state.

    Sessions are immutable values; the transition functions below return a
    new session and leave the argument untouched. Selection is held by id only
    so history replacement can never leave it pointing at a stale object.

    Attributes:
        project_key: Project identifier (None for an unsaved new project)
        tool: Active editing tool
        selection: Selected object id, or None
        history_cursor: Position of the store's history cursor
        mode: Editing or playing
        notices: User-visible notices not yet shown
    """

    project_key: Optional[str] = None
    tool: ToolMode = ToolMode.SELECT
    selection: Optional[int] = None
    history_cursor: int = 0
    mode: EditorMode = EditorMode.EDITING
    notices: Tuple[str, ...] = ()

    @property
    def is_playing(self) -> bool:
        return self.mode is EditorMode.PLAYING

    @property
    def is_editing(self) -> bool:
        return self.mode is EditorMode.EDITING


def choose_tool(session: EditorSession, tool: ToolMode) -> EditorSession:
    """Switch tools. Ignored while playing."""
    if session.is_playing:
        return session
    return replace(session, tool=tool)


def select(session: EditorSession, object_id: Optional[int]) -> EditorSession:
    """Set or clear the selection. Ignored while playing."""
    if session.is_playing:
        return session
    return replace(session, selection=object_id)


def enter_play(session: EditorSession) -> EditorSession:
    """Switch to play mode; selection is always cleared."""
    if session.is_playing:
        return session
    return replace(session, mode=EditorMode.PLAYING, selection=None)


def exit_play(session: EditorSession) -> EditorSession:
    """Return to editing with no selection."""
    if session.is_editing:
        return session
    return replace(session, mode=EditorMode.EDITING, selection=None)


def with_history_cursor(session: EditorSession, cursor: int) -> EditorSession:
    return replace(session, history_cursor=cursor)


def post_notice(session: EditorSession, message: str) -> EditorSession:
    """Append a user-visible notice."""
    return replace(session, notices=session.notices + (message,))


def clear_notices(session: EditorSession) -> EditorSession:
    return replace(session, notices=())


def replace_project_key(session: EditorSession, project_key: Optional[str]) -> EditorSession:
    return replace(session, project_key=project_key)

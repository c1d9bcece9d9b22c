"""
Editor History

Undo/redo system for scene editing.
Stores immutable snapshots of the whole object collection on a linear stack.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..config.settings import MAX_HISTORY

if TYPE_CHECKING:
    from ..core.scene import SceneObject


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistorySnapshot:
    """
    Immutable copy of the object collection at one point in time.

    Attributes:
        objects: Object collection (SceneObjects are themselves immutable)
        description: Human-readable description of the edit that produced it
    """

    objects: Tuple["SceneObject", ...]
    description: str


class EditorHistory:
    """
    Linear snapshot history with a cursor.

    Features:
    - Undo/redo by moving the cursor
    - Recording after an undo discards every snapshot past the cursor
    - Maximum history limit (oldest snapshots are dropped first)
    - Operation descriptions for UI
    """

    def __init__(self, initial: Tuple["SceneObject", ...] = (), max_history: int = MAX_HISTORY):
        """
        Initialize editor history.

        Args:
            initial: Object collection the history starts from
            max_history: Maximum number of snapshots to remember
        """
        if max_history < 1:
            raise ValueError("max_history must be at least 1")
        self.max_history = max_history
        self.snapshots: List[HistorySnapshot] = [HistorySnapshot(tuple(initial), "Open")]
        self.cursor = 0

    @property
    def current(self) -> HistorySnapshot:
        """Snapshot at the cursor."""
        return self.snapshots[self.cursor]

    def record(self, objects: Tuple["SceneObject", ...], description: str) -> HistorySnapshot:
        """
        Push a new snapshot after the cursor.

        Args:
            objects: Object collection after the edit
            description: Description of the edit

        Returns:
            The recorded snapshot
        """
        del self.snapshots[self.cursor + 1:]  # No branching redo
        snapshot = HistorySnapshot(tuple(objects), description)
        self.snapshots.append(snapshot)

        if len(self.snapshots) > self.max_history:
            self.snapshots.pop(0)

        self.cursor = len(self.snapshots) - 1
        logger.debug("Recorded: %s (cursor=%d)", description, self.cursor)
        return snapshot

    def undo(self) -> Optional[HistorySnapshot]:
        """
        Move the cursor back one snapshot.

        Returns:
            Snapshot now at the cursor, or None at the oldest snapshot
        """
        if not self.can_undo():
            logger.debug("Nothing to undo")
            return None

        undone = self.current
        self.cursor -= 1
        logger.info("Undone: %s", undone.description)
        return self.current

    def redo(self) -> Optional[HistorySnapshot]:
        """
        Move the cursor forward one snapshot.

        Returns:
            Snapshot now at the cursor, or None at the newest snapshot
        """
        if not self.can_redo():
            logger.debug("Nothing to redo")
            return None

        self.cursor += 1
        logger.info("Redone: %s", self.current.description)
        return self.current

    def can_undo(self) -> bool:
        """Check if there are snapshots to undo."""
        return self.cursor > 0

    def can_redo(self) -> bool:
        """Check if there are snapshots to redo."""
        return self.cursor < len(self.snapshots) - 1

    def get_undo_description(self) -> Optional[str]:
        """Get description of next undo operation."""
        if self.can_undo():
            return self.current.description
        return None

    def get_redo_description(self) -> Optional[str]:
        """Get description of next redo operation."""
        if self.can_redo():
            return self.snapshots[self.cursor + 1].description
        return None

    def reset(self, objects: Tuple["SceneObject", ...], description: str = "Open"):
        """Drop all history and start again from ``objects``."""
        self.snapshots = [HistorySnapshot(tuple(objects), description)]
        self.cursor = 0

    def __len__(self) -> int:
        return len(self.snapshots)

    def __repr__(self):
        return f"<EditorHistory snapshots={len(self.snapshots)} cursor={self.cursor}>"

"""Play-mode actor input controller."""

from __future__ import annotations

from typing import FrozenSet, Iterable

from ...gameplay.actor import MoveKey
from ..input_commands import InputCommand

COMMAND_KEYS = {
    InputCommand.PLAYER_MOVE_FORWARD: MoveKey.FORWARD,
    InputCommand.PLAYER_MOVE_BACKWARD: MoveKey.BACKWARD,
    InputCommand.PLAYER_MOVE_LEFT: MoveKey.LEFT,
    InputCommand.PLAYER_MOVE_RIGHT: MoveKey.RIGHT,
    InputCommand.PLAYER_JUMP: MoveKey.JUMP,
}


class PlayerController:
    """Translate the held-command snapshot into actor movement keys."""

    def __init__(self, input_manager) -> None:
        self.input_manager = input_manager

    @staticmethod
    def keys_from_commands(commands: Iterable[InputCommand]) -> FrozenSet[MoveKey]:
        return frozenset(COMMAND_KEYS[c] for c in commands if c in COMMAND_KEYS)

    def current_keys(self) -> FrozenSet[MoveKey]:
        """Movement keys from this frame's committed snapshot."""
        return self.keys_from_commands(self.input_manager.frame_commands)

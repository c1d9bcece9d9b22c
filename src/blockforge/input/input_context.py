"""
Input Context Management

Determines which commands are available while editing and while playing.
"""

from enum import Enum, auto
from typing import Dict, FrozenSet

from .input_commands import InputCommand


class InputContext(Enum):
    """Input contexts, one per editor mode."""

    EDITOR = auto()    # Tools, selection and scene editing
    PLAY = auto()      # Actor movement only


_SHARED = frozenset({
    InputCommand.EDITOR_TOGGLE_PLAY,
    InputCommand.SYSTEM_QUIT,
})

CONTEXT_COMMANDS: Dict[InputContext, FrozenSet[InputCommand]] = {
    InputContext.EDITOR: _SHARED | {
        InputCommand.CAMERA_ORBIT,
        InputCommand.CAMERA_ZOOM_IN,
        InputCommand.CAMERA_ZOOM_OUT,
        InputCommand.TOOL_SELECT,
        InputCommand.TOOL_MOVE,
        InputCommand.TOOL_SCALE,
        InputCommand.TOOL_ROTATE,
        InputCommand.TOOL_AXIS_X,
        InputCommand.TOOL_AXIS_Y,
        InputCommand.TOOL_AXIS_Z,
        InputCommand.TOOL_USE,
        InputCommand.EDITOR_ADD_BLOCK,
        InputCommand.EDITOR_ADD_SPAWN,
        InputCommand.EDITOR_DELETE,
        InputCommand.EDITOR_DUPLICATE,
        InputCommand.EDITOR_UNDO,
        InputCommand.EDITOR_REDO,
        InputCommand.EDITOR_SAVE_SCENE,
    },
    InputContext.PLAY: _SHARED | {
        InputCommand.PLAYER_MOVE_FORWARD,
        InputCommand.PLAYER_MOVE_BACKWARD,
        InputCommand.PLAYER_MOVE_LEFT,
        InputCommand.PLAYER_MOVE_RIGHT,
        InputCommand.PLAYER_JUMP,
    },
}


class InputContextManager:
    """Tracks the active context and filters commands against it."""

    def __init__(self, context: InputContext = InputContext.EDITOR):
        """Initialize with EDITOR as default context"""
        self.current_context = context

    def set_context(self, context: InputContext):
        self.current_context = context

    def get_current_context(self) -> InputContext:
        return self.current_context

    def is_command_allowed(self, command: InputCommand) -> bool:
        """
        Check if command is allowed in the current context.

        Args:
            command: Command to check

        Returns:
            True if command is allowed
        """
        return command in CONTEXT_COMMANDS[self.current_context]

"""
Input Commands

Defines all editor and play-mode input commands using Command Pattern.
Commands are abstract actions that can be triggered by any input device.
"""

from enum import Enum, auto


class InputCommand(Enum):
    """
    All input commands understood by the editor.

    Commands represent actions, not keys. This allows rebindable controls
    and replaying input in tests.
    """

    # ========================================================================
    # Play Mode Actor
    # ========================================================================
    PLAYER_MOVE_FORWARD = auto()
    PLAYER_MOVE_BACKWARD = auto()
    PLAYER_MOVE_LEFT = auto()
    PLAYER_MOVE_RIGHT = auto()
    PLAYER_JUMP = auto()

    # ========================================================================
    # Editor Camera
    # ========================================================================
    CAMERA_ORBIT = auto()            # Pointer drag with the orbit button
    CAMERA_ZOOM_IN = auto()
    CAMERA_ZOOM_OUT = auto()

    # ========================================================================
    # Tools
    # ========================================================================
    TOOL_SELECT = auto()
    TOOL_MOVE = auto()
    TOOL_SCALE = auto()
    TOOL_ROTATE = auto()
    TOOL_AXIS_X = auto()             # Constrain drags to X
    TOOL_AXIS_Y = auto()             # Constrain drags to Y
    TOOL_AXIS_Z = auto()             # Constrain drags to Z
    TOOL_USE = auto()                # Pointer press in the viewport

    # ========================================================================
    # Scene Editing
    # ========================================================================
    EDITOR_ADD_BLOCK = auto()
    EDITOR_ADD_SPAWN = auto()
    EDITOR_DELETE = auto()           # Delete selected object (Delete/Backspace)
    EDITOR_DUPLICATE = auto()        # Duplicate selected object (Ctrl+D)
    EDITOR_UNDO = auto()             # Undo (Ctrl+Z)
    EDITOR_REDO = auto()             # Redo (Ctrl+Y)
    EDITOR_SAVE_SCENE = auto()       # Save project (Ctrl+S)
    EDITOR_TOGGLE_PLAY = auto()      # Enter/leave play mode (P)

    # ========================================================================
    # System Commands
    # ========================================================================
    SYSTEM_QUIT = auto()


class InputType(Enum):
    """
    Type of input command.

    Determines how the command should be processed.
    """

    CONTINUOUS = auto()   # Held down; sampled once per frame
    INSTANT = auto()      # Fires once on press
    AXIS = auto()         # Analog input (pointer drag)


# Map commands to their types
COMMAND_TYPES = {
    # Held keys are sampled at the start of each frame
    InputCommand.PLAYER_MOVE_FORWARD: InputType.CONTINUOUS,
    InputCommand.PLAYER_MOVE_BACKWARD: InputType.CONTINUOUS,
    InputCommand.PLAYER_MOVE_LEFT: InputType.CONTINUOUS,
    InputCommand.PLAYER_MOVE_RIGHT: InputType.CONTINUOUS,
    InputCommand.PLAYER_JUMP: InputType.CONTINUOUS,

    InputCommand.CAMERA_ORBIT: InputType.AXIS,
    InputCommand.CAMERA_ZOOM_IN: InputType.INSTANT,
    InputCommand.CAMERA_ZOOM_OUT: InputType.INSTANT,
}


def get_command_type(command: InputCommand) -> InputType:
    """
    Get the input type for a command.

    Args:
        command: The input command

    Returns:
        InputType for this command, defaults to INSTANT if not defined
    """
    return COMMAND_TYPES.get(command, InputType.INSTANT)

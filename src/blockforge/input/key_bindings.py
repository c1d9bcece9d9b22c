"""
Key Bindings

Manages rebindable key→command mappings with save/load support.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

from .input_commands import InputCommand

if TYPE_CHECKING:
    from moderngl_window.context.base.keys import BaseKeys


logger = logging.getLogger(__name__)


class KeyBindings:
    """
    Manages key bindings with save/load support.

    Features:
    - Default bindings
    - Ctrl+key bindings separate from plain keys
    - Rebindable keys
    - Save/load to JSON
    - Mouse button support
    """

    def __init__(self, keys: "BaseKeys", config_path: Optional[Path] = None):
        """
        Initialize key bindings.

        Args:
            keys: Window key constants (``wnd.keys``)
            config_path: Optional JSON file with user overrides
        """
        self.keys = keys
        self.config_path = config_path

        # Key code → Command mappings
        self.keyboard_bindings: Dict[int, InputCommand] = {}
        self.ctrl_bindings: Dict[int, InputCommand] = {}
        self.mouse_bindings: Dict[int, InputCommand] = {}

        self._set_default_bindings()

        if self.config_path is not None:
            self.load_bindings()

    def _set_default_bindings(self):
        """Set default key bindings"""
        keys = self.keys

        # ====================================================================
        # Actor Movement (WASD + Space)
        # ====================================================================
        self.keyboard_bindings[keys.W] = InputCommand.PLAYER_MOVE_FORWARD
        self.keyboard_bindings[keys.S] = InputCommand.PLAYER_MOVE_BACKWARD
        self.keyboard_bindings[keys.A] = InputCommand.PLAYER_MOVE_LEFT
        self.keyboard_bindings[keys.D] = InputCommand.PLAYER_MOVE_RIGHT
        self.keyboard_bindings[keys.SPACE] = InputCommand.PLAYER_JUMP

        # ====================================================================
        # Tools
        # ====================================================================
        self.keyboard_bindings[keys.NUMBER_1] = InputCommand.TOOL_SELECT
        self.keyboard_bindings[keys.NUMBER_2] = InputCommand.TOOL_MOVE
        self.keyboard_bindings[keys.NUMBER_3] = InputCommand.TOOL_SCALE
        self.keyboard_bindings[keys.NUMBER_4] = InputCommand.TOOL_ROTATE
        self.keyboard_bindings[keys.X] = InputCommand.TOOL_AXIS_X
        self.keyboard_bindings[keys.Y] = InputCommand.TOOL_AXIS_Y
        self.keyboard_bindings[keys.Z] = InputCommand.TOOL_AXIS_Z

        # ====================================================================
        # Scene Editing
        # ====================================================================
        self.keyboard_bindings[keys.B] = InputCommand.EDITOR_ADD_BLOCK
        self.keyboard_bindings[keys.N] = InputCommand.EDITOR_ADD_SPAWN
        self.keyboard_bindings[keys.DELETE] = InputCommand.EDITOR_DELETE
        self.keyboard_bindings[keys.BACKSPACE] = InputCommand.EDITOR_DELETE
        self.keyboard_bindings[keys.P] = InputCommand.EDITOR_TOGGLE_PLAY
        self.keyboard_bindings[keys.ESCAPE] = InputCommand.SYSTEM_QUIT

        self.ctrl_bindings[keys.Z] = InputCommand.EDITOR_UNDO
        self.ctrl_bindings[keys.Y] = InputCommand.EDITOR_REDO
        self.ctrl_bindings[keys.D] = InputCommand.EDITOR_DUPLICATE
        self.ctrl_bindings[keys.S] = InputCommand.EDITOR_SAVE_SCENE

        # ====================================================================
        # Mouse Bindings
        # ====================================================================
        self.mouse_bindings[1] = InputCommand.TOOL_USE        # Left click
        self.mouse_bindings[2] = InputCommand.CAMERA_ORBIT    # Right drag

    def get_command(self, key: int, ctrl: bool = False, is_mouse: bool = False) -> Optional[InputCommand]:
        """
        Get command for a key or mouse button.

        Args:
            key: Key code or mouse button
            ctrl: True if Ctrl is held
            is_mouse: True if this is a mouse button

        Returns:
            InputCommand if bound, None otherwise
        """
        if is_mouse:
            return self.mouse_bindings.get(key)
        if ctrl:
            return self.ctrl_bindings.get(key)
        return self.keyboard_bindings.get(key)

    def get_keys_for_command(self, command: InputCommand) -> List[int]:
        """Get all plain keys bound to a command."""
        return [key for key, cmd in self.keyboard_bindings.items() if cmd == command]

    def rebind_key(self, command: InputCommand, new_key: int, ctrl: bool = False):
        """
        Rebind a command to a new key, replacing its current keys.

        Args:
            command: Command to rebind
            new_key: New key code
            ctrl: True to bind Ctrl+key
        """
        bindings = self.ctrl_bindings if ctrl else self.keyboard_bindings
        for old_key in [k for k, cmd in bindings.items() if cmd == command]:
            del bindings[old_key]
        bindings[new_key] = command

    def save_bindings(self, path: Optional[Path] = None):
        """Save bindings to JSON (command names keyed by key code)."""
        path = Path(path or self.config_path)
        payload = {
            "keyboard": {str(k): cmd.name for k, cmd in self.keyboard_bindings.items()},
            "ctrl": {str(k): cmd.name for k, cmd in self.ctrl_bindings.items()},
        }
        with path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
        logger.info("Saved key bindings to %s", path)

    def load_bindings(self, path: Optional[Path] = None) -> bool:
        """
        Load user bindings on top of the defaults.

        Returns:
            True if a bindings file was read
        """
        path = Path(path or self.config_path)
        if not path.exists():
            return False

        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
            for section, bindings in (("keyboard", self.keyboard_bindings), ("ctrl", self.ctrl_bindings)):
                for key, name in payload.get(section, {}).items():
                    bindings[int(key)] = InputCommand[name]
        except (OSError, ValueError, KeyError) as exc:
            logger.warning("Ignoring invalid key bindings file %s: %s", path, exc)
            return False

        logger.info("Loaded key bindings from %s", path)
        return True

"""
Input Manager

Central coordinator for the input system. Translates raw input events to commands,
filters by context, and dispatches to registered controllers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, FrozenSet, Optional, Set

from .input_commands import InputCommand, InputType, get_command_type
from .input_context import InputContext, InputContextManager
from .key_bindings import KeyBindings

if TYPE_CHECKING:
    from moderngl_window.context.base.keys import BaseKeys


logger = logging.getLogger(__name__)


class InputManager:
    """
    Central input coordinator.

    Responsibilities:
    - Capture raw input (keyboard, mouse)
    - Translate to InputCommands via KeyBindings
    - Filter by InputContext
    - Dispatch instant commands to registered handlers
    - Publish the held-command snapshot once per frame

    Held (CONTINUOUS) commands are never dispatched from event callbacks.
    They are sampled by ``update()`` at the start of a frame so a key
    transition in the middle of a frame is seen on the next one.

    Usage:
        manager = InputManager(wnd.keys)
        manager.register_handler(InputCommand.EDITOR_UNDO, controller.undo)
        manager.on_key_press(wnd.keys.Z, ctrl=True)
    """

    def __init__(self, keys: "BaseKeys", key_bindings: Optional[KeyBindings] = None):
        """
        Initialize input manager.

        Args:
            keys: Window key constants
            key_bindings: Custom key bindings (default: creates new KeyBindings)
        """
        self.key_bindings = key_bindings or KeyBindings(keys)
        self.context_manager = InputContextManager()

        # Command → Handler callbacks
        self.handlers: Dict[InputCommand, Callable] = {}

        # Currently pressed keys and mouse buttons
        self.pressed_keys: Set[int] = set()
        self.pressed_buttons: Set[int] = set()

        # Held-command snapshot for the current frame
        self.frame_commands: FrozenSet[InputCommand] = frozenset()

    def register_handler(self, command: InputCommand, handler: Callable):
        """
        Register a handler for a command.

        Args:
            command: The command to handle
            handler: Callable to invoke when command is triggered
                    - For INSTANT keys: handler() with no args
                    - For INSTANT mouse buttons: handler(x, y)
                    - For AXIS: handler(dx, dy) with delta values
        """
        self.handlers[command] = handler

    def unregister_handler(self, command: InputCommand):
        """
        Unregister a handler for a command.

        Args:
            command: The command to unregister
        """
        self.handlers.pop(command, None)

    # ------------------------------------------------------------------
    # Raw events
    # ------------------------------------------------------------------
    def on_key_press(self, key: int, ctrl: bool = False):
        """
        Handle key press event.

        Args:
            key: Key code
            ctrl: True if a Ctrl modifier is held
        """
        command = self.key_bindings.get_command(key, ctrl=ctrl)
        if not ctrl:
            self.pressed_keys.add(key)

        if command is None:
            return

        if not self.context_manager.is_command_allowed(command):
            logger.debug("Command not allowed in current context: %s", command)
            return

        if get_command_type(command) == InputType.INSTANT:
            self._execute_command(command)

    def on_key_release(self, key: int):
        """
        Handle key release event.

        Args:
            key: Key code
        """
        self.pressed_keys.discard(key)

    def on_mouse_button_press(self, button: int, x: float, y: float):
        """
        Handle mouse button press.

        Args:
            button: Mouse button (1=left, 2=right, 3=middle)
            x, y: Pointer position in window pixels
        """
        self.pressed_buttons.add(button)

        command = self.key_bindings.get_command(button, is_mouse=True)
        if command is None or not self.context_manager.is_command_allowed(command):
            return

        if get_command_type(command) == InputType.INSTANT:
            self._execute_command(command, x, y)

    def on_mouse_button_release(self, button: int):
        """
        Handle mouse button release.

        Args:
            button: Mouse button
        """
        self.pressed_buttons.discard(button)

    def on_mouse_drag(self, dx: float, dy: float):
        """
        Route pointer drag deltas to AXIS commands bound to held buttons.

        Args:
            dx: Delta X (horizontal movement)
            dy: Delta Y (vertical movement)
        """
        for button in self.pressed_buttons:
            command = self.key_bindings.get_command(button, is_mouse=True)
            if command is None or get_command_type(command) != InputType.AXIS:
                continue
            if self.context_manager.is_command_allowed(command):
                self._execute_command(command, dx, dy)

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------
    def held_commands(self) -> FrozenSet[InputCommand]:
        """Continuous commands whose keys are currently held and allowed."""
        commands = set()
        for key in self.pressed_keys:
            command = self.key_bindings.get_command(key)
            if command is None or get_command_type(command) != InputType.CONTINUOUS:
                continue
            if self.context_manager.is_command_allowed(command):
                commands.add(command)
        return frozenset(commands)

    def update(self, delta_time: float) -> FrozenSet[InputCommand]:
        """
        Commit the held-command snapshot for this frame.

        Call this once at the start of every frame, before simulation.

        Args:
            delta_time: Time since last update

        Returns:
            Snapshot of held continuous commands
        """
        self.frame_commands = self.held_commands()
        return self.frame_commands

    def _execute_command(self, command: InputCommand, *args):
        """
        Execute a command by calling its handler.

        Args:
            command: Command to execute
            *args: Pointer position or deltas for mouse commands
        """
        handler = self.handlers.get(command)
        if handler is None:
            return
        handler(*args)

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------
    def set_context(self, context: InputContext):
        """
        Switch input context and drop held input.

        Args:
            context: Context to activate
        """
        if context == self.context_manager.get_current_context():
            return
        self.context_manager.set_context(context)
        self.clear_all_input()

    def get_current_context(self) -> InputContext:
        """
        Get the current input context.

        Returns:
            Current context
        """
        return self.context_manager.get_current_context()

    def clear_all_input(self):
        """
        Clear all input state (pressed keys, buttons, frame snapshot).

        Useful when changing contexts to prevent stuck keys.
        """
        self.pressed_keys.clear()
        self.pressed_buttons.clear()
        self.frame_commands = frozenset()

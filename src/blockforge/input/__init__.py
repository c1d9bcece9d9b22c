"""
Input System - Command Pattern Architecture

Provides a rebindable input system with editor and play contexts.
"""

from .input_manager import InputManager
from .input_commands import InputCommand, InputType
from .input_context import InputContext, InputContextManager
from .key_bindings import KeyBindings
from .object_selector import ObjectSelector
from .controllers import PlayerController, ToolController

__all__ = [
    "InputManager",
    "InputCommand",
    "InputType",
    "InputContext",
    "InputContextManager",
    "KeyBindings",
    "ObjectSelector",
    "PlayerController",
    "ToolController",
]

"""
Input Controllers

Controllers translate input commands to specific actions.
"""

from .player_controller import PlayerController
from .tool_controller import ToolController

__all__ = ['PlayerController', 'ToolController']

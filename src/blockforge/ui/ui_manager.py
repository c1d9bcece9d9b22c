"""
ImGui UI Manager

Owns the ImGui context and renderer, and routes window input to ImGui.
"""

from __future__ import annotations

from typing import Tuple

import imgui
from imgui.integrations.opengl import ProgrammablePipelineRenderer
import moderngl


class UIManager:
    """
    ImGui integration for the editor window.

    Responsibilities:
    - Initialize and tear down the ImGui context
    - Route mouse, keyboard and text input to ImGui
    - Report whether ImGui wants the input (so the viewport ignores it)
    """

    def __init__(self, ctx: moderngl.Context, window_size: Tuple[int, int]):
        """
        Initialize UI manager.

        Args:
            ctx: ModernGL context
            window_size: Initial window size (width, height)
        """
        self.ctx = ctx
        self.width, self.height = window_size

        imgui.create_context()
        io = imgui.get_io()
        io.display_size = window_size
        io.ini_file_name = None

        self.renderer = ProgrammablePipelineRenderer()

    def handle_mouse_position(self, x: float, y: float) -> None:
        imgui.get_io().mouse_pos = (x, y)

    def handle_mouse_button(self, button: int, pressed: bool) -> None:
        """
        Handle mouse button events.

        Args:
            button: Window button code (1=left, 2=right, 3=middle)
            pressed: True if pressed, False if released
        """
        io = imgui.get_io()
        index = button - 1
        if 0 <= index < 3:
            io.mouse_down[index] = pressed

    def handle_mouse_scroll(self, x_offset: float, y_offset: float) -> None:
        io = imgui.get_io()
        io.mouse_wheel_h = x_offset
        io.mouse_wheel = y_offset

    def handle_keyboard_event(self, key: int, pressed: bool) -> None:
        io = imgui.get_io()
        if 0 <= key < len(io.keys_down):
            io.keys_down[key] = pressed

    def handle_character_input(self, char: str) -> None:
        imgui.get_io().add_input_character(ord(char))

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        imgui.get_io().display_size = (width, height)

    def wants_mouse(self) -> bool:
        return imgui.get_io().want_capture_mouse

    def wants_keyboard(self) -> bool:
        return imgui.get_io().want_capture_keyboard

    def start_frame(self) -> None:
        imgui.new_frame()

    def render(self) -> None:
        """Render the ImGui draw list on top of the scene."""
        imgui.render()
        self.renderer.render(imgui.get_draw_data())

    def shutdown(self) -> None:
        self.renderer.shutdown()

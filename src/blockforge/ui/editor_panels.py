"""
Editor Panels

Toolbar, explorer and properties panels drawn with ImGui.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

import imgui

from ..core.editor_session import ToolMode
from ..core.scene import ObjectKind
from .property_editor import PropertyEditor

if TYPE_CHECKING:
    from ..input.controllers.tool_controller import ToolController


TOOLBAR_HEIGHT = 64
PANEL_WIDTH = 300
NOTICE_SECONDS = 3.0

AXIS_LABELS = ("X", "Y", "Z")


class EditorPanels:
    """Draws the editor UI and forwards actions to the tool controller."""

    def __init__(self, controller: "ToolController"):
        self.controller = controller
        self.properties = PropertyEditor(controller)

        # (message, seconds left)
        self._notices: List[Tuple[str, float]] = []

    def update(self, delta_time: float) -> None:
        """Collect new notices and expire old ones."""
        for message in self.controller.drain_notices():
            self._notices.append((message, NOTICE_SECONDS))
        self._notices = [(m, t - delta_time) for m, t in self._notices if t - delta_time > 0]

    def draw(self, screen_width: int, screen_height: int) -> None:
        self._draw_toolbar(screen_width)
        if not self.controller.session.is_playing:
            self._draw_explorer(screen_height)
            self._draw_properties(screen_width, screen_height)
        self._draw_notices(screen_width, screen_height)

    # ========================================================================
    # Toolbar
    # ========================================================================

    def _draw_toolbar(self, screen_width: int) -> None:
        controller = self.controller
        session = controller.session

        imgui.set_next_window_position(0, 0, imgui.ALWAYS)
        imgui.set_next_window_size(screen_width, TOOLBAR_HEIGHT, imgui.ALWAYS)
        imgui.begin(
            "Toolbar##toolbar",
            flags=imgui.WINDOW_NO_TITLE_BAR | imgui.WINDOW_NO_RESIZE | imgui.WINDOW_NO_MOVE,
        )

        if session.is_playing:
            if imgui.button("Stop", 80, 30):
                controller.exit_play()
            imgui.same_line()
            imgui.text("WASD to move, Space to jump")
            imgui.end()
            return

        for tool in ToolMode:
            label = f"[{tool.name.title()}]" if tool is session.tool else tool.name.title()
            if imgui.button(f"{label}##tool_{tool.name}", 80, 30):
                controller.select_tool(tool)
            imgui.same_line()

        axis = "Free" if controller.axis is None else AXIS_LABELS[controller.axis]
        imgui.text(f"Axis: {axis}")
        imgui.same_line()

        if imgui.button("Add Part", 90, 30):
            controller.add_object(ObjectKind.BLOCK)
        imgui.same_line()
        if imgui.button("Add Spawn", 90, 30):
            controller.add_object(ObjectKind.SPAWN_POINT)
        imgui.same_line()

        history = controller.store.history
        if imgui.button("Undo", 60, 30):
            controller.undo()
        if history.can_undo() and imgui.is_item_hovered():
            imgui.set_tooltip(f"Undo {history.get_undo_description()}")
        imgui.same_line()
        if imgui.button("Redo", 60, 30):
            controller.redo()
        if history.can_redo() and imgui.is_item_hovered():
            imgui.set_tooltip(f"Redo {history.get_redo_description()}")
        imgui.same_line()

        if imgui.button("Save", 60, 30):
            controller.save()
        imgui.same_line()
        if imgui.button("Play", 80, 30):
            controller.enter_play()

        imgui.end()

    # ========================================================================
    # Explorer
    # ========================================================================

    def _draw_explorer(self, screen_height: int) -> None:
        controller = self.controller

        imgui.set_next_window_position(0, TOOLBAR_HEIGHT, imgui.ALWAYS)
        imgui.set_next_window_size(PANEL_WIDTH, screen_height - TOOLBAR_HEIGHT, imgui.ALWAYS)
        imgui.begin("Explorer##explorer", flags=imgui.WINDOW_NO_MOVE | imgui.WINDOW_NO_RESIZE)

        for obj in controller.store.objects:
            selected = obj.id == controller.session.selection
            clicked, _ = imgui.selectable(f"{obj.name} ({obj.kind.value})##obj_{obj.id}", selected)
            if clicked:
                controller.select_object(obj.id)

        imgui.end()

    # ========================================================================
    # Properties
    # ========================================================================

    def _draw_properties(self, screen_width: int, screen_height: int) -> None:
        obj = self.properties.sync()

        imgui.set_next_window_position(screen_width - PANEL_WIDTH, TOOLBAR_HEIGHT, imgui.ALWAYS)
        imgui.set_next_window_size(PANEL_WIDTH, screen_height - TOOLBAR_HEIGHT, imgui.ALWAYS)
        imgui.begin("Properties##properties", flags=imgui.WINDOW_NO_MOVE | imgui.WINDOW_NO_RESIZE)

        if obj is None:
            imgui.text_wrapped("Select an object to edit its properties.")
            imgui.end()
            return

        imgui.text(f"{obj.kind.value} #{obj.id}")
        imgui.separator()

        self._text_field("Name", "name")
        self._text_field("Color", "color")

        for field in ("position", "rotation", "scale"):
            if imgui.collapsing_header(field.title(), True)[0]:
                for axis, label in enumerate(AXIS_LABELS):
                    self._text_field(f"{label}##{field}", field, axis)

        imgui.separator()
        if imgui.button("Duplicate", 120, 30):
            self.controller.duplicate_selected()
        imgui.same_line()
        if imgui.button("Delete", 120, 30):
            self.controller.delete_selected()

        imgui.end()

    def _text_field(self, label: str, field: str, axis=None) -> None:
        text = self.properties.buffers.get((field, axis), "")
        entered, text = imgui.input_text(
            label,
            text,
            64,
            imgui.INPUT_TEXT_ENTER_RETURNS_TRUE,
        )
        self.properties.set_text(field, text, axis)
        if entered:
            self.properties.commit(field, axis)

    # ========================================================================
    # Notices
    # ========================================================================

    def _draw_notices(self, screen_width: int, screen_height: int) -> None:
        if not self._notices:
            return

        imgui.set_next_window_position(screen_width / 2 - 200, screen_height - 80, imgui.ALWAYS)
        imgui.set_next_window_size(400, 0, imgui.ALWAYS)
        imgui.begin(
            "Notices##notices",
            flags=imgui.WINDOW_NO_TITLE_BAR | imgui.WINDOW_NO_INPUTS | imgui.WINDOW_ALWAYS_AUTO_RESIZE,
        )
        for message, _ in self._notices:
            imgui.text_wrapped(message)
        imgui.end()

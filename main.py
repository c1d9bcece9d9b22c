#!/usr/bin/env python3
"""
BlockForge Editor - Main Entry Point

Block-based 3D scene editor with undo/redo and a kinematic play mode.
"""

import logging

import moderngl
import moderngl_window as mglw
from pyrr import Vector3

from blockforge import (
    # Configuration
    WINDOW_SIZE, ASPECT_RATIO, GL_VERSION, WINDOW_TITLE, RESIZABLE,
    EDITOR_CAMERA_POSITION, EDITOR_CAMERA_TARGET, DEFAULT_FOV, ORBIT_ZOOM_STEP,
    KEY_BINDINGS_FILE,
    # Core
    Camera, OrbitRig, EditorSession,
    # Scene editing
    SceneStore,
    # Play mode
    PlaySimulator,
    # Input
    InputManager, KeyBindings, ToolController,
    # Persistence
    ProjectStore,
    # Viewport
    ViewportAdapter,
)
from blockforge.input.input_commands import InputCommand
from blockforge.rendering.scene_renderer import SceneRenderer
from blockforge.ui.editor_panels import EditorPanels
from blockforge.ui.ui_manager import UIManager


logger = logging.getLogger(__name__)

LEFT_BUTTON = 1


class BlockForgeEditor(mglw.WindowConfig):
    """Main editor window"""

    gl_version = GL_VERSION
    title = WINDOW_TITLE
    window_size = WINDOW_SIZE
    aspect_ratio = ASPECT_RATIO
    resizable = RESIZABLE

    @classmethod
    def add_arguments(cls, parser):
        parser.add_argument(
            "--project",
            default=None,
            help="Project key to open from the project store",
        )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        self.ctx.enable(moderngl.DEPTH_TEST)

        # Editing camera (orbit) and play camera (follow, owned by the simulator)
        self.camera = Camera(
            position=Vector3(EDITOR_CAMERA_POSITION),
            target=Vector3(EDITOR_CAMERA_TARGET),
            fov=DEFAULT_FOV,
        )
        self.orbit_rig = OrbitRig(self.camera)
        self.simulator = PlaySimulator(self.camera)

        # Input system
        self.wnd.mouse_exclusivity = False
        self.wnd.cursor = True
        self.wnd.exit_key = None
        key_bindings = KeyBindings(self.wnd.keys, config_path=KEY_BINDINGS_FILE)
        self.input_manager = InputManager(self.wnd.keys, key_bindings)

        # Scene store, persistence and controller
        self.project_store = ProjectStore()
        self.store = SceneStore()
        self.controller = ToolController(
            self.store,
            self.simulator,
            input_manager=self.input_manager,
            project_store=self.project_store,
            session=EditorSession(project_key=self.argv.project),
        )
        self.controller.register_session_callback(self._on_session_changed)

        if self.argv.project:
            self.controller.load(self.argv.project)

        # Viewport
        self.viewport = ViewportAdapter(
            self.camera,
            on_pick=self.controller.pointer_down,
            viewport_size=self.wnd.size,
        )
        self.renderer = SceneRenderer(self.ctx)

        # UI (ImGui)
        self.ui_manager = UIManager(self.ctx, self.wnd.size)
        self.panels = EditorPanels(self.controller)

        self.input_manager.register_handler(InputCommand.TOOL_USE, self.viewport.report_pick)
        self.input_manager.register_handler(InputCommand.CAMERA_ORBIT, self.orbit_rig.apply_look_input)
        self.input_manager.register_handler(InputCommand.CAMERA_ZOOM_IN, lambda: self.orbit_rig.zoom(-ORBIT_ZOOM_STEP))
        self.input_manager.register_handler(InputCommand.CAMERA_ZOOM_OUT, lambda: self.orbit_rig.zoom(ORBIT_ZOOM_STEP))
        self.input_manager.register_handler(InputCommand.SYSTEM_QUIT, self.wnd.close)

        logger.info("Editor ready with %d objects", len(self.store))

    def _on_session_changed(self, old: EditorSession, new: EditorSession):
        """Swap camera rigs when play mode starts or stops."""
        if old.mode == new.mode:
            return
        if new.is_playing:
            self.orbit_rig.disable()
            self.simulator.camera_rig.enable()
        else:
            self.simulator.camera_rig.disable()
            self.orbit_rig.enable()
            self.orbit_rig.update(0.0)

    def on_update(self, time, frametime):
        """
        Update editor logic.

        Args:
            time: Total elapsed time (seconds)
            frametime: Time since last frame (seconds)
        """
        # Input snapshot, then simulation
        self.controller.update(frametime)
        self.panels.update(frametime)

    def on_render(self, time, frametime):
        """
        Render a frame.

        Args:
            time: Total elapsed time (seconds)
            frametime: Time since last frame (seconds)
        """
        self.ui_manager.start_frame()
        self.on_update(time, frametime)

        session = self.controller.session
        actor_position = self.simulator.get_position() if self.simulator.running else None
        drawables = self.viewport.build_drawables(session, self.store, actor_position)
        self.renderer.render(self.camera, drawables, self.wnd.viewport)

        self.panels.draw(int(self.wnd.width), int(self.wnd.height))
        self.ui_manager.render()

    def on_mouse_position_event(self, x: int, y: int, dx: int, dy: int):
        self.ui_manager.handle_mouse_position(x, y)

    def on_mouse_drag_event(self, x: int, y: int, dx: int, dy: int):
        """
        Handle mouse drag.

        Args:
            x, y: Mouse position
            dx, dy: Mouse delta
        """
        self.ui_manager.handle_mouse_position(x, y)
        if self.ui_manager.wants_mouse():
            return

        # Left drag edits with the active tool, right drag orbits
        if LEFT_BUTTON in self.input_manager.pressed_buttons:
            self.controller.pointer_move(dx, dy)
        self.input_manager.on_mouse_drag(dx, dy)

    def on_mouse_press_event(self, x: int, y: int, button: int):
        """
        Handle mouse button press.

        Args:
            x, y: Mouse position
            button: Mouse button (1=left, 2=right, 3=middle)
        """
        self.ui_manager.handle_mouse_button(button, True)
        if self.ui_manager.wants_mouse():
            return
        self.input_manager.on_mouse_button_press(button, x, y)

    def on_mouse_release_event(self, x: int, y: int, button: int):
        self.ui_manager.handle_mouse_button(button, False)
        self.input_manager.on_mouse_button_release(button)
        if button == LEFT_BUTTON:
            self.controller.pointer_up()

    def on_mouse_scroll_event(self, x_offset: float, y_offset: float):
        """
        Handle mouse wheel scroll.

        Args:
            x_offset: Horizontal scroll delta
            y_offset: Vertical scroll delta (positive = up, negative = down)
        """
        self.ui_manager.handle_mouse_scroll(x_offset, y_offset)
        if self.ui_manager.wants_mouse() or self.controller.session.is_playing:
            return
        self.orbit_rig.zoom(-y_offset * ORBIT_ZOOM_STEP)

    def on_unicode_char_entered(self, char: str):
        self.ui_manager.handle_character_input(char)

    def on_resize(self, width: int, height: int):
        """Handle window resize events."""
        self.ui_manager.resize(width, height)
        self.viewport.resize(width, height)

    def on_key_event(self, key, action, modifiers):
        """
        Handle keyboard events.

        Args:
            key: Key code
            action: Action (press, release, repeat)
            modifiers: Modifier keys (shift, ctrl, etc.)
        """
        keys = self.wnd.keys
        pressed = action == keys.ACTION_PRESS
        self.ui_manager.handle_keyboard_event(key, pressed)

        if pressed:
            if self.ui_manager.wants_keyboard():
                return
            self.input_manager.on_key_press(key, ctrl=bool(modifiers.ctrl))
        elif action == keys.ACTION_RELEASE:
            self.input_manager.on_key_release(key)

    def on_close(self):
        self.ui_manager.shutdown()
        self.renderer.release()


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    mglw.run_window_config(BlockForgeEditor)

"""Tests for the tool & selection controller"""

import numpy as np
import pytest

from blockforge.config.settings import (
    MOVE_DRAG_SENSITIVITY,
    ROTATE_DRAG_SENSITIVITY,
    SCALE_EPSILON,
)
from blockforge.core.editor_session import EditorMode, EditorSession, ToolMode
from blockforge.core.scene import ObjectKind
from blockforge.input.controllers import ToolController
from blockforge.input.input_context import InputContext
from blockforge.input.input_manager import InputManager
from blockforge.loaders.project_store import ProjectStore


@pytest.fixture
def controller(store, simulator):
    return ToolController(store, simulator)


@pytest.fixture
def block_id(controller):
    """A block at the origin, selected."""
    return controller.add_object(ObjectKind.BLOCK, placement_hint=(0.0, 0.0, 0.0))


def test_initial_session(controller):
    session = controller.session
    assert session.tool is ToolMode.SELECT
    assert session.mode is EditorMode.EDITING
    assert session.selection is None
    assert session.history_cursor == 0


def test_selection_clears_on_play(controller):
    controller.pointer_down(2)
    assert controller.session.selection == 2

    controller.enter_play()
    assert controller.session.selection is None

    controller.exit_play()
    assert controller.session.selection is None
    assert controller.session.is_editing


def test_click_selects_regardless_of_tool(controller):
    controller.select_tool(ToolMode.ROTATE)
    controller.pointer_down(1)
    controller.pointer_up()
    assert controller.session.selection == 1


def test_click_on_empty_space(controller):
    controller.pointer_down(2)
    controller.pointer_down(None)
    assert controller.session.selection is None

    controller.pointer_down(2)
    controller.pointer_up()
    controller.select_tool(ToolMode.MOVE)
    controller.pointer_down(None)
    assert controller.session.selection == 2


def test_tool_choice_rejected_while_playing(controller):
    controller.select_tool(ToolMode.MOVE)
    controller.enter_play()

    assert not controller.select_tool(ToolMode.SCALE)
    controller.exit_play()
    assert controller.session.tool is ToolMode.MOVE


def test_mutations_ignored_while_playing(controller, store):
    controller.pointer_down(1)
    controller.enter_play()
    before = store.objects

    assert controller.add_object(ObjectKind.BLOCK) is None
    assert not controller.delete_selected()
    assert controller.duplicate_selected() is None
    assert not controller.commit_field("name", "Renamed")
    assert not controller.undo()
    assert not controller.redo()
    assert not controller.save()
    controller.pointer_down(1)

    assert store.objects == before
    assert controller.session.selection is None


def test_enter_play_spawns_actor(controller, simulator):
    assert controller.enter_play()
    assert not controller.enter_play()

    assert simulator.running
    assert np.allclose(np.asarray(simulator.state.position), (0.0, 2.5, 0.0))

    assert controller.exit_play()
    assert not simulator.running
    assert not controller.exit_play()


def test_toggle_play(controller):
    assert controller.toggle_play()
    assert controller.session.is_playing
    assert not controller.toggle_play()
    assert controller.session.is_editing


def test_move_drag_is_one_history_entry(controller, store, block_id):
    length = len(store.history)
    controller.select_tool(ToolMode.MOVE)

    controller.pointer_down(block_id)
    controller.pointer_move(10, 0)
    controller.pointer_move(0, 20)
    assert len(store.history) == length
    controller.pointer_up()

    position = store.query(block_id).position
    assert position == pytest.approx((10 * MOVE_DRAG_SENSITIVITY, 0.0, 20 * MOVE_DRAG_SENSITIVITY))
    assert len(store.history) == length + 1
    assert controller.session.history_cursor == store.history.cursor

    controller.undo()
    assert store.query(block_id).position == (0.0, 0.0, 0.0)


def test_axis_constrained_move(controller, store, block_id):
    controller.select_tool(ToolMode.MOVE)
    controller.set_axis(1)

    controller.pointer_down(block_id)
    controller.pointer_move(0, -10)
    controller.pointer_up()

    assert store.query(block_id).position == pytest.approx((0.0, 10 * MOVE_DRAG_SENSITIVITY, 0.0))


def test_set_axis_toggles(controller):
    controller.set_axis(0)
    assert controller.axis == 0
    controller.set_axis(0)
    assert controller.axis is None


def test_scale_drag_clamps_positive(controller, store, block_id):
    controller.select_tool(ToolMode.SCALE)

    controller.pointer_down(block_id)
    controller.pointer_move(-1000, 0)
    controller.pointer_up()

    assert store.query(block_id).scale == (SCALE_EPSILON,) * 3


def test_rotate_drag_spins_about_y(controller, store, block_id):
    controller.select_tool(ToolMode.ROTATE)

    controller.pointer_down(block_id)
    controller.pointer_move(50, 30)
    controller.pointer_up()

    assert store.query(block_id).rotation == pytest.approx((0.0, 50 * ROTATE_DRAG_SENSITIVITY, 0.0))


def test_select_tool_ignores_drag(controller, store, block_id):
    controller.pointer_down(block_id)
    assert not controller.pointer_move(10, 10)
    controller.pointer_up()
    assert store.query(block_id).position == (0.0, 0.0, 0.0)


def test_click_without_drag_records_nothing(controller, store, block_id):
    length = len(store.history)
    controller.select_tool(ToolMode.MOVE)
    controller.pointer_down(block_id)
    controller.pointer_up()
    assert len(store.history) == length


def test_click_during_open_drag_records_it(controller, store, block_id):
    length = len(store.history)
    controller.select_tool(ToolMode.MOVE)

    controller.pointer_down(block_id)
    controller.pointer_move(10, 0)
    # No pointer_up: the next click closes the drag
    controller.pointer_down(block_id)

    assert len(store.history) == length + 1
    assert controller.session.history_cursor == store.history.cursor

    controller.pointer_up()
    assert len(store.history) == length + 1


def test_delete_protected_posts_notice(controller, store):
    controller.pointer_down(1)
    before = store.objects

    assert not controller.delete_selected()
    assert store.objects == before
    assert controller.session.selection == 1

    notices = controller.drain_notices()
    assert len(notices) == 1
    assert "Baseplate" in notices[0]
    assert controller.drain_notices() == ()


def test_delete_selected(controller, store, block_id):
    assert controller.session.selection == block_id

    assert controller.delete_selected()
    assert store.query(block_id) is None
    assert controller.session.selection is None


def test_selection_survives_undo_of_its_object(controller, store, block_id):
    controller.undo()

    assert controller.session.selection == block_id
    assert controller.selected_object is None


def test_duplicate_selects_copy(controller, store, block_id):
    copy_id = controller.duplicate_selected()

    assert copy_id != block_id
    assert controller.session.selection == copy_id
    assert store.query(copy_id).position == (2.0, 0.0, 2.0)


def test_commit_field(controller, store, block_id):
    assert controller.commit_field("position", 4.0, axis=2)
    assert store.query(block_id).position == (0.0, 0.0, 4.0)
    assert store.history.get_undo_description() == "Move Part"


def test_session_callbacks(controller):
    changes = []
    controller.register_session_callback(lambda old, new: changes.append((old.mode, new.mode)))

    controller.enter_play()
    controller.exit_play()

    assert (EditorMode.EDITING, EditorMode.PLAYING) in changes
    assert changes[-1] == (EditorMode.PLAYING, EditorMode.EDITING)


def test_update_drives_simulator_only_while_playing(controller, simulator):
    assert controller.update(0.1) is None

    controller.enter_play()
    state = controller.update(0.1)
    assert state is simulator.state


def test_save_and_load(tmp_path, store, simulator):
    project_store = ProjectStore(tmp_path)
    controller = ToolController(store, simulator, project_store=project_store)
    block_id = controller.add_object(ObjectKind.BLOCK, placement_hint=(1.0, 2.0, 3.0))

    assert controller.save()
    assert controller.session.project_key == "untitled"
    assert (tmp_path / "untitled.json").exists()
    assert controller.drain_notices() == ("Saved 'untitled'",)

    controller.delete_selected()
    assert controller.load("untitled")
    assert store.query(block_id).position == (1.0, 2.0, 3.0)
    assert not store.history.can_undo()
    assert controller.session.selection is None

    assert not controller.load("missing")
    assert controller.drain_notices() == ("Project 'missing' not found",)


def test_save_without_project_store(controller):
    assert not controller.save()
    assert controller.drain_notices() == ("No project store configured",)


def test_save_with_invalid_key_keeps_session(tmp_path, store, simulator):
    controller = ToolController(
        store,
        simulator,
        project_store=ProjectStore(tmp_path),
        session=EditorSession(project_key="my game"),
    )
    length = len(store.history)

    assert not controller.save()
    assert controller.drain_notices() == ("Could not save 'my game'",)
    assert controller.session.project_key == "my game"
    assert len(store.history) == length
    assert list(tmp_path.iterdir()) == []


def test_load_with_invalid_key_keeps_scene(tmp_path, store, simulator):
    controller = ToolController(store, simulator, project_store=ProjectStore(tmp_path))
    controller.add_object(ObjectKind.BLOCK)
    before = store.objects
    length = len(store.history)

    assert not controller.load("my game")
    assert controller.drain_notices() == ("Could not load 'my game'",)
    assert store.objects == before
    assert len(store.history) == length
    assert controller.session.project_key is None


def test_load_malformed_project_keeps_scene(tmp_path, store, simulator):
    (tmp_path / "broken.json").write_text("{not json")
    controller = ToolController(store, simulator, project_store=ProjectStore(tmp_path))
    block_id = controller.add_object(ObjectKind.BLOCK)
    before = store.objects
    length = len(store.history)

    assert not controller.load("broken")
    assert controller.drain_notices() == ("Could not load 'broken'",)
    assert store.objects == before
    assert len(store.history) == length
    assert controller.session.selection == block_id


# ----------------------------------------------------------------------------
# Keyboard routing
# ----------------------------------------------------------------------------

@pytest.fixture
def wired(keys, store, simulator):
    manager = InputManager(keys)
    return manager, ToolController(store, simulator, input_manager=manager)


def test_number_keys_choose_tools(keys, wired):
    manager, controller = wired

    manager.on_key_press(keys.NUMBER_2)
    assert controller.session.tool is ToolMode.MOVE
    manager.on_key_press(keys.NUMBER_4)
    assert controller.session.tool is ToolMode.ROTATE


def test_ctrl_shortcuts(keys, wired, store):
    manager, controller = wired

    manager.on_key_press(keys.B)
    assert len(store) == 3

    manager.on_key_press(keys.D, ctrl=True)
    assert len(store) == 4

    manager.on_key_press(keys.Z, ctrl=True)
    assert len(store) == 3
    manager.on_key_press(keys.Y, ctrl=True)
    assert len(store) == 4

    manager.on_key_press(keys.DELETE)
    assert len(store) == 3


def test_play_key_switches_context_and_moves_actor(keys, wired, simulator):
    manager, controller = wired

    manager.on_key_press(keys.P)
    assert controller.session.is_playing
    assert manager.get_current_context() == InputContext.PLAY

    # Tool keys are not available while playing
    manager.on_key_press(keys.NUMBER_3)
    assert controller.session.tool is ToolMode.SELECT

    manager.on_key_press(keys.W)
    controller.update(0.1)
    assert simulator.state.position[2] == pytest.approx(-1.0)

    manager.on_key_press(keys.P)
    assert controller.session.is_editing
    assert manager.get_current_context() == InputContext.EDITOR
    assert manager.pressed_keys == set()

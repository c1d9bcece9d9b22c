"""Tests for key bindings, input contexts and the input manager"""

import json

from blockforge.input.controllers import PlayerController
from blockforge.gameplay.actor import MoveKey
from blockforge.input.input_commands import InputCommand, InputType, get_command_type
from blockforge.input.input_context import InputContext, InputContextManager
from blockforge.input.input_manager import InputManager
from blockforge.input.key_bindings import KeyBindings


def test_command_types():
    assert get_command_type(InputCommand.PLAYER_MOVE_FORWARD) == InputType.CONTINUOUS
    assert get_command_type(InputCommand.CAMERA_ORBIT) == InputType.AXIS
    assert get_command_type(InputCommand.EDITOR_UNDO) == InputType.INSTANT


def test_default_bindings(keys):
    bindings = KeyBindings(keys)

    assert bindings.get_command(keys.NUMBER_1) == InputCommand.TOOL_SELECT
    assert bindings.get_command(keys.P) == InputCommand.EDITOR_TOGGLE_PLAY
    assert bindings.get_command(keys.DELETE) == InputCommand.EDITOR_DELETE
    assert bindings.get_command(1, is_mouse=True) == InputCommand.TOOL_USE


def test_ctrl_bindings_are_separate(keys):
    bindings = KeyBindings(keys)

    assert bindings.get_command(keys.Z) == InputCommand.TOOL_AXIS_Z
    assert bindings.get_command(keys.Z, ctrl=True) == InputCommand.EDITOR_UNDO
    assert bindings.get_command(keys.D) == InputCommand.PLAYER_MOVE_RIGHT
    assert bindings.get_command(keys.D, ctrl=True) == InputCommand.EDITOR_DUPLICATE
    assert bindings.get_command(keys.W, ctrl=True) is None


def test_rebind_key(keys):
    bindings = KeyBindings(keys)
    bindings.rebind_key(InputCommand.PLAYER_JUMP, keys.B)

    assert bindings.get_command(keys.B) == InputCommand.PLAYER_JUMP
    assert bindings.get_command(keys.SPACE) is None
    assert bindings.get_keys_for_command(InputCommand.PLAYER_JUMP) == [keys.B]


def test_save_and_load_bindings(keys, tmp_path):
    path = tmp_path / "bindings.json"
    bindings = KeyBindings(keys)
    bindings.rebind_key(InputCommand.EDITOR_TOGGLE_PLAY, keys.N)
    bindings.save_bindings(path)

    loaded = KeyBindings(keys, config_path=path)
    assert loaded.get_command(keys.N) == InputCommand.EDITOR_TOGGLE_PLAY


def test_invalid_bindings_file_keeps_defaults(keys, tmp_path):
    path = tmp_path / "bindings.json"
    path.write_text(json.dumps({"keyboard": {"1": "NOT_A_COMMAND"}}))

    bindings = KeyBindings(keys, config_path=path)
    assert bindings.get_command(keys.P) == InputCommand.EDITOR_TOGGLE_PLAY


def test_context_filtering():
    contexts = InputContextManager()

    assert contexts.is_command_allowed(InputCommand.TOOL_MOVE)
    assert not contexts.is_command_allowed(InputCommand.PLAYER_JUMP)

    contexts.set_context(InputContext.PLAY)
    assert contexts.is_command_allowed(InputCommand.PLAYER_JUMP)
    assert contexts.is_command_allowed(InputCommand.EDITOR_TOGGLE_PLAY)
    assert not contexts.is_command_allowed(InputCommand.EDITOR_UNDO)


def test_instant_commands_dispatch(keys):
    manager = InputManager(keys)
    calls = []
    manager.register_handler(InputCommand.EDITOR_UNDO, lambda: calls.append("undo"))

    manager.on_key_press(keys.Z, ctrl=True)
    assert calls == ["undo"]

    manager.unregister_handler(InputCommand.EDITOR_UNDO)
    manager.on_key_press(keys.Z, ctrl=True)
    assert calls == ["undo"]


def test_mouse_dispatch(keys):
    manager = InputManager(keys)
    picks, drags = [], []
    manager.register_handler(InputCommand.TOOL_USE, lambda x, y: picks.append((x, y)))
    manager.register_handler(InputCommand.CAMERA_ORBIT, lambda dx, dy: drags.append((dx, dy)))

    manager.on_mouse_button_press(1, 120, 80)
    assert picks == [(120, 80)]

    # Left drag is not an axis command
    manager.on_mouse_drag(3, 4)
    assert drags == []

    manager.on_mouse_button_release(1)
    manager.on_mouse_button_press(2, 0, 0)
    manager.on_mouse_drag(3, 4)
    assert drags == [(3, 4)]


def test_held_keys_commit_on_update(keys):
    manager = InputManager(keys)
    manager.set_context(InputContext.PLAY)

    manager.on_key_press(keys.W)
    assert manager.frame_commands == frozenset()

    manager.update(0.016)
    assert manager.frame_commands == {InputCommand.PLAYER_MOVE_FORWARD}

    # Release mid-frame is seen on the next update
    manager.on_key_release(keys.W)
    assert manager.frame_commands == {InputCommand.PLAYER_MOVE_FORWARD}
    manager.update(0.016)
    assert manager.frame_commands == frozenset()


def test_held_keys_filtered_by_context(keys):
    manager = InputManager(keys)

    manager.on_key_press(keys.W)
    manager.update(0.016)
    assert manager.frame_commands == frozenset()


def test_context_switch_clears_input(keys):
    manager = InputManager(keys)
    manager.set_context(InputContext.PLAY)
    manager.on_key_press(keys.W)
    manager.update(0.016)

    manager.set_context(InputContext.EDITOR)

    assert manager.pressed_keys == set()
    assert manager.frame_commands == frozenset()


def test_player_controller_maps_commands(keys):
    manager = InputManager(keys)
    manager.set_context(InputContext.PLAY)
    player = PlayerController(manager)

    manager.on_key_press(keys.W)
    manager.on_key_press(keys.SPACE)
    manager.update(0.016)

    assert player.current_keys() == {MoveKey.FORWARD, MoveKey.JUMP}

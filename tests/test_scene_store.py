"""Tests for SceneStore"""

import math
import random

import pytest

from blockforge.config.settings import PLACEMENT_HEIGHT, PLACEMENT_RANGE, SCALE_EPSILON
from blockforge.core.scene import ObjectKind, SceneObject
from blockforge.tools.scene_store import ProtectedObjectError, SceneError, SceneStore


def test_default_store(store):
    assert [obj.id for obj in store.objects] == [1, 2]
    assert store.spawn_point().id == 2
    assert len(store.history) == 1


def test_add_block_placement(store):
    block_id = store.add_object(ObjectKind.BLOCK)
    block = store.query(block_id)

    assert block_id == 3
    assert block.name == "Part"
    assert block.position[1] == PLACEMENT_HEIGHT
    assert -PLACEMENT_RANGE <= block.position[0] <= PLACEMENT_RANGE
    assert -PLACEMENT_RANGE <= block.position[2] <= PLACEMENT_RANGE
    assert store.history.get_undo_description() == "Add Part"


def test_add_names_and_hint(store):
    first = store.add_object(ObjectKind.BLOCK)
    second = store.add_object(ObjectKind.BLOCK, placement_hint=(1.0, 2.0, 3.0))
    spawn = store.add_object(ObjectKind.SPAWN_POINT)

    assert store.query(first).name == "Part"
    assert store.query(second).name == "Part2"
    assert store.query(second).position == (1.0, 2.0, 3.0)
    assert store.query(spawn).name == "SpawnPoint"
    assert store.query(spawn).position == (0.0, 0.5, 0.0)


def test_ids_are_never_reused(store):
    block_id = store.add_object(ObjectKind.BLOCK)
    store.delete_object(block_id)
    assert store.add_object(ObjectKind.BLOCK) == block_id + 1


def test_undo_redo_inverse_law(store):
    initial = store.objects

    block_id = store.add_object(ObjectKind.BLOCK)
    store.update_object_field(block_id, "position", (4.0, 5.0, 6.0))
    copy_id = store.duplicate_object(block_id)
    store.update_object_field(copy_id, "name", "Copy")
    store.update_object_field(copy_id, "scale", 3.0, axis=1)
    store.delete_object(block_id)
    final = store.objects
    steps = 6

    for _ in range(steps):
        assert store.undo()
    assert store.objects == initial
    assert not store.undo()

    for _ in range(steps):
        assert store.redo()
    assert store.objects == final
    assert not store.redo()


def test_history_linearity(store):
    block_id = store.add_object(ObjectKind.BLOCK)
    store.update_object_field(block_id, "color", "#ff0000")
    store.undo()
    store.undo()

    store.add_object(ObjectKind.SPAWN_POINT)

    assert not store.history.can_redo()
    assert not store.redo()
    assert store.query(block_id) is None


def test_protected_objects_cannot_be_deleted(store):
    before = store.objects

    for object_id in (1, 2):
        with pytest.raises(ProtectedObjectError) as excinfo:
            store.delete_object(object_id)
        assert excinfo.value.object_id == object_id

    assert store.objects == before
    assert len(store.history) == 1
    assert issubclass(ProtectedObjectError, SceneError)


def test_delete_missing_object(store):
    assert store.delete_object(99) is False
    assert store.duplicate_object(99) is None
    assert store.update_object_field(99, "name", "Ghost") is False
    assert store.query(99) is None


@pytest.mark.parametrize("value", [0.0, -1.0, -100.0])
def test_scale_clamps_non_positive(store, value):
    block_id = store.add_object(ObjectKind.BLOCK)
    store.update_object_field(block_id, "scale", value, axis=0)
    assert store.query(block_id).scale[0] == SCALE_EPSILON


def test_scale_vector_clamp(store):
    block_id = store.add_object(ObjectKind.BLOCK)
    store.update_object_field(block_id, "scale", (0.0, 2.0, -1.0))
    assert store.query(block_id).scale == (SCALE_EPSILON, 2.0, SCALE_EPSILON)


def test_invalid_updates_raise(store):
    block_id = store.add_object(ObjectKind.BLOCK)

    with pytest.raises(ValueError):
        store.update_object_field(block_id, "mass", 5)
    with pytest.raises(ValueError):
        store.update_object_field(block_id, "position", math.nan, axis=0)
    with pytest.raises(ValueError):
        store.update_object_field(block_id, "rotation", (0.0, math.inf, 0.0))
    with pytest.raises(ValueError):
        store.update_object_field(block_id, "color", "not a colour")


def test_unchanged_discrete_edit_records_nothing(store):
    block_id = store.add_object(ObjectKind.BLOCK)
    position = store.query(block_id).position
    length = len(store.history)

    assert store.update_object_field(block_id, "position", position)
    assert len(store.history) == length


def test_duplicate_offset(store):
    block_id = store.add_object(ObjectKind.BLOCK, placement_hint=(1.0, 2.0, 3.0))
    store.update_object_field(block_id, "rotation", (0.0, 1.0, 0.0))
    store.update_object_field(block_id, "scale", (2.0, 3.0, 4.0))
    original = store.query(block_id)

    copy_id = store.duplicate_object(block_id)
    copy = store.query(copy_id)

    assert copy_id != block_id
    assert copy.position == (3.0, 2.0, 5.0)
    assert copy.color == original.color
    assert copy.scale == original.scale
    assert copy.rotation == original.rotation


def test_duplicate_of_locked_object_is_unlocked(store):
    copy_id = store.duplicate_object(2)
    copy = store.query(copy_id)

    assert copy.kind is ObjectKind.SPAWN_POINT
    assert not copy.locked
    assert store.delete_object(copy_id)


def test_gesture_records_one_snapshot(store):
    block_id = store.add_object(ObjectKind.BLOCK, placement_hint=(0.0, 0.0, 0.0))
    length = len(store.history)

    store.begin_gesture(block_id)
    for step in range(1, 6):
        store.update_object_field(block_id, "position", (float(step), 0.0, 0.0), continuous=True)
        assert len(store.history) == length

    assert store.query(block_id).position == (5.0, 0.0, 0.0)
    assert store.end_gesture()
    assert len(store.history) == length + 1
    assert store.history.get_undo_description() == "Move Part"

    store.undo()
    assert store.query(block_id).position == (0.0, 0.0, 0.0)


def test_continuous_edit_opens_gesture(store):
    block_id = store.add_object(ObjectKind.BLOCK)

    store.update_object_field(block_id, "scale", 2.0, axis=1, continuous=True)
    assert store.in_gesture

    # A discrete edit closes the open gesture first
    store.update_object_field(block_id, "name", "Pillar")
    assert not store.in_gesture
    assert store.history.get_undo_description() == "Rename Part"

    store.undo()
    assert store.query(block_id).scale[1] == 2.0
    assert store.query(block_id).name == "Part"


def test_empty_gesture_records_nothing(store):
    length = len(store.history)
    store.begin_gesture(1)
    assert not store.end_gesture()
    assert len(store.history) == length
    assert not store.end_gesture()


def test_undo_closes_open_gesture(store):
    block_id = store.add_object(ObjectKind.BLOCK, placement_hint=(0.0, 0.0, 0.0))
    store.update_object_field(block_id, "position", (9.0, 0.0, 0.0), continuous=True)

    assert store.undo()
    assert store.query(block_id).position == (0.0, 0.0, 0.0)
    assert store.redo()
    assert store.query(block_id).position == (9.0, 0.0, 0.0)


def test_replace_objects_resets_history():
    store = SceneStore(rng=random.Random(0))
    store.add_object(ObjectKind.BLOCK)

    store.replace_objects([SceneObject(id=5, name="Loaded", kind=ObjectKind.BLOCK)])

    assert len(store.history) == 1
    assert not store.undo()
    assert store.spawn_point() is None
    assert store.add_object(ObjectKind.BLOCK) == 6


def test_duplicate_ids_rejected():
    objects = [
        SceneObject(id=1, name="A", kind=ObjectKind.BLOCK),
        SceneObject(id=1, name="B", kind=ObjectKind.BLOCK),
    ]
    with pytest.raises(ValueError):
        SceneStore(objects)


def test_change_callback(store):
    seen = []
    store.register_change_callback(lambda objects: seen.append(len(objects)))

    block_id = store.add_object(ObjectKind.BLOCK)
    store.delete_object(block_id)
    store.undo()

    assert seen == [3, 2, 3]

"""Tests for Camera and camera rigs"""

import numpy as np
import pytest
from pyrr import Vector3

from blockforge.config.settings import MAX_PITCH, ORBIT_MAX_DISTANCE, ORBIT_MIN_DISTANCE
from blockforge.core.camera import Camera
from blockforge.core.camera_rig import FollowRig, OrbitRig, follow_camera_pose


def test_camera_initialization():
    cam = Camera(Vector3([0.0, 0.0, 10.0]))

    assert np.allclose(np.asarray(cam.target), (0.0, 0.0, 0.0))
    assert np.allclose(np.asarray(cam.get_forward()), (0.0, 0.0, -1.0))
    assert np.allclose(np.asarray(cam.get_right()), (1.0, 0.0, 0.0))
    assert np.allclose(np.asarray(cam.get_up()), (0.0, 1.0, 0.0))


def test_camera_basis_is_orthonormal():
    cam = Camera(Vector3([20.0, 15.0, 20.0]))
    forward, right, up = cam.get_forward(), cam.get_right(), cam.get_up()

    for v in (forward, right, up):
        assert np.isclose(np.linalg.norm(v), 1.0)
    assert np.isclose(np.dot(forward, right), 0.0)
    assert np.isclose(np.dot(forward, up), 0.0)


def test_camera_looking_straight_down():
    cam = Camera(Vector3([0.0, 10.0, 0.0]))

    assert np.allclose(np.asarray(cam.get_forward()), (0.0, -1.0, 0.0))
    assert np.isclose(np.linalg.norm(cam.get_right()), 1.0)


def test_camera_matrices():
    cam = Camera(Vector3([0.0, 5.0, 10.0]))

    view = cam.get_view_matrix()
    projection = cam.get_projection_matrix(16 / 9)

    assert view.shape == (4, 4)
    assert projection.shape == (4, 4)

    # The target sits in front of the camera (negative z in view space)
    target_view = np.array([0.0, 0.0, 0.0, 1.0]) @ np.asarray(view)
    assert target_view[2] < 0


def test_follow_camera_pose():
    eye, target = follow_camera_pose(Vector3([1.0, 2.0, 3.0]))

    assert np.allclose(np.asarray(eye), (1.0, 7.0, 13.0))
    assert np.allclose(np.asarray(target), (1.0, 3.0, 3.0))


def test_follow_rig_tracks_subject():
    class Subject:
        position = Vector3([4.0, 2.0, -6.0])

        def get_position(self):
            return self.position

    cam = Camera(Vector3([0.0, 0.0, 10.0]))
    rig = FollowRig(cam, Subject())
    rig.update(0.016)

    assert np.allclose(np.asarray(cam.position), (4.0, 7.0, 4.0))
    assert np.allclose(np.asarray(cam.target), (4.0, 3.0, -6.0))

    rig.disable()
    Subject.position = Vector3([0.0, 0.0, 0.0])
    rig.update(0.016)
    assert np.allclose(np.asarray(cam.position), (4.0, 7.0, 4.0))


def test_orbit_rig_keeps_distance():
    cam = Camera(Vector3([20.0, 15.0, 20.0]))
    rig = OrbitRig(cam)
    distance = rig.distance

    rig.apply_look_input(40, 10)

    assert np.isclose(np.linalg.norm(cam.position - rig.focus), distance)
    assert np.allclose(np.asarray(cam.target), (0.0, 0.0, 0.0))


def test_orbit_rig_pitch_clamp():
    cam = Camera(Vector3([20.0, 15.0, 20.0]))
    rig = OrbitRig(cam)

    rig.apply_look_input(0, 10000)
    assert rig.pitch == pytest.approx(MAX_PITCH)


def test_orbit_rig_zoom_limits():
    cam = Camera(Vector3([20.0, 15.0, 20.0]))
    rig = OrbitRig(cam)

    rig.zoom(-1000)
    assert rig.distance == ORBIT_MIN_DISTANCE
    rig.zoom(1000)
    assert rig.distance == ORBIT_MAX_DISTANCE


def test_disabled_orbit_rig_ignores_input():
    cam = Camera(Vector3([20.0, 15.0, 20.0]))
    rig = OrbitRig(cam)
    rig.disable()
    position = Vector3(cam.position)

    rig.apply_look_input(100, 0)
    assert np.allclose(np.asarray(cam.position), np.asarray(position))

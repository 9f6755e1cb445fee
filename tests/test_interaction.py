import math

import pytest

from orbitview import interaction
from orbitview.interaction import (
    Controller,
    MouseButton,
    camera_right_vector,
    camera_up_vector,
)
from orbitview.state import ProjectionMode, RenderMode, ViewerState


def _dot(a, b):
    return sum(x * y for x, y in zip(a, b))


def test_right_vector_looking_down_negative_z():
    right = camera_right_vector(ViewerState())
    assert right == pytest.approx((1.0, 0.0, 0.0))


@pytest.mark.parametrize("yaw,pitch", [(0, 0), (30, 10), (-120, -45), (200, 80)])
def test_right_vector_is_unit_and_horizontal(yaw, pitch):
    state = ViewerState(orbital_yaw=yaw, orbital_pitch=pitch)
    right = camera_right_vector(state)
    assert math.hypot(*right) == pytest.approx(1.0)
    assert right[1] == pytest.approx(0.0)


def test_right_vector_zero_distance_is_zero():
    assert camera_right_vector(ViewerState(orbital_distance=0.0)) == (0.0, 0.0, 0.0)


@pytest.mark.parametrize("yaw,pitch", [(0, 0), (45, 20), (-90, -30)])
def test_up_vector_is_unit_and_orthogonal_to_right(yaw, pitch):
    state = ViewerState(orbital_yaw=yaw, orbital_pitch=pitch)
    up = camera_up_vector(state)
    right = camera_right_vector(state)
    assert math.hypot(*up) == pytest.approx(1.0)
    assert _dot(up, right) == pytest.approx(0.0, abs=1e-9)
    assert up[1] > 0


def test_render_mode_keys():
    state = ViewerState()
    controller = Controller(state)
    controller.key("2")
    assert state.render_mode is RenderMode.LINE
    controller.key("3")
    assert state.render_mode is RenderMode.POINT
    controller.key("1")
    assert state.render_mode is RenderMode.FILL


@pytest.mark.parametrize(
    "key,attribute",
    [
        ("t", "texture_enabled"),
        ("T", "texture_enabled"),
        ("m", "material_enabled"),
        ("c", "display_coordinates"),
        ("I", "display_info"),
    ],
)
def test_toggle_keys_round_trip(key, attribute):
    state = ViewerState()
    controller = Controller(state)
    before = getattr(state, attribute)
    controller.key(key)
    assert getattr(state, attribute) is (not before)
    controller.key(key)
    assert getattr(state, attribute) is before


def test_projection_key():
    state = ViewerState()
    Controller(state).key("p")
    assert state.projection_mode is ProjectionMode.ORTHOGRAPHIC


def test_zoom_keys():
    state = ViewerState()
    controller = Controller(state)
    start = state.orbital_distance
    controller.key("w")
    assert state.orbital_distance == pytest.approx(start - interaction.CAMERA_ZOOM_SPEED)
    controller.key("S")
    controller.key("s")
    assert state.orbital_distance == pytest.approx(start + interaction.CAMERA_ZOOM_SPEED)


def test_reset_key_matches_reset_view():
    state = ViewerState(orbital_yaw=33.0, target_x=2.0, orbital_distance=9.0)
    Controller(state).key("r")
    expected = ViewerState()
    expected.reset_view()
    assert state == expected


@pytest.mark.parametrize("key", ["a", "A", "d", "D"])
def test_pan_keys_leave_target(key):
    state = ViewerState(target_x=1.5, target_y=-2.0, target_z=0.5)
    Controller(state).key(key)
    assert (state.target_x, state.target_y, state.target_z) == (1.5, -2.0, 0.5)


def test_escape_requests_quit_and_others_do_not():
    controller = Controller(ViewerState())
    assert controller.key(interaction.ESCAPE) is True
    assert controller.key("x") is False
    assert controller.key("w") is False


def test_left_drag_rotates():
    state = ViewerState()
    controller = Controller(state)
    controller.mouse_button(MouseButton.LEFT, True, 10, 10)
    assert controller.mouse_move(20, 15) is True
    assert state.orbital_yaw == pytest.approx(-10 * interaction.ROTATION_SENSITIVITY)
    assert state.orbital_pitch == pytest.approx(-5 * interaction.ROTATION_SENSITIVITY)
    assert (controller.last_x, controller.last_y) == (20, 15)


def test_pitch_is_clamped():
    state = ViewerState()
    controller = Controller(state)
    controller.mouse_button(MouseButton.LEFT, True, 0, 0)
    controller.mouse_move(0, -10000)
    assert state.orbital_pitch == interaction.MAX_PITCH
    controller.mouse_move(0, 10000)
    assert state.orbital_pitch == -interaction.MAX_PITCH


def test_release_stops_rotation():
    state = ViewerState()
    controller = Controller(state)
    controller.mouse_button(MouseButton.LEFT, True, 0, 0)
    controller.mouse_button(MouseButton.LEFT, False, 0, 0)
    assert controller.mouse_move(50, 50) is False
    assert state.orbital_yaw == 0.0


def test_middle_drag_pans_horizontally_only():
    state = ViewerState()
    controller = Controller(state)
    controller.mouse_button(MouseButton.MIDDLE, True, 0, 0)
    assert controller.mouse_move(10, 30) is True
    assert state.target_x < 0
    assert state.target_y == 0.0
    assert state.target_z == pytest.approx(0.0, abs=1e-9)
    assert state.orbital_yaw == 0.0


def test_right_button_does_nothing():
    state = ViewerState()
    controller = Controller(state)
    controller.mouse_button(MouseButton.RIGHT, True, 5, 5)
    assert controller.mouse_move(40, 40) is False
    assert (controller.rotating, controller.panning) == (False, False)
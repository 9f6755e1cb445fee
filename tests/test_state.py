import pytest

from orbitview.state import ProjectionMode, RenderMode, ViewerState


def test_defaults():
    state = ViewerState()
    assert state.projection_mode is ProjectionMode.PERSPECTIVE
    assert state.render_mode is RenderMode.FILL
    assert state.texture_enabled and state.material_enabled and state.display_info
    assert not state.display_coordinates
    assert state.orbital_distance == 5.0
    assert (state.orbital_yaw, state.orbital_pitch) == (0.0, 0.0)


def test_render_mode_switches():
    state = ViewerState()
    assert state.toggle_line_mode() is RenderMode.LINE
    assert state.toggle_point_mode() is RenderMode.POINT
    assert state.render_mode is RenderMode.POINT
    assert state.toggle_fill_mode() is RenderMode.FILL


@pytest.mark.parametrize(
    "method, attribute",
    [
        ("toggle_texture", "texture_enabled"),
        ("toggle_material", "material_enabled"),
        ("toggle_coordinates_display", "display_coordinates"),
        ("toggle_info_display", "display_info"),
    ],
)
def test_flags_toggle_back(method, attribute):
    state = ViewerState()
    before = getattr(state, attribute)
    assert getattr(state, method)() is (not before)
    assert getattr(state, method)() is before
    assert getattr(state, attribute) is before


def test_projection_mode_toggles():
    state = ViewerState()
    assert state.toggle_projection_mode() is ProjectionMode.ORTHOGRAPHIC
    assert state.toggle_projection_mode() is ProjectionMode.PERSPECTIVE


def test_reset_view():
    state = ViewerState(orbital_distance=12.0, orbital_yaw=30.0, orbital_pitch=10.0, target_x=2.0)
    state.reset_view()
    assert state.orbital_distance == 5.0
    assert state.orbital_yaw == -90.0
    assert state.orbital_pitch == 0.0
    assert (state.target_x, state.target_y, state.target_z) == (0.0, 0.0, 0.0)


def test_perspective_projection():
    proj = ViewerState().projection(800, 600)
    assert proj.mode is ProjectionMode.PERSPECTIVE
    assert proj.fovy == 45.0
    assert (proj.near, proj.far) == (0.1, 100.0)
    assert proj.aspect == pytest.approx(800 / 600)


def test_zero_height_counts_as_one():
    assert ViewerState().projection(640, 0).aspect == 640


def test_orthographic_projection_follows_distance():
    state = ViewerState(projection_mode=ProjectionMode.ORTHOGRAPHIC, orbital_distance=8.0)
    proj = state.projection(400, 200)
    assert proj.mode is ProjectionMode.ORTHOGRAPHIC
    assert proj.top == 4.0
    assert proj.bottom == -proj.top
    assert proj.right == pytest.approx(proj.top * proj.aspect)
    assert proj.left == -proj.right
    assert (proj.near, proj.far) == (-100.0, 100.0)


def test_info_lines_hidden():
    state = ViewerState(display_info=False)
    assert state.info_lines(600) == []


def test_info_lines_layout():
    lines = ViewerState().info_lines(600)
    assert all(x == 10 for x, _, _ in lines)
    assert {600 - y for _, y, _ in lines} == {20, 40, 60, 80, 100, 120, 140}
    texts = [text for _, _, text in lines]
    assert texts[0] == "Press w/s to zoom in or zoom out"
    assert texts[1] == "Mode:(Press 1/2/3) Fill Mode"
    assert texts[2] == "Texture(Press:T): ON"
    assert texts[3] == "Material(Press:M): ON"
    assert texts[4] == "Coords(Press:C): OFF"
    assert texts[5] == "Camera Mode: Orbital (Dist: 5.00, Yaw: 0, Pitch: 0)"
    assert texts[6] == "Projection(press:P): Perspective"


def test_info_lines_reflect_state():
    state = ViewerState()
    state.toggle_texture()
    state.toggle_line_mode()
    state.toggle_projection_mode()
    texts = [text for _, _, text in state.info_lines(480)]
    assert "Texture(Press:T): OFF" in texts
    assert "Mode:(Press 1/2/3) Line Mode" in texts
    assert "Projection(press:P): Orthographic" in texts
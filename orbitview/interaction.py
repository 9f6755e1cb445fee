"""Keyboard and mouse handling for the orbital camera."""

from __future__ import annotations

import enum
import logging
import math
from typing import Callable, Optional

from orbitview.state import ViewerState

log = logging.getLogger(__name__)

ROTATION_SENSITIVITY = 0.2
PAN_SPEED_FACTOR = 0.05
CAMERA_ZOOM_SPEED = 0.2
CAMERA_PAN_SPEED = 0.1
MAX_PITCH = 89.0
ESCAPE = "\x1b"

WORLD_UP = (0.0, 1.0, 0.0)
_EPSILON = 0.0001

Vector = tuple[float, float, float]


class MouseButton(enum.IntEnum):
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


def _cross(a: Vector, b: Vector) -> Vector:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _length(v: Vector) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def _scaled(v: Vector, factor: float) -> Vector:
    return (v[0] * factor, v[1] * factor, v[2] * factor)


def _front(state: ViewerState) -> Vector:
    """Vector from the camera position towards the target (not normalised)."""
    yaw = math.radians(state.orbital_yaw)
    pitch = math.radians(state.orbital_pitch)
    d = state.orbital_distance
    return (
        -d * math.sin(yaw) * math.cos(pitch),
        -d * math.sin(pitch),
        -d * math.cos(yaw) * math.cos(pitch),
    )


def camera_right_vector(state: ViewerState) -> Vector:
    """Unit vector pointing to the camera's right, or zeros when undefined."""
    front = _front(state)
    front_len = _length(front)
    if front_len <= _EPSILON:
        log.debug("Front vector is zero; cannot calculate right vector")
        return (0.0, 0.0, 0.0)
    right = _cross(_scaled(front, 1.0 / front_len), WORLD_UP)
    right_len = _length(right)
    if right_len > _EPSILON:
        right = _scaled(right, 1.0 / right_len)
    elif abs(state.orbital_pitch) > MAX_PITCH:
        right = (1.0, 0.0, 0.0) if state.orbital_yaw < 0 else (-1.0, 0.0, 0.0)
    else:
        log.debug("Right vector magnitude is zero")
        right = (0.0, 0.0, 0.0)
    log.debug("Camera right vector: %s", right)
    return right


def camera_up_vector(state: ViewerState) -> Vector:
    """The camera's up vector, normalised when it is not degenerate."""
    right = camera_right_vector(state)
    up = _cross(right, _front(state))
    length = _length(up)
    if length > _EPSILON:
        up = _scaled(up, 1.0 / length)
    return up


class Controller:
    """Applies key presses and mouse drags to a ViewerState."""

    def __init__(self, state: ViewerState) -> None:
        self.state = state
        self.last_x = 0
        self.last_y = 0
        self.rotating = False
        self.panning = False
        self._actions: dict[str, Callable[[], object]] = {
            "1": state.toggle_fill_mode,
            "2": state.toggle_line_mode,
            "3": state.toggle_point_mode,
            "t": state.toggle_texture,
            "m": state.toggle_material,
            "c": state.toggle_coordinates_display,
            "i": state.toggle_info_display,
            "r": state.reset_view,
            "p": state.toggle_projection_mode,
            "w": self._zoom_in,
            "s": self._zoom_out,
            "a": lambda: self._pan_target(-1.0),
            "d": lambda: self._pan_target(1.0),
        }

    def key(self, key: str) -> bool:
        """Handle a typed character; return True when it asks the viewer to quit."""
        if key == ESCAPE:
            return True
        action: Optional[Callable[[], object]] = self._actions.get(key.lower())
        if action is not None:
            action()
        return False

    def _zoom_in(self) -> None:
        self.state.orbital_distance -= CAMERA_ZOOM_SPEED
        log.debug("Zoom in, orbital distance %s", self.state.orbital_distance)

    def _zoom_out(self) -> None:
        self.state.orbital_distance += CAMERA_ZOOM_SPEED
        log.debug("Zoom out, orbital distance %s", self.state.orbital_distance)

    def _pan_target(self, direction: float) -> None:
        # Keyboard panning measures its axis against a zero front vector,
        # so the target stays where it is.
        right = _cross((0.0, 0.0, 0.0), WORLD_UP)
        step = direction * CAMERA_PAN_SPEED
        self.state.target_x += right[0] * step
        self.state.target_y += right[1] * step
        self.state.target_z += right[2] * step
        log.debug(
            "Pan target: (%s, %s, %s)",
            self.state.target_x,
            self.state.target_y,
            self.state.target_z,
        )

    def mouse_button(self, button: MouseButton, pressed: bool, x: int, y: int) -> None:
        """Start or stop rotating (left button) or panning (middle button)."""
        if button is MouseButton.LEFT:
            self.rotating = pressed
        elif button is MouseButton.MIDDLE:
            self.panning = pressed
        else:
            return
        if pressed:
            self.last_x = x
            self.last_y = y

    def mouse_move(self, x: int, y: int) -> bool:
        """Handle a drag to (x, y), y counted downward; return True if the view changed."""
        if not self.rotating and not self.panning:
            return False
        dx = float(x - self.last_x)
        dy = float(y - self.last_y)
        state = self.state
        if self.rotating:
            state.orbital_yaw -= dx * ROTATION_SENSITIVITY
            pitch = state.orbital_pitch - dy * ROTATION_SENSITIVITY
            state.orbital_pitch = max(-MAX_PITCH, min(MAX_PITCH, pitch))
        else:
            rx, _ry, rz = camera_right_vector(state)
            scale = state.orbital_distance * PAN_SPEED_FACTOR
            # Vertical motion is applied and undone again, so only the
            # horizontal component moves the target, twice over.
            state.target_x -= 2.0 * rx * dx * scale
            state.target_z -= 2.0 * rz * dx * scale
        self.last_x = x
        self.last_y = y
        return True
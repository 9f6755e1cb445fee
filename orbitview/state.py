"""Viewer settings and orbital camera state."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)

DEFAULT_DISTANCE = 5.0
RESET_YAW = -90.0


class ProjectionMode(enum.Enum):
    PERSPECTIVE = "Perspective"
    ORTHOGRAPHIC = "Orthographic"


class RenderMode(enum.Enum):
    FILL = "Fill Mode"
    LINE = "Line Mode"
    POINT = "Point Mode"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class Projection:
    """Projection parameters; half_height is used by orthographic projection only."""

    mode: ProjectionMode
    aspect: float
    near: float
    far: float
    fovy: float = 45.0
    half_height: float = 0.0

    @property
    def left(self) -> float:
        return -self.half_height * self.aspect

    @property
    def right(self) -> float:
        return self.half_height * self.aspect

    @property
    def bottom(self) -> float:
        return -self.half_height

    @property
    def top(self) -> float:
        return self.half_height


@dataclass
class ViewerState:
    projection_mode: ProjectionMode = ProjectionMode.PERSPECTIVE
    render_mode: RenderMode = RenderMode.FILL
    texture_enabled: bool = True
    material_enabled: bool = True
    display_coordinates: bool = False
    display_info: bool = True
    orbital_distance: float = DEFAULT_DISTANCE
    orbital_yaw: float = 0.0
    orbital_pitch: float = 0.0
    target_x: float = 0.0
    target_y: float = 0.0
    target_z: float = 0.0

    def toggle_fill_mode(self) -> RenderMode:
        self.render_mode = RenderMode.FILL
        log.debug("Polygon mode: fill")
        return self.render_mode

    def toggle_line_mode(self) -> RenderMode:
        self.render_mode = RenderMode.LINE
        log.debug("Polygon mode: line")
        return self.render_mode

    def toggle_point_mode(self) -> RenderMode:
        self.render_mode = RenderMode.POINT
        log.debug("Polygon mode: point")
        return self.render_mode

    def toggle_texture(self) -> bool:
        self.texture_enabled = not self.texture_enabled
        return self.texture_enabled

    def toggle_material(self) -> bool:
        self.material_enabled = not self.material_enabled
        return self.material_enabled

    def toggle_coordinates_display(self) -> bool:
        self.display_coordinates = not self.display_coordinates
        return self.display_coordinates

    def toggle_info_display(self) -> bool:
        self.display_info = not self.display_info
        return self.display_info

    def toggle_projection_mode(self) -> ProjectionMode:
        if self.projection_mode is ProjectionMode.PERSPECTIVE:
            self.projection_mode = ProjectionMode.ORTHOGRAPHIC
        else:
            self.projection_mode = ProjectionMode.PERSPECTIVE
        log.debug("Switched to %s projection", self.projection_mode.value)
        return self.projection_mode

    def reset_view(self) -> None:
        self.orbital_distance = DEFAULT_DISTANCE
        self.orbital_yaw = RESET_YAW
        self.orbital_pitch = 0.0
        self.target_x = self.target_y = self.target_z = 0.0

    def projection(self, width: int, height: int) -> Projection:
        """Projection for a window of this size; a zero height counts as one."""
        if height == 0:
            height = 1
        aspect = width / height
        if self.projection_mode is ProjectionMode.PERSPECTIVE:
            return Projection(ProjectionMode.PERSPECTIVE, aspect, 0.1, 100.0, fovy=45.0)
        return Projection(
            ProjectionMode.ORTHOGRAPHIC,
            aspect,
            -100.0,
            100.0,
            half_height=self.orbital_distance / 2.0,
        )

    def info_lines(self, height: int) -> list[tuple[int, int, str]]:
        """Overlay text as (x, y, text) in drawing order, y counted from the bottom."""
        if not self.display_info:
            return []
        on_off = {True: "ON", False: "OFF"}
        camera = "Camera Mode: Orbital (Dist: %.2f, Yaw: %.0f, Pitch: %.0f)" % (
            self.orbital_distance,
            self.orbital_yaw,
            self.orbital_pitch,
        )
        return [
            (10, height - 140, "Press w/s to zoom in or zoom out"),
            (10, height - 20, "Mode:(Press 1/2/3) " + self.render_mode.label),
            (10, height - 40, "Texture(Press:T): " + on_off[self.texture_enabled]),
            (10, height - 60, "Material(Press:M): " + on_off[self.material_enabled]),
            (10, height - 80, "Coords(Press:C): " + on_off[self.display_coordinates]),
            (10, height - 100, camera),
            (10, height - 120, "Projection(press:P): " + self.projection_mode.value),
        ]
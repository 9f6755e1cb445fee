"""Window event handling and drawing of a loaded model."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from orbitview.interaction import ESCAPE, Controller, MouseButton
from orbitview.model import BMPError, Model, ModelFormatError, SubModel, load_model, read_bmp
from orbitview.state import ProjectionMode, RenderMode, ViewerState

log = logging.getLogger(__name__)

WINDOW_TITLE = "Computer Graphics Project - Model Viewer"
DEFAULT_MODEL = "assets/models/luweiqi.txt"
DEFAULT_TEXTURE_DIR = "assets/textures"
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600

# Window-system key and button codes as delivered by the windowing library.
KEY_ESCAPE = 0xFF1B
_BUTTONS = {1: MouseButton.LEFT, 2: MouseButton.MIDDLE, 4: MouseButton.RIGHT}

_DEFAULT_COLOR = (0.8, 0.8, 0.8, 1.0)
_AXES = (
    ((1.0, 0.0, 0.0), (1.0, 0.0, 0.0)),
    ((0.0, 1.0, 0.0), (0.0, 1.0, 0.0)),
    ((0.0, 0.0, 1.0), (0.0, 0.0, 1.0)),
)


def _symbol_to_char(symbol: int) -> Optional[str]:
    if symbol == KEY_ESCAPE:
        return ESCAPE
    if 32 <= symbol < 127:
        return chr(symbol)
    return None


class ModelViewer:
    """Event handler object: push it onto a window to view a model."""

    def __init__(self, model: Model, texture_dir: Union[str, Path]) -> None:
        self.model = model
        self.texture_dir = Path(texture_dir)
        self.state = ViewerState()
        self.controller = Controller(self.state)
        self.width = DEFAULT_WIDTH
        self.height = DEFAULT_HEIGHT
        self.window: Any = None
        self.quit_requested = False
        self._gl_ready = False
        self._labels: dict[tuple[int, int, str], Any] = {}

    # Event handlers

    def on_resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def on_key_press(self, symbol: int, modifiers: int) -> bool:
        char = _symbol_to_char(symbol)
        if char is not None and self.controller.key(char):
            self.quit_requested = True
            if self.window is not None:
                self.window.close()
        return True

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int) -> None:
        mapped = _BUTTONS.get(button)
        if mapped is not None:
            self.controller.mouse_button(mapped, True, x, self.height - y)

    def on_mouse_release(self, x: int, y: int, button: int, modifiers: int) -> None:
        mapped = _BUTTONS.get(button)
        if mapped is not None:
            self.controller.mouse_button(mapped, False, x, self.height - y)

    def on_mouse_drag(
        self, x: int, y: int, dx: int, dy: int, buttons: int, modifiers: int
    ) -> None:
        self.controller.mouse_move(x, self.height - y)

    # Drawing

    def on_draw(self) -> None:
        from pyglet import gl

        if not self._gl_ready:
            self._init_gl(gl)
            self._load_textures(gl)
            self._gl_ready = True
        self._apply_projection(gl)
        state = self.state

        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        gl.glMatrixMode(gl.GL_MODELVIEW)
        gl.glLoadIdentity()
        gl.glTranslatef(-state.target_x, -state.target_y, -state.target_z)
        gl.glRotatef(state.orbital_yaw, 0.0, 1.0, 0.0)
        gl.glRotatef(state.orbital_pitch, 1.0, 0.0, 0.0)
        gl.glTranslatef(0.0, 0.0, -state.orbital_distance)

        if state.display_coordinates:
            self._draw_axes(gl)

        gl.glRotatef(-90.0, 1.0, 0.0, 0.0)
        gl.glScalef(*self.model.scale)
        self._apply_render_mode(gl)

        for sub_model in self.model.sub_models:
            self._draw_sub_model(gl, sub_model)

        self._draw_info(gl)

    def _init_gl(self, gl: Any) -> None:
        def floats(*values: float) -> Any:
            return (gl.GLfloat * len(values))(*values)

        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glEnable(gl.GL_LIGHTING)
        gl.glEnable(gl.GL_LIGHT0)
        gl.glLightfv(gl.GL_LIGHT0, gl.GL_POSITION, floats(0.0, 0.0, 5.0, 1.0))
        gl.glLightfv(gl.GL_LIGHT0, gl.GL_AMBIENT, floats(0.2, 0.2, 0.2, 1.0))
        gl.glLightfv(gl.GL_LIGHT0, gl.GL_DIFFUSE, floats(0.8, 0.8, 0.8, 1.0))
        gl.glLightfv(gl.GL_LIGHT0, gl.GL_SPECULAR, floats(1.0, 1.0, 1.0, 1.0))
        gl.glShadeModel(gl.GL_SMOOTH)
        gl.glClearColor(0.1, 0.1, 0.1, 1.0)

    def _load_textures(self, gl: Any) -> None:
        for texture in self.model.textures:
            full_path = self.texture_dir / texture.path
            try:
                image = read_bmp(full_path)
            except BMPError as exc:
                log.warning("Failed to load texture %s: %s", full_path, exc)
                continue
            texture_id = gl.GLuint(0)
            gl.glGenTextures(1, texture_id)
            gl.glBindTexture(gl.GL_TEXTURE_2D, texture_id)
            gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_REPEAT)
            gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_REPEAT)
            gl.glTexParameteri(
                gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR_MIPMAP_LINEAR
            )
            gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
            pixels = (gl.GLubyte * len(image.pixels)).from_buffer_copy(image.pixels)
            gl.glTexImage2D(
                gl.GL_TEXTURE_2D, 0, gl.GL_RGB, image.width, image.rows, 0,
                gl.GL_BGR, gl.GL_UNSIGNED_BYTE, pixels,
            )
            gl.glGenerateMipmap(gl.GL_TEXTURE_2D)
            texture.id = texture_id.value
            log.info("Texture %s loaded, id %d", full_path, texture.id)

    def _apply_projection(self, gl: Any) -> None:
        projection = self.state.projection(self.width, self.height)
        gl.glMatrixMode(gl.GL_PROJECTION)
        gl.glLoadIdentity()
        if projection.mode is ProjectionMode.PERSPECTIVE:
            top = projection.near * math.tan(math.radians(projection.fovy) / 2.0)
            right = top * projection.aspect
            gl.glFrustum(-right, right, -top, top, projection.near, projection.far)
        else:
            gl.glOrtho(
                projection.left, projection.right, projection.bottom, projection.top,
                projection.near, projection.far,
            )
        gl.glMatrixMode(gl.GL_MODELVIEW)

    def _draw_axes(self, gl: Any) -> None:
        gl.glBegin(gl.GL_LINES)
        for color, end in _AXES:
            gl.glColor3f(*color)
            gl.glVertex3f(0.0, 0.0, 0.0)
            gl.glVertex3f(*end)
        gl.glEnd()

    def _apply_render_mode(self, gl: Any) -> None:
        mode = self.state.render_mode
        if mode is RenderMode.FILL:
            gl.glPolygonMode(gl.GL_FRONT_AND_BACK, gl.GL_FILL)
        elif mode is RenderMode.LINE:
            gl.glPolygonMode(gl.GL_FRONT_AND_BACK, gl.GL_LINE)
        else:
            gl.glPolygonMode(gl.GL_FRONT_AND_BACK, gl.GL_POINT)
            gl.glPointSize(2.0)

    def _draw_sub_model(self, gl: Any, sub_model: SubModel) -> None:
        def floats(values: Sequence[float]) -> Any:
            return (gl.GLfloat * len(values))(*values)

        material = self.model.material(sub_model.material_index)
        if self.state.material_enabled and material is not None:
            gl.glMaterialfv(gl.GL_FRONT_AND_BACK, gl.GL_AMBIENT, floats(material.ambient))
            gl.glMaterialfv(gl.GL_FRONT_AND_BACK, gl.GL_DIFFUSE, floats(material.diffuse))
            gl.glMaterialfv(gl.GL_FRONT_AND_BACK, gl.GL_SPECULAR, floats(material.specular))
            gl.glMaterialfv(gl.GL_FRONT_AND_BACK, gl.GL_EMISSION, floats(material.emission))
            gl.glMaterialf(gl.GL_FRONT_AND_BACK, gl.GL_SHININESS, material.shininess)
        else:
            gl.glMaterialfv(
                gl.GL_FRONT_AND_BACK, gl.GL_AMBIENT_AND_DIFFUSE, floats(_DEFAULT_COLOR)
            )
            gl.glMaterialf(gl.GL_FRONT_AND_BACK, gl.GL_SHININESS, 0.0)

        texture = None
        if self.state.texture_enabled and material is not None:
            texture = self.model.texture(material.texture_index)
        if texture is not None and texture.id != 0:
            gl.glEnable(gl.GL_TEXTURE_2D)
            gl.glBindTexture(gl.GL_TEXTURE_2D, texture.id)
        else:
            gl.glDisable(gl.GL_TEXTURE_2D)

        gl.glBegin(gl.GL_TRIANGLES)
        for face in sub_model.faces:
            for vertex, tex_coord, normal in self.model.corners(face):
                if normal is not None:
                    gl.glNormal3f(normal.x, normal.y, normal.z)
                if tex_coord is not None and self.state.texture_enabled:
                    gl.glTexCoord2f(tex_coord.u, tex_coord.v)
                if vertex is not None:
                    gl.glVertex3f(vertex.x, vertex.y, vertex.z)
        gl.glEnd()
        gl.glDisable(gl.GL_TEXTURE_2D)

    def _draw_info(self, gl: Any) -> None:
        lines = self.state.info_lines(self.height)
        if not lines:
            return
        import pyglet

        gl.glDisable(gl.GL_LIGHTING)
        gl.glDisable(gl.GL_DEPTH_TEST)
        gl.glDisable(gl.GL_TEXTURE_2D)
        for x, y, text in lines:
            label = self._labels.get((x, y, text))
            if label is None:
                label = pyglet.text.Label(
                    text, font_size=9, x=x, y=y, color=(255, 255, 255, 255)
                )
                self._labels[(x, y, text)] = label
            label.draw()
        if len(self._labels) > 64:
            self._labels.clear()
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glEnable(gl.GL_LIGHTING)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open a window showing the model file named on the command line."""
    parser = argparse.ArgumentParser(prog="orbitview", description="View a textured model.")
    parser.add_argument("model", nargs="?", default=DEFAULT_MODEL, help="model file")
    parser.add_argument(
        "--textures", default=DEFAULT_TEXTURE_DIR, help="directory holding BMP textures"
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    try:
        model = load_model(args.model)
    except (OSError, ModelFormatError) as exc:
        log.error("%s", exc)
        print("Failed to load model. Exiting.", file=sys.stderr)
        return 1

    import pyglet

    config = pyglet.gl.Config(double_buffer=True, depth_size=24)
    window = pyglet.window.Window(
        DEFAULT_WIDTH, DEFAULT_HEIGHT, caption=WINDOW_TITLE, resizable=True, config=config
    )
    window.set_location(100, 100)
    viewer = ModelViewer(model, args.textures)
    viewer.window = window
    window.push_handlers(viewer)
    pyglet.app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
# orbitview

A small interactive viewer for triangle models kept in a plain-text format.
It shows the model under an orbiting camera. It supports materials,
24-bit BMP textures, fill, line and point rendering, and both perspective
and orthographic projection. The window and drawing use pyglet and the
fixed-function OpenGL pipeline.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running the viewer

```
orbitview path/to/model.txt
orbitview path/to/model.txt --textures path/to/textures
```

If no model path is given, the viewer opens `assets/models/luweiqi.txt`.
Texture file names in the model are looked up in the directory given by
`--textures`, which defaults to `assets/textures`. A texture that cannot be
read as a 24-bit BMP is logged as a warning, and the parts that use it are
drawn untextured. If the model file cannot be read or parsed, the command
prints `Failed to load model. Exiting.` and exits with status 1.

Run `orbitview --help` to see the options.

### Controls

| Input           | Action                                            |
|-----------------|---------------------------------------------------|
| `1` / `2` / `3` | Fill / line / point rendering                     |
| `T`             | Toggle textures                                   |
| `M`             | Toggle materials (off uses a plain grey material) |
| `C`             | Toggle coordinate axes                            |
| `I`             | Toggle the on-screen info text                    |
| `P`             | Switch between perspective and orthographic       |
| `R`             | Reset the view                                    |
| `W` / `S`       | Zoom in / out (orbit distance changes by 0.2)     |
| `Esc`           | Quit                                              |
| Left drag       | Orbit around the target (pitch held to ±89°)      |
| Middle drag     | Move the target sideways with horizontal motion   |

In orthographic mode the visible area follows the orbit distance, so `W`
and `S` zoom there as well. `A` and `D` are accepted as keys, but they leave
the target where it is.

## Model file format

The file is a stream of whitespace-separated values, read in this order:

1. The texture count, then that many texture file names.
2. The material count, then for each material: 4 ambient, 4 diffuse,
   4 specular and 4 emission values, the shininess, and a 1-based texture
   index (0 for none).
3. The vertex count, then `x y z` for each vertex.
4. The texture-coordinate count, then `u v` for each.
5. The normal count, then `x y z` for each.
6. The sub-model count, followed by three scale factors.
7. For each sub-model: the triangle count and a 1-based material index.
   Then, for each triangle, three corners of `vertex texcoord normal`
   1-based indices.

An index of 0, or one past the end of its list, means "absent": the corner
is drawn without that attribute. A negative count, a missing value or a
token of the wrong kind raises `ModelFormatError`.

## Using it as a library

```python
from orbitview.model import load_model, read_bmp
from orbitview.state import ViewerState
from orbitview.interaction import Controller, MouseButton

model = load_model("assets/models/luweiqi.txt")
for sub in model.sub_models:
    material = model.material(sub.material_index)   # None if out of range
    for face in sub.faces:
        for vertex, tex_coord, normal in model.corners(face):
            ...

state = ViewerState()
controller = Controller(state)
controller.key("p")                  # switch to orthographic
controller.mouse_button(MouseButton.LEFT, True, 100, 100)
controller.mouse_move(120, 100)      # orbit: yaw changes by -4 degrees
projection = state.projection(800, 600)
print(projection.left, projection.right, projection.top)
print(state.info_lines(600))
```

- `orbitview.model`: `parse_model` takes model text, `load_model` a path.
  `parse_bmp` takes the bytes of a 24-bit BMP file, and `read_bmp` a path.
  Both return a `BMPImage` with the padded BGR rows as stored in the file.
  Malformed input raises `ModelFormatError` or `BMPError`.
- `orbitview.state`: `ViewerState` holds the render and projection modes,
  the toggles and the orbital camera. `projection()` gives the projection
  parameters for a window size. `info_lines()` gives the overlay text lines.
- `orbitview.interaction`: `Controller` applies key presses and mouse drags
  to a `ViewerState`. `camera_right_vector` and `camera_up_vector` give the
  camera axes.
- `orbitview.viewer`: `ModelViewer` is a pyglet event handler that draws a
  `Model`. `main` is the `orbitview` command.
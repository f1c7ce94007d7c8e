# rustgl-viewer

This package opens a window that shows a textured 3D model loaded from a
Wavefront OBJ file. You move through the scene with a first-person camera.
It also has a small entity-component-system demo.

## Installation

```
pip install .
```

The viewer needs OpenGL 3.3 core profile. It uses `pyglet` for the window
and the GL calls, `numpy` for matrices and vertex data, and `pillow` to
decode textures.

## Running the viewer

```
rustgl-viewer
```

Options:

| Option              | Default                                  |
|---------------------|------------------------------------------|
| `--model`           | `./assets/models/nanosuit/nanosuit.obj`  |
| `--vertex-shader`   | `./assets/shaders/model.vert`            |
| `--fragment-shader` | `./assets/shaders/model.frag`            |

Relative paths are resolved against the working directory. Material
libraries (`mtllib`) are read from the model's directory. Texture files
named in the materials are also looked up there. The viewer reads the
diffuse, specular and normal maps of each material. The fragment shader
sees them as the samplers `texture_diffuse1`, `texture_specular1`,
`texture_normal1`, and so on. The shaders receive the `projection`, `view`
and `model` matrices as uniforms. The model is drawn scaled by 0.2.

Every object in the OBJ file must have vertex normals and texture
coordinates. If one does not, loading fails with `ObjError`.

Controls:

| Input        | Action                                   |
|--------------|------------------------------------------|
| `W` / `S`    | move forward / backward                  |
| `A` / `D`    | strafe left / right                      |
| mouse        | look around (pitch clamped to ±89°)      |
| scroll wheel | zoom (field of view between 1° and 45°)  |
| `Esc`        | close the window                         |

## Running the ECS demo

```
rustgl-ecs-demo
```

The demo spawns one entity with a `Position` and a `Velocity`. It runs the
`movement` and `print_system` systems once and prints:

```
Position: 1 0 Velocity: 1 0
```

## Using the library

The camera and the matrix helpers do not need OpenGL. Matrices are 4x4
`numpy` arrays that act on column vectors:

```python
from rustgl_viewer.camera import Camera, CameraMovement, perspective, scaling, translation

camera = Camera(position=(0.0, 0.0, 3.0))
camera.process_keyboard(CameraMovement.FORWARD, 0.5)
camera.process_mouse_movement(10.0, -5.0, True)
camera.process_mouse_scroll(2.0)
view = camera.view_matrix()
projection = perspective(camera.zoom, 800 / 600, 0.1, 100.0)
model = translation((0.0, 0.0, 0.0)) @ scaling(0.2)
```

The OBJ/MTL reader does not need a GL context either. `load_obj` returns a
list of models and a list of materials. Each model has a `name` and a
`mesh` with flat `positions`, `normals`, `texcoords`, `indices` and a
`material_id`:

```python
from rustgl_viewer.objloader import load_obj, parse_obj, parse_mtl

models, materials = load_obj("assets/models/nanosuit/nanosuit.obj")
for model in models:
    print(model.name, len(model.mesh.indices), model.mesh.material_id)
```

`parse_obj(text, material_loader)` takes OBJ text and an optional callable
that returns the text of a named material library. `parse_mtl(text)` parses
a library on its own. Faces are triangulated as fans. Malformed data raises
`ObjError`.

`rustgl_viewer.mesh` provides `Vertex`, `Texture`, `Mesh`, `vertex_array`
(interleaves vertices into a float32 array of 14 floats each) and
`sampler_names`. `rustgl_viewer.model.Model` loads an OBJ file into meshes.
It loads each texture file once. It accepts a custom `texture_loader` in
place of `texture_from_file`. Uploading, drawing and `Shader` need a current
GL context.

Use `World` and `Schedule` in `rustgl_viewer.ecs` to build your own systems:

```python
from rustgl_viewer.ecs import World, Schedule, Position, Velocity, movement

world = World()
world.spawn(Position(0.0, 0.0), Velocity(1.0, 0.0))
schedule = Schedule()
schedule.add_systems(movement)
schedule.run(world)
for position, velocity in world.query(Position, Velocity):
    print(position, velocity)
```

## Limitations

- Height maps are never loaded.
- Tangents and bitangents stay zero.
- The projection always uses the 800x600 aspect ratio, even after you resize
  the window.

## Tests

```
pip install .[test]
pytest
```
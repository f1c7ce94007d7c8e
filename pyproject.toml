[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rustgl-viewer"
version = "0.1.0"
description = "A small OpenGL model viewer with a fly-through camera, OBJ/MTL loading and a toy entity-component system"
requires-python = ">=3.10"
keywords = ["opengl", "obj", "mtl", "model-viewer", "camera", "ecs", "3d"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Environment :: X11 Applications",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "pyglet",
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rustgl-viewer = "rustgl_viewer.app:main"
rustgl-ecs-demo = "rustgl_viewer.ecs:main"

[tool.hatch.build.targets.wheel]
packages = ["rustgl_viewer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

"""Models loaded from OBJ files, with their material textures."""

from __future__ import annotations

import os
from itertools import islice
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

from PIL import Image

from .mesh import Mesh, Texture, Vertex
from .objloader import ObjError, load_obj

# OpenGL pixel format enums.
GL_RED = 0x1903
GL_RG = 0x8227
GL_RGB = 0x1907
GL_RGBA = 0x1908

_FORMATS = {"L": GL_RED, "LA": GL_RG, "RGB": GL_RGB, "RGBA": GL_RGBA}


def _gl():
    from pyglet import gl

    return gl


def _chunks(values: Iterable[float], size: int) -> Iterator[tuple[float, ...]]:
    iterator = iter(values)
    while chunk := tuple(islice(iterator, size)):
        yield chunk


def image_format(image) -> int:
    """GL pixel format matching a Pillow image's mode."""
    try:
        return _FORMATS[image.mode]
    except KeyError:
        raise ValueError(f"unsupported image mode: {image.mode!r}") from None


def texture_from_file(path, directory) -> int:
    """Load an image file as a mipmapped 2D texture and return its GL name."""
    with Image.open(Path(directory) / path) as opened:
        image = opened if opened.mode in _FORMATS else opened.convert("RGBA")
        image = image.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
    pixel_format = image_format(image)
    data = image.tobytes()

    gl = _gl()
    texture_id = gl.GLuint()
    gl.glGenTextures(1, texture_id)
    gl.glBindTexture(gl.GL_TEXTURE_2D, texture_id)
    gl.glTexImage2D(
        gl.GL_TEXTURE_2D, 0, pixel_format, image.width, image.height,
        0, pixel_format, gl.GL_UNSIGNED_BYTE, data,
    )
    gl.glGenerateMipmap(gl.GL_TEXTURE_2D)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_REPEAT)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_REPEAT)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR_MIPMAP_LINEAR)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
    return texture_id.value


class Model:
    """All meshes of an OBJ file, sharing textures that are loaded only once."""

    def __init__(self, path, texture_loader: Optional[Callable[[str, str], int]] = None):
        self.meshes: list[Mesh] = []
        self.textures_loaded: list[Texture] = []
        self.directory = os.path.dirname(os.fspath(path))
        self._texture_loader = texture_loader or texture_from_file
        self._load_model(path)

    def draw(self, shader) -> None:
        """Draw every mesh with ``shader``."""
        for mesh in self.meshes:
            mesh.draw(shader)

    def load_material_texture(self, path: str, type_name: str) -> Texture:
        """Return the texture for ``path``, loading it on first use."""
        for texture in self.textures_loaded:
            if texture.path == path:
                return texture
        texture = Texture(
            id=self._texture_loader(path, self.directory), type_name=type_name, path=path
        )
        self.textures_loaded.append(texture)
        return texture

    def _load_model(self, path) -> None:
        models, materials = load_obj(path)
        for model in models:
            mesh = model.mesh
            count = len(mesh.positions) // 3
            if len(mesh.normals) < 3 * count:
                raise ObjError(f"object {model.name!r} lacks vertex normals")
            if len(mesh.texcoords) < 2 * count:
                raise ObjError(f"object {model.name!r} lacks texture coordinates")
            vertices = [
                Vertex(position=position, normal=normal, tex_coords=tex_coords)
                for position, normal, tex_coords in zip(
                    _chunks(mesh.positions, 3),
                    _chunks(mesh.normals, 3),
                    _chunks(mesh.texcoords, 2),
                )
            ]

            textures = []
            if mesh.material_id is not None:
                material = materials[mesh.material_id]
                for file_name, kind in (
                    (material.diffuse_texture, "texture_diffuse"),
                    (material.specular_texture, "texture_specular"),
                    (material.normal_texture, "texture_normal"),
                ):
                    if file_name:
                        textures.append(self.load_material_texture(file_name, kind))

            self.meshes.append(Mesh(vertices, mesh.indices, textures))
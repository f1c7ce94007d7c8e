"""Triangle meshes: vertex data, textures and their upload to and drawing on the GPU."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

import numpy as np

_TEXTURE_KINDS = ("texture_diffuse", "texture_specular", "texture_normal", "texture_height")

# Attribute name and component count, in buffer order; one attribute location each.
_VERTEX_LAYOUT = (
    ("position", 3),
    ("normal", 3),
    ("tex_coords", 2),
    ("tangent", 3),
    ("bitangent", 3),
)
_FLOATS_PER_VERTEX = sum(size for _, size in _VERTEX_LAYOUT)
_FLOAT_SIZE = np.dtype(np.float32).itemsize
_VERTEX_STRIDE = _FLOATS_PER_VERTEX * _FLOAT_SIZE


def _gl():
    from pyglet import gl

    return gl


@dataclass
class Vertex:
    """One vertex with all attributes the shaders consume."""

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    normal: tuple[float, float, float] = (0.0, 0.0, 0.0)
    tex_coords: tuple[float, float] = (0.0, 0.0)
    tangent: tuple[float, float, float] = (0.0, 0.0, 0.0)
    bitangent: tuple[float, float, float] = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Texture:
    """A GL texture object together with its role and source file."""

    id: int
    type_name: str
    path: str


def sampler_names(textures) -> list[str]:
    """Uniform sampler names for ``textures``, numbered per kind from 1.

    Raises ValueError for a texture of unknown kind.
    """
    counts: Counter[str] = Counter()
    names = []
    for texture in textures:
        kind = texture.type_name
        if kind not in _TEXTURE_KINDS:
            raise ValueError(f"unknown texture type: {kind!r}")
        counts[kind] += 1
        names.append(f"{kind}{counts[kind]}")
    return names


def vertex_array(vertices) -> np.ndarray:
    """Interleave vertex attributes into a float32 array of shape (n, 14)."""
    rows = [
        [*v.position, *v.normal, *v.tex_coords, *v.tangent, *v.bitangent]
        for v in vertices
    ]
    return np.array(rows, dtype=np.float32).reshape(-1, _FLOATS_PER_VERTEX)


class Mesh:
    """Indexed triangle mesh with its textures; GPU buffers are created on upload."""

    def __init__(self, vertices, indices, textures):
        self.vertices = list(vertices)
        self.indices = [int(index) for index in indices]
        self.textures = list(textures)
        self.vao = 0
        self._vbo = 0
        self._ebo = 0

    def upload(self) -> None:
        """Create the vertex array and buffers and describe the attribute layout."""
        if not self.vertices:
            raise ValueError("mesh has no vertices")
        if not self.indices:
            raise ValueError("mesh has no indices")
        vertex_data = vertex_array(self.vertices)
        index_data = np.asarray(self.indices, dtype=np.uint32)

        gl = _gl()
        vao, vbo, ebo = gl.GLuint(), gl.GLuint(), gl.GLuint()
        gl.glGenVertexArrays(1, vao)
        gl.glGenBuffers(1, vbo)
        gl.glGenBuffers(1, ebo)

        gl.glBindVertexArray(vao)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, vbo)
        gl.glBufferData(
            gl.GL_ARRAY_BUFFER, vertex_data.nbytes, vertex_data.ctypes.data, gl.GL_STATIC_DRAW
        )
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, ebo)
        gl.glBufferData(
            gl.GL_ELEMENT_ARRAY_BUFFER, index_data.nbytes, index_data.ctypes.data, gl.GL_STATIC_DRAW
        )

        offset = 0
        for location, (_, size) in enumerate(_VERTEX_LAYOUT):
            gl.glEnableVertexAttribArray(location)
            gl.glVertexAttribPointer(
                location, size, gl.GL_FLOAT, gl.GL_FALSE, _VERTEX_STRIDE, offset
            )
            offset += size * _FLOAT_SIZE

        gl.glBindVertexArray(0)
        self.vao, self._vbo, self._ebo = vao.value, vbo.value, ebo.value

    def draw(self, shader) -> None:
        """Bind the textures to their samplers and draw the triangles."""
        names = sampler_names(self.textures)
        if not self.vao:
            self.upload()
        gl = _gl()
        for unit, (texture, name) in enumerate(zip(self.textures, names)):
            gl.glActiveTexture(gl.GL_TEXTURE0 + unit)
            shader.set_int(name, unit)
            gl.glBindTexture(gl.GL_TEXTURE_2D, texture.id)

        gl.glBindVertexArray(self.vao)
        gl.glDrawElements(gl.GL_TRIANGLES, len(self.indices), gl.GL_UNSIGNED_INT, None)
        gl.glBindVertexArray(0)
        gl.glActiveTexture(gl.GL_TEXTURE0)
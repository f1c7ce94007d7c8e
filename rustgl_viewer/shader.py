"""GLSL shader programs: loading sources from disk, compiling and setting uniforms."""

from __future__ import annotations

from pathlib import Path

import numpy as np


def _gl():
    from pyglet import gl

    return gl


def _shader_module():
    from pyglet.graphics import shader

    return shader


def read_sources(vertex_path, fragment_path) -> tuple[str, str]:
    """Read the vertex and fragment shader sources from their files."""
    vertex_code = Path(vertex_path).read_text(encoding="utf-8")
    fragment_code = Path(fragment_path).read_text(encoding="utf-8")
    for label, code in (("vertex", vertex_code), ("fragment", fragment_code)):
        if "\0" in code:
            raise ValueError(f"{label} shader source contains a NUL character")
    return vertex_code, fragment_code


def _c_name(name) -> bytes:
    encoded = name.encode("utf-8") if isinstance(name, str) else bytes(name)
    if b"\0" in encoded:
        raise ValueError(f"uniform name {name!r} contains a NUL character")
    return encoded


def _compile_stage(module, kind: str, code: str, label: str):
    try:
        return module.Shader(code, kind)
    except module.ShaderException as exc:
        raise RuntimeError(f"ERROR::SHADER_COMPILATION_ERROR of type: {label}\n{exc}") from exc


def _link(module, vertex, fragment):
    try:
        return module.ShaderProgram(vertex, fragment)
    except module.ShaderException as exc:
        raise RuntimeError(f"ERROR::PROGRAM_LINKING_ERROR of type: PROGRAM\n{exc}") from exc


class Shader:
    """A linked vertex + fragment shader program on the current GL context."""

    def __init__(self, vertex_path, fragment_path):
        vertex_code, fragment_code = read_sources(vertex_path, fragment_path)
        print(f"Vertex shader: {vertex_code}")
        print(f"Fragment shader: {fragment_code}")

        module = _shader_module()
        vertex = _compile_stage(module, "vertex", vertex_code, "VERTEX")
        fragment = _compile_stage(module, "fragment", fragment_code, "FRAGMENT")
        self._program = _link(module, vertex, fragment)
        self.id = self._program.id

    def use(self) -> None:
        """Make this program current."""
        _gl().glUseProgram(self.id)

    def _location(self, gl, name) -> int:
        encoded = _c_name(name) + b"\0"
        buffer = (gl.GLchar * len(encoded)).from_buffer_copy(encoded)
        return gl.glGetUniformLocation(self.id, buffer)

    def set_bool(self, name, value) -> None:
        gl = _gl()
        gl.glUniform1i(self._location(gl, name), int(bool(value)))

    def set_int(self, name, value) -> None:
        gl = _gl()
        gl.glUniform1i(self._location(gl, name), int(value))

    def set_float(self, name, value) -> None:
        gl = _gl()
        gl.glUniform1f(self._location(gl, name), float(value))

    def set_vector3(self, name, value) -> None:
        gl = _gl()
        x, y, z = (float(component) for component in value)
        gl.glUniform3fv(self._location(gl, name), 1, (gl.GLfloat * 3)(x, y, z))

    def set_vec3(self, name, x, y, z) -> None:
        gl = _gl()
        gl.glUniform3f(self._location(gl, name), float(x), float(y), float(z))

    def set_mat4(self, name, mat) -> None:
        """Upload a row-major 4x4 matrix; it is sent to GL in column-major order."""
        gl = _gl()
        matrix = np.asarray(mat, dtype=np.float32)
        if matrix.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got shape {matrix.shape}")
        data = (gl.GLfloat * 16)(*matrix.flatten(order="F"))
        gl.glUniformMatrix4fv(self._location(gl, name), 1, gl.GL_FALSE, data)
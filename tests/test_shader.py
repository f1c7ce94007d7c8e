import pytest

from rustgl_viewer.shader import Shader, read_sources


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_read_sources_returns_both_files(tmp_path):
    vertex = _write(tmp_path / "model.vert", "#version 330 core\nvoid main() {}\n")
    fragment = _write(tmp_path / "model.frag", "#version 330 core\nout vec4 c;\n")
    vertex_code, fragment_code = read_sources(vertex, fragment)
    assert vertex_code == "#version 330 core\nvoid main() {}\n"
    assert fragment_code == "#version 330 core\nout vec4 c;\n"


def test_read_sources_accepts_string_paths(tmp_path):
    vertex = _write(tmp_path / "a.vert", "// ünïcode comment\n")
    fragment = _write(tmp_path / "a.frag", "")
    assert read_sources(str(vertex), str(fragment)) == ("// ünïcode comment\n", "")


def test_read_sources_missing_vertex(tmp_path):
    fragment = _write(tmp_path / "a.frag", "void main() {}")
    with pytest.raises(FileNotFoundError):
        read_sources(tmp_path / "missing.vert", fragment)


def test_read_sources_missing_fragment(tmp_path):
    vertex = _write(tmp_path / "a.vert", "void main() {}")
    with pytest.raises(FileNotFoundError):
        read_sources(vertex, tmp_path / "missing.frag")


def test_read_sources_rejects_nul(tmp_path):
    vertex = _write(tmp_path / "a.vert", "void main() {}\0")
    fragment = _write(tmp_path / "a.frag", "void main() {}")
    with pytest.raises(ValueError, match="vertex"):
        read_sources(vertex, fragment)


def test_read_sources_rejects_nul_in_fragment(tmp_path):
    vertex = _write(tmp_path / "a.vert", "void main() {}")
    fragment = _write(tmp_path / "a.frag", "\0")
    with pytest.raises(ValueError, match="fragment"):
        read_sources(vertex, fragment)


def test_shader_missing_file_fails_before_compiling(tmp_path):
    with pytest.raises(FileNotFoundError):
        Shader(tmp_path / "none.vert", tmp_path / "none.frag")


def test_shader_nul_source_fails_before_compiling(tmp_path):
    vertex = _write(tmp_path / "a.vert", "bad\0source")
    fragment = _write(tmp_path / "a.frag", "void main() {}")
    with pytest.raises(ValueError):
        Shader(vertex, fragment)
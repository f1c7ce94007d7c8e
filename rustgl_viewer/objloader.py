"""Reader for Wavefront OBJ geometry and its MTL material libraries.

Faces are triangulated as fans and every distinct position/texcoord/normal
combination becomes one vertex, so each mesh holds flat attribute arrays that
share one index list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Optional

DEFAULT_OBJECT_NAME = "unnamed_object"

_COLOR_KEYS = {"Ka": "ambient", "Kd": "diffuse", "Ks": "specular"}
_SCALAR_KEYS = {"Ns": "shininess", "Ni": "optical_density", "d": "dissolve"}
_TEXTURE_KEYS = {
    "map_Ka": "ambient_texture",
    "map_Kd": "diffuse_texture",
    "map_Ks": "specular_texture",
    "map_Bump": "normal_texture",
    "map_bump": "normal_texture",
    "bump": "normal_texture",
    "map_Ns": "shininess_texture",
    "map_d": "dissolve_texture",
}


class ObjError(ValueError):
    """Raised for malformed OBJ or MTL data, or an unreadable material library."""


@dataclass
class Material:
    """One material from an MTL library."""

    name: str = ""
    ambient: tuple[float, float, float] = (0.0, 0.0, 0.0)
    diffuse: tuple[float, float, float] = (0.0, 0.0, 0.0)
    specular: tuple[float, float, float] = (0.0, 0.0, 0.0)
    shininess: float = 0.0
    optical_density: float = 1.0
    dissolve: float = 1.0
    illumination_model: Optional[int] = None
    ambient_texture: str = ""
    diffuse_texture: str = ""
    specular_texture: str = ""
    normal_texture: str = ""
    shininess_texture: str = ""
    dissolve_texture: str = ""
    unknown_param: dict[str, str] = field(default_factory=dict)


@dataclass
class ObjMesh:
    """Flat attribute arrays: 3 floats per position/normal, 2 per texcoord."""

    positions: list[float] = field(default_factory=list)
    normals: list[float] = field(default_factory=list)
    texcoords: list[float] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    material_id: Optional[int] = None


@dataclass
class ObjModel:
    """A named object or group of an OBJ file."""

    name: str
    mesh: ObjMesh


def _lines(text: str) -> Iterator[tuple[int, str, str]]:
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, _, rest = line.partition(" ")
        key, _, tab_rest = key.partition("\t")
        yield line_no, key, (tab_rest + " " + rest).strip() if tab_rest else rest.strip()


def _floats(rest: str, count: int, line_no: int, what: str) -> tuple[float, ...]:
    values = rest.split()
    if len(values) < count:
        raise ObjError(f"line {line_no}: {what} needs {count} numbers, got {len(values)}")
    try:
        return tuple(float(value) for value in values[:count])
    except ValueError as exc:
        raise ObjError(f"line {line_no}: invalid number in {what}: {rest!r}") from exc


def parse_mtl(text: str) -> list[Material]:
    """Parse the materials of an MTL library, in file order."""
    materials: list[Material] = []
    current: Optional[Material] = None
    for line_no, key, rest in _lines(text):
        if key == "newmtl":
            if not rest:
                raise ObjError(f"line {line_no}: newmtl without a name")
            current = Material(name=rest)
            materials.append(current)
            continue
        if current is None:
            raise ObjError(f"line {line_no}: {key!r} appears before any newmtl")
        if key in _COLOR_KEYS:
            setattr(current, _COLOR_KEYS[key], _floats(rest, 3, line_no, key))
        elif key in _SCALAR_KEYS:
            setattr(current, _SCALAR_KEYS[key], _floats(rest, 1, line_no, key)[0])
        elif key == "illum":
            try:
                current.illumination_model = int(rest)
            except ValueError as exc:
                raise ObjError(f"line {line_no}: invalid illumination model {rest!r}") from exc
        elif key in _TEXTURE_KEYS:
            setattr(current, _TEXTURE_KEYS[key], rest)
        else:
            current.unknown_param[key] = rest
    return materials


class _ObjParser:
    def __init__(self, material_loader: Optional[Callable[[str], str]]):
        self._material_loader = material_loader
        self.positions: list[tuple[float, ...]] = []
        self.texcoords: list[tuple[float, ...]] = []
        self.normals: list[tuple[float, ...]] = []
        self.models: list[ObjModel] = []
        self.materials: list[Material] = []
        self._material_ids: dict[str, int] = {}
        self._name = DEFAULT_OBJECT_NAME
        self._material_id: Optional[int] = None
        self._corners: list[tuple[int, Optional[int], Optional[int]]] = []

    def feed(self, text: str) -> None:
        for line_no, key, rest in _lines(text):
            if key == "v":
                self.positions.append(_floats(rest, 3, line_no, "vertex"))
            elif key == "vt":
                self.texcoords.append(_floats(rest, 2, line_no, "texture coordinate"))
            elif key == "vn":
                self.normals.append(_floats(rest, 3, line_no, "normal"))
            elif key == "f":
                self._face(rest, line_no)
            elif key in ("o", "g"):
                self._finish()
                self._name = rest or DEFAULT_OBJECT_NAME
            elif key == "usemtl":
                self._use_material(rest)
            elif key == "mtllib":
                self._load_library(rest, line_no)

    def close(self) -> tuple[list[ObjModel], list[Material]]:
        self._finish()
        return self.models, self.materials

    def _use_material(self, name: str) -> None:
        material_id = self._material_ids.get(name, self._material_id)
        if material_id != self._material_id:
            self._finish()
            self._material_id = material_id

    def _load_library(self, name: str, line_no: int) -> None:
        if self._material_loader is None:
            return
        if not name:
            raise ObjError(f"line {line_no}: mtllib without a file name")
        for material in parse_mtl(self._material_loader(name)):
            self._material_ids[material.name] = len(self.materials)
            self.materials.append(material)

    def _face(self, rest: str, line_no: int) -> None:
        corners = [self._corner(token, line_no) for token in rest.split()]
        if len(corners) < 3:
            raise ObjError(f"line {line_no}: a face needs at least 3 vertices")
        first = corners[0]
        for second, third in zip(corners[1:], corners[2:]):
            self._corners.extend((first, second, third))

    def _corner(self, token: str, line_no: int) -> tuple[int, Optional[int], Optional[int]]:
        parts = token.split("/")
        if len(parts) > 3 or not parts[0]:
            raise ObjError(f"line {line_no}: malformed face vertex {token!r}")
        position = _resolve(parts[0], len(self.positions), line_no)
        texcoord = (
            _resolve(parts[1], len(self.texcoords), line_no) if len(parts) > 1 and parts[1] else None
        )
        normal = (
            _resolve(parts[2], len(self.normals), line_no) if len(parts) > 2 and parts[2] else None
        )
        return position, texcoord, normal

    def _finish(self) -> None:
        if not self._corners:
            return
        mesh = ObjMesh(material_id=self._material_id)
        lookup: dict[tuple[int, Optional[int], Optional[int]], int] = {}
        for corner in self._corners:
            index = lookup.get(corner)
            if index is None:
                index = lookup[corner] = len(lookup)
                position, texcoord, normal = corner
                mesh.positions.extend(self.positions[position])
                if texcoord is not None:
                    mesh.texcoords.extend(self.texcoords[texcoord])
                if normal is not None:
                    mesh.normals.extend(self.normals[normal])
            mesh.indices.append(index)
        self.models.append(ObjModel(self._name, mesh))
        self._corners = []


def _resolve(token: str, count: int, line_no: int) -> int:
    try:
        number = int(token)
    except ValueError as exc:
        raise ObjError(f"line {line_no}: invalid index {token!r}") from exc
    index = number - 1 if number > 0 else count + number
    if number == 0 or not 0 <= index < count:
        raise ObjError(f"line {line_no}: index {number} out of range (have {count})")
    return index


def parse_obj(
    text: str, material_loader: Optional[Callable[[str], str]] = None
) -> tuple[list[ObjModel], list[Material]]:
    """Parse OBJ text into models and materials.

    ``material_loader`` receives each ``mtllib`` name and returns the library's
    text; without one, material libraries are ignored.
    """
    parser = _ObjParser(material_loader)
    parser.feed(text)
    return parser.close()


def load_obj(path) -> tuple[list[ObjModel], list[Material]]:
    """Load an OBJ file; material libraries are read relative to its directory."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")

    def read_library(name: str) -> str:
        try:
            return (path.parent / name).read_text(encoding="utf-8")
        except OSError as exc:
            raise ObjError(f"cannot read material library {name!r}: {exc}") from exc

    return parse_obj(text, read_library)
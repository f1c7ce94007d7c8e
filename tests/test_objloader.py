import pytest

from rustgl_viewer.objloader import (
    DEFAULT_OBJECT_NAME,
    ObjError,
    load_obj,
    parse_mtl,
    parse_obj,
)

TRIANGLE = "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n"
SQUARE = "v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\n"

MTL = """# materials
newmtl metal
Ka 0.1 0.2 0.3
Kd 0.5 0.5 0.5
Ks 1 1 1
Ns 32
illum 2
map_Kd metal diffuse.png
map_Ks metal_spec.png
map_Bump metal_normal.png
Pr 0.7
newmtl glass
d 0.25
"""


def test_triangle_parsed_into_one_model():
    models, materials = parse_obj(TRIANGLE)
    assert materials == []
    assert len(models) == 1
    assert models[0].name == DEFAULT_OBJECT_NAME
    mesh = models[0].mesh
    assert mesh.positions == [0, 0, 0, 1, 0, 0, 0, 1, 0]
    assert mesh.indices == [0, 1, 2]
    assert mesh.normals == []
    assert mesh.texcoords == []
    assert mesh.material_id is None


def test_quad_is_fan_triangulated():
    quad, _ = parse_obj(SQUARE + "f 1 2 3 4\n")
    pair, _ = parse_obj(SQUARE + "f 1 2 3\nf 1 3 4\n")
    assert quad[0].mesh == pair[0].mesh
    assert quad[0].mesh.indices == [0, 1, 2, 0, 2, 3]
    assert len(quad[0].mesh.positions) == 12


def test_negative_indices_match_positive_ones():
    positive, _ = parse_obj(TRIANGLE)
    negative, _ = parse_obj("v 0 0 0\nv 1 0 0\nv 0 1 0\nf -3 -2 -1\n")
    assert negative[0].mesh == positive[0].mesh


def test_same_position_with_other_normal_is_new_vertex():
    text = (
        "v 0 0 0\nv 1 0 0\nv 0 1 0\nvn 0 0 1\nvn 0 0 -1\n"
        "f 1//1 2//1 3//1\nf 1//2 2//2 3//2\n"
    )
    mesh = parse_obj(text)[0][0].mesh
    assert len(mesh.positions) == 18
    assert len(mesh.normals) == 18
    assert mesh.indices == list(range(6))
    assert mesh.normals[:3] == [0, 0, 1]
    assert mesh.normals[-3:] == [0, 0, -1]


def test_texcoords_follow_vertices():
    text = "v 0 0 0\nv 1 0 0\nv 0 1 0\nvt 0.5 0.25\nvt 1 1\nf 1/1 2/2 3/1\n"
    mesh = parse_obj(text)[0][0].mesh
    assert mesh.texcoords == [0.5, 0.25, 1, 1, 0.5, 0.25]


def test_objects_split_models():
    text = TRIANGLE.replace("f 1 2 3", "o first\nf 1 2 3\no second\nf 3 2 1")
    models, _ = parse_obj(text)
    assert [model.name for model in models] == ["first", "second"]
    assert models[1].mesh.positions[:3] == [0, 1, 0]


def test_materials_are_assigned_through_loader():
    libraries = {"scene.mtl": MTL}
    text = "mtllib scene.mtl\n" + SQUARE + "usemtl glass\nf 1 2 3\nusemtl metal\nf 1 3 4\n"
    models, materials = parse_obj(text, libraries.__getitem__)
    assert [material.name for material in materials] == ["metal", "glass"]
    assert [model.mesh.material_id for model in models] == [1, 0]
    assert models[0].name == models[1].name


def test_mtllib_ignored_without_loader():
    models, materials = parse_obj("mtllib scene.mtl\nusemtl metal\n" + TRIANGLE)
    assert materials == []
    assert models[0].mesh.material_id is None


def test_parse_mtl_fields():
    metal, glass = parse_mtl(MTL)
    assert metal.ambient == (0.1, 0.2, 0.3)
    assert metal.specular == (1.0, 1.0, 1.0)
    assert metal.shininess == 32.0
    assert metal.illumination_model == 2
    assert metal.diffuse_texture == "metal diffuse.png"
    assert metal.specular_texture == "metal_spec.png"
    assert metal.normal_texture == "metal_normal.png"
    assert metal.unknown_param == {"Pr": "0.7"}
    assert glass.dissolve == 0.25
    assert glass.diffuse_texture == ""


@pytest.mark.parametrize(
    "text",
    [
        "v 0 0 0\nv 1 0 0\nf 1 2 3\n",
        "v 0 0 0\nv 1 0 0\nf 1 2\n",
        "v 0 x 0\n",
        "v 0 0\n",
        "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 0 1 2\n",
        "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1/1/1/1 2 3\n",
    ],
)
def test_malformed_obj_raises(text):
    with pytest.raises(ObjError):
        parse_obj(text)


def test_mtl_property_before_newmtl_raises():
    with pytest.raises(ObjError):
        parse_mtl("Kd 1 1 1\nnewmtl late\n")


def test_load_obj_reads_library_next_to_file(tmp_path):
    (tmp_path / "scene.mtl").write_text(MTL)
    obj = tmp_path / "scene.obj"
    obj.write_text("mtllib scene.mtl\nusemtl metal\n" + TRIANGLE)
    models, materials = load_obj(obj)
    assert models[0].mesh.material_id == 0
    assert materials[0].normal_texture == "metal_normal.png"


def test_load_obj_missing_library_raises(tmp_path):
    obj = tmp_path / "scene.obj"
    obj.write_text("mtllib absent.mtl\n" + TRIANGLE)
    with pytest.raises(ObjError):
        load_obj(obj)
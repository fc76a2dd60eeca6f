import json
from pathlib import Path

import pytest

from lbpedit.materials import (
    STARLIGHT_VERTS,
    Material,
    MeshGen,
    ModelMaterial,
    default_model_materials,
    load_materials,
    parse_materials,
)
from lbpedit.polygon import triangulate

SAMPLE = {
    "materials": [
        {
            "name": "cardboard",
            "density": 1.0,
            "bevelWidth": 0.1,
            "faceInset": 0.05,
            "uvScale": 2.0,
            "bevelType": "flat",
        },
        {
            "name": "stone",
            "density": 3.0,
            "bevelWidth": 0.2,
            "faceInset": 0.1,
            "uvScale": 4.0,
            "bevelType": "square",
        },
    ]
}


def test_parse_materials_fields_and_order():
    mats = parse_materials(SAMPLE)
    assert [m.name for m in mats] == ["cardboard", "stone"]
    stone = mats[1]
    assert stone.density == 3.0
    assert stone.bevel_width == 0.2
    assert stone.face_inset == 0.1
    assert stone.uv_scale == 4.0
    assert stone.mesh_gen is MeshGen.SQUARE_BEVEL
    assert mats[0].mesh_gen is MeshGen.FLAT
    assert all(m.norm_strength == 1.0 for m in mats)


def test_unknown_bevel_type_is_flat():
    entry = dict(SAMPLE["materials"][1], bevelType="round")
    (mat,) = parse_materials({"materials": [entry]})
    assert mat.mesh_gen is MeshGen.FLAT


def test_missing_key_raises():
    entry = dict(SAMPLE["materials"][0])
    del entry["uvScale"]
    with pytest.raises(ValueError):
        parse_materials({"materials": [entry]})


def test_missing_list_raises():
    with pytest.raises(ValueError):
        parse_materials({"other": []})


def test_long_name_raises():
    entry = dict(SAMPLE["materials"][0], name="x" * 64)
    with pytest.raises(ValueError):
        parse_materials({"materials": [entry]})


def test_load_materials_round_trip(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(SAMPLE), encoding="utf-8")
    assert load_materials(path) == parse_materials(SAMPLE)


def test_material_texture_paths(tmp_path):
    mat = parse_materials(SAMPLE)[1]
    paths = mat.texture_paths(tmp_path)
    assert paths["col"][0] == tmp_path / "mats" / "stone" / "face-col.png"
    assert paths["norm"][1] == tmp_path / "mats" / "stone" / "bevel-norm.png"
    assert paths["arm"][2] == tmp_path / "mats" / "stone" / "border-arm.png"
    assert all(len(p) == 3 for p in paths.values())


def test_model_material_texture_paths():
    model = ModelMaterial("starlight", 0.35, STARLIGHT_VERTS, 10.0)
    paths = model.texture_paths("res")
    assert paths["mesh"] == Path("res/model-mats/starlight/model.blend")
    assert paths["col"] == Path("res/model-mats/starlight/col.jpg")
    assert paths["arm"] == Path("res/model-mats/starlight/arm.jpg")


def test_default_model_materials():
    (star,) = default_model_materials()
    assert star.name == "starlight"
    assert star.density == 0.35
    assert star.emission == 10.0
    assert [v.pt for v in star.polygon.verts] == list(STARLIGHT_VERTS)
    assert star.polygon.chain_len == [len(STARLIGHT_VERTS)]


def test_starlight_collider_triangulates_fully():
    (star,) = default_model_materials()
    tris = triangulate(star.polygon)
    assert len(tris) == 3 * (len(STARLIGHT_VERTS) - 2)
    assert set(tris) <= set(range(len(STARLIGHT_VERTS)))


def test_material_equality_is_by_value():
    a = Material("wood", 1.0, MeshGen.FLAT, 0.1, 0.0, 1.0)
    b = Material("wood", 1.0, MeshGen.FLAT, 0.1, 0.0, 1.0)
    assert a == b
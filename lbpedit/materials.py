"""Block materials: their physical and mesh parameters and texture locations."""

from __future__ import annotations

import enum
import json
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .polygon import Polygon, polygon_from_points

# Material names were held in a fixed 64-byte buffer.
MAX_NAME_LENGTH = 63

SURFACES = ("face", "bevel", "border")
TEXTURE_KINDS = ("col", "norm", "arm")

STARLIGHT_VERTS: tuple[tuple[float, float], ...] = (
    (0.0, 0.43774),
    (0.15866, 0.21837),
    (0.41631, 0.13527),
    (0.25671, -0.083412),
    (0.2573, -0.35414),
    (0.0, -0.26993),
    (-0.2573, -0.35414),
    (-0.25671, -0.083412),
    (-0.41631, 0.13527),
    (-0.15866, 0.21837),
)


class MeshGen(enum.Enum):
    """How the bevel of a polygon block is shaped."""

    FLAT = "flat"
    SQUARE_BEVEL = "square"


@dataclass
class Material:
    """A material that polygon pieces are extruded from."""

    name: str
    density: float
    mesh_gen: MeshGen
    bevel_width: float
    face_inset: float
    uv_scale: float
    norm_strength: float = 1.0

    def texture_paths(self, root: str | os.PathLike[str]) -> dict[str, tuple[Path, ...]]:
        """Return texture files per kind, ordered face, bevel, border."""
        base = Path(root) / "mats" / self.name
        return {
            kind: tuple(base / f"{surface}-{kind}.png" for surface in SURFACES)
            for kind in TEXTURE_KINDS
        }


@dataclass
class ModelMaterial:
    """A material drawn as a fixed model with a polygonal collider."""

    name: str
    density: float
    collider_verts: Sequence[tuple[float, float]]
    emission: float
    polygon: Polygon = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.polygon = polygon_from_points(self.collider_verts)

    def texture_paths(self, root: str | os.PathLike[str]) -> dict[str, Path]:
        """Return the model file and its colour, normal and ARM textures."""
        base = Path(root) / "model-mats" / self.name
        paths = {"mesh": base / "model.blend"}
        paths.update({kind: base / f"{kind}.jpg" for kind in TEXTURE_KINDS})
        return paths


def _parse_material(entry: Mapping[str, Any]) -> Material:
    try:
        name = str(entry["name"])
        density = float(entry["density"])
        bevel_width = float(entry["bevelWidth"])
        face_inset = float(entry["faceInset"])
        uv_scale = float(entry["uvScale"])
        bevel_type = str(entry["bevelType"])
    except KeyError as exc:
        raise ValueError(f"material entry is missing {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise ValueError(f"material entry is malformed: {exc}") from exc
    if len(name.encode("utf-8")) > MAX_NAME_LENGTH:
        raise ValueError(f"material name {name!r} is too long")
    mesh_gen = MeshGen.SQUARE_BEVEL if bevel_type == "square" else MeshGen.FLAT
    return Material(name, density, mesh_gen, bevel_width, face_inset, uv_scale)


def parse_materials(data: Mapping[str, Any]) -> list[Material]:
    """Build materials from a decoded material description document."""
    try:
        entries = data["materials"]
    except (KeyError, TypeError) as exc:
        raise ValueError("material data has no 'materials' list") from exc
    return [_parse_material(entry) for entry in entries]


def load_materials(path: str | os.PathLike[str]) -> list[Material]:
    """Read materials from a JSON file."""
    with open(path, encoding="utf-8") as handle:
        return parse_materials(json.load(handle))


def default_model_materials() -> list[ModelMaterial]:
    """Return the built-in model materials."""
    return [ModelMaterial("starlight", 0.35, STARLIGHT_VERTS, 10.0)]
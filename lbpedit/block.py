"""Blocks built from polygon pieces: extruded meshes and collision shapes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

from .geometry import distance, normalize, tri_area
from .materials import Material, MeshGen, ModelMaterial, default_model_materials
from .polygon import Polygon, inset, triangulate

Point = tuple[float, float]
Vec3 = tuple[float, float, float]

FRICTION = 0.3
MIN_FIXTURE_AREA = 0.0001

_UP: Vec3 = (0.0, 0.0, 1.0)
_RIGHT: Vec3 = (1.0, 0.0, 0.0)
_UV_OFFSET: Point = (0.3, 0.2)


@dataclass(frozen=True)
class MeshVert:
    """One vertex of a block mesh; ``tex_id`` picks face, bevel or border."""

    pos: Vec3
    uv: Point
    norm: Vec3
    tang: Vec3
    tex_id: float


@dataclass(frozen=True)
class Fixture:
    """A triangular collision shape with its layer filter."""

    points: tuple[Point, Point, Point]
    density: float
    friction: float
    category_bits: int
    mask_bits: int


@dataclass
class BlockPiece:
    """A polygon or model piece of a block spanning a range of layers."""

    is_model_mat: bool
    front_layer: int
    back_layer: int
    material: int
    poly: Polygon = field(default_factory=Polygon)
    pos: Point = (0.0, 0.0)
    verts: list[MeshVert] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)


def _cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _scaled(pt: Sequence[float], scale: float) -> Point:
    return (pt[0] / scale, pt[1] / scale)


def _triples(indices: Iterable[int]) -> Iterator[tuple[int, int, int]]:
    it = iter(indices)
    return zip(it, it, it)


def generate_block_mesh(
    poly: Polygon, front_layer: int, back_layer: int, material: Material
) -> tuple[list[MeshVert], list[int]]:
    """Extrude ``poly`` between two layers; return vertices and triangle indices."""
    uv = material.uv_scale

    inner = poly.copy()
    inset(inner, material.bevel_width)
    indices = triangulate(inner)

    face_z = -float(front_layer)
    if material.mesh_gen is MeshGen.SQUARE_BEVEL:
        face_z -= material.face_inset

    verts = [
        MeshVert((v.pt[0], v.pt[1], face_z), _scaled(v.pt, uv), _UP, _RIGHT, 0.0)
        for v in inner.verts
    ]

    def add_quad(a: MeshVert, b: MeshVert, c: MeshVert, d: MeshVert) -> None:
        base = len(verts)
        verts.extend((a, b, c, d))
        indices.extend((base, base + 1, base + 2, base + 3, base + 1, base + 2))

    front_z = -float(front_layer)
    if material.mesh_gen is MeshGen.FLAT:
        front_z -= material.bevel_width
    back_z = -float(back_layer) - 1.0
    depth = back_z - front_z

    for chain in range(len(poly.chains)):
        perim = 0.0
        for i0 in poly.chain_indices(chain):
            i1 = poly.verts[i0].next
            p0, p1 = poly.verts[i0].pt, poly.verts[i1].pt
            in0, in1 = inner.verts[i0].pt, inner.verts[i1].pt
            new_perim = perim + distance(p0, p1)

            tang = normalize((p1[0] - p0[0], p1[1] - p0[1], 0.0))
            norm = normalize(_cross(_UP, tang))

            add_quad(
                MeshVert((*p0, front_z), (perim / uv, 0.0), norm, tang, 2.0),
                MeshVert((*p1, front_z), (new_perim / uv, 0.0), norm, tang, 2.0),
                MeshVert((*p0, back_z), (perim / uv, depth / uv), norm, tang, 2.0),
                MeshVert((*p1, back_z), (new_perim / uv, depth / uv), norm, tang, 2.0),
            )

            if material.mesh_gen is MeshGen.FLAT:
                bitang = normalize(
                    (p0[0] - in0[0], p0[1] - in0[1], front_z - face_z)
                )
                bevel_norm = normalize(_cross(tang, bitang))
                add_quad(
                    MeshVert((*in0, face_z), (perim / uv, 0.0), bevel_norm, tang, 1.0),
                    MeshVert((*in1, face_z), (new_perim / uv, 0.0), bevel_norm, tang, 1.0),
                    MeshVert((*p0, front_z), (perim / uv, 1.0), bevel_norm, tang, 1.0),
                    MeshVert((*p1, front_z), (new_perim / uv, 1.0), bevel_norm, tang, 1.0),
                )
            elif material.mesh_gen is MeshGen.SQUARE_BEVEL:

                def rim_uv(pt: Point) -> Point:
                    return _scaled((pt[0] + _UV_OFFSET[0], pt[1] + _UV_OFFSET[1]), uv)

                add_quad(
                    MeshVert((*p0, front_z), rim_uv(p0), _UP, _RIGHT, 1.0),
                    MeshVert((*p1, front_z), rim_uv(p1), _UP, _RIGHT, 1.0),
                    MeshVert((*in0, front_z), rim_uv(in0), _UP, _RIGHT, 1.0),
                    MeshVert((*in1, front_z), rim_uv(in1), _UP, _RIGHT, 1.0),
                )
                wall_norm = _cross((0.0, 0.0, -1.0), tang)
                add_quad(
                    MeshVert((*in0, front_z), (perim / uv, 1.0), wall_norm, tang, 1.0),
                    MeshVert((*in1, front_z), (new_perim / uv, 1.0), wall_norm, tang, 1.0),
                    MeshVert((*in0, face_z), (perim / uv, 0.0), wall_norm, tang, 1.0),
                    MeshVert((*in1, face_z), (new_perim / uv, 0.0), wall_norm, tang, 1.0),
                )

            perim = new_perim

    return verts, indices


def layer_mask(front_layer: int, back_layer: int) -> int:
    """Return the collision bits of every layer from front to back inclusive."""
    mask = 0
    for layer in range(front_layer, back_layer + 1):
        mask |= 1 << layer
    return mask


def piece_fixtures(
    piece: BlockPiece,
    materials: Sequence[Material],
    model_materials: Sequence[ModelMaterial],
) -> list[Fixture]:
    """Split a piece into triangle fixtures, dropping near-degenerate ones."""
    if piece.is_model_mat:
        model = model_materials[piece.material]
        dx, dy = piece.pos
        points = [(v.pt[0] + dx, v.pt[1] + dy) for v in model.polygon.verts]
        tris = triangulate(model.polygon)
        density = model.density
    else:
        points = [v.pt for v in piece.poly.verts]
        tris = triangulate(piece.poly)
        density = materials[piece.material].density

    mask = layer_mask(piece.front_layer, piece.back_layer)
    fixtures = []
    for i0, i1, i2 in _triples(tris):
        tri = (points[i0], points[i1], points[i2])
        if tri_area(*tri) > MIN_FIXTURE_AREA:
            fixtures.append(Fixture(tri, density, FRICTION, mask, mask))
    return fixtures


@dataclass
class Block:
    """A rigid body made of pieces, each with its own mesh and fixtures."""

    materials: Sequence[Material]
    model_materials: Sequence[ModelMaterial] = field(
        default_factory=default_model_materials
    )
    dynamic: bool = False
    pieces: list[BlockPiece] = field(default_factory=list)
    fixtures: list[Fixture] = field(default_factory=list)

    def add_piece(
        self, model_mat: bool, front_layer: int, back_layer: int, material: int
    ) -> int:
        """Add an empty piece and return its index."""
        self.pieces.append(BlockPiece(model_mat, front_layer, back_layer, material))
        return len(self.pieces) - 1

    def update_mesh(self) -> None:
        """Rebuild every piece's mesh and all of the block's fixtures."""
        self.fixtures = []
        for piece in self.pieces:
            if not piece.is_model_mat:
                piece.verts, piece.indices = generate_block_mesh(
                    piece.poly,
                    piece.front_layer,
                    piece.back_layer,
                    self.materials[piece.material],
                )
            self.fixtures.extend(
                piece_fixtures(piece, self.materials, self.model_materials)
            )
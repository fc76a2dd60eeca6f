import pytest

from lbpedit.block import layer_mask
from lbpedit.geometry import tri_area
from lbpedit.level import MAX_LAYER, Level, LevelPiece, piece_polygon
from lbpedit.materials import Material, MeshGen

SQUARE = [(-0.5, 0.5), (0.5, 0.5), (0.5, -0.5), (-0.5, -0.5)]


def make_level():
    materials = [
        Material("wood", 1.0, MeshGen.FLAT, 0.05, 0.0, 1.0),
        Material("stone", 3.0, MeshGen.SQUARE_BEVEL, 0.05, 0.02, 2.0),
    ]
    return Level(materials)


def add_square(level, block):
    piece = level.add_piece(block)
    level.pieces[piece].vertices.extend(SQUARE)
    return piece


def test_defaults():
    level = make_level()
    assert level.sky_col == (0.6, 0.7, 1.0)
    assert level.dir_col == (4.0, 4.0, 4.0)
    assert level.active_pieces == 0 and level.active_blocks == 0
    assert MAX_LAYER == 2


def test_add_block_indices():
    level = make_level()
    assert level.add_block() == 0
    assert level.add_block() == 1
    assert level.active_blocks == 2


def test_add_piece_links_block():
    level = make_level()
    block = level.add_block()
    first = level.add_piece(block)
    second = level.add_piece(block)
    assert level.blocks[block].piece_idxs == [first, second]
    assert level.pieces[second].idx_in_block == 1
    assert level.pieces[first].block == block
    assert level.active_pieces == 2


def test_add_piece_to_missing_block():
    level = make_level()
    with pytest.raises(ValueError):
        level.add_piece(0)


def test_delete_last_piece_deletes_block_and_reuses_slots():
    level = make_level()
    block = level.add_block()
    piece = add_square(level, block)
    level.blocks[block].update(level)
    level.delete_piece(piece)
    assert level.blocks[block].tombstone
    assert level.pieces[piece].tombstone
    assert level.active_blocks == 0 and level.active_pieces == 0
    assert len(level.objects) == 0
    assert level.add_block() == block
    assert level.add_piece(block) == piece


def test_delete_piece_from_larger_block():
    level = make_level()
    block = level.add_block()
    a = level.add_piece(block)
    b = level.add_piece(block)
    c = level.add_piece(block)
    level.delete_piece(a)
    assert sorted(level.blocks[block].piece_idxs) == [b, c]
    assert level.pieces[c].idx_in_block == 0
    assert not level.blocks[block].tombstone
    assert level.active_pieces == 2


def test_delete_last_listed_piece():
    level = make_level()
    block = level.add_block()
    a = level.add_piece(block)
    b = level.add_piece(block)
    level.delete_piece(b)
    assert level.blocks[block].piece_idxs == [a]
    assert level.pieces[a].idx_in_block == 0


def test_delete_piece_twice_fails():
    level = make_level()
    block = level.add_block()
    a = level.add_piece(block)
    level.add_piece(block)
    level.delete_piece(a)
    with pytest.raises(ValueError):
        level.delete_piece(a)


def test_piece_polygon_matches_vertices():
    piece = LevelPiece(vertices=list(SQUARE))
    poly = piece_polygon(piece)
    assert [v.pt for v in poly.verts] == SQUARE
    assert poly.chain_len == [len(SQUARE)]
    assert list(poly.chain_indices(0)) == [0, 1, 2, 3]


def test_piece_polygon_needs_vertices():
    with pytest.raises(ValueError):
        piece_polygon(LevelPiece())


def test_update_builds_block():
    level = make_level()
    block = level.add_block()
    piece = add_square(level, block)
    level.pieces[piece].back_layer = 1
    level.pieces[piece].material = 1
    level.blocks[block].update(level)
    built = level.blocks[block].block
    assert list(level.objects) == [built]
    assert built.pieces[0].material == 1
    assert [v.pt for v in built.pieces[0].poly.verts] == SQUARE
    assert sum(tri_area(*f.points) for f in built.fixtures) == pytest.approx(2.0)
    assert all(f.category_bits == layer_mask(0, 1) for f in built.fixtures)
    assert all(f.density == level.materials[1].density for f in built.fixtures)
"""Editable level data: polygon pieces grouped into blocks.

Pieces and blocks are never removed from their lists; deleting one marks it
as a tombstone so indices held elsewhere stay valid, and the slot is reused
by the next addition.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .block import Block
from .materials import Material, ModelMaterial, default_model_materials
from .objlist import ObjList
from .polygon import Polygon, polygon_from_points

Point = tuple[float, float]
Color = tuple[float, float, float]

MAX_LAYER = 2


@dataclass
class LevelPiece:
    """A polygon outline spanning a range of layers, owned by one block."""

    vertices: list[Point] = field(default_factory=list)
    front_layer: int = 0
    back_layer: int = 0
    material: int = 0
    block: int = -1
    idx_in_block: int = 0
    tombstone: bool = False


def piece_polygon(piece: LevelPiece) -> Polygon:
    """Return the single-chain polygon outlined by ``piece``'s vertices."""
    return polygon_from_points(piece.vertices)


@dataclass
class LevelBlock:
    """A group of pieces that move together as one physical block."""

    piece_idxs: list[int] = field(default_factory=list)
    block: Block | None = None
    tombstone: bool = False

    def update(self, level: Level) -> None:
        """Replace the physical block with one rebuilt from the current pieces."""
        if self.block is not None:
            level.objects.kill(self.block)
            self.block = None
        block = level.objects.spawn(Block(level.materials, level.model_materials))
        self.block = block
        for idx in self.piece_idxs:
            piece = level.pieces[idx]
            piece_idx = block.add_piece(False, piece.front_layer, piece.back_layer, 0)
            block.pieces[piece_idx].material = piece.material
            block.pieces[piece_idx].poly = piece_polygon(piece)
        block.update_mesh()


@dataclass
class Level:
    """All pieces and blocks of a level, with its lighting colours."""

    materials: Sequence[Material]
    model_materials: Sequence[ModelMaterial] = field(
        default_factory=default_model_materials
    )
    sky_col: Color = (0.6, 0.7, 1.0)
    dir_col: Color = (4.0, 4.0, 4.0)
    pieces: list[LevelPiece] = field(default_factory=list)
    blocks: list[LevelBlock] = field(default_factory=list)
    active_pieces: int = 0
    active_blocks: int = 0
    objects: ObjList[Block] = field(default_factory=ObjList)

    def add_block(self) -> int:
        """Create an empty block, reusing a deleted slot; return its index."""
        idx = next((i for i, b in enumerate(self.blocks) if b.tombstone), None)
        if idx is None:
            self.blocks.append(LevelBlock())
            idx = len(self.blocks) - 1
        else:
            self.blocks[idx] = LevelBlock()
        self.active_blocks += 1
        return idx

    def add_piece(self, block: int) -> int:
        """Create an empty piece in ``block``, reusing a deleted slot; return its index."""
        if not 0 <= block < len(self.blocks) or self.blocks[block].tombstone:
            raise ValueError(f"no live block {block}")
        owner = self.blocks[block]
        piece = LevelPiece(block=block, idx_in_block=len(owner.piece_idxs))
        idx = next((i for i, p in enumerate(self.pieces) if p.tombstone), None)
        if idx is None:
            self.pieces.append(piece)
            idx = len(self.pieces) - 1
        else:
            self.pieces[idx] = piece
        owner.piece_idxs.append(idx)
        self.active_pieces += 1
        return idx

    def delete_piece(self, piece: int) -> None:
        """Delete a piece; its block goes too if it was the block's last piece."""
        if not 0 <= piece < len(self.pieces) or self.pieces[piece].tombstone:
            raise ValueError(f"no live piece {piece}")
        doomed = self.pieces[piece]
        owner = self.blocks[doomed.block]
        if len(owner.piece_idxs) == 1:
            self._delete_block(doomed.block)
        else:
            pos = owner.piece_idxs.index(piece)
            last = owner.piece_idxs.pop()
            if pos < len(owner.piece_idxs):
                owner.piece_idxs[pos] = last
                self.pieces[last].idx_in_block = doomed.idx_in_block
        doomed.vertices = []
        doomed.tombstone = True
        self.active_pieces -= 1

    def _delete_block(self, block: int) -> None:
        owner = self.blocks[block]
        if owner.block is not None:
            self.objects.kill(owner.block)
            owner.block = None
        owner.piece_idxs = []
        owner.tombstone = True
        self.active_blocks -= 1
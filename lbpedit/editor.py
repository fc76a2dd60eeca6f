"""Level editing operations: block creation, selection and polygon editing."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .geometry import closest_point_on_line, distance
from .level import MAX_LAYER, Level, LevelPiece

Point = tuple[float, float]

VERT_CIRCLE_RADIUS = 0.04
BLOCK_HALF_SIZE = 0.5


@dataclass
class Editor:
    """Editing state over a level: selected pieces and, in polygon mode, vertices."""

    level: Level
    freecam: bool = True
    selected_pieces: list[int] = field(default_factory=list)
    poly_edit_mode: bool = False
    selected_verts: list[int] = field(default_factory=list)

    def _update_block(self, piece: LevelPiece) -> None:
        self.level.blocks[piece.block].update(self.level)

    def _edited_piece(self) -> LevelPiece:
        if not self.poly_edit_mode or not self.selected_pieces:
            raise ValueError("not editing a polygon")
        return self.level.pieces[self.selected_pieces[0]]

    def add_block(self, pos: Sequence[float]) -> int:
        """Add a unit square block centred on ``pos``, select it, return its piece."""
        x, y = float(pos[0]), float(pos[1])
        h = BLOCK_HALF_SIZE
        block = self.level.add_block()
        piece = self.level.add_piece(block)
        self.level.pieces[piece].vertices.extend(
            [(x - h, y + h), (x + h, y + h), (x + h, y - h), (x - h, y - h)]
        )
        self.level.blocks[block].update(self.level)
        self.deselect_all()
        self.select_piece(piece)
        return piece

    def deselect_all(self) -> None:
        """Clear the piece selection."""
        self.selected_pieces.clear()

    def select_piece(self, piece: int) -> None:
        """Add ``piece`` to the selection."""
        self.selected_pieces.append(piece)

    def delete_selected(self) -> None:
        """Delete every selected piece; does nothing while editing a polygon."""
        if self.poly_edit_mode or not self.selected_pieces:
            return
        for piece in self.selected_pieces:
            self.level.delete_piece(piece)
        self.deselect_all()

    def set_material(self, material: int) -> None:
        """Give every selected piece ``material`` and rebuild their blocks."""
        if not 0 <= material < len(self.level.materials):
            raise ValueError(f"no material {material}")
        for idx in self.selected_pieces:
            piece = self.level.pieces[idx]
            piece.material = material
            self._update_block(piece)

    def set_layer(self, layer: int) -> None:
        """Move selected pieces to front ``layer``, keeping thickness where it fits."""
        if not 0 <= layer <= MAX_LAYER:
            raise ValueError(f"layer must be between 0 and {MAX_LAYER}")
        for idx in self.selected_pieces:
            piece = self.level.pieces[idx]
            thickness = piece.back_layer - piece.front_layer
            piece.front_layer = layer
            piece.back_layer = min(layer + thickness, MAX_LAYER)
            self._update_block(piece)

    def set_thickness(self, thickness: int) -> None:
        """Set how many layers behind its front each selected piece reaches."""
        if not 0 <= thickness <= MAX_LAYER:
            raise ValueError(f"thickness must be between 0 and {MAX_LAYER}")
        for idx in self.selected_pieces:
            piece = self.level.pieces[idx]
            piece.back_layer = min(piece.front_layer + thickness, MAX_LAYER)
            self._update_block(piece)

    def toggle_poly_edit(self) -> None:
        """Enter polygon editing on the first selected piece, or leave it."""
        if not self.selected_pieces:
            raise ValueError("no piece selected")
        if self.poly_edit_mode:
            self.selected_verts.clear()
            self.poly_edit_mode = False
        else:
            del self.selected_pieces[1:]
            self.poly_edit_mode = True

    def select_vert(self, vert: int) -> None:
        """Add vertex ``vert`` to the vertex selection."""
        if not self.vert_selected(vert):
            self.selected_verts.append(vert)

    def vert_selected(self, vert: int) -> bool:
        """Return True if vertex ``vert`` is selected."""
        return vert in self.selected_verts

    def delete_vert(self, vert: int) -> None:
        """Remove vertex ``vert`` from the edited piece and renumber the selection."""
        piece = self._edited_piece()
        del piece.vertices[vert]
        self.selected_verts = [
            v - 1 if v > vert else v for v in self.selected_verts if v != vert
        ]

    def delete_selected_verts(self) -> None:
        """Remove every selected vertex and rebuild the block."""
        piece = self._edited_piece()
        remaining = len(piece.vertices) - len(set(self.selected_verts))
        if remaining < 3:
            raise ValueError("a polygon needs at least three vertices")
        for vert in sorted(set(self.selected_verts), reverse=True):
            self.delete_vert(vert)
        self._update_block(piece)

    def drag_selected(self, delta: Sequence[float]) -> None:
        """Move the selected vertices by ``delta`` and rebuild the block."""
        piece = self._edited_piece()
        dx, dy = float(delta[0]), float(delta[1])
        for vert in self.selected_verts:
            x, y = piece.vertices[vert]
            piece.vertices[vert] = (x + dx, y + dy)
        self._update_block(piece)

    def click(self, pos: Sequence[float], shift: bool = False) -> int | None:
        """Select the vertex under ``pos``; return it, or None if there is none.

        Without ``shift`` the selection is cleared first, unless the click
        lands on a vertex that is already selected.
        """
        piece = self._edited_piece()
        point = (float(pos[0]), float(pos[1]))
        if not shift:
            on_selected = any(
                distance(piece.vertices[v], point) < VERT_CIRCLE_RADIUS
                for v in self.selected_verts
            )
            if not on_selected:
                self.selected_verts.clear()
        for idx, vertex in enumerate(piece.vertices):
            if distance(vertex, point) < VERT_CIRCLE_RADIUS:
                self.select_vert(idx)
                return idx
        return None

    def split_edge(self, pos: Sequence[float]) -> int | None:
        """Insert a vertex on the edge under ``pos``, away from its ends.

        The new vertex becomes the only selected one; its index is returned,
        or None if no edge is close enough.
        """
        piece = self._edited_piece()
        point = (float(pos[0]), float(pos[1]))
        limit = 1.5 * VERT_CIRCLE_RADIUS
        ends = zip(piece.vertices, piece.vertices[1:] + piece.vertices[:1])
        for idx, (p0, p1) in enumerate(ends):
            closest = closest_point_on_line(point, p0, p1)
            pt = (closest[0], closest[1])
            if (
                distance(pt, point) < VERT_CIRCLE_RADIUS
                and distance(p0, point) > limit
                and distance(p1, point) > limit
            ):
                self.selected_verts.clear()
                piece.vertices.insert(idx + 1, pt)
                self.selected_verts.append(idx + 1)
                return idx + 1
        return None
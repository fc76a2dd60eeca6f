# lbpedit

This package is the data model behind a layered 2D physics platformer and its
level editor. A level is made of blocks. Each block holds one or more polygon
pieces, and each piece covers a range of depth layers, from 0 at the front to
`lbpedit.level.MAX_LAYER` (2) at the back.

## Modules

- `lbpedit.geometry` holds small vector helpers: `tri_area`, `pt_inside_tri`,
  `distance`, `normalize`, `closest_point_on_line` and `map_range`.
- `lbpedit.polygon` defines `Polygon`, a set of linked vertex chains (`Vert`).
  The first chain is the exterior and winds clockwise. Any later chains are
  holes and wind counter-clockwise. The module also has:
  - `polygon_from_points`, which builds a single closed chain;
  - `simplify` and `simplify_chain`, which bridge holes into the exterior;
  - `triangulate`, which does ear clipping and returns a flat list of vertex
    indices, three per triangle;
  - `inset`, which shrinks a polygon for a bevel.
- `lbpedit.materials` defines `Material`, `ModelMaterial` and `MeshGen`.
  - `parse_materials` reads a decoded document shaped like
    `{"materials": [{"name", "density", "bevelWidth", "faceInset", "uvScale", "bevelType"}]}`.
  - `load_materials` reads the same document from a JSON file.
  - `default_model_materials` returns the built-in `starlight` model material.
  - `texture_paths` lists where a material's textures are expected to live.
- `lbpedit.block` defines `Block`, `BlockPiece`, `MeshVert` and `Fixture`.
  - `generate_block_mesh` extrudes a polygon between layers and returns
    vertices and triangle indices.
  - `piece_fixtures` cuts a piece into triangle collision shapes. `layer_mask`
    gives the collision bits for a range of layers.
- `lbpedit.level` defines `Level`, `LevelBlock`, `LevelPiece` and
  `piece_polygon`. A deleted piece or block becomes a tombstone, so indices
  held elsewhere stay valid. The next addition reuses that slot.
- `lbpedit.editor` defines `Editor`. It covers:
  - adding blocks;
  - piece selection and deletion;
  - changing material, layer and thickness;
  - polygon editing mode, with vertex selection (`click`), `drag_selected`,
    `delete_selected_verts` and `split_edge`.
- `lbpedit.objlist` defines `ObjList`, a pool of live objects that reuses
  freed slots.
- `lbpedit.resources` defines `add_resource`, `ResHandle` and `manager_for`,
  which keep one registry per type.
- `lbpedit.actions` defines `ActionBuffer`. It buffers input so an action can
  be requested a little early, can still happen shortly after it stops being
  available, and has a cooldown.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from lbpedit.polygon import polygon_from_points, triangulate

square = polygon_from_points([(0, 1), (1, 1), (1, 0), (0, 0)])
tris = triangulate(square)   # flat list of vertex indices, three per triangle
```

```python
from lbpedit.editor import Editor
from lbpedit.level import Level
from lbpedit.materials import Material, MeshGen

materials = [Material("stone", 1.0, MeshGen.FLAT, 0.1, 0.0, 1.0)]
editor = Editor(Level(materials))
piece = editor.add_block((0.0, 0.0))  # a unit square, now selected
editor.set_layer(1)
editor.set_thickness(1)

block = editor.level.blocks[editor.level.pieces[piece].block].block
print(len(block.fixtures))  # collision triangles of the rebuilt block
```

## What it does not do

This package has no window, renderer, audio or physics simulation. It has no
player character. It has no command to run.

- Block meshes come out as plain vertex and index lists.
- Collision shapes come out as `Fixture` records, not as bodies in a physics
  world.
- Levels cannot be saved to or loaded from files.
- Textures and models are only named by path. They are never loaded.
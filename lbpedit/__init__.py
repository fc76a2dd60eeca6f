"""Level model, polygon geometry and editor logic for a layered 2D platformer."""

__version__ = "0.1.0"
__all__ = [
    "actions",
    "block",
    "editor",
    "geometry",
    "level",
    "materials",
    "objlist",
    "polygon",
    "resources",
]
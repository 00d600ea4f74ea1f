"""Mesh export."""

from .mesh import color_to_rgba, to_trimesh

__all__ = ["color_to_rgba", "to_trimesh"]

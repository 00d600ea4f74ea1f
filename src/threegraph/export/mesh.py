"""Export scenes to trimesh for inspection and mesh file formats."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

import numpy as np

from ..core.geometry import Geometry, GeometryData
from ..core.scene import Scene

if TYPE_CHECKING:
    import trimesh


def _triangulated(geometry: Geometry) -> Geometry:
    """Return geometry with triangle data, building a copy if it has none."""
    if geometry.data.faces:
        return geometry
    return dataclasses.replace(geometry, data=GeometryData()).build()


def color_to_rgba(color: int) -> list[int]:
    """Split ``0xRRGGBB`` into an opaque RGBA list."""
    return [(color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF, 255]


def to_trimesh(scene: Scene) -> trimesh.Scene:
    """Convert every mesh node of a scene to a trimesh.Trimesh.

    Each node that references a geometry with triangles (or a geometry
    variant that can build them from its dimensions) becomes one mesh in
    the returned scene, keyed by the node uuid and translated to the node's
    world position. Material colors become face colors.

    Args:
        scene: Scene to convert

    Returns:
        trimesh.Scene holding one geometry per exported node
    """
    import trimesh as tm

    result = tm.Scene()

    for node in scene.iter_nodes():
        geometry = scene.geometry_for(node)
        if geometry is None:
            continue

        geometry = _triangulated(geometry)
        if not geometry.data.faces:
            continue

        kwargs = {}
        material = scene.material_for(node)
        color = getattr(material, "color", None)
        if color is not None:
            kwargs["face_colors"] = np.tile(color_to_rgba(color), (len(geometry.face_array()), 1))

        mesh = tm.Trimesh(
            vertices=geometry.vertex_array(),
            faces=geometry.face_array(),
            process=False,  # Keep vertex order and count as stored
            **kwargs,
        )
        if geometry.data.scale != 1.0:
            mesh.apply_scale(geometry.data.scale)
        mesh.apply_translation(node.world_position().to_array())

        result.add_geometry(mesh, node_name=node.uuid, geom_name=node.uuid)

    return result

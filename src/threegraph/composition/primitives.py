"""Builders that insert primitive meshes into a scene."""

from __future__ import annotations

from ..core.geometry import BoxGeometry, Geometry
from ..core.material import MeshStandardMaterial
from ..core.node import Node
from ..core.scene import Scene
from ..core.vector import Vector3
from ..errors import InvalidArgumentError

# Firebrick
DEFAULT_COLOR = 0xB22222


def add_primitive(
    scene: Scene,
    geometry: Geometry,
    color: int = DEFAULT_COLOR,
    position: Vector3 | None = None,
    name: str = "",
) -> Node:
    """Add a geometry to a scene as a shadow-casting mesh under the root.

    A new :class:`MeshStandardMaterial` of the given color is created for
    the mesh. Both the geometry and the material are added to the scene
    collections, so the new node's references resolve.

    Args:
        scene: Scene to add to
        geometry: Geometry of the mesh (added to the scene)
        color: Material color as ``0xRRGGBB``
        position: Mesh position; the origin when None
        name: Optional node name

    Returns:
        The new mesh node

    Raises:
        InvalidArgumentError: If scene or geometry is None
    """
    if scene is None:
        raise InvalidArgumentError("scene must not be None")
    if geometry is None:
        raise InvalidArgumentError("geometry must not be None")

    scene.add_geometry(geometry)

    material = MeshStandardMaterial(color=color)
    scene.add_material(material)

    mesh = Node(
        name=name,
        kind="Mesh",
        cast_shadow=True,
        receive_shadow=True,
        geometry_ref=geometry.uuid,
        material_ref=material.uuid,
        position=position if position is not None else Vector3.zero(),
    )
    return scene.root.add_child(mesh)


def add_cube(
    scene: Scene,
    width: float,
    height: float,
    depth: float,
    position: Vector3 | None = None,
    color: int = DEFAULT_COLOR,
) -> Scene:
    """Add a box mesh of the given dimensions and color to the scene.

    Args:
        scene: Scene to add to
        width: Size along X
        height: Size along Y
        depth: Size along Z
        position: Cube position; the origin when None
        color: Material color as ``0xRRGGBB``

    Returns:
        scene (for chaining)

    Raises:
        InvalidArgumentError: If scene is None
    """
    if scene is None:
        raise InvalidArgumentError("scene must not be None")

    geometry = BoxGeometry(width=width, height=height, depth=depth)
    add_primitive(scene, geometry, color=color, position=position)
    return scene

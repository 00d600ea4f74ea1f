"""Scene aggregate: a root node plus the geometries and materials it uses."""

from __future__ import annotations

import logging
from typing import Iterator

from ..errors import DanglingReferenceError, InvalidArgumentError
from .geometry import Geometry
from .material import Material
from .node import Node

logger = logging.getLogger(__name__)


class Scene:
    """A three.js object scene.

    Geometries and materials are kept in insertion order and keyed by
    uuid, ignoring case. Nodes refer to them through ``geometry_ref`` and
    ``material_ref``; use :meth:`geometry_for` and :meth:`material_for` to
    resolve those references.

    Two ways of putting an entry into a collection exist:

    - :meth:`add_geometry` / :meth:`add_material` keep the first entry for
      a uuid. Adding a second entry with the same uuid is a no-op that
      returns False.
    - :meth:`import_geometry` / :meth:`import_material` overwrite, so the
      last entry imported for a uuid wins. Scene merging uses these.
    """

    def __init__(self, root: Node | None = None) -> None:
        self.root = root if root is not None else Node("Scene", kind="Scene")
        self._geometries: dict[str, Geometry] = {}
        self._materials: dict[str, Material] = {}

    @property
    def geometries(self) -> list[Geometry]:
        return list(self._geometries.values())

    @property
    def materials(self) -> list[Material]:
        return list(self._materials.values())

    def add_geometry(self, geometry: Geometry) -> bool:
        """Add a geometry unless one with the same uuid is already present.

        Returns:
            True if the geometry was added

        Raises:
            InvalidArgumentError: If geometry is None
        """
        if geometry is None:
            raise InvalidArgumentError("geometry must not be None")
        if geometry.key in self._geometries:
            logger.debug("Geometry %s already in scene, not added", geometry.uuid)
            return False
        self._geometries[geometry.key] = geometry
        return True

    def add_material(self, material: Material) -> bool:
        """Add a material unless one with the same uuid is already present.

        Returns:
            True if the material was added

        Raises:
            InvalidArgumentError: If material is None
        """
        if material is None:
            raise InvalidArgumentError("material must not be None")
        if material.key in self._materials:
            logger.debug("Material %s already in scene, not added", material.uuid)
            return False
        self._materials[material.key] = material
        return True

    def import_geometry(self, geometry: Geometry) -> None:
        """Store a geometry under its uuid, replacing any existing entry."""
        if geometry is None:
            raise InvalidArgumentError("geometry must not be None")
        if geometry.key in self._geometries and self._geometries[geometry.key] is not geometry:
            logger.debug("Geometry %s replaced by import", geometry.uuid)
        self._geometries[geometry.key] = geometry

    def import_material(self, material: Material) -> None:
        """Store a material under its uuid, replacing any existing entry."""
        if material is None:
            raise InvalidArgumentError("material must not be None")
        if material.key in self._materials and self._materials[material.key] is not material:
            logger.debug("Material %s replaced by import", material.uuid)
        self._materials[material.key] = material

    def get_geometry(self, uuid: str | None) -> Geometry | None:
        if not uuid:
            return None
        return self._geometries.get(uuid.lower())

    def get_material(self, uuid: str | None) -> Material | None:
        if not uuid:
            return None
        return self._materials.get(uuid.lower())

    def geometry_for(self, node: Node) -> Geometry | None:
        """Resolve a node's geometry reference in this scene."""
        return self.get_geometry(node.geometry_ref)

    def material_for(self, node: Node) -> Material | None:
        """Resolve a node's material reference in this scene."""
        return self.get_material(node.material_ref)

    def iter_nodes(self) -> Iterator[Node]:
        """Iterate over every node reachable from the root (depth-first)."""
        return self.root.iter_nodes()

    def validate(self) -> None:
        """Check that every reference reachable from the root resolves.

        Raises:
            DanglingReferenceError: On the first unresolved reference
        """
        for node in self.root.iter_nodes():
            if node.geometry_ref and self.geometry_for(node) is None:
                raise DanglingReferenceError(
                    node.geometry_ref,
                    f"Node '{node.name or node.uuid}' references missing geometry {node.geometry_ref}",
                )
            if node.material_ref and self.material_for(node) is None:
                raise DanglingReferenceError(
                    node.material_ref,
                    f"Node '{node.name or node.uuid}' references missing material {node.material_ref}",
                )

    def prune(self) -> int:
        """Drop geometries and materials no reachable node references.

        Returns:
            Number of entries removed
        """
        used_geometries = set()
        used_materials = set()
        for node in self.root.iter_nodes():
            if node.geometry_ref:
                used_geometries.add(node.geometry_ref.lower())
            if node.material_ref:
                used_materials.add(node.material_ref.lower())

        unused_geometries = [key for key in self._geometries if key not in used_geometries]
        unused_materials = [key for key in self._materials if key not in used_materials]
        for key in unused_geometries:
            del self._geometries[key]
        for key in unused_materials:
            del self._materials[key]

        removed = len(unused_geometries) + len(unused_materials)
        if removed:
            logger.debug("Pruned %d unused geometries/materials", removed)
        return removed

    def __repr__(self) -> str:
        return (
            f"Scene(root={self.root.name!r}, geometries={len(self._geometries)}, "
            f"materials={len(self._materials)})"
        )

"""Scene merging."""

from __future__ import annotations

import logging

from ..core.scene import Scene
from ..core.vector import Vector3
from ..errors import CycleError, InvalidArgumentError

logger = logging.getLogger(__name__)


def merge(target: Scene, source: Scene, new_position: Vector3 | None = None) -> Scene:
    """Merge ``source`` into ``target`` in place.

    Every geometry and material of ``source`` is imported into ``target``
    under its existing uuid. When both scenes hold an entry with the same
    uuid, the one from ``source`` replaces it; uuids are not rewritten.

    If the source root has children, each child is moved under the target
    root. Otherwise the source root itself (a single leaf) becomes one new
    child of the target root. The moved nodes leave the source tree.

    Args:
        target: Scene that receives the content
        source: Scene whose content is moved into target
        new_position: If given, replaces (does not offset) the position of
                      each node moved by this call. Children already under
                      the target root keep their positions.

    Returns:
        target (for chaining)

    Raises:
        InvalidArgumentError: If target or source is None, or both are the
                              same scene
        CycleError: If a moved node is the target root or one of its
                    ancestors. Nothing is changed in that case.
    """
    if target is None:
        raise InvalidArgumentError("target scene must not be None")
    if source is None:
        raise InvalidArgumentError("source scene must not be None")
    if source is target:
        raise InvalidArgumentError("cannot merge a scene into itself")

    if source.root.children:
        moved = list(source.root.children)
    else:
        moved = [source.root]

    for node in moved:
        if node is target.root or target.root.is_descendant_of(node):
            raise CycleError(f"Moving {node.uuid} under the target root would create a cycle")

    for geometry in source.geometries:
        target.import_geometry(geometry)
    for material in source.materials:
        target.import_material(material)

    for node in moved:
        if new_position is not None:
            node.position = new_position
        target.root.add_child(node)

    logger.debug(
        "Merged %d node(s), %d geometries, %d materials into scene %s",
        len(moved),
        len(source.geometries),
        len(source.materials),
        target.root.uuid,
    )
    return target

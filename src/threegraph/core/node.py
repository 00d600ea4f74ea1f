"""Node class for the scene graph tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from ..errors import CycleError, InvalidArgumentError
from .entity import Entity
from .vector import Vector3


@dataclass(eq=False)
class Node(Entity):
    """An element of the scene graph (``Object3D`` in three.js terms).

    Each node owns its children, forming a tree in which every node has
    at most one parent. Geometry and material are not owned: the node only
    stores their uuids, which resolve against the collections of the
    :class:`~threegraph.core.scene.Scene` the node belongs to.

    Example:
        group = Node("crates", kind="Group")
        crate = Node("crate", kind="Mesh", geometry_ref=box.uuid, material_ref=wood.uuid)
        crate.position = Vector3(0, 0.5, 0)
        group.add_child(crate)
    """

    name: str = ""
    kind: str = "Object3D"
    uuid: str | None = None
    position: Vector3 = field(default_factory=Vector3)
    cast_shadow: bool = True
    receive_shadow: bool = False
    visible: bool = True
    geometry_ref: str | None = None
    material_ref: str | None = None
    children: list[Node] = field(default_factory=list)
    parent: Node | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._init_uuid()
        if not self.kind:
            raise InvalidArgumentError("Node kind must not be empty")
        initial = self.children
        self.children = []
        for child in initial:
            self.add_child(child)

    def add_child(self, node: Node) -> Node:
        """Append a child node, detaching it from its previous parent.

        Args:
            node: The node to add as a child

        Returns:
            The added node (for chaining)

        Raises:
            InvalidArgumentError: If node is None
            CycleError: If node is this node or one of its ancestors
        """
        if node is None:
            raise InvalidArgumentError("node must not be None")
        if node is self or self.is_descendant_of(node):
            raise CycleError(
                f"Cannot add '{node.name or node.uuid}' under "
                f"'{self.name or self.uuid}': it would become its own descendant"
            )
        if node.parent is not None:
            node.parent.remove_child(node)
        node.parent = self
        self.children.append(node)
        return node

    def remove_child(self, node: Node) -> bool:
        """Remove a child node.

        Args:
            node: The node to remove

        Returns:
            True if the node was found and removed
        """
        for index, child in enumerate(self.children):
            if child is node:
                del self.children[index]
                node.parent = None
                return True
        return False

    def is_descendant_of(self, node: Node) -> bool:
        """Whether node appears on this node's parent chain."""
        current = self.parent
        while current is not None:
            if current is node:
                return True
            current = current.parent
        return False

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def iter_nodes(self, include_self: bool = True) -> Iterator[Node]:
        """Iterate over this node and all descendants (depth-first).

        Args:
            include_self: Whether to include this node in the iteration

        Yields:
            Node instances
        """
        stack = [self] if include_self else list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_leaves(self) -> Iterator[Node]:
        """Iterate over the nodes without children in this subtree."""
        for node in self.iter_nodes():
            if node.is_leaf:
                yield node

    def find(self, name: str) -> Node | None:
        """Find the first node in this subtree with the given name."""
        for node in self.iter_nodes():
            if node.name == name:
                return node
        return None

    def find_all(self, name: str) -> list[Node]:
        """Find all nodes in this subtree with the given name."""
        return [node for node in self.iter_nodes() if node.name == name]

    def world_position(self) -> Vector3:
        """Position relative to the tree root (sum of ancestor positions)."""
        position = self.position
        current = self.parent
        while current is not None:
            position = current.position + position
            current = current.parent
        return position

    @property
    def depth(self) -> int:
        """Get the depth of this node in the hierarchy (root = 0)."""
        depth = 0
        current = self.parent
        while current is not None:
            depth += 1
            current = current.parent
        return depth

    @property
    def root(self) -> Node:
        """Get the root node of this hierarchy."""
        current = self
        while current.parent is not None:
            current = current.parent
        return current

    def __repr__(self) -> str:
        refs = f", geometry={self.geometry_ref!r}" if self.geometry_ref else ""
        children_str = f", children={len(self.children)}" if self.children else ""
        return f"Node({self.name!r}, kind={self.kind!r}, uuid={self.uuid!r}{refs}{children_str})"

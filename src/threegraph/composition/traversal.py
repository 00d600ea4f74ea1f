"""Traversal helpers over node forests."""

from __future__ import annotations

from typing import Iterable, Iterator

from ..core.node import Node


class LeafSequence:
    """Lazy view of the leaf nodes of a forest.

    Every iteration walks the current state of the forest again, so the
    view can be iterated any number of times as long as ``nodes`` itself
    can (pass a list, not a generator).
    """

    def __init__(self, nodes: Iterable[Node | None]) -> None:
        self._nodes = nodes

    def __iter__(self) -> Iterator[Node]:
        return _leaves(self._nodes)


def _leaves(nodes: Iterable[Node | None]) -> Iterator[Node]:
    for top in nodes:
        if top is None:
            continue
        stack = [top]
        while stack:
            node = stack.pop()
            if not node.children:
                yield node
            else:
                stack.extend(reversed(node.children))


def flatten(nodes: Iterable[Node | None]) -> LeafSequence:
    """Leaf nodes of a forest, depth-first.

    Each node without children is produced once; a node with children is
    never produced itself, only its descendant leaves are. Siblings keep
    their order. ``None`` entries in the input are skipped.

    Example:
        for leaf in flatten(scene.root.children):
            print(leaf.name)
    """
    return LeafSequence(nodes)

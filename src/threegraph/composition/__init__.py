"""Scene composition: merging, primitive builders and traversal."""

from .merge import merge
from .primitives import DEFAULT_COLOR, add_cube, add_primitive
from .traversal import LeafSequence, flatten

__all__ = ["merge", "add_cube", "add_primitive", "flatten", "LeafSequence", "DEFAULT_COLOR"]

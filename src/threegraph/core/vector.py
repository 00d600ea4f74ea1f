"""Vector3 coordinate type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Self

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Vector3:
    """An immutable (x, y, z) coordinate.

    Vectors have value semantics, so a single instance can safely be
    assigned to several nodes.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    @classmethod
    def zero(cls) -> Self:
        return cls()

    @classmethod
    def from_wire(cls, value: Any) -> Self:
        """Create a vector from ``[x, y, z]`` or ``{"x": .., "y": .., "z": ..}``.

        Raises:
            ValueError: If the value has neither shape
        """
        if isinstance(value, dict):
            return cls(
                float(value.get("x", 0.0)),
                float(value.get("y", 0.0)),
                float(value.get("z", 0.0)),
            )
        values = list(value)
        if len(values) != 3:
            raise ValueError(f"Expected 3 components, got {len(values)}")
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def to_list(self) -> list[float]:
        return [self.x, self.y, self.z]

    def to_array(self) -> NDArray[np.float64]:
        """Return the vector as a numpy float64 array of shape (3,)."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

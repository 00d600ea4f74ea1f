"""Identity shared by geometries, materials and nodes."""

from __future__ import annotations

import uuid as uuid_module
from typing import Any


def new_uuid() -> str:
    """Generate a fresh, process-unique identifier."""
    return str(uuid_module.uuid4())


class Entity:
    """Mixin giving an object a fixed ``uuid`` and ``kind``.

    Subclasses are dataclasses declared with ``eq=False`` so that equality
    and hashing come from here: two entities are equal when their uuids
    match, ignoring case, whatever their content.
    """

    _fixed_attributes = ("uuid", "kind")

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self._fixed_attributes and name in self.__dict__:
            raise AttributeError(
                f"{name!r} of {type(self).__name__} cannot change after construction"
            )
        super().__setattr__(name, value)

    def _init_uuid(self) -> None:
        """Replace a missing or empty uuid with a generated one."""
        if not self.__dict__.get("uuid"):
            object.__setattr__(self, "uuid", new_uuid())

    @property
    def key(self) -> str:
        """Case-insensitive lookup key for this entity."""
        return self.uuid.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

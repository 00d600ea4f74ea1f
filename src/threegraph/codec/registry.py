"""Registries mapping type tags to entity variants."""

from __future__ import annotations

from typing import Generic, Iterable, TypeVar

from ..core.geometry import BoxGeometry, CylinderGeometry, Geometry, SphereGeometry
from ..core.material import Material, MeshBasicMaterial, MeshPhongMaterial, MeshStandardMaterial
from ..errors import TypeResolutionError

T = TypeVar("T")


class TypeRegistry(Generic[T]):
    """A ``{type tag -> variant class}`` mapping used for decode dispatch.

    Variants are keyed by their ``TYPE`` constant. New variants are added
    with :meth:`register`, which also works as a class decorator:

        @geometry_types.register
        @dataclass(eq=False)
        class TorusGeometry(Geometry):
            TYPE: ClassVar[str] = "TorusGeometry"
            ...

    A codec can be given its own registry (see :meth:`copy`) so that
    extensions stay local to it.
    """

    def __init__(self, base: type[T], variants: Iterable[type[T]] = ()) -> None:
        self.base = base
        self._variants: dict[str, type[T]] = {}
        for variant in variants:
            self.register(variant)

    def register(self, variant: type[T]) -> type[T]:
        """Register a variant under its ``TYPE`` tag.

        Returns:
            The variant (so this can be used as a decorator)

        Raises:
            TypeError: If variant is not a subclass of the registry's base
            ValueError: If the variant has no tag
        """
        if not (isinstance(variant, type) and issubclass(variant, self.base)):
            raise TypeError(f"{variant!r} is not a {self.base.__name__} subclass")
        tag = getattr(variant, "TYPE", "")
        if not tag:
            raise ValueError(f"{variant.__name__} does not declare a TYPE tag")
        self._variants[tag] = variant
        return variant

    def resolve(self, tag: str) -> type[T]:
        """Look up the variant for a tag.

        Raises:
            TypeResolutionError: If no variant is registered for the tag
        """
        variant = self._variants.get(tag)
        if variant is None:
            raise TypeResolutionError(tag, self.tags())
        return variant

    def tags(self) -> list[str]:
        return list(self._variants)

    def copy(self) -> TypeRegistry[T]:
        return TypeRegistry(self.base, self._variants.values())

    def __contains__(self, tag: object) -> bool:
        return tag in self._variants

    def __len__(self) -> int:
        return len(self._variants)


# Default registries used by the module-level codec functions
geometry_types: TypeRegistry[Geometry] = TypeRegistry(
    Geometry,
    [Geometry, BoxGeometry, SphereGeometry, CylinderGeometry],
)

material_types: TypeRegistry[Material] = TypeRegistry(
    Material,
    [MeshBasicMaterial, MeshStandardMaterial, MeshPhongMaterial],
)

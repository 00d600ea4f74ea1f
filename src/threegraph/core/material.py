"""Material entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .entity import Entity


@dataclass(eq=False)
class Material(Entity):
    """Properties shared by every material.

    ``Material`` itself is abstract in the three.js format, so documents
    always name one of the concrete variants below.

    Attributes:
        uuid: Identifier; generated when not given
        name: Optional human readable name
        opacity: 0 (fully transparent) to 1 (opaque)
        transparent: Whether the material is rendered with blending
        visible: Whether meshes using the material are drawn
        wireframe: Render as wireframe
    """

    TYPE: ClassVar[str] = "Material"

    # Attribute name -> wire key, including fields inherited from Material
    WIRE_FIELDS: ClassVar[dict[str, str]] = {
        "name": "name",
        "opacity": "opacity",
        "transparent": "transparent",
        "visible": "visible",
        "wireframe": "wireframe",
    }

    uuid: str | None = None
    name: str = ""
    opacity: float = 1.0
    transparent: bool = False
    visible: bool = True
    wireframe: bool = False

    def __post_init__(self) -> None:
        self._init_uuid()

    @property
    def kind(self) -> str:
        """Discriminator tag of this variant."""
        return self.TYPE


@dataclass(eq=False)
class MeshBasicMaterial(Material):
    """Unlit material with a flat color (``0xRRGGBB``)."""

    TYPE: ClassVar[str] = "MeshBasicMaterial"
    WIRE_FIELDS: ClassVar[dict[str, str]] = {
        **Material.WIRE_FIELDS,
        "color": "color",
    }

    color: int = 0xFFFFFF


@dataclass(eq=False)
class MeshStandardMaterial(Material):
    """Metallic-roughness material.

    Attributes:
        color: Diffuse color as ``0xRRGGBB``
        roughness: 0 (mirror) to 1 (fully diffuse)
        metalness: 0 (dielectric) to 1 (metal)
        emissive: Emitted color as ``0xRRGGBB``
    """

    TYPE: ClassVar[str] = "MeshStandardMaterial"
    WIRE_FIELDS: ClassVar[dict[str, str]] = {
        **Material.WIRE_FIELDS,
        "color": "color",
        "roughness": "roughness",
        "metalness": "metalness",
        "emissive": "emissive",
    }

    color: int = 0xFFFFFF
    roughness: float = 1.0
    metalness: float = 0.0
    emissive: int = 0x000000


@dataclass(eq=False)
class MeshPhongMaterial(Material):
    """Blinn-Phong material with specular highlights."""

    TYPE: ClassVar[str] = "MeshPhongMaterial"
    WIRE_FIELDS: ClassVar[dict[str, str]] = {
        **Material.WIRE_FIELDS,
        "color": "color",
        "specular": "specular",
        "shininess": "shininess",
        "emissive": "emissive",
    }

    color: int = 0xFFFFFF
    specular: int = 0x111111
    shininess: float = 30.0
    emissive: int = 0x000000

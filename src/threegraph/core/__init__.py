"""Scene graph entities."""

from .vector import Vector3
from .entity import Entity, new_uuid
from .geometry import Geometry, GeometryData, BoxGeometry, SphereGeometry, CylinderGeometry
from .material import Material, MeshBasicMaterial, MeshStandardMaterial, MeshPhongMaterial
from .node import Node
from .scene import Scene

__all__ = [
    "Vector3",
    "Entity",
    "new_uuid",
    "Geometry",
    "GeometryData",
    "BoxGeometry",
    "SphereGeometry",
    "CylinderGeometry",
    "Material",
    "MeshBasicMaterial",
    "MeshStandardMaterial",
    "MeshPhongMaterial",
    "Node",
    "Scene",
]

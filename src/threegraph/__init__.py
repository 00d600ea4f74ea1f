"""Build, merge and serialize three.js JSON scene graphs."""

from .core import (
    BoxGeometry,
    CylinderGeometry,
    Geometry,
    GeometryData,
    Material,
    MeshBasicMaterial,
    MeshPhongMaterial,
    MeshStandardMaterial,
    Node,
    Scene,
    SphereGeometry,
    Vector3,
)
from .codec import SceneCodec, TypeRegistry, geometry_types, material_types
from .composition import add_cube, add_primitive, flatten, merge
from .errors import (
    CycleError,
    DanglingReferenceError,
    DecodeError,
    InvalidArgumentError,
    SceneGraphError,
    TypeResolutionError,
)

__all__ = [
    "BoxGeometry",
    "CylinderGeometry",
    "Geometry",
    "GeometryData",
    "Material",
    "MeshBasicMaterial",
    "MeshPhongMaterial",
    "MeshStandardMaterial",
    "Node",
    "Scene",
    "SphereGeometry",
    "Vector3",
    "SceneCodec",
    "TypeRegistry",
    "geometry_types",
    "material_types",
    "add_cube",
    "add_primitive",
    "flatten",
    "merge",
    "CycleError",
    "DanglingReferenceError",
    "DecodeError",
    "InvalidArgumentError",
    "SceneGraphError",
    "TypeResolutionError",
]

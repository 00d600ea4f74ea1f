"""Type registries and the JSON document codec."""

from .registry import TypeRegistry, geometry_types, material_types
from .document import (
    SceneCodec,
    default_codec,
    decode_geometry,
    encode_geometry,
    decode_material,
    encode_material,
    decode_node,
    encode_node,
    decode_scene,
    encode_scene,
    loads,
    dumps,
    load,
    dump,
)

__all__ = [
    "TypeRegistry",
    "geometry_types",
    "material_types",
    "SceneCodec",
    "default_codec",
    "decode_geometry",
    "encode_geometry",
    "decode_material",
    "encode_material",
    "decode_node",
    "encode_node",
    "decode_scene",
    "encode_scene",
    "loads",
    "dumps",
    "load",
    "dump",
]

"""Encoding and decoding of three.js JSON object scenes.

Document layout (JSON Object Scene format 4)::

    {
      "metadata": {"version": 4.5, "type": "Object", "generator": "threegraph"},
      "geometries": [{"uuid": ..., "type": "BoxGeometry", "width": 1, ..., "data": {...}}],
      "materials": [{"uuid": ..., "type": "MeshStandardMaterial", "color": 16777215, ...}],
      "object": {"uuid": ..., "type": "Scene", "children": [...]}
    }

Geometry and material objects are dispatched on their ``type`` tag through
a :class:`~threegraph.codec.registry.TypeRegistry`. Absent fields take the
variant's declared defaults.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import Any

from ..core.geometry import Geometry, GeometryData
from ..core.material import Material
from ..core.node import Node
from ..core.scene import Scene
from ..core.vector import Vector3
from ..errors import DecodeError
from .registry import TypeRegistry, geometry_types, material_types

logger = logging.getLogger(__name__)

FORMAT_VERSION = 4.5
GENERATOR = "threegraph"

# GeometryData attribute -> key inside the "data" object
GEOMETRY_DATA_FIELDS = {
    "cast_shadow": "castShadow",
    "colors": "colors",
    "double_sided": "doubleSided",
    "faces": "faces",
    "normals": "normals",
    "receive_shadow": "receiveShadow",
    "scale": "scale",
    "uvs": "uvs",
    "vertices": "vertices",
    "visible": "visible",
}


def _coerce(default: Any, value: Any) -> Any:
    """Check a wire value against the type of the field's default.

    Numbers may widen from int to float; every other mismatch is an error.
    """
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise TypeError("expected a boolean")
        return value
    if isinstance(default, (int, float)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError("expected a number")
        if isinstance(default, float):
            return float(value)
        if isinstance(value, float) and not value.is_integer():
            raise ValueError("expected an integer")
        return int(value)
    if isinstance(default, str):
        if not isinstance(value, str):
            raise TypeError("expected a string")
        return value
    if isinstance(default, list):
        if not isinstance(value, list):
            raise TypeError("expected an array")
        return list(value)
    return value


def _field_defaults(cls: type) -> dict[str, Any]:
    defaults = {}
    for f in dataclasses.fields(cls):
        if f.default is not dataclasses.MISSING:
            defaults[f.name] = f.default
        elif f.default_factory is not dataclasses.MISSING:
            defaults[f.name] = f.default_factory()
    return defaults


def _read_fields(cls: type, data: dict[str, Any], mapping: dict[str, str]) -> dict[str, Any]:
    """Collect constructor arguments for the wire keys present in data.

    A ``null`` value counts as absent and leaves the field at its default.
    """
    defaults = _field_defaults(cls)
    kwargs = {}
    for attr, key in mapping.items():
        if data.get(key) is None:
            continue
        try:
            kwargs[attr] = _coerce(defaults.get(attr), data[key])
        except (TypeError, ValueError) as exc:
            raise DecodeError(f"Invalid value for '{key}' in {cls.__name__}: {data[key]!r}") from exc
    return kwargs


def _expect_object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object for {what}, got {type(data).__name__}")
    return data


def _expect_tag(data: dict[str, Any], what: str) -> str:
    tag = data.get("type")
    if not tag or not isinstance(tag, str):
        raise DecodeError(f"{what} has no 'type' tag")
    return tag


def _read_uuid(data: dict[str, Any], what: str) -> str | None:
    uuid = data.get("uuid")
    if uuid is not None and not isinstance(uuid, str):
        raise DecodeError(f"{what} 'uuid' must be a string, got {uuid!r}")
    return uuid


def _read_flag(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise DecodeError(f"Object '{key}' must be a boolean, got {value!r}")
    return value


class SceneCodec:
    """Converts scenes and their entities to and from JSON-compatible dicts.

    Args:
        geometry_types: Registry used to resolve geometry tags.
                        Defaults to the module-level geometry registry.
        material_types: Registry used to resolve material tags.
                        Defaults to the module-level material registry.
        strict: If True, decoded scenes are checked with
                :meth:`Scene.validate` before being returned.
    """

    def __init__(
        self,
        geometry_types: TypeRegistry[Geometry] | None = None,
        material_types: TypeRegistry[Material] | None = None,
        strict: bool = False,
    ) -> None:
        self.geometry_types = geometry_types if geometry_types is not None else _default_geometry_types
        self.material_types = material_types if material_types is not None else _default_material_types
        self.strict = strict

    # Geometry

    def decode_geometry(self, data: dict[str, Any]) -> Geometry:
        """Build the geometry variant named by ``data["type"]``.

        Raises:
            TypeResolutionError: If the tag is not registered
            DecodeError: If data is not a geometry object
        """
        data = _expect_object(data, "geometry")
        variant = self.geometry_types.resolve(_expect_tag(data, "Geometry"))

        kwargs = _read_fields(variant, data, variant.WIRE_FIELDS)
        payload = data.get("data")
        payload = _expect_object(payload if payload is not None else {}, "geometry data")
        kwargs["data"] = GeometryData(**_read_fields(GeometryData, payload, GEOMETRY_DATA_FIELDS))

        geometry = variant(uuid=_read_uuid(data, "Geometry"), **kwargs)
        logger.debug("Decoded %s %s", geometry.kind, geometry.uuid)
        return geometry

    def encode_geometry(self, geometry: Geometry) -> dict[str, Any]:
        result: dict[str, Any] = {"uuid": geometry.uuid, "type": geometry.kind}
        for attr, key in geometry.WIRE_FIELDS.items():
            result[key] = getattr(geometry, attr)
        result["data"] = {
            key: _copy_value(getattr(geometry.data, attr))
            for attr, key in GEOMETRY_DATA_FIELDS.items()
        }
        return result

    # Material

    def decode_material(self, data: dict[str, Any]) -> Material:
        """Build the material variant named by ``data["type"]``.

        Raises:
            TypeResolutionError: If the tag is not registered
            DecodeError: If data is not a material object
        """
        data = _expect_object(data, "material")
        variant = self.material_types.resolve(_expect_tag(data, "Material"))

        kwargs = _read_fields(variant, data, variant.WIRE_FIELDS)
        material = variant(uuid=_read_uuid(data, "Material"), **kwargs)
        logger.debug("Decoded %s %s", material.kind, material.uuid)
        return material

    def encode_material(self, material: Material) -> dict[str, Any]:
        result: dict[str, Any] = {"uuid": material.uuid, "type": material.kind}
        for attr, key in material.WIRE_FIELDS.items():
            result[key] = getattr(material, attr)
        return result

    # Node

    def decode_node(self, data: dict[str, Any]) -> Node:
        """Build a node and its subtree.

        The tree is walked with an explicit stack, so nesting depth is not
        bounded by the interpreter's recursion limit.
        """
        root, children = _decode_single_node(data)
        stack = [(child, root) for child in reversed(children)]
        while stack:
            child_data, parent = stack.pop()
            node, children = _decode_single_node(child_data)
            parent.add_child(node)
            stack.extend((child, node) for child in reversed(children))
        return root

    def encode_node(self, node: Node) -> dict[str, Any]:
        result = _encode_single_node(node)
        stack = [(child, result) for child in reversed(node.children)]
        while stack:
            current, parent_data = stack.pop()
            encoded = _encode_single_node(current)
            parent_data.setdefault("children", []).append(encoded)
            stack.extend((child, encoded) for child in reversed(current.children))
        return result

    # Scene

    def decode_scene(self, data: dict[str, Any]) -> Scene:
        """Build a scene from a parsed document.

        Entries sharing a uuid within ``geometries`` or ``materials`` keep
        the first occurrence.

        Raises:
            DecodeError: If the document is malformed
            TypeResolutionError: If a geometry or material tag is unknown
            DanglingReferenceError: In strict mode, if a reference does not resolve
        """
        data = _expect_object(data, "scene document")
        if "object" not in data:
            raise DecodeError("Scene document has no 'object'")

        scene = Scene(self.decode_node(data["object"]))
        for entry in _expect_list(data, "geometries"):
            scene.add_geometry(self.decode_geometry(entry))
        for entry in _expect_list(data, "materials"):
            scene.add_material(self.decode_material(entry))

        if self.strict:
            scene.validate()
        return scene

    def encode_scene(self, scene: Scene) -> dict[str, Any]:
        return {
            "metadata": {
                "version": FORMAT_VERSION,
                "type": "Object",
                "generator": GENERATOR,
            },
            "geometries": [self.encode_geometry(g) for g in scene.geometries],
            "materials": [self.encode_material(m) for m in scene.materials],
            "object": self.encode_node(scene.root),
        }

    # Text and files

    def loads(self, text: str) -> Scene:
        """Decode a scene from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"Invalid JSON: {exc}") from exc
        except RecursionError as exc:
            raise DecodeError("JSON document is nested too deeply") from exc
        return self.decode_scene(data)

    def dumps(self, scene: Scene, indent: int | None = None) -> str:
        return json.dumps(self.encode_scene(scene), indent=indent)

    def load(self, path: str | Path) -> Scene:
        """Read a scene from a JSON file."""
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            text = f.read()
        logger.debug("Loading scene from %s", path)
        return self.loads(text)

    def dump(self, scene: Scene, path: str | Path, indent: int | None = 2) -> None:
        """Write a scene to a JSON file."""
        path = Path(path)
        path.write_text(self.dumps(scene, indent=indent), encoding="utf-8")
        logger.debug("Wrote scene to %s", path)


def _decode_single_node(data: Any) -> tuple[Node, list[Any]]:
    """Build one node without its children, returning the raw child list."""
    data = _expect_object(data, "object")

    for key in ("geometry", "material"):
        ref = data.get(key)
        if ref is not None and not isinstance(ref, str):
            raise DecodeError(f"Object '{key}' must be a uuid string, got {ref!r}")

    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise DecodeError(f"Object 'name' must be a string, got {name!r}")
    kind = data.get("type")
    if kind is not None and not isinstance(kind, str):
        raise DecodeError(f"Object 'type' must be a string, got {kind!r}")

    position = Vector3()
    if data.get("position") is not None:
        try:
            position = Vector3.from_wire(data["position"])
        except (TypeError, ValueError) as exc:
            raise DecodeError(f"Invalid position: {data['position']!r}") from exc

    node = Node(
        name=name or "",
        kind=kind or "Object3D",
        uuid=_read_uuid(data, "Object"),
        position=position,
        cast_shadow=_read_flag(data, "castShadow", True),
        receive_shadow=_read_flag(data, "receiveShadow", False),
        visible=_read_flag(data, "visible", True),
        geometry_ref=data.get("geometry"),
        material_ref=data.get("material"),
    )

    children = data.get("children")
    if children is None:
        children = []
    elif not isinstance(children, list):
        raise DecodeError(f"Object 'children' must be an array, got {type(children).__name__}")
    return node, children


def _encode_single_node(node: Node) -> dict[str, Any]:
    result: dict[str, Any] = {
        "uuid": node.uuid,
        "type": node.kind,
        "name": node.name,
        "castShadow": node.cast_shadow,
        "receiveShadow": node.receive_shadow,
        "visible": node.visible,
        "position": node.position.to_list(),
    }
    if node.geometry_ref is not None:
        result["geometry"] = node.geometry_ref
    if node.material_ref is not None:
        result["material"] = node.material_ref
    return result


def _expect_list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise DecodeError(f"Scene '{key}' must be an array, got {type(value).__name__}")
    return value


def _copy_value(value: Any) -> Any:
    return list(value) if isinstance(value, list) else value


_default_geometry_types = geometry_types
_default_material_types = material_types

default_codec = SceneCodec()

decode_geometry = default_codec.decode_geometry
encode_geometry = default_codec.encode_geometry
decode_material = default_codec.decode_material
encode_material = default_codec.encode_material
decode_node = default_codec.decode_node
encode_node = default_codec.encode_node
decode_scene = default_codec.decode_scene
encode_scene = default_codec.encode_scene
loads = default_codec.loads
dumps = default_codec.dumps
load = default_codec.load
dump = default_codec.dump

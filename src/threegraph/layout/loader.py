"""YAML recipes for composing scenes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ..codec.document import SceneCodec, default_codec
from ..composition.merge import merge
from ..composition.primitives import DEFAULT_COLOR, add_primitive
from ..core.geometry import BoxGeometry
from ..core.node import Node
from ..core.scene import Scene
from ..core.vector import Vector3
from ..errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class RecipeLoader:
    """Builds scenes from composition recipes.

    A recipe places named objects into a new scene. Each object is either
    a cube built in place, a three.js JSON document, or another recipe;
    documents and recipes are merged into the scene with
    :func:`~threegraph.composition.merge`.

    YAML format:
        name: scene_name

        place:
          object_name:
            cube:                       # Box mesh
              size: [width, height, depth]   # Optional, default [1, 1, 1]
              color: 0xB22222                # Optional, int or "#rrggbb"
            # OR
            scene: path/to/scene.json   # three.js JSON document
            # OR
            recipe: path/to/other.yaml  # Nested recipe

            position: [x, y, z]         # Optional

    Paths are resolved against ``base_dir``, or against the directory of
    the recipe file being loaded when no base directory was given.

    Example - Yard:
        name: yard
        place:
          crate:
            cube: {size: [1, 1, 1], color: "#8b4513"}
            position: [0, 0.5, 0]
          shed:
            scene: shed.json
            position: [4, 0, 0]
    """

    def __init__(self, base_dir: str | Path | None = None, codec: SceneCodec | None = None) -> None:
        """Initialize the loader.

        Args:
            base_dir: Directory that referenced files are relative to
            codec: Codec used to read JSON documents. Defaults to the
                   module-level codec.
        """
        self._base_dir = Path(base_dir) if base_dir is not None else None
        self._codec = codec if codec is not None else default_codec

    def load(self, path: str | Path) -> Scene:
        """Load and compose a scene from a recipe file.

        Raises:
            FileNotFoundError: If the recipe or a file it references is missing
            InvalidArgumentError: If the YAML is malformed, a placement is
                                  malformed, or recipes include each other
        """
        return self._load_recipe(Path(path), self._base_dir, ())

    def load_string(self, yaml_string: str) -> Scene:
        """Compose a scene from a recipe given as a YAML string.

        Relative paths resolve against ``base_dir`` or the working directory.
        """
        data = _parse_yaml(yaml_string, "<string>")
        return self._build_scene(data or {}, self._base_dir or Path.cwd(), ())

    def _load_recipe(self, path: Path, base_dir: Path | None, active: tuple[Path, ...]) -> Scene:
        """Load one recipe file. ``active`` holds the recipes currently being loaded."""
        resolved = path.resolve()
        if resolved in active:
            chain = " -> ".join(str(p) for p in (*active, resolved))
            raise InvalidArgumentError(f"Recipe includes itself: {chain}")

        with open(path, encoding="utf-8") as f:
            data = _parse_yaml(f, path)

        logger.info("Composing recipe %s", path)
        return self._build_scene(data or {}, base_dir or path.parent, (*active, resolved))

    def _build_scene(self, data: dict[str, Any], base_dir: Path, active: tuple[Path, ...]) -> Scene:
        """Build scene from parsed recipe data."""
        if not isinstance(data, dict):
            raise InvalidArgumentError("Recipe must be a mapping")

        scene = Scene(Node(str(data.get("name", "composed_scene")), kind="Scene"))

        placements = data.get("place") or {}
        if not isinstance(placements, dict):
            raise InvalidArgumentError("Recipe 'place' must be a mapping")

        for obj_name, obj_def in placements.items():
            if not isinstance(obj_def, dict):
                raise InvalidArgumentError(f"Placement '{obj_name}' must be a mapping")

            position = None
            if "position" in obj_def:
                position = _parse_vector(obj_name, obj_def["position"])

            if "cube" in obj_def:
                self._place_cube(scene, obj_name, obj_def["cube"] or {}, position)
            elif "scene" in obj_def:
                other = self._codec.load(base_dir / obj_def["scene"])
                merge(scene, other, position)
            elif "recipe" in obj_def:
                recipe_path = base_dir / obj_def["recipe"]
                nested = self._load_recipe(recipe_path, None, active)
                merge(scene, nested, position)
            else:
                raise InvalidArgumentError(
                    f"Placement '{obj_name}' must have 'cube', 'scene' or 'recipe' specified"
                )

        return scene

    def _place_cube(
        self, scene: Scene, name: str, cube_def: dict[str, Any], position: Vector3 | None
    ) -> None:
        size = cube_def.get("size", [1.0, 1.0, 1.0])
        if not isinstance(size, list) or len(size) != 3:
            raise InvalidArgumentError(f"Cube '{name}' size must be [width, height, depth]")

        color = parse_color(cube_def.get("color", DEFAULT_COLOR))
        geometry = BoxGeometry(width=float(size[0]), height=float(size[1]), depth=float(size[2]))
        add_primitive(scene, geometry, color=color, position=position, name=name)


def parse_color(value: int | str) -> int:
    """Convert ``0xRRGGBB`` ints or ``"#rrggbb"`` strings to an int.

    Raises:
        InvalidArgumentError: If the value is not a color
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Invalid color: {value!r}")
    if isinstance(value, int):
        color = value
    elif isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("#"):
            text = text[1:]
        elif text.startswith("0x"):
            text = text[2:]
        try:
            color = int(text, 16)
        except ValueError:
            raise InvalidArgumentError(f"Invalid color: {value!r}") from None
    else:
        raise InvalidArgumentError(f"Invalid color: {value!r}")

    if not 0 <= color <= 0xFFFFFF:
        raise InvalidArgumentError(f"Color out of range: {value!r}")
    return color


def _parse_vector(name: str, value: Any) -> Vector3:
    try:
        return Vector3.from_wire(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"Invalid position for '{name}': {value!r}") from exc


def _parse_yaml(stream: Any, source: str | Path) -> Any:
    try:
        return yaml.safe_load(stream)
    except yaml.YAMLError as exc:
        raise InvalidArgumentError(f"Invalid recipe YAML in {source}: {exc}") from exc

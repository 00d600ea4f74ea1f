"""Command line entry point for threegraph."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .codec import default_codec
from .composition import merge
from .core.scene import Scene
from .core.vector import Vector3
from .errors import SceneGraphError
from .layout import RecipeLoader

logger = logging.getLogger(__name__)

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def _parse_position(value: str) -> Vector3:
    try:
        return Vector3.from_wire(float(part) for part in value.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected X,Y,Z, got {value!r}") from None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="threegraph",
        description="Compose, merge and inspect three.js JSON scenes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compose = subparsers.add_parser("compose", help="Build a scene from a YAML recipe")
    compose.add_argument("recipe", help="Recipe YAML file")
    compose.add_argument(
        "-o", "--output",
        metavar="PATH",
        default="-",
        help="Output JSON file (default: stdout)",
    )

    merge_cmd = subparsers.add_parser("merge", help="Merge scenes into a target scene")
    merge_cmd.add_argument("target", help="Scene JSON that receives the others")
    merge_cmd.add_argument("sources", nargs="+", help="Scene JSON files to merge in")
    merge_cmd.add_argument(
        "--position",
        metavar="X,Y,Z",
        type=_parse_position,
        help="Place the merged objects at this position",
    )
    merge_cmd.add_argument(
        "-o", "--output",
        metavar="PATH",
        default="-",
        help="Output JSON file (default: stdout)",
    )

    info = subparsers.add_parser("info", help="Print the node tree of a scene")
    info.add_argument("scene", help="Scene JSON file")

    return parser.parse_args(argv)


def _write(scene: Scene, output: str) -> None:
    if output == "-":
        print(default_codec.dumps(scene, indent=2))
    else:
        default_codec.dump(scene, Path(output))
        logger.info("Saved scene to %s", output)


def print_tree(scene: Scene) -> None:
    """Print the node hierarchy and collection sizes of a scene."""
    nodes = list(scene.iter_nodes())
    print(f"Scene contains {len(nodes)} nodes:")
    for node in nodes:
        indent = "  " * node.depth
        geometry = scene.geometry_for(node)
        geometry_info = f" [{geometry.kind}]" if geometry is not None else ""
        label = node.name or node.uuid
        print(f"{indent}- {label} ({node.kind}){geometry_info}")
    print(f"Geometries: {len(scene.geometries)}")
    print(f"Materials: {len(scene.materials)}")


def main(argv: list[str] | None = None) -> int:
    """Run the threegraph command line tool."""
    args = parse_args(argv)
    logging.basicConfig(
        level=LOG_LEVELS[min(args.verbose, len(LOG_LEVELS) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "compose":
            scene = RecipeLoader().load(args.recipe)
            _write(scene, args.output)
        elif args.command == "merge":
            scene = default_codec.load(args.target)
            for source in args.sources:
                merge(scene, default_codec.load(source), args.position)
            _write(scene, args.output)
        elif args.command == "info":
            print_tree(default_codec.load(args.scene))
    except (SceneGraphError, OSError) as exc:
        print(f"threegraph: error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Scene framing CLI entry point.

Reads a JSON or YAML scene document::

    view:
      vpwidth: 1280
      vpheight: 720
      camera: {eye: [0, 0, 10], direction: [0, 0, -1], up: [0, 1, 0], perspective: false}
    entities:
      - {type: face, vertices: [[0, 0, 0], [1, 0, 0], [1, 1, 0]]}
      - {type: group, translation: [5, 0, 0], rotation: [0, 0, 90], entities: [...]}
    points: [[2, 2, 2]]

frames the camera around everything and prints (or writes) the resulting view.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional

import yaml

from viewfit.errors import DegenerateGeometryError
from viewfit.scene import Entity, entities_from_dicts, points_entity
from viewfit.utils.io import load_document, write_document
from viewfit.utils.logger import configure, get_logger
from viewfit.view import View, view_from_dict, view_to_dict
from viewfit.zoom import zoom_entities

EXIT_OK = 0
EXIT_GEOMETRY = 1
EXIT_INPUT = 2


def load_scene(document: Mapping[str, Any]) -> tuple[View, list[Entity]]:
    """Split a scene document into its view and the entities to frame."""
    if not isinstance(document, Mapping) or "view" not in document:
        raise ValueError("scene document must be a mapping with a 'view' section")
    view = view_from_dict(document["view"])
    entities: list[Entity] = list(entities_from_dicts(document.get("entities", [])))
    if document.get("points"):
        entities.append(points_entity(document["points"]))
    return view, entities


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="viewfit-frame",
        description="Move a camera so its view frustum encloses a scene.",
    )
    parser.add_argument("scene", type=Path, help="JSON or YAML scene document")
    parser.add_argument(
        "-o", "--output", type=Path, default=None, help="write the framed view here"
    )
    parser.add_argument("--log-level", default=None, help="log level, e.g. DEBUG")
    parser.add_argument(
        "--log-file", action="store_true", help="also write logs to the logs directory"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the framing workflow.

    Args:
        argv: Command line arguments, ``sys.argv[1:]`` when omitted

    Returns:
        Exit code (0 for success)
    """
    args = build_parser().parse_args(argv)
    configure(level=args.log_level, to_file=True if args.log_file else None)
    logger = get_logger(__name__)

    try:
        view, entities = load_scene(load_document(args.scene))
    except (OSError, ValueError, TypeError, yaml.YAMLError) as exc:
        logger.error("Cannot load scene {}: {}", args.scene, exc)
        return EXIT_INPUT

    logger.tag("FRAME", "{} entities, {} projection", len(entities),
               "perspective" if view.camera.perspective else "parallel")
    try:
        zoom_entities(entities, view)
    except DegenerateGeometryError as exc:
        logger.error("Framing failed: {}", exc)
        return EXIT_GEOMETRY

    result = view_to_dict(view)
    if args.output is not None:
        write_document(args.output, result)
        logger.info("Framed view written to {}", args.output)
    print(json.dumps(result, indent=2, sort_keys=True))
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())


__all__ = ["build_parser", "load_scene", "main"]

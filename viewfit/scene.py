"""Scene entities and world-space point collection.

A scene is built from exactly three kinds of entity:

* ``Geometry`` -- a drawable leaf (face or edge) holding vertex positions;
* ``Group`` -- a grouping element with its own local transformation;
* ``Unrecognized`` -- any host element kind framing knows nothing about.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Union

import numpy as np
import numpy.typing as npt

from viewfit.utils.geometry import Array, Transformation, as_points, make_transformation
from viewfit.utils.logger import get_logger

LOGGER = get_logger(__name__)

GeometryKind = Literal["face", "edge"]


@dataclass(frozen=True, eq=False)
class Geometry:
    """Drawable leaf; ``vertices`` are in the coordinates of the enclosing group."""

    vertices: Array
    kind: GeometryKind = "face"

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertices", as_points(self.vertices))


@dataclass(frozen=True, eq=False)
class Group:
    """Group or component instance placing its entities with ``transformation``."""

    entities: tuple[Entity, ...] = ()
    transformation: Transformation = field(default_factory=Transformation.identity)
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "entities", tuple(self.entities))


@dataclass(frozen=True)
class Unrecognized:
    """Placeholder for host elements without vertices (text, guides, ...)."""

    kind: str = "unknown"


Entity = Union[Geometry, Group, Unrecognized]
ENTITY_TYPES = (Geometry, Group, Unrecognized)


def collect_points(
    entities: Entity | Iterable[Entity],
    transformation: Transformation | None = None,
) -> Array:
    """Collect all vertex positions in ``entities`` as world-space points.

    Args:
        entities: A single entity or any iterable of entities (a list,
            another group's contents, a selection)
        transformation: Transformation accumulated from enclosing groups

    Returns:
        ``(N, 3)`` array, duplicates kept, ``(0, 3)`` when nothing has vertices

    Raises:
        TypeError: for values that are not one of the entity kinds
    """
    if isinstance(entities, ENTITY_TYPES):
        entities = [entities]
    if transformation is None:
        transformation = Transformation.identity()

    chunks: list[Array] = []
    for entity in entities:
        match entity:
            case Geometry(vertices=vertices):
                if len(vertices):
                    chunks.append(transformation.apply(vertices))
            case Group(entities=children, transformation=local):
                chunks.append(collect_points(children, transformation @ local))
            case Unrecognized(kind=kind):
                LOGGER.debug("Skipping entity without vertices: {}", kind)
            case _:
                raise TypeError(f"not a scene entity: {type(entity).__name__}")

    if not chunks:
        return np.empty((0, 3), dtype=np.float64)
    return np.vstack(chunks)


# ============================================================================
# LOADING
# ============================================================================


def entity_from_dict(data: Mapping[str, Any]) -> Entity:
    """Build an entity from a plain mapping, as read from a scene file.

    ``{"type": "face" | "edge", "vertices": [[x, y, z], ...]}`` gives a leaf.
    ``{"type": "group", "translation": [...], "rotation": [roll, pitch, yaw],
    "entities": [...]}`` gives a group, rotation in degrees. Any other type
    becomes ``Unrecognized``.
    """
    if not isinstance(data, Mapping):
        raise TypeError(f"scene entity must be a mapping, got {type(data).__name__}")
    kind = str(data.get("type", "unknown"))
    if kind in ("face", "edge"):
        return Geometry(vertices=data.get("vertices", []), kind=kind)  # type: ignore[arg-type]
    if kind == "group":
        rpy = [math.radians(float(a)) for a in data.get("rotation", (0.0, 0.0, 0.0))]
        local = make_transformation(data.get("translation", (0.0, 0.0, 0.0)), rpy)
        return Group(
            entities=entities_from_dicts(data.get("entities", [])),
            transformation=local,
            name=str(data.get("name", "")),
        )
    return Unrecognized(kind=kind)


def entities_from_dicts(items: Iterable[Mapping[str, Any]]) -> tuple[Entity, ...]:
    return tuple(entity_from_dict(item) for item in items)


def points_entity(points: npt.ArrayLike) -> Geometry:
    """Wrap a loose point list as a leaf so it can be framed with other entities."""
    return Geometry(vertices=as_points(points), kind="edge")


__all__ = [
    "ENTITY_TYPES",
    "Entity",
    "Geometry",
    "Group",
    "Unrecognized",
    "collect_points",
    "entities_from_dicts",
    "entity_from_dict",
    "points_entity",
]

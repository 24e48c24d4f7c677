"""Tests for scene entities and point collection."""

from __future__ import annotations

import math

import numpy as np
import pytest

from viewfit.scene import (
    Geometry,
    Group,
    Unrecognized,
    collect_points,
    entity_from_dict,
    points_entity,
)
from viewfit.utils.geometry import make_transformation


@pytest.fixture
def turned_group() -> Group:
    """Group translated by (5, 0, 0) and turned 90 degrees about z, holding (1, 0, 0)."""
    return Group(
        entities=(Geometry(vertices=[[1.0, 0.0, 0.0]], kind="edge"),),
        transformation=make_transformation((5.0, 0.0, 0.0), (0.0, 0.0, math.pi / 2)),
    )


def test_nested_transform_composition(turned_group: Group) -> None:
    """Test that a point inside a transformed group collects in world space."""
    points = collect_points([turned_group])

    assert points.shape == (1, 3)
    assert np.allclose(points[0], [5.0, 1.0, 0.0])


def test_deeply_nested_groups(turned_group: Group) -> None:
    """Test that transformations accumulate down several levels."""
    outer = Group(
        entities=(turned_group,),
        transformation=make_transformation((0.0, 0.0, 3.0), (0.0, 0.0, 0.0)),
    )

    assert np.allclose(collect_points(outer), [[5.0, 1.0, 3.0]])


def test_single_entity_is_treated_as_sequence() -> None:
    """Test that a lone entity frames like a one-element list."""
    face = Geometry(vertices=[[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])

    assert np.array_equal(collect_points(face), collect_points([face]))
    assert collect_points(face).shape == (3, 3)


def test_unrecognized_entities_contribute_nothing() -> None:
    """Test that unknown kinds are skipped without error."""
    entities = [Unrecognized(kind="text"), Geometry(vertices=[[1.0, 2.0, 3.0]])]

    assert np.allclose(collect_points(entities), [[1.0, 2.0, 3.0]])
    assert collect_points([Unrecognized(kind="guide")]).shape == (0, 3)


def test_empty_inputs_give_empty_point_set() -> None:
    """Test empty lists and empty groups."""
    assert collect_points([]).shape == (0, 3)
    assert collect_points(Group()).shape == (0, 3)


def test_duplicates_are_kept() -> None:
    """Test that shared vertices are not deduplicated."""
    a = Geometry(vertices=[[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]], kind="edge")
    b = Geometry(vertices=[[1.0, 0.0, 0.0], [1.0, 1.0, 0.0]], kind="edge")

    assert len(collect_points([a, b])) == 4


def test_collect_rejects_foreign_values() -> None:
    """Test that values outside the entity kinds are a type error."""
    with pytest.raises(TypeError, match="not a scene entity"):
        collect_points([Geometry(vertices=[[0.0, 0.0, 0.0]]), "edge"])


def test_entity_from_dict() -> None:
    """Test building a nested scene from mappings."""
    entity = entity_from_dict(
        {
            "type": "group",
            "name": "post",
            "translation": [5, 0, 0],
            "rotation": [0, 0, 90],
            "entities": [
                {"type": "edge", "vertices": [[1, 0, 0], [2, 0, 0]]},
                {"type": "text"},
            ],
        }
    )

    assert isinstance(entity, Group)
    assert entity.name == "post"
    assert isinstance(entity.entities[1], Unrecognized)
    assert entity.entities[1].kind == "text"
    assert np.allclose(collect_points(entity), [[5.0, 1.0, 0.0], [5.0, 2.0, 0.0]])


def test_entity_from_dict_rejects_non_mappings() -> None:
    """Test that scene entries must be mappings, also inside groups."""
    with pytest.raises(TypeError, match="must be a mapping"):
        entity_from_dict("edge")  # type: ignore[arg-type]
    with pytest.raises(TypeError, match="must be a mapping"):
        entity_from_dict({"type": "group", "entities": {"type": "edge"}})


def test_points_entity_wraps_loose_points() -> None:
    """Test framing loose points alongside entities."""
    leaf = points_entity([[1.0, 1.0, 1.0], [2.0, 2.0, 2.0]])

    assert isinstance(leaf, Geometry)
    assert leaf.vertices.shape == (2, 3)

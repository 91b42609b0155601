"""Tests for the category taxonomy."""

import pytest

from cleanstream.services.taxonomy import (
    CATEGORY_PARENTS,
    PARENT_CATEGORIES,
    describe_category,
    is_parent_category,
    resolve_parent,
)


@pytest.mark.parametrize(
    ("flag", "parent"),
    [
        ("bareButtocks", "nudity"),
        ("kissing", "sex"),
        ("punching", "violence"),
        ("swearing", "language"),
        ("alcohol", "drugs"),
        ("ghosts", "fear"),
        ("racism", "discrimination"),
        ("tedious", "dispensable"),
        ("productPlacement", "commercial"),
    ],
)
def test_resolve_parent(flag: str, parent: str) -> None:
    assert resolve_parent(flag) == parent


def test_parents_map_to_themselves() -> None:
    for parent in PARENT_CATEGORIES:
        assert resolve_parent(parent) == parent


def test_unknown_flag_passes_through() -> None:
    assert resolve_parent("gore") == "gore"


def test_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        CATEGORY_PARENTS["gore"] = "violence"  # type: ignore[index]


def test_every_flag_maps_to_a_parent() -> None:
    assert set(CATEGORY_PARENTS.values()) == set(PARENT_CATEGORIES)


def test_is_parent_category() -> None:
    assert is_parent_category("violence")
    assert not is_parent_category("punching")


def test_describe_category() -> None:
    assert describe_category("language") == "Strong language"
    assert describe_category("gore") == "gore"

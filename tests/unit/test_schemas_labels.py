"""Unit tests for label value types, the label configuration schema and the label builder."""

import pytest
from pydantic import ValidationError

from github_label_manager.schemas.labels import (
    LabelConfigModel,
    LabelModel,
    is_label_color,
    is_label_description,
    is_label_name,
    label,
    parse_label_color,
    parse_label_description,
    parse_label_name,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("bug", "bug"),
        ("  bug  ", "bug"),
        ("good first issue", "good first issue"),
        (":bug: Bug", ":bug: Bug"),
        ("🐛 bug", "🐛 bug"),
    ],
)
def test_parse_label_name(value: str, expected: str) -> None:
    """Test that valid names are trimmed and returned."""
    assert parse_label_name(value) == expected
    assert is_label_name(value) is True


@pytest.mark.parametrize("value", ["", "   ", "\t\n"])
def test_parse_label_name_rejects_empty(value: str) -> None:
    """Test that empty and whitespace-only names are rejected."""
    with pytest.raises(ValueError, match="Label name cannot be empty"):
        parse_label_name(value)
    assert is_label_name(value) is False


@pytest.mark.parametrize(
    "value,expected",
    [
        ("d73a4a", "d73a4a"),
        ("#D73A4A", "d73a4a"),
        ("f00", "ff0000"),
        ("#F0a", "ff00aa"),
        ("000000", "000000"),
    ],
)
def test_parse_label_color(value: str, expected: str) -> None:
    """Test that colors are canonicalized to lowercase 6-digit hex without '#'."""
    assert parse_label_color(value) == expected
    assert is_label_color(value) is True


@pytest.mark.parametrize("value", ["", "#", "ff", "ffff", "fffffff", "gggggg", "##ffffff", "red", "#12345"])
def test_parse_label_color_rejects_invalid(value: str) -> None:
    """Test that anything but 3 or 6 hex digits is rejected."""
    with pytest.raises(ValueError, match="Invalid hex color"):
        parse_label_color(value)
    assert is_label_color(value) is False


def test_parse_label_description_limit() -> None:
    """Test the 100 character description limit."""
    assert parse_label_description("") == ""
    assert parse_label_description("x" * 100) == "x" * 100
    assert is_label_description("x" * 100) is True
    with pytest.raises(ValueError, match=r"Description exceeds 100 characters \(got 101\)"):
        parse_label_description("x" * 101)
    assert is_label_description("x" * 101) is False


def test_label_model_canonicalizes_fields() -> None:
    """Test that LabelModel applies the strict parsers."""
    model = LabelModel(name="  bug ", color="#F00", description="Something is broken", aliases=[" defect "])
    assert model.name == "bug"
    assert model.color == "ff0000"
    assert model.aliases == ["defect"]


def test_label_model_optional_fields_default_to_none() -> None:
    """Test that only the name is required."""
    model = LabelModel(name="bug")
    assert model.color is None
    assert model.description is None
    assert model.aliases is None


@pytest.mark.parametrize(
    "data,message",
    [
        ({"name": ""}, "Label name cannot be empty"),
        ({"name": "bug", "color": "nope"}, "Invalid hex color"),
        ({"name": "bug", "description": "x" * 101}, "Description exceeds 100 characters"),
        ({"name": "bug", "aliases": ["defect", "defect"]}, "Duplicate aliases: defect"),
        ({"name": "bug", "aliases": [""]}, "Label name cannot be empty"),
        ({"name": "bug", "aliases": ["bug"]}, "lists its own name as an alias"),
        ({"name": "bug", "colour": "f00"}, "Extra inputs are not permitted"),
    ],
)
def test_label_model_rejects_invalid_input(data: dict[str, object], message: str) -> None:
    """Test that invalid desired labels fail validation."""
    with pytest.raises(ValidationError, match=message):
        LabelModel.model_validate(data)


def test_label_config_model_rejects_duplicate_names() -> None:
    """Test that label names must be unique within a configuration."""
    with pytest.raises(ValidationError, match="Duplicate label names: bug"):
        LabelConfigModel(labels=[LabelModel(name="bug"), LabelModel(name="bug", color="f00")])


def test_label_config_model_optional_lists() -> None:
    """Test that ignore and delete are optional and trimmed when present."""
    config = LabelConfigModel(labels=[], ignore=["dependabot*"], delete=[" obsolete "])
    assert config.ignore == ["dependabot*"]
    assert config.delete == ["obsolete"]
    assert LabelConfigModel(labels=[]).delete is None


def test_label_config_json_schema_hides_meta() -> None:
    """Test that the published schema does not expose the internal meta field."""
    schema = LabelConfigModel.json_schema()
    assert set(schema["properties"]) == {"labels", "ignore", "delete"}
    assert "LabelConfigMeta" not in schema.get("$defs", {})
    assert "LabelModel" in schema["$defs"]


def test_label_builder() -> None:
    """Test the fluent label builder."""
    built = label("bug").color("#D73A4A").description("Something isn't working").aliases("defect", "Bug").build()
    assert built == LabelModel(name="bug", color="d73a4a", description="Something isn't working", aliases=["defect", "Bug"])


def test_label_builder_validates_eagerly() -> None:
    """Test that the builder rejects invalid values as soon as they are set."""
    with pytest.raises(ValueError):
        label(" ")
    with pytest.raises(ValueError):
        label("bug").color("xyz")

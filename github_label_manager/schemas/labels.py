"""Pydantic schema for the label configuration file and its value types."""

from dataclasses import dataclass
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from github_label_manager.utils.constants import HEX_COLOR_PATTERN, MAX_DESCRIPTION_LENGTH


def parse_label_name(value: str) -> str:
    """Return the trimmed label name, rejecting empty or whitespace-only names."""
    trimmed = value.strip()
    if not trimmed:
        raise ValueError("Label name cannot be empty")
    return trimmed


def is_label_name(value: str) -> bool:
    """Return True if the value is a valid label name."""
    return bool(value.strip())


def _expand_hex_candidate(value: str) -> str:
    """Strip a leading '#' and expand 3-digit shorthand to 6 digits."""
    candidate = value[1:] if value.startswith("#") else value
    if len(candidate) == 3:
        candidate = "".join(char * 2 for char in candidate)
    return candidate


def parse_label_color(value: str) -> str:
    """Parse a hex color into its canonical form: lowercase, 6 digits, no '#'.

    Raises:
        ValueError: If the value is not 3 or 6 hex digits with an optional leading '#'.
    """
    candidate = _expand_hex_candidate(value)
    if not HEX_COLOR_PATTERN.match(candidate):
        raise ValueError(f'Invalid hex color "{value}". Expected 3 or 6 hex characters (with optional leading #)')
    return candidate.lower()


def is_label_color(value: str) -> bool:
    """Return True if the value can be parsed as a hex color."""
    return HEX_COLOR_PATTERN.match(_expand_hex_candidate(value)) is not None


def parse_label_description(value: str) -> str:
    """Return the description, rejecting anything longer than GitHub allows."""
    if len(value) > MAX_DESCRIPTION_LENGTH:
        raise ValueError(f"Description exceeds {MAX_DESCRIPTION_LENGTH} characters (got {len(value)})")
    return value


def is_label_description(value: str) -> bool:
    """Return True if the value is a valid description."""
    return len(value) <= MAX_DESCRIPTION_LENGTH


@dataclass(frozen=True)
class RemoteLabel:
    """A label as reported by a label store."""

    name: str
    color: str
    description: str | None = None


class LabelModel(BaseModel):
    """Pydantic model for a desired GitHub label."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(description="The name of the label. Native emoji and ':emoji:' markup are allowed.")
    color: str | None = Field(
        default=None,
        description="Hexadecimal color code, 3 or 6 digits, with or without a leading '#'.",
        examples=["d73a4a", "#f00"],
    )
    description: str | None = Field(
        default=None,
        description=f"A short description of the label (max {MAX_DESCRIPTION_LENGTH} characters).",
    )
    aliases: list[str] | None = Field(
        default=None,
        description="Old label names that should be renamed to this label, preserving issue associations.",
    )

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        return parse_label_name(value)

    @field_validator("color")
    @classmethod
    def _validate_color(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return parse_label_color(value)

    @field_validator("description")
    @classmethod
    def _validate_description(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return parse_label_description(value)

    @field_validator("aliases")
    @classmethod
    def _validate_aliases(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        aliases = [parse_label_name(alias) for alias in value]
        duplicates = sorted({alias for alias in aliases if aliases.count(alias) > 1})
        if duplicates:
            raise ValueError(f"Duplicate aliases: {', '.join(duplicates)}")
        return aliases

    @model_validator(mode="after")
    def _alias_is_not_own_name(self) -> Self:
        if self.aliases and self.name in self.aliases:
            raise ValueError(f'Label "{self.name}" lists its own name as an alias')
        return self


class LabelConfigMeta(BaseModel):
    """Source location of a loaded configuration, used for CI annotations."""

    file_path: str
    label_lines: dict[str, int] = Field(default_factory=dict)
    delete_lines: dict[str, int] = Field(default_factory=dict)


class LabelConfigModel(BaseModel):
    """Pydantic model for the label configuration file."""

    model_config = ConfigDict(extra="forbid")

    labels: list[LabelModel] = Field(description="Labels to create or update.")
    ignore: list[str] | None = Field(
        default=None,
        description="Glob patterns (e.g. 'dependabot*') of label names that are never deleted.",
    )
    delete: list[str] | None = Field(
        default=None,
        description="Label names to delete. Only acted upon in explicit deletion mode.",
    )
    meta: LabelConfigMeta | None = Field(default=None, exclude=True)

    @field_validator("ignore", "delete")
    @classmethod
    def _validate_names(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return [parse_label_name(item) for item in value]

    @model_validator(mode="after")
    def _unique_label_names(self) -> Self:
        seen: set[str] = set()
        duplicates: list[str] = []
        for desired in self.labels:
            if desired.name in seen:
                duplicates.append(desired.name)
            seen.add(desired.name)
        if duplicates:
            raise ValueError(f"Duplicate label names: {', '.join(duplicates)}")
        return self

    @classmethod
    def json_schema(cls) -> dict[str, Any]:
        """Return the JSON schema of the configuration file."""
        schema = cls.model_json_schema(mode="validation")
        schema.get("properties", {}).pop("meta", None)
        schema.get("$defs", {}).pop("LabelConfigMeta", None)
        return schema


class LabelBuilder:
    """Fluent builder for validated labels.

    Example:
        bug = label("bug").color("f00").description("Something isn't working").aliases("defect").build()
    """

    def __init__(self, name: str) -> None:
        self._name = parse_label_name(name)
        self._color: str | None = None
        self._description: str | None = None
        self._aliases: list[str] | None = None

    def color(self, value: str) -> "LabelBuilder":
        self._color = parse_label_color(value)
        return self

    def description(self, value: str) -> "LabelBuilder":
        self._description = parse_label_description(value)
        return self

    def aliases(self, *values: str) -> "LabelBuilder":
        self._aliases = [parse_label_name(value) for value in values]
        return self

    def build(self) -> LabelModel:
        return LabelModel(name=self._name, color=self._color, description=self._description, aliases=self._aliases)


def label(name: str) -> LabelBuilder:
    """Start building a label with the given name."""
    return LabelBuilder(name)

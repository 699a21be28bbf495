"""Handles reading and validating label configuration files.

This module provides the LabelConfigProcessor class, which loads a YAML (or
JSON) label configuration and validates it against the Pydantic schema. It
records the line of every label and delete entry so that CI annotations can
point at them, logs unknown top-level keys, and collects every validation error
before failing. All logging is performed using structlog.
"""

from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.error import YAMLError
from structlog.stdlib import BoundLogger

from github_label_manager.processing.exceptions import ConfigProcessingError
from github_label_manager.schemas.labels import LabelConfigMeta, LabelConfigModel, LabelModel

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore

KNOWN_TOP_LEVEL_KEYS = {"labels", "ignore", "delete"}
SILENTLY_IGNORED_KEYS = {"$schema"}


def _to_plain(value: Any) -> Any:
    """Convert ruamel round-trip containers and scalars into plain Python objects."""
    if isinstance(value, dict):
        return {str(k): _to_plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_plain(v) for v in value]
    if isinstance(value, str):
        return str(value)
    return value


def _line_of_key(node: Any, key: str) -> int | None:
    """Return the 1-based line of a mapping key, if known."""
    if isinstance(node, CommentedMap) and key in node:
        try:
            return int(node.lc.key(key)[0]) + 1
        except (KeyError, TypeError):
            return None
    return None


def _line_of_item(node: Any, index: int) -> int | None:
    """Return the 1-based line of a sequence item, if known."""
    if isinstance(node, CommentedSeq):
        try:
            return int(node.lc.item(index)[0]) + 1
        except (KeyError, TypeError):
            return None
    return None


class LabelConfigProcessor:
    """Loads and validates a label configuration file.

    The file must be a mapping with a top-level 'labels' list and may have
    'ignore' and 'delete' lists of label names.
    """

    def __init__(self) -> None:
        """Initialize the processor with a round-trip loader, which keeps line numbers."""
        self.yaml = YAML(typ="rt")

    def load_label_config(self, path: Path | str) -> LabelConfigModel:
        """Load and validate a label configuration file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigProcessingError: If the file cannot be parsed or fails validation.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        errors: list[dict[str, Any]] = []
        document = self._load_yaml_file(path, errors)
        if document is None:
            raise ConfigProcessingError(errors)

        extra_keys = set(document.keys()) - KNOWN_TOP_LEVEL_KEYS - SILENTLY_IGNORED_KEYS
        if extra_keys:
            logger.warning("Extra top-level keys will be ignored", file=str(path), extra_keys=sorted(str(k) for k in extra_keys))

        labels = self._validate_labels(document, str(path), errors)
        config: LabelConfigModel | None = None
        if not errors:
            try:
                config = LabelConfigModel(
                    labels=labels,
                    ignore=_to_plain(document.get("ignore")),
                    delete=_to_plain(document.get("delete")),
                    meta=self._build_meta(document, path),
                )
            except ValidationError as ve:
                logger.error("Validation error for label configuration", file=str(path), error=ve.errors())
                errors.extend({"file": str(path), "error": error["msg"], "location": list(error["loc"])} for error in ve.errors())

        if errors or config is None:
            logger.error("One or more errors occurred during label configuration processing", errors=errors)
            raise ConfigProcessingError(errors)

        logger.info("Loaded label configuration", file=str(path), label_count=len(config.labels))
        return config

    def _load_yaml_file(self, path: Path, errors: list[dict[str, Any]]) -> CommentedMap | None:
        try:
            with open(path, encoding="utf-8") as f:
                data = self.yaml.load(f)
        except YAMLError as e:
            logger.error("Failed to parse YAML file", path=str(path), error=str(e))
            errors.append({"file": str(path), "error": f"YAML parse error: {e}"})
            return None
        if not isinstance(data, dict):
            logger.error("YAML file is not a dictionary", path=str(path))
            errors.append({"file": str(path), "error": "YAML file is not a dictionary"})
            return None
        return data

    def _validate_labels(self, document: CommentedMap, path: str, errors: list[dict[str, Any]]) -> list[LabelModel]:
        if "labels" not in document:
            logger.error("YAML file missing top-level 'labels' key", path=path)
            errors.append({"file": path, "error": "Missing top-level 'labels' key"})
            return []
        raw_labels = document["labels"]
        if not isinstance(raw_labels, list):
            errors.append({"file": path, "error": "'labels' must be a list"})
            return []

        labels: list[LabelModel] = []
        for idx, raw_label in enumerate(raw_labels):
            if not isinstance(raw_label, dict):
                logger.error("Label entry is not a dict", file=path, label_index=idx, actual_type=type(raw_label).__name__)
                errors.append({"file": path, "label_index": idx, "error": "Label entry is not a dict"})
                continue
            try:
                labels.append(LabelModel.model_validate(_to_plain(raw_label)))
            except ValidationError as ve:
                logger.error("Validation error for label", file=path, label_index=idx, line=_line_of_item(raw_labels, idx), error=ve.errors())
                errors.extend(
                    {"file": path, "label_index": idx, "line": _line_of_item(raw_labels, idx), "error": error["msg"]} for error in ve.errors()
                )
        return labels

    def _build_meta(self, document: CommentedMap, path: Path) -> LabelConfigMeta:
        label_lines: dict[str, int] = {}
        for raw_label in document.get("labels") or []:
            name = raw_label.get("name") if isinstance(raw_label, dict) else None
            line = _line_of_key(raw_label, "name")
            if name is not None and line is not None:
                label_lines[str(name).strip()] = line

        delete_lines: dict[str, int] = {}
        delete_node = document.get("delete")
        if isinstance(delete_node, list):
            for idx, name in enumerate(delete_node):
                line = _line_of_item(delete_node, idx)
                if name is not None and line is not None:
                    delete_lines[str(name).strip()] = line

        return LabelConfigMeta(file_path=str(path), label_lines=label_lines, delete_lines=delete_lines)

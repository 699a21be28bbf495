"""Custom exceptions for the processing module."""

from typing import Any


class ConfigProcessingError(Exception):
    """Raised when errors are encountered while loading a label configuration file."""

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__("Errors encountered during label configuration processing.")
        self.errors = errors

    def __str__(self) -> str:
        lines = [str(self.args[0])]
        for error in self.errors:
            location = error.get("file", "")
            if "label_index" in error:
                location += f" labels[{error['label_index']}]"
            lines.append(f"  {location}: {error['error']}")
        return "\n".join(lines)

"""Shared constants used across the application."""

import re

# Label Value Constants
# ---------------------

HEX_COLOR_PATTERN = re.compile(r"^[0-9a-fA-F]{6}$")
"""Pattern matching a canonical-length hex color (after expansion, without '#')."""

MAX_DESCRIPTION_LENGTH = 100
"""GitHub's maximum label description length."""

DEFAULT_LABEL_COLOR = "ededed"
"""Color GitHub assigns to a label created without an explicit color."""

# Synchronization Constants
# -------------------------

ALL_LABELS_SENTINEL = "*"
"""Label name recorded on the single failed operation when listing labels fails."""

LIST_LABELS_FAILED_MESSAGE = "Failed to fetch existing labels"
"""Error recorded on the sentinel operation when listing labels fails."""

LABELS_PER_PAGE = 100
"""Page size used when listing labels from the GitHub API."""

# Default File Settings
# ---------------------

DEFAULT_CONFIG_PATH = ".github/labels.yml"
"""Default path to the label configuration file."""

# Reporting Constants
# -------------------

SUMMARY_COLLAPSE_THRESHOLD = 5
"""Number of changed operations at which the step summary table is collapsed."""

SUMMARY_DESCRIPTION_WIDTH = 50
"""Maximum description characters shown per row of the step summary table."""

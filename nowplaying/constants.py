"""Shared text and layout constants for the now-playing block."""

# Rendered in place of any missing value
PLACEHOLDER: str = "—"

# Joins primary and secondary on one line; the secondary line starts with SECONDARY_PREFIX
SEPARATOR: str = " — "
SECONDARY_PREFIX: str = "— "
ELLIPSIS: str = "…"

# Never estimate fewer characters than this for a line, however narrow the column
MIN_CHARS_FLOOR: int = 10
# A word-wrap cut at or before this index (or half the line budget, if smaller) would leave a stub line; hard-cut instead
MIN_WRAP_OFFSET: int = 20

# Lower bound on the value column width fed to the estimator
MIN_VALUE_WIDTH_PX: int = 40
# Upper bound on separator_slack_chars
MAX_SLACK_CHARS: int = 10

LABEL_READ: str = "Last Read"
LABEL_WATCHED: str = "Last Watched"
LABEL_NOW_LISTENING: str = "Now Listening To"
LABEL_LAST_LISTENED: str = "Last Listened To"

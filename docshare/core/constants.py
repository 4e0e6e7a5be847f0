"""Core constants: search sentinels and shared literal values.

Sentinels force an empty result set deterministically; they are plain
values so criteria built from them compare equal across parses.
"""

from datetime import UTC, datetime

# Reserved id that no CUID2 can equal (CUIDs are lowercase alphanumeric).
NO_MATCH_ID = "__no_match__"

# Lower bound used when a date clause cannot be parsed (before:/at:).
EPOCH_ORIGIN = datetime(1970, 1, 1, tzinfo=UTC)

# Upper bound used when an after: clause cannot be parsed.
FAR_FUTURE = datetime(9999, 12, 31, tzinfo=UTC)

# Document metadata length limits (title, description, etc.).
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 4000
LONG_METADATA_MAX_LENGTH = 500
SHORT_METADATA_MAX_LENGTH = 100
LANGUAGE_CODE_LENGTH = 3

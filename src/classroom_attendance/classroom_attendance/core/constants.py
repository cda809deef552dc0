"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PENALTY_AMOUNT = 100
DEFAULT_RANKING_LIMIT = 5
DEFAULT_SESSION_DAYS = 7
MIN_PASSWORD_LENGTH = 6

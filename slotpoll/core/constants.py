"""Application constants.

This module contains magic strings and numbers used throughout the application.
Centralizing these values makes them easier to maintain and modify.
"""

# Weekday labels, in the order a schedule grid is rendered
DAYS_OF_WEEK = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Schedule grid defaults: 07:00 through 17:30 in half-hour steps (22 slots/day)
# NOTE: these can be overridden via SCHEDULE_DAY_START / SCHEDULE_DAY_END /
# SCHEDULE_SLOT_MINUTES in slotpoll.core.config.Settings
DEFAULT_DAY_START = "07:00"
DEFAULT_DAY_END = "17:30"
DEFAULT_SLOT_MINUTES = 30

# Poll kinds
POLL_KIND_SCHEDULE = "schedule"
POLL_KIND_CALENDAR = "calendar"

# Poll statuses
POLL_STATUS_OPEN = "Open"
POLL_STATUS_CLOSED = "Closed"
POLL_STATUS_CANCELLED = "Cancelled"
POLL_STATUSES = (POLL_STATUS_OPEN, POLL_STATUS_CLOSED, POLL_STATUS_CANCELLED)

# Record store collection names
POLLS = "polls"
SCHEDULE_VOTES = "schedule_votes"
CALENDAR_VOTES = "calendar_votes"
POLL_MEMBERS = "poll_members"
USER_PROFILES = "user_profiles"

# Popularity highlighting uses the three busiest distinct vote counts
MAX_RANK_TIERS = 3

# Member e-mail autocomplete
SUGGESTION_MIN_CHARS = 3
SUGGESTION_LIMIT = 5

# JWT Token Configuration
# Token expiration time in minutes (8 hours)
ACCESS_TOKEN_EXPIRE_MINUTES = 480

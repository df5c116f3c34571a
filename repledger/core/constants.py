"""Application constants."""

# Feature gating: templates a non-entitled user may keep
FREE_TEMPLATE_LIMIT = 3

# Weight conversion (kilograms are the canonical storage unit)
KG_PER_LB = 0.45359237
LB_PER_KG = 2.20462262
LB_PER_STONE = 14

# Rate of perceived exertion
RPE_MIN = 1.0
RPE_MAX = 10.0

# Epley: e1RM = weight * (1 + reps / EPLEY_REP_DIVISOR)
EPLEY_REP_DIVISOR = 30

DAYS_PER_WEEK = 7
SECONDS_PER_HOUR = 3600

# Weekly sessions goal accepted by preferences
SESSIONS_GOAL_MIN = 3
SESSIONS_GOAL_MAX = 7

# Placeholder shown for a value that was not recorded
EMPTY_DISPLAY = "—"

"""
Application constants.

Centralized constants for the expeditions service.
"""

from decimal import Decimal

# ========================================================================
# TASKS
# ========================================================================

# Minimum USD-equivalent value of weekly positions that unlocks fragments
MIN_CLAIMABLE_USD = Decimal("50")

# Fragments granted per claimed daily visit
VISIT_FRAGMENTS = 0

# Number of consecutive prior weeks required for the streak bonus
STREAK_WEEKS = 2

# Message signed by wallets on the legacy daily-visit endpoint
DAILY_VISIT_MESSAGE = "Swapr Dail Visit"

# ========================================================================
# WEEKS
# ========================================================================

# ISO week label, e.g. 2026-W07
WEEK_DATE_FORMAT = "{year:04d}-W{week:02d}"
WEEK_DATE_PATTERN = r"^(?P<year>\d{4})-W(?P<week>\d{2})$"

# ========================================================================
# SUBGRAPH
# ========================================================================

SUBGRAPH_TIMEOUT = 15.0  # seconds
SUBGRAPH_PAGE_SIZE = 1000  # the graph caps `first` at 1000

# ========================================================================
# API
# ========================================================================

API_DEFAULT_HOST = "0.0.0.0"
API_DEFAULT_PORT = 8080

"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE_SIZE = 20
DEFAULT_WORKING_SET_LIMIT = 1000
MAX_PAGE_BUTTONS = 5

FALLBACK_TEXT = "N/A"
DEFAULT_DATE_FORMAT = "%m/%d/%Y"
DEFAULT_CURRENCY_SYMBOL = "$"

GENERIC_BADGE_STYLE = "bg-gray-100 text-gray-800"
UNASSIGNED_TEXT = "Unassigned"
UNASSIGNED_INITIAL = "U"

DEFAULT_EMPTY_MESSAGE = "No data available"

"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

import string

SESSION_CODE_LENGTH = 6
SESSION_CODE_ALPHABET = string.ascii_uppercase + string.digits
MAX_CODE_ATTEMPTS = 10

DEFAULT_TOKEN_MAX_AGE_SECONDS = 7 * 24 * 3600
DEFAULT_SSE_KEEPALIVE_SECONDS = 15
DEFAULT_SUBSCRIBER_QUEUE_SIZE = 100

MIN_PASSWORD_LENGTH = 6

# DECIMAL(9, 6) columns in schema.sql
COORDINATE_DECIMALS = 6

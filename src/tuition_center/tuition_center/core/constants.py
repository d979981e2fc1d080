"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
DEFAULT_ORGANIZATION_NAME = "Zero to Hero Education"
DEFAULT_FROM_EMAIL = "Zero to Hero Education <no-reply@example.com>"
DEFAULT_EMAIL_TIMEOUT_SECONDS = 30

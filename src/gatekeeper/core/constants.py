"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Permission names
PERMISSION_SEPARATOR = ":"
WILDCARD_TOKEN = "*"

# String field lengths
MAX_ID_LENGTH = 36
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_ROLE_NAME_LENGTH = 100
MAX_PERMISSION_NAME_LENGTH = 255
MAX_IPV6_LENGTH = 45
MAX_USER_AGENT_LENGTH = 512
MAX_TOKEN_LENGTH = 255

# Sessions
DEFAULT_SESSION_COOKIE_NAME = "gatekeeper.session_token"

# Authorization failure messages
MSG_AUTHENTICATION_REQUIRED = "Authentication required"
MSG_MISSING_PERMISSION = "Missing required permission '{permission}'"
MSG_MISSING_ANY_PERMISSION = "Missing any of the required permissions: {permissions}"
MSG_INTERNAL_ERROR = "Internal server error during permission check"

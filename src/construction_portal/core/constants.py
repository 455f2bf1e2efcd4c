"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

DEFAULT_DB_NAME = "construction-management"
DEFAULT_TIMEOUT_MS = 5000
DEFAULT_BCRYPT_ROUNDS = 10

CREDENTIALS_COLLECTION = "logincredentials"
ADMIN_PROFILES_COLLECTION = "adminprofile"
SUPERVISORS_COLLECTION = "supervisors"
CLIENTS_COLLECTION = "clients"

MSG_MISSING_CREDENTIALS = "Email or username and password are required"
MSG_INVALID_CREDENTIALS = "Invalid email/username or password"
MSG_INTERNAL_ERROR = "Internal server error"

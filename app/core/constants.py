"""Application constants."""

# Messaging
MAX_MESSAGE_LENGTH = 2000
MAX_CLIENT_TOKEN_LENGTH = 64
MESSAGE_PAGE_MAX = 500

# Profile attributes that may hold several comma-separated values (e.g. "cardio, hiit")
MULTI_VALUE_SEPARATOR = ","

# Seconds a client should wait before retrying an Unavailable response
RETRY_AFTER_SECONDS = 1

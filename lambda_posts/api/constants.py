"""API-related constants."""

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Resource route prefixes, relative to the configured API prefix
USERS_PREFIX = "/users"
POSTS_PREFIX = "/posts"

# Truncation limit for logged user agents
MAX_USER_AGENT_LENGTH = 200

# Landing page served at the root path
LANDING_PAGE_HTML = "<h2>Let's write some middleware!</h2>"

"""Core constants: cache key prefixes and listing defaults.

Single source of truth for cache key structure (DRY). Used by
infrastructure cache keys and the user listing use case.
"""

# Cache key prefixes
CACHE_PREFIX_USERS = "users"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# User listing: fixed page size and result cache lifetime (seconds)
USERS_PAGE_SIZE = 50
USERS_CACHE_TTL_SECONDS = 600

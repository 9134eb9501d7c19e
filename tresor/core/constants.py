"""Core constants: tag format and default request limits."""

# Tags and email hashes are this many leading hex chars of the digest.
TAG_LENGTH = 16

# Joins "dimensionKey:value" segments into a path, and path to key before hashing.
PATH_SEP = "/"
SEGMENT_SEP = ":"

# Request body / string limits (bytes / characters).
DEFAULT_MAX_BODY_LENGTH = 512
DEFAULT_MAX_STRING_LENGTH = 512
DEFAULT_BATCH_MAX_BODY_LENGTH = 1024 * 1024

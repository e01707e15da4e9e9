"""
Shared constants for profile picture uploads and generated user counters.
"""

# -----------------------------------------------------------------------------
# Upload naming policies (see core.config UPLOAD_NAMING)
# -----------------------------------------------------------------------------
UPLOAD_NAMING_RANDOM = "random"
UPLOAD_NAMING_ORIGINAL = "original"
UPLOAD_NAMING_POLICIES = frozenset({UPLOAD_NAMING_RANDOM, UPLOAD_NAMING_ORIGINAL})

DEFAULT_UPLOAD_DIR = "public/assets"

# -----------------------------------------------------------------------------
# Server-generated profile counters, drawn uniformly from [0, COUNTER_UPPER_BOUND)
# -----------------------------------------------------------------------------
COUNTER_UPPER_BOUND = 10000

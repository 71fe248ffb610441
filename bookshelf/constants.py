"""Application constants - centralized configuration values."""

# =============================================================================
# NDL search (SRU)
# =============================================================================
NDL_RECORD_SCHEMA = "dcndl"
NDL_RECORD_PACKING = "xml"
NDL_MAXIMUM_RECORDS = 1

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
API_TIMEOUT_EXTERNAL = 15.0

# =============================================================================
# Books listing
# =============================================================================
BOOK_SORT_KEYS = ("title", "creators", "ndc", "publisher", "location1", "location2")
DEFAULT_SORT_ORDER = "asc"

# =============================================================================
# Limits
# =============================================================================
MAX_TAG_NAME_LENGTH = 100

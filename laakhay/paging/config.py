"""Shared pagination constants.

These field names are part of the public calling convention: they are the
only way a caller signals a bounded traversal or manual pagination, so they
must not be renamed.
"""

from __future__ import annotations

# Checked in this order; the first numeric value found is the result cap.
# - maxResults: used API-wide
# - limitVal: datastore-style query limit
# - pageSize: pub/sub-style page size
LIMIT_FIELDS: tuple[str, ...] = ("maxResults", "limitVal", "pageSize")

# A value of False for either flag opts out of auto-pagination.
AUTO_PAGINATE_FLAGS: tuple[str, ...] = ("autoPaginate", "autoPaginateVal")

# Sentinel for "no result cap"
UNBOUNDED = -1

# Query field that carries the continuation token on follow-up requests
DEFAULT_PAGE_TOKEN_FIELD = "pageToken"

# Response field that carries the token for the next page
DEFAULT_NEXT_TOKEN_KEY = "nextPageToken"

DEFAULT_HTTP_TIMEOUT = 30.0  # seconds

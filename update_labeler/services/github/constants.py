"""Constants for GitHub service."""

BASE_URL = "https://api.github.com"
API_VERSION = "2022-11-28"

# Maximum page size accepted by the REST API
PER_PAGE = 100
# Upper bound on pages fetched from a project column
MAX_COLUMN_PAGES = 100

# Retry policy for transient failures (network errors, 5xx)
MAX_RETRIES = 3
RETRY_DELAYS: list[float] = [1.0, 2.0, 4.0]

"""
Shared constants for the project.

This module contains application-wide defaults that should have a single source of truth.
Values in config/settings.yaml take precedence over these.
"""

# Vendor page fetch timeout in seconds (single attempt, no retries)
DEFAULT_FETCH_TIMEOUT = 5

# Upper bound on concurrent fetch tasks per resolution run (one task per component)
DEFAULT_MAX_WORKERS = 10

# Vendor catalogue is priced in GBP
DEFAULT_CURRENCY_SYMBOL = "£"

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-GB,en;q=0.9",
}

"""Tools package for the Real Estate Bot."""

from .listing_formatter import format_listing, format_results_header, format_search_summary
from .listing_sources import (
    DOMAIN_SOURCE, REA_SOURCE, SOURCES, SOURCES_BY_KEY,
    ApifyClient, ApifyError, ListingSource, fetch_listings, normalize_listing,
)
from .telegram_messaging import TelegramAPIError, TelegramClient, pack_messages

__all__ = [
    "format_listing", "format_results_header", "format_search_summary",
    "DOMAIN_SOURCE", "REA_SOURCE", "SOURCES", "SOURCES_BY_KEY",
    "ApifyClient", "ApifyError", "ListingSource", "fetch_listings", "normalize_listing",
    "TelegramAPIError", "TelegramClient", "pack_messages",
]

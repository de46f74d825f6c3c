"""Search package: query parsing, URL building and shared models."""

from .models import ListingRecord, PropertyType, SearchParameters, SourceOutcome
from .query_parser import KNOWN_SUBURBS, looks_like_search, parse_query
from .url_builders import build_domain_url, build_rea_url

__all__ = [
    "ListingRecord", "PropertyType", "SearchParameters", "SourceOutcome",
    "KNOWN_SUBURBS", "looks_like_search", "parse_query",
    "build_domain_url", "build_rea_url",
]

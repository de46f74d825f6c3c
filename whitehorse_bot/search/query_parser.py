#
# Copyright (c) 2025, Daily
#
# SPDX-License-Identifier: BSD 2-Clause License
#

"""Free-text query parser for property searches.

Turns messages like ``"box hill 3 bed 2 bath 2 car house"`` into
:class:`SearchParameters`. Matching is plain pattern matching over the
lower-cased text; no attempt is made to correct ambiguous input.
"""

import re
from typing import List, Optional, Tuple

from loguru import logger

from .models import PropertyType, SearchParameters

BED_PATTERN = re.compile(r"(\d+)\s*(?:bed(?:room)?s?|br)")
BATH_PATTERN = re.compile(r"(\d+)\s*(?:bath(?:room)?s?|ba)")
CAR_PATTERN = re.compile(r"(\d+)\s*(?:car|garage|parking)")

# Scanned in order, first match wins. "townhouse" contains "house" and so
# resolves to House.
PROPERTY_TYPE_KEYWORDS: List[Tuple[str, PropertyType]] = [
    ("house", PropertyType.HOUSE),
    ("houses", PropertyType.HOUSE),
    ("unit", PropertyType.UNIT),
    ("units", PropertyType.UNIT),
    ("apartment", PropertyType.APARTMENT),
    ("apartments", PropertyType.APARTMENT),
    ("apt", PropertyType.APARTMENT),
    ("townhouse", PropertyType.TOWNHOUSE),
    ("townhouses", PropertyType.TOWNHOUSE),
    ("villa", PropertyType.VILLA),
    ("villas", PropertyType.VILLA),
    ("land", PropertyType.LAND),
    ("duplex", PropertyType.DUPLEX),
]

# Whitehorse region and neighbours, scanned in order.
KNOWN_SUBURBS: List[str] = [
    "box hill", "blackburn", "nunawading", "mitcham", "ringwood",
    "vermont", "forest hill", "burwood", "mont albert", "surrey hills",
    "box hill north", "box hill south", "blackburn north", "blackburn south",
    "ringwood east", "ringwood north", "heathmont", "croydon",
]

COMMAND_WORDS = ["search", "domain", "rea", r"for\s*sale", "buy", "buying"]

COUNT_PHRASE_PATTERN = re.compile(
    r"\d+\s*(?:bed(?:room)?s?|br|bath(?:room)?s?|ba|cars?|garages?|parking)"
)
KEYWORD_PATTERN = re.compile(
    r"\b(?:"
    + "|".join([re.escape(keyword) for keyword, _ in PROPERTY_TYPE_KEYWORDS] + COMMAND_WORDS)
    + r")\b"
)
NON_ALPHA_PATTERN = re.compile(r"[^a-z\s]")
IMPLICIT_BEDS_PATTERN = re.compile(r"\d+\s*bed")

MAX_FALLBACK_SUBURB_WORDS = 3


def _first_count(pattern: re.Pattern, text: str) -> Optional[int]:
    match = pattern.search(text)
    return int(match.group(1)) if match else None


def _detect_property_type(text: str) -> Optional[PropertyType]:
    for keyword, property_type in PROPERTY_TYPE_KEYWORDS:
        if keyword in text:
            return property_type
    return None


def _detect_known_suburb(text: str) -> Optional[str]:
    for suburb in KNOWN_SUBURBS:
        if suburb in text:
            return suburb
    return None


def _fallback_suburb(text: str) -> Optional[str]:
    """Best-effort suburb: whatever words are left after removing known keywords."""
    remainder = COUNT_PHRASE_PATTERN.sub("", text)
    remainder = KEYWORD_PATTERN.sub("", remainder)
    remainder = NON_ALPHA_PATTERN.sub("", remainder)
    remainder = " ".join(remainder.split())

    if len(remainder) <= 2:
        return None
    return " ".join(remainder.split(" ")[:MAX_FALLBACK_SUBURB_WORDS])


def parse_query(text: str) -> SearchParameters:
    """Extract search parameters from a free-text request."""
    lower = (text or "").lower()

    params = SearchParameters(
        suburb=_detect_known_suburb(lower) or _fallback_suburb(lower),
        beds=_first_count(BED_PATTERN, lower),
        baths=_first_count(BATH_PATTERN, lower),
        cars=_first_count(CAR_PATTERN, lower),
        property_type=_detect_property_type(lower),
    )
    logger.debug(f"🔍 Parsed query '{text}' -> {params.model_dump(exclude_none=True)}")
    return params


def looks_like_search(text: str) -> bool:
    """Heuristic for plain messages: mentions a bedroom count or a known suburb."""
    lower = (text or "").lower()
    return bool(IMPLICIT_BEDS_PATTERN.search(lower)) or _detect_known_suburb(lower) is not None

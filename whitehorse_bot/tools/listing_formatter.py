#
# Copyright (c) 2025, Daily
#
# SPDX-License-Identifier: BSD 2-Clause License
#

"""Chat formatting for listings and search summaries."""

from typing import Any, List

from whitehorse_bot.prompts.chat_messages import (
    LISTING_TEMPLATE,
    RESULTS_HEADER,
    SEARCHING_MESSAGE,
    SUMMARY_LINES,
)
from whitehorse_bot.search.models import SearchParameters

PLACEHOLDERS = {
    "address": "Address not listed",
    "price": "Price on request",
    "beds": "?",
    "baths": "?",
    "cars": "?",
    "property_type": "",
    "url": "",
}


def _display(record: Any, field_name: str) -> str:
    if isinstance(record, dict):
        value = record.get(field_name)
    else:
        value = getattr(record, field_name, None)

    if value is None or isinstance(value, (bool, dict, list, tuple, set)):
        return PLACEHOLDERS[field_name]
    return str(value).strip() or PLACEHOLDERS[field_name]


def format_listing(record: Any, icon: str = "🏠") -> str:
    """Render one listing for chat, substituting placeholders for missing fields."""
    return LISTING_TEMPLATE.format(
        icon=icon,
        **{field_name: _display(record, field_name) for field_name in PLACEHOLDERS},
    )


def format_search_summary(params: SearchParameters) -> str:
    """Acknowledgment message listing the parameters we understood."""
    values = {
        "suburb": params.suburb,
        "beds": params.beds,
        "baths": params.baths,
        "cars": params.cars,
        "property_type": params.property_type.value if params.property_type else None,
    }
    lines: List[str] = [
        SUMMARY_LINES[name].format(value=value) for name, value in values.items() if value
    ]
    return SEARCHING_MESSAGE.format(summary="\n".join(lines))


def format_results_header(label: str, count: int) -> str:
    return RESULTS_HEADER.format(label=label, count=count)

#
# Copyright (c) 2025, Daily
#
# SPDX-License-Identifier: BSD 2-Clause License
#

"""Listing sources backed by Apify scraping actors."""

import asyncio
import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import aiohttp
from loguru import logger

from whitehorse_bot.config import settings
from whitehorse_bot.search.models import ListingRecord, SearchParameters, SourceOutcome
from whitehorse_bot.search.url_builders import build_domain_url, build_rea_url

class ApifyError(Exception):
    """Raised when Apify answers with an error status or an unexpected payload."""


@dataclass(frozen=True)
class ListingSource:
    """A property-listing provider and the actor that scrapes it."""

    key: str
    name: str
    label: str
    icon: str
    actor_id: str
    build_url: Callable[[SearchParameters], str]
    field_aliases: Dict[str, Tuple[str, ...]] = field(default_factory=dict)


DOMAIN_SOURCE = ListingSource(
    key="domain",
    name="Domain.com.au",
    label="🟦 *Domain.com.au*",
    icon="🏠",
    actor_id=settings.DOMAIN_ACTOR,
    build_url=build_domain_url,
    field_aliases={
        "address": ("address", "street"),
        "price": ("price", "displayPrice"),
        "beds": ("bedrooms", "beds"),
        "baths": ("bathrooms", "bath"),
        "cars": ("carSpaces", "car"),
        "property_type": ("propertyType", "type"),
        "url": ("url", "listingUrl"),
    },
)

REA_SOURCE = ListingSource(
    key="rea",
    name="realestate.com.au",
    label="🟥 *realestate.com.au*",
    icon="🏡",
    actor_id=settings.REA_ACTOR,
    build_url=build_rea_url,
    field_aliases={
        "address": ("address", "street"),
        "price": ("price", "priceText"),
        "beds": ("bedrooms", "beds"),
        "baths": ("bathrooms", "bath"),
        "cars": ("carspaces", "car"),
        "property_type": ("propertyType", "type"),
        "url": ("url", "link"),
    },
)

# Output order of a multi-source search
SOURCES: List[ListingSource] = [DOMAIN_SOURCE, REA_SOURCE]
SOURCES_BY_KEY: Dict[str, ListingSource] = {source.key: source for source in SOURCES}


def _to_text(value: Any) -> Optional[str]:
    """Coerce scalar scraper values to text; anything else counts as missing."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, (str, int, float)):
        return str(value).strip()
    return None


def normalize_listing(item: Any, source: ListingSource) -> ListingRecord:
    """Map one raw scraper item onto a ListingRecord using the source's aliases."""
    if not isinstance(item, dict):
        return ListingRecord()

    values = {}
    for field_name, aliases in source.field_aliases.items():
        for alias in aliases:
            text = _to_text(item.get(alias))
            # Blank values fall through to the next alias; a count of 0 stays "0"
            if not text:
                continue
            values[field_name] = text
            break

    return ListingRecord(**values)


class ApifyClient:
    """Thin client for running Apify actors synchronously."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        token: str,
        base_url: str = settings.APIFY_API_URL,
        run_timeout: int = settings.APIFY_RUN_TIMEOUT_SECONDS,
        memory_mb: int = settings.APIFY_MEMORY_MB,
        request_timeout: float = settings.APIFY_REQUEST_TIMEOUT_SECONDS,
    ):
        self.session = session
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.run_timeout = run_timeout
        self.memory_mb = memory_mb
        self.request_timeout = request_timeout

    async def run_actor(self, actor_id: str, run_input: Dict[str, Any]) -> List[Any]:
        """Run an actor and return its dataset items.

        Raises:
            ApifyError: On a non-2xx response or a payload that is not a list.
            aiohttp.ClientError: On connection failures.
            asyncio.TimeoutError: When the request exceeds ``request_timeout``.
        """
        url = f"{self.base_url}/v2/acts/{actor_id}/run-sync-get-dataset-items"
        params = {"timeout": str(self.run_timeout), "memory": str(self.memory_mb)}
        headers = {"Authorization": f"Bearer {self.token}"}

        async with self.session.post(
            url,
            json=run_input,
            params=params,
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=self.request_timeout),
        ) as response:
            if not 200 <= response.status < 300:
                raise ApifyError(f"Request failed with status code {response.status}")
            try:
                data = await response.json(content_type=None)
            except json.JSONDecodeError as e:
                raise ApifyError(f"Invalid JSON from Apify: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise ApifyError(f"Unexpected Apify payload: {type(data).__name__}")
        return data


async def fetch_listings(
    client: ApifyClient,
    source: ListingSource,
    search_url: str,
    max_items: int = settings.MAX_LISTINGS_PER_SOURCE,
) -> SourceOutcome:
    """Query one listing source; every failure is returned, never raised."""
    start_time = time.time()
    run_input = {"startUrls": [{"url": search_url}], "maxItems": max_items}
    logger.info(f"🔍 Querying {source.name}: {search_url}")

    try:
        items = await client.run_actor(source.actor_id, run_input)
    except asyncio.TimeoutError:
        error = f"Timed out after {client.request_timeout:g}s"
    except aiohttp.ClientError as e:
        error = f"Network error: {e}"
    except ApifyError as e:
        error = str(e)
    except Exception as e:
        logger.exception(f"❌ Unexpected error querying {source.name}")
        error = f"Unexpected error: {e}"
    else:
        records = [normalize_listing(item, source) for item in items[:max_items]]
        logger.info(
            f"✅ {source.name} returned {len(records)} listings "
            f"in {time.time() - start_time:.2f}s"
        )
        return SourceOutcome.success(source.key, search_url, records)

    logger.warning(f"⚠️ {source.name} search failed: {error}")
    return SourceOutcome.failure(source.key, search_url, error)

#
# Copyright (c) 2025, Daily
#
# SPDX-License-Identifier: BSD 2-Clause License
#

"""Search URL builders for Domain.com.au and realestate.com.au."""

from typing import Dict
from urllib.parse import quote, quote_plus

from .models import PropertyType, SearchParameters

DOMAIN_BASE_URL = "https://www.domain.com.au/sale"
REA_BASE_URL = "https://www.realestate.com.au/buy"

DOMAIN_DEFAULT_POSTCODE = "3000"
DOMAIN_REGION_SLUG = "whitehorse-region-vic"
REA_REGION_SLUG = "Whitehorse"
REA_DEFAULT_BEDS = 3

SUBURB_POSTCODES: Dict[str, str] = {
    "box hill": "3128",
    "box hill north": "3129",
    "box hill south": "3128",
    "blackburn": "3130",
    "blackburn north": "3130",
    "blackburn south": "3130",
    "nunawading": "3131",
    "forest hill": "3131",
    "mitcham": "3132",
    "vermont": "3133",
    "ringwood": "3134",
    "ringwood north": "3134",
    "ringwood east": "3135",
    "heathmont": "3135",
    "croydon": "3136",
    "burwood": "3125",
    "mont albert": "3127",
    "surrey hills": "3127",
}

# realestate.com.au property type vocabulary
REA_PROPERTY_TYPES: Dict[PropertyType, str] = {
    PropertyType.HOUSE: "house",
    PropertyType.APARTMENT: "unit+apartment",
    PropertyType.TOWNHOUSE: "townhouse",
    PropertyType.VILLA: "villa",
    PropertyType.LAND: "land",
    PropertyType.DUPLEX: "duplex",
    PropertyType.UNIT: "unit",
}


def build_domain_url(params: SearchParameters) -> str:
    """Build a Domain.com.au sale search URL.

    Domain keys suburbs by ``<name>-vic-<postcode>`` slugs and takes the
    remaining filters as ``<n>-any`` query values.
    """
    if params.suburb:
        name = " ".join(params.suburb.lower().split())
        postcode = SUBURB_POSTCODES.get(name, DOMAIN_DEFAULT_POSTCODE)
        suburb_slug = quote(f"{name.replace(' ', '-')}-vic-{postcode}", safe="")
    else:
        suburb_slug = DOMAIN_REGION_SLUG

    type_slug = params.property_type.value.lower() if params.property_type else "house"
    url = f"{DOMAIN_BASE_URL}/{suburb_slug}/?property-type={quote(type_slug, safe='')}"

    if params.beds:
        url += f"&bedrooms={params.beds}-any"
    if params.baths:
        url += f"&bathrooms={params.baths}-any"
    if params.cars:
        url += f"&carspaces={params.cars}-any"

    return url


def build_rea_url(params: SearchParameters) -> str:
    """Build a realestate.com.au buy search URL.

    The REA path only carries property type, bedrooms and suburb; bathroom
    and car filters are not part of its path scheme.
    """
    if params.suburb:
        suburb_slug = quote_plus(" ".join(params.suburb.split()))
    else:
        suburb_slug = REA_REGION_SLUG

    type_slug = REA_PROPERTY_TYPES.get(params.property_type, "house")
    beds = params.beds or REA_DEFAULT_BEDS

    return f"{REA_BASE_URL}/property-{type_slug}-with-{beds}-bedrooms-in-{suburb_slug},+vic/list-1"

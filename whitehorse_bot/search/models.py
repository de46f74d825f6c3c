#
# Copyright (c) 2025, Daily
#
# SPDX-License-Identifier: BSD 2-Clause License
#

"""Data models shared by the parser, URL builders and listing sources."""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel


class PropertyType(str, Enum):
    """Canonical property types used internally."""

    HOUSE = "House"
    UNIT = "Unit"
    APARTMENT = "ApartmentUnitFlat"
    TOWNHOUSE = "Townhouse"
    VILLA = "Villa"
    LAND = "VacantLand"
    DUPLEX = "Duplex"


class SearchParameters(BaseModel):
    """Structured search parameters extracted from free text."""

    suburb: Optional[str] = None
    beds: Optional[int] = None
    baths: Optional[int] = None
    cars: Optional[int] = None
    property_type: Optional[PropertyType] = None


class ListingRecord(BaseModel):
    """A single listing, normalized from loosely structured scraper output."""

    address: Optional[str] = None
    price: Optional[str] = None
    beds: Optional[str] = None
    baths: Optional[str] = None
    cars: Optional[str] = None
    property_type: Optional[str] = None
    url: Optional[str] = None


class SourceOutcome(BaseModel):
    """Result of querying one listing source."""

    source: str
    url: str
    status: Literal["success", "failure"]
    results: List[ListingRecord] = []
    error: Optional[str] = None

    @classmethod
    def success(cls, source: str, url: str, results: List[ListingRecord]) -> "SourceOutcome":
        return cls(source=source, url=url, status="success", results=results)

    @classmethod
    def failure(cls, source: str, url: str, error: str) -> "SourceOutcome":
        return cls(source=source, url=url, status="failure", error=error)

    @property
    def succeeded(self) -> bool:
        return self.status == "success"

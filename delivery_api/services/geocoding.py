import logging
from typing import List, NamedTuple

from delivery_api.data.brooklyn_addresses import find_address_coordinates

logger = logging.getLogger(__name__)


class GeocodingResult(NamedTuple):
    latitude: float
    longitude: float
    source: str  # 'preseeded' | 'default'


# Center of Brooklyn, used for addresses missing from the table
BROOKLYN_DEFAULT = GeocodingResult(latitude=40.6782, longitude=-73.9442, source="default")


def geocode_address(address: str) -> GeocodingResult:
    """Address -> coordinates from the pre-seeded table, never fails."""
    match = find_address_coordinates(address)
    if match:
        return GeocodingResult(match.latitude, match.longitude, "preseeded")

    logger.warning("Address not found in pre-seeded table: %s. Using default Brooklyn center.", address)
    return BROOKLYN_DEFAULT


def geocode_addresses(addresses: List[str]) -> List[GeocodingResult]:
    """Batch form of geocode_address for callers importing addresses in bulk; same fallback per entry."""
    return [geocode_address(address) for address in addresses]

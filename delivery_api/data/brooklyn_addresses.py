"""Pre-geocoded Brooklyn, NY addresses used for offline geocoding and seed data."""

from typing import List, NamedTuple, Optional


class AddressCoordinates(NamedTuple):
    address: str
    latitude: float
    longitude: float
    neighborhood: Optional[str] = None


BROOKLYN_ADDRESSES: List[AddressCoordinates] = [
    # Williamsburg
    AddressCoordinates("123 Bedford Ave, Brooklyn, NY 11249", 40.7189, -73.9572, "Williamsburg"),
    AddressCoordinates("456 Metropolitan Ave, Brooklyn, NY 11211", 40.7147, -73.9521, "Williamsburg"),
    AddressCoordinates("789 Grand St, Brooklyn, NY 11211", 40.7132, -73.9564, "Williamsburg"),
    # Park Slope
    AddressCoordinates("321 7th Ave, Brooklyn, NY 11215", 40.6693, -73.9809, "Park Slope"),
    AddressCoordinates("654 5th Ave, Brooklyn, NY 11215", 40.6649, -73.9857, "Park Slope"),
    AddressCoordinates("987 Prospect Park West, Brooklyn, NY 11215", 40.6613, -73.9736, "Park Slope"),
    # Brooklyn Heights
    AddressCoordinates("147 Montague St, Brooklyn, NY 11201", 40.6933, -73.9932, "Brooklyn Heights"),
    AddressCoordinates("258 Henry St, Brooklyn, NY 11201", 40.6918, -73.9938, "Brooklyn Heights"),
    AddressCoordinates("369 Atlantic Ave, Brooklyn, NY 11201", 40.6889, -73.9872, "Brooklyn Heights"),
    # DUMBO
    AddressCoordinates("75 Washington St, Brooklyn, NY 11201", 40.7033, -73.9893, "DUMBO"),
    AddressCoordinates("101 Front St, Brooklyn, NY 11201", 40.7028, -73.9897, "DUMBO"),
    AddressCoordinates("200 Water St, Brooklyn, NY 11201", 40.7018, -73.9856, "DUMBO"),
    # Bushwick
    AddressCoordinates("444 Knickerbocker Ave, Brooklyn, NY 11237", 40.7054, -73.9190, "Bushwick"),
    AddressCoordinates("555 Myrtle Ave, Brooklyn, NY 11237", 40.6979, -73.9232, "Bushwick"),
    AddressCoordinates("666 Broadway, Brooklyn, NY 11206", 40.7037, -73.9471, "Bushwick"),
    # Sunset Park
    AddressCoordinates("777 4th Ave, Brooklyn, NY 11232", 40.6535, -74.0067, "Sunset Park"),
    AddressCoordinates("888 5th Ave, Brooklyn, NY 11220", 40.6414, -74.0074, "Sunset Park"),
    AddressCoordinates("999 8th Ave, Brooklyn, NY 11220", 40.6359, -74.0065, "Sunset Park"),
    # Crown Heights
    AddressCoordinates("111 Franklin Ave, Brooklyn, NY 11238", 40.6735, -73.9568, "Crown Heights"),
    AddressCoordinates("222 Nostrand Ave, Brooklyn, NY 11225", 40.6673, -73.9502, "Crown Heights"),
    AddressCoordinates("333 Eastern Pkwy, Brooklyn, NY 11238", 40.6694, -73.9425, "Crown Heights"),
    # Fort Greene
    AddressCoordinates("444 Fulton St, Brooklyn, NY 11201", 40.6872, -73.9818, "Fort Greene"),
    AddressCoordinates("555 Myrtle Ave, Brooklyn, NY 11205", 40.6934, -73.9692, "Fort Greene"),
    AddressCoordinates("666 DeKalb Ave, Brooklyn, NY 11205", 40.6914, -73.9655, "Fort Greene"),
]


def normalize_address(address: str) -> str:
    text = address.lower().replace(",", "").replace(".", "")
    return " ".join(text.split())


def find_address_coordinates(address: str) -> Optional[AddressCoordinates]:
    """Look up an address in the table.

    Exact matches win. Otherwise the first entry matches when the query is
    contained in it, or when the query contains its street part (everything
    before "brooklyn").
    """
    normalized = normalize_address(address)
    if not normalized:
        return None

    for entry in BROOKLYN_ADDRESSES:
        if normalize_address(entry.address) == normalized:
            return entry

    for entry in BROOKLYN_ADDRESSES:
        known = normalize_address(entry.address)
        street = known.split(" brooklyn")[0]
        if normalized in known or street in normalized:
            return entry
    return None

# -*- coding: utf-8 -*-
"""
Filename: geocoding.py
Description: Request parameters and response shape of the reverse-geocode service
             (OpenStreetMap Nominatim ``/reverse``). The transport is supplied by the
             application; this module only builds the query and reads the reply.

Response shape consumed:
    {
        "address": {"city" | "town" | "village": ..., "road": ..., "house_number": ...},
        "display_name": "...",
        "type": "house" | "residential" | ...
    }
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..config import GEOCODE_ZOOM


def reverse_geocode_params(lat: float, lon: float, zoom: int = GEOCODE_ZOOM) -> Dict[str, Any]:
    """Query parameters for one reverse lookup."""
    return {
        "lat": lat,
        "lon": lon,
        "format": "json",
        "zoom": zoom,
        "addressdetails": 1,
    }


@dataclass(frozen=True)
class AddressRecord:
    """Parsed reverse-geocode reply. ``address`` is empty when the service found nothing."""
    address: Dict[str, str] = field(default_factory=dict)
    display_name: str = ""
    type: str = ""

    @classmethod
    def from_response(cls, payload: Any) -> Optional["AddressRecord"]:
        """Build a record from a decoded JSON reply; None for anything unusable."""
        if isinstance(payload, AddressRecord):
            return payload
        if not isinstance(payload, dict) or not payload:
            return None
        address = payload.get("address")
        if not isinstance(address, dict):
            address = {}
        return cls(
            address={str(k): str(v) for k, v in address.items() if v is not None},
            display_name=str(payload.get("display_name") or ""),
            type=str(payload.get("type") or ""),
        )

    @property
    def has_address(self) -> bool:
        return bool(self.address)

    @property
    def house_number(self) -> Optional[str]:
        return self.address.get("house_number") or None

    @property
    def locality(self) -> str:
        return self.address.get("city") or self.address.get("town") or self.address.get("village") or ""


def format_address(record: Optional[AddressRecord]) -> str:
    """'City, Road, Number' with empty parts skipped; '' when there is no address."""
    if record is None or not record.has_address:
        return ""
    parts = [record.locality, record.address.get("road", ""), record.house_number or ""]
    return ", ".join(p for p in parts if p)

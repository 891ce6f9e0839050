"""Named mask patterns for common fixed-width fields."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

MASK_PRESETS: Mapping[str, str] = MappingProxyType(
    {
        "phone": "(###) ###-####",
        "zip": "#####",
        "zip_plus4": "#####-####",
        "ssn": "###-##-####",
        "date": "##/##/####",
        "iso_date": "####-##-##",
        "time": "##:##",
        "hex_colour": "'#HHHHHH",
        "mac_address": "HH:HH:HH:HH:HH:HH",
        "postcode_ca": "U#U #U#",
    }
)


def resolve_preset(name: str) -> str:
    """Return the mask pattern registered under ``name``."""

    try:
        return MASK_PRESETS[name]
    except KeyError:
        supported = ", ".join(sorted(MASK_PRESETS))
        raise KeyError(f"unknown mask preset {name!r}; expected one of: {supported}") from None


__all__ = ["MASK_PRESETS", "resolve_preset"]

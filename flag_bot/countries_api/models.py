"""Data models for country catalog responses."""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Country:
    """Single quiz entry: a country and its flag image."""
    name: str
    flag_image_url: str
    alt_names: List[str] = field(default_factory=list)   # aliases, not used for matching
    flag_png_url: Optional[str] = None                   # raster copy for clients without SVG


# ============================================================================
# CONVERTERS: raw REST Countries payload → our dataclasses
# ============================================================================

def country_from_payload(payload) -> Optional[Country]:
    """
    Convert a raw `{name: {...}, flags: {...}}` entry into a Country.
    Entries without a common name or without any flag URL are skipped.
    """
    if not isinstance(payload, dict):
        return None

    name_block = payload.get("name") or {}
    flags = payload.get("flags") or {}
    if not isinstance(name_block, dict) or not isinstance(flags, dict):
        return None

    common = name_block.get("common")
    svg = flags.get("svg")
    png = flags.get("png")
    if not common or not (svg or png):
        return None

    alt_names = [common, name_block.get("official")]
    native = name_block.get("nativeName") or {}
    if isinstance(native, dict):
        alt_names.extend(
            entry.get("common") for entry in native.values() if isinstance(entry, dict)
        )

    return Country(
        name=common,
        flag_image_url=svg or png,
        alt_names=[n for n in alt_names if n],
        flag_png_url=png or None,
    )

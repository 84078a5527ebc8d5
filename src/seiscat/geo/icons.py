# src/seiscat/geo/icons.py
"""
Marker images for the map view.

Two concerns live here:

- the default marker image set (URLs for the stock pin, its retina
  variant and shadow), installed once by initialize_default_icon();
- the per-survey SVG pin, coloured by status and labelled with the
  survey type.
"""
from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from seiscat.errors import IconNotInitializedError

logger = logging.getLogger(__name__)


LEAFLET_CDN = "https://cdnjs.cloudflare.com/ajax/libs/leaflet/1.7.1"
_LEAFLET_IMAGES = f"{LEAFLET_CDN}/images"

ICON_SIZE: Tuple[int, int] = (25, 41)
ICON_ANCHOR: Tuple[int, int] = (12, 41)
POPUP_ANCHOR: Tuple[int, int] = (1, -34)


@dataclass(frozen=True, slots=True)
class IconDefaults:
    icon_url: str = f"{_LEAFLET_IMAGES}/marker-icon.png"
    icon_retina_url: str = f"{_LEAFLET_IMAGES}/marker-icon-2x.png"
    shadow_url: str = f"{_LEAFLET_IMAGES}/marker-shadow.png"
    icon_size: Tuple[int, int] = ICON_SIZE
    icon_anchor: Tuple[int, int] = ICON_ANCHOR
    popup_anchor: Tuple[int, int] = POPUP_ANCHOR


_defaults: Optional[IconDefaults] = None


# ---------------------------------------------------------------------
# Default icon (one-time initialisation)
# ---------------------------------------------------------------------

def initialize_default_icon(config: Optional[IconDefaults] = None) -> IconDefaults:
    """
    Install the default marker images.

    Idempotent: the first call wins. Later calls return the installed
    defaults unchanged, whatever config they pass; a differing config is
    logged and ignored.
    """
    global _defaults

    if _defaults is not None:
        if config is not None and config != _defaults:
            logger.warning(
                "Default marker icon already initialized; ignoring new config"
            )
        return _defaults

    _defaults = config or IconDefaults()
    logger.debug("Default marker icon initialized: %s", _defaults.icon_url)
    return _defaults


def default_icon() -> IconDefaults:
    if _defaults is None:
        raise IconNotInitializedError(
            "Call initialize_default_icon() before requesting the default icon"
        )
    return _defaults


def reset_default_icon() -> None:
    """
    Forget the installed defaults. Intended for test isolation.
    """
    global _defaults
    _defaults = None


# ---------------------------------------------------------------------
# Survey pins
# ---------------------------------------------------------------------

_PIN_TEMPLATE = (
    '<svg width="25" height="41" viewBox="0 0 25 41" '
    'xmlns="http://www.w3.org/2000/svg">'
    '<path d="M12.5 0C5.6 0 0 5.6 0 12.5C0 19.4 12.5 41 12.5 41S25 19.4 25 '
    '12.5C25 5.6 19.4 0 12.5 0Z" fill="{color}"/>'
    '<circle cx="12.5" cy="12.5" r="6" fill="white"/>'
    '<text x="12.5" y="16" text-anchor="middle" font-size="8" '
    'font-weight="bold" fill="{color}">{glyph}</text>'
    "</svg>"
)


def pin_svg(color: str, glyph: str) -> str:
    return _PIN_TEMPLATE.format(color=color, glyph=glyph)


def pin_data_uri(color: str, glyph: str) -> str:
    encoded = base64.b64encode(pin_svg(color, glyph).encode("utf-8")).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"

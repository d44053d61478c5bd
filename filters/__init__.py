"""
Filters Package
===============
All available filters are declared here.
To add a new filter:
1. Pick (or write) a descriptor class in this folder
2. Add an instance to FILTER_LIST
FILTER_LIST order is the clap / space-bar cycle order.
"""

from filters.base_filter import BaseFilter, FilterKind
from filters.color_filter import ColorOpFilter
from filters.edge_filter import EdgeFilter
from filters.lut_filter import LutFilter
from filters.looks import LOOKS
from filters.pixelate_filter import PixelateFilter


FILTER_LIST = [
    ColorOpFilter("normal", "Normal", "none"),
    ColorOpFilter("teal_orange", "Cinematic Teal & Orange",
                  "contrast(1.15) saturate(1.2) sepia(0.25) hue-rotate(330deg) saturate(1.2)"),
    ColorOpFilter("kodak_warm", "Kodak Warm",
                  "contrast(1.1) brightness(1.05) saturate(1.15) sepia(0.15)"),
    ColorOpFilter("fuji_cool", "Fuji Cool",
                  "contrast(1.05) brightness(1.03) saturate(1.1) hue-rotate(205deg)"),
    ColorOpFilter("bleach_bypass", "Bleach Bypass", "contrast(1.4) saturate(0.3) brightness(1.02)"),
    ColorOpFilter("film_noir", "Film Noir", "grayscale(1) contrast(1.2) brightness(1.02)"),
    ColorOpFilter("vintage_fade", "Vintage Fade",
                  "contrast(0.9) brightness(1.06) saturate(0.8) sepia(0.2)"),
    ColorOpFilter("matte_pastel", "Matte Pastel", "contrast(0.85) brightness(1.08) saturate(0.9)"),
    ColorOpFilter("vivid_pop", "Vivid Pop", "contrast(1.2) saturate(1.35) brightness(1.02)"),
    ColorOpFilter("muted", "Muted", "contrast(0.95) saturate(0.75)"),
    ColorOpFilter("golden_hour", "Golden Hour",
                  "sepia(0.2) hue-rotate(345deg) contrast(1.05) brightness(1.1) saturate(1.1)"),
    ColorOpFilter("cool_night", "Cool Night",
                  "hue-rotate(210deg) contrast(1.08) brightness(0.98) saturate(1.05)"),
    LutFilter("lut_teal_orange", "LUT Teal & Orange", look=LOOKS["teal_orange"], strength=0.9),
    LutFilter("lut_warm_film", "LUT Warm Film", look=LOOKS["warm_film"], strength=0.85),
    LutFilter("lut_cool_blockbuster", "LUT Cool Blockbuster", look=LOOKS["cool_blockbuster"], strength=0.85),
    LutFilter("lut_faded_matte", "LUT Faded Matte", look=LOOKS["faded_matte"], strength=0.8),
    LutFilter("lut_mono_silver", "LUT Mono Silver", look=LOOKS["mono_silver"], strength=1.0),
    PixelateFilter("pixelate", "8-Bit Pixelate"),
    EdgeFilter("edge", "Edge Sketch"),
]


def check_unique_keys(filters):
    seen = set()
    for f in filters:
        if f.key in seen:
            raise ValueError(f"Duplicate filter key: {f.key!r}")
        seen.add(f.key)


def find_filter(key, filters=FILTER_LIST):
    """Return the descriptor for *key*, or None."""
    return next((f for f in filters if f.key == key), None)


check_unique_keys(FILTER_LIST)

__all__ = [
    'FILTER_LIST', 'BaseFilter', 'FilterKind', 'ColorOpFilter', 'LutFilter',
    'PixelateFilter', 'EdgeFilter', 'find_filter', 'check_unique_keys',
]

"""
Look Library
============
Procedural colour grades used to bake 3D LUTs.

A look is a pure function ``look(r, g, b) -> (r, g, b)`` over normalized
channels. Looks are only ever evaluated on a LUT lattice, never on live
video, so they can afford HSL round trips. Every step returns a new triple;
nothing is accumulated in place.

To add a new look:
1. Write a function built from the helpers below
2. Register it in LOOKS
3. Reference it from a LutFilter in filters/__init__.py
"""

from filters.color_math import clamp01, hsl_to_rgb, lerp, luma, rgb_to_hsl, s_curve


# ============================================================================
# BUILDING BLOCKS
# ============================================================================

def tone(rgb, contrast):
    """Apply the same S-curve to all three channels."""
    r, g, b = rgb
    return s_curve(r, contrast), s_curve(g, contrast), s_curve(b, contrast)


def fade(rgb, amount):
    """Lift blacks and lower whites towards grey (matte film look)."""
    r, g, b = rgb
    lo, span = amount, 1.0 - 2.0 * amount
    return lo + r * span, lo + g * span, lo + b * span


def zone_weights(l):
    """
    Shadow / midtone / highlight weights of luma *l*.
    The three weights always sum to 1.
    """
    shadows = (1.0 - l) ** 2
    highlights = l ** 2
    mids = 1.0 - shadows - highlights
    return shadows, mids, highlights


def split_tone(rgb, shadows=(0.0, 0.0, 0.0), mids=(0.0, 0.0, 0.0), highlights=(0.0, 0.0, 0.0)):
    """Add per-zone RGB offsets weighted by the luma of *rgb*."""
    r, g, b = rgb
    ws, wm, wh = zone_weights(luma(r, g, b))
    return tuple(
        clamp01(c + ws * s + wm * m + wh * h)
        for c, s, m, h in zip((r, g, b), shadows, mids, highlights)
    )


def adjust_hsl(rgb, saturation=1.0, lightness=0.0):
    """Scale saturation and offset lightness in HSL space."""
    h, s, l = rgb_to_hsl(*rgb)
    return hsl_to_rgb(h, clamp01(s * saturation), clamp01(l + lightness))


def blend(a, b, t):
    return tuple(lerp(x, y, t) for x, y in zip(a, b))


# ============================================================================
# LOOKS
# ============================================================================

def teal_orange(r, g, b):
    """Blockbuster complementary grade: teal shadows, orange skin/highlights."""
    rgb = tone((r, g, b), 0.18)
    rgb = split_tone(
        rgb,
        shadows=(-0.05, 0.02, 0.07),
        mids=(0.01, 0.0, -0.01),
        highlights=(0.08, 0.03, -0.06),
    )
    return adjust_hsl(rgb, saturation=1.12)


def warm_film(r, g, b):
    """Warm print-film emulation with slightly lifted blacks."""
    rgb = fade((r, g, b), 0.03)
    rgb = tone(rgb, 0.10)
    rgb = split_tone(
        rgb,
        shadows=(0.02, 0.0, -0.02),
        mids=(0.03, 0.015, -0.01),
        highlights=(0.04, 0.02, -0.03),
    )
    return adjust_hsl(rgb, saturation=1.05, lightness=0.01)


def cool_blockbuster(r, g, b):
    """Crisp cold grade with blue shadows."""
    rgb = tone((r, g, b), 0.22)
    rgb = split_tone(
        rgb,
        shadows=(-0.03, 0.01, 0.08),
        highlights=(0.01, 0.03, 0.05),
    )
    return adjust_hsl(rgb, saturation=0.95, lightness=-0.01)


def faded_matte(r, g, b):
    """Low-contrast pastel matte."""
    rgb = tone((r, g, b), -0.15)
    rgb = fade(rgb, 0.06)
    rgb = split_tone(
        rgb,
        shadows=(0.0, 0.02, 0.03),
        highlights=(0.03, 0.02, 0.0),
    )
    return adjust_hsl(rgb, saturation=0.8, lightness=0.02)


def mono_silver(r, g, b):
    """Contrasty black and white with a faint selenium tint."""
    l = luma(r, g, b)
    rgb = tone((l, l, l), 0.25)
    rgb = split_tone(rgb, shadows=(0.0, 0.0, 0.015), highlights=(0.015, 0.005, -0.01))
    return blend(rgb, adjust_hsl(rgb, saturation=0.0), 0.5)


LOOKS = {
    "teal_orange": teal_orange,
    "warm_film": warm_film,
    "cool_blockbuster": cool_blockbuster,
    "faded_matte": faded_matte,
    "mono_silver": mono_silver,
}

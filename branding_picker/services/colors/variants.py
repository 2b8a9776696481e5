"""
Light and dark branding variants.

Derives the AppStream light/dark scheme colors from the primary color by
shifting HSL lightness, with corrections for very light and very dark
primaries.
"""

from dataclasses import dataclass
from typing import Tuple

from .colorspace import HSL, RGB, hsl_to_rgb, rgb_to_hex


@dataclass(frozen=True)
class VariantParams:
    """Lightness deltas and limits used when deriving variants."""
    saturation_floor: float = 0.12
    light_delta: float = 0.22
    dark_delta: float = 0.26
    very_light: float = 0.85
    very_light_shift: Tuple[float, float] = (-0.08, -0.3)
    very_dark: float = 0.15
    very_dark_shift: Tuple[float, float] = (0.3, -0.08)
    min_dark_gap: float = 0.12
    clamp_low: float = 0.03
    clamp_high: float = 0.97

    def clamp(self, value: float) -> float:
        return max(self.clamp_low, min(self.clamp_high, value))


DEFAULT_VARIANTS = VariantParams()


@dataclass(frozen=True)
class VariantPlan:
    """HSL targets for the light and dark variants."""
    hue: float
    saturation: float
    light_lightness: float
    dark_lightness: float


def variant_lightness(l: float, params: VariantParams = DEFAULT_VARIANTS) -> Tuple[float, float]:
    """Return (light, dark) target lightness for a primary lightness ``l``."""
    light = params.clamp(l + params.light_delta)
    dark = params.clamp(l - params.dark_delta)

    if l > params.very_light:
        light = params.clamp(l + params.very_light_shift[0])
        dark = params.clamp(l + params.very_light_shift[1])
    elif l < params.very_dark:
        light = params.clamp(l + params.very_dark_shift[0])
        dark = params.clamp(l + params.very_dark_shift[1])

    # keep the dark variant perceptibly darker than the primary
    if l - dark < params.min_dark_gap:
        dark = params.clamp(l - params.min_dark_gap)

    return light, dark


def plan_variants(hsl: HSL, params: VariantParams = DEFAULT_VARIANTS) -> VariantPlan:
    """Compute the HSL targets for a primary color, keeping its hue."""
    h, s, l = hsl
    light, dark = variant_lightness(l, params)
    return VariantPlan(
        hue=h,
        saturation=max(s, params.saturation_floor),
        light_lightness=light,
        dark_lightness=dark,
    )


def derive_variants(rgb: RGB, hsl: HSL,
                    params: VariantParams = DEFAULT_VARIANTS) -> Tuple[str, str, str]:
    """
    Derive the (primary, light, dark) hex triple.

    The primary hex is the unmodified primary RGB; only the variants get the
    saturation floor applied.
    """
    plan = plan_variants(hsl, params)
    light_rgb = hsl_to_rgb(plan.hue, plan.saturation, plan.light_lightness)
    dark_rgb = hsl_to_rgb(plan.hue, plan.saturation, plan.dark_lightness)
    return rgb_to_hex(*rgb), rgb_to_hex(*light_rgb), rgb_to_hex(*dark_rgb)

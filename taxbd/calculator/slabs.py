"""
Bangladesh income tax tables — slabs, wealth surcharge, minimum tax.

Every table is a module-level tuple of NamedTuples: immutable, ordered, and
not configurable at runtime. Only the assessment-year selector chooses between
them.

Slab tables hold bracket WIDTHS (not cumulative ceilings). The unbounded final
bracket is not stored: the engine taxes any remainder at REST_RATE.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple, Union

from taxbd.intake.schemas import AssessmentYear, MinTaxZone


class SlabBracket(NamedTuple):
    amount: float   # Width of the bracket in BDT
    rate: float     # Percent


class SurchargeBracket(NamedTuple):
    up_to: float    # Inclusive upper bound on net worth
    rate: float     # Percent


# ===========================================================================
# SLAB TABLES — by assessment year
# ===========================================================================

SLABS_2025_26: tuple[SlabBracket, ...] = (
    SlabBracket(350_000,   0),    # first 3.5L: 0%
    SlabBracket(100_000,   5),    # next 1L: 5%
    SlabBracket(400_000,   10),   # next 4L: 10%
    SlabBracket(500_000,   15),   # next 5L: 15%
    SlabBracket(500_000,   20),   # next 5L: 20%
    SlabBracket(2_000_000, 25),   # next 20L: 25%
)

# AY 2026-27 onward: wider 0% band, 5% band removed
SLABS_2026_ONWARD: tuple[SlabBracket, ...] = (
    SlabBracket(375_000,   0),
    SlabBracket(300_000,   10),
    SlabBracket(400_000,   15),
    SlabBracket(500_000,   20),
    SlabBracket(2_000_000, 25),
)

REST_RATE = 30.0

_SLABS_BY_YEAR: Mapping[AssessmentYear, tuple[SlabBracket, ...]] = MappingProxyType({
    AssessmentYear.ay_2025_26: SLABS_2025_26,
    AssessmentYear.ay_2026_27: SLABS_2026_ONWARD,
    AssessmentYear.ay_2027_28: SLABS_2026_ONWARD,
})

# ===========================================================================
# WEALTH SURCHARGE — by net worth (ascending, last bound unbounded)
# ===========================================================================

SURCHARGE_BRACKETS: tuple[SurchargeBracket, ...] = (
    SurchargeBracket(40_000_000,    0),    # up to 4 crore
    SurchargeBracket(100_000_000,   10),   # up to 10 crore
    SurchargeBracket(200_000_000,   20),   # up to 20 crore
    SurchargeBracket(500_000_000,   30),   # up to 50 crore
    SurchargeBracket(float("inf"),  35),
)

# ===========================================================================
# MINIMUM TAX — by zone
# ===========================================================================

MIN_TAX_BY_ZONE: Mapping[MinTaxZone, float] = MappingProxyType({
    MinTaxZone.city:     5_000.0,
    MinTaxZone.district: 3_000.0,
    MinTaxZone.other:    1_000.0,
    MinTaxZone.new:      1_000.0,
})

DEFAULT_MIN_TAX = MIN_TAX_BY_ZONE[MinTaxZone.district]


# ===========================================================================
# RESOLVERS (pure lookups — no side effects)
# ===========================================================================

def slabs_by_year(year: Union[AssessmentYear, str]) -> tuple[SlabBracket, ...]:
    """
    Slab table for an assessment year.
    Unrecognised tokens fall back to the 2025-26 table — no error.
    """
    try:
        key = AssessmentYear(year)
    except (ValueError, TypeError):
        return SLABS_2025_26
    return _SLABS_BY_YEAR[key]


def surcharge_rate_by_networth(net_worth: float) -> float:
    """
    Surcharge percent for a net worth: rate of the first bracket whose bound
    is >= net_worth. Negative net worth is treated as 0.
    """
    net_worth = max(0.0, net_worth)
    for bracket in SURCHARGE_BRACKETS:
        if net_worth <= bracket.up_to:
            return float(bracket.rate)
    # Unreachable for finite input: last bound is +inf
    return float(SURCHARGE_BRACKETS[-1].rate)


def min_tax_for_zone(zone: Union[MinTaxZone, str]) -> float:
    """Minimum tax floor for a zone. Unrecognised tokens get the district floor."""
    try:
        key = MinTaxZone(zone)
    except (ValueError, TypeError):
        return DEFAULT_MIN_TAX
    return MIN_TAX_BY_ZONE[key]


__all__ = [
    "SlabBracket",
    "SurchargeBracket",
    "SLABS_2025_26",
    "SLABS_2026_ONWARD",
    "REST_RATE",
    "SURCHARGE_BRACKETS",
    "MIN_TAX_BY_ZONE",
    "DEFAULT_MIN_TAX",
    "slabs_by_year",
    "surcharge_rate_by_networth",
    "min_tax_for_zone",
]

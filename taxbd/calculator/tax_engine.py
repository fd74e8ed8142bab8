"""
BD Tax Engine — Bangladesh individual income tax, AY 2025-26 to 2027-28.
Pure Python, deterministic, no I/O. Same input → same output.

Computation sequence (CRITICAL — order determines correctness):
  1. total = sum of salary components (never negative)
  2. General exemption subtracted FIRST → post-exemption base
  3. Slab brackets consumed in order on the post-exemption base
  4. Anything left after the named brackets taxed at REST_RATE (30%)
  5. Investment rebate: investment capped at 25% of total, rebate capped at slab tax
  6. Wealth surcharge on post-rebate tax
  7. Zone minimum tax — ONLY if total exceeds the general exemption
  8. AIT credited; payable never negative (no refund)

Rounding to 2 decimals happens once, in _shape_result. Never round mid-pipeline.
"""
from __future__ import annotations

import logging

from taxbd.calculator.schemas import BandResult, Summary, TaxResult
from taxbd.calculator.slabs import (
    REST_RATE,
    SlabBracket,
    min_tax_for_zone,
    slabs_by_year,
    surcharge_rate_by_networth,
)
from taxbd.intake.schemas import TaxInput

logger = logging.getLogger(__name__)

# ===========================================================================
# REBATE PARAMETERS
# ===========================================================================

# Eligible investment is capped at 25% of total earnings
REBATE_INCOME_CAP_PCT = 0.25


# ===========================================================================
# INTERNAL HELPERS (pure functions — no side effects, no I/O)
# ===========================================================================

def _total_earnings(tax_input: TaxInput) -> float:
    """Sum of all annual income components, floored at 0."""
    return max(
        0.0,
        tax_input.basic_salary
        + tax_input.hra
        + tax_input.conveyance
        + tax_input.medical
        + tax_input.bonus
        + tax_input.overtime
        + tax_input.other_income,
    )


def _apply_slabs(
    taxable_base: float, slabs: tuple[SlabBracket, ...]
) -> tuple[float, list[tuple[float, float, float]]]:
    """
    Consume slab brackets in order.

    Returns (tax, bands) where bands is a list of unrounded
    (portion, rate, tax) triples. Stops as soon as the base is used up, so
    untouched brackets produce no band — not even a zero-portion one.
    """
    remaining = taxable_base
    tax = 0.0
    bands: list[tuple[float, float, float]] = []

    for bracket in slabs:
        if remaining <= 0:
            break
        portion = min(remaining, float(bracket.amount))
        line_tax = portion * (bracket.rate / 100.0)
        tax += line_tax
        bands.append((portion, float(bracket.rate), line_tax))
        remaining -= portion

    if remaining > 0:
        line_tax = remaining * (REST_RATE / 100.0)
        tax += line_tax
        bands.append((remaining, REST_RATE, line_tax))

    return tax, bands


def _calculate_rebate(
    total: float, tax_before_rebate: float, investment: float, rebate_rate: float
) -> tuple[float, float]:
    """
    Investment rebate.
    eligible = min(investment, 25% of total); rebate = min(slab tax, eligible × rate).
    Returns (eligible, rebate). The rebate can never push tax below 0.
    """
    eligible = min(investment, total * REBATE_INCOME_CAP_PCT)
    rebate = min(tax_before_rebate, eligible * (max(0.0, rebate_rate) / 100.0))
    return eligible, rebate


def _r2(value: float) -> float:
    return round(value, 2)


# ===========================================================================
# CALC TAX — public API
# ===========================================================================

def calc_tax(tax_input: TaxInput) -> TaxResult:
    """
    Compute Bangladesh income tax for one normalised input.

    Total over its domain: any TaxInput produces a result, nothing is raised.
    Use taxbd.intake.normalizer.parse_tax_input to build TaxInput from raw
    client data.
    """
    exemption = tax_input.general_exemption

    # Step 1: Total earnings
    total = _total_earnings(tax_input)

    # Step 2: General exemption BEFORE any slab — it is not a 0% slab
    taxable_base = max(0.0, total - exemption)

    # Steps 3–4: Slabs for the assessment year, then the rest rate
    slabs = slabs_by_year(tax_input.year)
    zero_limit = float(slabs[0].amount)
    tax_before_rebate, raw_bands = _apply_slabs(taxable_base, slabs)

    # Step 5: Rebate
    eligible, rebate = _calculate_rebate(
        total, tax_before_rebate, tax_input.eligible_investment, tax_input.rebate_rate,
    )

    # Step 6: Wealth surcharge on post-rebate tax
    post_rebate_tax = max(0.0, tax_before_rebate - rebate)
    surcharge_rate = surcharge_rate_by_networth(tax_input.net_worth)
    surcharge = post_rebate_tax * (surcharge_rate / 100.0)

    # Step 7: Minimum tax — skipped entirely when nothing exceeds the exemption
    tax_after_surcharge = post_rebate_tax + surcharge
    min_tax = min_tax_for_zone(tax_input.min_tax_zone)
    min_tax_applied = total > exemption and tax_after_surcharge < min_tax
    if min_tax_applied:
        tax_after_surcharge = min_tax

    # Step 8: Net after AIT — no refund
    net_payable = max(0.0, tax_after_surcharge - tax_input.ait_paid)

    logger.debug(
        "calc_tax year=%s zone=%s bands=%d surcharge_rate=%s min_tax_applied=%s",
        tax_input.year.value,
        tax_input.min_tax_zone.value,
        len(raw_bands),
        surcharge_rate,
        min_tax_applied,
    )

    return TaxResult(
        inputs=tax_input,
        summary=Summary(
            total_earnings=_r2(total),
            general_exemption=_r2(exemption),
            net_taxable_after_general=_r2(taxable_base),
            zero_percent_limit=_r2(zero_limit),
            income_subject_to_slab=_r2(taxable_base),
            tax_before_rebate=_r2(tax_before_rebate),
            eligible_investment_capped=_r2(eligible),
            calculated_tax_rebate=_r2(rebate),
            surcharge_rate=surcharge_rate,
            surcharge=_r2(surcharge),
            gross_payable_after_rebate_surcharge=_r2(tax_after_surcharge),
            ait_paid=_r2(tax_input.ait_paid),
            net_tax_payable=_r2(net_payable),
        ),
        bands=[
            BandResult(portion=_r2(portion), rate=rate, tax=_r2(line_tax))
            for portion, rate, line_tax in raw_bands
        ],
    )


__all__ = ["REBATE_INCOME_CAP_PCT", "calc_tax"]

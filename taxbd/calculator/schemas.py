"""
schemas.py — Calculator Pydantic v2 data contracts.

Defines:
  - BandResult  (one consumed slab bracket)
  - Summary     (the 13 headline figures rendered by the form page)
  - TaxResult   (inputs echo + summary + bands — public output of calc_tax)

All monetary values here are ALREADY rounded to 2 decimals. Rounding happens
once in tax_engine when the result is shaped, never mid-calculation.
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict

from taxbd.intake.schemas import TaxInput


# ---------------------------------------------------------------------------
# BandResult — one slab bracket actually consumed
# ---------------------------------------------------------------------------

class BandResult(BaseModel):
    """Portion of the post-exemption base taxed at one rate."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    portion: float     # Amount of income falling in this bracket
    rate: float        # Percent, e.g. 10.0 for 10%
    tax: float         # portion × rate / 100


# ---------------------------------------------------------------------------
# Summary — headline figures
# ---------------------------------------------------------------------------

class Summary(BaseModel):
    """
    Headline figures of one computation, in pipeline order.

    net_taxable_after_general and income_subject_to_slab carry the same value:
    the exemption is subtracted before slabs, so the whole remainder is slab
    income. Both are kept because the form page shows both rows.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    total_earnings: float
    general_exemption: float
    net_taxable_after_general: float
    zero_percent_limit: float                  # Width of the first (0%) bracket
    income_subject_to_slab: float
    tax_before_rebate: float
    eligible_investment_capped: float          # min(investment, 25% of total)
    calculated_tax_rebate: float               # Never exceeds tax_before_rebate
    surcharge_rate: float                      # Percent, unrounded
    surcharge: float
    gross_payable_after_rebate_surcharge: float
    ait_paid: float
    net_tax_payable: float                     # max(0, gross − AIT)


# ---------------------------------------------------------------------------
# TaxResult — public API of the tax engine
# ---------------------------------------------------------------------------

class TaxResult(BaseModel):
    """
    Output of calc_tax().

    bands has one entry per bracket actually consumed, plus one rest-rate entry
    when income runs past every named bracket. Empty when nothing is taxable.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    inputs: TaxInput
    summary: Summary
    bands: List[BandResult] = []


__all__ = [
    "BandResult",
    "Summary",
    "TaxResult",
]

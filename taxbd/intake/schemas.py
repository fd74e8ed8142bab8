"""
schemas.py — Intake Pydantic v2 data contracts.

Defines:
  - AssessmentYear, MinTaxZone enums
  - TaxInput  (the central request contract — the tax engine consumes only this)
  - ErrorDetail, ErrorBody, ErrorResponse  (cross-cutting error envelope)

FIELD NAMES match the form page and the JSON request record:
  - year                 (assessment year token, e.g. "2025-26")
  - general_exemption    (flat tax-free amount, applied BEFORE slabs)
  - rebate_rate          (percent, not a fraction: 15 means 15%)
  - min_tax_zone         (city | district | other | new)

TaxInput is strict (ge=0, enum-typed). Lenient coercion of raw client payloads
happens in normalizer.parse_tax_input, never here.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class AssessmentYear(str, Enum):
    ay_2025_26 = "2025-26"
    ay_2026_27 = "2026-27"
    ay_2027_28 = "2027-28"


class MinTaxZone(str, Enum):
    city = "city"          # City Corporation / Cantonment
    district = "district"  # District HQ / Municipality
    other = "other"        # Other areas
    new = "new"            # New taxpayer


DEFAULT_YEAR = AssessmentYear.ay_2025_26
DEFAULT_ZONE = MinTaxZone.district
DEFAULT_REBATE_RATE = 15.0
DEFAULT_GENERAL_EXEMPTION = 200_000.0

# Ceiling on every numeric field. Seven components summed and multiplied by
# any percentage in the pipeline stay far inside the float range.
MAX_AMOUNT = 1e18


# ---------------------------------------------------------------------------
# TaxInput — central data contract
# ---------------------------------------------------------------------------

class TaxInput(BaseModel):
    """
    Normalised input for one tax computation.

    All monetary fields are in BDT and ANNUAL. Every field is optional and
    defaults to zero or a neutral value, so TaxInput() is a valid (zero-income)
    request.

    frozen=True: the pipeline receives a value object it cannot mutate.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    year: AssessmentYear = Field(
        default=DEFAULT_YEAR,
        description="Assessment year — selects the slab table.",
    )

    # --- Annual income components ---
    basic_salary: float = Field(default=0, ge=0, le=MAX_AMOUNT, description="Annual basic salary.")
    hra: float = Field(default=0, ge=0, le=MAX_AMOUNT, description="House rent allowance — annual.")
    conveyance: float = Field(default=0, ge=0, le=MAX_AMOUNT, description="Conveyance allowance — annual.")
    medical: float = Field(default=0, ge=0, le=MAX_AMOUNT, description="Medical allowance — annual.")
    bonus: float = Field(
        default=0, ge=0, le=MAX_AMOUNT,
        description="Performance / yearly / festival bonuses — annual.",
    )
    overtime: float = Field(default=0, ge=0, le=MAX_AMOUNT, description="Overtime allowance — annual.")
    other_income: float = Field(
        default=0, ge=0, le=MAX_AMOUNT,
        description="Other income, e.g. leave encashment — annual.",
    )

    # --- Credits and adjustments ---
    ait_paid: float = Field(
        default=0, ge=0, le=MAX_AMOUNT,
        description="Advance income tax already withheld or paid. Credited against liability; never refunded.",
    )
    eligible_investment: float = Field(
        default=0, ge=0, le=MAX_AMOUNT,
        description="Investment eligible for rebate. Engine caps it at 25% of total earnings.",
    )
    rebate_rate: float = Field(
        default=DEFAULT_REBATE_RATE, ge=0, le=MAX_AMOUNT,
        description="Rebate rate in percent applied to the capped eligible investment.",
    )
    net_worth: float = Field(
        default=0, ge=0, le=MAX_AMOUNT,
        description="Net worth — selects the wealth surcharge bracket.",
    )
    general_exemption: float = Field(
        default=DEFAULT_GENERAL_EXEMPTION, ge=0, le=MAX_AMOUNT,
        description="Flat tax-free amount subtracted from total earnings before any slab.",
    )
    min_tax_zone: MinTaxZone = Field(
        default=DEFAULT_ZONE,
        description="Geographic zone — selects the minimum tax floor.",
    )


# ---------------------------------------------------------------------------
# Error response models — used by main.py exception handlers (cross-cutting)
# ---------------------------------------------------------------------------

class ErrorDetail(BaseModel):
    """Single field-level validation error."""
    model_config = ConfigDict(extra="forbid")

    field: Optional[str] = None   # Dot-notation field path, e.g. "basic_salary"
    issue: str                     # Human-readable description of the problem


class ErrorBody(BaseModel):
    """Error envelope body."""
    model_config = ConfigDict(extra="forbid")

    code: str                                      # VALIDATION_ERROR, NOT_FOUND, etc.
    message: str                                   # High-level error description
    details: List[ErrorDetail] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """
    Standard error response format for all endpoints.

    Structure: {"error": {"code": "...", "message": "...", "details": [...]}}
    """
    model_config = ConfigDict(extra="forbid")

    error: ErrorBody


__all__ = [
    "AssessmentYear",
    "MinTaxZone",
    "DEFAULT_YEAR",
    "DEFAULT_ZONE",
    "DEFAULT_REBATE_RATE",
    "DEFAULT_GENERAL_EXEMPTION",
    "MAX_AMOUNT",
    "TaxInput",
    "ErrorDetail",
    "ErrorBody",
    "ErrorResponse",
]

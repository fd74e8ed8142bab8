"""
Intake normaliser — raw request payload → TaxInput.

This is the only place where client data is interpreted. The calculator is a
public tool, so the boundary never fails:

  1. Payload that is not a mapping        → every field takes its default
  2. Missing key or null value            → field default
  3. Numeric strings (" 150000", "1e5")   → parsed
  4. Anything else non-numeric, bool,
     NaN or ±inf                          → 0
  5. Negative numbers                     → clamped to 0
     Numbers above MAX_AMOUNT             → clamped to MAX_AMOUNT
  6. Unknown year / zone token            → 2025-26 / district
  7. Unknown keys                         → ignored

The result is a fully-validated, frozen TaxInput handed to the tax engine.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from enum import Enum
from typing import Any

from taxbd.intake.schemas import (
    DEFAULT_YEAR,
    DEFAULT_ZONE,
    MAX_AMOUNT,
    AssessmentYear,
    MinTaxZone,
    TaxInput,
)

logger = logging.getLogger(__name__)

# Numeric fields of TaxInput, in request-record order.
NUMERIC_FIELDS: tuple[str, ...] = (
    "basic_salary",
    "hra",
    "conveyance",
    "medical",
    "bonus",
    "overtime",
    "other_income",
    "ait_paid",
    "eligible_investment",
    "rebate_rate",
    "net_worth",
    "general_exemption",
)


def coerce_amount(value: Any) -> float:
    """
    Coerce one raw numeric value to a float in [0, MAX_AMOUNT].

    Unparseable input becomes 0.0. Never raises.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return min(max(0.0, number), MAX_AMOUNT)


def coerce_choice(value: Any, enum_cls: type[Enum], default: Enum) -> Enum:
    """Map a raw token onto enum_cls; unknown or non-string tokens give default."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip())
        except ValueError:
            return default
    return default


def parse_tax_input(raw: Any) -> TaxInput:
    """
    Build a TaxInput from an untrusted payload (decoded JSON or form fields).

    Args:
        raw: Anything. Only a Mapping contributes values.

    Returns:
        A TaxInput. Missing fields keep the TaxInput defaults.
    """
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.debug("Payload of type %s is not an object — using defaults", type(raw).__name__)
        return TaxInput()

    fields: dict[str, Any] = {}

    for name in NUMERIC_FIELDS:
        value = raw.get(name)
        if value is None:
            continue
        amount = coerce_amount(value)
        if amount == 0.0 and value not in (0, "0"):
            logger.debug("Coerced field %s to 0", name)
        fields[name] = amount

    year = coerce_choice(raw.get("year"), AssessmentYear, DEFAULT_YEAR)
    zone = coerce_choice(raw.get("min_tax_zone"), MinTaxZone, DEFAULT_ZONE)
    fields["year"] = year
    fields["min_tax_zone"] = zone

    return TaxInput.model_validate(fields)


__all__ = ["NUMERIC_FIELDS", "coerce_amount", "coerce_choice", "parse_tax_input"]

"""
Calculator HTTP routes — POST /api/calculate

The body is read raw rather than declared as a Pydantic parameter: a public
calculator never answers 422 for bad numbers. Whatever arrives is handed to
parse_tax_input, which coerces it into a TaxInput.

Accepted bodies:
  - JSON object                              → fields read from it
  - application/x-www-form-urlencoded body   → form fields read from it
  - anything else (empty, malformed, array)  → all defaults
"""
from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import parse_qsl

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from taxbd.calculator.tax_engine import calc_tax
from taxbd.intake.normalizer import parse_tax_input

router = APIRouter(prefix="/api", tags=["calculator"])
logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _decode_payload(body: bytes, content_type: str) -> Any:
    """
    Decode a request body into a payload for parse_tax_input.
    JSON first; posted form fields when JSON did not yield an object.
    """
    payload: Any = None
    if body:
        try:
            payload = json.loads(body)
        # JSONDecodeError, UnicodeDecodeError and the int digit limit all subclass ValueError
        except ValueError:
            payload = None

    if isinstance(payload, dict):
        return payload

    if content_type.split(";")[0].strip().lower() == FORM_CONTENT_TYPE:
        try:
            return dict(parse_qsl(body.decode("utf-8")))
        except UnicodeDecodeError:
            return {}

    if body:
        logger.info("Request body is not a JSON object — calculating with defaults")
    return {}


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/calculate")
async def calculate_tax(request: Request) -> JSONResponse:
    """
    Calculate Bangladesh income tax for the posted inputs.

    Returns:
      200: {inputs, summary, bands} — always, for any body
    """
    body = await request.body()
    payload = _decode_payload(body, request.headers.get("content-type", ""))

    tax_input = parse_tax_input(payload)
    result = calc_tax(tax_input)

    # Log only year, zone and band count — no salary values
    logger.info(
        "Tax calculated year=%s zone=%s bands=%d",
        tax_input.year.value,
        tax_input.min_tax_zone.value,
        len(result.bands),
    )

    return JSONResponse(status_code=200, content=result.model_dump(mode="json"))

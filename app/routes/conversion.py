"""Currency conversion and rate table endpoints."""

from typing import Dict

from fastapi import APIRouter, Request

from app.models import ConversionRequest, ConversionResponse
from app.screening.converter import convert, rates_as_dict

router = APIRouter(prefix="/api")


@router.post("/conversion", response_model=ConversionResponse)
async def convert_amount(
    conversion: ConversionRequest,
    request: Request,
) -> ConversionResponse:
    """Convert an amount using the configured rate table.

    An unparsable amount is not an error: the response simply reports
    that no conversion was performed.
    """
    result = convert(
        conversion.source_currency,
        conversion.target_currency,
        conversion.amount,
        request.app.state.rates,
    )
    return ConversionResponse(converted=result is not None, result=result)


@router.get("/rates")
async def get_rates(request: Request) -> Dict[str, Dict[str, str]]:
    """Return the directional rate table as ``{source: {target: rate}}``."""
    return rates_as_dict(request.app.state.rates)

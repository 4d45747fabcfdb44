"""Currency conversion against a static, directional rate table.

Only pairs listed in the table convert at a real rate. Every other pair,
including the reverse of a listed pair and same-currency pairs, converts
at 1. Downstream rules see the converted amount, so this fallback is part
of the observable behaviour and must stay.
"""

import json
from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    ROUND_HALF_UP,
    Decimal,
    InvalidOperation,
    localcontext,
)
from pathlib import Path
from typing import Dict, Optional, Tuple

from app.models import ConversionResult, Currency

RateTable = Dict[Tuple[Currency, Currency], Decimal]

DEFAULT_RATES: RateTable = {
    (Currency.USD, Currency.EUR): Decimal("0.90"),
    (Currency.USD, Currency.GBP): Decimal("0.78"),
}

CENTS = Decimal("0.01")


def parse_amount(raw: Optional[str]) -> Optional[Decimal]:
    """Parse an entered amount into a non-negative finite Decimal.

    Returns None for empty, non-numeric, negative, NaN or infinite input.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def convert(
    source: Currency,
    target: Currency,
    amount: Optional[str],
    rates: Optional[RateTable] = None,
) -> Optional[ConversionResult]:
    """Convert ``amount`` from ``source`` to ``target``.

    Returns None when the amount cannot be parsed; callers treat that as
    "no conversion performed", not as a rejection.
    """
    value = parse_amount(amount)
    if value is None:
        return None

    table = DEFAULT_RATES if rates is None else rates
    rate = table.get((source, target), Decimal("1"))

    return ConversionResult(
        converted_amount=_multiply_to_cents(value, rate),
        target_currency=target,
        source_currency=source,
        rate=rate,
    )


def _multiply_to_cents(value: Decimal, rate: Decimal) -> Decimal:
    """Exact ``value * rate`` rounded half-up to cents.

    Runs in a local context wide enough for any parsed amount, so large
    amounts never overflow the default 28-digit precision. Products that
    already sit on a cent boundary are only padded to two places while
    they are small; huge ones are returned as they are.
    """
    with localcontext() as ctx:
        ctx.prec = max(
            ctx.prec,
            len(value.as_tuple().digits) + len(rate.as_tuple().digits),
        )
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        product = value * rate

        exponent = product.as_tuple().exponent
        if exponent < CENTS.as_tuple().exponent:
            # Rounding never needs more digits than the product already has
            return product.quantize(CENTS, rounding=ROUND_HALF_UP)
        if product.adjusted() < ctx.prec - 2:
            return product.quantize(CENTS)
        return product


def load_rates(path: Path) -> RateTable:
    """Load a nested ``{source: {target: rate}}`` JSON rate table.

    Falls back to the built-in table when the file does not exist.
    """
    if not path.exists():
        return dict(DEFAULT_RATES)

    with open(path, "r") as f:
        raw = json.load(f)

    table: RateTable = {}
    for source, targets in raw.items():
        for target, rate in targets.items():
            table[(Currency(source), Currency(target))] = Decimal(str(rate))
    return table


def rates_as_dict(rates: RateTable) -> Dict[str, Dict[str, str]]:
    """Render a rate table back into its nested JSON shape."""
    nested: Dict[str, Dict[str, str]] = {}
    for (source, target), rate in rates.items():
        nested.setdefault(source.value, {})[target.value] = str(rate)
    return nested

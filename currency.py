"""
Exchange-rate handling for TripLedger

Rates come from an external provider as a mapping of currency code to rate,
relative to the currency they were requested for. Fetching them is the
caller's business; this module only decides which rate an expense uses.
"""
from __future__ import annotations
import logging
from typing import Mapping, Optional

from errors import InvalidInputError
from utils import parse_positive

logger = logging.getLogger(__name__)

SUPPORTED_CURRENCIES = (
    "AED", "AMD", "ARS", "AUD", "AZN", "BGN", "BHD", "BRL", "CAD", "CHF",
    "CLP", "CNY", "COP", "CZK", "DKK", "EGP", "EUR", "GBP", "GEL", "HKD",
    "HUF", "IDR", "ILS", "INR", "ISK", "JOD", "JPY", "KES", "KRW", "KWD",
    "KZT", "LKR", "MAD", "MUR", "MVR", "MXN", "MYR", "NOK", "NPR", "NZD",
    "OMR", "PEN", "PHP", "PLN", "QAR", "RON", "SAR", "SCR", "SEK", "SGD",
    "THB", "TRY", "TWD", "TZS", "UAH", "USD", "VND", "ZAR",
)


def resolve_exchange_rate(
    entry_currency: str,
    trip_currency: str,
    rates: Optional[Mapping[str, float]] = None,
    manual_rate: Optional[float] = None,
) -> float:
    """
    Pick the multiplier from entry_currency to trip_currency.

    A manual rate always wins. Paying in the trip currency needs no rate.
    Otherwise rates must be the provider's table for entry_currency; a missing
    table (provider failure) or a missing entry means the rate is unknown.
    """
    if manual_rate is not None:
        return parse_positive(manual_rate, "exchange rate")
    if entry_currency == trip_currency:
        return 1.0
    if not rates or trip_currency not in rates:
        logger.info("No rate from %s to %s", entry_currency, trip_currency)
        raise InvalidInputError(
            f"Exchange rate from {entry_currency} to {trip_currency} is unknown; enter it manually"
        )
    return parse_positive(rates[trip_currency], "exchange rate")


def convert_currency(amount: float, from_rate: float, to_rate: float) -> float:
    """Convert through a common base: amount / from_rate * to_rate"""
    return (amount / parse_positive(from_rate, "from rate")) * parse_positive(to_rate, "to rate")

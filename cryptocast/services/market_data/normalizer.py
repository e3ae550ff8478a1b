"""
Market Data Normalizer

Converts raw upstream payloads into chronological numeric series.
Anything missing or malformed is rejected here with DataUnavailableError.
"""

import logging
import math
from typing import Any

import numpy as np
from pydantic import ValidationError as SchemaError

from cryptocast.schemas.market import (
    Granularity,
    HistoryPayload,
    OrderBookLevel,
    OrderBookSnapshot,
    PriceSeries,
)
from cryptocast.services.base import DataUnavailableError

logger = logging.getLogger(__name__)

SERVICE_NAME = "MarketDataNormalizer"


def _check_error_response(payload: Any, what: str) -> None:
    if not isinstance(payload, dict):
        raise DataUnavailableError(SERVICE_NAME, f"{what}: payload is not an object")
    if payload.get("Response") == "Error":
        raise DataUnavailableError(
            SERVICE_NAME,
            f"{what}: upstream error",
            {"message": payload.get("Message", "")},
        )


def normalize_history(payload: Any, granularity: Granularity) -> PriceSeries:
    """
    Validate a CryptoCompare history payload and return a PriceSeries.

    Bars are sorted by time, duplicate timestamps keep the last bar, and
    zero-price bars (emitted before a coin was listed) are dropped.
    """
    what = f"{granularity.value} history"
    _check_error_response(payload, what)

    try:
        parsed = HistoryPayload.model_validate(payload)
    except SchemaError as e:
        raise DataUnavailableError(
            SERVICE_NAME, f"{what}: missing or malformed Data.Data", {"errors": e.errors()}
        )

    by_time = {bar.time: bar for bar in parsed.Data.Data if bar.close > 0}
    bars = [by_time[t] for t in sorted(by_time)]

    if not bars:
        raise DataUnavailableError(SERVICE_NAME, f"{what}: no usable bars")

    dropped = len(parsed.Data.Data) - len(bars)
    if dropped:
        logger.debug(f"Dropped {dropped} empty or duplicate {granularity.value} bars")

    return PriceSeries(
        granularity=granularity,
        timestamps=np.array([b.time for b in bars], dtype=np.int64),
        opens=np.array([b.open for b in bars], dtype=float),
        highs=np.array([b.high for b in bars], dtype=float),
        lows=np.array([b.low for b in bars], dtype=float),
        closes=np.array([b.close for b in bars], dtype=float),
        volumes=np.array([b.volumeto for b in bars], dtype=float),
    )


def normalize_price(payload: Any, currency: str = "USD") -> float:
    """Extract the latest price from a CryptoCompare `/data/price` payload."""
    _check_error_response(payload, "price")

    value = payload.get(currency)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DataUnavailableError(SERVICE_NAME, f"price: missing {currency} field")

    price = float(value)
    if not math.isfinite(price) or price <= 0:
        raise DataUnavailableError(SERVICE_NAME, f"price: invalid value {value!r}")
    return price


def normalize_order_book(payload: Any) -> OrderBookSnapshot:
    """
    Validate a depth payload of the form
    {"bids": [[price, qty], ...], "asks": [[price, qty], ...]}.
    """
    if not isinstance(payload, dict) or "bids" not in payload or "asks" not in payload:
        raise DataUnavailableError(SERVICE_NAME, "order book: missing bids/asks")

    try:
        bids = [OrderBookLevel(price=float(p), quantity=float(q)) for p, q, *_ in payload["bids"]]
        asks = [OrderBookLevel(price=float(p), quantity=float(q)) for p, q, *_ in payload["asks"]]
    except (TypeError, ValueError, SchemaError) as e:
        raise DataUnavailableError(SERVICE_NAME, f"order book: malformed levels ({e})")

    return OrderBookSnapshot(bids=bids, asks=asks)

"""
Signal Composer

Blends indicator, order book and sentiment signals into a bounded technical
strength, a weekly trend multiplier and a composite confidence.

All constants come from SignalWeights. Pure functions, no state.
"""

import math
from typing import Optional

import numpy as np

from cryptocast.core.config import SignalWeights, settings
from cryptocast.schemas.market import OrderBookSnapshot
from cryptocast.schemas.forecast import (
    CompositeSignal,
    IndicatorSnapshot,
    SentimentData,
    SignalComponents,
)
from cryptocast.services.indicators.calculations import trend_score


def _threshold_signal(value: float, upper: float, lower: float, weight: float) -> float:
    """+weight above upper, -weight below lower, else 0."""
    if value > upper:
        return weight
    if value < lower:
        return -weight
    return 0.0


def order_book_signal(pressure_ratio: float, weights: SignalWeights) -> float:
    """Signed contribution of buy/sell pressure."""
    if pressure_ratio >= weights.order_book_strong_ratio:
        return weights.order_book_strong_signal
    if pressure_ratio >= weights.order_book_ratio:
        return weights.order_book_signal
    if pressure_ratio <= 1 / weights.order_book_strong_ratio:
        return -weights.order_book_strong_signal
    if pressure_ratio <= 1 / weights.order_book_ratio:
        return -weights.order_book_signal
    return 0.0


def score_components(
    snapshot: IndicatorSnapshot,
    current_price: float,
    order_book: Optional[OrderBookSnapshot],
    sentiment: Optional[SentimentData],
    weights: SignalWeights,
) -> SignalComponents:
    """Signed contribution of each signal."""
    bands = snapshot.bollinger_bands

    return SignalComponents(
        moving_average=trend_score(
            snapshot.ma7,
            snapshot.ma14,
            snapshot.ma30,
            snapshot.ma50,
            snapshot.ma200,
            (weights.ma_short_signal, weights.ma_medium_signal, weights.ma_long_signal),
        ),
        # Overbought leans down, oversold leans up
        rsi=-_threshold_signal(
            snapshot.rsi, weights.rsi_overbought, weights.rsi_oversold, weights.rsi_signal
        ),
        macd=float(np.sign(snapshot.macd.histogram)) * weights.macd_signal,
        bollinger=-_threshold_signal(
            current_price, bands.upper, bands.lower, weights.bollinger_signal
        ),
        volume=_threshold_signal(
            snapshot.volume_ratio,
            1 + weights.volume_dead_band,
            1 - weights.volume_dead_band,
            weights.volume_signal,
        ),
        order_book=(
            order_book_signal(order_book.pressure_ratio, weights) if order_book else 0.0
        ),
        sentiment=sentiment.score * weights.sentiment_multiplier if sentiment else 0.0,
    )


def volatility_damping(volatility: float, weights: SignalWeights) -> float:
    """max(min_damping, 1 - volatility/100), capped at 1."""
    return min(1.0, max(weights.min_volatility_damping, 1 - volatility / 100))


def composite_confidence(
    technical_strength: float,
    snapshot: IndicatorSnapshot,
    order_book: Optional[OrderBookSnapshot],
    sentiment: Optional[SentimentData],
    weights: SignalWeights,
) -> float:
    """
    Blend signal magnitudes into a confidence in [0, 1].

    Each magnitude is in [0, 1]; missing sources contribute 0. The blend is
    lifted by `confidence_floor` so neutral markets still carry the
    horizon prior.
    """
    technical = min(1.0, abs(technical_strength) / weights.max_strength)
    volume = min(1.0, abs(snapshot.volume_ratio - 1))
    sentiment_mag = min(1.0, abs(sentiment.score)) if sentiment else 0.0

    depth = 0.0
    if order_book is not None:
        ratio = order_book.pressure_ratio
        scale = math.log(weights.order_book_strong_ratio)
        if ratio > 0 and scale > 0:
            depth = min(1.0, abs(math.log(ratio)) / scale)

    blend_weights = (
        weights.technical_confidence_weight,
        weights.volume_confidence_weight,
        weights.sentiment_confidence_weight,
        weights.depth_confidence_weight,
    )
    total_weight = sum(blend_weights)
    if total_weight <= 0:
        blend = 0.0
    else:
        magnitudes = (technical, volume, sentiment_mag, depth)
        blend = sum(w * m for w, m in zip(blend_weights, magnitudes)) / total_weight

    floor = weights.confidence_floor
    return float(np.clip(floor + (1 - floor) * blend, 0.0, 1.0))


def compose_signals(
    snapshot: IndicatorSnapshot,
    current_price: float,
    order_book: Optional[OrderBookSnapshot] = None,
    sentiment: Optional[SentimentData] = None,
    weights: Optional[SignalWeights] = None,
) -> CompositeSignal:
    """
    Combine every signal into one CompositeSignal.

    trend_multiplier = 1 + technical_strength * weekly_rate_scale, clipped to
    1 +- max_weekly_move. All-neutral signals give exactly 1.0.
    """
    weights = weights or settings.signal_weights

    components = score_components(snapshot, current_price, order_book, sentiment, weights)
    strength = float(np.clip(components.total, -weights.max_strength, weights.max_strength))

    multiplier = 1 + strength * weights.weekly_rate_scale
    multiplier = float(
        np.clip(multiplier, 1 - weights.max_weekly_move, 1 + weights.max_weekly_move)
    )

    return CompositeSignal(
        components=components,
        technical_strength=strength,
        trend_multiplier=multiplier,
        composite_confidence=composite_confidence(
            strength, snapshot, order_book, sentiment, weights
        ),
        volatility_damping=volatility_damping(snapshot.volatility, weights),
    )

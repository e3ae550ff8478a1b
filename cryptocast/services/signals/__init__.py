"""
Signal Composer

CONTRACT:
    Input:  IndicatorSnapshot, current price, optional OrderBookSnapshot / SentimentData
    Output: CompositeSignal

Deterministic weighted blend; weights live in SignalWeights (core.config).
"""

from cryptocast.services.signals.composer import (
    compose_signals,
    composite_confidence,
    order_book_signal,
    score_components,
    volatility_damping,
)

__all__ = [
    "compose_signals",
    "composite_confidence",
    "order_book_signal",
    "score_components",
    "volatility_damping",
]

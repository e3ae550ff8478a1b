"""
Forecast Generator

Projects the current price forward over each horizon:

    price      = current * clamp(trend_multiplier ** (days / 7), 1/(1+cap), 1+cap)
    confidence = clamp(base * composite_confidence * volatility_damping, min, max)

Base confidences never increase with horizon length, so neither does the
reported confidence.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional

import numpy as np

from cryptocast.core.config import ForecastConfig, settings
from cryptocast.schemas.forecast import (
    CompositeSignal,
    Prediction,
    PredictionSummary,
    TrendDirection,
)
from cryptocast.services.base import ValidationError

SECONDS_PER_DAY = 86_400


@dataclass(frozen=True)
class Horizon:
    name: str
    days: float
    base_confidence: float

    @property
    def seconds(self) -> int:
        return int(round(self.days * SECONDS_PER_DAY))


# Ordered shortest -> longest
HORIZONS: tuple[Horizon, ...] = (
    Horizon("hour", 1 / 24, 0.95),
    Horizon("day", 1, 0.90),
    Horizon("week", 7, 0.85),
    Horizon("twoWeeks", 14, 0.82),
    Horizon("month", 30, 0.80),
    Horizon("threeMonths", 90, 0.75),
    Horizon("sixMonths", 180, 0.70),
)

HORIZONS_BY_NAME = {h.name: h for h in HORIZONS}


def resolve_horizons(names: Optional[Iterable[str]] = None) -> list[Horizon]:
    """Map horizon names to Horizon objects, shortest first. None means all."""
    if names is None:
        return list(HORIZONS)

    names = list(names)
    unknown = [n for n in names if n not in HORIZONS_BY_NAME]
    if unknown:
        raise ValidationError(
            "ForecastGenerator",
            f"Unknown horizons: {', '.join(unknown)}",
            {"allowed": list(HORIZONS_BY_NAME)},
        )
    if not names:
        raise ValidationError("ForecastGenerator", "At least one horizon is required")

    return sorted({HORIZONS_BY_NAME[n] for n in names}, key=lambda h: h.days)


def predict(
    current_price: float,
    signal: CompositeSignal,
    horizon: Horizon,
    now: datetime,
    config: ForecastConfig,
) -> Prediction:
    """Prediction for a single horizon."""
    cap = 1 + config.max_cumulative_move
    factor = signal.trend_multiplier ** (horizon.days / 7)
    factor = float(np.clip(factor, 1 / cap, cap))

    confidence = (
        horizon.base_confidence
        * signal.composite_confidence
        * signal.volatility_damping
    )
    confidence = float(np.clip(confidence, config.min_confidence, config.max_confidence))

    return Prediction(
        horizon_seconds=horizon.seconds,
        time=int(now.timestamp()) + horizon.seconds,
        price=current_price * factor,
        confidence=confidence,
    )


def generate_predictions(
    current_price: float,
    signal: CompositeSignal,
    horizons: Optional[Iterable[str]] = None,
    now: Optional[datetime] = None,
    config: Optional[ForecastConfig] = None,
) -> dict[str, Prediction]:
    """Predictions keyed by horizon name, shortest horizon first."""
    config = config or settings.forecast
    now = now or datetime.now(timezone.utc)

    return {
        horizon.name: predict(current_price, signal, horizon, now, config)
        for horizon in resolve_horizons(horizons)
    }


def summarize(
    predictions: dict[str, Prediction],
    signal: CompositeSignal,
    config: Optional[ForecastConfig] = None,
) -> Optional[PredictionSummary]:
    """Headline prediction: the summary horizon, else the longest one requested."""
    if not predictions:
        return None

    config = config or settings.forecast
    key = config.summary_horizon if config.summary_horizon in predictions else list(predictions)[-1]
    chosen = predictions[key]

    return PredictionSummary(
        price=chosen.price,
        trend=TrendDirection.UP if signal.trend_multiplier > 1 else TrendDirection.DOWN,
        confidence=chosen.confidence,
    )

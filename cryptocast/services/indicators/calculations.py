"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
All math is deterministic and stateless.

Every function tolerates short or empty input: upstream history can be
legitimately short for newly listed coins, so a best-effort number is
returned instead of raising. Windows longer than the series are averaged
over whatever values exist.
"""

import math
from typing import Sequence, Union

import numpy as np

ArrayLike = Union[np.ndarray, Sequence[float]]

TRADING_DAYS_PER_YEAR = 365  # crypto trades every day


def _as_array(values: ArrayLike) -> np.ndarray:
    """Coerce input to a flat float array."""
    return np.asarray(values, dtype=float).ravel()


def _finite(value: float, fallback: float = 0.0) -> float:
    """Replace NaN/inf with a fallback."""
    value = float(value)
    return value if math.isfinite(value) else fallback


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def moving_average(prices: ArrayLike, period: int) -> float:
    """Arithmetic mean of the last `period` values."""
    data = _as_array(prices)
    if len(data) == 0 or period <= 0:
        return 0.0
    return _finite(np.mean(data[-period:]))


def ema_series(prices: ArrayLike, period: int) -> np.ndarray:
    """Running EMA seeded with the first price."""
    data = _as_array(prices)
    result = np.zeros(len(data))
    if len(data) == 0:
        return result

    multiplier = 2 / (period + 1)
    result[0] = data[0]
    for i in range(1, len(data)):
        result[i] = (data[i] - result[i - 1]) * multiplier + result[i - 1]
    return result


def ema(prices: ArrayLike, period: int) -> float:
    """Exponential Moving Average (last value)."""
    series = ema_series(prices, period)
    if len(series) == 0:
        return 0.0
    return _finite(series[-1])


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(prices: ArrayLike, period: int = 14) -> float:
    """
    Relative Strength Index over the trailing window.

    Uses simple averages of the last `period` gains and losses. The loss
    denominator is floored at 1 so a series with no losses stays finite.
    A series with neither gains nor losses is neutral (50).
    """
    data = _as_array(prices)
    if len(data) < 2 or period <= 0:
        return 50.0

    deltas = np.diff(data)[-period:]
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    avg_gain = np.sum(gains) / period
    avg_loss = np.sum(losses) / period

    if avg_gain == 0 and avg_loss == 0:
        return 50.0

    rs = avg_gain / (avg_loss if avg_loss > 0 else 1.0)
    value = 100 - (100 / (1 + rs))
    return float(np.clip(_finite(value, 50.0), 0.0, 100.0))


def macd(
    prices: ArrayLike,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[float, float, float]:
    """
    MACD (Moving Average Convergence Divergence).

    Returns: (macd_value, signal_line, histogram)
    """
    data = _as_array(prices)
    if len(data) == 0:
        return 0.0, 0.0, 0.0

    macd_line = ema_series(data, fast_period) - ema_series(data, slow_period)
    signal_line = ema_series(macd_line, signal_period)

    value = _finite(macd_line[-1])
    signal = _finite(signal_line[-1])
    return value, signal, value - signal


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def bollinger_bands(
    prices: ArrayLike, period: int = 20, std_dev_multiplier: float = 2.0
) -> tuple[float, float, float]:
    """
    Bollinger Bands over the trailing window.

    Returns: (upper, middle, lower)
    """
    data = _as_array(prices)
    if len(data) == 0 or period <= 0:
        return 0.0, 0.0, 0.0

    window = data[-period:]
    middle = _finite(np.mean(window))
    std = _finite(np.std(window))

    return (
        middle + std_dev_multiplier * std,
        middle,
        middle - std_dev_multiplier * std,
    )


def volatility(prices: ArrayLike, period: int = 30) -> float:
    """
    Annualized volatility of daily log returns, in percent.

    Root mean square of the trailing log returns times sqrt(365) times 100.
    """
    data = _as_array(prices)[-period:]
    data = data[data > 0]
    if len(data) < 2:
        return 0.0

    returns = np.diff(np.log(data))
    daily = math.sqrt(np.sum(returns ** 2) / len(returns))
    return _finite(daily * math.sqrt(TRADING_DAYS_PER_YEAR) * 100)


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def volume_ratio(
    volumes: ArrayLike, short_period: int = 7, long_period: int = 30
) -> float:
    """
    Trailing short-window average over the preceding window's average.

    The preceding window is bars [-long, -short). If it is empty the whole
    series average is the baseline.
    """
    data = _as_array(volumes)
    if len(data) == 0:
        return 1.0

    recent = np.mean(data[-short_period:])
    prior = data[-long_period:-short_period] if len(data) > short_period else data[:0]
    baseline = np.mean(prior) if len(prior) else np.mean(data)

    if baseline <= 0:
        return 1.0
    return _finite(recent / baseline, 1.0)


def volume_trend(volumes: ArrayLike) -> str:
    """'increasing' when the volume ratio is above 1, else 'decreasing'."""
    return "increasing" if volume_ratio(volumes) > 1 else "decreasing"


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def price_change(prices: ArrayLike) -> float:
    """Percent change between the last two prices."""
    data = _as_array(prices)
    if len(data) < 2 or data[-2] == 0:
        return 0.0
    return _finite((data[-1] - data[-2]) / data[-2] * 100)


def trend_score(
    ma7: float,
    ma14: float,
    ma30: float,
    ma50: float,
    ma200: float,
    weights: tuple[float, float, float] = (0.15, 0.10, 0.05),
) -> float:
    """
    Moving-average trend vote.

    Short (ma7 vs ma14), medium (ma14 vs ma30) and long (ma50 vs ma200)
    comparisons each vote +weight or -weight; equal averages vote 0.
    Returns the mean vote.
    """
    pairs = ((ma7, ma14), (ma14, ma30), (ma50, ma200))
    votes = [float(np.sign(fast - slow)) * w for (fast, slow), w in zip(pairs, weights)]
    return sum(votes) / len(votes)

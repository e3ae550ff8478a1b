"""Unit tests for the technical indicator library."""

import math

import numpy as np
import pytest

from cryptocast.services.indicators.calculations import (
    bollinger_bands,
    ema,
    macd,
    moving_average,
    price_change,
    rsi,
    trend_score,
    volatility,
    volume_ratio,
    volume_trend,
)


# ---------------------------------------------------------------------------
# Moving averages
# ---------------------------------------------------------------------------


class TestMovingAverage:
    @pytest.mark.parametrize("period", [1, 7, 14, 30])
    def test_constant_series_equals_constant(self, period):
        assert moving_average([42.5] * 30, period) == pytest.approx(42.5)

    def test_uses_trailing_window(self):
        assert moving_average([1, 2, 3, 4, 10], 2) == pytest.approx(7.0)

    def test_short_series_averages_available_values(self):
        assert moving_average([2.0, 4.0], 200) == pytest.approx(3.0)

    def test_empty_series(self):
        assert moving_average([], 7) == 0.0


class TestEMA:
    def test_seeded_with_first_price(self):
        assert ema([10.0], 12) == 10.0

    def test_multiplier(self):
        # period 3 -> multiplier 0.5
        assert ema([10.0, 20.0], 3) == pytest.approx(15.0)

    def test_empty(self):
        assert ema([], 12) == 0.0


# ---------------------------------------------------------------------------
# Momentum
# ---------------------------------------------------------------------------


class TestRSI:
    def test_constant_series_is_neutral(self):
        assert rsi([100.0] * 30) == 50.0

    def test_rising_series_above_50(self):
        assert rsi(np.linspace(100, 130, 30)) > 50

    def test_falling_series_below_50(self):
        assert rsi(np.linspace(130, 100, 30)) < 50

    def test_loss_denominator_floored_at_one(self):
        # 14 gains of 2.0, no losses: RS = 2 / 1
        prices = [100.0 + 2 * i for i in range(15)]
        assert rsi(prices) == pytest.approx(100 - 100 / 3)

    def test_bounded(self):
        prices = [100.0 + 1000 * i for i in range(20)]
        assert 0 <= rsi(prices) <= 100

    @pytest.mark.parametrize("prices", [[], [100.0]])
    def test_short_input(self, prices):
        assert rsi(prices) == 50.0


class TestMACD:
    def test_value_is_ema_difference(self):
        prices = np.linspace(100, 150, 40)
        value, _, _ = macd(prices)
        assert value == pytest.approx(ema(prices, 12) - ema(prices, 26))

    def test_histogram_is_value_minus_signal(self):
        value, signal, histogram = macd(np.linspace(100, 150, 40))
        assert histogram == pytest.approx(value - signal)

    def test_constant_series_is_flat(self):
        assert macd([100.0] * 40) == (0.0, 0.0, 0.0)

    def test_empty(self):
        assert macd([]) == (0.0, 0.0, 0.0)


# ---------------------------------------------------------------------------
# Volatility
# ---------------------------------------------------------------------------


class TestBollingerBands:
    def test_constant_series_collapses(self):
        assert bollinger_bands([50.0] * 25) == (50.0, 50.0, 50.0)

    def test_envelope(self):
        prices = [1.0, 3.0] * 10
        upper, middle, lower = bollinger_bands(prices, period=20, std_dev_multiplier=2)
        assert middle == pytest.approx(2.0)
        assert upper == pytest.approx(4.0)
        assert lower == pytest.approx(0.0)

    def test_short_series(self):
        upper, middle, lower = bollinger_bands([10.0, 12.0])
        assert lower < middle < upper


class TestVolatility:
    def test_constant_series_is_zero(self):
        assert volatility([100.0] * 40) == 0.0

    def test_annualized_percent(self):
        # Alternating +/- 1% log moves
        prices = [100.0]
        for i in range(30):
            prices.append(prices[-1] * math.exp(0.01 if i % 2 == 0 else -0.01))
        expected = 0.01 * math.sqrt(365) * 100
        assert volatility(prices, 30) == pytest.approx(expected)

    def test_short_input(self):
        assert volatility([100.0]) == 0.0


# ---------------------------------------------------------------------------
# Volume
# ---------------------------------------------------------------------------


class TestVolumeRatio:
    def test_flat_volumes(self):
        assert volume_ratio([500.0] * 30) == pytest.approx(1.0)
        assert volume_trend([500.0] * 30) == "decreasing"

    def test_recent_spike(self):
        volumes = [100.0] * 23 + [300.0] * 7
        assert volume_ratio(volumes) == pytest.approx(3.0)
        assert volume_trend(volumes) == "increasing"

    def test_short_series_uses_whole_average(self):
        assert volume_ratio([100.0, 300.0]) == pytest.approx(1.0)

    def test_zero_baseline(self):
        assert volume_ratio([0.0] * 30) == 1.0

    def test_empty(self):
        assert volume_ratio([]) == 1.0


# ---------------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------------


def test_price_change_percent():
    assert price_change([100.0, 110.0]) == pytest.approx(10.0)
    assert price_change([100.0]) == 0.0


class TestTrendScore:
    def test_all_up(self):
        assert trend_score(5, 4, 3, 2, 1) == pytest.approx((0.15 + 0.10 + 0.05) / 3)

    def test_equal_averages_vote_zero(self):
        assert trend_score(1, 1, 1, 1, 1) == 0.0

    def test_all_down(self):
        assert trend_score(1, 2, 3, 4, 5) < 0

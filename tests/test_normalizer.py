"""Unit tests for the Market Data Normalizer."""

import pytest

from cryptocast.schemas.market import Granularity
from cryptocast.services.base import DataUnavailableError
from cryptocast.services.market_data.normalizer import (
    normalize_history,
    normalize_order_book,
    normalize_price,
)

from tests.conftest import make_history_payload


class TestNormalizeHistory:
    def test_chronological_arrays(self):
        series = normalize_history(
            make_history_payload([1.0, 2.0, 3.0], [10.0, 20.0, 30.0]), Granularity.DAY
        )

        assert list(series.closes) == [1.0, 2.0, 3.0]
        assert list(series.volumes) == [10.0, 20.0, 30.0]
        assert series.latest_close == 3.0
        assert series.granularity is Granularity.DAY
        assert all(a < b for a, b in zip(series.timestamps, series.timestamps[1:]))

    def test_sorts_out_of_order_bars(self):
        payload = make_history_payload([1.0, 2.0, 3.0])
        payload["Data"]["Data"].reverse()

        series = normalize_history(payload, Granularity.HOUR)

        assert list(series.closes) == [1.0, 2.0, 3.0]

    def test_duplicate_timestamps_keep_last(self):
        payload = make_history_payload([1.0, 2.0])
        duplicate = dict(payload["Data"]["Data"][1], close=5.0)
        payload["Data"]["Data"].append(duplicate)

        series = normalize_history(payload, Granularity.DAY)

        assert list(series.closes) == [1.0, 5.0]

    def test_drops_leading_zero_bars(self):
        series = normalize_history(
            make_history_payload([0.0, 0.0, 4.0, 5.0]), Granularity.DAY
        )

        assert list(series.closes) == [4.0, 5.0]

    def test_history_points(self):
        series = normalize_history(make_history_payload([7.0], start=100), Granularity.DAY)

        assert series.history_points() == [{"time": 100, "close": 7.0}]

    def test_missing_data_data(self):
        with pytest.raises(DataUnavailableError):
            normalize_history({"Response": "Success", "Data": {}}, Granularity.DAY)

    def test_missing_data(self):
        with pytest.raises(DataUnavailableError):
            normalize_history({"Response": "Success"}, Granularity.DAY)

    def test_upstream_error_response(self):
        payload = {"Response": "Error", "Message": "fsym param is invalid", "Data": {}}

        with pytest.raises(DataUnavailableError) as exc_info:
            normalize_history(payload, Granularity.DAY)

        assert exc_info.value.details["message"] == "fsym param is invalid"

    def test_malformed_bar(self):
        payload = make_history_payload([1.0])
        payload["Data"]["Data"][0]["close"] = "n/a"

        with pytest.raises(DataUnavailableError):
            normalize_history(payload, Granularity.DAY)

    def test_only_zero_bars(self):
        with pytest.raises(DataUnavailableError):
            normalize_history(make_history_payload([0.0, 0.0]), Granularity.DAY)

    def test_not_an_object(self):
        with pytest.raises(DataUnavailableError):
            normalize_history(None, Granularity.DAY)


class TestNormalizePrice:
    def test_extracts_currency(self):
        assert normalize_price({"USD": 67250.5}) == 67250.5

    def test_other_currency(self):
        assert normalize_price({"EUR": 61000}, "EUR") == 61000.0

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"USD": None},
            {"USD": "67000"},
            {"USD": 0},
            {"USD": True},
            {"Response": "Error", "Message": "There is no data for the symbol XYZ."},
            [],
        ],
    )
    def test_invalid(self, payload):
        with pytest.raises(DataUnavailableError):
            normalize_price(payload)


class TestNormalizeOrderBook:
    def test_parses_levels(self):
        book = normalize_order_book(
            {
                "lastUpdateId": 1,
                "bids": [["100.0", "3.0"], ["99.0", "1.0"]],
                "asks": [["101.0", "1.0"]],
            }
        )

        assert len(book.bids) == 2
        assert book.bid_value == pytest.approx(399.0)
        assert book.ask_value == pytest.approx(101.0)
        assert book.pressure_ratio == pytest.approx(399.0 / 101.0)

    def test_empty_side_is_neutral(self):
        book = normalize_order_book({"bids": [], "asks": [["101.0", "1.0"]]})

        assert book.pressure_ratio == 1.0

    @pytest.mark.parametrize(
        "payload",
        [{}, {"bids": []}, {"bids": [["x", "1"]], "asks": []}, {"bids": [[1.0]], "asks": []}],
    )
    def test_invalid(self, payload):
        with pytest.raises(DataUnavailableError):
            normalize_order_book(payload)

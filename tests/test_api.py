"""HTTP interface tests using FastAPI's TestClient."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from cryptocast.main import app
from cryptocast.schemas.forecast import SentimentData
from cryptocast.services.base import DataUnavailableError, UpstreamTimeoutError
from cryptocast.services.forecast import ForecastService

from tests.conftest import make_market_data

ERROR_BODY = {"error": "Failed to fetch data"}


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def market_data(rising_closes, flat_volumes):
    service = MagicMock()
    service.execute = AsyncMock(return_value=make_market_data(rising_closes, flat_volumes))
    return service


@pytest.fixture
def forecast_service(market_data, test_settings):
    service = ForecastService(market_data=market_data, config=test_settings)
    with patch(
        "cryptocast.api.v1.endpoints.forecast.get_forecast_service", return_value=service
    ), patch(
        "cryptocast.api.v1.endpoints.indicators.get_forecast_service", return_value=service
    ), patch(
        "cryptocast.api.v1.endpoints.sentiment.get_forecast_service", return_value=service
    ):
        yield service


class TestForecastEndpoint:
    def test_get_forecast(self, client, forecast_service):
        response = client.get("/api/v1/forecast/btc")

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "BTC"
        assert data["currentPrice"] == pytest.approx(130.0)
        assert len(data["predictions"]) == 7
        assert data["technicalAnalysis"]["trend"] == "up"
        assert {"ma7", "rsi", "macd", "bollingerBands", "volumeRatio"} <= set(
            data["technicalAnalysis"]
        )
        assert data["prediction"]["trend"] == "up"
        assert "lastUpdated" in data

    def test_horizon_query(self, client, forecast_service):
        response = client.get("/api/v1/forecast/ETH?horizons=day&horizons=week")

        assert response.status_code == 200
        assert list(response.json()["predictions"]) == ["day", "week"]

    def test_post_forecast(self, client, forecast_service, market_data):
        response = client.post("/api/v1/forecast", json={"symbol": "eth", "horizons": ["month"]})

        assert response.status_code == 200
        assert list(response.json()["predictions"]) == ["month"]
        market_data.execute.assert_awaited_once_with("ETH")

    def test_list_horizons(self, client):
        response = client.get("/api/v1/forecast/horizons")

        assert response.status_code == 200
        names = [h["name"] for h in response.json()]
        assert names == ["hour", "day", "week", "twoWeeks", "month", "threeMonths", "sixMonths"]


class TestErrors:
    def test_upstream_failure(self, client, forecast_service, market_data):
        market_data.execute.side_effect = DataUnavailableError("CryptoCompare", "Data.Data missing")

        response = client.get("/api/v1/forecast/BTC")

        assert response.status_code == 502
        assert response.json() == ERROR_BODY

    def test_upstream_timeout(self, client, forecast_service, market_data):
        market_data.execute.side_effect = UpstreamTimeoutError("CryptoCompare", "timed out")

        response = client.get("/api/v1/forecast/BTC")

        assert response.status_code == 504
        assert response.json() == ERROR_BODY

    def test_invalid_symbol(self, client, forecast_service, market_data):
        response = client.get("/api/v1/forecast/BTC-USD")

        assert response.status_code == 400
        assert response.json() == ERROR_BODY
        market_data.execute.assert_not_awaited()

    def test_unknown_horizon(self, client, forecast_service):
        response = client.get("/api/v1/forecast/BTC?horizons=decade")

        assert response.status_code == 400
        assert response.json() == ERROR_BODY

    def test_malformed_body(self, client, forecast_service):
        response = client.post("/api/v1/forecast", json={"symbol": "BTC", "horizons": 7})

        assert response.status_code == 400
        assert response.json() == ERROR_BODY


def test_indicators_endpoint(client, forecast_service):
    response = client.get("/api/v1/indicators/BTC")

    assert response.status_code == 200
    data = response.json()
    assert data["symbol"] == "BTC"
    assert data["technicalAnalysis"]["rsi"] > 50
    assert "predictions" not in data


def test_sentiment_endpoint(client, forecast_service):
    sentiment_service = MagicMock()
    sentiment_service.get_sentiment = AsyncMock(
        return_value=SentimentData(score=0.5, mentions=4, positive_count=3, negative_count=1)
    )

    with patch(
        "cryptocast.api.v1.endpoints.sentiment.get_sentiment_service",
        return_value=sentiment_service,
    ):
        response = client.get("/api/v1/sentiment/eth")

    assert response.status_code == 200
    assert response.json()["positiveCount"] == 3
    sentiment_service.get_sentiment.assert_awaited_once_with("ETH")


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

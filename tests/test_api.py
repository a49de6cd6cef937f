"""
Tests for the REST API.

Tests cover:
- Indicator batch and single-indicator endpoints
- 400 for unknown indicators, 500 for upstream and credential failures
- Portfolio scenario, metrics, segment and summary endpoints
"""
import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient

from app.fred_client import MissingCredentialError, UpstreamUnavailableError
from app.indicator_service import IndicatorService
from app.risk.indicators import IndicatorReading


class FakeFetcher:
    def __init__(self, values, failures=()):
        self.values = values
        self.failures = set(failures)

    def get_latest_value(self, series_id):
        if series_id in self.failures:
            raise UpstreamUnavailableError("FRED API error: 502 Bad Gateway", status_code=502)
        return IndicatorReading(series_id, self.values.get(series_id), "2024-06-01")


VALUES = {"UNRATE": 4.6, "CPIAUCSL": 2.4, "GDP": 2.8, "DFF": 4.3, "UMCSENT": 88.0}


@pytest.fixture
def client():
    from api_server import app
    return TestClient(app)


def use_fetcher(fetcher):
    return patch("api_server._get_indicator_service", return_value=IndicatorService(fetcher))


class TestHealth:
    def test_root(self, client):
        assert client.get("/").status_code == 200

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert "fredConfigured" in response.json()


class TestIndicatorEndpoints:

    def test_list_indicators(self, client):
        with use_fetcher(FakeFetcher(VALUES)):
            response = client.get("/api/indicators")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert "timestamp" in body
        assert len(body["data"]) == 5
        unrate = body["data"][0]
        assert unrate == {
            "indicator": "UNRATE",
            "name": "Unemployment Rate",
            "value": 4.6,
            "date": "2024-06-01",
            "riskLevel": "warning",
            "unit": "%",
            "impact": "Higher unemployment correlates with increased default risk",
        }

    def test_list_indicators_partial_failure(self, client):
        with use_fetcher(FakeFetcher(VALUES, failures={"GDP"})):
            response = client.get("/api/indicators")

        assert response.status_code == 200
        by_key = {item["indicator"]: item for item in response.json()["data"]}
        assert by_key["GDP"]["value"] is None
        assert by_key["GDP"]["riskLevel"] == "normal"
        assert "502" in by_key["GDP"]["error"]
        assert "error" not in by_key["UNRATE"]

    def test_list_indicators_missing_credential(self, client):
        with patch("api_server._get_indicator_service",
                   side_effect=MissingCredentialError("FRED API key is required.")):
            response = client.get("/api/indicators")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "FRED API key is required."}

    def test_single_indicator_case_insensitive(self, client):
        with use_fetcher(FakeFetcher(VALUES)):
            response = client.get("/api/indicators/umcsent")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["indicator"] == "UMCSENT"
        assert data["riskLevel"] == "normal"
        assert data["warningLevel"] == 80
        assert data["criticalLevel"] == 70

    def test_unknown_indicator_is_400(self, client):
        with use_fetcher(FakeFetcher(VALUES)):
            response = client.get("/api/indicators/payems")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid indicator ID"}

    def test_upstream_failure_is_500(self, client):
        with use_fetcher(FakeFetcher(VALUES, failures={"DFF"})):
            response = client.get("/api/indicators/dff")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert "502" in body["error"]

    def test_alert(self, client):
        with use_fetcher(FakeFetcher(dict(VALUES, DFF=7.2))):
            response = client.get("/api/alerts")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["level"] == "critical"
        assert data["critical"] == ["DFF"]
        assert data["warning"] == ["UNRATE"]


class TestIndicatorEndpointsWithoutCredential:
    """The service is built from real settings that carry no FRED key."""

    @pytest.fixture(autouse=True)
    def no_credential(self, monkeypatch):
        import api_server
        from app.config import FredSettings

        monkeypatch.setattr(api_server.settings, "fred", FredSettings(api_key=None))
        monkeypatch.setattr(api_server, "_indicator_service", None)

    def test_known_indicator_reports_missing_key(self, client):
        response = client.get("/api/indicators/unrate")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert "FRED API key is required" in body["error"]

    def test_unknown_indicator_is_still_400(self, client):
        response = client.get("/api/indicators/payems")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid indicator ID"}

    def test_batch_reports_missing_key(self, client):
        response = client.get("/api/indicators")

        assert response.status_code == 500
        assert "FRED API key is required" in response.json()["error"]


class TestIndicatorServiceSingleton:

    def test_built_once_under_concurrent_first_use(self, monkeypatch):
        from concurrent.futures import ThreadPoolExecutor

        import api_server
        from app.config import FredSettings

        monkeypatch.setattr(api_server.settings, "fred", FredSettings(api_key="key"))
        monkeypatch.setattr(api_server, "_indicator_service", None)

        with ThreadPoolExecutor(max_workers=8) as executor:
            services = list(executor.map(lambda _: api_server._get_indicator_service(), range(16)))

        assert all(service is services[0] for service in services)


class TestPortfolioEndpoints:

    def test_scenarios(self, client):
        response = client.get("/api/portfolio/scenarios")

        data = response.json()["data"]
        assert [s["id"] for s in data] == [
            "BASE", "MILD_RECESSION", "SEVERE_RECESSION", "INFLATION_SPIKE", "STAGFLATION",
        ]
        assert data[0]["impactMultiplier"] == 1.0

    def test_metrics_base(self, client):
        response = client.get("/api/portfolio/metrics")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["scenario"]["id"] == "BASE"
        assert data["metrics"]["totalLoans"] == 8
        assert data["metrics"]["totalOutstanding"] == 2010000
        assert sum(r["loanCount"] for r in data["byRegion"].values()) == 8
        assert sum(i["totalAmount"] for i in data["byIndustry"].values()) == 2010000

    def test_stress_raises_expected_loss(self, client):
        base = client.get("/api/portfolio/metrics?scenario=BASE").json()["data"]["metrics"]
        severe = client.get("/api/portfolio/metrics?scenario=severe_recession").json()["data"]["metrics"]

        assert severe["expectedLoss"] == pytest.approx(base["expectedLoss"] * 2.5, rel=1e-6)
        assert severe["portfolioPD"] > base["portfolioPD"]

    def test_unknown_scenario(self, client):
        response = client.get("/api/portfolio/metrics?scenario=ALIENS")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_segments(self, client):
        response = client.get("/api/portfolio/segments")

        body = response.json()
        assert body["success"] is True
        assert set(body["economicState"]) == {"UNRATE", "CPIAUCSL", "GDP", "DFF", "UMCSENT"}
        for segment in body["data"]:
            impact = segment["riskImpact"]
            assert impact["projectedLoss"] <= 0.25 * segment["totalValue"] + 0.01
            assert segment["riskTier"] in {"normal", "warning", "critical"}

    def test_summary(self, client):
        response = client.get("/api/portfolio/summary")

        data = response.json()["data"]
        assert data["totalLoanCount"] > 0
        assert sum(data["riskDistribution"].values()) == pytest.approx(1.0, abs=1e-5)
        assert data["totalPotentialLoss"]["critical"] > data["totalPotentialLoss"]["warning"]

"""Tests for the HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from app.server.main import app
from runtime import AppRuntime, get_runtime
from settings import AppConfig


@pytest.fixture
def client(march_service):
    rt = AppRuntime()
    rt.startup(AppConfig(), service=march_service)
    app.dependency_overrides[get_runtime] = lambda: rt
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestEndpoints:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_capabilities(self, client):
        body = client.get("/api/capabilities").json()

        assert body["domains"][0]["id"] == "payments"
        assert "sum_total" in body["contract"]

    def test_query(self, client):
        resp = client.post("/api/query", json={"calls": [
            {"capability": "sum_total", "args": {"period": "2024-03"}},
            {"capability": "products_current_month"},
        ]})

        assert resp.status_code == 200
        results = resp.json()["results"]
        assert results["payments.sum_total[0]"]["total"]["value"] == "13.00"
        assert results["payments.products_current_month[1]"]["products"] == ["X", "Y"]

    def test_query_validates_body(self, client):
        assert client.post("/api/query", json={"calls": [{"args": {}}]}).status_code == 422

    def test_single_capability(self, client):
        resp = client.get("/api/payments/sum_discount", params={"period": "2024-03"})

        assert resp.status_code == 200
        assert resp.json()["discount"]["value"] == "2.00"

    def test_single_capability_query_params_are_args(self, client):
        resp = client.get("/api/payments/items_for_user", params={"email": "bob@example.com"})

        assert [i["name"] for i in resp.json()["items"]] == ["Y"]

    def test_unknown_capability_is_404(self, client):
        assert client.get("/api/payments/forecast").status_code == 404

    def test_bad_args_is_400(self, client):
        resp = client.get("/api/payments/last_days", params={"days": "week"})

        assert resp.status_code == 400
        assert "integer" in resp.json()["detail"]


class TestRuntime:

    def test_service_before_startup(self):
        with pytest.raises(AssertionError, match="Runtime not started"):
            AppRuntime().service()

    def test_startup_wires_json_source(self, tmp_path):
        cfg = AppConfig.model_validate({
            "data": {"payments_file": str(tmp_path / "payments.json")},
            "clock": {"timezone": "Europe/Warsaw"},
        })
        rt = AppRuntime()
        rt.startup(cfg)

        service = rt.service()
        assert service.source.path == (tmp_path / "payments.json").resolve()
        assert str(service.clock.tz) == "Europe/Warsaw"
        assert service.find_payments_sorted_by_date_desc() == []

        rt.shutdown()
        assert not rt.started

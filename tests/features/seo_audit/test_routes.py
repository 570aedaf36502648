import asyncio
import time
import warnings

import pytest
from httpx import ASGITransport, AsyncClient

from app.features.seo_audit.routes import audit
from app.main import create_app
from app.platform.config import settings
from app.platform.exceptions import MarkupTooLargeError

BASE = "/api/v1/seo-audit"

PAGE = (
    '<!DOCTYPE html><html lang="en"><head><meta charset="utf-8"><title>Short</title></head>'
    "<body><h1>Hi</h1><img src=\"a.png\"></body></html>"
)


def test_analyze_returns_envelope(client):
    response = client.post(f"{BASE}/analyze", json={"markup": PAGE, "url": "https://example.com/"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["status_code"] == 200
    assert body["message"]

    data = body["data"]
    assert data["url"] == "https://example.com/"
    assert 0 <= data["overallScore"] <= 100
    assert data["grade"] in {"A+", "A", "B", "C", "D", "F"}
    assert data["gradeColor"].startswith("#")
    assert "analyzedAt" in data
    assert data["pageInfo"]["title"] == "Short"
    meta = data["categories"]["meta"]
    assert meta["maxScore"] >= meta["score"]
    assert meta["issues"][0]["id"] == "meta-2"
    assert "fixGuidance" in meta["issues"][0]


def test_analyze_defaults_to_empty_document(client):
    response = client.post(f"{BASE}/analyze", json={})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["url"] == ""
    assert data["pageInfo"]["title"] == "No title found"
    assert data["summary"]["critical"] > 0


def test_analyze_rejects_non_string_markup(client):
    response = client.post(f"{BASE}/analyze", json={"markup": {"not": "text"}})

    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "error"
    assert body["data"]["errors"]


def test_analyze_rejects_oversized_markup(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_MARKUP_BYTES", 10)

    response = client.post(f"{BASE}/analyze", json={"markup": PAGE})

    assert response.status_code == 413
    body = response.json()
    assert body["status"] == "error"
    assert "limit is 10 bytes" in body["message"]


def test_issues_are_prioritized(client):
    response = client.post(f"{BASE}/issues", json={"markup": PAGE, "url": "http://example.com/"})

    assert response.status_code == 200
    data = response.json()["data"]
    issues = data["issues"]
    assert data["severity"] is None
    assert data["totalIssues"] == len(issues)

    order = {"critical": 0, "warning": 1, "info": 2, "success": 3}
    ranks = [order[item["issue"]["severity"]] for item in issues]
    assert ranks == sorted(ranks)
    assert {"category", "categoryName", "issue"} == set(issues[0])


def test_issues_filtered_by_severity(client):
    response = client.post(f"{BASE}/issues", params={"severity": "critical"}, json={"markup": PAGE})

    data = response.json()["data"]
    assert data["severity"] == "critical"
    assert data["issues"]
    assert all(item["issue"]["severity"] == "critical" for item in data["issues"])
    assert "meta-5" in {item["issue"]["id"] for item in data["issues"]}


def test_issues_reject_unknown_severity(client):
    response = client.post(f"{BASE}/issues", params={"severity": "fatal"}, json={"markup": PAGE})

    assert response.status_code == 422
    assert response.json()["status"] == "error"


def test_markdown_report(client):
    response = client.post(f"{BASE}/report", json={"markup": PAGE, "url": "https://example.com/"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["url"] == "https://example.com/"
    assert data["report"].startswith("# SEO Audit Report")
    assert f"**{data['overallScore']}/100** (Grade {data['grade']})" in data["report"]


def test_demo_analyzes_sample_page(client):
    response = client.get(f"{BASE}/demo")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["url"] == "https://ospranto.tech"
    assert data["pageInfo"]["title"].endswith("OSPranto Tech")
    assert list(data["categories"]) == [
        "meta", "content", "headings", "images", "links",
        "technical", "mobile", "social", "security", "performance",
    ]


def test_rule_catalog(client):
    response = client.get(f"{BASE}/rules")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalRules"] == len(data["rules"])
    assert sum(data["rulesPerCategory"].values()) == data["totalRules"]
    ids = [rule["id"] for rule in data["rules"]]
    assert len(ids) == len(set(ids))
    assert ids[0] == "meta-1"
    assert data["rules"][0]["category"] == "meta"


def test_openapi_documents_envelopes(client):
    schema = client.get("/openapi.json").json()

    paths = schema["paths"]
    for path in ("analyze", "issues", "report"):
        assert "post" in paths[f"{BASE}/{path}"]
    for path in ("demo", "rules"):
        assert "get" in paths[f"{BASE}/{path}"]
    assert any(name.startswith("AnalysisResponse") for name in schema["components"]["schemas"])


def test_error_statuses_avoid_deprecated_constants(client):
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        error = MarkupTooLargeError(size=11, limit=10)
        response = client.post(f"{BASE}/analyze", json={"markup": ["not", "text"]})

    assert error.status_code == 413
    assert response.status_code == 422
    assert not [warning for warning in caught if "HTTP_4" in str(warning.message)]


@pytest.mark.asyncio
async def test_health_stays_responsive_during_analysis(monkeypatch):
    real_analyze = audit.analyze_document

    def slow_analyze(markup, url=""):
        time.sleep(1.0)
        return real_analyze(markup, url)

    monkeypatch.setattr(audit, "analyze_document", slow_analyze)
    app = create_app(rate_limits={})

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        async def timed_health():
            await asyncio.sleep(0.1)
            started = time.perf_counter()
            response = await ac.get("/health")
            return response, time.perf_counter() - started

        analysis, (health, health_seconds) = await asyncio.gather(
            ac.post(f"{BASE}/analyze", json={"markup": PAGE}),
            timed_health(),
        )

    assert analysis.status_code == 200
    assert health.status_code == 200
    assert health_seconds < 0.5

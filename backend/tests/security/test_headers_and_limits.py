# backend/tests/security/test_headers_and_limits.py

from fastapi.testclient import TestClient
from planoaula.main import app

client = TestClient(app)


def test_security_headers_present_on_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    h = r.headers
    assert "Strict-Transport-Security" in h
    assert h.get("X-Frame-Options") == "DENY"
    assert h.get("X-Content-Type-Options") == "nosniff"
    assert h.get("Referrer-Policy") == "strict-origin-when-cross-origin"
    assert "Content-Security-Policy" in h


def test_request_id_header_is_set():
    r = client.post("/api/v1/lesson-plans/validate", json={})
    assert r.headers["X-Request-ID"].startswith("req_")


def test_error_responses_also_carry_security_headers():
    r = client.get("/api/v1/lesson-plans/generate")
    assert r.status_code == 405
    assert r.headers.get("X-Frame-Options") == "DENY"


def test_unknown_route_uses_error_body():
    r = client.get("/api/v1/nao-existe")
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}


def test_cors_allows_configured_origin():
    r = client.options(
        "/api/v1/lesson-plans/generate",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_incoming_request_id_is_reused():
    r = client.get("/health", headers={"X-Request-ID": "front-42"})
    assert r.headers["X-Request-ID"] == "front-42"


def test_malformed_request_id_is_replaced():
    r = client.get("/health", headers={"X-Request-ID": "bad id with spaces"})
    assert r.headers["X-Request-ID"].startswith("req_")


def test_api_responses_are_not_cached(sample_plan_dict):
    r = client.post("/api/v1/lesson-plans/export/txt", json={"plano": sample_plan_dict})
    assert r.headers["Cache-Control"] == "no-store"

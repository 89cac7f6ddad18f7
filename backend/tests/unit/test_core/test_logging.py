from planoaula.core.logging import (
    add_request_context,
    add_severity_level,
    clear_request_context,
    filter_sensitive_data,
    generate_request_id,
    set_request_context,
)


def test_request_id_is_added_while_context_is_set():
    set_request_context("req_1234abcd")
    try:
        event = add_request_context(None, "info", {"event": "x"})
        assert event["request_id"] == "req_1234abcd"
    finally:
        clear_request_context()

    assert "request_id" not in add_request_context(None, "info", {"event": "x"})


def test_generate_request_id_format():
    request_id = generate_request_id()
    assert request_id.startswith("req_")
    assert len(request_id) == len("req_") + 8


def test_severity_follows_log_level():
    assert add_severity_level(None, "warning", {"level": "warning"})["severity"] == "WARNING"
    assert add_severity_level(None, "error", {})["severity"] == "ERROR"


def test_sensitive_fields_are_redacted():
    event = filter_sensitive_data(None, "info", {
        "event": "Initializing AI service",
        "google_api_key": "secret-value",
        "nested": {"access_token": "t", "model": "gemini"},
    })
    assert event["google_api_key"] == "[REDACTED]"
    assert event["nested"]["access_token"] == "[REDACTED]"
    assert event["nested"]["model"] == "gemini"
    assert event["event"] == "Initializing AI service"

"""Unit tests for helper functions in :mod:`ipv6request.deps`."""

from types import SimpleNamespace

from ipv6request import deps


def _request(headers=None, host="203.0.113.9"):
    client = SimpleNamespace(host=host) if host else None
    return SimpleNamespace(headers=headers or {}, client=client)


def test_get_client_ip_returns_host_when_present():
    assert deps.get_client_ip(_request()) == "203.0.113.9"


def test_get_client_ip_returns_unknown_when_client_missing():
    assert deps.get_client_ip(_request(host=None)) == "unknown"


def test_forwarded_for_first_entry_wins():
    request = _request({
        "x-forwarded-for": " 198.51.100.7 , 10.0.0.1",
        "x-real-ip": "192.0.2.55",
    })
    assert deps.get_client_ip(request) == "198.51.100.7"


def test_real_ip_used_without_forwarded_for():
    assert deps.get_client_ip(_request({"x-real-ip": " 2001:db8::5 "})) == "2001:db8::5"


def test_blank_headers_fall_back_to_peer():
    request = _request({"x-forwarded-for": " ", "x-real-ip": ""})
    assert deps.get_client_ip(request) == "203.0.113.9"


def test_get_lookup_service_reads_app_state():
    service = object()
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(lookup_service=service)))
    assert deps.get_lookup_service(request) is service

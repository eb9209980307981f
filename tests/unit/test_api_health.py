"""Tests for health check endpoints."""


def test_health_check(client):
    """Liveness never touches the authority engine."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.data == b"ok"
    assert response.content_type.startswith("text/plain")


def test_health_does_not_require_token(client, factory):
    response = client.get("/health")
    assert response.status_code == 200
    factory.client.ping.assert_not_called()


def test_readiness_check(client, factory):
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.data == b"ready"
    assert response.content_type.startswith("text/plain")
    factory.client.ping.assert_called_once_with()


def test_readiness_check_engine_down(client, factory):
    factory.client.ping.return_value = False

    response = client.get("/ready")

    assert response.status_code == 503
    assert response.data == b"authority engine unavailable"

from unittest.mock import MagicMock, Mock

import pytest
import requests

from rag_workshop.core.health import HealthVerifier
from rag_workshop.models.service import HealthStatus
from rag_workshop.services.exceptions import HealthCheckTimeoutError, HealthCheckUnhealthyError


def response(status_code=200, body=None, invalid_json=False):
    resp = Mock()
    resp.status_code = status_code
    if invalid_json:
        resp.json.side_effect = ValueError("not json")
    else:
        resp.json.return_value = body if body is not None else {}
    return resp


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def verifier(session, no_sleep):
    return HealthVerifier(session=session, sleep=no_sleep.append)


class TestHealthVerifier:
    """Tests for HTTP health classification."""

    def test_heartbeat_200_is_healthy(self, verifier, session, service_table):
        session.get.return_value = response(200, {"nanosecond heartbeat": 1712345678901234567})

        result = verifier.check(service_table["chroma"])

        assert result.status == HealthStatus.HEALTHY
        assert result.status_code == 200
        session.get.assert_called_once_with("http://localhost:8000/api/v2/heartbeat", timeout=5.0)

    def test_500_is_unhealthy(self, verifier, session, service_table):
        session.get.return_value = response(500, {"error": "boom"})

        result = verifier.check(service_table["chroma"])

        assert result.status == HealthStatus.UNHEALTHY
        assert result.status_code == 500

    def test_missing_heartbeat_field_is_unhealthy(self, verifier, session, service_table):
        session.get.return_value = response(200, {"status": "ok"})
        result = verifier.check(service_table["chroma"])
        assert result.status == HealthStatus.UNHEALTHY
        assert "nanosecond heartbeat" in result.detail

    def test_non_json_body_is_unhealthy(self, verifier, session, service_table):
        session.get.return_value = response(200, invalid_json=True)
        result = verifier.check(service_table["ollama"])
        assert result.status == HealthStatus.UNHEALTHY

    def test_no_required_field_accepts_any_2xx(self, verifier, session, tmp_path):
        from rag_workshop.core.service_table import build_service_table
        from rag_workshop.models.config import WorkshopConfig

        qdrant = build_service_table(
            WorkshopConfig.for_vector_store("qdrant", install_path=tmp_path))["qdrant"]
        session.get.return_value = response(204, invalid_json=True)

        assert verifier.check(qdrant).status == HealthStatus.HEALTHY

    def test_timeout_is_unreachable(self, verifier, session, service_table):
        session.get.side_effect = requests.Timeout("read timed out")
        result = verifier.check(service_table["n8n"])
        assert result.status == HealthStatus.UNREACHABLE
        assert "timed out" in result.detail

    def test_connection_refused_is_unreachable(self, verifier, session, service_table):
        session.get.side_effect = requests.ConnectionError("connection refused")
        result = verifier.check(service_table["n8n"])
        assert result.status == HealthStatus.UNREACHABLE

    def test_check_all_isolates_failures(self, verifier, session, service_table):
        def get(url, timeout):
            if "11434" in url:
                raise requests.ConnectionError("refused")
            if "8000" in url:
                return response(200, {"nanosecond heartbeat": 1})
            return response(200, {"status": "ok"})
        session.get.side_effect = get

        results = verifier.check_all(service_table.values())

        assert [r.status for r in results] == [
            HealthStatus.UNREACHABLE,
            HealthStatus.HEALTHY,
            HealthStatus.HEALTHY,
        ]

    def test_wait_until_healthy_polls(self, verifier, session, service_table, no_sleep):
        session.get.side_effect = [
            requests.ConnectionError("refused"),
            response(503),
            response(200, {"status": "ok"}),
        ]

        result = verifier.wait_until_healthy(service_table["n8n"])

        assert result.healthy
        assert no_sleep == [2, 2]

    def test_wait_until_healthy_gives_up_after_30_attempts(self, verifier, session, service_table, no_sleep):
        session.get.side_effect = requests.ConnectionError("refused")

        result = verifier.wait_until_healthy(service_table["n8n"])

        assert result.status == HealthStatus.UNREACHABLE
        assert session.get.call_count == 30
        assert len(no_sleep) == 29

    def test_ensure_healthy_returns_result(self, verifier, session, service_table):
        session.get.return_value = response(200, {"status": "ok"})

        assert verifier.ensure_healthy(service_table["n8n"]).healthy

    def test_ensure_healthy_unreachable_raises_timeout(self, verifier, session, service_table):
        session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(HealthCheckTimeoutError, match="n8n is unreachable"):
            verifier.ensure_healthy(service_table["n8n"], max_attempts=3)
        assert session.get.call_count == 3

    def test_ensure_healthy_bad_answer_raises_unhealthy(self, verifier, session, service_table):
        session.get.return_value = response(500)

        with pytest.raises(HealthCheckUnhealthyError, match="chroma is unhealthy: HTTP 500"):
            verifier.ensure_healthy(service_table["chroma"], max_attempts=2)

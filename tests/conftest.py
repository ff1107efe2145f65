import pytest
from click.testing import CliRunner
from unittest.mock import MagicMock, patch

from rag_workshop.core.service_table import build_service_table
from rag_workshop.models.config import WorkshopConfig
from rag_workshop.models.service import HealthResult, HealthStatus
from rag_workshop.services.exceptions import (
    ContainerNotFoundError,
    DockerServiceError,
    HealthCheckTimeoutError,
    HealthCheckUnhealthyError,
)


class FakeContainer:
    """Stands in for docker.models.containers.Container."""

    def __init__(self, name, status="running", ports=None):
        self.name = name
        self.status = status
        self.ports = ports or {}
        self.reload_count = 0

    @property
    def attrs(self):
        return {
            "State": {"Status": self.status},
            "NetworkSettings": {"Ports": self.ports},
        }

    def reload(self):
        self.reload_count += 1


class FakeDockerService:
    """In-memory DockerService keyed on container name."""

    def __init__(self):
        self.containers = {}
        self.calls = []
        self.exec_results = []
        self.fail_on = {}

    def _record(self, action, name):
        self.calls.append((action, name))
        if action in self.fail_on and name in self.fail_on[action]:
            raise DockerServiceError(f"{action} failed for {name}")

    def find_container(self, name):
        return self.containers.get(name)

    def get_container(self, name):
        if name not in self.containers:
            raise ContainerNotFoundError(f"Container '{name}' not found")
        return self.containers[name]

    def run_container(self, image, name, ports=None, volumes=None, environment=None,
                      labels=None, restart_policy=None, **kwargs):
        self._record("run", name)
        bindings = {port: [{"HostIp": "0.0.0.0", "HostPort": str(host)}]
                    for port, host in (ports or {}).items()}
        container = FakeContainer(name, "running", bindings)
        container.run_kwargs = dict(image=image, ports=ports, volumes=volumes,
                                    environment=environment, labels=labels,
                                    restart_policy=restart_policy, **kwargs)
        self.containers[name] = container
        return container

    def start_container(self, container):
        self._record("start", container.name)
        container.status = "running"

    def stop_container(self, container, timeout=10):
        self._record("stop", container.name)
        container.status = "exited"

    def restart_container(self, container, timeout=10):
        self._record("restart", container.name)
        container.status = "running"

    def remove_container(self, container, force=False):
        self._record("remove", container.name)
        self.last_remove_force = force
        del self.containers[container.name]

    def container_logs(self, container, tail="all", follow=False):
        self._record("logs", container.name)
        return f"{container.name} log line\n".encode()

    def exec_in_container(self, container, command):
        self._record("exec", container.name)
        if self.exec_results:
            return self.exec_results.pop(0)
        return 0, "success"


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def mock_docker_client():
    """Provides a mocked Docker client."""
    mock_client = MagicMock()
    mock_client.ping.return_value = True
    mock_client.containers.list.return_value = []
    return mock_client


@pytest.fixture
def fake_docker():
    """Provides an in-memory Docker service."""
    return FakeDockerService()


@pytest.fixture
def workshop_config(tmp_path):
    """Provides a workshop config rooted in a temporary directory."""
    return WorkshopConfig(install_path=tmp_path / "workshop")


@pytest.fixture
def service_table(workshop_config):
    """Provides the default service table for the temporary workshop."""
    return build_service_table(workshop_config)


@pytest.fixture
def no_sleep():
    """A list to pass as ``sleep=no_sleep.append``; records requested delays."""
    return []


@pytest.fixture
def make_container():
    """Factory for fake containers: make_container(name, status)."""
    return FakeContainer


@pytest.fixture
def install_path(tmp_path):
    return tmp_path / "workshop"


@pytest.fixture
def health_status():
    """Mutable map of service name -> HealthStatus used by the patched verifier."""
    return {}


@pytest.fixture
def workshop_env(fake_docker, health_status):
    """Patch Docker discovery and health probes for CLI commands."""
    def result(definition, **kwargs):
        status = health_status.get(definition.name, HealthStatus.HEALTHY)
        return HealthResult(service_name=definition.name, status=status)

    def ensure_healthy(definition, **kwargs):
        outcome = result(definition)
        if outcome.status == HealthStatus.UNREACHABLE:
            raise HealthCheckTimeoutError(f"{definition.name} is unreachable: no answer")
        if outcome.status != HealthStatus.HEALTHY:
            raise HealthCheckUnhealthyError(f"{definition.name} is {outcome.status.value}: bad answer")
        return outcome

    with patch('rag_workshop.cli.helpers.RuntimeChecker') as mock_checker_class, \
            patch('rag_workshop.cli.helpers.HealthVerifier') as mock_verifier_class:
        mock_checker_class.return_value.ensure_available.return_value = fake_docker
        mock_checker_class.return_value.try_connect.return_value = fake_docker
        verifier = mock_verifier_class.return_value
        verifier.check.side_effect = result
        verifier.wait_until_healthy.side_effect = result
        verifier.ensure_healthy.side_effect = ensure_healthy
        yield {
            'docker': fake_docker,
            'checker': mock_checker_class.return_value,
            'verifier': verifier,
        }

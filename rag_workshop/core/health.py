"""HTTP health verification for workshop services."""

import logging
import time
from typing import Callable, Iterable, List

import requests

from ..models.service import HealthResult, HealthStatus, ServiceDefinition
from ..services.exceptions import HealthCheckTimeoutError, HealthCheckUnhealthyError
from .constants import HEALTH_POLL_ATTEMPTS, HEALTH_POLL_INTERVAL
from .retry import poll_until

logger = logging.getLogger(__name__)


class HealthVerifier:
    """Probes each service's health endpoint with a bounded timeout."""

    def __init__(
        self,
        session: requests.Session = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.session = session or requests.Session()
        self.sleep = sleep
        self.clock = clock

    def check(self, definition: ServiceDefinition) -> HealthResult:
        """Probe one service once. Never raises for network failures."""
        probe = definition.health_check
        url = definition.health_url
        started = self.clock()

        def result(status, status_code=None, detail=""):
            return HealthResult(
                service_name=definition.name,
                status=status,
                status_code=status_code,
                detail=detail,
                elapsed=self.clock() - started,
            )

        try:
            response = self.session.get(url, timeout=probe.timeout)
        except requests.Timeout:
            return result(HealthStatus.UNREACHABLE, detail=f"timed out after {probe.timeout}s")
        except requests.RequestException as e:
            return result(HealthStatus.UNREACHABLE, detail=str(e))

        code = response.status_code
        if probe.expected_status is not None:
            status_ok = code == probe.expected_status
        else:
            status_ok = 200 <= code < 300
        if not status_ok:
            return result(HealthStatus.UNHEALTHY, code, f"HTTP {code} from {url}")

        if probe.required_field:
            try:
                body = response.json()
            except ValueError:
                return result(HealthStatus.UNHEALTHY, code, "response body is not JSON")
            if not isinstance(body, dict) or probe.required_field not in body:
                return result(
                    HealthStatus.UNHEALTHY, code, f"response missing '{probe.required_field}'"
                )

        return result(HealthStatus.HEALTHY, code)

    def check_all(self, definitions: Iterable[ServiceDefinition]) -> List[HealthResult]:
        """Probe each service in turn; one failure does not affect the others."""
        results = []
        for definition in definitions:
            outcome = self.check(definition)
            if not outcome.healthy:
                logger.warning(f"{definition.name} is {outcome.status.value}: {outcome.detail}")
            results.append(outcome)
        return results

    def wait_until_healthy(
        self,
        definition: ServiceDefinition,
        max_attempts: int = HEALTH_POLL_ATTEMPTS,
        interval: float = HEALTH_POLL_INTERVAL,
    ) -> HealthResult:
        """Poll until the service is healthy or attempts run out.

        Returns:
            The last probe result
        """
        _, outcome, attempts = poll_until(
            lambda: self.check(definition),
            lambda r: r.healthy,
            max_attempts=max_attempts,
            interval=interval,
            sleep=self.sleep,
            description=f"Waiting for {definition.name}",
        )
        logger.debug(f"{definition.name}: {outcome.status.value} after {attempts} attempt(s)")
        return outcome

    def ensure_healthy(
        self,
        definition: ServiceDefinition,
        max_attempts: int = HEALTH_POLL_ATTEMPTS,
        interval: float = HEALTH_POLL_INTERVAL,
    ) -> HealthResult:
        """Like wait_until_healthy, but raise when the service never gets healthy.

        Raises:
            HealthCheckTimeoutError: If the endpoint never answered
            HealthCheckUnhealthyError: If it answered but reported unhealthy
        """
        outcome = self.wait_until_healthy(definition, max_attempts=max_attempts, interval=interval)
        if outcome.healthy:
            return outcome
        message = f"{definition.name} is {outcome.status.value}: {outcome.detail}"
        if outcome.status == HealthStatus.UNREACHABLE:
            raise HealthCheckTimeoutError(message)
        raise HealthCheckUnhealthyError(message)

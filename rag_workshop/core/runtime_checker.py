"""Container runtime availability checks."""

import logging
import subprocess
import sys
import time
from typing import Callable, List, Optional

from ..services.docker_service import DockerService
from ..services.exceptions import DockerServiceError, RuntimeUnavailableError
from .constants import DOCKER_DESKTOP_COMMANDS, RUNTIME_POLL_ATTEMPTS, RUNTIME_POLL_INTERVAL
from .retry import poll_until

logger = logging.getLogger(__name__)


class RuntimeChecker:
    """Verifies the Docker daemon is reachable, launching it if needed."""

    def __init__(
        self,
        connect: Callable[[], DockerService] = DockerService,
        platform: str = sys.platform,
        max_attempts: int = RUNTIME_POLL_ATTEMPTS,
        interval: float = RUNTIME_POLL_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.connect = connect
        self.platform = platform
        self.max_attempts = max_attempts
        self.interval = interval
        self.sleep = sleep

    def try_connect(self) -> Optional[DockerService]:
        """Return a connected DockerService, or None if the daemon is down."""
        try:
            return self.connect()
        except DockerServiceError as e:
            logger.debug(f"Docker not reachable: {e}")
            return None

    def launch_command(self) -> Optional[List[str]]:
        for prefix, command in DOCKER_DESKTOP_COMMANDS.items():
            if self.platform.startswith(prefix):
                return command
        return None

    def launch_runtime(self) -> bool:
        """Try to start Docker Desktop or the Docker service.

        Returns:
            True if a launch command was issued
        """
        command = self.launch_command()
        if command is None:
            logger.warning(f"Don't know how to start Docker on platform '{self.platform}'")
            return False
        try:
            subprocess.Popen(command, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
            logger.info(f"Launched Docker with: {' '.join(command)}")
            return True
        except OSError as e:
            logger.warning(f"Could not launch Docker: {e}")
            return False

    def ensure_available(self) -> DockerService:
        """Return a connected DockerService, starting the daemon if necessary.

        Raises:
            RuntimeUnavailableError: If Docker is still unreachable after polling
        """
        service = self.try_connect()
        if service is not None:
            return service

        if not self.launch_runtime():
            raise RuntimeUnavailableError(
                "Docker is not running and could not be started automatically. "
                "Please start Docker Desktop or the Docker service."
            )

        ready, service, attempts = poll_until(
            self.try_connect,
            lambda s: s is not None,
            max_attempts=self.max_attempts,
            interval=self.interval,
            sleep=self.sleep,
            description="Waiting for Docker",
        )
        if not ready:
            raise RuntimeUnavailableError(
                f"Docker did not become available after {attempts} attempts"
            )
        logger.info(f"Docker became available after {attempts} attempt(s)")
        return service

"""Pulls models into the LLM runtime's cache."""

import logging
import time
from typing import Callable, Iterable, List, Optional

import requests

from ..models.service import ModelPullResult, ServiceDefinition
from ..services.docker_service import DockerService
from ..services.exceptions import DockerServiceError, ModelPullFailedError
from .constants import MODEL_PULL_ATTEMPTS, MODEL_PULL_RETRY_DELAY

logger = logging.getLogger(__name__)


class ModelFetcher:
    """Runs ``ollama pull`` inside the LLM container, retrying once."""

    def __init__(
        self,
        docker_service: DockerService,
        llm: ServiceDefinition,
        retry_delay: float = MODEL_PULL_RETRY_DELAY,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.docker = docker_service
        self.llm = llm
        self.retry_delay = retry_delay
        self.sleep = sleep or time.sleep

    def _pull_once(self, model: str) -> None:
        """Raise ModelPullFailedError unless the pull exits zero."""
        try:
            container = self.docker.get_container(self.llm.container_name)
            exit_code, output = self.docker.exec_in_container(container, ["ollama", "pull", model])
        except DockerServiceError as e:
            raise ModelPullFailedError(model, str(e)) from e
        if exit_code != 0:
            lines = output.strip().splitlines()
            reason = lines[-1] if lines else f"exit code {exit_code}"
            raise ModelPullFailedError(model, reason)

    def pull(self, model: str) -> ModelPullResult:
        """Pull one model. Failures are recorded, not raised."""
        error = None
        for attempt in range(1, MODEL_PULL_ATTEMPTS + 1):
            try:
                self._pull_once(model)
                logger.info(f"Pulled model {model}")
                return ModelPullResult(model=model, success=True, attempts=attempt)
            except ModelPullFailedError as e:
                error = e
                logger.warning(f"Pull of {model} failed (attempt {attempt}): {e.reason}")
                if attempt < MODEL_PULL_ATTEMPTS:
                    self.sleep(self.retry_delay)
        return ModelPullResult(
            model=model, success=False, attempts=MODEL_PULL_ATTEMPTS, error=str(error)
        )

    def pull_all(
        self,
        models: Iterable[str],
        on_result: Callable[[ModelPullResult], None] = None,
    ) -> List[ModelPullResult]:
        """Pull each model in order; a failed model never stops the rest."""
        results = []
        for model in models:
            result = self.pull(model)
            if on_result:
                on_result(result)
            results.append(result)
        return results

    def list_models(self, timeout: float = 10) -> List[str]:
        """Names of models already in the runtime's cache.

        Raises:
            DockerServiceError: If the runtime's API cannot be queried
        """
        url = f"http://localhost:{self.llm.host_port}/api/tags"
        try:
            response = requests.get(url, timeout=timeout)
            response.raise_for_status()
            return [m["name"] for m in response.json().get("models", [])]
        except requests.RequestException as e:
            raise DockerServiceError(f"Could not list models from {url}: {e}") from e
        except (ValueError, KeyError) as e:
            raise DockerServiceError(f"Unexpected response from {url}: {e}") from e

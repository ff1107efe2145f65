"""Client for the N8N RAG webhook."""

import logging
from typing import Any, Dict, List

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.constants import WEBHOOK_TIMEOUT
from .exceptions import WebhookError

logger = logging.getLogger(__name__)


class Source(BaseModel):
    """A document chunk the answer was grounded on."""
    document: str
    relevance_score: float = 0.0
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")


class WebhookAnswer(BaseModel):
    """Response shape of the workshop's RAG workflow."""
    question: str
    answer: str
    sources: List[Source] = Field(default_factory=list)


class WebhookClient:
    """Posts questions to the workflow engine's webhook."""

    def __init__(self, url: str, timeout: float = WEBHOOK_TIMEOUT):
        self.url = url
        self.timeout = timeout

    def ask(self, question: str) -> WebhookAnswer:
        """Send ``{"question": ...}`` and parse the answer.

        Raises:
            WebhookError: On transport errors or an unexpected response
        """
        logger.debug(f"POST {self.url}")
        try:
            response = requests.post(self.url, json={"question": question}, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            raise WebhookError(f"Webhook call failed: {e}") from e
        except ValueError as e:
            raise WebhookError(f"Webhook returned invalid JSON: {e}") from e

        # N8N "respond to webhook" nodes often wrap the item in a list
        if isinstance(body, list) and body:
            body = body[0]
        try:
            return WebhookAnswer.model_validate(body)
        except ValidationError as e:
            raise WebhookError(f"Unexpected webhook response: {e}") from e

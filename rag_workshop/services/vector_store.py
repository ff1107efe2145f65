"""HTTP client for bootstrapping the workshop's vector store collection."""

import logging
from typing import List

import requests

from ..core.constants import CHROMA_DATABASE, CHROMA_TENANT, EMBEDDING_DIMENSION
from .exceptions import WorkshopError

logger = logging.getLogger(__name__)


class VectorStoreClient:
    """Creates and lists collections on Chroma or Qdrant."""

    def __init__(self, kind: str, port: int, timeout: float = 10, session: requests.Session = None):
        if kind not in ("chroma", "qdrant"):
            raise ValueError(f"Unsupported vector store: {kind}")
        self.kind = kind
        self.base_url = f"http://localhost:{port}"
        self.timeout = timeout
        self.session = session or requests.Session()

    def _collections_url(self) -> str:
        if self.kind == "chroma":
            return (f"{self.base_url}/api/v2/tenants/{CHROMA_TENANT}"
                    f"/databases/{CHROMA_DATABASE}/collections")
        return f"{self.base_url}/collections"

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            raise WorkshopError(f"{self.kind} request {method} {url} failed: {e}") from e

    def list_collections(self) -> List[str]:
        """Names of existing collections.

        Raises:
            WorkshopError: If the vector store cannot be queried
        """
        body = self._request("GET", self._collections_url()).json()
        if self.kind == "chroma":
            return [c["name"] for c in body]
        return [c["name"] for c in body.get("result", {}).get("collections", [])]

    def ensure_collection(self, name: str, dimension: int = EMBEDDING_DIMENSION) -> bool:
        """Create the collection if it does not exist.

        Returns:
            True if the collection was created, False if it already existed
        """
        if name in self.list_collections():
            logger.info(f"Collection {name} already exists")
            return False

        if self.kind == "chroma":
            self._request(
                "POST",
                self._collections_url(),
                json={"name": name, "get_or_create": True,
                      "metadata": {"hnsw:space": "cosine"}},
            )
        else:
            self._request(
                "PUT",
                f"{self._collections_url()}/{name}",
                json={"vectors": {"size": dimension, "distance": "Cosine"}},
            )
        logger.info(f"Created collection {name}")
        return True

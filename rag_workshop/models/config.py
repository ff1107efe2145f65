"""Workshop configuration models."""

from datetime import datetime
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..core.constants import (
    DEFAULT_CHROMA_PORT,
    DEFAULT_COLLECTION_NAME,
    DEFAULT_INSTALL_PATH,
    DEFAULT_LLM_ORIGINS,
    DEFAULT_LLM_PORT,
    DEFAULT_MODELS,
    DEFAULT_QDRANT_PORT,
    DEFAULT_WORKFLOW_PORT,
    SHARED_FILES_DIR_NAME,
)


class PortsConfig(BaseModel):
    """Host ports published by the workshop services."""
    llm: int = DEFAULT_LLM_PORT
    vector_store: int = DEFAULT_CHROMA_PORT
    workflow: int = DEFAULT_WORKFLOW_PORT


class WorkshopConfig(BaseModel):
    """Configuration snapshot for a workshop install.

    Written once by ``setup`` and shown by ``config show``. Runtime behavior
    always re-queries Docker rather than trusting this record.
    """
    install_path: Path = DEFAULT_INSTALL_PATH
    ports: PortsConfig = Field(default_factory=PortsConfig)
    vector_store: Literal["chroma", "qdrant"] = "chroma"
    models: List[str] = Field(default_factory=lambda: list(DEFAULT_MODELS))
    local_drive_path: Optional[Path] = None
    webhook_url: Optional[str] = None
    llm_origins: str = DEFAULT_LLM_ORIGINS
    collection_name: str = DEFAULT_COLLECTION_NAME
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def for_vector_store(cls, vector_store: str, **kwargs) -> "WorkshopConfig":
        """Build a config whose vector store port defaults to the store's own port."""
        ports = kwargs.pop("ports", None)
        if ports is None:
            default_port = DEFAULT_QDRANT_PORT if vector_store == "qdrant" else DEFAULT_CHROMA_PORT
            ports = PortsConfig(vector_store=default_port)
        return cls(vector_store=vector_store, ports=ports, **kwargs)

    @property
    def shared_files_path(self) -> Path:
        return self.local_drive_path or self.install_path / SHARED_FILES_DIR_NAME

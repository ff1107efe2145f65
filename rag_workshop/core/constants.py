"""Constants used throughout the RAG Workshop application."""

from pathlib import Path


# Install layout
DEFAULT_INSTALL_PATH = Path.home() / "rag-workshop"
CONFIG_FILE_NAME = "workshop-config.json"
BACKUPS_DIR_NAME = "backups"
SHARED_FILES_DIR_NAME = "files"

# Container naming and labels
CONTAINER_PREFIX = "rag-workshop"
WORKSHOP_LABEL = "rag-workshop"
SERVICE_LABEL = "rag-workshop.service"
RESTART_POLICY = {"Name": "always"}

# Logical service names
LLM_SERVICE = "ollama"
WORKFLOW_SERVICE = "n8n"
VECTOR_STORE_SERVICES = ("chroma", "qdrant")

# Images
OLLAMA_IMAGE = "ollama/ollama:latest"
CHROMA_IMAGE = "chromadb/chroma:latest"
QDRANT_IMAGE = "qdrant/qdrant:latest"
N8N_IMAGE = "n8nio/n8n:latest"

# Default host ports
DEFAULT_LLM_PORT = 11434
DEFAULT_CHROMA_PORT = 8000
DEFAULT_QDRANT_PORT = 6333
DEFAULT_WORKFLOW_PORT = 5678

# Models pulled during setup
DEFAULT_MODELS = [
    "llama3.2:3b",
    "nomic-embed-text",
]
DEFAULT_COLLECTION_NAME = "workshop_documents"
DEFAULT_LLM_ORIGINS = "*"

# Runtime availability polling
RUNTIME_POLL_INTERVAL = 2  # seconds
RUNTIME_POLL_ATTEMPTS = 30

# Health checks
HEALTH_CHECK_TIMEOUT = 5.0  # seconds
HEALTH_POLL_INTERVAL = 2  # seconds
HEALTH_POLL_ATTEMPTS = 30

# Model pulls
MODEL_PULL_RETRY_DELAY = 5  # seconds
MODEL_PULL_ATTEMPTS = 2

# Logs
DEFAULT_LOG_LINES = 50

# Webhook
WEBHOOK_TIMEOUT = 120  # seconds

# Docker daemon launch commands per platform
DOCKER_DESKTOP_COMMANDS = {
    "darwin": ["open", "-a", "Docker"],
    "win32": [r"C:\Program Files\Docker\Docker\Docker Desktop.exe"],
    "linux": ["systemctl", "start", "docker"],
}

# Vector store bootstrap
EMBEDDING_DIMENSION = 768  # nomic-embed-text
CHROMA_TENANT = "default_tenant"
CHROMA_DATABASE = "default_database"

"""RAG Workshop - Run a local Retrieval-Augmented-Generation demo stack."""

__version__ = "0.1.0"

# Export main CLI for convenience
from .cli.main import cli

__all__ = ['cli']

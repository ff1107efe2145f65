"""CLI commands for RAG Workshop."""

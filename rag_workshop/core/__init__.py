"""Core functionality for RAG Workshop."""

"""HTTP API built with FastAPI."""

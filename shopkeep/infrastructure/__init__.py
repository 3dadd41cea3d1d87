"""Infrastructure adapters: database, repositories and realtime delivery."""

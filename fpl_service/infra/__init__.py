"""Infrastructure adapters: database pool and logging."""

"""FastAPI application shell."""

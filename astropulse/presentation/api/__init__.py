"""HTTP API - FastAPI routes and request schemas."""

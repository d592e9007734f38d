"""HTTP API v1 (FastAPI routers, schemas y mapeo de errores)."""

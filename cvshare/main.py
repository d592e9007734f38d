"""
Name: Backend ASGI Entrypoint (cvshare.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep this module side-effect free beyond importing cvshare.api.main

Notes:
  - uvicorn cvshare.main:app
"""

from cvshare.api.main import app

__all__ = ["app"]

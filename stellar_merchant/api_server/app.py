"""
FastAPI/ASGI application entrypoint.

Run with: uvicorn stellar_merchant.api_server.app:app --host 0.0.0.0 --port 8000
"""

from stellar_merchant.api_server.server import app

__all__ = ["app"]

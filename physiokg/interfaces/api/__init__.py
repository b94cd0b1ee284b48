"""
API Interface - FastAPI REST API.

Serves condition search and clinical reasoning records to the web client.
"""

from .main import app, create_app

__all__ = ["app", "create_app"]

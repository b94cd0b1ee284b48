"""
CLI Interface - Command-line tools for PhysioKG.

Provides commands for:
- Condition listing and search
- Clinical reasoning records
- Running the API server
"""

from .main import app, main

__all__ = ["app", "main"]

"""
Copywise API package.

Provides the FastAPI application for the Copywise description service.
"""

from .app import create_app

__all__ = ["create_app"]

"""Web interface for weekfit."""

from .app import create_app

__all__ = ["create_app"]

"""Read-only configuration API."""

from .api import create_app

__all__ = ["create_app"]

"""HTTP API for animal records."""

from shelter.api.router import router

__all__ = ["router"]

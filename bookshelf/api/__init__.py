"""API routers."""

from bookshelf.api.router import api_router

__all__ = ["api_router"]

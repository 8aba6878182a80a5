"""API layer package for FastAPI application and route composition."""

from .application import APPLICATION_NAME, create_api_application

__all__ = ["APPLICATION_NAME", "create_api_application"]

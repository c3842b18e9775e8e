"""Business logic services.

This package contains service classes that implement business logic,
validate entities and orchestrate repository calls on behalf of the
API routers.
"""

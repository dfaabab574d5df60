"""API layer: application factory, routers, request models and services."""

from travel_backend.api.app import create_api

__all__ = ["create_api"]

"""
Services Package
================

These are the "workers" that do the actual work.

- RemoteService: Forwards requests to the n8n webhook server
- load_api_description: Reads the OpenAPI document served at /api-docs
"""

from .remote_service import RemoteService, RemoteResponse, RemoteServiceError
from .api_description import ApiDescriptionError, load_api_description

__all__ = [
    "RemoteService",
    "RemoteResponse",
    "RemoteServiceError",
    "ApiDescriptionError",
    "load_api_description",
]

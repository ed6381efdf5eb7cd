"""
Routers Package
===============

Routers are like the reception desk - they direct incoming requests
to the right place.
"""

from .proxy import router as proxy_router, set_remote_service
from .docs import router as docs_router, set_api_description

__all__ = [
    "proxy_router",
    "docs_router",
    "set_remote_service",
    "set_api_description",
]

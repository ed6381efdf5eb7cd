"""
API Description Loader
======================

Loads the OpenAPI document that describes the n8n webhooks.

It is read ONE time at startup. A missing or broken document stops the
server from starting; we never serve an empty page.

Author: SeedFarm Team
"""

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class ApiDescriptionError(Exception):
    """The description document is missing or not a usable OpenAPI document."""


def load_api_description(path: Path, servers: Optional[list[dict]] = None) -> dict:
    """
    Read and check the description document.

    Args:
        path: JSON file to load
        servers: If given, replaces the document's "servers" list so the
                 Swagger "Try it out" button hits the right place

    Returns:
        The document as a dict

    Raises:
        ApiDescriptionError: File missing/unreadable, invalid JSON, or not
                             an object with "openapi"/"swagger" and "paths"
    """
    path = Path(path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ApiDescriptionError(f"Cannot read API description {path}: {e}") from e

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ApiDescriptionError(f"API description {path} is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise ApiDescriptionError(f"API description {path} must be a JSON object")
    if "openapi" not in document and "swagger" not in document:
        raise ApiDescriptionError(f"API description {path} has no 'openapi' version field")
    if not isinstance(document.get("paths"), dict) or not document["paths"]:
        raise ApiDescriptionError(f"API description {path} has no paths")

    if servers is not None:
        document["servers"] = servers

    logger.info(f"Loaded API description {path.name} ({len(document['paths'])} paths)")
    return document

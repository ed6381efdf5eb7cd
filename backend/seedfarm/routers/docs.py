"""
API Docs Router
===============

Serves the n8n webhook description as a Swagger UI page.

GET /api-docs       - Interactive Swagger UI
GET /api-docs.json  - The raw OpenAPI document
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import JSONResponse


router = APIRouter(tags=["docs"])

DOCS_TITLE = "🍅 Tomato Smart Farm API"


_api_description = None  # Loaded once at startup


def set_api_description(document: dict):
    global _api_description
    _api_description = document


def get_api_description() -> dict:
    if _api_description is None:
        raise HTTPException(status_code=500, detail="Server not fully started yet")
    return _api_description


@router.get("/api-docs", include_in_schema=False)
async def api_docs(document: dict = Depends(get_api_description)):
    """Swagger UI for the n8n webhooks."""
    title = document.get("info", {}).get("title", DOCS_TITLE)
    return get_swagger_ui_html(openapi_url="/api-docs.json", title=title)


@router.get("/api-docs.json", include_in_schema=False)
async def api_docs_json(document: dict = Depends(get_api_description)):
    return JSONResponse(content=document)

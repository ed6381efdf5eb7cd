"""
Tomato Smart Farm - API Docs & Proxy Server
===========================================
FastAPI application that documents the n8n webhook API and forwards
requests to it.

ARCHITECTURE:
    The real work (YOLO analysis, chatbot, market prices, yield prediction)
    happens in n8n workflows. This server only:
        - Shows a Swagger UI describing those webhooks
        - Forwards requests to n8n so the Swagger "Try it out" button and
          browser apps can reach it without CORS trouble

    [Browser / Swagger UI] --HTTP--> [This Server] --HTTP--> [n8n webhooks]
                                           |
                                           +-- relays status + JSON body back

HOW TO RUN:
    # Install
    pip install -e .

    # Copy environment config
    cp env.example.txt .env
    # Edit .env with your settings (N8N_BASE_URL, PORT)

    # Run the server
    seedfarm-server
    # or, with autoreload
    uvicorn seedfarm.main:app --reload --port 3000 --app-dir backend

API DOCUMENTATION:
    After starting the server, visit:
    - n8n webhooks (Swagger UI): http://localhost:3000/api-docs
    - n8n webhooks (raw JSON):   http://localhost:3000/api-docs.json
    - This server's own routes:  http://localhost:3000/docs

Author: SeedFarm Team
"""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from seedfarm import __version__
from seedfarm.config import Config
from seedfarm.routers import docs_router, proxy_router, set_api_description, set_remote_service
from seedfarm.services import RemoteService, RemoteServiceError, load_api_description


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)]
)
logger = logging.getLogger(__name__)


# =============================================================================
# ERROR HANDLING
# =============================================================================

async def remote_service_error_handler(request: Request, exc: RemoteServiceError):
    """
    n8n couldn't be reached or sent garbage.

    Returns the underlying error message plus a hint. Never retried.
    """
    logger.error(f"Proxy {request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": exc.message,
            "hint": RemoteServiceError.UNREACHABLE_HINT,
        }
    )


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(config: Config | None = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        config: Settings to use. Defaults to Config.from_env().
    """
    config = config or Config.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        STARTUP:
            1. Load the API description (fails startup if broken)
            2. Create the RemoteService for n8n
            3. Inject both into the routers

        SHUTDOWN:
            1. Close the HTTP client
        """
        # ========== STARTUP ==========
        servers = [
            {"url": "/proxy", "description": "Local proxy (this server)"},
            {"url": config.remote_base_url, "description": "n8n webhooks (direct)"},
        ]
        document = load_api_description(config.api_docs_path, servers=servers)
        set_api_description(document)

        remote_service = RemoteService(
            base_url=config.remote_base_url,
            request_timeout=config.remote_timeout,
        )
        set_remote_service(remote_service, config)

        logger.info("=" * 60)
        logger.info("🍅 TOMATO SMART FARM - API docs & proxy starting")
        logger.info(f"   n8n base URL: {config.remote_base_url}")
        logger.info(f"   Upload limit: {config.max_upload_bytes} bytes")
        logger.info(f"   Proxy allow-list: {len(config.proxy_allowed_paths)} paths")
        logger.info(f"   CORS origins: {len(config.cors_origins)} configured")
        logger.info(f"📖 Swagger UI: http://localhost:{config.port}/api-docs")
        logger.info("=" * 60)

        yield  # Application runs here

        # ========== SHUTDOWN ==========
        logger.info("🛑 Shutting down...")
        await remote_service.close()

    app = FastAPI(
        title="Tomato Smart Farm API Proxy",
        description="""
## Overview

Documentation and proxy server for the tomato smart-farm n8n webhooks.

- **/api-docs** - Swagger UI for every n8n webhook
- **/proxy/...** - Forwards requests to n8n and relays the answer unchanged

## Proxy Routes

| Route | Body | Required |
|-------|------|----------|
| `POST /proxy/capture-analyze` | multipart | `image` file (≤ 10 MB) |
| `POST /proxy/disease-diagnosis` | JSON | `image` (base64) |
| `POST /proxy/chat-message` | JSON | `message` |
| `* /proxy/{path}` | any | path must be a known webhook |
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.config = config

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RemoteServiceError, remote_service_error_handler)

    # Routers
    app.include_router(docs_router)
    app.include_router(proxy_router)

    @app.get(
        "/",
        summary="API Information",
        description="Basic server information and available endpoints."
    )
    async def root():
        return {
            "name": "Tomato Smart Farm API Proxy",
            "version": __version__,
            "remote_base_url": config.remote_base_url,
            "documentation": {
                "swagger": "/api-docs",
                "openapi": "/api-docs.json",
                "server_docs": "/docs"
            },
            "endpoints": {
                "capture_analyze": "POST /proxy/capture-analyze (multipart: image)",
                "disease_diagnosis": "POST /proxy/disease-diagnosis (JSON: image, mimeType)",
                "chat_message": "POST /proxy/chat-message (JSON: message, session_id?)",
                "forward": "GET|POST|PUT|PATCH|DELETE /proxy/{webhook-path}"
            }
        }

    @app.get(
        "/health",
        summary="Health Check",
        description="Check if the server is running."
    )
    async def health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "remote_base_url": config.remote_base_url
        }

    return app


app = create_app()


def run():
    """Console entry point: serve `app` on HOST:PORT."""
    config = app.state.config
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    run()

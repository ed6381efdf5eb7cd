"""
Server Configuration
====================

Everything the docs/proxy server reads from the environment, read ONCE at
startup. Nothing changes it afterwards.

Environment Variables:
    N8N_BASE_URL: Webhook root of the n8n server (default: production)
    PORT: Port to listen on (default: 3000)
    HOST: Interface to bind (default: 0.0.0.0)
    MAX_UPLOAD_BYTES: Largest accepted image upload (default: 10 MB)
    REMOTE_TIMEOUT: Seconds to wait for n8n before failing (default: 60)
    FRONTEND_URL: Frontend origin allowed by CORS
    PROXY_ALLOWED_PATHS: Comma-separated webhook paths the generic
                         /proxy/* route may reach (default: every known webhook)
    API_DOCS_PATH: Description document to serve (default: bundled file)

Author: SeedFarm Team
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from seedfarm.client.endpoints import DEFAULT_BASE_URL, endpoint_paths


# Bundled OpenAPI document describing the n8n webhooks
DEFAULT_API_DOCS_PATH = Path(__file__).parent / "docs" / "tomato_api.openapi.json"

# 10 MB
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Config(BaseModel):
    """
    Application configuration.

    Build it with Config.from_env() in real runs. Tests create it directly
    with the values they need.
    """
    model_config = ConfigDict(frozen=True)

    remote_base_url: str = DEFAULT_BASE_URL
    host: str = "0.0.0.0"
    port: int = 3000
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    remote_timeout: float = 60.0
    frontend_url: str = "http://localhost:5173"
    proxy_allowed_paths: list[str] = Field(default_factory=endpoint_paths)
    api_docs_path: Path = DEFAULT_API_DOCS_PATH

    @property
    def cors_origins(self) -> list[str]:
        """Allowed CORS origins. Add your production frontend to FRONTEND_URL."""
        origins = [
            self.frontend_url,
            "http://localhost:5173",    # Vite dev server
            "http://localhost:3000",    # Create React App
            "http://127.0.0.1:5173",
            "http://127.0.0.1:3000",
        ]
        return list(dict.fromkeys(origins))

    @classmethod
    def from_env(cls) -> "Config":
        """Load .env (if present) and build the config from the environment."""
        load_dotenv()

        values = {}
        if os.getenv("N8N_BASE_URL"):
            values["remote_base_url"] = os.getenv("N8N_BASE_URL").rstrip("/")
        if os.getenv("HOST"):
            values["host"] = os.getenv("HOST")
        if os.getenv("PORT"):
            values["port"] = int(os.getenv("PORT"))
        if os.getenv("MAX_UPLOAD_BYTES"):
            values["max_upload_bytes"] = int(os.getenv("MAX_UPLOAD_BYTES"))
        if os.getenv("REMOTE_TIMEOUT"):
            values["remote_timeout"] = float(os.getenv("REMOTE_TIMEOUT"))
        if os.getenv("FRONTEND_URL"):
            values["frontend_url"] = os.getenv("FRONTEND_URL")
        if os.getenv("PROXY_ALLOWED_PATHS"):
            values["proxy_allowed_paths"] = _split_csv(os.getenv("PROXY_ALLOWED_PATHS"))
        if os.getenv("API_DOCS_PATH"):
            values["api_docs_path"] = Path(os.getenv("API_DOCS_PATH"))

        return cls(**values)

"""
Shared fixtures.

The n8n server is replaced by a respx router on REMOTE_URL. The local
server is driven through FastAPI's TestClient, which runs the app lifespan
(description loading, RemoteService creation) like a real start.
"""

import pytest
import respx
from fastapi.testclient import TestClient

from seedfarm.client import endpoint_paths
from seedfarm.config import Config
from seedfarm.main import create_app

REMOTE_URL = "http://n8n.test/webhook"

# Small cap so oversize uploads are cheap to build in tests
TEST_MAX_UPLOAD_BYTES = 1024


@pytest.fixture
def config():
    return Config(
        remote_base_url=REMOTE_URL,
        max_upload_bytes=TEST_MAX_UPLOAD_BYTES,
        proxy_allowed_paths=endpoint_paths() + ["/foo"],
    )


@pytest.fixture
def remote():
    """Mock n8n server. Nothing is routed until a test adds routes."""
    with respx.mock(base_url=REMOTE_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def client(config, remote):
    app = create_app(config)
    with TestClient(app) as test_client:
        yield test_client

"""
Proxy API Router
================

Local endpoints that forward requests to the n8n webhook server, so the
Swagger page (and browsers stuck behind CORS) can reach it.

ALL ENDPOINTS:
-------------
POST /proxy/capture-analyze    - Image upload (multipart field "image") -> YOLO analysis
POST /proxy/disease-diagnosis  - Base64 image JSON -> disease diagnosis
POST /proxy/chat-message       - Chatbot message JSON -> chatbot answer
*    /proxy/{path}             - Anything else on the allow-list, forwarded as-is

HOW IT WORKS:
------------
1. Check the one field each typed route needs (400 if it's missing)
2. Forward to n8n with the RemoteService
3. Send back n8n's status code and JSON body unchanged

Missing input NEVER reaches n8n. If n8n can't be reached, main.py turns the
RemoteServiceError into a 500 with a hint.

Author: SeedFarm Team
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, Response

from seedfarm.client.endpoints import ENDPOINTS
from seedfarm.config import Config
from seedfarm.models import ChatMessageRequest, DiseaseDiagnosisRequest
from seedfarm.services import RemoteResponse
from seedfarm.utils import (
    is_blank,
    is_path_allowed,
    normalize_path,
    read_body,
    read_multipart,
    read_upload,
    sanitize_filename,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/proxy", tags=["proxy"])


# Methods that never carry a body worth forwarding
READ_METHODS = ("GET", "HEAD")


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================

_remote_service = None  # Set when the app starts
_config = None


def set_remote_service(service, config: Config):
    """Called at startup with the RemoteService and the loaded config."""
    global _remote_service, _config
    _remote_service = service
    _config = config


def get_remote_service():
    if _remote_service is None:
        raise HTTPException(status_code=500, detail="Server not fully started yet")
    return _remote_service


def get_config() -> Config:
    if _config is None:
        raise HTTPException(status_code=500, detail="Server not fully started yet")
    return _config


def relay(result: RemoteResponse) -> JSONResponse:
    """n8n's answer, status code and all."""
    return JSONResponse(status_code=result.status_code, content=result.body)


# =============================================================================
# TYPED PROXY ENDPOINTS
# =============================================================================

@router.post(
    "/capture-analyze",
    summary="Analyze Image (proxy)",
    description="""
    Upload an image and run YOLO analysis on it.

    **Body:** multipart/form-data with the image in field `image` (max 10 MB).

    The upload is kept in memory and forwarded to n8n `/capture-analyze`.
    """
)
async def proxy_capture_analyze(
    request: Request,
    service=Depends(get_remote_service),
    config: Config = Depends(get_config),
):
    form = await read_multipart(request, config.max_upload_bytes)
    upload = await read_upload(form, "image", config.max_upload_bytes)

    if upload is None or not upload.content:
        raise HTTPException(
            status_code=400,
            detail="No image uploaded. Send the file as multipart field 'image'."
        )

    upload = upload._replace(filename=sanitize_filename(upload.filename))
    logger.info(f"Forwarding image {upload.filename} ({len(upload.content)} bytes) for analysis")

    result = await service.post_file(ENDPOINTS["capture_analyze"].path, "image", upload)
    return relay(result)


@router.post(
    "/disease-diagnosis",
    summary="Diagnose Disease (proxy)",
    description="""
    Diagnose tomato diseases and pests from a base64 image.

    **Body:**
    ```json
    {"image": "<base64 without data: prefix>", "mimeType": "image/jpeg"}
    ```
    """
)
async def proxy_disease_diagnosis(
    body: Optional[DiseaseDiagnosisRequest] = None,
    service=Depends(get_remote_service),
):
    if body is None or is_blank(body.image):
        raise HTTPException(
            status_code=400,
            detail="Missing 'image': send the base64 image data (without the data: prefix)."
        )

    payload = {"image": body.image, "mimeType": body.mimeType}
    result = await service.post_json(ENDPOINTS["disease_diagnosis"].path, payload)
    return relay(result)


@router.post(
    "/chat-message",
    summary="Chat Message (proxy)",
    description="""
    Ask the farm chatbot a question.

    **Body:**
    ```json
    {"message": "토마토 흰가루병 치료법 알려줘", "session_id": "my_session_001"}
    ```
    `session_id` is optional; leave it out and n8n picks a thread id.
    """
)
async def proxy_chat_message(
    body: Optional[ChatMessageRequest] = None,
    service=Depends(get_remote_service),
):
    if body is None or is_blank(body.message):
        raise HTTPException(status_code=400, detail="Missing 'message': the chat text is required.")

    payload = {"message": body.message}
    if body.session_id:
        payload["session_id"] = body.session_id

    result = await service.post_json(ENDPOINTS["chat_message"].path, payload)
    return relay(result)


# =============================================================================
# GENERIC PROXY ENDPOINT
# =============================================================================
# Must be registered AFTER the typed routes so they win for their paths.

@router.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"],
    summary="Forward Request (proxy)",
    description="""
    Forward any request on an allowed webhook path to n8n.

    `/proxy/data-history?hours=6` -> `<N8N_BASE_URL>/data-history?hours=6`

    Method, query string and body are passed through; n8n's status code and
    JSON body come back unchanged. Paths outside the allow-list
    (`PROXY_ALLOWED_PATHS`) get a 404 and are never forwarded.
    """
)
async def proxy_forward(
    path: str,
    request: Request,
    service=Depends(get_remote_service),
    config: Config = Depends(get_config),
):
    try:
        remote_path = normalize_path(path)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not is_path_allowed(remote_path, config.proxy_allowed_paths):
        logger.warning(f"Blocked proxy request to non-allowed path {request.method} {remote_path or '/'}")
        raise HTTPException(
            status_code=404,
            detail=f"'{remote_path or '/'}' is not a known webhook path"
        )

    request_kwargs = {}
    if request.query_params:
        request_kwargs["params"] = request.query_params.multi_items()

    if request.method not in READ_METHODS:
        raw_body = await read_body(request, config.max_upload_bytes)
        if raw_body:
            request_kwargs["content"] = raw_body
            request_kwargs["headers"] = {
                "Content-Type": request.headers.get("content-type", "application/json")
            }

    result = await service.forward(request.method, remote_path, **request_kwargs)
    if request.method == "HEAD":
        return Response(status_code=result.status_code)
    return relay(result)

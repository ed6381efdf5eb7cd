"""
Tomato Smart-Farm API Client
============================

Thin async wrappers over the n8n webhook REST API.

WHAT THIS DOES:
--------------
One coroutine per remote webhook. Every call does the same three things:
    1. Build the URL (base URL + webhook path + query string)
    2. Send ONE HTTP request
    3. Return the decoded JSON body, exactly as the server sent it

There is no retry, no timeout, and no status-code check. If the server
answers 500 with a JSON error body, you get that error body back. If the
network fails or the body isn't JSON, the exception goes straight to you.

HOW TO USE:
----------
    # Module-level functions use the default (production) base URL
    from seedfarm.client import get_history_data, send_chat_message

    history = await get_history_data(hours=6)
    reply = await send_chat_message("흰가루병 치료법", "my_session_001")

    # Talk to another server by building your own client
    api = TomatoApi(base_url="http://192.168.49.200:5679/webhook")
    status = await api.get_camera_status()

    # Or point the module-level functions somewhere else
    configure("http://192.168.49.200:5679/webhook")

Author: SeedFarm Team
"""

import logging
import warnings
from typing import Any, Optional

import httpx

from seedfarm.client.endpoints import DEFAULT_BASE_URL, ENDPOINTS
from seedfarm.models import dump_body

logger = logging.getLogger(__name__)


class TomatoApi:
    """
    Client bound to one remote base URL.

    The base URL is fixed when the client is created. To use a different
    server, create a new TomatoApi (or call configure() for the module-level
    functions).

    Args:
        base_url: Webhook root, e.g. "https://n8n.seedfarm.co.kr/webhook"
        http_client: Optional shared httpx.AsyncClient. When omitted, every
                     call opens (and closes) its own client. A client you pass
                     in stays yours to close.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, http_client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.http_client = http_client

    def url_for(self, name: str) -> str:
        """Full URL of a webhook from the ENDPOINTS table."""
        return f"{self.base_url}{ENDPOINTS[name].path}"

    async def _call(self, name: str, **request_kwargs) -> Any:
        """Send one request to the named webhook and return its JSON body."""
        method = ENDPOINTS[name].method
        url = self.url_for(name)

        if self.http_client is not None:
            response = await self.http_client.request(method, url, **request_kwargs)
        else:
            # timeout=None: we never give up on the remote side ourselves
            async with httpx.AsyncClient(timeout=None) as client:
                response = await client.request(method, url, **request_kwargs)

        return response.json()

    # =========================================================================
    # DATA API
    # =========================================================================

    async def get_realtime_data(self) -> Any:
        """
        Latest tomato analysis counts.

        Returns something like {"Ready": 3, "Not_Ready": 5, "Disease_Bad": 0, "Truss": 2}
        """
        return await self._call("realtime_data")

    async def get_history_data(self, hours: float = 1) -> Any:
        """
        Analysis records from the last `hours` hours.

        GET /data-history?hours=<hours>
        """
        return await self._call("history_data", params={"hours": hours})

    async def get_daily_summary(self) -> Any:
        """Today's totals (total_ready, total_not_ready, total_disease, avg_truss)."""
        return await self._call("daily_summary")

    # =========================================================================
    # CAMERA API
    # =========================================================================

    async def capture_now(self) -> Any:
        """Take a photo right now and analyze it."""
        return await self._call("capture_now")

    async def capture_test(self) -> Any:
        """Test capture - the workflow answers with random data."""
        return await self._call("capture_test")

    async def start_monitoring(self) -> Any:
        return await self._call("start_monitoring")

    async def stop_monitoring(self) -> Any:
        return await self._call("stop_monitoring")

    async def get_camera_status(self) -> Any:
        """Returns {"monitoring": bool, "interval": int, "last_capture": str}."""
        return await self._call("camera_status")

    async def set_capture_interval(self, interval: int) -> Any:
        """
        Change the automatic capture interval.

        Args:
            interval: Seconds between captures. The workflow accepts
                      60, 300, 600, 1800 or 3600.
        """
        return await self._call("capture_interval", json={"interval": interval})

    async def set_white_balance(self, mode: str) -> Any:
        """
        Change the camera white balance.

        Args:
            mode: "auto", "fluorescent", "tungsten" or "daylight"
        """
        return await self._call("white_balance", json={"mode": mode})

    # =========================================================================
    # AI API
    # =========================================================================

    async def send_chat_message(self, message: str, session_id: Optional[str] = None) -> Any:
        """
        Ask the knowledge-base chatbot a question.

        Args:
            message: The user's question
            session_id: Thread to save the conversation under. When empty the
                        field is left out of the body and the server picks one.

        Returns:
            {"response": str, "timestamp": str, "success": bool, "threadId": str}
        """
        body = {"message": message}
        if session_id:
            body["session_id"] = session_id
        return await self._call("chat_message", json=body)

    async def analyze_image(self, image_file) -> Any:
        """
        Run YOLO analysis on an image, sent as multipart field "image".

        Args:
            image_file: bytes, a binary file object, or an httpx-style
                        (filename, content, content_type) tuple
        """
        return await self._call("capture_analyze", files={"image": image_file})

    async def diagnose_disease(self, base64_image: str, mime_type: str = "image/jpeg") -> Any:
        """
        Disease/pest diagnosis from a base64 image.

        Args:
            base64_image: Base64 text WITHOUT the data: prefix
                          (see file_to_base64)
            mime_type: Image MIME type

        Returns:
            {"success": bool, "diagnosis": str, "healthStatus": str}
        """
        body = {"image": base64_image, "mimeType": mime_type}
        return await self._call("disease_diagnosis", json=body)

    # =========================================================================
    # CHAT HISTORY API
    # =========================================================================

    async def get_chat_history_list(self, page: int = 1, limit: int = 10) -> Any:
        """
        One page of saved conversations.

        Returns:
            {
                "success": true,
                "data": [{"id": ..., "title": ..., "createdAt": ...}, ...],
                "pagination": {"currentPage": 1, "totalPages": 3, "totalCount": 25, "limit": 10}
            }
        """
        return await self._call("chat_history_list", params={"page": page, "limit": limit})

    async def get_chat_history_detail(self, thread_id: str) -> Any:
        """All messages of one thread: {"success": bool, "messages": [{"role", "content"}, ...]}."""
        return await self._call("chat_history_detail", params={"threadId": thread_id})

    async def delete_chat_history(self, thread_id: str) -> Any:
        """Delete a thread. Returns {"success", "message", "deletedThreadId"}."""
        return await self._call("chat_history_delete", params={"threadId": thread_id})

    # =========================================================================
    # MARKET API
    # =========================================================================

    async def get_market_price(self) -> Any:
        """Current KAMIS market prices."""
        return await self._call("market_price")

    async def get_price_compare(self) -> Any:
        """Wholesale vs online price comparison."""
        return await self._call("price_compare")

    async def get_price_history(self, start: str, end: str) -> Any:
        """
        Price trend between two dates.

        Args:
            start: First day, "YYYY-MM-DD"
            end: Last day, "YYYY-MM-DD"
        """
        return await self._call("price_history", params={"start": start, "end": end})

    # =========================================================================
    # PREDICTION API
    # =========================================================================

    async def predict_yield(self, params) -> Any:
        """
        Predict harvest yield from environment data.

        Args:
            params: dict or YieldPredictionParams. temperature and humidity
                    are required by the workflow; the rest is optional.

        Returns:
            {"success": bool, "predicted_yield": float, "recommendations": [...]}
        """
        return await self._call("yield_prediction", json=dump_body(params))

    # =========================================================================
    # DIARY API
    # =========================================================================

    async def get_diary_list(self, days: int = 7) -> Any:
        """Diary entries from the last `days` days."""
        return await self._call("diary_list", params={"days": days})

    async def save_diary(self, entry) -> Any:
        """Save a diary entry (dict or DiaryEntry; "date" is required)."""
        return await self._call("diary_save", json=dump_body(entry))

    # =========================================================================
    # APP API
    # =========================================================================

    async def get_home_data(self) -> Any:
        """Everything the app home screen needs (realtime, summary, alerts)."""
        return await self._call("home")

    async def app_chat(self, message: str, api_key: str = "tomato-farm-2024") -> Any:
        """Simplified chat endpoint used by the mobile app."""
        return await self._call("app_chat", json={"message": message, "api_key": api_key})

    async def app_analyze(self, file) -> Any:
        """Image analysis for the mobile app, sent as multipart field "file"."""
        return await self._call("app_analyze", files={"file": file})


# =============================================================================
# MODULE-LEVEL FUNCTIONS
# =============================================================================

_default_api = TomatoApi()


def get_default_api() -> TomatoApi:
    """The client the module-level functions currently use."""
    return _default_api


def configure(base_url: str = DEFAULT_BASE_URL, http_client: Optional[httpx.AsyncClient] = None) -> TomatoApi:
    """
    Re-initialize the module-level functions against a new base URL.

    Example:
        # Switch to the internal server
        configure("http://192.168.49.200:5679/webhook")

    Returns:
        The new default TomatoApi
    """
    global _default_api
    _default_api = TomatoApi(base_url=base_url, http_client=http_client)
    logger.info(f"Tomato API base URL set to {_default_api.base_url}")
    return _default_api


def set_base_url(url: str) -> None:
    """
    Does nothing. Kept so old callers don't crash.

    Changing the base URL in place was never supported. Use configure(url)
    or TomatoApi(base_url=url) instead.
    """
    message = (
        f"set_base_url({url!r}) has no effect. "
        "Use configure(base_url) or TomatoApi(base_url=...) instead."
    )
    logger.warning(message)
    warnings.warn(message, UserWarning, stacklevel=2)


def _bind_default(name: str):
    """Module-level wrapper that calls `name` on whatever the default client is right now."""
    async def call(*args, **kwargs):
        return await getattr(_default_api, name)(*args, **kwargs)

    call.__name__ = name
    call.__qualname__ = name
    call.__doc__ = getattr(TomatoApi, name).__doc__
    return call


# Data
get_realtime_data = _bind_default("get_realtime_data")
get_history_data = _bind_default("get_history_data")
get_daily_summary = _bind_default("get_daily_summary")

# Camera
capture_now = _bind_default("capture_now")
capture_test = _bind_default("capture_test")
start_monitoring = _bind_default("start_monitoring")
stop_monitoring = _bind_default("stop_monitoring")
get_camera_status = _bind_default("get_camera_status")
set_capture_interval = _bind_default("set_capture_interval")
set_white_balance = _bind_default("set_white_balance")

# AI
send_chat_message = _bind_default("send_chat_message")
analyze_image = _bind_default("analyze_image")
diagnose_disease = _bind_default("diagnose_disease")

# Chat history
get_chat_history_list = _bind_default("get_chat_history_list")
get_chat_history_detail = _bind_default("get_chat_history_detail")
delete_chat_history = _bind_default("delete_chat_history")

# Market
get_market_price = _bind_default("get_market_price")
get_price_compare = _bind_default("get_price_compare")
get_price_history = _bind_default("get_price_history")

# Prediction
predict_yield = _bind_default("predict_yield")

# Diary
get_diary_list = _bind_default("get_diary_list")
save_diary = _bind_default("save_diary")

# App
get_home_data = _bind_default("get_home_data")
app_chat = _bind_default("app_chat")
app_analyze = _bind_default("app_analyze")

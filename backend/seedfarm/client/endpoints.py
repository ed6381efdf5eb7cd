"""
Remote Webhook Endpoints
========================

Every webhook the n8n workflow backend exposes, in one table.

The client library builds its URLs from this table and the proxy server
builds its default forwarding allow-list from it, so a new webhook only
needs to be added here once.

Author: SeedFarm Team
"""

from typing import NamedTuple


# The production n8n webhook root
DEFAULT_BASE_URL = "https://n8n.seedfarm.co.kr/webhook"


class Endpoint(NamedTuple):
    """One remote webhook: HTTP method, path below the base URL, and a tag."""
    method: str
    path: str
    group: str


ENDPOINTS: dict[str, Endpoint] = {
    # Data
    "realtime_data": Endpoint("GET", "/data-realtime", "data"),
    "history_data": Endpoint("GET", "/data-history", "data"),
    "daily_summary": Endpoint("GET", "/data-summary", "data"),

    # Camera
    "capture_now": Endpoint("POST", "/camera-capture", "camera"),
    "capture_test": Endpoint("POST", "/capture-test", "camera"),
    "start_monitoring": Endpoint("POST", "/camera-start", "camera"),
    "stop_monitoring": Endpoint("POST", "/camera-stop", "camera"),
    "camera_status": Endpoint("GET", "/camera-status", "camera"),
    "capture_interval": Endpoint("POST", "/camera-interval", "camera"),
    "white_balance": Endpoint("POST", "/camera-white-balance", "camera"),

    # AI
    "chat_message": Endpoint("POST", "/chat-message", "ai"),
    "capture_analyze": Endpoint("POST", "/capture-analyze", "ai"),
    "disease_diagnosis": Endpoint("POST", "/disease-diagnosis", "ai"),

    # Chat history
    "chat_history_list": Endpoint("GET", "/chat-message/history", "chat-history"),
    "chat_history_detail": Endpoint("GET", "/chat-message/history/detail", "chat-history"),
    "chat_history_delete": Endpoint("DELETE", "/chat-message/history/delete", "chat-history"),

    # Market
    "market_price": Endpoint("GET", "/market-price", "market"),
    "price_compare": Endpoint("GET", "/price-compare", "market"),
    "price_history": Endpoint("GET", "/price-history", "market"),

    # Prediction
    "yield_prediction": Endpoint("POST", "/yield-prediction", "prediction"),

    # Diary (list and save share a path)
    "diary_list": Endpoint("GET", "/app/diary", "diary"),
    "diary_save": Endpoint("POST", "/app/diary", "diary"),

    # Mobile app
    "home": Endpoint("GET", "/app/home", "app"),
    "app_chat": Endpoint("POST", "/app/chat", "app"),
    "app_analyze": Endpoint("POST", "/app/analyze", "app"),
}


def endpoint_paths() -> list[str]:
    """Distinct webhook paths, in table order."""
    paths = []
    for endpoint in ENDPOINTS.values():
        if endpoint.path not in paths:
            paths.append(endpoint.path)
    return paths

"""
Client Package
==============

Async functions for every n8n webhook of the tomato farm.

    from seedfarm.client import get_realtime_data, file_to_base64, diagnose_disease

    data = await get_realtime_data()
    result = await diagnose_disease(await file_to_base64("leaf.jpg"))
"""

from .endpoints import DEFAULT_BASE_URL, ENDPOINTS, Endpoint, endpoint_paths
from .encoding import file_to_base64, strip_data_uri
from .tomato_api import (
    TomatoApi,
    configure,
    get_default_api,
    set_base_url,

    # Data
    get_realtime_data,
    get_history_data,
    get_daily_summary,

    # Camera
    capture_now,
    capture_test,
    start_monitoring,
    stop_monitoring,
    get_camera_status,
    set_capture_interval,
    set_white_balance,

    # AI
    send_chat_message,
    analyze_image,
    diagnose_disease,

    # Chat history
    get_chat_history_list,
    get_chat_history_detail,
    delete_chat_history,

    # Market
    get_market_price,
    get_price_compare,
    get_price_history,

    # Prediction
    predict_yield,

    # Diary
    get_diary_list,
    save_diary,

    # App
    get_home_data,
    app_chat,
    app_analyze,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "ENDPOINTS",
    "Endpoint",
    "endpoint_paths",
    "file_to_base64",
    "strip_data_uri",
    "TomatoApi",
    "configure",
    "get_default_api",
    "set_base_url",
    "get_realtime_data",
    "get_history_data",
    "get_daily_summary",
    "capture_now",
    "capture_test",
    "start_monitoring",
    "stop_monitoring",
    "get_camera_status",
    "set_capture_interval",
    "set_white_balance",
    "send_chat_message",
    "analyze_image",
    "diagnose_disease",
    "get_chat_history_list",
    "get_chat_history_detail",
    "delete_chat_history",
    "get_market_price",
    "get_price_compare",
    "get_price_history",
    "predict_yield",
    "get_diary_list",
    "save_diary",
    "get_home_data",
    "app_chat",
    "app_analyze",
]

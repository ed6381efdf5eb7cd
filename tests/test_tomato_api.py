"""
Tests for the async client library.

Every call must hit exactly one URL built from the webhook table, send the
documented body, and return the JSON body untouched.
"""

import json

import httpx
import pytest
import respx

from seedfarm.client import (
    DEFAULT_BASE_URL,
    TomatoApi,
    configure,
    get_default_api,
    get_realtime_data,
    send_chat_message,
    set_base_url,
)
from seedfarm.models import DiaryEntry, YieldPredictionParams

BASE_URL = "http://n8n.test/webhook"


@pytest.fixture
def remote():
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def api():
    # Trailing slash on purpose, it must not end up in the URLs
    return TomatoApi(base_url=BASE_URL + "/")


@pytest.fixture
def reset_default_api():
    yield
    configure(DEFAULT_BASE_URL)


def sent_json(route) -> dict:
    return json.loads(route.calls.last.request.content)


def sent_multipart(route) -> bytes:
    request = route.calls.last.request
    assert request.headers["content-type"].startswith("multipart/form-data")
    return request.read()


# =============================================================================
# READS
# =============================================================================

@pytest.mark.parametrize(
    "method_name, http_method, path",
    [
        ("get_realtime_data", "GET", "/data-realtime"),
        ("get_daily_summary", "GET", "/data-summary"),
        ("capture_now", "POST", "/camera-capture"),
        ("capture_test", "POST", "/capture-test"),
        ("start_monitoring", "POST", "/camera-start"),
        ("stop_monitoring", "POST", "/camera-stop"),
        ("get_camera_status", "GET", "/camera-status"),
        ("get_market_price", "GET", "/market-price"),
        ("get_price_compare", "GET", "/price-compare"),
        ("get_home_data", "GET", "/app/home"),
    ],
)
@pytest.mark.asyncio
async def test_argless_endpoints_issue_one_request(api, remote, method_name, http_method, path):
    route = remote.route(method=http_method, path=path).mock(
        return_value=httpx.Response(200, json={"success": True, "path": path})
    )

    result = await getattr(api, method_name)()

    assert result == {"success": True, "path": path}
    assert route.call_count == 1
    assert remote.calls.call_count == 1
    assert str(route.calls.last.request.url) == f"{BASE_URL}{path}"


@pytest.mark.asyncio
async def test_history_data_puts_hours_in_query(api, remote):
    route = remote.get("/data-history").mock(return_value=httpx.Response(200, json={"data": []}))

    await api.get_history_data(hours=6)

    assert str(route.calls.last.request.url) == f"{BASE_URL}/data-history?hours=6"


@pytest.mark.asyncio
async def test_history_data_defaults_to_one_hour(api, remote):
    route = remote.get("/data-history").mock(return_value=httpx.Response(200, json={"data": []}))

    await api.get_history_data()

    assert route.calls.last.request.url.params["hours"] == "1"


@pytest.mark.asyncio
async def test_chat_history_list_default_pagination(api, remote):
    page = {
        "success": True,
        "data": [{"id": "t1", "title": "흰가루병", "createdAt": "2025-12-12T09:00:00Z"}],
        "pagination": {"currentPage": 1, "totalPages": 1, "totalCount": 1, "limit": 10},
    }
    route = remote.get("/chat-message/history").mock(return_value=httpx.Response(200, json=page))

    result = await api.get_chat_history_list()

    assert result == page
    params = route.calls.last.request.url.params
    assert params["page"] == "1"
    assert params["limit"] == "10"


@pytest.mark.asyncio
async def test_chat_history_detail_encodes_thread_id(api, remote):
    route = remote.get("/chat-message/history/detail").mock(
        return_value=httpx.Response(200, json={"success": True, "messages": []})
    )

    await api.get_chat_history_detail("user 001/session&1")

    request = route.calls.last.request
    assert request.url.params["threadId"] == "user 001/session&1"
    assert "session&1" not in request.url.query.decode()


@pytest.mark.asyncio
async def test_delete_chat_history_uses_delete(api, remote):
    route = remote.delete("/chat-message/history/delete").mock(
        return_value=httpx.Response(200, json={"success": True, "deletedThreadId": "s1"})
    )

    result = await api.delete_chat_history("s1")

    assert result["deletedThreadId"] == "s1"
    assert route.calls.last.request.method == "DELETE"
    assert route.calls.last.request.url.params["threadId"] == "s1"


@pytest.mark.asyncio
async def test_price_history_dates(api, remote):
    route = remote.get("/price-history").mock(return_value=httpx.Response(200, json={"data": []}))

    await api.get_price_history("2025-12-01", "2025-12-12")

    assert str(route.calls.last.request.url) == f"{BASE_URL}/price-history?start=2025-12-01&end=2025-12-12"


@pytest.mark.asyncio
async def test_diary_list_default_days(api, remote):
    route = remote.get("/app/diary").mock(return_value=httpx.Response(200, json={"data": []}))

    await api.get_diary_list()

    assert route.calls.last.request.url.params["days"] == "7"


# =============================================================================
# WRITES
# =============================================================================

@pytest.mark.asyncio
async def test_send_chat_message_with_session(api, remote):
    route = remote.post("/chat-message").mock(
        return_value=httpx.Response(200, json={"response": "안녕하세요", "success": True, "threadId": "s1"})
    )

    result = await api.send_chat_message("hi", "s1")

    assert result["threadId"] == "s1"
    assert sent_json(route) == {"message": "hi", "session_id": "s1"}


@pytest.mark.asyncio
async def test_send_chat_message_without_session_omits_field(api, remote):
    route = remote.post("/chat-message").mock(return_value=httpx.Response(200, json={"success": True}))

    await api.send_chat_message("hi")

    body = sent_json(route)
    assert body == {"message": "hi"}
    assert "session_id" not in body


@pytest.mark.asyncio
async def test_camera_settings_bodies(api, remote):
    interval = remote.post("/camera-interval").mock(return_value=httpx.Response(200, json={"success": True}))
    white_balance = remote.post("/camera-white-balance").mock(return_value=httpx.Response(200, json={"success": True}))

    await api.set_capture_interval(300)
    await api.set_white_balance("daylight")

    assert sent_json(interval) == {"interval": 300}
    assert sent_json(white_balance) == {"mode": "daylight"}


@pytest.mark.asyncio
async def test_diagnose_disease_default_mime_type(api, remote):
    route = remote.post("/disease-diagnosis").mock(
        return_value=httpx.Response(200, json={"success": True, "healthStatus": "건강"})
    )

    await api.diagnose_disease("aGVsbG8=")

    assert sent_json(route) == {"image": "aGVsbG8=", "mimeType": "image/jpeg"}


@pytest.mark.asyncio
async def test_predict_yield_model_drops_unset_fields(api, remote):
    route = remote.post("/yield-prediction").mock(
        return_value=httpx.Response(200, json={"success": True, "predicted_yield": 5120})
    )

    params = YieldPredictionParams(temperature=25.5, humidity=70, co2=800, facility_type="비닐")
    await api.predict_yield(params)

    assert sent_json(route) == {"temperature": 25.5, "humidity": 70, "co2": 800, "facility_type": "비닐"}


@pytest.mark.asyncio
async def test_predict_yield_dict_is_sent_as_is(api, remote):
    route = remote.post("/yield-prediction").mock(return_value=httpx.Response(200, json={"success": True}))

    await api.predict_yield({"temperature": 22, "humidity": 65, "custom": "x"})

    assert sent_json(route) == {"temperature": 22, "humidity": 65, "custom": "x"}


@pytest.mark.asyncio
async def test_save_diary(api, remote):
    route = remote.post("/app/diary").mock(return_value=httpx.Response(200, json={"success": True}))

    await api.save_diary(DiaryEntry(date="2025-12-12", work_done="적엽"))

    assert sent_json(route) == {"date": "2025-12-12", "work_done": "적엽"}


@pytest.mark.asyncio
async def test_app_chat_default_api_key(api, remote):
    route = remote.post("/app/chat").mock(return_value=httpx.Response(200, json={"success": True}))

    await api.app_chat("물 언제 줘?")

    assert sent_json(route) == {"message": "물 언제 줘?", "api_key": "tomato-farm-2024"}


@pytest.mark.asyncio
async def test_analyze_image_sends_image_field(api, remote):
    route = remote.post("/capture-analyze").mock(return_value=httpx.Response(200, json={"success": True}))

    await api.analyze_image(("leaf.jpg", b"\xff\xd8fake-jpeg", "image/jpeg"))

    content = sent_multipart(route)
    assert b'name="image"' in content
    assert b"fake-jpeg" in content


@pytest.mark.asyncio
async def test_app_analyze_sends_file_field(api, remote):
    route = remote.post("/app/analyze").mock(return_value=httpx.Response(200, json={"success": True}))

    await api.app_analyze(("leaf.png", b"png-bytes", "image/png"))

    content = sent_multipart(route)
    assert b'name="file"' in content
    assert b'name="image"' not in content


# =============================================================================
# PASS-THROUGH AND ERRORS
# =============================================================================

@pytest.mark.asyncio
async def test_error_status_body_is_returned(api, remote):
    remote.get("/market-price").mock(
        return_value=httpx.Response(500, json={"success": False, "error": "KAMIS timeout"})
    )

    result = await api.get_market_price()

    assert result == {"success": False, "error": "KAMIS timeout"}


@pytest.mark.asyncio
async def test_non_json_response_raises(api, remote):
    remote.get("/camera-status").mock(return_value=httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(ValueError):
        await api.get_camera_status()


@pytest.mark.asyncio
async def test_network_error_propagates(api, remote):
    remote.get("/data-realtime").mock(side_effect=httpx.ConnectError("Connection refused"))

    with pytest.raises(httpx.ConnectError):
        await api.get_realtime_data()


@pytest.mark.asyncio
async def test_shared_http_client_is_used(remote):
    route = remote.get("/data-summary").mock(return_value=httpx.Response(200, json={"total_ready": 3}))

    async with httpx.AsyncClient() as http_client:
        api = TomatoApi(base_url=BASE_URL, http_client=http_client)
        result = await api.get_daily_summary()
        assert not http_client.is_closed

    assert result == {"total_ready": 3}
    assert route.called


# =============================================================================
# MODULE-LEVEL FUNCTIONS AND CONFIGURATION
# =============================================================================

def test_default_base_url():
    assert get_default_api().base_url == DEFAULT_BASE_URL


@pytest.mark.asyncio
async def test_configure_switches_module_functions(remote, reset_default_api):
    route = remote.get("/data-realtime").mock(return_value=httpx.Response(200, json={"Ready": 4}))

    configure(BASE_URL)
    result = await get_realtime_data()

    assert result == {"Ready": 4}
    assert route.called


@pytest.mark.asyncio
async def test_module_function_passes_arguments(remote, reset_default_api):
    route = remote.post("/chat-message").mock(return_value=httpx.Response(200, json={"success": True}))

    configure(BASE_URL)
    await send_chat_message("토마토 병해 알려줘", session_id="s2")

    assert sent_json(route) == {"message": "토마토 병해 알려줘", "session_id": "s2"}


def test_set_base_url_warns_and_changes_nothing():
    before = get_default_api()

    with pytest.warns(UserWarning, match="has no effect"):
        set_base_url("http://192.168.49.200:5679/webhook")

    assert get_default_api() is before
    assert get_default_api().base_url == DEFAULT_BASE_URL

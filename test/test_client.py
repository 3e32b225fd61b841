import asyncio

import httpx
import pytest

from colored_httpx_logger import FilterArgs
from formatutils import Capture


def test_client_logs_request_and_response(make_logger, capture: Capture, mock_transport):
    with make_logger().client(transport=mock_transport) as client:
        response = client.get("https://api.test/posts/1")

    assert response.json() == {"id": 1, "title": "hello"}
    assert capture.plain[0] == "╔╣ Request ║ GET "
    assert "╔╣ Response ║ GET ║ Status: 200 OK ║ Time: 0 ms" in capture.plain
    assert '║    { "id": 1, "title": "hello" }' in capture.plain


def test_error_status_is_logged_as_error_without_raising(
    make_logger, capture: Capture, mock_transport
):
    with make_logger().client(transport=mock_transport) as client:
        response = client.get("https://api.test/missing")

    assert response.status_code == 404
    assert "╔╣ HTTPError ║ Status: 404 Not Found ║ Time: 0 ms" in capture.plain
    assert "╔ HTTPStatusError" in capture.plain
    assert not any(line.startswith("╔╣ Response") for line in capture.plain)


def test_transport_error_is_logged_and_reraised(
    make_logger, capture: Capture, mock_transport
):
    with make_logger().client(transport=mock_transport) as client:
        with pytest.raises(httpx.ConnectError) as excinfo:
            client.get("https://api.test/refused")

    assert excinfo.value.request.url == "https://api.test/refused"
    assert "╔╣ HTTPError ║ ConnectError" in capture.plain
    assert "║  connection refused" in capture.plain


def test_install_on_existing_client(make_logger, capture: Capture, mock_transport):
    with httpx.Client(transport=mock_transport) as client:
        make_logger().install(client)
        client.get("https://api.test/posts/1")

    assert capture.plain[0] == "╔╣ Request ║ GET "


def test_filter_skips_binary_response_only(make_logger, capture: Capture, mock_transport):
    def skip_binary(request, args: FilterArgs) -> bool:
        return not args.is_response or not args.has_bytes_data

    with make_logger(filter=skip_binary).client(transport=mock_transport) as client:
        client.get("https://api.test/image")
        binary_output = list(capture.plain)
        client.get("https://api.test/posts/1")

    assert binary_output == capture.plain[: len(binary_output)]
    assert sum(line.startswith("╔╣ Request") for line in binary_output) == 1
    assert not any(line.startswith("╔╣ Response") for line in binary_output)
    assert any(line.startswith("╔╣ Response") for line in capture.plain)


def test_async_client(make_logger, capture: Capture, mock_transport):
    async def run() -> httpx.Response:
        async with make_logger().async_client(transport=mock_transport) as client:
            return await client.get("https://api.test/posts/1")

    response = asyncio.run(run())

    assert response.status_code == 200
    assert "╔╣ Response ║ GET ║ Status: 200 OK ║ Time: 0 ms" in capture.plain


def test_async_transport_error(make_logger, capture: Capture, mock_transport):
    async def run() -> None:
        async with make_logger().async_client(transport=mock_transport) as client:
            await client.get("https://api.test/refused")

    with pytest.raises(httpx.ConnectError):
        asyncio.run(run())

    assert "╔╣ HTTPError ║ ConnectError" in capture.plain


def streaming_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        headers={"content-type": "application/json"},
        stream=httpx.ByteStream(b'{"id": 1, "title": "hello"}'),
    )


def test_disabled_logger_leaves_streamed_responses_unread(make_logger, capture: Capture):
    transport = httpx.MockTransport(streaming_handler)
    with make_logger(enabled=False).client(transport=transport) as client:
        with client.stream("GET", "https://api.test/posts/1") as response:
            assert not response.is_stream_consumed
            response.read()

    assert response.json() == {"id": 1, "title": "hello"}
    assert capture.lines == []


def test_streamed_response_without_body_output_is_not_read(make_logger, capture: Capture):
    colored_logger = make_logger(show_response_body=False)
    with colored_logger.client(transport=httpx.MockTransport(streaming_handler)) as client:
        with client.stream("GET", "https://api.test/posts/1") as response:
            assert not response.is_stream_consumed

    assert "╔╣ Response ║ GET ║ Status: 200 OK ║ Time: 0 ms" in capture.plain
    assert "╔ Body" not in capture.plain

"""Unit tests for the HTTP transport."""

import httpx
import pytest

from claude_messages_sdk.config.constants import USER_AGENT
from claude_messages_sdk.errors import APIError, TransportError, UnsupportedMethodError
from claude_messages_sdk.http.transport import HTTPTransport, build_headers
from tests.helpers.sse_streams import MockAPI, RecordingByteStream, json_response, stream_response


def make_transport(settings, handler):
    return HTTPTransport(settings, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestBuildHeaders:
    """Test request header construction."""

    def test_required_headers(self):
        headers = build_headers("sk-key", "2023-06-01")

        assert headers == {
            "x-api-key": "sk-key",
            "anthropic-version": "2023-06-01",
            "content-type": "application/json",
            "user-agent": USER_AGENT,
        }

    def test_extra_headers_override(self):
        headers = build_headers("sk-key", "2023-06-01", {"anthropic-beta": "tools-2024", "user-agent": "custom/1.0"})

        assert headers["anthropic-beta"] == "tools-2024"
        assert headers["user-agent"] == "custom/1.0"


class TestHTTPTransport:
    """Test request sending and failure mapping."""

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self, settings):
        api = MockAPI(json_response({"ok": True}))
        transport = make_transport(settings, api)

        response = await transport.request("POST", "/v1/messages", {"model": "m"})

        assert response.json() == {"ok": True}
        assert api.last_json() == {"model": "m"}
        assert api.last_request.headers["x-api-key"] == "test-key"

    @pytest.mark.asyncio
    async def test_get_sends_no_body(self, settings):
        api = MockAPI(json_response({"data": []}))
        transport = make_transport(settings, api)

        await transport.request("GET", "/v1/models", {"ignored": True})

        assert api.last_request.method == "GET"
        assert api.last_request.content == b""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["PUT", "DELETE", "PATCH", "post"])
    async def test_unsupported_method(self, settings, method):
        api = MockAPI(json_response({}))
        transport = make_transport(settings, api)

        with pytest.raises(UnsupportedMethodError):
            await transport.request(method, "/v1/messages")
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_error_status_raises_api_error(self, settings):
        api = MockAPI(json_response(
            {"type": "error", "error": {"type": "not_found_error", "message": "no such model"}},
            status_code=404,
        ))
        transport = make_transport(settings, api)

        with pytest.raises(APIError) as exc_info:
            await transport.request("POST", "/v1/messages", {})

        assert exc_info.value.status_code == 404
        assert exc_info.value.error_type == "not_found_error"

    @pytest.mark.asyncio
    async def test_connection_error_maps_to_transport_error(self, settings):
        def fail(request):
            raise httpx.ConnectError("dns failure", request=request)

        transport = make_transport(settings, fail)

        with pytest.raises(TransportError) as exc_info:
            await transport.request("POST", "/v1/messages", {})
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_stream_closes_response_on_exit(self, settings):
        body = RecordingByteStream([b"data: 1\n", b"data: 2\n"])
        transport = make_transport(settings, MockAPI(stream_response(body)))

        async with transport.stream("POST", "/v1/messages", {}) as response:
            chunks = [chunk async for chunk in transport.aiter_bytes(response)]

        assert b"".join(chunks) == b"data: 1\ndata: 2\n"
        assert body.close_count == 1

    @pytest.mark.asyncio
    async def test_stream_closes_response_on_consumer_error(self, settings):
        body = RecordingByteStream([b"data: 1\n", b"data: 2\n"])
        transport = make_transport(settings, MockAPI(stream_response(body)))

        with pytest.raises(LookupError):
            async with transport.stream("POST", "/v1/messages", {}):
                raise LookupError("stop")

        assert body.close_count == 1
        assert body.chunks_sent == 0

    @pytest.mark.asyncio
    async def test_stream_error_status_reads_body(self, settings):
        error_stream = RecordingByteStream([b'{"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}'])
        transport = make_transport(settings, MockAPI(stream_response(error_stream, status_code=529)))

        with pytest.raises(APIError) as exc_info:
            async with transport.stream("POST", "/v1/messages", {}):
                pytest.fail("error responses are not yielded")

        assert exc_info.value.error_type == "overloaded_error"
        assert error_stream.close_count == 1

    @pytest.mark.asyncio
    async def test_read_failure_maps_to_transport_error(self, settings):
        body = RecordingByteStream([b"data: 1\n"], error=httpx.RemoteProtocolError("incomplete chunked read"))
        transport = make_transport(settings, MockAPI(stream_response(body)))

        with pytest.raises(TransportError, match="incomplete chunked read"):
            async with transport.stream("POST", "/v1/messages", {}) as response:
                async for _ in transport.aiter_bytes(response):
                    pass

        assert body.close_count == 1

    @pytest.mark.asyncio
    async def test_aclose_only_closes_owned_client(self, settings):
        http_client = httpx.AsyncClient()
        borrowed = HTTPTransport(settings, client=http_client)
        owned = HTTPTransport(settings)

        await borrowed.aclose()
        await owned.aclose()

        assert not http_client.is_closed
        assert owned._client.is_closed
        await http_client.aclose()

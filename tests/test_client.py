"""
tests/test_client.py

Unit tests for the async task client.

Verifies:
✔ Runs move idle -> in_flight -> completed
✔ Successful responses populate result; error responses populate error/debug
✔ Transport failures end in completed-with-error instead of raising
✔ A second run cannot start while one is in flight
✔ Starting a new run clears the previous result
✔ prepare_image normalizes a local file with the task preset
"""

import httpx
import pytest

from studio_companion.client import RunState, TaskClient, prepare_image
from studio_companion.errors import InvalidInput


def _client(handler) -> TaskClient:
    return TaskClient(base_url="http://testserver", transport=httpx.MockTransport(handler))


class TestTaskClient:
    @pytest.mark.asyncio
    async def test_success_transitions(self, valid_results):
        seen_states = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen_states.append(client.current("critique").state)
            assert request.url.path == "/api/critique"
            return httpx.Response(200, json=valid_results["critique"])

        client = _client(handler)
        assert client.current("critique").state is RunState.IDLE

        run = await client.run("critique", {"imageDataUrl": "data:image/jpeg;base64,AAAA"})

        assert seen_states == [RunState.IN_FLIGHT]
        assert run.state is RunState.COMPLETED
        assert run.ok
        assert run.result == valid_results["critique"]
        assert run.status_code == 200

    @pytest.mark.asyncio
    async def test_format_error_surfaces_message_and_debug(self):
        def handler(request):
            return httpx.Response(502, json={"error": "Unexpected format from model.", "debug": "prose"})

        run = await _client(handler).run("series", {"imageDataUrl": "data:image/jpeg;base64,AAAA"})

        assert run.state is RunState.COMPLETED
        assert not run.ok
        assert run.error == "Unexpected format from model."
        assert run.debug == "prose"
        assert run.result is None

    @pytest.mark.asyncio
    async def test_non_json_error_body(self):
        def handler(request):
            return httpx.Response(503, text="Service Unavailable")

        run = await _client(handler).run("who", {"description": "x"})

        assert run.error == "HTTP 503: Service Unavailable"

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        run = await _client(handler).run("title", {})

        assert run.state is RunState.COMPLETED
        assert run.error.startswith("Request failed")
        assert run.status_code is None

    @pytest.mark.asyncio
    async def test_in_flight_guard(self):
        client = _client(lambda request: httpx.Response(200, json={}))
        client.current("who").state = RunState.IN_FLIGHT

        with pytest.raises(RuntimeError):
            await client.run("who", {})

    @pytest.mark.asyncio
    async def test_new_run_clears_previous_result(self, valid_results):
        responses = [
            httpx.Response(200, json=valid_results["critique"]),
            httpx.Response(400, json={"error": "Missing or invalid image"}),
        ]
        client = _client(lambda request: responses.pop(0))

        first = await client.run("critique", {"imageDataUrl": "data:image/jpeg;base64,AAAA"})
        assert first.result is not None

        second = await client.run("critique", {})
        assert second is first
        assert second.result is None
        assert second.error == "Missing or invalid image"

    @pytest.mark.asyncio
    async def test_unknown_task_rejected(self):
        with pytest.raises(ValueError):
            await _client(lambda request: httpx.Response(200, json={})).run("portrait", {})


class TestPrepareImage:
    def test_uses_task_preset(self, tmp_path, png_bytes):
        path = tmp_path / "landscape.png"
        path.write_bytes(png_bytes(3600, 1800))

        normalized = prepare_image(path, "abstractify")

        assert (normalized.width, normalized.height) == (1800, 900)
        assert normalized.byte_length <= int(2.5 * 1024 * 1024)

    def test_default_preset_for_text_task(self, tmp_path, png_bytes):
        path = tmp_path / "p.png"
        path.write_bytes(png_bytes(2400, 2400))

        assert prepare_image(path, "statement").width == 1200

    def test_unknown_extension_rejected(self, tmp_path):
        path = tmp_path / "notes.unknownext"
        path.write_bytes(b"hello")

        with pytest.raises(InvalidInput):
            prepare_image(path, "critique")

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidInput, match="Failed to read image"):
            prepare_image(tmp_path / "absent.png", "critique")

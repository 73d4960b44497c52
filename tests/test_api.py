"""
tests/test_api.py

Integration tests for the HTTP surface.

Verifies:
✔ 200 with the validated JSON body verbatim
✔ 400 for malformed bodies, missing inputs and oversized images, with no upstream call
✔ 502 with error + debug (<= 4000 chars) after two non-conforming responses
✔ 500 for transport failures and unexpected exceptions
✔ Every error response carries an "error" string
✔ /api/normalize returns a bounded JPEG data URI using the task preset
✔ Unknown tasks -> 404; /api/tasks and /healthz
"""

import json

import pytest
from fastapi.testclient import TestClient

from studio_companion.api.app import app, provider_factory
from studio_companion.errors import UpstreamTransportError

IMAGE = "data:image/jpeg;base64,AAAA"


@pytest.fixture
def make_client(scripted_provider):
    def _make(responses):
        provider = scripted_provider(responses)
        app.dependency_overrides[provider_factory] = lambda: (lambda: provider)
        client = TestClient(app)
        return client, provider

    yield _make
    app.dependency_overrides.clear()


class TestTaskRoutes:
    def test_success_returns_body_verbatim(self, make_client, valid_results):
        client, provider = make_client([json.dumps(valid_results["critique"])])
        r = client.post("/api/critique", json={"imageDataUrl": IMAGE})
        assert r.status_code == 200
        assert r.json() == valid_results["critique"]
        assert len(provider.calls) == 1

    def test_prose_then_valid_four_artists(self, make_client, valid_results):
        assert len(valid_results["who"]["artists"]) == 4
        client, provider = make_client(["I think your painting is lovely.", json.dumps(valid_results["who"])])
        r = client.post("/api/who", json={"imageDataUrl": IMAGE})
        assert r.status_code == 200
        assert r.json() == valid_results["who"]
        assert [strict for _, strict in provider.calls] == [False, True]

    def test_empty_image_and_description(self, make_client):
        client, provider = make_client([])
        r = client.post("/api/who", json={"imageDataUrl": "", "description": ""})
        assert r.status_code == 400
        assert r.json() == {"error": "Please provide either an image or a description"}
        assert provider.calls == []

    def test_oversized_image_rejected_without_upstream_call(self, make_client):
        client, provider = make_client([])
        huge = "data:image/jpeg;base64," + "A" * (10_500_000 - len("data:image/jpeg;base64,"))
        assert len(huge) == 10_500_000
        r = client.post("/api/title", json={"imageDataUrl": huge})
        assert r.status_code == 400
        assert r.json()["error"].startswith("Image too large")
        assert provider.calls == []

    @pytest.mark.parametrize("raw", [b"{not json", b"[1, 2]", b"", "\"just a string\"".encode()])
    def test_malformed_body(self, make_client, raw):
        client, provider = make_client([])
        r = client.post("/api/series", content=raw, headers={"Content-Type": "application/json"})
        assert r.status_code == 400
        assert r.json() == {"error": "Invalid request body"}
        assert provider.calls == []

    def test_format_failure_is_502_with_debug(self, make_client):
        client, provider = make_client(["nope", "z" * 6000])
        r = client.post("/api/abstractify", json={"imageDataUrl": IMAGE, "notes": "coast"})
        assert r.status_code == 502
        body = r.json()
        assert isinstance(body["error"], str)
        assert body["debug"] == "z" * 4000
        assert len(provider.calls) == 2

    def test_never_more_than_two_calls(self, make_client):
        client, provider = make_client(["bad"] * 10)
        r = client.post("/api/critique", json={"imageDataUrl": IMAGE})
        assert r.status_code == 502
        assert len(provider.calls) == 2

    def test_transport_error_is_500(self, make_client):
        client, provider = make_client([UpstreamTransportError("Generation service error: timeout")])
        r = client.post("/api/series", json={"imageDataUrl": IMAGE})
        assert r.status_code == 500
        assert r.json() == {"error": "Generation service error: timeout"}
        assert len(provider.calls) == 1

    def test_unexpected_exception_is_500(self, make_client):
        client, _ = make_client([RuntimeError("boom")])
        r = client.post("/api/critique", json={"imageDataUrl": IMAGE})
        assert r.status_code == 500
        assert r.json() == {"error": "boom"}

    def test_provider_construction_failure_is_500(self):
        def _missing_key():
            raise UpstreamTransportError("OPENAI_API_KEY is not set")

        app.dependency_overrides[provider_factory] = lambda: _missing_key
        try:
            r = TestClient(app).post("/api/critique", json={"imageDataUrl": IMAGE})
        finally:
            app.dependency_overrides.clear()
        assert r.status_code == 500
        assert r.json() == {"error": "OPENAI_API_KEY is not set"}

    def test_statement_flow(self, make_client, valid_results):
        client, provider = make_client([json.dumps(valid_results["statement"])])
        r = client.post(
            "/api/statement",
            json={"name": "Jo", "location": "Norfolk", "q1_images_moods": "fog over marsh", "tone": "plain"},
        )
        assert r.status_code == 200
        assert r.json() == valid_results["statement"]
        request, strict = provider.calls[0]
        assert strict is False
        assert request.image_data_url is None

    def test_unknown_task(self, make_client):
        client, _ = make_client([])
        r = client.post("/api/portrait", json={})
        assert r.status_code == 404
        assert "error" in r.json()


class TestNormalizeRoute:
    def test_normalize_uses_task_preset(self, make_client, png_bytes):
        client, _ = make_client([])
        r = client.post(
            "/api/normalize",
            files={"file": ("photo.png", png_bytes(2400, 1200), "image/png")},
            data={"task": "critique"},
        )
        assert r.status_code == 200
        body = r.json()
        assert (body["width"], body["height"]) == (1200, 600)
        assert body["dataUrl"].startswith("data:image/jpeg;base64,")
        assert body["bytes"] <= 4_000_000

    def test_abstractify_preset_allows_larger_edge(self, make_client, png_bytes):
        client, _ = make_client([])
        r = client.post(
            "/api/normalize",
            files={"file": ("photo.png", png_bytes(2400, 1200), "image/png")},
            data={"task": "abstractify"},
        )
        assert r.status_code == 200
        assert (r.json()["width"], r.json()["height"]) == (1800, 900)

    def test_non_image_upload_rejected(self, make_client):
        client, _ = make_client([])
        r = client.post("/api/normalize", files={"file": ("notes.txt", b"hello", "text/plain")})
        assert r.status_code == 400
        assert r.json() == {"error": "Please choose an image file (JPEG/PNG)."}

    def test_corrupt_upload_rejected(self, make_client):
        client, _ = make_client([])
        r = client.post("/api/normalize", files={"file": ("a.png", b"garbage", "image/png")})
        assert r.status_code == 400
        assert r.json() == {"error": "Invalid image"}

    def test_unknown_task_preset(self, make_client, png_bytes):
        client, _ = make_client([])
        r = client.post(
            "/api/normalize",
            files={"file": ("a.png", png_bytes(10, 10), "image/png")},
            data={"task": "portrait"},
        )
        assert r.status_code == 404


class TestMeta:
    def test_healthz(self, make_client):
        client, _ = make_client([])
        r = client.get("/healthz")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

    def test_tasks_listing(self, make_client):
        client, _ = make_client([])
        tasks = {t["task"]: t for t in client.get("/api/tasks").json()["tasks"]}
        assert set(tasks) == {"who", "series", "critique", "abstractify", "title", "statement"}
        assert tasks["abstractify"]["normalize"]["max_edge"] == 1800
        assert tasks["title"]["tones"][0] == "poetic"

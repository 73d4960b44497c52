"""Pytest configuration and fixtures."""

import random
from io import BytesIO
from typing import Any

import pytest
from PIL import Image


class ScriptedProvider:
    """Generation provider that replays canned responses and records each call."""

    name = "scripted"

    def __init__(self, responses: list[Any]):
        self._responses = list(responses)
        self.calls: list[tuple[Any, bool]] = []

    async def generate(self, request, strict: bool) -> str:
        self.calls.append((request, strict))
        if not self._responses:
            return ""
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _png_bytes(width: int, height: int, mode: str = "RGB", noise: bool = False) -> bytes:
    if noise:
        rng = random.Random(width * 7919 + height)
        img = Image.frombytes("RGB", (width, height), rng.randbytes(width * height * 3))
        if mode != "RGB":
            img = img.convert(mode)
    else:
        color = (200, 120, 40, 128) if mode == "RGBA" else (200, 120, 40)
        img = Image.new(mode, (width, height), color)
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_bytes():
    return _png_bytes


@pytest.fixture
def scripted_provider():
    return ScriptedProvider


@pytest.fixture
def valid_results() -> dict[str, dict[str, Any]]:
    return {
        "who": {
            "artists": [
                {
                    "name": f"Artist {i}",
                    "visual_connection": "Like your painting, this artist scrapes back layers of oil to reveal colour.",
                    "suggestion": "Try scraping back a section with a palette knife.",
                }
                for i in range(4)
            ]
        },
        "series": {
            "opening": "A quiet, luminous piece with layered greys and a warm horizon glowing underneath.",
            "ideas": [
                {
                    "title": f"Idea number {i}",
                    "description": "A series exploring the same horizon at different times of day.",
                    "practical_note": "Work on small boards with a limited palette.",
                }
                for i in range(5)
            ],
            "closing": "These are jumping-off points; adapt them freely.",
        },
        "critique": {
            "opening": "The piece has a restless energy, with jagged verticals pulling the eye upward.",
            "suggestions": [
                "Soften the transitions between light and dark areas in the upper third.",
                "Introduce a slower, broader shape to counter the repeated diagonals.",
                "Try a limited colour remix using only raw umber, cobalt blue and white.",
            ],
            "closing": "Trust that momentum and keep going.",
        },
        "abstractify": {
            "brief_read": "Low winter light, a flat horizon and long shadows across the field.",
            "paths": [
                {
                    "level": level,
                    "label": f"Level {level}",
                    "what_to_do": "Block in the horizon band.",
                    "why_interesting": "It keeps the sense of place.",
                }
                for level in (3, 1, 5, 2, 4)
            ],
            "closing_line": "Enjoy the shift.",
        },
        "title": {
            "tone": "poetic",
            "titles": [f"Title {i}" for i in range(12)],
            "top_rationales": [{"title": f"Title {i}", "why_it_fits": "It echoes the light."} for i in range(3)],
            "tags": ["winter", "horizon", "light", "field", "quiet"],
        },
        "statement": {
            "statement": "I paint the edges of the day, when the light thins out over the fields.",
            "bio": "Jo Smith is a painter based in Norfolk working in oil and cold wax.",
            "tips": ["Read it aloud.", "Trim adjectives."],
        },
    }

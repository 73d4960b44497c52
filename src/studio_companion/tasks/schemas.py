from __future__ import annotations

from typing import Any

# Schema descriptors are embedded verbatim (as JSON) in the generation request.
# They describe the shape; the predicates in validators.py enforce it.

ARTIST_MATCH_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "artists": {
            "type": "array",
            "minItems": 4,
            "maxItems": 5,
            "description": "4-5 artists whose work shows strong visual and material similarities.",
            "items": {
                "type": "object",
                "properties": {
                    "name": {
                        "type": "string",
                        "description": "The artist's name (and optionally, a specific series or period if relevant).",
                    },
                    "visual_connection": {
                        "type": "string",
                        "description": (
                            "A clear explanation of what looks similar and how. Be specific about surface "
                            "and material traits. Use plain language."
                        ),
                    },
                    "suggestion": {
                        "type": "string",
                        "description": "One thing the artist does that the user could explore or reflect on.",
                    },
                },
                "required": ["name", "visual_connection", "suggestion"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["artists"],
    "additionalProperties": False,
}

SERIES_IDEAS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "opening": {
            "type": "string",
            "description": (
                "A short paragraph (3-5 sentences) appreciating the painting's overall feeling, atmosphere, "
                "visual elements (colours, shapes, textures, mark-making, composition, light, contrast), "
                "and what they might suggest about mood or themes."
            ),
        },
        "ideas": {
            "type": "array",
            "minItems": 5,
            "maxItems": 5,
            "description": "Exactly five series or theme ideas.",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string", "description": "A descriptive title or phrase for the series idea."},
                    "description": {
                        "type": "string",
                        "description": "2-3 sentences explaining how the idea connects to the work.",
                    },
                    "practical_note": {
                        "type": "string",
                        "description": (
                            "A short, practical note on how the artist might approach it: variations, "
                            "materials, composition, techniques, or moods they could play with."
                        ),
                    },
                },
                "required": ["title", "description", "practical_note"],
                "additionalProperties": False,
            },
        },
        "closing": {
            "type": "string",
            "description": "A kind reminder that these ideas are jumping-off points (1-2 sentences).",
        },
    },
    "required": ["opening", "ideas", "closing"],
    "additionalProperties": False,
}

CRITIQUE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "opening": {
            "type": "string",
            "description": (
                "A sincere, detailed appreciation of the piece. Mention emotional tone, visual energy, or "
                "atmosphere. Highlight specific visual elements."
            ),
        },
        "suggestions": {
            "type": "array",
            "minItems": 3,
            "maxItems": 5,
            "description": (
                "3-5 clearly explained suggestions for what the artist might try next, each specific to the "
                "image, with a concrete 'why' and an easy-to-test creative prompt or visual tweak."
            ),
            "items": {"type": "string", "description": "A specific, practical suggestion with explanation."},
        },
        "closing": {
            "type": "string",
            "description": "A brief, encouraging statement, plainspoken and gently affirming. No questions.",
        },
    },
    "required": ["opening", "suggestions", "closing"],
    "additionalProperties": False,
}

ABSTRACTION_PATHS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "brief_read": {
            "type": "string",
            "description": (
                "2-4 sentences naming notable visual/mood cues (light direction, horizon, contrast, "
                "repeated marks, season, etc.)"
            ),
        },
        "paths": {
            "type": "array",
            "minItems": 5,
            "maxItems": 5,
            "description": "Exactly five distinct abstraction paths, one per level 1..5.",
            "items": {
                "type": "object",
                "properties": {
                    "level": {"type": "integer", "enum": [1, 2, 3, 4, 5]},
                    "label": {"type": "string"},
                    "what_to_do": {"type": "string"},
                    "why_interesting": {"type": "string"},
                    "prompts": {
                        "type": "object",
                        "properties": {
                            "surface": {"type": "string"},
                            "materials": {"type": "string"},
                            "try": {"type": "string"},
                            "palette_cue": {"type": "string"},
                        },
                        "additionalProperties": False,
                    },
                },
                "required": ["level", "label", "what_to_do", "why_interesting"],
                "additionalProperties": False,
            },
        },
        "closing_line": {"type": "string"},
    },
    "required": ["brief_read", "paths", "closing_line"],
    "additionalProperties": False,
}

TITLE_GENERATION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "tone": {"type": "string"},
        "titles": {"type": "array", "items": {"type": "string"}, "minItems": 12, "maxItems": 12},
        "top_rationales": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "why_it_fits": {"type": "string"},
                },
                "required": ["title", "why_it_fits"],
            },
            "minItems": 3,
            "maxItems": 3,
        },
        "tags": {"type": "array", "items": {"type": "string"}, "minItems": 5, "maxItems": 7},
    },
    "required": ["tone", "titles", "top_rationales", "tags"],
}

STATEMENT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "statement": {
            "type": "string",
            "description": "130-180 words, first person, structured with short paragraphs or line breaks",
        },
        "bio": {"type": "string", "description": "90-130 words, third person, suitable for websites and submissions"},
        "tips": {"type": "array", "items": {"type": "string"}, "description": "3-5 short bullet tips for polishing"},
    },
    "required": ["statement", "bio", "tips"],
}

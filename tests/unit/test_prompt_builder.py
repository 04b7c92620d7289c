"""
Unit tests for the prompt builder.

Tests cover:
- Color and tag rendering, including placeholders
- Percent rounding
- Determinism and layout of the full prompt
"""

import json

import pytest

from fixtures.test_data import generate_color
from sar_lookup.services.prompt_builder import (
    INSTRUCTIONS,
    NO_COLOR_DATA,
    SAR_COLOR_CHART,
    build_prompt,
    color_label,
    format_color_text,
    format_percent,
    format_tag_text,
)


METADATA = {
    "sceneName": "S1A_IW_GRDH_1SDV_20240501T120000",
    "platform": "Sentinel-1A",
    "captureDate": "2024-05-01T12:00:00.000Z",
    "flightDirection": "ASCENDING",
    "polarization": "VV+VH",
    "beamMode": "IW",
    "orbit": 53712,
    "coordinates": {"latitude": 37.7749, "longitude": -122.4194},
}


class TestFormatPercent:
    """Tests for one-decimal percent rendering."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            (42.37, "42.4"),
            (30.04, "30.0"),
            (10, "10.0"),
            (0.25, "0.3"),
            (None, "0.0"),
            (0, "0.0"),
            ("not a number", "0.0"),
        ],
    )
    def test_format_percent(self, value, expected):
        assert format_percent(value) == expected


class TestColorText:
    """Tests for color list rendering."""

    @pytest.mark.unit
    def test_empty_colors_use_placeholder(self):
        assert format_color_text([]) == NO_COLOR_DATA
        assert format_color_text([]) == "No color data available"

    @pytest.mark.unit
    def test_colors_joined_with_percent(self):
        colors = [
            generate_color("black", 42.37),
            generate_color("light gray", 30.04),
        ]

        assert format_color_text(colors) == "black: 42.4%, light gray: 30.0%"

    @pytest.mark.unit
    def test_label_fallback_order(self):
        assert color_label({"color_name": "", "closest_palette_color": "navy"}) == "navy"
        assert color_label({"html_code": "#000000"}) == "#000000"
        assert color_label({}) == "unknown"


class TestTagText:

    @pytest.mark.unit
    def test_empty_tags_use_placeholder(self):
        assert format_tag_text([]) == "None"

    @pytest.mark.unit
    def test_tags_comma_joined(self):
        assert format_tag_text(["texture", "pattern"]) == "texture, pattern"


class TestBuildPrompt:
    """Tests for the assembled prompt."""

    @pytest.mark.unit
    def test_prompt_is_deterministic(self):
        colors = [generate_color("black", 42.37)]
        tags = ["texture"]

        first = build_prompt(colors, tags, METADATA)
        second = build_prompt(colors, tags, dict(METADATA))

        assert first == second

    @pytest.mark.unit
    def test_prompt_is_stripped(self):
        prompt = build_prompt([], [], METADATA)

        assert prompt == prompt.strip()
        assert prompt.startswith("You are a NASA SAR (Synthetic Aperture Radar) interpretation specialist")
        assert prompt.endswith("}")

    @pytest.mark.unit
    def test_empty_inputs_render_placeholders(self):
        prompt = build_prompt([], [], METADATA)

        assert "Detected color percentages:\nNo color data available\n" in prompt
        assert "Also detected visual tags: None." in prompt

    @pytest.mark.unit
    def test_prompt_contains_chart_and_instructions(self):
        prompt = build_prompt([], [], METADATA)

        assert SAR_COLOR_CHART in prompt
        assert INSTRUCTIONS in prompt
        assert "- Black / Dark Blue => calm water or radar shadow" in prompt
        assert "5) Use 0-2 relevant emojis, keep output concise." in prompt

    @pytest.mark.unit
    def test_metadata_pretty_printed(self):
        prompt = build_prompt([], [], METADATA)

        assert prompt.endswith("Metadata:\n" + json.dumps(METADATA, indent=2))
        assert '  "flightDirection": "ASCENDING",' in prompt

    @pytest.mark.unit
    def test_colors_and_tags_embedded(self):
        prompt = build_prompt(
            [generate_color("green", 27.59)],
            ["field", "grass"],
            METADATA,
        )

        assert "Detected color percentages:\ngreen: 27.6%\n" in prompt
        assert "Also detected visual tags: field, grass." in prompt

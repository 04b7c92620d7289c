"""
Prompt construction for the SAR interpretation LLM call.

Everything here is pure: identical colors, tags and metadata always give
byte-identical prompt text.
"""

import json
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Sequence

NO_COLOR_DATA = "No color data available"
NO_TAGS = "None"

SAR_COLOR_CHART = """SAR Color Interpretation Chart:
- Bright White / Light Gray => strong backscatter (urban structures, metal, ships)
- Medium Gray => rocky terrain or dry soil
- Black / Dark Blue => calm water or radar shadow
- Green => vegetation or forest
- Yellow / Orange => mixed terrain or transitional vegetation
- Red / Magenta => man-made structures or urban materials
- Cyan / Blue-Green => wetlands or moist areas"""

INSTRUCTIONS = """Using these color percentages and the tags, do the following:
1) For each detected color, give a short interpretation (one line) about what that color likely represents in SAR terms.
2) Provide a 4-6 sentence summary describing the most likely landscape in plain, simple language.
3) Mention the capture date/time, flightDirection, and coordinates (from metadata) explicitly.
4) Note any uncertainties or edge-cases (for example, if color mapping is ambiguous).
5) Use 0-2 relevant emojis, keep output concise."""

PROMPT_TEMPLATE = """
You are a NASA SAR (Synthetic Aperture Radar) interpretation specialist 🛰️.
A vision API has returned detected colors and approximate percentages for a Sentinel-1 preview image.

Detected color percentages:
{color_text}

Also detected visual tags: {tag_text}.

{chart}

{instructions}

Metadata:
{metadata_json}
"""


def format_percent(value: Any) -> str:
    """One decimal place, halves rounded away from zero; non-numbers count as 0."""
    if isinstance(value, bool) or not value:
        value = 0
    try:
        number = Decimal(value if isinstance(value, (int, float)) else str(value))
    except (InvalidOperation, ValueError):
        number = Decimal(0)
    if not number.is_finite():
        number = Decimal(0)
    return str(number.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def color_label(color: Mapping[str, Any]) -> str:
    return (
        color.get("color_name")
        or color.get("closest_palette_color")
        or color.get("html_code")
        or "unknown"
    )


def format_color_text(colors: Sequence[Mapping[str, Any]]) -> str:
    """Render ``name: percent%`` pairs, or the placeholder when empty."""
    if not colors:
        return NO_COLOR_DATA
    return ", ".join(
        f"{color_label(c)}: {format_percent(c.get('percent'))}%" for c in colors
    )


def format_tag_text(tags: Sequence[str]) -> str:
    return ", ".join(tags) if tags else NO_TAGS


def build_prompt(
    colors: Sequence[Mapping[str, Any]],
    tags: List[str],
    metadata: Dict[str, Any]
) -> str:
    """
    Build the interpretation prompt.

    Args:
        colors: Color entries from the vision API (may be empty)
        tags: Retained tag labels (may be empty)
        metadata: Scene metadata bundle, serialized as indented JSON

    Returns:
        Prompt text with surrounding whitespace stripped
    """
    prompt = PROMPT_TEMPLATE.format(
        color_text=format_color_text(colors),
        tag_text=format_tag_text(tags),
        chart=SAR_COLOR_CHART,
        instructions=INSTRUCTIONS,
        metadata_json=json.dumps(metadata, indent=2, ensure_ascii=False),
    )
    return prompt.strip()

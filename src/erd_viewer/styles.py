from __future__ import annotations

# ============================================================================
# Font metrics -- character width estimates for Inter at different sizes.
# ============================================================================


def estimate_text_width(text: str, font_size: float, font_weight: int) -> float:
    """Average character width in px at the given font size and weight (proportional font)."""
    if font_weight >= 600:
        width_ratio = 0.58
    elif font_weight >= 500:
        width_ratio = 0.55
    else:
        width_ratio = 0.52
    return len(text) * font_size * width_ratio


def estimate_mono_text_width(text: str, font_size: float) -> float:
    """Average character width in px for monospace fonts (uniform glyph width)."""
    return len(text) * font_size * 0.6


def truncate_to_width(text: str, max_width: float, char_width: float) -> str:
    """Cut ``text`` with an ellipsis so it fits ``max_width`` at ``char_width`` px per glyph."""
    max_chars = int(max_width // char_width) if char_width > 0 else len(text)
    if len(text) <= max_chars:
        return text
    if max_chars <= 1:
        return "…"
    return text[: max_chars - 1] + "…"


# Fixed font sizes (px)
FONT_SIZES = {
    "table_name": 14,
    "column": 12,
    "column_type": 11,
    "key_badge": 9,
}

# Font weights per element type
FONT_WEIGHTS = {
    "table_name": 700,
    "pk_column": 600,
    "column": 400,
    "key_badge": 600,
}

# ============================================================================
# Spacing & sizing constants
# ============================================================================

COLUMN_PAD_X = 12
CANVAS_PADDING = 40

STROKE_WIDTHS = {
    "outer_box": 1,
    "separator": 0.75,
    "connector": 1.5,
}

TEXT_BASELINE_SHIFT = "0.35em"

MARKER_SIZE = 8

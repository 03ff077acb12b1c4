"""
Image styles that can be appended to a prompt.
"""

IMAGE_STYLES = {
    "photo": "Photorealistic style, 8k, highly detailed",
    "oil": "Oil painting style, textured brushstrokes, artistic",
    "pencil": "Pencil sketch style, graphite on paper, monochrome",
    "magic_marker": "Magic marker drawing style, vibrant colors, bold lines",
    "color_pencil": "Colored pencil drawing style, soft textures, artistic",
}


def apply_style(prompt: str, style_key: str) -> str:
    """Append a style to a prompt, or use the style alone for an empty prompt."""
    style = IMAGE_STYLES[style_key]
    clean = (prompt or "").strip()
    return f"{clean}, {style}" if clean else style

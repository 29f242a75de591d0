"""
生成プロンプト組み立て

ベースプロンプト → スタイル接頭辞 → エンハンサー → カスタムプロンプト →
向きガイド → 参考メモ → インスピレーション指示 の順に、空でない要素だけを
改行で連結する。
"""
from __future__ import annotations

import random
import re
from typing import Dict, List, Optional

from artstore.domain.entities.artwork import Style
from artstore.domain.services.metadata_synthesizer import resolve_pool

DEFAULT_BASE_PROMPT = (
    "Generate an original fine art image. "
    "Fine art quality, suitable for large format printing. High resolution, rich detail, "
    "museum-worthy. No text, watermarks, signatures, or borders."
)

ORIENTATION_GUIDES: Dict[str, str] = {
    "portrait": "Vertical composition, taller than wide, portrait orientation, aspect ratio 2:3.",
    "landscape": "Horizontal composition, wider than tall, landscape orientation, aspect ratio 3:2.",
    "square": "Square composition, equal width and height, aspect ratio 1:1.",
}

INSPIRATION_INSTRUCTION = (
    "Use the provided reference images only as style and mood inspiration. "
    "Create a new original composition inspired by their aesthetic qualities; "
    "do not copy or reproduce them."
)

STYLE_ENHANCERS: Dict[str, List[str]] = {
    "abstract": [
        "bold color fields and organic shapes",
        "layered textures with dripping paint effects",
        "geometric fragments dissolving into chaos",
        "vibrant acrylic splashes on raw canvas",
        "meditative color gradients with subtle texture",
    ],
    "geometric": [
        "precise tessellations in warm earth tones",
        "overlapping translucent polygons",
        "isometric impossible architecture",
        "sacred geometry with gold leaf accents",
        "minimalist line compositions with negative space",
    ],
    "landscapes": [
        "misty mountain valley at golden hour",
        "vast desert dunes under starlight",
        "tropical coast with turquoise water",
        "snow-covered forest in soft morning light",
        "rolling hills with dramatic storm clouds",
    ],
    "botanical": [
        "oversized tropical leaves in close-up detail",
        "delicate wildflower arrangement on dark background",
        "lush monstera and palm fronds",
        "dried flower still life in muted palette",
        "intricate fern patterns with dew drops",
    ],
    "portraits": [
        "ethereal figure emerging from abstract color",
        "silhouette with double exposure landscape",
        "contemporary portrait with bold color blocking",
        "dreamlike face composed of natural elements",
        "fragmented figure in cubist style",
    ],
    "celestial": [
        "deep space nebula in vivid ultraviolet",
        "ringed planet rising over alien terrain",
        "cosmic dust clouds in gold and teal",
        "star field with bioluminescent auroras",
        "eclipse casting light through crystalline structures",
    ],
    "ocean-water": [
        "deep underwater bioluminescence",
        "crashing wave frozen in crystal detail",
        "abstract ocean currents in blue and silver",
        "coral reef teeming with color",
        "calm tide pool reflections at sunset",
    ],
    "minimalist": [
        "single line drawing on textured paper",
        "two-tone composition with subtle gradient",
        "negative space study with one focal point",
        "simple circle and shadow on warm background",
        "thin horizontal bands in muted palette",
    ],
    "texture": [
        "cracked earth with golden veins",
        "weathered wood grain in extreme close-up",
        "marble surface with dramatic veining",
        "rust and patina on aged metal",
        "layered paper torn to reveal colors beneath",
    ],
    "surreal": [
        "melting clocks in a desert landscape",
        "floating islands connected by waterfalls",
        "rooms defying gravity with impossible stairs",
        "objects scaled absurdly large in normal settings",
        "dreamscape merging ocean floor with sky",
    ],
}

_NON_KEY_CHARS = re.compile(r"[^a-z-]")


def enhancer_key(style_name: str) -> str:
    """表示名から導くエンハンサーのキー。保存済み slug とは別物"""
    return _NON_KEY_CHARS.sub("", (style_name or "").lower())


def style_prefix(style: Style) -> str:
    if style.prompt_prefix and style.prompt_prefix.strip():
        return style.prompt_prefix
    return f"Create a {style.name.lower()} artwork"


def build_prompt(
    style: Style,
    *,
    base_prompt: str,
    orientation: str,
    custom_prompt: Optional[str] = None,
    reference_notes: Optional[str] = None,
    has_images: bool = False,
    rng: Optional[random.Random] = None,
) -> str:
    rng = rng or random.Random()
    enhancer = rng.choice(resolve_pool(STYLE_ENHANCERS, enhancer_key(style.name)))

    parts = [
        base_prompt,
        style_prefix(style),
        enhancer,
        custom_prompt,
        ORIENTATION_GUIDES[orientation],
        reference_notes,
    ]
    if has_images:
        parts.append(INSPIRATION_INSTRUCTION)

    return "\n".join(p.strip() for p in parts if p and p.strip())

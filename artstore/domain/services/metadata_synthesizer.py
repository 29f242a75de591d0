"""
作品メタデータ生成サービス

スタイルの slug からタイトル・説明文・タグ・カラーパレットを生成する。
画像内容には依存せず、固定のプールからのランダム選択のみで構成される。
未登録の slug はすべて "abstract" のプールにフォールバックする。
"""
from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence, TypeVar

from artstore.domain.entities.artwork import ArtworkMetadata

T = TypeVar("T")

FALLBACK_KEY = "abstract"
TITLE_SUFFIX_PROBABILITY = 0.6

TITLE_THEMES: Dict[str, List[str]] = {
    "abstract": ["Resonance", "Convergence", "Pulse", "Drift", "Fracture", "Bloom", "Threshold", "Echo", "Flux", "Veil"],
    "geometric": ["Lattice", "Vertex", "Prism", "Tessellation", "Axis", "Meridian", "Grid", "Facet", "Vector", "Form"],
    "landscapes": ["Horizon", "Valley", "Ridge", "Stillness", "Passage", "Clearing", "Solitude", "Expanse", "Dawn", "Dusk"],
    "botanical": ["Petal", "Root", "Canopy", "Bloom", "Tendril", "Spore", "Frond", "Seed", "Thorn", "Moss"],
    "portraits": ["Gaze", "Presence", "Shadow Self", "Inner Light", "Fragment", "Reverie", "Essence", "Visage", "Aura", "Mask"],
    "celestial": ["Nova", "Orbit", "Eclipse", "Nebula", "Void", "Astral", "Corona", "Zenith", "Solstice", "Pulsar"],
    "ocean-water": ["Tide", "Depth", "Current", "Undertow", "Swell", "Reef", "Abyss", "Surface", "Shimmer", "Riptide"],
    "minimalist": ["Silence", "Breath", "Pause", "Interval", "Space", "Line", "Rest", "Void", "Calm", "Still"],
    "texture": ["Grain", "Patina", "Layer", "Surface", "Weave", "Erosion", "Sediment", "Fiber", "Stratum", "Crust"],
    "surreal": ["Paradox", "Liminal", "Threshold", "Mirage", "Anomaly", "Reverie", "Alchemy", "Chimera", "Enigma", "Portal"],
}

TITLE_SUFFIXES: List[str] = [
    "I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX",
    "No. 1", "No. 2", "No. 3", "No. 4", "No. 5",
    "in Blue", "in Gold", "in Shadow", "at Dawn", "at Dusk",
    "Ascending", "Descending", "Unfurling", "Dissolving", "Emerging",
]

DESCRIPTIONS: Dict[str, List[str]] = {
    "abstract": [
        "A study in form and colour that invites contemplation.",
        "Bold gestural marks create a dialogue between chaos and order.",
        "Layers of pigment build a rich, textural surface that rewards close viewing.",
    ],
    "geometric": [
        "Precise mathematical forms create a harmonious visual rhythm.",
        "Clean lines and careful proportions produce a meditative composition.",
        "An exploration of symmetry and balance through geometric abstraction.",
    ],
    "landscapes": [
        "A dreamlike vista that captures the essence of untouched wilderness.",
        "Light and atmosphere converge in this sweeping natural panorama.",
        "An AI interpretation of nature's grandeur, both familiar and otherworldly.",
    ],
    "botanical": [
        "Intricate organic forms reveal the hidden beauty of the natural world.",
        "A celebration of botanical elegance rendered in vivid detail.",
        "Nature's patterns and textures take centre stage in this intimate study.",
    ],
    "portraits": [
        "A contemporary figure study that blurs the line between identity and abstraction.",
        "Human presence emerges from and dissolves into the surrounding composition.",
        "An exploration of the self through the lens of algorithmic creativity.",
    ],
    "celestial": [
        "Cosmic phenomena rendered with otherworldly beauty and scale.",
        "The vastness of space distilled into a mesmerising visual experience.",
        "Stellar formations and celestial light create an immersive cosmic portrait.",
    ],
    "ocean-water": [
        "The fluid dynamics of water captured in a single transcendent moment.",
        "Deep marine blues and aquatic light create an immersive underwater world.",
        "Ocean energy and tranquility coexist in this aquatic composition.",
    ],
    "minimalist": [
        "Restrained elegance, where every element exists with deliberate purpose.",
        "A meditation on negative space and the beauty of simplicity.",
        "Stripped to its essence, the composition speaks through what it leaves out.",
    ],
    "texture": [
        "Surface, material, and light interact to create a tactile visual experience.",
        "Macro-scale textures reveal hidden landscapes within everyday materials.",
        "An intimate exploration of surface and substance.",
    ],
    "surreal": [
        "Reality bends and transforms in this dreamlike visual narrative.",
        "Familiar elements are reimagined in impossible, captivating arrangements.",
        "A window into a world where the laws of physics are merely suggestions.",
    ],
}

BASE_TAGS: List[str] = ["ai-art", "digital-art", "wall-art", "print"]

STYLE_TAGS: Dict[str, List[str]] = {
    "abstract": ["abstract", "contemporary", "modern-art", "color-field", "expressionism"],
    "geometric": ["geometric", "pattern", "symmetry", "mathematical", "modern"],
    "landscapes": ["landscape", "nature", "scenic", "wilderness", "environment"],
    "botanical": ["botanical", "plants", "nature", "floral", "organic"],
    "portraits": ["portrait", "figure", "human", "face", "identity"],
    "celestial": ["space", "cosmic", "stars", "universe", "astronomy"],
    "ocean-water": ["ocean", "water", "marine", "aquatic", "sea"],
    "minimalist": ["minimal", "clean", "simple", "modern", "zen"],
    "texture": ["texture", "material", "surface", "macro", "detail"],
    "surreal": ["surreal", "dreamlike", "fantasy", "imagination", "otherworldly"],
}

PALETTES: Dict[str, List[List[str]]] = {
    "abstract": [
        ["#E63946", "#F1FAEE", "#457B9D", "#1D3557"],
        ["#FF6B6B", "#FEC89A", "#B5838D", "#6D6875"],
        ["#264653", "#2A9D8F", "#E9C46A", "#F4A261"],
    ],
    "geometric": [
        ["#003049", "#D62828", "#F77F00", "#FCBF49"],
        ["#2B2D42", "#8D99AE", "#EDF2F4", "#EF233C"],
        ["#606C38", "#283618", "#FEFAE0", "#DDA15E"],
    ],
    "landscapes": [
        ["#606C38", "#283618", "#FEFAE0", "#DDA15E"],
        ["#0077B6", "#00B4D8", "#90E0EF", "#CAF0F8"],
        ["#5F0F40", "#9A031E", "#FB8B24", "#E36414"],
    ],
    "botanical": [
        ["#386641", "#6A994E", "#A7C957", "#F2E8CF"],
        ["#3D405B", "#E07A5F", "#F4F1DE", "#81B29A"],
        ["#2D6A4F", "#40916C", "#52B788", "#B7E4C7"],
    ],
    "portraits": [
        ["#353535", "#3C6E71", "#FFFFFF", "#D9D9D9"],
        ["#6B2737", "#C97C5D", "#E8D6CB", "#B7B7A4"],
        ["#0D1B2A", "#1B263B", "#415A77", "#778DA9"],
    ],
    "celestial": [
        ["#03071E", "#370617", "#6A040F", "#9D0208"],
        ["#10002B", "#240046", "#3C096C", "#7B2CBF"],
        ["#0D1B2A", "#1B263B", "#415A77", "#E0E1DD"],
    ],
    "ocean-water": [
        ["#03045E", "#0077B6", "#00B4D8", "#90E0EF"],
        ["#005F73", "#0A9396", "#94D2BD", "#E9D8A6"],
        ["#184E77", "#1E6091", "#1A759F", "#76C893"],
    ],
    "minimalist": [
        ["#F5F5F5", "#E0E0E0", "#333333", "#FFFFFF"],
        ["#FAF9F6", "#C4A77D", "#000000", "#F0EAD6"],
        ["#FEFEFE", "#9B9B9B", "#2C2C2C", "#F5F5F0"],
    ],
    "texture": [
        ["#A68A64", "#936639", "#7F5539", "#582F0E"],
        ["#D5C6B0", "#B7B09C", "#8C8474", "#5E574D"],
        ["#DEB887", "#D2B48C", "#BC8F8F", "#8B7355"],
    ],
    "surreal": [
        ["#FF006E", "#8338EC", "#3A86FF", "#FFBE0B"],
        ["#7400B8", "#6930C3", "#5390D9", "#48BFE3"],
        ["#F72585", "#B5179E", "#7209B7", "#560BAD"],
    ],
}


def resolve_pool(table: Dict[str, T], key: Optional[str], fallback_key: str = FALLBACK_KEY) -> T:
    """key のプールを返す。未登録なら fallback_key のプール"""
    if key and key in table:
        return table[key]
    return table[fallback_key]


class MetadataSynthesizer:
    """スタイル slug からの作品メタデータ生成（失敗しない）"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def title(self, style_slug: str) -> str:
        theme = self.rng.choice(resolve_pool(TITLE_THEMES, style_slug))
        if self.rng.random() < TITLE_SUFFIX_PROBABILITY:
            return f"{theme} {self.rng.choice(TITLE_SUFFIXES)}"
        return theme

    def description(self, style_slug: str) -> str:
        return self.rng.choice(resolve_pool(DESCRIPTIONS, style_slug))

    def tags(self, style_slug: str) -> List[str]:
        extras: Sequence[str] = resolve_pool(STYLE_TAGS, style_slug)
        picked = self.rng.sample(list(extras), self.rng.randint(2, 3))
        return [*BASE_TAGS, *picked]

    def colors(self, style_slug: str) -> List[str]:
        return list(self.rng.choice(resolve_pool(PALETTES, style_slug)))

    def synthesize(self, style_slug: str) -> ArtworkMetadata:
        return ArtworkMetadata(
            title=self.title(style_slug),
            description=self.description(style_slug),
            tags=self.tags(style_slug),
            colors=self.colors(style_slug),
        )

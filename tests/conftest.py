"""
Pytest configuration and shared fixtures
"""
import pytest
from datetime import datetime, timezone
from unittest.mock import Mock

from artstore.domain.entities.artwork import Style
from artstore.domain.repositories.gallery_repository import (
    ArtworkRepository,
    BlobStorage,
    SettingsRepository,
    StyleRepository,
)
from artstore.domain.services.image_synthesis_port import SynthesizedImage

FIXED_NOW = datetime(2025, 3, 14, 9, 26, 53, 589000, tzinfo=timezone.utc)
FIXED_MILLIS = int(FIXED_NOW.timestamp() * 1000)


@pytest.fixture
def abstract_style():
    return Style(
        id="style-abstract",
        name="Abstract",
        slug="abstract",
        prompt_prefix="Create an abstract expressionist artwork",
        reference_images=[],
        is_active=True,
        sort_order=0,
    )


@pytest.fixture
def celestial_style():
    return Style(
        id="style-celestial",
        name="Celestial",
        slug="celestial",
        prompt_prefix="Create a celestial artwork",
        reference_images=[],
        is_active=True,
        sort_order=1,
    )


@pytest.fixture
def first_choice_rng():
    """Random source that always takes the first option and skips title suffixes"""
    rng = Mock()
    rng.choice.side_effect = lambda seq: list(seq)[0]
    rng.random.return_value = 0.99
    rng.randint.side_effect = lambda a, b: a
    rng.sample.side_effect = lambda population, k: list(population)[:k]
    return rng


@pytest.fixture
def mock_style_repository(abstract_style, celestial_style):
    repo = Mock(spec=StyleRepository)
    styles = {abstract_style.id: abstract_style, celestial_style.id: celestial_style}
    repo.get_by_id.side_effect = lambda style_id: styles.get(style_id)
    repo.list_active.return_value = [abstract_style, celestial_style]
    return repo


@pytest.fixture
def mock_settings_repository():
    repo = Mock(spec=SettingsRepository)
    repo.get.return_value = None
    return repo


@pytest.fixture
def mock_artwork_repository():
    repo = Mock(spec=ArtworkRepository)
    repo.insert.side_effect = lambda payload: {"id": "artwork-1", **payload}
    return repo


@pytest.fixture
def mock_blob_storage():
    storage = Mock(spec=BlobStorage)
    storage.upload.return_value = None
    storage.get_public_url.side_effect = lambda path: f"https://cdn.example.com/artworks/{path}"
    return storage


@pytest.fixture
def mock_synthesizer():
    synthesizer = Mock()
    synthesizer.model = "gemini-2.5-flash-image"
    synthesizer.synthesize.return_value = SynthesizedImage(data=b"\x89PNG fake", mime_type="image/png")
    return synthesizer


@pytest.fixture
def mock_image_fetcher():
    fetcher = Mock()
    fetcher.fetch_moodboard.return_value = []
    return fetcher

"""
API tests with repositories mocked out via dependency overrides
"""
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from artstore.application.use_cases.browse_gallery import BrowseGalleryUseCase
from artstore.application.use_cases.generate_artwork import GenerateArtworkUseCase
from artstore.application.use_cases.manage_settings import ManageSettingsUseCase
from artstore.domain.repositories.gallery_repository import ArtworkRepository
from artstore.domain.services.prompt_builder import DEFAULT_BASE_PROMPT
from artstore.infrastructure.ratelimit.download_limiter import DownloadRateLimiter
from artstore.main import app
from artstore.presentation.api.v1 import cron as cron_module
from artstore.presentation.api.v1 import deps

from tests.conftest import FIXED_NOW

ADMIN = {"Authorization": "Bearer admin-secret"}


@pytest.fixture
def settings(monkeypatch):
    fake = Mock(admin_secret="admin-secret", cron_secret="cron-secret", cron_daily_count=3)
    monkeypatch.setattr(deps, "get_settings", lambda: fake)
    monkeypatch.setattr(cron_module, "get_settings", lambda: fake)
    return fake


@pytest.fixture
def generate_use_case(
    mock_style_repository,
    mock_settings_repository,
    mock_artwork_repository,
    mock_blob_storage,
    mock_synthesizer,
    mock_image_fetcher,
    first_choice_rng,
):
    return GenerateArtworkUseCase(
        style_repository=mock_style_repository,
        settings_repository=mock_settings_repository,
        artwork_repository=mock_artwork_repository,
        blob_storage=mock_blob_storage,
        synthesizer=mock_synthesizer,
        image_fetcher=mock_image_fetcher,
        rng=first_choice_rng,
        clock=lambda: FIXED_NOW,
        sleep=AsyncMock(),
    )


@pytest.fixture
def client(settings, generate_use_case, mock_settings_repository):
    mock_settings_repository.upsert.side_effect = lambda key, value: {"key": key, "value": value}
    app.dependency_overrides[deps.get_generate_use_case] = lambda: generate_use_case
    app.dependency_overrides[deps.get_settings_use_case] = lambda: ManageSettingsUseCase(mock_settings_repository)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestAuth:
    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer wrong"}, {"Authorization": "admin-secret"}])
    def test_admin_requires_bearer_secret(self, client, headers):
        res = client.get("/api/v1/admin/generate", headers=headers)
        assert res.status_code == 401

    def test_admin_unconfigured_secret_rejects(self, client, settings):
        settings.admin_secret = None
        res = client.get("/api/v1/admin/generate", headers=ADMIN)
        assert res.status_code == 401

    def test_health_is_public(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestAdminGenerate:
    def test_list_styles(self, client):
        res = client.get("/api/v1/admin/generate", headers=ADMIN)
        assert res.status_code == 200
        assert [s["slug"] for s in res.json()["styles"]] == ["abstract", "celestial"]

    def test_single(self, client, mock_artwork_repository):
        res = client.post(
            "/api/v1/admin/generate",
            headers=ADMIN,
            json={"mode": "single", "style_id": "style-celestial", "orientation": "portrait"},
        )
        body = res.json()
        assert res.status_code == 200
        assert body["success"] is True
        assert body["artwork_id"] == "artwork-1"
        assert "error" not in body
        assert mock_artwork_repository.insert.call_args.args[0]["status"] == "review"

    def test_single_failure_is_reported_in_body(self, client):
        res = client.post("/api/v1/admin/generate", headers=ADMIN, json={"style_id": "missing"})
        assert res.status_code == 200
        assert res.json() == {"success": False, "error": "Style not found: missing"}

    @pytest.mark.parametrize("mode", ["single", "preview"])
    def test_style_id_required(self, client, mode):
        res = client.post("/api/v1/admin/generate", headers=ADMIN, json={"mode": mode})
        assert res.status_code == 400
        assert res.json()["detail"] == f"style_id required for {mode} generation"

    def test_invalid_orientation_rejected(self, client):
        res = client.post(
            "/api/v1/admin/generate",
            headers=ADMIN,
            json={"style_id": "style-abstract", "orientation": "panorama"},
        )
        assert res.status_code == 422

    def test_preview(self, client, mock_artwork_repository, mock_blob_storage):
        res = client.post(
            "/api/v1/admin/generate", headers=ADMIN, json={"mode": "preview", "style_id": "style-abstract"}
        )
        body = res.json()
        assert body["success"] is True
        assert body["image_data_url"].startswith("data:image/png;base64,")
        mock_artwork_repository.insert.assert_not_called()
        mock_blob_storage.upload.assert_not_called()

    def test_batch(self, client, mock_synthesizer):
        res = client.post("/api/v1/admin/generate", headers=ADMIN, json={"mode": "batch", "count": 3})
        body = res.json()
        assert res.status_code == 200
        assert body["summary"] == {"success": 3, "failed": 0}
        assert len(body["results"]) == 3
        assert mock_synthesizer.synthesize.call_count == 3
        assert set(body["results"][0]) == {"success", "artwork_id", "title", "slug", "image_url"}

    def test_batch_failures_omit_empty_fields(self, client, mock_style_repository):
        mock_style_repository.get_by_id.side_effect = lambda style_id: None
        res = client.post(
            "/api/v1/admin/generate",
            headers=ADMIN,
            json={"mode": "batch", "count": 2, "style_id": "gone"},
        )
        body = res.json()
        assert res.status_code == 200
        assert body["summary"] == {"success": 0, "failed": 2}
        assert body["results"] == [{"success": False, "error": "Style not found: gone"}] * 2

    def test_batch_with_style_lookup_failure(self, client, mock_style_repository):
        mock_style_repository.list_active.side_effect = RuntimeError("supabase down")
        res = client.post("/api/v1/admin/generate", headers=ADMIN, json={"mode": "batch", "count": 3})
        assert res.status_code == 200
        assert res.json() == {"results": [], "summary": {"success": 0, "failed": 0}}

    def test_generate_response_schema_documented(self, client):
        schema = client.get("/openapi.json").json()
        refs = str(schema["paths"]["/api/v1/admin/generate"]["post"]["responses"]["200"])
        assert "BatchGenerateResponse" in refs
        assert "GenerationResultResponse" in refs


class TestAdminSettings:
    def test_base_prompt_roundtrip(self, client, mock_settings_repository):
        res = client.get("/api/v1/admin/settings/base-prompt", headers=ADMIN)
        assert res.json()["is_default"] is True

        res = client.put("/api/v1/admin/settings/base-prompt", headers=ADMIN, json={"value": "Paint boldly."})
        assert res.json() == {"key": "base_prompt", "value": "Paint boldly."}

        res = client.post("/api/v1/admin/settings/base-prompt/reset", headers=ADMIN)
        assert res.json()["value"] == DEFAULT_BASE_PROMPT

    def test_empty_base_prompt(self, client):
        res = client.put("/api/v1/admin/settings/base-prompt", headers=ADMIN, json={"value": " "})
        assert res.status_code == 400


class TestCron:
    def test_requires_secret(self, client):
        assert client.get("/api/v1/cron/generate").status_code == 401

    def test_daily_batch_never_publishes(self, client, mock_artwork_repository):
        res = client.get("/api/v1/cron/generate", headers={"Authorization": "Bearer cron-secret"})
        body = res.json()
        assert res.status_code == 200
        assert body["success"] == 3
        assert body["failed"] == 0
        rows = [c.args[0] for c in mock_artwork_repository.insert.call_args_list]
        assert len(rows) == 3
        assert all(r["status"] == "review" for r in rows)

    def test_open_when_secret_unset(self, client, settings):
        settings.cron_secret = None
        assert client.get("/api/v1/cron/generate").status_code == 200


class TestGallery:
    @pytest.fixture
    def repository(self, client):
        repo = Mock(spec=ArtworkRepository)
        repo.get_by_id.return_value = {
            "id": "a1",
            "title": "Nova",
            "status": "published",
            "image_url": "https://cdn.example.com/a.png",
            "image_4k_url": "https://cdn.example.com/a.png",
        }
        repo.get_published_by_slug.return_value = None
        repo.list_published.return_value = []
        gallery = BrowseGalleryUseCase(repo, DownloadRateLimiter(1))
        app.dependency_overrides[deps.get_gallery_use_case] = lambda: gallery
        return repo

    def test_download_limit(self, client, repository):
        headers = {"x-forwarded-for": "203.0.113.7, 10.0.0.1"}
        first = client.post("/api/v1/artworks/a1/download", headers=headers)
        assert first.status_code == 200
        assert first.json()["remaining_today"] == 0

        second = client.post("/api/v1/artworks/a1/download", headers=headers)
        assert second.status_code == 429

        other = client.post("/api/v1/artworks/a1/download", headers={"x-forwarded-for": "198.51.100.1"})
        assert other.status_code == 200

    def test_unknown_artwork(self, client, repository):
        assert client.get("/api/v1/artworks/nope").status_code == 404

    def test_list_sets_cache_header(self, client, repository):
        res = client.get("/api/v1/gallery")
        assert res.status_code == 200
        assert res.json() == {"total_results": 0, "artworks": []}
        assert "s-maxage=300" in res.headers["cache-control"]

    def test_track_invalid_action(self, client, repository):
        res = client.post("/api/v1/track", json={"artwork_id": "a1", "action": "like"})
        assert res.status_code == 400

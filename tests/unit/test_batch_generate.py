"""
Unit tests for GenerateArtworkUseCase.batch_generate
"""
from unittest.mock import AsyncMock

import pytest

from artstore.application.use_cases.generate_artwork import GenerateArtworkUseCase
from artstore.domain.errors import SynthesisEmpty
from artstore.domain.services.image_synthesis_port import SynthesizedImage

from tests.conftest import FIXED_NOW


@pytest.fixture
def sleep():
    return AsyncMock()


@pytest.fixture
def use_case(
    mock_style_repository,
    mock_settings_repository,
    mock_artwork_repository,
    mock_blob_storage,
    mock_synthesizer,
    mock_image_fetcher,
    first_choice_rng,
    sleep,
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
        sleep=sleep,
    )


def _style_ids(repo):
    return [c.args[0] for c in repo.get_by_id.call_args_list]


@pytest.mark.asyncio
async def test_pinned_style(use_case, mock_style_repository, mock_synthesizer, sleep):
    results, summary = await use_case.batch_generate(5, style_id="style-celestial")

    assert len(results) == 5
    assert summary.success == 5
    assert summary.failed == 0
    assert mock_synthesizer.synthesize.call_count == 5
    assert _style_ids(mock_style_repository) == ["style-celestial"] * 5
    mock_style_repository.list_active.assert_not_called()
    assert sleep.await_count == 4
    assert all(c.args == (2.0,) for c in sleep.await_args_list)


@pytest.mark.asyncio
async def test_round_robin_over_active_styles(use_case, mock_style_repository):
    _, summary = await use_case.batch_generate(3)

    assert summary.success == 3
    assert _style_ids(mock_style_repository) == ["style-abstract", "style-celestial", "style-abstract"]


@pytest.mark.asyncio
async def test_no_active_styles(use_case, mock_style_repository, mock_synthesizer, sleep):
    mock_style_repository.list_active.return_value = []

    results, summary = await use_case.batch_generate(10)

    assert results == []
    assert summary.to_dict() == {"success": 0, "failed": 0}
    mock_synthesizer.synthesize.assert_not_called()
    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_count_is_capped(use_case, mock_synthesizer, sleep):
    results, summary = await use_case.batch_generate(500, style_id="style-abstract")

    assert len(results) == 50
    assert summary.success == 50
    assert sleep.await_count == 49


@pytest.mark.asyncio
@pytest.mark.parametrize("count", [0, -3])
async def test_count_has_floor_of_one(use_case, mock_synthesizer, sleep, count):
    results, _ = await use_case.batch_generate(count, style_id="style-abstract")

    assert len(results) == 1
    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_failures_do_not_stop_the_batch(use_case, mock_synthesizer, mock_artwork_repository):
    ok = SynthesizedImage(data=b"img", mime_type="image/png")
    mock_synthesizer.synthesize.side_effect = [ok, SynthesisEmpty(), ok, SynthesisEmpty()]

    results, summary = await use_case.batch_generate(4, style_id="style-abstract")

    assert [r.success for r in results] == [True, False, True, False]
    assert results[1].error == "No candidates in response"
    assert summary.success == 2
    assert summary.failed == 2
    assert summary.success + summary.failed == len(results)
    assert mock_artwork_repository.insert.call_count == 2


@pytest.mark.asyncio
async def test_options_propagate(use_case, mock_artwork_repository, mock_synthesizer):
    await use_case.batch_generate(
        2,
        style_id="style-abstract",
        orientation="landscape",
        auto_publish=True,
        base_prompt_override="CRON BASE",
    )

    rows = [c.args[0] for c in mock_artwork_repository.insert.call_args_list]
    assert all(r["orientation"] == "landscape" for r in rows)
    assert all(r["status"] == "published" for r in rows)
    assert all(c.args[0].startswith("CRON BASE\n") for c in mock_synthesizer.synthesize.call_args_list)


@pytest.mark.asyncio
async def test_unknown_pinned_style_fails_each_item(use_case, mock_synthesizer):
    results, summary = await use_case.batch_generate(2, style_id="missing")

    assert summary.failed == 2
    assert all(r.error == "Style not found: missing" for r in results)
    mock_synthesizer.synthesize.assert_not_called()


@pytest.mark.asyncio
async def test_style_lookup_failure_returns_empty_batch(use_case, mock_style_repository, mock_synthesizer, sleep):
    mock_style_repository.list_active.side_effect = RuntimeError("supabase down")

    results, summary = await use_case.batch_generate(3)

    assert results == []
    assert summary.to_dict() == {"success": 0, "failed": 0}
    mock_synthesizer.synthesize.assert_not_called()
    sleep.assert_not_awaited()

"""
Unit tests for GeminiImageGenerator response handling and failure classification
"""
from types import SimpleNamespace
from unittest.mock import Mock, patch

import httpx
import pytest
from google.genai import errors as genai_errors

from artstore.domain.entities.artwork import ReferenceImage
from artstore.domain.errors import (
    ConfigurationMissing,
    SynthesisBlocked,
    SynthesisEmpty,
    SynthesisNoImage,
    SynthesisTransportError,
)
from artstore.infrastructure.gemini.image_generator import GeminiImageGenerator, extract_image


def _text_part(text):
    return SimpleNamespace(text=text, inline_data=None, thought=None)


def _image_part(data, mime="image/png"):
    return SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime), thought=None)


def _response(*parts, block_reason=None, candidates=True):
    feedback = SimpleNamespace(block_reason=block_reason) if block_reason else None
    cands = [SimpleNamespace(content=SimpleNamespace(parts=list(parts)))] if candidates else []
    return SimpleNamespace(candidates=cands, prompt_feedback=feedback)


class TestExtractImage:
    def test_first_image_wins(self):
        response = _response(_text_part("Here you go"), _image_part(b"one", "image/jpeg"), _image_part(b"two"))
        image = extract_image(response)
        assert image.data == b"one"
        assert image.mime_type == "image/jpeg"

    def test_missing_mime_defaults_to_png(self):
        image = extract_image(_response(_image_part(b"x", mime=None)))
        assert image.mime_type == "image/png"

    def test_blocked_with_reason(self):
        response = _response(candidates=False, block_reason="SAFETY")
        with pytest.raises(SynthesisBlocked) as exc:
            extract_image(response)
        assert "SAFETY" in str(exc.value)

    def test_blocked_reason_enum_value(self):
        reason = SimpleNamespace(value="PROHIBITED_CONTENT")
        with pytest.raises(SynthesisBlocked) as exc:
            extract_image(_response(candidates=False, block_reason=reason))
        assert exc.value.reason == "PROHIBITED_CONTENT"

    def test_empty_without_reason(self):
        with pytest.raises(SynthesisEmpty):
            extract_image(_response(candidates=False))

    def test_text_only_is_truncated_to_200_chars(self):
        text = "I cannot create that. " + "x" * 300
        with pytest.raises(SynthesisNoImage) as exc:
            extract_image(_response(_text_part(text)))
        message = str(exc.value)
        assert text[:200] in message
        assert text not in message

    def test_short_refusal_kept_whole(self):
        with pytest.raises(SynthesisNoImage) as exc:
            extract_image(_response(_text_part("I cannot create that")))
        assert "I cannot create that" in str(exc.value)

    def test_thought_parts_ignored(self):
        thought = SimpleNamespace(text="thinking", inline_data=SimpleNamespace(data=b"draft", mime_type="image/png"), thought=True)
        image = extract_image(_response(thought, _image_part(b"final")))
        assert image.data == b"final"


class TestGeminiImageGenerator:
    @pytest.fixture
    def client(self):
        client = Mock()
        client.models.generate_content.return_value = _response(_image_part(b"img"))
        return client

    def test_sends_prompt_and_images(self, client):
        generator = GeminiImageGenerator(client=client, model="test-model")
        refs = [ReferenceImage(data=b"ref1", mime_type="image/png"), ReferenceImage(data=b"ref2", mime_type="image/jpeg")]

        image = generator.synthesize("paint a nebula", refs)

        assert image.data == b"img"
        kwargs = client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["contents"][0] == "paint a nebula"
        assert len(kwargs["contents"]) == 3
        assert kwargs["config"].response_modalities == ["TEXT", "IMAGE"]

    def test_api_error_is_transport_error(self, client):
        err = genai_errors.APIError.__new__(genai_errors.APIError)
        err.code = 503
        err.message = "model overloaded"
        client.models.generate_content.side_effect = err

        with pytest.raises(SynthesisTransportError) as exc:
            GeminiImageGenerator(client=client).synthesize("p", [])
        assert exc.value.status_code == 503
        assert exc.value.body == "model overloaded"

    def test_network_error_is_transport_error(self, client):
        client.models.generate_content.side_effect = httpx.ConnectError("connection refused")
        with pytest.raises(SynthesisTransportError) as exc:
            GeminiImageGenerator(client=client).synthesize("p", [])
        assert exc.value.status_code is None

    def test_missing_api_key(self):
        settings = Mock(gemini_api_key=None, gemini_image_model="gemini-2.5-flash-image")
        with patch("artstore.infrastructure.gemini.image_generator.get_settings", return_value=settings):
            with pytest.raises(ConfigurationMissing):
                GeminiImageGenerator()

from unittest.mock import Mock, patch

import pytest
import requests

from image_beautifier.core.errors import ConfigurationError, ProviderError
from image_beautifier.image.gemini_client import (
    GeminiProvider,
    build_prompt,
    build_request_body,
    get_aspect_ratio,
    get_image_size,
)
from image_beautifier.image.provider import GenerationRequest
from image_beautifier.image.provider_config import ProviderConfig
from image_beautifier.image.service import create_image_provider

SECRET = "AIza-test-credential"


def _response(status=200, body=None, reason="OK"):
    response = Mock()
    response.ok = 200 <= status < 300
    response.status_code = status
    response.reason = reason
    response.json.return_value = body
    return response


@pytest.fixture
def configured():
    return GeminiProvider(ProviderConfig(api_key=SECRET, base_url="https://gemini.test/", model="img-model"))


@pytest.mark.parametrize(
    "width, height, expected",
    [
        (1024, 1024, "1:1"),
        (1536, 1024, "3:2"),
        (1024, 1536, "2:3"),
        (1750, 1000, "16:9"),
        (1000, 1750, "9:16"),
        (1200, 1000, "4:3"),
        (1000, 1200, "3:4"),
        (1650, 1000, "4:3"),
    ],
)
def test_aspect_ratio_bands(width, height, expected):
    assert get_aspect_ratio(width, height) == expected


@pytest.mark.parametrize(
    "width, height, expected",
    [(1024, 1024, "1K"), (256, 256, "1K"), (2000, 1000, "2K"), (2048, 2048, "2K"), (3000, 1000, "4K")],
)
def test_image_size_tiers(width, height, expected):
    assert get_image_size(width, height) == expected


def test_style_and_background_fold_into_prompt():
    assert build_prompt("a cat", "illustration", "solid") == "a cat"
    assert build_prompt("a cat", "pixel", "solid") == "pixel art style, a cat"
    assert build_prompt("a cat", "flat", "transparent") == "flat design style, a cat, transparent background"
    assert build_prompt("a cat", "watercolor", None) == "watercolor, a cat"


def test_request_body_matches_wire_contract():
    body = build_request_body(
        GenerationRequest(prompt="a rocket", style="3d", size="1536x1024", background="transparent")
    )

    assert body == {
        "contents": [{"parts": [{"text": "3D rendered style, a rocket, transparent background"}]}],
        "generationConfig": {
            "responseModalities": ["IMAGE"],
            "imageConfig": {"aspectRatio": "3:2", "imageSize": "2K"},
        },
    }


def test_unconfigured_provider_refuses_without_network():
    provider = GeminiProvider(ProviderConfig(api_key=""))

    with patch("image_beautifier.image.gemini_client.requests.post") as post:
        with pytest.raises(ConfigurationError):
            provider.generate(GenerationRequest(prompt="x"))

    assert provider.is_configured() is False
    post.assert_not_called()


def test_generate_posts_once_and_parses(configured):
    body = {"candidates": [{"content": {"parts": [{"inline_data": {"data": "QUJD"}}]}}]}

    with patch("image_beautifier.image.gemini_client.requests.post", return_value=_response(body=body)) as post:
        result = configured.generate(GenerationRequest(prompt="a rocket", size="1024x1536"))

    assert post.call_count == 1
    args, kwargs = post.call_args
    assert args[0] == "https://gemini.test/v1beta/models/img-model:generateContent"
    assert kwargs["headers"]["x-goog-api-key"] == SECRET
    assert kwargs["json"]["generationConfig"]["imageConfig"] == {"aspectRatio": "2:3", "imageSize": "2K"}
    assert kwargs["timeout"] == 60.0
    assert (result.data, result.encoding, result.width, result.height) == ("QUJD", "base64", 1024, 1536)


def test_non_success_status_raises_provider_error(configured):
    with patch(
        "image_beautifier.image.gemini_client.requests.post",
        return_value=_response(status=403, reason="Forbidden", body={"error": SECRET}),
    ):
        with pytest.raises(ProviderError) as excinfo:
            configured.generate(GenerationRequest(prompt="x"))

    assert "403" in str(excinfo.value)
    assert SECRET not in str(excinfo.value)


def test_timeout_raises_provider_error(configured):
    with patch(
        "image_beautifier.image.gemini_client.requests.post",
        side_effect=requests.exceptions.Timeout(f"https://gemini.test?key={SECRET}"),
    ):
        with pytest.raises(ProviderError) as excinfo:
            configured.generate(GenerationRequest(prompt="x"))

    assert "timed out" in str(excinfo.value)
    assert SECRET not in str(excinfo.value)


def test_non_json_body_raises_provider_error(configured):
    response = _response()
    response.json.side_effect = ValueError("no json")

    with patch("image_beautifier.image.gemini_client.requests.post", return_value=response):
        with pytest.raises(ProviderError):
            configured.generate(GenerationRequest(prompt="x"))


def test_unparseable_body_raises_provider_error(configured):
    with patch("image_beautifier.image.gemini_client.requests.post", return_value=_response(body={"candidates": []})):
        with pytest.raises(ProviderError, match="tried shapes"):
            configured.generate(GenerationRequest(prompt="x"))


def test_config_repr_hides_credential():
    assert SECRET not in repr(ProviderConfig(api_key=SECRET))


def test_provider_factory():
    assert isinstance(create_image_provider("gemini", ProviderConfig()), GeminiProvider)

    with pytest.raises(ConfigurationError):
        create_image_provider("dalle", ProviderConfig())

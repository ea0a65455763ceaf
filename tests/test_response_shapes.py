import pytest

from image_beautifier.core.errors import ProviderError
from image_beautifier.image.response_shapes import RESPONSE_SHAPES, parse_response


def test_documented_shape_golden_fixture():
    response = {
        "candidates": [
            {"content": {"parts": [{"inline_data": {"mime_type": "image/png", "data": "iVBORw0KGgo="}}]}}
        ]
    }

    result = parse_response(response, 1024, 1024)

    assert result.data == "iVBORw0KGgo="
    assert result.encoding == "base64"
    assert (result.width, result.height) == (1024, 1024)


def test_documented_shape_skips_text_parts_and_accepts_camel_case():
    response = {
        "candidates": [
            {"content": {"parts": [{"text": "Here is your image"}]}},
            {"content": {"parts": [{"text": "caption"}, {"inlineData": {"data": "QUJD"}}]}},
        ]
    }

    result = parse_response(response, 1536, 1024)

    assert result.data == "QUJD"
    assert result.encoding == "base64"


@pytest.mark.parametrize(
    "response, expected_data, expected_encoding",
    [
        ({"image": "QUJD"}, "QUJD", "base64"),
        ({"image": "https://cdn.example.com/a.png"}, "https://cdn.example.com/a.png", "url"),
        ({"data": "QUJD"}, "QUJD", "base64"),
        ({"data": "http://cdn.example.com/b.png"}, "http://cdn.example.com/b.png", "url"),
        ({"url": "https://cdn.example.com/c.png"}, "https://cdn.example.com/c.png", "url"),
        ({"images": ["QUJD", "REVG"]}, "QUJD", "base64"),
        ({"images": ["https://cdn.example.com/d.png"]}, "https://cdn.example.com/d.png", "url"),
    ],
)
def test_fallback_shapes_tag_url_and_base64(response, expected_data, expected_encoding):
    result = parse_response(response, 512, 512)

    assert result.data == expected_data
    assert result.encoding == expected_encoding


def test_documented_shape_wins_over_legacy_fields():
    response = {
        "image": "https://legacy.example.com/x.png",
        "candidates": [{"content": {"parts": [{"inline_data": {"data": "T0ZGSUNJQUw="}}]}}],
    }

    assert parse_response(response, 1024, 1024).data == "T0ZGSUNJQUw="


def test_legacy_priority_order_image_before_data():
    result = parse_response({"data": "REFUQQ==", "image": "SU1BR0U="}, 1024, 1024)

    assert result.data == "SU1BR0U="


@pytest.mark.parametrize(
    "response",
    [
        {},
        {"candidates": "not-a-list"},
        {"candidates": [None, {"content": None}, {"content": {"parts": [None, {"inline_data": "x"}]}}]},
        {"image": 42, "data": {"nested": True}, "url": None, "images": [7]},
        {"images": []},
        [],
        None,
        "plain string body",
    ],
)
def test_unmatched_responses_raise_provider_error(response):
    with pytest.raises(ProviderError) as excinfo:
        parse_response(response, 1024, 1024)

    message = str(excinfo.value)
    for label, _ in RESPONSE_SHAPES:
        assert label in message

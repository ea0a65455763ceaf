import base64
import logging

import pytest

from image_beautifier.image.provider import GenerationResult
from image_beautifier.safety.rate_limiter import SlidingWindowRateLimiter
from image_beautifier.storage.files import parse_size
from image_beautifier.storage.paths import PathGuard
from image_beautifier.tools.dispatcher import ToolDispatcher

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 13
PNG_BASE64 = base64.b64encode(PNG_BYTES).decode("ascii")


class FakeProvider:
    """In-memory `ImageProvider` recording every generation request."""

    name = "fake"

    def __init__(self, configured=True, data=PNG_BASE64, encoding="base64", error=None):
        self.configured = configured
        self.data = data
        self.encoding = encoding
        self.error = error
        self.calls = []

    def is_configured(self):
        return self.configured

    def generate(self, request):
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        width, height = parse_size(request.size)
        return GenerationResult(data=self.data, encoding=self.encoding, width=width, height=height)


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("image_beautifier")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def guard(tmp_path):
    return PathGuard(str(tmp_path), "outputs")


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def dispatcher(provider, guard, clock):
    return ToolDispatcher(
        provider,
        SlidingWindowRateLimiter(capacity=20, window_seconds=60, clock=clock),
        guard,
        secret="sk-test-secret",
    )

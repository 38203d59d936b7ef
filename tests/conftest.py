"""Shared test fixtures."""

from pathlib import Path

import pytest

from splitaud.models import FrameCount

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_manifest_path() -> Path:
    return FIXTURES_DIR / "sample_manifest.json"


@pytest.fixture
def sample_script_path() -> Path:
    return FIXTURES_DIR / "sample.avs"


class CountingOracle:
    """Frame oracle stand-in that records how often it was asked."""

    def __init__(self, frames: int = 0, error: str | None = None):
        self.result = FrameCount(frames=frames, error=error)
        self.calls: list[float] = []

    def __call__(self, framerate: float) -> FrameCount:
        self.calls.append(framerate)
        return self.result


@pytest.fixture
def oracle():
    return CountingOracle

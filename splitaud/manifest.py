"""JSON manifest schema — the contract between CLI/API and engine."""

import json
from dataclasses import dataclass, field
from pathlib import Path

from splitaud.timecode import DEFAULT_FRAMERATE, parse_framerate


@dataclass
class SplitConfig:
    """Options controlling how the audio is cut."""

    framerate: str | float = DEFAULT_FRAMERATE
    keep_intermediates: bool = False
    verbose: bool = False

    @property
    def fps(self) -> float:
        return parse_framerate(self.framerate)


@dataclass
class Manifest:
    """Top-level job description."""

    script: Path
    audio: Path
    output: Path | None = None
    version: str = "1"
    split: SplitConfig = field(default_factory=SplitConfig)

    @property
    def output_path(self) -> Path:
        """Explicit output, or the script path with a .mka suffix."""
        return self.output or self.script.with_suffix(".mka")


def load_manifest(path: str | Path) -> Manifest:
    """Load and validate a manifest from a JSON file."""
    path = Path(path)
    data = json.loads(path.read_text())

    if "script" not in data or "audio" not in data:
        raise ValueError("Manifest must contain 'script' and 'audio' fields")

    split = SplitConfig(**data["split"]) if "split" in data else SplitConfig()
    # Fail on a bad framerate before any work starts
    parse_framerate(split.framerate)

    return Manifest(
        version=data.get("version", "1"),
        script=Path(data["script"]),
        audio=Path(data["audio"]),
        output=Path(data["output"]) if data.get("output") else None,
        split=split,
    )

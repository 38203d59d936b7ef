"""Shared data types used across splitaud."""

from dataclasses import dataclass, field


@dataclass
class FrameCount:
    """Total frame count reported by the frame oracle.

    ``error`` is set when the probe failed and ``frames`` fell back to 0.
    """

    frames: int
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class TrimScan:
    """Frames extracted from an editing script, in script order."""

    frames: list[int]
    syntax: str
    frame_count: FrameCount | None = None


@dataclass
class Segment:
    """One interval produced by splitting the audio at every cut point."""

    number: int
    keep: bool

    @property
    def ident(self) -> str:
        return f"{self.number:03d}"


@dataclass
class MergePlan:
    """Everything the splitter and merger need for one run."""

    delay_ms: int
    timecodes: list[str]
    segments: list[Segment]
    use_first: bool
    frames: list[int] = field(default_factory=list)

    @property
    def keep_ids(self) -> list[str]:
        return [s.ident for s in self.segments if s.keep]

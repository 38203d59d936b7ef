"""Segment selection — decides which split segments make it into the merge.

Splitting at N cut points yields up to N+1 segments, numbered from 1 in
timeline order. The cut points alternate start/end of kept ranges, so kept
segments alternate too. Which parity is kept depends on whether the first
cut is at zero: the splitter emits no empty leading segment for a cut at
``00:00:00.000``, so segment 1 already starts a kept range.
"""

import enum

from splitaud.models import MergePlan, Segment
from splitaud.timecode import ZERO_TIMECODE


class KeepParity(enum.Enum):
    EVEN = 0
    ODD = 1

    @classmethod
    def for_cuts(cls, cut_timecodes: list[str]) -> "KeepParity":
        return cls.EVEN if cut_timecodes[0] == ZERO_TIMECODE else cls.ODD

    def keeps(self, index: int) -> bool:
        """Whether the 0-based segment ``index`` is kept."""
        return index % 2 == self.value


def plan_segments(
    cut_timecodes: list[str], total_segment_count: int | None = None
) -> tuple[list[Segment], bool]:
    """Enumerate every segment implied by the cuts with its keep flag.

    Returns ``(segments, use_first)``.
    """
    if not cut_timecodes:
        raise ValueError("plan_segments called with no cut points")

    if total_segment_count is None:
        total_segment_count = len(cut_timecodes) + 1

    parity = KeepParity.for_cuts(cut_timecodes)
    use_first = parity is KeepParity.EVEN

    segments: list[Segment] = []
    for i in range(total_segment_count):
        number = i + 1
        keep = parity.keeps(i)
        # Past the end: a cut at zero produces one fewer segment
        if use_first and number == total_segment_count:
            keep = False
        segments.append(Segment(number=number, keep=keep))
    return segments, use_first


def select_segments(
    cut_timecodes: list[str], total_segment_count: int | None = None
) -> tuple[list[str], bool]:
    """Return the zero-padded ids of kept segments and the ``use_first`` flag."""
    segments, use_first = plan_segments(cut_timecodes, total_segment_count)
    return [s.ident for s in segments if s.keep], use_first


def build_merge_plan(
    frames: list[int], timecodes: list[str], delay_ms: int = 0
) -> MergePlan:
    segments, use_first = plan_segments(timecodes)
    return MergePlan(
        delay_ms=delay_ms,
        timecodes=timecodes,
        segments=segments,
        use_first=use_first,
        frames=frames,
    )

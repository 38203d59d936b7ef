"""Trim extraction — finds cut-point frames in an AviSynth/VapourSynth script.

Two syntaxes are recognised:

* ``Trim(clip, START, END)`` / ``trim(START, END)`` calls, inclusive on both ends.
* ``clip[START:END]`` slices, exclusive on the end. A negative END counts back
  from the total frame count of the audio, which is looked up lazily.

Each syntax has its own pure parser; ``extract_frames`` tries them in order
and uses the first that finds anything.
"""

import logging
import re
from typing import Callable, Iterable

from splitaud.models import FrameCount, TrimScan

logger = logging.getLogger(__name__)

TRIM_CALL_RE = re.compile(r"[tT]rim\((?:\w+, ?)?(\d+), ?(\d+)\)")
SLICE_RE = re.compile(r"clip\[(\d+): ?(-?\d+)\]")

FrameOracle = Callable[[float], FrameCount]
Parser = Callable[[str], list[int]]


class NoTrimsFoundError(ValueError):
    """Raised when a script contains no recognisable trims."""
    pass


class TrimParseError(ValueError):
    """Raised when a matched trim holds a number that cannot be parsed."""

    def __init__(self, match: re.Match, reason: str):
        self.text = match.group(0)
        self.position = match.start()
        super().__init__(f"Cannot parse {self.text!r} at offset {self.position}: {reason}")


def _to_int(match: re.Match, group: int) -> int:
    try:
        return int(match.group(group))
    except ValueError as e:
        raise TrimParseError(match, str(e)) from e


def parse_trim_calls(text: str) -> list[int]:
    """Return START, END for every trim call, in text order."""
    frames: list[int] = []
    for m in TRIM_CALL_RE.finditer(text):
        frames.append(_to_int(m, 1))
        frames.append(_to_int(m, 2))
    return frames


def parse_slices(text: str, framerate: float, total_frames: FrameOracle) -> list[int]:
    """Return START, inclusive END for every ``clip[a:b]`` slice, in text order.

    ``total_frames`` is only called for negative ends, and at most once.
    """
    cached: list[FrameCount] = []

    def _total() -> int:
        if not cached:
            cached.append(total_frames(framerate))
        return cached[0].frames

    frames: list[int] = []
    for m in SLICE_RE.finditer(text):
        start = _to_int(m, 1)
        end = _to_int(m, 2)
        if end < 0:
            end = _total() + end
        else:
            end -= 1
        frames.append(max(start, 0))
        frames.append(max(end, 0))
    return frames


def first_nonempty(
    text: str, parsers: Iterable[tuple[str, Parser]]
) -> tuple[str, list[int]] | None:
    """Run ``parsers`` in order and return the first non-empty result."""
    for name, parser in parsers:
        frames = parser(text)
        if frames:
            return name, frames
    return None


def extract_frames(text: str, framerate: float, total_frames: FrameOracle) -> TrimScan:
    """Extract ordered cut-point frames from script text.

    Raises NoTrimsFoundError if neither syntax matches.
    """
    consulted: list[FrameCount] = []

    def _oracle(fps: float) -> FrameCount:
        count = total_frames(fps)
        if not count.ok:
            logger.warning(
                "Could not determine total frame count (%s); "
                "negative slice ends resolve against 0",
                count.error,
            )
        consulted.append(count)
        return count

    found = first_nonempty(
        text,
        [
            ("trim", parse_trim_calls),
            ("slice", lambda t: parse_slices(t, framerate, _oracle)),
        ],
    )
    if found is None:
        raise NoTrimsFoundError("No trims found in script")

    syntax, frames = found
    logger.debug("Found %d cut points using %s syntax", len(frames), syntax)
    return TrimScan(
        frames=frames,
        syntax=syntax,
        frame_count=consulted[0] if consulted else None,
    )

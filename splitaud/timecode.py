"""Frame/timecode conversion and small parsers for run parameters."""

import math
import re

ZERO_TIMECODE = "00:00:00.000"
DEFAULT_FRAMERATE = "30000/1001"

_DELAY_RE = re.compile(r"DELAY (-?\d+)ms")

# Absorbs float error such as 0.29 * 1000 == 289.99999999999997
_MS_EPSILON = 1e-6

_DAY_MS = 24 * 60 * 60 * 1000


class TimecodeOverflowError(ValueError):
    """Raised when a frame lands at or beyond 24 hours."""
    pass


def to_timecode(frame: int, framerate: float) -> str:
    """Format ``frame`` as ``HH:MM:SS.mmm`` at the given framerate.

    Sub-millisecond precision is truncated, not rounded.
    """
    if framerate <= 0:
        raise ValueError(f"Framerate must be positive, got {framerate}")
    if frame < 0:
        raise ValueError(f"Frame index must be non-negative, got {frame}")

    try:
        total_ms = math.floor(frame * 1000 / framerate + _MS_EPSILON)
    except OverflowError:
        raise TimecodeOverflowError(f"Frame {frame} is too large for a timecode") from None
    if total_ms >= _DAY_MS:
        raise TimecodeOverflowError(
            f"Frame {frame} at {framerate:.3f} fps is past 24 hours"
        )

    h, rem = divmod(total_ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms = divmod(rem, 1000)
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"


def parse_framerate(value: str | float | int) -> float:
    """Parse a framerate given as ``NUM/DEN`` or a plain number."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid framerate: {value!r}")
    if isinstance(value, (int, float)):
        fps = float(value)
    else:
        text = str(value).strip()
        try:
            if "/" in text:
                num, den = text.split("/", 1)
                fps = float(num) / float(den)
            else:
                fps = float(text)
        except (ValueError, ZeroDivisionError):
            raise ValueError(f"Invalid framerate: {value!r}") from None

    if not math.isfinite(fps) or fps <= 0:
        raise ValueError(f"Framerate must be positive, got {value!r}")
    return fps


def parse_delay(name: str) -> int:
    """Return the ``DELAY <n>ms`` offset embedded in a filename, or 0."""
    m = _DELAY_RE.search(name)
    return int(m.group(1)) if m else 0

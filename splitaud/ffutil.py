"""ffprobe/mkvmerge subprocess helpers."""

import logging
import math
import re
import shutil
import subprocess
from pathlib import Path

from splitaud.models import FrameCount

logger = logging.getLogger(__name__)

_SPLIT_PART_RE = r"\.split-\d{3}\.mka$"


class ToolNotFoundError(RuntimeError):
    pass


def check_tools(tools: tuple[str, ...] = ("mkvmerge", "ffprobe")) -> None:
    """Raise ToolNotFoundError if any of ``tools`` is not on PATH."""
    for cmd in tools:
        if shutil.which(cmd) is None:
            raise ToolNotFoundError(f"{cmd} not found on PATH")


def total_frames(input_path: Path, framerate: float) -> FrameCount:
    """Count the frames spanned by the first audio stream of ``input_path``.

    Never raises for a failed probe: the count degrades to 0 and the reason
    is carried on the result.
    """
    cmd = [
        "ffprobe",
        "-v", "error",
        "-select_streams", "a:0",
        "-show_entries", "format=duration",
        "-of", "default=noprint_wrappers=1:nokey=1",
        str(input_path),
    ]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        return FrameCount(frames=0, error=f"ffprobe could not run: {e}")

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        return FrameCount(
            frames=0,
            error=f"ffprobe failed (rc={result.returncode}): {stderr}" if stderr
            else f"ffprobe failed (rc={result.returncode})",
        )

    try:
        duration = float(result.stdout.strip())
    except ValueError:
        return FrameCount(
            frames=0, error=f"unexpected ffprobe duration {result.stdout.strip()!r}"
        )

    frames = max(math.floor(duration * framerate), 0)
    logger.debug("%s: %.3fs -> %d frames", input_path, duration, frames)
    return FrameCount(frames=frames)


def split_base(output_path: Path) -> Path:
    """Path handed to mkvmerge's -o when splitting; parts get -NNN appended."""
    return output_path.with_suffix(".split.mka")


def split_part(output_path: Path, ident: str) -> Path:
    return output_path.with_suffix(f".split-{ident}.mka")


def _run_mkvmerge(cmd: list[str]) -> subprocess.CompletedProcess:
    logger.debug("Running: %s", " ".join(cmd))
    result = subprocess.run(cmd, capture_output=True, text=True)
    if result.stdout:
        logger.info(result.stdout.rstrip())
    # mkvmerge: 0 = ok, 1 = finished with warnings, 2 = error
    if result.returncode >= 2:
        raise subprocess.CalledProcessError(
            result.returncode, cmd, output=result.stdout, stderr=result.stderr
        )
    return result


def split_audio(
    input_path: Path, output_path: Path, timecodes: list[str], delay_ms: int = 0
) -> None:
    """Split ``input_path`` at each timecode into ``<output>.split-NNN.mka``."""
    if not timecodes:
        raise ValueError("split_audio called with no timecodes")

    cmd = [
        "mkvmerge",
        "-o", str(split_base(output_path)),
        "--sync", f"0:{delay_ms}",
        str(input_path),
        "--split", f"timecodes:{','.join(timecodes)}",
    ]
    _run_mkvmerge(cmd)


def merge_args(files: list[Path]) -> list[str]:
    """mkvmerge append syntax: first file bare, the rest prefixed with '+'."""
    return [str(f) if i == 0 else f"+{f}" for i, f in enumerate(files)]


def merge_segments(files: list[Path], output_path: Path) -> None:
    """Concatenate ``files`` in order into ``output_path``."""
    if not files:
        raise ValueError("merge_segments called with empty file list")

    cmd = ["mkvmerge", "-o", str(output_path), *merge_args(files)]
    _run_mkvmerge(cmd)


def cleanup_split_files(output_path: Path) -> list[Path]:
    """Remove split intermediates belonging to ``output_path``."""
    directory = output_path.parent
    pattern = re.compile(re.escape(output_path.stem) + _SPLIT_PART_RE)
    removed: list[Path] = []
    for entry in directory.iterdir():
        if entry.is_file() and pattern.match(entry.name):
            entry.unlink(missing_ok=True)
            removed.append(entry)
    base = split_base(output_path)
    if base.exists():
        base.unlink()
        removed.append(base)
    logger.debug("Removed %d intermediate files", len(removed))
    return removed

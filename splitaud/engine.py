"""Orchestrator — runs the split/merge pipeline defined by a Manifest."""

import logging
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Callable

from splitaud import ffutil
from splitaud.analyzers.trims import extract_frames
from splitaud.editors.segments import build_merge_plan
from splitaud.editors.splice import apply_plan
from splitaud.manifest import Manifest
from splitaud.models import MergePlan
from splitaud.timecode import parse_delay, to_timecode

logger = logging.getLogger(__name__)


@dataclass
class EngineResult:
    output_path: Path
    delay_ms: int = 0
    frames: list[int] = field(default_factory=list)
    timecodes: list[str] = field(default_factory=list)
    kept_segments: list[str] = field(default_factory=list)
    probe_warning: str | None = None
    dry_run: bool = False


def read_script(path: Path) -> str:
    """Read script text, replacing undecodable bytes."""
    return path.read_bytes().decode("utf-8", errors="replace")


def plan(manifest: Manifest) -> tuple[MergePlan, str | None]:
    """Build the merge plan without touching any audio.

    Returns ``(plan, probe_warning)``. Raises NoTrimsFoundError when the
    script has no trims.
    """
    fps = manifest.split.fps
    delay_ms = parse_delay(str(manifest.audio))
    text = read_script(manifest.script)

    scan = extract_frames(text, fps, partial(ffutil.total_frames, manifest.audio))
    timecodes = [to_timecode(f, fps) for f in scan.frames]
    logger.debug("Cut points: %s", ",".join(timecodes))

    probe_warning = None
    if scan.frame_count is not None and not scan.frame_count.ok:
        probe_warning = scan.frame_count.error

    return build_merge_plan(scan.frames, timecodes, delay_ms), probe_warning


def process(
    manifest: Manifest,
    on_progress: Callable[[str, float], None] | None = None,
    dry_run: bool = False,
) -> EngineResult:
    """Execute the full pipeline.

    Args:
        manifest: Validated job manifest.
        on_progress: Optional callback(stage_name, fraction_complete).
        dry_run: Stop after planning; no external process is run except
            the frame-count probe.
    """

    def _progress(stage: str, frac: float) -> None:
        if on_progress:
            on_progress(stage, frac)

    def _sub_progress(base: float, span: float):
        """Return a callback that maps a stage's [0,1] to [base, base+span]."""
        def cb(stage: str, frac: float) -> None:
            _progress(stage, base + frac * span)
        return cb

    output = manifest.output_path

    _progress("Reading trims", 0.0)
    merge_plan, probe_warning = plan(manifest)
    _progress(f"Found {len(merge_plan.timecodes)} cut points", 0.1)

    result = EngineResult(
        output_path=output,
        delay_ms=merge_plan.delay_ms,
        frames=merge_plan.frames,
        timecodes=merge_plan.timecodes,
        kept_segments=merge_plan.keep_ids,
        probe_warning=probe_warning,
        dry_run=dry_run,
    )
    if dry_run:
        _progress("Done", 1.0)
        return result

    ffutil.check_tools(("mkvmerge",))
    apply_plan(
        manifest.audio,
        merge_plan,
        output,
        keep_intermediates=manifest.split.keep_intermediates,
        on_progress=_sub_progress(0.1, 0.9),
    )

    _progress("Done", 1.0)
    return result

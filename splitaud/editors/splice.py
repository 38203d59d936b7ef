"""Splice editor — splits the audio and merges the kept segments back."""

from pathlib import Path
from typing import Callable

from splitaud import ffutil
from splitaud.models import MergePlan


def apply_plan(
    input_path: Path,
    plan: MergePlan,
    output_path: Path,
    keep_intermediates: bool = False,
    on_progress: Callable[[str, float], None] | None = None,
) -> Path:
    """Split ``input_path`` at the plan's timecodes and merge kept segments."""
    keep_ids = plan.keep_ids
    if not keep_ids:
        raise ValueError("No segments to keep — entire audio would be removed")

    def _progress(stage: str, frac: float) -> None:
        if on_progress:
            on_progress(stage, frac)

    try:
        _progress(f"Splitting audio with {plan.delay_ms}ms delay", 0.0)
        ffutil.split_audio(input_path, output_path, plan.timecodes, delay_ms=plan.delay_ms)

        _progress(f"Merging {len(keep_ids)} segments", 0.5)
        ffutil.merge_segments(
            [ffutil.split_part(output_path, ident) for ident in keep_ids],
            output_path,
        )
    finally:
        if not keep_intermediates:
            _progress("Cleaning temporary files", 0.9)
            ffutil.cleanup_split_files(output_path)

    return output_path

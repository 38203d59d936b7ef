"""API routes for splitaud."""

from pathlib import Path

from flask import Blueprint, jsonify, request

from splitaud.analyzers.trims import NoTrimsFoundError, TrimParseError, extract_frames
from splitaud.editors.segments import build_merge_plan
from splitaud.ffutil import merge_args, split_part
from splitaud.models import FrameCount
from splitaud.timecode import (
    DEFAULT_FRAMERATE,
    TimecodeOverflowError,
    parse_delay,
    parse_framerate,
    to_timecode,
)

bp = Blueprint("web", __name__)


def _json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _framerate(config: dict) -> float:
    return parse_framerate(config.get("framerate", DEFAULT_FRAMERATE))


@bp.route("/api/plan", methods=["POST"])
def merge_plan():
    config = _json_body()
    script = config.get("script")
    if not isinstance(script, str):
        return jsonify({"error": "No script provided"}), 400

    try:
        fps = _framerate(config)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    total = config.get("total_frames")
    if total is not None and (not isinstance(total, int) or isinstance(total, bool)):
        return jsonify({"error": "total_frames must be an integer"}), 400

    def oracle(_fps: float) -> FrameCount:
        if total is None:
            return FrameCount(frames=0, error="total_frames not supplied")
        return FrameCount(frames=max(total, 0))

    audio_name = config.get("audio_name", "")
    output = config.get("output", "output.mka")
    if not isinstance(audio_name, str) or not isinstance(output, str) or not output:
        return jsonify({"error": "audio_name and output must be strings"}), 400
    output = Path(output)

    try:
        scan = extract_frames(script, fps, oracle)
        timecodes = [to_timecode(f, fps) for f in scan.frames]
    except (NoTrimsFoundError, TrimParseError, TimecodeOverflowError) as e:
        return jsonify({"error": str(e)}), 400

    plan = build_merge_plan(scan.frames, timecodes, parse_delay(audio_name))
    resp = {
        "frames": plan.frames,
        "timecodes": plan.timecodes,
        "segments": [{"id": s.ident, "keep": s.keep} for s in plan.segments],
        "use_first": plan.use_first,
        "delay_ms": plan.delay_ms,
        "merge_args": merge_args([split_part(output, i) for i in plan.keep_ids]),
    }
    if scan.frame_count is not None and not scan.frame_count.ok:
        resp["warning"] = scan.frame_count.error
    return jsonify(resp)


@bp.route("/api/timecode", methods=["POST"])
def timecode():
    config = _json_body()
    frame = config.get("frame")
    if not isinstance(frame, int) or isinstance(frame, bool) or frame < 0:
        return jsonify({"error": "frame must be a non-negative integer"}), 400

    try:
        return jsonify({"timecode": to_timecode(frame, _framerate(config))})
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

"""Thin CLI entry point — builds a Manifest and calls the engine."""

import argparse
import logging
import subprocess
import sys
from pathlib import Path

from splitaud.analyzers.trims import NoTrimsFoundError, TrimParseError
from splitaud.engine import process
from splitaud.ffutil import ToolNotFoundError
from splitaud.manifest import Manifest, SplitConfig, load_manifest
from splitaud.timecode import DEFAULT_FRAMERATE, TimecodeOverflowError, parse_framerate


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="splitaud",
        description="splitaud — cut audio to match the trims in an AviSynth/VapourSynth script.",
    )
    sub = parser.add_subparsers(dest="command")

    proc = sub.add_parser("process", help="Split and re-merge an audio file")
    proc.add_argument("script", nargs="?", type=Path, help="Input avs or vpy script")
    proc.add_argument("--manifest", "-m", type=Path, help="Path to a JSON manifest file")
    proc.add_argument("--input", "-i", type=Path, help="Input audio file")
    proc.add_argument("--output", "-o", type=Path, help="Output mka file (default: script path plus .mka)")
    proc.add_argument("--framerate", "-f", type=str, default=DEFAULT_FRAMERATE, metavar="FRACTION",
                      help=f"Framerate of the script (default {DEFAULT_FRAMERATE})")
    proc.add_argument("--keep-intermediates", action="store_true", help="Leave split-NNN.mka files in place")
    proc.add_argument("--dry-run", action="store_true", help="Print the cut points and kept segments only")
    proc.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    serve = sub.add_parser("serve", help="Launch the planning web API")
    serve.add_argument("--port", type=int, default=8321, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        logging.basicConfig(level=logging.INFO)
        from splitaud.web import create_app
        app = create_app()
        print(f"splitaud API: http://{args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=False)
        return

    try:
        if args.manifest:
            m = load_manifest(args.manifest)
        elif args.script and args.input:
            m = Manifest(
                script=args.script,
                audio=args.input,
                output=args.output,
                split=SplitConfig(
                    framerate=args.framerate,
                    keep_intermediates=args.keep_intermediates,
                    verbose=args.verbose,
                ),
            )
            parse_framerate(args.framerate)
        else:
            print("Error: provide SCRIPT and --input, or --manifest.", file=sys.stderr)
            sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or m.split.verbose) else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    def on_progress(stage: str, frac: float) -> None:
        print(f"  [{frac:3.0%}] {stage}")

    try:
        result = process(m, on_progress=on_progress, dry_run=args.dry_run)
    except (FileNotFoundError, NoTrimsFoundError, TrimParseError, TimecodeOverflowError, ToolNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or e.output or "").strip()
        print(f"Error: mkvmerge failed (rc={e.returncode}): {stderr[-500:]}", file=sys.stderr)
        sys.exit(1)

    print()
    if result.probe_warning:
        print(f"  Warning: {result.probe_warning}")
    print(f"  Delay: {result.delay_ms}ms")
    print(f"  Cut points: {','.join(result.timecodes)}")
    print(f"  Kept segments: {', '.join(result.kept_segments)}")
    if result.dry_run:
        print("Dry run, no audio written.")
    else:
        print(f"Done! Output: {result.output_path}")

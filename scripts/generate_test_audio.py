#!/usr/bin/env python3
"""Generate a synthetic audio track and matching script for splitaud testing.

Produces a 20-second tone track whose pitch changes every 5 seconds, and an
AviSynth script that keeps 0-5s and 10-15s at 24 fps:
  0-5s    440 Hz   kept
  5-10s   880 Hz   cut
  10-15s  660 Hz   kept
  15-20s  330 Hz   cut
Run ``splitaud process`` on the pair and only the 440 Hz and 660 Hz parts
should remain.
"""

import subprocess
import sys
from pathlib import Path

SCRIPT = """\
src = BlankClip(length=480, fps=24)
Trim(src, 0, 119) ++ Trim(src, 240, 359)
"""


def generate_test_audio(output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)

    audio_filter = (
        "sine=f=440:d=5[a0];"
        "sine=f=880:d=5[a1];"
        "sine=f=660:d=5[a2];"
        "sine=f=330:d=5[a3];"
        "[a0][a1][a2][a3]concat=n=4:v=0:a=1[aout]"
    )

    audio_path = output_dir / "synthetic DELAY 0ms.mka"
    cmd = [
        "ffmpeg", "-y",
        "-filter_complex", audio_filter,
        "-map", "[aout]",
        "-c:a", "flac",
        str(audio_path),
    ]
    subprocess.run(cmd, check=True)

    script_path = output_dir / "synthetic.avs"
    script_path.write_text(SCRIPT)
    print(f"Generated: {audio_path}")
    print(f"Generated: {script_path}")


if __name__ == "__main__":
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("tests/fixtures/synthetic")
    generate_test_audio(out)

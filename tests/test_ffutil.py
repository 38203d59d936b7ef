"""Unit tests for ffutil — probe and mkvmerge subprocess wrappers."""

import subprocess
from pathlib import Path
from unittest.mock import patch, MagicMock

import pytest

from splitaud.ffutil import (
    ToolNotFoundError,
    check_tools,
    cleanup_split_files,
    merge_args,
    merge_segments,
    split_audio,
    split_base,
    split_part,
    total_frames,
)


# ---------------------------------------------------------------------------
# total_frames (mocked subprocess)
# ---------------------------------------------------------------------------

class TestTotalFrames:
    @patch("splitaud.ffutil.subprocess.run")
    def test_basic(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="10.500000\n", stderr="")
        count = total_frames(Path("audio.aac"), 24.0)
        assert count.frames == 252
        assert count.ok

    @patch("splitaud.ffutil.subprocess.run")
    def test_floors(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="1.999\n", stderr="")
        assert total_frames(Path("audio.aac"), 24.0).frames == 47

    @patch("splitaud.ffutil.subprocess.run")
    def test_command_shape(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="1.0\n", stderr="")
        total_frames(Path("audio.aac"), 24.0)

        mock_run.assert_called_once()
        cmd = mock_run.call_args[0][0]
        assert cmd[0] == "ffprobe"
        assert cmd[cmd.index("-select_streams") + 1] == "a:0"
        assert cmd[cmd.index("-show_entries") + 1] == "format=duration"
        assert cmd[-1] == "audio.aac"

    @patch("splitaud.ffutil.subprocess.run")
    def test_nonzero_exit_degrades_to_zero(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="No such file")
        count = total_frames(Path("missing.aac"), 24.0)
        assert count.frames == 0
        assert not count.ok
        assert "rc=1" in count.error
        assert "No such file" in count.error

    @patch("splitaud.ffutil.subprocess.run", side_effect=FileNotFoundError("ffprobe"))
    def test_missing_ffprobe_degrades_to_zero(self, mock_run):
        count = total_frames(Path("audio.aac"), 24.0)
        assert count.frames == 0
        assert "could not run" in count.error

    @patch("splitaud.ffutil.subprocess.run")
    def test_unparseable_duration(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="N/A\n", stderr="")
        count = total_frames(Path("audio.aac"), 24.0)
        assert count.frames == 0
        assert "N/A" in count.error

    @patch("splitaud.ffutil.subprocess.run")
    def test_negative_duration_clamped(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="-0.5\n", stderr="")
        count = total_frames(Path("audio.aac"), 24.0)
        assert count.frames == 0
        assert count.ok


# ---------------------------------------------------------------------------
# check_tools
# ---------------------------------------------------------------------------

class TestCheckTools:
    @patch("splitaud.ffutil.shutil.which", return_value="/usr/bin/tool")
    def test_all_present(self, mock_which):
        check_tools()
        assert mock_which.call_count == 2

    @patch("splitaud.ffutil.shutil.which", return_value=None)
    def test_missing(self, mock_which):
        with pytest.raises(ToolNotFoundError, match="mkvmerge not found"):
            check_tools(("mkvmerge",))


# ---------------------------------------------------------------------------
# split/merge (mocked subprocess — just verify the command shape)
# ---------------------------------------------------------------------------

class TestSplitPaths:
    def test_split_base(self):
        assert split_base(Path("out/ep01.mka")) == Path("out/ep01.split.mka")

    def test_split_part(self):
        assert split_part(Path("out/ep01.mka"), "003") == Path("out/ep01.split-003.mka")


class TestSplitAudio:
    @patch("splitaud.ffutil.subprocess.run")
    def test_builds_command(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        split_audio(
            Path("in DELAY -42ms.aac"),
            Path("ep01.mka"),
            ["00:00:00.000", "00:00:04.125"],
            delay_ms=-42,
        )

        cmd = mock_run.call_args[0][0]
        assert cmd[:3] == ["mkvmerge", "-o", "ep01.split.mka"]
        assert cmd[cmd.index("--sync") + 1] == "0:-42"
        assert "in DELAY -42ms.aac" in cmd
        assert cmd[cmd.index("--split") + 1] == "timecodes:00:00:00.000,00:00:04.125"

    @patch("splitaud.ffutil.subprocess.run")
    def test_warnings_exit_code_accepted(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1, stdout="Warning: ...", stderr="")
        split_audio(Path("in.aac"), Path("ep01.mka"), ["00:00:01.000"])

    @patch("splitaud.ffutil.subprocess.run")
    def test_error_exit_code_raises(self, mock_run):
        mock_run.return_value = MagicMock(returncode=2, stdout="Error: bad file", stderr="")
        with pytest.raises(subprocess.CalledProcessError):
            split_audio(Path("in.aac"), Path("ep01.mka"), ["00:00:01.000"])

    def test_no_timecodes_raises(self):
        with pytest.raises(ValueError, match="no timecodes"):
            split_audio(Path("in.aac"), Path("ep01.mka"), [])


class TestMergeSegments:
    def test_merge_args(self):
        files = [Path("a.mka"), Path("b.mka"), Path("c.mka")]
        assert merge_args(files) == ["a.mka", "+b.mka", "+c.mka"]

    @patch("splitaud.ffutil.subprocess.run")
    def test_builds_command(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        merge_segments([Path("x.split-001.mka"), Path("x.split-003.mka")], Path("x.mka"))

        cmd = mock_run.call_args[0][0]
        assert cmd == ["mkvmerge", "-o", "x.mka", "x.split-001.mka", "+x.split-003.mka"]

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="empty file list"):
            merge_segments([], Path("x.mka"))


# ---------------------------------------------------------------------------
# cleanup_split_files
# ---------------------------------------------------------------------------

class TestCleanupSplitFiles:
    def test_removes_only_own_parts(self, tmp_path: Path):
        output = tmp_path / "ep01.mka"
        own = [tmp_path / "ep01.split-001.mka", tmp_path / "ep01.split-002.mka"]
        other = [
            tmp_path / "ep02.split-001.mka",
            tmp_path / "ep01.split-1.mka",
            tmp_path / "ep01.mka",
        ]
        for p in own + other:
            p.write_bytes(b"")

        removed = cleanup_split_files(output)

        assert sorted(removed) == sorted(own)
        assert all(not p.exists() for p in own)
        assert all(p.exists() for p in other)

    def test_removes_split_base(self, tmp_path: Path):
        output = tmp_path / "ep01.mka"
        base = tmp_path / "ep01.split.mka"
        base.write_bytes(b"")
        cleanup_split_files(output)
        assert not base.exists()

import hashlib
import os
import stat

import pytest

from finyl.separate import (
    all_channel_files_exist,
    gen_channel_filepath,
    get_filename,
    separate_track,
)
from finyl.util import CommandError


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/music/track.mp3", "track"),
        ("/music/my.track.flac", "my.track"),
        ("/music/noext", "noext"),
        ("relative.wav", "relative"),
        ("/music/dir/", "dir"),
    ],
)
def test_get_filename(path, expected):
    assert get_filename(path) == expected


def test_gen_channel_filepath_layout():
    result = gen_channel_filepath("/m/song.mp3", "/usb/out", "vocals", "abc")
    assert result == "/usb/out/song-vocals-abc.wav"


def test_gen_channel_filepath_root_with_slash():
    with_slash = gen_channel_filepath("/m/song.mp3", "/usb/out/", "no_vocals", "d")
    without = gen_channel_filepath("/m/song.mp3", "/usb/out", "no_vocals", "d")
    assert with_slash == without


def test_all_channel_files_exist(tmp_path):
    root = str(tmp_path)
    assert not all_channel_files_exist("/m/song.mp3", root, "h")
    open(gen_channel_filepath("/m/song.mp3", root, "vocals", "h"), "w").close()
    assert not all_channel_files_exist("/m/song.mp3", root, "h")
    open(gen_channel_filepath("/m/song.mp3", root, "no_vocals", "h"), "w").close()
    assert all_channel_files_exist("/m/song.mp3", root, "h")


@pytest.fixture
def track(tmp_path):
    path = tmp_path / "song.mp3"
    path.write_bytes(b"audio data")
    return path


def _install_fake_demucs(tmp_path, monkeypatch, exit_status):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "demucs"
    script.write_text(f'#!/bin/sh\necho "$@"\nexit {exit_status}\n')
    script.chmod(script.stat().st_mode | stat.S_IEXEC)
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))


def test_separate_track_skips_existing(tmp_path, track, capsys):
    usb = tmp_path / "usb"
    md5 = hashlib.md5(b"audio data").hexdigest()
    model_root = usb / "finyl" / "separated" / "hdemucs_mmi"
    model_root.mkdir(parents=True)
    for stem in ("vocals", "no_vocals"):
        (model_root / f"song-{stem}-{md5}.wav").touch()
    assert separate_track(str(usb), str(track)) is False
    assert "skipping" in capsys.readouterr().out


def test_separate_track_runs_demucs(tmp_path, track, monkeypatch, capsys):
    _install_fake_demucs(tmp_path, monkeypatch, 0)
    usb = tmp_path / "usb"
    assert separate_track(str(usb), str(track)) is True
    out = capsys.readouterr().out
    md5 = hashlib.md5(b"audio data").hexdigest()
    assert f"--two-stems=vocals {track}" in out
    assert f"{{track}}-{{stem}}-{md5}.{{ext}}" in out


def test_separate_track_failure_raises(tmp_path, track, monkeypatch):
    _install_fake_demucs(tmp_path, monkeypatch, 1)
    with pytest.raises(CommandError):
        separate_track(str(tmp_path / "usb"), str(track))


def test_separate_track_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        separate_track(str(tmp_path), str(tmp_path / "missing.mp3"))
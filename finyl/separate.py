"""Split tracks into vocal and instrumental stems with demucs."""

from __future__ import annotations

import os

from finyl.util import compute_md5, find_char_last, join_path, run_command

MODEL = "hdemucs_mmi"
EXTENSION = "wav"
STEMS = ("vocals", "no_vocals")
SEPARATED_DIR = "finyl/separated"


def get_filename(filepath: str) -> str:
    """Return the base name of a path without its last extension."""
    stripped = filepath.rstrip("/")
    base = os.path.basename(stripped) if stripped else "/"
    dot = find_char_last(base, ".")
    return base if dot < 0 else base[:dot]


def gen_channel_filepath(filepath: str, root: str, stem: str, md5: str) -> str:
    """Return where the given stem of a track is stored under root."""
    filename = f"{get_filename(filepath)}-{stem}-{md5}.{EXTENSION}"
    return join_path(root, filename)


def all_channel_files_exist(filepath: str, root: str, md5: str) -> bool:
    """Return True when every stem file of a track already exists under root."""
    return all(
        os.path.exists(gen_channel_filepath(filepath, root, stem, md5))
        for stem in STEMS
    )


def separate_track(usb_root: str, filepath: str) -> bool:
    """Run demucs on a track unless its stems already exist.

    Returns True when demucs was run and False when it was skipped.
    Raises CommandError when demucs fails.
    """
    root = join_path(usb_root, SEPARATED_DIR)
    model_root = join_path(root, MODEL)
    md5 = compute_md5(filepath)
    command = [
        "demucs",
        "-n",
        MODEL,
        "--two-stems=vocals",
        filepath,
        "-o",
        root,
        "--filename",
        f"{{track}}-{{stem}}-{md5}.{{ext}}",
    ]
    print("\nRunning:")
    print("\t" + " ".join(command))

    if all_channel_files_exist(filepath, model_root, md5):
        print("skipping")
        return False

    for line in run_command(command):
        print(line)
    return True
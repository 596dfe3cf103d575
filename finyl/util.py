"""Small helpers shared across the package: paths, hashing and external commands."""

from __future__ import annotations

import hashlib
import os
import random
import resource
import string
import subprocess
from collections.abc import Iterator, Sequence
from pathlib import Path

_RANDOM_ALPHABET = string.ascii_uppercase + string.digits
_MD5_CHUNK = 1024


class CommandError(RuntimeError):
    """Raised when an external command reports failure."""

    def __init__(self, message: str, exit_status: int | None = None) -> None:
        super().__init__(message)
        self.exit_status = exit_status


def is_raspi(cpuinfo_path: str | os.PathLike[str] = "/proc/cpuinfo") -> bool:
    """Return True when the CPU description names a Raspberry Pi."""
    try:
        with open(cpuinfo_path, encoding="utf-8", errors="replace") as cpuinfo:
            return any("Raspberry Pi" in line for line in cpuinfo)
    except OSError:
        return False


def memory_usage() -> int:
    """Return the resident set size of this process in kilobytes."""
    try:
        result = subprocess.run(
            ["ps", "-o", "rss=", "-p", str(os.getpid())],
            capture_output=True,
            text=True,
            check=True,
        )
        return int(result.stdout.split()[0])
    except (OSError, subprocess.CalledProcessError, ValueError, IndexError):
        return resource.getrusage(resource.RUSAGE_SELF).ru_maxrss


def join_path(path1: str | None, path2: str | None) -> str:
    """Join two path fragments with exactly one slash between them."""
    if path1 is None and path2 is None:
        return ""
    if path1 is None:
        return path2  # type: ignore[return-value]
    if path2 is None:
        return path1
    if path2 == "/":
        return path1

    end_with_slash = path1.endswith("/")
    start_with_slash = path2.startswith("/")
    if end_with_slash and start_with_slash:
        return path1 + path2[1:]
    if end_with_slash or start_with_slash:
        return path1 + path2
    return f"{path1}/{path2}"


def generate_random_string(size: int) -> str:
    """Return a random string of upper-case letters and digits."""
    return "".join(random.choices(_RANDOM_ALPHABET, k=size))


def compute_md5(filepath: str | os.PathLike[str]) -> str:
    """Return the hexadecimal MD5 digest of a file's contents."""
    digest = hashlib.md5()
    with Path(filepath).open("rb") as handle:
        for chunk in iter(lambda: handle.read(_MD5_CHUNK), b""):
            digest.update(chunk)
    return digest.hexdigest()


def find_char_last(text: str, char: str) -> int:
    """Return the index of the last occurrence of char in text, or -1."""
    return text.rfind(char)


def is_wav(filename: str) -> bool:
    """Return True when the extension after the last dot starts with 'wav'."""
    dot = find_char_last(filename, ".")
    return filename[dot + 1:].startswith("wav")


def run_command(command: str | Sequence[str]) -> Iterator[str]:
    """Run a command and yield its standard output line by line.

    A string is run through the shell. An exit status of 1 raises
    CommandError once the output has been consumed.
    """
    shell = isinstance(command, str)
    with subprocess.Popen(
        command, shell=shell, stdout=subprocess.PIPE, text=True
    ) as proc:
        stdout = proc.stdout
        if stdout is None:
            raise CommandError("failed to open the command stream")
        for line in stdout:
            yield line.rstrip("\n")
        rest = stdout.read()
        status = proc.wait()
    if status == 1:
        raise CommandError(rest or f"command failed: {command}", status)
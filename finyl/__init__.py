"""Tools for rekordbox media: database reader, stem separation, spectrum and waveform geometry."""

__version__ = "0.1.0"

__all__ = [
    "binary",
    "database",
    "rows",
    "separate",
    "simple_rows",
    "spectrum",
    "strings",
    "usb",
    "util",
    "waveform",
]
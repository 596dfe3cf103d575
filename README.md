# finyl

A small toolkit for working with DJ media prepared by rekordbox. It needs only the
Python standard library.

What it provides:

- **`finyl.database`**: reads a rekordbox `export.pdb` database (`Database`,
  `Table`, `Page`, `RowGroup`, `RowRef`). It follows each table's chain of pages
  and parses a row only when its body is asked for. Rows marked as deleted are
  skipped.
- **`finyl.rows`** and **`finyl.simple_rows`**: the row types and the `PageType`
  enumeration. The rows cover tracks, artists, albums, genres, labels, keys,
  colors, artwork, playlist tree, playlist entries, history playlists and
  history entries. Track, artist and album strings are read on first access.
- **`finyl.strings`**: `read_device_sql_string` decodes the format's
  variable-length strings. A string is short ASCII, long ASCII or long UTF-16LE
  (`StringKind`).
- **`finyl.binary`**: `Reader`, a seekable little-endian byte reader, and
  `ParseError`.
- **`finyl.separate`**: splits a track into vocal and instrumental stems by running
  the `demucs` command. It skips the track when both stem files already exist.
- **`finyl.spectrum`**: `Spectrum` groups FFT magnitudes into log-spaced frequency
  bars between 20 Hz and 20 kHz and computes a rectangle for each bar.
- **`finyl.waveform`**: `WaveView` holds the geometry of a scrolling waveform
  view. This covers index and pixel mapping, zoom limits, sample lines, the
  centre line and beat grid positions.
- **`finyl.usb`** and **`finyl.util`**: find mounted USB media, join paths,
  compute MD5 sums of files and run external commands.

## Reading a database

```python
from finyl.database import Database
from finyl.simple_rows import PageType

db = Database.open("/media/usb/PIONEER/rekordbox/export.pdb")

for row in db.rows(PageType.GENRES):
    print(row.id, row.name)

tracks_table = db.table(PageType.TRACKS)
for page in db.pages(tracks_table):
    print(page.num_rows(), page.is_data_page())

for track in db.rows(PageType.TRACKS):
    print(track.id, track.title, track.file_path)
```

`Database.from_bytes` parses a database that is already in memory. `Database.table`
raises `KeyError` when no table of that type exists. A truncated or malformed file
raises `finyl.binary.ParseError`.

## Separating stems

```python
from finyl.separate import separate_track

ran = separate_track("/media/usb", "/media/usb/Contents/track.mp3")
```

The stems are written under `<usb>/finyl/separated/`, in a directory named after
the `hdemucs_mmi` model. Each file name holds the track name, the stem
(`vocals` or `no_vocals`) and the MD5 sum of the source file. `separate_track`
returns `False` when it skipped the track and `True` when it ran `demucs`. The
`demucs` program must be on your `PATH`. If it exits with status 1,
`finyl.util.CommandError` is raised.

## Spectrum bars

```python
from finyl.spectrum import Spectrum

spectrum = Spectrum(200)
spectrum.accumulate(fft_bins, sample_rate=44100, period_size=1024)  # bins are (re, im) pairs
rects = spectrum.bar_rects(800, 200)  # (x, y, w, h) per bar
```

## Waveform geometry

```python
from finyl.waveform import WaveView

view = WaveView(1280, 110, 1_000_000, 100)
view.double_range()  # ranges outside 130000..4000000 are ignored
grid = view.static_grid_positions([0, 500, 1000], 44100)
centre = view.center_line()
```

## Finding USB media

```python
from finyl.usb import list_mounted_usb_paths

print(list_mounted_usb_paths("/proc/mounts"))
```

## What it does not do

finyl is a library only. It installs no command-line program and has no way to
list playlists or run separation over a whole playlist from a shell. It does not
play audio, read audio files, compute FFTs or draw anything on screen. The
spectrum and waveform modules return numbers and rectangles for a caller to draw.
It does not read the analysis files that hold beat grids and cue points.
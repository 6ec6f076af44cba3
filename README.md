# zaycev-parser

A command-line tool that reads the top chart from zaycev.net and looks up the MP3 link for
each track. It saves the track list as JSON or CSV and can also download the MP3 files.

## Installation

```
pip install .
```

To also install the test dependencies (pytest and responses), use the `test` extra:

```
pip install ".[test]"
```

## Usage

```
zaycev-parser [--limit N] [--output json|csv] [--download] [--period day|week|month]
```

Every option can also be written with a single dash, for example `-limit 10`.

- `--limit` sets how many tracks to fetch. The default is 50. The chart comes in pages of
  50 tracks, so the tool requests `ceil(limit / 50)` pages and keeps every track on them.
- `--output` sets the output format, `json` or `csv`. The default is `json`. Any other value
  is logged as an error and no list file is written.
- `--download` also downloads each track that has an MP3 link.
- `--period` sets the chart period, for example `day`, `week` or `month`. The default is `day`.

### Track list

The list is written to `output/tracks.<format>`.

- In JSON it is an indented array. Each object has the keys `Title`, `Artist`, `Mp3URL`,
  `CoverURL`, `Duration` and `PageURL`. If no tracks were collected, the file holds `null`.
- In CSV the header row is `Title,Artist,Duration,CoverURL,Mp3URL,PageURL`.

A track is still written, with an empty `Mp3URL`, when the link service says it has no link
for that track. A track whose lookup fails is logged and left out of the list.

### Downloads

With `--download`, the files are saved in `downloads/` as `Artist - Title.mp3`. At most five
files download at the same time. The characters `\ / : * ? " < > |` are removed from file
names. If a file already exists, it is not overwritten.

### Errors and interruption

Log messages go to stderr, in colour and at debug level. A failed page, lookup or download is
logged and the run carries on. If you press Ctrl+C while tracks are being fetched and
resolved, fetching stops and the tracks gathered so far are saved. No downloads run after
an interrupt.

## Library use

```python
from zaycev_parser.config import parse_flags
from zaycev_parser.cli import run

tracks = run(parse_flags(["--limit", "10", "--output", "csv"]))
```

`run` returns the collected `zaycev_parser.models.Track` records. You can also use each stage
on its own:

- `zaycev_parser.fetcher.fetch_tracks(total, period)` yields `RawTrack` chart entries.
  `fetch_page` and `parse_page` handle a single page.
- `zaycev_parser.resolver.resolve_tracks(raws)` yields `Track` records in the order their
  lookups finish. `get_mp3_url` and `extract_mp3_url` handle a single lookup. An answer in an
  unknown shape raises `UnexpectedResponseError`.
- `zaycev_parser.writer.save_tracks(tracks, fmt, output_dir)` writes the list and returns the
  file path. An unknown format raises `UnsupportedFormatError`. `write_json` and `write_csv`
  write to any text stream.
- `zaycev_parser.downloader.download_tracks(tracks)` downloads the files and returns their
  paths. `download_track` downloads one file, and `sanitize_filename` and `track_filename`
  build the file names.
- `zaycev_parser.logsetup.init_logging(level)` sets up the coloured console log.

The functions that take an `on_error` callback pass it each error from a single page, track
or download, and keep going.
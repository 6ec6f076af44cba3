"""Saving resolved tracks as JSON or CSV."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Callable, Iterable, TextIO

from zaycev_parser.models import CSV_HEADER, Track

OUTPUT_DIR = "output"

# Characters escaped in JSON strings so the output is safe to embed in HTML.
_JSON_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)

log = logging.getLogger(__name__)


class UnsupportedFormatError(ValueError):
    """The requested output format is neither json nor csv."""

    def __init__(self, fmt: str) -> None:
        super().__init__(f"unsupported output format: {fmt}")
        self.format = fmt


def _track_object(track: Track) -> dict[str, str]:
    return {
        "Title": track.title,
        "Artist": track.artist,
        "Mp3URL": track.mp3_url,
        "CoverURL": track.cover_url,
        "Duration": track.duration,
        "PageURL": track.page_url,
    }


def write_json(tracks: Iterable[Track], stream: TextIO) -> None:
    """Write tracks to ``stream`` as an indented JSON array.

    An empty collection is written as ``null``.
    """
    items = [_track_object(track) for track in tracks]
    text = json.dumps(items or None, indent=2, ensure_ascii=False)
    stream.write(text.translate(_JSON_ESCAPES) + "\n")


def write_csv(tracks: Iterable[Track], stream: TextIO) -> None:
    """Write tracks to ``stream`` as CSV with a header row."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerows(track.as_row() for track in tracks)


_WRITERS: dict[str, Callable[[Iterable[Track], TextIO], None]] = {
    "json": write_json,
    "csv": write_csv,
}


def save_tracks(
    tracks: Iterable[Track], fmt: str = "json", output_dir: str | Path = OUTPUT_DIR
) -> Path:
    """Save tracks to ``<output_dir>/tracks.<fmt>`` and return that path."""
    writer = _WRITERS.get(fmt)
    if writer is None:
        raise UnsupportedFormatError(fmt)
    items = list(tracks)
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"tracks.{fmt}"

    log.info("Saving %d tracks to %s", len(items), path)
    for track in items:
        log.debug("Track to write: %s → %s", track.title, track.mp3_url)
    with path.open("w", encoding="utf-8", newline="") as stream:
        writer(items, stream)
    log.info("Tracks successfully saved to %s", path)
    return path
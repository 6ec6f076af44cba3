"""Downloading mp3 files for resolved tracks."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import ExitStack
from pathlib import Path
from typing import Callable, Iterable

import requests

from zaycev_parser.models import Track

DOWNLOAD_DIR = "downloads"
MAX_CONCURRENT_DOWNLOADS = 5

_FORBIDDEN = set('\\/:*?"<>|')
_CHUNK_SIZE = 64 * 1024

log = logging.getLogger(__name__)

ErrorHandler = Callable[[Exception], None]


def sanitize_filename(name: str) -> str:
    """Remove characters that are not allowed in file names."""
    return "".join(ch for ch in name if ch not in _FORBIDDEN)


def track_filename(track: Track) -> str:
    """Return the file name an mp3 of ``track`` is saved under."""
    return sanitize_filename(f"{track.artist} - {track.title}.mp3")


def download_track(
    session: requests.Session, track: Track, output_dir: str | Path = DOWNLOAD_DIR
) -> Path:
    """Download the mp3 of ``track`` into ``output_dir`` and return its path.

    A file that already exists is left untouched.
    """
    with session.get(track.mp3_url, stream=True) as response:
        if response.status_code != 200:
            raise requests.HTTPError(
                f"status code: {response.status_code}", response=response
            )
        filename = track_filename(track)
        path = Path(output_dir) / filename
        if path.exists():
            log.debug("File already exists, skipping: %s", filename)
            return path
        with path.open("wb") as out:
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                out.write(chunk)
    return path


def _log_error(exc: Exception) -> None:
    log.error("%s", exc)


def download_tracks(
    tracks: Iterable[Track],
    session: requests.Session | None = None,
    output_dir: str | Path = DOWNLOAD_DIR,
    on_error: ErrorHandler | None = None,
    max_workers: int = MAX_CONCURRENT_DOWNLOADS,
) -> list[Path]:
    """Download several tracks concurrently and return the saved paths.

    Tracks without an mp3 link are skipped; failed downloads are reported to
    ``on_error``.
    """
    report = on_error or _log_error
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    log.info("Downloader started")

    paths: list[Path] = []
    with ExitStack() as stack:
        if session is None:
            session = stack.enter_context(requests.Session())
        pool = stack.enter_context(ThreadPoolExecutor(max_workers=max_workers))
        submitted = []
        for track in tracks:
            if not track.mp3_url:
                log.warning("No Mp3URL for track: %s", track.title)
                continue
            log.debug("Downloading: %s", track.title)
            submitted.append((track, pool.submit(download_track, session, track, directory)))
        for track, future in submitted:
            try:
                path = future.result()
            except Exception as exc:
                error = RuntimeError(f"download {track.title}: {exc}")
                error.__cause__ = exc
                report(error)
                continue
            log.info("Downloaded: %s", track.title)
            paths.append(path)
    log.info("Downloader finished")
    return paths
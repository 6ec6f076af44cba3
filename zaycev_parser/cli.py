"""Command-line entry point that runs the fetch, resolve, save and download pipeline."""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Sequence

import requests

from zaycev_parser.config import Config, parse_flags
from zaycev_parser.downloader import download_tracks
from zaycev_parser.fetcher import fetch_tracks
from zaycev_parser.logsetup import init_logging
from zaycev_parser.models import Track
from zaycev_parser.resolver import resolve_tracks
from zaycev_parser.writer import UnsupportedFormatError, save_tracks

log = logging.getLogger(__name__)


def _report(exc: Exception) -> None:
    log.error("%s", exc)


def run(config: Config, session: requests.Session | None = None) -> list[Track]:
    """Run the whole pipeline for ``config`` and return the collected tracks.

    An interrupt stops fetching; the tracks collected so far are still saved.
    """
    tracks: list[Track] = []
    interrupted = False
    with ExitStack() as stack:
        if session is None:
            session = stack.enter_context(requests.Session())

        log.info("Starting fetcher...")
        raws = fetch_tracks(config.limit, config.period, session, _report)
        log.info("Starting resolver...")
        try:
            for track in resolve_tracks(raws, session, _report):
                if not track.mp3_url:
                    log.warning("Skipping track without Mp3URL: %s", track.title)
                tracks.append(track)
        except KeyboardInterrupt:
            interrupted = True
            log.info("Stopped by interrupt")

        log.info("Starting writer...")
        try:
            save_tracks(tracks, config.output)
        except (UnsupportedFormatError, OSError) as exc:
            _report(exc)

        if config.download and not interrupted:
            log.info("Starting downloader...")
            try:
                download_tracks(
                    [t for t in tracks if t.mp3_url], session, on_error=_report
                )
            except KeyboardInterrupt:
                log.info("Downloader stopped by interrupt")
    return tracks


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, set up logging and run the pipeline."""
    init_logging()
    config = parse_flags(argv)
    run(config)
    return 0
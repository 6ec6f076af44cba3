"""Fetching pages of the top tracks list."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any, Callable, Iterator

import requests

BASE_URL = "https://zaycev.net"
TOP_URL = BASE_URL + "/api/external/pages/index/top"
PAGE_SIZE = 50
REQUEST_TIMEOUT = 10.0

_HEADERS = {
    "User-Agent": "Mozilla/5.0",
    "Accept": "application/json, text/plain, */*",
    "Origin": BASE_URL,
    "Referer": BASE_URL + "/popular/index.html",
}
_MAX_WORKERS = 8

log = logging.getLogger(__name__)

ErrorHandler = Callable[[Exception], None]


@dataclass(frozen=True)
class RawTrack:
    """A track entry as listed on a top page, before its mp3 link is known."""

    id: int
    title: str = ""
    artist: str = ""
    duration: str = ""
    cover_url: str = ""
    slug: str = ""


def page_count(total: int, page_size: int = PAGE_SIZE) -> int:
    """Return how many pages are needed to cover ``total`` tracks."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    if total <= 0:
        return 0
    return -(-total // page_size)


def build_page_url(page: int, limit: int, period: str) -> str:
    """Return the URL of one page of the top list."""
    return f"{TOP_URL}?page={page}&limit={limit}&period={period}&entity=track"


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def parse_page(payload: Any) -> list[RawTrack]:
    """Turn a decoded page response into tracks, in the order of its ``trackIds``."""
    if payload is None:
        return []
    if not isinstance(payload, dict):
        raise ValueError(f"unexpected page payload: {payload!r}")
    track_ids = payload.get("trackIds") or []
    info_map = payload.get("tracksInfo") or {}
    tracks = []
    for track_id in track_ids:
        key = str(track_id)
        if key not in info_map:
            continue
        info = info_map[key] or {}
        tracks.append(
            RawTrack(
                id=track_id,
                title=_text(info.get("track")),
                artist=_text(info.get("artistName")),
                duration=_text(info.get("duration")),
                cover_url=_text(info.get("imageJpg")),
                slug=f"/pages/index/top/track/{track_id}",
            )
        )
    return tracks


def fetch_page(session: requests.Session, page: int, limit: int, period: str) -> list[RawTrack]:
    """Download and parse one page of the top list."""
    response = session.get(
        build_page_url(page, limit, period), headers=_HEADERS, timeout=REQUEST_TIMEOUT
    )
    if response.status_code != 200:
        raise requests.HTTPError(f"status: {response.status_code}", response=response)
    return parse_page(response.json())


def _log_error(exc: Exception) -> None:
    log.error("%s", exc)


def fetch_tracks(
    total: int,
    period: str = "day",
    session: requests.Session | None = None,
    on_error: ErrorHandler | None = None,
) -> Iterator[RawTrack]:
    """Fetch enough pages to cover ``total`` tracks and yield their entries.

    Pages are requested concurrently; a page that fails is reported to
    ``on_error`` and skipped.
    """
    pages = page_count(total)
    log.info("Starting fetcher: %d tracks, %d pages, period=%s", total, pages, period)
    if pages == 0:
        return
    report = on_error or _log_error
    with ExitStack() as stack:
        if session is None:
            session = stack.enter_context(requests.Session())
        pool = stack.enter_context(ThreadPoolExecutor(max_workers=min(pages, _MAX_WORKERS)))
        futures = [
            (page, pool.submit(fetch_page, session, page, PAGE_SIZE, period))
            for page in range(1, pages + 1)
        ]
        for page, future in futures:
            try:
                tracks = future.result()
            except Exception as exc:
                error = RuntimeError(f"page {page}: {exc}")
                error.__cause__ = exc
                report(error)
                continue
            log.info("Fetched %d tracks from page %d", len(tracks), page)
            yield from tracks
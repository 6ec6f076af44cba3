"""Resolving mp3 download links for fetched tracks."""

from __future__ import annotations

import json
import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from contextlib import ExitStack
from typing import Callable, Iterable, Iterator

import requests

from zaycev_parser.fetcher import BASE_URL, REQUEST_TIMEOUT, RawTrack
from zaycev_parser.models import Track

FILEZMETA_URL = BASE_URL + "/api/external/track/filezmeta"

_HEADERS = {
    "Content-Type": "application/json",
    "Origin": BASE_URL,
    "Referer": BASE_URL + "/popular/index.html",
    "User-Agent": "Mozilla/5.0",
}

log = logging.getLogger(__name__)


class UnexpectedResponseError(ValueError):
    """The link service answered with JSON of an unknown shape."""

    def __init__(self, body: str) -> None:
        super().__init__(f"unexpected JSON format: {body}")
        self.body = body


def _url_of(value: object) -> str:
    if isinstance(value, dict) and isinstance(value.get("url"), str):
        return value["url"]
    return ""


def extract_mp3_url(body: str | bytes) -> str:
    """Return the mp3 link in a response body; ``[]`` means no link."""
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    if text == "[]":
        return ""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise UnexpectedResponseError(text) from exc
    url = _url_of(data) or (_url_of(data[0]) if isinstance(data, list) and data else "")
    if not url:
        raise UnexpectedResponseError(text)
    return url


def get_mp3_url(session: requests.Session, slug: str) -> str:
    """Ask the link service for the mp3 link of the track at ``slug``."""
    response = session.post(FILEZMETA_URL, json={"url": slug},
                            headers=_HEADERS, timeout=REQUEST_TIMEOUT)
    if response.status_code != 200:
        raise requests.HTTPError(f"status {response.status_code}", response=response)
    return extract_mp3_url(response.content)


def resolve_track(session: requests.Session, raw: RawTrack) -> Track:
    """Build a :class:`Track` from a raw entry by resolving its mp3 link."""
    log.debug("Resolving mp3 for: %s", raw.title)
    mp3_url = get_mp3_url(session, raw.slug)
    if not mp3_url:
        log.warning("No mp3 URL for: %s", raw.title)
    log.debug("Resolved mp3: %s → %s", raw.title, mp3_url)
    return Track(title=raw.title, artist=raw.artist, duration=raw.duration,
                 cover_url=raw.cover_url, mp3_url=mp3_url,
                 page_url=BASE_URL + raw.slug)


def resolve_tracks(
    raws: Iterable[RawTrack],
    session: requests.Session | None = None,
    on_error: Callable[[Exception], None] | None = None,
) -> Iterator[Track]:
    """Resolve tracks concurrently, yielding them in order of completion.

    Failures are passed to ``on_error`` (logged by default) and left out.
    """
    report = on_error or (lambda exc: log.error("%s", exc))

    def finish(future: Future, raw: RawTrack) -> Iterator[Track]:
        try:
            yield future.result()
        except Exception as exc:
            error = RuntimeError(f"mp3 for {raw.title}: {exc}")
            error.__cause__ = exc
            report(error)

    log.info("Resolver started")
    with ExitStack() as stack:
        if session is None:
            session = stack.enter_context(requests.Session())
        pool = stack.enter_context(ThreadPoolExecutor(max_workers=16))
        pending: dict[Future, RawTrack] = {}
        for raw in raws:
            pending[pool.submit(resolve_track, session, raw)] = raw
            for future in [f for f in pending if f.done()]:
                yield from finish(future, pending.pop(future))
        log.info("Resolver input exhausted")
        for future in as_completed(list(pending)):
            yield from finish(future, pending.pop(future))
"""Track records produced by the pipeline."""

from __future__ import annotations

from dataclasses import dataclass

CSV_HEADER = ("Title", "Artist", "Duration", "CoverURL", "Mp3URL", "PageURL")


@dataclass(frozen=True)
class Track:
    """A resolved track."""

    title: str = ""
    artist: str = ""
    mp3_url: str = ""
    cover_url: str = ""
    duration: str = ""
    page_url: str = ""

    def as_row(self) -> list[str]:
        """Return the fields in the order of ``CSV_HEADER``."""
        return [self.title, self.artist, self.duration,
                self.cover_url, self.mp3_url, self.page_url]
"""Command-line options."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Config:
    """Settings for one run."""

    limit: int = 50
    output: str = "json"
    download: bool = False
    period: str = "day"


def parse_flags(argv: Sequence[str] | None = None) -> Config:
    """Parse command-line arguments into a :class:`Config`."""
    parser = argparse.ArgumentParser(prog="zaycev-parser", allow_abbrev=False)
    parser.add_argument("-limit", "--limit", type=int, default=Config.limit,
                        help="How many tracks to download")
    parser.add_argument("-output", "--output", default=Config.output,
                        help="Output format (json or csv)")
    parser.add_argument("-download", "--download", action="store_true",
                        help="Download tracks or not")
    parser.add_argument("-period", "--period", default=Config.period,
                        help="Period for fetching tracks (day, week, month)")
    return Config(**vars(parser.parse_args(argv)))
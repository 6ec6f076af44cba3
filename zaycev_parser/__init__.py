"""Fetch the zaycev.net top chart, resolve MP3 links, save the list as JSON or CSV and download the files."""

__version__ = "0.1.0"
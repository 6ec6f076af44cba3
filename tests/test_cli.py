import csv
import json
import logging

import pytest
import requests
import responses

from zaycev_parser.cli import main, run
from zaycev_parser.config import Config
from zaycev_parser.downloader import track_filename
from zaycev_parser.fetcher import BASE_URL, TOP_URL
from zaycev_parser.models import CSV_HEADER
from zaycev_parser.resolver import FILEZMETA_URL

CDN = "https://cdn.example.com"

PAGE = {
    "page": 1,
    "trackIds": [1, 2],
    "tracksInfo": {
        "1": {"track": "Alpha", "artistName": "Xavier", "duration": "03:00", "imageJpg": f"{CDN}/1.jpg"},
        "2": {"track": "Beta", "artistName": "Yvonne", "duration": "02:30", "imageJpg": f"{CDN}/2.jpg"},
    },
}


def _filezmeta(request):
    slug = json.loads(request.body)["url"]
    track_id = slug.rsplit("/", 1)[1]
    if track_id == "2":
        return 200, {}, "[]"
    return 200, {}, json.dumps({"url": f"{CDN}/{track_id}.mp3"})


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        mock.add(responses.GET, TOP_URL, json=PAGE, status=200)
        mock.add_callback(responses.POST, FILEZMETA_URL, callback=_filezmeta)
        mock.add(responses.GET, f"{CDN}/1.mp3", body=b"ID3-alpha", status=200)
        yield mock


def test_run_writes_json(rsps, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with requests.Session() as session:
        tracks = run(Config(limit=2, output="json"), session)
    assert sorted(t.title for t in tracks) == ["Alpha", "Beta"]
    data = json.loads((tmp_path / "output" / "tracks.json").read_text(encoding="utf-8"))
    by_title = {item["Title"]: item for item in data}
    assert by_title["Alpha"]["Mp3URL"] == f"{CDN}/1.mp3"
    assert by_title["Beta"]["Mp3URL"] == ""
    assert by_title["Alpha"]["PageURL"] == BASE_URL + "/pages/index/top/track/1"
    assert not (tmp_path / "downloads").exists()


def test_run_downloads_only_tracks_with_links(rsps, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with requests.Session() as session:
        tracks = run(Config(limit=2, output="csv", download=True), session)
    alpha = next(t for t in tracks if t.title == "Alpha")
    files = list((tmp_path / "downloads").iterdir())
    assert [f.name for f in files] == [track_filename(alpha)]
    assert files[0].read_bytes() == b"ID3-alpha"
    with (tmp_path / "output" / "tracks.csv").open(encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))
    assert rows[0] == list(CSV_HEADER)
    assert len(rows) == 1 + len(tracks)


def test_run_unsupported_format_is_logged(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    with caplog.at_level(logging.ERROR, logger="zaycev_parser"):
        tracks = run(Config(limit=0, output="xml"), requests.Session())
    assert tracks == []
    assert not (tmp_path / "output" / "tracks.xml").exists()
    assert any("unsupported output format: xml" in r.getMessage() for r in caplog.records)


def test_run_reports_failed_page(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        mock.add(responses.GET, TOP_URL, status=503)
        with caplog.at_level(logging.ERROR, logger="zaycev_parser"):
            tracks = run(Config(limit=1), requests.Session())
    assert tracks == []
    assert any("page 1:" in r.getMessage() for r in caplog.records)
    assert (tmp_path / "output" / "tracks.json").read_text(encoding="utf-8") == "null\n"


def test_main_without_tracks_writes_csv_header(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["-limit", "0", "-output", "csv"]) == 0
    content = (tmp_path / "output" / "tracks.csv").read_text(encoding="utf-8")
    assert content == ",".join(CSV_HEADER) + "\n"
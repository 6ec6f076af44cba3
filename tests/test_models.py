from zaycev_parser.models import CSV_HEADER, Track


def test_defaults_are_empty_strings():
    track = Track()
    assert track.as_row() == [""] * len(CSV_HEADER)


def test_as_row_follows_header_order():
    track = Track(
        title="t",
        artist="a",
        mp3_url="m",
        cover_url="c",
        duration="d",
        page_url="p",
    )
    row = dict(zip(CSV_HEADER, track.as_row()))
    assert row == {
        "Title": "t",
        "Artist": "a",
        "Duration": "d",
        "CoverURL": "c",
        "Mp3URL": "m",
        "PageURL": "p",
    }


def test_tracks_compare_by_value():
    assert Track(title="x", artist="y") == Track(title="x", artist="y")
    assert Track(title="x") != Track(title="z")
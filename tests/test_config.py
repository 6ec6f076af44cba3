import pytest

from zaycev_parser.config import Config, parse_flags


def test_defaults():
    assert parse_flags([]) == Config(limit=50, output="json", download=False, period="day")


def test_single_dash_options():
    cfg = parse_flags(["-limit", "10", "-output", "csv", "-download", "-period", "week"])
    assert cfg == Config(limit=10, output="csv", download=True, period="week")


def test_double_dash_with_equals():
    cfg = parse_flags(["--limit=5", "--period=month"])
    assert cfg.limit == 5
    assert cfg.period == "month"
    assert cfg.download is False


def test_non_integer_limit_is_rejected():
    with pytest.raises(SystemExit):
        parse_flags(["-limit", "abc"])


def test_unknown_flag_is_rejected():
    with pytest.raises(SystemExit):
        parse_flags(["-bogus"])
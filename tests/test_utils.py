import pytest

from dithord import utils


@pytest.mark.parametrize(
    "height, parts, expected",
    [
        (10, 3, [(0, 4), (4, 8), (8, 10)]),
        (2, 5, [(0, 1), (1, 2)]),
        (7, 1, [(0, 7)]),
        (0, 4, []),
    ],
)
def test_split_rows_into_parts(height, parts, expected):
    assert utils.split_rows_into_parts(height, parts) == expected


def test_default_workers_at_least_one(monkeypatch):
    monkeypatch.setattr(utils.os, "cpu_count", lambda: 1)
    assert utils.default_workers() == 1
    monkeypatch.setattr(utils.os, "cpu_count", lambda: 16)
    assert utils.default_workers() == 13


@pytest.mark.parametrize(
    "seconds, expected",
    [(0.0123, "12.3ms"), (1.5, "1.500s"), (125.0, "2m 5s")],
)
def test_format_duration(seconds, expected):
    assert utils.format_duration(seconds) == expected


def test_key_value_pairs_and_config_line(capsys):
    assert utils.key_value_pairs_to_string([("Workers", 1200), ("Matrix", "8x8")]) == (
        "Workers: 1,200  Matrix: 8x8"
    )
    utils.print_config_line("run", [("Level", 2)], debug=True)
    utils.error("boom")
    captured = capsys.readouterr()
    assert captured.out == "[debug] [run] Level: 2\n"
    assert captured.err == "[error] boom\n"

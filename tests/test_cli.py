from __future__ import annotations

import json

import pytest

from randompick import cli


def test_check_renders_table(capsys) -> None:
    code = cli.main(
        ["--no-color", "check", "--weights", "1,5,15,30", "--draws", "200000", "--seed", "7", "--tolerance", "0.1"]
    )
    out = capsys.readouterr().out

    assert code == 0
    assert "Frequency check" in out
    assert "within tolerance" in out


def test_check_json_payload(capsys) -> None:
    code = cli.main(["check", "--weights", "2,2", "--high", "4", "--draws", "50000", "--seed", "3", "--json"])
    payload = json.loads(capsys.readouterr().out)

    assert code == 0
    assert payload["high"] == 4
    assert payload["draws"] == 50_000
    assert [b["start"] for b in payload["buckets"]] == [0, 2]


def test_check_with_exact_feature(capsys) -> None:
    code = cli.main(
        [
            "--features",
            "sampler.exact_cumulative",
            "check",
            "--weights",
            "1,3",
            "--draws",
            "100000",
            "--seed",
            "5",
            "--json",
        ]
    )

    assert code == 0
    assert json.loads(capsys.readouterr().out)["within_tolerance"] is True


def test_pick_single_group(capsys) -> None:
    code = cli.main(["--no-color", "pick", "--items", "a,b,c", "--weights", "0,0,1", "--count", "4", "--seed", "1"])
    out = capsys.readouterr().out

    assert code == 0
    assert "4 pick(s)" in out
    assert " c " in out


def test_pick_across_groups(capsys) -> None:
    code = cli.main(
        ["--no-color", "pick", "--items", "a,b", "--items", "c,d", "--weights", "0,0,0,1", "--seed", "2"]
    )
    out = capsys.readouterr().out

    assert code == 0
    assert "1 pick(s)" in out
    assert " d " in out


def test_pick_with_zero_weights_reports_nothing(capsys) -> None:
    code = cli.main(["--no-color", "pick", "--items", "a,b", "--weights", "0,0"])

    assert code == 1
    assert "No item could be picked" in capsys.readouterr().out


def test_invalid_weights_exit_with_usage_error(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["pick", "--items", "a,b", "--weights", "1,-2"])

    assert excinfo.value.code == 2
    assert "non-negative" in capsys.readouterr().err


def test_unparseable_weights_rejected(capsys) -> None:
    with pytest.raises(SystemExit):
        cli.main(["check", "--weights", "1,x"])


@pytest.mark.parametrize("count", ["0", "-3"])
def test_pick_count_below_one_is_usage_error(capsys, count: str) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["pick", "--items", "a,b", "--weights", "1,1", "--count", count])

    assert excinfo.value.code == 2
    assert "count must be >= 1" in capsys.readouterr().err

import json

import pytest

from timexparser_cli.cli import entrance


class TestCli:
    """Tests for the command line entry point."""

    def test_tab_separated_output(self, capsys):
        assert entrance(["--anchor", "2024-06-15T12:00:00", "next", "week"]) == 0
        out = capsys.readouterr().out
        assert out == "0-9\tDatePeriod\t(2024-06-17,2024-06-24,P1W)\tnext week\n"

    def test_json_output(self, capsys):
        entrance(["--json", "--anchor", "2024-06-15", "in 2 years"])
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 1
        record = json.loads(lines[0])
        assert record["timex"] == "2026"
        assert record["precision"] == "YEAR"

    def test_language_and_policy(self, capsys):
        entrance(["--lang", "de", "--prefer-dates-from", "past", "--anchor", "2024-06-15", "am 5. Juni"])
        out = capsys.readouterr().out
        assert out.strip().split("\t")[2] == "XXXX-06-05"

    def test_no_match_prints_nothing(self, capsys):
        assert entrance(["--anchor", "2024-06-15", "nothing", "here"]) == 0
        assert capsys.readouterr().out == ""

    def test_invalid_anchor_exits(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            entrance(["--anchor", "someday", "tomorrow"])
        assert excinfo.value.code == 2

    def test_unknown_language_exits(self, capsys):
        with pytest.raises(SystemExit):
            entrance(["--lang", "xx", "tomorrow"])

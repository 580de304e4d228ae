"""Tests for the click command line interface."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from sizewise.adapters.version_feed import UpdateCheckError
from sizewise.cli import main
from sizewise.config import Config
from sizewise.core.versions import ReleaseInfo, UpdateStatus


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def default_config():
    with patch("sizewise.cli.load_config", return_value=Config()) as mock_load:
        yield mock_load


@pytest.fixture
def board_file(tmp_path):
    data = {
        "settings": {"sortCriteria": "creationOrder", "sortDirection": "asc"},
        "backlogItems": [
            {"id": 1, "title": "Alpha", "complexity": 1, "effort": 1, "doubt": 1,
             "cod_bv": 5, "cod_tc": 5, "cod_rroe": 5, "tshirtSize": "S"},
            {"id": 2, "title": "Bravo", "complexity": 2, "effort": 2, "doubt": 2,
             "cod_bv": 4, "cod_tc": 4, "cod_rroe": 4},
            {"id": 3, "title": "Charlie", "complexity": 2, "effort": 1, "doubt": 1,
             "cod_bv": 4, "cod_tc": 4, "cod_rroe": 4},
            {"id": 4, "title": "Anchor", "isReference": True, "referenceType": "min"},
        ],
    }
    path = tmp_path / "board.json"
    path.write_text(json.dumps(data))
    return str(path)


class TestSequence:
    def test_text(self, runner, board_file):
        result = runner.invoke(main, ["sequence", board_file])
        assert result.exit_code == 0
        assert "Sorted by creationOrder (asc)" in result.output
        lines = result.output.splitlines()
        titles = [name for line in lines for name in ("Anchor", "Alpha", "Bravo", "Charlie") if name in line]
        assert titles == ["Anchor", "Alpha", "Bravo", "Charlie"]
        assert "[min]" in result.output
        assert lines[-1].strip() == "---"

    def test_json_with_override(self, runner, board_file):
        result = runner.invoke(main, ["sequence", board_file, "-c", "wsjf", "-d", "desc", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["criterion"] == "wsjf"
        assert [item["id"] for item in data["items"]] == [4, 1, 3, 2, -1]
        assert data["items"][1]["wsjfRank"] == 1
        assert data["items"][0]["kind"] == "reference-min"
        assert data["items"][0]["wsjf"] is None
        assert data["items"][1]["wsjf"] == 5
        assert data["lockedOrder"] == [1, 3, 2]

    def test_wsjf_mode_unpins_references(self, runner, board_file):
        result = runner.invoke(main, ["sequence", board_file, "-c", "jobSize", "--wsjf-mode", "--json"])
        data = json.loads(result.output)
        assert [item["id"] for item in data["items"]] == [4, 1, 3, 2, -1]
        result = runner.invoke(main, ["sequence", board_file, "-c", "jobSize", "-d", "desc", "--wsjf-mode", "--json"])
        data = json.loads(result.output)
        assert [item["id"] for item in data["items"]] == [2, 3, 1, 4, -1]

    def test_empty_board(self, runner, tmp_path):
        result = runner.invoke(main, ["sequence", str(tmp_path / "missing.json")])
        assert result.exit_code == 0
        assert "Backlog is empty." in result.output

    def test_invalid_board(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{")
        result = runner.invoke(main, ["sequence", str(path)])
        assert result.exit_code == 1
        assert "Error: Invalid JSON" in result.output

    def test_rejects_unknown_criterion(self, runner, board_file):
        result = runner.invoke(main, ["sequence", board_file, "-c", "priority"])
        assert result.exit_code != 0


class TestRanks:
    def test_text(self, runner, board_file):
        result = runner.invoke(main, ["ranks", board_file])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0].startswith("#1") and "5.00" in lines[0] and "Alpha" in lines[0]
        assert "Charlie" in lines[1]
        assert "Bravo" in lines[2]

    def test_json(self, runner, board_file):
        result = runner.invoke(main, ["ranks", board_file, "--json"])
        assert json.loads(result.output) == [{"id": 1, "rank": 1}, {"id": 3, "rank": 2}, {"id": 2, "rank": 3}]

    def test_nothing_ranked(self, runner, tmp_path):
        path = tmp_path / "board.json"
        path.write_text(json.dumps([{"id": 1, "title": "Draft", "complexity": 1}]))
        result = runner.invoke(main, ["ranks", str(path)])
        assert "No item has both Job Size and Cost of Delay." in result.output


class TestCompare:
    def test_json(self, runner, board_file):
        result = runner.invoke(main, ["compare", board_file, "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["optimalOrder"] == [1, 3, 2]
        assert data["currentOrder"] == [1, 2, 3]
        assert data["optimalCost"] == 120
        assert data["currentCost"] == 144
        assert data["overheadPercent"] == 20

    def test_text(self, runner, board_file):
        result = runner.invoke(main, ["compare", board_file])
        assert "Optimal (WSJF) order:" in result.output
        assert "Total cost of delay: 144 (+20%)" in result.output

    def test_no_data(self, runner, tmp_path):
        result = runner.invoke(main, ["compare", str(tmp_path / "missing.json")])
        assert "No valid WSJF data available." in result.output


class TestSimulate:
    def test_current_order_json(self, runner, board_file):
        result = runner.invoke(main, ["simulate", board_file, "--json"])
        data = json.loads(result.output)
        assert data["totalCost"] == 144
        assert [s["id"] for s in data["segments"]] == [1, 2, 3]
        assert data["segments"][0]["waitingCod"] == 24

    def test_optimal_text(self, runner, board_file):
        result = runner.invoke(main, ["simulate", board_file, "--optimal"])
        assert result.exit_code == 0
        assert "Total cost of delay: 120" in result.output

    def test_no_data(self, runner, tmp_path):
        result = runner.invoke(main, ["simulate", str(tmp_path / "missing.json")])
        assert "No valid WSJF data available." in result.output


class TestCheckUpdate:
    @patch("sizewise.cli.check_for_update")
    def test_outdated(self, mock_check, runner):
        mock_check.return_value = UpdateStatus(
            local_version="0.1.0", latest=ReleaseInfo(version="0.2.0", download_url="https://example.com/dl")
        )
        result = runner.invoke(main, ["check-update"])
        assert "sizewise 0.1.0 is outdated, current is: 0.2.0" in result.output
        assert "https://example.com/dl" in result.output

    @patch("sizewise.cli.check_for_update")
    def test_up_to_date(self, mock_check, runner):
        mock_check.return_value = UpdateStatus(local_version="0.2.0", latest=ReleaseInfo(version="0.2.0"))
        result = runner.invoke(main, ["check-update"])
        assert "is up-to-date" in result.output

    @patch("sizewise.cli.check_for_update")
    def test_no_release_info(self, mock_check, runner):
        mock_check.return_value = UpdateStatus(local_version="0.2.0")
        result = runner.invoke(main, ["check-update"])
        assert "(no release information)" in result.output

    @patch("sizewise.cli.check_for_update", side_effect=UpdateCheckError("Update check failed: timeout"))
    def test_error(self, _mock_check, runner):
        result = runner.invoke(main, ["check-update"])
        assert result.exit_code == 1
        assert "Error: Update check failed: timeout" in result.output

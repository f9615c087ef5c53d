"""
Testy dla CLI (main.py).
"""

import json
import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from main import main


def test_list_boards(capsys):
    assert main(["--list"]) == 0
    assert "classic" in capsys.readouterr().out.split()


def test_classic_board_is_playable(capsys):
    assert main(["--board", "classic"]) == 0

    out = capsys.readouterr().out
    assert "Brak problemów." in out
    assert "Ponumerowane pola: 32" in out


def test_broken_board_exit_code(capsys):
    assert main(["--board", "broken"]) == 1

    out = capsys.readouterr().out
    assert "NOT_CONNECTED" in out
    assert "NO_START" in out


def test_strict_branching(capsys):
    assert main(["--board", "branching", "--strict"]) == 1
    assert "BRANCHING_PATH" in capsys.readouterr().out


def test_unknown_board(capsys):
    assert main(["--board", "monopoly"]) == 2


def test_save_log(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["--board", "ring_24", "--save-log", "--verbose"]) == 0

    log = json.loads((tmp_path / "output" / "board_ring_24.json").read_text(encoding="utf-8"))
    types = {event["type"] for event in log["events"]}
    assert {"TILE_PLACED", "VALIDATION_RUN", "IDS_ASSIGNED"} <= types
    assert "IDS_ASSIGNED: 1" in capsys.readouterr().out

"""
Testy dla ConfigLoader i przykładowych plansz z data/.
"""

import pytest
import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tycoon_board.analysis.validation import IssueCode
from tycoon_board.board import BoardConfig, board_from_config
from tycoon_board.core.config_loader import ConfigLoader
from tycoon_board.core.errors import StructuralError
from tycoon_board.core.grid_coord import GridCoord
from tycoon_board.core.tile import INVALID_TILE_ID, TileKind


DATA_PATH = Path(__file__).parent.parent / "data"


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def loader():
    return ConfigLoader(str(DATA_PATH))


@pytest.fixture
def tmp_loader(tmp_path):
    """Loader na minimalnych plikach w katalogu tymczasowym."""
    (tmp_path / "defaults.yaml").write_text(
        "validation:\n"
        "  min_tiles: 4\n"
        "numbering:\n"
        "  origin_kinds: [start]\n"
        "pathfinding:\n"
        "  max_iterations: 50\n"
        "board_defaults:\n"
        "  legend: {'.': empty_land, 'S': start}\n",
        encoding="utf-8",
    )
    (tmp_path / "boards.yaml").write_text(
        "boards:\n"
        "  line:\n"
        "    layout: ['S...']\n"
        "    validation: {max_tiles: 10}\n",
        encoding="utf-8",
    )
    return ConfigLoader(str(tmp_path))


# ═══════════════════════════════════════════════════════════════════════════
# TEST: DEFAULTS
# ═══════════════════════════════════════════════════════════════════════════

def test_validation_defaults(loader):
    rules = loader.get_validation_rules()
    assert rules["min_tiles"] == 20
    assert rules["max_tiles"] == 100
    assert rules["max_dead_ends"] == 2
    assert rules["start_kinds"] == ["start", "hospital"]


def test_numbering_and_pathfinding_sections(loader):
    assert loader.get_numbering_config()["origin_kinds"] == ["hospital"]
    assert loader.get_pathfinding_config()["max_iterations"] == 10000


def test_returned_sections_are_copies(loader):
    loader.get_validation_rules()["min_tiles"] = 0
    assert loader.get_validation_rules()["min_tiles"] == 20


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader(str(tmp_path)).get_defaults()


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PLANSZE
# ═══════════════════════════════════════════════════════════════════════════

def test_board_ids(loader):
    ids = loader.get_board_ids()
    for name in ("ring_24", "tiny_loop", "classic", "branching", "broken"):
        assert name in ids


def test_load_board_merges_defaults(loader):
    definition = loader.load_board("ring_24")

    assert definition["id"] == "ring_24"
    assert definition["legend"]["H"] == "hospital"
    assert definition["validation"]["min_properties"] == 0
    assert definition["validation"]["min_tiles"] == 20


def test_unknown_board_raises(loader):
    with pytest.raises(KeyError):
        loader.load_board("monopoly")


def test_deep_merge():
    base = {"a": {"x": 1, "y": 2}, "b": 1}
    merged = ConfigLoader._deep_merge(base, {"a": {"y": 3}, "c": 4})

    assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
    assert base["a"]["y"] == 2


def test_reload_picks_up_changes(tmp_loader, tmp_path):
    assert tmp_loader.get_validation_rules()["min_tiles"] == 4

    (tmp_path / "defaults.yaml").write_text("validation:\n  min_tiles: 9\n", encoding="utf-8")
    assert tmp_loader.get_validation_rules()["min_tiles"] == 4

    tmp_loader.reload()
    assert tmp_loader.get_validation_rules()["min_tiles"] == 9


def test_board_config_from_loader(tmp_loader):
    config = BoardConfig.from_loader(tmp_loader)

    assert config.origin_kinds == (TileKind.START,)
    assert config.max_iterations == 50
    assert config.rules.min_tiles == 4
    assert config.rules.max_tiles == 100


def test_board_from_config_applies_board_rules(tmp_loader):
    board = board_from_config(tmp_loader, "line")

    assert board.config.rules.max_tiles == 10
    assert board.assign_sequential_ids().origin == GridCoord(0, 0)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PRZYKŁADOWE PLANSZE
# ═══════════════════════════════════════════════════════════════════════════

def test_ring_24_sample(loader):
    board = board_from_config(loader, "ring_24")
    result = board.assign_sequential_ids(strict=True)

    assert result.count == 24
    assert result.origin == GridCoord(0, 0)
    assert board.find_dead_ends() == []
    assert board.validate().is_valid


def test_classic_sample_is_valid(loader):
    board = board_from_config(loader, "classic")
    report = board.validate()

    assert report.issues == []
    assert report.statistics["property_count"] == 11
    assert report.statistics["group_distribution"] == {
        "red": 3, "blue": 3, "green": 3, "yellow": 2
    }


def test_classic_numbering_skips_buildings(loader):
    board = board_from_config(loader, "classic")
    result = board.assign_sequential_ids(strict=True)

    assert result.count == 32
    assert result.unreached == []
    assert board.get_sequential_id((0, 0)) == 0
    assert board.get_sequential_id((1, 1)) == INVALID_TILE_ID
    assert board.get_sequential_id((2, 3)) == INVALID_TILE_ID
    assert GridCoord(1, 1) in result.excluded


def test_tiny_loop_sample(loader):
    board = board_from_config(loader, "tiny_loop")
    assert board.validate().is_valid
    assert board.assign_sequential_ids().origin == GridCoord(0, 2)


def test_branching_sample(loader):
    board = board_from_config(loader, "branching")

    with pytest.raises(StructuralError):
        board.assign_sequential_ids(strict=True)
    assert board.assign_sequential_ids().count == 7


def test_broken_sample(loader):
    board = board_from_config(loader, "broken")
    report = board.validate()

    assert report.codes() == [
        IssueCode.INSUFFICIENT_TILES,
        IssueCode.NO_HOSPITAL,
        IssueCode.INSUFFICIENT_PROPERTIES,
        IssueCode.NOT_CONNECTED,
        IssueCode.TOO_MANY_DEAD_ENDS,
        IssueCode.PROPERTY_GROUP_SMALL,
        IssueCode.LOW_PROPERTY_VARIETY,
    ]
    with pytest.raises(StructuralError):
        board.assign_sequential_ids()

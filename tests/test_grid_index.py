"""
Testy dla GridCoord, Tile i GridIndex.

Testuje współrzędne, rodzaje pól i rzadki indeks planszy.
"""

import pytest
import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tycoon_board.core.grid_coord import GridCoord, as_coord, coord_from_key
from tycoon_board.core.grid_index import GridIndex
from tycoon_board.core.tile import INVALID_TILE_ID, Tile, TileCategory, TileKind


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def index():
    """Indeks z polami (0,0) H, (1,0), (0,1)."""
    idx = GridIndex()
    idx.put(Tile(GridCoord(0, 0), TileKind.HOSPITAL))
    idx.put(Tile(GridCoord(1, 0)))
    idx.put(Tile(GridCoord(0, 1)))
    return idx


# ═══════════════════════════════════════════════════════════════════════════
# TEST: GRID COORD
# ═══════════════════════════════════════════════════════════════════════════

def test_neighbors_order_is_north_east_south_west():
    """Kolejność sąsiadów to N, E, S, W."""
    assert GridCoord(0, 0).neighbors() == [
        GridCoord(0, 1), GridCoord(1, 0), GridCoord(0, -1), GridCoord(-1, 0)
    ]


def test_manhattan_and_adjacency():
    a = GridCoord(0, 0)
    assert a.manhattan(GridCoord(2, -1)) == 3
    assert a.is_adjacent(GridCoord(0, 1))
    assert not a.is_adjacent(GridCoord(1, 1))
    assert not a.is_adjacent(a)


def test_coord_is_hashable_and_comparable():
    assert {GridCoord(1, 2), GridCoord(1, 2)} == {GridCoord(1, 2)}
    assert GridCoord(1, 2) + GridCoord(1, -1) == GridCoord(2, 1)
    assert GridCoord(1, 2) - GridCoord(1, 2) == GridCoord(0, 0)


def test_key_round_trip():
    coord = GridCoord(3, -2)
    assert coord.key == "3_-2"
    assert coord_from_key("3_-2") == coord


def test_coord_from_key_invalid_raises():
    with pytest.raises(ValueError):
        coord_from_key("3")


def test_as_coord_accepts_pairs():
    assert as_coord((1, 2)) == GridCoord(1, 2)
    assert as_coord([1, 2]) == GridCoord(1, 2)
    assert as_coord(GridCoord(1, 2)) == GridCoord(1, 2)
    with pytest.raises(ValueError):
        as_coord([1, 2, 3])


# ═══════════════════════════════════════════════════════════════════════════
# TEST: TILE KIND
# ═══════════════════════════════════════════════════════════════════════════

def test_structure_kinds_are_tagged():
    """Placeholdery budynków to jedyne pola STRUCTURE."""
    structures = {k for k in TileKind if k.category is TileCategory.STRUCTURE}
    assert structures == {TileKind.BUILDING_1X1, TileKind.BUILDING_2X2}


def test_kind_lookup_by_name_and_block_id():
    assert TileKind.from_name("hospital") is TileKind.HOSPITAL
    assert TileKind.from_name("CARD_SHOP") is TileKind.CARD_SHOP
    assert TileKind.from_name("web3:chance") is TileKind.CHANCE
    assert TileKind.from_block_id("web3:building_2x2") is TileKind.BUILDING_2X2


def test_unknown_kind_raises():
    with pytest.raises(ValueError):
        TileKind.from_name("castle")
    with pytest.raises(ValueError):
        TileKind.from_block_id("web3:castle")


def test_tile_walkable_follows_kind():
    path = Tile(GridCoord(0, 0), TileKind.FEE)
    structure = Tile(GridCoord(1, 0), TileKind.BUILDING_1X1)

    assert path.walkable and path.is_path
    assert not structure.walkable and structure.is_structure
    assert path.sequential_id == INVALID_TILE_ID
    assert not path.has_sequential_id


# ═══════════════════════════════════════════════════════════════════════════
# TEST: GRID INDEX
# ═══════════════════════════════════════════════════════════════════════════

def test_put_on_free_cell(index):
    assert index.put(Tile(GridCoord(5, 5)))
    assert GridCoord(5, 5) in index
    assert len(index) == 4


def test_put_on_occupied_cell_leaves_index_unchanged(index):
    """Druga próba na tej samej pozycji zwraca False, pole zostaje."""
    assert not index.put(Tile(GridCoord(0, 0), TileKind.FEE))
    assert index.get(GridCoord(0, 0)).kind is TileKind.HOSPITAL
    assert len(index) == 3


def test_remove(index):
    assert index.remove(GridCoord(1, 0))
    assert index.get(GridCoord(1, 0)) is None
    assert not index.remove(GridCoord(1, 0))


def test_get_missing_returns_none(index):
    assert index.get(GridCoord(9, 9)) is None


def test_neighbors_only_present_in_order(index):
    assert index.neighbors(GridCoord(0, 0)) == [GridCoord(0, 1), GridCoord(1, 0)]
    assert index.neighbors(GridCoord(1, 1)) == [GridCoord(1, 0), GridCoord(0, 1)]
    assert index.neighbors(GridCoord(7, 7)) == []


def test_iteration_follows_insertion_order(index):
    assert index.coords() == [GridCoord(0, 0), GridCoord(1, 0), GridCoord(0, 1)]
    assert [t.position for t in index] == index.coords()


def test_bounds(index):
    assert index.bounds() == (0, 0, 1, 1)
    assert GridIndex().bounds() is None


def test_clear(index):
    index.clear()
    assert len(index) == 0


def test_debug_print_north_on_top(index):
    """Wiersz z największym z jest pierwszy."""
    assert index.debug_print() == ".\nH ."


def test_debug_print_with_ids(index):
    index.get(GridCoord(0, 0)).sequential_id = 0
    index.get(GridCoord(0, 1)).sequential_id = 12

    lines = index.debug_print(show_ids=True).split("\n")
    assert lines[0] == " 12"
    assert lines[1] == "  0   ."

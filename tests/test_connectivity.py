"""
Testy dla ConnectivityAnalyzer.

Testuje spójność, podział na regiony, ślepe zaułki i rozwidlenia.
"""

import pytest
import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tycoon_board.analysis.connectivity import ConnectivityAnalyzer
from tycoon_board.core.grid_coord import GridCoord
from tycoon_board.core.grid_index import GridIndex
from tycoon_board.core.tile import Tile, TileKind


SYMBOLS = {
    ".": TileKind.EMPTY_LAND,
    "H": TileKind.HOSPITAL,
    "#": TileKind.BUILDING_1X1,
}


def make_index(*rows: str) -> GridIndex:
    """Helper: layout ASCII -> GridIndex (wiersz 0 = góra)."""
    index = GridIndex()
    top = len(rows) - 1
    for i, row in enumerate(rows):
        for x, symbol in enumerate(row):
            if symbol != " ":
                index.put(Tile(GridCoord(x, top - i), SYMBOLS[symbol]))
    return index


def path_only(tile: Tile) -> bool:
    return tile.is_path


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def ring_10():
    """Pętla 4x3 - 10 pól, każde z 2 sąsiadami."""
    return make_index(
        "H...",
        ".  .",
        "....",
    )


# ═══════════════════════════════════════════════════════════════════════════
# TEST: SPÓJNOŚĆ
# ═══════════════════════════════════════════════════════════════════════════

def test_empty_board_is_not_connected():
    analyzer = ConnectivityAnalyzer(GridIndex())
    assert not analyzer.is_connected()
    assert analyzer.find_connected_regions() == []


def test_single_tile_is_connected():
    analyzer = ConnectivityAnalyzer(make_index("H"))
    assert analyzer.is_connected()
    assert analyzer.find_connected_regions() == [{GridCoord(0, 0)}]


def test_ring_is_connected(ring_10):
    analyzer = ConnectivityAnalyzer(ring_10)
    assert len(ring_10) == 10
    assert analyzer.is_connected()
    assert len(analyzer.find_connected_regions()) == 1


def test_removing_one_ring_tile_keeps_connected(ring_10):
    """Pętla bez jednego pola to nadal jeden łuk."""
    ring_10.remove(GridCoord(1, 2))
    analyzer = ConnectivityAnalyzer(ring_10)

    assert analyzer.is_connected()
    assert len(analyzer.find_connected_regions()) == 1


def test_removing_two_opposite_tiles_splits_ring(ring_10):
    """Dwie dziury w pętli dają dwa rozłączne łuki."""
    ring_10.remove(GridCoord(1, 2))
    ring_10.remove(GridCoord(2, 0))
    analyzer = ConnectivityAnalyzer(ring_10)

    regions = analyzer.find_connected_regions()
    assert not analyzer.is_connected()
    assert len(regions) == 2
    assert {GridCoord(0, 2), GridCoord(0, 1), GridCoord(0, 0), GridCoord(1, 0)} in regions
    assert {GridCoord(2, 2), GridCoord(3, 2), GridCoord(3, 1), GridCoord(3, 0)} in regions


def test_regions_are_disjoint_and_cover_all_tiles():
    index = make_index(
        "H. ..",
        "   . ",
        ". ...",
    )
    regions = ConnectivityAnalyzer(index).find_connected_regions()

    covered = set()
    for region in regions:
        assert not (covered & region)
        covered |= region
    assert covered == set(index.coords())
    assert len(regions) == 3


def test_is_connected_matches_region_count():
    for rows in (("H.",), ("H .",), ("H", " ", "."), ("H..", "  .")):
        analyzer = ConnectivityAnalyzer(make_index(*rows))
        assert analyzer.is_connected() == (len(analyzer.find_connected_regions()) == 1)


def test_diagonal_tiles_are_not_connected():
    index = make_index(
        "H ",
        " .",
    )
    assert not ConnectivityAnalyzer(index).is_connected()


def test_regions_are_deterministic(ring_10):
    ring_10.remove(GridCoord(1, 2))
    ring_10.remove(GridCoord(2, 0))
    first = ConnectivityAnalyzer(ring_10).find_connected_regions()
    second = ConnectivityAnalyzer(ring_10).find_connected_regions()
    assert first == second


# ═══════════════════════════════════════════════════════════════════════════
# TEST: FILTR PÓL
# ═══════════════════════════════════════════════════════════════════════════

def test_structure_does_not_bridge_path_tiles():
    """Placeholder budynku między polami ścieżki ich nie łączy."""
    index = make_index("H#.")

    assert ConnectivityAnalyzer(index).is_connected()

    analyzer = ConnectivityAnalyzer(index, path_only)
    assert not analyzer.is_connected()
    assert analyzer.nodes() == [GridCoord(0, 0), GridCoord(2, 0)]
    assert len(analyzer.find_connected_regions()) == 2


def test_structure_neighbours_do_not_count_toward_degree():
    index = make_index(
        " # ",
        "H..",
    )
    analyzer = ConnectivityAnalyzer(index, path_only)
    assert analyzer.degree(GridCoord(1, 0)) == 2
    assert analyzer.node_neighbors(GridCoord(1, 0)) == [GridCoord(2, 0), GridCoord(0, 0)]


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ŚLEPE ZAUŁKI I ROZWIDLENIA
# ═══════════════════════════════════════════════════════════════════════════

def test_ring_has_no_dead_ends(ring_10):
    assert ConnectivityAnalyzer(ring_10).find_dead_ends() == []


def test_line_has_two_dead_ends():
    analyzer = ConnectivityAnalyzer(make_index("H..."))
    assert analyzer.find_dead_ends() == [GridCoord(0, 0), GridCoord(3, 0)]


def test_isolated_tile_is_not_a_dead_end():
    """Stopień 0 to nie ślepy zaułek - tylko stopień dokładnie 1."""
    assert ConnectivityAnalyzer(make_index("H")).find_dead_ends() == []


def test_branch_points():
    index = make_index(
        "H....",
        "  .  ",
    )
    analyzer = ConnectivityAnalyzer(index)
    assert analyzer.find_branch_points() == [GridCoord(2, 1)]
    assert analyzer.degree(GridCoord(2, 1)) == 3
    assert len(analyzer.find_dead_ends()) == 3

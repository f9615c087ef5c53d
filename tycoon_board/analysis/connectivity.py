"""
Analiza spójności planszy (ConnectivityAnalyzer).

Jedyne miejsce w silniku, które liczy spójność, regiony
i ślepe zaułki - walidator, numerowanie i Board korzystają
wyłącznie z tej klasy.

Graf:
    Węzły  - pola indeksu spełniające tile_filter (domyślnie wszystkie)
    Krawędzie - pary węzłów sąsiadujących bokiem (N/E/S/W)

    Walidator buduje analizator z filtrem Tile.is_path, więc
    placeholdery budynków nie łączą ze sobą fragmentów ścieżki.

Operacje (każda O(V + E), bez stanu między wywołaniami):
    is_connected()           - czy wszystkie węzły tworzą jeden region
    find_connected_regions() - podział na maksymalne regiony
    find_dead_ends()         - węzły o stopniu dokładnie 1
    find_branch_points()     - węzły o stopniu > 2 (rozwidlenia)

Przykład użycia:
    >>> analyzer = ConnectivityAnalyzer(index)
    >>> analyzer.is_connected()
    True
    >>> len(analyzer.find_connected_regions())
    1
"""

from __future__ import annotations
from typing import Callable, List, Optional, Set

from ..core.grid_coord import GridCoord
from ..core.grid_index import GridIndex
from ..core.tile import Tile


TileFilter = Callable[[Tile], bool]


def _all_tiles(tile: Tile) -> bool:
    return True


class ConnectivityAnalyzer:
    """
    Czyste zapytania o spójność nad indeksem pól.

    Attributes:
        index (GridIndex): Indeks pól (tylko do odczytu)
        tile_filter (Callable[[Tile], bool]): Które pola są węzłami grafu
    """

    def __init__(self, index: GridIndex, tile_filter: Optional[TileFilter] = None):
        self.index = index
        self.tile_filter = tile_filter or _all_tiles

    # ─────────────────────────────────────────────────────────────────────────
    # WĘZŁY I SĄSIEDZTWO
    # ─────────────────────────────────────────────────────────────────────────

    def nodes(self) -> List[GridCoord]:
        """Pozycje węzłów w kolejności iteracji indeksu."""
        return [tile.position for tile in self.index if self.tile_filter(tile)]

    def _is_node(self, coord: GridCoord) -> bool:
        tile = self.index.get(coord)
        return tile is not None and self.tile_filter(tile)

    def node_neighbors(self, coord: GridCoord) -> List[GridCoord]:
        """Sąsiedzi węzła, którzy też są węzłami (N, E, S, W)."""
        return [n for n in self.index.neighbors(coord) if self._is_node(n)]

    def degree(self, coord: GridCoord) -> int:
        """Liczba sąsiadów-węzłów (0-4)."""
        return len(self.node_neighbors(coord))

    # ─────────────────────────────────────────────────────────────────────────
    # SPÓJNOŚĆ
    # ─────────────────────────────────────────────────────────────────────────

    def _flood_fill(self, start: GridCoord, visited: Set[GridCoord]) -> Set[GridCoord]:
        """
        Iteracyjny DFS od start; dopisuje odwiedzone do visited.

        Returns:
            Set[GridCoord]: Pozycje regionu zawierającego start
        """
        region: Set[GridCoord] = set()
        stack = [start]

        while stack:
            coord = stack.pop()
            if coord in visited:
                continue

            visited.add(coord)
            region.add(coord)

            for neighbor in self.node_neighbors(coord):
                if neighbor not in visited:
                    stack.append(neighbor)

        return region

    def is_connected(self) -> bool:
        """
        Czy wszystkie węzły są wzajemnie osiągalne.

        Flood fill od pierwszego węzła musi odwiedzić wszystkie.
        Pusta plansza nie jest spójna (nie ma czego grać).
        """
        nodes = self.nodes()
        if not nodes:
            return False

        visited: Set[GridCoord] = set()
        self._flood_fill(nodes[0], visited)
        return len(visited) == len(nodes)

    def find_connected_regions(self) -> List[Set[GridCoord]]:
        """
        Dzieli węzły na maksymalne spójne regiony.

        Zbiory są rozłączne, a ich suma to wszystkie węzły.
        Kolejność regionów = kolejność odkrycia przy przejściu
        po indeksie, więc dla tej samej planszy jest stała.

        Returns:
            List[Set[GridCoord]]: Regiony (pusta lista dla pustej planszy)
        """
        visited: Set[GridCoord] = set()
        regions: List[Set[GridCoord]] = []

        for coord in self.nodes():
            if coord not in visited:
                regions.append(self._flood_fill(coord, visited))

        return regions

    # ─────────────────────────────────────────────────────────────────────────
    # KSZTAŁT ŚCIEŻKI
    # ─────────────────────────────────────────────────────────────────────────

    def find_dead_ends(self) -> List[GridCoord]:
        """
        Węzły z dokładnie jednym sąsiadem.

        Sygnał diagnostyczny: plansza nie jest pętlą, gracz
        musiałby zawrócić.
        """
        return [coord for coord in self.nodes() if self.degree(coord) == 1]

    def find_branch_points(self) -> List[GridCoord]:
        """Węzły z więcej niż dwoma sąsiadami (rozwidlenia ścieżki)."""
        return [coord for coord in self.nodes() if self.degree(coord) > 2]

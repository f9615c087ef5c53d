"""
Indeks pól planszy (GridIndex).

GridIndex jest jedynym miejscem, które wie jakie pole leży
na jakiej współrzędnej:
- Mapuje GridCoord -> Tile (co najwyżej jedno pole na pozycję)
- Odpowiada na pytania o sąsiedztwo (N/E/S/W)
- Nie ma wymiarów - plansza jest rzadka i może mieć dowolny kształt

Wszystkie operacje są O(1) (słownik pod spodem). Kolejność
iteracji to kolejność wstawiania pól, dzięki czemu algorytmy
przechodzące po indeksie są deterministyczne.

Przykład użycia:
    >>> index = GridIndex()
    >>> index.put(Tile(GridCoord(0, 0), TileKind.HOSPITAL))
    True
    >>> index.put(Tile(GridCoord(0, 0)))
    False
    >>> index.neighbors(GridCoord(0, 1))
    [GridCoord(x=0, z=0)]
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .grid_coord import GridCoord
from .tile import Tile


@dataclass
class GridIndex:
    """
    Rzadka siatka pól z obsługą zajętości.

    Attributes:
        _tiles (Dict[GridCoord, Tile]): Mapa pozycja -> pole
    """
    _tiles: Dict[GridCoord, Tile] = field(default_factory=dict, repr=False)

    # ─────────────────────────────────────────────────────────────────────────
    # ZARZĄDZANIE POLAMI
    # ─────────────────────────────────────────────────────────────────────────

    def put(self, tile: Tile) -> bool:
        """
        Umieszcza pole w indeksie.

        Args:
            tile: Pole do umieszczenia (pozycja brana z tile.position)

        Returns:
            bool: True jeśli udało się umieścić,
                  False jeśli pozycja jest już zajęta (indeks bez zmian)
        """
        if tile.position in self._tiles:
            return False

        self._tiles[tile.position] = tile
        return True

    def remove(self, coord: GridCoord) -> bool:
        """
        Usuwa pole z indeksu.

        Returns:
            bool: True jeśli pole istniało i zostało usunięte
        """
        if coord not in self._tiles:
            return False

        del self._tiles[coord]
        return True

    def get(self, coord: GridCoord) -> Optional[Tile]:
        """Zwraca pole na danej pozycji lub None."""
        return self._tiles.get(coord)

    def clear(self) -> None:
        self._tiles.clear()

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def neighbors(self, coord: GridCoord) -> List[GridCoord]:
        """
        Zwraca sąsiadów pozycji, które istnieją w indeksie.

        Kolejność: N, E, S, W (pominięci nieobecni).

        Args:
            coord: Pozycja bazowa (nie musi istnieć w indeksie)

        Returns:
            List[GridCoord]: 0-4 sąsiednich pozycji
        """
        return [n for n in coord.neighbors() if n in self._tiles]

    def coords(self) -> List[GridCoord]:
        """Wszystkie zajęte pozycje w kolejności wstawiania."""
        return list(self._tiles.keys())

    def tiles(self) -> List[Tile]:
        """Wszystkie pola w kolejności wstawiania."""
        return list(self._tiles.values())

    def bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """
        Prostokąt obejmujący wszystkie pola.

        Returns:
            Optional[Tuple]: (min_x, min_z, max_x, max_z) lub None dla pustej planszy
        """
        if not self._tiles:
            return None
        xs = [c.x for c in self._tiles]
        zs = [c.z for c in self._tiles]
        return (min(xs), min(zs), max(xs), max(zs))

    def __contains__(self, coord: object) -> bool:
        return coord in self._tiles

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles.values())

    # ─────────────────────────────────────────────────────────────────────────
    # DEBUG / VISUALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def debug_print(self, show_ids: bool = False) -> str:
        """
        Zwraca tekstową reprezentację planszy do debugowania.

        Wiersz o największym z jest na górze (północ u góry).

        Legenda:
            symbol rodzaju pola (TileKind.symbol), spacja = brak pola
            przy show_ids=True pola ścieżki pokazują numer sekwencyjny

        Returns:
            str: Tekstowa wizualizacja planszy
        """
        box = self.bounds()
        if box is None:
            return ""
        min_x, min_z, max_x, max_z = box
        width = 3 if show_ids else 1

        lines = []
        for z in range(max_z, min_z - 1, -1):
            row = []
            for x in range(min_x, max_x + 1):
                tile = self._tiles.get(GridCoord(x, z))
                if tile is None:
                    cell = " "
                elif show_ids and tile.has_sequential_id:
                    cell = str(tile.sequential_id)
                else:
                    cell = tile.kind.symbol
                row.append(cell.rjust(width))
            lines.append(" ".join(row).rstrip())
        return "\n".join(lines)

"""
System współrzędnych siatki planszy (GridCoord).

Plansza jest kwadratową siatką w płaszczyźnie XZ:
- x = kolumna (rośnie na wschód)
- z = wiersz (rośnie na północ)

Układ sąsiadów (4 kierunki, zgodnie z zegarem od N):
    Kierunek   (dx, dz)
    ─────────────────────
    N  (↑)     ( 0, +1)
    E  (→)     (+1,  0)
    S  (↓)     ( 0, -1)
    W  (←)     (-1,  0)

Kolejność N, E, S, W jest częścią kontraktu - od niej zależy
kolejność przejścia DFS przy numerowaniu pól planszy.

Odległość między polami (Manhattan):
    distance = |dx| + |dz|

Przykład użycia:
    >>> a = GridCoord(0, 0)
    >>> b = GridCoord(2, 1)
    >>> a.manhattan(b)
    3
    >>> a.neighbors()
    [GridCoord(x=0, z=1), GridCoord(x=1, z=0), GridCoord(x=0, z=-1), GridCoord(x=-1, z=0)]
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple, Sequence, Union


# Kierunki sąsiadów, kolejność: N, E, S, W
GRID_DIRECTIONS: List[Tuple[int, int]] = [
    (0, +1),   # N
    (+1, 0),   # E
    (0, -1),   # S
    (-1, 0),   # W
]


@dataclass(frozen=True)
class GridCoord:
    """
    Współrzędna pola na siatce planszy (x, z).

    Klasa jest niemutowalna (frozen=True), więc może być kluczem
    w słowniku lub elementem zbioru.

    Attributes:
        x (int): Kolumna
        z (int): Wiersz
    """
    x: int
    z: int

    # ─────────────────────────────────────────────────────────────────────────
    # WŁAŚCIWOŚCI
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def xz(self) -> Tuple[int, int]:
        """Współrzędne jako krotka (x, z)."""
        return (self.x, self.z)

    @property
    def key(self) -> str:
        """
        Klucz tekstowy w formacie zapisu mapy ("x_z").

        Returns:
            str: Np. "3_-2"
        """
        return f"{self.x}_{self.z}"

    # ─────────────────────────────────────────────────────────────────────────
    # ODLEGŁOŚĆ
    # ─────────────────────────────────────────────────────────────────────────

    def manhattan(self, other: GridCoord) -> int:
        """
        Oblicza odległość Manhattan między dwoma polami.

        Dla siatki 4-kierunkowej z kosztem ruchu 1 jest to dokładna
        liczba kroków na pustej planszy, więc nigdy nie przeszacowuje.

        Args:
            other: Drugie pole

        Returns:
            int: |dx| + |dz|
        """
        return abs(self.x - other.x) + abs(self.z - other.z)

    def is_adjacent(self, other: GridCoord) -> bool:
        """Czy pola sąsiadują bokiem (odległość dokładnie 1)."""
        return self.manhattan(other) == 1

    # ─────────────────────────────────────────────────────────────────────────
    # SĄSIEDZI
    # ─────────────────────────────────────────────────────────────────────────

    def neighbors(self) -> List[GridCoord]:
        """
        Zwraca 4 sąsiednie pola w kolejności N, E, S, W.

        Nie sprawdza czy pola istnieją na planszy - to zadanie GridIndex.

        Returns:
            List[GridCoord]: Lista 4 sąsiadów
        """
        return [
            GridCoord(self.x + dx, self.z + dz)
            for dx, dz in GRID_DIRECTIONS
        ]

    def neighbor(self, direction: int) -> GridCoord:
        """
        Zwraca sąsiada w określonym kierunku.

        Args:
            direction: Indeks kierunku (0-3)
                0 = N, 1 = E, 2 = S, 3 = W

        Raises:
            IndexError: Jeśli direction nie jest w zakresie 0-3
        """
        dx, dz = GRID_DIRECTIONS[direction]
        return GridCoord(self.x + dx, self.z + dz)

    # ─────────────────────────────────────────────────────────────────────────
    # OPERATORY ARYTMETYCZNE
    # ─────────────────────────────────────────────────────────────────────────

    def __add__(self, other: GridCoord) -> GridCoord:
        return GridCoord(self.x + other.x, self.z + other.z)

    def __sub__(self, other: GridCoord) -> GridCoord:
        return GridCoord(self.x - other.x, self.z - other.z)

    # ─────────────────────────────────────────────────────────────────────────
    # REPREZENTACJA
    # ─────────────────────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return f"GridCoord(x={self.x}, z={self.z})"

    def __str__(self) -> str:
        return f"({self.x}, {self.z})"


# ─────────────────────────────────────────────────────────────────────────────
# FUNKCJE POMOCNICZE
# ─────────────────────────────────────────────────────────────────────────────

CoordLike = Union[GridCoord, Sequence[int]]


def as_coord(value: CoordLike) -> GridCoord:
    """
    Normalizuje (x, z) / [x, z] / GridCoord do GridCoord.

    Args:
        value: Współrzędna w dowolnej z obsługiwanych postaci

    Returns:
        GridCoord: Znormalizowana współrzędna

    Raises:
        ValueError: Jeśli sekwencja nie ma dokładnie 2 elementów
    """
    if isinstance(value, GridCoord):
        return value
    if len(value) != 2:
        raise ValueError(f"Expected (x, z) pair, got {value!r}")
    return GridCoord(int(value[0]), int(value[1]))


def coord_from_key(key: str) -> GridCoord:
    """
    Parsuje klucz "x_z" z formatu zapisu mapy.

    Raises:
        ValueError: Jeśli klucz nie ma postaci "x_z"
    """
    parts = key.split("_")
    if len(parts) != 2:
        raise ValueError(f"Invalid grid key: {key!r}")
    return GridCoord(int(parts[0]), int(parts[1]))

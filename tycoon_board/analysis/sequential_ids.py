"""
Numerowanie pól ścieżki (SequentialIdAssigner).

Zamienia dowolny układ pól na ponumerowaną ścieżkę planszy:
numer pola to pozycja używana przy ruchu o N oczek.

ALGORYTM:
═══════════════════════════════════════════════════════════════════

    1. Zbierz pola startowe (is_canonical_start, domyślnie szpital).
       Brak pól -> StructuralError, żadne pole nie jest zmieniane.
       Kilka pól -> start = najmniejsze x, przy remisie najmniejsze z.

    2. Wyzeruj numery wszystkich pól (INVALID_TILE_ID).

    3. DFS (pre-order) od startu po sąsiadach w kolejności N, E, S, W:
       - pole wykluczone (placeholder budynku) napotkane jako sąsiad
         jest oznaczane jako odwiedzone, zostaje bez numeru
         i NIE jest rozwijane dalej
       - każde inne pole dostaje kolejny numer od 0

    4. Pola nieosiągnięte (wyspy) zostają bez numeru - to walidator
       zgłasza niespójną planszę, numerowanie niczego nie naprawia.

    Po przebiegu numery tworzą dokładnie zakres 0..k-1, gdzie k to
    liczba niewykluczonych pól osiągalnych ze startu.

ZAŁOŻENIE O KSZTAŁCIE:
═══════════════════════════════════════════════════════════════════

    Kolejność DFS odpowiada kolejności ruchu tylko dla plansz
    liniowych lub pętli (stopień <= 2, poza ewentualnie startem).
    Domyślnie nie jest to sprawdzane. strict=True odrzuca
    rozwidlone plansze błędem BRANCHING_PATH przed numerowaniem.

Przykład użycia:
    >>> assigner = SequentialIdAssigner(index)
    >>> result = assigner.assign()
    >>> result.count
    24
    >>> index.get(result.origin).sequential_id
    0
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ..core.errors import StructuralError
from ..core.grid_coord import GridCoord
from ..core.grid_index import GridIndex
from ..core.tile import INVALID_TILE_ID, Tile, TileKind
from .connectivity import ConnectivityAnalyzer


TilePredicate = Callable[[Tile], bool]

DEFAULT_ORIGIN_KINDS: Tuple[TileKind, ...] = (TileKind.HOSPITAL,)


def is_structure_tile(tile: Tile) -> bool:
    """Domyślny predykat wykluczenia: placeholder budynku."""
    return tile.is_structure


def kind_predicate(kinds: Iterable[TileKind]) -> TilePredicate:
    """Predykat prawdziwy dla pól o jednym z podanych rodzajów."""
    allowed = frozenset(kinds)

    def predicate(tile: Tile) -> bool:
        return tile.kind in allowed

    return predicate


@dataclass
class IdAssignment:
    """
    Wynik przebiegu numerowania.

    Attributes:
        origin (GridCoord): Pole startowe (numer 0)
        numbered (List[GridCoord]): Pola w kolejności numerów (indeks = numer)
        excluded (List[GridCoord]): Pola wykluczone napotkane w DFS
        unreached (List[GridCoord]): Pola poza zasięgiem DFS (wyspy)
    """
    origin: GridCoord
    numbered: List[GridCoord] = field(default_factory=list)
    excluded: List[GridCoord] = field(default_factory=list)
    unreached: List[GridCoord] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.numbered)

    def ids(self) -> Dict[GridCoord, int]:
        """Mapa pozycja -> numer dla ponumerowanych pól."""
        return {coord: i for i, coord in enumerate(self.numbered)}


class SequentialIdAssigner:
    """
    Numeruje pola ścieżki przejściem DFS od pola startowego.

    Attributes:
        index (GridIndex): Indeks pól (numery są zapisywane w polach)
        is_excluded (Callable): Pola pomijane w numeracji
        is_canonical_start (Callable): Pola-kandydaci na start
        strict (bool): Czy odrzucać rozwidlone plansze
    """

    def __init__(
        self,
        index: GridIndex,
        is_excluded: Optional[TilePredicate] = None,
        is_canonical_start: Optional[TilePredicate] = None,
        strict: bool = False,
    ):
        self.index = index
        self.is_excluded = is_excluded or is_structure_tile
        self.is_canonical_start = is_canonical_start or kind_predicate(DEFAULT_ORIGIN_KINDS)
        self.strict = strict

    # ─────────────────────────────────────────────────────────────────────────
    # START
    # ─────────────────────────────────────────────────────────────────────────

    def find_origin(self) -> Optional[GridCoord]:
        """
        Wybiera pole startowe.

        Spośród pól startowych wygrywa najmniejsze x, a przy
        remisie najmniejsze z - wynik nie zależy od kolejności
        wstawiania pól.

        Returns:
            Optional[GridCoord]: Start lub None gdy brak kandydatów
        """
        candidates = [
            tile.position for tile in self.index if self.is_canonical_start(tile)
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda c: (c.x, c.z))

    # ─────────────────────────────────────────────────────────────────────────
    # NUMEROWANIE
    # ─────────────────────────────────────────────────────────────────────────

    def assign(self) -> IdAssignment:
        """
        Pełne przenumerowanie planszy.

        Returns:
            IdAssignment: Start, kolejność numerów, pola pominięte

        Raises:
            StructuralError: NO_START gdy brak pola startowego,
                             BRANCHING_PATH w trybie strict
        """
        origin = self.find_origin()
        if origin is None:
            raise StructuralError("NO_START", "No canonical start tile on the board")

        if self.strict:
            self._check_linear(origin)

        for tile in self.index:
            tile.sequential_id = INVALID_TILE_ID

        result = IdAssignment(origin=origin)
        visited: Set[GridCoord] = set()

        for coord in self._traverse(origin, visited, result.excluded):
            self.index.get(coord).sequential_id = len(result.numbered)
            result.numbered.append(coord)

        result.unreached = [
            tile.position
            for tile in self.index
            if tile.position not in visited and not self.is_excluded(tile)
        ]
        return result

    def _traverse(
        self,
        origin: GridCoord,
        visited: Set[GridCoord],
        excluded: List[GridCoord],
    ) -> Iterator[GridCoord]:
        """
        DFS pre-order z jawnym stosem.

        Daje dokładnie tę samą kolejność co wersja rekurencyjna
        (sąsiedzi sprawdzani leniwie w kolejności N, E, S, W),
        ale nie ma limitu głębokości rekurencji.

        Yields:
            GridCoord: Kolejne pola do ponumerowania
        """
        visited.add(origin)
        if self.is_excluded(self.index.get(origin)):
            excluded.append(origin)
            return

        yield origin
        stack = [(origin, iter(self.index.neighbors(origin)))]

        while stack:
            _, pending = stack[-1]
            for neighbor in pending:
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                if self.is_excluded(self.index.get(neighbor)):
                    excluded.append(neighbor)
                    continue
                yield neighbor
                stack.append((neighbor, iter(self.index.neighbors(neighbor))))
                break
            else:
                stack.pop()

    def _check_linear(self, origin: GridCoord) -> None:
        """
        Warunek wstępny trybu strict: brak rozwidleń poza startem.

        Raises:
            StructuralError: BRANCHING_PATH z pierwszym rozwidleniem
        """
        analyzer = ConnectivityAnalyzer(self.index, lambda t: not self.is_excluded(t))
        for coord in analyzer.find_branch_points():
            if coord != origin:
                raise StructuralError(
                    "BRANCHING_PATH",
                    f"Path tile {coord} has {analyzer.degree(coord)} path neighbours",
                )

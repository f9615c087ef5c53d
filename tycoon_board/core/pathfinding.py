"""
Algorytm A* (A-star) i zasięg ruchu dla siatki planszy.

A* znajduje najkrótszą ścieżkę między dwoma polami,
chodząc wyłącznie po polach walkable (pola ścieżki,
nie placeholdery budynków).

Jak działa A*:
    1. Utrzymuj kolejkę open (do sprawdzenia) i zbiór closed (sprawdzone)
    2. Dla każdego node'a oblicz:
       - g_cost: liczba kroków od startu
       - h_cost: odległość Manhattan do celu
       - f_cost: g_cost + h_cost
    3. Zawsze eksploruj node z najniższym f_cost
    4. Gdy dotrzesz do celu, odtwórz ścieżkę

Heurystyka:
    Manhattan na siatce 4-kierunkowej z kosztem 1 jest dopuszczalna
    i spójna, więc pierwsza zdjęta z kolejki pozycja celu daje
    najkrótszą ścieżkę.

Remisy (ten sam f_cost):
    Klucz kolejki to (f_cost, h_cost, counter):
    - wygrywa node bliżej celu (mniejsze h),
    - potem node wstawiony wcześniej (counter rośnie przy każdym push).
    Dla tej samej planszy wynik jest zawsze identyczny.

Budżet:
    max_iterations ogranicza liczbę zdjęć z kolejki. Po przekroczeniu
    wynik ma status BUDGET_EXHAUSTED zamiast blokować wywołującego.

Przykład użycia:
    >>> finder = PathFinder(index)
    >>> result = finder.find_path(GridCoord(0, 0), GridCoord(2, 2))
    >>> result.path
    [GridCoord(x=0, z=0), GridCoord(x=0, z=1), GridCoord(x=0, z=2), GridCoord(x=1, z=2), GridCoord(x=2, z=2)]

Edge cases:
    - Start == Goal: zwraca [start]
    - Brak ścieżki: pusta ścieżka, status NO_PATH
    - Start lub Goal poza planszą / nie walkable: pusta ścieżka, status NO_PATH
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Deque, Dict, Iterator, List, Optional, Sequence, Set, Tuple
import heapq

from .grid_coord import GridCoord
from .grid_index import GridIndex


DEFAULT_MAX_ITERATIONS = 10000


class PathStatus(Enum):
    """Wynik wyszukiwania ścieżki."""
    FOUND = auto()
    NO_PATH = auto()
    BUDGET_EXHAUSTED = auto()


@dataclass
class PathResult:
    """
    Wynik find_path.

    Attributes:
        path (List[GridCoord]): Pola od startu do celu (włącznie),
                                pusta lista gdy ścieżki nie ma
        status (PathStatus): FOUND / NO_PATH / BUDGET_EXHAUSTED
        iterations (int): Ile node'ów zdjęto z kolejki
    """
    path: List[GridCoord] = field(default_factory=list)
    status: PathStatus = PathStatus.NO_PATH
    iterations: int = 0

    @property
    def found(self) -> bool:
        return self.status is PathStatus.FOUND

    @property
    def steps(self) -> int:
        """Liczba krawędzi na ścieżce (-1 gdy brak ścieżki)."""
        return len(self.path) - 1 if self.path else -1

    def __len__(self) -> int:
        return len(self.path)

    def __iter__(self) -> Iterator[GridCoord]:
        return iter(self.path)

    def __bool__(self) -> bool:
        return self.found


@dataclass(order=True)
class _PathNode:
    """
    Węzeł w algorytmie A*.

    Sortowanie po (f_cost, h_cost, counter) - heapq jako priority queue
    z deterministycznym rozstrzyganiem remisów.
    """
    f_cost: int
    h_cost: int
    counter: int
    g_cost: int = field(compare=False)
    position: GridCoord = field(compare=False)


def is_walkable(index: GridIndex, pos: GridCoord) -> bool:
    """Czy pozycja istnieje w indeksie i da się na nią wejść."""
    tile = index.get(pos)
    return tile is not None and tile.walkable


def walkable_neighbors(index: GridIndex, pos: GridCoord) -> List[GridCoord]:
    """Sąsiedzi (N, E, S, W) na których można stanąć."""
    return [n for n in index.neighbors(pos) if is_walkable(index, n)]


def find_path(
    index: GridIndex,
    start: GridCoord,
    goal: GridCoord,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> PathResult:
    """
    Znajduje najkrótszą ścieżkę między dwoma polami.

    Args:
        index: Indeks pól planszy
        start: Pozycja startowa
        goal: Pozycja docelowa
        max_iterations: Maksymalna liczba iteracji (zabezpieczenie)

    Returns:
        PathResult: Ścieżka od start do goal (włącznie z oboma)
                    lub pusty wynik ze statusem NO_PATH / BUDGET_EXHAUSTED

    Complexity:
        Time: O(n log n) gdzie n = liczba pól do przeszukania
        Space: O(n) dla g_costs i parents
    """
    if not is_walkable(index, start) or not is_walkable(index, goal):
        return PathResult(status=PathStatus.NO_PATH)

    if start == goal:
        return PathResult(path=[start], status=PathStatus.FOUND)

    open_set: List[_PathNode] = []
    g_costs: Dict[GridCoord, int] = {start: 0}
    closed_set: Set[GridCoord] = set()
    parents: Dict[GridCoord, GridCoord] = {}
    counter = 0

    start_h = start.manhattan(goal)
    heapq.heappush(open_set, _PathNode(start_h, start_h, counter, 0, start))

    iterations = 0

    while open_set:
        if iterations >= max_iterations:
            return PathResult(status=PathStatus.BUDGET_EXHAUSTED, iterations=iterations)
        iterations += 1

        current = heapq.heappop(open_set)

        # Już przetworzony (stary wpis z gorszym g)
        if current.position in closed_set:
            continue

        closed_set.add(current.position)

        if current.position == goal:
            path = _reconstruct_path(parents, start, goal)
            return PathResult(path=path, status=PathStatus.FOUND, iterations=iterations)

        for neighbor in walkable_neighbors(index, current.position):
            if neighbor in closed_set:
                continue

            tentative_g = current.g_cost + 1

            if neighbor not in g_costs or tentative_g < g_costs[neighbor]:
                g_costs[neighbor] = tentative_g
                parents[neighbor] = current.position

                h_cost = neighbor.manhattan(goal)
                counter += 1
                heapq.heappush(
                    open_set,
                    _PathNode(tentative_g + h_cost, h_cost, counter, tentative_g, neighbor),
                )

    return PathResult(status=PathStatus.NO_PATH, iterations=iterations)


def _reconstruct_path(
    parents: Dict[GridCoord, GridCoord],
    start: GridCoord,
    goal: GridCoord,
) -> List[GridCoord]:
    """Odtwarza ścieżkę od goal do start używając mapy rodziców."""
    path = [goal]
    current = goal

    while current != start:
        current = parents[current]
        path.append(current)

    path.reverse()
    return path


def find_path_next_step(
    index: GridIndex,
    start: GridCoord,
    goal: GridCoord,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> Optional[GridCoord]:
    """
    Znajduje tylko następny krok na ścieżce do celu.

    Returns:
        Optional[GridCoord]: Następne pole lub None jeśli brak ścieżki/jesteśmy w celu
    """
    result = find_path(index, start, goal, max_iterations)

    if len(result.path) < 2:
        return None

    return result.path[1]


def get_reachable(
    index: GridIndex,
    start: GridCoord,
    max_steps: int,
) -> Set[GridCoord]:
    """
    Zwraca wszystkie pola osiągalne w co najwyżej max_steps krokach.

    BFS warstwami - każde pole trafia do wyniku z najkrótszym
    możliwym dystansem, więc limit kroków jest dokładny.

    Args:
        index: Indeks pól
        start: Pozycja startowa (nie wchodzi do wyniku)
        max_steps: Maksymalna liczba krawędzi

    Returns:
        Set[GridCoord]: Osiągalne pola walkable bez startu.
                        Pusty zbiór gdy start nie istnieje lub nie jest walkable.
    """
    if max_steps <= 0 or not is_walkable(index, start):
        return set()

    distances: Dict[GridCoord, int] = {start: 0}
    queue: Deque[Tuple[GridCoord, int]] = deque([(start, 0)])

    while queue:
        pos, distance = queue.popleft()
        if distance == max_steps:
            continue

        for neighbor in walkable_neighbors(index, pos):
            if neighbor in distances:
                continue
            distances[neighbor] = distance + 1
            queue.append((neighbor, distance + 1))

    del distances[start]
    return set(distances)


def validate_path(index: GridIndex, path: Sequence[GridCoord]) -> bool:
    """
    Sprawdza czy ścieżka jest poprawna na planszy.

    Ścieżka jest poprawna jeśli:
    - ma co najmniej 2 pola
    - każde kolejne pole sąsiaduje bokiem z poprzednim
    - każde pole istnieje i jest walkable

    Returns:
        bool: True jeśli ścieżką da się przejść
    """
    if len(path) < 2:
        return False

    for pos in path:
        if not is_walkable(index, pos):
            return False

    return all(a.is_adjacent(b) for a, b in zip(path, path[1:]))


class PathFinder:
    """
    Zapytania o ścieżki nad jednym indeksem pól.

    Trzyma referencję do indeksu i budżet iteracji; każde wywołanie
    jest czystym zapytaniem nad aktualnym stanem indeksu.

    Attributes:
        index (GridIndex): Indeks pól
        max_iterations (int): Budżet iteracji A*
    """

    def __init__(self, index: GridIndex, max_iterations: int = DEFAULT_MAX_ITERATIONS):
        self.index = index
        self.max_iterations = max_iterations

    def find_path(self, start: GridCoord, goal: GridCoord) -> PathResult:
        return find_path(self.index, start, goal, self.max_iterations)

    def next_step(self, start: GridCoord, goal: GridCoord) -> Optional[GridCoord]:
        return find_path_next_step(self.index, start, goal, self.max_iterations)

    def get_reachable(self, start: GridCoord, max_steps: int) -> Set[GridCoord]:
        return get_reachable(self.index, start, max_steps)

    def validate_path(self, path: Sequence[GridCoord]) -> bool:
        return validate_path(self.index, path)

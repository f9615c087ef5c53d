"""
Plansza (Board) - agregat spinający indeks pól, budynki i analizy.

Board jest jedynym właścicielem stanu planszy:
- GridIndex (pola ścieżki + placeholdery budynków)
- BuildingRegistry (budynki i ich footprinty)
- EventLogger (historia edycji i zapytań)
- revision (licznik zmian, rośnie przy każdej mutacji)

Analizy (ConnectivityAnalyzer, SequentialIdAssigner, ValidationEngine,
PathFinder) dostają indeks jawnie i nic nie trzymają między
wywołaniami. Kilka plansz może istnieć jednocześnie.

CYKL ŻYCIA:
═══════════════════════════════════════════════════════════════════

    EDYCJA                 place_tile / remove_tile
    ─────────────────      place_building / remove_building
                           (numery NIE są przeliczane)

    ZAPIS                  validate() -> raport
    ─────────────────      assign_sequential_ids() -> numery 0..k-1
                           assign_building_ids()

    GRA                    find_path / get_reachable / is_connected

Przykład użycia:
    >>> board = Board("demo")
    >>> board.place_tile(0, 0, TileKind.HOSPITAL)
    True
    >>> board.place_tile(1, 0)
    True
    >>> board.assign_sequential_ids().count
    2
    >>> board.get_sequential_id((1, 0))
    1
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from ..analysis.connectivity import ConnectivityAnalyzer
from ..analysis.sequential_ids import (
    DEFAULT_ORIGIN_KINDS,
    IdAssignment,
    SequentialIdAssigner,
    kind_predicate,
)
from ..analysis.validation import ValidationEngine, ValidationReport, ValidationRules
from ..core.config_loader import ConfigLoader
from ..core.grid_coord import CoordLike, GridCoord, as_coord
from ..core.grid_index import GridIndex
from ..core.pathfinding import DEFAULT_MAX_ITERATIONS, PathFinder, PathResult, PathStatus
from ..core.tile import Tile, TileKind
from ..events.event_logger import EventLogger, EventType
from .building import Building, BuildingRegistry


KindLike = Union[TileKind, str]


def _as_kind(kind: KindLike) -> TileKind:
    return kind if isinstance(kind, TileKind) else TileKind.from_name(kind)


@dataclass
class BoardConfig:
    """
    Konfiguracja planszy.

    Attributes:
        rules (ValidationRules): Reguły walidacji
        origin_kinds (Tuple[TileKind, ...]): Rodzaje pól startowych numeracji
        max_iterations (int): Budżet iteracji A*
    """
    rules: ValidationRules = field(default_factory=ValidationRules)
    origin_kinds: Tuple[TileKind, ...] = DEFAULT_ORIGIN_KINDS
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    @classmethod
    def from_loader(
        cls,
        loader: ConfigLoader,
        validation: Optional[Dict[str, Any]] = None,
    ) -> BoardConfig:
        """
        Buduje konfigurację z plików YAML.

        Args:
            loader: ConfigLoader wskazujący na katalog data/
            validation: Gotowe reguły (np. z load_board) zamiast defaults

        Returns:
            BoardConfig: Konfiguracja z uzupełnionymi wartościami
        """
        rules = validation if validation is not None else loader.get_validation_rules()
        numbering = loader.get_numbering_config()
        pathfinding = loader.get_pathfinding_config()

        origin_kinds = tuple(
            _as_kind(k) for k in numbering.get("origin_kinds", [])
        ) or DEFAULT_ORIGIN_KINDS

        return cls(
            rules=ValidationRules.from_dict(rules),
            origin_kinds=origin_kinds,
            max_iterations=int(pathfinding.get("max_iterations", DEFAULT_MAX_ITERATIONS)),
        )


class Board:
    """
    Plansza gry: pola, budynki i zapytania o topologię.

    Attributes:
        name (str): Nazwa planszy (trafia do metadanych logu)
        config (BoardConfig): Reguły, start numeracji, budżet A*
        index (GridIndex): Indeks pól
        buildings (BuildingRegistry): Budynki
        logger (EventLogger): Log zdarzeń
        revision (int): Numer rewizji (liczba udanych mutacji, także przenumerowań)
    """

    def __init__(
        self,
        name: str = "board",
        config: Optional[BoardConfig] = None,
        logger: Optional[EventLogger] = None,
    ):
        self.name = name
        self.config = config or BoardConfig()
        self.index = GridIndex()
        self.buildings = BuildingRegistry()
        self.logger = logger or EventLogger(board_name=name)
        self.revision = 0

    # ─────────────────────────────────────────────────────────────────────────
    # EDYCJA PÓL
    # ─────────────────────────────────────────────────────────────────────────

    def place_tile(self, x: int, z: int, kind: KindLike = TileKind.EMPTY_LAND) -> bool:
        """
        Kładzie pole ścieżki.

        Placeholdery budynków kładzie tylko place_building.

        Returns:
            bool: False jeśli pozycja jest zajęta

        Raises:
            ValueError: Dla rodzaju STRUCTURE lub nieznanej nazwy
        """
        kind = _as_kind(kind)
        if kind.is_structure:
            raise ValueError(f"{kind.name} tiles are placed with place_building()")

        coord = GridCoord(x, z)
        if not self.index.put(Tile(coord, kind)):
            return False

        self._touch(EventType.TILE_PLACED, coord, kind=kind.name)
        return True

    def remove_tile(self, x: int, z: int) -> bool:
        """
        Usuwa pole ścieżki.

        Returns:
            bool: False gdy pola nie ma albo należy do budynku
        """
        coord = GridCoord(x, z)
        tile = self.index.get(coord)
        if tile is None or tile.is_structure:
            return False

        self.index.remove(coord)
        self._touch(EventType.TILE_REMOVED, coord, kind=tile.kind.name)
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # EDYCJA BUDYNKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def place_building(
        self,
        x: int,
        z: int,
        size: int = 1,
        group: Optional[str] = None,
        **attrs: Any,
    ) -> Optional[Building]:
        """
        Stawia budynek i kładzie placeholdery na całym footprincie.

        Args:
            x, z: Lewy dolny róg
            size: 1 lub 2
            group: Grupa posiadłości
            **attrs: direction, owner, level, price

        Returns:
            Optional[Building]: Budynek albo None gdy któreś pole jest zajęte
        """
        building = Building(GridCoord(x, z), size=size, group=group, **attrs)
        cells = building.footprint()
        if any(cell in self.index for cell in cells):
            return None
        if not self.buildings.add(building):
            return None

        for cell in cells:
            self.index.put(Tile(cell, building.placeholder_kind))

        self._touch(EventType.BUILDING_PLACED, building.anchor, size=size, group=group)
        return building

    def remove_building(self, x: int, z: int) -> Optional[Building]:
        """Usuwa budynek (po dowolnym polu footprintu) razem z placeholderami."""
        found = self.buildings.at(GridCoord(x, z))
        if found is None:
            return None

        self.buildings.remove(found.anchor)
        for cell in found.footprint():
            self.index.remove(cell)

        self._touch(
            EventType.BUILDING_REMOVED, found.anchor, size=found.size, group=found.group
        )
        return found

    # ─────────────────────────────────────────────────────────────────────────
    # NUMEROWANIE
    # ─────────────────────────────────────────────────────────────────────────

    def assign_sequential_ids(self, strict: bool = False) -> IdAssignment:
        """
        Pełne przenumerowanie pól ścieżki od pola startowego.

        Raises:
            StructuralError: Brak pola startowego / rozwidlenie w trybie strict
        """
        assigner = SequentialIdAssigner(
            self.index,
            is_canonical_start=kind_predicate(self.config.origin_kinds),
            strict=strict,
        )
        result = assigner.assign()
        self.revision += 1

        self.logger.log_event(
            self.revision,
            EventType.IDS_ASSIGNED,
            origin=[result.origin.x, result.origin.z],
            count=result.count,
            excluded=len(result.excluded),
            unreached=len(result.unreached),
        )
        return result

    def assign_building_ids(self) -> List[Building]:
        ordered = self.buildings.assign_building_ids()
        self.revision += 1
        self.logger.log_event(
            self.revision, EventType.BUILDING_IDS_ASSIGNED, count=len(ordered)
        )
        return ordered

    def get_sequential_id(self, coord: CoordLike) -> Optional[int]:
        """Numer pola albo None gdy pola nie ma."""
        tile = self.index.get(as_coord(coord))
        return tile.sequential_id if tile is not None else None

    def get_tile(self, coord: CoordLike) -> Optional[Tile]:
        return self.index.get(as_coord(coord))

    # ─────────────────────────────────────────────────────────────────────────
    # WALIDACJA I SPÓJNOŚĆ
    # ─────────────────────────────────────────────────────────────────────────

    def validate(self, **overrides: Any) -> ValidationReport:
        """
        Sprawdza planszę regułami z konfiguracji.

        Args:
            **overrides: Nadpisania reguł tylko dla tego przebiegu

        Returns:
            ValidationReport: Wszystkie znalezione problemy
        """
        rules = self.config.rules.merged(**overrides) if overrides else self.config.rules
        report = ValidationEngine(self.index, self.buildings.all(), rules).validate()

        self.logger.log_event(
            self.revision,
            EventType.VALIDATION_RUN,
            is_valid=report.is_valid,
            issues=[code.name for code in report.codes()],
        )
        return report

    def _path_analyzer(self) -> ConnectivityAnalyzer:
        return ConnectivityAnalyzer(self.index, lambda tile: tile.is_path)

    def is_connected(self) -> bool:
        """Czy pola ścieżki tworzą jeden region."""
        return self._path_analyzer().is_connected()

    def find_connected_regions(self) -> List[Set[GridCoord]]:
        return self._path_analyzer().find_connected_regions()

    def find_dead_ends(self) -> List[GridCoord]:
        return self._path_analyzer().find_dead_ends()

    # ─────────────────────────────────────────────────────────────────────────
    # PATHFINDING
    # ─────────────────────────────────────────────────────────────────────────

    def _pathfinder(self) -> PathFinder:
        return PathFinder(self.index, self.config.max_iterations)

    def find_path(self, start: CoordLike, goal: CoordLike) -> PathResult:
        """
        Najkrótsza ścieżka po polach ścieżki (A*).

        Wynik (znaleziona / brak / wyczerpany budżet) trafia do logu.
        """
        start, goal = as_coord(start), as_coord(goal)
        result = self._pathfinder().find_path(start, goal)

        event_type = {
            PathStatus.FOUND: EventType.PATH_FOUND,
            PathStatus.NO_PATH: EventType.PATH_NOT_FOUND,
            PathStatus.BUDGET_EXHAUSTED: EventType.PATH_BUDGET_EXHAUSTED,
        }[result.status]
        self.logger.log_event(
            self.revision,
            event_type,
            start=[start.x, start.z],
            goal=[goal.x, goal.z],
            steps=result.steps,
            iterations=result.iterations,
        )
        return result

    def get_reachable(self, start: CoordLike, max_steps: int) -> Set[GridCoord]:
        """Pola osiągalne w 1..max_steps krokach (bez startu)."""
        return self._pathfinder().get_reachable(as_coord(start), max_steps)

    def validate_path(self, path: List[CoordLike]) -> bool:
        return self._pathfinder().validate_path([as_coord(c) for c in path])

    # ─────────────────────────────────────────────────────────────────────────
    # DEBUG / VISUALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def render_ascii(self, show_ids: bool = False) -> str:
        return self.index.debug_print(show_ids=show_ids)

    def summary(self) -> Dict[str, Any]:
        """Krótki opis planszy (nazwa, rewizja, liczniki, wymiary)."""
        bounds = self.index.bounds()
        return {
            "name": self.name,
            "revision": self.revision,
            "tile_count": len(self.index),
            "building_count": len(self.buildings),
            "bounds": list(bounds) if bounds is not None else None,
            "connected": self.is_connected(),
        }

    def save_log(self, filepath: str) -> None:
        self.logger.save(filepath)

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    def _touch(self, event_type: EventType, position: GridCoord, **data: Any) -> None:
        self.revision += 1
        self.logger.log_event(self.revision, event_type, position, **data)

    def __len__(self) -> int:
        return len(self.index)

    def __repr__(self) -> str:
        return (
            f"Board({self.name!r}, tiles={len(self.index)}, "
            f"buildings={len(self.buildings)}, revision={self.revision})"
        )

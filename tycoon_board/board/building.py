"""
Budynki (posiadłości) i ich rejestr.

Budynek zajmuje footprint 1x1 albo 2x2 zaczepiony w lewym dolnym
rogu (anchor). Na każdym polu footprintu leży placeholder
(TileKind.BUILDING_1X1 / BUILDING_2X2) - dzięki temu numerowanie
i pathfinding widzą budynek jako zwykłe, wykluczone pole.

    size=1:  [A]          size=2:  [ ][ ]
                                   [A][ ]

Numery budynków (building_id):
    Wszystkie budynki numerowane 0..n-1 po posortowaniu
    po z, a potem po x (wierszami, od dołu).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from ..core.grid_coord import GridCoord
from ..core.tile import INVALID_TILE_ID, TileKind


VALID_SIZES = (1, 2)


@dataclass
class Building:
    """
    Budynek na planszy.

    Attributes:
        anchor (GridCoord): Lewy dolny róg footprintu
        size (int): 1 (1x1) lub 2 (2x2)
        group (Optional[str]): Grupa posiadłości (np. kolor dzielnicy)
        building_id (int): Numer budynku lub INVALID_TILE_ID
        direction (int): Obrót 0-3 (0°, 90°, 180°, 270°)
        owner (Optional[str]): Właściciel
        level (int): Poziom zabudowy
        price (int): Cena zakupu
    """
    anchor: GridCoord
    size: int = 1
    group: Optional[str] = None
    building_id: int = INVALID_TILE_ID
    direction: int = 0
    owner: Optional[str] = None
    level: int = 0
    price: int = 0

    def __post_init__(self):
        if self.size not in VALID_SIZES:
            raise ValueError(f"Building size must be 1 or 2, got {self.size}")

    @property
    def placeholder_kind(self) -> TileKind:
        return TileKind.BUILDING_1X1 if self.size == 1 else TileKind.BUILDING_2X2

    def footprint(self) -> List[GridCoord]:
        """Pola zajmowane przez budynek (1 albo 4)."""
        return [
            GridCoord(self.anchor.x + dx, self.anchor.z + dz)
            for dz in range(self.size)
            for dx in range(self.size)
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje budynek do formatu zapisu mapy."""
        return {
            "blockId": self.placeholder_kind.block_id,
            "size": self.size,
            "position": {"x": self.anchor.x, "z": self.anchor.z},
            "group": self.group,
            "buildingId": self.building_id,
            "direction": self.direction,
            "owner": self.owner,
            "level": self.level,
            "price": self.price,
        }


@dataclass
class BuildingRegistry:
    """
    Rejestr budynków planszy.

    Attributes:
        _buildings (Dict[GridCoord, Building]): anchor -> budynek
        _cells (Dict[GridCoord, GridCoord]): pole footprintu -> anchor
    """
    _buildings: Dict[GridCoord, Building] = field(default_factory=dict, repr=False)
    _cells: Dict[GridCoord, GridCoord] = field(default_factory=dict, repr=False)

    def add(self, building: Building) -> bool:
        """
        Rejestruje budynek.

        Returns:
            bool: False jeśli któreś pole footprintu należy już do innego budynku
        """
        cells = building.footprint()
        if any(cell in self._cells for cell in cells):
            return False

        self._buildings[building.anchor] = building
        for cell in cells:
            self._cells[cell] = building.anchor
        return True

    def remove(self, anchor: GridCoord) -> Optional[Building]:
        """Usuwa budynek; zwraca go albo None jeśli nie istniał."""
        building = self._buildings.pop(anchor, None)
        if building is None:
            return None

        for cell in building.footprint():
            del self._cells[cell]
        return building

    def get(self, anchor: GridCoord) -> Optional[Building]:
        return self._buildings.get(anchor)

    def at(self, coord: GridCoord) -> Optional[Building]:
        """Budynek którego footprint pokrywa dane pole."""
        anchor = self._cells.get(coord)
        return self._buildings.get(anchor) if anchor is not None else None

    def all(self) -> List[Building]:
        return list(self._buildings.values())

    def assign_building_ids(self) -> List[Building]:
        """
        Numeruje budynki 0..n-1 wierszami (z, potem x).

        Returns:
            List[Building]: Budynki w kolejności numerów
        """
        ordered = sorted(self._buildings.values(), key=lambda b: (b.anchor.z, b.anchor.x))
        for i, building in enumerate(ordered):
            building.building_id = i
        return ordered

    def __len__(self) -> int:
        return len(self._buildings)

    def __iter__(self) -> Iterator[Building]:
        return iter(self._buildings.values())

    def __contains__(self, anchor: object) -> bool:
        return anchor in self._buildings

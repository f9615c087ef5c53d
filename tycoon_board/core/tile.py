"""
Pola planszy (Tile) i ich rodzaje (TileKind).

Każdy rodzaj pola należy do jednej z dwóch kategorii:

    PATH       - pole ścieżki, po którym chodzą gracze.
                 Dostaje numer sekwencyjny (sequential_id).
    STRUCTURE  - placeholder zajęty przez budynek (1x1 lub 2x2).
                 Nie jest numerowany i nie da się po nim chodzić.

Kategoria jest tagiem na enumie, a nie porównaniem stringów
z block_id - block_id służy wyłącznie do zapisu/odczytu mapy.

RODZAJE PÓL:
═══════════════════════════════════════════════════════════════════

    block_id              kategoria   symbol
    ─────────────────────────────────────────────
    web3:empty_land       PATH        .
    web3:hospital         PATH        H
    web3:start            PATH        S
    web3:chance           PATH        ?
    web3:bonus            PATH        B
    web3:fee              PATH        F
    web3:card             PATH        C
    web3:news             PATH        N
    web3:lottery          PATH        L
    web3:card_shop        PATH        $
    web3:building_1x1     STRUCTURE   #
    web3:building_2x2     STRUCTURE   @
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict

from .grid_coord import GridCoord


# u16 max - "brak numeru" w formacie zapisu mapy
INVALID_TILE_ID: int = 65535


class TileCategory(Enum):
    """Kategoria pola: ścieżka lub placeholder budynku."""
    PATH = auto()
    STRUCTURE = auto()


class TileKind(Enum):
    """
    Rodzaj pola planszy.

    Wartość enuma to krotka (block_id, kategoria, symbol ASCII).
    """
    EMPTY_LAND = ("web3:empty_land", TileCategory.PATH, ".")
    HOSPITAL = ("web3:hospital", TileCategory.PATH, "H")
    START = ("web3:start", TileCategory.PATH, "S")
    CHANCE = ("web3:chance", TileCategory.PATH, "?")
    BONUS = ("web3:bonus", TileCategory.PATH, "B")
    FEE = ("web3:fee", TileCategory.PATH, "F")
    CARD = ("web3:card", TileCategory.PATH, "C")
    NEWS = ("web3:news", TileCategory.PATH, "N")
    LOTTERY = ("web3:lottery", TileCategory.PATH, "L")
    CARD_SHOP = ("web3:card_shop", TileCategory.PATH, "$")
    BUILDING_1X1 = ("web3:building_1x1", TileCategory.STRUCTURE, "#")
    BUILDING_2X2 = ("web3:building_2x2", TileCategory.STRUCTURE, "@")

    @property
    def block_id(self) -> str:
        return self.value[0]

    @property
    def category(self) -> TileCategory:
        return self.value[1]

    @property
    def symbol(self) -> str:
        return self.value[2]

    @property
    def is_structure(self) -> bool:
        return self.category is TileCategory.STRUCTURE

    @classmethod
    def from_block_id(cls, block_id: str) -> TileKind:
        """
        Zwraca rodzaj pola dla block_id z pliku mapy.

        Raises:
            ValueError: Jeśli block_id jest nieznany
        """
        kind = _BY_BLOCK_ID.get(block_id)
        if kind is None:
            raise ValueError(f"Unknown block id: {block_id!r}")
        return kind

    @classmethod
    def from_name(cls, name: str) -> TileKind:
        """
        Zwraca rodzaj pola po nazwie ("hospital", "HOSPITAL")
        lub po block_id ("web3:hospital").

        Raises:
            ValueError: Jeśli nazwa jest nieznana
        """
        if ":" in name:
            return cls.from_block_id(name)
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown tile kind: {name!r}") from None


_BY_BLOCK_ID: Dict[str, TileKind] = {kind.block_id: kind for kind in TileKind}


@dataclass
class Tile:
    """
    Pojedyncze pole planszy.

    Tożsamością pola jest jego pozycja - na jednej pozycji może
    leżeć co najwyżej jedno pole (pilnuje tego GridIndex).

    Attributes:
        position (GridCoord): Pozycja na siatce
        kind (TileKind): Rodzaj pola
        sequential_id (int): Numer na ścieżce lub INVALID_TILE_ID

    Note:
        sequential_id zapisuje wyłącznie SequentialIdAssigner
        podczas pełnego przenumerowania planszy (oraz loader,
        który odtwarza numery zapisane w pliku mapy).
    """
    position: GridCoord
    kind: TileKind = TileKind.EMPTY_LAND
    sequential_id: int = INVALID_TILE_ID

    @property
    def is_path(self) -> bool:
        """Czy pole należy do ścieżki (jest numerowane)."""
        return self.kind.category is TileCategory.PATH

    @property
    def is_structure(self) -> bool:
        """Czy pole jest placeholderem budynku."""
        return self.kind.category is TileCategory.STRUCTURE

    @property
    def walkable(self) -> bool:
        """Czy gracz może stanąć na polu - wynika wprost z rodzaju."""
        return self.is_path

    @property
    def has_sequential_id(self) -> bool:
        return self.sequential_id != INVALID_TILE_ID

    def __repr__(self) -> str:
        return (
            f"Tile({self.position.x}, {self.position.z}, "
            f"{self.kind.name}, id={self.sequential_id})"
        )

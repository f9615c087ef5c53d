"""
Budowanie plansz z layoutu ASCII / formatu zapisu i zapis z powrotem.

LAYOUT ASCII:
═══════════════════════════════════════════════════════════════════

    Wiersz 0 to GÓRA planszy (największe z), x rośnie w prawo:

        rows = ["H...",        z=2
                ".  .",        z=1
                "...."]        z=0
                 x=0..3

    Spacja = brak pola. Pozostałe znaki tłumaczy legenda
    (symbol -> nazwa rodzaju pola). Budynki nie są rysowane
    w layoucie - podaje się je osobną listą:

        buildings = [{"x": 1, "z": 1, "size": 1, "group": "red"}]

FORMAT ZAPISU:
═══════════════════════════════════════════════════════════════════

    {
        "name": "ring_24",
        "tiles": [
            {"blockId": "web3:hospital", "position": {"x": 0, "z": 0},
             "data": {"tileId": 0}},
            ...
        ],
        "buildings": [
            {"blockId": "web3:building_1x1", "size": 1,
             "position": {"x": 1, "z": 1}, "group": "red", "buildingId": 0, ...}
        ]
    }

    Zapisane tileId są odtwarzane 1:1 - wczytanie nigdy nie
    przelicza numeracji (robi to tylko assign_sequential_ids).
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..core.config_loader import ConfigLoader
from ..core.tile import INVALID_TILE_ID, TileKind
from .board import Board, BoardConfig


EMPTY_CELL = " "

_BUILDING_ATTRS = ("direction", "owner", "level", "price")
_INT_ATTRS = ("direction", "level", "price")


def _legend_kinds(legend: Mapping[str, str]) -> Dict[str, TileKind]:
    kinds = {}
    for symbol, name in legend.items():
        kind = TileKind.from_name(name)
        if kind.is_structure:
            raise ValueError(
                f"Legend symbol {symbol!r} maps to {kind.name}; list buildings separately"
            )
        kinds[str(symbol)] = kind
    return kinds


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _position(entry: Mapping[str, Any], default: Any = None) -> Tuple[int, int]:
    position = _mapping(entry.get("position", default), "position")
    return int(position["x"]), int(position["z"])


def _tile_id(entry: Mapping[str, Any]) -> int:
    """Zapisany tileId: liczba nieujemna albo INVALID_TILE_ID."""
    data = entry.get("data")
    if data is None:
        return INVALID_TILE_ID
    tile_id = int(_mapping(data, "data").get("tileId", INVALID_TILE_ID))
    if not 0 <= tile_id <= INVALID_TILE_ID:
        raise ValueError(f"tileId out of range: {tile_id}")
    return tile_id


def _place_buildings(board: Board, buildings: Iterable[Mapping[str, Any]]) -> None:
    for entry in buildings:
        entry = _mapping(entry, "building")
        x, z = _position(entry, default=entry)
        attrs = {k: entry[k] for k in _BUILDING_ATTRS if entry.get(k) is not None}
        for key in _INT_ATTRS:
            if key in attrs:
                attrs[key] = int(attrs[key])

        building = board.place_building(
            x, z, size=int(entry.get("size", 1)), group=entry.get("group"), **attrs
        )
        if building is None:
            raise ValueError(f"Building at ({x}, {z}) overlaps an occupied cell")

        if "buildingId" in entry:
            building.building_id = int(entry["buildingId"])


# ─────────────────────────────────────────────────────────────────────────────
# LAYOUT
# ─────────────────────────────────────────────────────────────────────────────

def board_from_layout(
    rows: List[str],
    legend: Mapping[str, str],
    buildings: Optional[Iterable[Mapping[str, Any]]] = None,
    name: str = "board",
    config: Optional[BoardConfig] = None,
) -> Board:
    """
    Buduje planszę z layoutu ASCII.

    Args:
        rows: Wiersze layoutu, pierwszy wiersz = największe z
        legend: Symbol -> nazwa rodzaju pola (np. "H" -> "hospital")
        buildings: Lista budynków {x, z, size, group, ...}
        name: Nazwa planszy
        config: Konfiguracja planszy

    Returns:
        Board: Plansza bez numeracji (numery = INVALID_TILE_ID)

    Raises:
        ValueError: Nieznany symbol, budynek w legendzie, nachodzące budynki
    """
    kinds = _legend_kinds(legend)
    board = Board(name, config=config)
    top = len(rows) - 1

    for row_index, row in enumerate(rows):
        z = top - row_index
        for x, symbol in enumerate(row):
            if symbol == EMPTY_CELL:
                continue
            if symbol not in kinds:
                raise ValueError(f"Unknown layout symbol {symbol!r} at ({x}, {z})")
            board.place_tile(x, z, kinds[symbol])

    _place_buildings(board, buildings or [])
    return board


def board_from_config(loader: ConfigLoader, board_id: str) -> Board:
    """
    Wczytuje przykładową planszę z boards.yaml.

    Reguły walidacji to defaults.yaml nadpisane sekcją validation planszy.

    Raises:
        KeyError: Jeśli plansza nie istnieje
    """
    definition = loader.load_board(board_id)
    config = BoardConfig.from_loader(loader, validation=definition["validation"])

    return board_from_layout(
        definition["layout"],
        definition.get("legend", {}),
        definition.get("buildings", []),
        name=board_id,
        config=config,
    )


# ─────────────────────────────────────────────────────────────────────────────
# FORMAT ZAPISU
# ─────────────────────────────────────────────────────────────────────────────

def board_from_dict(
    data: Mapping[str, Any],
    config: Optional[BoardConfig] = None,
) -> Board:
    """
    Odtwarza planszę z formatu zapisu.

    Placeholdery budynków na liście tiles są pomijane - odtwarza
    je lista buildings. Zapisane tileId trafiają do pól bez zmian.

    Raises:
        ValueError: Nieznany blockId, zajęta pozycja, nachodzące budynki,
            pole niebędące słownikiem, tileId spoza zakresu
    """
    board = Board(data.get("name", "board"), config=config)

    for entry in data.get("tiles", []):
        entry = _mapping(entry, "tile")
        kind = TileKind.from_block_id(entry["blockId"])
        if kind.is_structure:
            continue

        x, z = _position(entry)
        if not board.place_tile(x, z, kind):
            raise ValueError(f"Duplicate tile at ({x}, {z})")

        board.get_tile((x, z)).sequential_id = _tile_id(entry)

    _place_buildings(board, data.get("buildings", []))
    return board


def board_to_dict(board: Board) -> Dict[str, Any]:
    """Serializuje planszę do formatu zapisu (pola ścieżki + budynki)."""
    tiles = [
        {
            "blockId": tile.kind.block_id,
            "position": {"x": tile.position.x, "z": tile.position.z},
            "data": {"tileId": tile.sequential_id},
        }
        for tile in board.index
        if tile.is_path
    ]
    return {
        "name": board.name,
        "tiles": tiles,
        "buildings": [b.to_dict() for b in board.buildings],
    }

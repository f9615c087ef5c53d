"""
Core module - podstawowe komponenty silnika planszy.

Zawiera:
- GridCoord: Współrzędne siatki kwadratowej (x, z)
- Tile, TileKind: Pola planszy i ich rodzaje
- GridIndex: Rzadki indeks pól z obsługą zajętości
- pathfinding: A* i zasięg ruchu po polach ścieżki
- ConfigLoader: Wczytywanie konfiguracji z defaults
- StructuralError: Błąd struktury planszy
"""

from .grid_coord import GridCoord, as_coord
from .tile import INVALID_TILE_ID, Tile, TileCategory, TileKind
from .grid_index import GridIndex
from .pathfinding import PathFinder, PathResult, PathStatus, find_path, get_reachable
from .config_loader import ConfigLoader
from .errors import StructuralError

__all__ = [
    "GridCoord", "as_coord", "INVALID_TILE_ID", "Tile", "TileCategory", "TileKind",
    "GridIndex", "PathFinder", "PathResult", "PathStatus", "find_path",
    "get_reachable", "ConfigLoader", "StructuralError",
]

"""
Board module - plansza, budynki i format zapisu.

Zawiera:
- Board, BoardConfig: Agregat planszy i jego konfiguracja
- Building, BuildingRegistry: Budynki 1x1 / 2x2
- loader: Layout ASCII, boards.yaml, format zapisu mapy
"""

from .building import Building, BuildingRegistry
from .board import Board, BoardConfig
from .loader import board_from_config, board_from_dict, board_from_layout, board_to_dict

__all__ = [
    "Building", "BuildingRegistry", "Board", "BoardConfig",
    "board_from_config", "board_from_dict", "board_from_layout", "board_to_dict",
]

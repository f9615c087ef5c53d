"""
Loader konfiguracji z automatycznym uzupełnianiem wartości domyślnych.

Silnik planszy czyta konfigurację z plików YAML:
- defaults.yaml: reguły walidacji, numerowanie, pathfinding
- boards.yaml: przykładowe plansze (layout ASCII + budynki)

Logika merge (uzupełniania defaults):
    1. Wczytaj defaults.yaml - zawiera wartości bazowe
    2. Wczytaj konkretną definicję (np. plansza "ring_24")
    3. Dla każdego klucza w defaults, którego brak w definicji:
       - Użyj wartości z defaults
    4. Definicja może nadpisać defaults

Przykład:
    defaults.yaml:
        board_defaults:
            legend: {".": empty_land, "H": hospital}
        validation:
            min_tiles: 20

    boards.yaml:
        boards:
          tiny_loop:
            layout: ["H..", ". .", "..."]
            validation:
              min_tiles: 8      # nadpisuje default tylko dla tej planszy

Użycie:
    >>> loader = ConfigLoader("data/")
    >>> loader.get_validation_rules()["max_dead_ends"]
    2
    >>> board_def = loader.load_board("ring_24")
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, Optional
import yaml
import copy


class ConfigLoader:
    """
    Ładuje konfigurację z plików YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Ścieżka do folderu data/
        _defaults (Dict): Cache wczytanych defaults
        _boards (Dict): Cache wczytanych plansz
    """

    def __init__(self, data_path: str = "data/"):
        """
        Inicjalizuje loader z ścieżką do danych.

        Args:
            data_path: Ścieżka do folderu z plikami YAML
        """
        self.data_path = Path(data_path)
        self._defaults: Optional[Dict] = None
        self._boards: Optional[Dict] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> Dict:
        """
        Wczytuje plik YAML.

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
        """
        filepath = self.data_path / filename
        with open(filepath, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_defaults(self) -> Dict:
        """
        Zwraca słownik z wartościami domyślnymi.

        Cache'uje wczytany plik - kolejne wywołania są szybkie.
        """
        if self._defaults is None:
            self._defaults = self._load_yaml("defaults.yaml")
        return self._defaults

    def get_validation_rules(self) -> Dict:
        """Zwraca sekcję validation z defaults.yaml."""
        return copy.deepcopy(self.get_defaults().get("validation", {}))

    def get_numbering_config(self) -> Dict:
        """Zwraca sekcję numbering (rodzaje pól startowych)."""
        return copy.deepcopy(self.get_defaults().get("numbering", {}))

    def get_pathfinding_config(self) -> Dict:
        """Zwraca sekcję pathfinding (budżet iteracji A*)."""
        return copy.deepcopy(self.get_defaults().get("pathfinding", {}))

    def get_board_defaults(self) -> Dict:
        """Zwraca domyślne wartości dla plansz (legenda layoutu)."""
        return self.get_defaults().get("board_defaults", {})

    # ─────────────────────────────────────────────────────────────────────────
    # ŁADOWANIE PLANSZ
    # ─────────────────────────────────────────────────────────────────────────

    def _get_all_boards_raw(self) -> Dict:
        """Zwraca wszystkie surowe definicje plansz."""
        if self._boards is None:
            data = self._load_yaml("boards.yaml")
            self._boards = data.get("boards", {})
        return self._boards

    def load_board(self, board_id: str) -> Dict:
        """
        Wczytuje definicję planszy z uzupełnionymi defaults.

        Proces merge:
        1. Zacznij od kopii board_defaults
        2. Nadpisz wartościami z definicji planszy
        3. Dodaj reguły walidacji (defaults + nadpisania planszy)

        Args:
            board_id: ID planszy (klucz w boards.yaml)

        Returns:
            Dict: Pełna definicja planszy

        Raises:
            KeyError: Jeśli plansza nie istnieje
        """
        boards = self._get_all_boards_raw()

        if board_id not in boards:
            raise KeyError(f"Board '{board_id}' not found in boards.yaml")

        result = copy.deepcopy(self.get_board_defaults())
        result = self._deep_merge(result, boards[board_id])
        result["validation"] = self._deep_merge(
            self.get_validation_rules(),
            boards[board_id].get("validation", {}),
        )
        result["id"] = board_id

        return result

    def get_board_ids(self) -> list[str]:
        """Zwraca listę wszystkich ID plansz."""
        return list(self._get_all_boards_raw().keys())

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Głęboko łączy dwa słowniki.

        Override nadpisuje wartości w base.
        Nested dicts są merge'owane rekurencyjnie.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def reload(self) -> None:
        """
        Czyści cache i wymusza ponowne wczytanie plików.

        Przydatne podczas edycji plików YAML w runtime.
        """
        self._defaults = None
        self._boards = None

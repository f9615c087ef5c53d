"""
System logowania zdarzeń planszy do formatu JSON.

Każda edycja planszy i każdy przebieg analizy jest zapisywany
z numerem rewizji planszy. Log pozwala odtworzyć sesję edytora
i sprawdzić na jakiej wersji planszy policzono numery / raport.

TYPY ZDARZEŃ:
═══════════════════════════════════════════════════════════════════

    TILE_PLACED / TILE_REMOVED
    ─────────────────────────────────────────────────────────────
    Edycja pola.
    Data: kind

    BUILDING_PLACED / BUILDING_REMOVED
    ─────────────────────────────────────────────────────────────
    Edycja budynku.
    Data: size, group

    IDS_ASSIGNED
    ─────────────────────────────────────────────────────────────
    Pełne przenumerowanie pól.
    Data: origin [x, z], count, excluded, unreached

    BUILDING_IDS_ASSIGNED
    ─────────────────────────────────────────────────────────────
    Data: count

    VALIDATION_RUN
    ─────────────────────────────────────────────────────────────
    Data: is_valid, issues (lista kodów)

    PATH_FOUND / PATH_NOT_FOUND / PATH_BUDGET_EXHAUSTED
    ─────────────────────────────────────────────────────────────
    Data: start, goal, steps, iterations

FORMAT LOGU:
═══════════════════════════════════════════════════════════════════

{
    "metadata": {
        "version": "1.0",
        "board": "ring_24",
        "timestamp": "2024-01-01T12:00:00"
    },
    "events": [
        {"revision": 1, "type": "TILE_PLACED", "position": [0, 0], "data": {"kind": "HOSPITAL"}},
        {"revision": 24, "type": "IDS_ASSIGNED", "data": {"origin": [0, 0], "count": 24}},
        ...
    ]
}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional
from datetime import datetime
import json
from pathlib import Path

from ..core.grid_coord import GridCoord


class EventType(Enum):
    """Typ zdarzenia planszy."""

    # Edycja
    TILE_PLACED = auto()
    TILE_REMOVED = auto()
    BUILDING_PLACED = auto()
    BUILDING_REMOVED = auto()

    # Analiza
    IDS_ASSIGNED = auto()
    BUILDING_IDS_ASSIGNED = auto()
    VALIDATION_RUN = auto()

    # Zapytania
    PATH_FOUND = auto()
    PATH_NOT_FOUND = auto()
    PATH_BUDGET_EXHAUSTED = auto()


@dataclass
class BoardEvent:
    """
    Pojedyncze zdarzenie planszy.

    Attributes:
        revision (int): Rewizja planszy w chwili zdarzenia
        event_type (EventType): Typ zdarzenia
        position (Optional[GridCoord]): Pole którego dotyczy
        data (Dict): Dodatkowe dane specyficzne dla typu zdarzenia
    """
    revision: int
    event_type: EventType
    position: Optional[GridCoord] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje zdarzenie do słownika."""
        result: Dict[str, Any] = {
            "revision": self.revision,
            "type": self.event_type.name,
        }

        if self.position is not None:
            result["position"] = [self.position.x, self.position.z]
        if self.data:
            result["data"] = self.data

        return result


class EventLogger:
    """
    Logger zdarzeń planszy.

    Zbiera wszystkie zdarzenia i może je zapisać do pliku JSON.

    Example:
        >>> logger = EventLogger(board_name="ring_24")
        >>> logger.log_event(1, EventType.TILE_PLACED, GridCoord(0, 0), kind="HOSPITAL")
        >>> logger.save("output/ring_24.json")
    """

    def __init__(self, board_name: str = "board"):
        self.events: List[BoardEvent] = []
        self.metadata: Dict[str, Any] = {
            "version": "1.0",
            "board": board_name,
            "timestamp": datetime.now().isoformat(),
        }

    # ─────────────────────────────────────────────────────────────────────────
    # LOGOWANIE
    # ─────────────────────────────────────────────────────────────────────────

    def log(self, event: BoardEvent) -> None:
        self.events.append(event)

    def log_event(
        self,
        revision: int,
        event_type: EventType,
        position: Optional[GridCoord] = None,
        **data: Any,
    ) -> BoardEvent:
        """
        Tworzy i loguje zdarzenie.

        Args:
            revision: Rewizja planszy
            event_type: Typ zdarzenia
            position: Pole którego dotyczy
            **data: Dodatkowe dane

        Returns:
            BoardEvent: Utworzone zdarzenie
        """
        event = BoardEvent(
            revision=revision,
            event_type=event_type,
            position=position,
            data=dict(data),
        )
        self.log(event)
        return event

    # ─────────────────────────────────────────────────────────────────────────
    # ODCZYT
    # ─────────────────────────────────────────────────────────────────────────

    def get_events(self) -> List[Dict[str, Any]]:
        """Wszystkie zdarzenia jako słowniki."""
        return [e.to_dict() for e in self.events]

    def get_events_by_type(self, event_type: EventType) -> List[BoardEvent]:
        return [e for e in self.events if e.event_type is event_type]

    def clear(self) -> None:
        self.events.clear()

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPIS
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata,
            "events": self.get_events(),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, filepath: str) -> None:
        """
        Zapisuje log do pliku JSON.

        Tworzy brakujące katalogi.
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())

    def __len__(self) -> int:
        return len(self.events)

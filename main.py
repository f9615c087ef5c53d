#!/usr/bin/env python3
"""
Tycoon Board Engine - Entry Point
═══════════════════════════════════════════════════════════════════════════

Wczytuje przykładową planszę z data/boards.yaml, waliduje ją
i numeruje pola ścieżki.

Użycie:
    python main.py                         # Plansza "classic"
    python main.py --board ring_24         # Konkretna plansza
    python main.py --board branching --strict
    python main.py --list                  # Dostępne plansze
    python main.py --verbose --save-log    # Statystyki + log JSON

Wynik:
    - Wypisuje raport walidacji i ponumerowaną planszę
    - Opcjonalnie zapisuje log zdarzeń do output/board_{name}.json
"""

import argparse
import sys
from pathlib import Path

# Dodaj katalog repo do path
sys.path.insert(0, str(Path(__file__).parent))

from tycoon_board.board import board_from_config
from tycoon_board.core.config_loader import ConfigLoader
from tycoon_board.core.errors import StructuralError
from tycoon_board.events.event_logger import EventType


DATA_PATH = Path(__file__).parent / "data"

SEVERITY_ICONS = {
    "warning": "⚠️ ",
    "error": "❌",
    "critical": "🛑",
}


def main(argv=None):
    """Główna funkcja."""
    parser = argparse.ArgumentParser(
        description="Tycoon Board Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--board", "-b",
        default="classic",
        help="Nazwa planszy z boards.yaml (domyślnie: classic)"
    )
    parser.add_argument(
        "--data",
        default=str(DATA_PATH),
        help="Katalog z defaults.yaml i boards.yaml"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Odrzucaj rozwidlone plansze przy numerowaniu"
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Wypisz dostępne plansze i zakończ"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Szczegółowy output"
    )
    parser.add_argument(
        "--save-log",
        action="store_true",
        help="Zapisz log zdarzeń do output/board_{name}.json"
    )

    args = parser.parse_args(argv)
    loader = ConfigLoader(args.data)

    if args.list:
        for board_id in loader.get_board_ids():
            print(board_id)
        return 0

    try:
        board = board_from_config(loader, args.board)
    except KeyError:
        print(f"Nieznana plansza: {args.board}")
        print(f"Dostępne: {', '.join(loader.get_board_ids())}")
        return 2

    print("=" * 60)
    print("TYCOON BOARD ENGINE")
    print("=" * 60)
    print(f"Plansza: {board.name}")
    print(f"Pola: {len(board.index)}  Budynki: {len(board.buildings)}")
    print()
    print(board.render_ascii())
    print()

    # ─────────────────────────────────────────────────────────────────────────
    # WALIDACJA
    # ─────────────────────────────────────────────────────────────────────────
    print("-" * 60)
    print("WALIDACJA")
    print("-" * 60)

    report = board.validate()
    if not report.issues:
        print("Brak problemów.")
    for issue in report.issues:
        data = issue.to_dict()
        print(f"  {SEVERITY_ICONS[data['severity']]} {data['code']}: {data['message']}")

    print()
    print("✅ Plansza grywalna" if report.is_valid else "🚫 Plansza niegrywalna")
    print()

    # ─────────────────────────────────────────────────────────────────────────
    # NUMEROWANIE
    # ─────────────────────────────────────────────────────────────────────────
    print("-" * 60)
    print("NUMEROWANIE")
    print("-" * 60)

    exit_code = 0 if report.is_valid else 1
    try:
        result = board.assign_sequential_ids(strict=args.strict)
    except StructuralError as e:
        print(f"🛑 {e.code}: {e}")
        exit_code = 1
    else:
        board.assign_building_ids()
        print(f"Start: {result.origin}  Ponumerowane pola: {result.count}")
        if result.unreached:
            print(f"Nieosiągnięte pola: {len(result.unreached)}")
        print()
        print(board.render_ascii(show_ids=True))

    # Verbose: statystyki
    if args.verbose:
        print()
        print("-" * 60)
        print("STATYSTYKI")
        print("-" * 60)
        for key, value in report.statistics.items():
            print(f"  {key}: {value}")
        print()
        for event_type in EventType:
            count = len(board.logger.get_events_by_type(event_type))
            if count > 0:
                print(f"  {event_type.name}: {count}")

    # Zapisz log
    if args.save_log:
        output_path = f"output/board_{board.name}.json"
        board.save_log(output_path)
        print()
        print(f"📄 Log zapisany: {output_path}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())

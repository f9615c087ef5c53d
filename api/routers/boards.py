"""
Boards router - walidacja, numerowanie i zapytania o ścieżki.

Plansza przychodzi w formacie zapisu mapy (tiles + buildings),
jest odtwarzana przez board_from_dict i analizowana z regułami
z data/defaults.yaml.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import List, Dict, Any
from pathlib import Path

from tycoon_board.board import Board, BoardConfig, board_from_config, board_from_dict, board_to_dict
from tycoon_board.core.config_loader import ConfigLoader
from tycoon_board.core.errors import StructuralError


router = APIRouter()

DATA_PATH = Path(__file__).parent.parent.parent / "data"
_loader = ConfigLoader(str(DATA_PATH))


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════

class BoardPayload(BaseModel):
    """Plansza w formacie zapisu mapy."""
    name: str = "board"
    tiles: List[Dict[str, Any]] = []
    buildings: List[Dict[str, Any]] = []


class ValidateRequest(BaseModel):
    """Request do walidacji (opcjonalne nadpisania reguł)."""
    board: BoardPayload
    overrides: Dict[str, Any] = {}


class AssignIdsRequest(BaseModel):
    """Request do numerowania pól."""
    board: BoardPayload
    strict: bool = False


class PathRequest(BaseModel):
    """Request do wyszukania ścieżki."""
    board: BoardPayload
    start: List[int]  # [x, z]
    goal: List[int]


class ReachableRequest(BaseModel):
    """Request o zasięg ruchu."""
    board: BoardPayload
    start: List[int]
    max_steps: int


# ═══════════════════════════════════════════════════════════════════════════
# HELPERY
# ═══════════════════════════════════════════════════════════════════════════

def _build_board(payload: BoardPayload) -> Board:
    """Odtwarza planszę z requestu; błędne dane -> 422."""
    try:
        return board_from_dict(payload.model_dump(), config=BoardConfig.from_loader(_loader))
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid board: {e}")


def _xz(coord) -> List[int]:
    return [coord.x, coord.z]


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.get("/boards")
async def list_boards() -> List[str]:
    """Zwraca nazwy przykładowych plansz z boards.yaml."""
    return _loader.get_board_ids()


@router.get("/boards/{name}")
async def get_board(name: str) -> Dict[str, Any]:
    """
    Zwraca przykładową planszę.

    Returns:
        Podsumowanie, podgląd ASCII i plansza w formacie zapisu
    """
    try:
        board = board_from_config(_loader, name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Board '{name}' not found")

    return {
        "id": name,
        "summary": board.summary(),
        "ascii": board.render_ascii(),
        "board": board_to_dict(board),
    }


@router.post("/boards/validate")
async def validate_board(request: ValidateRequest) -> Dict[str, Any]:
    """Uruchamia wszystkie reguły walidacji i zwraca raport."""
    board = _build_board(request.board)
    try:
        report = board.validate(**request.overrides)
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return report.to_dict()


@router.post("/boards/assign-ids")
async def assign_ids(request: AssignIdsRequest) -> Dict[str, Any]:
    """
    Numeruje pola ścieżki od pola startowego.

    Returns:
        Numeracja + plansza z zapisanymi tileId.
        409 gdy plansza nie ma startu albo jest rozwidlona (strict).
    """
    board = _build_board(request.board)
    try:
        result = board.assign_sequential_ids(strict=request.strict)
    except StructuralError as e:
        raise HTTPException(status_code=409, detail={"code": e.code, "message": str(e)})

    return {
        "origin": _xz(result.origin),
        "count": result.count,
        "ids": [{"position": _xz(c), "tileId": i} for i, c in enumerate(result.numbered)],
        "excluded": [_xz(c) for c in result.excluded],
        "unreached": [_xz(c) for c in result.unreached],
        "ascii": board.render_ascii(show_ids=True),
        "board": board_to_dict(board),
    }


@router.post("/boards/path")
async def find_path(request: PathRequest) -> Dict[str, Any]:
    """Najkrótsza ścieżka po polach ścieżki (A*)."""
    board = _build_board(request.board)
    try:
        result = board.find_path(request.start, request.goal)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {
        "status": result.status.name,
        "path": [_xz(c) for c in result.path],
        "steps": result.steps,
        "iterations": result.iterations,
    }


@router.post("/boards/reachable")
async def reachable(request: ReachableRequest) -> Dict[str, Any]:
    """Pola osiągalne w 1..max_steps krokach."""
    board = _build_board(request.board)
    try:
        cells = board.get_reachable(request.start, request.max_steps)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    positions = sorted(_xz(c) for c in cells)
    return {
        "positions": positions,
        "count": len(positions),
    }

"""
Walidacja struktury planszy (ValidationEngine).

Silnik uruchamia stały zestaw niezależnych reguł i zbiera
WSZYSTKIE wyniki do jednego raportu - nigdy nie przerywa po
pierwszym błędzie.

REGUŁY:
═══════════════════════════════════════════════════════════════════

    kod                      warunek                               waga
    ─────────────────────────────────────────────────────────────────────
    INSUFFICIENT_TILES       liczba pól < min_tiles                ERROR
    TOO_MANY_TILES           liczba pól > max_tiles                ERROR
    NO_HOSPITAL              brak szpitala                         CRITICAL
    NO_START                 brak pola startowego                  CRITICAL
    INSUFFICIENT_PROPERTIES  budynków < min_properties             ERROR
    NOT_CONNECTED            pola ścieżki w > 1 regionie           CRITICAL
    TOO_MANY_DEAD_ENDS       ślepych zaułków > max_dead_ends       WARNING
    PROPERTY_GROUP_SMALL     grupa ma < group_min_size budynków    WARNING
    PROPERTY_GROUP_LARGE     grupa ma > group_max_size budynków    WARNING
    LOW_PROPERTY_VARIETY     grup < min_group_variety              WARNING

KATEGORIE:
═══════════════════════════════════════════════════════════════════

    STRUCTURAL  (ERROR, CRITICAL) - plansza nie nadaje się do gry
    BALANCE     (WARNING)         - uwaga doradcza, nie blokuje

    Raport jest poprawny (is_valid) gdy nie ma żadnego ERROR/CRITICAL.
    Silnik tylko klasyfikuje - decyzję o starcie gry podejmuje
    wywołujący.

Przykład użycia:
    >>> engine = ValidationEngine(index, buildings=registry.all())
    >>> report = engine.validate()
    >>> report.is_valid
    False
    >>> [issue.code.name for issue in report.errors()]
    ['NOT_CONNECTED']
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field, fields
from enum import Enum, auto
from typing import Any, Dict, Iterable, List, Optional, Tuple, TYPE_CHECKING

from ..core.grid_coord import GridCoord
from ..core.grid_index import GridIndex
from ..core.tile import Tile, TileKind
from .connectivity import ConnectivityAnalyzer

if TYPE_CHECKING:
    from ..board.building import Building


class Severity(Enum):
    """Waga problemu."""
    WARNING = auto()
    ERROR = auto()
    CRITICAL = auto()


class IssueCategory(Enum):
    """StructuralError (blokuje grę) vs BalanceWarning (doradcze)."""
    STRUCTURAL = auto()
    BALANCE = auto()


class IssueCode(Enum):
    """Kody problemów zgłaszanych przez reguły."""
    INSUFFICIENT_TILES = auto()
    TOO_MANY_TILES = auto()
    NO_HOSPITAL = auto()
    NO_START = auto()
    INSUFFICIENT_PROPERTIES = auto()
    NOT_CONNECTED = auto()
    TOO_MANY_DEAD_ENDS = auto()
    PROPERTY_GROUP_SMALL = auto()
    PROPERTY_GROUP_LARGE = auto()
    LOW_PROPERTY_VARIETY = auto()


@dataclass
class ValidationIssue:
    """
    Pojedynczy problem znaleziony przez regułę.

    Attributes:
        code (IssueCode): Kod problemu
        severity (Severity): Waga
        message (str): Opis dla człowieka
        position (Optional[GridCoord]): Pole którego dotyczy (jeśli dotyczy)
    """
    code: IssueCode
    severity: Severity
    message: str
    position: Optional[GridCoord] = None

    @property
    def category(self) -> IssueCategory:
        if self.severity is Severity.WARNING:
            return IssueCategory.BALANCE
        return IssueCategory.STRUCTURAL

    @property
    def is_blocking(self) -> bool:
        return self.category is IssueCategory.STRUCTURAL

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje problem do słownika."""
        result: Dict[str, Any] = {
            "code": self.code.name,
            "severity": self.severity.name.lower(),
            "category": self.category.name.lower(),
            "message": self.message,
        }
        if self.position is not None:
            result["position"] = [self.position.x, self.position.z]
        return result


@dataclass
class ValidationReport:
    """
    Uporządkowana lista problemów + statystyki planszy.

    Attributes:
        issues (List[ValidationIssue]): Problemy w kolejności reguł
        statistics (Dict[str, Any]): Liczniki (pola, regiony, zaułki, ...)
    """
    issues: List[ValidationIssue] = field(default_factory=list)
    statistics: Dict[str, Any] = field(default_factory=dict)

    def add(
        self,
        code: IssueCode,
        severity: Severity,
        message: str,
        position: Optional[GridCoord] = None,
    ) -> ValidationIssue:
        issue = ValidationIssue(code, severity, message, position)
        self.issues.append(issue)
        return issue

    @property
    def is_valid(self) -> bool:
        """Brak problemów o wadze ERROR lub CRITICAL."""
        return not any(issue.is_blocking for issue in self.issues)

    def errors(self) -> List[ValidationIssue]:
        """Problemy blokujące (ERROR + CRITICAL)."""
        return [i for i in self.issues if i.is_blocking]

    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if not i.is_blocking]

    def codes(self) -> List[IssueCode]:
        return [i.code for i in self.issues]

    def has(self, code: IssueCode) -> bool:
        return any(i.code is code for i in self.issues)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "issues": [i.to_dict() for i in self.issues],
            "statistics": self.statistics,
        }


def _kinds(names: Iterable[Any]) -> Tuple[TileKind, ...]:
    return tuple(n if isinstance(n, TileKind) else TileKind.from_name(n) for n in names)


@dataclass
class ValidationRules:
    """
    Konfiguracja reguł walidacji.

    Wartości domyślne odpowiadają sekcji validation w defaults.yaml;
    silnik działa z nimi także bez katalogu data/.

    Attributes:
        min_tiles / max_tiles: Dozwolona liczba pól
        require_start_tile: Czy wymagać pola startowego
        require_hospital: Czy wymagać szpitala
        min_properties: Minimalna liczba budynków
        max_dead_ends: Maksymalna liczba ślepych zaułków
        require_connected: Czy wymagać jednego regionu ścieżki
        group_min_size / group_max_size: Zakres budynków w grupie
        min_group_variety: Minimalna liczba różnych grup
        start_kinds: Rodzaje pól uznawane za start
        hospital_kinds: Rodzaje pól uznawane za szpital
    """
    min_tiles: int = 20
    max_tiles: int = 100
    require_start_tile: bool = True
    require_hospital: bool = True
    min_properties: int = 8
    max_dead_ends: int = 2
    require_connected: bool = True
    group_min_size: int = 2
    group_max_size: int = 4
    min_group_variety: int = 3
    start_kinds: Tuple[TileKind, ...] = (TileKind.START, TileKind.HOSPITAL)
    hospital_kinds: Tuple[TileKind, ...] = (TileKind.HOSPITAL,)

    def __post_init__(self):
        self.start_kinds = _kinds(self.start_kinds)
        self.hospital_kinds = _kinds(self.hospital_kinds)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]] = None) -> ValidationRules:
        """
        Tworzy reguły ze słownika (np. ConfigLoader.get_validation_rules()).

        Raises:
            ValueError: Jeśli słownik zawiera nieznany klucz
        """
        data = data or {}
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown validation rules: {sorted(unknown)}")
        return cls(**data)

    def merged(self, **overrides: Any) -> ValidationRules:
        """Kopia reguł z częściowym nadpisaniem."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data.update(overrides)
        return ValidationRules.from_dict(data)


class ValidationEngine:
    """
    Sprawdza planszę regułami i zwraca ValidationReport.

    Attributes:
        index (GridIndex): Indeks pól (tylko do odczytu)
        buildings (List[Building]): Budynki na planszy (do reguł posiadłości)
        rules (ValidationRules): Konfiguracja reguł
    """

    def __init__(
        self,
        index: GridIndex,
        buildings: Optional[Iterable["Building"]] = None,
        rules: Optional[ValidationRules] = None,
    ):
        self.index = index
        self.buildings = list(buildings or [])
        self.rules = rules or ValidationRules()
        self.analyzer = ConnectivityAnalyzer(index, _is_path_tile)

    def validate(self) -> ValidationReport:
        """
        Wykonuje wszystkie reguły.

        Każda reguła dopisuje do wspólnego raportu; żadna nie
        przerywa sprawdzania pozostałych.
        """
        report = ValidationReport()
        regions = self.analyzer.find_connected_regions()
        dead_ends = self.analyzer.find_dead_ends()
        groups = self._group_counts()

        self._check_tile_count(report)
        self._check_special_tiles(report)
        self._check_properties(report)
        self._check_connectivity(report, regions)
        self._check_dead_ends(report, dead_ends)
        self._check_group_balance(report, groups)

        report.statistics = self._statistics(regions, dead_ends, groups)
        return report

    # ─────────────────────────────────────────────────────────────────────────
    # REGUŁY
    # ─────────────────────────────────────────────────────────────────────────

    def _check_tile_count(self, report: ValidationReport) -> None:
        tile_count = len(self.index)

        if tile_count < self.rules.min_tiles:
            report.add(
                IssueCode.INSUFFICIENT_TILES,
                Severity.ERROR,
                f"Board needs at least {self.rules.min_tiles} tiles, has {tile_count}",
            )

        if tile_count > self.rules.max_tiles:
            report.add(
                IssueCode.TOO_MANY_TILES,
                Severity.ERROR,
                f"Board allows at most {self.rules.max_tiles} tiles, has {tile_count}",
            )

    def _check_special_tiles(self, report: ValidationReport) -> None:
        if self.rules.require_hospital and not self._has_kind(self.rules.hospital_kinds):
            report.add(IssueCode.NO_HOSPITAL, Severity.CRITICAL, "Board has no hospital tile")

        if self.rules.require_start_tile and not self._has_kind(self.rules.start_kinds):
            report.add(IssueCode.NO_START, Severity.CRITICAL, "Board has no start tile")

    def _check_properties(self, report: ValidationReport) -> None:
        property_count = len(self.buildings)

        if property_count < self.rules.min_properties:
            report.add(
                IssueCode.INSUFFICIENT_PROPERTIES,
                Severity.ERROR,
                f"Board needs at least {self.rules.min_properties} properties, "
                f"has {property_count}",
            )

    def _check_connectivity(self, report: ValidationReport, regions: List[set]) -> None:
        if self.rules.require_connected and len(regions) != 1:
            report.add(
                IssueCode.NOT_CONNECTED,
                Severity.CRITICAL,
                f"Path tiles form {len(regions)} separate regions",
            )

    def _check_dead_ends(self, report: ValidationReport, dead_ends: List[GridCoord]) -> None:
        if len(dead_ends) > self.rules.max_dead_ends:
            report.add(
                IssueCode.TOO_MANY_DEAD_ENDS,
                Severity.WARNING,
                f"Board allows at most {self.rules.max_dead_ends} dead ends, "
                f"has {len(dead_ends)}",
            )

    def _check_group_balance(self, report: ValidationReport, groups: Dict[str, int]) -> None:
        for group, count in groups.items():
            if count < self.rules.group_min_size:
                report.add(
                    IssueCode.PROPERTY_GROUP_SMALL,
                    Severity.WARNING,
                    f"Property group '{group}' has only {count} properties",
                )
            if count > self.rules.group_max_size:
                report.add(
                    IssueCode.PROPERTY_GROUP_LARGE,
                    Severity.WARNING,
                    f"Property group '{group}' has {count} properties",
                )

        if len(groups) < self.rules.min_group_variety:
            report.add(
                IssueCode.LOW_PROPERTY_VARIETY,
                Severity.WARNING,
                f"Board has only {len(groups)} property groups",
            )

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    def _has_kind(self, kinds: Tuple[TileKind, ...]) -> bool:
        return any(tile.kind in kinds for tile in self.index)

    def _group_counts(self) -> Dict[str, int]:
        counts: Counter = Counter(b.group for b in self.buildings if b.group is not None)
        return dict(counts)

    def _statistics(
        self,
        regions: List[set],
        dead_ends: List[GridCoord],
        groups: Dict[str, int],
    ) -> Dict[str, Any]:
        kinds = Counter(tile.kind.name for tile in self.index)
        path_tiles = sum(1 for tile in self.index if tile.is_path)
        return {
            "tile_count": len(self.index),
            "path_tile_count": path_tiles,
            "structure_tile_count": len(self.index) - path_tiles,
            "property_count": len(self.buildings),
            "region_count": len(regions),
            "dead_end_count": len(dead_ends),
            "dead_ends": [[c.x, c.z] for c in dead_ends],
            "kind_distribution": dict(kinds),
            "group_distribution": groups,
        }


def _is_path_tile(tile: Tile) -> bool:
    return tile.is_path

"""
Wyjątki silnika planszy.

Większość błędów jest zwracana jako wartości (raport walidacji,
pusta ścieżka). Wyjątkiem rzucanym przez silnik jest jedynie
StructuralError - gdy operacji nie da się w ogóle wykonać.
"""


class StructuralError(ValueError):
    """
    Plansza ma wadę strukturalną uniemożliwiającą operację.

    Np. brak pola startowego przy numerowaniu albo rozgałęzienie
    ścieżki przy numerowaniu w trybie strict.

    Attributes:
        code (str): Kod błędu zgodny z kodami ValidationIssue
    """

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code

"""
storage_format/classifier.py — przypisanie wystawcy (Issuing CA) do kubełka.

Każda ClassifierRule zawiera:
  - triggers: podciągi (małe litery) szukane w nazwie wystawcy
  - bucket  : nazwa kubełka = nazwa markera regionu na stronie

Reguły są testowane w kolejności; pierwsza pasująca wygrywa.
Brak dopasowania → DEFAULT_BUCKET.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ClassifierRule:
    triggers: tuple[str, ...]
    bucket: str


DEFAULT_BUCKET = "LEGACY"

RULES: list[ClassifierRule] = [
    ClassifierRule(("sectigo",), "SECTIGO"),
    ClassifierRule(("tivo", "pki.tivo.com"), "PKI-TIVO-COM"),
    ClassifierRule(("digicert", "comodo", "godaddy", "letsencrypt"), "THIRD-PARTY"),
    ClassifierRule(("sdv",), "SDV"),
]


def classify(category: str) -> str:
    """Zwraca nazwę kubełka dla tekstu kategorii (bez rozróżniania wielkości liter)."""
    lowered = (category or "").lower()
    for rule in RULES:
        if any(t in lowered for t in rule.triggers):
            return rule.bucket
    return DEFAULT_BUCKET

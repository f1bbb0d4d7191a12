"""
data_model/records.py — rekord certyfikatu wstawiany do tabeli strony.

Record to jeden wiersz tabeli: kategoria (wystawca), klucz główny (CN),
klucz sortowania (data wygaśnięcia) i uporządkowana lista pozostałych pól.
Rekord jest niemutowalny; unikalność primary_key nie jest tu sprawdzana.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias

# Wartość pola: pojedynczy tekst lub lista tekstów (np. SAN-y)
FieldValue: TypeAlias = str | tuple[str, ...]

# Nazwy atrybutów certyfikatu w kolejności kolumn tabeli
SANS = "SANs"
REQUESTOR = "Requestor"
LOCATION = "Location"
DISTRIBUTION_GROUP = "Distribution Group"
NOTES = "Notes"

CERTIFICATE_ATTRIBUTES: tuple[str, ...] = (
    SANS, REQUESTOR, LOCATION, DISTRIBUTION_GROUP, NOTES,
)


@dataclass(frozen=True, slots=True)
class Field:
    """Nazwane pole rekordu (skalar albo lista tekstów)."""
    name: str
    value: FieldValue


@dataclass(frozen=True, slots=True)
class Record:
    """
    Jeden rekord do scalenia z tabelą strony.

    - category:    tekst kategorii (Issuing CA), wejście klasyfikatora
    - primary_key: identyfikator wiersza (CN)
    - sort_key:    tekst daty (Expiration), wejście sortowania
    - attributes:  pozostałe pola w kolejności kolumn
    """
    category: str
    primary_key: str
    sort_key: str
    attributes: tuple[Field, ...] = ()

    def get(self, name: str, default: FieldValue = "") -> FieldValue:
        for f in self.attributes:
            if f.name == name:
                return f.value
        return default

    @classmethod
    def certificate(
        cls,
        *,
        expiration: str,
        cn: str,
        issuing_ca: str,
        sans: tuple[str, ...] | list[str] = (),
        requestor: str = "",
        location: str = "",
        distribution_group: str = "",
        notes: str = "",
    ) -> Record:
        """Buduje rekord w układzie kolumn tabeli certyfikatów."""
        return cls(
            category=issuing_ca,
            primary_key=cn,
            sort_key=expiration,
            attributes=(
                Field(SANS, tuple(s for s in sans if s.strip())),
                Field(REQUESTOR, requestor),
                Field(LOCATION, location),
                Field(DISTRIBUTION_GROUP, distribution_group),
                Field(NOTES, notes),
            ),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Record:
        """
        Tworzy rekord ze słownika JSON.

        Akceptuje klucze snake_case (issuing_ca, distribution_group) oraz
        camelCase znane z eksportu aplikacji (issuingCA, distributionGroup).
        """
        def pick(*keys: str) -> Any:
            for k in keys:
                if k in data and data[k] is not None:
                    return data[k]
            return ""

        sans = pick("sans", "SANs")
        if isinstance(sans, str):
            sans = [s.strip() for s in sans.split(",") if s.strip()]

        return cls.certificate(
            expiration=str(pick("expiration", "sort_key")),
            cn=str(pick("cn", "primary_key")),
            issuing_ca=str(pick("issuing_ca", "issuingCA", "category")),
            sans=tuple(str(s) for s in sans),
            requestor=str(pick("requestor")),
            location=str(pick("location")),
            distribution_group=str(pick("distribution_group", "distributionGroup")),
            notes=str(pick("notes")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "expiration": self.sort_key,
            "cn": self.primary_key,
            "sans": list(self.get(SANS, ())),
            "issuing_ca": self.category,
            "requestor": self.get(REQUESTOR),
            "location": self.get(LOCATION),
            "distribution_group": self.get(DISTRIBUTION_GROUP),
            "notes": self.get(NOTES),
        }

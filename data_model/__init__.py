"""
data_model — struktury danych silnika scalania stron certyfikatów.

Użycie:
  from data_model import Record, Region, Section, Edit, Diagnostic, ...

Moduły:
  records     — Field, Record (układ kolumn certyfikatu)
  documents   — MarkerStyle, Region, Section, Edit
  diagnostics — DiagnosticCode, Diagnostic, MergeError, MalformedDocumentError
"""

from .records import (
    FieldValue,
    Field,
    Record,
    CERTIFICATE_ATTRIBUTES,
)
from .documents import (
    MarkerStyle,
    Region,
    Section,
    Edit,
)
from .diagnostics import (
    DiagnosticCode,
    Diagnostic,
    MergeError,
    MalformedDocumentError,
)

__all__ = [
    # records
    "FieldValue",
    "Field",
    "Record",
    "CERTIFICATE_ATTRIBUTES",
    # documents
    "MarkerStyle",
    "Region",
    "Section",
    "Edit",
    # diagnostics
    "DiagnosticCode",
    "Diagnostic",
    "MergeError",
    "MalformedDocumentError",
]

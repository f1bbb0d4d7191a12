"""
storage_format/markers.py — wyszukiwanie regionów NAZWA-START … NAZWA-END.

Każdy MarkerDialect zawiera:
  - style       : znacznik wariantu (MarkerStyle)
  - start_re    : wzorzec markera START (grupa 1 = nazwa regionu)
  - end_template: wzorzec markera END z miejscem {name} na nazwę

Dialekty są próbowane w kolejności DIALECTS; wygrywa pierwszy, który
znajdzie choć jeden region. Kolejne dialekty nie są wtedy sprawdzane.

Przykłady markerów:
  <ac:structured-macro ac:name="htmlcomment"><ac:rich-text-body>
    <p>SECTIGO-START</p></ac:rich-text-body></ac:structured-macro>
  <!-- SECTIGO-START -->
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from data_model.diagnostics import Diagnostic, DiagnosticCode, note
from data_model.documents import MarkerStyle, Region

_NAME = r"([A-Za-z0-9-]+?)"

# Makro komentarza Confluence; dopasowanie nie może wyjść poza </ac:structured-macro>
_MACRO_OPEN = r'<ac:structured-macro\b[^>]*\bac:name="htmlcomment"[^>]*>'
_WITHIN_MACRO = r"(?:(?!</ac:structured-macro>)[\s\S])*?"
_MACRO_BODY = (
    r"<ac:rich-text-body>\s*<p>\s*{marker}\s*</p>\s*</ac:rich-text-body>\s*"
    r"</ac:structured-macro>"
)


@dataclass(frozen=True, slots=True)
class MarkerDialect:
    style: MarkerStyle
    start_re: re.Pattern[str]
    end_template: str

    def end_re(self, name: str) -> re.Pattern[str]:
        return re.compile(self.end_template.format(name=re.escape(name)), re.IGNORECASE)

    def find_regions(self, text: str, diagnostics: list[Diagnostic] | None = None) -> list[Region]:
        """
        Zwraca regiony w kolejności dokumentu.

        START bez END → MISSING_END_MARKER (pominięty).
        START wewnątrz już przyjętego regionu → OVERLAPPING_REGION (pominięty).
        """
        regions: list[Region] = []
        last_end = 0
        for m in self.start_re.finditer(text):
            raw_name = m.group(1)
            name = raw_name.upper()
            if m.start() < last_end:
                note(
                    diagnostics, DiagnosticCode.OVERLAPPING_REGION,
                    f"Marker {name}-START leży wewnątrz regionu {regions[-1].name}; pominięto.",
                    name=name, offset=m.start(), dialect=str(self.style),
                )
                continue

            end = self.end_re(raw_name).search(text, m.end())
            if end is None:
                note(
                    diagnostics, DiagnosticCode.MISSING_END_MARKER,
                    f"Brak markera {name}-END dla {name}-START; region pominięty.",
                    name=name, offset=m.start(), dialect=str(self.style),
                )
                continue

            regions.append(Region(
                name=name,
                start_offset=m.start(),
                end_offset=end.end(),
                content_start=m.end(),
                content_end=end.start(),
                dialect=self.style,
            ))
            last_end = end.end()
        return regions


def _macro(marker: str) -> str:
    return _MACRO_OPEN + _WITHIN_MACRO + _MACRO_BODY.format(marker=marker)


STRUCTURED_MACRO = MarkerDialect(
    style=MarkerStyle.STRUCTURED_MACRO,
    start_re=re.compile(_macro(_NAME + "-START"), re.IGNORECASE),
    end_template=_macro("{name}-END"),
)

HTML_COMMENT = MarkerDialect(
    style=MarkerStyle.HTML_COMMENT,
    start_re=re.compile(r"<!--\s*" + _NAME + r"-START\s*-->", re.IGNORECASE),
    end_template=r"<!--\s*{name}-END\s*-->",
)

DIALECTS: list[MarkerDialect] = [STRUCTURED_MACRO, HTML_COMMENT]


def find_regions(text: str, diagnostics: list[Diagnostic] | None = None) -> list[Region]:
    """Regiony pierwszego dialektu (wg priorytetu), który cokolwiek znalazł."""
    for dialect in DIALECTS:
        found: list[Diagnostic] = []
        regions = dialect.find_regions(text, found)
        if diagnostics is not None:
            diagnostics.extend(found)
        if regions:
            return regions
    return []

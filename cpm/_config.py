"""Konfiguracja cpm — zmienne środowiskowe z wartościami domyślnymi."""

from __future__ import annotations

import os

from merge.types import DEFAULT_STRATEGY, MergeStrategy


def merge_strategy(override: str | None = None) -> MergeStrategy:
    """Strategia scalania: flaga CLI > CPM_MERGE_STRATEGY > "append"."""
    value = override or os.getenv("CPM_MERGE_STRATEGY", str(DEFAULT_STRATEGY))
    return MergeStrategy(value.strip().lower())


def file_encoding() -> str:
    return os.getenv("CPM_ENCODING", "utf-8")

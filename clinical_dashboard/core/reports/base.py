"""
Shared report containers.

Reports are built as plain tables and text blocks; laying them out on a
page belongs to the renderer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

NOT_AVAILABLE = "N/A"


@dataclass
class ReportTable:
    """One titled table: header row plus body rows of display strings."""
    title: str
    head: List[str]
    rows: List[List[str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "head": list(self.head), "rows": [list(r) for r in self.rows]}


def value_or_na(data: Mapping[str, str], key: str) -> str:
    value = data.get(key) or ""
    return value if value else NOT_AVAILABLE


def with_unit(data: Mapping[str, str], key: str, unit: str, missing: str = NOT_AVAILABLE) -> str:
    value = data.get(key) or ""
    if not value:
        return missing
    # "%" sits flush against the number, other units are spaced
    return f"{value}{unit}" if unit in ("%", "/min") else f"{value} {unit}"


def text_section(data: Mapping[str, str], key: str) -> Optional[str]:
    value = (data.get(key) or "").strip()
    return value or None

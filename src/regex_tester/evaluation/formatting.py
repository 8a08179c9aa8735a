"""Turning regex matches into report lines."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

UNMATCHED = "<unmatched>"


def group_labels(pattern: re.Pattern[str]) -> List[str]:
    """Label for every group, index 0 included: its name or its number."""

    names: Dict[int, str] = {index: name for name, index in pattern.groupindex.items()}
    return [names.get(index, str(index)) for index in range(pattern.groups + 1)]


def render_capture(value: Optional[str], *, unmatched: str = UNMATCHED) -> str:
    if value is None:
        return unmatched
    # One report line per group, even when the capture spans lines.
    return value.replace("\n", "\\n")


def format_match(
    index: int,
    match: re.Match[str],
    labels: List[str],
    *,
    unmatched: str = UNMATCHED,
) -> List[str]:
    lines = [f"{index}."]
    for group, label in enumerate(labels):
        lines.append(f"  {label}: {render_capture(match.group(group), unmatched=unmatched)}")
    return lines


def format_matches(
    pattern: re.Pattern[str],
    matches: Iterable[re.Match[str]],
    *,
    unmatched: str = UNMATCHED,
) -> List[str]:
    labels = group_labels(pattern)
    report: List[str] = []
    for index, match in enumerate(matches):
        report.extend(format_match(index, match, labels, unmatched=unmatched))
    return report or [""]


def format_error(error: re.error) -> str:
    """Single-line rendering of a compile error."""

    return " ".join(str(error).split())


__all__ = [
    "UNMATCHED",
    "format_error",
    "format_match",
    "format_matches",
    "group_labels",
    "render_capture",
]

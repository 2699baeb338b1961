"""Pure transforms over a fetched roster."""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Tuple

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


def sort_by_name(records: Iterable[AttendanceRecord]) -> Tuple[AttendanceRecord, ...]:
    return tuple(sorted(records, key=lambda r: r.student_name))


def default_fill(
    records: Iterable[AttendanceRecord],
    default: AttendanceStatus = AttendanceStatus.PRESENT,
) -> Tuple[Tuple[AttendanceRecord, ...], bool]:
    """Return ``(records, any_defaulted)`` with unmarked students set to ``default``."""
    out = []
    any_defaulted = False
    for record in records:
        if record.status is None:
            record = replace(record, status=default)
            any_defaulted = True
        out.append(record)
    return tuple(out), any_defaulted

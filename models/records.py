from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Tuple

from models.errors import InvalidInput
from models.fields import DATE, GROUP_A, GROUP_B, PLACEHOLDER
from models.utils import parse_date_string, date_to_iso_instant


@dataclass(frozen=True)
class RowLayout:
    """
    Which columns of a sheet row belong to which group.
    Column 0 is the date, then group_a_max_count cells, then group_b_max_count cells.
    """
    group_a_max_count: int = 0
    group_b_max_count: int = 0

    def __post_init__(self):
        if self.group_a_max_count < 0 or self.group_b_max_count < 0:
            raise ValueError("Group column counts must be zero or positive")

    @property
    def group_a_columns(self) -> range:
        return range(1, 1 + self.group_a_max_count)

    @property
    def group_b_columns(self) -> range:
        start = 1 + self.group_a_max_count
        return range(start, start + self.group_b_max_count)


@dataclass(frozen=True)
class AttendanceRecord:
    """One calendar day and the two lists of people for it"""
    date: date
    group_a: Tuple[str, ...] = ()
    group_b: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            DATE: date_to_iso_instant(self.date),
            GROUP_A: list(self.group_a),
            GROUP_B: list(self.group_b),
        }


def _is_present(value) -> bool:
    return isinstance(value, str) and value != PLACEHOLDER and value.strip() != ''


def _collect_names(row, columns, aliases) -> Tuple[str, ...]:
    names = []
    for index in columns:
        if index >= len(row):
            break
        value = row[index]
        if isinstance(value, str):
            alias = aliases.get(value)
            if alias is not None:
                value = alias
        if _is_present(value):
            names.append(value)
    return tuple(names)


def transform(rows, layout, aliases) -> List[AttendanceRecord]:
    """
    Turn raw sheet rows into attendance records.
    Rows whose first cell is not a date (headers, blank trailing rows) are skipped.
    Aliases are applied before blank and #N/A cells are filtered out.
    """
    if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
        raise InvalidInput("Sheet response is not a list of rows")

    records = []
    for row in rows:
        day = parse_date_string(row[0]) if row else None
        if day is None:
            continue
        records.append(AttendanceRecord(
            date=day,
            group_a=_collect_names(row, layout.group_a_columns, aliases),
            group_b=_collect_names(row, layout.group_b_columns, aliases),
        ))
    return records

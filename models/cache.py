from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from models.records import AttendanceRecord
from models.utils import end_of_day, utc_now


@dataclass(frozen=True)
class CacheEntry:
    """One complete snapshot of transformed records"""
    records: List[AttendanceRecord]
    captured_at: datetime
    ttl: timedelta

    def age(self, now: Optional[datetime] = None) -> timedelta:
        """How old this snapshot is relative to now"""
        return (now or utc_now()) - self.captured_at

    def is_stale(self, reference: datetime) -> bool:
        """Returns True if the snapshot has exceeded its TTL at the reference instant"""
        return reference - self.captured_at > self.ttl


class FreshnessCache:
    """
    Holds the latest record snapshot. The TTL decides when the whole sheet is
    re-read; the per-record day filter hides days that are already over.
    """

    def __init__(self, ttl: timedelta):
        self.ttl = ttl
        self._entry: Optional[CacheEntry] = None

    @property
    def entry(self) -> Optional[CacheEntry]:
        return self._entry

    def populate(self, records: List[AttendanceRecord], captured_at: datetime):
        """Replace the snapshot wholesale"""
        self._entry = CacheEntry(records=list(records), captured_at=captured_at, ttl=self.ttl)

    def query(self, reference: datetime) -> Optional[List[AttendanceRecord]]:
        """Records whose day has not fully elapsed at reference, or None if a refill is needed"""
        entry = self._entry
        if entry is None or entry.is_stale(reference):
            return None
        return self.filter(reference)

    def filter(self, reference: datetime) -> List[AttendanceRecord]:
        """Day filter only, ignoring the TTL. Empty when nothing is cached."""
        entry = self._entry
        if entry is None:
            return []
        return [record for record in entry.records if end_of_day(record.date) > reference]

    def clear(self):
        self._entry = None

    def info(self, now: Optional[datetime] = None) -> dict:
        """Cache state for the metrics endpoint"""
        entry = self._entry
        if entry is None:
            return {'populated': False, 'ttl_seconds': int(self.ttl.total_seconds())}
        age = entry.age(now).total_seconds()
        return {
            'populated': True,
            'records': len(entry.records),
            'age_seconds': int(age),
            'ttl_seconds': int(entry.ttl.total_seconds()),
            'expires_in': int(entry.ttl.total_seconds() - age),
        }

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterator, Optional, Tuple

from models.fields import (
    ACCESS_TOKEN,
    REFRESH_TOKEN,
    TOKEN_TYPE,
    EXPIRY,
    TOKENS,
    SPREADSHEET_ID,
    SPREADSHEET_RANGE,
    PERSON_MAPPING,
)


@dataclass(frozen=True)
class CredentialSet:
    """OAuth token bundle. All four fields are required."""
    access_token: str
    refresh_token: str
    token_type: str
    expiry: datetime

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['CredentialSet']:
        """Rebuild from persisted form. Returns None for missing or partial sets."""
        if not isinstance(data, dict):
            return None
        values = [data.get(key) for key in (ACCESS_TOKEN, REFRESH_TOKEN, TOKEN_TYPE, EXPIRY)]
        if not all(values):
            return None
        try:
            expiry = datetime.fromisoformat(str(data[EXPIRY]))
        except ValueError:
            return None
        return cls(
            access_token=str(data[ACCESS_TOKEN]),
            refresh_token=str(data[REFRESH_TOKEN]),
            token_type=str(data[TOKEN_TYPE]),
            expiry=expiry,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            ACCESS_TOKEN: self.access_token,
            REFRESH_TOKEN: self.refresh_token,
            TOKEN_TYPE: self.token_type,
            EXPIRY: self.expiry.isoformat(),
        }


@dataclass
class SheetCoordinates:
    """Where to read from: spreadsheet key plus A1 range"""
    spreadsheet_id: str = ''
    range: str = ''

    def is_complete(self) -> bool:
        return bool(self.spreadsheet_id) and bool(self.range)


class AliasTable:
    """Maps raw spreadsheet names to canonical display names. Only grows."""

    def __init__(self, entries: Optional[Dict[str, str]] = None):
        self._entries: Dict[str, str] = dict(entries or {})

    def get(self, name: str) -> Optional[str]:
        """Canonical name for `name`, or None if it has no alias"""
        return self._entries.get(name)

    def insert(self, raw_name: str, canonical_name: str):
        self._entries[raw_name] = canonical_name

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._entries.items()))

    def to_dict(self) -> Dict[str, str]:
        return dict(self._entries)

    def __len__(self):
        return len(self._entries)


@dataclass
class AppState:
    """Everything that survives a restart"""
    credentials: Optional[CredentialSet] = None
    coordinates: SheetCoordinates = field(default_factory=SheetCoordinates)
    aliases: AliasTable = field(default_factory=AliasTable)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AppState':
        known = (TOKENS, SPREADSHEET_ID, SPREADSHEET_RANGE, PERSON_MAPPING)
        mapping = data.get(PERSON_MAPPING)
        return cls(
            credentials=CredentialSet.from_dict(data.get(TOKENS)),
            coordinates=SheetCoordinates(
                spreadsheet_id=data.get(SPREADSHEET_ID) or '',
                range=data.get(SPREADSHEET_RANGE) or '',
            ),
            aliases=AliasTable(mapping if isinstance(mapping, dict) else {}),
            extra={key: value for key, value in data.items() if key not in known},
        )

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update({
            TOKENS: self.credentials.to_dict() if self.credentials else None,
            SPREADSHEET_ID: self.coordinates.spreadsheet_id,
            SPREADSHEET_RANGE: self.coordinates.range,
            PERSON_MAPPING: self.aliases.to_dict(),
        })
        return data

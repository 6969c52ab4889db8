from dataclasses import dataclass, field
from typing import Any, List, Optional

import gspread
from google.oauth2.credentials import Credentials
from gspread.exceptions import APIError

from models.errors import PreconditionFailed, UpstreamError
from models.metrics import log_api_call, log_rate_limit_error, log_upstream_error


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one values.get call: either rows or the exception that stopped it"""
    ok: bool
    rows: List[Any] = field(default_factory=list)
    cause: Optional[BaseException] = None

    @classmethod
    def success(cls, rows):
        return cls(ok=True, rows=rows)

    @classmethod
    def failure(cls, cause):
        return cls(ok=False, cause=cause)


def _describe(coordinates):
    return f"{coordinates.spreadsheet_id}/{coordinates.range}"


class SheetReader:
    """Reads raw cell values from Google Sheets with the user's access token"""

    def __init__(self, token_manager, timeout=None):
        self._tokens = token_manager
        self._timeout = timeout

    def _client(self, credentials):
        creds = Credentials(token=credentials.access_token)
        client = gspread.authorize(creds)
        if self._timeout:
            client.set_timeout(self._timeout)
        return client

    def get_values(self, credentials, coordinates):
        """Call the Sheets API and wrap whatever comes back in a FetchResult"""
        target = _describe(coordinates)
        try:
            client = self._client(credentials)
            response = client.open_by_key(coordinates.spreadsheet_id).values_get(coordinates.range)
        except APIError as e:
            if e.response is not None and e.response.status_code == 429:
                log_rate_limit_error(target)
            return FetchResult.failure(e)
        except Exception as e:
            return FetchResult.failure(e)

        if not isinstance(response, dict):
            return FetchResult.failure(TypeError(f"Unexpected response type {type(response).__name__}"))
        # Sheets omits 'values' entirely when the range is empty
        return FetchResult.success(response.get('values', []))

    def fetch(self, coordinates):
        """
        Fetch rows of cells for the given coordinates.
        Raises PreconditionFailed before any network call if we have no
        credentials or the coordinates are incomplete, UpstreamError if Google fails.
        """
        credentials = self._tokens.credentials
        if credentials is None:
            raise PreconditionFailed("No Google credentials. Visit /auth to log in.")
        if not coordinates.is_complete():
            raise PreconditionFailed("Spreadsheet id and range must both be set before reading.")

        result = self.get_values(credentials, coordinates)
        if not result.ok:
            log_upstream_error(_describe(coordinates), result.cause)
            raise UpstreamError(result.cause) from result.cause

        log_api_call('read', _describe(coordinates), row_count=len(result.rows), source='google')
        return result.rows

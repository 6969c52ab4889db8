import os
from dataclasses import dataclass


DEFAULT_RANGE = 'Sheet1!A1:E10'
DEFAULT_STATE_FILE = 'state.json'
DEFAULT_CACHE_TTL = 3 * 60 * 60  # 3 hours
DEFAULT_HTTP_TIMEOUT = 30
DEFAULT_PORT = 3000


def _int_env(name, default):
    """Read an integer environment variable, falling back to default when unset or blank"""
    value = os.environ.get(name, '').strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got '{value}'")


@dataclass(frozen=True)
class Settings:
    """Deployment configuration, read once at startup"""
    client_id: str = ''
    client_secret: str = ''
    redirect_uri: str = ''
    spreadsheet_id: str = ''
    spreadsheet_range: str = DEFAULT_RANGE
    group_a_max_count: int = 0
    group_b_max_count: int = 0
    state_file: str = DEFAULT_STATE_FILE
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL
    http_timeout: int = DEFAULT_HTTP_TIMEOUT
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls):
        """Build settings from the process environment (call load_dotenv() first for .env support)"""
        return cls(
            client_id=os.environ.get('GOOGLE_CLIENT_ID', ''),
            client_secret=os.environ.get('GOOGLE_CLIENT_SECRET', ''),
            redirect_uri=os.environ.get('GOOGLE_CLIENT_REDIRECT_URI', ''),
            spreadsheet_id=os.environ.get('SPREADSHEET_ID', ''),
            spreadsheet_range=os.environ.get('SPREADSHEET_RANGE', DEFAULT_RANGE),
            group_a_max_count=_int_env('GROUP_A_MAX_COUNT', 0),
            group_b_max_count=_int_env('GROUP_B_MAX_COUNT', 0),
            state_file=os.environ.get('STATE_FILE', DEFAULT_STATE_FILE),
            cache_ttl_seconds=_int_env('CACHE_TTL_SECONDS', DEFAULT_CACHE_TTL),
            http_timeout=_int_env('HTTP_TIMEOUT_SECONDS', DEFAULT_HTTP_TIMEOUT),
            port=_int_env('PORT', DEFAULT_PORT),
        )

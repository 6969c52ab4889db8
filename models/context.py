from dataclasses import dataclass
from datetime import timedelta

from models.auth import TokenManager
from models.cache import FreshnessCache
from models.config import Settings
from models.data import AttendanceData
from models.fields import SPREADSHEET_ID, SPREADSHEET_RANGE
from models.records import RowLayout
from models.sheets import SheetReader
from models.state import AppState
from models.store import CredentialStore


@dataclass
class AppContext:
    """Everything a request handler needs, built once at startup"""
    settings: Settings
    state: AppState
    store: CredentialStore
    tokens: TokenManager
    reader: SheetReader
    cache: FreshnessCache
    data: AttendanceData


def build_context(settings=None, store=None):
    """Load persisted state over the environment defaults and wire up the pipeline"""
    settings = settings or Settings.from_env()
    store = store or CredentialStore(settings.state_file)

    defaults = {
        SPREADSHEET_ID: settings.spreadsheet_id,
        SPREADSHEET_RANGE: settings.spreadsheet_range,
    }
    state = AppState.from_dict(store.load(defaults))

    tokens = TokenManager(settings, state, store)
    reader = SheetReader(tokens, timeout=settings.http_timeout)
    cache = FreshnessCache(timedelta(seconds=settings.cache_ttl_seconds))
    layout = RowLayout(settings.group_a_max_count, settings.group_b_max_count)
    data = AttendanceData(state, store, tokens, reader, cache, layout)

    status = "authenticated" if state.credentials else "not authenticated"
    print(f"[STORE] Loaded state from '{store.path}' ({status}, {len(state.aliases)} aliases)")
    return AppContext(
        settings=settings,
        state=state,
        store=store,
        tokens=tokens,
        reader=reader,
        cache=cache,
        data=data,
    )

import json
import os
import threading

from models.errors import PersistenceError
from models.metrics import log_persistence_error
from models.state import AppState


class CredentialStore:
    """
    JSON-file persistence for tokens, sheet coordinates and the alias table.
    The whole document is read once at startup and overwritten on every save.
    """

    def __init__(self, path):
        self.path = path
        self._write_lock = threading.Lock()

    def load(self, defaults=None):
        """Return persisted state merged over defaults (persisted values win)"""
        state = dict(defaults or {})
        if not os.path.exists(self.path):
            print(f"[STORE] No saved state at '{self.path}', using defaults")
            return state

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                persisted = json.load(f)
        except (OSError, ValueError) as e:
            print(f"[STORE] ⚠️ Could not read '{self.path}', using defaults: {e}")
            return state

        if not isinstance(persisted, dict):
            print(f"[STORE] ⚠️ '{self.path}' does not hold a JSON object, using defaults")
            return state

        state.update(persisted)
        return state

    def save(self, state):
        """Overwrite the state file. Failures are logged, never raised."""
        data = state.to_dict() if isinstance(state, AppState) else dict(state)
        tmp_path = f"{self.path}.tmp"
        try:
            with self._write_lock:
                with open(tmp_path, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            log_persistence_error(PersistenceError(self.path, e))
            return False
        return True

    def save_async(self, state):
        """Snapshot state now and write it on a background thread"""
        snapshot = state.to_dict() if isinstance(state, AppState) else dict(state)
        thread = threading.Thread(target=self.save, args=(snapshot,), daemon=True)
        thread.start()
        return thread

"""
Data layer for attendance records.
Routes should use this module for all reads and administrative writes.
"""
from models.metrics import log_api_call, log_cache_invalidation
from models.records import transform
from models.utils import utc_now


class AttendanceData:
    """Ties together token refresh, sheet reads, the transformer and the cache"""

    def __init__(self, state, store, tokens, reader, cache, layout, clock=utc_now):
        self.state = state
        self.store = store
        self.tokens = tokens
        self.reader = reader
        self.cache = cache
        self.layout = layout
        self._clock = clock

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_attendance_view(self, reference):
        """
        Records for days not yet over at `reference`.
        Serves from cache when fresh, otherwise refreshes the token, re-reads
        the sheet and repopulates the cache. Errors propagate unchanged.
        """
        view = self.cache.query(reference)
        if view is not None:
            log_api_call('read', 'attendance', row_count=len(view), source='cache')
            return view

        # Concurrent misses may each read the sheet; populate is a wholesale swap.
        self.tokens.ensure_fresh()
        rows = self.reader.fetch(self.state.coordinates)
        records = transform(rows, self.layout, self.state.aliases)
        self.cache.populate(records, self._clock())
        # The snapshot was just captured; only the day filter applies to it
        return self.cache.filter(reference)

    # =========================================================================
    # Write Operations
    # =========================================================================

    def set_spreadsheet_id(self, spreadsheet_id):
        self.state.coordinates.spreadsheet_id = spreadsheet_id
        self._changed('spreadsheet id changed')

    def set_spreadsheet_range(self, sheet_range):
        self.state.coordinates.range = sheet_range
        self._changed('spreadsheet range changed')

    def add_person_mapping(self, raw_name, canonical_name):
        """Insert or overwrite an alias"""
        self.state.aliases.insert(raw_name, canonical_name)
        self._changed('person mapping added')

    def _changed(self, reason):
        self.store.save_async(self.state)
        self.cache.clear()
        log_cache_invalidation(reason)

import time
from datetime import datetime
from collections import deque


def _new_metrics():
    return {
        'total_reads': 0,
        'cache_hits': 0,
        'cache_misses': 0,
        'rate_limit_errors': 0,
        'upstream_errors': 0,
        'token_refreshes': 0,
        'token_refresh_failures': 0,
        'recent_calls': deque(maxlen=100),
        'persistence_errors': deque(maxlen=20),
    }

# Metrics storage
_metrics = _new_metrics()

def reset_metrics():
    """Reset all counters (used by tests)"""
    global _metrics
    _metrics = _new_metrics()

def log_api_call(operation, target, row_count=None, source='google'):
    """Log a read for metrics. source is 'google' or 'cache'"""
    now = time.time()
    _metrics['recent_calls'].append({
        'time': now,
        'timestamp': datetime.now().strftime('%H:%M:%S'),
        'operation': operation,
        'target': target,
        'row_count': row_count,
        'source': source
    })

    if source == 'cache':
        _metrics['cache_hits'] += 1
    else:
        _metrics['cache_misses'] += 1
        _metrics['total_reads'] += 1

    rows_str = f" | Rows: {row_count}" if row_count is not None else ""
    source_icon = "⚡CACHE" if source == 'cache' else "🌐GOOGLE"
    print(f"[SHEETS] {source_icon} {operation.upper()} '{target}'{rows_str} | "
          f"Total: {_metrics['cache_hits']} hits / {_metrics['cache_misses']} misses")

def log_rate_limit_error(target):
    """Log a rate limit error"""
    _metrics['rate_limit_errors'] += 1
    print(f"[SHEETS] ⛔ RATE LIMIT for '{target}'")

def log_upstream_error(target, error):
    _metrics['upstream_errors'] += 1
    print(f"[SHEETS] ❌ Read failed for '{target}': {error}")

def log_token_refresh(error=None):
    """Log the outcome of an access token refresh"""
    if error is None:
        _metrics['token_refreshes'] += 1
        print("[AUTH] 🔑 Access token refreshed")
    else:
        _metrics['token_refresh_failures'] += 1
        print(f"[AUTH] ⚠️ Token refresh failed, keeping current token: {error}")

def log_persistence_error(error):
    """Error channel for background state writes. error is a PersistenceError."""
    _metrics['persistence_errors'].append({
        'time': time.time(),
        'path': str(error.path),
        'error': str(error.cause),
    })
    print(f"[STORE] ❌ {error}")

def log_cache_invalidation(reason=None):
    """Log cache invalidation"""
    if reason:
        print(f"[CACHE] 🗑️ Cache invalidated ({reason})")
    else:
        print("[CACHE] 🗑️ Cache invalidated")

def get_metrics(cache_info=None):
    """Get current metrics"""
    one_min_ago = time.time() - 60
    calls_last_min = [c for c in _metrics['recent_calls'] if c['time'] > one_min_ago]
    google_calls_last_min = [c for c in calls_last_min if c['source'] == 'google']

    total_requests = _metrics['cache_hits'] + _metrics['cache_misses']
    hit_rate = (_metrics['cache_hits'] / total_requests * 100) if total_requests > 0 else 0

    return {
        'total_google_reads': _metrics['total_reads'],
        'cache_hits': _metrics['cache_hits'],
        'cache_misses': _metrics['cache_misses'],
        'cache_hit_rate': f"{hit_rate:.1f}%",
        'rate_limit_errors': _metrics['rate_limit_errors'],
        'upstream_errors': _metrics['upstream_errors'],
        'token_refreshes': _metrics['token_refreshes'],
        'token_refresh_failures': _metrics['token_refresh_failures'],
        'google_calls_last_minute': len(google_calls_last_min),
        'persistence_errors': list(_metrics['persistence_errors']),
        'cache': cache_info or {},
        'recent_calls': calls_last_min
    }

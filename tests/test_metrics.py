import unittest
import models.metrics as metrics_module
from models.errors import PersistenceError


class TestLogApiCall(unittest.TestCase):
    """Tests for log_api_call()"""

    def setUp(self):
        metrics_module.reset_metrics()

    def tearDown(self):
        metrics_module.reset_metrics()

    def test_cache_hit_increments_counter(self):
        """Cache hit should increment cache_hits"""
        metrics_module.log_api_call('read', 'attendance', source='cache')
        self.assertEqual(metrics_module._metrics['cache_hits'], 1)
        self.assertEqual(metrics_module._metrics['cache_misses'], 0)

    def test_google_read_increments_miss_and_reads(self):
        """Google read should increment cache_misses and total_reads"""
        metrics_module.log_api_call('read', 'sheet/A1:B2', row_count=12, source='google')
        self.assertEqual(metrics_module._metrics['cache_misses'], 1)
        self.assertEqual(metrics_module._metrics['total_reads'], 1)

    def test_recent_calls_tracked(self):
        """Should track recent calls"""
        metrics_module.log_api_call('read', 'attendance', row_count=3, source='cache')
        self.assertEqual(len(metrics_module._metrics['recent_calls']), 1)
        self.assertEqual(metrics_module._metrics['recent_calls'][0]['target'], 'attendance')
        self.assertEqual(metrics_module._metrics['recent_calls'][0]['row_count'], 3)


class TestErrorCounters(unittest.TestCase):

    def setUp(self):
        metrics_module.reset_metrics()

    def tearDown(self):
        metrics_module.reset_metrics()

    def test_rate_limit(self):
        metrics_module.log_rate_limit_error('sheet/A1:B2')
        self.assertEqual(metrics_module._metrics['rate_limit_errors'], 1)

    def test_upstream_error(self):
        metrics_module.log_upstream_error('sheet/A1:B2', ValueError('bad range'))
        self.assertEqual(metrics_module._metrics['upstream_errors'], 1)

    def test_token_refresh_outcomes(self):
        metrics_module.log_token_refresh()
        metrics_module.log_token_refresh(error='invalid_grant')
        self.assertEqual(metrics_module._metrics['token_refreshes'], 1)
        self.assertEqual(metrics_module._metrics['token_refresh_failures'], 1)

    def test_persistence_error_channel(self):
        metrics_module.log_persistence_error(PersistenceError('state.json', OSError('disk full')))

        errors = metrics_module.get_metrics()['persistence_errors']
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0]['path'], 'state.json')
        self.assertEqual(errors[0]['error'], 'disk full')

    def test_persistence_error_channel_is_bounded(self):
        for i in range(30):
            metrics_module.log_persistence_error(PersistenceError('state.json', OSError(str(i))))
        self.assertEqual(len(metrics_module.get_metrics()['persistence_errors']), 20)


class TestResetMetrics(unittest.TestCase):
    """Tests for reset_metrics()"""

    def test_resets_all_counters(self):
        """Should reset all counters to zero"""
        metrics_module.log_api_call('read', 'Test', source='cache')
        metrics_module.log_api_call('read', 'Test', source='google')
        metrics_module.log_rate_limit_error('Test')
        metrics_module.log_token_refresh(error='nope')

        metrics_module.reset_metrics()

        self.assertEqual(metrics_module._metrics['cache_hits'], 0)
        self.assertEqual(metrics_module._metrics['cache_misses'], 0)
        self.assertEqual(metrics_module._metrics['total_reads'], 0)
        self.assertEqual(metrics_module._metrics['rate_limit_errors'], 0)
        self.assertEqual(metrics_module._metrics['token_refresh_failures'], 0)
        self.assertEqual(len(metrics_module._metrics['recent_calls']), 0)


class TestGetMetrics(unittest.TestCase):
    """Tests for get_metrics()"""

    def setUp(self):
        metrics_module.reset_metrics()

    def tearDown(self):
        metrics_module.reset_metrics()

    def test_returns_all_fields(self):
        """Should return all expected fields"""
        metrics = metrics_module.get_metrics()

        expected_fields = [
            'total_google_reads', 'cache_hits', 'cache_misses', 'cache_hit_rate',
            'rate_limit_errors', 'upstream_errors', 'token_refreshes',
            'token_refresh_failures', 'persistence_errors', 'cache',
        ]
        for field in expected_fields:
            with self.subTest(field=field):
                self.assertIn(field, metrics)

    def test_cache_hit_rate_calculation(self):
        """Should calculate cache hit rate correctly"""
        metrics_module.log_api_call('read', 'Test', source='cache')
        metrics_module.log_api_call('read', 'Test', source='cache')
        metrics_module.log_api_call('read', 'Test', source='google')

        metrics = metrics_module.get_metrics()

        # 2 hits out of 3 total = 66.7%
        self.assertEqual(metrics['cache_hit_rate'], '66.7%')

    def test_includes_cache_info(self):
        metrics = metrics_module.get_metrics(cache_info={'populated': False})
        self.assertEqual(metrics['cache'], {'populated': False})


if __name__ == '__main__':
    unittest.main()

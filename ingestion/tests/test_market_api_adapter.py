"""
Tests for market API adapter - mocked network calls, no live API hits in CI.
"""

import pytest
import requests
from unittest.mock import Mock, patch

from ingestion.providers.market_api_adapter import (
    MAX_LIMIT,
    MarketAPIError,
    fetch_daily_rows,
    fetch_market_snapshot,
    get_base_url,
    get_history_limit,
    _validate_limit
)


def _response(payload, status_code=200):
    """Build a mocked requests response."""
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Server Error")
    else:
        response.raise_for_status.return_value = None
    return response


class TestConfiguration:
    """Tests for environment-driven settings."""
    
    def test_defaults(self):
        """Defaults when env vars are unset."""
        with patch.dict('os.environ', {}, clear=True):
            assert get_base_url() == 'http://localhost:8000'
            assert get_history_limit() == 30
    
    def test_env_overrides(self):
        """Env vars override defaults; trailing slash is stripped."""
        env = {'MARKET_API_BASE_URL': 'https://sugar.example.com/', 'MARKET_HISTORY_LIMIT': '90'}
        with patch.dict('os.environ', env):
            assert get_base_url() == 'https://sugar.example.com'
            assert get_history_limit() == 90


class TestFetchDailyRows:
    """Tests for fetch_daily_rows function."""
    
    @patch('ingestion.providers.market_api_adapter.requests.get')
    def test_success(self, mock_get, market_rows):
        """Rows are returned raw, in API order."""
        mock_get.return_value = _response(market_rows)
        
        with patch.dict('os.environ', {'REQUESTS_TIMEOUT_S': '15'}):
            rows = fetch_daily_rows(5, base_url='http://api.test/')
        
        mock_get.assert_called_once_with(
            'http://api.test/api/market/daily',
            params={'limit': 5},
            headers={'Accept': 'application/json'},
            timeout=15
        )
        assert rows == market_rows
        assert rows[0]['record_date'] == '2025-01-10'
    
    @patch('ingestion.providers.market_api_adapter.requests.get')
    def test_connection_error(self, mock_get):
        """Network errors are wrapped in MarketAPIError."""
        mock_get.side_effect = requests.ConnectionError("connection refused")
        
        with pytest.raises(MarketAPIError, match="connection refused") as exc_info:
            fetch_daily_rows(5, base_url='http://api.test')
        
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)
    
    @patch('ingestion.providers.market_api_adapter.requests.get')
    def test_http_error(self, mock_get):
        """Non-2xx status is an error."""
        mock_get.return_value = _response({'detail': 'boom'}, status_code=500)
        
        with pytest.raises(MarketAPIError, match="500"):
            fetch_daily_rows(5, base_url='http://api.test')
    
    @patch('ingestion.providers.market_api_adapter.requests.get')
    def test_invalid_json(self, mock_get):
        """Unparseable body is an error."""
        response = _response(None)
        response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = response
        
        with pytest.raises(MarketAPIError, match="not JSON"):
            fetch_daily_rows(5, base_url='http://api.test')
    
    @patch('ingestion.providers.market_api_adapter.requests.get')
    def test_non_list_payload(self, mock_get):
        """Payload must be a JSON array."""
        mock_get.return_value = _response({'rows': []})
        
        with pytest.raises(MarketAPIError, match="Expected JSON array, got dict"):
            fetch_daily_rows(5, base_url='http://api.test')
    
    @patch('ingestion.providers.market_api_adapter.requests.get')
    def test_base_url_from_env(self, mock_get, market_rows):
        """Each call goes through requests.get against the env base URL."""
        mock_get.return_value = _response(market_rows[:1])
        
        with patch.dict('os.environ', {'MARKET_API_BASE_URL': 'http://env.test/'}):
            rows = fetch_daily_rows(1)
        
        assert len(rows) == 1
        assert mock_get.call_args.args[0] == 'http://env.test/api/market/daily'


class TestFetchMarketSnapshot:
    """Tests for concurrent latest + history fetch."""
    
    @patch('ingestion.providers.market_api_adapter.fetch_daily_rows')
    def test_snapshot(self, mock_fetch, market_rows):
        """Latest is the single newest row; history is the full window."""
        mock_fetch.side_effect = lambda limit, base_url: market_rows[:limit]
        
        snapshot = fetch_market_snapshot(history_limit=5, base_url='http://api.test')
        
        assert snapshot['latest'] == market_rows[0]
        assert snapshot['history'] == market_rows
        assert mock_fetch.call_count == 2
        called_limits = sorted(call.args[0] for call in mock_fetch.call_args_list)
        assert called_limits == [1, 5]
    
    @patch('ingestion.providers.market_api_adapter.fetch_daily_rows')
    def test_empty_latest(self, mock_fetch):
        """No rows yields latest None."""
        mock_fetch.return_value = []
        
        snapshot = fetch_market_snapshot(history_limit=5, base_url='http://api.test')
        
        assert snapshot == {'latest': None, 'history': []}
    
    @patch('ingestion.providers.market_api_adapter.fetch_daily_rows')
    def test_failure_propagates(self, mock_fetch, market_rows):
        """A failed request is raised, not swallowed."""
        def fake_fetch(limit, base_url):
            if limit == 1:
                raise MarketAPIError("Market data request failed: timeout")
            return market_rows
        
        mock_fetch.side_effect = fake_fetch
        
        with pytest.raises(MarketAPIError, match="timeout"):
            fetch_market_snapshot(history_limit=5, base_url='http://api.test')
    
    @patch('ingestion.providers.market_api_adapter.fetch_daily_rows')
    def test_env_defaults(self, mock_fetch):
        """Limit and base URL fall back to env."""
        mock_fetch.return_value = []
        env = {'MARKET_API_BASE_URL': 'http://env.test', 'MARKET_HISTORY_LIMIT': '12'}
        
        with patch.dict('os.environ', env):
            fetch_market_snapshot()
        
        called = sorted((call.args[0], call.args[1]) for call in mock_fetch.call_args_list)
        assert called == [(1, 'http://env.test'), (12, 'http://env.test')]


class TestValidateLimit:
    """Tests for _validate_limit function."""
    
    def test_valid(self):
        """Values in range pass."""
        _validate_limit(1)
        _validate_limit(MAX_LIMIT)
    
    def test_invalid(self):
        """Non-integers and out-of-range values fail."""
        with pytest.raises(MarketAPIError, match="must be integer"):
            _validate_limit('30')
        
        with pytest.raises(MarketAPIError, match="must be integer"):
            _validate_limit(True)
        
        with pytest.raises(MarketAPIError, match="positive"):
            _validate_limit(0)
        
        with pytest.raises(MarketAPIError, match="too large"):
            _validate_limit(MAX_LIMIT + 1)
    
    @patch('ingestion.providers.market_api_adapter.requests.get')
    def test_no_request_on_invalid_limit(self, mock_get):
        """Invalid limit fails before any network call."""
        with pytest.raises(MarketAPIError):
            fetch_daily_rows(-1, base_url='http://api.test')
        
        mock_get.assert_not_called()

"""
Market API adapter - fetch daily sugar market rows from the REST backend.
Network IO allowed here, but minimal business logic.
"""

import os
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Any, List, Optional

import requests
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DAILY_ENDPOINT = '/api/market/daily'
DEFAULT_BASE_URL = 'http://localhost:8000'
MAX_LIMIT = 1000


class MarketAPIError(Exception):
    """Raised when market API operations fail."""
    pass


def get_base_url() -> str:
    """Base URL of the market API (MARKET_API_BASE_URL)."""
    return os.getenv('MARKET_API_BASE_URL', DEFAULT_BASE_URL).rstrip('/')


def get_history_limit() -> int:
    """Default history window in days (MARKET_HISTORY_LIMIT)."""
    return int(os.getenv('MARKET_HISTORY_LIMIT', '30'))


def fetch_daily_rows(
    limit: int,
    base_url: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    Fetch the most recent daily market rows.
    Returns raw rows in API format (newest first) - no normalization.
    
    Args:
        limit: Number of rows to request
        base_url: API base URL (default: from env)
        
    Returns:
        List of raw row dictionaries
        
    Raises:
        MarketAPIError: If the request fails or the payload is not a list
    """
    _validate_limit(limit)
    
    if base_url is None:
        base_url = get_base_url()
    
    url = f"{base_url.rstrip('/')}{DAILY_ENDPOINT}"
    timeout = int(os.getenv('REQUESTS_TIMEOUT_S', '30'))
    
    try:
        response = requests.get(
            url,
            params={'limit': limit},
            headers={'Accept': 'application/json'},
            timeout=timeout
        )
        response.raise_for_status()
        payload = response.json()
        
    except requests.RequestException as e:
        logger.error(f"Failed to fetch {url} (limit={limit}): {e}")
        raise MarketAPIError(f"Market data request failed: {e}") from e
    except ValueError as e:
        logger.error(f"Invalid JSON from {url}: {e}")
        raise MarketAPIError(f"Market data response is not JSON: {e}") from e
    
    if not isinstance(payload, list):
        raise MarketAPIError(f"Expected JSON array, got {type(payload).__name__}")
    
    logger.info(f"Fetched {len(payload)} daily rows from {url}")
    return payload


def fetch_market_snapshot(
    history_limit: Optional[int] = None,
    base_url: Optional[str] = None
) -> Dict[str, Any]:
    """
    Fetch the latest row and the recent history concurrently.
    
    Both requests run in parallel and are joined before returning. A
    failure in either request is raised, not swallowed.
    
    Args:
        history_limit: Rows of history to request (default: from env)
        base_url: API base URL (default: from env)
        
    Returns:
        Dictionary with 'latest' (raw row or None) and 'history' (raw rows)
        
    Raises:
        MarketAPIError: If either request fails
    """
    if history_limit is None:
        history_limit = get_history_limit()
    
    if base_url is None:
        base_url = get_base_url()
    
    with ThreadPoolExecutor(max_workers=2) as executor:
        latest_future = executor.submit(fetch_daily_rows, 1, base_url)
        history_future = executor.submit(fetch_daily_rows, history_limit, base_url)
        
        latest_rows = latest_future.result()
        history_rows = history_future.result()
    
    return {
        'latest': latest_rows[0] if latest_rows else None,
        'history': history_rows
    }


def _validate_limit(limit: int) -> None:
    """
    Validate the requested row count.
    
    Args:
        limit: Number of rows
        
    Raises:
        MarketAPIError: If limit is not a positive integer within range
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise MarketAPIError(f"limit must be integer, got {type(limit)}")
    
    if limit <= 0:
        raise MarketAPIError("limit must be positive")
    
    if limit > MAX_LIMIT:
        raise MarketAPIError(f"limit too large (max {MAX_LIMIT})")

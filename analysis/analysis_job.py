"""
Orchestrated analysis job - market API to DashboardJSON pipeline.
Fetches daily rows, calls pure functions, persists analysis JSON.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Dict, Any, Optional, List

from analysis.metrics_aggregator import compose_dashboard_metrics
from ingestion.providers.market_api_adapter import fetch_market_snapshot, get_history_limit
from ingestion.transforms.normalizers import (
    DailyObservation,
    NormalizationError,
    deduplicate_observations,
    normalize_daily_row
)
from ingestion.transforms.validators import (
    ValidationError,
    check_observation_date_order,
    validate_observation
)
from reports.atomic_writer import write_dashboard_json

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = Path('./data/processed/dashboard/latest.json')


class AnalysisJobError(Exception):
    """Raised when analysis job fails."""
    pass


@dataclass
class MarketAnalysisConfig:
    """Configuration for the market analysis job."""
    history_limit: Optional[int] = None
    output_path: Optional[Path] = None
    as_of_date: Optional[date] = None
    base_url: Optional[str] = None

    def __post_init__(self):
        """Validate and set defaults."""
        if self.history_limit is None:
            self.history_limit = get_history_limit()

        if not isinstance(self.history_limit, int) or self.history_limit < 2:
            raise ValueError("history_limit must be an integer >= 2")

        if self.output_path is None:
            self.output_path = DEFAULT_OUTPUT_PATH
        else:
            self.output_path = Path(self.output_path)

        if self.as_of_date is None:
            self.as_of_date = date.today()


def run_market_analysis(config: MarketAnalysisConfig) -> Dict[str, Any]:
    """
    Run complete market analysis and save results to JSON.

    Pipeline stages:
    1. Fetch latest row and history concurrently
    2. Normalize and validate each row (invalid rows are dropped)
    3. Compose dashboard metrics
    4. Write DashboardJSON

    Args:
        config: Job configuration

    Returns:
        Dictionary with job results and summary
    """
    start_time = datetime.now()

    result = {
        'status': 'running',
        'output_path': None,
        'rows_fetched': 0,
        'observations_used': 0,
        'validation_warnings': 0,
        'error_message': None
    }

    try:
        # Stage 1: Fetch
        snapshot = fetch_market_snapshot(
            history_limit=config.history_limit,
            base_url=config.base_url
        )
        raw_history = snapshot['history']
        result['rows_fetched'] = len(raw_history)

        # Stage 2: Normalize and validate
        history, warnings = _prepare_observations(raw_history)
        result['validation_warnings'] = warnings

        try:
            check_observation_date_order(history, newest_first=True)
        except ValidationError as e:
            # Aggregator sorts by date, so this is not fatal
            logger.warning(f"Market history out of order: {e}")

        latest = None
        if snapshot['latest'] is not None:
            latest_rows, latest_warnings = _prepare_observations([snapshot['latest']])
            result['validation_warnings'] += latest_warnings
            latest = latest_rows[0] if latest_rows else None

        if not history and latest is None:
            raise AnalysisJobError(
                f"No valid observations ({len(raw_history)} rows fetched)"
            )

        result['observations_used'] = len(history)

        # Stage 3: Compose
        dashboard = compose_dashboard_metrics(
            history=history,
            as_of_date=config.as_of_date,
            latest=latest
        )

        # Stage 4: Write
        write_dashboard_json(dashboard, config.output_path)

        logger.info(f"Dashboard metrics written to {config.output_path}")

        result['status'] = 'completed'
        result['output_path'] = str(config.output_path)
        result['arbitrage_status'] = dashboard['arbitrage']['latest']['status']
        result['duration_seconds'] = (datetime.now() - start_time).total_seconds()
        return result

    except Exception as e:
        logger.error(f"Market analysis failed: {e}")

        result['status'] = 'failed'
        result['error_message'] = str(e)
        result['duration_seconds'] = (datetime.now() - start_time).total_seconds()
        return result


def _prepare_observations(raw_rows: List[Dict[str, Any]]) -> tuple[List[DailyObservation], int]:
    """
    Normalize and validate raw rows, dropping the ones that fail.

    Args:
        raw_rows: Raw API rows

    Returns:
        Tuple of (valid observations, number of rejected rows)
    """
    valid = []
    warnings = 0

    for raw in raw_rows:
        try:
            observation = normalize_daily_row(raw)
            validate_observation(observation)
            valid.append(observation)
        except (NormalizationError, ValidationError) as e:
            warnings += 1
            row_date = raw.get('record_date', 'unknown') if isinstance(raw, dict) else 'unknown'
            logger.warning(f"Dropping market row {row_date}: {e}")

    return deduplicate_observations(valid), warnings

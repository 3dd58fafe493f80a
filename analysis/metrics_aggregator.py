"""
Metrics aggregator - composes all sugar market calculations into DashboardJSON.
Pure function that combines metric cards, correlations, regression, rebased
series and the arbitrage window.
"""

import pandas as pd
from datetime import date, datetime
from typing import Dict, Any, Optional, List

# Import all calculation modules
from analysis.calculations.arbitrage import (
    arbitrage_profit,
    arbitrage_profits,
    arbitrage_status,
    summarize_profits
)
from analysis.calculations.changes import build_metric_card
from analysis.calculations.correlation import correlate
from analysis.calculations.normalization import normalize
from analysis.calculations.regression import fit_linear
from ingestion.transforms.normalizers import DailyObservation, NUMERIC_FIELDS


class MetricsAggregatorError(Exception):
    """Raised when metrics aggregation fails."""
    pass


# (field, title, suffix, decimals) in dashboard order
METRIC_CARD_FIELDS = [
    ('sugar_close', 'Zhengzhou Sugar', 'CNY/t', None),
    ('usd_cny_rate', 'USD/CNY', None, 4),
    ('bdi_index', 'BDI', None, None),
    ('import_cost_estimate', 'Import Cost Estimate', 'CNY/t', None),
]

# (name, x field, y field)
CORRELATION_PAIRS = [
    ('sugar_vs_usd_cny', 'usd_cny_rate', 'sugar_close'),
    ('sugar_vs_bdi', 'bdi_index', 'sugar_close'),
    ('sugar_vs_import_cost', 'import_cost_estimate', 'sugar_close'),
]


def compose_dashboard_metrics(
    history: List[DailyObservation],
    as_of_date: date,
    latest: Optional[DailyObservation] = None
) -> Dict[str, Any]:
    """
    Compose all dashboard metrics into standardized JSON format.

    History may arrive in any order; it is sorted by record_date here so
    that series passed to the calculations are chronological.

    Args:
        history: Daily observations for the analysis window
        as_of_date: Date for which metrics are calculated
        latest: Most recent observation if fetched separately
            (defaults to the newest observation in history)

    Returns:
        Complete DashboardJSON dictionary

    Raises:
        MetricsAggregatorError: If there is no data to compose
    """
    if not history and latest is None:
        raise MetricsAggregatorError("Empty market history provided")

    history_df = _to_frame(history)

    if latest is None:
        latest = max(history, key=lambda o: o.record_date)

    previous = _previous_observation(history, latest.record_date)

    dates = [d.date() for d in history_df['record_date']]
    series = {field: history_df[field].tolist() for field in NUMERIC_FIELDS}

    data_period = {
        'start_date': dates[0].isoformat() if dates else None,
        'end_date': dates[-1].isoformat() if dates else None,
        'observations': len(dates)
    }

    metadata = {
        'calculated_at': datetime.now().isoformat(),
        'calculation_version': '1.0.0'
    }

    return {
        'as_of_date': as_of_date.isoformat(),
        'latest': latest.to_dict(),
        'data_period': data_period,
        'metric_cards': _build_metric_cards(latest, previous),
        'correlations': _calculate_correlations(series),
        'regression': _calculate_regression(series, latest),
        'normalized': _calculate_normalized(series, dates),
        'arbitrage': _calculate_arbitrage(series, dates, latest),
        'data_quality': _calculate_data_quality_metrics(history_df),
        'metadata': metadata
    }


def _to_frame(history: List[DailyObservation]) -> pd.DataFrame:
    """Build a chronologically sorted DataFrame from observations."""
    columns = ['record_date'] + list(NUMERIC_FIELDS)

    if not history:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame([
        {
            'record_date': o.record_date,
            'sugar_close': o.sugar_close,
            'usd_cny_rate': o.usd_cny_rate,
            'bdi_index': o.bdi_index,
            'import_cost_estimate': o.import_cost_estimate
        }
        for o in history
    ], columns=columns)

    df['record_date'] = pd.to_datetime(df['record_date'])
    return df.sort_values('record_date', kind='stable').reset_index(drop=True)


def _previous_observation(
    history: List[DailyObservation],
    latest_date: date
) -> Optional[DailyObservation]:
    """Newest observation strictly before latest_date."""
    earlier = [o for o in history if o.record_date < latest_date]
    if not earlier:
        return None

    return max(earlier, key=lambda o: o.record_date)


def _build_metric_cards(
    latest: DailyObservation,
    previous: Optional[DailyObservation]
) -> List[Dict[str, Any]]:
    """Build headline metric cards with day-over-day change."""
    cards = []
    for field, title, suffix, decimals in METRIC_CARD_FIELDS:
        card = build_metric_card(
            title=title,
            latest=getattr(latest, field),
            previous=getattr(previous, field) if previous is not None else None,
            suffix=suffix,
            decimals=decimals
        )
        cards.append(card.to_dict())

    return cards


def _calculate_correlations(series: Dict[str, List[float]]) -> Dict[str, Any]:
    """Correlate sugar price with each macro driver."""
    return {
        name: correlate(series[x_field], series[y_field]).to_dict()
        for name, x_field, y_field in CORRELATION_PAIRS
    }


def _calculate_regression(
    series: Dict[str, List[float]],
    latest: DailyObservation
) -> Dict[str, Any]:
    """Regress sugar price on import cost and predict at the latest cost."""
    model = fit_linear(series['import_cost_estimate'], series['sugar_close'])

    result = model.to_dict()
    result['x'] = 'import_cost_estimate'
    result['y'] = 'sugar_close'
    result['predicted_sugar_close'] = model.predict(latest.import_cost_estimate)
    return result


def _calculate_normalized(
    series: Dict[str, List[float]],
    dates: List[date]
) -> Dict[str, Any]:
    """Rebase each series to 100 at the first date."""
    normalized = {'dates': [d.isoformat() for d in dates]}
    for field in NUMERIC_FIELDS:
        normalized[field] = normalize(series[field])

    return normalized


def _calculate_arbitrage(
    series: Dict[str, List[float]],
    dates: List[date],
    latest: DailyObservation
) -> Dict[str, Any]:
    """Arbitrage window for the latest day plus the profit distribution."""
    profits = arbitrage_profits(series['sugar_close'], series['import_cost_estimate'])

    latest_status = arbitrage_status(
        arbitrage_profit(latest.sugar_close, latest.import_cost_estimate)
    )

    return {
        'latest': latest_status.to_dict(),
        'distribution': summarize_profits(profits).to_dict(),
        'series': [
            {'date': d.isoformat(), 'profit': p}
            for d, p in zip(dates, profits)
        ]
    }


def _calculate_data_quality_metrics(history_df: pd.DataFrame) -> Dict[str, Any]:
    """Calculate data coverage metrics."""
    if history_df.empty:
        return {
            'coverage_pct': 0.0,
            'missing_days': 0
        }

    dates = history_df['record_date']

    # Business days between first and last observation, inclusive
    expected_trading_days = max(1, len(pd.bdate_range(dates.min(), dates.max())))
    actual_days = len(dates)

    coverage_pct = min(100.0, (actual_days / expected_trading_days) * 100)
    missing_days = max(0, expected_trading_days - actual_days)

    return {
        'coverage_pct': coverage_pct,
        'missing_days': missing_days
    }

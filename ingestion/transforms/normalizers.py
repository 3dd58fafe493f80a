"""
Normalizers for transforming market API rows to DailyObservation values.
Pure functions - no IO, network, or side effects.
Minimal normalization - only when necessary.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Any, List


class NormalizationError(Exception):
    """Raised when a raw row cannot be converted to an observation."""
    pass


OBSERVATION_FIELDS = (
    'record_date', 'sugar_close', 'usd_cny_rate', 'bdi_index', 'import_cost_estimate'
)

NUMERIC_FIELDS = OBSERVATION_FIELDS[1:]


@dataclass(frozen=True)
class DailyObservation:
    """One trading day's market snapshot."""
    record_date: date
    sugar_close: float           # Zhengzhou sugar close, CNY/ton
    usd_cny_rate: float
    bdi_index: float
    import_cost_estimate: float  # CNY/ton
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'record_date': self.record_date.isoformat(),
            'sugar_close': self.sugar_close,
            'usd_cny_rate': self.usd_cny_rate,
            'bdi_index': self.bdi_index,
            'import_cost_estimate': self.import_cost_estimate
        }


def normalize_daily_row(raw: Dict[str, Any]) -> DailyObservation:
    """
    Transform one raw API row to a DailyObservation.
    
    Minimal normalization:
    - Date strings to date objects (datetime strings are cut to the date)
    - Numeric strings to float (decimal columns arrive as strings)
    
    Args:
        raw: Row dictionary as returned by /api/market/daily
        
    Returns:
        DailyObservation
        
    Raises:
        NormalizationError: If a field is missing or cannot be parsed
    """
    if not isinstance(raw, dict):
        raise NormalizationError(f"Row must be a dictionary, got {type(raw)}")
    
    missing = [field for field in OBSERVATION_FIELDS if raw.get(field) is None]
    if missing:
        raise NormalizationError(f"Missing required fields: {missing}")
    
    record_date = _parse_record_date(raw['record_date'])
    
    values = {}
    for field in NUMERIC_FIELDS:
        try:
            values[field] = float(raw[field])
        except (TypeError, ValueError) as e:
            raise NormalizationError(f"{field} is not numeric: {raw[field]!r}") from e
    
    return DailyObservation(record_date=record_date, **values)


def deduplicate_observations(observations: List[DailyObservation]) -> List[DailyObservation]:
    """
    Drop repeated record dates, keeping the last row seen for each date.
    
    Args:
        observations: Observations in API order
        
    Returns:
        Deduplicated observations, ordered by first appearance of each date
    """
    seen: Dict[date, DailyObservation] = {}
    for observation in observations:
        # Later rows win - keeps upstream corrections
        seen[observation.record_date] = observation
    
    return list(seen.values())


def _parse_record_date(value: Any) -> date:
    """Parse an ISO date or datetime value into a date."""
    if isinstance(value, datetime):
        return value.date()
    
    if isinstance(value, date):
        return value
    
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as e:
            raise NormalizationError(f"Invalid record_date: {value!r}") from e
    
    raise NormalizationError(f"record_date must be a date string, got {type(value)}")

"""
Core validators for daily market observations.
Pure functions - no IO, network, or side effects.
"""

import math
from datetime import date
from typing import List

from ingestion.transforms.normalizers import DailyObservation, NUMERIC_FIELDS


class ValidationError(ValueError):
    """Raised when data validation fails."""
    pass


def validate_observation(observation: DailyObservation) -> None:
    """
    Validate a daily observation.
    
    Args:
        observation: Normalized observation
        
    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(observation.record_date, date):
        raise ValidationError(
            f"record_date must be date, got {type(observation.record_date)}"
        )
    
    for field in NUMERIC_FIELDS:
        value = getattr(observation, field)
        
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(f"{field} must be numeric, got {type(value)}")
        
        if not math.isfinite(value):
            raise ValidationError(f"{field} must be finite, got {value}")
        
        if value <= 0:
            raise ValidationError(f"{field} must be positive, got {value}")


def check_observation_date_order(
    observations: List[DailyObservation],
    newest_first: bool = True
) -> None:
    """
    Check that record dates are strictly ordered with no duplicates.
    
    Args:
        observations: Observations in API order
        newest_first: True for descending order (API convention)
        
    Raises:
        ValidationError: If dates are duplicated or out of order
    """
    if len(observations) <= 1:
        return
    
    dates = [o.record_date for o in observations]
    
    if len(dates) != len(set(dates)):
        raise ValidationError("Duplicate record_date found")
    
    for i in range(1, len(dates)):
        if newest_first and dates[i] >= dates[i-1]:
            raise ValidationError(
                f"record dates not descending: {dates[i-1]} <= {dates[i]}"
            )
        if not newest_first and dates[i] <= dates[i-1]:
            raise ValidationError(
                f"record dates not ascending: {dates[i-1]} >= {dates[i]}"
            )

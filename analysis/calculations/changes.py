"""
Day-over-day change utilities.
Pure functions for percentage change and headline metric cards.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MetricCard:
    """Headline value with optional day-over-day percentage change."""
    title: str
    value: float
    suffix: Optional[str] = None
    decimals: Optional[int] = None
    change: Optional[float] = None
    
    def to_dict(self) -> dict:
        return {
            'title': self.title,
            'value': self.value,
            'suffix': self.suffix,
            'decimals': self.decimals,
            'change': self.change
        }


def percent_change(latest: float, previous: Optional[float]) -> Optional[float]:
    """
    Calculate percentage change from previous to latest.
    
    Formula: (latest - previous) / previous × 100
    
    Args:
        latest: Most recent value
        previous: Prior value, or None if there is no prior observation
        
    Returns:
        Percentage change (5.0 = +5%), or None when previous is missing
        or zero
    """
    if previous is None or previous == 0:
        return None
    
    return (latest - previous) / previous * 100


def build_metric_card(
    title: str,
    latest: float,
    previous: Optional[float] = None,
    suffix: Optional[str] = None,
    decimals: Optional[int] = None
) -> MetricCard:
    """
    Build a metric card for one headline value.
    
    Args:
        title: Display title
        latest: Most recent value
        previous: Prior value (None if unavailable)
        suffix: Unit suffix, e.g. 'CNY/t'
        decimals: Display precision hint
        
    Returns:
        MetricCard with change filled in when previous is comparable
    """
    return MetricCard(
        title=title,
        value=latest,
        suffix=suffix,
        decimals=decimals,
        change=percent_change(latest, previous)
    )

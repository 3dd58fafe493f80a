"""
Correlation utilities.
Pure functions for Pearson correlation and strength classification.
"""

import math
from dataclasses import dataclass
from typing import List

import numpy as np


STRONG_THRESHOLD = 0.7
EXTREME_THRESHOLD = 0.9
MODERATE_THRESHOLD = 0.4

STRONG_COLOR = '#007AFF'
MODERATE_COLOR = '#FF9500'
WEAK_COLOR = '#86868B'


@dataclass(frozen=True)
class CorrelationResult:
    """Classified correlation coefficient."""
    coefficient: float
    strength: str  # weak, moderate-positive, moderate-negative, strong-positive, strong-negative
    description: str
    color: str
    
    def to_dict(self) -> dict:
        return {
            'coefficient': self.coefficient,
            'strength': self.strength,
            'description': self.description,
            'color': self.color
        }


def pearson_correlation(x: List[float], y: List[float]) -> float:
    """
    Calculate the Pearson correlation coefficient of two paired series.
    
    Formula: r = Σ(dx·dy) / sqrt(Σdx² · Σdy²)
    
    Degenerate inputs return 0 instead of raising:
    - series of different length
    - empty series
    - constant series (zero variance)
    
    Args:
        x: First series
        y: Second series, paired with x by index
        
    Returns:
        Correlation coefficient in [-1, 1]
    """
    n = len(x)
    if n != len(y) or n == 0:
        return 0.0
    
    x_array = np.asarray(x, dtype=np.float64)
    y_array = np.asarray(y, dtype=np.float64)
    
    dx = x_array - x_array.sum() / n
    dy = y_array - y_array.sum() / n
    
    covariance = float(np.sum(dx * dy))
    variance_x = float(np.sum(dx * dx))
    variance_y = float(np.sum(dy * dy))
    
    if variance_x == 0 or variance_y == 0:
        return 0.0
    
    r = covariance / math.sqrt(variance_x * variance_y)

    # Rounding can push exactly-linear series just past +-1
    return max(-1.0, min(1.0, r))


def classify_correlation(r: float) -> CorrelationResult:
    """
    Classify a correlation coefficient by magnitude and sign.
    
    Thresholds (inclusive lower bounds on |r|):
    - >= 0.9: strong, described as extremely strong
    - 0.7 - 0.9: strong
    - 0.4 - 0.7: moderate
    - < 0.4: weak (sign ignored)
    
    Args:
        r: Correlation coefficient
        
    Returns:
        CorrelationResult with strength label, description and color
    """
    magnitude = abs(r)
    direction = 'positive' if r > 0 else 'negative'
    
    if magnitude >= STRONG_THRESHOLD:
        if magnitude >= EXTREME_THRESHOLD:
            description = 'extremely strong correlation'
        else:
            description = 'strong correlation'
        return CorrelationResult(
            coefficient=r,
            strength=f'strong-{direction}',
            description=description,
            color=STRONG_COLOR
        )
    elif magnitude >= MODERATE_THRESHOLD:
        return CorrelationResult(
            coefficient=r,
            strength=f'moderate-{direction}',
            description='moderate correlation',
            color=MODERATE_COLOR
        )
    else:
        return CorrelationResult(
            coefficient=r,
            strength='weak',
            description='weak or no correlation',
            color=WEAK_COLOR
        )


def correlate(x: List[float], y: List[float]) -> CorrelationResult:
    """Pearson correlation of x and y, classified."""
    return classify_correlation(pearson_correlation(x, y))

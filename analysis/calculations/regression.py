"""
Linear regression utilities.
Ordinary least squares fit of y on x, returned as an immutable model.
"""

from dataclasses import dataclass
from typing import List

import numpy as np

from analysis.calculations.correlation import pearson_correlation


@dataclass(frozen=True)
class RegressionModel:
    """Fitted line y = slope × x + intercept."""
    slope: float
    intercept: float
    r_squared: float
    
    def predict(self, x_value: float) -> float:
        """Evaluate the fitted line at x_value."""
        return self.slope * x_value + self.intercept
    
    def to_dict(self) -> dict:
        return {
            'slope': self.slope,
            'intercept': self.intercept,
            'r_squared': self.r_squared
        }


ZERO_MODEL = RegressionModel(slope=0.0, intercept=0.0, r_squared=0.0)


def fit_linear(x: List[float], y: List[float]) -> RegressionModel:
    """
    Fit y = slope × x + intercept by ordinary least squares.
    
    Formula:
        slope     = Σ(dx·dy) / Σdx²   (0 when x is constant)
        intercept = mean(y) - slope × mean(x)
        r_squared = pearson_correlation(x, y)²
    
    Series of different length, or empty series, yield a zero model
    whose predict() returns 0 for any input.
    
    Args:
        x: Independent variable
        y: Dependent variable, paired with x by index
        
    Returns:
        RegressionModel
    """
    n = len(x)
    if n != len(y) or n == 0:
        return ZERO_MODEL
    
    x_array = np.asarray(x, dtype=np.float64)
    y_array = np.asarray(y, dtype=np.float64)
    
    mean_x = float(x_array.sum() / n)
    mean_y = float(y_array.sum() / n)
    
    dx = x_array - mean_x
    numerator = float(np.sum(dx * (y_array - mean_y)))
    denominator = float(np.sum(dx * dx))
    
    slope = 0.0 if denominator == 0 else numerator / denominator
    intercept = mean_y - slope * mean_x
    
    r = pearson_correlation(x, y)
    
    return RegressionModel(slope=slope, intercept=intercept, r_squared=r ** 2)

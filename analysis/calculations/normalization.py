"""
Series rebasing utilities.
Pure functions for expressing a series relative to its first value.
"""

from typing import List


def normalize(series: List[float]) -> List[float]:
    """
    Rebase a series so that its first element equals 100.
    
    Formula: result[i] = series[i] / series[0] × 100
    
    Edge cases:
    - Empty series returns an empty list
    - A zero first element maps every value to 100
    
    Args:
        series: Values in the order they should be displayed
        
    Returns:
        Rebased values, same length as input
    """
    if len(series) == 0:
        return []
    
    base = series[0]
    if base == 0:
        return [100.0 for _ in series]
    
    return [value / base * 100 for value in series]

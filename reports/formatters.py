"""
Display formatters for DashboardJSON.
Deterministic string formatting for CNY prices, percentage changes and dates.
"""

from datetime import datetime, date
from typing import Optional, Union


class FormatterError(Exception):
    """Raised when formatter input validation fails."""
    pass


NOT_AVAILABLE = "Not available"


def format_change(value: Optional[float], decimal_places: int = 2) -> str:
    """
    Format a percentage change with explicit sign.
    
    Args:
        value: Percentage change (1.25 = +1.25%), already scaled to percent
        decimal_places: Number of decimal places (default: 2)
        
    Returns:
        Formatted change string (e.g., "+1.25%", "-0.40%")
    """
    if value is None:
        return NOT_AVAILABLE
    
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"Change value must be numeric, got {type(value)}")
    
    return f"{value:+.{decimal_places}f}%"


def format_ratio(value: Optional[float], decimal_places: int = 1) -> str:
    """
    Format a 0-100 ratio as a percentage.
    
    Args:
        value: Ratio in percent (50.0 = 50%)
        decimal_places: Number of decimal places (default: 1)
        
    Returns:
        Formatted percentage string (e.g., "50.0%")
    """
    if value is None:
        return NOT_AVAILABLE
    
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"Ratio value must be numeric, got {type(value)}")
    
    return f"{value:.{decimal_places}f}%"


def format_cny_per_ton(value: Optional[float]) -> str:
    """
    Format a CNY/ton amount with thousands separators.
    
    Args:
        value: Amount in CNY/ton
        
    Returns:
        Formatted amount (e.g., "5,820 CNY/t", "-312 CNY/t")
    """
    if value is None:
        return NOT_AVAILABLE
    
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"Price value must be numeric, got {type(value)}")
    
    return f"{value:,.0f} CNY/t"


def format_metric_value(value: Optional[float], decimals: Optional[int] = None,
                        suffix: Optional[str] = None) -> str:
    """
    Format a metric card value.
    
    Args:
        value: Card value
        decimals: Decimal places (default: 0 for values >= 100, else 2)
        suffix: Unit suffix appended after a space
        
    Returns:
        Formatted value (e.g., "7.1234", "1,532", "5,820 CNY/t")
    """
    if value is None:
        return NOT_AVAILABLE
    
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"Metric value must be numeric, got {type(value)}")
    
    if decimals is None:
        decimals = 0 if abs(value) >= 100 else 2
    
    text = f"{value:,.{decimals}f}"
    
    if suffix:
        text = f"{text} {suffix}"
    
    return text


def format_coefficient(value: Optional[float]) -> str:
    """
    Format a correlation coefficient or R² to three decimals.
    
    Args:
        value: Coefficient value
        
    Returns:
        Formatted coefficient (e.g., "0.873", "-0.412")
    """
    if value is None:
        return NOT_AVAILABLE
    
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatterError(f"Coefficient must be numeric, got {type(value)}")
    
    return f"{value:.3f}"


def format_date_display(date_input: Union[str, date, datetime]) -> str:
    """
    Format date as "Month D, YYYY".
    
    Args:
        date_input: Date as string, date object, or datetime object
        
    Returns:
        Formatted date string (e.g., "July 15, 2025")
    """
    if date_input is None:
        return NOT_AVAILABLE
    
    # Convert to date object
    if isinstance(date_input, str):
        try:
            if 'T' in date_input:
                # ISO datetime string
                dt = datetime.fromisoformat(date_input.replace('Z', '+00:00'))
                date_obj = dt.date()
            else:
                # ISO date string
                date_obj = date.fromisoformat(date_input)
        except ValueError:
            raise FormatterError(f"Invalid date string: {date_input}")
    elif isinstance(date_input, datetime):
        date_obj = date_input.date()
    elif isinstance(date_input, date):
        date_obj = date_input
    else:
        raise FormatterError(f"Date must be string, date, or datetime, got {type(date_input)}")
    
    return f"{date_obj.strftime('%B')} {date_obj.day}, {date_obj.year}"

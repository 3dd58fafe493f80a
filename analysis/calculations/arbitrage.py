"""
Import arbitrage utilities.
Pure functions comparing domestic sugar prices with estimated import cost.
"""

from dataclasses import dataclass
from typing import List


OPEN = 'open'
CLOSED = 'closed'

OPEN_COLOR = '#34C759'
CLOSED_COLOR = '#FF3B30'


@dataclass(frozen=True)
class ArbitrageStatus:
    """Arbitrage window state for a single profit value."""
    status: str  # 'open' or 'closed'
    profit: float
    label: str
    color: str
    
    @property
    def is_open(self) -> bool:
        return self.status == OPEN
    
    def to_dict(self) -> dict:
        return {
            'status': self.status,
            'profit': self.profit,
            'label': self.label,
            'color': self.color
        }


@dataclass(frozen=True)
class ProfitDistribution:
    """Count of profitable and loss days in a profit series."""
    profitable_days: int
    loss_days: int
    profitable_ratio: float  # percent, 0-100
    
    def to_dict(self) -> dict:
        return {
            'profitable_days': self.profitable_days,
            'loss_days': self.loss_days,
            'profitable_ratio': self.profitable_ratio
        }


def arbitrage_profit(domestic_price: float, import_cost: float) -> float:
    """
    Calculate import arbitrage profit per ton.
    
    Args:
        domestic_price: Domestic (Zhengzhou) sugar price in CNY/ton
        import_cost: Estimated import cost in CNY/ton
        
    Returns:
        domestic_price - import_cost
    """
    return domestic_price - import_cost


def arbitrage_profits(
    domestic_prices: List[float],
    import_costs: List[float]
) -> List[float]:
    """
    Calculate arbitrage profit for each paired observation.
    
    Args:
        domestic_prices: Domestic prices in CNY/ton
        import_costs: Import cost estimates, paired by index
        
    Returns:
        Profit series, or an empty list if lengths differ
    """
    if len(domestic_prices) != len(import_costs):
        return []
    
    return [
        arbitrage_profit(price, cost)
        for price, cost in zip(domestic_prices, import_costs)
    ]


def arbitrage_status(profit: float) -> ArbitrageStatus:
    """
    Classify the arbitrage window.
    
    The window is open only for strictly positive profit; a profit of
    exactly 0 is closed.
    
    Args:
        profit: Arbitrage profit in CNY/ton
        
    Returns:
        ArbitrageStatus
    """
    if profit > 0:
        return ArbitrageStatus(status=OPEN, profit=profit, label='window open', color=OPEN_COLOR)
    
    return ArbitrageStatus(status=CLOSED, profit=profit, label='window closed', color=CLOSED_COLOR)


def summarize_profits(profits: List[float]) -> ProfitDistribution:
    """
    Summarize a profit series into profitable and loss days.
    
    Uses the same boundary as arbitrage_status: profit > 0 is a
    profitable day, anything else (including 0) is a loss day.
    
    Args:
        profits: Profit values in CNY/ton
        
    Returns:
        ProfitDistribution; ratio is 0 for an empty series
    """
    profitable_days = sum(1 for p in profits if p > 0)
    loss_days = sum(1 for p in profits if p <= 0)
    
    if len(profits) > 0:
        profitable_ratio = profitable_days / len(profits) * 100
    else:
        profitable_ratio = 0.0
    
    return ProfitDistribution(
        profitable_days=profitable_days,
        loss_days=loss_days,
        profitable_ratio=profitable_ratio
    )

"""
Import cost estimation utilities.
Pure functions converting ICE raw sugar quotes into a landed cost in CNY/ton.
"""

from typing import Dict, List, Optional


# 1 US cent/lb -> CNY/ton, before applying the USD/CNY rate
CENTS_PER_LB_TO_CNY_PER_TON = 22.0462

PREFERENTIAL_TARIFF_RATE = 0.15  # in-quota
STANDARD_TARIFF_RATE = 0.50      # out-of-quota
DEFAULT_TARIFF_RATES = (PREFERENTIAL_TARIFF_RATE, STANDARD_TARIFF_RATE)

# Linear freight proxy: freight = BDI / 10 + 200
FREIGHT_BDI_DIVISOR = 10.0
FREIGHT_BASE_CNY = 200.0


def estimate_freight(bdi_index: float) -> float:
    """
    Estimate ocean freight per ton from the Baltic Dry Index.
    
    Formula: freight = BDI / 10 + 200
    
    Args:
        bdi_index: Baltic Dry Index value
        
    Returns:
        Freight estimate in CNY/ton
    """
    return bdi_index / FREIGHT_BDI_DIVISOR + FREIGHT_BASE_CNY


def estimate_import_cost(
    ice_price: float,
    usd_cny_rate: float,
    bdi_index: float,
    tariff_rate: float
) -> float:
    """
    Estimate the landed import cost of raw sugar.
    
    Formula:
        base    = ice_price × usd_cny_rate × 22.0462
        tariff  = base × tariff_rate
        freight = bdi_index / 10 + 200
        cost    = base + tariff + freight
    
    The tariff rate is applied as given (0.15 in-quota, 0.50 out-of-quota
    are the usual values) and is not range checked.
    
    Args:
        ice_price: ICE raw sugar price in US cents/lb
        usd_cny_rate: USD/CNY exchange rate
        bdi_index: Baltic Dry Index value
        tariff_rate: Tariff as decimal (0.15 = 15%)
        
    Returns:
        Estimated import cost in CNY/ton
    """
    return import_cost_breakdown(ice_price, usd_cny_rate, bdi_index, tariff_rate)['total']


def import_cost_breakdown(
    ice_price: float,
    usd_cny_rate: float,
    bdi_index: float,
    tariff_rate: float
) -> Dict[str, float]:
    """
    Break the import cost estimate into its components.
    
    Args:
        ice_price: ICE raw sugar price in US cents/lb
        usd_cny_rate: USD/CNY exchange rate
        bdi_index: Baltic Dry Index value
        tariff_rate: Tariff as decimal
        
    Returns:
        Dictionary with 'base_price', 'tariff', 'freight' and 'total' in CNY/ton
    """
    base_price = ice_price * usd_cny_rate * CENTS_PER_LB_TO_CNY_PER_TON
    tariff = base_price * tariff_rate
    freight = estimate_freight(bdi_index)
    
    return {
        'base_price': base_price,
        'tariff': tariff,
        'freight': freight,
        'total': base_price + tariff + freight
    }


def quote_import_costs(
    ice_price: float,
    usd_cny_rate: float,
    bdi_index: float,
    tariff_rates: Optional[List[float]] = None
) -> List[Dict[str, float]]:
    """
    Break down the import cost under several tariff rates.
    
    Args:
        ice_price: ICE raw sugar price in US cents/lb
        usd_cny_rate: USD/CNY exchange rate
        bdi_index: Baltic Dry Index value
        tariff_rates: Rates to quote (default: in-quota and out-of-quota)
        
    Returns:
        One breakdown per rate, in the order given, each with its
        'tariff_rate' alongside the cost components
    """
    if not tariff_rates:
        tariff_rates = list(DEFAULT_TARIFF_RATES)
    
    quotes = []
    for rate in tariff_rates:
        quote = {'tariff_rate': rate}
        quote.update(import_cost_breakdown(ice_price, usd_cny_rate, bdi_index, rate))
        quotes.append(quote)
    
    return quotes

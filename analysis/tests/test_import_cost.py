"""
Tests for import cost estimation.
Pins the cents/lb conversion constant and the BDI freight proxy.
"""

import pytest

from analysis.calculations.import_cost import (
    estimate_import_cost,
    estimate_freight,
    import_cost_breakdown,
    quote_import_costs,
    CENTS_PER_LB_TO_CNY_PER_TON,
    PREFERENTIAL_TARIFF_RATE,
    STANDARD_TARIFF_RATE,
    DEFAULT_TARIFF_RATES
)


class TestEstimateFreight:
    """Tests for the BDI freight proxy."""
    
    def test_freight_formula(self):
        """freight = BDI / 10 + 200"""
        assert estimate_freight(1200) == 320.0
        assert estimate_freight(0) == 200.0
        assert estimate_freight(2500) == 450.0


class TestEstimateImportCost:
    """Tests for estimate_import_cost."""
    
    def test_reference_quote(self):
        """ICE 18 c/lb, USD/CNY 7.1, BDI 1200, 15% tariff."""
        cost = estimate_import_cost(18, 7.1, 1200, 0.15)
        
        # base = 18 × 7.1 × 22.0462 = 2817.504
        # tariff = base × 0.15 = 422.626
        # freight = 1200 / 10 + 200 = 320
        base = 18 * 7.1 * 22.0462
        expected = base + base * 0.15 + 320
        
        assert cost == pytest.approx(expected)
        assert cost == pytest.approx(3560.13, abs=0.01)
    
    def test_conversion_constant(self):
        """Conversion constant is fixed."""
        assert CENTS_PER_LB_TO_CNY_PER_TON == 22.0462
    
    def test_standard_tariff_costs_more(self):
        """Out-of-quota tariff raises the cost by 35% of base."""
        preferential = estimate_import_cost(18, 7.1, 1200, PREFERENTIAL_TARIFF_RATE)
        standard = estimate_import_cost(18, 7.1, 1200, STANDARD_TARIFF_RATE)
        
        base = 18 * 7.1 * 22.0462
        assert standard - preferential == pytest.approx(base * 0.35)
    
    def test_zero_tariff(self):
        """Zero tariff leaves base plus freight."""
        cost = estimate_import_cost(20, 7.0, 1000, 0.0)
        assert cost == pytest.approx(20 * 7.0 * 22.0462 + 300)
    
    def test_tariff_not_range_checked(self):
        """Any tariff rate is applied as given."""
        base = 10 * 7.0 * 22.0462
        
        assert estimate_import_cost(10, 7.0, 0, 1.5) == pytest.approx(base * 2.5 + 200)
        assert estimate_import_cost(10, 7.0, 0, -0.1) == pytest.approx(base * 0.9 + 200)
    
    def test_zero_price(self):
        """Zero ICE price costs freight only."""
        assert estimate_import_cost(0, 7.1, 1200, 0.5) == pytest.approx(320.0)


class TestImportCostBreakdown:
    """Tests for import_cost_breakdown."""
    
    def test_components_sum_to_total(self):
        """Components add up to the total."""
        breakdown = import_cost_breakdown(18, 7.1, 1200, 0.15)
        
        assert set(breakdown.keys()) == {'base_price', 'tariff', 'freight', 'total'}
        assert breakdown['base_price'] == pytest.approx(2817.504, abs=0.001)
        assert breakdown['tariff'] == pytest.approx(422.626, abs=0.001)
        assert breakdown['freight'] == 320.0
        assert breakdown['total'] == pytest.approx(
            breakdown['base_price'] + breakdown['tariff'] + breakdown['freight']
        )
    
    def test_total_matches_estimate(self):
        """Breakdown total equals estimate_import_cost."""
        breakdown = import_cost_breakdown(21.5, 7.25, 1800, 0.5)
        assert breakdown['total'] == estimate_import_cost(21.5, 7.25, 1800, 0.5)


class TestQuoteImportCosts:
    """Tests for quote_import_costs."""
    
    def test_default_rates(self):
        """Quotes in-quota and out-of-quota rates by default."""
        quotes = quote_import_costs(18, 7.1, 1200)
        
        assert [q['tariff_rate'] for q in quotes] == list(DEFAULT_TARIFF_RATES)
        assert quotes[0]['total'] == estimate_import_cost(18, 7.1, 1200, 0.15)
        assert quotes[1]['total'] == estimate_import_cost(18, 7.1, 1200, 0.50)
    
    def test_empty_rates_use_defaults(self):
        """An empty rate list falls back to the defaults."""
        assert len(quote_import_costs(18, 7.1, 1200, tariff_rates=[])) == 2
    
    def test_custom_rates(self):
        """Custom rate list is respected, in order."""
        quotes = quote_import_costs(18, 7.1, 1200, tariff_rates=[0.3, 0.0])
        
        assert [q['tariff_rate'] for q in quotes] == [0.3, 0.0]
        assert quotes[1]['tariff'] == 0
        assert quotes[0]['freight'] == pytest.approx(320.0)

"""
Analysis Engine Module

Calculates sugar market analytics from daily observations:
- Import cost estimate (ICE price, USD/CNY, BDI, tariff)
- Pearson correlation and strength classification
- Linear regression
- Series rebasing
- Arbitrage window status and profit distribution
"""

__version__ = "0.1.0"

"""
Data Ingestion Module

Handles fetching and validating daily market observations:
- Market REST API for sugar close, USD/CNY, BDI and import cost
"""

__version__ = "0.1.0"

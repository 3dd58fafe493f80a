"""
Test Suite for the sugar market analytics workbench

Includes:
- Unit tests for calculations (analysis/tests)
- Ingestion tests with mocked HTTP (ingestion/tests)
- Shared JSON fixtures (tests/fixtures)
"""

"""
Test suite for Supplier Analytics.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_metrics_service.py -v
"""

"""
Test suite for the gallery → Shopify duplicate pipeline.

Run all tests: pytest
Run with coverage: pytest --cov=. --cov-report=html
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_duplicate_detection_service.py -v
"""

"""
Ticket Triage Test Suite

This package contains unit tests and fixtures for the support ticket
dashboard.

Run tests with:
    pytest tests/
    pytest tests/test_classification.py -v
    pytest tests/test_run.py::TestPathValidation -v
"""

__version__ = "1.0.0"

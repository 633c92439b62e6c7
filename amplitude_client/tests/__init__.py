"""
Test suite for Amplitude client.

Tests are organized into:
- test_normalizer.py - Alias rewriting and identity defaults
- test_encoding.py - Form, JSON and query-string encodings
- test_transport.py - Request dispatch and error translation
- test_client.py - Public client methods and preconditions
- test_export.py - Export archive parsing
- test_exceptions.py - Exception hierarchy
- test_integration.py - Workflows, concurrency and logging
- conftest.py - Pytest fixtures and configuration

Run tests with:
    pytest amplitude_client/tests/
    pytest amplitude_client/tests/ --cov=amplitude_client
"""

"""
Unit Tests for the Aegis Move-Decision Engine

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_search.py

    # Run with coverage
    pytest tests/ --cov=aegis --cov-report=html

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting

Coroutines are driven with asyncio.run; no external engine binary is
needed (see FakeBinding in conftest.py).
"""

"""
Test suite for the capability engine.

Test structure:
- unit/ - Unit tests (fast, isolated, in-memory)
- integration/ - Examples composed end to end
- fixtures/ - Shared sample capabilities

Run tests:
    pytest                    # All tests
    pytest tests/unit         # Unit tests only
    pytest tests/integration  # Integration tests only
    pytest -k "collision"     # Tests matching name

Philosophy:
    The engine is small but everything is built on it.
    Every invariant of the pipeline gets a test.
"""

"""
Test suite for closure_objects.

Test structure:
- unit/ - Unit tests (fast, isolated; temp dirs for log files)
- fixtures/ - Class files used by the loader and runtime tests

Run tests:
    pytest                      # All tests
    pytest tests/unit           # Unit tests only
    pytest -k "super"           # Tests matching name
    pytest --cov=closure_objects  # With coverage

Resolution rules (local, inherited, paths, SUPER, AUTOLOAD) are the
core of the package; keep them at full coverage.
"""

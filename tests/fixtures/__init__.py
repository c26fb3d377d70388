"""
Test fixtures for closure_objects

This package contains fixtures used for testing:
- Sample class files (counter.py)
- A class file that fails to load (broken_factory.py)
"""

import os

# Path to fixtures directory
FIXTURES_DIR = os.path.dirname(__file__)
CLASSES_DIR = os.path.join(FIXTURES_DIR, 'classes')

"""
Test fixtures for the capability engine

This package contains fixtures used for testing:
- Sample capabilities (capabilities.py)
- Path to the shipped examples
"""

import os

# Path to fixtures directory
FIXTURES_DIR = os.path.dirname(__file__)
EXAMPLES_DIR = os.path.join(os.path.dirname(os.path.dirname(FIXTURES_DIR)), 'examples')
